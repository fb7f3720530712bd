# careerhub/services/cv_text.py
"""
CV text cache.

Text parsed from an application's CV PDF is stored on the application document
(cv_text, cv_text_source, cv_char_count, cv_text_extracted_at) and reused while
younger than CV_CACHE_STALE_DAYS. The write-back runs as a background task so the
caller never waits on it. Two concurrent misses both parse; there is no lock.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional, Set
from urllib.parse import urlparse

import httpx

from careerhub.core.config import settings
from careerhub.core.errors import CVExtractionError
from careerhub.db.documents import as_naive_utc, update_document, utcnow
from careerhub.services import storage
from careerhub.services.parse_utils import clean_text, parse_pdf_bytes

logger = logging.getLogger(__name__)

UNREADABLE_MESSAGE = (
    "Could not read the provided CV file. Make sure it is a valid, text-based PDF."
)

# strong refs so pending write-backs are not garbage collected
_background_tasks: Set[asyncio.Task] = set()


def is_fresh(application: Mapping[str, Any], now=None) -> bool:
    text = application.get("cv_text")
    extracted_at = application.get("cv_text_extracted_at")
    if not text or extracted_at is None:
        return False
    now = now or utcnow()
    return now - as_naive_utc(extracted_at) < timedelta(days=settings.CV_CACHE_STALE_DAYS)


def check_allowed_url(url: Optional[str]) -> str:
    if not url:
        raise CVExtractionError("Application has no CV file to analyze.")
    host = (urlparse(url).hostname or "").lower()
    if urlparse(url).scheme not in ("http", "https") or host not in settings.cv_allowed_domains:
        raise CVExtractionError(f"CV URL host '{host}' is not an allowed storage domain.")
    return url


async def fetch_cv_bytes(url: str) -> bytes:
    async with httpx.AsyncClient(timeout=settings.CV_FETCH_TIMEOUT_SEC, follow_redirects=False) as client:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.content


async def _write_back(application_id: str, fields: Dict[str, Any]) -> None:
    try:
        await update_document("applications", application_id, fields)
        logger.info("Cached CV text for application %s (%d chars)", application_id, fields["cv_char_count"])
    except Exception:
        logger.exception("Failed to cache CV text for application %s", application_id)


def _schedule_write_back(application_id: str, fields: Dict[str, Any]) -> asyncio.Task:
    task = asyncio.create_task(_write_back(application_id, fields))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


async def wait_for_pending_writes() -> None:
    """Await outstanding write-backs (shutdown and tests)."""
    if _background_tasks:
        await asyncio.gather(*list(_background_tasks), return_exceptions=True)


async def extract_cv_text(application: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Returns {"cv_text", "source", "char_count", "file_name"} for an application
    document (which must carry its "id").
    """
    file_name = application.get("cv_file_name")
    if is_fresh(application):
        text = application["cv_text"]
        return {
            "cv_text": text,
            "source": application.get("cv_text_source") or "cached",
            "char_count": application.get("cv_char_count") or len(text),
            "file_name": file_name,
        }

    # presigned URLs expire; reissue one from the object key when we have it
    url = check_allowed_url(storage.object_url(application.get("cv_key")) or application.get("cv_url"))
    try:
        data = await fetch_cv_bytes(url)
        loop = asyncio.get_running_loop()
        # pdfminer is CPU-bound; keep it off the event loop
        raw = await loop.run_in_executor(None, parse_pdf_bytes, data)
    except Exception as exc:
        logger.warning("CV extraction failed for application %s: %s", application.get("id"), exc)
        raise CVExtractionError(UNREADABLE_MESSAGE) from exc

    text = clean_text(raw)
    if len(text) < settings.CV_MIN_READABLE_CHARS:
        logger.warning(
            "CV for application %s yielded only %d characters; the file is likely scanned",
            application.get("id"), len(text),
        )

    _schedule_write_back(application["id"], {
        "cv_text": text,
        "cv_text_source": "pdf",
        "cv_char_count": len(text),
        "cv_text_extracted_at": utcnow(),
    })
    return {"cv_text": text, "source": "pdf", "char_count": len(text), "file_name": file_name}
