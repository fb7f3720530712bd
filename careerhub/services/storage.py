# careerhub/services/storage.py
"""
Candidate document storage on an S3-compatible bucket (AWS S3, Cloudflare R2,
MinIO). Without S3 credentials files land in a local ``uploads/`` directory,
which is only meant for development.
"""
from pathlib import Path
from typing import Dict, Optional
import logging
import uuid

import aiofiles
import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from careerhub.core.config import settings
from careerhub.core.errors import BadRequestError

logger = logging.getLogger(__name__)

LOCAL_UPLOAD_DIR = Path("uploads")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024

ALLOWED_TYPES = {
    "cv": {"application/pdf"},
    "ijazah": {"application/pdf", "image/jpeg", "image/png"},
}


def _get_s3_client():
    """
    Return a boto3 S3 client for the configured endpoint, or None when
    no endpoint/credentials are configured.
    """
    if not settings.S3_ACCESS_KEY or not settings.S3_SECRET_KEY or not settings.S3_BUCKET:
        return None
    return boto3.client(
        "s3",
        endpoint_url=str(settings.S3_ENDPOINT) if settings.S3_ENDPOINT else None,
        aws_access_key_id=settings.S3_ACCESS_KEY,
        aws_secret_access_key=settings.S3_SECRET_KEY,
        config=Config(signature_version="s3v4"),
        region_name=(settings.S3_REGION or None),
    )


def public_url(key: str, expires_in: int = 7 * 24 * 3600) -> str:
    if settings.S3_PUBLIC_BASE_URL:
        return f"{settings.S3_PUBLIC_BASE_URL.rstrip('/')}/{key}"
    s3 = _get_s3_client()
    return s3.generate_presigned_url(
        "get_object",
        Params={"Bucket": settings.S3_BUCKET, "Key": key},
        ExpiresIn=expires_in,
    )


def validate_upload(kind: str, content_type: Optional[str], data: bytes) -> None:
    allowed = ALLOWED_TYPES.get(kind)
    if allowed is None:
        raise BadRequestError(f"Unknown document kind '{kind}'.")
    if content_type not in allowed:
        raise BadRequestError(f"File type {content_type} is not accepted for {kind}.")
    if not data:
        raise BadRequestError("Uploaded file is empty.")
    if len(data) > MAX_UPLOAD_BYTES:
        raise BadRequestError("Uploaded file exceeds the 5 MB limit.")


def _put_object(key: str, data: bytes, content_type: str) -> None:
    s3 = _get_s3_client()
    s3.put_object(Bucket=settings.S3_BUCKET, Key=key, Body=data, ContentType=content_type)


async def store_candidate_document(
    candidate_uid: str, kind: str, file_name: str, content_type: str, data: bytes
) -> Dict[str, Optional[str]]:
    """
    Upload and return {"url", "key"}. The key is the bucket object key (None for
    local files); keep it so a fresh URL can be issued when a presigned one expires.
    """
    validate_upload(kind, content_type, data)
    ext = Path(file_name or "").suffix.lower() or ".pdf"
    key = f"candidates/{candidate_uid}/{kind}/{uuid.uuid4().hex}{ext}"

    if _get_s3_client() is not None:
        try:
            await run_in_threadpool(_put_object, key, data, content_type)
            return {"url": public_url(key), "key": key}
        except (BotoCoreError, ClientError):
            logger.exception("S3 upload failed for %s", key)
            raise

    logger.warning("S3 is not configured; storing %s locally", key)
    local_path = LOCAL_UPLOAD_DIR / key
    local_path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(local_path, "wb") as out:
        await out.write(data)
    return {"url": local_path.resolve().as_uri(), "key": None}


def object_url(key: Optional[str], expires_in: int = 15 * 60) -> Optional[str]:
    """Short-lived download URL for a stored object, or None when S3 is not configured."""
    if not key or _get_s3_client() is None:
        return None
    return public_url(key, expires_in=expires_in)
