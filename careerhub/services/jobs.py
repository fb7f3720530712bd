# careerhub/services/jobs.py
"""
Brands, navigation settings and job postings.
"""
from typing import Any, Dict, List, Optional
import logging
import re
import unicodedata

from careerhub.core.errors import BadRequestError, ConflictError, NotFoundError
from careerhub.db.documents import (
    add_document,
    as_naive_utc,
    delete_document,
    get_document,
    query,
    set_document,
    update_document,
    utcnow,
)
from careerhub.models.users import ROLES

logger = logging.getLogger(__name__)


def slugify(text: str) -> str:
    text = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^a-zA-Z0-9]+", "-", text.lower()).strip("-")
    return text or "job"


# --- brands ---

async def list_brands() -> List[Dict[str, Any]]:
    return await query("brands", order_by="name")


async def create_brand(data: Dict[str, Any]) -> str:
    return await add_document("brands", {**data, "created_at": utcnow()})


async def update_brand(brand_id: str, data: Dict[str, Any]) -> None:
    await update_document("brands", brand_id, data)


async def delete_brand(brand_id: str) -> None:
    if await query("jobs", {"brand_id": brand_id}, limit=1):
        raise ConflictError("Brand still has job postings.")
    if not await delete_document("brands", brand_id):
        raise NotFoundError("Brand not found.")


# --- navigation settings ---

async def get_navigation(role: str) -> Dict[str, Any]:
    doc = await get_document("navigation_settings", role)
    return doc or {"id": role, "role": role, "visible_menu_items": []}


async def set_navigation(role: str, visible_menu_items: List[str]) -> Dict[str, Any]:
    if role not in ROLES:
        raise BadRequestError(f"Unknown role '{role}'.")
    data = {"role": role, "visible_menu_items": list(visible_menu_items)}
    await set_document("navigation_settings", role, data)
    return {"id": role, **data}


# --- jobs ---

async def _unique_slug(base: str, exclude_id: Optional[str] = None) -> str:
    slug, n = base, 2
    while True:
        clash = [j for j in await query("jobs", {"slug": slug}) if j["id"] != exclude_id]
        if not clash:
            return slug
        slug = f"{base}-{n}"
        n += 1


async def _brand_name(brand_id: str) -> str:
    brand = await get_document("brands", brand_id)
    if not brand:
        raise BadRequestError(f"Brand '{brand_id}' does not exist.")
    return brand.get("name", "")


async def create_job(data: Dict[str, Any], actor_uid: str) -> Dict[str, Any]:
    now = utcnow()
    doc = dict(data)
    doc["slug"] = await _unique_slug(slugify(doc.get("slug") or doc["position"]))
    doc["brand_name"] = await _brand_name(doc["brand_id"])
    if doc.get("apply_deadline") is not None:
        doc["apply_deadline"] = as_naive_utc(doc["apply_deadline"])
    doc.update({"created_at": now, "updated_at": now, "created_by": actor_uid, "updated_by": actor_uid})
    job_id = await add_document("jobs", doc)
    logger.info("Job %s created (%s)", job_id, doc["slug"])
    return {"id": job_id, **doc}


async def update_job(job_id: str, data: Dict[str, Any], actor_uid: str) -> Dict[str, Any]:
    job = await get_document("jobs", job_id)
    if not job:
        raise NotFoundError("Job not found.")
    patch = dict(data)
    if "slug" in patch:
        patch["slug"] = await _unique_slug(slugify(patch["slug"] or patch.get("position") or job["position"]), job_id)
    if "brand_id" in patch:
        patch["brand_name"] = await _brand_name(patch["brand_id"])
    if patch.get("apply_deadline") is not None:
        patch["apply_deadline"] = as_naive_utc(patch["apply_deadline"])
    patch.update({"updated_at": utcnow(), "updated_by": actor_uid})
    await update_document("jobs", job_id, patch)
    return {**job, **patch}


async def delete_job(job_id: str) -> None:
    if not await delete_document("jobs", job_id):
        raise NotFoundError("Job not found.")


async def get_job(job_id: str) -> Dict[str, Any]:
    job = await get_document("jobs", job_id)
    if not job:
        raise NotFoundError("Job not found.")
    return job


async def get_job_by_slug(slug: str, published_only: bool = True) -> Dict[str, Any]:
    filters: Dict[str, Any] = {"slug": slug}
    if published_only:
        filters["publish_status"] = "published"
    rows = await query("jobs", filters, limit=1)
    if not rows:
        raise NotFoundError("Job not found.")
    return rows[0]


async def list_jobs(
    published_only: bool = False,
    brand_id: Optional[str] = None,
    brand_ids: Optional[List[str]] = None,
    limit: int = 0,
    skip: int = 0,
) -> List[Dict[str, Any]]:
    filters: Dict[str, Any] = {}
    if published_only:
        filters["publish_status"] = "published"
    if brand_id:
        filters["brand_id"] = brand_id
    elif brand_ids is not None:
        filters["brand_id"] = {"$in": brand_ids}
    return await query("jobs", filters, order_by="created_at", descending=True, limit=limit, skip=skip)
