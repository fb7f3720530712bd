# careerhub/api/v1/jobs.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from careerhub.api.deps import require_recruiter
from careerhub.core.errors import ForbiddenError
from careerhub.models.recruitment import JobCreate, JobUpdate
from careerhub.services import jobs
from careerhub.services.applications import brand_scope

router = APIRouter()


async def _scoped_job(job_id: str, user: dict) -> dict:
    job = await jobs.get_job(job_id)
    _check_brand(job.get("brand_id"), user)
    return job


def _check_brand(brand_id, user: dict) -> None:
    scope = brand_scope(user)
    if scope is not None and brand_id not in scope:
        raise ForbiddenError("Forbidden")


@router.get("/jobs")
async def public_jobs(brand_id: Optional[str] = Query(None), limit: int = Query(50), skip: int = Query(0)):
    rows = await jobs.list_jobs(published_only=True, brand_id=brand_id, limit=limit, skip=skip)
    return {"items": rows, "count": len(rows)}


@router.get("/jobs/{slug}")
async def public_job(slug: str):
    return await jobs.get_job_by_slug(slug)


@router.get("/admin/jobs")
async def admin_jobs(
    brand_id: Optional[str] = Query(None),
    limit: int = Query(100),
    skip: int = Query(0),
    user: dict = Depends(require_recruiter),
):
    rows = await jobs.list_jobs(brand_id=brand_id, brand_ids=brand_scope(user), limit=limit, skip=skip)
    return {"items": rows, "count": len(rows)}


@router.get("/admin/jobs/{job_id}")
async def admin_job(job_id: str, user: dict = Depends(require_recruiter)):
    return await _scoped_job(job_id, user)


@router.post("/admin/jobs", status_code=201)
async def create_job(payload: JobCreate, user: dict = Depends(require_recruiter)):
    _check_brand(payload.brand_id, user)
    return await jobs.create_job(payload.model_dump(), user["uid"])


@router.patch("/admin/jobs/{job_id}")
async def update_job(job_id: str, payload: JobUpdate, user: dict = Depends(require_recruiter)):
    await _scoped_job(job_id, user)
    if payload.brand_id is not None:
        _check_brand(payload.brand_id, user)
    return await jobs.update_job(job_id, payload.model_dump(exclude_unset=True), user["uid"])


@router.delete("/admin/jobs/{job_id}")
async def delete_job(job_id: str, user: dict = Depends(require_recruiter)):
    await _scoped_job(job_id, user)
    await jobs.delete_job(job_id)
    return {"deleted": True}
