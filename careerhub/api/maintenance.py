# careerhub/api/maintenance.py
"""
Maintenance endpoints outside /api/v1: seeding, user administration, assessment
bootstrap/repair and the assessment submit hook used by the candidate portal.
"""
from fastapi import APIRouter, Depends

from careerhub.api.deps import (
    get_current_uid,
    get_current_user,
    require_internal,
    require_recruiter,
    require_seed_secret_or_super_admin,
)
from careerhub.core.config import settings
from careerhub.core.errors import ForbiddenError
from careerhub.models.assessment import SubmitRequest
from careerhub.models.users import UserCreate
from careerhub.services import maintenance, sessions, users

router = APIRouter()


def _seed_enabled() -> None:
    if not settings.ENABLE_SEED:
        raise ForbiddenError("Seeder is disabled.")


@router.post("/seed", dependencies=[Depends(_seed_enabled)])
async def seed(_: dict = Depends(require_seed_secret_or_super_admin)):
    results = await users.seed_users()
    return {"message": "Seeding complete.", "results": results}


@router.post("/users", status_code=201)
async def create_user(payload: UserCreate, _: dict = Depends(require_seed_secret_or_super_admin)):
    uid = await users.create_user(
        payload.email,
        payload.password,
        payload.full_name,
        payload.role,
        managed_brand_ids=payload.managed_brand_ids,
        brand_id=payload.brand_id,
    )
    return {"message": "User created successfully.", "uid": uid}


@router.delete("/users/{uid}")
async def delete_user(uid: str, _: dict = Depends(require_seed_secret_or_super_admin)):
    message = await users.delete_user(uid)
    return {"message": message}


@router.post("/admin/bootstrap-assessments")
async def bootstrap_assessments(_: dict = Depends(require_internal)):
    return await maintenance.bootstrap_assessments()


@router.post("/admin/delete-assessments")
async def delete_assessments(_: dict = Depends(require_internal)):
    return await maintenance.delete_assessments()


@router.post("/admin/repair-assessments")
async def repair_assessments(_: dict = Depends(require_recruiter)):
    return await maintenance.repair_assessments()


@router.post("/admin/sync-my-role")
async def sync_my_role(uid: str = Depends(get_current_uid)):
    return await maintenance.sync_role_documents(uid)


@router.post("/admin/backfill-session-candidate-names")
async def backfill_session_candidate_names(_: dict = Depends(require_recruiter)):
    return await maintenance.backfill_session_candidate_names()


@router.post("/assessment/submit")
async def submit_assessment(payload: SubmitRequest, user: dict = Depends(get_current_user)):
    return await sessions.submit(payload.session_id, user)
