# careerhub/api/v1/applications.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from careerhub.api.deps import get_current_user, require_candidate, require_internal
from careerhub.core.errors import ForbiddenError
from careerhub.models.recruitment import ApplicationStatus, InterviewSchedule, NoteCreate, StatusChange
from careerhub.services import applications, storage
from careerhub.services.candidate_analysis import get_candidate_analysis

router = APIRouter()


async def _scoped_application(application_id: str, user: dict) -> dict:
    app = await applications.get_application(application_id)
    applications.ensure_can_view(app, user)
    return app


@router.post("/jobs/{slug}/apply", status_code=201)
async def apply(slug: str, user: dict = Depends(require_candidate)):
    app = await applications.apply(slug, user)
    return {"id": app["id"], "status": app["status"]}


@router.get("/applications/mine")
async def my_applications(user: dict = Depends(require_candidate)):
    rows = await applications.list_for_candidate(user["uid"])
    return {"items": rows, "count": len(rows)}


@router.get("/applications/kpis")
async def kpis(user: dict = Depends(require_internal)):
    return await applications.recruitment_kpis(applications.brand_scope(user))


@router.get("/applications")
async def list_applications(
    status: Optional[ApplicationStatus] = Query(None),
    job_id: Optional[str] = Query(None),
    brand_id: Optional[str] = Query(None),
    limit: int = Query(100),
    skip: int = Query(0),
    user: dict = Depends(require_internal),
):
    rows = await applications.list_applications(
        status=status, job_id=job_id, brand_id=brand_id, brand_ids=applications.brand_scope(user), limit=limit, skip=skip,
    )
    return {"items": rows, "count": len(rows)}


@router.get("/applications/{application_id}")
async def get_application(application_id: str, user: dict = Depends(get_current_user)):
    return await _scoped_application(application_id, user)


@router.patch("/applications/{application_id}/status")
async def change_status(application_id: str, payload: StatusChange, user: dict = Depends(require_internal)):
    await _scoped_application(application_id, user)
    app = await applications.change_status(application_id, payload.status, user["uid"], payload.reason)
    return {"id": application_id, "status": app["status"]}


@router.put("/applications/{application_id}/interview")
async def schedule_interview(application_id: str, payload: InterviewSchedule, user: dict = Depends(require_internal)):
    await _scoped_application(application_id, user)
    app = await applications.schedule_interview(application_id, payload.model_dump(), user["uid"])
    return {"id": application_id, "status": app["status"], "interview": app["interview"]}


@router.post("/applications/{application_id}/notes", status_code=201)
async def add_note(application_id: str, payload: NoteCreate, user: dict = Depends(require_internal)):
    await _scoped_application(application_id, user)
    return await applications.add_note(application_id, payload.text, user)


@router.post("/applications/{application_id}/documents/{kind}")
async def upload_document(
    application_id: str,
    kind: Literal["cv", "ijazah"],
    file: UploadFile = File(...),
    user: dict = Depends(require_candidate),
):
    app = await applications.get_application(application_id)
    if app.get("candidate_uid") != user["uid"]:
        raise ForbiddenError("Forbidden")
    data = await file.read()
    stored = await storage.store_candidate_document(user["uid"], kind, file.filename, file.content_type, data)
    patch = await applications.attach_document(application_id, kind, stored["url"], file.filename, stored["key"])
    return {"id": application_id, f"{kind}_url": patch[f"{kind}_url"], f"{kind}_file_name": file.filename}


@router.post("/applications/{application_id}/analysis")
async def analyze(application_id: str, user: dict = Depends(require_internal)):
    await _scoped_application(application_id, user)
    result = await get_candidate_analysis(application_id)
    return result.model_dump()
