# careerhub/services/applications.py
"""
Job applications.

One application per (job, candidate): the document id is
``application_id(job_id, candidate_uid)`` and apply refuses when it exists.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from dateutil.relativedelta import relativedelta

from careerhub.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from careerhub.db.documents import (
    as_naive_utc,
    count,
    get_document,
    push_to_array,
    query,
    set_document,
    update_document,
    utcnow,
)
from careerhub.models.recruitment import ACTIVE_STATUSES, APPLICATION_STATUSES, FINAL_STATUSES
from careerhub.models.users import INTERNAL_ROLES
from careerhub.services.jobs import get_job_by_slug
from careerhub.services.profiles import is_profile_complete

logger = logging.getLogger(__name__)

COOLDOWN = relativedelta(months=6)

CV_CACHE_FIELDS = ("cv_text", "cv_text_source", "cv_char_count", "cv_text_extracted_at")


def application_id(job_id: str, candidate_uid: str) -> str:
    return f"{job_id}_{candidate_uid}"


def _decided_at(app: Dict[str, Any]) -> Optional[datetime]:
    return app.get("decision_at") or app.get("updated_at")


async def cooldown_until(candidate_uid: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """End of the waiting period after the candidate's latest final decision, if still running."""
    now = now or utcnow()
    finals = await query("applications", {"candidate_uid": candidate_uid, "status": {"$in": list(FINAL_STATUSES)}})
    dates = [as_naive_utc(d) for d in (_decided_at(a) for a in finals) if d is not None]
    if not dates:
        return None
    end = max(dates) + COOLDOWN
    return end if now < end else None


async def apply(slug: str, user: Dict[str, Any]) -> Dict[str, Any]:
    uid = user["uid"]
    job = await get_job_by_slug(slug)
    now = utcnow()
    deadline = job.get("apply_deadline")
    if deadline is not None and now > as_naive_utc(deadline):
        raise BadRequestError("The application deadline for this job has passed.")

    app_id = application_id(job["id"], uid)
    existing = await get_document("applications", app_id)
    if existing:
        raise ConflictError("You have already applied for this position.", {"application_id": app_id})

    mine = await query("applications", {"candidate_uid": uid, "status": {"$in": list(ACTIVE_STATUSES)}}, limit=1)
    if mine:
        raise ConflictError(
            f'You still have an active application for "{mine[0].get("job_position")}".',
            {"application_id": mine[0]["id"]},
        )

    until = await cooldown_until(uid, now)
    if until is not None:
        raise ConflictError(
            f"You can apply again after {until:%d %B %Y}.",
            {"cooldown_until": until.isoformat()},
        )

    profile = await get_document("profiles", uid) or {}
    if not is_profile_complete(profile):
        raise BadRequestError("Please complete your profile before applying.")

    doc = {
        "candidate_uid": uid,
        "candidate_name": user.get("full_name") or profile.get("full_name"),
        "candidate_email": user.get("email"),
        "job_id": job["id"],
        "job_slug": job["slug"],
        "job_position": job["position"],
        "brand_id": job.get("brand_id"),
        "brand_name": job.get("brand_name") or "",
        "job_type": job.get("status_job"),
        "location": job.get("location"),
        "status": "submitted",
        "job_apply_deadline": deadline,
        "notes": [],
        "created_at": now,
        "updated_at": now,
        "submitted_at": now,
    }
    await set_document("applications", app_id, doc)
    logger.info("Application %s submitted", app_id)
    return {"id": app_id, **doc}


async def get_application(app_id: str) -> Dict[str, Any]:
    app = await get_document("applications", app_id)
    if not app:
        raise NotFoundError("Application not found.")
    return app


def brand_scope(user: Dict[str, Any]) -> Optional[List[str]]:
    """Brands an hrd user manages; None means every brand."""
    if user.get("role") == "hrd" and user.get("managed_brand_ids"):
        return list(user["managed_brand_ids"])
    return None


def ensure_can_view(app: Dict[str, Any], user: Dict[str, Any]) -> None:
    if user.get("role") in INTERNAL_ROLES:
        scope = brand_scope(user)
        if scope is not None and app.get("brand_id") not in scope:
            raise ForbiddenError("Forbidden")
        return
    if app.get("candidate_uid") != user.get("uid"):
        raise ForbiddenError("Forbidden")


async def list_for_candidate(uid: str) -> List[Dict[str, Any]]:
    return await query("applications", {"candidate_uid": uid}, order_by="created_at", descending=True)


async def list_applications(
    status: Optional[str] = None,
    job_id: Optional[str] = None,
    brand_id: Optional[str] = None,
    brand_ids: Optional[List[str]] = None,
    limit: int = 0,
    skip: int = 0,
) -> List[Dict[str, Any]]:
    filters: Dict[str, Any] = {}
    if status:
        filters["status"] = status
    if job_id:
        filters["job_id"] = job_id
    if brand_id:
        filters["brand_id"] = brand_id
    elif brand_ids is not None:
        filters["brand_id"] = {"$in": brand_ids}
    return await query("applications", filters, order_by="created_at", descending=True, limit=limit, skip=skip)


async def change_status(app_id: str, status: str, actor_uid: str, reason: Optional[str] = None) -> Dict[str, Any]:
    if status not in APPLICATION_STATUSES:
        raise BadRequestError(f"Unknown status '{status}'.")
    app = await get_application(app_id)
    now = utcnow()
    patch: Dict[str, Any] = {"status": status, "updated_at": now, "updated_by": actor_uid}
    if status in FINAL_STATUSES:
        patch["decision_at"] = now
        if reason:
            patch["decision_reason"] = reason
    if status == "tes_kepribadian" and app.get("status") != "tes_kepribadian":
        patch["personality_test_assigned_at"] = now
    await update_document("applications", app_id, patch)
    logger.info("Application %s: %s -> %s", app_id, app.get("status"), status)
    return {**app, **patch}


async def schedule_interview(app_id: str, interview: Dict[str, Any], actor_uid: str) -> Dict[str, Any]:
    app = await get_application(app_id)
    if app.get("status") in FINAL_STATUSES:
        raise BadRequestError("Cannot schedule an interview for a closed application.")
    if interview.get("mode") == "online" and not interview.get("link"):
        raise BadRequestError("An online interview needs a meeting link.")
    if interview.get("mode") == "offline" and not interview.get("location"):
        raise BadRequestError("An offline interview needs a location.")
    now = utcnow()
    data = {**interview, "date_time": as_naive_utc(interview["date_time"]), "scheduled_by": actor_uid, "scheduled_at": now}
    patch = {"interview": data, "status": "interview", "updated_at": now}
    await update_document("applications", app_id, patch)
    return {**app, **patch}


async def add_note(app_id: str, text: str, author: Dict[str, Any]) -> Dict[str, Any]:
    await get_application(app_id)
    note = {
        "text": text,
        "author_uid": author.get("uid"),
        "author_name": author.get("full_name"),
        "created_at": utcnow(),
    }
    await push_to_array("applications", app_id, "notes", note, {"updated_at": note["created_at"]})
    return note


async def attach_document(app_id: str, kind: str, url: str, file_name: str, key: Optional[str] = None) -> Dict[str, Any]:
    """kind is "cv" or "ijazah". A new CV drops the cached CV text."""
    if kind not in ("cv", "ijazah"):
        raise BadRequestError(f"Unknown document kind '{kind}'.")
    patch: Dict[str, Any] = {
        f"{kind}_url": url,
        f"{kind}_key": key,
        f"{kind}_file_name": file_name,
        "updated_at": utcnow(),
    }
    if kind == "cv":
        patch.update({f: None for f in CV_CACHE_FIELDS})
    await update_document("applications", app_id, patch)
    return patch


async def recruitment_kpis(brand_ids: Optional[List[str]] = None) -> Dict[str, Any]:
    base: Dict[str, Any] = {}
    if brand_ids is not None:
        base["brand_id"] = {"$in": brand_ids}
    by_status = {s: await count("applications", {**base, "status": s}) for s in APPLICATION_STATUSES}

    now = utcnow()
    per_job: Dict[str, Dict[str, Any]] = {}
    overdue = 0
    for app in await query("applications", base):
        row = per_job.setdefault(app.get("job_id"), {"job_position": app.get("job_position"), "total": 0, "active": 0, "hired": 0})
        row["total"] += 1
        if app.get("status") in ACTIVE_STATUSES:
            row["active"] += 1
            deadline = app.get("job_apply_deadline")
            if deadline is not None and as_naive_utc(deadline) < now and app.get("status") == "submitted":
                overdue += 1
        if app.get("status") == "hired":
            row["hired"] += 1

    return {
        "total": sum(by_status.values()),
        "by_status": by_status,
        "active": sum(by_status[s] for s in ACTIVE_STATUSES),
        "hired": by_status["hired"],
        "rejected": by_status["rejected"],
        "overdue_unreviewed": overdue,
        "per_job": [{"job_id": k, **v} for k, v in per_job.items()],
    }
