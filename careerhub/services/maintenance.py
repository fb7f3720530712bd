# careerhub/services/maintenance.py
"""
Maintenance operations behind /api/admin: bootstrap, delete and repair the
default assessment, mirror role documents, backfill session candidate names.
Multi-document writes go through one WriteBatch per call.
"""
from typing import Any, Dict
import logging

from careerhub.db.documents import batch, get_document, new_id, query, utcnow
from careerhub.services.assessment_content import (
    ASSESSMENT_ID,
    CONFIG_ID,
    DEFAULT_ASSESSMENT,
    DEFAULT_TEMPLATE,
    TEMPLATE_ID,
    default_questions,
)

logger = logging.getLogger(__name__)


async def bootstrap_assessments() -> Dict[str, Any]:
    """
    Create the default template and assessment when missing, repair them when
    their structural keys are missing. Questions are only written together with a
    new assessment, so a second run writes nothing.
    """
    wb = batch()
    now = utcnow()
    results = {
        "created": {"assessment": False, "template": False, "questions": 0},
        "updated": {"assessment": False, "template": False},
        "existing": {"assessment": True, "template": True},
    }

    template = await get_document("assessment_templates", TEMPLATE_ID)
    if template is None:
        wb.set("assessment_templates", TEMPLATE_ID, {**DEFAULT_TEMPLATE, "created_at": now, "updated_at": now})
        results["created"]["template"] = True
        results["existing"]["template"] = False
    elif not all(template.get(k) for k in ("scale", "dimensions", "scoring", "format")):
        patch = {**DEFAULT_TEMPLATE, "format": template.get("format") or "likert", "updated_at": now}
        wb.set("assessment_templates", TEMPLATE_ID, patch, merge=True)
        results["updated"]["template"] = True

    assessment = await get_document("assessments", ASSESSMENT_ID)
    if assessment is None:
        wb.set("assessments", ASSESSMENT_ID, {**DEFAULT_ASSESSMENT, "created_at": now, "updated_at": now})
        results["created"]["assessment"] = True
        results["existing"]["assessment"] = False
        questions = default_questions()
        for q in questions:
            wb.set("assessment_questions", new_id(), q)
        results["created"]["questions"] = len(questions)
    elif not assessment.get("rules") or not assessment.get("result_templates"):
        wb.set("assessments", ASSESSMENT_ID, {**DEFAULT_ASSESSMENT, "updated_at": now}, merge=True)
        results["updated"]["assessment"] = True

    written = await wb.commit()
    logger.info("Bootstrap assessments: %d writes", written)
    return {"ok": True, "writes": written, **results}


async def delete_assessments() -> Dict[str, Any]:
    wb = batch()
    wb.delete("assessments", ASSESSMENT_ID)
    wb.delete("assessment_templates", TEMPLATE_ID)
    wb.delete("assessment_config", CONFIG_ID)
    questions = await query("assessment_questions", {"assessment_id": ASSESSMENT_ID})
    for q in questions:
        wb.delete("assessment_questions", q["id"])
    await wb.commit()
    logger.warning("Deleted default assessment data (%d questions)", len(questions))
    return {
        "ok": True,
        "message": "Default assessment data deleted successfully.",
        "deleted": {"assessment": 1, "template": 1, "config": 1, "questions": len(questions)},
    }


async def repair_assessments() -> Dict[str, Any]:
    wb = batch()
    repaired_template = False
    template = await get_document("assessment_templates", TEMPLATE_ID)
    if template is not None and not template.get("format"):
        wb.update("assessment_templates", TEMPLATE_ID, {"format": "likert"})
        repaired_template = True

    repaired_questions = 0
    for q in await query("assessment_questions", {"assessment_id": ASSESSMENT_ID}):
        if q.get("type") is None or q.get("is_active") is None:
            wb.update("assessment_questions", q["id"], {
                "type": q.get("type") or "likert",
                "is_active": True if q.get("is_active") is None else q["is_active"],
            })
            repaired_questions += 1

    if len(wb):
        await wb.commit()
    return {
        "ok": True,
        "message": "Repair process completed.",
        "repaired": {"questions": repaired_questions, "template": repaired_template},
    }


async def sync_role_documents(uid: str) -> Dict[str, Any]:
    user = await get_document("users", uid)
    if user is None:
        return {"message": "User profile not found.", "action": "none"}

    role = user.get("role")
    action = "none"
    wb = batch()
    if role == "super-admin":
        wb.set("roles_admin", uid, {"role": "super-admin"})
        action = "synced super-admin"
    else:
        wb.delete("roles_admin", uid)
    if role == "hrd":
        wb.set("roles_hrd", uid, {"role": "hrd"})
        action = "synced hrd"
    else:
        wb.delete("roles_hrd", uid)
    await wb.commit()
    return {"message": "Role documents synced successfully.", "action": action}


async def backfill_session_candidate_names() -> Dict[str, Any]:
    sessions = await query("assessment_sessions", {"$or": [
        {"candidate_name": None},
        {"candidate_email": None},
    ]})
    if not sessions:
        return {"message": "No sessions needed backfilling.", "updated": 0, "skipped": 0}

    updated = skipped = 0
    wb = batch()
    for s in sessions:
        uid = s.get("candidate_uid")
        user = await get_document("users", uid) if uid else None
        if not user:
            skipped += 1
            continue
        wb.update("assessment_sessions", s["id"], {
            "candidate_name": user.get("full_name"),
            "candidate_email": user.get("email"),
        })
        updated += 1
    await wb.commit()
    return {"message": "Backfill complete.", "updated": updated, "skipped": skipped}
