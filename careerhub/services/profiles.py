# careerhub/services/profiles.py
"""
Candidate profile wizard. Each step merges its fields into ``profiles/{uid}``,
advances ``profile_step`` and recomputes completeness. The profile write and the
``users.is_profile_complete`` mirror go out in one batch.
"""
from typing import Any, Dict, Mapping
import logging

from pydantic import BaseModel

from careerhub.core.errors import NotFoundError
from careerhub.db.documents import batch, get_document, utcnow
from careerhub.models.profile import REQUIRED_FIELDS, WIZARD_STEPS

logger = logging.getLogger(__name__)

LAST_STEP = max(n for n, _ in WIZARD_STEPS.values())


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return bool(value)
    return True


def is_profile_complete(profile: Mapping[str, Any]) -> bool:
    if not all(_filled(profile.get(f)) for f in REQUIRED_FIELDS):
        return False
    if not profile.get("education"):
        return False
    return profile.get("declaration") is True


def missing_fields(profile: Mapping[str, Any]) -> list:
    missing = [f for f in REQUIRED_FIELDS if not _filled(profile.get(f))]
    if not profile.get("education"):
        missing.append("education")
    if profile.get("declaration") is not True:
        missing.append("declaration")
    return missing


async def get_profile(uid: str) -> Dict[str, Any]:
    profile = await get_document("profiles", uid)
    if not profile:
        raise NotFoundError("Profile not found.")
    return profile


async def save_step(uid: str, step: str, body: BaseModel) -> Dict[str, Any]:
    step_no, _ = WIZARD_STEPS[step]
    # JSON mode turns dates into ISO strings so a reload returns what was sent
    data = body.model_dump(mode="json")
    existing = await get_document("profiles", uid) or {}
    merged = {**existing, **data}

    now = utcnow()
    patch: Dict[str, Any] = {
        **data,
        "profile_step": max(existing.get("profile_step") or 1, min(step_no + 1, LAST_STEP)),
        "updated_at": now,
    }
    complete = is_profile_complete(merged)
    if complete:
        patch["profile_status"] = "completed"
        patch["completed_at"] = existing.get("completed_at") or now
    else:
        patch["profile_status"] = "draft"
        patch["completed_at"] = None

    wb = batch()
    wb.set("profiles", uid, patch, merge=True)
    wb.set("users", uid, {"is_profile_complete": complete}, merge=True)
    await wb.commit()
    logger.debug("Profile %s saved step %s (complete=%s)", uid, step, complete)
    return {**merged, **patch, "id": uid}
