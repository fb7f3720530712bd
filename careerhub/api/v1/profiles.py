# careerhub/api/v1/profiles.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Path
from pydantic import ValidationError
from fastapi.exceptions import RequestValidationError

from careerhub.api.deps import require_candidate, require_internal
from careerhub.models.profile import WIZARD_STEPS
from careerhub.services import profiles

router = APIRouter()

StepName = Path(..., pattern="^(" + "|".join(WIZARD_STEPS) + ")$")


@router.get("/profile")
async def my_profile(user: dict = Depends(require_candidate)):
    profile = await profiles.get_profile(user["uid"])
    return {**profile, "missing_fields": profiles.missing_fields(profile)}


@router.put("/profile/steps/{step}")
async def save_step(step: str = StepName, payload: Dict[str, Any] = Body(...), user: dict = Depends(require_candidate)):
    _, model = WIZARD_STEPS[step]
    try:
        body = model.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    saved = await profiles.save_step(user["uid"], step, body)
    return {
        "profile": saved,
        "profile_step": saved["profile_step"],
        "is_complete": saved["profile_status"] == "completed",
    }


@router.get("/profiles/{uid}")
async def candidate_profile(uid: str, _: dict = Depends(require_internal)):
    return await profiles.get_profile(uid)
