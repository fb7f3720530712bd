# careerhub/api/deps.py
"""
Request dependencies: bearer-token identity and role guards.

Order of checks matches every privileged route:
  no/invalid token -> 401, no users document -> 404, wrong role -> 403.
"""
from typing import Any, Dict, Optional
import hmac

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from careerhub.core.config import settings
from careerhub.core.errors import ForbiddenError, NotFoundError, UnauthorizedError
from careerhub.db.documents import get_document
from careerhub.models.users import INTERNAL_ROLES
from careerhub.services.auth import verify_token

bearer = HTTPBearer(auto_error=False)


async def get_current_uid(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Unauthorized: missing bearer token.")
    return verify_token(credentials.credentials)


async def get_current_user(uid: str = Depends(get_current_uid)) -> Dict[str, Any]:
    user = await get_document("users", uid)
    if not user:
        raise NotFoundError("User profile not found.")
    user.setdefault("uid", uid)
    return user


def require_roles(*roles: str):
    async def _guard(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if user.get("role") not in roles:
            raise ForbiddenError("Forbidden")
        return user
    return _guard


require_internal = require_roles(*INTERNAL_ROLES)
require_recruiter = require_roles("super-admin", "hrd")
require_super_admin = require_roles("super-admin")
require_candidate = require_roles("kandidat")


def seed_secret_matches(secret: Optional[str]) -> bool:
    return bool(settings.SEED_SECRET and secret and hmac.compare_digest(secret, settings.SEED_SECRET))


async def require_seed_secret_or_super_admin(
    x_seed_secret: Optional[str] = Header(None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Dict[str, Any]:
    """Maintenance routes accept the seed secret header in place of a super-admin token."""
    if seed_secret_matches(x_seed_secret):
        return {"uid": None, "role": "super-admin", "via": "seed-secret"}
    uid = await get_current_uid(credentials)
    user = await get_current_user(uid)
    if user.get("role") != "super-admin":
        raise ForbiddenError("Forbidden")
    return user
