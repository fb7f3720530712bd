# careerhub/services/auth.py
"""
Identity provider: accounts live in ``auth_accounts`` (uid, email, password hash,
display name, disabled flag). Tokens carry the uid as ``sub``. Roles are not
stored here; the application keeps them on the ``users`` document.
"""
from typing import Any, Dict, Optional
import logging

from pymongo.errors import DuplicateKeyError

from careerhub.core.errors import ConflictError, NotFoundError, UnauthorizedError
from careerhub.core.security import create_access_token, decode_token, hash_password, verify_password
from careerhub.db.documents import add_document, delete_document, get_document, query, utcnow

logger = logging.getLogger(__name__)

ACCOUNTS = "auth_accounts"


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def get_account_by_email(email: str) -> Optional[Dict[str, Any]]:
    rows = await query(ACCOUNTS, {"email": _normalize_email(email)}, limit=1)
    return rows[0] if rows else None


async def get_account(uid: str) -> Optional[Dict[str, Any]]:
    return await get_document(ACCOUNTS, uid)


async def create_account(email: str, password: str, display_name: Optional[str] = None) -> Dict[str, Any]:
    email = _normalize_email(email)
    if await get_account_by_email(email):
        raise ConflictError("The email address is already in use by another account.")
    try:
        uid = await add_document(ACCOUNTS, {
            "email": email,
            "password_hash": hash_password(password),
            "display_name": display_name,
            "disabled": False,
            "created_at": utcnow(),
        })
    except DuplicateKeyError as exc:
        raise ConflictError("The email address is already in use by another account.") from exc
    logger.info("Created account %s for %s", uid, email)
    return {"uid": uid, "email": email, "display_name": display_name}


async def delete_account(uid: str) -> None:
    if not await delete_document(ACCOUNTS, uid):
        raise NotFoundError(f"There is no user record corresponding to the provided identifier ({uid}).")
    logger.info("Deleted account %s", uid)


async def verify_credentials(email: str, password: str) -> Dict[str, Any]:
    account = await get_account_by_email(email)
    if not account or not verify_password(password, account.get("password_hash", "")):
        raise UnauthorizedError("Invalid credentials")
    if account.get("disabled"):
        raise UnauthorizedError("Account is disabled")
    return account


def issue_token(uid: str) -> str:
    return create_access_token(uid)


def verify_token(token: str) -> str:
    """Returns the uid a valid token was issued for."""
    payload = decode_token(token) if token else None
    if not payload or not payload.get("sub"):
        raise UnauthorizedError("Unauthorized: invalid or expired token.")
    return payload["sub"]
