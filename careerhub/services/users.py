# careerhub/services/users.py
"""
User accounts: the identity account plus the ``users`` document and the role
mirror documents (``roles_admin`` for super-admin, ``roles_hrd`` for hrd).
"""
from typing import Any, Dict, List, Optional
import logging

from careerhub.core.config import settings
from careerhub.core.errors import BadRequestError, ConflictError, NotFoundError
from careerhub.db.documents import batch, get_document, utcnow
from careerhub.models.users import ROLES
from careerhub.services import auth

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"email": "super_admin@gmail.com", "full_name": "Super Admin", "role": "super-admin"},
    {"email": "hrd@gmail.com", "full_name": "HRD User", "role": "hrd"},
    {"email": "manager@gmail.com", "full_name": "Manager User", "role": "manager"},
    {"email": "kandidat@gmail.com", "full_name": "Kandidat User", "role": "kandidat"},
    {"email": "karyawan@gmail.com", "full_name": "Karyawan User", "role": "karyawan"},
]


def _role_docs(wb, uid: str, role: str) -> None:
    if role == "super-admin":
        wb.set("roles_admin", uid, {"role": "super-admin"})
    else:
        wb.delete("roles_admin", uid)
    if role == "hrd":
        wb.set("roles_hrd", uid, {"role": "hrd"})
    else:
        wb.delete("roles_hrd", uid)


async def create_user(
    email: str,
    password: str,
    full_name: str,
    role: str,
    managed_brand_ids: Optional[List[str]] = None,
    brand_id: Optional[str] = None,
) -> str:
    if role not in ROLES:
        raise BadRequestError("Invalid request body. Ensure all fields are correct.")
    if not password or len(password) < 8:
        raise BadRequestError("Invalid request body. Ensure all fields are correct.")
    if await auth.get_account_by_email(email):
        raise ConflictError("User with this email already exists.")

    account = await auth.create_account(email, password, display_name=full_name)
    uid = account["uid"]
    profile: Dict[str, Any] = {
        "uid": uid,
        "email": account["email"],
        "full_name": full_name,
        "role": role,
        "is_active": True,
        "created_at": utcnow(),
    }
    if role == "hrd" and managed_brand_ids:
        profile["managed_brand_ids"] = list(managed_brand_ids)
    if brand_id:
        profile["brand_id"] = brand_id

    wb = batch()
    wb.set("users", uid, profile)
    if role == "super-admin":
        wb.set("roles_admin", uid, {"role": "super-admin"})
    if role == "hrd":
        wb.set("roles_hrd", uid, {"role": "hrd"})
    await wb.commit()
    logger.info("Created user %s (%s)", uid, role)
    return uid


async def delete_user(uid: str) -> str:
    wb = batch()
    wb.delete("users", uid)
    wb.delete("roles_admin", uid)
    wb.delete("roles_hrd", uid)
    await wb.commit()
    try:
        await auth.delete_account(uid)
    except NotFoundError:
        logger.info("Account %s was already removed from the identity store", uid)
        return "User already deleted from Authentication."
    return "User deleted successfully."


async def seed_users() -> List[Dict[str, Any]]:
    """Create or refresh the demo accounts, one per role. Each account is reported separately."""
    results = []
    for data in SEED_USERS:
        try:
            account = await auth.get_account_by_email(data["email"])
            status = "already_exists"
            if account is None:
                created = await auth.create_account(data["email"], settings.SEED_DEFAULT_PASSWORD, data["full_name"])
                uid = created["uid"]
                status = "created"
            else:
                uid = account["id"]

            profile = {
                "uid": uid,
                "email": data["email"],
                "full_name": data["full_name"],
                "role": data["role"],
                "is_active": True,
            }
            wb = batch()
            if status == "created":
                wb.set("users", uid, {**profile, "created_at": utcnow()})
            else:
                # merge keeps created_at of existing users
                wb.set("users", uid, profile, merge=True)
            _role_docs(wb, uid, data["role"])
            await wb.commit()
            results.append({"email": data["email"], "status": status, "uid": uid})
        except Exception as exc:
            logger.exception("Failed to seed user %s", data["email"])
            results.append({"email": data["email"], "status": "error", "message": str(exc)})
    return results


async def signup_candidate(email: str, password: str, full_name: str) -> str:
    return await create_user(email, password, full_name, "kandidat")


async def get_user(uid: str) -> Dict[str, Any]:
    user = await get_document("users", uid)
    if not user:
        raise NotFoundError("User profile not found.")
    return user
