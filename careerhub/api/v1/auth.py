# careerhub/api/v1/auth.py
from fastapi import APIRouter, Depends

from careerhub.api.deps import get_current_user
from careerhub.db.documents import get_document
from careerhub.models.users import CandidateSignup, LoginRequest, TokenResponse
from careerhub.services import auth, users

router = APIRouter()


@router.post("/auth/signup", status_code=201, response_model=TokenResponse)
async def signup(payload: CandidateSignup):
    """Candidates register themselves; internal accounts are created by a super-admin."""
    uid = await users.signup_candidate(payload.email, payload.password, payload.full_name)
    return {"access_token": auth.issue_token(uid), "uid": uid, "role": "kandidat"}


@router.post("/auth/login", response_model=TokenResponse)
async def login(payload: LoginRequest):
    account = await auth.verify_credentials(payload.email, payload.password)
    user = await get_document("users", account["id"]) or {}
    return {"access_token": auth.issue_token(account["id"]), "uid": account["id"], "role": user.get("role", "")}


@router.get("/auth/me")
async def me(user: dict = Depends(get_current_user)):
    return user
