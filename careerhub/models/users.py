# careerhub/models/users.py
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

ROLES = ("super-admin", "hrd", "manager", "kandidat", "karyawan")
INTERNAL_ROLES = ("super-admin", "hrd", "manager", "karyawan")


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: str = Field(..., min_length=1)
    role: str
    brand_id: Optional[str] = None
    managed_brand_ids: Optional[List[str]] = None


class CandidateSignup(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    uid: str
    role: str


class NavigationSettingUpdate(BaseModel):
    visible_menu_items: List[str] = []
