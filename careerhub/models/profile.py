# careerhub/models/profile.py
"""
Candidate profile wizard.

The wizard has six steps; each step model lists exactly the fields that step
writes. ``REQUIRED_FIELDS`` decides whether a profile counts as complete.
"""
from datetime import date
from typing import Dict, List, Literal, Optional, Tuple, Type
from pydantic import BaseModel, EmailStr, Field

REQUIRED_FIELDS = (
    "full_name",
    "nickname",
    "email",
    "phone",
    "e_ktp_number",
    "gender",
    "birth_place",
    "birth_date",
    "address_ktp",
)

EducationLevel = Literal["SMA/SMK", "D3", "S1", "S2", "S3"]


class Address(BaseModel):
    street: str
    rt: str = ""
    rw: str = ""
    village: str = ""
    district: str = ""
    city: str
    province: str
    postal_code: str = ""


class Education(BaseModel):
    id: Optional[str] = None
    institution: str
    level: EducationLevel
    field_of_study: Optional[str] = None
    gpa: Optional[str] = None
    start_date: str
    end_date: Optional[str] = None
    is_current: bool = False


class WorkExperience(BaseModel):
    id: Optional[str] = None
    company: str
    position: str
    job_type: Optional[str] = None
    start_date: str
    end_date: Optional[str] = None
    is_current: bool = False
    description: Optional[str] = None
    reason_for_leaving: Optional[str] = None


class OrganizationalExperience(BaseModel):
    id: Optional[str] = None
    organization: str
    position: str
    start_date: str
    end_date: Optional[str] = None
    is_current: bool = False
    description: Optional[str] = None


class Certification(BaseModel):
    id: Optional[str] = None
    name: str
    organization: str
    # YYYY-MM
    issue_date: str
    expiration_date: Optional[str] = None


class PersonalStep(BaseModel):
    full_name: str = Field(..., min_length=1)
    nickname: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=6)
    e_ktp_number: str = Field(..., pattern=r"^\d{16}$")
    gender: Literal["Laki-laki", "Perempuan"]
    birth_place: str = Field(..., min_length=1)
    birth_date: date
    address_ktp: Address
    address_domicile: Optional[Address] = None
    is_domicile_same_as_ktp: bool = False
    has_npwp: bool = False
    npwp_number: Optional[str] = None
    willing_to_wfo: bool = True
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None


class EducationStep(BaseModel):
    education: List[Education] = Field(..., min_length=1)


class WorkExperienceStep(BaseModel):
    work_experience: List[WorkExperience] = []


class OrganizationalExperienceStep(BaseModel):
    organizational_experience: List[OrganizationalExperience] = []


class SkillsStep(BaseModel):
    skills: List[str] = []
    certifications: List[Certification] = []


class SelfDescriptionStep(BaseModel):
    self_description: Optional[str] = None
    salary_expectation: Optional[str] = None
    motivation: Optional[str] = None
    declaration: bool = False


# step name -> (step number, body model)
WIZARD_STEPS: Dict[str, Tuple[int, Type[BaseModel]]] = {
    "personal": (1, PersonalStep),
    "education": (2, EducationStep),
    "work-experience": (3, WorkExperienceStep),
    "organizational-experience": (4, OrganizationalExperienceStep),
    "skills": (5, SkillsStep),
    "self-description": (6, SelfDescriptionStep),
}
