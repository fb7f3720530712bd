# careerhub/models/recruitment.py
"""
Request bodies for brands, jobs and applications.

Stored documents are plain dicts; these models only validate what callers send.
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

APPLICATION_STATUSES = (
    "draft",
    "submitted",
    "screening",
    "tes_kepribadian",
    "verification",
    "document_submission",
    "interview",
    "hired",
    "rejected",
)
ACTIVE_STATUSES = ("submitted", "screening", "tes_kepribadian", "verification", "document_submission", "interview")
FINAL_STATUSES = ("hired", "rejected")

ApplicationStatus = Literal[
    "draft",
    "submitted",
    "screening",
    "tes_kepribadian",
    "verification",
    "document_submission",
    "interview",
    "hired",
    "rejected",
]
PublishStatus = Literal["draft", "published", "closed"]
JobType = Literal["fulltime", "internship", "contract"]
WorkMode = Literal["wfo", "wfh", "hybrid"]


class BrandIn(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class JobCreate(BaseModel):
    position: str = Field(..., min_length=1)
    slug: Optional[str] = None
    status_job: JobType = "fulltime"
    division: str
    location: str
    work_mode: Optional[WorkMode] = None
    brand_id: str
    general_requirements_html: str = ""
    special_requirements_html: str = ""
    publish_status: PublishStatus = "draft"
    apply_deadline: Optional[datetime] = None
    number_of_openings: Optional[int] = Field(None, ge=1)


class JobUpdate(BaseModel):
    position: Optional[str] = None
    slug: Optional[str] = None
    status_job: Optional[JobType] = None
    division: Optional[str] = None
    location: Optional[str] = None
    work_mode: Optional[WorkMode] = None
    brand_id: Optional[str] = None
    general_requirements_html: Optional[str] = None
    special_requirements_html: Optional[str] = None
    publish_status: Optional[PublishStatus] = None
    apply_deadline: Optional[datetime] = None
    number_of_openings: Optional[int] = Field(None, ge=1)


class StatusChange(BaseModel):
    status: ApplicationStatus
    reason: Optional[str] = None


class InterviewSchedule(BaseModel):
    date_time: datetime
    mode: Literal["online", "offline"] = "online"
    location: Optional[str] = None
    link: Optional[str] = None
    panelists: List[str] = []
    notes: Optional[str] = None


class NoteCreate(BaseModel):
    text: str = Field(..., min_length=1)
