# careerhub/models/assessment.py
from typing import Dict, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

QuestionType = Literal["likert", "forced-choice"]


class ForcedChoiceAnswer(BaseModel):
    most: str
    least: str


AnswerValue = Union[int, ForcedChoiceAnswer]


class AssessmentConfigIn(BaseModel):
    bigfive_count: int = Field(..., ge=0)
    disc_count: int = Field(..., ge=0)
    forced_choice_count: int = Field(0, ge=0)


class SessionStart(BaseModel):
    application_id: Optional[str] = None


class AnswersUpdate(BaseModel):
    answers: Dict[str, AnswerValue]


class GuideAck(BaseModel):
    part: Literal[1, 2]


class PartSwitch(BaseModel):
    current_test_part: QuestionType


class SubmitRequest(BaseModel):
    # the portal posts {"sessionId": ...}
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(None, alias="sessionId")


class HrdDecision(BaseModel):
    decision: Literal["approved", "rejected", "pending"]


class AnswerAnalysisRequest(BaseModel):
    question_id: str
