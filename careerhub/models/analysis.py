# careerhub/models/analysis.py
"""
Input/output shapes of the generative flows. Output models are what the model's
JSON reply is validated against.
"""
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field


# --- answer commentary ---

class AnalyzeAnswerInput(BaseModel):
    question_text: str
    answer_value: int = Field(..., ge=1, le=7)
    answer_scale: str = "1 (Tidak Setuju) - 7 (Setuju)"
    dimension_key: str
    dimension_label: str


class AnalyzeAnswerOutput(BaseModel):
    analysis: str


# --- personality archetype ---

class PersonalityArchetypeInput(BaseModel):
    disc_scores: Dict[str, float]
    big_five_scores: Dict[str, float]


class PersonalityArchetypeOutput(BaseModel):
    archetype: str
    code: str = Field(..., pattern=r"^[EI][NS][TF][JP](-[AT])?$")


# --- candidate fit ---

class CandidateFitInput(BaseModel):
    job_requirements_html: str
    cv_text: str
    cv_meta: Dict[str, Optional[str]] = {}
    candidate_profile_json: str
    personality_analysis: Optional[str] = None


RecommendedDecision = Literal["advance_interview", "advance_test", "hold", "reject"]


class Confidence(BaseModel):
    level: Literal["high", "medium", "low"]
    reasons: List[str]


class RequirementMatch(BaseModel):
    requirement: str
    type: Literal["must-have", "nice-to-have"]
    match: Literal["yes", "partial", "no"]
    evidence_from_cv: str
    risk_note: Optional[str] = None


class CultureFit(BaseModel):
    score: int = Field(..., ge=1, le=5)
    reason: str


class ScoreBreakdown(BaseModel):
    relevant_experience: int = Field(..., ge=1, le=5)
    admin_documentation: int = Field(..., ge=1, le=5)
    communication_teamwork: int = Field(..., ge=1, le=5)
    analytical_problem_solving: int = Field(..., ge=1, le=5)
    tools_hard_skills: int = Field(..., ge=1, le=5)
    initiative_ownership: int = Field(..., ge=1, le=5)
    culture_fit: CultureFit


class Strength(BaseModel):
    strength: str
    evidence_from_cv: str


class GapRisk(BaseModel):
    gap: str
    impact: str
    onboarding_mitigation: str


class InterviewQuestion(BaseModel):
    question: str
    ideal_answer: str


class CandidateFitOutput(BaseModel):
    recommended_decision: RecommendedDecision
    confidence: Confidence
    requirement_match_matrix: List[RequirementMatch]
    score_breakdown: ScoreBreakdown
    strengths: List[Strength]
    gaps_risks: List[GapRisk]
    red_flags: Optional[List[str]] = None
    interview_questions: List[InterviewQuestion]
    quick_test_recommendation: List[str]
    missing_information: List[str]
