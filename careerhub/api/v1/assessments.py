# careerhub/api/v1/assessments.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from careerhub.api.deps import get_current_user, require_candidate, require_recruiter
from careerhub.models.assessment import (
    AnswerAnalysisRequest,
    AnswersUpdate,
    AssessmentConfigIn,
    GuideAck,
    HrdDecision,
    PartSwitch,
    SessionStart,
)
from careerhub.services import sessions

router = APIRouter()


@router.get("/assessment-config")
async def get_config(_: dict = Depends(require_recruiter)):
    return await sessions.get_config()


@router.put("/assessment-config")
async def put_config(payload: AssessmentConfigIn, _: dict = Depends(require_recruiter)):
    return await sessions.put_config(payload.model_dump())


@router.post("/assessment-sessions")
async def start_session(payload: Optional[SessionStart] = None, user: dict = Depends(require_candidate)):
    return await sessions.start_session(user, payload.application_id if payload else None)


@router.get("/assessment-sessions/{session_id}")
async def get_session(session_id: str, user: dict = Depends(get_current_user)):
    session = await sessions.get_session(session_id)
    sessions.ensure_access(session, user)
    questions = await sessions.session_questions(session)
    return {"session": session, "questions": questions}


@router.patch("/assessment-sessions/{session_id}/answers")
async def save_answers(session_id: str, payload: AnswersUpdate, user: dict = Depends(require_candidate)):
    answers = {qid: (v if isinstance(v, int) else v.model_dump()) for qid, v in payload.answers.items()}
    return await sessions.save_answers(session_id, user, answers)


@router.post("/assessment-sessions/{session_id}/guide-ack")
async def ack_guide(session_id: str, payload: GuideAck, user: dict = Depends(require_candidate)):
    await sessions.ack_guide(session_id, user, payload.part)
    return {"ok": True}


@router.patch("/assessment-sessions/{session_id}/part")
async def switch_part(session_id: str, payload: PartSwitch, user: dict = Depends(require_candidate)):
    await sessions.switch_part(session_id, user, payload.current_test_part)
    return {"ok": True, "current_test_part": payload.current_test_part}


@router.get("/assessments/{assessment_id}/submissions")
async def list_submissions(
    assessment_id: str,
    decision: Optional[Literal["approved", "rejected", "pending"]] = Query(None),
    _: dict = Depends(require_recruiter),
):
    rows = await sessions.list_submissions(assessment_id, decision)
    return {"items": rows, "count": len(rows)}


@router.get("/assessment-results/{session_id}")
async def get_result(session_id: str, user: dict = Depends(get_current_user)):
    session = await sessions.get_session(session_id)
    sessions.ensure_access(session, user)
    return {
        "id": session["id"],
        "status": session.get("status"),
        "candidate_name": session.get("candidate_name"),
        "job_position": session.get("job_position"),
        "scores": session.get("scores"),
        "normalized": session.get("normalized"),
        "result": session.get("result"),
        "hrd_decision": session.get("hrd_decision"),
        "completed_at": session.get("completed_at"),
    }


@router.put("/assessment-results/{session_id}/decision")
async def hrd_decision(session_id: str, payload: HrdDecision, user: dict = Depends(require_recruiter)):
    session = await sessions.set_hrd_decision(session_id, payload.decision, user["uid"])
    return {"id": session_id, "hrd_decision": session["hrd_decision"]}


@router.post("/assessment-results/{session_id}/answer-analysis")
async def answer_analysis(session_id: str, payload: AnswerAnalysisRequest, _: dict = Depends(require_recruiter)):
    return await sessions.analyze_answer(session_id, payload.question_id)
