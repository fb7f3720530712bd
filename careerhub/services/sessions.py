# careerhub/services/sessions.py
"""
Personality assessment sessions: start/resume, answer, submit, review.
"""
from typing import Any, Dict, List, Optional
import logging
import random

from careerhub.core.errors import AIFlowError, BadRequestError, ConflictError, ForbiddenError, NotFoundError
from careerhub.db.documents import add_document, get_document, get_many, query, set_document, update_document, utcnow
from careerhub.models.analysis import AnalyzeAnswerInput, PersonalityArchetypeInput
from careerhub.models.users import INTERNAL_ROLES
from careerhub.services import ai_flows
from careerhub.services.assessment_content import CONFIG_ID, DEFAULT_CONFIG
from careerhub.services.scoring import score_session

logger = logging.getLogger(__name__)

SESSIONS = "assessment_sessions"


# --- config ---

async def get_config() -> Dict[str, Any]:
    doc = await get_document("assessment_config", CONFIG_ID)
    return doc or {"id": CONFIG_ID, **DEFAULT_CONFIG}


async def put_config(data: Dict[str, Any]) -> Dict[str, Any]:
    doc = {**data, "updated_at": utcnow()}
    await set_document("assessment_config", CONFIG_ID, doc)
    return {"id": CONFIG_ID, **doc}


# --- selection ---

def _balanced_pick(questions: List[Dict[str, Any]], n: int, rng: random.Random) -> List[Dict[str, Any]]:
    """Pick up to n questions spreading the picks evenly over dimensions."""
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for q in questions:
        groups.setdefault(q.get("dimension_key") or "", []).append(q)
    for g in groups.values():
        rng.shuffle(g)
    picked: List[Dict[str, Any]] = []
    while len(picked) < n and any(groups.values()):
        for key in list(groups):
            if groups[key] and len(picked) < n:
                picked.append(groups[key].pop())
    return picked


def select_questions(questions: List[Dict[str, Any]], config: Dict[str, Any], rng: Optional[random.Random] = None) -> Dict[str, List[str]]:
    rng = rng or random.Random()
    active = [q for q in questions if q.get("is_active", True)]
    likert = [q for q in active if (q.get("type") or "likert") == "likert"]
    bigfive = [q for q in likert if q.get("engine_key") == "bigfive"]
    disc = [q for q in likert if q.get("engine_key") == "disc"]
    forced = [q for q in active if q.get("type") == "forced-choice"]

    chosen = _balanced_pick(bigfive, int(config.get("bigfive_count") or 0), rng)
    chosen += _balanced_pick(disc, int(config.get("disc_count") or 0), rng)
    chosen.sort(key=lambda q: q.get("order") or 0)
    fc_count = min(int(config.get("forced_choice_count") or 0), len(forced))
    fc = sorted(rng.sample(forced, fc_count), key=lambda q: q.get("order") or 0)
    return {"likert": [q["id"] for q in chosen], "forced_choice": [q["id"] for q in fc]}


# --- candidate side ---

async def get_active_assessment() -> Dict[str, Any]:
    rows = await query("assessments", {"is_active": True, "publish_status": "published"}, order_by="version", descending=True, limit=1)
    if not rows:
        raise NotFoundError("No active assessment found.")
    return rows[0]


async def _application_context(user: Dict[str, Any], application_id: Optional[str]) -> Dict[str, Any]:
    if application_id:
        app = await get_document("applications", application_id)
        if not app or app.get("candidate_uid") != user["uid"]:
            raise NotFoundError("Application not found.")
    else:
        rows = await query(
            "applications",
            {"candidate_uid": user["uid"], "status": "tes_kepribadian"},
            order_by="updated_at", descending=True, limit=1,
        )
        app = rows[0] if rows else None
    if not app:
        return {}
    return {"application_id": app["id"], "job_position": app.get("job_position"), "brand_name": app.get("brand_name")}


async def start_session(user: Dict[str, Any], application_id: Optional[str] = None) -> Dict[str, Any]:
    """Returns {"session_id", "resumed"}; refuses when the candidate already submitted."""
    assessment = await get_active_assessment()
    existing = await query(SESSIONS, {"candidate_uid": user["uid"], "assessment_id": assessment["id"]})
    for s in existing:
        if s.get("status") == "submitted":
            raise ConflictError("You have already completed this assessment.", {"session_id": s["id"]})
    for s in existing:
        if s.get("status") == "draft":
            return {"session_id": s["id"], "resumed": True}

    questions = await query("assessment_questions", {"assessment_id": assessment["id"]})
    selected = select_questions(questions, await get_config())
    if not selected["likert"] and not selected["forced_choice"]:
        raise BadRequestError("The active assessment has no questions.")

    now = utcnow()
    session = {
        "assessment_id": assessment["id"],
        "candidate_uid": user["uid"],
        "candidate_name": user.get("full_name"),
        "candidate_email": user.get("email"),
        **await _application_context(user, application_id),
        "status": "draft",
        "current_test_part": "likert" if selected["likert"] else "forced-choice",
        "part1_guide_ack": False,
        "part2_guide_ack": False,
        "selected_question_ids": selected,
        "answers": {},
        "scores": {"disc": {}, "bigfive": {}},
        "started_at": now,
        "updated_at": now,
    }
    sid = await add_document(SESSIONS, session)
    logger.info("Assessment session %s started for %s", sid, user["uid"])
    return {"session_id": sid, "resumed": False}


async def get_session(session_id: str) -> Dict[str, Any]:
    session = await get_document(SESSIONS, session_id)
    if not session:
        raise NotFoundError("Session not found.")
    return session


def ensure_access(session: Dict[str, Any], user: Dict[str, Any]) -> None:
    if user.get("role") in INTERNAL_ROLES:
        return
    if session.get("candidate_uid") != user.get("uid"):
        raise ForbiddenError("Forbidden")


def _selected_ids(session: Dict[str, Any]) -> List[str]:
    sel = session.get("selected_question_ids") or {}
    return list(sel.get("likert") or []) + list(sel.get("forced_choice") or [])


async def session_questions(session: Dict[str, Any]) -> List[Dict[str, Any]]:
    ids = _selected_ids(session)
    if ids:
        by_id = {q["id"]: q for q in await get_many("assessment_questions", ids)}
        return [by_id[i] for i in ids if i in by_id]
    # sessions created before selection existed score against the full bank
    return await query("assessment_questions", {"assessment_id": session["assessment_id"]}, order_by="order")


async def _own_draft(session_id: str, user: Dict[str, Any]) -> Dict[str, Any]:
    session = await get_session(session_id)
    if session.get("candidate_uid") != user.get("uid"):
        raise ForbiddenError("Forbidden")
    if session.get("status") == "submitted":
        raise ConflictError("Assessment already submitted.", {"session_id": session_id})
    return session


async def save_answers(session_id: str, user: Dict[str, Any], answers: Dict[str, Any]) -> Dict[str, Any]:
    session = await _own_draft(session_id, user)
    allowed = set(_selected_ids(session))
    unknown = [qid for qid in answers if allowed and qid not in allowed]
    if unknown:
        raise BadRequestError(f"Answers reference questions outside this session: {', '.join(unknown)}")
    patch = {f"answers.{qid}": value for qid, value in answers.items()}
    patch["updated_at"] = utcnow()
    await update_document(SESSIONS, session_id, patch)
    merged = {**(session.get("answers") or {}), **answers}
    return {"answered": len(merged)}


async def ack_guide(session_id: str, user: Dict[str, Any], part: int) -> None:
    await _own_draft(session_id, user)
    await update_document(SESSIONS, session_id, {f"part{part}_guide_ack": True, "updated_at": utcnow()})


async def switch_part(session_id: str, user: Dict[str, Any], part: str) -> None:
    await _own_draft(session_id, user)
    await update_document(SESSIONS, session_id, {"current_test_part": part, "updated_at": utcnow()})


async def _archetype(scores: Dict[str, Any], normalized: Dict[str, Any]) -> Optional[Dict[str, str]]:
    try:
        out = await ai_flows.analyze_personality_archetype(PersonalityArchetypeInput(
            disc_scores=scores["disc"], big_five_scores=normalized["bigfive"],
        ))
        return out.model_dump()
    except AIFlowError as exc:
        logger.warning("Archetype labeling failed, storing none: %s", exc.message)
        return None


async def submit(session_id: Optional[str], user: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if not session_id:
        raise BadRequestError("Session ID is required.")
    session = await get_session(session_id)
    if user is not None:
        ensure_access(session, user)
    if session.get("status") == "submitted":
        return {
            "message": "Assessment already submitted.",
            "result_type": (session.get("result") or {}).get("disc_type"),
        }

    assessment = await get_document("assessments", session["assessment_id"])
    if not assessment:
        raise NotFoundError("Assessment configuration not found.")
    template = await get_document("assessment_templates", assessment.get("template_id")) or {}
    questions = await session_questions(session)

    scored = score_session(assessment, template, questions, session.get("answers") or {})
    archetype = await _archetype(scored["scores"], scored["normalized"])

    now = utcnow()
    result = {"disc_type": scored["disc_type"], "mbti_archetype": archetype, "report": scored["report"]}
    await update_document(SESSIONS, session_id, {
        "scores": scored["scores"],
        "normalized": scored["normalized"],
        "result": result,
        "status": "submitted",
        "hrd_decision": "pending",
        "completed_at": now,
        "updated_at": now,
    })
    logger.info("Session %s submitted: type %s", session_id, scored["disc_type"])
    return {"message": "Assessment submitted successfully.", "result_type": scored["disc_type"]}


# --- HRD side ---

async def list_submissions(assessment_id: str, decision: Optional[str] = None) -> List[Dict[str, Any]]:
    filters: Dict[str, Any] = {"assessment_id": assessment_id, "status": "submitted"}
    if decision:
        filters["hrd_decision"] = decision
    rows = await query(SESSIONS, filters, order_by="completed_at", descending=True)
    return [{k: v for k, v in s.items() if k != "answers"} for s in rows]


async def set_hrd_decision(session_id: str, decision: str, actor_uid: str) -> Dict[str, Any]:
    session = await get_session(session_id)
    if session.get("status") != "submitted":
        raise BadRequestError("Only submitted sessions can be reviewed.")
    patch = {"hrd_decision": decision, "hrd_decision_at": utcnow(), "hrd_decision_by": actor_uid}
    await update_document(SESSIONS, session_id, patch)
    return {**session, **patch}


async def latest_result_for_candidate(candidate_uid: str) -> Optional[Dict[str, Any]]:
    rows = await query(
        SESSIONS, {"candidate_uid": candidate_uid, "status": "submitted"},
        order_by="completed_at", descending=True, limit=1,
    )
    return rows[0] if rows else None


async def analyze_answer(session_id: str, question_id: str) -> Dict[str, Any]:
    session = await get_session(session_id)
    question = await get_document("assessment_questions", question_id)
    if not question:
        raise NotFoundError("Question not found.")
    answer = (session.get("answers") or {}).get(question_id)
    if answer is None:
        raise NotFoundError("The candidate did not answer this question.")
    if (question.get("type") or "likert") != "likert" or not isinstance(answer, int):
        raise BadRequestError("Only Likert answers can be analyzed.")

    assessment = await get_document("assessments", session["assessment_id"]) or {}
    template = await get_document("assessment_templates", assessment.get("template_id")) or {}
    scale = template.get("scale") or {}
    labels = {
        d["key"]: d.get("label", d["key"])
        for d in (template.get("dimensions") or {}).get(question.get("engine_key"), [])
    }
    dim = question.get("dimension_key") or ""
    out = await ai_flows.analyze_answer(AnalyzeAnswerInput(
        question_text=question.get("text") or "",
        answer_value=answer,
        answer_scale=f"1 ({scale.get('left_label', 'Tidak Setuju')}) - {scale.get('points', 7)} ({scale.get('right_label', 'Setuju')})",
        dimension_key=dim,
        dimension_label=labels.get(dim, dim) + (" (dibalik)" if question.get("reverse") else ""),
    ))
    return out.model_dump()
