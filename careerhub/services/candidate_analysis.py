# careerhub/services/candidate_analysis.py
"""
Candidate-fit analysis for one application: application + job + profile + CV
text (+ the candidate's personality result when there is one) -> AI report.
"""
import json
import logging
from typing import Any, Dict, Mapping, Optional

from careerhub.core.errors import NotFoundError
from careerhub.db.documents import get_document
from careerhub.models.analysis import CandidateFitInput, CandidateFitOutput
from careerhub.services import ai_flows
from careerhub.services.cv_text import extract_cv_text
from careerhub.services.sessions import latest_result_for_candidate

logger = logging.getLogger(__name__)


def simplified_profile(profile: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "skills": list(profile.get("skills") or []),
        "work_experience": [
            {
                "company": w.get("company"),
                "position": w.get("position"),
                "job_type": w.get("job_type"),
                "start_date": w.get("start_date"),
                "end_date": w.get("end_date"),
                "is_current": w.get("is_current"),
                "description": w.get("description"),
            }
            for w in profile.get("work_experience") or []
        ],
        "education": [
            {"institution": e.get("institution"), "level": e.get("level"), "field_of_study": e.get("field_of_study")}
            for e in profile.get("education") or []
        ],
    }


def personality_summary(session: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not session or not session.get("result"):
        return None
    result = session["result"]
    report = result.get("report") or {}
    return json.dumps({
        "disc_type": result.get("disc_type"),
        "archetype": result.get("mbti_archetype"),
        "disc_scores": (session.get("scores") or {}).get("disc"),
        "big_five_scores": (session.get("normalized") or {}).get("bigfive"),
        "title": report.get("title"),
        "strengths": report.get("strengths"),
        "risks": report.get("risks"),
    }, ensure_ascii=False)


async def get_candidate_analysis(application_id: str) -> CandidateFitOutput:
    application = await get_document("applications", application_id)
    if not application:
        raise NotFoundError("Application not found.")
    job = await get_document("jobs", application.get("job_id"))
    if not job:
        raise NotFoundError("Job not found.")
    profile = await get_document("profiles", application.get("candidate_uid"))
    if not profile:
        raise NotFoundError("Candidate profile not found.")

    cv = await extract_cv_text(application)
    session = await latest_result_for_candidate(application["candidate_uid"])

    logger.info("Analyzing candidate fit for application %s (cv source=%s)", application_id, cv["source"])
    return await ai_flows.analyze_candidate_fit(CandidateFitInput(
        job_requirements_html=job.get("special_requirements_html") or job.get("general_requirements_html") or "",
        cv_text=cv["cv_text"],
        cv_meta={"source": cv["source"], "char_count": str(cv["char_count"]), "file_name": cv["file_name"]},
        candidate_profile_json=json.dumps(simplified_profile(profile), ensure_ascii=False),
        personality_analysis=personality_summary(session),
    ))
