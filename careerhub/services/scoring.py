# careerhub/services/scoring.py
"""
Personality assessment scoring.

Input is the stored assessment, its template, the session's questions and the
session's answers (question id -> Likert int or {"most": text, "least": text}).

Steps:
  1. raw sums per dimension (DISC and Big Five), Likert values reversed and weighted
  2. Big Five min-max normalization to 0..100 over each dimension's theoretical range
  3. DISC type = dimension with the highest raw sum (last key wins a tie)
  4. report assembled from the assessment's result templates
"""

from typing import Any, Dict, List, Mapping, Tuple
import logging

from careerhub.core.errors import ScoringError

logger = logging.getLogger(__name__)

DEFAULT_POINTS = 7
HIGH_THRESHOLD = 60
LOW_THRESHOLD = 40

DEFAULT_DIMENSIONS = {
    "disc": ["D", "I", "S", "C"],
    "bigfive": ["O", "C", "E", "A", "N"],
}


def _dimension_keys(template: Mapping[str, Any], engine: str) -> List[str]:
    dims = (template.get("dimensions") or {}).get(engine)
    if not dims:
        return list(DEFAULT_DIMENSIONS[engine])
    return [d["key"] if isinstance(d, Mapping) else str(d) for d in dims]


def _dimension_labels(template: Mapping[str, Any], engine: str) -> Dict[str, str]:
    labels = {}
    for d in (template.get("dimensions") or {}).get(engine) or []:
        if isinstance(d, Mapping):
            labels[d["key"]] = d.get("label") or d["key"]
    return labels


def init_scores(template: Mapping[str, Any]) -> Dict[str, Dict[str, float]]:
    return {engine: {k: 0 for k in _dimension_keys(template, engine)} for engine in ("disc", "bigfive")}


def _likert_value(question: Mapping[str, Any], answer: Any, points: int, reverse_enabled: bool) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(answer, bool) or not isinstance(answer, int):
        raise ScoringError(f"Invalid answer for question {question.get('id')}: expected an integer.")
    if answer < 1 or answer > points:
        raise ScoringError(f"Invalid answer for question {question.get('id')}: {answer} is outside 1..{points}.")
    value = answer
    if reverse_enabled and question.get("reverse"):
        value = (points + 1) - value
    weight = question.get("weight")
    if weight is None:
        weight = 1
    return value * weight


def _pick_statement(question: Mapping[str, Any], choices: List[Mapping[str, Any]], ref: Any) -> Mapping[str, Any]:
    if isinstance(ref, int) and not isinstance(ref, bool):
        if 0 <= ref < len(choices):
            return choices[ref]
    else:
        for c in choices:
            if c.get("text") == ref:
                return c
    raise ScoringError(f"Invalid answer for question {question.get('id')}: unknown statement {ref!r}.")


def _add(scores: Dict[str, Dict[str, float]], engine: str, dim: str, amount: float) -> None:
    if engine not in scores:
        raise ScoringError(f"Unknown engine '{engine}'.")
    scores[engine][dim] = scores[engine].get(dim, 0) + amount


def compute_raw_scores(
    template: Mapping[str, Any],
    questions: List[Mapping[str, Any]],
    answers: Mapping[str, Any],
) -> Tuple[Dict[str, Dict[str, float]], Dict[str, List[float]]]:
    """
    Returns (scores, bigfive_ranges) where bigfive_ranges maps a Big Five key to
    its theoretical [min, max] given the answered questions.
    """
    points = int((template.get("scale") or {}).get("points") or DEFAULT_POINTS)
    reverse_enabled = (template.get("scoring") or {}).get("reverse_enabled", True)
    scores = init_scores(template)
    ranges: Dict[str, List[float]] = {}

    for q in questions:
        qid = q.get("id")
        if qid not in answers or answers[qid] is None:
            continue
        answer = answers[qid]
        qtype = q.get("type") or "likert"

        if qtype == "likert":
            engine, dim = q.get("engine_key"), q.get("dimension_key")
            if not engine or not dim:
                raise ScoringError(f"Question {qid} has no engine/dimension.")
            value = _likert_value(q, answer, points, reverse_enabled)
            _add(scores, engine, dim, value)
            if engine == "bigfive":
                weight = q.get("weight") if q.get("weight") is not None else 1
                r = ranges.setdefault(dim, [0, 0])
                r[0] += 1 * weight
                r[1] += points * weight

        elif qtype == "forced-choice":
            if not isinstance(answer, Mapping) or not answer.get("most") or not answer.get("least"):
                raise ScoringError(f"Invalid answer for question {qid}: expected most and least.")
            if answer["most"] == answer["least"]:
                raise ScoringError(f"Invalid answer for question {qid}: most and least must differ.")
            choices = q.get("forced_choices") or []
            most = _pick_statement(q, choices, answer["most"])
            least = _pick_statement(q, choices, answer["least"])
            _add(scores, most["engine_key"], most["dimension_key"], 1)
            _add(scores, least["engine_key"], least["dimension_key"], -1)
            for dim in {c["dimension_key"] for c in choices if c.get("engine_key") == "bigfive"}:
                r = ranges.setdefault(dim, [0, 0])
                r[0] -= 1
                r[1] += 1
        else:
            raise ScoringError(f"Unsupported question type '{qtype}'.")

    return scores, ranges


def normalize_bigfive(raw: Mapping[str, float], ranges: Mapping[str, List[float]]) -> Dict[str, int]:
    out = {}
    for key, value in raw.items():
        lo, hi = ranges.get(key, (0, 0))
        if hi == lo:
            out[key] = 50
            continue
        pct = round((value - lo) / (hi - lo) * 100)
        out[key] = max(0, min(100, pct))
    return out


def pick_disc_type(disc: Mapping[str, float]) -> str:
    if not disc:
        raise ScoringError("No DISC dimensions to score.")
    # later keys win ties: D, I, S, C all equal gives C
    best = None
    for key, value in disc.items():
        if best is None or value >= disc[best]:
            best = key
    return best


def _bigfive_text(tpl: Mapping[str, Any], score: int) -> str:
    if score >= HIGH_THRESHOLD:
        return tpl.get("high_text", "")
    if score <= LOW_THRESHOLD:
        return tpl.get("low_text", "")
    return tpl.get("mid_text", "")


def build_report(
    assessment: Mapping[str, Any],
    template: Mapping[str, Any],
    disc_type: str,
    normalized: Mapping[str, int],
) -> Dict[str, Any]:
    result_templates = assessment.get("result_templates") or {}
    disc_tpl = (result_templates.get("disc") or {}).get(disc_type)
    if not disc_tpl:
        raise ScoringError(f"Result template for type {disc_type} not found.")

    bigfive_tpls = result_templates.get("bigfive") or {}
    labels = _dimension_labels(template, "bigfive")
    summary = []
    for key, score in normalized.items():
        tpl = bigfive_tpls.get(key) or {}
        summary.append({
            "dimension": key,
            "label": labels.get(key, key),
            "score": score,
            "text": _bigfive_text(tpl, score),
        })

    overall = result_templates.get("overall") or {}
    return {
        "title": disc_tpl.get("title", ""),
        "subtitle": disc_tpl.get("subtitle", ""),
        "blocks": list(disc_tpl.get("blocks") or []),
        "strengths": list(disc_tpl.get("strengths") or []),
        "risks": list(disc_tpl.get("risks") or []),
        "role_fit": list(disc_tpl.get("role_fit") or []),
        "bigfive_summary": summary,
        "interview_questions": list(overall.get("interview_questions") or []),
    }


def score_session(
    assessment: Mapping[str, Any],
    template: Mapping[str, Any],
    questions: List[Mapping[str, Any]],
    answers: Mapping[str, Any],
) -> Dict[str, Any]:
    scores, ranges = compute_raw_scores(template, questions, answers)
    rules = assessment.get("rules") or {}
    if rules.get("bigfive_normalization", "minmax") != "minmax":
        raise ScoringError(f"Unsupported Big Five normalization '{rules['bigfive_normalization']}'.")
    if rules.get("disc_rule", "highest") != "highest":
        raise ScoringError(f"Unsupported DISC rule '{rules['disc_rule']}'.")

    normalized = normalize_bigfive(scores["bigfive"], ranges)
    disc_type = pick_disc_type(scores["disc"])
    report = build_report(assessment, template, disc_type, normalized)
    logger.debug("Scored session: disc=%s type=%s bigfive=%s", scores["disc"], disc_type, normalized)
    return {
        "scores": scores,
        "normalized": {"bigfive": normalized},
        "disc_type": disc_type,
        "report": report,
    }
