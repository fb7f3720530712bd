# tests/test_ai_flows.py
import httpx
import pytest

from careerhub.core.config import settings
from careerhub.core.errors import AIFlowError
from careerhub.models.analysis import AnalyzeAnswerInput, CandidateFitInput, PersonalityArchetypeInput
from careerhub.services import ai_flows, llm_adapter
from careerhub.services.llm_adapters import http_adapter, mock_adapter


def _answer_input(**kw):
    data = {
        "question_text": "Saya suka memimpin rapat.",
        "answer_value": 6,
        "answer_scale": "1 (Tidak Setuju) - 7 (Setuju)",
        "dimension_key": "D",
        "dimension_label": "Dominance",
    }
    data.update(kw)
    return AnalyzeAnswerInput(**data)


async def test_archetype_from_scores():
    out = await ai_flows.analyze_personality_archetype(PersonalityArchetypeInput(
        disc_scores={"D": 30, "I": 10, "S": 12, "C": 25},
        big_five_scores={"O": 80, "C": 70, "E": 65, "A": 40, "N": 30},
    ))
    assert out.code == "ENTJ-A"
    assert out.archetype == "Komandan"


async def test_candidate_fit_schema():
    out = await ai_flows.analyze_candidate_fit(CandidateFitInput(
        job_requirements_html="<ul><li>S1 Administrasi</li></ul>",
        cv_text="x" * 600,
        cv_meta={"source": "pdf", "char_count": "600"},
        candidate_profile_json="{}",
        personality_analysis="",
    ))
    assert out.recommended_decision == "advance_interview"
    assert 1 <= out.score_breakdown.culture_fit.score <= 5


async def test_result_is_cached(fake_cache, monkeypatch):
    first = await ai_flows.analyze_answer(_answer_input())
    assert len(fake_cache.store) == 1

    async def fail(*args, **kwargs):
        raise AssertionError("adapter should not be called on a cache hit")

    monkeypatch.setattr(ai_flows, "run_flow", fail)
    second = await ai_flows.analyze_answer(_answer_input())
    assert second == first


async def test_cache_key_depends_on_input():
    a = ai_flows.cache_key("analyze_answer", {"x": 1, "y": 2})
    b = ai_flows.cache_key("analyze_answer", {"y": 2, "x": 1})
    c = ai_flows.cache_key("analyze_answer", {"x": 2, "y": 2})
    assert a == b
    assert a != c


async def test_cache_errors_are_ignored(fake_cache, monkeypatch):
    async def broken(*args, **kwargs):
        raise ConnectionError("redis down")

    monkeypatch.setattr(fake_cache, "get", broken)
    monkeypatch.setattr(fake_cache, "set", broken)
    out = await ai_flows.analyze_answer(_answer_input())
    assert "Dominance" in out.analysis


async def test_off_schema_output_raises(monkeypatch):
    async def bad(flow_name, prompt, payload):
        return {"archetype": "Arsitek", "code": "XXXX"}

    monkeypatch.setattr(ai_flows, "run_flow", bad)
    with pytest.raises(AIFlowError):
        await ai_flows.analyze_personality_archetype(PersonalityArchetypeInput(
            disc_scores={"D": 1, "I": 0, "S": 0, "C": 0},
            big_five_scores={"O": 50, "C": 50, "E": 50, "A": 50, "N": 50},
        ))


async def test_adapter_failure_without_fallback_raises(monkeypatch):
    monkeypatch.setattr(settings, "LLM_ADAPTER", "http")
    monkeypatch.setattr(settings, "LLM_HTTP_URL", None)
    monkeypatch.setattr(settings, "LLM_ALLOW_FALLBACK", False)
    llm_adapter.reset_adapter()
    with pytest.raises(AIFlowError):
        await ai_flows.analyze_answer(_answer_input())


async def test_http_failure_falls_back_to_mock(monkeypatch):
    monkeypatch.setattr(settings, "LLM_ADAPTER", "http")
    monkeypatch.setattr(settings, "LLM_HTTP_URL", None)
    llm_adapter.reset_adapter()
    out = await llm_adapter.run_flow("analyze_answer", "prompt", {"answer_value": 3, "dimension_label": "X", "dimension_key": "O"})
    assert "Jawaban 3" in out["analysis"]


async def test_unknown_adapter_loads_mock_when_fallback_allowed(monkeypatch):
    monkeypatch.setattr(settings, "LLM_ADAPTER", "careerhub.services.no_such_adapter")
    llm_adapter.reset_adapter()
    assert llm_adapter.get_adapter() is mock_adapter


async def test_http_adapter_retries(monkeypatch):
    monkeypatch.setattr(settings, "LLM_HTTP_URL", "https://llm.internal/run")
    monkeypatch.setattr(settings, "LLM_RETRIES", 2)
    monkeypatch.setattr(settings, "LLM_BACKOFF_FACTOR", 0)
    attempts = []

    async def flaky(client, url, body):
        attempts.append(body["flow"])
        if len(attempts) < 3:
            raise httpx.ConnectError("refused")
        return {"analysis": "ok"}

    monkeypatch.setattr(http_adapter, "_post_once", flaky)
    out = await http_adapter.run_flow("analyze_answer", "p", {})
    assert out == {"analysis": "ok"}
    assert len(attempts) == 3


async def test_http_adapter_gives_up(monkeypatch):
    monkeypatch.setattr(settings, "LLM_HTTP_URL", "https://llm.internal/run")
    monkeypatch.setattr(settings, "LLM_RETRIES", 1)
    monkeypatch.setattr(settings, "LLM_BACKOFF_FACTOR", 0)

    async def down(client, url, body):
        raise httpx.ConnectError("refused")

    monkeypatch.setattr(http_adapter, "_post_once", down)
    with pytest.raises(httpx.ConnectError):
        await http_adapter.run_flow("analyze_answer", "p", {})
