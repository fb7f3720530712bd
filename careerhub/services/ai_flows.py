# careerhub/services/ai_flows.py
"""
Schema-validated generative flows.

Each flow validates its input model, renders a prompt, asks the configured LLM
adapter for JSON and validates the reply against the output model. Replies are
cached in Redis keyed by flow name + input; cache failures are logged and ignored.
"""

import hashlib
import json
import logging
from typing import Any, Dict, Type

from pydantic import BaseModel, ValidationError

from careerhub.core.errors import AIFlowError
from careerhub.models.analysis import (
    AnalyzeAnswerInput,
    AnalyzeAnswerOutput,
    CandidateFitInput,
    CandidateFitOutput,
    PersonalityArchetypeInput,
    PersonalityArchetypeOutput,
)
from careerhub.services import prompts
from careerhub.services.deterministic_cache import cache
from careerhub.services.llm_adapter import run_flow

logger = logging.getLogger(__name__)


def _serialize_for_cache(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, default=str, separators=(",", ":"), ensure_ascii=False)


def cache_key(flow_name: str, payload: Dict[str, Any]) -> str:
    h = hashlib.sha256(f"{flow_name}|{_serialize_for_cache(payload)}".encode("utf-8")).hexdigest()
    return f"flow:{flow_name}:{h}"


async def _run(flow_name: str, template: str, data: BaseModel, output_model: Type[BaseModel]) -> BaseModel:
    payload = data.model_dump()
    key = cache_key(flow_name, payload)
    try:
        cached = await cache.get(key)
        if cached is not None:
            return output_model.model_validate(cached)
    except Exception as exc:
        # don't fail the flow for cache errors
        logger.debug("Cache get error for key %s: %s", key, exc)

    prompt = prompts.render(template, payload)
    try:
        raw = await run_flow(flow_name, prompt, payload)
    except Exception as exc:
        logger.exception("Flow %s failed", flow_name)
        raise AIFlowError(f"AI analysis failed: {exc}") from exc

    try:
        result = output_model.model_validate(raw)
    except ValidationError as exc:
        logger.error("Flow %s returned output off-schema: %s", flow_name, exc)
        raise AIFlowError(f"AI analysis returned an unexpected format for {flow_name}.") from exc

    try:
        await cache.set(key, result.model_dump())
    except Exception as exc:
        logger.debug("Cache set error for key %s: %s", key, exc)
    return result


async def analyze_answer(data: AnalyzeAnswerInput) -> AnalyzeAnswerOutput:
    return await _run("analyze_answer", prompts.ANALYZE_ANSWER, data, AnalyzeAnswerOutput)


async def analyze_candidate_fit(data: CandidateFitInput) -> CandidateFitOutput:
    return await _run("analyze_candidate_fit", prompts.CANDIDATE_FIT, data, CandidateFitOutput)


async def analyze_personality_archetype(data: PersonalityArchetypeInput) -> PersonalityArchetypeOutput:
    return await _run("analyze_personality_archetype", prompts.PERSONALITY_ARCHETYPE, data, PersonalityArchetypeOutput)
