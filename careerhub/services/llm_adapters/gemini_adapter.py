# careerhub/services/llm_adapters/gemini_adapter.py
"""
Google Generative AI (Gemini) adapter. Asks for a JSON reply and parses it.
"""

import json
import logging
from typing import Any, Dict

import google.generativeai as genai

from careerhub.core.config import settings

logger = logging.getLogger(__name__)

_model = None


def _get_model():
    global _model
    if _model is None:
        api_key = settings.GEMINI_API_KEY or settings.LLM_API_KEY
        if not api_key:
            raise RuntimeError("GEMINI_API_KEY unset for gemini_adapter")
        genai.configure(api_key=api_key)
        _model = genai.GenerativeModel(
            settings.GEMINI_MODEL,
            generation_config={"response_mime_type": "application/json", "temperature": 0.2},
        )
    return _model


def _strip_fences(text: str) -> str:
    t = text.strip()
    if t.startswith("```"):
        t = t.split("\n", 1)[1] if "\n" in t else ""
        if t.rstrip().endswith("```"):
            t = t.rstrip()[:-3]
    return t.strip()


async def run_flow(flow_name: str, prompt: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    model = _get_model()
    resp = await model.generate_content_async(prompt)
    text = _strip_fences(getattr(resp, "text", "") or "")
    if not text:
        raise RuntimeError(f"Gemini returned an empty reply for {flow_name}")
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Gemini reply for {flow_name} is not a JSON object")
    logger.debug("Gemini %s replied with keys %s", flow_name, sorted(data))
    return data
