# careerhub/services/llm_adapter.py
"""
Pluggable LLM adapter loader and facade.

Settings:
- LLM_ADAPTER: "mock" (default), "http", "gemini" or a dotted module path
- LLM_ALLOW_FALLBACK: fall back to the mock adapter when the configured one fails

Public:
- async def run_flow(flow_name: str, prompt: str, payload: dict) -> dict
"""

import importlib
import logging
from typing import Any, Dict

from careerhub.core.config import settings

logger = logging.getLogger(__name__)

_BUILTIN = {
    "mock": "careerhub.services.llm_adapters.mock_adapter",
    "http": "careerhub.services.llm_adapters.http_adapter",
    "gemini": "careerhub.services.llm_adapters.gemini_adapter",
}

_adapter = None


def _load_adapter(name: str):
    global _adapter
    mod = importlib.import_module(_BUILTIN.get(name, name))
    # adapter module must implement async run_flow
    if not hasattr(mod, "run_flow"):
        raise RuntimeError(f"Adapter {name} does not expose run_flow()")
    _adapter = mod
    return mod


def get_adapter():
    if _adapter is None:
        try:
            _load_adapter(settings.LLM_ADAPTER)
        except Exception:
            if not settings.LLM_ALLOW_FALLBACK:
                raise
            logger.exception("Could not load LLM adapter %r, using mock", settings.LLM_ADAPTER)
            _load_adapter("mock")
    return _adapter


def reset_adapter() -> None:
    global _adapter
    _adapter = None


async def run_flow(flow_name: str, prompt: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Unified entry to call the configured adapter.
    If adapter fails and fallback is allowed, fall back to mock adapter.
    """
    adapter = get_adapter()
    try:
        return await adapter.run_flow(flow_name, prompt, payload)
    except Exception as exc:
        if not settings.LLM_ALLOW_FALLBACK or adapter.__name__ == _BUILTIN["mock"]:
            raise
        logger.warning("LLM adapter %s failed for %s (%s); falling back to mock", adapter.__name__, flow_name, exc)
        mock = importlib.import_module(_BUILTIN["mock"])
        return await mock.run_flow(flow_name, prompt, payload)
