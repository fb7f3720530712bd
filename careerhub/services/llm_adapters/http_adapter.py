# careerhub/services/llm_adapters/http_adapter.py
"""
Async HTTP adapter to call an external LLM HTTP endpoint.
Expect JSON request/response. Retries with backoff.

Configuration:
- LLM_HTTP_URL: required for this adapter
- LLM_API_KEY: optional, sent as Authorization: Bearer <key>
- LLM_TIMEOUT_SEC: request timeout
- LLM_RETRIES: number of retries
- LLM_BACKOFF_FACTOR: backoff multiplier
"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from careerhub.core.config import settings

logger = logging.getLogger(__name__)


async def _post_once(client: httpx.AsyncClient, url: str, body: Dict[str, Any]) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json"}
    if settings.LLM_API_KEY:
        headers["Authorization"] = f"Bearer {settings.LLM_API_KEY}"
    resp = await client.post(url, json=body, headers=headers, timeout=settings.LLM_TIMEOUT_SEC)
    resp.raise_for_status()
    return resp.json()


async def run_flow(flow_name: str, prompt: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Send a body like:
    { "flow": flow_name, "prompt": prompt, "input": payload }
    Expect the external service to return the flow's JSON output.
    """
    if not settings.LLM_HTTP_URL:
        raise RuntimeError("LLM_HTTP_URL unset for http_adapter")
    url = str(settings.LLM_HTTP_URL)
    body = {"flow": flow_name, "prompt": prompt, "input": payload}
    retries = settings.LLM_RETRIES
    async with httpx.AsyncClient() as client:
        for attempt in range(1, retries + 2):
            try:
                return await _post_once(client, url, body)
            except (httpx.HTTPError, ValueError) as exc:
                if attempt > retries:
                    raise
                logger.warning("LLM HTTP attempt %d for %s failed: %s", attempt, flow_name, exc)
                await asyncio.sleep(settings.LLM_BACKOFF_FACTOR * attempt)
    raise RuntimeError("unreachable")
