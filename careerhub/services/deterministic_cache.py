# careerhub/services/deterministic_cache.py
import json
from typing import Any, Optional

import redis.asyncio as aioredis

from careerhub.core.config import settings


class DeterministicCache:
    """JSON values in Redis under deterministic keys (see ai_flows.cache_key)."""

    def __init__(self, url: Optional[str] = None, ttl: Optional[int] = None):
        self._url = url or settings.REDIS_URL
        self._ttl = ttl or settings.AI_CACHE_TTL_SEC
        self._client = None

    async def _get_client(self):
        if self._client is None:
            self._client = aioredis.from_url(self._url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> Optional[Any]:
        client = await self._get_client()
        val = await client.get(key)
        if val is None:
            return None
        return json.loads(val)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None):
        client = await self._get_client()
        await client.set(key, json.dumps(value, ensure_ascii=False), ex=ttl or self._ttl)

    async def delete(self, key: str):
        client = await self._get_client()
        await client.delete(key)

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None


cache = DeterministicCache()
