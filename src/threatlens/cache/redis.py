# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Redis cache backend using the ``redis`` async client.

Shared by every API worker, so one computed dashboard summary serves the
whole deployment for the TTL.
"""

from __future__ import annotations

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from threatlens.cache.base import CacheBackend
from threatlens.core.exceptions import CacheError

logger = logging.getLogger("threatlens.cache.redis")

_KEY_PREFIX = "threatlens:"


class RedisCacheBackend(CacheBackend):
    """Redis-backed cache.

    Args:
        redis_url: Redis connection URL (e.g. ``redis://localhost:6379/0``).
        client: Pre-built client; overrides *redis_url* when given.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        client: aioredis.Redis | None = None,
    ) -> None:
        self._client: aioredis.Redis = client or aioredis.from_url(
            redis_url, decode_responses=True
        )

    async def get(self, key: str) -> str | None:
        try:
            result = await self._client.get(self._prefixed(key))
        except RedisError as exc:
            raise CacheError(f"Redis GET failed for {key}: {exc}") from exc
        return str(result) if result is not None else None

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        try:
            if ttl is not None:
                await self._client.setex(self._prefixed(key), ttl, value)
            else:
                await self._client.set(self._prefixed(key), value)
        except RedisError as exc:
            raise CacheError(f"Redis SET failed for {key}: {exc}") from exc

    async def delete(self, key: str) -> bool:
        try:
            return bool(await self._client.delete(self._prefixed(key)))
        except RedisError as exc:
            raise CacheError(f"Redis DEL failed for {key}: {exc}") from exc

    async def clear(self) -> int:
        """Delete every key under the threatlens prefix.

        Uses SCAN to avoid blocking Redis with a KEYS command.
        """
        count = 0
        try:
            async for key in self._client.scan_iter(match=f"{_KEY_PREFIX}*"):
                await self._client.delete(key)
                count += 1
        except RedisError as exc:
            raise CacheError(f"Redis clear failed after {count} keys: {exc}") from exc
        logger.debug("Removed %d keys from Redis", count)
        return count

    async def size(self) -> int:
        count = 0
        try:
            async for _key in self._client.scan_iter(match=f"{_KEY_PREFIX}*"):
                count += 1
        except RedisError as exc:
            raise CacheError(f"Redis SCAN failed: {exc}") from exc
        return count

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def backend_name(self) -> str:
        return "redis"

    @staticmethod
    def _prefixed(key: str) -> str:
        return f"{_KEY_PREFIX}{key}"
