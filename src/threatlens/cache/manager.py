# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache-aside wrapper for the dashboard summary.

:class:`DashboardCache` checks the cache before computing a summary and
stores fresh results with a fixed TTL.  The cache is an optimisation
only: a failing read is treated as a miss and a failing write is
logged, so a request never fails because of the cache.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from threatlens.cache.base import CacheBackend
from threatlens.cache.memory import MemoryCacheBackend
from threatlens.core.constants import DASHBOARD_CACHE_KEY_PREFIX, DASHBOARD_CACHE_TTL, TimeRange
from threatlens.core.exceptions import ConfigurationError
from threatlens.models.dashboard import DashboardSummary

logger = logging.getLogger("threatlens.cache.manager")

_cache: DashboardCache | None = None


class CacheStats:
    """Hit/miss/error counters."""

    __slots__ = ("errors", "hits", "misses")

    def __init__(self) -> None:
        self.hits: int = 0
        self.misses: int = 0
        self.errors: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.total if self.total else 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "errors": self.errors,
            "total": self.total,
            "hit_rate": round(self.hit_rate, 4),
        }


@dataclass(frozen=True, slots=True)
class CachedDocument:
    """A serialised summary and whether it came from the cache."""

    body: str
    cache_hit: bool


class DashboardCache:
    """Cache-aside access to dashboard summaries, one entry per time range.

    Args:
        backend: Where entries are stored.
        ttl: Seconds an entry stays valid.
    """

    def __init__(self, backend: CacheBackend, ttl: int = DASHBOARD_CACHE_TTL) -> None:
        self._backend = backend
        self._ttl = ttl
        self._stats = CacheStats()

    @staticmethod
    def make_cache_key(time_range: TimeRange) -> str:
        return f"{DASHBOARD_CACHE_KEY_PREFIX}{time_range}"

    async def get_or_compute(
        self,
        time_range: TimeRange,
        compute: Callable[[], Awaitable[DashboardSummary]],
    ) -> CachedDocument:
        """Return the cached JSON for *time_range*, computing it on a miss.

        A hit is returned verbatim.  Errors raised by *compute* propagate;
        errors raised by the backend do not.
        """
        key = self.make_cache_key(time_range)

        try:
            cached = await self._backend.get(key)
        except Exception:
            self._stats.errors += 1
            logger.warning("Cache read failed for %s, computing fresh", key, exc_info=True)
            cached = None

        if cached is not None:
            self._stats.hits += 1
            logger.debug("Cache HIT for %s", key)
            return CachedDocument(body=cached, cache_hit=True)

        self._stats.misses += 1
        logger.debug("Cache MISS for %s", key)

        summary = await compute()
        body = summary.model_dump_json()

        try:
            await self._backend.set(key, body, ttl=self._ttl)
        except Exception:
            self._stats.errors += 1
            logger.warning("Cache write failed for %s", key, exc_info=True)

        return CachedDocument(body=body, cache_hit=False)

    async def clear(self) -> int:
        count = await self._backend.clear()
        logger.info("Cache cleared: %d entries removed", count)
        return count

    async def size(self) -> int:
        return await self._backend.size()

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    async def close(self) -> None:
        await self._backend.close()


def _create_backend_from_settings() -> CacheBackend:
    """Instantiate the cache backend named in application settings."""
    from threatlens.core.config import get_settings

    settings = get_settings()
    backend_type = settings.cache_backend.lower()

    if backend_type == "memory":
        return MemoryCacheBackend(max_size=settings.cache_max_entries)

    if backend_type == "redis":
        from threatlens.cache.redis import RedisCacheBackend

        return RedisCacheBackend(redis_url=settings.redis_url)

    msg = f"Unknown cache backend: {settings.cache_backend!r}. Expected 'memory' or 'redis'."
    raise ConfigurationError(msg)


def get_dashboard_cache() -> DashboardCache:
    """Return the process-wide :class:`DashboardCache`, creating it on first use."""
    global _cache
    if _cache is None:
        _cache = DashboardCache(backend=_create_backend_from_settings())
    return _cache


def reset_dashboard_cache() -> None:
    """Drop the process-wide cache (used by tests and shutdown)."""
    global _cache
    _cache = None
