# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the cache layer: backends, TTL expiry, and the dashboard cache-aside flow."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from threatlens.cache.base import CacheBackend
from threatlens.cache.manager import (
    DashboardCache,
    get_dashboard_cache,
    reset_dashboard_cache,
)
from threatlens.cache.memory import MemoryCacheBackend
from threatlens.cache.redis import RedisCacheBackend
from threatlens.core.constants import TimeRange
from threatlens.core.exceptions import CacheError, ConfigurationError
from threatlens.models.common import TypeCounts
from threatlens.models.dashboard import DashboardSummary

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_backend(clock: FakeClock) -> MemoryCacheBackend:
    return MemoryCacheBackend(max_size=3, clock=clock)


def _summary(tr: TimeRange = TimeRange.LAST_7D, active: int = 1) -> DashboardSummary:
    return DashboardSummary(
        time_range=tr,
        new_indicators=TypeCounts(ip=1),
        active_campaigns=active,
        top_threat_actors=[],
        indicator_distribution=TypeCounts(ip=3, domain=2),
    )


# ---------------------------------------------------------------------------
# MemoryCacheBackend
# ---------------------------------------------------------------------------


class TestMemoryCacheBackend:
    def test_is_cache_backend(self) -> None:
        assert issubclass(MemoryCacheBackend, CacheBackend)

    async def test_get_set(self, memory_backend: MemoryCacheBackend) -> None:
        await memory_backend.set("k1", "v1")
        assert await memory_backend.get("k1") == "v1"

    async def test_missing_key(self, memory_backend: MemoryCacheBackend) -> None:
        assert await memory_backend.get("nope") is None

    async def test_entry_expires_at_ttl(
        self, memory_backend: MemoryCacheBackend, clock: FakeClock
    ) -> None:
        await memory_backend.set("k", "v", ttl=300)
        clock.now += 299
        assert await memory_backend.get("k") == "v"
        clock.now += 1
        assert await memory_backend.get("k") is None

    async def test_lru_eviction(self, memory_backend: MemoryCacheBackend) -> None:
        for key in ("a", "b", "c"):
            await memory_backend.set(key, key)
        await memory_backend.get("a")
        await memory_backend.set("d", "d")
        assert await memory_backend.get("b") is None
        assert await memory_backend.get("a") == "a"

    async def test_size_drops_expired(
        self, memory_backend: MemoryCacheBackend, clock: FakeClock
    ) -> None:
        await memory_backend.set("short", "v", ttl=10)
        await memory_backend.set("forever", "v")
        clock.now += 10
        assert await memory_backend.size() == 1

    async def test_delete_and_clear(self, memory_backend: MemoryCacheBackend) -> None:
        await memory_backend.set("a", "1")
        await memory_backend.set("b", "2")
        assert await memory_backend.delete("a") is True
        assert await memory_backend.delete("a") is False
        assert await memory_backend.clear() == 1
        assert await memory_backend.size() == 0


# ---------------------------------------------------------------------------
# RedisCacheBackend (client mocked)
# ---------------------------------------------------------------------------


class TestRedisCacheBackend:
    async def test_set_uses_setex_with_prefix(self) -> None:
        client = MagicMock()
        client.setex = AsyncMock()
        backend = RedisCacheBackend(client=client)

        await backend.set("dashboard:summary:7d", "{}", ttl=300)

        client.setex.assert_awaited_once_with("threatlens:dashboard:summary:7d", 300, "{}")

    async def test_get_returns_stored_value(self) -> None:
        client = MagicMock()
        client.get = AsyncMock(return_value='{"a": 1}')
        backend = RedisCacheBackend(client=client)

        assert await backend.get("k") == '{"a": 1}'
        client.get.assert_awaited_once_with("threatlens:k")

    async def test_connection_failure_raises_cache_error(self) -> None:
        client = MagicMock()
        client.get = AsyncMock(side_effect=RedisConnectionError("refused"))
        backend = RedisCacheBackend(client=client)

        with pytest.raises(CacheError, match="Redis GET failed"):
            await backend.get("k")

    async def test_scan_failure_raises_cache_error(self) -> None:
        client = MagicMock()
        client.scan_iter = MagicMock(side_effect=RedisConnectionError("refused"))
        backend = RedisCacheBackend(client=client)

        with pytest.raises(CacheError, match="Redis clear failed"):
            await backend.clear()
        with pytest.raises(CacheError, match="Redis SCAN failed"):
            await backend.size()

    async def test_delete_failure_raises_cache_error(self) -> None:
        client = MagicMock()
        client.delete = AsyncMock(side_effect=RedisConnectionError("refused"))
        backend = RedisCacheBackend(client=client)

        with pytest.raises(CacheError, match="Redis DEL failed"):
            await backend.delete("k")

    def test_backend_name(self) -> None:
        assert RedisCacheBackend(client=MagicMock()).backend_name == "redis"


# ---------------------------------------------------------------------------
# DashboardCache
# ---------------------------------------------------------------------------


class TestDashboardCache:
    def test_key_per_time_range(self) -> None:
        assert DashboardCache.make_cache_key(TimeRange.LAST_24H) == "dashboard:summary:24h"

    async def test_miss_then_hit_returns_same_bytes(
        self, memory_backend: MemoryCacheBackend
    ) -> None:
        cache = DashboardCache(memory_backend, ttl=300)
        compute = AsyncMock(side_effect=[_summary(active=1), _summary(active=99)])

        first = await cache.get_or_compute(TimeRange.LAST_7D, compute)
        second = await cache.get_or_compute(TimeRange.LAST_7D, compute)

        assert first.cache_hit is False
        assert second.cache_hit is True
        assert second.body == first.body
        assert json.loads(second.body)["active_campaigns"] == 1
        assert compute.await_count == 1
        assert (cache.stats.hits, cache.stats.misses) == (1, 1)

    async def test_time_ranges_cached_independently(
        self, memory_backend: MemoryCacheBackend
    ) -> None:
        cache = DashboardCache(memory_backend)
        await cache.get_or_compute(TimeRange.LAST_7D, AsyncMock(return_value=_summary()))
        other = await cache.get_or_compute(
            TimeRange.LAST_24H, AsyncMock(return_value=_summary(TimeRange.LAST_24H))
        )
        assert other.cache_hit is False
        assert await cache.size() == 2

    async def test_expired_entry_recomputed(
        self, memory_backend: MemoryCacheBackend, clock: FakeClock
    ) -> None:
        cache = DashboardCache(memory_backend, ttl=300)
        compute = AsyncMock(return_value=_summary())
        await cache.get_or_compute(TimeRange.LAST_7D, compute)
        clock.now += 300
        doc = await cache.get_or_compute(TimeRange.LAST_7D, compute)
        assert doc.cache_hit is False
        assert compute.await_count == 2

    async def test_read_failure_treated_as_miss(self) -> None:
        backend = AsyncMock(spec=CacheBackend)
        backend.get.side_effect = CacheError("down")
        cache = DashboardCache(backend)

        doc = await cache.get_or_compute(TimeRange.LAST_7D, AsyncMock(return_value=_summary()))

        assert doc.cache_hit is False
        assert json.loads(doc.body)["time_range"] == "7d"
        assert cache.stats.errors == 1

    async def test_write_failure_still_returns_summary(self) -> None:
        backend = AsyncMock(spec=CacheBackend)
        backend.get.return_value = None
        backend.set.side_effect = CacheError("read-only replica")
        cache = DashboardCache(backend)

        doc = await cache.get_or_compute(TimeRange.LAST_7D, AsyncMock(return_value=_summary()))

        assert doc.cache_hit is False
        assert cache.stats.errors == 1

    async def test_compute_failure_propagates(self, memory_backend: MemoryCacheBackend) -> None:
        cache = DashboardCache(memory_backend)
        with pytest.raises(RuntimeError):
            await cache.get_or_compute(
                TimeRange.LAST_7D, AsyncMock(side_effect=RuntimeError("db gone"))
            )
        assert await memory_backend.size() == 0


# ---------------------------------------------------------------------------
# Singleton / settings
# ---------------------------------------------------------------------------


class TestDashboardCacheSingleton:
    def test_defaults_to_memory(self) -> None:
        cache = get_dashboard_cache()
        assert cache.backend.backend_name == "memory"
        assert cache.ttl == 300
        assert get_dashboard_cache() is cache

    def test_redis_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THREATLENS_CACHE_BACKEND", "redis")
        reset_dashboard_cache()
        assert get_dashboard_cache().backend.backend_name == "redis"

    def test_unknown_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THREATLENS_CACHE_BACKEND", "memcached")
        reset_dashboard_cache()
        with pytest.raises(ConfigurationError, match="memcached"):
            get_dashboard_cache()
