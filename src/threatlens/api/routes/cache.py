# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard cache statistics endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from threatlens.api.dependencies import get_cache
from threatlens.cache.manager import DashboardCache

logger = logging.getLogger("threatlens.api.cache")

router = APIRouter()


class CacheStatsResponse(BaseModel):
    backend: str
    ttl: int
    hits: int
    misses: int
    errors: int
    total: int
    hit_rate: float
    size: int | None


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(cache: DashboardCache = Depends(get_cache)) -> CacheStatsResponse:
    """Hit/miss counters for this process and the current entry count."""
    try:
        size: int | None = await cache.size()
    except Exception:
        logger.warning("Cache size unavailable", exc_info=True)
        size = None
    stats = cache.stats
    return CacheStatsResponse(
        backend=cache.backend.backend_name,
        ttl=cache.ttl,
        hits=stats.hits,
        misses=stats.misses,
        errors=stats.errors,
        total=stats.total,
        hit_rate=round(stats.hit_rate, 4),
        size=size,
    )
