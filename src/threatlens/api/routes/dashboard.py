# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard summary endpoint, served through the cache-aside layer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from threatlens.api.dependencies import get_cache, get_dashboard_service
from threatlens.cache.manager import DashboardCache
from threatlens.core.constants import DEFAULT_TIME_RANGE
from threatlens.models.dashboard import DashboardSummary
from threatlens.query.dashboard import DashboardService
from threatlens.query.validation import parse_time_range

router = APIRouter()

CACHE_HEADER = "X-Cache"


@router.get(
    "/dashboard/summary",
    response_model=DashboardSummary,
    responses={200: {"headers": {CACHE_HEADER: {"description": "HIT or MISS"}}}},
)
async def dashboard_summary(
    time_range: str = Query(default=str(DEFAULT_TIME_RANGE), description="24h, 7d, or 30d"),
    service: DashboardService = Depends(get_dashboard_service),
    cache: DashboardCache = Depends(get_cache),
) -> Response:
    """High-level statistics, cached for five minutes per time range."""
    tr = parse_time_range(time_range)
    doc = await cache.get_or_compute(tr, lambda: service.get_summary(tr))
    return Response(
        content=doc.body,
        media_type="application/json",
        headers={CACHE_HEADER: "HIT" if doc.cache_hit else "MISS"},
    )
