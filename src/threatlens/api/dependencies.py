# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""FastAPI dependencies providing the store, the cache, and query services.

Tests substitute fakes through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends

from threatlens.cache.manager import DashboardCache, get_dashboard_cache
from threatlens.query.campaigns import CampaignTimelineService
from threatlens.query.dashboard import DashboardService
from threatlens.query.indicators import IndicatorQueryService
from threatlens.storage.backend import DatabaseBackend
from threatlens.storage.database import get_backend


async def get_store() -> DatabaseBackend:
    return await get_backend()


def get_cache() -> DashboardCache:
    return get_dashboard_cache()


def get_indicator_service(
    db: DatabaseBackend = Depends(get_store),
) -> IndicatorQueryService:
    return IndicatorQueryService(db)


def get_campaign_service(
    db: DatabaseBackend = Depends(get_store),
) -> CampaignTimelineService:
    return CampaignTimelineService(db)


def get_dashboard_service(
    db: DatabaseBackend = Depends(get_store),
) -> DashboardService:
    return DashboardService(db)
