# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Indicator API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from threatlens.api.dependencies import get_indicator_service
from threatlens.core.constants import DEFAULT_PAGE, DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from threatlens.models.indicator import IndicatorDetail, IndicatorSearchPage
from threatlens.query.indicators import IndicatorQueryService
from threatlens.query.validation import build_search_filters

router = APIRouter()


# Declared before /indicators/{indicator_id} so "search" is not taken as an id.
@router.get("/indicators/search", response_model=IndicatorSearchPage)
async def search_indicators(
    type: str | None = Query(default=None, description="ip, domain, url, or hash"),  # noqa: A002
    value: str | None = Query(default=None, description="Substring of the indicator value"),
    threat_actor: str | None = Query(default=None, description="Threat actor ID"),
    campaign: str | None = Query(default=None, description="Campaign ID"),
    first_seen_after: str | None = Query(default=None, description="ISO-8601 lower bound on first_seen"),
    last_seen_before: str | None = Query(default=None, description="ISO-8601 upper bound on last_seen"),
    page: int = Query(default=DEFAULT_PAGE, description="Page number, from 1"),
    limit: int = Query(
        default=DEFAULT_SEARCH_LIMIT,
        description=f"Results per page, capped at {MAX_SEARCH_LIMIT}",
    ),
    service: IndicatorQueryService = Depends(get_indicator_service),
) -> IndicatorSearchPage:
    """Search and filter indicators with pagination."""
    filters = build_search_filters(
        type=type,
        value=value,
        threat_actor=threat_actor,
        campaign=campaign,
        first_seen_after=first_seen_after,
        last_seen_before=last_seen_before,
    )
    return await service.search(filters, page=page, limit=limit)


@router.get("/indicators/{indicator_id}", response_model=IndicatorDetail)
async def get_indicator(
    indicator_id: str,
    service: IndicatorQueryService = Depends(get_indicator_service),
) -> IndicatorDetail:
    """Indicator details with linked threat actors, campaigns, and related indicators."""
    return await service.get_detail(indicator_id)
