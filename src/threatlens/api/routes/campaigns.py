# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Campaign API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from threatlens.api.dependencies import get_campaign_service
from threatlens.models.campaign import CampaignTimeline
from threatlens.query.campaigns import CampaignTimelineService

router = APIRouter()


@router.get("/campaigns/{campaign_id}/indicators", response_model=CampaignTimeline)
async def get_campaign_indicators(
    campaign_id: str,
    start_date: str | None = Query(default=None, description="Inclusive ISO-8601 start date"),
    end_date: str | None = Query(default=None, description="Inclusive ISO-8601 end date"),
    group_by: str = Query(default="day", description="Bucket by 'day' or 'week'"),
    service: CampaignTimelineService = Depends(get_campaign_service),
) -> CampaignTimeline:
    """Campaign indicators organised for timeline visualisation."""
    return await service.get_timeline(
        campaign_id, start_date=start_date, end_date=end_date, group_by=group_by
    )
