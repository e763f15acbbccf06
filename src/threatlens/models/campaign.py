# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Campaign timeline models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from threatlens.core.constants import IndicatorType
from threatlens.models.common import TypeCounts


class CampaignInfo(BaseModel):
    id: str
    name: str
    description: str | None = None
    first_seen: str | None = None
    last_seen: str | None = None
    status: str


class TimelineIndicator(BaseModel):
    id: str
    type: IndicatorType


class TimelineBucket(BaseModel):
    """Observations sharing a day, or a Monday-anchored week."""

    period: str = Field(description="ISO date of the bucket start")
    indicators: list[TimelineIndicator] = Field(default_factory=list)
    counts: TypeCounts = Field(default_factory=TypeCounts)


class TimelineSummary(BaseModel):
    total_indicators: int = 0
    unique_ips: int = 0
    unique_domains: int = 0
    duration_days: int = 0


class CampaignTimeline(BaseModel):
    campaign: CampaignInfo
    timeline: list[TimelineBucket]
    summary: TimelineSummary
