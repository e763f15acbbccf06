# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard summary models."""

from __future__ import annotations

from pydantic import BaseModel

from threatlens.core.constants import TimeRange
from threatlens.models.common import TypeCounts


class ThreatActorRanking(BaseModel):
    id: str
    name: str
    indicator_count: int


class DashboardSummary(BaseModel):
    time_range: TimeRange
    new_indicators: TypeCounts
    active_campaigns: int
    top_threat_actors: list[ThreatActorRanking]
    indicator_distribution: TypeCounts
