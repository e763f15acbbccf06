# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Query layer -- one service per logical read query."""

from threatlens.query.campaigns import CampaignTimelineService
from threatlens.query.dashboard import DashboardService
from threatlens.query.indicators import IndicatorQueryService

__all__ = [
    "CampaignTimelineService",
    "DashboardService",
    "IndicatorQueryService",
]
