# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Response document models for threatlens."""

from threatlens.models.campaign import (
    CampaignInfo,
    CampaignTimeline,
    TimelineBucket,
    TimelineIndicator,
    TimelineSummary,
)
from threatlens.models.common import TypeCounts
from threatlens.models.dashboard import DashboardSummary, ThreatActorRanking
from threatlens.models.indicator import (
    IndicatorDetail,
    IndicatorFilters,
    IndicatorSearchPage,
    IndicatorSearchResult,
    LinkedCampaign,
    LinkedThreatActor,
    RelatedIndicator,
)

__all__ = [
    "CampaignInfo",
    "CampaignTimeline",
    "DashboardSummary",
    "IndicatorDetail",
    "IndicatorFilters",
    "IndicatorSearchPage",
    "IndicatorSearchResult",
    "LinkedCampaign",
    "LinkedThreatActor",
    "RelatedIndicator",
    "ThreatActorRanking",
    "TimelineBucket",
    "TimelineIndicator",
    "TimelineSummary",
    "TypeCounts",
]
