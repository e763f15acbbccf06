# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard summary query."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from threatlens.core.constants import TIME_RANGE_HOURS, TOP_THREAT_ACTORS_LIMIT, TimeRange
from threatlens.models.common import TypeCounts
from threatlens.models.dashboard import DashboardSummary, ThreatActorRanking
from threatlens.query.timestamps import cutoff_timestamp
from threatlens.query.validation import parse_time_range
from threatlens.storage.backend import DatabaseBackend
from threatlens.storage.repositories.campaigns import CampaignRepository
from threatlens.storage.repositories.indicators import IndicatorRepository
from threatlens.storage.repositories.threat_actors import ThreatActorRepository

logger = logging.getLogger("threatlens.query.dashboard")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DashboardService:
    """Compute the dashboard summary for a time range.

    Args:
        db: Store to read from.
        clock: Returns the current time; the cutoff is measured from it.
    """

    def __init__(self, db: DatabaseBackend, clock: Callable[[], datetime] = _utcnow) -> None:
        self._indicators = IndicatorRepository(db)
        self._campaigns = CampaignRepository(db)
        self._actors = ThreatActorRepository(db)
        self._clock = clock

    async def get_summary(self, time_range: str | TimeRange | None = None) -> DashboardSummary:
        """Raises :class:`WrongParametersError` for an unknown *time_range*."""
        tr = parse_time_range(time_range)
        cutoff = cutoff_timestamp(self._clock(), TIME_RANGE_HOURS[tr])

        new_by_type = await self._indicators.count_by_type(first_seen_since=cutoff)
        active = await self._campaigns.count_active_since(cutoff)
        top_actors = await self._actors.top_by_indicator_count(TOP_THREAT_ACTORS_LIMIT)
        distribution = await self._indicators.count_by_type()

        logger.debug("Dashboard summary computed for %s (cutoff %s)", tr, cutoff)

        return DashboardSummary(
            time_range=tr,
            new_indicators=TypeCounts.from_mapping(new_by_type),
            active_campaigns=active,
            top_threat_actors=[ThreatActorRanking(**r) for r in top_actors],
            indicator_distribution=TypeCounts.from_mapping(distribution),
        )
