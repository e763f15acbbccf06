# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Campaign timeline query: day/week buckets plus a summary."""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from threatlens.core.constants import GroupBy, IndicatorType
from threatlens.core.exceptions import NotFoundError
from threatlens.models.campaign import (
    CampaignInfo,
    CampaignTimeline,
    TimelineBucket,
    TimelineIndicator,
    TimelineSummary,
)
from threatlens.models.common import TypeCounts
from threatlens.query.timestamps import parse_timestamp, utc_date, week_start
from threatlens.query.validation import parse_date_bound, parse_group_by
from threatlens.storage.backend import DatabaseBackend
from threatlens.storage.repositories.campaigns import CampaignRepository

_SECONDS_PER_DAY = 86_400


def period_key(observed_at: str, group_by: GroupBy) -> str:
    """Bucket key for an observation: its date, or the Monday of its week."""
    day = utc_date(observed_at)
    if group_by is GroupBy.WEEK:
        day = week_start(day)
    return day.isoformat()


def build_timeline(rows: list[dict[str, Any]], group_by: GroupBy) -> list[TimelineBucket]:
    """Group observation rows into buckets ordered by period."""
    buckets: dict[str, TimelineBucket] = {}
    for row in rows:
        key = period_key(row["observed_at"], group_by)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = TimelineBucket(period=key)
        bucket.indicators.append(TimelineIndicator(id=row["id"], type=row["type"]))
        kind = str(row["type"])
        if kind in TypeCounts.model_fields:
            setattr(bucket.counts, kind, getattr(bucket.counts, kind) + 1)
    return [buckets[k] for k in sorted(buckets)]


def duration_days(first_seen: str | None, last_seen: str | None) -> int:
    """Whole days (rounded up) between a campaign's first and last sighting."""
    if not first_seen or not last_seen:
        return 0
    delta = parse_timestamp(last_seen) - parse_timestamp(first_seen)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def summarize(rows: list[dict[str, Any]], campaign: dict[str, Any]) -> TimelineSummary:
    # unique_* count distinct values, not observations
    ips = {r["value"] for r in rows if r["type"] == IndicatorType.IP}
    domains = {r["value"] for r in rows if r["type"] == IndicatorType.DOMAIN}
    return TimelineSummary(
        total_indicators=len(rows),
        unique_ips=len(ips),
        unique_domains=len(domains),
        duration_days=duration_days(campaign.get("first_seen"), campaign.get("last_seen")),
    )


class CampaignTimelineService:
    def __init__(self, db: DatabaseBackend) -> None:
        self._campaigns = CampaignRepository(db)

    async def get_timeline(
        self,
        campaign_id: str,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
        group_by: str | GroupBy | None = None,
    ) -> CampaignTimeline:
        """Return the campaign's observations bucketed by day or week.

        Raises:
            WrongParametersError: On an unknown *group_by* or unparseable dates.
            NotFoundError: If no campaign has *campaign_id*.
        """
        grouping = parse_group_by(group_by)
        start = parse_date_bound("start_date", start_date)
        end = parse_date_bound("end_date", end_date)

        campaign = await self._campaigns.get(campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign not found", {"id": campaign_id})

        rows = await self._campaigns.observations(campaign_id, start, end)

        return CampaignTimeline(
            campaign=CampaignInfo(**campaign),
            timeline=build_timeline(rows, grouping),
            summary=summarize(rows, campaign),
        )
