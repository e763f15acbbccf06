# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Indicator detail and indicator search queries."""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from threatlens.core.constants import (
    ACTIVE_CAMPAIGN_STATUS,
    DEFAULT_PAGE,
    DEFAULT_SEARCH_LIMIT,
    RELATED_INDICATORS_LIMIT,
)
from threatlens.core.exceptions import NotFoundError
from threatlens.models.indicator import (
    IndicatorDetail,
    IndicatorFilters,
    IndicatorSearchPage,
    IndicatorSearchResult,
    LinkedCampaign,
    LinkedThreatActor,
    RelatedIndicator,
)
from threatlens.query.validation import validate_pagination
from threatlens.storage.backend import DatabaseBackend
from threatlens.storage.repositories.indicators import IndicatorRepository

logger = logging.getLogger("threatlens.query.indicators")


def decode_tags(raw: Any) -> list[str]:
    """Decode the stored ``tags`` column into a list of strings.

    Accepts a JSON array or a comma-separated string; anything else
    yields an empty list.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return [str(t) for t in raw]
    if not isinstance(raw, str):
        return []
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        return [t.strip() for t in raw.split(",") if t.strip()]
    if isinstance(decoded, list):
        return [str(t) for t in decoded]
    return []


class IndicatorQueryService:
    """Answer indicator lookups against a :class:`DatabaseBackend`."""

    def __init__(self, db: DatabaseBackend) -> None:
        self._indicators = IndicatorRepository(db)

    async def get_detail(self, indicator_id: str) -> IndicatorDetail:
        """Return the indicator with its actors, campaigns, and related indicators.

        Raises:
            NotFoundError: If no indicator has *indicator_id*.
        """
        row = await self._indicators.get(indicator_id)
        if row is None:
            raise NotFoundError("Indicator not found", {"id": indicator_id})

        actor_rows = await self._indicators.threat_actors_for(indicator_id)
        campaign_rows = await self._indicators.campaigns_for(indicator_id)
        related_rows = await self._indicators.related(indicator_id, RELATED_INDICATORS_LIMIT)

        return IndicatorDetail(
            id=row["id"],
            type=row["type"],
            value=row["value"],
            confidence=row.get("confidence"),
            first_seen=row.get("first_seen"),
            last_seen=row.get("last_seen"),
            tags=decode_tags(row.get("tags")),
            threat_actors=[LinkedThreatActor(**r) for r in actor_rows],
            campaigns=[
                LinkedCampaign(
                    id=r["id"],
                    name=r["name"],
                    status=r["status"],
                    active=r["status"] == ACTIVE_CAMPAIGN_STATUS,
                    last_observed=r.get("last_observed"),
                )
                for r in campaign_rows
            ],
            related_indicators=[RelatedIndicator(**r) for r in related_rows],
        )

    async def search(
        self,
        filters: IndicatorFilters | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> IndicatorSearchPage:
        """Return one page of matching indicators with per-row link counts.

        Raises:
            WrongParametersError: If *page* or *limit* is below 1.
        """
        page, limit = validate_pagination(page, limit)
        filters = filters or IndicatorFilters()
        offset = (page - 1) * limit

        total = await self._indicators.count(filters)
        # Pages past the end are empty; their offset may not fit a SQLite integer.
        rows = await self._indicators.search(filters, limit, offset) if offset < total else []

        ids = [r["id"] for r in rows]
        campaign_counts = await self._indicators.campaign_counts(ids)
        actor_counts = await self._indicators.threat_actor_counts(ids)

        data = [
            IndicatorSearchResult(
                **r,
                campaign_count=campaign_counts.get(r["id"], 0),
                threat_actor_count=actor_counts.get(r["id"], 0),
            )
            for r in rows
        ]
        logger.debug("Indicator search matched %d rows (page %d)", total, page)

        return IndicatorSearchPage(
            data=data,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )
