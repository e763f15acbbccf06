# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for campaign records."""

from __future__ import annotations

from datetime import date
from typing import Any

from threatlens.core.constants import ACTIVE_CAMPAIGN_STATUS
from threatlens.storage.backend import DatabaseBackend


class CampaignRepository:
    """Query campaigns and their indicator observations."""

    def __init__(self, db: DatabaseBackend) -> None:
        self._db = db

    async def get(self, campaign_id: str) -> dict[str, Any] | None:
        """Retrieve a campaign by ID."""
        return await self._db.fetch_one(
            "SELECT id, name, description, first_seen, last_seen, status"
            " FROM campaigns WHERE id = ?",
            (campaign_id,),
        )

    async def observations(
        self,
        campaign_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[dict[str, Any]]:
        """Indicator observations for a campaign in ascending time order.

        Bounds compare the observation's UTC calendar date and are inclusive.
        """
        query = """
            SELECT i.id, i.type, i.value, ci.observed_at
            FROM campaign_indicators ci
            JOIN indicators i ON i.id = ci.indicator_id
            WHERE ci.campaign_id = ?
        """
        params: list[Any] = [campaign_id]

        if start_date is not None:
            query += " AND date(ci.observed_at) >= ?"
            params.append(start_date.isoformat())

        if end_date is not None:
            query += " AND date(ci.observed_at) <= ?"
            params.append(end_date.isoformat())

        query += " ORDER BY ci.observed_at ASC, i.id"
        return await self._db.fetch_all(query, tuple(params))

    async def count_active_since(self, cutoff: str) -> int:
        """Count active campaigns last seen at or after *cutoff*."""
        row = await self._db.fetch_one(
            "SELECT COUNT(*) AS count FROM campaigns WHERE status = ? AND last_seen >= ?",
            (ACTIVE_CAMPAIGN_STATUS, cutoff),
        )
        return int(row["count"]) if row else 0
