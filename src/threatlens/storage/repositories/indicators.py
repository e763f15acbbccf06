# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for indicator records and their links."""

from __future__ import annotations

from typing import Any

from threatlens.models.indicator import IndicatorFilters
from threatlens.storage.backend import DatabaseBackend

_INDICATOR_COLUMNS = "i.id, i.type, i.value, i.confidence, i.first_seen, i.last_seen"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _placeholders(count: int) -> str:
    return ",".join("?" for _ in range(count))


class IndicatorRepository:
    """Read indicators, their campaign/actor links, and relationship edges."""

    def __init__(self, db: DatabaseBackend) -> None:
        self._db = db

    async def get(self, indicator_id: str) -> dict[str, Any] | None:
        """Retrieve an indicator by ID."""
        return await self._db.fetch_one(
            f"SELECT {_INDICATOR_COLUMNS}, i.tags FROM indicators i WHERE i.id = ?",  # noqa: S608
            (indicator_id,),
        )

    async def threat_actors_for(self, indicator_id: str) -> list[dict[str, Any]]:
        """Actors linked through any campaign the indicator was observed in.

        One row per distinct ``(id, name, confidence)``: an actor linked
        through two campaigns with different confidences appears twice.
        """
        return await self._db.fetch_all(
            """
            SELECT DISTINCT ta.id, ta.name, ac.confidence
            FROM threat_actors ta
            JOIN actor_campaigns ac ON ta.id = ac.threat_actor_id
            JOIN campaign_indicators ci ON ac.campaign_id = ci.campaign_id
            WHERE ci.indicator_id = ?
            ORDER BY ac.confidence DESC, ta.id
            """,
            (indicator_id,),
        )

    async def campaigns_for(self, indicator_id: str) -> list[dict[str, Any]]:
        """Campaigns the indicator was observed in, latest observation first."""
        return await self._db.fetch_all(
            """
            SELECT c.id, c.name, c.status, MAX(ci.observed_at) AS last_observed
            FROM campaigns c
            JOIN campaign_indicators ci ON c.id = ci.campaign_id
            WHERE ci.indicator_id = ?
            GROUP BY c.id, c.name, c.status
            ORDER BY last_observed DESC, c.id
            """,
            (indicator_id,),
        )

    async def related(self, indicator_id: str, limit: int) -> list[dict[str, Any]]:
        """Targets of outgoing relationship edges, newest edge first."""
        return await self._db.fetch_all(
            """
            SELECT i.id, i.type, i.value, ir.relationship_type AS relationship
            FROM indicator_relationships ir
            JOIN indicators i ON i.id = ir.target_indicator_id
            WHERE ir.source_indicator_id = ?
            ORDER BY ir.first_observed DESC, i.id
            LIMIT ?
            """,
            (indicator_id, limit),
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @staticmethod
    def _where(filters: IndicatorFilters) -> tuple[str, list[Any]]:
        """Build the WHERE clause shared by the page and count queries."""
        conditions: list[str] = []
        params: list[Any] = []

        if filters.type is not None:
            conditions.append("i.type = ?")
            params.append(str(filters.type))

        if filters.value:
            conditions.append("i.value LIKE ? ESCAPE '\\'")
            params.append(f"%{_escape_like(filters.value)}%")

        # With both link filters the campaign must itself belong to the actor.
        if filters.threat_actor:
            clause = (
                "EXISTS (SELECT 1 FROM campaign_indicators ci"
                " JOIN actor_campaigns ac ON ci.campaign_id = ac.campaign_id"
                " WHERE ci.indicator_id = i.id AND ac.threat_actor_id = ?"
            )
            params.append(filters.threat_actor)
            if filters.campaign:
                clause += " AND ci.campaign_id = ?"
                params.append(filters.campaign)
            conditions.append(clause + ")")
        elif filters.campaign:
            conditions.append(
                "EXISTS (SELECT 1 FROM campaign_indicators ci"
                " WHERE ci.indicator_id = i.id AND ci.campaign_id = ?)"
            )
            params.append(filters.campaign)

        if filters.first_seen_after:
            conditions.append("i.first_seen >= ?")
            params.append(filters.first_seen_after)

        if filters.last_seen_before:
            conditions.append("i.last_seen <= ?")
            params.append(filters.last_seen_before)

        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
        return where, params

    async def search(
        self, filters: IndicatorFilters, limit: int, offset: int
    ) -> list[dict[str, Any]]:
        """Return one page of indicators matching *filters*."""
        where, params = self._where(filters)
        return await self._db.fetch_all(
            f"SELECT {_INDICATOR_COLUMNS} FROM indicators i{where}"  # noqa: S608
            " ORDER BY i.last_seen DESC, i.id LIMIT ? OFFSET ?",
            (*params, limit, offset),
        )

    async def count(self, filters: IndicatorFilters) -> int:
        """Count all indicators matching *filters*, ignoring pagination."""
        where, params = self._where(filters)
        row = await self._db.fetch_one(
            f"SELECT COUNT(*) AS total FROM indicators i{where}",  # noqa: S608
            tuple(params),
        )
        return int(row["total"]) if row else 0

    async def campaign_counts(self, indicator_ids: list[str]) -> dict[str, int]:
        """Distinct campaigns per indicator, for the given ids only."""
        if not indicator_ids:
            return {}
        rows = await self._db.fetch_all(
            f"""
            SELECT indicator_id, COUNT(DISTINCT campaign_id) AS count
            FROM campaign_indicators
            WHERE indicator_id IN ({_placeholders(len(indicator_ids))})
            GROUP BY indicator_id
            """,  # noqa: S608
            tuple(indicator_ids),
        )
        return {row["indicator_id"]: int(row["count"]) for row in rows}

    async def threat_actor_counts(self, indicator_ids: list[str]) -> dict[str, int]:
        """Distinct actors reached through campaigns, for the given ids only."""
        if not indicator_ids:
            return {}
        rows = await self._db.fetch_all(
            f"""
            SELECT ci.indicator_id, COUNT(DISTINCT ac.threat_actor_id) AS count
            FROM campaign_indicators ci
            JOIN actor_campaigns ac ON ci.campaign_id = ac.campaign_id
            WHERE ci.indicator_id IN ({_placeholders(len(indicator_ids))})
            GROUP BY ci.indicator_id
            """,  # noqa: S608
            tuple(indicator_ids),
        )
        return {row["indicator_id"]: int(row["count"]) for row in rows}

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def count_by_type(self, first_seen_since: str | None = None) -> dict[str, int]:
        """Indicator counts grouped by type, optionally since a cutoff."""
        if first_seen_since is None:
            rows = await self._db.fetch_all(
                "SELECT type, COUNT(*) AS count FROM indicators GROUP BY type"
            )
        else:
            rows = await self._db.fetch_all(
                "SELECT type, COUNT(*) AS count FROM indicators"
                " WHERE first_seen >= ? GROUP BY type",
                (first_seen_since,),
            )
        return {row["type"]: int(row["count"]) for row in rows}
