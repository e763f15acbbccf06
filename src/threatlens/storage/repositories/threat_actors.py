# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for threat actor records."""

from __future__ import annotations

from typing import Any

from threatlens.storage.backend import DatabaseBackend


class ThreatActorRepository:
    def __init__(self, db: DatabaseBackend) -> None:
        self._db = db

    async def top_by_indicator_count(self, limit: int) -> list[dict[str, Any]]:
        """Actors ranked by distinct indicators reached through their campaigns.

        Equal counts are ordered by name, then id.
        """
        return await self._db.fetch_all(
            """
            SELECT ta.id, ta.name, COUNT(DISTINCT ci.indicator_id) AS indicator_count
            FROM threat_actors ta
            JOIN actor_campaigns ac ON ta.id = ac.threat_actor_id
            JOIN campaign_indicators ci ON ac.campaign_id = ci.campaign_id
            GROUP BY ta.id, ta.name
            ORDER BY indicator_count DESC, ta.name, ta.id
            LIMIT ?
            """,
            (limit,),
        )
