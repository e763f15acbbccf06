# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite implementation of the abstract :class:`DatabaseBackend`."""

from __future__ import annotations

from typing import Any

import aiosqlite

from threatlens.storage.backend import DatabaseBackend


class SQLiteBackend(DatabaseBackend):
    """Async SQLite backend backed by an :class:`aiosqlite.Connection`."""

    def __init__(self, connection: aiosqlite.Connection) -> None:
        self._conn = connection

    async def fetch_one(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        async with self._conn.execute(query, params or ()) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return None
        return dict(row)

    async def fetch_all(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        async with self._conn.execute(query, params or ()) as cursor:
            rows = await cursor.fetchall()
        return [dict(r) for r in rows]

    async def close(self) -> None:
        await self._conn.close()

    @property
    def backend_name(self) -> str:
        return "sqlite"
