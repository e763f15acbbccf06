# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract read-only database backend interface.

Repositories and query services depend on this interface rather than on
a concrete driver, so they can be exercised against any store that
implements it.
"""

from __future__ import annotations

import abc
from typing import Any


class DatabaseBackend(abc.ABC):
    """Abstract base class for async read-only database backends."""

    # ------------------------------------------------------------------
    # Query execution
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def fetch_one(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        """Execute a query and return the first row as a dict, or ``None``."""

    @abc.abstractmethod
    async def fetch_all(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        """Execute a query and return all rows as a list of dicts."""

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def backend_name(self) -> str:
        """Return the backend identifier, e.g. ``'sqlite'``."""
