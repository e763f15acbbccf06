# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract cache backend interface with TTL support."""

from __future__ import annotations

import abc


class CacheBackend(abc.ABC):
    """Abstract base class for cache backends.

    Values are opaque strings.  Any method may raise; callers on the
    request path treat the cache as optional and absorb those failures.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the cached value, or ``None`` if absent or expired."""

    @abc.abstractmethod
    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store *value* under *key*, expiring after *ttl* seconds if given."""

    @abc.abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key; ``True`` if it existed."""

    @abc.abstractmethod
    async def clear(self) -> int:
        """Flush all keys owned by this cache and return how many were removed."""

    @abc.abstractmethod
    async def size(self) -> int:
        """Return the number of live (non-expired) entries."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release any resources held by the backend."""

    @property
    @abc.abstractmethod
    def backend_name(self) -> str:
        """Return ``'memory'`` or ``'redis'``."""
