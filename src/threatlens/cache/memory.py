# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-process cache backend with per-entry expiry.

The default backend: it needs no external service, but each API worker
process holds its own copy.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable

from threatlens.cache.base import CacheBackend

_DEFAULT_MAX_SIZE = 1024


class _Entry:
    __slots__ = ("expires_at", "value")

    def __init__(self, value: str, expires_at: float | None) -> None:
        self.value = value
        self.expires_at = expires_at


class MemoryCacheBackend(CacheBackend):
    """LRU-ordered dict with TTL expiry.

    Args:
        max_size: Maximum number of entries; the least recently used
            entry is evicted beyond it.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        max_size: int = _DEFAULT_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: OrderedDict[str, _Entry] = OrderedDict()
        self._max_size = max_size
        self._clock = clock

    def _expired(self, entry: _Entry) -> bool:
        return entry.expires_at is not None and self._clock() >= entry.expires_at

    async def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._expired(entry):
            del self._store[key]
            return None
        self._store.move_to_end(key)
        return entry.value

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        expires_at = (self._clock() + ttl) if ttl is not None else None
        self._store[key] = _Entry(value=value, expires_at=expires_at)
        self._store.move_to_end(key)
        while len(self._store) > self._max_size:
            self._store.popitem(last=False)

    async def delete(self, key: str) -> bool:
        return self._store.pop(key, None) is not None

    async def clear(self) -> int:
        count = len(self._store)
        self._store.clear()
        return count

    async def size(self) -> int:
        for key in [k for k, e in self._store.items() if self._expired(e)]:
            del self._store[key]
        return len(self._store)

    async def close(self) -> None:
        self._store.clear()

    @property
    def backend_name(self) -> str:
        return "memory"
