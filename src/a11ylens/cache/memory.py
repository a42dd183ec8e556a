# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-process cache backend.

The default backend; it needs no external service but is private to one
worker process.  Entries only expire when written with a TTL.
"""

from __future__ import annotations

import asyncio
import time

from a11ylens.cache.base import CacheBackend


class _Entry:
    """A cache entry with an optional expiry timestamp."""

    __slots__ = ("expires_at", "value")

    def __init__(self, value: str, expires_at: float | None) -> None:
        self.value = value
        self.expires_at = expires_at

    def is_expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() > self.expires_at


class MemoryCacheBackend(CacheBackend):
    """Dict-backed cache with optional per-entry TTL."""

    def __init__(self) -> None:
        self._store: dict[str, _Entry] = {}
        # dicts keep insertion order, so they double as ordered sets
        self._sets: dict[str, dict[str, None]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    # ------------------------------------------------------------------
    # CacheBackend interface
    # ------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired():
            del self._store[key]
            return None
        return entry.value

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        expires_at = (time.monotonic() + ttl) if ttl is not None else None
        self._store[key] = _Entry(value=value, expires_at=expires_at)

    async def delete(self, key: str) -> bool:
        removed_set = self._sets.pop(key, None) is not None
        try:
            del self._store[key]
        except KeyError:
            return removed_set
        return True

    async def exists(self, key: str) -> bool:
        return key in self._sets or await self.get(key) is not None

    async def add_member(self, key: str, member: str) -> bool:
        members = self._sets.setdefault(key, {})
        if member in members:
            return False
        members[member] = None
        return True

    async def remove_member(self, key: str, member: str) -> bool:
        members = self._sets.get(key)
        if members is None or member not in members:
            return False
        del members[member]
        if not members:
            del self._sets[key]
        return True

    async def members(self, key: str) -> list[str]:
        return list(self._sets.get(key, ()))

    def lock(self, name: str) -> asyncio.Lock:
        return self._locks.setdefault(name, asyncio.Lock())

    async def clear(self) -> int:
        count = len(self._store) + len(self._sets)
        self._store.clear()
        self._sets.clear()
        return count

    async def size(self) -> int:
        self._prune_expired()
        return len(self._store) + len(self._sets)

    async def close(self) -> None:
        self._store.clear()
        self._sets.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _prune_expired(self) -> None:
        """Remove all expired entries."""
        expired_keys = [k for k, v in self._store.items() if v.is_expired()]
        for k in expired_keys:
            del self._store[k]
