# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract key-value backend for the scan cache."""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from typing import Any


class CacheBackend(abc.ABC):
    """Async string key-value store with ordered member sets and named locks.

    Scan snapshots are permanent until cleared, so backends only expire an
    entry when a caller passes an explicit *ttl*.  Member sets keep the
    order in which members were first added, and each add or remove is
    atomic on its own.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` if absent."""

    @abc.abstractmethod
    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store *value* under *key*.

        Args:
            key: Cache key.
            value: String value to store.
            ttl: Time-to-live in seconds.  ``None`` means no expiry.
        """

    @abc.abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete *key* (a value or a member set); ``True`` if it existed."""

    @abc.abstractmethod
    async def exists(self, key: str) -> bool:
        """``True`` if *key* is present and not expired."""

    @abc.abstractmethod
    async def add_member(self, key: str, member: str) -> bool:
        """Add *member* to the set at *key*; ``True`` if it was not there yet."""

    @abc.abstractmethod
    async def remove_member(self, key: str, member: str) -> bool:
        """Remove *member* from the set at *key*; ``True`` if it was there."""

    @abc.abstractmethod
    async def members(self, key: str) -> list[str]:
        """Members of the set at *key* in first-added order."""

    @abc.abstractmethod
    def lock(self, name: str) -> AbstractAsyncContextManager[Any]:
        """Exclusive lock shared by every client of this backend."""

    @abc.abstractmethod
    async def clear(self) -> int:
        """Drop every key owned by this backend and return how many."""

    @abc.abstractmethod
    async def size(self) -> int:
        """Number of live entries."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release any resources held by the backend."""
