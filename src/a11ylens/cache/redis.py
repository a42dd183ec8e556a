# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Redis cache backend, shared by every API worker."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from redis.exceptions import LockError, RedisError

from a11ylens.cache.base import CacheBackend
from a11ylens.core.exceptions import CacheError

logger = logging.getLogger("a11ylens.cache.redis")

_KEY_PREFIX = "a11ylens:cache:"
_LOCK_PREFIX = "a11ylens:lock:"


class RedisCacheBackend(CacheBackend):
    """Redis-backed cache using the ``redis-py`` async client.

    Member sets are sorted sets scored by the time a member was first
    added.  Locks are ``redis-py`` locks, so every worker pointed at the
    same Redis shares them.

    Args:
        redis_url: Redis connection URL (e.g. ``redis://localhost:6379/0``).
        client: Pre-built client, mainly for tests.
        lock_timeout: Seconds before a held lock expires on its own.
        lock_wait: Seconds to wait for a lock before giving up.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        *,
        client: aioredis.Redis | None = None,
        lock_timeout: float = 30.0,
        lock_wait: float = 10.0,
    ) -> None:
        self._client: aioredis.Redis = client or aioredis.from_url(
            redis_url, decode_responses=True
        )
        self._lock_timeout = lock_timeout
        self._lock_wait = lock_wait

    # ------------------------------------------------------------------
    # CacheBackend interface
    # ------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        result = await self._client.get(self._prefixed(key))
        return str(result) if result is not None else None

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        if ttl is not None:
            await self._client.setex(self._prefixed(key), ttl, value)
        else:
            await self._client.set(self._prefixed(key), value)

    async def delete(self, key: str) -> bool:
        result = await self._client.delete(self._prefixed(key))
        return bool(result)

    async def exists(self, key: str) -> bool:
        result = await self._client.exists(self._prefixed(key))
        return bool(result)

    async def add_member(self, key: str, member: str) -> bool:
        added = await self._client.zadd(self._prefixed(key), {member: time.time()}, nx=True)
        return bool(added)

    async def remove_member(self, key: str, member: str) -> bool:
        removed = await self._client.zrem(self._prefixed(key), member)
        return bool(removed)

    async def members(self, key: str) -> list[str]:
        result = await self._client.zrange(self._prefixed(key), 0, -1)
        return [str(member) for member in result]

    @asynccontextmanager
    async def lock(self, name: str) -> AsyncIterator[None]:
        lock = self._client.lock(
            f"{_LOCK_PREFIX}{name}",
            timeout=self._lock_timeout,
            blocking_timeout=self._lock_wait,
        )
        try:
            acquired = await lock.acquire()
        except RedisError as exc:
            raise CacheError(f"Could not take cache lock {name!r}") from exc
        if not acquired:
            raise CacheError(f"Timed out waiting for cache lock {name!r}")
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError:
                logger.warning("Cache lock %r expired before it was released", name)

    async def clear(self) -> int:
        """Delete all keys with the a11ylens prefix.

        Uses SCAN to avoid blocking Redis with a KEYS command.
        """
        count = 0
        async for key in self._client.scan_iter(match=f"{_KEY_PREFIX}*"):
            await self._client.delete(key)
            count += 1
        logger.debug("Removed %d prefixed keys from redis", count)
        return count

    async def size(self) -> int:
        count = 0
        async for _key in self._client.scan_iter(match=f"{_KEY_PREFIX}*"):
            count += 1
        return count

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _prefixed(key: str) -> str:
        return f"{_KEY_PREFIX}{key}"
