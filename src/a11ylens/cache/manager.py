# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Process-wide :class:`ScanCacheStore` built from application settings."""

from __future__ import annotations

import logging

from a11ylens.cache.base import CacheBackend
from a11ylens.cache.memory import MemoryCacheBackend
from a11ylens.cache.store import ScanCacheStore
from a11ylens.core.exceptions import ConfigurationError

logger = logging.getLogger("a11ylens.cache.manager")

# Module-level singleton
_store: ScanCacheStore | None = None


def _create_backend_from_settings() -> CacheBackend:
    """Instantiate the cache backend based on application settings."""
    from a11ylens.core.config import get_settings

    settings = get_settings()
    backend_type = settings.cache_backend.lower()

    if backend_type == "memory":
        return MemoryCacheBackend()

    if backend_type == "redis":
        from a11ylens.cache.redis import RedisCacheBackend

        logger.info("Using redis cache backend")
        return RedisCacheBackend(
            redis_url=settings.redis_url,
            lock_timeout=settings.redis_lock_timeout,
            lock_wait=settings.redis_lock_wait,
        )

    msg = f"Unknown cache backend: {settings.cache_backend!r}. Expected 'memory' or 'redis'."
    raise ConfigurationError(msg)


def get_scan_cache() -> ScanCacheStore:
    """Return the module-level :class:`ScanCacheStore` singleton.

    Creates a new instance on first call using application settings.
    """
    global _store
    if _store is None:
        from a11ylens.core.config import get_settings

        settings = get_settings()
        _store = ScanCacheStore(
            backend=_create_backend_from_settings(),
            policy=settings.unknown_impact_policy,
            tz=settings.tzinfo,
            retention_days=settings.daily_count_retention_days,
        )
    return _store


def reset_scan_cache() -> None:
    """Reset the singleton (useful for testing)."""
    global _store
    _store = None
