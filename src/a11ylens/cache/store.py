# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan cache store: per-URL snapshots, URL registries and aggregate counters.

The :class:`ScanCacheStore` is the primary public interface of the caching
layer.  Every piece of state lives in a :class:`CacheBackend`:

* one JSON snapshot per normalized URL (``scan_url:<md5>``),
* the ``scanned`` and ``trigger`` URL registries (member sets),
* the aggregated statistics (JSON),
* the rolling daily scan counts (JSON),
* an index of every key written (member set), used by
  :meth:`ScanCacheStore.clear_all`.

Writes hold the backend's write lock, which every store sharing the
backend sees, so the snapshot, registry and aggregate change together.  A
write that fails part way restores the previous snapshot and drops the
aggregate; the next read recomputes it.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, tzinfo
from typing import Any

from pydantic import ValidationError

from a11ylens.analytics.aggregator import SnapshotAggregator
from a11ylens.cache.base import CacheBackend
from a11ylens.cache.daily import DailyScanCounter
from a11ylens.cache.memory import MemoryCacheBackend
from a11ylens.cache.urls import normalize_url, snapshot_key
from a11ylens.core.constants import (
    AGGREGATED_STATS_KEY,
    DAILY_COUNT_RETENTION_DAYS,
    DAILY_SCAN_COUNTS_KEY,
    KEY_INDEX_KEY,
    SCANNED_URLS_KEY,
    TRIGGER_URLS_KEY,
    WRITE_LOCK_NAME,
    UnknownImpactPolicy,
)
from a11ylens.core.exceptions import CacheError
from a11ylens.models.snapshot import AggregatedStats, ScanSnapshot
from a11ylens.models.submission import ScanPayload
from a11ylens.models.violation import ViolationRecord

logger = logging.getLogger("a11ylens.cache.store")


class ScanCacheStore:
    """Read-optimized mirror of the latest scan for every URL.

    Args:
        backend: Key-value backend; defaults to an in-process store.
        policy: How violations with an unknown impact are counted.
        tz: Zone used to decide which calendar day a scan belongs to.
        retention_days: Days of history kept by the daily scan counter.
        clock: Returns the current epoch time in seconds.
    """

    def __init__(
        self,
        backend: CacheBackend | None = None,
        *,
        policy: UnknownImpactPolicy = UnknownImpactPolicy.MINOR,
        tz: tzinfo = UTC,
        retention_days: int = DAILY_COUNT_RETENTION_DAYS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._backend = backend or MemoryCacheBackend()
        self._policy = policy
        self._tz = tz
        self._clock = clock or time.time
        self._aggregator = SnapshotAggregator()
        self._daily = DailyScanCounter(retention_days)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    async def put(
        self,
        url: str,
        payload: ScanPayload | Mapping[str, Any],
        *,
        scanned_at: int | None = None,
    ) -> bool:
        """Replace the snapshot for *url*; ``True`` on success.

        Failures are logged and reported as ``False``; nothing is raised.
        """
        return await self.write_scan(url, payload, scanned_at=scanned_at) is not None

    async def write_scan(
        self,
        url: str,
        payload: ScanPayload | Mapping[str, Any],
        *,
        scanned_at: int | None = None,
    ) -> ScanSnapshot | None:
        """Replace the snapshot for *url* and return the snapshot stored.

        Also registers the URL as scanned, updates the aggregate and bumps
        today's scan counter.  Returns ``None`` when the payload is invalid
        or the backend fails; in that case the previous snapshot is left
        in place.
        """
        normalized = normalize_url(url)
        violation_count = 0
        try:
            if not isinstance(payload, ScanPayload):
                payload = ScanPayload.model_validate(payload)
            violation_count = len(payload.violations)

            snapshot = ScanSnapshot.build(
                normalized,
                [ViolationRecord.from_raw(v) for v in payload.violations],
                scan_timestamp=scanned_at if scanned_at is not None else int(self._clock()),
                policy=self._policy,
            )

            async with self._backend.lock(WRITE_LOCK_NAME):
                await self._replace_snapshot(snapshot)
        except Exception:
            logger.exception(
                "Failed to cache scan results for %s (%d violations)",
                normalized,
                violation_count,
            )
            return None

        logger.info(
            "Cached scan results for %s with %d violations",
            normalized,
            snapshot.violation_counts.total,
        )
        return snapshot

    async def get(self, url: str) -> ScanSnapshot | None:
        """Return the cached snapshot for *url*, or ``None`` on a miss."""
        return await self._read_snapshot(normalize_url(url))

    async def clear_one(self, url: str) -> bool:
        """Drop the snapshot for *url* and its registry/aggregate entries.

        Returns:
            ``True`` if a snapshot was cached for the URL.
        """
        normalized = normalize_url(url)
        key = snapshot_key(normalized)
        async with self._backend.lock(WRITE_LOCK_NAME):
            existed = await self._delete(key)
            await self._remove_member(KEY_INDEX_KEY, key)
            await self._remove_member(SCANNED_URLS_KEY, normalized)
            await self._update_stats(normalized, None)
        logger.info("Cleared cache for URL: %s", normalized)
        return existed

    async def clear_all(self) -> int:
        """Remove every key this store has written.

        Returns:
            Number of keys removed (the key index itself not included).
        """
        async with self._backend.lock(WRITE_LOCK_NAME):
            keys = await self._members(KEY_INDEX_KEY)
            removed = 0
            for key in keys:
                if await self._delete(key):
                    removed += 1
            await self._delete(KEY_INDEX_KEY)
        logger.info("Cleared all scan cache data: %d keys removed", removed)
        return removed

    # ------------------------------------------------------------------
    # URL registries
    # ------------------------------------------------------------------

    async def record_trigger(self, url: str) -> str:
        """Remember that *url* exposes a scan-trigger control."""
        normalized = normalize_url(url)
        async with self._backend.lock(WRITE_LOCK_NAME):
            await self._registry_add(TRIGGER_URLS_KEY, normalized)
        return normalized

    async def scanned_urls(self) -> list[str]:
        """URLs with a cached snapshot, in first-scanned order."""
        return await self._members(SCANNED_URLS_KEY)

    async def trigger_urls(self) -> list[str]:
        """URLs known to expose a scan-trigger control."""
        return await self._members(TRIGGER_URLS_KEY)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def get_stats(self) -> AggregatedStats:
        """Return the aggregate, computing and caching it when absent."""
        cached = await self._read_stats()
        if cached is not None:
            return cached
        return await self.rebuild_stats()

    async def rebuild_stats(self) -> AggregatedStats:
        """Recompute the aggregate from every snapshot and cache it."""
        async with self._backend.lock(WRITE_LOCK_NAME):
            stats = await self._recompute()
            await self._write(AGGREGATED_STATS_KEY, stats.model_dump_json())
        return stats

    async def detailed_stats(self) -> dict[str, ScanSnapshot]:
        """Snapshots for every scanned URL, keyed by URL; misses are skipped."""
        detailed: dict[str, ScanSnapshot] = {}
        for url in await self.scanned_urls():
            snapshot = await self._read_snapshot(url)
            if snapshot is not None:
                detailed[url] = snapshot
        return detailed

    async def daily_scan_counts(self) -> dict[str, int]:
        """Scan submissions per day over the retention window."""
        raw = await self._read(DAILY_SCAN_COUNTS_KEY)
        if raw is None:
            return {}
        return {str(k): int(v) for k, v in json.loads(raw).items()}

    @property
    def backend(self) -> CacheBackend:
        """Return the underlying cache backend."""
        return self._backend

    async def close(self) -> None:
        """Release resources held by the backend."""
        await self._backend.close()

    # ------------------------------------------------------------------
    # Internal: the snapshot write (caller holds the write lock)
    # ------------------------------------------------------------------

    async def _replace_snapshot(self, snapshot: ScanSnapshot) -> None:
        key = snapshot_key(snapshot.url)
        previous = await self._read(key)
        registered = False
        try:
            await self._write(key, snapshot.model_dump_json())
            registered = await self._registry_add(SCANNED_URLS_KEY, snapshot.url)
            await self._update_stats(snapshot.url, snapshot)
            await self._record_daily_event()
        except Exception:
            await self._roll_back(key, previous, snapshot.url if registered else None)
            raise

    async def _roll_back(self, key: str, previous: str | None, registered_url: str | None) -> None:
        try:
            if previous is None:
                await self._delete(key)
            else:
                await self._set(key, previous)
            if registered_url is not None:
                await self._remove_member(SCANNED_URLS_KEY, registered_url)
        except CacheError:
            logger.warning("Could not restore %s after a failed write", key, exc_info=True)
        try:
            await self._delete(AGGREGATED_STATS_KEY)
        except CacheError:
            logger.warning(
                "Could not drop the aggregate after a failed write; run a rebuild",
                exc_info=True,
            )

    # ------------------------------------------------------------------
    # Internal: aggregate maintenance (caller holds the write lock)
    # ------------------------------------------------------------------

    async def _update_stats(self, url: str, snapshot: ScanSnapshot | None) -> None:
        current = await self._read_stats()
        if current is None or not await self._covers_live_snapshots(current, url):
            stats = await self._recompute()
        else:
            new_counts = snapshot.violation_counts if snapshot is not None else None
            stats = self._aggregator.apply(current, url, new_counts)
        await self._write(AGGREGATED_STATS_KEY, stats.model_dump_json())

    async def _covers_live_snapshots(self, stats: AggregatedStats, url: str) -> bool:
        """``True`` if *stats* counts exactly the live snapshots other than *url*."""
        live: set[str] = set()
        for other in await self.scanned_urls():
            if other != url and await self._exists(snapshot_key(other)):
                live.add(other)
        counted = set(stats.by_url) - {url}
        if counted != live:
            logger.info(
                "Aggregate out of step with %d live snapshots; recomputing", len(live)
            )
            return False
        return True

    async def _recompute(self) -> AggregatedStats:
        urls = await self.scanned_urls()
        snapshots = [await self._read_snapshot(url) for url in urls]
        return self._aggregator.recompute(snapshots)

    async def _record_daily_event(self) -> None:
        today = datetime.fromtimestamp(self._clock(), self._tz).date()
        counts = await self.daily_scan_counts()
        updated = self._daily.record(counts, today)
        await self._write(DAILY_SCAN_COUNTS_KEY, json.dumps(updated))

    async def _registry_add(self, registry_key: str, url: str) -> bool:
        added = await self._add_member(registry_key, url)
        await self._add_member(KEY_INDEX_KEY, registry_key)
        return added

    # ------------------------------------------------------------------
    # Internal: typed reads
    # ------------------------------------------------------------------

    async def _read_snapshot(self, normalized_url: str) -> ScanSnapshot | None:
        raw = await self._read(snapshot_key(normalized_url))
        if raw is None:
            return None
        try:
            return ScanSnapshot.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable snapshot for %s", normalized_url)
            return None

    async def _read_stats(self) -> AggregatedStats | None:
        raw = await self._read(AGGREGATED_STATS_KEY)
        if raw is None:
            return None
        try:
            return AggregatedStats.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable aggregate; it will be recomputed")
            return None

    # ------------------------------------------------------------------
    # Internal: backend access
    # ------------------------------------------------------------------

    async def _write(self, key: str, value: str) -> None:
        await self._set(key, value)
        await self._add_member(KEY_INDEX_KEY, key)

    async def _read(self, key: str) -> str | None:
        try:
            return await self._backend.get(key)
        except Exception as exc:
            raise CacheError(f"Cache read failed for key {key}") from exc

    async def _exists(self, key: str) -> bool:
        try:
            return await self._backend.exists(key)
        except Exception as exc:
            raise CacheError(f"Cache lookup failed for key {key}") from exc

    async def _set(self, key: str, value: str) -> None:
        try:
            await self._backend.set(key, value)
        except Exception as exc:
            raise CacheError(f"Cache write failed for key {key}") from exc

    async def _delete(self, key: str) -> bool:
        try:
            return await self._backend.delete(key)
        except Exception as exc:
            raise CacheError(f"Cache delete failed for key {key}") from exc

    async def _members(self, key: str) -> list[str]:
        try:
            return await self._backend.members(key)
        except Exception as exc:
            raise CacheError(f"Cache read failed for set {key}") from exc

    async def _add_member(self, key: str, member: str) -> bool:
        try:
            return await self._backend.add_member(key, member)
        except Exception as exc:
            raise CacheError(f"Cache write failed for set {key}") from exc

    async def _remove_member(self, key: str, member: str) -> bool:
        try:
            return await self._backend.remove_member(key, member)
        except Exception as exc:
            raise CacheError(f"Cache write failed for set {key}") from exc
