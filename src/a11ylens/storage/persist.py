# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Write one scan to the durable log and the report summaries atomically."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import aiosqlite

from a11ylens.core.exceptions import StorageError
from a11ylens.models.snapshot import ImpactCounts
from a11ylens.models.violation import RawViolation
from a11ylens.storage.repositories.reports import ReportRepository
from a11ylens.storage.repositories.violations import ViolationLogRepository

logger = logging.getLogger("a11ylens.storage.persist")


async def persist_scan(
    db: aiosqlite.Connection,
    url: str,
    violations: Sequence[RawViolation],
    counts: ImpactCounts,
    timestamp: int,
    *,
    title: str | None = None,
) -> int:
    """Replace the log rows for *url* and upsert its summary in one transaction.

    Returns the number of violation rows written.  On failure the
    transaction is rolled back and :class:`StorageError` is raised.
    """
    try:
        inserted = await ViolationLogRepository(db).replace_for_url(
            url, violations, timestamp, commit=False
        )
        await ReportRepository(db).upsert(
            url, counts, timestamp, title=title, commit=False
        )
        await db.commit()
    except Exception as exc:
        await db.rollback()
        raise StorageError(f"Failed to persist scan for {url}: {exc}") from exc

    logger.debug("Persisted %d violation rows for %s", inserted, url)
    return inserted
