# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Time-bucketed statistics over the durable violation log."""

from __future__ import annotations

import logging
import time as _time
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Any

import aiosqlite

from a11ylens.analytics.timeframe import TimeWindow
from a11ylens.core.constants import (
    COUNTED_IMPACTS,
    HIGH_PRIORITY_IMPACTS,
    RECENT_SCAN_DAYS,
    TOP_ISSUES_LIMIT,
)
from a11ylens.storage.repositories.violations import ViolationLogRepository

logger = logging.getLogger("a11ylens.analytics.statistics")


class StatisticsEngine:
    """Builds dashboard payloads (summary, chart, top issues) from the log.

    Args:
        db: Open connection holding the ``accessibility_violations`` table.
        tz: Zone whose calendar days the recent-scan series uses.
        top_limit: Number of entries in the top-issues ranking.
        clock: Returns the current epoch time in seconds.
    """

    def __init__(
        self,
        db: aiosqlite.Connection,
        *,
        tz: tzinfo = UTC,
        top_limit: int = TOP_ISSUES_LIMIT,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._repo = ViolationLogRepository(db)
        self._tz = tz
        self._top_limit = top_limit
        self._clock = clock or _time.time

    @staticmethod
    def empty_payload() -> dict[str, Any]:
        """The "no data" payload returned for incomplete requests."""
        return {"summary": {}, "chart": {"data": []}, "top_issues": []}

    async def query(self, window: TimeWindow | None) -> dict[str, Any]:
        """Summary, zero-filled chart series and top issues for *window*."""
        if window is None:
            return self.empty_payload()

        start, end = window.start_epoch, window.end_epoch
        return {
            "summary": await self.summary(start, end),
            "chart": {"data": await self.chart(window)},
            "top_issues": await self.top_issues(start, end),
        }

    async def chart(self, window: TimeWindow) -> list[dict[str, int]]:
        """One ``{x: epoch_ms, y: violations}`` point per bucket, gaps as zero."""
        by_bucket: dict[int, int] = {}
        rows = await self._repo.counts_by_timestamp(window.start_epoch, window.end_epoch)
        for timestamp, count in rows.items():
            bucket = window.bucket_of(timestamp)
            by_bucket[bucket] = by_bucket.get(bucket, 0) + count

        return [
            {"x": bucket * 1000, "y": by_bucket.get(bucket, 0)}
            for bucket in window.bucket_starts()
        ]

    async def summary(self, start: int, end: int) -> dict[str, int]:
        impacts = await self._repo.impact_counts(start, end)
        summary: dict[str, int] = {
            "total_violations": sum(impacts.values()),
            "high_priority": sum(impacts.get(str(i), 0) for i in HIGH_PRIORITY_IMPACTS),
            "unique_pages": await self._repo.count_unique_pages(start, end),
        }
        for impact in COUNTED_IMPACTS:
            summary[f"{impact}_violations"] = impacts.get(str(impact), 0)
        return summary

    async def top_issues(self, start: int, end: int) -> list[dict[str, Any]]:
        return await self._repo.top_issues(start, end, self._top_limit)

    async def recent_scan_counts(self, days: int = RECENT_SCAN_DAYS) -> list[dict[str, Any]]:
        """Distinct scans per day over the last *days* days, oldest first.

        A scan is one distinct log timestamp.  Days without scans are
        reported with a zero count.
        """
        today = datetime.fromtimestamp(self._clock(), self._tz).date()
        first = today - timedelta(days=days - 1)
        start = int(datetime.combine(first, datetime.min.time(), tzinfo=self._tz).timestamp())
        end = int(self._clock())

        per_day: dict[date, int] = {}
        for timestamp in await self._repo.distinct_timestamps(start, end):
            day = datetime.fromtimestamp(timestamp, self._tz).date()
            per_day[day] = per_day.get(day, 0) + 1

        series = []
        for offset in range(days):
            day = first + timedelta(days=offset)
            series.append(
                {
                    "date": day.isoformat(),
                    "label": f"{day:%b} {day.day}",
                    "count": per_day.get(day, 0),
                }
            )
        logger.debug("Recent scan counts over %d days: %s", days, series)
        return series
