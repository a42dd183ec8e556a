# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rolling per-day histogram of scan submissions."""

from __future__ import annotations

from datetime import date, timedelta

from a11ylens.core.constants import DAILY_COUNT_RETENTION_DAYS


class DailyScanCounter:
    """Counts scan events per calendar day over a rolling window.

    One event is one submission, however many violations it carried.
    Days older than ``today - retention_days`` are pruned on every write.
    """

    def __init__(self, retention_days: int = DAILY_COUNT_RETENTION_DAYS) -> None:
        self.retention_days = retention_days

    def record(self, counts: dict[str, int], today: date) -> dict[str, int]:
        """Return *counts* with today's bucket incremented and old days pruned."""
        updated = dict(counts)
        key = today.isoformat()
        updated[key] = updated.get(key, 0) + 1

        cutoff = (today - timedelta(days=self.retention_days)).isoformat()
        return {day: n for day, n in sorted(updated.items()) if day >= cutoff}
