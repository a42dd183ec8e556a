# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the statistics engine over the durable violation log."""

from __future__ import annotations

from datetime import UTC, datetime

from a11ylens.analytics.statistics import StatisticsEngine
from a11ylens.analytics.timeframe import resolve_timeframe
from a11ylens.models import RawViolation
from a11ylens.storage.repositories.violations import ViolationLogRepository
from tests.helpers import NOON_2024_05_01, FakeClock, violation


def _ts(*args: int) -> int:
    return int(datetime(*args, tzinfo=UTC).timestamp())


def _raws(*items: tuple[str, str, str]) -> list[RawViolation]:
    return [RawViolation.model_validate(violation(r, imp, desc)) for r, imp, desc in items]


async def _log_custom_day(db) -> None:
    repo = ViolationLogRepository(db)
    await repo.append(
        "https://site/home",
        _raws(("color-contrast", "serious", "Contrast"), ("image-alt", "critical", "Alt text")),
        _ts(2024, 5, 1, 10, 15),
    )
    await repo.append(
        "https://site/about",
        _raws(("color-contrast", "serious", "Contrast")),
        _ts(2024, 5, 1, 14, 0),
    )
    # Outside the day
    await repo.append(
        "https://site/old",
        _raws(("label", "minor", "Labels")),
        _ts(2024, 4, 30, 23, 59, 59),
    )


class TestEmptyPayload:
    async def test_none_window(self, db) -> None:
        payload = await StatisticsEngine(db).query(None)
        assert payload == {"summary": {}, "chart": {"data": []}, "top_issues": []}


class TestCustomDayQuery:
    async def test_chart_has_24_zero_filled_points(self, db) -> None:
        await _log_custom_day(db)
        window = resolve_timeframe("custom", "day", "2024-05-01")

        payload = await StatisticsEngine(db).query(window)

        data = payload["chart"]["data"]
        assert len(data) == 24
        assert sum(point["y"] for point in data) == 3
        assert data[0]["x"] == _ts(2024, 5, 1) * 1000
        assert data[10] == {"x": _ts(2024, 5, 1, 10) * 1000, "y": 2}
        assert data[14]["y"] == 1
        assert data[23]["y"] == 0

    async def test_summary(self, db) -> None:
        await _log_custom_day(db)
        window = resolve_timeframe("custom", "day", "2024-05-01")

        summary = (await StatisticsEngine(db).query(window))["summary"]

        assert summary["total_violations"] == 3
        assert summary["critical_violations"] == 1
        assert summary["serious_violations"] == 2
        assert summary["moderate_violations"] == 0
        assert summary["minor_violations"] == 0
        assert summary["high_priority"] == 3
        assert summary["unique_pages"] == 2

    async def test_top_issues(self, db) -> None:
        await _log_custom_day(db)
        window = resolve_timeframe("custom", "day", "2024-05-01")

        top = (await StatisticsEngine(db).query(window))["top_issues"]

        assert top == [
            {"description": "Contrast", "issue_count": 2},
            {"description": "Alt text", "issue_count": 1},
        ]

    async def test_top_issues_limit(self, db) -> None:
        repo = ViolationLogRepository(db)
        raws = _raws(*[(f"r{i}", "minor", f"Issue {i}") for i in range(8)])
        await repo.append("https://site/x", raws, _ts(2024, 5, 1, 9))
        window = resolve_timeframe("custom", "day", "2024-05-01")

        top = (await StatisticsEngine(db, top_limit=5).query(window))["top_issues"]
        assert len(top) == 5

    async def test_empty_day_still_zero_filled(self, db) -> None:
        window = resolve_timeframe("custom", "day", "2024-05-01")
        payload = await StatisticsEngine(db).query(window)
        assert len(payload["chart"]["data"]) == 24
        assert all(point["y"] == 0 for point in payload["chart"]["data"])
        assert payload["summary"]["total_violations"] == 0
        assert payload["top_issues"] == []


class TestWeekQuery:
    async def test_daily_buckets(self, db) -> None:
        await _log_custom_day(db)
        window = resolve_timeframe("custom", "week", start_date="2024-04-29", end_date="2024-05-02")

        data = (await StatisticsEngine(db).query(window))["chart"]["data"]

        assert [p["x"] for p in data] == [_ts(2024, 4, d) * 1000 for d in (29, 30)] + [
            _ts(2024, 5, d) * 1000 for d in (1, 2)
        ]
        assert [p["y"] for p in data] == [0, 1, 3, 0]


class TestRecentScanCounts:
    async def test_distinct_timestamps_per_day(self, db) -> None:
        repo = ViolationLogRepository(db)
        # Two scans on May 1st (one with three rows), one on April 28th
        await repo.append("https://site/a", _raws(*[("x", "minor", "X")] * 3), _ts(2024, 5, 1, 8))
        await repo.append("https://site/b", _raws(("y", "minor", "Y")), _ts(2024, 5, 1, 9))
        await repo.append("https://site/c", _raws(("z", "minor", "Z")), _ts(2024, 4, 28, 9))
        # Older than the seven-day window
        await repo.append("https://site/d", _raws(("w", "minor", "W")), _ts(2024, 4, 20, 9))

        engine = StatisticsEngine(db, clock=FakeClock(NOON_2024_05_01))
        series = await engine.recent_scan_counts()

        assert [p["date"] for p in series] == [
            "2024-04-25", "2024-04-26", "2024-04-27", "2024-04-28",
            "2024-04-29", "2024-04-30", "2024-05-01",
        ]
        assert [p["count"] for p in series] == [0, 0, 0, 1, 0, 0, 2]
        assert series[-1]["label"] == "May 1"
