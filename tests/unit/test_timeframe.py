# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for timeframe resolution and bucket walking."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from a11ylens.analytics.timeframe import TimeWindow, parse_date, resolve_timeframe
from a11ylens.core.constants import BucketGranularity
from a11ylens.core.exceptions import TimeframeError

NOW = datetime(2024, 5, 10, 15, 30, tzinfo=UTC)


class TestParseDate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-05-01", date(2024, 5, 1)),
            ("2024-05-01T13:00:00", date(2024, 5, 1)),
            ("", None),
            ("   ", None),
            (None, None),
            ("yesterday", None),
            ("2024-13-01", None),
        ],
    )
    def test_parse(self, value: str | None, expected: date | None) -> None:
        assert parse_date(value) == expected


class TestCustomDay:
    def test_day_window(self) -> None:
        window = resolve_timeframe("custom", "day", "2024-05-01")
        assert window is not None
        assert window.granularity is BucketGranularity.HOURLY
        assert window.start == datetime(2024, 5, 1, 0, 0, 0, tzinfo=UTC)
        assert window.end == datetime(2024, 5, 1, 23, 59, 59, tzinfo=UTC)

    def test_day_has_24_buckets(self) -> None:
        window = resolve_timeframe("custom", "day", "2024-05-01")
        assert window is not None
        buckets = list(window.bucket_starts())
        assert len(buckets) == 24
        assert buckets[0] == window.start_epoch
        assert buckets[1] - buckets[0] == 3600

    def test_missing_date(self) -> None:
        assert resolve_timeframe("custom", "day", None) is None
        assert resolve_timeframe("custom", "day", "") is None

    def test_unparsable_date(self) -> None:
        assert resolve_timeframe("custom", "day", "not-a-date") is None

    def test_unknown_view_by(self) -> None:
        assert resolve_timeframe("custom", "month", "2024-05-01") is None
        assert resolve_timeframe("custom", None) is None


class TestCustomWeek:
    def test_week_window(self) -> None:
        window = resolve_timeframe("custom", "week", start_date="2024-05-01", end_date="2024-05-07")
        assert window is not None
        assert window.granularity is BucketGranularity.DAILY
        assert window.start == datetime(2024, 5, 1, tzinfo=UTC)
        assert window.end == datetime(2024, 5, 7, 23, 59, 59, tzinfo=UTC)
        assert len(list(window.bucket_starts())) == 7

    def test_missing_bound(self) -> None:
        assert resolve_timeframe("custom", "week", start_date="2024-05-01") is None
        assert resolve_timeframe("custom", "week", end_date="2024-05-01") is None

    def test_end_before_start(self) -> None:
        with pytest.raises(TimeframeError):
            resolve_timeframe("custom", "week", start_date="2024-05-07", end_date="2024-05-01")

    def test_span_too_long(self) -> None:
        with pytest.raises(TimeframeError):
            resolve_timeframe("custom", "week", start_date="2024-05-01", end_date="2024-05-08")

    def test_single_day_week(self) -> None:
        window = resolve_timeframe("custom", "week", start_date="2024-05-01", end_date="2024-05-01")
        assert window is not None
        assert len(list(window.bucket_starts())) == 1


class TestRelativeDays:
    def test_n_days(self) -> None:
        window = resolve_timeframe("7", now=NOW)
        assert window is not None
        assert window.granularity is BucketGranularity.DAILY
        assert window.start == datetime(2024, 5, 3, tzinfo=UTC)
        assert window.end == datetime(2024, 5, 10, 23, 59, 59, tzinfo=UTC)
        assert len(list(window.bucket_starts())) == 8

    def test_integer_timeframe(self) -> None:
        window = resolve_timeframe(0, now=NOW)
        assert window is not None
        assert window.start == datetime(2024, 5, 10, tzinfo=UTC)

    def test_default_when_missing(self) -> None:
        window = resolve_timeframe(None, now=NOW, default_days=30)
        assert window is not None
        assert window.start == datetime(2024, 4, 10, tzinfo=UTC)

    def test_non_integer(self) -> None:
        assert resolve_timeframe("abc", now=NOW) is None
        assert resolve_timeframe("-3", now=NOW) is None


class TestBucketing:
    def test_hourly_bucket_of(self) -> None:
        window = resolve_timeframe("custom", "day", "2024-05-01")
        assert window is not None
        ts = int(datetime(2024, 5, 1, 13, 45, 10, tzinfo=UTC).timestamp())
        assert window.bucket_of(ts) == int(datetime(2024, 5, 1, 13, tzinfo=UTC).timestamp())

    def test_daily_bucket_in_local_zone(self) -> None:
        tz = ZoneInfo("America/New_York")
        window = resolve_timeframe("custom", "week", start_date="2024-05-01", end_date="2024-05-02", tz=tz)
        assert window is not None
        # 2024-05-02 02:00 UTC is still May 1st in New York
        ts = int(datetime(2024, 5, 2, 2, 0, tzinfo=UTC).timestamp())
        assert window.bucket_of(ts) == int(datetime(2024, 5, 1, tzinfo=tz).timestamp())

    def test_half_hour_offset_zone(self) -> None:
        tz = ZoneInfo("Asia/Kolkata")
        window = resolve_timeframe("custom", "day", "2024-05-01", tz=tz)
        assert window is not None
        starts = list(window.bucket_starts())
        assert len(starts) == 24
        ts = int(datetime(2024, 5, 1, 9, 59, tzinfo=tz).timestamp())
        assert window.bucket_of(ts) == int(datetime(2024, 5, 1, 9, 0, tzinfo=tz).timestamp())
        assert window.bucket_of(ts) in starts

    def test_window_is_frozen(self) -> None:
        window = TimeWindow(
            start=datetime(2024, 5, 1, tzinfo=UTC),
            end=datetime(2024, 5, 1, 23, 59, 59, tzinfo=UTC),
            granularity=BucketGranularity.HOURLY,
        )
        with pytest.raises(AttributeError):
            window.start = NOW  # type: ignore[misc]
