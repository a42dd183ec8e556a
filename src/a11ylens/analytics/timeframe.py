# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Resolve dashboard timeframe parameters into a bucketed time window."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from a11ylens.core.constants import MAX_WEEK_SPAN_DAYS, BucketGranularity, ViewBy
from a11ylens.core.exceptions import TimeframeError

CUSTOM_TIMEFRAME = "custom"
DEFAULT_TIMEFRAME_DAYS = 30

_HOUR = 3600
_DAY_END = time(23, 59, 59)


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """An inclusive ``[start, end]`` range split into hourly or daily buckets.

    Both bounds are timezone-aware; buckets follow the wall clock of
    ``start.tzinfo``.
    """

    start: datetime
    end: datetime
    granularity: BucketGranularity

    @property
    def tz(self) -> tzinfo:
        return self.start.tzinfo or UTC

    @property
    def start_epoch(self) -> int:
        return int(self.start.timestamp())

    @property
    def end_epoch(self) -> int:
        return int(self.end.timestamp())

    def bucket_starts(self) -> Iterator[int]:
        """Yield the epoch second at which each bucket opens, in order."""
        if self.granularity is BucketGranularity.HOURLY:
            current = self.start_epoch
            while current <= self.end_epoch:
                yield current
                current += _HOUR
            return

        day = self.start.date()
        last = self.end.date()
        while day <= last:
            yield int(datetime.combine(day, time.min, tzinfo=self.tz).timestamp())
            day += timedelta(days=1)

    def bucket_of(self, timestamp: int) -> int:
        """Epoch second of the bucket that *timestamp* falls in."""
        local = datetime.fromtimestamp(timestamp, self.tz)
        if self.granularity is BucketGranularity.HOURLY:
            offset = int(local.utcoffset().total_seconds()) if local.utcoffset() else 0
            return timestamp - ((timestamp + offset) % _HOUR)
        return int(datetime.combine(local.date(), time.min, tzinfo=self.tz).timestamp())


def parse_date(value: str | None) -> date | None:
    """Parse an ISO date (or datetime) string; ``None`` when empty or invalid."""
    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _day_start(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def _day_end(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, _DAY_END, tzinfo=tz)


def resolve_timeframe(
    timeframe: str | int | None = None,
    view_by: str | None = None,
    date_str: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    *,
    now: datetime | None = None,
    tz: tzinfo = UTC,
    max_week_span_days: int = MAX_WEEK_SPAN_DAYS,
    default_days: int = DEFAULT_TIMEFRAME_DAYS,
) -> TimeWindow | None:
    """Turn request parameters into a :class:`TimeWindow`.

    * ``timeframe="custom", view_by="day"`` covers *date_str* hour by hour.
    * ``timeframe="custom", view_by="week"`` covers *start_date* through
      *end_date* day by day.
    * Any other *timeframe* is read as a number of days back from *now*.

    Returns ``None`` when the request is incomplete or unparsable.

    Raises:
        TimeframeError: A week range ends before it starts or spans more
            than *max_week_span_days* calendar days.
    """
    if timeframe is None or (isinstance(timeframe, str) and not timeframe.strip()):
        timeframe = default_days

    if isinstance(timeframe, str) and timeframe.strip().lower() == CUSTOM_TIMEFRAME:
        return _resolve_custom(view_by, date_str, start_date, end_date, tz, max_week_span_days)

    try:
        days = int(timeframe)
    except (TypeError, ValueError):
        return None
    if days < 0:
        return None

    current = (now or datetime.now(tz)).astimezone(tz)
    start_day = (current - timedelta(days=days)).date()
    return TimeWindow(
        start=_day_start(start_day, tz),
        end=_day_end(current.date(), tz),
        granularity=BucketGranularity.DAILY,
    )


def _resolve_custom(
    view_by: str | None,
    date_str: str | None,
    start_date: str | None,
    end_date: str | None,
    tz: tzinfo,
    max_week_span_days: int,
) -> TimeWindow | None:
    if view_by == ViewBy.DAY:
        day = parse_date(date_str)
        if day is None:
            return None
        return TimeWindow(
            start=_day_start(day, tz),
            end=_day_end(day, tz),
            granularity=BucketGranularity.HOURLY,
        )

    if view_by == ViewBy.WEEK:
        first = parse_date(start_date)
        last = parse_date(end_date)
        if first is None or last is None:
            return None
        if last < first:
            raise TimeframeError(f"end_date {last} is before start_date {first}")
        span = (last - first).days + 1
        if span > max_week_span_days:
            raise TimeframeError(
                f"Week range spans {span} days; at most {max_week_span_days} allowed"
            )
        return TimeWindow(
            start=_day_start(first, tz),
            end=_day_end(last, tz),
            granularity=BucketGranularity.DAILY,
        )

    return None
