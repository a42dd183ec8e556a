# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, impact weights, and cache key constants."""

from enum import StrEnum


class Impact(StrEnum):
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"
    UNKNOWN = "unknown"


class UnknownImpactPolicy(StrEnum):
    """How violations without a recognized impact are counted."""

    MINOR = "minor"
    IGNORE = "ignore"


class BucketGranularity(StrEnum):
    HOURLY = "hourly"
    DAILY = "daily"


class ViewBy(StrEnum):
    DAY = "day"
    WEEK = "week"


# Impacts that carry their own counter.
COUNTED_IMPACTS: tuple[Impact, ...] = (
    Impact.CRITICAL,
    Impact.SERIOUS,
    Impact.MODERATE,
    Impact.MINOR,
)

HIGH_PRIORITY_IMPACTS: tuple[Impact, ...] = (Impact.CRITICAL, Impact.SERIOUS)

# Sort weight stored alongside each durable-log row (lower is more severe).
IMPACT_WEIGHTS: dict[Impact, int] = {
    Impact.CRITICAL: 1,
    Impact.SERIOUS: 2,
    Impact.MODERATE: 3,
    Impact.MINOR: 4,
    Impact.UNKNOWN: 4,
}

# Cache keys
SNAPSHOT_KEY_PREFIX = "scan_url:"
SCANNED_URLS_KEY = "scanned_urls"
TRIGGER_URLS_KEY = "scan_trigger_urls"
AGGREGATED_STATS_KEY = "aggregated_stats"
DAILY_SCAN_COUNTS_KEY = "daily_scan_counts"
KEY_INDEX_KEY = "key_index"
WRITE_LOCK_NAME = "write"

DAILY_COUNT_RETENTION_DAYS = 30
RECENT_SCAN_DAYS = 7
MAX_WEEK_SPAN_DAYS = 7
TOP_ISSUES_LIMIT = 5
