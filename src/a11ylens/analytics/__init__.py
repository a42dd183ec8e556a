# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard analytics: aggregate folding, time windows and statistics."""

from a11ylens.analytics.aggregator import SnapshotAggregator
from a11ylens.analytics.statistics import StatisticsEngine
from a11ylens.analytics.timeframe import TimeWindow, resolve_timeframe

__all__ = [
    "SnapshotAggregator",
    "StatisticsEngine",
    "TimeWindow",
    "resolve_timeframe",
]
