# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Pydantic models for violations, snapshots and aggregates."""

from a11ylens.models.snapshot import AggregatedStats, ImpactCounts, ScanSnapshot
from a11ylens.models.submission import ScanPayload, ScanSubmission
from a11ylens.models.violation import RawViolation, ViolationRecord, parse_impact

__all__ = [
    "AggregatedStats",
    "ImpactCounts",
    "RawViolation",
    "ScanPayload",
    "ScanSnapshot",
    "ScanSubmission",
    "ViolationRecord",
    "parse_impact",
]
