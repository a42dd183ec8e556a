# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cached per-URL snapshots and the aggregate derived from them."""

from __future__ import annotations

import time
from collections.abc import Iterable

from pydantic import BaseModel, Field

from a11ylens.core.constants import Impact, UnknownImpactPolicy
from a11ylens.models.violation import ViolationRecord


class ImpactCounts(BaseModel):
    """Violation counts by impact, always derived from a violation list."""

    total: int = 0
    critical: int = 0
    serious: int = 0
    moderate: int = 0
    minor: int = 0

    @classmethod
    def from_violations(
        cls,
        violations: Iterable[ViolationRecord],
        policy: UnknownImpactPolicy = UnknownImpactPolicy.MINOR,
    ) -> ImpactCounts:
        counts = cls()
        for violation in violations:
            counts.total += 1
            impact = violation.impact
            if impact is Impact.UNKNOWN:
                if policy is UnknownImpactPolicy.IGNORE:
                    continue
                impact = Impact.MINOR
            setattr(counts, impact.value, getattr(counts, impact.value) + 1)
        return counts

    def combined(self, other: ImpactCounts, sign: int = 1) -> ImpactCounts:
        """Return ``self + sign * other`` field by field."""
        return ImpactCounts(
            total=self.total + sign * other.total,
            critical=self.critical + sign * other.critical,
            serious=self.serious + sign * other.serious,
            moderate=self.moderate + sign * other.moderate,
            minor=self.minor + sign * other.minor,
        )


class ScanSnapshot(BaseModel):
    """The latest scan result cached for one normalized URL."""

    url: str
    scan_timestamp: int = Field(default_factory=lambda: int(time.time()))
    violations: list[ViolationRecord] = Field(default_factory=list)
    violation_counts: ImpactCounts = Field(default_factory=ImpactCounts)

    @classmethod
    def build(
        cls,
        url: str,
        violations: list[ViolationRecord],
        *,
        scan_timestamp: int | None = None,
        policy: UnknownImpactPolicy = UnknownImpactPolicy.MINOR,
    ) -> ScanSnapshot:
        return cls(
            url=url,
            scan_timestamp=scan_timestamp if scan_timestamp is not None else int(time.time()),
            violations=violations,
            violation_counts=ImpactCounts.from_violations(violations, policy),
        )

    @classmethod
    def empty(cls, url: str) -> ScanSnapshot:
        """Zeroed snapshot served when nothing is cached for *url*."""
        return cls(url=url, scan_timestamp=0)


class AggregatedStats(BaseModel):
    """Totals across every cached snapshot."""

    unique_urls_scanned: int = 0
    total_violations: int = 0
    critical_violations: int = 0
    serious_violations: int = 0
    moderate_violations: int = 0
    minor_violations: int = 0
    by_url: dict[str, ImpactCounts] = Field(default_factory=dict)

    def summary(self) -> dict[str, int]:
        """The counters reported back to the scanner after a submission."""
        return {
            "total_violations": self.total_violations,
            "unique_pages_scanned": self.unique_urls_scanned,
            "critical_violations": self.critical_violations,
            "serious_violations": self.serious_violations,
            "moderate_violations": self.moderate_violations,
            "minor_violations": self.minor_violations,
        }
