# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for folding snapshots into aggregate statistics."""

from __future__ import annotations

from a11ylens.analytics.aggregator import SnapshotAggregator
from a11ylens.models import AggregatedStats, ImpactCounts, ScanSnapshot, ViolationRecord
from tests.helpers import violation


def _snapshot(url: str, *impacts: str) -> ScanSnapshot:
    records = [ViolationRecord.from_raw(violation(f"r{i}", imp)) for i, imp in enumerate(impacts)]
    return ScanSnapshot.build(url, records, scan_timestamp=1)


class TestRecompute:
    def test_empty(self) -> None:
        assert SnapshotAggregator().recompute([]) == AggregatedStats()

    def test_fold(self) -> None:
        stats = SnapshotAggregator().recompute(
            [
                _snapshot("https://s/a", "critical", "serious"),
                _snapshot("https://s/b", "minor", "minor", "moderate"),
            ]
        )
        assert stats.unique_urls_scanned == 2
        assert stats.total_violations == 5
        assert stats.critical_violations == 1
        assert stats.minor_violations == 2
        assert stats.by_url["https://s/b"].total == 3

    def test_missing_snapshots_skipped(self) -> None:
        stats = SnapshotAggregator().recompute([None, _snapshot("https://s/a", "serious"), None])
        assert stats.unique_urls_scanned == 1
        assert stats.total_violations == 1


class TestApply:
    def test_add_new_url(self) -> None:
        agg = SnapshotAggregator()
        stats = agg.apply(AggregatedStats(), "https://s/a", ImpactCounts(total=2, serious=2))
        assert stats.unique_urls_scanned == 1
        assert stats.serious_violations == 2

    def test_replace_subtracts_old(self) -> None:
        agg = SnapshotAggregator()
        before = agg.recompute([_snapshot("https://s/a", "critical", "critical")])
        after = agg.apply(before, "https://s/a", ImpactCounts(total=1, minor=1))
        assert after.critical_violations == 0
        assert after.minor_violations == 1
        assert after.total_violations == 1
        assert after.unique_urls_scanned == 1

    def test_remove(self) -> None:
        agg = SnapshotAggregator()
        before = agg.recompute([_snapshot("https://s/a", "serious"), _snapshot("https://s/b", "minor")])
        after = agg.apply(before, "https://s/a", None)
        assert after == agg.recompute([_snapshot("https://s/b", "minor")])

    def test_remove_unknown_url_is_noop(self) -> None:
        agg = SnapshotAggregator()
        before = agg.recompute([_snapshot("https://s/a", "serious")])
        assert agg.apply(before, "https://s/zzz", None) == before

    def test_incremental_equals_recompute(self) -> None:
        agg = SnapshotAggregator()
        snaps = {
            "https://s/a": _snapshot("https://s/a", "critical"),
            "https://s/b": _snapshot("https://s/b", "moderate", "serious"),
        }
        stats = AggregatedStats()
        for url, snap in snaps.items():
            stats = agg.apply(stats, url, snap.violation_counts)
        snaps["https://s/a"] = _snapshot("https://s/a", "minor", "minor", "minor")
        stats = agg.apply(stats, "https://s/a", snaps["https://s/a"].violation_counts)

        assert stats == agg.recompute(snaps.values())
