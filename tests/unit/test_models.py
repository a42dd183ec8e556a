# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for violation, snapshot and submission models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from a11ylens.core.constants import Impact, UnknownImpactPolicy
from a11ylens.models import (
    AggregatedStats,
    ImpactCounts,
    RawViolation,
    ScanSnapshot,
    ScanSubmission,
    ViolationRecord,
    parse_impact,
)
from tests.helpers import violation


class TestParseImpact:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("critical", Impact.CRITICAL),
            (" Serious ", Impact.SERIOUS),
            ("MINOR", Impact.MINOR),
            ("catastrophic", Impact.UNKNOWN),
            (None, Impact.UNKNOWN),
            (3, Impact.UNKNOWN),
        ],
    )
    def test_mapping(self, value: object, expected: Impact) -> None:
        assert parse_impact(value) is expected


class TestViolationRecord:
    def test_from_raw_mapping(self) -> None:
        record = ViolationRecord.from_raw(violation("color-contrast", "serious", nodes=3))
        assert record.rule_id == "color-contrast"
        assert record.impact is Impact.SERIOUS
        assert record.node_count == 3
        assert record.help_url.endswith("/color-contrast")

    def test_missing_fields_default(self) -> None:
        record = ViolationRecord.from_raw({"impact": None, "nodes": None, "tags": None})
        assert record.rule_id == ""
        assert record.description == ""
        assert record.tags == []
        assert record.node_count == 0
        assert record.impact is Impact.UNKNOWN

    def test_is_frozen(self) -> None:
        record = ViolationRecord.from_raw(violation("label", "minor"))
        with pytest.raises(ValidationError):
            record.rule_id = "other"  # type: ignore[misc]

    def test_negative_node_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ViolationRecord(node_count=-1)

    def test_raw_accepts_snake_case_help_url(self) -> None:
        raw = RawViolation.model_validate({"help_url": "https://x"})
        assert raw.help_url == "https://x"


class TestImpactCounts:
    def _records(self, *impacts: str | None) -> list[ViolationRecord]:
        return [ViolationRecord.from_raw(violation(f"r{i}", imp)) for i, imp in enumerate(impacts)]

    def test_fold(self) -> None:
        counts = ImpactCounts.from_violations(self._records("critical", "serious", "serious", "minor"))
        assert counts == ImpactCounts(total=4, critical=1, serious=2, moderate=0, minor=1)

    def test_unknown_counted_as_minor_by_default(self) -> None:
        counts = ImpactCounts.from_violations(self._records("critical", None, "bogus"))
        assert counts.total == 3
        assert counts.minor == 2
        assert counts.total == counts.critical + counts.serious + counts.moderate + counts.minor

    def test_unknown_ignored_by_policy(self) -> None:
        counts = ImpactCounts.from_violations(
            self._records("critical", None), UnknownImpactPolicy.IGNORE
        )
        assert counts.total == 2
        assert counts.critical == 1
        assert counts.minor == 0

    def test_combined_subtracts(self) -> None:
        a = ImpactCounts(total=5, critical=2, serious=3)
        b = ImpactCounts(total=2, critical=1, serious=1)
        assert a.combined(b, sign=-1) == ImpactCounts(total=3, critical=1, serious=2)


class TestScanSnapshot:
    def test_build_counts_and_order(self) -> None:
        records = [ViolationRecord.from_raw(violation(r, "moderate")) for r in ("b", "a")]
        snap = ScanSnapshot.build("https://site/x", records, scan_timestamp=10)
        assert [v.rule_id for v in snap.violations] == ["b", "a"]
        assert snap.violation_counts.moderate == 2
        assert snap.scan_timestamp == 10

    def test_empty(self) -> None:
        snap = ScanSnapshot.empty("https://site/none")
        assert snap.violations == []
        assert snap.violation_counts == ImpactCounts()
        assert snap.scan_timestamp == 0

    def test_json_round_trip_preserves_impact(self) -> None:
        records = [ViolationRecord.from_raw(violation("x", None))]
        snap = ScanSnapshot.build("https://s/p", records, scan_timestamp=1)
        restored = ScanSnapshot.model_validate_json(snap.model_dump_json())
        assert restored.violations[0].impact is Impact.UNKNOWN


class TestAggregatedStats:
    def test_summary_keys(self) -> None:
        stats = AggregatedStats(unique_urls_scanned=2, total_violations=7, critical_violations=1)
        summary = stats.summary()
        assert summary["unique_pages_scanned"] == 2
        assert summary["total_violations"] == 7
        assert summary["critical_violations"] == 1
        assert "by_url" not in summary


class TestScanSubmission:
    def test_requires_url_and_violations(self) -> None:
        with pytest.raises(ValidationError):
            ScanSubmission.model_validate({"url": "https://s/p"})
        with pytest.raises(ValidationError):
            ScanSubmission.model_validate({"violations": []})

    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScanSubmission.model_validate({"url": "", "violations": []})

    def test_optional_fields(self) -> None:
        sub = ScanSubmission.model_validate(
            {"url": "https://s/p", "violations": [], "timestamp": "2024-05-01T10:00:00Z", "title": "P"}
        )
        assert sub.timestamp is not None
        assert sub.title == "P"
