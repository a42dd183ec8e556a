# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for URL canonicalization and snapshot keys."""

from __future__ import annotations

import pytest

from a11ylens.cache.urls import normalize_url, snapshot_key


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("https://site/page/", "https://site/page"),
            ("http://site/page", "http://site/page"),
            ("site/page", "https://site/page"),
            ("/site/page///", "https://site/page"),
            ("", "https://"),
            ("https://", "https://"),
        ],
    )
    def test_canonical_forms(self, raw: str, expected: str) -> None:
        assert normalize_url(raw) == expected

    @pytest.mark.parametrize("raw", ["", "/", "a/b/", "https://x/y/", "http://", "//host/p"])
    def test_idempotent(self, raw: str) -> None:
        once = normalize_url(raw)
        assert normalize_url(once) == once

    def test_query_is_kept(self) -> None:
        assert normalize_url("https://site/p?q=1") == "https://site/p?q=1"


class TestSnapshotKey:
    def test_prefix_and_stability(self) -> None:
        key = snapshot_key("https://site/page")
        assert key.startswith("scan_url:")
        assert key == snapshot_key("https://site/page")

    def test_distinct_urls_distinct_keys(self) -> None:
        assert snapshot_key("https://site/a") != snapshot_key("https://site/b")
