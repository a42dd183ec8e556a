# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for resolving report slugs to scanned pages."""

from __future__ import annotations

from a11ylens.cache.store import ScanCacheStore
from a11ylens.cache.urls import snapshot_key
from a11ylens.matching.slug import (
    MatchStrategy,
    SlugMatcher,
    comparable_path,
    looks_like_test_page,
)
from tests.helpers import violation

BASE = "https://site"


async def _scan(store: ScanCacheStore, url: str, n: int = 1) -> None:
    await store.put(url, {"violations": [violation(f"r{i}", "serious") for i in range(n)]})


class TestHelpers:
    def test_comparable_path(self) -> None:
        assert comparable_path("https://Site/About/Us/?q=1#top") == "/about/us"
        assert comparable_path("https://site") == ""

    def test_looks_like_test_page(self) -> None:
        assert looks_like_test_page("accessibility-test-violations-page")
        assert looks_like_test_page("/accessibility/test_violations")
        assert not looks_like_test_page("/about")


class TestCandidates:
    def test_order(self, store: ScanCacheStore) -> None:
        matcher = SlugMatcher(store, BASE + "/")
        assert matcher.candidates("/blog-my_post/") == [
            (MatchStrategy.DIRECT, "https://site/blog-my_post"),
            (MatchStrategy.DIRECT_TRAILING_SLASH, "https://site/blog-my_post/"),
            (MatchStrategy.HYPHEN_TO_SLASH, "https://site/blog/my_post"),
            (MatchStrategy.HYPHEN_TO_UNDERSCORE, "https://site/blog_my_post"),
        ]


class TestMatch:
    async def test_direct(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://site/about", n=2)
        result = await SlugMatcher(store, BASE).match("about")
        assert result.strategy is MatchStrategy.DIRECT
        assert result.matched_url == "https://site/about"
        assert result.snapshot.violation_counts.total == 2
        assert result.found

    async def test_case_and_query_ignored(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://other-host/About?ref=nav")
        result = await SlugMatcher(store, BASE).match("about")
        assert result.strategy is MatchStrategy.DIRECT
        assert result.matched_url == "https://other-host/About?ref=nav"

    async def test_hyphen_to_slash(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://site/node/1")
        result = await SlugMatcher(store, BASE).match("node-1")
        assert result.strategy is MatchStrategy.HYPHEN_TO_SLASH

    async def test_hyphen_to_underscore(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://site/contact_us")
        result = await SlugMatcher(store, BASE).match("contact-us")
        assert result.strategy is MatchStrategy.HYPHEN_TO_UNDERSCORE
        assert result.matched_url == "https://site/contact_us"

    async def test_earlier_candidate_beats_earlier_registry_entry(self, store: ScanCacheStore) -> None:
        # The slash variant is registered first, but the direct candidate wins.
        await _scan(store, "https://site/a/b", n=1)
        await _scan(store, "https://site/a-b", n=3)
        result = await SlugMatcher(store, BASE).match("a-b")
        assert result.strategy is MatchStrategy.DIRECT
        assert result.matched_url == "https://site/a-b"
        assert result.snapshot.violation_counts.total == 3

    async def test_registry_order_breaks_ties(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://one/page", n=1)
        await _scan(store, "https://two/page", n=2)
        result = await SlugMatcher(store, BASE).match("page")
        assert result.matched_url == "https://one/page"

    async def test_missing_snapshot_skipped(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://one/page", n=1)
        await _scan(store, "https://two/page", n=2)
        await store.backend.delete(snapshot_key("https://one/page"))
        result = await SlugMatcher(store, BASE).match("page")
        assert result.matched_url == "https://two/page"

    async def test_test_page_fallback(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://site/about")
        await _scan(store, "https://site/accessibility/test-violations", n=4)
        result = await SlugMatcher(store, BASE).match("accessibility-test-violations-page")
        assert result.strategy is MatchStrategy.TEST_PAGE_FALLBACK
        assert result.matched_url == "https://site/accessibility/test-violations"
        assert result.snapshot.violation_counts.total == 4

    async def test_no_fallback_for_ordinary_slug(self, store: ScanCacheStore) -> None:
        await _scan(store, "https://site/accessibility/test-violations")
        result = await SlugMatcher(store, BASE).match("foo-bar")
        assert result.strategy is MatchStrategy.NONE

    async def test_unresolvable_returns_zeroed_snapshot(self, store: ScanCacheStore) -> None:
        result = await SlugMatcher(store, BASE).match("nowhere")
        assert not result.found
        assert result.matched_url is None
        assert result.snapshot.url == "https://site/nowhere"
        assert result.snapshot.violations == []
        assert result.snapshot.violation_counts.total == 0
