# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Reverse-map a report-page slug onto a scanned URL's snapshot."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urlparse

from a11ylens.cache.store import ScanCacheStore
from a11ylens.cache.urls import normalize_url
from a11ylens.models.snapshot import ScanSnapshot

logger = logging.getLogger("a11ylens.matching.slug")

TEST_PAGE_MARKER = "test-violations"


class MatchStrategy(StrEnum):
    """How a slug was resolved, in the order strategies are tried."""

    DIRECT = "direct"
    DIRECT_TRAILING_SLASH = "direct_trailing_slash"
    HYPHEN_TO_SLASH = "hyphen_to_slash"
    HYPHEN_TO_UNDERSCORE = "hyphen_to_underscore"
    TEST_PAGE_FALLBACK = "test_page_fallback"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of a slug lookup.

    ``matched_url`` is ``None`` only for :attr:`MatchStrategy.NONE`, in
    which case ``snapshot`` is the zeroed fallback.
    """

    snapshot: ScanSnapshot
    strategy: MatchStrategy
    matched_url: str | None = None

    @property
    def found(self) -> bool:
        return self.strategy is not MatchStrategy.NONE


# Candidate generators, evaluated in this order.
_CANDIDATES: tuple[tuple[MatchStrategy, Callable[[str, str], str]], ...] = (
    (MatchStrategy.DIRECT, lambda base, slug: f"{base}/{slug}"),
    (MatchStrategy.DIRECT_TRAILING_SLASH, lambda base, slug: f"{base}/{slug}/"),
    (MatchStrategy.HYPHEN_TO_SLASH, lambda base, slug: f"{base}/{slug.replace('-', '/')}"),
    (MatchStrategy.HYPHEN_TO_UNDERSCORE, lambda base, slug: f"{base}/{slug.replace('-', '_')}"),
)


def comparable_path(url: str) -> str:
    """Lowercased path of *url* without its trailing slash."""
    return urlparse(url).path.lower().rstrip("/")


def looks_like_test_page(path: str) -> bool:
    return TEST_PAGE_MARKER in path.lower().replace("_", "-").replace("/", "-")


class SlugMatcher:
    """Finds the cached snapshot a report slug most likely refers to.

    Candidates are tried outer, scanned URLs inner in registry order, so an
    earlier strategy always beats a later one.  Registry entries whose
    snapshot is gone are skipped.
    """

    def __init__(self, store: ScanCacheStore, base_url: str) -> None:
        self._store = store
        self._base_url = base_url.rstrip("/")

    def candidates(self, slug: str) -> list[tuple[MatchStrategy, str]]:
        """Candidate URLs for *slug*, tagged with the strategy producing each."""
        cleaned = slug.strip().strip("/")
        return [(strategy, build(self._base_url, cleaned)) for strategy, build in _CANDIDATES]

    async def match(self, slug: str) -> MatchResult:
        candidates = self.candidates(slug)
        scanned = await self._live_snapshots()

        for strategy, candidate in candidates:
            wanted = comparable_path(candidate)
            for url, snapshot in scanned:
                if comparable_path(url) == wanted:
                    logger.debug("Slug %r matched %s via %s", slug, url, strategy)
                    return MatchResult(snapshot, strategy, url)

        if looks_like_test_page(slug):
            for url, snapshot in scanned:
                if looks_like_test_page(comparable_path(url)):
                    logger.debug("Slug %r fell back to test page %s", slug, url)
                    return MatchResult(snapshot, MatchStrategy.TEST_PAGE_FALLBACK, url)

        logger.info("No scanned URL matches slug %r", slug)
        fallback_url = normalize_url(candidates[0][1])
        return MatchResult(ScanSnapshot.empty(fallback_url), MatchStrategy.NONE)

    async def _live_snapshots(self) -> list[tuple[str, ScanSnapshot]]:
        live = []
        for url in await self._store.scanned_urls():
            snapshot = await self._store.get(url)
            if snapshot is not None:
                live.append((url, snapshot))
        return live
