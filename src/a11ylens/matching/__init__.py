# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Report slug resolution."""

from a11ylens.matching.slug import MatchResult, MatchStrategy, SlugMatcher

__all__ = ["MatchResult", "MatchStrategy", "SlugMatcher"]
