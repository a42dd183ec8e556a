# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for a11ylens."""


class A11yLensError(Exception):
    """Base exception for all a11ylens errors."""


class ConfigurationError(A11yLensError):
    """Invalid or missing configuration."""


class StorageError(A11yLensError):
    """Database or storage operation failed."""


class CacheError(A11yLensError):
    """Cache backend read or write failed."""


class TimeframeError(A11yLensError):
    """A statistics timeframe request violates its contract."""
