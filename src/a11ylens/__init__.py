# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""a11ylens - accessibility scan-result cache, aggregation and statistics."""

__version__ = "0.2.0"

__all__ = ["__version__"]
