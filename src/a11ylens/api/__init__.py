# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""HTTP API for scan submission, statistics and report lookup."""
