# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Test helpers shared across unit and integration suites."""

from __future__ import annotations

from typing import Any

# 2024-05-01 12:00:00 UTC
NOON_2024_05_01 = 1714564800


class FakeClock:
    """Settable epoch clock for time-dependent code."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def violation(rule_id: str, impact: str | None, description: str = "", nodes: int = 1) -> dict[str, Any]:
    """A raw violation shaped like the browser scanner's output."""
    return {
        "id": rule_id,
        "impact": impact,
        "description": description or f"{rule_id} description",
        "help": f"Fix {rule_id}",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.8/{rule_id}",
        "tags": ["wcag2a"],
        "nodes": [{"target": [f"#n{i}"]} for i in range(nodes)],
    }
