# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Violation models: the scanner's raw shape and the canonical stored record."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from a11ylens.core.constants import Impact


def parse_impact(value: object) -> Impact:
    """Map a scanner-reported impact onto :class:`Impact`.

    Anything missing or unrecognized becomes ``Impact.UNKNOWN``.
    """
    if not isinstance(value, str):
        return Impact.UNKNOWN
    try:
        return Impact(value.strip().lower())
    except ValueError:
        return Impact.UNKNOWN


class RawViolation(BaseModel):
    """One violation as reported by axe-core in the browser."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    impact: str | None = None
    description: str = ""
    help: str = ""
    help_url: str = Field(default="", alias="helpUrl")
    tags: list[str] = Field(default_factory=list)
    nodes: list[Any] = Field(default_factory=list)

    @field_validator("id", "description", "help", "help_url", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("tags", "nodes", mode="before")
    @classmethod
    def _none_to_list(cls, v: object) -> object:
        return [] if v is None else v


class ViolationRecord(BaseModel):
    """A single rule failure for one scan of one URL."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = ""
    impact: Impact = Impact.UNKNOWN
    description: str = ""
    help: str = ""
    help_url: str = ""
    tags: list[str] = Field(default_factory=list)
    node_count: int = Field(default=0, ge=0)

    @classmethod
    def from_raw(cls, raw: RawViolation | Mapping[str, Any]) -> ViolationRecord:
        """Normalize a raw scanner violation into the stored shape."""
        if not isinstance(raw, RawViolation):
            raw = RawViolation.model_validate(raw)
        return cls(
            rule_id=raw.id,
            impact=parse_impact(raw.impact),
            description=raw.description,
            help=raw.help,
            help_url=raw.help_url,
            tags=list(raw.tags),
            node_count=len(raw.nodes),
        )
