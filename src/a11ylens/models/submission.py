# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Incoming scan payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from a11ylens.models.violation import RawViolation


class ScanPayload(BaseModel):
    """The violations found during one page visit."""

    model_config = ConfigDict(extra="ignore")

    violations: list[RawViolation] = Field(default_factory=list)


class ScanSubmission(ScanPayload):
    """Body of ``POST /scans``: a payload plus the page it came from."""

    url: str = Field(min_length=1)
    violations: list[RawViolation]
    timestamp: datetime | None = None
    title: str | None = None
