# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from a11ylens.core.constants import (
    DAILY_COUNT_RETENTION_DAYS,
    MAX_WEEK_SPAN_DAYS,
    TOP_ISSUES_LIMIT,
    UnknownImpactPolicy,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="A11YLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Database
    db_path: Path = Path("a11ylens.db")
    auto_migrate: bool = True

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_workers: int = 1
    cors_origins: list[str] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v if isinstance(v, list) else []

    # Site being scanned; report slugs are resolved against it
    site_base_url: str = "http://localhost"

    @field_validator("site_base_url")
    @classmethod
    def _strip_base_url(cls, v: str) -> str:
        return v.rstrip("/")

    # Calendar days and buckets are computed in this zone
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v!r}") from exc
        return v

    # Cache
    cache_backend: str = "memory"  # "memory" or "redis"
    redis_url: str = "redis://localhost:6379/0"
    redis_lock_timeout: float = 30.0
    redis_lock_wait: float = 10.0
    daily_count_retention_days: int = DAILY_COUNT_RETENTION_DAYS
    unknown_impact_policy: UnknownImpactPolicy = UnknownImpactPolicy.MINOR

    # Statistics
    default_timeframe_days: int = 30
    max_week_span_days: int = MAX_WEEK_SPAN_DAYS
    top_issues_limit: int = TOP_ISSUES_LIMIT

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def get_settings() -> Settings:
    return Settings()
