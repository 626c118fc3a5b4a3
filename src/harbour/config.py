# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str = "sqlite+aiosqlite:///./harbour.db"
    environment: str = "production"
    log_level: str = "info"
    log_format: str = "json"
    cors_origins: list[str] = []
    database_pool_size: int = 20

    # References
    # Hidden companies, groups, people and education entries are left out of
    # rendered links and backlink lists.
    hide_invisible_references: bool = True
    upcoming_dates_limit: int = 5
    reindex_rate_limit: str = "30/minute"

    model_config = {"env_file": ".env", "env_prefix": "HARBOUR_"}

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        if value.lower() not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return value.lower()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Lazy-loaded to avoid import-time failures."""
    return Settings()
