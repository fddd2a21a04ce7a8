"""
Application configuration from environment variables using Pydantic BaseSettings.

All configuration values are loaded from environment variables (or a
``.env`` file) at startup. No hardcoded URLs or credentials.

CHANGELOG:
- 2026-10-16: Add REPORT_TIMEZONE, LOG_LEVEL and ENABLE_SEEDING (STORY-009)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL: PostgreSQL connection string (asyncpg).
        REDIS_URL: Redis connection string.
        CACHE_TTL_S: TTL in seconds for cached meter statistics.
        REPORT_TIMEZONE: IANA zone used for "now" in window and year-end
            predictions.
        LOG_LEVEL: Root log level name.
        ENABLE_SEEDING: Expose the seed-readings endpoint.
    """

    DATABASE_URL: str
    REDIS_URL: str
    CACHE_TTL_S: int = 60
    REPORT_TIMEZONE: str = "UTC"
    LOG_LEVEL: str = "INFO"
    ENABLE_SEEDING: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("CACHE_TTL_S")
    @classmethod
    def cache_ttl_must_not_be_negative(cls, v: int) -> int:
        """Validate cache TTL is zero (disabled) or positive."""
        if v < 0:
            raise ValueError("CACHE_TTL_S must be >= 0")
        return v

    @field_validator("REPORT_TIMEZONE")
    @classmethod
    def report_timezone_must_exist(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"REPORT_TIMEZONE is not a known timezone: {v!r}") from exc
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL is not a logging level: {v!r}")
        return level

    def now(self) -> datetime:
        """Current time in the configured report timezone."""
        return datetime.now(ZoneInfo(self.REPORT_TIMEZONE))


def get_settings() -> Settings:
    """Create and return a Settings instance.

    Returns:
        Settings: Validated configuration from environment variables.
    """
    return Settings()
