"""
Tests for Settings loading, validation and JSON logging setup.

CHANGELOG:
- 2026-10-16: REPORT_TIMEZONE, LOG_LEVEL, ENABLE_SEEDING and logging tests (STORY-009)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import json
import logging
import sys
from datetime import timedelta

import pytest
from pydantic import ValidationError

from energylens.config import Settings, get_settings
from energylens.logging_config import JSONFormatter, setup_logging


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    """Settings loads from environment variables with validated defaults."""

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_TTL_S", "10")
        monkeypatch.setenv("REPORT_TIMEZONE", "Europe/Brussels")
        monkeypatch.setenv("ENABLE_SEEDING", "true")

        settings = Settings()

        assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@localhost/db"
        assert settings.REDIS_URL == "redis://localhost:6379/0"
        assert settings.CACHE_TTL_S == 10
        assert settings.REPORT_TIMEZONE == "Europe/Brussels"
        assert settings.ENABLE_SEEDING is True

    def test_defaults(self) -> None:
        settings = get_settings()

        assert settings.CACHE_TTL_S == 60
        assert settings.REPORT_TIMEZONE == "UTC"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.ENABLE_SEEDING is False

    def test_missing_database_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL")
        with pytest.raises(ValidationError):
            Settings()

    def test_negative_cache_ttl_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_TTL_S", "-1")
        with pytest.raises(ValidationError, match="CACHE_TTL_S"):
            Settings()

    def test_unknown_timezone_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPORT_TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ValidationError, match="REPORT_TIMEZONE"):
            Settings()

    def test_log_level_is_upper_cased(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().LOG_LEVEL == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            Settings()

    def test_env_file_is_read(self, tmp_path) -> None:
        """A ``.env`` in the working directory supplies unset variables."""
        (tmp_path / ".env").write_text("CACHE_TTL_S=0\n")

        assert Settings().CACHE_TTL_S == 0

    def test_now_is_in_report_timezone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPORT_TIMEZONE", "Asia/Kolkata")

        now = Settings().now()

        assert now.utcoffset() == timedelta(hours=5, minutes=30)


# ---------------------------------------------------------------------------
# Structured JSON logging
# ---------------------------------------------------------------------------


def _record(msg: str, *args, level: int = logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="energylens.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """JSONFormatter outputs one JSON object with the required fields."""

    def test_contains_required_fields(self) -> None:
        parsed = json.loads(JSONFormatter().format(_record("meter %s", "A", level=logging.WARNING)))

        assert "timestamp" in parsed
        assert parsed["level"] == "WARNING"
        assert parsed["logger"] == "energylens.test"
        assert parsed["message"] == "meter A"
        assert "exception" not in parsed

    def test_context_fields_from_extra(self) -> None:
        record = _record("seeded")
        record.meter_number = "m-1"
        record.profile = "history"

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["meter_number"] == "m-1"
        assert parsed["profile"] == "history"
        assert "reading_id" not in parsed

    def test_includes_exception_text(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed", level=logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in parsed["exception"]


class TestSetupLogging:
    def test_installs_single_json_handler(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("DEBUG")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_uvicorn_loggers_propagate_to_root(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        access = logging.getLogger("uvicorn.access")
        access.addHandler(logging.NullHandler())
        try:
            setup_logging()

            assert access.handlers == []
            assert access.propagate is True
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
