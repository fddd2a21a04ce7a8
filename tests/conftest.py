"""
Shared test fixtures for EnergyLens tests.

CHANGELOG:
- 2026-10-16: Add API client fixtures (STORY-010)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from energylens.db.session import get_async_session
from energylens.main import app

# All Settings environment variable names, used for cleanup.
_ALL_ENV_VARS = (
    "DATABASE_URL",
    "REDIS_URL",
    "CACHE_TTL_S",
    "REPORT_TIMEZONE",
    "LOG_LEVEL",
    "ENABLE_SEEDING",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Isolate every test from the host environment and any ``.env`` file.

    Only the two required URLs are set; tests set optional variables
    themselves.
    """
    for var in _ALL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/db")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")


@pytest.fixture()
def mock_db_session() -> AsyncMock:
    """Mock AsyncSession; route tests patch the service functions instead."""
    return AsyncMock()


@pytest.fixture()
def client(mock_db_session: AsyncMock) -> TestClient:
    """TestClient with the DB session dependency overridden.

    Args:
        mock_db_session: Mock async database session.

    Returns:
        TestClient: Configured test client with dependency overrides.
    """

    async def override_get_session():
        yield mock_db_session

    app.dependency_overrides[get_async_session] = override_get_session

    yield TestClient(app)

    app.dependency_overrides.clear()
