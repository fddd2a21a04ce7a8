"""
FastAPI application entry point for the EnergyLens API.

Wires the routers together and configures structured logging at startup.
Run with ``uvicorn energylens.main:app``.

CHANGELOG:
- 2026-10-17: Register chart/comparison and seeding routers (STORY-011, STORY-012)
- 2026-10-16: Register stats router, JSON logging in lifespan (STORY-010)
- 2026-10-15: Register meters and readings routers (STORY-008)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from energylens import __version__
from energylens.api.health import router as health_router
from energylens.api.meters import router as meters_router
from energylens.api.readings import router as readings_router
from energylens.api.seeding import router as seeding_router
from energylens.api.stats import router as stats_router
from energylens.config import get_settings
from energylens.db.session import dispose_engine
from energylens.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging from settings at startup; release the DB pool at shutdown."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    logger.info("EnergyLens API starting (report timezone %s)", settings.REPORT_TIMEZONE)
    yield
    await dispose_engine()


app = FastAPI(
    title="EnergyLens API",
    description="Meter readings, consumption analytics and projections.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(meters_router)
app.include_router(readings_router)
app.include_router(stats_router)
app.include_router(seeding_router)


@app.get("/")
async def root() -> dict:
    """Liveness endpoint.

    Returns:
        dict: JSON object with application status.
    """
    return {"status": "ok"}
