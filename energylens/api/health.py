"""
Health check endpoint that probes DB and Redis connectivity.

``GET /health`` answers 200 with ``status: ok`` when both dependencies
respond, and 503 with ``status: degraded`` otherwise. Probe failures are
logged, never raised.

CHANGELOG:
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from energylens import __version__
from energylens.cache.redis_client import get_redis
from energylens.db.session import get_async_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _check_db() -> str:
    """Run ``SELECT 1``; return ``"ok"`` or ``"error"``."""
    try:
        async for session in get_async_session():
            await session.execute(text("SELECT 1"))
        return "ok"
    except Exception:
        logger.warning("Health check: DB probe failed", exc_info=True)
        return "error"


async def _check_redis() -> str:
    """Send ``PING``; return ``"ok"`` or ``"error"``."""
    try:
        client = await get_redis()
        try:
            await client.ping()
        finally:
            await client.aclose()
        return "ok"
    except Exception:
        logger.warning("Health check: Redis probe failed", exc_info=True)
        return "error"


@router.get("/health")
async def health_check() -> JSONResponse:
    """Report DB and Redis status plus the service version."""
    db_status, redis_status = await asyncio.gather(_check_db(), _check_redis())
    healthy = db_status == "ok" and redis_status == "ok"

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ok" if healthy else "degraded",
            "db": db_status,
            "redis": redis_status,
            "version": __version__,
        },
    )
