"""
Redis client for the per-meter statistics cache.

Single-meter statistics are cached as JSON under ``stats:{meter_number}``
with a TTL and invalidated whenever the meter or its readings change. Every
cache operation is best-effort: Redis failures are logged and swallowed so
reads fall through to the database and writes are never blocked.

CHANGELOG:
- 2026-10-16: Cache single-meter statistics (STORY-010)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import json
import logging

import redis.asyncio as redis

from energylens.config import get_settings

logger = logging.getLogger(__name__)


def stats_cache_key(meter_number: str) -> str:
    return f"stats:{meter_number}"


async def get_redis() -> redis.Redis:
    """Create and return an async Redis client from application settings."""
    settings = get_settings()
    return redis.from_url(settings.REDIS_URL)


async def get_cached_stats(meter_number: str) -> dict | None:
    """Read cached statistics for a meter.

    Returns:
        dict or None: Cached payload, or None on miss or Redis failure.
    """
    try:
        client = await get_redis()
        try:
            raw = await client.get(stats_cache_key(meter_number))
            if raw is not None:
                return json.loads(raw)
        finally:
            await client.aclose()
    except Exception:
        logger.warning(
            "Redis cache read failed for meter %s", meter_number, exc_info=True,
        )
    return None


async def set_cached_stats(meter_number: str, data: dict) -> None:
    """Cache statistics for a meter for ``CACHE_TTL_S`` seconds.

    A TTL of 0 disables caching.
    """
    try:
        settings = get_settings()
        if settings.CACHE_TTL_S == 0:
            return
        client = await get_redis()
        try:
            await client.set(
                stats_cache_key(meter_number),
                json.dumps(data),
                ex=settings.CACHE_TTL_S,
            )
        finally:
            await client.aclose()
    except Exception:
        logger.warning(
            "Redis cache write failed for meter %s", meter_number, exc_info=True,
        )


async def invalidate_meter_cache(*meter_numbers: str) -> None:
    """Delete the cached statistics of the given meters.

    Args:
        meter_numbers: Meters whose readings or identity changed.
    """
    if not meter_numbers:
        return
    try:
        client = await get_redis()
        try:
            await client.delete(*(stats_cache_key(n) for n in meter_numbers))
        finally:
            await client.aclose()
    except Exception:
        logger.warning(
            "Failed to invalidate cache for meters %s",
            ", ".join(meter_numbers),
            exc_info=True,
        )
