"""
Seed-readings endpoint for demos and manual testing.

``POST /v1/meters/{meter_number}/seed`` replaces all readings of a meter
with either the historic seed series or a synthetic one. The route only
exists in practice when ``ENABLE_SEEDING`` is set; otherwise it answers
404 like an unknown path.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-011)

TODO:
- None
"""

import logging
from datetime import timedelta
from enum import Enum

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from energylens.api.deps import AppSettings, DbSession
from energylens.cache.redis_client import invalidate_meter_cache
from energylens.services.meters import get_meter
from energylens.services.seeding import (
    generate_readings,
    generate_seasonal_readings,
    replace_readings,
    run_seeding,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["seeding"])

# Span of synthetic series, ending now.
SYNTHETIC_SPAN = timedelta(days=365)


class SeedProfile(str, Enum):
    HISTORY = "history"
    STEADY = "steady"
    SEASONAL = "seasonal"


class SeedResponse(BaseModel):
    meter_number: str
    profile: SeedProfile
    inserted: int


@router.post("/meters/{meter_number}/seed", response_model=SeedResponse)
async def seed_meter(
    meter_number: str,
    db: DbSession,
    settings: AppSettings,
    profile: SeedProfile = Query(default=SeedProfile.HISTORY),
) -> SeedResponse:
    """Replace a meter's readings with seed data.

    Args:
        meter_number: Meter to seed.
        db: Async database session.
        settings: Application settings (seeding switch, report timezone).
        profile: ``history`` for the recorded series, ``steady`` or
            ``seasonal`` for a synthetic year ending now.

    Raises:
        HTTPException: 404 if seeding is disabled or the meter does not exist.
    """
    if not settings.ENABLE_SEEDING:
        raise HTTPException(status_code=404, detail="Not Found")
    if await get_meter(db, meter_number) is None:
        raise HTTPException(status_code=404, detail=f"Meter '{meter_number}' not found")

    if profile is SeedProfile.HISTORY:
        inserted = await run_seeding(db, meter_number)
    else:
        end = settings.now()
        start = end - SYNTHETIC_SPAN
        generator = generate_readings if profile is SeedProfile.STEADY else generate_seasonal_readings
        readings = generator(start, end, meter_id=meter_number)
        inserted = await replace_readings(db, meter_number, readings)

    logger.info(
        "Seeded meter %s with %s profile (%d readings)",
        meter_number,
        profile.value,
        inserted,
        extra={"meter_number": meter_number, "profile": profile.value},
    )
    await invalidate_meter_cache(meter_number)
    return SeedResponse(meter_number=meter_number, profile=profile, inserted=inserted)
