"""
Reading management API endpoints.

Readings are created and listed under their meter
(``/v1/meters/{meter_number}/readings``) and edited or deleted by id
(``/v1/readings/{reading_id}``). Values must be non-negative; the date
defaults to the time of the request. Every write invalidates the owning
meter's cached statistics.

CHANGELOG:
- 2026-10-15: Initial creation (STORY-008)

TODO:
- None
"""

from datetime import UTC, datetime

from fastapi import APIRouter, HTTPException, Response
from pydantic import AwareDatetime, BaseModel, Field

from energylens.analytics.models import Reading
from energylens.api.deps import DbSession
from energylens.cache.redis_client import invalidate_meter_cache
from energylens.services.meters import get_meter
from energylens.services.readings import (
    add_reading,
    delete_reading,
    get_reading,
    list_readings,
    update_reading,
)

router = APIRouter(prefix="/v1", tags=["readings"])


# ---------------------------------------------------------------------------
# Pydantic request / response schemas
# ---------------------------------------------------------------------------


class ReadingCreate(BaseModel):
    """Schema for a new meter reading.

    Attributes:
        value: Cumulative counter value in kWh, >= 0.
        date: Reading time with timezone; defaults to now.
        image_url: Optional photo reference.
    """

    value: float = Field(ge=0)
    date: AwareDatetime | None = None
    image_url: str | None = None


class ReadingUpdate(BaseModel):
    value: float = Field(ge=0)
    date: AwareDatetime


class ReadingResponse(BaseModel):
    id: str | None
    meter_id: str
    value: float
    date: datetime
    image_url: str | None

    @classmethod
    def from_reading(cls, reading: Reading) -> "ReadingResponse":
        return cls(**reading.model_dump())


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post(
    "/meters/{meter_number}/readings",
    response_model=ReadingResponse,
    status_code=201,
)
async def create_reading(
    meter_number: str,
    request: ReadingCreate,
    db: DbSession,
) -> ReadingResponse:
    """Record a reading for a meter.

    Raises:
        HTTPException: 404 if the meter does not exist.
        HTTPException: 422 if the value is negative or the date is naive.
    """
    reading = await add_reading(
        db,
        meter_id=meter_number,
        value=request.value,
        date=request.date or datetime.now(UTC),
        image_url=request.image_url,
    )
    if reading is None:
        raise HTTPException(status_code=404, detail=f"Meter '{meter_number}' not found")

    await invalidate_meter_cache(meter_number)
    return ReadingResponse.from_reading(reading)


@router.get(
    "/meters/{meter_number}/readings",
    response_model=list[ReadingResponse],
)
async def get_readings(meter_number: str, db: DbSession) -> list[ReadingResponse]:
    """List a meter's readings, newest first.

    Raises:
        HTTPException: 404 if the meter does not exist.
    """
    if await get_meter(db, meter_number) is None:
        raise HTTPException(status_code=404, detail=f"Meter '{meter_number}' not found")
    return [ReadingResponse.from_reading(r) for r in await list_readings(db, meter_number)]


@router.get("/readings/{reading_id}", response_model=ReadingResponse)
async def get_single_reading(reading_id: str, db: DbSession) -> ReadingResponse:
    """Fetch one reading by id.

    Raises:
        HTTPException: 404 if the reading does not exist.
    """
    reading = await get_reading(db, reading_id)
    if reading is None:
        raise HTTPException(status_code=404, detail=f"Reading '{reading_id}' not found")
    return ReadingResponse.from_reading(reading)


@router.put("/readings/{reading_id}", response_model=ReadingResponse)
async def put_reading(
    reading_id: str,
    request: ReadingUpdate,
    db: DbSession,
) -> ReadingResponse:
    """Correct the value and date of a reading.

    Raises:
        HTTPException: 404 if the reading does not exist.
    """
    reading = await update_reading(db, reading_id, value=request.value, date=request.date)
    if reading is None:
        raise HTTPException(status_code=404, detail=f"Reading '{reading_id}' not found")

    await invalidate_meter_cache(reading.meter_id)
    return ReadingResponse.from_reading(reading)


@router.delete("/readings/{reading_id}", status_code=204)
async def remove_reading(reading_id: str, db: DbSession) -> Response:
    """Delete a reading.

    Raises:
        HTTPException: 404 if the reading does not exist.
    """
    reading = await delete_reading(db, reading_id)
    if reading is None:
        raise HTTPException(status_code=404, detail=f"Reading '{reading_id}' not found")

    await invalidate_meter_cache(reading.meter_id)
    return Response(status_code=204)
