"""
Meter management API endpoints.

Create, list, read, rename/re-key and delete meters under ``/v1/meters``.
Changing or deleting a meter invalidates its cached statistics.

CHANGELOG:
- 2026-10-15: Initial creation (STORY-008)

TODO:
- None
"""

from datetime import UTC, datetime

from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel, Field

from energylens.analytics.models import Meter
from energylens.api.deps import DbSession
from energylens.cache.redis_client import invalidate_meter_cache
from energylens.services.meters import (
    add_meter,
    delete_meter,
    get_meter,
    list_meters,
    update_meter,
)

router = APIRouter(prefix="/v1", tags=["meters"])


# ---------------------------------------------------------------------------
# Pydantic request / response schemas
# ---------------------------------------------------------------------------


class MeterCreate(BaseModel):
    """Schema for creating (or overwriting) a meter.

    Attributes:
        name: Display label.
        meter_number: External meter number; reused numbers overwrite the name.
    """

    name: str = Field(min_length=1)
    meter_number: str = Field(min_length=1)


class MeterUpdate(BaseModel):
    """Schema for renaming a meter and optionally changing its number."""

    name: str = Field(min_length=1)
    meter_number: str = Field(min_length=1)


class MeterResponse(BaseModel):
    name: str
    meter_number: str
    created_at: datetime

    @classmethod
    def from_meter(cls, meter: Meter) -> "MeterResponse":
        return cls(
            name=meter.name,
            meter_number=meter.meter_number,
            created_at=meter.created_at,
        )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/meters", response_model=MeterResponse, status_code=201)
async def create_meter(request: MeterCreate, db: DbSession) -> MeterResponse:
    """Add a meter. An existing meter with the same number is renamed."""
    meter = await add_meter(
        db,
        name=request.name,
        meter_number=request.meter_number,
        created_at=datetime.now(UTC),
    )
    return MeterResponse.from_meter(meter)


@router.get("/meters", response_model=list[MeterResponse])
async def get_meters(db: DbSession) -> list[MeterResponse]:
    """List all meters, newest first."""
    return [MeterResponse.from_meter(m) for m in await list_meters(db)]


@router.get("/meters/{meter_number}", response_model=MeterResponse)
async def get_single_meter(meter_number: str, db: DbSession) -> MeterResponse:
    """Return one meter.

    Raises:
        HTTPException: 404 if the meter does not exist.
    """
    meter = await get_meter(db, meter_number)
    if meter is None:
        raise HTTPException(status_code=404, detail=f"Meter '{meter_number}' not found")
    return MeterResponse.from_meter(meter)


@router.put("/meters/{meter_number}", response_model=MeterResponse)
async def put_meter(
    meter_number: str,
    request: MeterUpdate,
    db: DbSession,
) -> MeterResponse:
    """Rename a meter and/or change its number; readings follow the meter.

    Raises:
        HTTPException: 404 if the meter does not exist.
        HTTPException: 409 if the new number belongs to another meter.
    """
    try:
        meter = await update_meter(
            db,
            old_meter_number=meter_number,
            new_name=request.name,
            new_meter_number=request.meter_number,
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    if meter is None:
        raise HTTPException(status_code=404, detail=f"Meter '{meter_number}' not found")

    await invalidate_meter_cache(meter_number, meter.meter_number)
    return MeterResponse.from_meter(meter)


@router.delete("/meters/{meter_number}", status_code=204)
async def remove_meter(meter_number: str, db: DbSession) -> Response:
    """Delete a meter and its readings.

    Raises:
        HTTPException: 404 if the meter does not exist.
    """
    if not await delete_meter(db, meter_number):
        raise HTTPException(status_code=404, detail=f"Meter '{meter_number}' not found")

    await invalidate_meter_cache(meter_number)
    return Response(status_code=204)
