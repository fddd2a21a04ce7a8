"""
Reading persistence service and snapshot loader.

CRUD over the ``readings`` table, plus :func:`load_meter_readings`, which
builds the ``meter_id -> readings`` mapping the analytics engine consumes.
Rows come back ordered by date, though the engine sorts its own copy.

CHANGELOG:
- 2026-10-19: Order snapshot rows by date and id (STORY-013)
- 2026-10-16: Add load_meter_readings snapshot loader (STORY-010)
- 2026-10-15: Initial creation (STORY-008)

TODO:
- None
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from energylens.analytics.models import Reading
from energylens.db.models import MeterRecord, ReadingRecord

logger = logging.getLogger(__name__)


async def add_reading(
    session: AsyncSession,
    meter_id: str,
    value: float,
    date: datetime,
    image_url: str | None = None,
) -> Reading | None:
    """Store a new reading for an existing meter.

    Args:
        session: Async SQLAlchemy session.
        meter_id: ``meter_number`` of the meter.
        value: Cumulative counter value in kWh.
        date: Reading timestamp (timezone-aware).
        image_url: Optional photo reference.

    Returns:
        The stored reading with its assigned id, or ``None`` if the meter
        does not exist.
    """
    meter = await session.get(MeterRecord, meter_id)
    if meter is None:
        return None

    record = ReadingRecord(
        id=uuid.uuid4().hex,
        meter_id=meter_id,
        value=value,
        date=date,
        image_url=image_url,
    )
    session.add(record)
    await session.commit()
    logger.info(
        "Added reading %s for meter %s",
        record.id,
        meter_id,
        extra={"meter_number": meter_id, "reading_id": record.id},
    )
    return record.to_reading()


async def get_reading(session: AsyncSession, reading_id: str) -> Reading | None:
    record = await session.get(ReadingRecord, reading_id)
    if record is None:
        return None
    return record.to_reading()


async def update_reading(
    session: AsyncSession,
    reading_id: str,
    value: float,
    date: datetime,
) -> Reading | None:
    """Change the value and date of a reading; ``None`` if it does not exist."""
    record = await session.get(ReadingRecord, reading_id)
    if record is None:
        return None

    record.value = value
    record.date = date
    await session.commit()
    return record.to_reading()


async def delete_reading(session: AsyncSession, reading_id: str) -> Reading | None:
    """Delete a reading.

    Returns:
        The deleted reading (so callers know which meter changed), or
        ``None`` if it did not exist.
    """
    record = await session.get(ReadingRecord, reading_id)
    if record is None:
        return None

    reading = record.to_reading()
    await session.delete(record)
    await session.commit()
    logger.info(
        "Deleted reading %s of meter %s",
        reading_id,
        reading.meter_id,
        extra={"meter_number": reading.meter_id, "reading_id": reading_id},
    )
    return reading


async def list_readings(session: AsyncSession, meter_id: str) -> list[Reading]:
    """Return a meter's readings, newest first."""
    result = await session.execute(
        select(ReadingRecord)
        .where(ReadingRecord.meter_id == meter_id)
        .order_by(ReadingRecord.date.desc()),
    )
    return [record.to_reading() for record in result.scalars().all()]


async def load_meter_readings(
    session: AsyncSession,
    meter_ids: Sequence[str],
) -> dict[str, list[Reading]]:
    """Load a reading snapshot for the given meters in one query.

    Args:
        session: Async SQLAlchemy session.
        meter_ids: Meter numbers to include.

    Returns:
        dict: Every requested meter id mapped to its readings (possibly an
        empty list), ordered by date.
    """
    snapshot: dict[str, list[Reading]] = {meter_id: [] for meter_id in meter_ids}
    if not snapshot:
        return snapshot

    result = await session.execute(
        select(ReadingRecord)
        .where(ReadingRecord.meter_id.in_(list(snapshot)))
        .order_by(ReadingRecord.date, ReadingRecord.id),
    )
    for record in result.scalars().all():
        snapshot[record.meter_id].append(record.to_reading())
    return snapshot
