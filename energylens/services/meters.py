"""
Meter persistence service.

CRUD over the ``meters`` table. Meters are keyed by ``meter_number``;
adding a meter whose number already exists overwrites its name, and
re-keying a meter moves its readings along through the ON UPDATE CASCADE
foreign key.

CHANGELOG:
- 2026-10-19: Map a lost re-key race to the in-use error (STORY-013)
- 2026-10-15: Initial creation (STORY-008)

TODO:
- None
"""

import logging
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from energylens.analytics.models import Meter
from energylens.db.models import MeterRecord, ReadingRecord

logger = logging.getLogger(__name__)


async def add_meter(
    session: AsyncSession,
    name: str,
    meter_number: str,
    created_at: datetime,
) -> Meter:
    """Insert a meter, or rename the existing meter with the same number.

    Args:
        session: Async SQLAlchemy session.
        name: Display label.
        meter_number: External meter number (primary key).
        created_at: Creation timestamp; kept unchanged on overwrite.

    Returns:
        Meter: The stored meter.
    """
    stmt = (
        insert(MeterRecord)
        .values(meter_number=meter_number, name=name, created_at=created_at)
        .on_conflict_do_update(
            index_elements=["meter_number"],
            set_={"name": name},
        )
        .returning(MeterRecord)
    )
    result = await session.execute(stmt)
    record = result.scalar_one()
    await session.commit()
    logger.info("Stored meter %s", meter_number, extra={"meter_number": meter_number})
    return record.to_meter()


async def list_meters(session: AsyncSession) -> list[Meter]:
    """Return all meters, most recently created first."""
    result = await session.execute(
        select(MeterRecord).order_by(MeterRecord.created_at.desc()),
    )
    return [record.to_meter() for record in result.scalars().all()]


async def get_meter(session: AsyncSession, meter_number: str) -> Meter | None:
    record = await session.get(MeterRecord, meter_number)
    if record is None:
        return None
    return record.to_meter()


async def update_meter(
    session: AsyncSession,
    old_meter_number: str,
    new_name: str,
    new_meter_number: str,
) -> Meter | None:
    """Rename a meter and optionally change its number.

    Args:
        session: Async SQLAlchemy session.
        old_meter_number: Current number of the meter to update.
        new_name: New display label.
        new_meter_number: New number; readings are re-pointed by the database.

    Returns:
        The updated meter, or ``None`` if *old_meter_number* does not exist.

    Raises:
        ValueError: If *new_meter_number* already belongs to another meter.
    """
    if new_meter_number != old_meter_number:
        taken = await session.get(MeterRecord, new_meter_number)
        if taken is not None:
            raise ValueError(f"Meter number {new_meter_number!r} is already in use.")

    try:
        result = await session.execute(
            update(MeterRecord)
            .where(MeterRecord.meter_number == old_meter_number)
            .values(meter_number=new_meter_number, name=new_name)
            .returning(MeterRecord),
        )
    except IntegrityError as exc:
        # Number claimed by a concurrent insert after the check above.
        await session.rollback()
        raise ValueError(f"Meter number {new_meter_number!r} is already in use.") from exc

    record = result.scalar_one_or_none()
    if record is None:
        await session.rollback()
        return None

    await session.commit()
    if new_meter_number != old_meter_number:
        logger.info("Re-keyed meter %s -> %s", old_meter_number, new_meter_number)
    return record.to_meter()


async def delete_meter(session: AsyncSession, meter_number: str) -> bool:
    """Delete a meter together with all of its readings.

    Returns:
        bool: ``True`` if the meter existed.
    """
    await session.execute(
        delete(ReadingRecord).where(ReadingRecord.meter_id == meter_number),
    )
    result = await session.execute(
        delete(MeterRecord).where(MeterRecord.meter_number == meter_number),
    )
    await session.commit()
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted meter %s", meter_number)
    return deleted
