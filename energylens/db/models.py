"""
SQLAlchemy ORM models for meters and their readings.

A meter is keyed by its external ``meter_number``; readings reference that
number (not a surrogate id), so re-keying a meter cascades to its readings.

CHANGELOG:
- 2026-10-19: Drop unused reading id column default (STORY-013)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import datetime

from sqlalchemy import DateTime, Double, ForeignKey, Index, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from energylens.analytics.models import Meter, Reading


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all ORM models."""

    pass


class MeterRecord(Base):
    """A physical utility meter.

    Attributes:
        meter_number: Stable external identifier and primary key.
        name: Display label.
        created_at: When the meter was added.
    """

    __tablename__ = "meters"

    meter_number: Mapped[str] = mapped_column(Text, primary_key=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    def to_meter(self) -> Meter:
        """Convert to the analytics engine's ``Meter`` value."""
        return Meter(
            name=self.name,
            meter_number=self.meter_number,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"MeterRecord(meter_number={self.meter_number!r}, name={self.name!r})"


class ReadingRecord(Base):
    """A cumulative counter reading of one meter.

    Attributes:
        id: uuid4 hex assigned by the reading services on insert.
        meter_id: ``meter_number`` of the owning meter.
        value: Cumulative value in kWh.
        date: Observation timestamp in UTC.
        image_url: Optional photo reference.
    """

    __tablename__ = "readings"
    __table_args__ = (Index("ix_readings_meter_id_date", "meter_id", "date"),)

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    meter_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("meters.meter_number", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    value: Mapped[float] = mapped_column(Double, nullable=False)
    date: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    def to_reading(self) -> Reading:
        """Convert to the analytics engine's ``Reading`` value."""
        return Reading(
            id=self.id,
            meter_id=self.meter_id,
            value=self.value,
            date=self.date,
            image_url=self.image_url,
        )

    def __repr__(self) -> str:
        return (
            f"ReadingRecord(id={self.id!r}, meter_id={self.meter_id!r}, "
            f"value={self.value!r}, date={self.date!r})"
        )
