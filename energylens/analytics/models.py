"""
Value types consumed and produced by the consumption analytics engine.

``Reading`` and ``Meter`` mirror the persisted records the service layer
loads from the database; ``IntervalConsumption`` is derived by the engine
from two adjacent readings and is never stored.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


def require_aware(value: datetime) -> datetime:
    """Reject naive datetimes so interval spans are always unambiguous.

    Raises:
        ValueError: If ``value`` carries no tzinfo.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")
    return value


class Reading(BaseModel):
    """One observation of a meter's cumulative counter.

    Attributes:
        meter_id: ``meter_number`` of the meter this reading belongs to.
        value: Cumulative counter value in kWh.
        date: Observation timestamp (timezone-aware).
        image_url: Optional reference to a captured photo of the meter.
        id: Identifier assigned by the store, ``None`` before persisting.
    """

    model_config = ConfigDict(frozen=True)

    meter_id: str
    value: float
    date: datetime
    image_url: str | None = None
    id: str | None = None

    @field_validator("date")
    @classmethod
    def date_must_be_aware(cls, v: datetime) -> datetime:
        return require_aware(v)


class Meter(BaseModel):
    """A named physical counter, keyed by its external ``meter_number``."""

    model_config = ConfigDict(frozen=True)

    name: str
    meter_number: str
    created_at: datetime


class IntervalConsumption(BaseModel):
    """Consumption observed between two adjacent readings of one meter.

    Attributes:
        meter_id: Meter the interval belongs to.
        start_date: Date of the earlier reading.
        end_date: Date of the later reading (always after ``start_date``).
        consumption_kwh: ``end.value - start.value``, never negative.
        hours: Interval length in hours, always positive.
        kwh_per_hour: ``consumption_kwh / hours``.
    """

    model_config = ConfigDict(frozen=True)

    meter_id: str
    start_date: datetime
    end_date: datetime
    consumption_kwh: float
    hours: float
    kwh_per_hour: float
