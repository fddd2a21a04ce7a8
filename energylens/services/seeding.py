"""
Seed and synthetic reading data.

Two sources of non-user data:

- :data:`SEED_READINGS`, a real historic series captured on paper (German
  date and decimal-comma notation), which :func:`run_seeding` writes over
  a meter's existing readings.
- Generators producing synthetic series (steady, multi-profile and
  seasonal) for demos and tests. Randomness comes from an injectable
  ``random.Random`` so output can be made deterministic.

CHANGELOG:
- 2026-10-17: Add synthetic generators (STORY-011)
- 2026-10-16: Initial creation (STORY-011)

TODO:
- None
"""

import logging
import random
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from energylens.analytics.models import Reading
from energylens.db.models import ReadingRecord

logger = logging.getLogger(__name__)

# (date "d.M.yy H:mm" in UTC, value in kWh with decimal comma)
SEED_READINGS: tuple[tuple[str, str], ...] = (
    ("25.12.22 11:38", "27324,00"),
    ("21.1.23 14:20", "27366,00"),
    ("27.2.23 9:07", "27560,00"),
    ("1.5.23 12:46", "28049,00"),
    ("24.6.23 19:21", "28742,00"),
    ("26.6.23 7:27", "28759,00"),
    ("14.11.23 10:45", "30101,00"),
    ("15.1.24 14:39", "30208,00"),
    ("18.02.24 20:10", "30340,00"),
    ("9.6.24 13:20", "31270,00"),
    ("26.6.24 7:46", "31445,00"),
    ("21.12.24 8:24", "32808,00"),
    ("30.4.25 17:54", "33755,00"),
    ("24.6.25 9:30", "34432,00"),
    ("30.11.25 9:49", "35842,00"),
    ("16.12.25 9:24", "35892,00"),
)

_SEED_DATE_FORMAT = "%d.%m.%y %H:%M"


def parse_seed_row(date_string: str, value_string: str) -> tuple[datetime, float]:
    """Parse one seed row into a UTC timestamp and a kWh value.

    Args:
        date_string: Date like ``"1.5.23 12:46"`` (day.month.year hour:minute).
        value_string: Value like ``"28049,00"`` (decimal comma).

    Returns:
        Tuple of (timestamp, value).

    Raises:
        ValueError: Naming the field that could not be parsed.
    """
    try:
        date = datetime.strptime(date_string, _SEED_DATE_FORMAT).replace(tzinfo=UTC)
    except ValueError as exc:
        raise ValueError(f"Invalid seed date: {date_string!r}") from exc

    try:
        value = float(value_string.replace(",", "."))
    except ValueError as exc:
        raise ValueError(f"Invalid seed value: {value_string!r}") from exc

    return date, value


def seed_readings(meter_id: str) -> list[Reading]:
    """Build the historic seed series for *meter_id*."""
    readings = []
    for date_string, value_string in SEED_READINGS:
        date, value = parse_seed_row(date_string, value_string)
        readings.append(Reading(meter_id=meter_id, value=value, date=date))
    return readings


async def replace_readings(
    session: AsyncSession,
    meter_id: str,
    readings: list[Reading],
) -> int:
    """Delete all readings of *meter_id* and store *readings* in their place.

    Returns:
        int: Number of readings inserted.
    """
    await session.execute(
        delete(ReadingRecord).where(ReadingRecord.meter_id == meter_id),
    )
    session.add_all(
        [
            ReadingRecord(
                id=uuid.uuid4().hex,
                meter_id=meter_id,
                value=reading.value,
                date=reading.date,
                image_url=reading.image_url,
            )
            for reading in readings
        ]
    )
    await session.commit()
    logger.info("Replaced readings of meter %s with %d rows", meter_id, len(readings))
    return len(readings)


async def run_seeding(session: AsyncSession, meter_id: str) -> int:
    """Purge a meter's readings and insert the historic seed series.

    The series is parsed before anything is deleted, so a bad row leaves
    the stored readings untouched.
    """
    return await replace_readings(session, meter_id, seed_readings(meter_id))


def _series(
    meter_id: str,
    start: datetime,
    end: datetime,
    initial_reading: float,
    reading_interval_days: int,
    consumption_for: Callable[[datetime], float],
) -> list[Reading]:
    if reading_interval_days < 1:
        raise ValueError("reading_interval_days must be >= 1")

    readings: list[Reading] = []
    current_date = start
    current_reading = initial_reading
    while current_date <= end:
        readings.append(Reading(meter_id=meter_id, value=current_reading, date=current_date))
        current_reading += consumption_for(current_date)
        current_date += timedelta(days=reading_interval_days)
    return readings


def generate_readings(
    start: datetime,
    end: datetime,
    meter_id: str = "test-meter",
    initial_reading: float = 5000.0,
    avg_daily_consumption: float = 15.0,
    variance: float = 0.3,
    reading_interval_days: int = 7,
    rng: random.Random | None = None,
) -> list[Reading]:
    """Generate a steady synthetic series.

    Readings are taken every *reading_interval_days* from *start* up to and
    including *end*. Each interval consumes
    ``avg_daily_consumption * days * (1 + u)`` with ``u`` uniform in
    ``[-variance, variance]``.

    Raises:
        ValueError: If *reading_interval_days* is below 1.
    """
    rng = rng or random.Random()

    def consumption_for(_: datetime) -> float:
        factor = 1.0 + rng.uniform(-variance, variance)
        return avg_daily_consumption * reading_interval_days * factor

    return _series(meter_id, start, end, initial_reading, reading_interval_days, consumption_for)


# meter id -> (initial reading, avg daily kWh, variance, interval days)
METER_PROFILES: dict[str, tuple[float, float, float, int]] = {
    "household-001": (2500.0, 8.0, 0.25, 5),
    "office-002": (8000.0, 25.0, 0.4, 7),
    "workshop-003": (15000.0, 45.0, 0.5, 7),
}


def generate_multiple_meter_readings(
    start: datetime,
    end: datetime,
    rng: random.Random | None = None,
) -> dict[str, list[Reading]]:
    """Generate one series per profile in :data:`METER_PROFILES`."""
    rng = rng or random.Random()
    return {
        meter_id: generate_readings(
            start,
            end,
            meter_id=meter_id,
            initial_reading=initial,
            avg_daily_consumption=daily,
            variance=variance,
            reading_interval_days=interval,
            rng=rng,
        )
        for meter_id, (initial, daily, variance, interval) in METER_PROFILES.items()
    }


def seasonal_factor(month: int) -> float:
    """Consumption multiplier for a calendar month (winter draws more)."""
    if month in (12, 1, 2):
        return 1.5
    if month in (3, 4, 11):
        return 1.2
    return 0.8


def generate_seasonal_readings(
    start: datetime,
    end: datetime,
    meter_id: str = "seasonal-meter",
    initial_reading: float = 10000.0,
    base_consumption: float = 15.0,
    reading_interval_days: int = 7,
    rng: random.Random | None = None,
) -> list[Reading]:
    """Generate a series whose consumption follows :func:`seasonal_factor`.

    The month of each interval's starting reading picks the factor, with
    +/-20% uniform noise on top.
    """
    rng = rng or random.Random()

    def consumption_for(date: datetime) -> float:
        noise = 1.0 + rng.uniform(-0.2, 0.2)
        return base_consumption * reading_interval_days * seasonal_factor(date.month) * noise

    return _series(meter_id, start, end, initial_reading, reading_interval_days, consumption_for)
