"""
Tests for engine value types and the SQLAlchemy ORM models.

Validates timezone enforcement and immutability of the engine types, the
``meters``/``readings`` table layout and the record-to-value conversions.

CHANGELOG:
- 2026-10-12: Engine value type tests (STORY-002)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

from datetime import UTC, datetime

import pytest
from factories import at
from pydantic import ValidationError
from sqlalchemy import DateTime, Double, Text, inspect

from energylens.analytics.models import Reading, require_aware
from energylens.db.models import Base, MeterRecord, ReadingRecord


# ---------------------------------------------------------------------------
# Engine value types
# ---------------------------------------------------------------------------


class TestReading:
    def test_naive_date_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Reading(meter_id="A", value=1.0, date=datetime(2024, 1, 1))

    def test_is_frozen(self) -> None:
        r = Reading(meter_id="A", value=1.0, date=at(1))
        with pytest.raises(ValidationError):
            r.value = 2.0

    def test_optional_fields_default_to_none(self) -> None:
        r = Reading(meter_id="A", value=1.0, date=at(1))
        assert r.id is None
        assert r.image_url is None


class TestRequireAware:
    def test_returns_aware_value(self) -> None:
        value = datetime(2024, 1, 1, tzinfo=UTC)
        assert require_aware(value) is value

    def test_raises_on_naive(self) -> None:
        with pytest.raises(ValueError, match="timezone-aware"):
            require_aware(datetime(2024, 1, 1))


# ---------------------------------------------------------------------------
# ORM models
# ---------------------------------------------------------------------------


class TestMeterRecordColumns:
    """Tests for the ``meters`` table."""

    def test_table_name(self) -> None:
        assert MeterRecord.__tablename__ == "meters"

    def test_column_names(self) -> None:
        mapper = inspect(MeterRecord)
        assert {col.key for col in mapper.column_attrs} == {"meter_number", "name", "created_at"}

    def test_meter_number_is_primary_key(self) -> None:
        pk = [col.name for col in MeterRecord.__table__.primary_key.columns]
        assert pk == ["meter_number"]

    def test_created_at_is_timezone_aware(self) -> None:
        col = MeterRecord.__table__.c.created_at
        assert isinstance(col.type, DateTime)
        assert col.type.timezone is True


class TestReadingRecordColumns:
    """Tests for the ``readings`` table."""

    def test_table_name(self) -> None:
        assert ReadingRecord.__tablename__ == "readings"

    def test_column_types(self) -> None:
        table = ReadingRecord.__table__
        assert isinstance(table.c.id.type, Text)
        assert isinstance(table.c.meter_id.type, Text)
        assert isinstance(table.c.value.type, Double)
        assert isinstance(table.c.date.type, DateTime)
        assert table.c.image_url.nullable is True

    def test_id_has_no_column_default(self) -> None:
        assert ReadingRecord.__table__.c.id.default is None

    def test_meter_id_references_meter_number_with_cascade(self) -> None:
        (fk,) = ReadingRecord.__table__.c.meter_id.foreign_keys
        assert fk.target_fullname == "meters.meter_number"
        assert fk.ondelete == "CASCADE"
        assert fk.onupdate == "CASCADE"

    def test_meter_date_index(self) -> None:
        indexes = {ix.name: [c.name for c in ix.columns] for ix in ReadingRecord.__table__.indexes}
        assert indexes["ix_readings_meter_id_date"] == ["meter_id", "date"]

    def test_registered_on_base_metadata(self) -> None:
        assert set(Base.metadata.tables) >= {"meters", "readings"}


class TestRecordConversion:
    def test_reading_record_to_reading(self) -> None:
        record = ReadingRecord(id="r1", meter_id="A", value=12.5, date=at(3), image_url=None)

        assert record.to_reading() == Reading(id="r1", meter_id="A", value=12.5, date=at(3))

    def test_meter_record_to_meter(self) -> None:
        record = MeterRecord(meter_number="A", name="Kitchen", created_at=at(1))

        meter = record.to_meter()

        assert (meter.meter_number, meter.name, meter.created_at) == ("A", "Kitchen", at(1))
