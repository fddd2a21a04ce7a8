"""
Initial schema: meters and readings tables.

Creates ``meters`` keyed by ``meter_number`` and ``readings`` referencing
it with cascading delete/update, plus the (meter_id, date) index used by
the per-meter reading queries.

Revision ID: 001
Revises: None
Create Date: 2026-10-11

CHANGELOG:
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the meters and readings tables."""
    op.create_table(
        "meters",
        sa.Column("meter_number", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("meter_number"),
    )

    op.create_table(
        "readings",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("meter_id", sa.Text(), nullable=False),
        sa.Column("value", sa.Double(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["meter_id"],
            ["meters.meter_number"],
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
    )
    op.create_index("ix_readings_meter_id_date", "readings", ["meter_id", "date"])


def downgrade() -> None:
    """Drop readings first; it references meters."""
    op.drop_index("ix_readings_meter_id_date", table_name="readings")
    op.drop_table("readings")
    op.drop_table("meters")
