"""
Database package for SQLAlchemy models and session management.

CHANGELOG:
- 2026-10-16: Export get_session_factory and dispose_engine (STORY-010)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

from energylens.db.models import Base, MeterRecord, ReadingRecord
from energylens.db.session import (
    create_engine,
    dispose_engine,
    get_async_session,
    get_session_factory,
)

__all__ = [
    "Base",
    "MeterRecord",
    "ReadingRecord",
    "create_engine",
    "dispose_engine",
    "get_async_session",
    "get_session_factory",
]
