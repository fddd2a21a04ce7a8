"""
FastAPI dependency injection providers.

CHANGELOG:
- 2026-10-16: Add AppSettings dependency (STORY-010)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from energylens.config import Settings, get_settings
from energylens.db.session import get_async_session

# Request-scoped database session:
#   async def list_things(db: DbSession): ...
DbSession = Annotated[AsyncSession, Depends(get_async_session)]

# Settings are re-read per request so environment changes apply.
AppSettings = Annotated[Settings, Depends(get_settings)]
