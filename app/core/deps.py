"""Dependencies for FastAPI routes."""

from datetime import datetime
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db


def get_now() -> datetime:
    """Wall-clock time of the request; overridden in tests."""
    return datetime.now()


# Common dependency aliases
DbSession = Annotated[AsyncSession, Depends(get_db)]
Now = Annotated[datetime, Depends(get_now)]
