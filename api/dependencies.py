"""
FastAPI dependencies
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import async_session_maker
from services.query_store import TrainStore


async def get_db() -> AsyncSession:
    """Request-scoped database session"""
    async with async_session_maker() as session:
        yield session


async def get_store(db: AsyncSession = Depends(get_db)) -> TrainStore:
    return TrainStore(db)
