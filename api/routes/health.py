"""
Health check endpoint with database and ingestion status
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from schemas.api import HealthCheckResponse
from services.query_store import TrainStore
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(request: Request, db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.
    
    Returns:
    - Database connectivity status
    - Latest stored pull
    - Whether the ingestion scheduler is running
    """
    db_connected = False
    latest = None
    
    try:
        await db.execute(text("SELECT 1"))
        db_connected = True
        latest = await TrainStore(db).latest_pull()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
    
    scheduler = getattr(request.app.state, "scheduler", None)
    
    return HealthCheckResponse(
        status="healthy" if db_connected else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        database_connected=db_connected,
        scheduler_running=bool(scheduler and scheduler.running),
        last_pull_id=latest.id if latest else None,
        last_pulled_at=latest.pulled_at if latest else None,
    )
