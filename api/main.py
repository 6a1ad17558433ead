
"""
FastAPI application initialization
"""

from fastapi import FastAPI
from api.routes import health, pulls, trains
from api.errors import setup_error_handlers
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.database import async_session_maker, init_db
from core.logging import setup_logging
from ingestion.extractors.feed_extractor import FeedExtractor
from ingestion.loaders.pull_loader import PullLoader
from ingestion.runner import IngestionRunner
from ingestion.scheduler import IngestionScheduler
import logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="VIA Rail Train Tracker API",
    description="Read-only access to periodically recorded VIA Rail train positions",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)
setup_error_handlers(app)

scheduler = IngestionScheduler(
    runner=IngestionRunner(
        fetcher=FeedExtractor(),
        loader=PullLoader(async_session_maker)
    )
)
app.state.scheduler = scheduler

app.include_router(health.router)
app.include_router(pulls.router)
app.include_router(trains.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting VIA Rail Train Tracker API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else settings.DATABASE_URL}")

    if settings.CREATE_SCHEMA_ON_STARTUP:
        await init_db()

    if settings.SCHEDULER_ENABLED:
        scheduler.start()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down VIA Rail Train Tracker API")
    await scheduler.stop()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
