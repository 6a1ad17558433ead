import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import build_engine, init_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def init_database():
    logger.info("Connecting to database...")
    engine = build_engine(settings.DATABASE_URL, echo=True)
    
    try:
        logger.info("Creating tables...")
        await init_db(engine)
        logger.info("Tables created successfully.")
    finally:
        await engine.dispose()

if __name__ == "__main__":
    asyncio.run(init_database())
