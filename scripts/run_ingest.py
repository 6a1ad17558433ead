"""
Script to run a single ingestion cycle outside the API process
"""

import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import build_engine, build_session_maker, init_db
from core.exceptions import TrackerError
from core.logging import setup_logging
from ingestion.extractors.feed_extractor import FeedExtractor
from ingestion.loaders.pull_loader import PullLoader
from ingestion.runner import IngestionRunner

logger = logging.getLogger(__name__)


async def run_ingest() -> int:
    """Fetch the feed once and store it as a pull"""
    engine = build_engine(settings.DATABASE_URL)
    
    try:
        await init_db(engine)
        runner = IngestionRunner(
            fetcher=FeedExtractor(),
            loader=PullLoader(build_session_maker(engine))
        )
        pull_id = await runner.run()
        logger.info(f"Stored pull {pull_id}")
        return 0
    except TrackerError as e:
        logger.error(f"Ingestion failed: {e}")
        return 1
    finally:
        await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    sys.exit(asyncio.run(run_ingest()))
