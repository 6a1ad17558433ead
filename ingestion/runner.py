# ============================================================================
# File: ingestion/runner.py
# Description: One ingestion cycle: fetch the feed, store it as a pull
# ============================================================================
"""
Ingestion Runner - orchestrates Fetch → Normalize → Load for one pull.

Errors are logged with their context and re-raised; deciding whether a
failure is fatal is left to the caller (the scheduler swallows them).
"""

from typing import Dict, Protocol
import logging
import time

from ingestion.loaders.pull_loader import PullLoader
from schemas.feed import RawTrain
from core.exceptions import ExtractionError, IngestError

logger = logging.getLogger(__name__)


class TrainFetcher(Protocol):
    async def fetch_trains(self) -> Dict[str, RawTrain]:
        ...


class IngestionRunner:
    """
    Run a single ingestion cycle.

    Responsibilities:
    - Fetch the feed through the injected fetcher
    - Hand the decoded trains to the loader as one unit of work
    - Log the outcome with timings
    """

    def __init__(self, fetcher: TrainFetcher, loader: PullLoader):
        self.fetcher = fetcher
        self.loader = loader

    async def run(self) -> int:
        """
        Fetch and store one pull.

        Returns:
            ID of the stored pull

        Raises:
            FetchError / DecodeError: The feed could not be read
            IngestError: The pull could not be stored
        """
        start = time.perf_counter()

        try:
            trains = await self.fetcher.fetch_trains()
        except ExtractionError as e:
            logger.error(
                f"Fetching train data failed: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            raise

        logger.info(f"Inserting train data for {len(trains)} trains")

        try:
            pull_id = await self.loader.ingest_pull(trains)
        except IngestError as e:
            logger.error(
                f"Inserting train data failed at stage {e.stage}: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Ingestion cycle stored pull {pull_id} in {elapsed_ms:.0f}ms")
        return pull_id

