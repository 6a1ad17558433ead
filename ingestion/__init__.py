"""
Feed ingestion pipeline.

Modules:
    runner: One ingestion cycle (fetch, then store as a pull)
    scheduler: APScheduler job running a cycle at startup and on an interval

Subpackages:
    extractors: HTTP feed fetcher and decoder
    transformers: Sentinel resolution and normalization to row values
    loaders: Transactional pull writer

Architecture:
    1. Fetch - GET the feed, decode the name -> train object
    2. Normalize - resolve "&mdash;" placeholders into nulls
    3. Load - insert pull, trains and station times in one transaction

    A failure at any step aborts the cycle; nothing partial is stored.

Usage:
    from ingestion.extractors.feed_extractor import FeedExtractor
    from ingestion.loaders.pull_loader import PullLoader
    from ingestion.runner import IngestionRunner

    runner = IngestionRunner(FeedExtractor(), PullLoader(async_session_maker))
    pull_id = await runner.run()
"""
