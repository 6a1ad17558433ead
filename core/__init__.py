"""
Core utilities and configuration for the VIA Rail train tracker.

Modules:
    config: Application configuration and environment variable management
    database: Engine, session management and schema bootstrap
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import async_session_maker, init_db
    from core.exceptions import FetchError, IngestError
    from core.logging import setup_logging
"""
