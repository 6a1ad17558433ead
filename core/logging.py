"""
Logging configuration

Ingestion failures are logged with `extra={"error_context": ...}`; the
formatter below appends that context to the line so a failed cycle can be
traced from stdout alone.
"""

import logging
import sys
from typing import Optional
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ErrorContextFormatter(logging.Formatter):
    """Append a record's error_context (stage, feed url, ids) when present"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        error_context = getattr(record, "error_context", None)
        if not error_context:
            return line

        context = error_context.get("context") or {}
        details = ", ".join(f"{k}={v}" for k, v in context.items() if k != "error_timestamp")
        return f"{line} | {error_context.get('error_type')}: {details}" if details else line


def setup_logging(level: Optional[str] = None):
    """Configure application logging on stdout"""
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ErrorContextFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.basicConfig(level=log_level, handlers=[handler])

    # Library loggers are noisy at INFO
    for noisy in ("sqlalchemy.engine", "sqlalchemy.pool", "apscheduler", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {level_name} level")
