"""
Custom exceptions for the train tracker with structured error context.

Each exception carries a context dict for logging, and optionally the
original exception it wraps.

Exception Hierarchy:
    TrackerError (base)
    ├── ExtractionError
    │   ├── FetchError
    │   └── DecodeError
    ├── IngestError
    └── QueryError
        ├── NotFoundError
        └── BadRequestError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class TrackerError(Exception):
    """
    Base exception for all tracker errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (feed url, stage, ids, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(TrackerError):
    """Base exception for feed retrieval failures."""
    pass


class FetchError(ExtractionError):
    """
    The feed could not be retrieved.

    Context should include:
        - feed_url: The feed endpoint
        - status_code: HTTP status code (if a response arrived)
        - response_body: Response body (truncated)
    """
    pass


class DecodeError(ExtractionError):
    """
    The feed payload was retrieved but is not a valid train mapping.

    Context should include:
        - feed_url: The feed endpoint
        - train_name: Key of the record that failed validation (if applicable)
    """
    pass


# ============================================================================
# Ingestion Errors
# ============================================================================

class IngestError(TrackerError):
    """
    A pull could not be written. The whole unit of work was rolled back.

    Attributes:
        stage: Where it failed: "pull", "train", "station_time" or "commit"
    """

    STAGES = ("pull", "train", "station_time", "commit")

    def __init__(
        self,
        message: str,
        stage: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        if stage not in self.STAGES:
            raise ValueError(f"Unknown ingest stage: {stage}")
        super().__init__(message, context, original_exception)
        self.stage = stage
        self.context["stage"] = stage


# ============================================================================
# Query Errors
# ============================================================================

class QueryError(TrackerError):
    """Base exception for read-side failures surfaced to HTTP clients."""
    pass


class NotFoundError(QueryError):
    """
    The requested pull or train does not exist.

    Context should include:
        - resource: "pull" or "train"
        - resource_id: The identifier that was looked up
    """
    pass


class BadRequestError(QueryError):
    """A request parameter could not be parsed."""
    pass
