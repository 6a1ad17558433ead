"""
VIA Rail feed extractor.

One GET per call, no retries: a failed fetch aborts the current ingestion
cycle and the next scheduled tick is the retry.
"""

import httpx
from typing import Dict, Any, Optional
from pydantic import ValidationError
from schemas.feed import RawTrain
from core.config import settings
from core.exceptions import FetchError, DecodeError
import logging

logger = logging.getLogger(__name__)


def decode_feed(payload: Any, feed_url: Optional[str] = None) -> Dict[str, RawTrain]:
    """
    Split the feed object into validated (name, record) pairs.

    The feed's key order is not meaningful; callers that need an order
    sort by name.

    Raises:
        DecodeError: payload is not an object, or a record fails validation
    """
    if not isinstance(payload, dict):
        raise DecodeError(
            "Feed payload is not a JSON object",
            context={"feed_url": feed_url, "payload_type": type(payload).__name__}
        )

    trains: Dict[str, RawTrain] = {}
    for name, record in payload.items():
        try:
            trains[name] = RawTrain.model_validate(record)
        except ValidationError as e:
            raise DecodeError(
                f"Invalid record for train {name}",
                context={
                    "feed_url": feed_url,
                    "train_name": name,
                    "error_count": e.error_count()
                },
                original_exception=e
            )
    return trains


class FeedExtractor:
    """
    Fetch the live train feed over HTTP.

    Attributes:
        feed_url: Feed endpoint (default: settings.FEED_URL)
        timeout: Request timeout in seconds (default: settings.FETCH_TIMEOUT)
    """

    def __init__(
        self,
        feed_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.feed_url = feed_url or settings.FEED_URL
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT
        self.transport = transport

    async def fetch_trains(self) -> Dict[str, RawTrain]:
        """
        Fetch and decode the feed.

        Returns:
            Mapping of train name to raw train record

        Raises:
            FetchError: The feed could not be retrieved
            DecodeError: The response is not a valid train mapping
        """
        logger.info(f"Fetching train data from {self.feed_url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.feed_url)
        except httpx.TimeoutException as e:
            raise FetchError(
                "Feed request timed out",
                context={"feed_url": self.feed_url, "timeout": self.timeout},
                original_exception=e
            )
        except httpx.HTTPError as e:
            raise FetchError(
                "Feed request failed",
                context={"feed_url": self.feed_url},
                original_exception=e
            )

        if response.status_code >= 400:
            raise FetchError(
                f"Feed returned HTTP {response.status_code}",
                context={
                    "feed_url": self.feed_url,
                    "status_code": response.status_code,
                    "response_body": response.text[:500]
                }
            )

        logger.info("Decoding train data")
        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(
                "Failed to parse JSON response",
                context={
                    "feed_url": self.feed_url,
                    "response_body": response.text[:500]
                },
                original_exception=e
            )

        trains = decode_feed(payload, feed_url=self.feed_url)
        logger.info(f"Decoded {len(trains)} trains")
        return trains
