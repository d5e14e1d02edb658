"""Async feed client: fetches the events feed and dispatches it for classification."""

from __future__ import annotations

import datetime
import logging
from typing import Any, Callable, Optional
from urllib.parse import urlparse

import httpx

from .classifier import EventClassifier
from .config import EventsConfig
from .exceptions import FeedFetchError, FeedNetworkError, FeedParseError, FeedTimeoutError
from .http_client import DEFAULT_HEADERS, get_shared_client
from .models import FeedFailure, FeedOutcome
from .timezone_utils import now_utc

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 20.0


class FeedClient:
    """Fetches the events feed over HTTP and classifies the result.

    One call to :meth:`fetch` issues exactly one GET request; failures are
    returned as :class:`FeedFailure` and never retried.
    """

    def __init__(
        self,
        settings: Any = None,
        client: Optional[httpx.AsyncClient] = None,
        classifier: Optional[EventClassifier] = None,
        clock: Callable[[], datetime.datetime] = now_utc,
        use_shared_client: bool = True,
    ) -> None:
        """Initialize feed client.

        Args:
            settings: Optional settings object (``request_timeout`` is honoured)
            client: Optional pre-built HTTP client; never closed by this object
            classifier: Classifier used on successful responses
            clock: Source of the ``now`` snapshot taken after each fetch
            use_shared_client: Use the pooled client from http_client when no
                client is injected
        """
        self.settings = settings
        self.client: Optional[httpx.AsyncClient] = client
        self._owns_client = False
        self._use_shared_client = use_shared_client and client is None
        self._client_id = "feed"
        self._classifier = classifier or EventClassifier()
        self._clock = clock

        logger.debug("Feed client initialized (shared_client: %s)", self._use_shared_client)

    async def __aenter__(self) -> FeedClient:
        """Async context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, _exc_type: Any, _exc_val: Any, _exc_tb: Any) -> None:
        """Async context manager exit."""
        await self._close_client()

    @property
    def request_timeout(self) -> float:
        return float(getattr(self.settings, "request_timeout", DEFAULT_REQUEST_TIMEOUT))

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure an HTTP client exists and return it."""
        if self._use_shared_client:
            # Looked up on every call: the pool hands out one client per event loop
            self.client = await get_shared_client(self._client_id)
            return self.client

        if self.client is not None and not self.client.is_closed:
            return self.client

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.request_timeout, connect=10.0),
            follow_redirects=True,
            headers=DEFAULT_HEADERS,
        )
        self._owns_client = True
        return self.client

    async def _close_client(self) -> None:
        """Close the HTTP client if this object created it."""
        if self.client is not None and self._owns_client and not self.client.is_closed:
            await self.client.aclose()
            logger.debug("Closed individual HTTP client")
        if self._owns_client or self._use_shared_client:
            # Shared clients stay open for reuse; only drop the reference
            self.client = None
            self._owns_client = False

    def _validate_url(self, url: str) -> bool:
        """Accept only absolute http(s) URLs with a hostname."""
        try:
            parsed = urlparse(url)
        except ValueError as e:
            logger.debug("URL validation error for %s: %s", url, e)
            return False

        if parsed.scheme not in ("http", "https"):
            logger.debug("Blocked non-HTTP(S) URL: %s", url)
            return False
        if not parsed.hostname:
            logger.debug("Blocked URL with missing hostname: %s", url)
            return False
        return True

    async def fetch_payload(self, url: str) -> Any:
        """GET the feed and decode its JSON body.

        Raises:
            FeedTimeoutError: The request timed out
            FeedNetworkError: Connection-level failure
            FeedFetchError: Non-success HTTP status or other transport error
            FeedParseError: Body was not valid JSON
        """
        client = await self._ensure_client()
        logger.debug("Fetching events feed from %s", url)

        try:
            response = await client.get(url, timeout=self.request_timeout)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FeedTimeoutError(f"Request timeout after {self.request_timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FeedFetchError(f"HTTP {status}: {e.response.reason_phrase}", status) from e
        except httpx.NetworkError as e:
            raise FeedNetworkError(f"Network error: {e}") from e
        except httpx.HTTPError as e:
            raise FeedFetchError(f"HTTP error: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise FeedParseError("Feed response was not valid JSON", response.status_code) from e

        logger.debug("Fetched events feed from %s (%d bytes)", url, len(response.content))
        return payload

    async def fetch(self, config: EventsConfig) -> FeedOutcome:
        """Fetch and classify the feed named by ``config.api_endpoint``.

        The ``now`` snapshot is taken once, after the response has been
        decoded, and used for the whole classification.

        Returns:
            ClassificationResult, EmptyFeed or FeedFailure
        """
        url = config.api_endpoint
        if not self._validate_url(url):
            logger.error("Refusing to fetch events from invalid URL: %r", url)
            return FeedFailure(message="Invalid feed URL")

        try:
            payload = await self.fetch_payload(url)
        except FeedFetchError as e:
            logger.error("Error fetching events from %s: %s", url, e)
            return FeedFailure(message=str(e), status_code=e.status_code)

        now = self._clock()
        return self._classifier.classify(payload, now, config.enable_past_events)
