"""Exception hierarchy for flite_events."""

from __future__ import annotations

from typing import Optional


class FliteEventsError(Exception):
    """Base exception for all flite_events errors."""


class ConfigError(FliteEventsError, ValueError):
    """Raised when a configuration value fails validation."""


class FeedFetchError(FliteEventsError):
    """Base exception for feed fetch errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FeedNetworkError(FeedFetchError):
    """Network error during feed fetch."""


class FeedTimeoutError(FeedFetchError):
    """Timeout error during feed fetch."""


class FeedParseError(FeedFetchError):
    """Feed response body was not valid JSON."""


__all__ = [
    "ConfigError",
    "FeedFetchError",
    "FeedNetworkError",
    "FeedParseError",
    "FeedTimeoutError",
    "FliteEventsError",
]
