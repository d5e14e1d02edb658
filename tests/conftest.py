from collections.abc import AsyncIterator, Generator
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable

import httpx
import pytest

from flite_events.http_client import close_all_clients

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: End-to-end render cycle tests")


@pytest.fixture
def simple_settings() -> SimpleNamespace:
    """Lightweight settings object for FeedClient tests.

    Fields:
      - request_timeout: HTTP read timeout in seconds
    """
    return SimpleNamespace(request_timeout=5.0)


@pytest.fixture
def fixed_now() -> datetime:
    """Deterministic ``now`` used by classification tests."""
    return FIXED_NOW


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """Factory for raw feed event dicts using the feed's camelCase keys."""

    def _make(
        name: str = "Jazz Night",
        start: str = "2024-06-10T19:00:00Z",
        end: str = "2024-06-10T22:00:00Z",
        **extra: Any,
    ) -> dict[str, Any]:
        event = {
            "eventName": name,
            "startDateTime": start,
            "endDateTime": end,
            "venueName": "The Sway Room",
            "venueLocation": "123 Main St",
            "slug": name.lower().replace(" ", "-"),
            "color": "#336699",
            "hostFlyer": [f"https://cdn.example.com/{name.lower().replace(' ', '-')}.jpg"],
        }
        event.update(extra)
        return event

    return _make


@pytest.fixture
def mock_transport_client() -> Callable[..., httpx.AsyncClient]:
    """Build an httpx.AsyncClient backed by a MockTransport handler."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear flite_events environment variables around every test."""
    for name in (
        "FLITE_EVENTS_TEST_TIME",
        "FLITE_EVENTS_DEBUG",
        "FLITE_EVENTS_LOG_LEVEL",
        "FLITE_EVENTS_API_ENDPOINT",
        "FLITE_EVENTS_REQUEST_TIMEOUT",
        "FLITE_EVENTS_VIEWPORT_WIDTH",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
async def cleanup_shared_http_clients() -> AsyncIterator[None]:
    """Close shared HTTP clients after every test to prevent resource leaks."""
    yield
    await close_all_clients()
