"""Clock and timestamp helpers for flite_events."""

from __future__ import annotations

import datetime
import logging
import os
from typing import Any

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

# Freezes now_utc() for tests and troubleshooting (ISO 8601 string)
TEST_TIME_ENV_VAR = "FLITE_EVENTS_TEST_TIME"


class TimeProvider:
    """Provides the current time, honouring the test-time override."""

    def now_utc(self) -> datetime.datetime:
        """Return current UTC time with tzinfo.

        Can be overridden for testing via FLITE_EVENTS_TEST_TIME environment variable.
        Format: ISO 8601 datetime string (e.g., "2025-10-27T08:20:00-07:00")

        Returns:
            Current time in UTC with timezone info
        """
        test_time = os.environ.get(TEST_TIME_ENV_VAR)
        if test_time:
            try:
                return to_utc(date_parser.isoparse(test_time))
            except (ValueError, OverflowError) as e:
                logger.warning("Failed to parse %s=%r: %s", TEST_TIME_ENV_VAR, test_time, e)

        return datetime.datetime.now(datetime.timezone.utc)


_time_provider = TimeProvider()


def now_utc() -> datetime.datetime:
    """Get current UTC time (convenience function).

    Returns:
        Current time in UTC
    """
    return _time_provider.now_utc()


def to_utc(dt: datetime.datetime) -> datetime.datetime:
    """Convert a datetime to UTC, assuming UTC for naive values."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def parse_timestamp(value: Any) -> datetime.datetime:
    """Parse a feed timestamp into a timezone-aware UTC datetime.

    Accepts ``datetime`` objects, ISO 8601 strings and numbers, which are
    read as milliseconds since the Unix epoch. Naive values are taken as UTC
    so that every comparison against ``now`` is between aware values.

    Raises:
        ValueError: If the value is not a datetime, epoch number or parsable
            ISO 8601 string
    """
    if isinstance(value, datetime.datetime):
        return to_utc(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.datetime.fromtimestamp(value / 1000, tz=datetime.timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            raise ValueError(f"Epoch timestamp out of range {value!r}: {e}") from e
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected an ISO 8601 timestamp, got {value!r}")
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unparsable timestamp {value!r}: {e}") from e
    return to_utc(parsed)
