"""Unit tests for flite_events.timezone_utils module."""

from datetime import datetime, timedelta, timezone

import pytest

from flite_events.timezone_utils import TEST_TIME_ENV_VAR, now_utc, parse_timestamp, to_utc

pytestmark = pytest.mark.unit


class TestNowUtc:
    """Clock with test-time override."""

    def test_now_utc_when_no_override_then_aware_current_time(self) -> None:
        now = now_utc()

        assert now.tzinfo is not None
        assert abs(datetime.now(timezone.utc) - now) < timedelta(seconds=5)

    def test_now_utc_when_override_set_then_returns_frozen_time(self, monkeypatch) -> None:
        monkeypatch.setenv(TEST_TIME_ENV_VAR, "2025-10-27T08:20:00-07:00")

        assert now_utc() == datetime(2025, 10, 27, 15, 20, tzinfo=timezone.utc)

    def test_now_utc_when_override_invalid_then_falls_back_to_clock(
        self, monkeypatch, caplog
    ) -> None:
        monkeypatch.setenv(TEST_TIME_ENV_VAR, "not a time")

        now = now_utc()

        assert abs(datetime.now(timezone.utc) - now) < timedelta(seconds=5)
        assert "Failed to parse" in caplog.text


class TestParseTimestamp:
    def test_parse_timestamp_when_offset_then_converted_to_utc(self) -> None:
        parsed = parse_timestamp("2024-06-10T19:00:00+02:00")

        assert parsed == datetime(2024, 6, 10, 17, 0, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    def test_parse_timestamp_when_datetime_then_normalised(self) -> None:
        assert parse_timestamp(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", "   ", "tomorrow", True, None, 1e300])
    def test_parse_timestamp_when_invalid_then_value_error(self, value) -> None:
        with pytest.raises(ValueError):
            parse_timestamp(value)

    def test_parse_timestamp_when_epoch_millis_then_utc(self) -> None:
        assert parse_timestamp(1718046000000) == datetime(2024, 6, 10, 19, 0, tzinfo=timezone.utc)
        assert parse_timestamp(0.0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_to_utc_when_aware_then_same_instant(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        dt = datetime(2024, 1, 1, 2, 0, tzinfo=plus_two)

        assert to_utc(dt) == dt
        assert to_utc(dt).hour == 0
