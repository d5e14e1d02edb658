"""Unit tests for flite_events.settings module."""

import os
from unittest.mock import patch

import pytest

from flite_events.settings import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_VIEWPORT_WIDTH,
    ConfigManager,
    RuntimeSettings,
)

pytestmark = pytest.mark.unit


class TestRuntimeSettings:
    """Environment-driven settings."""

    def test_from_env_when_unset_then_defaults(self) -> None:
        settings = RuntimeSettings.from_env()

        assert settings.api_endpoint is None
        assert settings.request_timeout == DEFAULT_REQUEST_TIMEOUT
        assert settings.viewport_width == DEFAULT_VIEWPORT_WIDTH
        assert settings.log_level == "INFO"
        assert settings.config_overrides() == {}

    def test_from_env_when_set_then_values_parsed(self, monkeypatch) -> None:
        monkeypatch.setenv("FLITE_EVENTS_API_ENDPOINT", "https://feed.test/events")
        monkeypatch.setenv("FLITE_EVENTS_REQUEST_TIMEOUT", "7.5")
        monkeypatch.setenv("FLITE_EVENTS_VIEWPORT_WIDTH", "800")
        monkeypatch.setenv("FLITE_EVENTS_LOG_LEVEL", "debug")

        settings = RuntimeSettings.from_env()

        assert settings.request_timeout == 7.5
        assert settings.viewport_width == 800
        assert settings.log_level == "DEBUG"
        assert settings.config_overrides() == {"apiEndpoint": "https://feed.test/events"}

    def test_from_env_when_numbers_invalid_then_defaults_with_warning(
        self, monkeypatch, caplog
    ) -> None:
        monkeypatch.setenv("FLITE_EVENTS_REQUEST_TIMEOUT", "soon")
        monkeypatch.setenv("FLITE_EVENTS_VIEWPORT_WIDTH", "wide")

        settings = RuntimeSettings.from_env()

        assert settings.request_timeout == DEFAULT_REQUEST_TIMEOUT
        assert settings.viewport_width == DEFAULT_VIEWPORT_WIDTH
        assert "FLITE_EVENTS_REQUEST_TIMEOUT" in caplog.text
        assert "FLITE_EVENTS_VIEWPORT_WIDTH" in caplog.text


class TestConfigManager:
    """.env file loading."""

    def test_load_env_file_when_missing_then_nothing_loaded(self, tmp_path) -> None:
        manager = ConfigManager(env_file_path=tmp_path / ".env")

        assert manager.load_env_file() == []

    def test_load_env_file_when_present_then_sets_unset_keys_only(
        self, tmp_path, monkeypatch
    ) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "FLITE_EVENTS_API_ENDPOINT='https://from-file.test/x'\n"
            'FLITE_EVENTS_LOG_LEVEL="WARNING"\n'
            "not a pair\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("FLITE_EVENTS_LOG_LEVEL", "ERROR")

        with patch.dict(os.environ):
            loaded = ConfigManager(env_file_path=env_file).load_env_file()
            api_endpoint = os.environ["FLITE_EVENTS_API_ENDPOINT"]
            log_level = os.environ["FLITE_EVENTS_LOG_LEVEL"]

        assert loaded == ["FLITE_EVENTS_API_ENDPOINT"]
        assert api_endpoint == "https://from-file.test/x"
        assert log_level == "ERROR"

    def test_load_settings_when_env_file_then_settings_include_it(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("FLITE_EVENTS_VIEWPORT_WIDTH=600\n", encoding="utf-8")

        with patch.dict(os.environ):
            settings = ConfigManager(env_file_path=env_file).load_settings()

        assert settings.viewport_width == 600
