"""Runtime settings loaded from environment variables and .env files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 20.0
DEFAULT_VIEWPORT_WIDTH = 1280


@dataclass
class RuntimeSettings:
    """Process-level settings for fetching and rendering.

    Per-render presentation options live in EventsConfig; these cover the
    transport and the command line.
    """

    api_endpoint: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"
    viewport_width: int = DEFAULT_VIEWPORT_WIDTH

    @classmethod
    def from_env(cls) -> RuntimeSettings:
        """Load settings from environment variables.

        Environment Variables:
            FLITE_EVENTS_API_ENDPOINT - Feed URL overriding the built-in default
            FLITE_EVENTS_REQUEST_TIMEOUT - HTTP timeout in seconds
            FLITE_EVENTS_LOG_LEVEL - Logging level (DEBUG, INFO, WARNING, ERROR)
            FLITE_EVENTS_VIEWPORT_WIDTH - Viewport width used for one-shot renders

        Returns:
            RuntimeSettings instance with values from environment
        """
        api_endpoint = os.getenv("FLITE_EVENTS_API_ENDPOINT") or None

        request_timeout = DEFAULT_REQUEST_TIMEOUT
        raw_timeout = os.getenv("FLITE_EVENTS_REQUEST_TIMEOUT")
        if raw_timeout:
            try:
                request_timeout = float(raw_timeout)
            except ValueError:
                logger.warning("Invalid FLITE_EVENTS_REQUEST_TIMEOUT=%r; ignoring", raw_timeout)

        viewport_width = DEFAULT_VIEWPORT_WIDTH
        raw_width = os.getenv("FLITE_EVENTS_VIEWPORT_WIDTH")
        if raw_width:
            try:
                viewport_width = int(raw_width)
            except ValueError:
                logger.warning("Invalid FLITE_EVENTS_VIEWPORT_WIDTH=%r; ignoring", raw_width)

        log_level = os.getenv("FLITE_EVENTS_LOG_LEVEL", "INFO").upper()

        return cls(
            api_endpoint=api_endpoint,
            request_timeout=request_timeout,
            log_level=log_level,
            viewport_width=viewport_width,
        )

    def config_overrides(self) -> dict[str, Any]:
        """Events configuration overrides contributed by the environment."""
        if self.api_endpoint:
            return {"apiEndpoint": self.api_endpoint}
        return {}


class ConfigManager:
    """Loads .env defaults into the process environment."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Load .env file and set environment variables.

        Only sets variables that are not already in the environment.

        Returns:
            List of environment variable keys that were loaded from .env file
        """
        if not self.env_file_path.exists():
            logger.debug("No .env file found at %s", self.env_file_path)
            return []

        set_keys = []
        try:
            content = self.env_file_path.read_text(encoding="utf-8")
        except OSError:
            logger.warning("Failed to read .env file %s", self.env_file_path, exc_info=True)
            return []

        for raw_line in content.splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, val = line.split("=", 1)
            key = key.strip()
            val = val.strip().strip('"').strip("'")

            if key and key not in os.environ:
                os.environ[key] = val
                set_keys.append(key)

        if set_keys:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(set_keys))
        return set_keys

    def load_settings(self) -> RuntimeSettings:
        """Load .env file and build settings from the environment."""
        self.load_env_file()
        return RuntimeSettings.from_env()
