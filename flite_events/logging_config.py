"""
Central logging configuration for flite_events.

Sets package and root log levels and quiets the HTTP stack's debug chatter
while keeping WARNING/ERROR/INFO output for diagnostics.
"""

import logging
import os
from typing import Optional

# Third-party loggers that are noisy at DEBUG
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "asyncio",
    "charset_normalizer",
)

PACKAGE_LOGGER = "flite_events"


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    level_name: Optional[str] = None,
) -> None:
    """
    Configure logging levels for flite_events.

    Args:
        debug_mode: Whether to enable debug logging for flite_events modules
        force_debug: Override debug mode setting (None to use env var detection)
        level_name: Explicit root log level; takes precedence over FLITE_EVENTS_LOG_LEVEL

    Environment Variables:
        FLITE_EVENTS_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        FLITE_EVENTS_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("FLITE_EVENTS_DEBUG", "").lower() in ("1", "true", "yes")
    requested_level = (level_name or os.getenv("FLITE_EVENTS_LOG_LEVEL", "")).upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if requested_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, requested_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Keep any colourised handler installed by flite_events._init_logging
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s")
        )
        root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if final_debug else logging.INFO)

    if final_debug:
        root_logger.debug("Debug logging enabled for flite_events modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in (PACKAGE_LOGGER, *NOISY_LOGGERS):
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
