"""flite_events - responsive upcoming/past events sections from a Flite feed.

The pure building blocks are importable on their own:

- resolve_config: three-tier configuration merge
- classify: upcoming/past partitioning and ordering
- contrast_foreground: legible text colour for an accent colour
- columns_for: breakpoint-driven grid column count
- toggle_state: show/hide reducer for the past-events grid

EventsWidget composes them into a render cycle; ``python -m flite_events``
renders a section to a standalone HTML page.
"""

__version__ = "1.1.0"

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

from flite_events.classifier import classify
from flite_events.config import DEFAULT_CONFIG, EventsConfig, resolve_config
from flite_events.contrast import contrast_foreground
from flite_events.layout import columns_for
from flite_events.models import ClassificationResult, EmptyFeed, EventRecord, FeedFailure
from flite_events.toggle import ToggleState, toggle_state
from flite_events.widget import EventsWidget


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Installs a colourised stderr handler when the root logger has none, then
    sets the level. FLITE_EVENTS_DEBUG (truthy values: "1", "true", "yes",
    "on") forces DEBUG verbosity.
    """
    debug_env = os.environ.get("FLITE_EVENTS_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        # HH:MM:SS  LEVEL   logger.name: message (only the level is coloured)
        fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors))
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


__all__ = [
    "DEFAULT_CONFIG",
    "ClassificationResult",
    "EmptyFeed",
    "EventRecord",
    "EventsConfig",
    "EventsWidget",
    "FeedFailure",
    "ToggleState",
    "classify",
    "columns_for",
    "contrast_foreground",
    "resolve_config",
    "toggle_state",
]
