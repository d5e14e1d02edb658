"""Card view models: turn classified events into display-ready data.

Builds the per-event data the renderer needs (texts, link, colours) so the
HTML layer stays free of decisions about past/upcoming styling.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Literal, Optional
from zoneinfo import ZoneInfo

from .config import EventsConfig
from .contrast import contrast_foreground
from .models import EventRecord

DEFAULT_ACCENT_COLOR = "#007bff"
DEFAULT_TITLE_COLOR = "#fff"
PAST_BUTTON_COLOR = "#555"
PAST_TITLE_COLOR = "#aaa"

NO_EVENTS_COLOR = "#ccc"
ERROR_COLOR = "#ff5555"


@dataclass(frozen=True)
class EventCard:
    """Display data for one event card."""

    title: str
    date_text: str
    venue: str
    location: str
    image_url: Optional[str]
    detail_url: str
    button_label: str
    button_background: str
    button_foreground: str
    title_color: str
    is_past: bool


@dataclass(frozen=True)
class GridMessage:
    """Full-width message shown inside a grid instead of cards."""

    text: str
    color: str
    kind: Literal["empty", "error"] = "empty"


def format_event_date(dt: datetime.datetime, tz: Optional[ZoneInfo] = None) -> str:
    """Format a start time the way en-US long dates read.

    Example: ``"Monday, January 15, 2024 at 07:00 PM"``
    """
    if tz is not None:
        dt = dt.astimezone(tz)
    return f"{dt.strftime('%A, %B')} {dt.day}, {dt.year} at {dt.strftime('%I:%M %p')}"


class CardBuilder:
    """Build card view models for classified events."""

    def __init__(self, config: EventsConfig, display_timezone: Optional[ZoneInfo] = None):
        self.config = config
        self.display_timezone = display_timezone

    def build_card(self, event: EventRecord, is_past: bool) -> EventCard:
        if is_past:
            button_background = PAST_BUTTON_COLOR
            title_color = PAST_TITLE_COLOR
            button_label = self.config.buttons.view_history
        else:
            button_background = event.color or DEFAULT_ACCENT_COLOR
            title_color = event.color or DEFAULT_TITLE_COLOR
            button_label = self.config.buttons.view_details

        return EventCard(
            title=event.event_name,
            date_text=format_event_date(event.start_date_time, self.display_timezone),
            venue=event.venue_name,
            location=event.venue_location,
            image_url=event.flyer_url,
            detail_url=self.config.detail_url(event.slug),
            button_label=button_label,
            button_background=button_background,
            button_foreground=contrast_foreground(button_background),
            title_color=title_color,
            is_past=is_past,
        )

    def build_cards(self, events: tuple[EventRecord, ...], is_past: bool) -> list[EventCard]:
        return [self.build_card(event, is_past) for event in events]

    def empty_message(self, is_past: bool) -> GridMessage:
        """Message for a partition with no events."""
        headings = self.config.headings
        text = headings.no_past if is_past else headings.no_upcoming
        return GridMessage(text=text, color=NO_EVENTS_COLOR)

    def no_events_message(self) -> GridMessage:
        """Message for a feed that returned no data at all."""
        return GridMessage(text=self.config.headings.no_events, color=NO_EVENTS_COLOR)

    def error_message(self) -> GridMessage:
        return GridMessage(text=self.config.headings.error, color=ERROR_COLOR, kind="error")
