"""Data models for the event feed and its classification."""

import re
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .timezone_utils import parse_timestamp

# Hex colours (#rgb, #rgba, #rrggbb, #rrggbbaa, leading # optional) and CSS colour keywords
_HEX_COLOR = re.compile(r"#?(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_NAMED_COLOR = re.compile(r"[a-zA-Z]{3,20}")


class EventRecord(BaseModel):
    """A single event as supplied by the feed.

    Field names follow the feed's camelCase keys through aliases; the model
    can also be populated by the snake_case attribute names.
    """

    event_name: str = Field(..., alias="eventName", description="Display title")
    start_date_time: datetime = Field(..., alias="startDateTime")
    end_date_time: datetime = Field(..., alias="endDateTime")
    venue_name: str = Field(default="", alias="venueName")
    venue_location: str = Field(default="", alias="venueLocation")
    slug: str = Field(..., description="Identifier used to build the detail URL")
    color: Optional[str] = Field(default=None, description="Accent colour (hex or keyword)")
    host_flyer: tuple[str, ...] = Field(default=(), alias="hostFlyer")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("start_date_time", "end_date_time", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @field_validator("event_name", "slug", mode="before")
    @classmethod
    def _number_to_str(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("venue_name", "venue_location", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("color", mode="before")
    @classmethod
    def _css_color_or_none(cls, value: Any) -> Optional[str]:
        """Keep hex colours and colour keywords; anything else is dropped."""
        if not isinstance(value, str):
            return None
        color = value.strip()
        if _HEX_COLOR.fullmatch(color):
            return color if color.startswith("#") else f"#{color}"
        if _NAMED_COLOR.fullmatch(color):
            return color
        return None

    @field_validator("host_flyer", mode="before")
    @classmethod
    def _none_to_no_flyers(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def flyer_url(self) -> Optional[str]:
        """First flyer image URL, if the event has any."""
        return self.host_flyer[0] if self.host_flyer else None


class FeedData(BaseModel):
    """The ``data`` section of a feed response.

    Event lists hold the raw records; each one is validated separately by
    the classifier so a single bad record does not discard the feed.
    """

    upcoming_events: Optional[list[Any]] = Field(default=None, alias="upcomingEvents")
    past_events: Optional[list[Any]] = Field(default=None, alias="pastEvents")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ClassificationResult(BaseModel):
    """Upcoming and past partitions of one successful fetch.

    Membership carries the past/upcoming discriminant. Created fresh for
    every fetch and never mutated.
    """

    upcoming: tuple[EventRecord, ...] = ()
    past: tuple[EventRecord, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> int:
        return len(self.upcoming) + len(self.past)


class EmptyFeed(BaseModel):
    """Feed answered without success or without a data section."""

    reason: str = "Feed reported no data"

    model_config = ConfigDict(frozen=True)


class FeedFailure(BaseModel):
    """Transport, parse or shape failure of a fetch."""

    message: str
    status_code: Optional[int] = None

    model_config = ConfigDict(frozen=True)


FeedOutcome = Union[ClassificationResult, EmptyFeed, FeedFailure]
