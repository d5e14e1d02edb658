"""Events configuration: built-in defaults and the three-tier merge.

The resolved configuration is a frozen pydantic model. Callers supply
overrides as plain mappings keyed by the camelCase names used on host pages
(``cardsPerRow``, ``showPastByDefault``...) or by the snake_case attribute
names; both spellings resolve to the same field.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_ENDPOINT = "https://api-staging.flite.city/api/geteventsbyhost/sway-hospitality"
DEFAULT_DETAIL_URL_PATTERN = "https://flite.city/e/{slug}"
DEFAULT_CONTAINER_ID = "events-section"


class CardsPerRow(BaseModel):
    """Grid column count per viewport class."""

    desktop: PositiveInt = 3
    tablet: PositiveInt = 2
    mobile: PositiveInt = 1

    model_config = ConfigDict(frozen=True, extra="ignore")


class Headings(BaseModel):
    """Section headings and status messages."""

    upcoming: str = "Upcoming Events"
    past: str = "Past Events"
    no_upcoming: str = Field(default="No upcoming events found.", alias="noUpcoming")
    no_past: str = Field(default="No past events found.", alias="noPast")
    no_events: str = Field(default="No events found.", alias="noEvents")
    error: str = "Unable to load events at this time. Please try again later."

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Buttons(BaseModel):
    """Button labels."""

    show_past: str = Field(default="Show Past Events", alias="showPast")
    hide_past: str = Field(default="Hide Past Events", alias="hidePast")
    view_details: str = Field(default="View Details", alias="viewDetails")
    view_history: str = Field(default="View Event", alias="viewHistory")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class EventsConfig(BaseModel):
    """Resolved configuration for one render cycle."""

    api_endpoint: str = Field(default=DEFAULT_API_ENDPOINT, alias="apiEndpoint")
    event_detail_url_pattern: str = Field(
        default=DEFAULT_DETAIL_URL_PATTERN, alias="eventDetailUrlPattern"
    )
    cards_per_row: CardsPerRow = Field(default_factory=CardsPerRow, alias="cardsPerRow")
    headings: Headings = Field(default_factory=Headings)
    buttons: Buttons = Field(default_factory=Buttons)
    container_id: str = Field(default=DEFAULT_CONTAINER_ID, alias="containerId")
    show_past_by_default: bool = Field(default=False, alias="showPastByDefault")
    enable_past_events: bool = Field(default=True, alias="enablePastEvents")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def detail_url(self, slug: str) -> str:
        """Build the detail URL for an event slug (first placeholder only)."""
        return self.event_detail_url_pattern.replace("{slug}", slug, 1)


DEFAULT_CONFIG = EventsConfig()

# Fields whose overrides merge sub-field by sub-field into the defaults
NESTED_FIELDS = ("cards_per_row", "headings", "buttons")


@lru_cache(maxsize=None)
def _field_lookup(model: type[BaseModel]) -> dict[str, tuple[str, str]]:
    """Map both attribute names and aliases to (field name, dump key)."""
    lookup: dict[str, tuple[str, str]] = {}
    for name, info in model.model_fields.items():
        key = info.alias or name
        lookup[name] = (name, key)
        lookup[key] = (name, key)
    return lookup


def _as_mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if isinstance(value, BaseModel):
        # Only the sub-fields the caller actually set count as overrides
        return value.model_dump(by_alias=True, exclude_unset=True)
    if isinstance(value, Mapping):
        return value
    raise ConfigError(f"{field_name} override must be a mapping, got {type(value).__name__}")


def _merge_nested(
    model: type[BaseModel], current: Mapping[str, Any], override: Mapping[str, Any]
) -> dict[str, Any]:
    merged = dict(current)
    lookup = _field_lookup(model)
    for key, value in override.items():
        if value is None or key not in lookup:
            continue
        _, dump_key = lookup[key]
        merged[dump_key] = value
    return merged


def resolve_config(
    override: Optional[Mapping[str, Any]] = None,
    defaults: EventsConfig = DEFAULT_CONFIG,
) -> EventsConfig:
    """Merge caller overrides into the defaults.

    Top-level keys present in ``override`` replace the default. For
    ``cardsPerRow``, ``headings`` and ``buttons`` the override is merged
    field-by-field, so a caller supplying only ``cardsPerRow.mobile`` keeps
    the default ``desktop`` and ``tablet`` counts. Unknown keys and keys
    whose value is ``None`` are ignored. Neither argument is mutated.

    Args:
        override: Caller-supplied configuration (camelCase or snake_case keys)
        defaults: Base configuration to merge into

    Returns:
        A new frozen EventsConfig

    Raises:
        ConfigError: If a supplied value fails validation
    """
    if not override:
        return defaults

    merged = defaults.model_dump(by_alias=True)
    lookup = _field_lookup(EventsConfig)
    ignored = []
    for key, value in override.items():
        if key not in lookup:
            ignored.append(key)
            continue
        if value is None:
            continue
        name, dump_key = lookup[key]
        if name in NESTED_FIELDS:
            nested_model = type(getattr(defaults, name))
            merged[dump_key] = _merge_nested(
                nested_model, merged[dump_key], _as_mapping(value, dump_key)
            )
        else:
            merged[dump_key] = value

    if ignored:
        logger.debug("Ignoring unknown configuration keys: %s", ", ".join(map(str, ignored)))

    try:
        return EventsConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid events configuration: {e}") from e


__all__ = [
    "DEFAULT_CONFIG",
    "Buttons",
    "CardsPerRow",
    "EventsConfig",
    "Headings",
    "resolve_config",
]
