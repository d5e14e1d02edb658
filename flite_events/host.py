"""Host page discovery: find marked elements and read their data attributes.

Elements carrying the ``flite-events`` class are configured through
``data-*`` attributes. Each attribute maps onto one configuration field and
the resulting override goes through the same ``resolve_config`` merge as a
programmatic call.
"""

from __future__ import annotations

import logging
import random
import string
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

HOST_SELECTOR = ".flite-events"
INITIALIZED_ATTR = "data-flite-initialized"
CONTAINER_ID_PREFIX = "events-section-"

_ID_ALPHABET = string.digits + string.ascii_lowercase

# data attribute -> top-level configuration key
_STRING_ATTRS = {
    "data-api": "apiEndpoint",
    "data-detail-url": "eventDetailUrlPattern",
}

# data attribute -> (nested configuration key, sub-field)
_CARD_ATTRS = {
    "data-cards-desktop": ("cardsPerRow", "desktop"),
    "data-cards-tablet": ("cardsPerRow", "tablet"),
    "data-cards-mobile": ("cardsPerRow", "mobile"),
}

_TEXT_ATTRS = {
    "data-upcoming-heading": ("headings", "upcoming"),
    "data-past-heading": ("headings", "past"),
    "data-no-upcoming-text": ("headings", "noUpcoming"),
    "data-no-past-text": ("headings", "noPast"),
    "data-no-events-text": ("headings", "noEvents"),
    "data-error-text": ("headings", "error"),
    "data-show-past-button": ("buttons", "showPast"),
    "data-hide-past-button": ("buttons", "hidePast"),
    "data-view-details-button": ("buttons", "viewDetails"),
    "data-view-history-button": ("buttons", "viewHistory"),
}


@dataclass
class HostElement:
    """A discovered host element and the configuration override it declares."""

    container_id: str
    override: dict[str, Any] = field(default_factory=dict)


def _attr_value(value: Any) -> str:
    # BeautifulSoup returns multi-valued attributes as lists
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def parse_data_attributes(attrs: Mapping[str, Any]) -> dict[str, Any]:
    """Translate ``data-*`` attributes into a configuration override.

    Empty values are ignored. ``data-show-past`` enables showing past events
    only for the exact value ``"true"``; ``data-past-events`` disables the
    past section only for the exact value ``"false"``. Column counts that are
    not integers are skipped with a warning.
    """
    values = {name.lower(): _attr_value(value) for name, value in attrs.items()}
    config: dict[str, Any] = {}

    for attr, key in _STRING_ATTRS.items():
        if values.get(attr):
            config[key] = values[attr]

    for attr, (section, sub_key) in _CARD_ATTRS.items():
        raw = values.get(attr)
        if not raw:
            continue
        try:
            count = int(raw.strip())
        except ValueError:
            logger.warning("Ignoring non-integer %s=%r", attr, raw)
            continue
        config.setdefault(section, {})[sub_key] = count

    for attr, (section, sub_key) in _TEXT_ATTRS.items():
        if values.get(attr):
            config.setdefault(section, {})[sub_key] = values[attr]

    if "data-show-past" in values:
        config["showPastByDefault"] = values["data-show-past"] == "true"
    if "data-past-events" in values:
        config["enablePastEvents"] = values["data-past-events"] != "false"

    return config


def generate_container_id() -> str:
    """Random fallback id for host elements that have none."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))  # nosec B311 - not security sensitive
    return CONTAINER_ID_PREFIX + suffix


def discover_hosts(
    document: Union[str, BeautifulSoup], selector: str = HOST_SELECTOR
) -> list[HostElement]:
    """Find uninitialised host elements and build their overrides.

    Elements without an id receive a generated one and every returned element
    is marked initialised, so a second discovery pass over the same parsed
    document returns nothing new. Pass a ``BeautifulSoup`` object to keep
    those mutations.

    Args:
        document: HTML text or an already parsed document
        selector: CSS selector identifying host elements

    Returns:
        One HostElement per newly discovered host, in document order
    """
    if isinstance(document, BeautifulSoup):
        soup = document
    else:
        soup = BeautifulSoup(document, "html.parser")

    hosts: list[HostElement] = []
    for element in soup.select(selector):
        if element.get(INITIALIZED_ATTR):
            continue

        override = parse_data_attributes(element.attrs)
        container_id = element.get("id") or generate_container_id()
        element["id"] = container_id
        element[INITIALIZED_ATTR] = "true"
        override["containerId"] = container_id

        hosts.append(HostElement(container_id=container_id, override=override))

    logger.debug("Discovered %d host element(s) matching %s", len(hosts), selector)
    return hosts
