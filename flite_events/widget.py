"""Events widget: one render cycle from configuration to rendered section.

Coordinates the config resolver, feed client, card builder, layout and
toggle controllers. Grids and controllers exist as soon as the widget is
mounted, so resize and toggle handlers can run before, during or after the
fetch completes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup

from .cards import CardBuilder
from .config import DEFAULT_CONFIG, EventsConfig, resolve_config
from .exceptions import ConfigError
from .fetcher import FeedClient
from .host import discover_hosts
from .layout import GridRegion, LayoutController
from .models import ClassificationResult, EmptyFeed, EventRecord, FeedFailure, FeedOutcome
from .renderer import HTMLRenderer, SectionView
from .settings import DEFAULT_VIEWPORT_WIDTH
from .toggle import ToggleController, ToggleState, initial_toggle_state

logger = logging.getLogger(__name__)

UPCOMING_GRID = "upcoming-events"
PAST_GRID = "past-events"


class EventsWidget:
    """Renders one events section into a host region."""

    def __init__(
        self,
        override: Optional[Mapping[str, Any]] = None,
        *,
        feed_client: Optional[FeedClient] = None,
        viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
        scroll_into_view: Optional[Callable[[GridRegion], None]] = None,
        display_timezone: Optional[ZoneInfo] = None,
        defaults: EventsConfig = DEFAULT_CONFIG,
    ):
        """Initialize the widget.

        Args:
            override: Caller configuration merged into ``defaults``
            feed_client: Client used to fetch the feed (a shared-client
                FeedClient is created when omitted)
            viewport_width: Initial viewport width in CSS pixels
            scroll_into_view: Host hook called when the past grid is revealed
            display_timezone: Timezone for card dates (UTC when omitted)
            defaults: Base configuration

        Raises:
            ConfigError: If the override contains invalid values
        """
        self.config = resolve_config(override, defaults)
        self.feed_client = feed_client or FeedClient()
        self.viewport_width = viewport_width
        self.scroll_into_view = scroll_into_view
        self.cards = CardBuilder(self.config, display_timezone)
        self.renderer = HTMLRenderer()

        self.upcoming_grid: Optional[GridRegion] = None
        self.past_grid: Optional[GridRegion] = None
        self.layout: Optional[LayoutController] = None
        self.toggle: Optional[ToggleController] = None
        self.outcome: Optional[FeedOutcome] = None

    @property
    def mounted(self) -> bool:
        return self.upcoming_grid is not None

    def mount(self) -> None:
        """Create empty grids and controllers, discarding any previous render."""
        desktop_columns = self.config.cards_per_row.desktop
        self.upcoming_grid = GridRegion(name=UPCOMING_GRID, columns=desktop_columns)
        self.past_grid = None
        self.toggle = None
        self.outcome = None

        if self.config.enable_past_events:
            self.past_grid = GridRegion(
                name=PAST_GRID,
                columns=desktop_columns,
                heading=self.config.headings.past,
            )
            self.toggle = ToggleController(
                self.config.buttons,
                self.past_grid,
                initial_state=initial_toggle_state(self.config.show_past_by_default),
                scroll_into_view=self.scroll_into_view,
            )

        self.layout = LayoutController(
            self.config.cards_per_row, [self.upcoming_grid, self.past_grid]
        )
        self.layout.apply(self.viewport_width)
        logger.debug(
            "Mounted events widget #%s (past events %s)",
            self.config.container_id,
            "enabled" if self.past_grid is not None else "disabled",
        )

    async def load(self) -> FeedOutcome:
        """Fetch the feed and fill the grids.

        Never raises: unexpected errors are logged and shown as the
        configured error message.
        """
        if not self.mounted:
            self.mount()

        try:
            outcome = await self.feed_client.fetch(self.config)
        except Exception as e:
            logger.exception("Unexpected error loading events for #%s", self.config.container_id)
            outcome = FeedFailure(message=f"Unexpected error: {e}")

        self._populate(outcome)
        self.outcome = outcome
        return outcome

    async def render(self) -> FeedOutcome:
        """Run a full render cycle: mount, then load."""
        self.mount()
        return await self.load()

    def _fill_grid(self, grid: GridRegion, events: tuple[EventRecord, ...], is_past: bool) -> None:
        if events:
            for card in self.cards.build_cards(events, is_past):
                grid.append(card)
        else:
            grid.append(self.cards.empty_message(is_past))

    def _populate(self, outcome: FeedOutcome) -> None:
        if self.upcoming_grid is None:
            raise RuntimeError("Widget has not been mounted")

        # Each load replaces what the previous one wrote to a grid
        self.upcoming_grid.clear()

        if isinstance(outcome, ClassificationResult):
            self._fill_grid(self.upcoming_grid, outcome.upcoming, is_past=False)
            if self.past_grid is not None:
                self.past_grid.clear()
                self._fill_grid(self.past_grid, outcome.past, is_past=True)
            logger.info(
                "Rendered %d upcoming and %d past events into #%s",
                len(outcome.upcoming),
                len(outcome.past),
                self.config.container_id,
            )
        elif isinstance(outcome, EmptyFeed):
            self.upcoming_grid.append(self.cards.no_events_message())
            logger.info("No events returned for #%s", self.config.container_id)
        else:
            # Past grid is left untouched on failure; the cause is logged where it arose
            self.upcoming_grid.append(self.cards.error_message())
            logger.debug(
                "Showing error message in #%s: %s", self.config.container_id, outcome.message
            )

    def handle_resize(self, width: float) -> Optional[int]:
        """Viewport resize handler; returns the applied column count."""
        self.viewport_width = width
        if self.layout is None:
            return None
        return self.layout.handle_resize(width)

    def handle_toggle(self) -> Optional[ToggleState]:
        """Toggle button click handler. No-op when past events are disabled."""
        if self.toggle is None:
            return None
        return self.toggle.toggle()

    @property
    def toggle_label(self) -> Optional[str]:
        return self.toggle.label if self.toggle is not None else None

    def view(self) -> SectionView:
        if self.upcoming_grid is None:
            raise RuntimeError("Widget has not been mounted")
        return SectionView(
            container_id=self.config.container_id,
            upcoming=self.upcoming_grid,
            past=self.past_grid,
            toggle_label=self.toggle_label,
        )

    def to_html(self) -> str:
        """Render the current state of the section to an HTML fragment."""
        return self.renderer.render_section(self.view())


async def render_discovered(
    document: Union[str, BeautifulSoup],
    *,
    feed_client: Optional[FeedClient] = None,
    base_override: Optional[Mapping[str, Any]] = None,
    viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
) -> list[EventsWidget]:
    """Render every uninitialised host element found in ``document``.

    Each host's data attributes are layered over ``base_override`` and
    resolved with the same merge as a programmatic call. The fetches run
    concurrently.
    """
    hosts = discover_hosts(document)
    client = feed_client or FeedClient()
    base = resolve_config(base_override)

    widgets: list[EventsWidget] = []
    for host in hosts:
        try:
            widget = EventsWidget(
                host.override,
                feed_client=client,
                viewport_width=viewport_width,
                defaults=base,
            )
        except ConfigError as e:
            logger.error("Skipping host #%s with invalid configuration: %s", host.container_id, e)
            continue
        widgets.append(widget)

    await asyncio.gather(*(widget.render() for widget in widgets))
    return widgets
