"""Show/hide state machine for the past-events grid."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from .config import Buttons
from .layout import GridRegion

logger = logging.getLogger(__name__)


class ToggleState(str, Enum):
    """Visibility of the past-events grid."""

    HIDDEN = "hidden"
    SHOWN = "shown"


def initial_toggle_state(show_past_by_default: bool) -> ToggleState:
    return ToggleState.SHOWN if show_past_by_default else ToggleState.HIDDEN


def toggle_state(state: ToggleState) -> ToggleState:
    """Flip the state. There are no guard conditions."""
    return ToggleState.HIDDEN if state is ToggleState.SHOWN else ToggleState.SHOWN


class ToggleController:
    """Drives the past grid's visibility and the toggle button label.

    Revealing the grid also asks the host to scroll it into view; hiding it
    does not scroll.
    """

    def __init__(
        self,
        buttons: Buttons,
        past_grid: GridRegion,
        initial_state: ToggleState = ToggleState.HIDDEN,
        scroll_into_view: Optional[Callable[[GridRegion], None]] = None,
    ):
        """Initialize toggle controller.

        Args:
            buttons: Configured button labels
            past_grid: Grid whose visibility this controller owns
            initial_state: Starting state
            scroll_into_view: Host hook invoked with the grid when it is revealed
        """
        self.buttons = buttons
        self.past_grid = past_grid
        self.scroll_into_view = scroll_into_view
        self.state = initial_state
        self._sync()

    @property
    def label(self) -> str:
        """Current toggle button text."""
        if self.state is ToggleState.SHOWN:
            return self.buttons.hide_past
        return self.buttons.show_past

    def _sync(self) -> None:
        self.past_grid.visible = self.state is ToggleState.SHOWN

    def toggle(self) -> ToggleState:
        """Handle one click on the toggle button."""
        self.state = toggle_state(self.state)
        self._sync()
        logger.debug("Past events %s", self.state.value)

        if self.state is ToggleState.SHOWN and self.scroll_into_view is not None:
            self.scroll_into_view(self.past_grid)
        return self.state
