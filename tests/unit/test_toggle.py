"""Unit tests for flite_events.toggle module."""

from unittest.mock import Mock

import pytest

from flite_events.config import Buttons
from flite_events.layout import GridRegion
from flite_events.toggle import (
    ToggleController,
    ToggleState,
    initial_toggle_state,
    toggle_state,
)

pytestmark = pytest.mark.unit


class TestToggleState:
    def test_toggle_state_when_applied_twice_then_returns_original(self) -> None:
        assert toggle_state(ToggleState.HIDDEN) is ToggleState.SHOWN
        assert toggle_state(toggle_state(ToggleState.HIDDEN)) is ToggleState.HIDDEN

    def test_initial_toggle_state_when_show_past_default_then_shown(self) -> None:
        assert initial_toggle_state(True) is ToggleState.SHOWN
        assert initial_toggle_state(False) is ToggleState.HIDDEN


class TestToggleController:
    """Past grid visibility and button label."""

    def test_init_when_hidden_then_grid_hidden_and_show_label(self) -> None:
        grid = GridRegion(name="past-events", columns=3)

        controller = ToggleController(Buttons(), grid)

        assert grid.visible is False
        assert controller.label == "Show Past Events"

    def test_toggle_when_revealed_then_label_flips_and_scrolls(self) -> None:
        grid = GridRegion(name="past-events", columns=3)
        scroll = Mock()
        controller = ToggleController(Buttons(), grid, scroll_into_view=scroll)

        state = controller.toggle()

        assert state is ToggleState.SHOWN
        assert grid.visible is True
        assert controller.label == "Hide Past Events"
        scroll.assert_called_once_with(grid)

    def test_toggle_when_hidden_again_then_no_scroll(self) -> None:
        grid = GridRegion(name="past-events", columns=3)
        scroll = Mock()
        controller = ToggleController(
            Buttons(), grid, initial_state=ToggleState.SHOWN, scroll_into_view=scroll
        )

        controller.toggle()

        assert grid.visible is False
        assert controller.label == "Show Past Events"
        scroll.assert_not_called()

    def test_label_when_custom_buttons_then_uses_configured_text(self) -> None:
        grid = GridRegion(name="past-events", columns=3)
        controller = ToggleController(Buttons(showPast="More", hidePast="Less"), grid)

        assert controller.label == "More"
        controller.toggle()
        assert controller.label == "Less"
