"""Responsive grid layout: breakpoint-driven column counts for the event grids."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

from .config import CardsPerRow

logger = logging.getLogger(__name__)

ViewportClass = Literal["mobile", "tablet", "desktop"]

# Narrow-to-wide: widths below the threshold use that viewport class
BREAKPOINTS: tuple[tuple[int, ViewportClass], ...] = (
    (768, "mobile"),
    (1024, "tablet"),
)
WIDEST_CLASS: ViewportClass = "desktop"

GRID_GAP_PX = 20


def viewport_class(width: float) -> ViewportClass:
    """Return the viewport class for a viewport width in CSS pixels."""
    for threshold, name in BREAKPOINTS:
        if width < threshold:
            return name
    return WIDEST_CLASS


def columns_for(width: float, cards_per_row: Union[CardsPerRow, Mapping[str, int]]) -> int:
    """Column count for a viewport width.

    ``width < 768`` uses the mobile count, ``768 <= width < 1024`` the tablet
    count and anything wider the desktop count.
    """
    name = viewport_class(width)
    if isinstance(cards_per_row, Mapping):
        return int(cards_per_row[name])
    return int(getattr(cards_per_row, name))


def grid_template_columns(columns: int) -> str:
    """CSS ``grid-template-columns`` value for the given column count."""
    return f"repeat(auto-fill, minmax(calc(100% / {columns} - {GRID_GAP_PX}px), 1fr))"


@dataclass
class GridRegion:
    """One rendered grid of event cards (upcoming or past).

    LayoutController owns ``columns``; ToggleController owns ``visible``.
    Everything else is written once per render cycle.
    """

    name: str
    columns: int
    visible: bool = True
    heading: Optional[str] = None
    children: list[Any] = field(default_factory=list)

    @property
    def template_columns(self) -> str:
        return grid_template_columns(self.columns)

    @property
    def display(self) -> str:
        return "grid" if self.visible else "none"

    def append(self, child: Any) -> None:
        self.children.append(child)

    def clear(self) -> None:
        self.children.clear()


class LayoutController:
    """Keeps every active grid at the column count for the current viewport."""

    def __init__(
        self,
        cards_per_row: CardsPerRow,
        grids: Sequence[Optional[GridRegion]],
    ):
        """Initialize layout controller.

        Args:
            cards_per_row: Column counts per viewport class
            grids: Grid regions to keep in sync; ``None`` entries (a disabled
                past grid) are skipped
        """
        self.cards_per_row = cards_per_row
        self.grids = [g for g in grids if g is not None]
        self.last_width: Optional[float] = None
        self.last_columns: Optional[int] = None

    def apply(self, width: float) -> int:
        """Recompute the column count for ``width`` and write it to every grid.

        Safe to call repeatedly; the result only depends on ``width``.

        Returns:
            The applied column count
        """
        columns = columns_for(width, self.cards_per_row)
        for grid in self.grids:
            grid.columns = columns

        if columns != self.last_columns:
            logger.debug(
                "Viewport %s (%s): %d column(s) across %d grid(s)",
                width,
                viewport_class(width),
                columns,
                len(self.grids),
            )
        self.last_width = width
        self.last_columns = columns
        return columns

    def handle_resize(self, width: float) -> int:
        """Viewport resize handler."""
        return self.apply(width)
