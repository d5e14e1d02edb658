"""HTML renderer for the events section."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional

from .cards import EventCard, GridMessage
from .layout import GridRegion

logger = logging.getLogger(__name__)

STYLESHEET_ID = "flite-events-styles"

EVENTS_STYLESHEET = """
.flite-events-container {
  background-color: #000;
  color: #fff;
  padding: 20px 0;
}

.events-grid {
  margin: 0 auto;
  max-width: 1200px;
}

.event-card {
  background-color: #222;
  border: 1px solid #333;
  box-shadow: 0 4px 10px rgba(0,0,0,0.5);
}

.event-card:hover {
  transform: translateY(-2px);
  transition: transform 0.3s ease, box-shadow 0.3s ease;
  box-shadow: 0 8px 20px rgba(0,0,0,0.7), 0 0 15px rgba(255,255,255,0.1);
  border: 1px solid #444;
}

.past-event:hover {
  transform: translateY(-3px);
}

.flite-events-toggle:hover {
  background-color: #444;
}

@media (max-width: 1024px) {
  .events-grid {
    grid-template-columns: repeat(2, 1fr);
  }
}

@media (max-width: 768px) {
  .events-grid {
    grid-template-columns: 1fr;
  }
}
"""


@dataclass(frozen=True)
class SectionView:
    """Everything the renderer needs for one events section."""

    container_id: str
    upcoming: GridRegion
    past: Optional[GridRegion] = None
    toggle_label: Optional[str] = None


def escape_html(text: str) -> str:
    """Escape HTML special characters.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text
    """
    if not text:
        return ""

    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def _style(**properties: Any) -> str:
    """Inline style attribute value with every property value escaped."""
    return "; ".join(
        f"{name.replace('_', '-')}: {escape_html(str(value))}"
        for name, value in properties.items()
    )


class HTMLRenderer:
    """Renders events sections to HTML fragments and documents."""

    def _escape_html(self, text: str) -> str:
        return escape_html(text)

    def render_stylesheet(self) -> str:
        return f'<style id="{STYLESHEET_ID}">{EVENTS_STYLESHEET}</style>'

    def render_card(self, card: EventCard) -> str:
        """Render one event card."""
        css_class = "event-card past-event" if card.is_past else "event-card"
        card_style = _style(
            border="1px solid #333",
            border_radius="8px",
            overflow="hidden",
            box_shadow="0 4px 10px rgba(0,0,0,0.5)",
            background_color="#222",
            transition="transform 0.3s ease, box-shadow 0.3s ease",
        )
        if card.is_past:
            card_style += "; " + _style(opacity="0.6", filter="grayscale(80%)")

        html_parts = [f'<div class="{css_class}" style="{card_style}">']

        if card.image_url:
            image_style = _style(width="100%", height="200px", object_fit="cover")
            html_parts.append(
                f'  <img src="{self._escape_html(card.image_url)}" '
                f'alt="{self._escape_html(card.title)}" style="{image_style}">'
            )

        title_style = _style(margin="0 0 10px 0", font_size="18px", color=card.title_color)
        text_style = _style(margin="5px 0", font_size="14px", color="#ccc")
        venue_style = _style(margin="5px 0", font_size="14px", font_weight="bold", color="#ccc")
        location_style = _style(margin="5px 0 15px 0", font_size="14px", color="#999")
        button_style = _style(
            display="inline-block",
            padding="8px 16px",
            background_color=card.button_background,
            color=card.button_foreground,
            text_decoration="none",
            border_radius="4px",
            font_weight="bold",
            margin_top="10px",
            box_shadow="0 2px 5px rgba(0,0,0,0.3)",
        )

        html_parts.extend(
            [
                f'  <div class="event-details" style="{_style(padding="15px")}">',
                f'    <h3 style="{title_style}">{self._escape_html(card.title)}</h3>',
                f'    <p style="{text_style}">{self._escape_html(card.date_text)}</p>',
                f'    <p style="{venue_style}">{self._escape_html(card.venue)}</p>',
                f'    <p style="{location_style}">{self._escape_html(card.location)}</p>',
                f'    <a href="{self._escape_html(card.detail_url)}" style="{button_style}">'
                f"{self._escape_html(card.button_label)}</a>",
                "  </div>",
                "</div>",
            ]
        )
        return "\n".join(html_parts)

    def render_message(self, message: GridMessage) -> str:
        """Render a full-width status message."""
        style = _style(
            text_align="center",
            grid_column="1 / -1",
            padding="40px",
            font_size="18px",
            color=message.color,
        )
        css_class = f"events-message events-message-{message.kind}"
        return f'<p class="{css_class}" style="{style}">{self._escape_html(message.text)}</p>'

    def render_child(self, child: Any) -> str:
        if isinstance(child, EventCard):
            return self.render_card(child)
        if isinstance(child, GridMessage):
            return self.render_message(child)
        raise TypeError(f"Cannot render grid child of type {type(child).__name__}")

    def render_grid(self, grid: GridRegion) -> str:
        """Render a grid region with its current columns and visibility."""
        style = _style(
            display=grid.display,
            grid_template_columns=grid.template_columns,
            gap="20px",
            padding="20px",
        )
        if grid.name == "past-events":
            style += "; " + _style(margin_top="40px")

        html_parts = [f'<div class="events-grid {grid.name}" style="{style}">']
        if grid.heading is not None:
            heading_style = _style(
                grid_column="1 / -1", margin="0 0 20px 0", font_size="28px", color="#ffffff"
            )
            html_parts.append(f'<h2 style="{heading_style}">{self._escape_html(grid.heading)}</h2>')
        html_parts.extend(self.render_child(child) for child in grid.children)
        html_parts.append("</div>")
        return "\n".join(html_parts)

    def render_toggle_button(self, label: str) -> str:
        style = _style(
            display="block",
            margin="20px auto",
            padding="10px 20px",
            background_color="#333",
            color="#fff",
            border="1px solid #444",
            border_radius="4px",
            cursor="pointer",
            font_size="16px",
            transition="background-color 0.3s ease",
        )
        return (
            f'<button type="button" class="flite-events-toggle" style="{style}">'
            f"{self._escape_html(label)}</button>"
        )

    def render_section_body(self, view: SectionView) -> str:
        """Render the host region's content: upcoming grid, toggle button, past grid."""
        html_parts = [self.render_grid(view.upcoming)]
        if view.past is not None and view.toggle_label is not None:
            html_parts.append(self.render_toggle_button(view.toggle_label))
            html_parts.append(self.render_grid(view.past))
        return "\n".join(html_parts)

    def render_section(self, view: SectionView) -> str:
        """Render the section wrapped in its own host container."""
        return "\n".join(
            [
                f'<div id="{self._escape_html(view.container_id)}" class="flite-events-container">',
                self.render_section_body(view),
                "</div>",
            ]
        )

    def render_document(self, views: Iterable[SectionView], title: str = "Events") -> str:
        """Render a standalone HTML page holding one or more sections.

        The global style sheet is emitted once regardless of section count.
        """
        sections = [self.render_section(view) for view in views]
        logger.debug("Rendering document with %d section(s)", len(sections))
        return "\n".join(
            [
                "<!DOCTYPE html>",
                '<html lang="en">',
                "<head>",
                '<meta charset="utf-8">',
                '<meta name="viewport" content="width=device-width, initial-scale=1">',
                f"<title>{self._escape_html(title)}</title>",
                self.render_stylesheet(),
                "</head>",
                '<body style="background-color: #000; margin: 0">',
                *sections,
                "</body>",
                "</html>",
            ]
        )
