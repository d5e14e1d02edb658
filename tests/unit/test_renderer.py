"""Unit tests for flite_events.renderer module."""

import pytest
from bs4 import BeautifulSoup

from flite_events.cards import EventCard, GridMessage
from flite_events.layout import GridRegion
from flite_events.renderer import STYLESHEET_ID, HTMLRenderer, SectionView

pytestmark = pytest.mark.unit


def _card(**overrides):
    values = dict(
        title="Jazz <Night>",
        date_text="Monday, June 10, 2024 at 07:00 PM",
        venue="The Sway Room",
        location="123 Main St",
        image_url="https://cdn.example.com/jazz.jpg",
        detail_url="https://flite.city/e/jazz?a=1&b=2",
        button_label="View Details",
        button_background="#336699",
        button_foreground="#fff",
        title_color="#336699",
        is_past=False,
    )
    values.update(overrides)
    return EventCard(**values)


class TestRenderCard:
    """Event card markup."""

    def test_render_card_when_upcoming_then_escaped_content_and_link(self) -> None:
        html = HTMLRenderer().render_card(_card())
        soup = BeautifulSoup(html, "html.parser")

        assert soup.h3.get_text() == "Jazz <Night>"
        assert "&lt;Night&gt;" in html
        assert soup.a["href"] == "https://flite.city/e/jazz?a=1&b=2"
        assert soup.img["src"] == "https://cdn.example.com/jazz.jpg"
        assert "past-event" not in soup.div["class"]

    def test_render_card_when_past_then_muted_class_and_style(self) -> None:
        html = HTMLRenderer().render_card(_card(is_past=True))
        soup = BeautifulSoup(html, "html.parser")

        assert soup.div["class"] == ["event-card", "past-event"]
        assert "opacity: 0.6" in soup.div["style"]
        assert "grayscale(80%)" in soup.div["style"]

    def test_render_card_when_no_image_then_img_omitted(self) -> None:
        html = HTMLRenderer().render_card(_card(image_url=None))

        assert "<img" not in html


class TestRenderGrid:
    def test_render_grid_when_hidden_then_display_none(self) -> None:
        grid = GridRegion(name="past-events", columns=2, visible=False, heading="Past Events")
        grid.append(GridMessage(text="No past events found.", color="#ccc"))

        soup = BeautifulSoup(HTMLRenderer().render_grid(grid), "html.parser")

        style = soup.div["style"]
        assert "display: none" in style
        assert "calc(100% / 2 - 20px)" in style
        assert "margin-top: 40px" in style
        assert soup.h2.get_text() == "Past Events"
        assert soup.p["class"] == ["events-message", "events-message-empty"]

    def test_render_child_when_unknown_type_then_type_error(self) -> None:
        with pytest.raises(TypeError):
            HTMLRenderer().render_child(object())


class TestRenderSection:
    """Section and document assembly."""

    def _view(self, with_past=True):
        upcoming = GridRegion(name="upcoming-events", columns=3)
        upcoming.append(_card())
        past = None
        if with_past:
            past = GridRegion(name="past-events", columns=3, visible=False, heading="Past Events")
        return SectionView(
            container_id="events-section",
            upcoming=upcoming,
            past=past,
            toggle_label="Show Past Events" if with_past else None,
        )

    def test_render_section_when_past_enabled_then_grid_button_grid(self) -> None:
        soup = BeautifulSoup(HTMLRenderer().render_section(self._view()), "html.parser")

        container = soup.find(id="events-section")
        assert container is not None
        grids = container.find_all("div", class_="events-grid")
        assert [g["class"][1] for g in grids] == ["upcoming-events", "past-events"]
        assert container.find("button", class_="flite-events-toggle").get_text() == (
            "Show Past Events"
        )

    def test_render_section_when_past_disabled_then_no_button(self) -> None:
        html = HTMLRenderer().render_section(self._view(with_past=False))

        assert "flite-events-toggle" not in html
        assert "past-events" not in html

    def test_render_document_when_many_sections_then_stylesheet_once(self) -> None:
        html = HTMLRenderer().render_document([self._view(), self._view(with_past=False)])
        soup = BeautifulSoup(html, "html.parser")

        assert len(soup.find_all("style", id=STYLESHEET_ID)) == 1
        assert len(soup.find_all("div", class_="flite-events-container")) == 2
        assert html.startswith("<!DOCTYPE html>")


class TestInlineStyles:
    """Card colours reach style attributes escaped."""

    def test_render_card_when_hostile_colour_then_no_attribute_injected(self) -> None:
        hostile = 'red" onmouseover="alert(1)'
        html = HTMLRenderer().render_card(_card(title_color=hostile, button_background=hostile))
        soup = BeautifulSoup(html, "html.parser")

        assert soup.h3.attrs.keys() == {"style"}
        assert soup.a.attrs.keys() == {"href", "style"}
        assert soup.h3["style"].endswith('color: red" onmouseover="alert(1)')
        assert 'onmouseover="' not in html
