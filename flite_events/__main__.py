"""Command-line entry for flite_events.

Renders one events section (or every ``.flite-events`` host in an existing
HTML page) and writes the resulting HTML to a file or stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

from bs4 import BeautifulSoup

from . import _init_logging
from .exceptions import ConfigError
from .fetcher import FeedClient
from .http_client import close_all_clients
from .logging_config import configure_logging
from .models import FeedFailure
from .renderer import STYLESHEET_ID, HTMLRenderer
from .settings import ConfigManager, RuntimeSettings
from .widget import EventsWidget, render_discovered

logger = logging.getLogger(__name__)


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the flite_events CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="flite-events",
        description="Render upcoming and past events from a Flite feed to HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  flite-events --api https://example.com/feed -o events.html
  flite-events --width 800 --show-past              # tablet layout, past events open
  flite-events --host-page page.html -o rendered.html
        """,
    )

    parser.add_argument(
        "--api", metavar="URL", help="Feed URL (default: FLITE_EVENTS_API_ENDPOINT)"
    )
    parser.add_argument("--detail-url", metavar="PATTERN", help="Detail URL pattern with {slug}")
    parser.add_argument("--container-id", metavar="ID", help="Id of the rendered section")
    parser.add_argument("--cards-desktop", type=int, metavar="N")
    parser.add_argument("--cards-tablet", type=int, metavar="N")
    parser.add_argument("--cards-mobile", type=int, metavar="N")
    parser.add_argument(
        "--show-past", action="store_true", default=None, help="Show past events by default"
    )
    parser.add_argument(
        "--no-past-events",
        dest="enable_past",
        action="store_false",
        default=None,
        help="Disable the past events section",
    )
    parser.add_argument("--width", type=int, metavar="PX", help="Viewport width in CSS pixels")
    parser.add_argument(
        "--host-page",
        type=Path,
        metavar="FILE",
        help="Render into every .flite-events element of this HTML page",
    )
    parser.add_argument(
        "-o", "--output", type=Path, metavar="FILE", help="Output file (default: stdout)"
    )
    parser.add_argument("--env-file", type=Path, metavar="FILE", help="Path to .env file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    return parser


def build_override(args: argparse.Namespace, settings: RuntimeSettings) -> dict[str, Any]:
    """Collect configuration overrides from settings and command line arguments."""
    override: dict[str, Any] = settings.config_overrides()
    if args.api:
        override["apiEndpoint"] = args.api
    if args.detail_url:
        override["eventDetailUrlPattern"] = args.detail_url
    if args.container_id:
        override["containerId"] = args.container_id

    cards = {
        name: value
        for name, value in (
            ("desktop", args.cards_desktop),
            ("tablet", args.cards_tablet),
            ("mobile", args.cards_mobile),
        )
        if value is not None
    }
    if cards:
        override["cardsPerRow"] = cards
    if args.show_past is not None:
        override["showPastByDefault"] = args.show_past
    if args.enable_past is not None:
        override["enablePastEvents"] = args.enable_past
    return override


def _inject_sections(soup: BeautifulSoup, widgets: list[EventsWidget]) -> None:
    renderer = HTMLRenderer()
    for widget in widgets:
        element = soup.find(id=widget.config.container_id)
        if element is None:
            logger.error("Container #%s not found", widget.config.container_id)
            continue
        element.clear()
        element.append(BeautifulSoup(renderer.render_section_body(widget.view()), "html.parser"))

    if soup.find(id=STYLESHEET_ID) is None:
        style = BeautifulSoup(renderer.render_stylesheet(), "html.parser")
        (soup.head or soup).append(style)


async def run(args: argparse.Namespace, settings: RuntimeSettings) -> tuple[str, bool]:
    """Render according to ``args``.

    Returns:
        Tuple of (html, ok) where ``ok`` is False if any fetch failed
    """
    override = build_override(args, settings)
    width = args.width if args.width is not None else settings.viewport_width

    try:
        async with FeedClient(settings) as client:
            if args.host_page is not None:
                soup = BeautifulSoup(args.host_page.read_text(encoding="utf-8"), "html.parser")
                widgets = await render_discovered(
                    soup, feed_client=client, base_override=override, viewport_width=width
                )
                _inject_sections(soup, widgets)
                html = str(soup)
            else:
                widget = EventsWidget(override, feed_client=client, viewport_width=width)
                await widget.render()
                widgets = [widget]
                html = HTMLRenderer().render_document([widget.view()])
    finally:
        await close_all_clients()

    ok = not any(isinstance(w.outcome, FeedFailure) for w in widgets)
    return html, ok


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Run the flite_events CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    settings = ConfigManager(env_file_path=args.env_file).load_settings()
    _init_logging(args.log_level or settings.log_level)
    root_level = logging.getLogger().level
    configure_logging(
        debug_mode=root_level == logging.DEBUG, level_name=logging.getLevelName(root_level)
    )

    try:
        html, ok = asyncio.run(run(args, settings))
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    if args.output is not None:
        args.output.write_text(html, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(html + "\n")

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
