"""Foreground colour selection for accent-coloured backgrounds."""

from __future__ import annotations

import re

DARK_FOREGROUND = "#000"
LIGHT_FOREGROUND = "#fff"

# Backgrounds brighter than this get dark text
LUMINANCE_THRESHOLD = 0.8

_HEX_CHANNEL = re.compile(r"[0-9a-fA-F]{1,2}")


def _channel(digits: str) -> int:
    # Unparsable or missing channels count as 0
    if not _HEX_CHANNEL.fullmatch(digits):
        return 0
    return int(digits, 16)


def relative_luminance(hex_color: str) -> float:
    """Return the perceived luminance of a hex colour in the range 0..1.

    Accepts ``#rgb``, ``rgb``, ``#rrggbb`` and ``rrggbb``.
    """
    color = hex_color.strip()
    if color.startswith("#"):
        color = color[1:]
    if len(color) == 3:
        color = "".join(c + c for c in color)

    r = _channel(color[0:2])
    g = _channel(color[2:4])
    b = _channel(color[4:6])
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def contrast_foreground(hex_color: str) -> str:
    """Pick a legible text colour for the given background colour.

    Returns:
        ``"#000"`` for light backgrounds (luminance above 0.8), else ``"#fff"``
    """
    if relative_luminance(hex_color) > LUMINANCE_THRESHOLD:
        return DARK_FOREGROUND
    return LIGHT_FOREGROUND
