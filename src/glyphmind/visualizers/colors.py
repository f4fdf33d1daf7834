"""
Color parsing for the drawing routines.

Glyph colors arrive as CSS-style strings (``hsl(h, s%, l%)`` from the
mapper, ``#rrggbb`` for fixed palette entries). Drawing code goes through
:func:`to_rgb`, which never raises: a malformed value is logged once and
replaced by a neutral grey so the frame still draws.
"""

import colorsys
import functools
import logging
import re
from typing import Any

from glyphmind.errors import InvalidColorFormat

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

NEUTRAL_GREY: RGB = (128, 128, 128)

_HEX = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_HSL = re.compile(
    r"^hsla?\(\s*(-?[\d.]+)(?:deg)?\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)
_RGB = re.compile(
    r"^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)


def _channel(value: float) -> int:
    return int(max(0, min(255, round(value))))


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """
    Convert CSS HSL to 8-bit RGB.

    Args:
        hue: Degrees, wrapped into [0, 360).
        saturation: Percent (0-100).
        lightness: Percent (0-100).
    """
    h = (hue % 360) / 360.0
    s = max(0.0, min(1.0, saturation / 100.0))
    l = max(0.0, min(1.0, lightness / 100.0))
    # colorsys uses HLS ordering
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return (_channel(r * 255), _channel(g * 255), _channel(b * 255))


def parse_color(value: Any) -> RGB:
    """
    Strictly parse a color value.

    Accepts ``#rgb``, ``#rrggbb``, ``hsl(...)``/``hsla(...)``,
    ``rgb(...)``/``rgba(...)`` strings and 3-item sequences.

    Raises:
        InvalidColorFormat: If the value matches none of the above.
    """
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        try:
            return (_channel(value[0]), _channel(value[1]), _channel(value[2]))
        except (TypeError, ValueError):
            raise InvalidColorFormat(value) from None

    if not isinstance(value, str):
        raise InvalidColorFormat(value)

    text = value.strip()

    match = _HEX.match(text)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    match = _HSL.match(text)
    if match:
        h, s, l = (float(g) for g in match.groups())
        return hsl_to_rgb(h, s, l)

    match = _RGB.match(text)
    if match:
        r, g, b = (float(c) for c in match.groups())
        return (_channel(r), _channel(g), _channel(b))

    raise InvalidColorFormat(value)


@functools.lru_cache(maxsize=256)
def _resolve_string(value: str, fallback: RGB) -> RGB:
    try:
        return parse_color(value)
    except InvalidColorFormat as exc:
        # Cached, so a bad color logs once rather than once per frame
        logger.warning("%s; falling back to %s", exc, fallback)
        return fallback


def to_rgb(value: Any, fallback: RGB = NEUTRAL_GREY) -> RGB:
    """Lenient color lookup for drawing code. Never raises."""
    if isinstance(value, str):
        return _resolve_string(value, fallback)
    try:
        return parse_color(value)
    except InvalidColorFormat as exc:
        logger.warning("%s; falling back to %s", exc, fallback)
        return fallback


def with_alpha(color: RGB, alpha: float) -> RGBA:
    """Attach a 0-1 opacity to an RGB triple as an 8-bit alpha channel."""
    return (color[0], color[1], color[2], _channel(alpha * 255))


def to_hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)
