from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Optional

from .palette import FAMILY_EVENT_COLOR


logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

LIGHT_THRESHOLD = 0.5
DARK_TEXT_COLOR = "#1D1D1F"
LIGHT_TEXT_COLOR = "#FFFFFF"
DEFAULT_DARKEN_PERCENT = 22

RGB = tuple[int, int, int]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def with_hash(value: str) -> str:
    return value if value.startswith("#") else f"#{value}"


def parse_hex(value: Optional[str]) -> Optional[RGB]:
    """Return the ``(r, g, b)`` channels of ``value`` or ``None`` if malformed.

    A missing leading ``#`` is tolerated; anything other than a string of
    exactly six hex digits is rejected.
    """
    if not isinstance(value, str) or not value:
        return None
    color = with_hash(value)
    if not HEX_COLOR_RE.fullmatch(color):
        return None
    num = int(color[1:], 16)
    return (num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF


def to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02X}{g:02X}{b:02X}"


def canonical_color(value: Optional[str]) -> Optional[str]:
    """Return ``value`` as upper-case ``#RRGGBB`` or ``None`` if malformed."""
    rgb = parse_hex(value)
    return to_hex(*rgb) if rgb else None


def luminance(rgb: RGB) -> float:
    r, g, b = rgb
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def is_light_color(value: Optional[str]) -> bool:
    """Return ``True`` if ``value`` needs dark text to be legible.

    Malformed colors are treated as dark.
    """
    rgb = parse_hex(value)
    if rgb is None:
        return False
    return luminance(rgb) > LIGHT_THRESHOLD


def contrasting_text_color(background: Optional[str]) -> str:
    return DARK_TEXT_COLOR if is_light_color(background) else LIGHT_TEXT_COLOR


def _darken_rgb(rgb: RGB, step: int) -> RGB:
    r, g, b = rgb
    return max(0, r - step), max(0, g - step), max(0, b - step)


def _darken_step(percent: float) -> int:
    """Return ``percent``% of 255 as a whole channel amount, 0 if not finite."""
    amount = 255 * percent / 100
    if not math.isfinite(amount):
        return 0
    return _round_half_up(amount)


def darken_color(value: str, percent: float = 15) -> str:
    """Subtract ``percent``% of 255 from every channel of ``value``.

    Negative or non-finite percentages leave the color unchanged.
    """
    rgb = parse_hex(value)
    if rgb is None:
        logger.debug("Cannot darken malformed color %r", value)
        return FAMILY_EVENT_COLOR
    return to_hex(*_darken_rgb(rgb, max(0, _darken_step(percent))))


def normalize_for_display(
    value: Optional[str],
    darken_percent: float = DEFAULT_DARKEN_PERCENT,
    default: str = FAMILY_EVENT_COLOR,
) -> str:
    """Return a color dark enough to carry white text.

    Light colors are darkened in steps of ``darken_percent``% of 255 until
    they are no longer light, so normalizing an already normalized color is
    a no-op.  Dark colors are returned unchanged apart from a leading ``#``,
    as are light ones when ``darken_percent`` is not a positive finite
    number.  Malformed input yields ``default``.
    """
    rgb = parse_hex(value)
    if rgb is None:
        logger.debug("Malformed color %r; using %s", value, default)
        return default
    color = with_hash(value)
    if luminance(rgb) <= LIGHT_THRESHOLD:
        return color

    step = _darken_step(darken_percent)
    if step <= 0:
        return color
    while luminance(rgb) > LIGHT_THRESHOLD:
        rgb = _darken_rgb(rgb, step)
    return to_hex(*rgb)


def vibrant_color(value: str, factor: float = 1.3) -> str:
    """Push each channel of ``value`` away from its gray average."""
    rgb = parse_hex(value)
    if rgb is None:
        return FAMILY_EVENT_COLOR
    if not math.isfinite(factor):
        return to_hex(*rgb)
    avg = sum(rgb) / 3
    r, g, b = (
        min(255, max(0, _round_half_up(avg + (c - avg) * factor))) for c in rgb
    )
    return to_hex(r, g, b)


def blend_colors(
    colors: Iterable[Optional[str]], default: str = FAMILY_EVENT_COLOR
) -> str:
    """Average the RGB channels of ``colors``.

    This is a visual blend, distinct from the shared family color used for
    multi-participant events.  Malformed entries are skipped and an input
    with no usable color yields ``default``.
    """
    channels = [rgb for rgb in (parse_hex(c) for c in colors) if rgb is not None]
    if not channels:
        return default
    n = len(channels)
    r = _round_half_up(sum(c[0] for c in channels) / n)
    g = _round_half_up(sum(c[1] for c in channels) / n)
    b = _round_half_up(sum(c[2] for c in channels) / n)
    return to_hex(r, g, b)
