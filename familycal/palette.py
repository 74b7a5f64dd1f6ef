from __future__ import annotations

import logging
import random
from typing import Iterable, Optional


logger = logging.getLogger(__name__)


# Member colors in allocation order (iOS calendar system colors).
MEMBER_COLORS: tuple[str, ...] = (
    "#FF3B30",  # Red
    "#FF9500",  # Orange
    "#FFCC00",  # Yellow
    "#34C759",  # Green
    "#5AC8FA",  # Teal Blue
    "#007AFF",  # Blue
    "#5856D6",  # Indigo
    "#AF52DE",  # Purple
    "#FF2D55",  # Pink
    "#A2845E",  # Brown
    "#8E8E93",  # Gray
)

# Used for events with more than one participant. Not part of the palette.
FAMILY_EVENT_COLOR = "#334155"


def _color_key(color: str) -> str:
    return "#" + color.strip().lstrip("#").upper()


def next_available_color(
    used_colors: Iterable[Optional[str]], rng: random.Random | None = None
) -> str:
    """Return the first palette color that is not already in use.

    ``None`` entries in ``used_colors`` are ignored and comparison is
    case-insensitive.  Once every palette color is taken a random palette
    color is returned, so large families get repeats rather than an error.
    ``rng`` defaults to the :mod:`random` module.
    """
    used = {_color_key(c) for c in used_colors if c}
    for color in MEMBER_COLORS:
        if color not in used:
            return color

    logger.info("All %d member colors in use; reusing a random one", len(MEMBER_COLORS))
    return (rng or random).choice(MEMBER_COLORS)
