from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .colors import blend_colors, contrasting_text_color, normalize_for_display
from .palette import FAMILY_EVENT_COLOR, MEMBER_COLORS


class ColorPolicy(str, Enum):
    Shared = "shared"
    Blend = "blend"


@dataclass(frozen=True)
class EventAppearance:
    color: str
    text_color: str
    gradient_colors: tuple[str, ...] = ()


def resolve_event_color(
    participant_colors: Sequence[Optional[str]],
    fallback: Optional[str] = MEMBER_COLORS[0],
    family_color: str = FAMILY_EVENT_COLOR,
) -> str:
    """Return the display color for an event.

    No participant colors gives ``fallback``, one gives that color and two or
    more give ``family_color``.  The result is always normalized for display,
    and a malformed color falls back to ``family_color``.
    Use :func:`~familycal.colors.blend_colors` when a mix of the participant
    colors is wanted instead.
    """
    shared = normalize_for_display(family_color)
    valid = [c for c in participant_colors if c is not None]
    if not valid:
        return normalize_for_display(fallback, default=shared)
    if len(valid) == 1:
        return normalize_for_display(valid[0], default=shared)
    return shared


def event_appearance(
    participant_colors: Sequence[Optional[str]],
    family_size: int = 0,
    fallback: Optional[str] = MEMBER_COLORS[0],
    family_color: str = FAMILY_EVENT_COLOR,
    policy: ColorPolicy | str = ColorPolicy.Shared,
) -> EventAppearance:
    """Return color, text color and gradient stops for an event badge.

    An event attended by the whole family (``family_size`` participants) is
    shown in the family color without a gradient.  Otherwise, under the
    shared policy, events with several participants carry each participant's
    normalized color as gradient stops in participant order.
    """
    policy = ColorPolicy(policy)
    shared = normalize_for_display(family_color)
    valid = [c for c in participant_colors if c is not None]

    if family_size > 0 and len(participant_colors) == family_size:
        return EventAppearance(color=shared, text_color=contrasting_text_color(shared))

    if policy == ColorPolicy.Blend:
        color = normalize_for_display(blend_colors(valid, default=shared), default=shared)
        return EventAppearance(color=color, text_color=contrasting_text_color(color))

    color = resolve_event_color(valid, fallback, family_color)
    gradient: tuple[str, ...] = ()
    if len(valid) > 1:
        gradient = tuple(normalize_for_display(c, default=shared) for c in valid)
    return EventAppearance(
        color=color,
        text_color=contrasting_text_color(color),
        gradient_colors=gradient,
    )


def format_display_name(
    first_name: str, last_name: Optional[str] = None, family_name: Optional[str] = None
) -> str:
    """Return the member's name, omitting a last name shared with the family."""
    if not last_name:
        return first_name
    if family_name:
        if last_name.strip().lower() in family_name.strip().lower():
            return first_name
    return f"{first_name} {last_name}"
