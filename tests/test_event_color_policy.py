import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from familycal.colors import blend_colors, normalize_for_display
from familycal.events import (
    ColorPolicy,
    EventAppearance,
    event_appearance,
    format_display_name,
    resolve_event_color,
)
from familycal.palette import FAMILY_EVENT_COLOR, MEMBER_COLORS


def test_no_participants_uses_fallback():
    assert resolve_event_color([]) == MEMBER_COLORS[0]
    assert resolve_event_color([None, None], "#007AFF") == "#007AFF"
    assert resolve_event_color([], "#FFFFFF") == normalize_for_display("#FFFFFF")
    assert resolve_event_color([], None) == FAMILY_EVENT_COLOR


def test_single_participant_uses_their_color():
    assert resolve_event_color(["#FF3B30"], "#000000") == normalize_for_display("#FF3B30")
    assert resolve_event_color(["#FF9500", None], "#000000") == "#C75D00"


def test_multiple_participants_use_family_color():
    assert resolve_event_color(["#FF3B30", "#007AFF"], "#000000") == FAMILY_EVENT_COLOR
    assert (
        resolve_event_color(["#FF3B30", "#007AFF"], "#000000", "#FFFFFF")
        == normalize_for_display("#FFFFFF")
    )


def test_multiple_participants_never_blend_by_default():
    colors = ["#FF3B30", "#007AFF"]
    assert resolve_event_color(colors) != normalize_for_display(blend_colors(colors))


def test_same_color_twice_still_family_color():
    assert resolve_event_color(["#FF3B30", "#FF3B30"]) == FAMILY_EVENT_COLOR


def test_blend_colors():
    assert blend_colors(["#FFFFFF", "#000000"]) == "#808080"
    assert blend_colors(["#FF0000", "#0000FF"]) == "#800080"
    assert blend_colors(["#FF0000", "#00FF00", "#0000FF"]) == "#555555"
    assert blend_colors(["#FF0000", None, "bad"]) == "#FF0000"
    assert blend_colors([]) == FAMILY_EVENT_COLOR


def test_appearance_single_participant():
    appearance = event_appearance(["#FFCC00"])
    assert appearance == EventAppearance(color="#8F5C00", text_color="#FFFFFF")


def test_appearance_multiple_participants_has_gradient():
    appearance = event_appearance(["#FFCC00", None, "#007AFF"])
    assert appearance.color == FAMILY_EVENT_COLOR
    assert appearance.text_color == "#FFFFFF"
    assert appearance.gradient_colors == ("#8F5C00", "#007AFF")


def test_appearance_whole_family_has_no_gradient():
    appearance = event_appearance(["#FF3B30", "#007AFF"], family_size=2)
    assert appearance.color == FAMILY_EVENT_COLOR
    assert appearance.gradient_colors == ()


def test_appearance_blend_policy():
    appearance = event_appearance(["#FF3B30", "#007AFF"], policy="blend")
    assert appearance.color == "#805B98"
    assert appearance.gradient_colors == ()
    assert event_appearance([], policy=ColorPolicy.Blend).color == FAMILY_EVENT_COLOR


def test_appearance_unknown_policy():
    with pytest.raises(ValueError):
        event_appearance(["#FF3B30"], policy="average")


def test_format_display_name():
    assert format_display_name("Ann") == "Ann"
    assert format_display_name("Ann", "Smith", "Jones") == "Ann Smith"
    assert format_display_name("Ann", "Smith") == "Ann Smith"
    assert format_display_name("Ann", "Smith", "The Smith Family") == "Ann"
    assert format_display_name("Ann", "SMITH ", "smith") == "Ann"


def test_malformed_colors_use_given_family_color():
    assert resolve_event_color([], "bad", "#123456") == "#123456"
    assert resolve_event_color(["bad"], "#000000", "#123456") == "#123456"
    # A light family color is normalized before being used as the fallback.
    assert resolve_event_color([], "bad", "#FFFFFF") == "#575757"


def test_appearance_malformed_colors_use_given_family_color():
    appearance = event_appearance(["bad", "#007AFF"], family_color="#123456")
    assert appearance.color == "#123456"
    assert appearance.gradient_colors == ("#123456", "#007AFF")
    appearance = event_appearance(["bad"], family_color="#123456", policy="blend")
    assert appearance.color == "#123456"


def test_blend_colors_custom_default():
    assert blend_colors(["bad", None], default="#123456") == "#123456"
    assert blend_colors([123, "#FFFFFF", "#000000"]) == "#808080"
