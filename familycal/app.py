from datetime import datetime
import logging
import math
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel, create_engine

from .colors import (
    DEFAULT_DARKEN_PERCENT,
    blend_colors,
    contrasting_text_color,
    is_light_color,
    normalize_for_display,
)
from .events import ColorPolicy, event_appearance
from .members import MemberColorStore
from .palette import MEMBER_COLORS
from .settings import SettingsStore
from .time_utils import countdown_text, format_time_range, get_now, parse_datetime


def init_db(engine) -> None:
    """Create any missing tables."""
    SQLModel.metadata.create_all(engine)


db_path = os.getenv("FAMILYCAL_DB", "familycal.db")
engine = create_engine(
    f"sqlite:///{db_path}",
    connect_args={"check_same_thread": False},
)
init_db(engine)
member_store = MemberColorStore(engine)
settings_store = SettingsStore(engine)

app = FastAPI()

logger = logging.getLogger(__name__)


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _json_body(request: Request) -> dict | None:
    try:
        data = await request.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _parse_time_param(value: str | None) -> datetime | None:
    if value is None:
        return None
    return parse_datetime(value)


def _appearance_json(appearance) -> dict:
    return {
        "color": appearance.color,
        "text_color": appearance.text_color,
        "gradient_colors": list(appearance.gradient_colors),
    }


@app.get("/palette")
async def palette():
    return JSONResponse(
        {
            "colors": list(MEMBER_COLORS),
            "family_color": settings_store.get_family_color(),
        }
    )


@app.get("/members/colors")
async def list_member_colors():
    return JSONResponse(member_store.list_colors())


@app.post("/members/{member_id}/color")
async def assign_member_color(member_id: str):
    color = member_store.assign(member_id)
    return JSONResponse({"member_id": member_id, "color": color})


@app.put("/members/{member_id}/color")
async def set_member_color(request: Request, member_id: str):
    data = await _json_body(request)
    color = data.get("color") if data else None
    if not isinstance(color, str):
        return _error("Missing color")
    try:
        color = member_store.set_color(member_id, color)
    except ValueError:
        logger.warning("Rejected color %r for member %s", data.get("color"), member_id)
        return _error("Invalid color")
    return JSONResponse({"member_id": member_id, "color": color})


@app.get("/colors/display")
async def display_color(color: str, darken: float = DEFAULT_DARKEN_PERCENT):
    if not math.isfinite(darken):
        return _error("Invalid darken")
    normalized = normalize_for_display(color, darken)
    return JSONResponse(
        {
            "color": normalized,
            "text_color": contrasting_text_color(normalized),
            "is_light": is_light_color(color),
        }
    )


@app.post("/colors/blend")
async def blend(request: Request):
    data = await _json_body(request)
    colors = data.get("colors") if data else None
    if not isinstance(colors, list):
        return _error("Missing colors")
    color = blend_colors(colors, default=settings_store.get_family_color())
    return JSONResponse({"color": color})


@app.post("/events/color")
async def event_color(request: Request):
    """Resolve an event's badge colors.

    The body may name ``participants`` (member ids, looked up in the member
    store) and/or raw ``colors``; ``fallback``, ``family_size`` and ``policy``
    are optional.
    """
    data = await _json_body(request)
    if data is None:
        return _error("Invalid body")
    participants = data.get("participants", [])
    raw_colors = data.get("colors", [])
    if not isinstance(participants, list) or not isinstance(raw_colors, list):
        return _error("Invalid participants")

    family_size = data.get("family_size", 0)
    if (
        not isinstance(family_size, int)
        or isinstance(family_size, bool)
        or family_size < 0
    ):
        return _error("Invalid family_size")

    colors = [member_store.get(str(pid)) for pid in participants]
    colors.extend(c if isinstance(c, str) else None for c in raw_colors)
    kwargs = {
        "family_size": family_size,
        "family_color": settings_store.get_family_color(),
        "policy": data.get("policy", ColorPolicy.Shared),
    }
    fallback = data.get("fallback")
    if fallback is not None and not isinstance(fallback, str):
        return _error("Invalid fallback")
    if fallback:
        kwargs["fallback"] = fallback
    try:
        appearance = event_appearance(colors, **kwargs)
    except ValueError:
        return _error("Invalid policy")
    return JSONResponse(_appearance_json(appearance))


@app.get("/time/range")
async def time_range(start: str, end: str, all_day: bool = False):
    try:
        start_dt = parse_datetime(start)
        end_dt = parse_datetime(end)
    except ValueError:
        return _error("Invalid datetime")
    return JSONResponse({"text": format_time_range(start_dt, end_dt, all_day=all_day)})


@app.get("/time/countdown")
async def countdown(start: str, now: str | None = None):
    try:
        start_dt = parse_datetime(start)
        now_dt = _parse_time_param(now) or get_now()
    except ValueError:
        return _error("Invalid datetime")
    return JSONResponse({"text": countdown_text(start_dt, now_dt)})


@app.get("/settings/family-color")
async def get_family_color():
    return JSONResponse({"color": settings_store.get_family_color()})


@app.put("/settings/family-color")
async def update_family_color(request: Request):
    data = await _json_body(request)
    color = data.get("color") if data else None
    if not isinstance(color, str):
        return _error("Missing color")
    try:
        color = settings_store.set_family_color(color)
    except ValueError:
        return _error("Invalid color")
    return JSONResponse({"color": color})
