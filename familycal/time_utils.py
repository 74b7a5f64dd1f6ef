from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo


MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
WEEK = timedelta(weeks=1)
# Fixed-length approximations; countdowns are not calendar-aware.
YEAR = timedelta(days=365.25)
MONTH = YEAR / 12


def _configured_tz() -> tzinfo:
    """Return the timezone configured for the application."""
    tz_name = os.getenv("FAMILYCAL_TZ")
    if tz_name:
        return ZoneInfo(tz_name)
    system_tz = datetime.now().astimezone().tzinfo
    return system_tz if system_tz is not None else ZoneInfo("UTC")


def get_now() -> datetime:
    """Return the current time in the configured timezone.

    Uses the ``FAMILYCAL_TZ`` environment variable if set, otherwise
    defaults to the system timezone.
    """
    return datetime.now(_configured_tz())


def parse_datetime(value: str) -> datetime:
    """Parse an ISO formatted datetime string.

    Naive values are placed in the configured timezone; aware values are
    converted into it so that clock times render in the family's zone.
    """
    return ensure_tz(datetime.fromisoformat(value))


def ensure_tz(dt: datetime | None) -> datetime | None:
    """Ensure ``dt`` is timezone-aware using the configured timezone."""
    if dt is None:
        return None

    tz = _configured_tz()
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    if dt.tzinfo == tz:
        return dt
    return dt.astimezone(tz)


def _clock(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}"


def format_time_range(start: datetime, end: datetime, all_day: bool = False) -> str:
    """Format ``start`` and ``end`` as ``HH:MM - HH:MM``.

    An ``end`` at exactly midnight on a later date is shown as ``00:00``,
    meaning the event runs to the end of ``start``'s day.  Intervals with
    ``end`` before ``start`` are not checked.
    """
    if all_day:
        return "All day"
    if start.tzinfo is not None and end.tzinfo is not None:
        end = end.astimezone(start.tzinfo)
    if end.hour == 0 and end.minute == 0 and end.date() != start.date():
        return f"{_clock(start)} - 00:00"
    return f"{_clock(start)} - {_clock(end)}"


@dataclass(frozen=True)
class Countdown:
    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0

    def parts(self) -> list[str]:
        units = [
            (self.years, "y"),
            (self.months, "mo"),
            (self.weeks, "w"),
            (self.days, "d"),
            (self.hours, "h"),
            (self.minutes, "m"),
        ]
        return [f"{value}{suffix}" for value, suffix in units if value > 0]


def decompose_duration(delta: timedelta) -> Countdown:
    """Break ``delta`` into whole units, largest first.

    Years are 365.25 days and months a twelfth of that.  Leftover seconds
    are dropped.
    """
    remaining = max(delta, timedelta(0))
    values: list[int] = []
    for unit in (YEAR, MONTH, WEEK, DAY, HOUR, MINUTE):
        count, remaining = divmod(remaining, unit)
        values.append(count)
    return Countdown(*values)


def countdown_text(start: datetime, now: datetime | None = None) -> str:
    """Return ``"Started"`` or a countdown such as ``"Starts in 2d 3h"``."""
    if now is None:
        now = get_now()
        start = ensure_tz(start)
    if start <= now:
        return "Started"
    parts = decompose_duration(start - now).parts()
    if not parts:
        return "Starts in < 1m"
    return "Starts in " + " ".join(parts)
