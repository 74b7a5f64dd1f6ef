import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

sys.path.append(str(Path(__file__).resolve().parents[1]))

from familycal.time_utils import format_time_range


def test_same_day_range():
    start = datetime(2025, 3, 1, 9, 0)
    end = datetime(2025, 3, 1, 17, 30)
    assert format_time_range(start, end) == "09:00 - 17:30"


def test_zero_padding():
    start = datetime(2025, 3, 1, 7, 5)
    end = datetime(2025, 3, 1, 8, 9)
    assert format_time_range(start, end) == "07:05 - 08:09"


def test_runs_to_midnight():
    start = datetime(2025, 3, 1, 18, 0)
    end = datetime(2025, 3, 2, 0, 0)
    assert format_time_range(start, end) == "18:00 - 00:00"


def test_multi_day_event_shows_end_clock_time():
    start = datetime(2025, 3, 1, 18, 0)
    end = datetime(2025, 3, 3, 9, 15)
    assert format_time_range(start, end) == "18:00 - 09:15"


def test_all_day():
    start = datetime(2025, 3, 1)
    end = datetime(2025, 3, 2)
    assert format_time_range(start, end, all_day=True) == "All day"


def test_end_rendered_in_start_timezone():
    start = datetime(2025, 3, 1, 9, 0, tzinfo=ZoneInfo("UTC"))
    end = datetime(2025, 3, 1, 18, 30, tzinfo=timezone(timedelta(hours=1)))
    assert format_time_range(start, end) == "09:00 - 17:30"
