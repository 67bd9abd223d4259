import re
from datetime import datetime, date, time, timedelta
from typing import Optional

import pytz

from config import TIMEZONE
from errors import ConfigurationError

# Python weekday numbers (0=Monday ... 6=Sunday)
MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

WEEKDAY_CODES = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

WEEKS_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*weeks?\s*$", re.IGNORECASE)


def get_timezone(tz_name: Optional[str] = None):
    return pytz.timezone(tz_name or TIMEZONE)


def current_time(tz) -> datetime:
    """
    The one place "now" is read. Callers grab it once at the edge and
    pass it down; nothing below this reads the clock.
    """
    return datetime.now(tz)


def to_local(dt: datetime, tz) -> datetime:
    """Naive datetimes are taken as campaign wall-clock time."""
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)


def hour_to_time(hour: float) -> time:
    """18.5 -> 18:30"""
    total_minutes = int(round(hour * 60))
    return time(total_minutes // 60, total_minutes % 60)


def localize(day: date, hour: float, tz) -> datetime:
    """Wall-clock `hour` on `day` in the campaign timezone."""
    return tz.localize(datetime.combine(day, hour_to_time(hour)))


def add_hours(start: datetime, hours: float, tz) -> datetime:
    return tz.normalize(start + timedelta(hours=hours))


def shift_days(dt: datetime, days: float, tz) -> datetime:
    """
    Move a timestamp by whole or fractional days on the wall clock, so
    09:15 stays 09:15 across a DST change.
    """
    local = to_local(dt, tz).replace(tzinfo=None)
    return tz.localize(local + timedelta(days=days))


def weekday_code(day: date) -> str:
    return WEEKDAY_CODES[day.weekday()]


def parse_weeks(value: str, field: str) -> float:
    """
    "4 weeks" -> 4.0

    Raises ConfigurationError for anything that isn't "<number> week(s)".
    """
    match = WEEKS_RE.match(str(value or ""))
    if not match:
        raise ConfigurationError(
            f"{field} should look like '<number> weeks', got {value!r}"
        )
    return float(match.group(1))


# =========================
# Weekday snapping
# =========================
def next_weekday(day: date) -> date:
    """Advance whole days until Monday-Friday."""
    while day.weekday() in (SATURDAY, SUNDAY):
        day += timedelta(days=1)
    return day


def next_weekday_excluding_friday(day: date) -> date:
    """Advance whole days until Monday-Thursday."""
    while day.weekday() in (FRIDAY, SATURDAY, SUNDAY):
        day += timedelta(days=1)
    return day


def next_occurrence_of(day_of_week: int, day: date) -> date:
    """
    Snap to the instance of `day_of_week` in the same Sunday-to-Saturday
    week as `day`.

    This is a snap, not a forward search: Wednesday asked from a Saturday
    returns the Wednesday three days earlier.
    """
    # Sunday-based position in the week: Sun=0 ... Sat=6
    current_pos = (day.weekday() + 1) % 7
    target_pos = (day_of_week + 1) % 7
    return day + timedelta(days=target_pos - current_pos)


def add_business_days(day: date, n: int) -> date:
    """
    Add `n` business days, skipping Saturdays and Sundays.

    The result is always a weekday; with n <= 0 the day is only snapped
    forward to a weekday.
    """
    if n <= 0:
        return next_weekday(day)

    remaining = n
    while remaining > 0:
        day += timedelta(days=1)
        if day.weekday() not in (SATURDAY, SUNDAY):
            remaining -= 1
    return day
