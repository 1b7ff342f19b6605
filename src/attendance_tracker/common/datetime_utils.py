from __future__ import annotations

from datetime import date, datetime, time

from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import InvalidTimeFormatError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def time_string_to_minutes(value: str) -> int:
    """Convert "HH:mm" (any trailing ":ss" is ignored) into minutes since midnight."""
    if not value or ":" not in value:
        raise InvalidTimeFormatError(f"Invalid time string: {value!r}")

    parts = value.strip().split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        raise InvalidTimeFormatError(f"Invalid time string: {value!r}") from None

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise InvalidTimeFormatError(f"Invalid time string: {value!r}")
    return hours * 60 + minutes


def format_time_string(instant: datetime | time) -> str:
    """Render the wall-clock part of an instant as HH:mm:ss."""
    return instant.strftime("%H:%M:%S")


def minutes_of_day(instant: datetime | time) -> int:
    """Minutes since local midnight, seconds ignored."""
    return instant.hour * 60 + instant.minute


def parse_time_string(value: str) -> time:
    minutes = time_string_to_minutes(value)
    parts = value.strip().split(":")
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2].isdigit() else 0
    if seconds > 59:
        raise InvalidTimeFormatError(f"Invalid time string: {value!r}")
    return time(hour=minutes // 60, minute=minutes % 60, second=seconds)


def weekday_name(instant: datetime | date) -> str:
    """English weekday name (Monday..Sunday), independent of the process locale."""
    return WEEKDAY_NAMES[instant.weekday()]


def iso_timestamp(work_date: date, time_value: str | None) -> str:
    """ISO-8601 local timestamp for a record's date combined with one of its time fields."""
    at = parse_time_string(time_value) if time_value else time(0, 0)
    return datetime.combine(work_date, at).isoformat()
