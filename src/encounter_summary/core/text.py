"""Date and number rendering helpers shared by the extractor, composer and prompt."""

from __future__ import annotations

from datetime import date, datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so mixed store output compares cleanly."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_number(value: int | float | str | None) -> str:
    """Render ``120.0`` as ``120`` and leave other values as written."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_date(value: date | datetime | None) -> str:
    """Short date, e.g. ``Mar 5, 2024``."""
    if value is None:
        return "unknown date"
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def ordinal(day: int) -> str:
    """``1`` -> ``1st``, ``12`` -> ``12th``, ``22`` -> ``22nd``."""
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: date | datetime | None) -> str:
    """Long date, e.g. ``March 5th, 2024``."""
    if value is None:
        return "an unknown date"
    return f"{value.strftime('%B')} {ordinal(value.day)}, {value.year}"


def format_timestamp(value: datetime) -> str:
    """Long date with time, e.g. ``March 5th, 2024 at 2:07 PM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{format_long_date(value)} at {hour}:{value.minute:02d} {suffix}"


def age_in_years(birth: date, today: date) -> int:
    years = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        years -= 1
    return years
