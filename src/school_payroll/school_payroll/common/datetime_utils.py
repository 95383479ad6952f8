from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Tuple

from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_month(value: str) -> Tuple[int, int]:
    """Parse a YYYY-MM payroll month into (year, month)."""
    try:
        parsed = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError(f"Invalid month: {value!r} (expected YYYY-MM)") from None
    return parsed.year, parsed.month


def month_bounds(month: str) -> Tuple[date, date]:
    year, month_num = parse_month(month)
    last_day = calendar.monthrange(year, month_num)[1]
    return date(year, month_num, 1), date(year, month_num, last_day)


def iter_month_days(month: str) -> Iterator[date]:
    start, end = month_bounds(month)
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def weekday_index(day: date) -> int:
    """Weekday index with Sunday = 0 ... Saturday = 6."""
    return (day.weekday() + 1) % 7


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[weekday_index(day)]


def parse_time_of_day(value: object) -> Optional[time]:
    """Accept time objects or 'HH:MM' / 'HH:MM:SS' strings; empty values give None."""
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        raise ValidationError(f"Invalid time of day: {value!r}")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)
    except ValueError:
        raise ValidationError(f"Invalid time of day: {value!r}") from None


def whole_minutes_between(earlier: time, later: time) -> int:
    """Whole minutes from `earlier` to `later` on the same day (negative when reversed)."""
    seconds = _seconds_of_day(later) - _seconds_of_day(earlier)
    return seconds // 60


def _seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second
