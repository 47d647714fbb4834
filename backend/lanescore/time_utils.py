"""Helpers for working with wall-clock times and calendar days."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Tuple

HHMM_RE = re.compile(r"^(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})$")


def parse_hhmm(value: object) -> Optional[Tuple[int, int]]:
    """Parse a strict ``HH:mm`` string into ``(hour, minute)``.

    Args:
        value: The raw value, usually straight from a form field.

    Returns:
        The hour and minute, or ``None`` if ``value`` is not a string of the
        form ``HH:mm`` or either component is out of range.
    """

    if not isinstance(value, str):
        return None
    match = HHMM_RE.fullmatch(value)
    if match is None:
        return None
    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def js_weekday(day: date) -> int:
    """Return the weekday of ``day`` numbered from Sunday (0) to Saturday (6)."""

    return (day.weekday() + 1) % 7


def first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def step_to_weekday(start: date, day_of_week: int, *, max_steps: int = 7) -> Optional[date]:
    """Advance day by day from ``start`` until the weekday matches.

    ``start`` itself counts as the first candidate. Returns ``None`` when no
    match is found within ``max_steps`` candidates.
    """

    current = start
    for _ in range(max_steps):
        if js_weekday(current) == day_of_week:
            return current
        current += timedelta(days=1)
    return None


def at_wall_time(
    day: date, hour: int, minute: int, tz: Optional[tzinfo] = None
) -> datetime:
    """Combine ``day`` with a wall-clock time, keeping ``tz`` (or naive)."""

    return datetime.combine(day, time(hour, minute), tzinfo=tz)
