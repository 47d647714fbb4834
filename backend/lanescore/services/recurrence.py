"""Recurring tournament patterns such as "every Friday" or "3rd Wednesday".

A pattern is validated with :func:`validate_pattern` before anything else
looks at it. Occurrence calculation always takes the reference time as an
argument and never reads the clock.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Iterator, Mapping, Optional, Union

from .. import config
from ..exceptions import InvalidPattern, OccurrenceNotFound
from ..schemas import RecurringPattern, ValidationResult
from ..time_utils import (
    HHMM_RE,
    at_wall_time,
    first_of_next_month,
    parse_hhmm,
    step_to_weekday,
)
from .validation import fail, in_range, ok

logger = logging.getLogger(__name__)

WEEKLY = "weekly"
MONTHLY = "monthly"
FREQUENCIES = (WEEKLY, MONTHLY)

DAYS_OF_WEEK = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

WEEKS_OF_MONTH = {
    1: "1st",
    2: "2nd",
    3: "3rd",
    4: "4th",
    5: "5th",
}

UNKNOWN_PATTERN = "unknown pattern"

# A weekday has a fifth occurrence at least once a quarter.
MAX_SKIPPED_MONTHS = 12

PatternLike = Union[RecurringPattern, Mapping[str, Any]]

_ALIASES = {"day_of_week": "dayOfWeek", "week_of_month": "weekOfMonth"}


def _field(pattern: PatternLike, name: str) -> Any:
    if isinstance(pattern, RecurringPattern):
        return getattr(pattern, name)
    if name in pattern:
        return pattern[name]
    alias = _ALIASES.get(name)
    return pattern.get(alias) if alias else None


def _frequency(pattern: PatternLike) -> Optional[str]:
    raw = _field(pattern, "frequency")
    if not isinstance(raw, str):
        return None
    return raw or None


def validate_pattern(pattern: PatternLike) -> ValidationResult:
    """Check a pattern, or partially filled form state, against the rules.

    Rules:
    - ``frequency`` is ``weekly`` or ``monthly``
    - ``day_of_week`` is an integer from 0 (Sunday) to 6 (Saturday)
    - monthly patterns need ``week_of_month`` from 1 to 5
    - ``time`` is ``HH:mm`` between 00:00 and 23:59
    """

    frequency = _frequency(pattern)
    if frequency is None:
        return fail("Frequency is required")
    if frequency not in FREQUENCIES:
        return fail("Frequency must be weekly or monthly")

    if not in_range(_field(pattern, "day_of_week"), 0, 6):
        return fail("Day of week must be from 0 (Sunday) to 6 (Saturday)")

    if frequency == MONTHLY:
        week = _field(pattern, "week_of_month")
        if week is None:
            return fail("Week of month is required for monthly patterns")
        if not in_range(week, 1, 5):
            return fail("Week of month must be from 1 to 5")

    value = _field(pattern, "time")
    if not isinstance(value, str) or not HHMM_RE.fullmatch(value):
        return fail("Time must be in HH:mm format (e.g. 19:00)")
    if parse_hhmm(value) is None:
        return fail("Time must be between 00:00 and 23:59")

    return ok()


def _require_valid_pattern(pattern: PatternLike) -> RecurringPattern:
    result = validate_pattern(pattern)
    if not result.valid:
        logger.warning("Refusing to schedule invalid pattern: %s", result.error)
        raise InvalidPattern(result.error or "invalid pattern")
    frequency = _frequency(pattern)
    # week_of_month is ignored for weekly patterns, whatever it holds
    week = _field(pattern, "week_of_month") if frequency == MONTHLY else None
    return RecurringPattern(
        frequency=frequency,
        day_of_week=_field(pattern, "day_of_week"),
        week_of_month=week,
        time=_field(pattern, "time"),
    )


def _resolve_policy(policy: Optional[str]) -> str:
    if policy is None:
        return config.FIFTH_WEEK_POLICY
    if policy not in config.FIFTH_WEEK_POLICIES:
        raise ValueError(f"unknown fifth-week policy: {policy!r}")
    return policy


def _nth_weekday(month_start: date, week_of_month: int, day_of_week: int) -> date:
    """Date of the n-th ``day_of_week`` counted from ``month_start``.

    The result may fall in the following month when the month has fewer
    than ``week_of_month`` such weekdays.
    """

    first = step_to_weekday(month_start, day_of_week)
    if first is None:
        raise OccurrenceNotFound(
            f"no weekday {day_of_week} within a week of {month_start.isoformat()}"
        )
    return first + timedelta(weeks=week_of_month - 1)


def get_date_in_month(
    year: int, month: int, week_of_month: int, day_of_week: int
) -> Optional[date]:
    """Return the ``week_of_month``-th ``day_of_week`` of a month.

    Args:
        year: Calendar year.
        month: Month from 1 to 12.
        week_of_month: Which occurrence, from 1 to 5.
        day_of_week: Weekday from 0 (Sunday) to 6 (Saturday).

    Returns:
        The date, or ``None`` if the month has fewer occurrences of that
        weekday (only possible for the fifth).
    """

    if not in_range(week_of_month, 1, 5):
        raise ValueError("week_of_month must be from 1 to 5")
    if not in_range(day_of_week, 0, 6):
        raise ValueError("day_of_week must be from 0 to 6")

    target = _nth_weekday(date(year, month, 1), week_of_month, day_of_week)
    if target.month != month:
        return None
    return target


def _next_weekly_day(pattern: RecurringPattern, reference: date) -> date:
    day = step_to_weekday(reference + timedelta(days=1), pattern.day_of_week)
    if day is None:
        raise OccurrenceNotFound(
            f"no weekday {pattern.day_of_week} in the week after {reference.isoformat()}"
        )
    return day


def _next_monthly_day(pattern: RecurringPattern, reference: date, policy: str) -> date:
    month_start = first_of_next_month(reference)
    week, weekday = pattern.week_of_month, pattern.day_of_week

    candidate = _nth_weekday(month_start, week, weekday)
    if candidate.month == month_start.month or policy == "rollover":
        return candidate

    if policy == "clamp":
        logger.debug(
            "%s has no week %d %s; using the last one",
            month_start.strftime("%Y-%m"),
            week,
            DAYS_OF_WEEK[weekday],
        )
        return candidate - timedelta(weeks=1)

    for _ in range(MAX_SKIPPED_MONTHS):
        logger.debug(
            "%s has no week %d %s; skipping to the next month",
            month_start.strftime("%Y-%m"),
            week,
            DAYS_OF_WEEK[weekday],
        )
        month_start = first_of_next_month(month_start)
        found = get_date_in_month(month_start.year, month_start.month, week, weekday)
        if found is not None:
            return found

    raise OccurrenceNotFound(
        f"no week {week} {DAYS_OF_WEEK[weekday]} within {MAX_SKIPPED_MONTHS} months"
    )


def compute_next_occurrence(
    pattern: PatternLike,
    reference: datetime,
    *,
    policy: Optional[str] = None,
) -> datetime:
    """Return the first occurrence of ``pattern`` after ``reference``.

    Weekly patterns search from the day after ``reference``, so a reference
    that already falls on the weekday yields the following week. Monthly
    patterns look at the month after ``reference``'s month.

    ``policy`` decides what a "5th <weekday>" means in a month that only has
    four: ``"skip"`` to the next month that has five, ``"clamp"`` to the
    fourth, or ``"rollover"`` into the following month. It defaults to
    ``config.FIFTH_WEEK_POLICY``.

    The result keeps ``reference``'s ``tzinfo``; naive stays naive.

    Raises:
        InvalidPattern: If ``pattern`` does not pass :func:`validate_pattern`.
        OccurrenceNotFound: If no matching day exists within the search cap.
        ValueError: If ``policy`` is not a known policy name.
    """

    pattern = _require_valid_pattern(pattern)
    policy = _resolve_policy(policy)
    hour, minute = parse_hhmm(pattern.time)

    if isinstance(reference, datetime):
        reference_day, tz = reference.date(), reference.tzinfo
    else:
        reference_day, tz = reference, None

    if pattern.frequency == WEEKLY:
        day = _next_weekly_day(pattern, reference_day)
    else:
        day = _next_monthly_day(pattern, reference_day, policy)
    return at_wall_time(day, hour, minute, tz)


def iter_occurrences(
    pattern: PatternLike,
    reference: datetime,
    count: int,
    *,
    policy: Optional[str] = None,
) -> Iterator[datetime]:
    """Return an iterator over the next ``count`` occurrences.

    Each occurrence follows the previous one. The count and the pattern are
    checked when this is called, not when iteration starts.

    Raises:
        ValueError: If ``count`` is negative or ``policy`` is unknown.
        InvalidPattern: If ``pattern`` fails ``validate_pattern``.
    """

    if count < 0:
        raise ValueError("count must not be negative")
    pattern = _require_valid_pattern(pattern)
    _resolve_policy(policy)
    return _occurrences(pattern, reference, count, policy)


def _occurrences(
    pattern: RecurringPattern, reference: datetime, count: int, policy: Optional[str]
) -> Iterator[datetime]:
    current = reference
    for _ in range(count):
        current = compute_next_occurrence(pattern, current, policy=policy)
        yield current


def format_pattern(pattern: PatternLike) -> str:
    """Render a pattern for display, e.g. ``"3rd Wednesday of every month, 19:00"``.

    Display only: an unrecognised pattern yields ``UNKNOWN_PATTERN`` instead
    of raising.
    """

    frequency = _frequency(pattern)
    weekday = _field(pattern, "day_of_week")
    if not in_range(weekday, 0, 6):
        return UNKNOWN_PATTERN
    day_name = DAYS_OF_WEEK[weekday]
    time_of_day = _field(pattern, "time")

    if frequency == MONTHLY:
        week = _field(pattern, "week_of_month")
        if not in_range(week, 1, 5):
            return UNKNOWN_PATTERN
        label = WEEKS_OF_MONTH[week]
        return f"{label} {day_name} of every month, {time_of_day}"
    if frequency == WEEKLY:
        return f"every {day_name} {time_of_day}"
    return UNKNOWN_PATTERN
