"""
Best-effort next-run estimation for 5-field cron schedules.

The estimator is a display helper, not a cron engine. It resolves the
minute, hour and day-of-week fields in a fixed order against "now" and
renders the result as a short label:

    ""           + "2:30pm"   -> today
    "Tomorrow "  + "9:00am"   -> one calendar day ahead
    "Mon "       + "9:00am"   -> further out

Supported field forms are ``*``, ``*/N`` and a literal integer. Day-of-month
and month are accepted but not used.

Example:
    >>> from datetime import datetime
    >>> estimate_next_run("*/15 * * * *", datetime(2025, 3, 3, 10, 7))
    '10:15am'
    >>> estimate_next_run("30 14 * * *", datetime(2025, 3, 3, 10, 0))
    '2:30pm'
    >>> estimate_next_run("0 9 *", datetime(2025, 3, 3, 10, 0))
    'Unknown'
"""

import logging
import re
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# Indexed by cron day-of-week (0 = Sunday)
WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class InvalidFieldError(ValueError):
    """A cron field that cannot be read as an integer."""


def parse_field_int(value: str) -> int:
    """
    Read the leading integer of a cron field.

    Parsing is permissive: ``"5"`` and ``"5,10"`` both read as 5.

    Args:
        value: Raw field text (without any ``*/`` prefix)

    Returns:
        The parsed integer

    Raises:
        InvalidFieldError: If the field does not start with an integer
    """
    match = _LEADING_INT.match(value)
    if match is None:
        raise InvalidFieldError(f"Not an integer cron field: {value!r}")
    return int(match.group(1))


def _is_step(field: str) -> bool:
    return field.startswith("*/")


def _step_interval(field: str) -> int:
    interval = parse_field_int(field[2:])
    if interval == 0:
        raise InvalidFieldError(f"Zero step in cron field: {field!r}")
    return interval


def _set_minutes(moment: datetime, minutes: int) -> datetime:
    """Set the minute of ``moment``, overflowing into later hours."""
    return moment.replace(minute=0) + timedelta(minutes=minutes)


def _set_hours(moment: datetime, hours: int) -> datetime:
    """Set the hour of ``moment``, overflowing into later days."""
    return moment.replace(hour=0) + timedelta(hours=hours)


def _cron_weekday(moment: datetime) -> int:
    # datetime.weekday() is Monday=0; cron is Sunday=0
    return (moment.weekday() + 1) % 7


def format_next_run(candidate: datetime, now: datetime) -> str:
    """
    Render a candidate run time as a display label relative to ``now``.

    Args:
        candidate: Estimated next run
        now: Reference instant

    Returns:
        Label such as ``"2:30pm"``, ``"Tomorrow 9:00am"`` or ``"Mon 9:00am"``
    """
    display_hour = candidate.hour % 12 or 12
    suffix = "pm" if candidate.hour >= 12 else "am"

    days_ahead = (candidate.date() - now.date()).days
    if days_ahead == 0:
        prefix = ""
    elif days_ahead == 1:
        prefix = "Tomorrow "
    else:
        prefix = f"{WEEKDAY_ABBREVIATIONS[_cron_weekday(candidate)]} "

    return f"{prefix}{display_hour}:{candidate.minute:02d}{suffix}"


def _resolve(fields: list[str], now: datetime) -> datetime:
    minute, hour, _day_of_month, _month, day_of_week = fields[:5]
    candidate = now
    hour_advanced = False
    rolled_to_next_day = False

    # Minute first: the most frequent schedules are minute steps
    if _is_step(minute):
        interval = _step_interval(minute)
        next_minute = (now.minute // interval) * interval + interval
        if next_minute >= 60:
            candidate = _set_minutes(candidate + timedelta(hours=1), next_minute - 60)
            hour_advanced = True
        else:
            candidate = _set_minutes(candidate, next_minute)
    elif minute == "*":
        candidate = _set_minutes(candidate, now.minute + 1)
    else:
        candidate = _set_minutes(candidate, parse_field_int(minute))

    if _is_step(hour):
        # A minute step already moved the hour where needed
        if not _is_step(minute):
            interval = _step_interval(hour)
            candidate = _set_hours(candidate, now.hour + interval)
            candidate = _set_minutes(candidate, 0)
    elif hour != "*" and not hour_advanced:
        candidate = _set_hours(candidate, parse_field_int(hour))
        if candidate <= now:
            candidate += timedelta(days=1)
            rolled_to_next_day = True

    if day_of_week != "*" and "/" not in day_of_week:
        target = parse_field_int(day_of_week)
        # The weekday decides the date, so count from today's time-of-day
        if rolled_to_next_day:
            candidate -= timedelta(days=1)
        days_until = (target - _cron_weekday(now)) % 7
        if days_until == 0 and candidate <= now:
            candidate += timedelta(days=7)
        else:
            candidate += timedelta(days=days_until)

    return candidate


def estimate_next_run(schedule: str, now: datetime | None = None) -> str:
    """
    Estimate the next run of a cron schedule as a display label.

    Resolution order is fixed: minute, then hour, then day-of-week. A minute
    step that rolls past the hour suppresses the hour adjustments, and an
    hour step is ignored when the minute field is itself a step.

    Args:
        schedule: Five whitespace-separated cron fields
        now: Reference instant (defaults to the local current time)

    Returns:
        Display label, or ``"Unknown"`` when the schedule has fewer than five
        fields or a numeric field cannot be read
    """
    if now is None:
        now = datetime.now()

    fields = schedule.split()
    if len(fields) < 5:
        return UNKNOWN

    try:
        candidate = _resolve(fields, now)
    except (InvalidFieldError, OverflowError) as e:
        logger.debug("Cannot estimate next run for %r: %s", schedule, e)
        return UNKNOWN

    return format_next_run(candidate, now)


__all__ = [
    "UNKNOWN",
    "WEEKDAY_ABBREVIATIONS",
    "InvalidFieldError",
    "estimate_next_run",
    "format_next_run",
    "parse_field_int",
]
