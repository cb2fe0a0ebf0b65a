"""
Availability Slot Deriver for Interview Navigator

Turns an interviewer's weekly availability rules into the bookable
start times for a given calendar date. Slot lists are always derived for
one date at a time; nothing is cached across dates.
"""

import re
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from interview_navigator.core.exceptions import InvalidAvailabilityError
from interview_navigator.models.availability import AvailabilityRule
from interview_navigator.models.booking import Booking, HHMM_PATTERN

DEFAULT_SLOT_INTERVAL_MINUTES = 15

TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

# Saved rules must use zero-padded 24h times
STRICT_TIME_PATTERN = re.compile(HHMM_PATTERN)

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def parse_time(value: str) -> int | None:
    """Parse "HH:MM" into minutes after midnight; None if malformed."""
    if not isinstance(value, str):
        return None
    match = TIME_PATTERN.match(value.strip())
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def format_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def day_of_week(on_date: date) -> int:
    """Day index with Sunday = 0, matching AvailabilityRule.day_of_week."""
    return on_date.isoweekday() % 7


def find_rule(rules: Iterable[AvailabilityRule], on_date: date) -> AvailabilityRule | None:
    """First rule whose weekday matches the date."""
    weekday = day_of_week(on_date)
    for rule in rules:
        if rule.day_of_week == weekday:
            return rule
    return None


def derive_slots(
    rules: Sequence[AvailabilityRule],
    on_date: date,
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
) -> list[str]:
    """
    Bookable start times for a date.

    Generates every `interval_minutes` boundary t with start <= t < end of
    the matching rule, in ascending order. Returns an empty list when no
    rule matches the date's weekday or the rule's times are malformed;
    this function never raises on bad rule data.

    Args:
        rules: Interviewer's weekly availability
        on_date: Calendar date being booked
        interval_minutes: Spacing between slot start times

    Returns:
        List of "HH:MM" strings
    """
    rule = find_rule(rules, on_date)
    if rule is None:
        return []

    start = parse_time(rule.start_time)
    end = parse_time(rule.end_time)
    if start is None or end is None or end <= start:
        return []

    return [format_time(t) for t in range(start, end, interval_minutes)]


def is_slot_available(
    rules: Sequence[AvailabilityRule],
    on_date: date,
    time_of_day: str,
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
) -> bool:
    slots = derive_slots(rules, on_date, interval_minutes)
    return bool(slots) and time_of_day in slots


def describe_day(rules: Sequence[AvailabilityRule], on_date: date) -> str:
    """Human-readable availability for a date, e.g. "Monday: 09:00 - 17:00"."""
    day_name = DAY_NAMES[day_of_week(on_date)]
    rule = find_rule(rules, on_date)
    if rule is None or not derive_slots([rule], on_date):
        return f"{day_name} - Not available"
    return f"{day_name}: {rule.start_time} - {rule.end_time}"


def validate_rule(rule: AvailabilityRule) -> None:
    """
    Write-time validation for an availability rule.

    Raises:
        InvalidAvailabilityError: on a bad weekday, time format or range
    """
    if not 0 <= rule.day_of_week <= 6:
        raise InvalidAvailabilityError(
            f"Invalid day of week: {rule.day_of_week} (expected 0-6)"
        )

    if not (
        STRICT_TIME_PATTERN.match(rule.start_time)
        and STRICT_TIME_PATTERN.match(rule.end_time)
    ):
        raise InvalidAvailabilityError(
            f"Invalid time format '{rule.start_time}'-'{rule.end_time}' (use HH:MM)"
        )
    if parse_time(rule.end_time) <= parse_time(rule.start_time):
        raise InvalidAvailabilityError("End time must be after start time")


def validate_schedule(rules: Sequence[AvailabilityRule]) -> None:
    """Validate every rule and reject two rules for the same weekday."""
    seen: set[int] = set()
    for rule in rules:
        validate_rule(rule)
        if rule.day_of_week in seen:
            raise InvalidAvailabilityError(
                f"Duplicate availability for {DAY_NAMES[rule.day_of_week]}"
            )
        seen.add(rule.day_of_week)


# =============================================================================
# BOOKING CONFLICTS
# =============================================================================

def overlaps(
    start_a: datetime, duration_a: int, start_b: datetime, duration_b: int
) -> bool:
    """True if the half-open intervals [start, start + duration) intersect."""
    end_a = start_a + timedelta(minutes=duration_a)
    end_b = start_b + timedelta(minutes=duration_b)
    return start_a < end_b and start_b < end_a


def find_conflicts(
    starts_at: datetime,
    duration_minutes: int,
    bookings: Iterable[Booking],
) -> list[Booking]:
    """Bookings whose time range intersects the requested one."""
    return [
        booking for booking in bookings
        if overlaps(starts_at, duration_minutes, booking.starts_at, booking.duration_minutes)
    ]
