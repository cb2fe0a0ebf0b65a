from datetime import date, datetime

import pytest

from interview_navigator.core.availability import (
    day_of_week,
    derive_slots,
    describe_day,
    is_slot_available,
    overlaps,
    validate_rule,
    validate_schedule,
)
from interview_navigator.core.exceptions import InvalidAvailabilityError
from interview_navigator.models.availability import AvailabilityRule

SUNDAY = date(2024, 1, 7)
MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 9)


def rule(day: int, start: str, end: str) -> AvailabilityRule:
    return AvailabilityRule(day_of_week=day, start_time=start, end_time=end)


def test_weekday_index_starts_on_sunday():
    assert day_of_week(SUNDAY) == 0
    assert day_of_week(MONDAY) == 1
    assert day_of_week(date(2024, 1, 13)) == 6


def test_partial_trailing_interval_is_dropped():
    assert derive_slots([rule(1, "09:00", "09:40")], MONDAY) == ["09:00", "09:15", "09:30"]


def test_end_time_is_exclusive():
    assert derive_slots([rule(1, "09:00", "10:00")], MONDAY) == [
        "09:00", "09:15", "09:30", "09:45",
    ]


def test_weekday_without_rule_has_no_slots():
    assert derive_slots([rule(1, "09:00", "17:00")], TUESDAY) == []


def test_sunday_rule_matches_sunday():
    assert derive_slots([rule(0, "10:00", "10:30")], SUNDAY) == ["10:00", "10:15"]


@pytest.mark.parametrize("start,end", [
    ("9am", "17:00"),
    ("09:00", "25:00"),
    ("", "10:00"),
    ("17:00", "09:00"),
    ("09:00", "09:00"),
])
def test_malformed_or_empty_rule_has_no_slots(start, end):
    assert derive_slots([rule(1, start, end)], MONDAY) == []


def test_first_matching_rule_wins():
    rules = [rule(1, "09:00", "09:30"), rule(1, "13:00", "14:00")]
    assert derive_slots(rules, MONDAY) == ["09:00", "09:15"]


def test_unpadded_hours_are_read_leniently():
    assert derive_slots([rule(1, "9:00", "9:30")], MONDAY) == ["09:00", "09:15"]


def test_custom_interval():
    assert derive_slots([rule(1, "09:00", "10:30")], MONDAY, interval_minutes=30) == [
        "09:00", "09:30", "10:00",
    ]


def test_slots_are_derived_per_date():
    rules = [rule(1, "09:00", "09:30"), rule(2, "14:00", "14:30")]
    assert derive_slots(rules, MONDAY) == ["09:00", "09:15"]
    assert derive_slots(rules, TUESDAY) == ["14:00", "14:15"]


def test_is_slot_available():
    rules = [rule(1, "09:00", "10:00")]
    assert is_slot_available(rules, MONDAY, "09:45")
    assert not is_slot_available(rules, MONDAY, "10:00")
    assert not is_slot_available(rules, MONDAY, "09:10")
    assert not is_slot_available(rules, TUESDAY, "09:00")


def test_describe_day():
    rules = [rule(1, "09:00", "17:00")]
    assert describe_day(rules, MONDAY) == "Monday: 09:00 - 17:00"
    assert describe_day(rules, TUESDAY) == "Tuesday - Not available"
    assert describe_day([rule(1, "17:00", "09:00")], MONDAY) == "Monday - Not available"


def test_validate_rule_accepts_well_formed_rule():
    validate_rule(rule(3, "08:30", "12:00"))


@pytest.mark.parametrize("bad_rule", [
    rule(7, "09:00", "17:00"),
    rule(-1, "09:00", "17:00"),
    rule(1, "9:00", "17:00"),
    rule(1, "09:00", "24:00"),
    rule(1, "12:00", "12:00"),
    rule(1, "14:00", "09:00"),
])
def test_validate_rule_rejects(bad_rule):
    with pytest.raises(InvalidAvailabilityError):
        validate_rule(bad_rule)


def test_validate_schedule_rejects_duplicate_weekday():
    with pytest.raises(InvalidAvailabilityError, match="Monday"):
        validate_schedule([rule(1, "09:00", "12:00"), rule(1, "13:00", "17:00")])


def test_overlaps_is_half_open():
    ten = datetime(2024, 1, 8, 10, 0)
    ten_thirty = datetime(2024, 1, 8, 10, 30)
    ten_forty_five = datetime(2024, 1, 8, 10, 45)

    assert overlaps(ten, 45, ten_thirty, 30)
    assert overlaps(ten_thirty, 30, ten, 45)
    assert not overlaps(ten, 45, ten_forty_five, 30)
