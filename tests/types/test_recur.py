"""Tests for recurrence rules."""

import datetime

from pydantic import ValidationError
import pytest

from icalgen.types import Frequency, Repeating, Weekday


@pytest.mark.parametrize(
    ("rule", "expected"),
    [
        ({"freq": "DAILY"}, "FREQ=DAILY"),
        (
            {"freq": "weekly", "count": 6, "byDay": ["mo", "WE"]},
            "FREQ=WEEKLY;COUNT=6;BYDAY=MO,WE",
        ),
        (
            {"freq": "WEEKLY", "interval": 2, "byDay": "FR"},
            "FREQ=WEEKLY;INTERVAL=2;BYDAY=FR",
        ),
        (
            {"freq": "MONTHLY", "byMonthDay": [1, 15], "bySetPos": -1},
            "FREQ=MONTHLY;BYMONTHDAY=1,15;BYSETPOS=-1",
        ),
        (
            {"freq": "YEARLY", "byMonth": [1, 7], "startOfWeek": "su"},
            "FREQ=YEARLY;BYMONTH=1,7;WKST=SU",
        ),
        (
            {"freq": "DAILY", "until": "2022-09-30T09:00:00Z"},
            "FREQ=DAILY;UNTIL=20220930T090000Z",
        ),
    ],
)
def test_rrule_value(rule: dict, expected: str) -> None:
    """Test encoding of recurrence rules."""
    assert Repeating.model_validate(rule).rrule_value() == expected


def test_rrule_until_all_day() -> None:
    """Test the end of an all day rule is a date."""
    rule = Repeating(freq=Frequency.DAILY, until=datetime.date(2022, 9, 30))
    assert rule.rrule_value(all_day=True) == "FREQ=DAILY;UNTIL=20220930"


def test_field_names() -> None:
    """Test rules accept the field names and the aliases."""
    rule = Repeating.model_validate(
        {"freq": "WEEKLY", "by_day": ["TU"], "start_of_week": "MO"}
    )
    assert rule.by_day == [Weekday.TUESDAY]
    assert rule.start_of_week == Weekday.MONDAY


def test_exclude() -> None:
    """Test excluded dates accept a single value or strings."""
    rule = Repeating.model_validate({"freq": "DAILY", "exclude": "2022-09-01"})
    assert rule.exclude == [datetime.date(2022, 9, 1)]
    rule = Repeating.model_validate(
        {"freq": "DAILY", "exclude": ["2022-09-01T09:00:00Z"]}
    )
    assert rule.exclude == [
        datetime.datetime(2022, 9, 1, 9, 0, tzinfo=datetime.UTC)
    ]


@pytest.mark.parametrize(
    "rule",
    [
        {},
        {"freq": "sometimes"},
        {"freq": "DAILY", "byDay": ["XX"]},
        {"freq": "DAILY", "until": "tomorrow"},
    ],
)
def test_invalid_rule(rule: dict) -> None:
    """Test invalid rules are rejected."""
    with pytest.raises(ValidationError):
        Repeating.model_validate(rule)


def test_weekday_str() -> None:
    """Test weekdays are their two letter codes."""
    assert str(Weekday.MONDAY) == "MO"
