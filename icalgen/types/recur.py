"""Recurrence rules for repeating events.

A repeating event is described by a frequency and optional modifiers, for
example a weekly meeting on Mondays and Wednesdays for three weeks:

```python
event.repeating({"freq": "WEEKLY", "count": 6, "byDay": ["MO", "WE"]})
```

which is encoded as `RRULE:FREQ=WEEKLY;COUNT=6;BYDAY=MO,WE`. Dates listed
in `exclude` are encoded as a separate EXDATE property by the event.
"""

from __future__ import annotations

import datetime
import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..util import format_date, parse_date_and_datetime

__all__ = [
    "Frequency",
    "Weekday",
    "Repeating",
]


class Weekday(str, enum.Enum):
    """Corresponds to a day of the week."""

    SUNDAY = "SU"
    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class Frequency(str, enum.Enum):
    """Type of recurrence rule."""

    SECONDLY = "SECONDLY"
    MINUTELY = "MINUTELY"
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class Repeating(BaseModel):
    """The recurrence rule of a repeating event."""

    freq: Frequency
    """How often the event repeats."""

    count: Optional[int] = None
    """The number of occurrences, as an alternative to `until`."""

    interval: Optional[int] = None
    """Intervals of `freq` between occurrences, e.g. 2 for every other week."""

    until: Optional[Union[datetime.datetime, datetime.date]] = None
    """The last date the rule may produce an occurrence."""

    by_day: list[Weekday] = Field(alias="byDay", default_factory=list)
    """Days of the week the event occurs on."""

    by_month: list[int] = Field(alias="byMonth", default_factory=list)
    """Months of the year the event occurs in."""

    by_month_day: list[int] = Field(alias="byMonthDay", default_factory=list)
    """Days of the month the event occurs on."""

    by_set_pos: Optional[int] = Field(alias="bySetPos", default=None)
    """Selects the nth occurrence within the set produced by the other rules."""

    exclude: list[Union[datetime.datetime, datetime.date]] = Field(
        default_factory=list
    )
    """Occurrences that are removed from the recurrence set."""

    start_of_week: Optional[Weekday] = Field(alias="startOfWeek", default=None)
    """The day a work week starts on."""

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("freq", "start_of_week", mode="before")
    @classmethod
    def parse_upper(cls, value: Any) -> Any:
        """Accept enum values in any case."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("by_day", mode="before")
    @classmethod
    def parse_weekdays(cls, value: Any) -> Any:
        """Accept a single weekday or weekdays in any case."""
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list):
            return [day.upper() if isinstance(day, str) else day for day in value]
        return value

    @field_validator("until", mode="before")
    @classmethod
    def parse_until(cls, value: Any) -> Any:
        """Accept an ISO 8601 string."""
        return parse_date_and_datetime(value)

    @field_validator("exclude", mode="before")
    @classmethod
    def parse_exclude(cls, value: Any) -> Any:
        """Accept a single date or ISO 8601 strings."""
        if not isinstance(value, list):
            value = [value]
        return [parse_date_and_datetime(item) for item in value]

    def rrule_value(self, all_day: bool = False) -> str:
        """Return the encoded RRULE property value."""
        parts = [f"FREQ={self.freq.value}"]
        if self.count is not None:
            parts.append(f"COUNT={self.count}")
        if self.interval is not None:
            parts.append(f"INTERVAL={self.interval}")
        if self.until is not None:
            parts.append(f"UNTIL={format_date(self.until, date_only=all_day)}")
        if self.by_day:
            parts.append("BYDAY=" + ",".join(str(day) for day in self.by_day))
        if self.by_month:
            parts.append("BYMONTH=" + ",".join(str(month) for month in self.by_month))
        if self.by_month_day:
            parts.append(
                "BYMONTHDAY=" + ",".join(str(day) for day in self.by_month_day)
            )
        if self.by_set_pos is not None:
            parts.append(f"BYSETPOS={self.by_set_pos}")
        if self.start_of_week is not None:
            parts.append(f"WKST={self.start_of_week}")
        return ";".join(parts)
