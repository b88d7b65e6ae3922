"""A grouping of component properties that describe a calendar event.

An event can be an activity (e.g. a meeting from 8am to 9am tomorrow)
grouping of properties such as a summary or a description. An event start
and end time may either be a date and time or just a day alone.

Events are created from the calendar they belong to, and are the parent of
attendees, alarms, attachments and categories:

```python
import datetime
from icalgen.calendar import Calendar

calendar = Calendar({"name": "Team"})
event = calendar.create_event(
    {
        "start": datetime.datetime(2022, 8, 31, 7, 0, tzinfo=datetime.UTC),
        "end": datetime.datetime(2022, 8, 31, 7, 30, tzinfo=datetime.UTC),
        "summary": "Morning exercise",
    }
)
event.create_alarm({"type": "DISPLAY", "trigger": 300})
print(event.ics())
```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import datetime
import enum
import logging
from typing import TYPE_CHECKING, Any, Optional, Self, Union

from pydantic import Field, field_validator

from .alarm import Alarm
from .attachment import Attachment
from .attendee import Attendee
from .category import Category
from .component import UNSET, AttributeStore, ContainerComponent, _Unset
from .contentlines import escape
from .exceptions import InvalidArgumentError
from .types import Organizer, Repeating
from .util import (
    dtstamp_factory,
    format_date,
    parse_date_and_datetime,
    uid_factory,
    validate_timezone,
)

if TYPE_CHECKING:
    from .calendar import Calendar

_LOGGER = logging.getLogger(__name__)

DateValue = Union[datetime.datetime, datetime.date, str]


class EventStatus(str, enum.Enum):
    """Status or confirmation of the event set by the organizer."""

    CONFIRMED = "CONFIRMED"
    """Indicates event is definite."""

    TENTATIVE = "TENTATIVE"
    """Indicates event is tentative."""

    CANCELLED = "CANCELLED"
    """Indicates event was cancelled."""


class EventTransparency(str, enum.Enum):
    """Whether the event blocks time on the calendar."""

    OPAQUE = "OPAQUE"
    """The event takes up time and is reported as busy."""

    TRANSPARENT = "TRANSPARENT"
    """The event does not take up time."""


class EventData(AttributeStore):
    """Stored fields of an event.

    The uid and timestamp defaults have factory methods invoked with a lambda
    to facilitate mocking in unit tests.
    """

    id: str = Field(default_factory=lambda: uid_factory())
    """A globally unique identifier for the event."""

    sequence: int = 0
    """The revision number of the event."""

    start: Union[datetime.datetime, datetime.date] = Field(
        default_factory=lambda: dtstamp_factory()
    )
    """The start time or start day of the event."""

    end: Optional[Union[datetime.datetime, datetime.date]] = None
    """The end time or end day of the event."""

    timezone: Optional[str] = None
    """IANA timezone name, overriding the calendar timezone."""

    stamp: datetime.datetime = Field(default_factory=lambda: dtstamp_factory())
    """Specifies the date and time the event was created."""

    all_day: bool = Field(alias="allDay", default=False)
    """The event spans whole days and has no time of day."""

    floating: bool = False
    """Times are local wall clock times without any timezone."""

    repeating: Optional[Repeating] = None
    """A recurrence rule specification."""

    summary: Optional[str] = None
    """Defines a short summary or subject for the event."""

    description: Optional[str] = None
    """A more complete description of the event than provided by the summary."""

    location: Optional[str] = None
    """Defines the intended venue for the activity defined by this event."""

    url: Optional[str] = None
    """A web page with more information about the event."""

    status: Optional[EventStatus] = None
    """Status or confirmation of the event."""

    transparency: Optional[EventTransparency] = None
    """Whether the event blocks time on the calendar."""

    organizer: Optional[Organizer] = None
    """The organizer of a group-scheduled event."""

    created: Optional[datetime.datetime] = None
    """The date and time the event information was created."""

    last_modified: Optional[datetime.datetime] = Field(
        alias="lastModified", default=None
    )
    """The date and time the event information was last revised."""

    categories: list[Category] = Field(default_factory=list, exclude=True)
    attendees: list[Attendee] = Field(default_factory=list, exclude=True)
    alarms: list[Alarm] = Field(default_factory=list, exclude=True)
    attachments: list[Attachment] = Field(default_factory=list, exclude=True)

    x: list[tuple[str, str]] = Field(default_factory=list)

    @field_validator("status", "transparency", mode="before")
    @classmethod
    def parse_upper(cls, value: Any) -> Any:
        """Accept enum values in any case."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("start", "end", "stamp", "created", "last_modified", mode="before")
    @classmethod
    def parse_dates(cls, value: Any) -> Any:
        """Accept ISO 8601 strings."""
        return parse_date_and_datetime(value)

    @field_validator("timezone")
    @classmethod
    def parse_timezone(cls, value: Optional[str]) -> Optional[str]:
        """Verify the timezone is known."""
        return validate_timezone(value)


class Event(ContainerComponent):
    """A VEVENT component of a calendar.

    Can either be for a specific day, or with a start time and end time.
    """

    store_type = EventData
    parent_name = "calendar"

    def __init__(
        self, data: Mapping[str, Any] | None = None, calendar: Calendar | None = None
    ) -> None:
        """Initialize Event.

        The calendar reference is required to query the calendar's timezone.
        """
        super().__init__(data, calendar)

    def id(self, uid: str | int | _Unset = UNSET) -> Self | str:
        """Get or set the globally unique identifier of the event."""
        if uid is UNSET:
            return self._data.id
        if uid is None or uid == "":
            raise InvalidArgumentError("`id` must be a non-empty string or number")
        return self._set("id", str(uid))

    def sequence(self, sequence: int | _Unset = UNSET) -> Self | int:
        """Get or set the revision number of the event."""
        if sequence is UNSET:
            return self._data.sequence
        return self._set("sequence", sequence)

    def start(self, start: DateValue | _Unset = UNSET) -> Self | datetime.date:
        """Get or set the start time or day of the event."""
        if start is UNSET:
            return self._data.start
        if not start:
            raise InvalidArgumentError("`start` must be a date, datetime or string")
        return self._set("start", start)

    def end(
        self, end: DateValue | None | _Unset = UNSET
    ) -> Self | datetime.date | None:
        """Get or set the end time or day of the event."""
        if end is UNSET:
            return self._data.end
        return self._set("end", end or None)

    def timezone(self, timezone: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the timezone of the event.

        When the event has no timezone of its own the calendar timezone is
        returned.
        """
        if timezone is UNSET:
            return self._data.timezone or self._parent.timezone()
        return self._set("timezone", timezone or None)

    def stamp(self, stamp: DateValue | _Unset = UNSET) -> Self | datetime.datetime:
        """Get or set the time the event was created."""
        if stamp is UNSET:
            return self._data.stamp
        return self._set("stamp", stamp)

    def all_day(self, all_day: bool | _Unset = UNSET) -> Self | bool:
        """Get or set whether the event spans whole days."""
        if all_day is UNSET:
            return self._data.all_day
        return self._set("all_day", bool(all_day))

    def floating(self, floating: bool | _Unset = UNSET) -> Self | bool:
        """Get or set whether times are floating local times."""
        if floating is UNSET:
            return self._data.floating
        return self._set("floating", bool(floating))

    def repeating(
        self, repeating: Repeating | Mapping[str, Any] | None | _Unset = UNSET
    ) -> Self | Repeating | None:
        """Get or set the recurrence rule, e.g. `{"freq": "WEEKLY", "count": 3}`."""
        if repeating is UNSET:
            return self._data.repeating
        return self._set("repeating", repeating or None)

    def summary(self, summary: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the summary of the event."""
        if summary is UNSET:
            return self._data.summary
        return self._set("summary", summary or None)

    def description(
        self, description: str | None | _Unset = UNSET
    ) -> Self | str | None:
        """Get or set the description of the event."""
        if description is UNSET:
            return self._data.description
        return self._set("description", description or None)

    def location(self, location: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the location of the event."""
        if location is UNSET:
            return self._data.location
        return self._set("location", location or None)

    def url(self, url: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the url of the event."""
        if url is UNSET:
            return self._data.url
        return self._set("url", url or None)

    def status(
        self, status: EventStatus | str | None | _Unset = UNSET
    ) -> Self | EventStatus | None:
        """Get or set the status of the event, e.g. CONFIRMED."""
        if status is UNSET:
            return self._data.status
        return self._set("status", status or None)

    def transparency(
        self, transparency: EventTransparency | str | None | _Unset = UNSET
    ) -> Self | EventTransparency | None:
        """Get or set the transparency of the event, e.g. OPAQUE."""
        if transparency is UNSET:
            return self._data.transparency
        return self._set("transparency", transparency or None)

    def organizer(
        self, organizer: Organizer | Mapping[str, Any] | str | None | _Unset = UNSET
    ) -> Self | Organizer | None:
        """Get or set the organizer.

        Accepts a mapping, an `Organizer` or a string like
        `Jane Doe <jane@example.com>`.
        """
        if organizer is UNSET:
            return self._data.organizer
        return self._set("organizer", organizer or None)

    def created(
        self, created: DateValue | None | _Unset = UNSET
    ) -> Self | datetime.datetime | None:
        """Get or set the time the event information was created."""
        if created is UNSET:
            return self._data.created
        return self._set("created", created or None)

    def last_modified(
        self, last_modified: DateValue | None | _Unset = UNSET
    ) -> Self | datetime.datetime | None:
        """Get or set the time the event information was last revised."""
        if last_modified is UNSET:
            return self._data.last_modified
        return self._set("last_modified", last_modified or None)

    def create_category(
        self, data: Category | Mapping[str, Any] | None = None
    ) -> Category:
        """Add a category to the event and return it."""
        category = data if isinstance(data, Category) else Category(data, self)
        self._data.categories.append(category)
        return category

    def categories(
        self, categories: Iterable[Category | Mapping[str, Any]] | _Unset = UNSET
    ) -> Self | list[Category]:
        """Get the categories, or add a list of categories."""
        if categories is UNSET:
            return list(self._data.categories)
        for category in categories:
            self.create_category(category)
        return self

    def create_attendee(
        self, data: Attendee | Mapping[str, Any] | str | None = None
    ) -> Attendee:
        """Add an attendee to the event and return it.

        A string is used as the email address of the attendee.
        """
        if isinstance(data, str):
            data = {"email": data}
        attendee = data if isinstance(data, Attendee) else Attendee(data, self)
        self._data.attendees.append(attendee)
        return attendee

    def attendees(
        self, attendees: Iterable[Attendee | Mapping[str, Any] | str] | _Unset = UNSET
    ) -> Self | list[Attendee]:
        """Get the attendees, or add a list of attendees."""
        if attendees is UNSET:
            return list(self._data.attendees)
        for attendee in attendees:
            self.create_attendee(attendee)
        return self

    def create_alarm(self, data: Alarm | Mapping[str, Any] | None = None) -> Alarm:
        """Add an alarm to the event and return it."""
        alarm = data if isinstance(data, Alarm) else Alarm(data, self)
        self._data.alarms.append(alarm)
        return alarm

    def alarms(
        self, alarms: Iterable[Alarm | Mapping[str, Any]] | _Unset = UNSET
    ) -> Self | list[Alarm]:
        """Get the alarms, or add a list of alarms."""
        if alarms is UNSET:
            return list(self._data.alarms)
        for alarm in alarms:
            self.create_alarm(alarm)
        return self

    def create_attachment(
        self, data: Attachment | Mapping[str, Any] | str | None = None
    ) -> Attachment:
        """Add an attachment to the event and return it.

        A string is used as the url of the attachment.
        """
        if isinstance(data, str):
            data = {"url": data}
        attachment = data if isinstance(data, Attachment) else Attachment(data, self)
        self._data.attachments.append(attachment)
        return attachment

    def attachments(
        self,
        attachments: Iterable[Attachment | Mapping[str, Any] | str] | _Unset = UNSET,
    ) -> Self | list[Attachment]:
        """Get the attachments, or add a list of attachments."""
        if attachments is UNSET:
            return list(self._data.attachments)
        for attachment in attachments:
            self.create_attachment(attachment)
        return self

    def to_json(self) -> dict[str, Any]:
        """Return a detached copy of the event data for persistence."""
        data = self._data
        return {
            **super().to_json(),
            "categories": [category.to_json() for category in data.categories],
            "attendees": [attendee.to_json() for attendee in data.attendees],
            "alarms": [alarm.to_json() for alarm in data.alarms],
            "attachments": [attachment.to_json() for attachment in data.attachments],
        }

    def _encode_dates(self, name: str, values: list[datetime.date]) -> str:
        """Encode a DATE or DATE-TIME property in the style of the event."""
        timezone = self.timezone()
        if self._data.all_day:
            encoded = [format_date(value, timezone, date_only=True) for value in values]
            return f"{name};VALUE=DATE:{','.join(encoded)}"
        if self._data.floating:
            encoded = [format_date(value, floating=True) for value in values]
            return f"{name}:{','.join(encoded)}"
        if timezone:
            encoded = [format_date(value, timezone) for value in values]
            return f"{name};TZID={timezone}:{','.join(encoded)}"
        encoded = [format_date(value) for value in values]
        return f"{name}:{','.join(encoded)}"

    def _encode_repeating(self) -> list[str]:
        """Encode the RRULE and EXDATE properties."""
        if not (repeating := self._data.repeating):
            return []
        lines = [f"RRULE:{repeating.rrule_value(all_day=self._data.all_day)}"]
        if repeating.exclude:
            lines.append(self._encode_dates("EXDATE", repeating.exclude))
        return lines

    def ics_lines(self) -> list[str]:
        """Return the unfolded content lines of the event."""
        data = self._data
        _LOGGER.debug("Encoding event %s", data.id)
        lines = [
            "BEGIN:VEVENT",
            f"UID:{escape(data.id)}",
            f"SEQUENCE:{data.sequence}",
            f"DTSTAMP:{format_date(data.stamp)}",
            self._encode_dates("DTSTART", [data.start]),
        ]
        if data.end is not None:
            lines.append(self._encode_dates("DTEND", [data.end]))
        if data.all_day:
            lines.append("X-MICROSOFT-CDO-ALLDAYEVENT:TRUE")
            lines.append("X-MICROSOFT-MSNCAL-ALLDAYEVENT:TRUE")
        lines.extend(self._encode_repeating())

        if data.summary:
            lines.append(f"SUMMARY:{escape(data.summary)}")
        if data.transparency:
            lines.append(f"TRANSP:{data.transparency.value}")
        if data.location:
            lines.append(f"LOCATION:{escape(data.location)}")
        if data.description:
            lines.append(f"DESCRIPTION:{escape(data.description)}")
        if data.organizer:
            lines.append(data.organizer.ics())
        lines.extend(attendee.ics() for attendee in data.attendees)
        for alarm in data.alarms:
            lines.extend(alarm.ics_lines())
        if data.categories:
            values = ",".join(category.ics() for category in data.categories)
            lines.append(f"CATEGORIES:{values}")
        if data.url:
            lines.append(f"URL;VALUE=URI:{escape(data.url)}")
        lines.extend(attachment.ics() for attachment in data.attachments)
        if data.status:
            lines.append(f"STATUS:{data.status.value}")
        if data.created:
            lines.append(f"CREATED:{format_date(data.created)}")
        if data.last_modified:
            lines.append(f"LAST-MODIFIED:{format_date(data.last_modified)}")

        lines.extend(self._encode_x_properties())
        lines.append("END:VEVENT")
        return lines
