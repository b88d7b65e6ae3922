"""Alarm information for calendar events.

An alarm is a reminder attached to an event, for example a notification
shown ten minutes before the event starts:

```python
alarm = event.create_alarm({"type": "DISPLAY", "trigger": 600})
```

A relative trigger is a number of seconds (or a `datetime.timedelta`)
before the event, and an absolute trigger is a `datetime.datetime`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import datetime
import enum
import logging
from typing import TYPE_CHECKING, Any, Optional, Self, Union

from pydantic import BaseModel, Field, field_validator

from .attendee import Attendee
from .component import UNSET, AttributeStore, ContainerComponent, _Unset
from .contentlines import escape
from .exceptions import InvalidArgumentError
from .util import format_date, format_duration, parse_date_and_datetime

if TYPE_CHECKING:
    from .event import Event

_LOGGER = logging.getLogger(__name__)

DEFAULT_TRIGGER = -600
DEFAULT_SOUND = "Basso"

TriggerValue = Union[int, float, datetime.timedelta, datetime.datetime, str]


class Action(str, enum.Enum):
    """Type of action invoked when alarm is triggered."""

    AUDIO = "AUDIO"
    """An alarm that causes sound to be played to alert the user.

    The attachment is a sound resource, or a fallback is used.
    """

    DISPLAY = "DISPLAY"
    """An alarm that displays the description text to the user."""

    EMAIL = "EMAIL"
    """An email is composed and delivered to the attendees.

    The description is the body of the message, summary is the subject,
    and attachments are email attachments.
    """


class Related(str, enum.Enum):
    """The part of the event a relative trigger refers to."""

    START = "START"
    END = "END"


class AlarmRepeat(BaseModel):
    """Repetition of an alarm after it was first triggered."""

    times: int
    """The number of additional times the alarm is triggered."""

    interval: int
    """Seconds between each repetition."""

    @field_validator("interval", mode="before")
    @classmethod
    def parse_interval(cls, value: Any) -> Any:
        """Accept a timedelta."""
        if isinstance(value, datetime.timedelta):
            return int(value.total_seconds())
        return value


class AlarmAttach(BaseModel):
    """The sound played by an audio alarm."""

    uri: str
    mime: Optional[str] = None


class AlarmData(AttributeStore):
    """Stored fields of an alarm."""

    type: Action = Action.DISPLAY
    """Action to be taken when the alarm is triggered."""

    trigger: Union[int, datetime.datetime] = Field(
        default=DEFAULT_TRIGGER, exclude=True
    )
    """Signed offset in seconds from the event, or an absolute time."""

    relates_to: Optional[Related] = Field(alias="relatesTo", default=None)
    """Whether a relative trigger refers to the start or end of the event."""

    repeat: Optional[AlarmRepeat] = None
    """A repetition of the alarm.

    If repeat is specified then both times and interval are required.
    """

    attach: Optional[AlarmAttach] = None
    """Sound played by an audio alarm."""

    description: Optional[str] = None
    """A description of the notification or email body."""

    summary: Optional[str] = None
    """A summary for the email action."""

    attendees: list[Attendee] = Field(default_factory=list, exclude=True)
    """Email recipients for the alarm."""

    x: list[tuple[str, str]] = Field(default_factory=list)

    @field_validator("type", "relates_to", mode="before")
    @classmethod
    def parse_upper(cls, value: Any) -> Any:
        """Accept enum values in any case."""
        if isinstance(value, str):
            return value.upper()
        return value


def _as_seconds(value: Union[int, float, datetime.timedelta]) -> int:
    """Convert a number of seconds or a timedelta to whole seconds."""
    if isinstance(value, datetime.timedelta):
        return int(value.total_seconds())
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"Expected seconds or a timedelta: {value!r}")
    return int(value)


class Alarm(ContainerComponent):
    """A VALARM component of an event."""

    store_type = AlarmData
    parent_name = "event"

    def __init__(
        self, data: Mapping[str, Any] | None = None, event: Event | None = None
    ) -> None:
        """Initialize Alarm.

        The event reference is required to fall back to the event summary
        when the alarm has no description.
        """
        super().__init__(data, event)

    def type(self, action: Action | str | _Unset = UNSET) -> Self | Action:
        """Get or set the alarm action, e.g. DISPLAY."""
        if action is UNSET:
            return self._data.type
        return self._set("type", action)

    def trigger(
        self,
        trigger: TriggerValue | _Unset = UNSET,
    ) -> Self | int | datetime.datetime:
        """Get or set the trigger.

        A relative trigger is the number of seconds before the event, so a
        trigger after the event reads as a negative number. An absolute
        trigger is a datetime or an ISO 8601 string.
        """
        if trigger is UNSET:
            if isinstance(self._data.trigger, datetime.datetime):
                return self._data.trigger
            return -1 * self._data.trigger
        if isinstance(trigger, (str, datetime.datetime)):
            try:
                value = parse_date_and_datetime(trigger)
            except ValueError as err:
                raise InvalidArgumentError(f"Invalid trigger: {trigger!r}") from err
            if not isinstance(value, datetime.datetime):
                raise InvalidArgumentError(
                    f"Absolute trigger requires a time: {trigger!r}"
                )
            return self._set("trigger", value)
        return self._set("trigger", -1 * _as_seconds(trigger))

    def trigger_before(
        self, trigger: TriggerValue | _Unset = UNSET
    ) -> Self | int | datetime.datetime:
        """Get or set the trigger as seconds before the event."""
        return self.trigger(trigger)

    def trigger_after(
        self, trigger: TriggerValue | _Unset = UNSET
    ) -> Self | int | datetime.datetime:
        """Get or set the trigger as seconds after the event."""
        if trigger is UNSET:
            return self._data.trigger
        if isinstance(trigger, (str, datetime.datetime)):
            return self.trigger(trigger)
        return self._set("trigger", _as_seconds(trigger))

    def relates_to(
        self, relates_to: Related | str | None | _Unset = UNSET
    ) -> Self | Related | None:
        """Get or set whether the trigger refers to the event START or END."""
        if relates_to is UNSET:
            return self._data.relates_to
        return self._set("relates_to", relates_to or None)

    def repeat(
        self, repeat: Mapping[str, Any] | AlarmRepeat | None | _Unset = UNSET
    ) -> Self | AlarmRepeat | None:
        """Get or set the repetition, e.g. `{"times": 2, "interval": 300}`."""
        if repeat is UNSET:
            return self._data.repeat
        return self._set("repeat", repeat or None)

    def attach(
        self, attach: Mapping[str, Any] | AlarmAttach | str | None | _Unset = UNSET
    ) -> Self | AlarmAttach | None:
        """Get or set the sound of an audio alarm.

        Either a uri, or a mapping with the `uri` and a `mime` type.
        """
        if attach is UNSET:
            return self._data.attach
        if isinstance(attach, str):
            attach = {"uri": attach}
        return self._set("attach", attach or None)

    def description(
        self, description: str | None | _Unset = UNSET
    ) -> Self | str | None:
        """Get or set the text displayed, or the body of an email."""
        if description is UNSET:
            return self._data.description
        return self._set("description", description or None)

    def summary(self, summary: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the subject of an email alarm."""
        if summary is UNSET:
            return self._data.summary
        return self._set("summary", summary or None)

    def create_attendee(
        self, data: Attendee | Mapping[str, Any] | str | None = None
    ) -> Attendee:
        """Add an email recipient and return it.

        A string is used as the email address of the recipient.
        """
        if isinstance(data, str):
            data = {"email": data}
        attendee = data if isinstance(data, Attendee) else Attendee(data, self._parent)
        self._data.attendees.append(attendee)
        return attendee

    def attendees(
        self, attendees: Iterable[Attendee | Mapping[str, Any] | str] | _Unset = UNSET
    ) -> Self | list[Attendee]:
        """Get the email recipients, or add a list of recipients."""
        if attendees is UNSET:
            return list(self._data.attendees)
        for attendee in attendees:
            self.create_attendee(attendee)
        return self

    def to_json(self) -> dict[str, Any]:
        """Return a detached copy of the alarm data for persistence."""
        trigger = self.trigger()
        return {
            **super().to_json(),
            "trigger": trigger.isoformat()
            if isinstance(trigger, datetime.datetime)
            else trigger,
            "attendees": [attendee.to_json() for attendee in self._data.attendees],
        }

    def _encode_trigger(self) -> str:
        """Encode the TRIGGER content line."""
        trigger = self._data.trigger
        if isinstance(trigger, datetime.datetime):
            return f"TRIGGER;VALUE=DATE-TIME:{format_date(trigger)}"
        if self._data.relates_to:
            return (
                f"TRIGGER;RELATED={self._data.relates_to.value}:"
                f"{format_duration(trigger)}"
            )
        return f"TRIGGER:{format_duration(trigger)}"

    def ics_lines(self) -> list[str]:
        """Return the unfolded content lines of the alarm."""
        data = self._data
        lines = ["BEGIN:VALARM", f"ACTION:{data.type.value}", self._encode_trigger()]

        if data.repeat:
            lines.append(f"REPEAT:{data.repeat.times}")
            lines.append(f"DURATION:{format_duration(data.repeat.interval)}")

        if data.type == Action.AUDIO:
            if data.attach and data.attach.mime:
                mime = escape(data.attach.mime)
                lines.append(f"ATTACH;FMTTYPE={mime}:{escape(data.attach.uri)}")
            elif data.attach:
                lines.append(f"ATTACH;VALUE=URI:{escape(data.attach.uri)}")
            else:
                lines.append(f"ATTACH;VALUE=URI:{DEFAULT_SOUND}")
        else:
            description = data.description or self._parent.summary() or ""
            lines.append(f"DESCRIPTION:{escape(description)}")

        if data.type == Action.EMAIL:
            if data.summary:
                lines.append(f"SUMMARY:{escape(data.summary)}")
            lines.extend(attendee.ics() for attendee in data.attendees)

        lines.extend(self._encode_x_properties())
        lines.append("END:VALARM")
        return lines
