"""The Calendar is the top level container of events.

A calendar is the root of the entity tree and has no parent. Events are
created from the calendar, and the whole tree is encoded with `ics()`:

```python
from icalgen.calendar import Calendar

calendar = Calendar({"name": "Team", "timezone": "Europe/Berlin"})
calendar.create_event({"start": "2022-08-31T07:00:00", "summary": "Standup"})
with open("team.ics", "w", newline="") as ics_file:
    ics_file.write(calendar.ics())
```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import datetime
import enum
import logging
from typing import Any, Optional, Self

from pydantic import Field, field_validator

from .component import UNSET, AttributeStore, ContainerComponent, _Unset
from .contentlines import escape
from .event import Event
from .exceptions import InvalidArgumentError
from .util import format_duration, prodid_factory, validate_timezone

_LOGGER = logging.getLogger(__name__)


class CalendarMethod(str, enum.Enum):
    """The iTIP method used for scheduling."""

    PUBLISH = "PUBLISH"
    REQUEST = "REQUEST"
    REPLY = "REPLY"
    ADD = "ADD"
    CANCEL = "CANCEL"
    REFRESH = "REFRESH"
    COUNTER = "COUNTER"
    DECLINECOUNTER = "DECLINECOUNTER"


class CalendarData(AttributeStore):
    """Stored fields of a calendar."""

    prod_id: str = Field(alias="prodId", default_factory=lambda: prodid_factory())
    """Identifier of the product that created the calendar."""

    method: Optional[CalendarMethod] = None
    """The iTIP method, e.g. PUBLISH."""

    name: Optional[str] = None
    """The display name of the calendar."""

    description: Optional[str] = None
    """A description of the calendar."""

    timezone: Optional[str] = None
    """IANA timezone name used for events without a timezone of their own."""

    url: Optional[str] = None
    """Location the calendar is published at."""

    scale: Optional[str] = None
    """The calendar scale, e.g. GREGORIAN."""

    ttl: Optional[int] = None
    """Suggested refresh interval in seconds for subscribers."""

    events: list[Event] = Field(default_factory=list, exclude=True)

    x: list[tuple[str, str]] = Field(default_factory=list)

    @field_validator("method", "scale", mode="before")
    @classmethod
    def parse_upper(cls, value: Any) -> Any:
        """Accept values in any case."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("timezone")
    @classmethod
    def parse_timezone(cls, value: Optional[str]) -> Optional[str]:
        """Verify the timezone is known."""
        return validate_timezone(value)


class Calendar(ContainerComponent):
    """A VCALENDAR, the root of the entity tree."""

    store_type = CalendarData
    parent_name = None

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        """Initialize Calendar."""
        super().__init__(data, None)

    def prod_id(
        self, prod_id: str | Mapping[str, str] | _Unset = UNSET
    ) -> Self | str:
        """Get or set the product identifier.

        Accepts the full identifier, or a mapping with `company`, `product`
        and an optional `language` from which it is built.
        """
        if prod_id is UNSET:
            return self._data.prod_id
        if isinstance(prod_id, Mapping):
            if "company" not in prod_id or "product" not in prod_id:
                raise InvalidArgumentError(
                    "`prod_id` requires a `company` and a `product`"
                )
            language = prod_id.get("language", "EN").upper()
            prod_id = f"-//{prod_id['company']}//{prod_id['product']}//{language}"
        return self._set("prod_id", prod_id)

    def method(
        self, method: CalendarMethod | str | None | _Unset = UNSET
    ) -> Self | CalendarMethod | None:
        """Get or set the iTIP method, e.g. PUBLISH."""
        if method is UNSET:
            return self._data.method
        return self._set("method", method or None)

    def name(self, name: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the name of the calendar."""
        if name is UNSET:
            return self._data.name
        return self._set("name", name or None)

    def description(
        self, description: str | None | _Unset = UNSET
    ) -> Self | str | None:
        """Get or set the description of the calendar."""
        if description is UNSET:
            return self._data.description
        return self._set("description", description or None)

    def timezone(self, timezone: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the timezone name, e.g. Europe/Berlin."""
        if timezone is UNSET:
            return self._data.timezone
        return self._set("timezone", timezone or None)

    def url(self, url: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the url the calendar is published at."""
        if url is UNSET:
            return self._data.url
        return self._set("url", url or None)

    def scale(self, scale: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the calendar scale, e.g. GREGORIAN."""
        if scale is UNSET:
            return self._data.scale
        return self._set("scale", scale or None)

    def ttl(
        self, ttl: int | datetime.timedelta | None | _Unset = UNSET
    ) -> Self | int | None:
        """Get or set the refresh interval in seconds."""
        if ttl is UNSET:
            return self._data.ttl
        if isinstance(ttl, datetime.timedelta):
            ttl = int(ttl.total_seconds())
        return self._set("ttl", ttl or None)

    def create_event(self, data: Event | Mapping[str, Any] | None = None) -> Event:
        """Add an event to the calendar and return it."""
        event = data if isinstance(data, Event) else Event(data, self)
        self._data.events.append(event)
        return event

    def events(
        self, events: Iterable[Event | Mapping[str, Any]] | _Unset = UNSET
    ) -> Self | list[Event]:
        """Get the events, or add a list of events."""
        if events is UNSET:
            return list(self._data.events)
        for event in events:
            self.create_event(event)
        return self

    def clear(self) -> Self:
        """Remove all events from the calendar."""
        self._data.events = []
        return self

    def to_json(self) -> dict[str, Any]:
        """Return a detached copy of the calendar data for persistence."""
        return {
            **super().to_json(),
            "events": [event.to_json() for event in self._data.events],
        }

    def ics_lines(self) -> list[str]:
        """Return the unfolded content lines of the calendar."""
        data = self._data
        _LOGGER.debug("Encoding calendar with %d events", len(data.events))
        lines = ["BEGIN:VCALENDAR", "VERSION:2.0", f"PRODID:{escape(data.prod_id)}"]
        if data.url:
            lines.append(f"URL:{escape(data.url)}")
        if data.scale:
            lines.append(f"CALSCALE:{data.scale}")
        if data.method:
            lines.append(f"METHOD:{data.method.value}")
        if data.name:
            lines.append(f"NAME:{escape(data.name)}")
            lines.append(f"X-WR-CALNAME:{escape(data.name)}")
        if data.description:
            lines.append(f"DESCRIPTION:{escape(data.description)}")
            lines.append(f"X-WR-CALDESC:{escape(data.description)}")
        if data.timezone:
            lines.append(f"TIMEZONE-ID:{data.timezone}")
            lines.append(f"X-WR-TIMEZONE:{data.timezone}")
        if data.ttl:
            lines.append(f"REFRESH-INTERVAL;VALUE=DURATION:{format_duration(data.ttl)}")
            lines.append(f"X-PUBLISHED-TTL:{format_duration(data.ttl)}")
        for event in data.events:
            lines.extend(event.ics_lines())
        lines.extend(self._encode_x_properties())
        lines.append("END:VCALENDAR")
        return lines
