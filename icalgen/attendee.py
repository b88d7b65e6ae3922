"""A participant of a group-scheduled calendar event.

Usually an attendee is created from the event it belongs to:

```python
from icalgen.calendar import Calendar

calendar = Calendar()
event = calendar.create_event({"summary": "Planning"})
attendee = event.create_attendee({"name": "Jane Doe", "email": "jane@example.com"})
attendee.rsvp(True).status("ACCEPTED")
```

An attendee may delegate participation to another attendee, which creates
the delegate on the same event:

```python
delegate = attendee.delegates_to({"email": "john@example.com"})
```
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any, Optional, Self, Union

from pydantic import Field, field_validator

from .component import UNSET, AttributeStore, ExtensibleComponent, _Unset
from .contentlines import escape
from .exceptions import InvalidArgumentError
from .types.cal_address import CalendarUserType, ParticipationStatus, Role

if TYPE_CHECKING:
    from .event import Event

_LOGGER = logging.getLogger(__name__)

AttendeeLike = Union["Attendee", Mapping[str, Any], str]


class AttendeeData(AttributeStore):
    """Stored fields of an attendee."""

    name: Optional[str] = None
    """The common name of the attendee."""

    email: Optional[str] = None
    """The email address of the attendee."""

    mailto: Optional[str] = None
    """Address to reply to, if different from the email address."""

    sent_by: Optional[str] = Field(alias="sentBy", default=None)
    """Address of a user acting on behalf of the attendee."""

    status: Optional[ParticipationStatus] = None
    """The participation status of the attendee."""

    role: Optional[Role] = Role.REQUIRED
    """The participation role of the attendee."""

    rsvp: Optional[bool] = None
    """Whether a reply is expected from the attendee."""

    type: Optional[CalendarUserType] = None
    """The type of calendar user."""

    delegated_to: Optional[Any] = Field(
        alias="delegatedTo", default=None, exclude=True
    )
    """The attendee participation was delegated to."""

    delegated_from: Optional[Any] = Field(
        alias="delegatedFrom", default=None, exclude=True
    )
    """The attendee that delegated participation to this attendee."""

    x: list[tuple[str, str]] = Field(default_factory=list)

    @field_validator("status", "role", "type", mode="before")
    @classmethod
    def parse_upper(cls, value: Any) -> Any:
        """Accept enum values in any case."""
        if isinstance(value, str):
            return value.upper()
        return value


class Attendee(ExtensibleComponent):
    """An ATTENDEE property of an event or an email alarm."""

    store_type = AttendeeData
    parent_name = "event"

    def __init__(
        self, data: Mapping[str, Any] | None = None, event: Event | None = None
    ) -> None:
        """Initialize Attendee.

        The event reference is required so that delegates can be created on
        the same event.
        """
        super().__init__(data, event)

    def name(self, name: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the attendee's name."""
        if name is UNSET:
            return self._data.name
        return self._set("name", name or None)

    def email(self, email: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the attendee's email address."""
        if email is UNSET:
            return self._data.email
        return self._set("email", email or None)

    def mailto(self, mailto: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the attendee's reply address."""
        if mailto is UNSET:
            return self._data.mailto
        return self._set("mailto", mailto or None)

    def sent_by(self, sent_by: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the address of the user acting for the attendee."""
        if sent_by is UNSET:
            return self._data.sent_by
        return self._set("sent_by", sent_by or None)

    def status(
        self, status: ParticipationStatus | str | None | _Unset = UNSET
    ) -> Self | ParticipationStatus | None:
        """Get or set the participation status, e.g. ACCEPTED."""
        if status is UNSET:
            return self._data.status
        return self._set("status", status or None)

    def role(self, role: Role | str | None | _Unset = UNSET) -> Self | Role | None:
        """Get or set the participation role, e.g. OPT-PARTICIPANT."""
        if role is UNSET:
            return self._data.role
        return self._set("role", role or None)

    def rsvp(self, rsvp: bool | None | _Unset = UNSET) -> Self | bool | None:
        """Get or set whether a reply is expected."""
        if rsvp is UNSET:
            return self._data.rsvp
        return self._set("rsvp", rsvp)

    def type(
        self, user_type: CalendarUserType | str | None | _Unset = UNSET
    ) -> Self | CalendarUserType | None:
        """Get or set the calendar user type, e.g. INDIVIDUAL."""
        if user_type is UNSET:
            return self._data.type
        return self._set("type", user_type or None)

    def _as_attendee(self, value: AttendeeLike) -> Attendee:
        """Convert an email address or initial data into an Attendee."""
        if isinstance(value, Attendee):
            return value
        if isinstance(value, str):
            return Attendee({"email": value}, self._parent)
        if isinstance(value, Mapping):
            return Attendee(value, self._parent)
        raise InvalidArgumentError(f"Expected an Attendee, mapping or email: {value!r}")

    def delegated_to(
        self, attendee: AttendeeLike | None | _Unset = UNSET
    ) -> Self | Attendee | None:
        """Get or set the attendee participation was delegated to.

        Setting a delegate also sets the status of this attendee to
        DELEGATED.
        """
        if attendee is UNSET:
            return self._data.delegated_to
        if not attendee:
            return self._set("delegated_to", None)
        self._set("delegated_to", self._as_attendee(attendee))
        return self._set("status", ParticipationStatus.DELEGATED)

    def delegated_from(
        self, attendee: AttendeeLike | None | _Unset = UNSET
    ) -> Self | Attendee | None:
        """Get or set the attendee that delegated participation to this one."""
        if attendee is UNSET:
            return self._data.delegated_from
        if not attendee:
            return self._set("delegated_from", None)
        return self._set("delegated_from", self._as_attendee(attendee))

    def delegates_to(self, attendee: AttendeeLike) -> Attendee:
        """Delegate participation to a new attendee of the same event.

        Returns the delegate, which is added to the event.
        """
        delegate = (
            attendee
            if isinstance(attendee, Attendee)
            else self._parent.create_attendee(attendee)
        )
        self.delegated_to(delegate)
        delegate.delegated_from(self)
        return delegate

    def delegates_from(self, attendee: AttendeeLike) -> Attendee:
        """Add a new attendee of the same event who delegated to this one.

        Returns the delegator, which is added to the event.
        """
        delegator = (
            attendee
            if isinstance(attendee, Attendee)
            else self._parent.create_attendee(attendee)
        )
        self.delegated_from(delegator)
        delegator.delegated_to(self)
        return delegator

    def to_json(self) -> dict[str, Any]:
        """Return a detached copy of the attendee data for persistence.

        Delegates are referenced by email address.
        """
        delegated_to = self._data.delegated_to
        delegated_from = self._data.delegated_from
        return {
            **super().to_json(),
            "delegatedTo": delegated_to.email() if delegated_to else None,
            "delegatedFrom": delegated_from.email() if delegated_from else None,
        }

    def ics(self) -> str:
        """Return the attendee as an ATTENDEE content line."""
        data = self._data
        if not data.email:
            raise InvalidArgumentError("No value for `email` in Attendee given!")
        _LOGGER.debug("Encoding attendee %s", data.email)

        result = "ATTENDEE"
        if data.role:
            result += f";ROLE={data.role.value}"
        if data.type:
            result += f";CUTYPE={data.type.value}"
        if data.status:
            result += f";PARTSTAT={data.status.value}"
        if data.rsvp is not None:
            result += f";RSVP={str(data.rsvp).upper()}"
        if data.sent_by:
            result += f';SENT-BY="mailto:{data.sent_by}"'
        if data.delegated_to:
            result += f';DELEGATED-TO="mailto:{data.delegated_to.email()}"'
        if data.delegated_from:
            result += f';DELEGATED-FROM="mailto:{data.delegated_from.email()}"'
        if data.name:
            result += f';CN="{escape(data.name, in_quotes=True)}"'
        if data.mailto:
            result += f";EMAIL={escape(data.email)}"
        result += self._encode_x_params()
        return f"{result}:MAILTO:{escape(data.mailto or data.email)}"
