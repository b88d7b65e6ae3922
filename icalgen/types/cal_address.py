"""Values describing a calendar user such as an attendee or organizer."""

from __future__ import annotations

import enum
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..contentlines import escape
from ..exceptions import InvalidArgumentError

__all__ = [
    "CalendarUserType",
    "ParticipationStatus",
    "Role",
    "Organizer",
]

_NAME_AND_EMAIL_RE = re.compile(r"^(.+) ?<([^>]+)>$")


class CalendarUserType(str, enum.Enum):
    """The type of calendar user."""

    INDIVIDUAL = "INDIVIDUAL"
    GROUP = "GROUP"
    RESOURCE = "RESOURCE"
    ROOM = "ROOM"
    UNKNOWN = "UNKNOWN"


class ParticipationStatus(str, enum.Enum):
    """Participation status for a calendar user."""

    NEEDS_ACTION = "NEEDS-ACTION"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    TENTATIVE = "TENTATIVE"
    DELEGATED = "DELEGATED"


class Role(str, enum.Enum):
    """Role for the calendar user."""

    CHAIR = "CHAIR"
    REQUIRED = "REQ-PARTICIPANT"
    OPTIONAL = "OPT-PARTICIPANT"
    NON_PARTICIPANT = "NON-PARTICIPANT"


def parse_name_and_email(value: str) -> dict[str, str]:
    """Split a `Name <user@example.com>` string into name and email."""
    if match := _NAME_AND_EMAIL_RE.match(value.strip()):
        return {"name": match.group(1).strip(), "email": match.group(2).strip()}
    raise InvalidArgumentError(
        f"Expected a string like `Name <email@example.com>`, got {value!r}"
    )


class Organizer(BaseModel):
    """The organizer of a group-scheduled event.

    May be created from a mapping, or from a string like
    `Jane Doe <jane@example.com>`.
    """

    name: str
    """The common name of the organizer."""

    email: Optional[str] = None
    """The email address of the organizer."""

    mailto: Optional[str] = None
    """Address to reply to, if different from the email address."""

    sent_by: Optional[str] = Field(alias="sentBy", default=None)
    """Address of a user acting on behalf of the organizer."""

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def parse_string_value(cls, value: Any) -> Any:
        """Accept the `Name <email>` shorthand."""
        if isinstance(value, str):
            return parse_name_and_email(value)
        return value

    def ics(self) -> str:
        """Return the organizer as an ORGANIZER content line."""
        result = f'ORGANIZER;CN="{escape(self.name, in_quotes=True)}"'
        if self.email and self.mailto:
            result += f";EMAIL={escape(self.email)}"
        if self.sent_by:
            result += f';SENT-BY="mailto:{escape(self.sent_by, in_quotes=True)}"'
        if address := self.mailto or self.email:
            result += f":mailto:{escape(address)}"
        return result
