"""Library for rfc5545 enumerated values and value types."""

from .cal_address import CalendarUserType, Organizer, ParticipationStatus, Role
from .recur import Frequency, Repeating, Weekday

__all__ = [
    "CalendarUserType",
    "Frequency",
    "Organizer",
    "ParticipationStatus",
    "Repeating",
    "Role",
    "Weekday",
]
