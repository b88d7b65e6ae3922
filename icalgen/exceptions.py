"""Exceptions for icalgen library."""


class CalendarError(Exception):
    """Base exception for all icalgen errors."""


class MissingDependencyError(CalendarError):
    """Exception raised when an entity is created without its parent.

    Every sub-entity holds a reference to the component that owns it so
    that calendar wide context (e.g. the timezone or the event summary) can
    be resolved when rendering.
    """


class InvalidArgumentError(CalendarError):
    """Exception raised when an accessor is called with an invalid argument.

    This is always a programming error at the call site, and the entity is
    left unmodified.
    """
