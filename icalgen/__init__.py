"""
.. include:: ../README.md
"""

__all__ = [
    "alarm",
    "attachment",
    "attendee",
    "calendar",
    "category",
    "component",
    "contentlines",
    "event",
    "exceptions",
    "extensions",
    "types",
    "util",
]
