"""A category or subtype of a calendar event."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Self

from .component import UNSET, AttributeStore, CalendarComponent, _Unset
from .contentlines import escape

if TYPE_CHECKING:
    from .event import Event


class CategoryData(AttributeStore):
    """Stored fields of a category."""

    name: Optional[str] = None


class Category(CalendarComponent):
    """A single value of the CATEGORIES property of an event."""

    store_type = CategoryData
    parent_name = "event"

    def __init__(
        self, data: Mapping[str, Any] | None = None, event: Event | None = None
    ) -> None:
        super().__init__(data, event)

    def name(self, name: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the name of the category."""
        if name is UNSET:
            return self._data.name
        return self._set("name", name or None)

    def ics(self) -> str:
        """Return the escaped category name."""
        return escape(self._data.name or "")
