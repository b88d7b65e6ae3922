"""A document or resource attached to a calendar event.

Usually an attachment is created from the event it belongs to:

```python
from icalgen.calendar import Calendar

calendar = Calendar()
event = calendar.create_event({"summary": "Review"})
attachment = event.create_attachment(
    {"fileName": "agenda.pdf", "url": "https://example.com/agenda.pdf"}
)
print(attachment)  # ATTACH;FILENAME=agenda.pdf:https://example.com/agenda.pdf
```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Self, overload

from pydantic import Field

from .component import UNSET, AttributeStore, ExtensibleComponent, _Unset

if TYPE_CHECKING:
    from .event import Event


class AttachmentData(AttributeStore):
    """Stored fields of an attachment."""

    file_name: Optional[str] = Field(alias="fileName", default=None)
    """The file name presented to the user."""

    url: Optional[str] = None
    """Location of the attached resource."""

    x: list[tuple[str, str]] = Field(default_factory=list)


class Attachment(ExtensibleComponent):
    """An ATTACH property of an event."""

    store_type = AttachmentData
    parent_name = "event"

    def __init__(
        self, data: Mapping[str, Any] | None = None, event: Event | None = None
    ) -> None:
        """Initialize Attachment.

        The event reference is required to query the calendar's timezone
        when required.
        """
        super().__init__(data, event)

    @overload
    def file_name(self) -> str | None: ...

    @overload
    def file_name(self, file_name: str | None) -> Self: ...

    def file_name(self, file_name: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the attachment's file name."""
        if file_name is UNSET:
            return self._data.file_name
        return self._set("file_name", file_name or None)

    @overload
    def url(self) -> str | None: ...

    @overload
    def url(self, url: str | None) -> Self: ...

    def url(self, url: str | None | _Unset = UNSET) -> Self | str | None:
        """Get or set the attachment's url."""
        if url is UNSET:
            return self._data.url
        return self._set("url", url or None)

    def ics(self) -> str:
        """Return the attachment as an ATTACH content line.

        The file name and url are written verbatim without TEXT escaping.
        """
        result = "ATTACH"
        if self._data.file_name is not None:
            result += f";FILENAME={self._data.file_name}"
        result += f":{self._data.url or ''}"
        return result + self._encode_x_params()
