"""Library for building calendar entities with fluent accessors.

Every entity in this library (a calendar, an event, an attendee, etc) keeps
its state in an `AttributeStore`, which is a pydantic model where every
field is declared with a default, so a field is never missing, only `None`.

The store is never exposed directly. Instead each field has a single
accessor method on the entity that returns the current value when called
without an argument, or validates and stores a new value when called with
one and returns the entity so that calls may be chained:

```python
attachment = event.create_attachment()
attachment.file_name("agenda.pdf").url("https://example.com/agenda.pdf")
print(attachment.file_name())
```

Entities are created with a reference to their parent, which is used to
resolve calendar wide context when rendering, e.g. the timezone.
"""

from __future__ import annotations

from collections.abc import Mapping
import datetime
import enum
import logging
from typing import Any, ClassVar, Final, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from .contentlines import encode_content_lines, escape
from .exceptions import InvalidArgumentError, MissingDependencyError
from .extensions import CustomAttributes, add_or_get_custom_attributes

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "UNSET",
    "AttributeStore",
    "CalendarComponent",
    "ExtensibleComponent",
    "ContainerComponent",
]


class _Unset(enum.Enum):
    """Marker for an accessor called without an argument."""

    UNSET = "UNSET"


UNSET: Final = _Unset.UNSET


class AttributeStore(BaseModel):
    """Abstract class for the normalized field data of an entity.

    Field aliases are the names used in the JSON snapshot, and either the
    alias or the field name may be used when creating an entity.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


def to_json_value(value: Any) -> Any:
    """Convert a stored value into a detached JSON compatible value."""
    if isinstance(value, CalendarComponent):
        return value.to_json()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json_value(item) for key, item in value.items()}
    return value


class CalendarComponent:
    """Base class for an entity backed by an `AttributeStore`."""

    store_type: ClassVar[type[AttributeStore]]
    """The pydantic model holding the entity data."""

    parent_name: ClassVar[str | None] = "parent"
    """Name of the required parent reference, or None for a root entity."""

    def __init__(self, data: Mapping[str, Any] | None, parent: Any) -> None:
        """Initialize the entity from initial data and its parent.

        Each supplied field is passed through its accessor, so the same
        validation applies as when the field is set later.
        """
        if parent is None and self.parent_name:
            raise MissingDependencyError(f"`{self.parent_name}` option required!")
        self._parent = parent
        self._data = self.store_type()
        if data:
            self._apply(data)

    def _apply(self, data: Mapping[str, Any]) -> None:
        """Set every known field present in the data through its accessor."""
        known: set[str] = set()
        for name, field in self.store_type.model_fields.items():
            # The JSON name takes precedence over the attribute name
            keys = (field.alias or name, name)
            known.update(keys)
            for key in keys:
                if key in data:
                    getattr(self, name)(data[key])
                    break
        if unknown := set(data) - known:
            _LOGGER.debug(
                "Ignoring unknown %s fields: %s", self.__class__.__name__, unknown
            )

    def _set(self, name: str, value: Any) -> Self:
        """Validate and store a single field value."""
        try:
            setattr(self._data, name, value)
        except ValidationError as err:
            _LOGGER.debug("Failed to set field %s: %s", name, err)
            message = [f"Invalid value for {self.__class__.__name__} field {name}"]
            for error in err.errors():
                if msg := error.get("msg"):
                    message.append(msg)
            raise InvalidArgumentError(": ".join(message)) from err
        return self

    def to_json(self) -> dict[str, Any]:
        """Return a detached copy of the entity data for persistence.

        The result can be passed to `json.dumps`, or used as the initial data
        for a new entity.
        """
        return {
            field.alias or name: to_json_value(getattr(self._data, name))
            for name, field in self.store_type.model_fields.items()
            if not field.exclude
        }

    def ics(self) -> str:
        """Return the entity encoded as rfc5545 text."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.ics()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_json()!r})"


class ExtensibleComponent(CalendarComponent):
    """An entity that also carries vendor extension (X-) attributes.

    The store of an extensible entity must declare an `x` field.
    """

    def get_x(self) -> list[dict[str, str]]:
        """Return all extension attributes as `{"key", "value"}` dicts."""
        return add_or_get_custom_attributes(self._data) or []

    def set_x(self, values: CustomAttributes) -> Self:
        """Append a collection of extension attributes."""
        if values is None:
            raise InvalidArgumentError("Either key or value is not a string")
        add_or_get_custom_attributes(self._data, values)
        return self

    def add_x(self, key: str, value: str) -> Self:
        """Append a single extension attribute."""
        add_or_get_custom_attributes(self._data, key, value)
        return self

    def x(
        self,
        key_or_collection: str | CustomAttributes | _Unset = UNSET,
        value: str | _Unset = UNSET,
    ) -> Any:
        """Get or append extension attributes.

        Duplicate keys are not filtered, including attributes that are
        also written by another property (e.g. status), so these may be
        emitted twice.

        ```python
        attendee.x([{"key": "X-MY-CUSTOM-ATTR", "value": "1337!"}])
        attendee.x([("X-MY-CUSTOM-ATTR", "1337!")])
        attendee.x({"X-MY-CUSTOM-ATTR": "1337!"})
        attendee.x("X-MY-CUSTOM-ATTR", "1337!")
        attendee.x()  # [{"key": "X-MY-CUSTOM-ATTR", "value": "1337!"}, ...]
        ```
        """
        if key_or_collection is UNSET:
            if value is not UNSET:
                raise InvalidArgumentError("Either key or value is not a string")
            return self.get_x()
        if isinstance(key_or_collection, str):
            if not isinstance(value, str):
                raise InvalidArgumentError("Either key or value is not a string")
            return self.add_x(key_or_collection, value)
        if value is not UNSET:
            raise InvalidArgumentError("Either key or value is not a string")
        return self.set_x(key_or_collection)

    def to_json(self) -> dict[str, Any]:
        """Return a detached copy of the entity data for persistence."""
        return {**super().to_json(), "x": self.get_x()}

    def _custom_attributes(self) -> list[tuple[str, str]]:
        return self._data.x  # type: ignore[attr-defined, no-any-return]

    def _encode_x_params(self) -> str:
        """Encode extension attributes as trailing property parameters."""
        return "".join(
            f";{key.upper()}={escape(value)}"
            for key, value in self._custom_attributes()
        )

    def _encode_x_properties(self) -> list[str]:
        """Encode extension attributes as content lines of a component."""
        return [
            f"{key.upper()}:{escape(value)}"
            for key, value in self._custom_attributes()
        ]


class ContainerComponent(ExtensibleComponent):
    """An entity that renders as a BEGIN/END delimited component."""

    def ics_lines(self) -> list[str]:
        """Return the unfolded content lines of the component."""
        raise NotImplementedError

    def ics(self) -> str:
        """Return the component as folded, CRLF terminated content lines."""
        _LOGGER.debug("Encoding component %s", self.__class__.__name__)
        return encode_content_lines(self.ics_lines())
