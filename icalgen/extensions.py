"""Library for handling vendor extension (X-) attributes.

Extension attributes are non-standard key/value pairs that may be attached
to any entity, for example `X-MICROSOFT-CDO-BUSYSTATUS`. They can be
supplied in any of these shapes, which are all equivalent:

```python
attendee.x([{"key": "X-MY-CUSTOM-ATTR", "value": "1337!"}])
attendee.x([("X-MY-CUSTOM-ATTR", "1337!")])
attendee.x({"X-MY-CUSTOM-ATTR": "1337!"})
attendee.x("X-MY-CUSTOM-ATTR", "1337!")
```

Internally they are always stored as an ordered list of `(key, value)`
tuples. Keys are not deduplicated, so an attribute that is also written by
another property (e.g. a status) may be emitted twice.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
from typing import Any, Protocol, Union

from .exceptions import InvalidArgumentError

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "CustomAttributes",
    "add_or_get_custom_attributes",
    "normalize_custom_attributes",
]

CustomAttributes = Union[
    Sequence[Mapping[str, str]],
    Sequence[tuple[str, str]],
    Mapping[str, str],
]
"""Accepted input shapes for a collection of extension attributes."""

ERROR_NOT_A_STRING = "Either key or value is not a string"


class CustomAttributeStore(Protocol):
    """A store holding an ordered list of extension attributes."""

    x: list[tuple[str, str]]


def _as_pair(item: Any) -> tuple[Any, Any]:
    """Convert a single sequence item into a key/value pair."""
    if isinstance(item, Mapping):
        if "key" not in item or "value" not in item:
            raise InvalidArgumentError(ERROR_NOT_A_STRING)
        return (item["key"], item["value"])
    if isinstance(item, Sequence) and not isinstance(item, str) and len(item) == 2:
        return (item[0], item[1])
    raise InvalidArgumentError(ERROR_NOT_A_STRING)


def normalize_custom_attributes(values: CustomAttributes) -> list[tuple[str, str]]:
    """Convert any accepted collection shape into a list of key/value tuples.

    The input is not modified. Normalizing an already normalized list
    returns an equal list.
    """
    if isinstance(values, Mapping):
        pairs = list(values.items())
    elif isinstance(values, Sequence) and not isinstance(values, str):
        pairs = [_as_pair(item) for item in values]
    else:
        raise InvalidArgumentError(ERROR_NOT_A_STRING)

    for key, value in pairs:
        if not isinstance(key, str) or not isinstance(value, str):
            raise InvalidArgumentError(ERROR_NOT_A_STRING)
    return [(key, value) for key, value in pairs]


def add_or_get_custom_attributes(
    store: CustomAttributeStore,
    key_or_collection: str | CustomAttributes | None = None,
    value: str | None = None,
) -> list[dict[str, str]] | None:
    """Read or append extension attributes on the store.

    With no arguments the current attributes are returned as a list of
    `{"key": ..., "value": ...}` dicts. A collection is appended in its
    iteration order, and a key and value string are appended as one pair.
    Nothing is modified when the arguments are invalid.
    """
    if key_or_collection is None and value is None:
        return [{"key": key, "value": val} for key, val in store.x]

    if isinstance(key_or_collection, str):
        if not isinstance(value, str):
            raise InvalidArgumentError(ERROR_NOT_A_STRING)
        pairs = [(key_or_collection, value)]
    elif key_or_collection is not None and value is None:
        pairs = normalize_custom_attributes(key_or_collection)
    else:
        raise InvalidArgumentError(ERROR_NOT_A_STRING)

    _LOGGER.debug("Adding extension attributes %s", pairs)
    store.x = [*store.x, *pairs]
    return None
