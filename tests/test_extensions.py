"""Tests for vendor extension attributes."""

from typing import Any

import pytest

from icalgen.attachment import AttachmentData
from icalgen.exceptions import InvalidArgumentError
from icalgen.extensions import (
    add_or_get_custom_attributes,
    normalize_custom_attributes,
)

EXPECTED = [("X-FOO", "bar"), ("X-NUM-GUESTS", "1")]


@pytest.mark.parametrize(
    "values",
    [
        [{"key": "X-FOO", "value": "bar"}, {"key": "X-NUM-GUESTS", "value": "1"}],
        [("X-FOO", "bar"), ("X-NUM-GUESTS", "1")],
        [["X-FOO", "bar"], ["X-NUM-GUESTS", "1"]],
        {"X-FOO": "bar", "X-NUM-GUESTS": "1"},
    ],
    ids=("dicts", "tuples", "lists", "mapping"),
)
def test_normalize_shapes(values: Any) -> None:
    """Test every accepted shape normalizes to the same list."""
    assert normalize_custom_attributes(values) == EXPECTED


def test_normalize_is_idempotent() -> None:
    """Test normalizing a normalized list returns an equal list."""
    normalized = normalize_custom_attributes({"X-FOO": "bar"})
    assert normalize_custom_attributes(normalized) == normalized


def test_normalize_keeps_duplicates() -> None:
    """Test repeated keys are kept in their original order."""
    values = [("X-A", "1"), ("X-B", "2"), ("X-A", "3")]
    assert normalize_custom_attributes(values) == values


def test_normalize_does_not_modify_input() -> None:
    """Test the input collection is left untouched."""
    values = [{"key": "X-FOO", "value": "bar"}]
    normalize_custom_attributes(values)
    assert values == [{"key": "X-FOO", "value": "bar"}]


@pytest.mark.parametrize(
    "values",
    [
        [{"key": "X-FOO"}],
        [{"value": "bar"}],
        [("X-FOO", 1)],
        [(1, "bar")],
        [("X-FOO", "bar", "baz")],
        {"X-FOO": None},
        "X-FOO",
        [None],
    ],
)
def test_normalize_invalid(values: Any) -> None:
    """Test invalid shapes are rejected."""
    with pytest.raises(InvalidArgumentError, match="not a string"):
        normalize_custom_attributes(values)


def test_add_and_get() -> None:
    """Test appending attributes to a store and reading them back."""
    store = AttachmentData()
    assert add_or_get_custom_attributes(store) == []

    add_or_get_custom_attributes(store, "X-FOO", "bar")
    add_or_get_custom_attributes(store, {"X-BAZ": "1"})
    add_or_get_custom_attributes(store, [("X-FOO", "bar")])

    assert store.x == [("X-FOO", "bar"), ("X-BAZ", "1"), ("X-FOO", "bar")]
    assert add_or_get_custom_attributes(store) == [
        {"key": "X-FOO", "value": "bar"},
        {"key": "X-BAZ", "value": "1"},
        {"key": "X-FOO", "value": "bar"},
    ]


def test_get_returns_copy() -> None:
    """Test the returned list is detached from the store."""
    store = AttachmentData()
    add_or_get_custom_attributes(store, "X-FOO", "bar")
    result = add_or_get_custom_attributes(store)
    assert result
    result.append({"key": "X-OTHER", "value": "1"})
    result[0]["value"] = "changed"
    assert store.x == [("X-FOO", "bar")]


@pytest.mark.parametrize(
    ("key_or_collection", "value"),
    [
        ("X-FOO", None),
        ("X-FOO", 1),
        (None, "bar"),
        ({"X-FOO": "bar"}, "bar"),
        ([("X-B", "2"), ("X-C", 3)], None),
    ],
)
def test_add_invalid_leaves_store_unchanged(
    key_or_collection: Any, value: Any
) -> None:
    """Test a rejected call does not partially modify the store."""
    store = AttachmentData()
    add_or_get_custom_attributes(store, "X-A", "1")

    with pytest.raises(InvalidArgumentError):
        add_or_get_custom_attributes(store, key_or_collection, value)

    assert store.x == [("X-A", "1")]
