"""Tests for content line encoding."""

import pytest

from icalgen.contentlines import encode_content_lines, escape, fold_line


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("plain text", "plain text"),
        ("a;b", "a\\;b"),
        ("a,b", "a\\,b"),
        ("a\\b", "a\\\\b"),
        ("one\ntwo", "one\\ntwo"),
        ("one\r\ntwo", "one\\ntwo"),
        ("one\rtwo", "one\\ntwo"),
        ('say "hi"', 'say "hi"'),
        ("a;b,c\\d\ne", "a\\;b\\,c\\\\d\\ne"),
    ],
)
def test_escape(value: str, expected: str) -> None:
    """Test escaping of TEXT values."""
    assert escape(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Jane Doe", "Jane Doe"),
        ('Jane "JD" Doe', 'Jane \\"JD\\" Doe'),
        ("Doe; Jane, Dr.", "Doe; Jane, Dr."),
        ("back\\slash", "back\\\\slash"),
        ("one\ntwo", "one\\ntwo"),
    ],
)
def test_escape_in_quotes(value: str, expected: str) -> None:
    """Test escaping of quoted parameter values."""
    assert escape(value, in_quotes=True) == expected


def test_escape_non_string() -> None:
    """Test values that are not strings are converted."""
    assert escape(1337) == "1337"  # type: ignore[arg-type]


def test_fold_short_line() -> None:
    """Test a line within the limit is unchanged."""
    line = "DESCRIPTION:" + "a" * 63
    assert len(line) == 75
    assert fold_line(line) == line


def test_fold_long_line() -> None:
    """Test a long line is folded with a leading space on continuations."""
    line = "a" * 160
    folded = fold_line(line)
    assert folded == "a" * 75 + "\r\n " + "a" * 74 + "\r\n " + "a" * 11
    assert folded.replace("\r\n ", "") == line


def test_fold_multibyte() -> None:
    """Test multi-byte characters are never split across lines."""
    line = "é" * 50
    folded = fold_line(line)
    assert folded == "é" * 37 + "\r\n " + "é" * 13
    for physical_line in folded.split("\r\n"):
        assert len(physical_line.encode("utf-8")) <= 75
    assert folded.replace("\r\n ", "") == line


def test_encode_content_lines() -> None:
    """Test lines are terminated with CRLF."""
    assert encode_content_lines(["BEGIN:VALARM", "END:VALARM"]) == (
        "BEGIN:VALARM\r\nEND:VALARM\r\n"
    )
    assert encode_content_lines([]) == ""
