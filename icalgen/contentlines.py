"""Library for encoding rfc5545 content lines.

A content line is a single property of a calendar object, for example:

  ATTACH;FILENAME=agenda.pdf:https://example.com/agenda.pdf

The property name comes first, followed by any property parameters
separated by a semicolon, then a colon and the property value. Values of
type TEXT must have the characters that are meaningful to this grammar
escaped, see `escape`.

Lines longer than 75 octets are folded by inserting a line break followed
by a single space, which a parser removes when unfolding.
"""

from __future__ import annotations

from collections.abc import Iterable
import re

FOLD_LEN = 75
FOLD_INDENT = " "
CRLF = "\r\n"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_ESCAPE_RE = re.compile(r"[\\;,]")
_ESCAPE_IN_QUOTES_RE = re.compile(r'[\\"]')


def escape(value: str, in_quotes: bool = False) -> str:
    """Escape a value for use as an rfc5545 TEXT value or parameter value.

    Quoted parameter values (e.g. `CN="..."`) may contain semicolons and
    commas, but the quote character itself must be escaped instead.
    """
    pattern = _ESCAPE_IN_QUOTES_RE if in_quotes else _ESCAPE_RE
    value = pattern.sub(lambda match: "\\" + match.group(0), str(value))
    return _LINE_BREAK_RE.sub("\\\\n", value)


def fold_line(line: str) -> str:
    """Fold a content line so that no physical line exceeds 75 octets.

    Multi-byte characters are never split across physical lines.
    """
    if len(line.encode("utf-8")) <= FOLD_LEN:
        return line

    result: list[str] = []
    current = ""
    current_len = 0
    limit = FOLD_LEN
    for char in line:
        char_len = len(char.encode("utf-8"))
        if current_len + char_len > limit:
            result.append(current)
            current = ""
            current_len = 0
            # Leaves room for the leading space on continuation lines
            limit = FOLD_LEN - len(FOLD_INDENT)
        current += char
        current_len += char_len
    if current:
        result.append(current)
    return (CRLF + FOLD_INDENT).join(result)


def encode_content_lines(lines: Iterable[str]) -> str:
    """Fold and join content lines, each terminated by a CRLF."""
    return "".join(fold_line(line) + CRLF for line in lines)
