"""Parsing of comma-separated key=value property strings.

Deployment and environment properties are configured as a single string
such as ``app.foo.memory=1024m,app.foo.opts="-Da=b,-Dc=d"``. This module
turns such a string into a mapping. A value may contain ``,`` and ``=``
when it is wrapped in double quotes; the quotes are kept in the value.

The parser is a pure function without shared state and can be called
concurrently.
"""

from __future__ import annotations

from tasklaunch.core.errors import MalformedPropertyStringError

_PAIR_SEPARATOR = ","
_KEY_VALUE_SEPARATOR = "="
_QUOTE = '"'
_ESCAPE = "\\"


def _find_closing_quote(raw: str, start: int) -> int:
    """Return the index of the next quote not preceded by a backslash, or -1."""
    pos = raw.find(_QUOTE, start)
    while pos != -1:
        backslashes = 0
        while pos - backslashes - 1 >= start and raw[pos - backslashes - 1] == _ESCAPE:
            backslashes += 1
        if backslashes % 2 == 0:
            return pos
        pos = raw.find(_QUOTE, pos + 1)
    return -1


def _split_pairs(raw: str) -> list[str]:
    """
    Split a property string on its top-level commas.

    A quote opens only when it directly follows the first ``=`` of a pair
    and is closed by the next unescaped quote. Commas between the two are
    part of the value.
    """
    segments: list[str] = []
    start = 0
    seen_separator = False
    i = 0

    while i < len(raw):
        ch = raw[i]
        if ch == _PAIR_SEPARATOR:
            segments.append(raw[start:i])
            start = i + 1
            seen_separator = False
        elif ch == _KEY_VALUE_SEPARATOR and not seen_separator:
            seen_separator = True
            if raw.startswith(_QUOTE, i + 1):
                closing = _find_closing_quote(raw, i + 2)
                if closing == -1:
                    raise MalformedPropertyStringError(
                        raw, raw[start:], "unterminated quoted value"
                    )
                i = closing
        i += 1

    segments.append(raw[start:])
    return segments


def parse_properties(raw: str | None) -> dict[str, str]:
    """
    Parse a comma-separated ``key=value`` string into a dict.

    Each pair is split on its first ``=``; any later ``=`` belongs to the
    value. Keys and values are not stripped. When a key appears more than
    once the last occurrence wins.

    Args:
        raw: The property string. None or an empty string yields ``{}``.

    Returns:
        A dict mapping each key to its value, in input order.

    Raises:
        MalformedPropertyStringError: If a pair has no ``=``, has an empty
            key, or opens a quoted value that is never closed.
    """
    if not raw:
        return {}

    properties: dict[str, str] = {}
    for segment in _split_pairs(raw):
        key, separator, value = segment.partition(_KEY_VALUE_SEPARATOR)
        if not separator:
            raise MalformedPropertyStringError(raw, segment, "expected key=value")
        if not key:
            raise MalformedPropertyStringError(raw, segment, "empty key")
        properties[key] = value

    return properties
