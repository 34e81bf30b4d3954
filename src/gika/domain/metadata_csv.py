"""Where: src/gika/domain/metadata_csv.py
What: Parser for the two-column CSV returned by Tika's ``/meta`` endpoint.
Why: The server emits ``"key","value"`` lines; a full CSV reader is not needed
     and would change which lines survive.

The parser is deliberately literal. It does not understand escaped quotes or
commas inside quoted fields: the first comma-separated field is the key, the
last one is the value, and one wrapper character is trimmed from each end.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

_FIELD_SEPARATOR: Final[str] = ","
# Shortest raw field that still has a wrapper character on both ends.
_MIN_FIELD_LENGTH: Final[int] = 2


def _unwrap(field: str) -> str:
    return field[1:-1]


def parse_metadata_line(line: str) -> tuple[str, str] | None:
    """Return the ``(key, value)`` pair carried by ``line`` or ``None`` to skip it."""

    fields = line.split(_FIELD_SEPARATOR)
    if len(fields) < 2:
        return None

    key = fields[0]
    value = fields[-1]
    if len(key) < _MIN_FIELD_LENGTH or len(value) < _MIN_FIELD_LENGTH:
        return None

    return _unwrap(key), _unwrap(value)


def parse_metadata_lines(lines: Iterable[str]) -> dict[str, str]:
    """Build the metadata mapping from already split lines.

    Later duplicate keys overwrite earlier ones.
    """

    result: dict[str, str] = {}
    for line in lines:
        pair = parse_metadata_line(line)
        if pair is None:
            continue
        key, value = pair
        result[key] = value
    return result


def parse_metadata_csv(text: str) -> dict[str, str]:
    """Parse a whole ``/meta`` response body.

    Lines are split on ``\\n`` only; a trailing ``\\r`` is dropped from each.
    """

    return parse_metadata_lines(line.removesuffix("\r") for line in text.split("\n"))


__all__ = [
    "parse_metadata_csv",
    "parse_metadata_line",
    "parse_metadata_lines",
]
