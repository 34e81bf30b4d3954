"""Where: src/gika/platform/tika/address.py
What: Normalize a Tika server address into the base URL requests are built on.
Why: Docker links hand out ``tcp://host:port`` values; Tika only speaks HTTP
     and every endpoint path is appended to the bare origin.
"""

from __future__ import annotations

import re
from typing import Final
from urllib.parse import urlsplit, urlunsplit

from gika.errors import ParseError

FORCED_SCHEME: Final[str] = "http"
_BAD_ESCAPE: Final[re.Pattern[str]] = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _has_control_character(value: str) -> bool:
    return any(ord(char) < 0x20 or ord(char) == 0x7F for char in value)


def normalize_base_url(address: str) -> str:
    """Return ``http://<netloc>`` for ``address``.

    The scheme is replaced with ``http`` whatever it was, and the path, query
    and fragment are dropped.

    Raises:
        ParseError: If ``address`` is not a syntactically valid URL with a host.
    """

    if _has_control_character(address):
        raise ParseError(f"Invalid control character in URL {address!r}")
    if _BAD_ESCAPE.search(address):
        raise ParseError(f"Invalid URL escape in {address!r}")

    try:
        parts = urlsplit(address)
        _ = parts.port
    except ValueError as exc:
        raise ParseError(f"Invalid URL {address!r}: {exc}") from exc

    if not parts.hostname:
        raise ParseError(f"Missing host in URL {address!r}")

    return urlunsplit((FORCED_SCHEME, parts.netloc, "", "", ""))


__all__ = ["FORCED_SCHEME", "normalize_base_url"]
