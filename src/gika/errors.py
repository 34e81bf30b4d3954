"""Where: src/gika/errors.py
What: Exception hierarchy raised by the Tika client.
Why: Give callers one base class to catch while keeping failure kinds distinct.
"""

from __future__ import annotations


class TikaError(Exception):
    """Base exception for every failure raised by this package."""


class ConfigError(TikaError):
    """Raised when the Tika endpoint configuration is missing or invalid."""


class ParseError(TikaError, ValueError):
    """Raised when an address is not a syntactically valid URL."""


class TransportError(TikaError):
    """Raised when the request never produced an HTTP response."""


class UpstreamError(TikaError):
    """Raised when the Tika server answers with a non-200 status.

    The message is the status line exactly as received, e.g. ``404 Not Found``.
    """

    def __init__(self, status: int, reason: str) -> None:
        self.status: int = status
        self.reason: str = reason
        super().__init__(f"{status} {reason}".rstrip())

    def __reduce__(self) -> tuple[type["UpstreamError"], tuple[int, str]]:
        # ``args`` holds the status line only; rebuild from the parts instead.
        return (type(self), (self.status, self.reason))


class DecodeError(TikaError):
    """Raised when reading the response body fails part way through."""


__all__ = [
    "ConfigError",
    "DecodeError",
    "ParseError",
    "TikaError",
    "TransportError",
    "UpstreamError",
]
