"""Where: src/gika/domain/file_info.py
What: Typed summary of the handful of metadata keys most callers need.
Why: Avoid sprinkling raw Tika header names across application code.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

CONTENT_TYPE_KEY: Final[str] = "Content-Type"
APPLICATION_NAME_KEY: Final[str] = "Application-Name"
AUTHOR_KEY: Final[str] = "Author"


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Content type plus optional producing application and author."""

    content_type: str
    application_name: str | None = None
    author: str | None = None

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, str]) -> "FileInfo":
        """Pick the known keys out of a ``/meta`` mapping.

        Empty values are treated as absent for the optional fields.
        """

        return cls(
            content_type=metadata.get(CONTENT_TYPE_KEY, ""),
            application_name=metadata.get(APPLICATION_NAME_KEY) or None,
            author=metadata.get(AUTHOR_KEY) or None,
        )


__all__ = [
    "APPLICATION_NAME_KEY",
    "AUTHOR_KEY",
    "CONTENT_TYPE_KEY",
    "FileInfo",
]
