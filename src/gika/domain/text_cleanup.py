"""Where: src/gika/domain/text_cleanup.py
What: Diacritic stripping and blank-line collapsing for extracted text.
Why: Tika output carries accents and ragged spacing that downstream
     consumers (search indexes, tokenizers) do not want.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Final

# Unicode category Z: Zs space separators, Zl line separator, Zp paragraph separator.
_SEPARATOR_CLASS: Final[str] = (
    r"[ \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]"
)

# A newline followed by one or more further newlines, each optionally padded
# with separators. Trailing separators after the final newline are kept.
BLANK_LINE_RUN: Final[re.Pattern[str]] = re.compile(
    rf"{_SEPARATOR_CLASS}*\n(?:{_SEPARATOR_CLASS}*\n)+"
)

_NON_SPACING_MARK: Final[str] = "Mn"


def strip_diacritics(text: str) -> str:
    """Remove non-spacing combining marks, returning composed text.

    The text is decomposed (NFD), every ``Mn`` code point is dropped, and the
    remainder is recomposed (NFC), so ``é`` in either form becomes ``e``.
    """

    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(
        char for char in decomposed if unicodedata.category(char) != _NON_SPACING_MARK
    )
    return unicodedata.normalize("NFC", stripped)


def collapse_blank_lines(text: str, replacement: str = "\n") -> str:
    """Replace every run of blank lines with ``replacement``."""

    return BLANK_LINE_RUN.sub(replacement, text)


def clean_parsed_text(text: str) -> str:
    """Post-process ``/tika`` output: strip diacritics, then collapse blank lines."""

    return collapse_blank_lines(strip_diacritics(text), "\n")


def clean_recursive_text(text: str) -> str:
    """Post-process ``/rmeta/text`` output: paragraph-collapse and trim."""

    return collapse_blank_lines(text, "\n\n").strip()


__all__ = [
    "BLANK_LINE_RUN",
    "clean_parsed_text",
    "clean_recursive_text",
    "collapse_blank_lines",
    "strip_diacritics",
]
