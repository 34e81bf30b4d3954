"""Where: src/gika/platform/logging/handlers.py
What: Rich console handler that renders Tika request events compactly.
Why: Request logs carry structured extras; showing them as one aligned line
     is easier to scan than the raw message.
"""

from __future__ import annotations

import logging
from typing import Any, Final

from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

EVENT_START: Final[str] = "tika.request.start"
EVENT_SUCCESS: Final[str] = "tika.request.success"
EVENT_FAILURE: Final[str] = "tika.request.failure"

_EVENT_ICONS: Final[dict[str, tuple[str, str]]] = {
    EVENT_START: ("→ ", "blue"),
    EVENT_SUCCESS: ("✓ ", "green"),
    EVENT_FAILURE: ("✗ ", "red"),
}


class TikaRichHandler(RichHandler):
    """Rich handler aware of the ``tika_event`` record extras.

    Records logged with ``extra={"tika_event": ..., "endpoint": ..., ...}``
    are rendered as ``<icon> PUT <endpoint> <status> <duration>``. Anything
    else falls back to a level-coloured message.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("show_time", False)
        kwargs.setdefault("show_path", False)
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def render_message(self, record: logging.LogRecord, message: str) -> Text:
        event = getattr(record, "tika_event", None)
        if isinstance(event, str) and event in _EVENT_ICONS:
            return self._render_event(record, event, message)

        text = Text()
        if record.levelno >= logging.ERROR:
            text.append("❌ ", style=Style(color="red", bold=True))
            text.append(message, style=Style(color="red"))
        elif record.levelno >= logging.WARNING:
            text.append("⚠️  ", style=Style(color="yellow", bold=True))
            text.append(message, style=Style(color="yellow"))
        else:
            text.append(message)
        return text

    def _render_event(self, record: logging.LogRecord, event: str, message: str) -> Text:
        icon, color = _EVENT_ICONS[event]
        text = Text()
        text.append(icon, style=Style(color=color, bold=True))
        text.append("PUT ", style=Style(color=color))

        endpoint = getattr(record, "endpoint", None)
        text.append(str(endpoint) if endpoint else "?", style=Style(color="bright_white"))

        status = getattr(record, "status", None)
        if status is not None:
            text.append(f" {status}", style=Style(color=color, bold=True))

        duration_ms = getattr(record, "duration_ms", None)
        if isinstance(duration_ms, (int, float)):
            text.append(f" {duration_ms:.1f}ms", style=Style(dim=True))

        if event == EVENT_FAILURE and message:
            text.append(f" {message}", style=Style(color="red"))
        return text


__all__ = [
    "EVENT_FAILURE",
    "EVENT_START",
    "EVENT_SUCCESS",
    "TikaRichHandler",
]
