"""Shared pytest fixtures faking the HTTP boundary of the Tika client."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

import pytest
import requests

from gika.platform.logging import LOGGER_NAME


@dataclass
class RecordedCall:
    url: str
    data: Any
    headers: dict[str, str]
    kwargs: dict[str, Any] = field(default_factory=dict)


class RecordingSession(requests.Session):
    """``requests.Session`` returning queued responses and recording each PUT."""

    def __init__(self, outcomes: Iterable[requests.Response | BaseException] = ()) -> None:
        super().__init__()
        self.outcomes: list[requests.Response | BaseException] = list(outcomes)
        self.calls: list[RecordedCall] = []
        self.closed: bool = False

    def put(self, url: str | bytes, data: Any = None, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        headers = dict(kwargs.pop("headers", None) or {})
        self.calls.append(RecordedCall(url=str(url), data=data, headers=headers, kwargs=kwargs))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True
        super().close()


def build_response(
    status: int = 200,
    body: bytes | str = b"",
    reason: str | None = None,
    headers: dict[str, str] | None = None,
) -> requests.Response:
    """Create a real ``requests.Response`` whose body streams from memory."""

    response = requests.Response()
    response.status_code = status
    response.reason = reason if reason is not None else HTTPStatus(status).phrase
    response.headers.update(headers or {})
    response.raw = io.BytesIO(body.encode("utf-8") if isinstance(body, str) else body)
    return response


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Factory for in-memory responses."""

    return build_response


@pytest.fixture
def make_session() -> Callable[..., RecordingSession]:
    """Factory for sessions preloaded with responses or exceptions."""

    def _factory(*outcomes: requests.Response | BaseException) -> RecordingSession:
        return RecordingSession(outcomes)

    return _factory


@pytest.fixture(autouse=True)
def reset_gika_logger() -> Iterator[None]:
    """Restore the package logger handlers after tests that reconfigure it."""

    logger = logging.getLogger(LOGGER_NAME)
    original_handlers = list(logger.handlers)
    original_level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in original_handlers:
            handler.close()
    logger.handlers[:] = original_handlers
    logger.setLevel(original_level)
