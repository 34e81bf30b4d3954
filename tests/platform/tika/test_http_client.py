"""Tests for the ``requests``-backed Tika transport adapter."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

import pytest
import requests
from pytest_mock import MockerFixture

from gika.errors import DecodeError, TransportError
from gika.platform.tika.http_client import HTTPResult, TikaHTTPClient


class _BrokenRaw:
    """Raw stream that fails after the headers were received."""

    def __init__(self) -> None:
        self.closed: bool = False

    def stream(self, _chunk_size: int, decode_content: bool = True) -> Any:
        raise requests.exceptions.ChunkedEncodingError("connection dropped mid-body")

    def close(self) -> None:
        self.closed = True


def test_put_returns_body_for_200(make_session: Callable[..., Any], make_response: Callable[..., Any]) -> None:
    session = make_session(make_response(200, b"payload"))
    client = TikaHTTPClient(session, timeout=5.0)

    result = client.put("http://tika:9998/tika", b"doc", {"Accept": "text/plain"})

    assert result.ok
    assert result.body == b"payload"
    call = session.calls[0]
    assert call.url == "http://tika:9998/tika"
    assert call.data == b"doc"
    assert call.headers == {"Accept": "text/plain"}
    assert call.kwargs["stream"] is True
    assert call.kwargs["timeout"] == 5.0


def test_put_skips_body_for_error_status(make_session: Callable[..., Any], make_response: Callable[..., Any]) -> None:
    session = make_session(make_response(500, b"stack trace"))
    result = TikaHTTPClient(session).put("http://tika/tika", b"", {})

    assert not result.ok
    assert result.body is None
    assert result.status_line == "500 Internal Server Error"


def test_status_line_without_reason() -> None:
    result = HTTPResult(status=599, reason="", body=None)
    assert result.status_line == "599"


def test_put_wraps_connection_failures(make_session: Callable[..., Any]) -> None:
    session = make_session(requests.ConnectionError("connection refused"))

    with pytest.raises(TransportError) as excinfo:
        _ = TikaHTTPClient(session).put("http://tika/tika", b"", {})

    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
    assert "connection refused" in str(excinfo.value)


def test_put_wraps_mid_body_failures(make_session: Callable[..., Any], make_response: Callable[..., Any]) -> None:
    response = make_response(200)
    raw = _BrokenRaw()
    response.raw = raw
    session = make_session(response)

    with pytest.raises(DecodeError):
        _ = TikaHTTPClient(session).put("http://tika/tika", b"", {})

    assert raw.closed


def test_close_only_closes_owned_session(make_session: Callable[..., Any]) -> None:
    shared = make_session()
    TikaHTTPClient(shared).close()
    assert not shared.closed


def test_close_closes_owned_session(mocker: MockerFixture) -> None:
    client = TikaHTTPClient()
    close = mocker.patch.object(client.session, "close")

    client.close()

    close.assert_called_once_with()


class _TrackingRaw(io.BytesIO):
    """In-memory body recording whether the connection was handed back."""

    def __init__(self, body: bytes) -> None:
        super().__init__(body)
        self.released: bool = False

    def release_conn(self) -> None:
        self.released = True


def test_put_releases_connection_after_reading_body(
    make_session: Callable[..., Any], make_response: Callable[..., Any]
) -> None:
    response = make_response(200)
    raw = _TrackingRaw(b"text")
    response.raw = raw
    session = make_session(response)

    result = TikaHTTPClient(session).put("http://tika/tika", b"", {})

    assert result.body == b"text"
    assert raw.released


def test_put_closes_unread_error_body(
    make_session: Callable[..., Any], make_response: Callable[..., Any]
) -> None:
    response = make_response(404)
    raw = _TrackingRaw(b"<html>not found</html>")
    response.raw = raw
    session = make_session(response)

    result = TikaHTTPClient(session).put("http://tika/meta", b"", {})

    assert result.body is None
    assert raw.closed
    assert raw.released
