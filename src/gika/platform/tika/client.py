"""Where: src/gika/platform/tika/client.py
What: Facade exposing the Apache Tika server endpoints used by this package.
Why: Callers want cleaned text, metadata and MIME types, not raw responses.

Responsibilities are delegated to smaller helpers:
- ``address`` normalizes the configured endpoint into a base URL
- ``http_client`` performs the PUT and maps transport failures
- ``gika.domain`` post-processes response bodies
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from types import TracebackType
from typing import Final
from urllib.parse import quote_plus

import requests

from gika.config.settings import TIKA_ENV_VAR, TikaSettings, resolve_address
from gika.domain.file_info import FileInfo
from gika.domain.metadata_csv import parse_metadata_csv
from gika.domain.text_cleanup import clean_parsed_text, clean_recursive_text
from gika.errors import ConfigError, DecodeError, ParseError, TransportError, UpstreamError
from gika.platform.logging import logger
from gika.platform.logging.handlers import EVENT_FAILURE, EVENT_START, EVENT_SUCCESS

from .address import normalize_base_url
from .http_client import HTTPClient, RequestBody, TikaHTTPClient

PARSE_PATH: Final[str] = "/tika"
METADATA_PATH: Final[str] = "/meta"
DETECT_PATH: Final[str] = "/detect/stream"
RECURSIVE_PARSE_PATH: Final[str] = "/rmeta/text"

_TEXT_ENCODING: Final[str] = "utf-8"


def content_disposition(filename: str) -> str:
    """Build the ``Content-Disposition`` header carrying ``filename``.

    The name is query-escaped, so spaces become ``+``.
    """

    return f"attachment; filename={quote_plus(filename)}"


def _decode(body: bytes) -> str:
    # Tika answers in UTF-8; undecodable bytes are replaced, not passed through.
    return body.decode(_TEXT_ENCODING, errors="replace")


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


class TikaClient:
    """Client for a single Apache Tika server.

    The base URL is fixed at construction. No state is written afterwards, so
    an instance can be shared between threads.

    Example:
        >>> with TikaClient("tcp://localhost:9998") as tika:  # doctest: +SKIP
        ...     text = tika.parse(open("report.pdf", "rb"), "application/pdf")
    """

    def __init__(
        self,
        address: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        """Create a client for ``address``.

        Args:
            address: Server URL; the scheme is forced to ``http`` and any path dropped.
            session: Optional shared session. It is not closed by ``close()``.
            timeout: Optional per-request timeout in seconds.
            http_client: Transport to use instead of a ``requests`` session; when
                given, ``session`` and ``timeout`` are ignored and ``close()``
                leaves it open.

        Raises:
            ParseError: If ``address`` is not a valid URL.
        """

        self.url: str = normalize_base_url(address)
        self._owns_http: bool = http_client is None
        self._http: HTTPClient = (
            http_client if http_client is not None else TikaHTTPClient(session, timeout=timeout)
        )

    @classmethod
    def from_environment(
        cls,
        env: Mapping[str, str] | None = None,
        env_var: str = TIKA_ENV_VAR,
        session: requests.Session | None = None,
    ) -> "TikaClient":
        """Create a client from the endpoint named by ``env_var``.

        Raises:
            ConfigError: If the variable is unset, blank, or not a valid URL.
        """

        address = resolve_address(explicit=None, env=env, env_var=env_var)
        try:
            return cls(address, session=session)
        except ParseError as exc:
            raise ConfigError(f"'{env_var}' does not hold a valid Tika endpoint: {exc}") from exc

    @classmethod
    def from_settings(
        cls,
        settings: TikaSettings,
        session: requests.Session | None = None,
    ) -> "TikaClient":
        """Create a client from resolved ``TikaSettings``."""

        return cls(settings.address, session=session, timeout=settings.timeout)

    def __enter__(self) -> "TikaClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying transport when the client created it."""

        if self._owns_http:
            self._http.close()

    def parse(self, content: RequestBody, content_type: str | None = None) -> str:
        """Request the plain text of a document.

        The body is decoded as UTF-8; bytes that are not valid UTF-8 become
        U+FFFD. Diacritics are stripped and runs of blank lines collapse to a
        single newline.

        Args:
            content: Document bytes or a binary file object.
            content_type: Optional MIME type sent as ``Content-Type``.

        Returns:
            str: The cleaned text.
        """

        headers = {"Accept": "text/plain"}
        if content_type:
            headers["Content-Type"] = content_type

        body = self._put(PARSE_PATH, content, headers)
        return clean_parsed_text(_decode(body))

    def get_metadata(self, content: RequestBody, filename: str) -> dict[str, str]:
        """Request document metadata as a ``key -> value`` mapping."""

        headers = {
            "Content-Disposition": content_disposition(filename),
            "Accept": "text/csv",
        }
        body = self._put(METADATA_PATH, content, headers)
        return parse_metadata_csv(_decode(body))

    def get_file_info(self, content: RequestBody, filename: str) -> FileInfo:
        """Request metadata and summarize it as ``FileInfo``."""

        return FileInfo.from_metadata(self.get_metadata(content, filename))

    def detect_type(self, content: RequestBody, filename: str) -> str:
        """Request the MIME type of a document.

        The response body is returned as sent, including any trailing
        whitespace. It is decoded as UTF-8 with invalid bytes replaced by
        U+FFFD.
        """

        headers = {"Content-Disposition": content_disposition(filename)}
        body = self._put(DETECT_PATH, content, headers)
        return _decode(body)

    def recursive_parse(self, content: RequestBody, content_type: str | None = None) -> str:
        """Request the text of a container document and all embedded documents.

        Runs of blank lines collapse to one empty line and the result is
        stripped of surrounding whitespace.
        """

        headers: dict[str, str] = {}
        if content_type:
            headers["Content-Type"] = content_type

        body = self._put(RECURSIVE_PARSE_PATH, content, headers)
        return clean_recursive_text(_decode(body))

    def _put(self, endpoint: str, content: RequestBody, headers: dict[str, str]) -> bytes:
        url = f"{self.url}{endpoint}"
        logger.debug(
            "PUT %s",
            url,
            extra={"tika_event": EVENT_START, "endpoint": endpoint},
        )

        started = time.perf_counter()
        try:
            result = self._http.put(url, content, headers)
        except (TransportError, DecodeError) as exc:
            logger.warning(
                "%s",
                exc,
                extra={
                    "tika_event": EVENT_FAILURE,
                    "endpoint": endpoint,
                    "duration_ms": _elapsed_ms(started),
                },
            )
            raise

        if not result.ok:
            logger.warning(
                "Tika returned %s for %s",
                result.status_line,
                url,
                extra={
                    "tika_event": EVENT_FAILURE,
                    "endpoint": endpoint,
                    "status": result.status_line,
                    "duration_ms": _elapsed_ms(started),
                },
            )
            raise UpstreamError(result.status, result.reason)

        body = result.body or b""
        logger.debug(
            "PUT %s -> %s (%d bytes)",
            url,
            result.status,
            len(body),
            extra={
                "tika_event": EVENT_SUCCESS,
                "endpoint": endpoint,
                "status": result.status,
                "duration_ms": _elapsed_ms(started),
            },
        )
        return body


__all__ = [
    "DETECT_PATH",
    "METADATA_PATH",
    "PARSE_PATH",
    "RECURSIVE_PARSE_PATH",
    "TikaClient",
    "content_disposition",
]
