"""Where: src/gika/platform/tika/http_client.py
What: ``requests`` adapter issuing a single buffered PUT to the Tika server.
Why: Keep transport concerns (streaming, closing, exception mapping) away
     from response post-processing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import IO, Protocol, TypeAlias

import requests

from gika.errors import DecodeError, TransportError

RequestBody: TypeAlias = bytes | bytearray | IO[bytes] | Iterable[bytes]

_HTTP_OK: int = 200


@dataclass(frozen=True, slots=True)
class HTTPResult:
    """Represent an HTTP response as seen by the Tika client.

    ``body`` is only read for ``200`` responses and is ``None`` otherwise.
    """

    status: int
    reason: str
    body: bytes | None

    @property
    def ok(self) -> bool:
        return self.status == _HTTP_OK

    @property
    def status_line(self) -> str:
        """Status code and reason phrase, e.g. ``404 Not Found``."""

        return f"{self.status} {self.reason}".rstrip()


class HTTPClient(Protocol):
    """Protocol for transports able to PUT a body and return the response."""

    def put(self, url: str, body: RequestBody, headers: Mapping[str, str]) -> HTTPResult:
        ...

    def close(self) -> None:
        ...


class TikaHTTPClient:
    """Perform PUT requests on a shared ``requests.Session``.

    The session carries no per-call state, so one instance may be used from
    several threads. No retries are attempted.
    """

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None) -> None:
        self._owns_session: bool = session is None
        self.session: requests.Session = session if session is not None else requests.Session()
        self.timeout: float | None = timeout

    def put(self, url: str, body: RequestBody, headers: Mapping[str, str]) -> HTTPResult:
        """Send ``body`` to ``url`` and read the full response on success.

        Raises:
            TransportError: When no response was received.
            DecodeError: When the response body could not be read completely.
        """

        try:
            response = self.session.put(
                url,
                data=body,
                headers=dict(headers),
                stream=True,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"PUT {url} failed: {exc}") from exc

        with response:
            status = int(response.status_code)
            reason = str(response.reason or "")
            if status != _HTTP_OK:
                return HTTPResult(status=status, reason=reason, body=None)

            try:
                content = response.content
            except requests.RequestException as exc:
                raise DecodeError(f"Reading response from {url} failed: {exc}") from exc

        return HTTPResult(status=status, reason=reason, body=content)

    def close(self) -> None:
        """Close the session if this adapter created it."""

        if self._owns_session:
            self.session.close()


__all__ = [
    "HTTPClient",
    "HTTPResult",
    "RequestBody",
    "TikaHTTPClient",
]
