"""Client for the Apache Tika content-extraction server.

Typical use::

    from gika import TikaClient

    with TikaClient.from_environment() as tika:
        text = tika.parse(document_bytes, "application/pdf")
"""

from __future__ import annotations

from gika.config.settings import TIKA_ENV_VAR, TikaSettings, load_settings
from gika.domain.file_info import FileInfo
from gika.errors import (
    ConfigError,
    DecodeError,
    ParseError,
    TikaError,
    TransportError,
    UpstreamError,
)
from gika.platform.logging import setup_logger
from gika.platform.tika.client import TikaClient

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DecodeError",
    "FileInfo",
    "ParseError",
    "TIKA_ENV_VAR",
    "TikaClient",
    "TikaError",
    "TikaSettings",
    "TransportError",
    "UpstreamError",
    "load_settings",
    "setup_logger",
]
