"""Where: src/gika/config/settings.py
What: Resolve the Tika endpoint from explicit values, the environment or TOML.
Why: The client itself only accepts an explicit address; everything that
     touches ``os.environ`` or the filesystem lives here.
Assumptions: - The environment variable follows the Docker link convention
               (``tcp://host:port``); the scheme is rewritten later.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from gika.errors import ConfigError

TIKA_ENV_VAR: Final[str] = "TIKA_PORT"
_TOML_TABLE: Final[str] = "tika"


@dataclass(frozen=True, slots=True)
class TikaSettings:
    """Resolved connection settings for a Tika server."""

    address: str
    # Seconds; ``None`` leaves requests without a timeout.
    timeout: float | None = None


def resolve_address(
    *,
    explicit: str | None,
    env: Mapping[str, str] | None,
    env_var: str = TIKA_ENV_VAR,
) -> str:
    """Return the endpoint address honoring explicit and environment values.

    Raises:
        ConfigError: When neither source provides a non-blank value.
    """

    if explicit is not None and explicit.strip():
        return explicit.strip()

    mapping = env if env is not None else os.environ
    candidate = (mapping.get(env_var) or "").strip()
    if candidate:
        return candidate

    raise ConfigError(
        f"'{env_var}' environment variable not set; expected to find the Tika endpoint"
    )


def _coerce_timeout(raw: Any, source: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ConfigError(f"Invalid timeout in {source}: {raw!r}")
    if raw <= 0:
        raise ConfigError(f"Timeout in {source} must be positive, got {raw!r}")
    return float(raw)


def _read_toml_table(config_file: Path) -> dict[str, Any]:
    resolved = Path(config_file).expanduser().resolve()
    try:
        with open(resolved, "rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {resolved}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {resolved}: {exc}") from exc

    table = document.get(_TOML_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{_TOML_TABLE}] in {resolved} must be a table")
    return table


def load_settings(
    *,
    address: str | None = None,
    config_file: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    env_var: str = TIKA_ENV_VAR,
) -> TikaSettings:
    """Build ``TikaSettings`` from the available sources.

    Precedence for the address is ``address`` argument, then ``env_var`` in
    ``env`` (defaults to ``os.environ``), then ``address`` in the ``[tika]``
    table of ``config_file``. The timeout is only read from the file.

    Args:
        address: Explicit endpoint, e.g. ``http://localhost:9998``.
        config_file: Optional TOML file with a ``[tika]`` table.
        env: Environment mapping; ``None`` means the process environment.
        env_var: Name of the environment variable holding the endpoint.

    Returns:
        TikaSettings: Settings ready for ``TikaClient.from_settings``.

    Raises:
        ConfigError: When no source yields an address or the file is invalid.
    """

    table: dict[str, Any] = {}
    if config_file is not None:
        table = _read_toml_table(Path(config_file))

    file_address = table.get("address")
    if file_address is not None and not isinstance(file_address, str):
        raise ConfigError(f"Invalid address in {config_file}: {file_address!r}")

    try:
        resolved = resolve_address(explicit=address, env=env, env_var=env_var)
    except ConfigError:
        if not file_address or not file_address.strip():
            raise
        resolved = file_address.strip()

    timeout = _coerce_timeout(table.get("timeout"), str(config_file))
    return TikaSettings(address=resolved, timeout=timeout)


__all__ = [
    "TIKA_ENV_VAR",
    "TikaSettings",
    "load_settings",
    "resolve_address",
]
