"""Environment driven settings for the Poet's Pal application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigurationError

DEFAULT_API_URL = "https://api.datamuse.com/words"
DEFAULT_SERVER_NAME = "0.0.0.0"
DEFAULT_SERVER_PORT = 7860

_TRUTHY = {"1", "true", "yes", "on"}


def _read_float(env: Mapping[str, str], key: str) -> Optional[float]:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number of seconds, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {raw!r}")
    return value


def _read_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    http_timeout: Optional[float] = None
    blocklist_path: Optional[Path] = None
    log_level: Optional[str] = None
    share: bool = False
    server_name: str = DEFAULT_SERVER_NAME
    server_port: int = DEFAULT_SERVER_PORT

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from ``env`` (defaults to :data:`os.environ`).

        ``POETS_PAL_HTTP_TIMEOUT`` left unset keeps the HTTP client's own
        default timeout.
        """

        env = os.environ if env is None else env
        blocklist = env.get("POETS_PAL_BLOCKLIST", "").strip()
        return cls(
            api_url=env.get("POETS_PAL_API_URL", "").strip() or DEFAULT_API_URL,
            http_timeout=_read_float(env, "POETS_PAL_HTTP_TIMEOUT"),
            blocklist_path=Path(blocklist) if blocklist else None,
            log_level=env.get("POETS_PAL_LOG_LEVEL") or None,
            share=env.get("POETS_PAL_SHARE", "").strip().lower() in _TRUTHY,
            server_name=env.get("POETS_PAL_SERVER_NAME", "").strip() or DEFAULT_SERVER_NAME,
            server_port=_read_int(env, "POETS_PAL_SERVER_PORT", DEFAULT_SERVER_PORT),
        )


__all__ = ["DEFAULT_API_URL", "Settings"]
