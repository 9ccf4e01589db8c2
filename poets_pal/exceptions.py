"""Exception types raised by the Poet's Pal search pipeline."""

from __future__ import annotations

from typing import Optional


class PoetsPalError(Exception):
    """Base class for every error raised by the project."""


class ConfigurationError(PoetsPalError):
    """Raised when a setting or resource cannot be interpreted."""


class SearchError(PoetsPalError):
    """Base class for failures while talking to the word-relations API."""


class UpstreamError(SearchError):
    """The word-relations API answered with a non-success status."""

    def __init__(self, status: int, body: str = "") -> None:
        self.status = int(status)
        self.body = body or ""
        message = f"Datamuse error {self.status}"
        if self.body:
            message = f"{message}: {self.body}"
        super().__init__(message)


class TransportError(SearchError):
    """No usable response was obtained (network failure or malformed body)."""

    def __init__(self, message: str, *, query: Optional[str] = None) -> None:
        self.query = query
        super().__init__(message)


__all__ = [
    "PoetsPalError",
    "ConfigurationError",
    "SearchError",
    "UpstreamError",
    "TransportError",
]
