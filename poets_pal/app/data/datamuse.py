"""HTTP access to the Datamuse word-relations API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from poets_pal.config import DEFAULT_API_URL
from poets_pal.core.models import WordRecord
from poets_pal.exceptions import TransportError, UpstreamError
from poets_pal.utils.observability import get_logger


class DatamuseRepository:
    """Fetches word lists for pre-built query strings.

    Each call opens its own :class:`httpx.AsyncClient`, so concurrent calls
    share no connection state.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("?")
        self.timeout = timeout
        self._transport = transport
        self._logger = get_logger(__name__).bind(
            component="datamuse_repository",
            base_url=self.base_url,
        )

    def build_url(self, query: str) -> str:
        return f"{self.base_url}?{query}"

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def fetch_words(self, query: str) -> List[WordRecord]:
        """GET ``query`` and parse the body into word records.

        Raises :class:`UpstreamError` for a non-success status and
        :class:`TransportError` when the request or body parsing fails.
        """

        url = self.build_url(query)
        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            self._logger.warning(
                "Datamuse request failed",
                context={"query": query, "error": str(exc)},
            )
            raise TransportError(f"Unable to reach Datamuse: {exc}", query=query) from exc

        if not response.is_success:
            body = response.text
            self._logger.warning(
                "Datamuse returned an error status",
                context={"query": query, "status": response.status_code},
            )
            raise UpstreamError(response.status_code, body.strip())

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("Datamuse response was not valid JSON", query=query) from exc

        if not isinstance(payload, list):
            raise TransportError(
                f"Datamuse response must be a JSON array, got {type(payload).__name__}",
                query=query,
            )

        try:
            records = [WordRecord.from_payload(item) for item in payload]
        except ValueError as exc:
            raise TransportError(f"Malformed Datamuse word entry: {exc}", query=query) from exc

        self._logger.debug(
            "Datamuse response parsed",
            context={"query": query, "records": len(records)},
        )
        return records


__all__ = ["DatamuseRepository"]
