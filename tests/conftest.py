import json
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from poets_pal.app.data.datamuse import DatamuseRepository
from poets_pal.app.services.search_service import SearchService
from poets_pal.core import ProfanityTable

TEST_API_URL = "https://words.test/words"


class RecordingDatamuse:
    """Fake Datamuse endpoint; responses are factories keyed by query prefix."""

    def __init__(
        self,
        responses: Optional[Dict[str, Callable[[], httpx.Response]]] = None,
        default: Optional[Callable[[], httpx.Response]] = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.default = default or (lambda: httpx.Response(200, json=[]))
        self.queries: List[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        query = request.url.query.decode("ascii")
        self.queries.append(query)
        for prefix, response in self.responses.items():
            if query.startswith(prefix):
                return response()
        return self.default()

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def json_response(payload, status: int = 200) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(payload).encode("utf-8"))


@pytest.fixture
def profanity_table() -> ProfanityTable:
    """Small block list standing in for the packaged one."""

    return ProfanityTable.from_words(["darn", "heck"])


@pytest.fixture
def make_service(profanity_table):
    """Build a search service whose HTTP calls go to ``upstream``."""

    def _factory(upstream: RecordingDatamuse) -> SearchService:
        repository = DatamuseRepository(TEST_API_URL, transport=upstream.transport())
        return SearchService(repository=repository, profanity_table=profanity_table)

    return _factory
