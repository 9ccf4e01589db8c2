"""Translate a :class:`SearchRequest` into Datamuse query strings."""

from __future__ import annotations

from typing import List, Optional, Tuple
from urllib.parse import quote

from .models import RelationKind, SearchRequest

MAX_RESULTS = 50

PARAM_RHYME = "rel_rhy"
PARAM_NEAR_RHYME = "rel_nry"
PARAM_SPELLED_LIKE = "sp"
PARAM_SYNONYM = "rel_syn"
PARAM_ANTONYM = "rel_ant"
PARAM_MAX = "max"

# Same unreserved set as JavaScript's encodeURIComponent.
_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode ``value`` for use as a single query parameter value."""

    return quote(value, safe=_COMPONENT_SAFE)


def build_query(want_exact: bool, request: SearchRequest) -> Optional[str]:
    """Return the query string for the exact or near search, or ``None``.

    ``None`` means there is nothing to search for: either no term was
    supplied at all, or the near search was requested without a rhyme term.
    """

    params: List[str] = []
    rhyme = request.rhyme_term.strip()
    prefix = request.prefix_term.strip()
    relation = request.relation_term.strip()

    if rhyme:
        name = PARAM_RHYME if want_exact else PARAM_NEAR_RHYME
        params.append(f"{name}={encode_component(rhyme)}")
    elif not want_exact:
        return None

    if prefix:
        params.append(f"{PARAM_SPELLED_LIKE}={encode_component(prefix)}*")

    if relation:
        name = PARAM_SYNONYM if request.relation_kind is RelationKind.SYNONYM else PARAM_ANTONYM
        params.append(f"{name}={encode_component(relation)}")

    if not params:
        return None

    params.append(f"{PARAM_MAX}={MAX_RESULTS}")
    return "&".join(params)


def build_queries(request: SearchRequest) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(exact_query, near_query)`` for ``request``."""

    return build_query(True, request), build_query(False, request)


__all__ = [
    "MAX_RESULTS",
    "build_query",
    "build_queries",
    "encode_component",
]
