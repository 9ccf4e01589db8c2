"""Query construction and result filtering for Poet's Pal."""

from .filters import (
    filter_outcome,
    filter_records,
    passes_syllable_filter,
    rejection_reason,
)
from .models import (
    RelationKind,
    SearchOutcome,
    SearchRequest,
    SyllableComparison,
    WordRecord,
    parse_syllable_count,
)
from .profanity import ProfanityTable, encode_word, load_profanity_table
from .query_builder import MAX_RESULTS, build_queries, build_query, encode_component

__all__ = [
    "MAX_RESULTS",
    "ProfanityTable",
    "RelationKind",
    "SearchOutcome",
    "SearchRequest",
    "SyllableComparison",
    "WordRecord",
    "build_queries",
    "build_query",
    "encode_component",
    "encode_word",
    "filter_outcome",
    "filter_records",
    "load_profanity_table",
    "parse_syllable_count",
    "passes_syllable_filter",
    "rejection_reason",
]
