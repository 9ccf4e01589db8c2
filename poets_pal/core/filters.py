"""Profanity and syllable filtering for fetched word records."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .models import SearchOutcome, SyllableComparison, WordRecord
from .profanity import ProfanityTable

REJECT_PROFANITY = "profanity"
REJECT_SYLLABLES = "syllables"


def passes_syllable_filter(
    item_syllables: Optional[int],
    requested: Optional[int],
    comparison: SyllableComparison,
) -> bool:
    """Return whether a word with ``item_syllables`` satisfies the constraint.

    A missing or non-positive ``requested`` count disables the filter, and
    records without syllable data are always kept.
    """

    if not requested or requested <= 0:
        return True
    if item_syllables is None:
        return True

    if comparison is SyllableComparison.EXACT:
        return item_syllables == requested
    return item_syllables < requested


def rejection_reason(
    record: WordRecord,
    requested: Optional[int],
    comparison: SyllableComparison,
    profanity: ProfanityTable,
) -> Optional[str]:
    """Return why ``record`` would be dropped, or ``None`` if it is kept."""

    if profanity.is_blocked(record.word):
        return REJECT_PROFANITY
    if not passes_syllable_filter(record.num_syllables, requested, comparison):
        return REJECT_SYLLABLES
    return None


def filter_records(
    records: Iterable[WordRecord],
    requested: Optional[int],
    comparison: SyllableComparison,
    profanity: ProfanityTable,
) -> List[WordRecord]:
    return [
        record
        for record in records
        if rejection_reason(record, requested, comparison, profanity) is None
    ]


def filter_outcome(
    outcome: SearchOutcome,
    requested: Optional[int],
    comparison: SyllableComparison,
    profanity: ProfanityTable,
) -> SearchOutcome:
    """Apply the combined filter to both match lists of ``outcome``.

    The input is left untouched so the filter can be re-run with different
    syllable settings against the same fetched results.
    """

    return SearchOutcome(
        exact_matches=filter_records(outcome.exact_matches, requested, comparison, profanity),
        near_matches=filter_records(outcome.near_matches, requested, comparison, profanity),
    )


__all__ = [
    "REJECT_PROFANITY",
    "REJECT_SYLLABLES",
    "filter_outcome",
    "filter_records",
    "passes_syllable_filter",
    "rejection_reason",
]
