"""Result formatting helpers for word searches."""

from __future__ import annotations

from typing import Any, List, Optional

from poets_pal.core import SearchOutcome, SyllableComparison, WordRecord

EMPTY_TERMS_MESSAGE = "Please enter at least one search term."
NO_RESULTS_MESSAGE = "No results found. Try adjusting your filters."

RESULT_HEADERS = ["Word", "Score", "Syllables", "Match"]

MAX_SYLLABLES = 20


def syllable_label(count: Optional[int]) -> str:
    return "syllable" if count == 1 else "syllables"


def syllable_filter_enabled(rhyme_text: Optional[str]) -> bool:
    """Syllable controls are only offered once a rhyme term is entered."""

    return bool(rhyme_text and rhyme_text.strip())


def syllable_minimum(comparison: SyllableComparison) -> int:
    # "less than 1" could never match anything.
    return 1 if comparison is SyllableComparison.EXACT else 2


def _format_score(value: Optional[float]) -> Any:
    if value is None:
        return ""
    if float(value).is_integer():
        return int(value)
    return value


class ResultFormatter:
    """Render search outcomes for the status line and the results table."""

    def summary(self, outcome: SearchOutcome) -> str:
        """Describe the unfiltered result counts of a finished search."""

        exact_total = len(outcome.exact_matches)
        near_total = len(outcome.near_matches)

        if exact_total == 0 and near_total == 0:
            return NO_RESULTS_MESSAGE
        if near_total > 0:
            return f"Showing {exact_total} perfect rhymes and {near_total} near rhymes."
        return f"Showing {exact_total} perfect rhymes."

    def _row(self, record: WordRecord, match: str) -> List[Any]:
        return [
            record.word,
            _format_score(record.score),
            "" if record.num_syllables is None else record.num_syllables,
            match,
        ]

    def rows(self, outcome: SearchOutcome) -> List[List[Any]]:
        """Table rows: exact matches first, then near matches."""

        rows = [self._row(record, "perfect") for record in outcome.exact_matches]
        rows.extend(self._row(record, "near") for record in outcome.near_matches)
        return rows


__all__ = [
    "EMPTY_TERMS_MESSAGE",
    "MAX_SYLLABLES",
    "NO_RESULTS_MESSAGE",
    "RESULT_HEADERS",
    "ResultFormatter",
    "syllable_filter_enabled",
    "syllable_label",
    "syllable_minimum",
]
