"""Shared dataclasses describing search requests and upstream word records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class RelationKind(str, Enum):
    """Which semantic relation the relation term is matched against."""

    SYNONYM = "synonym"
    ANTONYM = "antonym"


class SyllableComparison(str, Enum):
    """How a word's syllable count is compared with the requested count."""

    EXACT = "exact"
    LESS_THAN = "less"


_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def parse_syllable_count(value: Any) -> int:
    """Parse user supplied syllable text; anything unusable means ``0``.

    Text is read up to the first non-digit, so ``"3 syllables"`` yields ``3``.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value:  # NaN guard
            return 0
        return int(value)
    match = _LEADING_INT_PATTERN.match(str(value))
    if not match:
        return 0
    return int(match.group(1))


def _coerce_enum(enum_cls, value: Any, default):
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    normalized = str(value).strip().lower()
    for member in enum_cls:
        if normalized in (member.value, member.name.lower()):
            return member
    raise ValueError(f"Unknown {enum_cls.__name__} value: {value!r}")


@dataclass(frozen=True)
class SearchRequest:
    """Snapshot of the search form taken at submit time."""

    rhyme_term: str = ""
    prefix_term: str = ""
    relation_kind: RelationKind = RelationKind.SYNONYM
    relation_term: str = ""
    syllable_comparison: SyllableComparison = SyllableComparison.EXACT
    syllable_count: int = 0

    @classmethod
    def from_form(
        cls,
        rhyme: Optional[str] = "",
        starts: Optional[str] = "",
        relation_kind: Any = RelationKind.SYNONYM,
        relation_term: Optional[str] = "",
        syllable_comparison: Any = SyllableComparison.EXACT,
        syllables: Any = "",
    ) -> "SearchRequest":
        return cls(
            rhyme_term=rhyme or "",
            prefix_term=starts or "",
            relation_kind=_coerce_enum(RelationKind, relation_kind, RelationKind.SYNONYM),
            relation_term=relation_term or "",
            syllable_comparison=_coerce_enum(
                SyllableComparison, syllable_comparison, SyllableComparison.EXACT
            ),
            syllable_count=parse_syllable_count(syllables),
        )

    @property
    def has_terms(self) -> bool:
        return any(
            term.strip()
            for term in (self.rhyme_term, self.prefix_term, self.relation_term)
        )


_KNOWN_FIELDS = ("word", "score", "numSyllables")


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@dataclass(frozen=True)
class WordRecord:
    """A single word returned by the word-relations API.

    Fields other than ``word``, ``score`` and ``numSyllables`` are kept in
    ``extra`` untouched so callers can still reach them.
    """

    word: str
    score: Optional[float] = None
    num_syllables: Optional[int] = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", dict(self.extra))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WordRecord":
        if not isinstance(payload, Mapping):
            raise ValueError(f"Word entry must be an object, got {type(payload).__name__}")
        word = payload.get("word")
        if not isinstance(word, str):
            raise ValueError("Word entry is missing a string 'word' field")
        extra = {key: value for key, value in payload.items() if key not in _KNOWN_FIELDS}
        return cls(
            word=word,
            score=_optional_float(payload.get("score")),
            num_syllables=_optional_int(payload.get("numSyllables")),
            extra=extra,
        )

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data["word"] = self.word
        if self.score is not None:
            data["score"] = self.score
        if self.num_syllables is not None:
            data["numSyllables"] = self.num_syllables
        return data


@dataclass(frozen=True)
class SearchOutcome:
    """Exact and near matches produced by one search, in upstream order."""

    exact_matches: Tuple[WordRecord, ...] = ()
    near_matches: Tuple[WordRecord, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "exact_matches", tuple(self.exact_matches))
        object.__setattr__(self, "near_matches", tuple(self.near_matches))

    @property
    def total(self) -> int:
        return len(self.exact_matches) + len(self.near_matches)

    @property
    def is_empty(self) -> bool:
        return self.total == 0


__all__ = [
    "RelationKind",
    "SyllableComparison",
    "SearchRequest",
    "WordRecord",
    "SearchOutcome",
    "parse_syllable_count",
]
