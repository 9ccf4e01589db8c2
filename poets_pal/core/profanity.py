"""Block-list lookup for words that should never be shown.

Entries are stored Base64 encoded so the list itself is not plain text.
"""

from __future__ import annotations

import base64
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

from ..exceptions import ConfigurationError

DEFAULT_BLOCKLIST_PATH = Path(__file__).resolve().parent / "data" / "blocked_words.txt"


def encode_word(word: str) -> str:
    """Encode ``word`` the same way block-list entries are encoded."""

    return base64.b64encode(word.encode("utf-8")).decode("ascii")


def decode_entry(entry: str) -> str:
    return base64.b64decode(entry.encode("ascii")).decode("utf-8")


class ProfanityTable:
    """Immutable set of encoded words with a membership check."""

    def __init__(self, encoded_entries: Iterable[str] = ()) -> None:
        self._entries: FrozenSet[str] = frozenset(
            entry.strip() for entry in encoded_entries if entry and entry.strip()
        )

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "ProfanityTable":
        """Build a table from plain words, encoding each one."""

        return cls(encode_word(word) for word in words if word)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ProfanityTable":
        """Load encoded entries from ``path``, one per line.

        Blank lines and lines starting with ``#`` are ignored.
        """

        source = Path(path)
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Unable to read block list {source}: {exc}") from exc

        entries = []
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            entries.append(stripped)
        return cls(entries)

    def is_blocked(self, word: str) -> bool:
        return encode_word(word) in self._entries

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_blocked(word)

    def __len__(self) -> int:
        return len(self._entries)


def load_profanity_table(path: Optional[Union[str, Path]] = None) -> ProfanityTable:
    """Load the block list at ``path``, or the packaged default list."""

    return ProfanityTable.from_path(path or DEFAULT_BLOCKLIST_PATH)


__all__ = [
    "DEFAULT_BLOCKLIST_PATH",
    "ProfanityTable",
    "decode_entry",
    "encode_word",
    "load_profanity_table",
]
