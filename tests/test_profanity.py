"""Tests for the encoded block-list lookup."""

import pytest

from poets_pal.core.profanity import (
    DEFAULT_BLOCKLIST_PATH,
    ProfanityTable,
    decode_entry,
    encode_word,
    load_profanity_table,
)
from poets_pal.exceptions import ConfigurationError


def test_encode_word_is_reversible_base64():
    assert encode_word("heck") == "aGVjaw=="
    assert decode_entry(encode_word("naïve")) == "naïve"


def test_lookup_uses_encoded_entries():
    table = ProfanityTable(["aGVjaw=="])

    assert table.is_blocked("heck")
    assert "heck" in table
    assert not table.is_blocked("neck")
    assert "aGVjaw==" not in table


def test_lookup_is_case_sensitive():
    table = ProfanityTable.from_words(["heck"])

    assert table.is_blocked("heck")
    assert not table.is_blocked("Heck")
    assert not table.is_blocked("hecks")


def test_empty_table_blocks_nothing():
    table = ProfanityTable()

    assert len(table) == 0
    assert not table.is_blocked("anything")


def test_from_path_skips_comments_and_blank_lines(tmp_path):
    source = tmp_path / "blocked.txt"
    source.write_text("# header\n\naGVjaw==\n  ZGFybg==  \n", encoding="utf-8")

    table = ProfanityTable.from_path(source)

    assert len(table) == 2
    assert table.is_blocked("heck")
    assert table.is_blocked("darn")


def test_missing_file_raises_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        ProfanityTable.from_path(tmp_path / "missing.txt")


def test_default_table_is_packaged_and_not_plain_text():
    table = load_profanity_table()

    assert DEFAULT_BLOCKLIST_PATH.exists()
    assert len(table) > 0
    assert table.is_blocked("damn")
    assert "damn" not in DEFAULT_BLOCKLIST_PATH.read_text(encoding="utf-8")
    assert not table.is_blocked("hat")
