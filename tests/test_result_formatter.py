from poets_pal.app.services.result_formatter import (
    NO_RESULTS_MESSAGE,
    ResultFormatter,
    syllable_filter_enabled,
    syllable_label,
    syllable_minimum,
)
from poets_pal.core import SearchOutcome, SyllableComparison, WordRecord


def test_summary_messages():
    formatter = ResultFormatter()
    exact_only = SearchOutcome(exact_matches=[WordRecord("hat"), WordRecord("bat")])
    both = SearchOutcome(exact_matches=[WordRecord("hat")], near_matches=[WordRecord("cap")] * 3)

    assert formatter.summary(SearchOutcome()) == NO_RESULTS_MESSAGE
    assert formatter.summary(exact_only) == "Showing 2 perfect rhymes."
    assert formatter.summary(both) == "Showing 1 perfect rhymes and 3 near rhymes."


def test_rows_list_exact_before_near_and_blank_missing_values():
    outcome = SearchOutcome(
        exact_matches=[WordRecord("hat", score=1532.0, num_syllables=1), WordRecord("bat")],
        near_matches=[WordRecord("cap", score=0.5, num_syllables=1)],
    )

    assert ResultFormatter().rows(outcome) == [
        ["hat", 1532, 1, "perfect"],
        ["bat", "", "", "perfect"],
        ["cap", 0.5, 1, "near"],
    ]


def test_syllable_label_pluralises():
    assert syllable_label(1) == "syllable"
    assert syllable_label(0) == "syllables"
    assert syllable_label(3) == "syllables"


def test_syllable_controls_follow_rhyme_term_and_comparison():
    assert not syllable_filter_enabled("")
    assert not syllable_filter_enabled("   ")
    assert syllable_filter_enabled("cat")
    assert syllable_minimum(SyllableComparison.EXACT) == 1
    assert syllable_minimum(SyllableComparison.LESS_THAN) == 2
