"""Tests for the Gradio event handlers, exercised without a browser."""

import asyncio

import httpx

from conftest import RecordingDatamuse, json_response
from poets_pal.app.services.result_formatter import EMPTY_TERMS_MESSAGE, NO_RESULTS_MESSAGE
from poets_pal.app.ui.gradio import (
    cleared_form,
    create_interface,
    refilter_results,
    run_search,
    syllable_control_state,
)


def _upstream() -> RecordingDatamuse:
    return RecordingDatamuse(
        {
            "rel_rhy=": lambda: json_response(
                [
                    {"word": "hat", "score": 3000, "numSyllables": 1},
                    {"word": "acrobat", "score": 2000, "numSyllables": 3},
                    {"word": "darn", "score": 1000, "numSyllables": 1},
                ]
            ),
            "rel_nry=": lambda: json_response([{"word": "cap", "numSyllables": 1}]),
        }
    )


def test_empty_form_is_rejected_without_network(make_service):
    upstream = _upstream()
    service = make_service(upstream)

    error, info, rows, outcome = asyncio.run(
        run_search(service, " ", "", "synonym", "", "exact", None)
    )

    assert error == EMPTY_TERMS_MESSAGE
    assert (info, rows, outcome) == ("", [], None)
    assert upstream.queries == []


def test_successful_search_reports_raw_counts_and_filtered_rows(make_service):
    service = make_service(_upstream())

    error, info, rows, outcome = asyncio.run(
        run_search(service, "cat", "", "synonym", "", "exact", 1)
    )

    assert error == ""
    assert info == "Showing 3 perfect rhymes and 1 near rhymes."
    assert rows == [["hat", 3000, 1, "perfect"], ["cap", "", 1, "near"]]
    assert outcome.total == 4


def test_zero_results_is_not_an_error(make_service):
    service = make_service(RecordingDatamuse())

    error, info, rows, outcome = asyncio.run(
        run_search(service, "", "zzq", "synonym", "", "exact", "")
    )

    assert error == ""
    assert info == NO_RESULTS_MESSAGE
    assert rows == []
    assert outcome.is_empty


def test_failed_search_surfaces_message(make_service):
    upstream = RecordingDatamuse(default=lambda: httpx.Response(500, text="down"))
    service = make_service(upstream)

    error, info, rows, outcome = asyncio.run(
        run_search(service, "cat", "", "synonym", "", "exact", "")
    )

    assert error == "Search failed: Datamuse error 500: down"
    assert (info, rows, outcome) == ("", [], None)


def test_refilter_uses_stored_outcome_without_requery(make_service):
    upstream = _upstream()
    service = make_service(upstream)
    _, _, _, outcome = asyncio.run(run_search(service, "cat", "", "synonym", "", "exact", ""))

    rows = refilter_results(service, outcome, "less", "2")

    assert rows == [["hat", 3000, 1, "perfect"], ["cap", "", 1, "near"]]
    assert refilter_results(service, outcome, "exact", 3) == [["acrobat", 2000, 3, "perfect"]]
    assert refilter_results(service, None, "exact", 3) == []
    assert len(upstream.queries) == 2


def test_syllable_control_state():
    disabled = syllable_control_state("", "exact", 1)
    enabled = syllable_control_state("cat", "less", 4)

    assert disabled == {
        "interactive": False,
        "minimum": 1,
        "maximum": 20,
        "label": "syllable",
    }
    assert enabled["interactive"] is True
    assert enabled["minimum"] == 2
    assert enabled["label"] == "syllables"


def test_cleared_form_resets_everything():
    assert cleared_form() == ("", "", "synonym", "", "exact", None, "", "", [], None)


def test_every_text_box_submits_the_search(make_service):
    interface = create_interface(make_service(_upstream()))

    functions = interface.fns.values() if isinstance(interface.fns, dict) else interface.fns
    submitting = {
        interface.blocks[block_id].label
        for function in functions
        for block_id, event_name in function.targets
        if event_name == "submit"
    }

    assert submitting == {"Rhymes with", "Starts with", "of"}
