"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import gradio as gr

from poets_pal.core import RelationKind, SearchOutcome, SearchRequest, SyllableComparison
from poets_pal.exceptions import SearchError

from ..services.result_formatter import (
    EMPTY_TERMS_MESSAGE,
    MAX_SYLLABLES,
    RESULT_HEADERS,
    syllable_filter_enabled,
    syllable_label,
    syllable_minimum,
)
from ..services.search_service import SearchService

SearchResponse = Tuple[str, str, List[List[Any]], Optional[SearchOutcome]]

_RELATION_CHOICES = [("Synonyms", RelationKind.SYNONYM.value), ("Antonyms", RelationKind.ANTONYM.value)]
_COMPARISON_CHOICES = [
    ("exactly", SyllableComparison.EXACT.value),
    ("less than", SyllableComparison.LESS_THAN.value),
]


async def run_search(
    search_service: SearchService,
    rhyme: str,
    starts: str,
    relation_kind: str,
    relation_term: str,
    comparison: str,
    syllables: Any,
) -> SearchResponse:
    """Execute one search and return ``(error, info, rows, raw_outcome)``.

    ``raw_outcome`` is the unfiltered result, kept so later syllable changes
    can be re-applied without another request.
    """

    request = SearchRequest.from_form(
        rhyme, starts, relation_kind, relation_term, comparison, syllables
    )
    if not request.has_terms:
        return EMPTY_TERMS_MESSAGE, "", [], None

    try:
        outcome = await search_service.search(request)
    except SearchError as exc:
        return f"Search failed: {exc}", "", [], None

    filtered = search_service.filter_for(outcome, request)
    return "", search_service.summarize(outcome), search_service.rows(filtered), outcome


def refilter_results(
    search_service: SearchService,
    outcome: Optional[SearchOutcome],
    comparison: str,
    syllables: Any,
) -> List[List[Any]]:
    """Re-run the filters on a stored outcome using the current syllable inputs."""

    if outcome is None:
        return []
    request = SearchRequest.from_form(syllable_comparison=comparison, syllables=syllables)
    filtered = search_service.filter_for(outcome, request)
    return search_service.rows(filtered)


def syllable_control_state(rhyme: str, comparison: str, syllables: Any) -> Dict[str, Any]:
    """Interactive flag, bounds and unit label for the syllable count input."""

    request = SearchRequest.from_form(syllable_comparison=comparison, syllables=syllables)
    return {
        "interactive": syllable_filter_enabled(rhyme),
        "minimum": syllable_minimum(request.syllable_comparison),
        "maximum": MAX_SYLLABLES,
        "label": syllable_label(request.syllable_count),
    }


def cleared_form() -> Tuple[Any, ...]:
    """Default values for every form field plus empty results."""

    return (
        "",
        "",
        RelationKind.SYNONYM.value,
        "",
        SyllableComparison.EXACT.value,
        None,
        "",
        "",
        [],
        None,
    )


def create_interface(search_service: SearchService) -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    async def search_interface(rhyme, starts, relation_kind, relation_term, comparison, syllables):
        return await run_search(
            search_service, rhyme, starts, relation_kind, relation_term, comparison, syllables
        )

    def refilter_interface(outcome, comparison, syllables):
        return refilter_results(search_service, outcome, comparison, syllables)

    def syllable_interface(rhyme, comparison, syllables):
        return gr.update(**syllable_control_state(rhyme, comparison, syllables))

    with gr.Blocks(title="Poet's Pal") as interface:
        gr.Markdown("<h1 style='text-align: center'>Poet's Pal&trade;</h1>")

        with gr.Column():
            rhyme_input = gr.Textbox(label="Rhymes with", lines=1)
            starts_input = gr.Textbox(label="Starts with", lines=1)
            with gr.Row():
                relation_choice = gr.Dropdown(
                    choices=_RELATION_CHOICES,
                    value=RelationKind.SYNONYM.value,
                    label="Relation",
                    scale=1,
                )
                relation_input = gr.Textbox(label="of", lines=1, scale=3)
            with gr.Row():
                comparison_choice = gr.Dropdown(
                    choices=_COMPARISON_CHOICES,
                    value=SyllableComparison.EXACT.value,
                    label="and",
                    interactive=False,
                    scale=1,
                )
                syllable_input = gr.Number(
                    label="syllables",
                    value=None,
                    precision=0,
                    minimum=1,
                    maximum=MAX_SYLLABLES,
                    interactive=False,
                    scale=3,
                )

            with gr.Row():
                submit_btn = gr.Button("Submit", variant="primary")
                clear_btn = gr.Button("Clear")

        error_md = gr.Markdown()
        info_md = gr.Markdown()
        results_table = gr.Dataframe(headers=RESULT_HEADERS, value=[], interactive=False, wrap=True)
        raw_outcome = gr.State(None)

        search_inputs = [
            rhyme_input,
            starts_input,
            relation_choice,
            relation_input,
            comparison_choice,
            syllable_input,
        ]
        search_outputs = [error_md, info_md, results_table, raw_outcome]

        submit_btn.click(fn=search_interface, inputs=search_inputs, outputs=search_outputs)
        for textbox in (rhyme_input, starts_input, relation_input):
            textbox.submit(fn=search_interface, inputs=search_inputs, outputs=search_outputs)

        clear_btn.click(
            fn=cleared_form,
            inputs=[],
            outputs=search_inputs + [error_md, info_md, results_table, raw_outcome],
        )

        syllable_state_inputs = [rhyme_input, comparison_choice, syllable_input]
        rhyme_input.change(
            fn=lambda rhyme: gr.update(interactive=syllable_filter_enabled(rhyme)),
            inputs=[rhyme_input],
            outputs=[comparison_choice],
        )
        for control in (rhyme_input, comparison_choice):
            control.change(fn=syllable_interface, inputs=syllable_state_inputs, outputs=[syllable_input])
        syllable_input.input(fn=syllable_interface, inputs=syllable_state_inputs, outputs=[syllable_input])

        for control in (comparison_choice, syllable_input):
            control.change(
                fn=refilter_interface,
                inputs=[raw_outcome, comparison_choice, syllable_input],
                outputs=[results_table],
            )

    return interface


__all__ = [
    "create_interface",
    "cleared_form",
    "refilter_results",
    "run_search",
    "syllable_control_state",
]
