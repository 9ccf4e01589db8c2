"""Search service orchestrating word lookups and result filtering."""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, List, Optional

from poets_pal.core import (
    ProfanityTable,
    SearchOutcome,
    SearchRequest,
    SyllableComparison,
    WordRecord,
    build_queries,
    filter_outcome,
    rejection_reason,
)

from ..data.datamuse import DatamuseRepository
from .result_formatter import ResultFormatter
from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry

KIND_EXACT = "exact"
KIND_NEAR = "near"


class WordQueryOrchestrator:
    """Runs the exact and near lookups for a request and filters the results.

    Failure policy is both-or-nothing: when either lookup fails the whole
    search raises and the sibling lookup's result is discarded.
    """

    def __init__(
        self,
        *,
        repository: DatamuseRepository,
        profanity_table: Optional[ProfanityTable] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.repository = repository
        self.profanity_table = profanity_table or ProfanityTable()
        self.telemetry = telemetry or StructuredTelemetry()
        self._latest_trace: Dict[str, Any] = {}

        self._logger = get_logger(__name__).bind(
            component="word_query_orchestrator",
            repository=type(repository).__name__,
        )

        self._metric_request_total = create_counter(
            "word_search_requests_total",
            "Total word search requests received.",
        )
        self._metric_request_failures = create_counter(
            "word_search_request_failures_total",
            "Total word search requests that raised an exception.",
            label_names=("error",),
        )
        self._metric_request_duration = create_histogram(
            "word_search_request_seconds",
            "Latency of word search requests.",
        )
        self._metric_upstream_calls = create_counter(
            "word_search_upstream_calls_total",
            "Upstream word-relations API calls issued.",
            label_names=("kind",),
        )
        self._metric_filtered = create_counter(
            "word_search_filtered_total",
            "Word records removed by result filters.",
            label_names=("reason",),
        )

        self._logger.info(
            "Word query orchestrator initialised",
            context={"blocked_entries": len(self.profanity_table)},
        )

    def get_latest_telemetry(self) -> Dict[str, Any]:
        """Return the telemetry snapshot of the most recent search."""

        if not self._latest_trace:
            return self.telemetry.snapshot()
        return copy.deepcopy(self._latest_trace)

    async def _fetch(
        self, kind: str, query: Optional[str], trace: StructuredTelemetry
    ) -> List[WordRecord]:
        if query is None:
            self._logger.debug("Upstream query skipped", context={"kind": kind})
            trace.increment(f"upstream.{kind}.skipped")
            return []

        self._metric_upstream_calls.labels(kind=kind).inc()
        self._logger.info("Upstream query dispatched", context={"kind": kind, "query": query})

        with start_span("search.upstream", {"search.kind": kind, "search.query": query}) as span:
            with trace.timer(f"upstream.{kind}", {"query": query}) as timing:
                try:
                    records = await self.repository.fetch_words(query)
                except Exception as exc:
                    record_exception(span, exc)
                    timing["error"] = type(exc).__name__
                    raise
                timing["records"] = len(records)

            add_span_attributes(span, {"result.count": len(records)})
        return records

    async def search(self, request: SearchRequest) -> SearchOutcome:
        """Fetch the unfiltered exact and near matches for ``request``."""

        exact_query, near_query = build_queries(request)
        request_context: Dict[str, Any] = {
            "rhyme_term": request.rhyme_term.strip(),
            "prefix_term": request.prefix_term.strip(),
            "relation_kind": request.relation_kind.value,
            "relation_term": request.relation_term.strip(),
        }

        trace = self.telemetry.fork()
        trace.start_trace("search_words")
        trace.increment("search.invoked")
        trace.annotate("input.exact_query", exact_query)
        trace.annotate("input.near_query", near_query)

        self._metric_request_total.inc()
        self._logger.info("Word search request received", context=request_context)

        with start_span("search.request", request_context) as request_span:
            try:
                with self._metric_request_duration.time():
                    tasks = [
                        asyncio.ensure_future(self._fetch(KIND_EXACT, exact_query, trace)),
                        asyncio.ensure_future(self._fetch(KIND_NEAR, near_query, trace)),
                    ]
                    try:
                        exact, near = await asyncio.gather(*tasks)
                    except BaseException:
                        for task in tasks:
                            task.cancel()
                        await asyncio.gather(*tasks, return_exceptions=True)
                        raise
            except Exception as exc:
                failure_context = dict(request_context)
                failure_context["error"] = str(exc)
                self._metric_request_failures.labels(error=type(exc).__name__).inc()
                self._logger.error("Word search request failed", context=failure_context)
                record_exception(request_span, exc)
                trace.increment("search.failed")
                self._latest_trace = trace.snapshot()
                raise

            outcome = SearchOutcome(exact_matches=exact, near_matches=near)
            counts = {KIND_EXACT: len(outcome.exact_matches), KIND_NEAR: len(outcome.near_matches)}
            self._logger.info("Word search request completed", context={"result_counts": counts})

            trace.annotate("result.counts", counts)
            trace.increment("search.completed")
            self._latest_trace = trace.snapshot()

            add_span_attributes(
                request_span,
                {"search.success": True, "result.total": outcome.total},
            )
            return outcome

    def apply_filters(
        self,
        outcome: SearchOutcome,
        requested_syllables: Optional[int],
        comparison: SyllableComparison,
    ) -> SearchOutcome:
        """Drop blocked words and words failing the syllable constraint."""

        reasons: Dict[str, int] = {}
        for record in outcome.exact_matches + outcome.near_matches:
            reason = rejection_reason(
                record, requested_syllables, comparison, self.profanity_table
            )
            if reason is not None:
                reasons[reason] = reasons.get(reason, 0) + 1

        for reason, count in reasons.items():
            self._metric_filtered.labels(reason=reason).inc(count)
        if reasons:
            self._logger.debug("Word records filtered", context={"reasons": reasons})

        return filter_outcome(outcome, requested_syllables, comparison, self.profanity_table)


class SearchService:
    """Thin facade that delegates to the orchestrator and formatter."""

    def __init__(
        self,
        *,
        repository: DatamuseRepository,
        profanity_table: Optional[ProfanityTable] = None,
        telemetry: Optional[StructuredTelemetry] = None,
        orchestrator: Optional[WordQueryOrchestrator] = None,
        formatter: Optional[ResultFormatter] = None,
    ) -> None:
        self.orchestrator = orchestrator or WordQueryOrchestrator(
            repository=repository,
            profanity_table=profanity_table,
            telemetry=telemetry,
        )
        self.formatter = formatter or ResultFormatter()
        self.repository = repository
        self.telemetry = self.orchestrator.telemetry

    @property
    def profanity_table(self) -> ProfanityTable:
        return self.orchestrator.profanity_table

    def get_latest_telemetry(self) -> Dict[str, Any]:
        return self.orchestrator.get_latest_telemetry()

    async def search(self, request: SearchRequest) -> SearchOutcome:
        return await self.orchestrator.search(request)

    def search_sync(self, request: SearchRequest) -> SearchOutcome:
        """Run :meth:`search` on a fresh event loop for synchronous callers."""

        return asyncio.run(self.orchestrator.search(request))

    def apply_filters(
        self,
        outcome: SearchOutcome,
        requested_syllables: Optional[int],
        comparison: SyllableComparison,
    ) -> SearchOutcome:
        return self.orchestrator.apply_filters(outcome, requested_syllables, comparison)

    def filter_for(self, outcome: SearchOutcome, request: SearchRequest) -> SearchOutcome:
        return self.apply_filters(outcome, request.syllable_count, request.syllable_comparison)

    def summarize(self, outcome: SearchOutcome) -> str:
        return self.formatter.summary(outcome)

    def rows(self, outcome: SearchOutcome) -> List[List[Any]]:
        return self.formatter.rows(outcome)


__all__ = ["SearchService", "WordQueryOrchestrator", "KIND_EXACT", "KIND_NEAR"]
