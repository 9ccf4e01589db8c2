"""Application wiring for the Poet's Pal project."""

from __future__ import annotations

from typing import Any, Optional

from poets_pal.config import Settings
from poets_pal.core import ProfanityTable, SearchOutcome, SearchRequest, load_profanity_table
from poets_pal.utils.logging_config import configure_logging
from poets_pal.utils.observability import get_logger
from poets_pal.utils.telemetry import StructuredTelemetry, TelemetryLogger

from poets_pal.app.data.datamuse import DatamuseRepository
from poets_pal.app.services.search_service import SearchService


class PoetsPalApp:
    """High-level application facade bundling dependencies."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        repository: Optional[DatamuseRepository] = None,
        profanity_table: Optional[ProfanityTable] = None,
        search_service: Optional[SearchService] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")
        self._logger.info(
            "Initialising application facade",
            context={"api_url": self.settings.api_url},
        )

        self.repository = repository or DatamuseRepository(
            self.settings.api_url,
            timeout=self.settings.http_timeout,
        )
        if profanity_table is None:
            try:
                profanity_table = load_profanity_table(self.settings.blocklist_path)
            except Exception as exc:
                self._logger.error(
                    "Block list could not be loaded",
                    context={"path": self.settings.blocklist_path, "error": str(exc)},
                )
                raise
        self.profanity_table = profanity_table

        if telemetry is None:
            telemetry = StructuredTelemetry(listeners=[TelemetryLogger()])
        self.search_service = search_service or SearchService(
            repository=self.repository,
            profanity_table=self.profanity_table,
            telemetry=telemetry,
        )

        self._logger.info(
            "Application dependencies wired",
            context={"blocked_entries": len(self.profanity_table)},
        )

    # Public API ------------------------------------------------------------
    def search_words(
        self,
        rhyme: str = "",
        starts: str = "",
        relation_kind: Any = "synonym",
        relation_term: str = "",
        syllable_comparison: Any = "exact",
        syllables: Any = "",
    ) -> SearchOutcome:
        """Search synchronously and return the filtered outcome."""

        request = SearchRequest.from_form(
            rhyme, starts, relation_kind, relation_term, syllable_comparison, syllables
        )
        outcome = self.search_service.search_sync(request)
        return self.search_service.filter_for(outcome, request)

    def create_gradio_interface(self):
        # Imported lazily so the facade is usable without loading Gradio.
        from poets_pal.app.ui.gradio import create_interface

        return create_interface(self.search_service)


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    app = PoetsPalApp(settings)
    interface = app.create_gradio_interface()
    interface.launch(
        server_name=settings.server_name,
        server_port=settings.server_port,
        share=settings.share,
    )


__all__ = ["PoetsPalApp", "main"]
