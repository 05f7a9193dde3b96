"""PDF -> parsed JSON -> translated JSON -> database.

Each stage reads the previous stage's checkpoint file, so a run can be
resumed from any stage after a failure.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from .checkpoint import PARSED_DATA_FILE, TRANSLATED_DATA_FILE, load_checkpoint, save_checkpoint
from .config import PipelineSettings
from .diff import diff, is_equal
from .extraction import Extractor
from .models import CanonicalRecord, RawRecord
from .pdf import read_pages
from .store import PokemonStore
from .timing import PerformanceMetricTracker
from .translator import RecordTranslator

logger = logging.getLogger(__name__)


class Pipeline:
    def __init__(
        self,
        settings: PipelineSettings,
        extractor: Extractor,
        translator: RecordTranslator,
        store: Optional[PokemonStore] = None,
        tracker: Optional[PerformanceMetricTracker] = None,
        page_reader: Callable[[Path], List[str]] = read_pages,
    ):
        self.settings = settings
        self.extractor = extractor
        self.translator = translator
        self.store = store or PokemonStore(settings.database_path)
        self.tracker = tracker or PerformanceMetricTracker()
        self.page_reader = page_reader

    @property
    def parsed_data_path(self) -> Path:
        return self.settings.json_dir / PARSED_DATA_FILE

    @property
    def translated_data_path(self) -> Path:
        return self.settings.json_dir / TRANSLATED_DATA_FILE

    def _log_progress(self, index: int, start: int, end: int, processed: int) -> None:
        if not self.settings.show_processing_logs:
            return
        total = end - start
        if index == start:
            logger.info("Pages Processed: 0/%d (%d pages remaining)", total, total)
            return
        remaining = total - processed
        avg_seconds = self.tracker.average_duration_in_seconds
        avg_minutes = self.tracker.average_duration_in_minutes
        logger.info(
            "Pages Processed: %d/%d (%d pages remaining) | "
            "Estimated Page Processing Time: %.1fsecs | "
            "Estimated Remaining Total Processing Time: %.1fmins | %.1fsecs",
            index - start,
            total,
            remaining,
            avg_seconds,
            avg_minutes * remaining,
            avg_seconds * remaining,
        )

    def convert_pdf_to_json(self) -> List[RawRecord]:
        """Extract one record per page, checkpointing after every page."""
        if self.settings.skip_processing or not self.settings.save_to_json:
            return []

        pages = self.page_reader(self.settings.pdf_path)
        start = self.settings.start_page_index
        end = self.settings.end_page_index
        end = len(pages) if end is None else min(end, len(pages))

        results: List[RawRecord] = []
        self.tracker.reset()
        try:
            for index in range(start, end):
                self._log_progress(index, start, end, len(results))
                self.tracker.start(index)
                results.append(self.extractor.extract(pages[index]))
                self.tracker.end(index)
                save_checkpoint(self.parsed_data_path, results)
        finally:
            self.tracker.reset()

        if self.settings.show_processing_logs:
            logger.info("Pages Processed: %d/%d (0 pages remaining)", len(results), end - start)
        return results

    def translate_json_for_database(self) -> List[CanonicalRecord]:
        if not self.settings.save_to_json:
            return []
        if self.settings.show_processing_logs:
            logger.info("Translating parsed data for the database...")
        data = load_checkpoint(self.parsed_data_path, RawRecord)
        translated = self.translator.translate(data)
        save_checkpoint(self.translated_data_path, translated)
        return translated

    def review_changes(self, records: Optional[Sequence[CanonicalRecord]] = None) -> List[Dict[str, Any]]:
        """Diff translated records against the latest stored row of the same name."""
        if records is None:
            records = load_checkpoint(self.translated_data_path, CanonicalRecord)
        changes: List[Dict[str, Any]] = []
        for record in records:
            stored = self.store.find_by_name(record.name)
            if stored is None or is_equal(stored.record, record):
                continue
            change = diff(stored.record, record)
            logger.info("Changes for %s (row %d): %s", record.name, stored.id, sorted(change))
            changes.append(change)
        return changes

    def save_json_to_database(self) -> int:
        if not self.settings.save_to_database:
            return 0
        data = load_checkpoint(self.translated_data_path, CanonicalRecord)
        return self.store.insert_many(data)

    def run(self) -> None:
        self.convert_pdf_to_json()
        self.translate_json_for_database()
        if self.settings.review_changes:
            self.review_changes()
        self.save_json_to_database()


def build_pipeline(settings: PipelineSettings, extractor: Optional[Extractor] = None) -> Pipeline:
    """Wire the default collaborators for *settings*."""
    from .extraction import OpenAIExtractor
    from .naming import NameNormalizer
    from .sources.pokeapi import PokeApiClient, ReferenceDataFetcher

    normalizer = NameNormalizer()
    translator = RecordTranslator(
        ReferenceDataFetcher(PokeApiClient(), normalizer),
        normalizer=normalizer,
        starting_page_offset=settings.starting_page_offset,
    )
    if extractor is None and not settings.skip_processing:
        extractor = OpenAIExtractor(model=settings.model)
    return Pipeline(settings, extractor, translator)
