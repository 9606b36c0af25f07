"""
Ingestion service - discovers dated notes and turns them into record sequences.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Mapping
import logging

from notes_core.config import AnalysisConfig
from notes_core.exceptions import EmptyDateRangeError, NoRecordFilesError
from notes_core.models import FIELD_SCHEMA, FieldSpec, RecordFile, RecordSequence, SleepCycle
from notes_core.services import SleepCycleService, InsightsService
from .adapters.base import BaseAdapter, AdapterRegistry
from .adapters.daily_notes import DailyNoteAdapter

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Service for loading a date range of notes from a folder.

    Usage:
        service = IngestionService()
        records = service.load_records(folder, date(2025, 7, 6), date(2025, 7, 13))
    """

    def __init__(
        self,
        source: str = DailyNoteAdapter.SOURCE_NAME,
        schema: Mapping[str, FieldSpec] = FIELD_SCHEMA
    ):
        adapter = AdapterRegistry.get_adapter_by_name(source, schema)
        if adapter is None:
            raise ValueError(
                f"No adapter named {source!r}. Available: {', '.join(AdapterRegistry.list_adapters())}"
            )
        self.adapter: BaseAdapter = adapter
        self.schema = schema

    def discover(self, folder: Path | str) -> list[RecordFile]:
        """
        List the dated note files in a folder, in name order.

        Files whose name does not start with a date are skipped.

        Raises:
            NoRecordFilesError: if the folder holds no note files at all
        """
        folder = Path(folder)
        patterns = [f"*{suffix}" for suffix in self.adapter.SUPPORTED_FILE_TYPES]

        candidates = []
        if folder.is_dir():
            candidates = sorted(
                (p for p in folder.iterdir() if self.adapter.can_handle(p)),
                key=lambda p: p.name
            )
        if not candidates:
            raise NoRecordFilesError(folder, ', '.join(patterns))

        record_files = []
        for path in candidates:
            record_file = self.adapter.record_file(path)
            if record_file is not None:
                record_files.append(record_file)

        skipped = len(candidates) - len(record_files)
        if skipped:
            logger.info(f"Skipped {skipped} note file(s) without a yyyy-mm-dd name prefix")
        return record_files

    def select(
        self,
        record_files: list[RecordFile],
        start: date,
        end: date,
        folder: Path | str | None = None
    ) -> list[RecordFile]:
        """
        Keep files dated within [start, end], ordered by date.

        The sort is stable, so files sharing a date keep their listing order.

        Raises:
            EmptyDateRangeError: if no file falls inside the range
        """
        selected = [f for f in record_files if start <= f.date <= end]
        if not selected:
            raise EmptyDateRangeError(start, end, folder)
        return sorted(selected, key=lambda f: f.date)

    def load_records(self, folder: Path | str, start: date, end: date) -> RecordSequence:
        """
        Load every note dated within [start, end] as a date-ordered RecordSequence.

        Raises:
            NoRecordFilesError: no note files in the folder
            EmptyDateRangeError: no note files in the range
        """
        logger.info(f"Analyzing date range: {start} to {end}")
        logger.info(f"Notes folder: {folder}")

        selected = self.select(self.discover(folder), start, end, folder)

        records = []
        errors = 0
        for i, record_file in enumerate(selected, start=1):
            result = self.adapter.parse(record_file)
            if not result.success:
                errors += len(result.errors)
            records.append(result.record)
            logger.info(f"Processed: {record_file.file_name} ({i}/{len(selected)})")

        logger.info(
            f"Analysis complete: processed {len(records)} files within the date range, "
            f"{errors} errors"
        )
        return RecordSequence(records, self.schema)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything a renderer needs from one run."""
    config: AnalysisConfig
    records: RecordSequence
    primary: RecordSequence
    sleep_cycles: tuple[SleepCycle, ...]

    @property
    def has_sleep_data(self) -> bool:
        return len(self.sleep_cycles) > 0


class AnalysisService:
    """
    Runs the whole pipeline for a config.

    Records are fetched from the day before the primary range so that the
    first primary night can be paired; every other series uses only the
    primary range.
    """

    def __init__(self, ingestion: IngestionService | None = None):
        self.ingestion = ingestion or IngestionService()

    def run(self, config: AnalysisConfig) -> AnalysisResult:
        logger.info(
            f"Fetching data from {config.sleep_start_date} to {config.end_date} for full analysis..."
        )
        try:
            records = self.ingestion.load_records(config.folder, config.sleep_start_date, config.end_date)
        except EmptyDateRangeError:
            # Report the range the caller asked for, not the widened one
            raise EmptyDateRangeError(config.start_date, config.end_date, config.folder) from None

        # Only the extra leading day matched
        primary = InsightsService.primary_records(records, config.start_date)
        if not len(primary):
            raise EmptyDateRangeError(config.start_date, config.end_date, config.folder)

        return AnalysisResult(
            config=config,
            records=records,
            primary=primary,
            sleep_cycles=SleepCycleService.reconstruct(records),
        )
