"""
Daily Notes Adapter

Handles a folder of Markdown daily notes named after their day:

    2025-07-06.md
    2025-07-07 Monday.md

Each note may open with a front matter block of "key: value" lines. Known keys
are coerced against the field schema; unknown keys are ignored, so notes can
carry properties this tool does not model.
"""

from datetime import date
from pathlib import Path
import logging

from notes_core.models import RecordFile, TypedRecord

from .base import BaseAdapter, ParseResult, AdapterRegistry
from .data_processor import DataProcessor
from .front_matter import extract_pairs

logger = logging.getLogger(__name__)


@AdapterRegistry.register
class DailyNoteAdapter(BaseAdapter):
    """
    Parser for dated Markdown daily notes.
    """

    SOURCE_NAME = 'daily_notes'
    SUPPORTED_FILE_TYPES = ('.md',)
    DATE_FORMATS = ('%Y-%m-%d',)

    # Length of the yyyy-mm-dd prefix
    DATE_PREFIX_LENGTH = 10

    def can_handle(self, path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in self.SUPPORTED_FILE_TYPES

    def file_date(self, file_name: str) -> date | None:
        prefix = file_name[:self.DATE_PREFIX_LENGTH]
        if len(prefix) < self.DATE_PREFIX_LENGTH:
            return None
        return self._parse_date(prefix, self.DATE_FORMATS)

    def parse(self, record_file: RecordFile) -> ParseResult:
        """
        Read a note and build its record.

        An unreadable file is reported and still yields a record (every field
        absent), so the sequence keeps one entry per dated file.
        """
        self.errors = []
        try:
            text = record_file.path.read_text(encoding='utf-8-sig', errors='replace')
        except OSError as e:
            self._log_error(f"Error reading note {record_file.file_name}", e)
            text = ''

        record = self.build_record(record_file, text)
        return ParseResult(
            success=len(self.errors) == 0,
            record=record,
            errors=self.errors,
            file_path=str(record_file.path)
        )

    def build_record(self, record_file: RecordFile, text: str) -> TypedRecord:
        """
        Coerce a note's front matter into a TypedRecord.

        Slots start at their absent sentinel. A value that does not coerce
        leaves the slot untouched, so a malformed duplicate key never erases
        an earlier valid value.
        """
        values = {name: spec.kind.absent for name, spec in self.schema.items()}

        for key, raw in extract_pairs(text):
            spec = self.schema.get(key)
            if spec is None:
                continue
            value = DataProcessor.coerce(spec.kind, raw)
            if value is None:
                if raw:
                    logger.debug(
                        f"[{self.SOURCE_NAME}] {record_file.file_name}: "
                        f"ignoring {spec.kind.value} value {raw!r} for {key!r}"
                    )
                continue
            values[key] = value

        return TypedRecord(
            file_name=record_file.file_name,
            date=record_file.date,
            values=values,
            schema=self.schema,
        )
