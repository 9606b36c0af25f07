"""
Base adapter interface for note file parsers.

Each note convention (daily notes with front matter, and any future layout)
implements this interface to turn its files into TypedRecords against the
field schema.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Mapping
import logging

from notes_core.models import FIELD_SCHEMA, FieldSpec, RecordFile, TypedRecord

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Result of parsing one note file."""
    success: bool
    record: TypedRecord | None = None
    errors: list[str] = field(default_factory=list)
    file_path: str = ''


class BaseAdapter(ABC):
    """
    Abstract base class for note file adapters.

    Each adapter is responsible for:
    1. Detecting if it can handle a given file
    2. Deriving the file's date
    3. Parsing the file into a TypedRecord

    Usage:
        adapter = DailyNoteAdapter()
        record_file = adapter.record_file(path)
        if record_file is not None:
            result = adapter.parse(record_file)
    """

    # Override in subclasses
    SOURCE_NAME: str = 'unknown'
    SUPPORTED_FILE_TYPES: tuple[str, ...] = ()
    DATE_FORMATS: tuple[str, ...] = ()

    def __init__(self, schema: Mapping[str, FieldSpec] = FIELD_SCHEMA):
        self.schema = schema
        self.errors: list[str] = []

    @abstractmethod
    def can_handle(self, path: Path) -> bool:
        """
        Check if this adapter can handle the given file.

        Args:
            path: Path to a file

        Returns:
            True if this adapter can parse the given path
        """
        pass

    @abstractmethod
    def file_date(self, file_name: str) -> date | None:
        """Derive the calendar date a file belongs to, or None if it has none."""
        pass

    @abstractmethod
    def parse(self, record_file: RecordFile) -> ParseResult:
        """
        Parse a dated file into a record.

        Args:
            record_file: The discovered file

        Returns:
            ParseResult holding the TypedRecord
        """
        pass

    def record_file(self, path: Path) -> RecordFile | None:
        """Wrap a path as a RecordFile, or None if it is not a dated note."""
        if not self.can_handle(path):
            return None
        file_date = self.file_date(path.name)
        if file_date is None:
            logger.debug(f"[{self.SOURCE_NAME}] Skipping undated file: {path.name}")
            return None
        return RecordFile(file_name=path.name, date=file_date, path=path)

    def _log_error(self, message: str, exception: Exception | None = None):
        """Log and track an error during parsing."""
        if exception:
            message = f"{message}: {str(exception)}"
        logger.error(f"[{self.SOURCE_NAME}] {message}")
        self.errors.append(message)

    def _parse_date(self, value: str, formats: tuple[str, ...]) -> date | None:
        """
        Try parsing a date string with multiple format options.

        Args:
            value: The date string to parse
            formats: strptime format strings to try

        Returns:
            Parsed date or None if all formats fail
        """
        for fmt in formats:
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue
        return None


class AdapterRegistry:
    """
    Registry of all available adapters.
    Use this to find the right adapter for a notes folder.
    """

    _adapters: list[type[BaseAdapter]] = []

    @classmethod
    def register(cls, adapter_class: type[BaseAdapter]):
        """Register an adapter class."""
        if adapter_class not in cls._adapters:
            cls._adapters.append(adapter_class)
        return adapter_class

    @classmethod
    def get_adapter_by_name(
        cls,
        name: str,
        schema: Mapping[str, FieldSpec] = FIELD_SCHEMA
    ) -> BaseAdapter | None:
        """Get an adapter by its SOURCE_NAME."""
        for adapter_class in cls._adapters:
            if adapter_class.SOURCE_NAME == name:
                return adapter_class(schema=schema)
        return None

    @classmethod
    def list_adapters(cls) -> list[str]:
        """List all registered adapter names."""
        return [a.SOURCE_NAME for a in cls._adapters]
