"""
Errors surfaced to callers of the analysis pipeline.

Only configuration problems are raised. Malformed field values, undated file
names and too-short record sequences are absorbed where they occur and show up
as data (absent sentinels, skipped files, empty cycle tuples).
"""


class NotesAnalyzerError(Exception):
    """Base class for all analyzer errors."""


class ConfigurationError(NotesAnalyzerError, ValueError):
    """The inputs of an analysis run are unusable; adjust them and retry."""


class NoRecordFilesError(ConfigurationError):
    """The notes folder holds no record-like files at all."""

    def __init__(self, folder, pattern: str = '*.md'):
        self.folder = folder
        self.pattern = pattern
        super().__init__(
            f"No note files ({pattern}) found. Please check the path: {folder}"
        )


class EmptyDateRangeError(ConfigurationError):
    """No dated note file falls inside the requested range."""

    def __init__(self, start, end, folder=None):
        self.start = start
        self.end = end
        self.folder = folder
        message = f"No note files found for the specified date range ({start} to {end})"
        if folder is not None:
            message += f" in {folder}"
        super().__init__(message + '.')
