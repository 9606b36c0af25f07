"""
Run configuration for an analysis: the notes folder and the primary date range.

Values come from the command line or, as a fallback, the environment:
    NOTES_FOLDER, NOTES_START_DATE, NOTES_END_DATE
"""

import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Mapping

from .exceptions import ConfigurationError

DATE_FORMAT = '%Y-%m-%d'

ENV_FOLDER = 'NOTES_FOLDER'
ENV_START_DATE = 'NOTES_START_DATE'
ENV_END_DATE = 'NOTES_END_DATE'


def parse_date(value: str | date, label: str = 'date') -> date:
    """Parse a yyyy-mm-dd string, raising ConfigurationError on bad input."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError):
        raise ConfigurationError(f"Invalid {label} {value!r}, expected yyyy-mm-dd") from None


@dataclass(frozen=True)
class AnalysisConfig:
    """Where the notes live and which days are analysed (inclusive)."""
    folder: Path
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ConfigurationError(
                f"Start date {self.start_date} is after end date {self.end_date}"
            )

    @property
    def sleep_start_date(self) -> date:
        """
        First day to load when reconstructing sleep.

        The night before the first primary day starts on the previous day's
        note, so one extra leading day is fetched.
        """
        return self.start_date - timedelta(days=1)

    @classmethod
    def from_values(cls, folder: str | Path, start: str | date, end: str | date) -> 'AnalysisConfig':
        return cls(
            folder=Path(folder).expanduser(),
            start_date=parse_date(start, 'start date'),
            end_date=parse_date(end, 'end date'),
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: str | None
    ) -> 'AnalysisConfig':
        """
        Build a config from environment variables.

        Non-None keyword overrides (folder, start, end) take precedence over
        the environment.
        """
        environ = os.environ if environ is None else environ
        values = {
            'folder': overrides.get('folder') or environ.get(ENV_FOLDER),
            'start': overrides.get('start') or environ.get(ENV_START_DATE),
            'end': overrides.get('end') or environ.get(ENV_END_DATE),
        }
        env_names = {'folder': ENV_FOLDER, 'start': ENV_START_DATE, 'end': ENV_END_DATE}
        missing = [env_names[k] for k, v in values.items() if not v]
        if missing:
            raise ConfigurationError(f"Missing configuration: {', '.join(missing)}")
        return cls.from_values(values['folder'], values['start'], values['end'])
