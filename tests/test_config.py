from datetime import date
from pathlib import Path

import pytest

from notes_core.config import AnalysisConfig, parse_date
from notes_core.exceptions import ConfigurationError


def test_from_values_parses_dates():
    config = AnalysisConfig.from_values('notes', '2025-07-07', '2025-07-13')
    assert config.folder == Path('notes')
    assert config.start_date == date(2025, 7, 7)
    assert config.end_date == date(2025, 7, 13)


def test_sleep_range_starts_one_day_early():
    config = AnalysisConfig.from_values('notes', '2025-07-01', '2025-07-13')
    assert config.sleep_start_date == date(2025, 6, 30)


@pytest.mark.parametrize('value', ['07/07/2025', '2025-13-01', '', 'soon'])
def test_bad_dates_raise_configuration_error(value):
    with pytest.raises(ConfigurationError):
        parse_date(value)


def test_bad_date_error_hides_parser_traceback():
    with pytest.raises(ConfigurationError) as excinfo:
        parse_date('soon')
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__


def test_start_after_end_is_rejected():
    with pytest.raises(ConfigurationError, match='after'):
        AnalysisConfig.from_values('notes', '2025-07-13', '2025-07-07')


def test_from_env():
    environ = {
        'NOTES_FOLDER': '/data/DailyNotes',
        'NOTES_START_DATE': '2025-07-07',
        'NOTES_END_DATE': '2025-07-13',
    }
    config = AnalysisConfig.from_env(environ)
    assert config.folder == Path('/data/DailyNotes')
    assert config.end_date == date(2025, 7, 13)


def test_overrides_take_precedence_over_env():
    environ = {
        'NOTES_FOLDER': '/data/DailyNotes',
        'NOTES_START_DATE': '2025-07-07',
        'NOTES_END_DATE': '2025-07-13',
    }
    config = AnalysisConfig.from_env(environ, start='2025-07-10', folder=None)
    assert config.start_date == date(2025, 7, 10)
    assert config.folder == Path('/data/DailyNotes')


def test_missing_env_values_are_named():
    with pytest.raises(ConfigurationError) as excinfo:
        AnalysisConfig.from_env({'NOTES_FOLDER': 'x'})
    assert 'NOTES_START_DATE' in str(excinfo.value)
    assert 'NOTES_END_DATE' in str(excinfo.value)
