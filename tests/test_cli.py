import io

import pandas as pd

from notes_ingestion.cli import Command


def _run(*argv):
    stdout, stderr = io.StringIO(), io.StringIO()
    code = Command(stdout=stdout, stderr=stderr).run(list(argv))
    return code, stdout.getvalue(), stderr.getvalue()


def test_summary_output(notes_dir, write_note):
    write_note('2025-07-06.md', **{'sleep-in': '23:00'})
    write_note('2025-07-07.md', **{'wake-up': '07:00', 'sleep-in': '23:30', 'Meditation': 10})
    write_note('2025-07-08.md', **{'wake-up': '06:45', 'Meditation': 20})

    code, out, err = _run(str(notes_dir), '--start', '2025-07-07', '--end', '2025-07-08')

    assert code == 0
    assert err == ''
    assert '2025-07-07.md' in out
    assert '2025-07-06 -> 2025-07-07: 23:00 - 07:00 (8.0h)' in out
    assert '2025-07-07 -> 2025-07-08: 23:30 - 06:45 (7.2h)' in out
    assert 'Meditation: 15.0' in out
    assert 'Running: no data' in out


def test_incomplete_cycle_is_listed(notes_dir, write_note):
    write_note('2025-07-06.md', **{'sleep-in': '23:00'})
    write_note('2025-07-07.md', text='no front matter\n')

    code, out, _ = _run(str(notes_dir), '--start', '2025-07-07', '--end', '2025-07-07')

    assert code == 0
    assert '2025-07-06 -> 2025-07-07: incomplete' in out


def test_single_day_reports_insufficient_sleep_data(notes_dir, write_note):
    write_note('2025-07-07.md', Meditation=5)

    code, out, _ = _run(str(notes_dir), '--start', '2025-07-07', '--end', '2025-07-07')

    assert code == 0
    assert 'Insufficient data' in out


def test_empty_range_exits_with_error(notes_dir, write_note):
    write_note('2025-07-07.md', Meditation=5)

    code, out, err = _run(str(notes_dir), '--start', '2025-08-01', '--end', '2025-08-02')

    assert code == 1
    assert '2025-08-01 to 2025-08-02' in err


def test_only_leading_day_in_range_is_an_empty_range(notes_dir, write_note):
    write_note('2025-07-31.md', Meditation=5)

    code, _, err = _run(str(notes_dir), '--start', '2025-08-01', '--end', '2025-08-02')

    assert code == 1
    assert '2025-08-01 to 2025-08-02' in err


def test_env_configuration(monkeypatch, notes_dir, write_note):
    write_note('2025-07-07.md', Meditation=5)
    monkeypatch.setenv('NOTES_FOLDER', str(notes_dir))
    monkeypatch.setenv('NOTES_START_DATE', '2025-07-07')
    monkeypatch.setenv('NOTES_END_DATE', '2025-07-07')

    code, out, _ = _run()

    assert code == 0
    assert 'Meditation: 5.0' in out


def test_missing_configuration(monkeypatch):
    for name in ('NOTES_FOLDER', 'NOTES_START_DATE', 'NOTES_END_DATE'):
        monkeypatch.delenv(name, raising=False)

    code, _, err = _run()

    assert code == 1
    assert 'Missing configuration' in err


def test_export_writes_full_record_table(tmp_path, notes_dir, write_note):
    write_note('2025-07-06.md', **{'sleep-in': '23:00'})
    write_note('2025-07-07.md', Meditation=12)
    target = tmp_path / 'records.csv'

    code, out, _ = _run(str(notes_dir), '--start', '2025-07-07', '--end', '2025-07-07', '--export', str(target))

    assert code == 0
    table = pd.read_csv(target)
    assert table['file_name'].tolist() == ['2025-07-06.md', '2025-07-07.md']
    assert table['Meditation'].iloc[1] == 12.0
