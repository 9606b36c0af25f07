import pytest


def note(**fields):
    """Render a daily note with a front matter block."""
    lines = ['---'] + [f"{key}: {value}" for key, value in fields.items()] + ['---', '', '# Journal', '']
    return '\n'.join(lines)


@pytest.fixture
def notes_dir(tmp_path):
    folder = tmp_path / 'DailyNotes'
    folder.mkdir()
    return folder


@pytest.fixture
def write_note(notes_dir):
    def _write(name, text='', **fields):
        path = notes_dir / name
        path.write_text(note(**fields) if fields else text, encoding='utf-8')
        return path
    return _write
