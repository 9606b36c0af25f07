import math
from datetime import date

import numpy as np
import pytest

from notes_core.models import (
    FIELD_SCHEMA,
    FieldKind,
    FieldSpec,
    RecordSequence,
    SleepCycle,
    TypedRecord,
    build_schema,
)


def _record(day, **values):
    slots = {name: spec.kind.absent for name, spec in FIELD_SCHEMA.items()}
    slots.update(values)
    return TypedRecord(file_name=f"{day}.md", date=day, values=slots)


def test_default_schema_fields():
    assert FIELD_SCHEMA['Meditation'].kind is FieldKind.NUMERIC
    assert FIELD_SCHEMA['Working Outside'].column == 'Working_Outside'
    assert FIELD_SCHEMA['wake-up'].kind is FieldKind.TIME_OF_DAY
    assert FIELD_SCHEMA['sleep-in'].kind is FieldKind.TIME_OF_DAY
    assert FIELD_SCHEMA['Fruit'].kind is FieldKind.BOOLEAN_TEXT


def test_schema_is_read_only():
    with pytest.raises(TypeError):
        FIELD_SCHEMA['Steps'] = FieldSpec('Steps', FieldKind.NUMERIC)


def test_schema_lookup_is_case_sensitive():
    assert 'meditation' not in FIELD_SCHEMA
    assert 'Wake-Up' not in FIELD_SCHEMA


def test_build_schema_rejects_duplicates():
    with pytest.raises(ValueError, match='Duplicate'):
        build_schema([FieldSpec('a', FieldKind.NUMERIC), FieldSpec('a', FieldKind.BOOLEAN_TEXT)])


def test_absent_sentinels():
    assert math.isnan(FieldKind.NUMERIC.absent)
    assert FieldKind.TIME_OF_DAY.absent == ''
    assert FieldKind.BOOLEAN_TEXT.absent == 'false'


def test_record_requires_a_slot_for_every_field():
    with pytest.raises(ValueError, match='lacks slots'):
        TypedRecord(file_name='x.md', date=date(2025, 7, 6), values={'Meditation': 1.0})


def test_record_is_immutable():
    record = _record(date(2025, 7, 6), Meditation=10.0)
    with pytest.raises(TypeError):
        record.values['Meditation'] = 5.0
    with pytest.raises(AttributeError):
        record.file_name = 'other.md'


def test_is_absent_per_kind():
    record = _record(date(2025, 7, 6), Meditation=10.0)
    assert not record.is_absent('Meditation')
    assert record.is_absent('Running')
    assert record.is_absent('wake-up')
    assert record.is_absent('Fruit')


def test_sequence_vector_is_read_only_and_positional():
    records = RecordSequence([
        _record(date(2025, 7, 6), Meditation=10.0),
        _record(date(2025, 7, 7)),
        _record(date(2025, 7, 8), Meditation=15.0),
    ])
    vector = records.vector('Meditation')
    assert vector[0] == 10.0
    assert np.isnan(vector[1])
    assert vector[2] == 15.0
    with pytest.raises(ValueError):
        vector[0] = 1.0


def test_sequence_vector_rejects_non_numeric_fields():
    records = RecordSequence([_record(date(2025, 7, 6))])
    with pytest.raises(TypeError):
        records.vector('wake-up')
    with pytest.raises(KeyError):
        records.vector('Steps')


def test_sequence_slice_keeps_order():
    days = [date(2025, 7, d) for d in (6, 7, 8)]
    records = RecordSequence([_record(d) for d in days])
    assert records[1:].dates == days[1:]
    assert len(records[1:]) == 2


def test_sleep_cycle_duration_and_labels():
    cycle = SleepCycle(
        index=0,
        sleep_date=date(2025, 7, 6),
        wake_date=date(2025, 7, 7),
        sleep_text='23:00',
        wake_text='07:00',
        sleep_start=1.0,
        wake_end=9.0,
    )
    assert cycle.is_plottable
    assert cycle.duration == 8.0
    assert cycle.sleep_label == '23:00'
    assert cycle.wake_label == '07:00'


def test_placeholder_cycle():
    cycle = SleepCycle(0, date(2025, 7, 6), date(2025, 7, 7), '23:00', '', 1.0, None)
    assert not cycle.is_plottable
    assert cycle.duration is None
    assert cycle.wake_label is None


def test_record_rejects_slots_outside_the_schema():
    slots = {name: spec.kind.absent for name, spec in FIELD_SCHEMA.items()}
    slots['mood'] = 'great'
    with pytest.raises(ValueError, match='outside the schema'):
        TypedRecord(file_name='x.md', date=date(2025, 7, 6), values=slots)
