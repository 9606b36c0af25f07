"""
Data model for daily-note analysis.

Defines the structures shared between ingestion and the analysis services:
- FieldKind / FieldSpec / FIELD_SCHEMA: the fixed set of recognized metadata fields
- RecordFile: a discovered note file and the date derived from its name
- TypedRecord: one note's metadata coerced against the schema
- RecordSequence: date-ordered records, the interface handed to renderers
- SleepCycle: one reconstructed night spanning two consecutive records
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

import numpy as np

from .time_axis import from_axis


class FieldKind(str, Enum):
    """Value kinds a metadata field can hold."""
    NUMERIC = 'numeric'
    TIME_OF_DAY = 'time_of_day'
    BOOLEAN_TEXT = 'boolean_text'

    @property
    def absent(self) -> float | str:
        """The "no value" sentinel stored in a slot of this kind."""
        if self is FieldKind.NUMERIC:
            return math.nan
        if self is FieldKind.TIME_OF_DAY:
            return ''
        # "false" doubles as the absent marker, so an explicit false and a
        # missing field cannot be told apart.
        return 'false'


@dataclass(frozen=True)
class FieldSpec:
    """A recognized metadata field."""
    name: str
    kind: FieldKind

    @property
    def column(self) -> str:
        """Column name used in tabular views."""
        return self.name.replace(' ', '_')


def build_schema(specs: Iterable[FieldSpec]) -> Mapping[str, FieldSpec]:
    """
    Build a read-only name -> FieldSpec mapping.

    Raises:
        ValueError: if two specs share a name
    """
    schema: dict[str, FieldSpec] = {}
    for spec in specs:
        if spec.name in schema:
            raise ValueError(f"Duplicate field in schema: {spec.name!r}")
        schema[spec.name] = spec
    return MappingProxyType(schema)


# Labels exactly as written in the daily-note front matter
NUMERIC_FIELDS = ('Working Outside', 'Meditation', 'Running', 'Entertainment Time')
TIME_FIELDS = ('wake-up', 'sleep-in')
BOOLEAN_FIELDS = ('Fruit',)

FIELD_SCHEMA: Mapping[str, FieldSpec] = build_schema(
    [FieldSpec(name, FieldKind.NUMERIC) for name in NUMERIC_FIELDS]
    + [FieldSpec(name, FieldKind.TIME_OF_DAY) for name in TIME_FIELDS]
    + [FieldSpec(name, FieldKind.BOOLEAN_TEXT) for name in BOOLEAN_FIELDS]
)

SLEEP_IN_FIELD = 'sleep-in'
WAKE_UP_FIELD = 'wake-up'


@dataclass(frozen=True)
class RecordFile:
    """A note file whose name starts with a valid yyyy-mm-dd date."""
    file_name: str
    date: date
    path: Path


@dataclass(frozen=True)
class TypedRecord:
    """
    One note's metadata, typed against a schema.

    Every schema field has exactly one slot in `values`, holding either a
    value of the field's kind or that kind's absent sentinel.
    """
    file_name: str
    date: date
    values: Mapping[str, float | str]
    schema: Mapping[str, FieldSpec] = field(default_factory=lambda: FIELD_SCHEMA, repr=False, compare=False)

    def __post_init__(self):
        missing = set(self.schema) - set(self.values)
        if missing:
            raise ValueError(f"Record {self.file_name} lacks slots for: {', '.join(sorted(missing))}")
        unknown = set(self.values) - set(self.schema)
        if unknown:
            raise ValueError(f"Record {self.file_name} has slots outside the schema: {', '.join(sorted(unknown))}")
        # Freeze the slots so the record cannot be changed after building
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    def __getitem__(self, name: str) -> float | str:
        return self.values[name]

    def is_absent(self, name: str) -> bool:
        value = self.values[name]
        kind = self.schema[name].kind
        if kind is FieldKind.NUMERIC:
            return math.isnan(value)
        return value == kind.absent


class RecordSequence:
    """
    Read-only, date-ordered sequence of TypedRecords.

    Position `i` is "day i"; sleep cycles index transitions between
    neighbouring positions, so the order is never changed after construction.
    """

    def __init__(self, records: Iterable[TypedRecord], schema: Mapping[str, FieldSpec] = FIELD_SCHEMA):
        self._records = tuple(records)
        self.schema = schema

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TypedRecord]:
        return iter(self._records)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RecordSequence(self._records[index], self.schema)
        return self._records[index]

    def __repr__(self) -> str:
        return f"RecordSequence({len(self)} records)"

    @property
    def dates(self) -> list[date]:
        return [r.date for r in self._records]

    def vector(self, name: str) -> np.ndarray:
        """
        Values of a numeric field as a read-only float array, one entry per record.

        Raises:
            KeyError: unknown field
            TypeError: field is not numeric
        """
        spec = self.schema[name]
        if spec.kind is not FieldKind.NUMERIC:
            raise TypeError(f"Field {name!r} is {spec.kind.value}, not numeric")
        values = np.array([r[name] for r in self._records], dtype=float)
        values.setflags(write=False)
        return values


@dataclass(frozen=True)
class SleepCycle:
    """
    The night between record `index` and record `index + 1`.

    `sleep_start` and `wake_end` are axis values (see notes_core.time_axis),
    or None when the source time was absent or unparsable.
    """
    index: int
    sleep_date: date
    wake_date: date
    sleep_text: str
    wake_text: str
    sleep_start: float | None
    wake_end: float | None

    @property
    def is_plottable(self) -> bool:
        return self.sleep_start is not None and self.wake_end is not None

    @property
    def duration(self) -> float | None:
        """Hours asleep, or None for a placeholder cycle."""
        if not self.is_plottable:
            return None
        return self.wake_end - self.sleep_start

    @property
    def sleep_label(self) -> str | None:
        return None if self.sleep_start is None else from_axis(self.sleep_start)

    @property
    def wake_label(self) -> str | None:
        return None if self.wake_end is None else from_axis(self.wake_end)
