"""
Pandas-based value coercion and tabular views for note records.

Handles:
- Coercing front matter text into typed field values (numeric, time of day, boolean text)
- Building DataFrames from record sequences and sleep cycles for export and inspection
"""

import math
from typing import Iterable
import logging

import numpy as np
import pandas as pd

from notes_core.models import FieldKind, RecordSequence, SleepCycle

logger = logging.getLogger(__name__)


class DataProcessor:
    """
    Utility class for processing note data with pandas.
    """

    BOOLEAN_VALUES = ('true', 'false')

    @classmethod
    def coerce(cls, kind: FieldKind, text: str) -> float | str | None:
        """
        Coerce a raw value to the given kind.

        Returns None when the text holds no usable value; the caller keeps the
        field's current (absent) value in that case.
        """
        text = text.strip()
        if not text:
            return None

        if kind is FieldKind.NUMERIC:
            return cls.coerce_numeric(text)
        if kind is FieldKind.TIME_OF_DAY:
            # Shape is checked lazily by whoever reads the time
            return text
        if kind is FieldKind.BOOLEAN_TEXT:
            return cls.coerce_boolean_text(text)
        raise ValueError(f"Unknown field kind: {kind}")

    @classmethod
    def coerce_numeric(cls, text: str) -> float | None:
        """Decimal parse; None on failure."""
        value = pd.to_numeric(text, errors='coerce')
        try:
            value = float(value)
        except (TypeError, ValueError):
            return None
        if math.isnan(value):
            return None
        return value

    @classmethod
    def coerce_boolean_text(cls, text: str) -> str | None:
        """Case-insensitive "true"/"false", lower-cased; None otherwise."""
        lowered = text.lower()
        if lowered in cls.BOOLEAN_VALUES:
            return lowered
        return None

    @classmethod
    def records_to_dataframe(cls, records: RecordSequence) -> pd.DataFrame:
        """
        One row per record: file_name, date and a column per schema field.

        Numeric columns are float with NaN for absent values; time and boolean
        columns hold their text (absent as "" and "false").
        """
        specs = list(records.schema.values())
        columns = ['file_name', 'date'] + [spec.column for spec in specs]

        rows = []
        for record in records:
            row = {'file_name': record.file_name, 'date': record.date}
            for spec in specs:
                row[spec.column] = record[spec.name]
            rows.append(row)

        if not rows:
            return pd.DataFrame(columns=columns)

        df = pd.DataFrame(rows, columns=columns)
        for spec in specs:
            if spec.kind is FieldKind.NUMERIC:
                df[spec.column] = df[spec.column].astype(float)
        return df

    @classmethod
    def cycles_to_dataframe(cls, cycles: Iterable[SleepCycle]) -> pd.DataFrame:
        """One row per sleep cycle, NaN for undefined bounds."""
        columns = [
            'index', 'sleep_date', 'wake_date', 'sleep_in', 'wake_up',
            'sleep_start', 'wake_end', 'duration',
        ]
        rows = [
            {
                'index': c.index,
                'sleep_date': c.sleep_date,
                'wake_date': c.wake_date,
                'sleep_in': c.sleep_text,
                'wake_up': c.wake_text,
                'sleep_start': np.nan if c.sleep_start is None else c.sleep_start,
                'wake_end': np.nan if c.wake_end is None else c.wake_end,
                'duration': np.nan if c.duration is None else round(c.duration, 2),
            }
            for c in cycles
        ]
        if not rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(rows, columns=columns)
