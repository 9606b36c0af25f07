"""
Core services for sleep reconstruction and renderer-facing series.
"""

from datetime import date
import logging

import numpy as np

from .models import (
    FieldKind,
    RecordSequence,
    SleepCycle,
    SLEEP_IN_FIELD,
    WAKE_UP_FIELD,
)
from .time_axis import to_axis, correct_cross_midnight

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')


class SleepCycleService:
    """
    Pairs consecutive records into sleep cycles.

    Usage:
        cycles = SleepCycleService.reconstruct(records)
        for cycle in cycles:
            if cycle.is_plottable:
                print(cycle.sleep_label, cycle.wake_label, cycle.duration)
    """

    @classmethod
    def reconstruct(
        cls,
        records: RecordSequence,
        sleep_field: str = SLEEP_IN_FIELD,
        wake_field: str = WAKE_UP_FIELD
    ) -> tuple[SleepCycle, ...]:
        """
        Build one cycle per pair of neighbouring records.

        Cycle i pairs record i's sleep-in with record i+1's wake-up. Cycles
        with an unparsable bound are kept as placeholders so that index i
        always means the transition from day i to day i+1.

        Raises:
            KeyError: if either field is not a time-of-day field of the schema
        """
        for name in (sleep_field, wake_field):
            spec = records.schema.get(name)
            if spec is None or spec.kind is not FieldKind.TIME_OF_DAY:
                raise KeyError(f"Records must contain time-of-day field {name!r}")

        if len(records) < 2:
            logger.warning(
                f"Less than 2 days of data provided ({len(records)}). "
                "Cannot form a complete sleep cycle."
            )
            return ()

        cycles = []
        for i in range(len(records) - 1):
            cycles.append(cls.build_cycle(i, records[i], records[i + 1], sleep_field, wake_field))

        plottable = sum(1 for c in cycles if c.is_plottable)
        logger.info(f"Reconstructed {len(cycles)} sleep cycles ({plottable} plottable)")
        return tuple(cycles)

    @classmethod
    def build_cycle(cls, index: int, evening, morning, sleep_field: str, wake_field: str) -> SleepCycle:
        """Build the cycle from one record's evening to the next record's morning."""
        sleep_text = evening[sleep_field]
        wake_text = morning[wake_field]

        sleep_start = to_axis(sleep_text)
        wake_end = to_axis(wake_text)

        if sleep_start is None and sleep_text:
            logger.debug(f"Unparsable {sleep_field} {sleep_text!r} in {evening.file_name}")
        if wake_end is None and wake_text:
            logger.debug(f"Unparsable {wake_field} {wake_text!r} in {morning.file_name}")

        if sleep_start is not None and wake_end is not None:
            wake_end = correct_cross_midnight(sleep_start, wake_end)

        return SleepCycle(
            index=index,
            sleep_date=evening.date,
            wake_date=morning.date,
            sleep_text=sleep_text,
            wake_text=wake_text,
            sleep_start=sleep_start,
            wake_end=wake_end,
        )


class InsightsService:
    """
    Prepares record data for charts: numeric series, averages and x-axis labels.
    """

    @classmethod
    def primary_records(cls, records: RecordSequence, start_date: date) -> RecordSequence:
        """Drop the leading records fetched only for sleep pairing."""
        return RecordSequence([r for r in records if r.date >= start_date], records.schema)

    @classmethod
    def metric_series(
        cls,
        records: RecordSequence,
        name: str,
        zero_as_missing: bool = True
    ) -> np.ndarray:
        """
        A numeric field as a float array, one entry per record.

        Zero is treated as "not logged" by default, matching how daily
        notes are filled in.
        """
        values = np.array(records.vector(name), dtype=float)
        if zero_as_missing:
            values[values == 0] = np.nan
        return values

    @classmethod
    def average(cls, values: np.ndarray) -> float | None:
        """Mean ignoring missing entries, or None if nothing was logged."""
        values = np.asarray(values, dtype=float)
        if values.size == 0 or np.isnan(values).all():
            return None
        return float(np.nanmean(values))

    @classmethod
    def averages(cls, records: RecordSequence, zero_as_missing: bool = True) -> dict[str, float | None]:
        """Average of every numeric field in the schema."""
        return {
            name: cls.average(cls.metric_series(records, name, zero_as_missing))
            for name, spec in records.schema.items()
            if spec.kind is FieldKind.NUMERIC
        }

    @classmethod
    def date_labels(cls, records: RecordSequence) -> list[str]:
        """
        Weekday labels for each record, e.g. "Mon", "Tue", ... "Mon (W2)".

        Week numbers count from the first record and are only shown from the
        second week on.
        """
        labels = []
        for i, day in enumerate(records.dates):
            label = WEEKDAY_LABELS[day.weekday()]
            week = i // 7 + 1
            if week > 1:
                label = f"{label} (W{week})"
            labels.append(label)
        return labels
