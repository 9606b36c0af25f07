"""
Circular time-of-day arithmetic for sleep charts.

Clock times are placed on a linear axis whose origin is 22:00, so a normal
night (22:00 through ~10:00) increases monotonically across midnight:

    22:00 -> 0.0    23:30 -> 1.5    00:00 -> 2.0    06:00 -> 8.0    21:00 -> 23.0
"""

import math
import re

AXIS_ORIGIN_HOUR = 22
# Span of the nightly window the axis is tuned for (22:00 to ~10:00)
AXIS_SPAN_HOURS = 12.0

_HHMM_RE = re.compile(r'^\s*(\d{1,2}):(\d{2})\s*$')


def to_axis(text: str | None) -> float | None:
    """
    Map an "HH:MM" clock time onto the axis.

    Returns None for empty text, anything not shaped like HH:MM, or an
    out-of-range hour/minute.
    """
    if not text:
        return None
    match = _HHMM_RE.match(text)
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None

    if hour >= AXIS_ORIGIN_HOUR:
        return hour - AXIS_ORIGIN_HOUR + minute / 60
    return hour + (24 - AXIS_ORIGIN_HOUR) + minute / 60


def correct_cross_midnight(sleep_start: float, wake_end: float) -> float:
    """
    Move a wake time that maps below its sleep time into a later half of the axis.

    Adds 12 hours once. This is tuned for sleep-ins between 22:00 and 09:59;
    for an earlier evening sleep-in (e.g. 21:45 -> 07:00) the corrected wake
    time still maps below the sleep time.
    """
    if wake_end < sleep_start:
        wake_end += AXIS_SPAN_HOURS
    return wake_end


def from_axis(value: float) -> str:
    """
    Render an axis value as "HH:MM".

    The value is reduced modulo 12 first, which undoes the cross-midnight
    correction; times outside 22:00-09:59 therefore do not round-trip.
    """
    reduced = math.fmod(value, AXIS_SPAN_HOURS)
    if reduced < 0:
        reduced += AXIS_SPAN_HOURS

    # Round on whole minutes so a carry of 60 rolls into the hour
    total_minutes = round(reduced * 60) % int(AXIS_SPAN_HOURS * 60)
    axis_hour, minutes = divmod(total_minutes, 60)

    if axis_hour < 24 - AXIS_ORIGIN_HOUR:
        hours = (axis_hour + AXIS_ORIGIN_HOUR) % 24
    else:
        hours = axis_hour - (24 - AXIS_ORIGIN_HOUR)
    return f"{hours:02d}:{minutes:02d}"
