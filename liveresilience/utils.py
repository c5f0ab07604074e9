"""
Shared utility functions for LiveResilience.

Provides common time utilities used across multiple modules: ISO-8601
duration and date parsing, epoch/video time conversions and segment
arithmetic for live windows.
"""

import math
import re
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Hours, minutes and seconds only. Day (and larger) granularity is not supported.
_DURATION_PATTERN = re.compile(
    r'^PT(\d+(?:[,.]\d+)?H)?(\d+(?:[,.]\d+)?M)?(\d+(?:[,.]\d+)?S)?'
)

# Date, time, optional fraction of any length, optional zone (Z, +HH, +HHMM or +HH:MM)
_DATETIME_PATTERN = re.compile(
    r'^(\d{4}-\d{2}-\d{2})[T ](\d{2}:\d{2}(?::\d{2})?)(?:[.,](\d+))?'
    r'(?:(Z)|([+-]\d{2}):?(\d{2})?)?$',
    re.IGNORECASE
)


def get_attr(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a dict or an object, whichever ``obj`` is."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def now_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000


def _group_value(group: Optional[str]) -> float:
    if not group:
        return 0.0
    return float(group[:-1].replace(',', '.'))


def duration_to_seconds(duration: Optional[str]) -> Optional[float]:
    """
    Convert an ISO-8601 duration to seconds.

    Only the hour, minute and second designators are summed. Fractional
    values are allowed.

    Args:
        duration: Duration string such as "PT2H" or "PT1M30.5S"

    Returns:
        Duration in seconds, or None if the string is unparsable, uses day
        granularity, or amounts to zero

    Example:
        >>> duration_to_seconds("PT1H30M")
        5400.0
        >>> duration_to_seconds("P1DT2H") is None
        True
    """
    if not isinstance(duration, str):
        return None

    match = _DURATION_PATTERN.match(duration)
    if not match:
        return None

    hours, minutes, seconds = match.groups()
    total = _group_value(hours) * 3600 + _group_value(minutes) * 60 + _group_value(seconds)
    return total or None


def _normalise_iso_datetime(text: str) -> str:
    """
    Rewrite a date-time into the subset datetime.fromisoformat accepts on
    every supported Python: six fraction digits and a +HH:MM offset.
    """
    match = _DATETIME_PATTERN.match(text)
    if not match:
        return text

    date, clock, fraction, utc, offset_hours, offset_minutes = match.groups()
    result = f"{date}T{clock}"
    if fraction:
        result += '.' + fraction[:6].ljust(6, '0')
    if utc:
        result += '+00:00'
    elif offset_hours:
        result += f"{offset_hours}:{offset_minutes or '00'}"
    return result


def parse_iso_datetime_ms(value: Optional[str]) -> Optional[int]:
    """
    Parse an ISO-8601 date-time into epoch milliseconds.

    A trailing "Z" is accepted. Values without a timezone are taken as UTC.

    Args:
        value: Date-time string, e.g. "2015-07-07T08:55:10Z"

    Returns:
        Milliseconds since the Unix epoch, or None if the value is not a date

    Example:
        >>> parse_iso_datetime_ms("2015-07-07T08:55:10Z")
        1436259310000
    """
    if not isinstance(value, str):
        return None

    try:
        parsed = datetime.fromisoformat(_normalise_iso_datetime(value.strip()))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return (parsed - EPOCH) // timedelta(milliseconds=1)


def milliseconds_to_seconds(time_in_millis: float) -> int:
    """Whole seconds contained in ``time_in_millis`` (floored)."""
    return math.floor(time_in_millis / 1000)


def convert_to_video_time(epoch_time: float, window_start_epoch_time: float) -> int:
    """
    Convert an epoch time (ms) to a playback position (s) within the window.

    Args:
        epoch_time: Epoch time in milliseconds
        window_start_epoch_time: Window start in epoch milliseconds

    Returns:
        Whole seconds since the start of the window
    """
    return milliseconds_to_seconds(epoch_time - window_start_epoch_time)


def convert_to_seekable_video_time(epoch_time: float, window_start_epoch_time: float) -> float:
    """
    Convert an epoch time (ms) to a seekable playback position (s).

    Never returns less than 0.1, as some devices refuse to seek to zero.
    """
    return max(0.1, convert_to_video_time(epoch_time, window_start_epoch_time))


def calculate_sliding_window_seek_offset(
    time_seconds: float,
    dvr_range_start: float,
    time_correction: float,
    sliding_window_paused_time: float,
    current_time_ms: Optional[float] = None
) -> float:
    """
    Calculate the engine-relative seek offset for a sliding window.

    Args:
        time_seconds: Requested position in seconds
        dvr_range_start: Start of the engine's DVR range in seconds
        time_correction: Window time correction in seconds
        sliding_window_paused_time: Epoch ms at which playback was paused, 0 if not paused
        current_time_ms: Current epoch ms (defaults to the wall clock)

    Returns:
        Offset in seconds relative to the engine's DVR range
    """
    relative_time = time_seconds + time_correction - dvr_range_start

    if sliding_window_paused_time == 0:
        return relative_time

    if current_time_ms is None:
        current_time_ms = now_ms()

    return relative_time - (current_time_ms - sliding_window_paused_time) / 1000


def calculate_segment_number(epoch_time_seconds: float, segment_length: float) -> int:
    """Number of the segment containing ``epoch_time_seconds``."""
    return math.floor(epoch_time_seconds / segment_length)
