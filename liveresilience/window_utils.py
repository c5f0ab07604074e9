"""
Dynamic window helpers for LiveResilience.

Decide whether pausing and seeking are offered on a live stream, given
the device's live support and the manifest's time shift buffer depth.
"""

import math
from typing import Any, Optional

from .models import LiveSupport
from .utils import get_attr

# Shorter DVR windows are not worth seeking in. Milliseconds, like the depth it is compared with.
MINIMUM_SEEKABLE_TIME_SHIFT_BUFFER_MS = 4 * 60 * 1000


def is_time_shift_buffer_big_enough_for_seeking(time_shift_buffer_depth_ms: Optional[float]) -> bool:
    """
    Zero means an unbounded (growing) buffer, which is always big enough.
    """
    if isinstance(time_shift_buffer_depth_ms, bool) or not isinstance(time_shift_buffer_depth_ms, (int, float)):
        return False
    if not math.isfinite(time_shift_buffer_depth_ms):
        return False
    return time_shift_buffer_depth_ms == 0 or time_shift_buffer_depth_ms > MINIMUM_SEEKABLE_TIME_SHIFT_BUFFER_MS


def is_seekable_range_finite(seekable_range: Any) -> bool:
    start = get_attr(seekable_range, 'start')
    end = get_attr(seekable_range, 'end')
    for value in (start, end):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            return False
    return True


def supports_pause(live_support: LiveSupport) -> bool:
    return live_support in (LiveSupport.SEEKABLE, LiveSupport.RESTARTABLE)


def supports_seeking(live_support: LiveSupport, native_strategy: bool = False) -> bool:
    """Restartable devices can seek only when playing through the native strategy."""
    return live_support == LiveSupport.SEEKABLE or (live_support == LiveSupport.RESTARTABLE and native_strategy)


def can_pause(live_support: LiveSupport, time_shift_buffer_depth_ms: Optional[float]) -> bool:
    """
    Whether a live stream may be paused.

    Args:
        live_support: Live support tier of the device
        time_shift_buffer_depth_ms: Manifest timeShiftBufferDepth in ms (0 for growing windows)

    Returns:
        True if pausing should be offered
    """
    return supports_pause(live_support) and is_time_shift_buffer_big_enough_for_seeking(time_shift_buffer_depth_ms)


def can_seek(
    live_support: LiveSupport,
    time_shift_buffer_depth_ms: Optional[float],
    seekable_range: Any,
    native_strategy: bool = False
) -> bool:
    """
    Whether a live stream may be seeked.

    Args:
        live_support: Live support tier of the device
        time_shift_buffer_depth_ms: Manifest timeShiftBufferDepth in ms (0 for growing windows)
        seekable_range: Current seekable range
        native_strategy: True when playback runs through the native strategy

    Returns:
        True if seeking should be offered
    """
    return (
        supports_seeking(live_support, native_strategy)
        and is_time_shift_buffer_big_enough_for_seeking(time_shift_buffer_depth_ms)
        and is_seekable_range_finite(seekable_range)
    )
