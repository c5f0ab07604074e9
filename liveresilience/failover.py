"""
Failover policy for LiveResilience.

Decides whether playback should move to an alternate source (CDN) after
a stall or an error.
"""

import logging
from typing import Optional

from .models import LiveSupport, TransferFormat, WindowType

logger = logging.getLogger(__name__)

# Tail guard so a legitimate end of stream is not mistaken for a failure
END_OF_STREAM_TOLERANCE_SECONDS = 5


def is_about_to_end(duration: Optional[float], current_time: Optional[float]) -> bool:
    """True when a known duration is within the end-of-stream tolerance."""
    if not duration or current_time is None:
        return False
    return current_time > duration - END_OF_STREAM_TOLERANCE_SECONDS


def should_static_failover(duration: Optional[float], current_time: Optional[float]) -> bool:
    return not is_about_to_end(duration, current_time)


def should_live_failover(live_support: Optional[LiveSupport], transfer_format: TransferFormat) -> bool:
    # A restartable HLS player keeps its own elapsed-time clock, which cannot
    # be re-anchored across a source swap.
    return not (transfer_format == TransferFormat.HLS and live_support == LiveSupport.RESTARTABLE)


def should_failover(
    remaining_source_count: int,
    duration: Optional[float],
    current_time: Optional[float],
    live_support: Optional[LiveSupport],
    window_type: WindowType,
    transfer_format: TransferFormat
) -> bool:
    """
    Decide whether to fail over to the next source.

    Args:
        remaining_source_count: Number of sources left, including the current one
        duration: Media duration in seconds, falsy if playback has not started
        current_time: Current playback position in seconds
        live_support: Live support tier of the device
        window_type: Window type of the session
        transfer_format: Format of the current source

    Returns:
        True if playback should move to an alternate source

    Example:
        >>> should_failover(2, 100, 95, None, WindowType.STATIC, TransferFormat.DASH)
        True
        >>> should_failover(2, 100, 96, None, WindowType.STATIC, TransferFormat.DASH)
        False
    """
    if remaining_source_count <= 1:
        decision = False
    elif window_type == WindowType.STATIC:
        decision = should_static_failover(duration, current_time)
    else:
        decision = should_live_failover(live_support, transfer_format)

    logger.debug(
        f"Failover decision={decision} (sources={remaining_source_count}, "
        f"time={current_time}/{duration}, window={getattr(window_type, 'value', window_type)}, "
        f"format={getattr(transfer_format, 'value', transfer_format)}, "
        f"live_support={getattr(live_support, 'value', live_support)})"
    )
    return decision
