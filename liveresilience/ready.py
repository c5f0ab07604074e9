"""
Playback readiness gate for LiveResilience.

Withholds the "playback has started" signal until telemetry is
self-consistent: a usable state and a current time that makes sense for
the window type and the device's live support.
"""

import logging
from typing import Any, Callable, Optional

from .models import LiveSupport, MediaState, WindowType
from .utils import get_attr

logger = logging.getLogger(__name__)


def is_valid_seekable_range(seekable_range: Any) -> bool:
    """A range is usable once it is present and not the {0, 0} "unknown" sentinel."""
    if seekable_range is None:
        return False
    start = get_attr(seekable_range, 'start')
    end = get_attr(seekable_range, 'end')
    if start is None or end is None:
        return False
    return not (start == 0 and end == 0)


class ReadyGate:
    """
    One-shot latch for the "playback ready" signal.

    Args:
        initial_playback_time: Requested start offset in seconds, if any
        window_type: Window type of the session
        live_support: Live support tier of the device
        callback: Called once, when the gate first opens
    """

    def __init__(
        self,
        initial_playback_time: Optional[float],
        window_type: WindowType,
        live_support: LiveSupport,
        callback: Optional[Callable[[], None]] = None
    ):
        self.initial_playback_time = initial_playback_time
        self.window_type = window_type
        self.live_support = live_support
        self.callback = callback
        self.ready = False

    @classmethod
    def from_config(cls, config, callback: Optional[Callable[[], None]] = None) -> "ReadyGate":
        """Create a gate from a SessionConfig."""
        return cls(config.initial_playback_time, config.window_type, config.live_support, callback)

    def evaluate(self, event: Any) -> bool:
        """
        Check a telemetry event and open the gate if it is consistent.

        Args:
            event: PlaybackEvent or dict with ``data`` and ``time_update``

        Returns:
            True once the gate is open. After opening, further calls
            neither re-check the event nor invoke the callback again.
        """
        if self.ready:
            return True

        data = get_attr(event, 'data')
        if data is None:
            return False

        if get_attr(event, 'time_update', False):
            ready = self._is_valid_time(data)
        else:
            ready = self._is_valid_state(data) and self._is_valid_time(data)

        if not ready:
            return False

        self.ready = True
        logger.debug("Playback ready")
        if self.callback:
            self.callback()
        return True

    # Alias matching the event-callback naming used by players
    callback_when_ready = evaluate

    def _is_valid_state(self, data: Any) -> bool:
        state = get_attr(data, 'state')
        return state is not None and state != MediaState.FATAL_ERROR

    def _is_valid_time(self, data: Any) -> bool:
        current_time = get_attr(data, 'current_time')
        if self.window_type == WindowType.STATIC:
            return self._validate_static_time(current_time)
        return self._validate_live_time(current_time, get_attr(data, 'seekable_range'))

    def _validate_static_time(self, current_time: Optional[float]) -> bool:
        if current_time is None:
            return False
        if self.initial_playback_time:
            return current_time > 0
        return current_time >= 0

    def _validate_live_time(self, current_time: Optional[float], seekable_range: Any) -> bool:
        if current_time is None:
            return False

        # A playable device's range cannot be trusted
        if self.live_support == LiveSupport.PLAYABLE:
            return current_time >= 0

        if not is_valid_seekable_range(seekable_range):
            return False

        return get_attr(seekable_range, 'start') <= current_time <= get_attr(seekable_range, 'end')
