"""
Live player for devices that can restart a live stream but cannot
report their position in it.

The player keeps its own elapsed-time clock, which runs while the engine
plays and is re-anchored on each state-change event. The seekable range
is derived from the manifest's time window and the wall clock.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..models import SeekableRange, TimeWindow, WindowType
from ..scheduler import AutoResumeScheduler
from ..utils import get_attr, now_ms
from .base import AutoResumingLivePlayer, MediaPlayer, PlayerEventType, PlayerState

logger = logging.getLogger(__name__)

# Status ticks and metadata do not move the clock
STATE_CHANGE_EVENT_TYPES = (
    PlayerEventType.STOPPED,
    PlayerEventType.BUFFERING,
    PlayerEventType.PLAYING,
    PlayerEventType.PAUSED,
    PlayerEventType.COMPLETE,
    PlayerEventType.ERROR,
)


@dataclass
class ElapsedClock:
    """Playback position clock for engines that cannot report one."""
    anchor_wall_time: Optional[float] = None  # epoch ms
    current_time_at_anchor: float = 0.0       # seconds
    is_running: bool = False

    def start_at(self, wall_time: float, current_time: float) -> None:
        self.anchor_wall_time = wall_time
        self.current_time_at_anchor = current_time
        self.is_running = False

    def current_time(self, wall_time: float) -> float:
        """Position at ``wall_time``: the anchored value plus any time played since."""
        if self.is_running and self.anchor_wall_time is not None:
            return self.current_time_at_anchor + (wall_time - self.anchor_wall_time) / 1000
        return self.current_time_at_anchor

    def reanchor(self, wall_time: float, playing: bool) -> None:
        """Fold the time played since the last anchor into the clock, then re-anchor."""
        self.current_time_at_anchor = self.current_time(wall_time)
        self.anchor_wall_time = wall_time
        self.is_running = playing


class RestartableLivePlayer(AutoResumingLivePlayer):
    """
    Live player with a derived position and seekable range.

    Args:
        media_player: Base media engine
        window_type: Window type of the session
        time_window: Live window from the latest manifest
        scheduler: Auto-resume scheduler owned by this player
        clock: Returns the wall-clock time in epoch ms
        config: Session configuration (override flags)
    """

    def __init__(
        self,
        media_player: MediaPlayer,
        window_type: WindowType,
        time_window: TimeWindow,
        scheduler: AutoResumeScheduler,
        clock: Optional[Callable[[], float]] = None,
        config: Any = None
    ):
        super().__init__(media_player, window_type, scheduler, config)
        self.time_window = time_window
        self.clock = clock or now_ms
        self.elapsed = ElapsedClock()
        self.session_start_wall_time: Optional[float] = None
        self._media_player.add_event_callback(self, self._update_elapsed_clock)

    @classmethod
    def from_context(cls, media_player: MediaPlayer, context, time_window: TimeWindow) -> "RestartableLivePlayer":
        return cls(
            media_player,
            context.config.window_type,
            time_window,
            AutoResumeScheduler(context.timer),
            clock=context.now_ms,
            config=context.config,
        )

    def update_time_window(self, time_window: TimeWindow) -> None:
        """Use the window from a refreshed manifest."""
        self.time_window = time_window

    def _update_elapsed_clock(self, event: Any) -> None:
        state = get_attr(event, 'state')
        event_type = get_attr(event, 'type')
        if state is None or (event_type is not None and event_type not in STATE_CHANGE_EVENT_TYPES):
            return
        self.elapsed.reanchor(self.clock(), state == PlayerState.PLAYING)

    def _start_session(self, current_time: float) -> None:
        self.session_start_wall_time = self.clock()
        self.elapsed.start_at(self.session_start_wall_time, current_time)

    def begin_playback(self) -> None:
        self._start_session(self.time_window.window_length_seconds)
        super().begin_playback()

    def begin_playback_from(self, offset: float) -> None:
        self._start_session(offset)
        super().begin_playback_from(offset)

    def get_current_time(self) -> float:
        return self.elapsed.current_time(self.clock())

    def get_seekable_range(self) -> SeekableRange:
        window_length = self.time_window.window_length_seconds
        if self.session_start_wall_time is None:
            delta = 0.0
        else:
            delta = (self.clock() - self.session_start_wall_time) / 1000

        start = delta if self.window_type == WindowType.SLIDING else 0
        return SeekableRange(start=start, end=window_length + delta)

    def pause(self, opts: Any = None) -> None:
        self._media_player.pause()
        if not self._auto_resume_disabled(opts):
            self._auto_resume_at_start_of_range(self.get_current_time(), self.get_seekable_range())

    def remove_all_event_callbacks(self) -> None:
        super().remove_all_event_callbacks()
        self._media_player.add_event_callback(self, self._update_elapsed_clock)
