"""Live player for devices with full native control of live position."""

import logging
from typing import Any

from ..models import WindowType
from ..scheduler import AUTO_RESUME_WINDOW_START_CUSHION_SECONDS, AutoResumeScheduler
from ..utils import get_attr
from .base import AutoResumingLivePlayer, MediaPlayer, PlayerState

logger = logging.getLogger(__name__)


class SeekableLivePlayer(AutoResumingLivePlayer):
    """
    Live player that trusts the engine's position and seekable range.

    Pausing on a sliding window arms an auto-resume so playback continues
    before the window start overtakes the paused position.
    """

    @classmethod
    def from_context(cls, media_player: MediaPlayer, context) -> "SeekableLivePlayer":
        return cls(
            media_player,
            context.config.window_type,
            AutoResumeScheduler(context.timer),
            config=context.config,
        )

    def get_current_time(self) -> float:
        return self._media_player.get_current_time()

    def get_seekable_range(self) -> Any:
        return self._media_player.get_seekable_range()

    def play_from(self, offset: float) -> None:
        was_paused = self._media_player.get_state() == PlayerState.PAUSED
        self._media_player.play_from(offset)

        if was_paused and self.window_type == WindowType.SLIDING and not self._auto_resume_disabled(None):
            self._auto_resume_at_start_of_range(self.get_current_time(), self.get_seekable_range())

    def pause(self, opts: Any = None) -> None:
        current_time = self.get_current_time()
        seekable_range = self.get_seekable_range()
        seconds_until_start_of_window = current_time - (get_attr(seekable_range, 'start', 0) or 0)

        if self._auto_resume_disabled(opts):
            self._media_player.pause()
        elif seconds_until_start_of_window <= AUTO_RESUME_WINDOW_START_CUSHION_SECONDS:
            # Too close to the window start to pause: toggle instead.
            logger.debug(f"Pause within {seconds_until_start_of_window}s of window start, toggling")
            self._media_player.pause()
            self._media_player.resume()
        else:
            self._media_player.pause()
            if self.window_type == WindowType.SLIDING:
                self._auto_resume_at_start_of_range(current_time, seekable_range)
