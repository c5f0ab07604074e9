"""
Media engine contract shared by the live players.

The live players decorate a base media engine (an HTML5-style adapter or
a vendor engine binding). This module names the engine's states, events
and media types, describes the surface the players rely on, and provides
the delegation common to every live support tier.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from ..utils import get_attr

logger = logging.getLogger(__name__)


class PlayerState(str, Enum):
    EMPTY = "EMPTY"          # no source set
    STOPPED = "STOPPED"      # source set but no playback
    BUFFERING = "BUFFERING"  # waiting for more data
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    COMPLETE = "COMPLETE"    # reached the end of the media
    ERROR = "ERROR"


class PlayerEventType(str, Enum):
    STOPPED = "stopped"
    BUFFERING = "buffering"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETE = "complete"
    ERROR = "error"
    STATUS = "status"  # fired regularly during play
    METADATA = "metadata"
    SEEK_ATTEMPTED = "seek-attempted"
    SEEK_FINISHED = "seek-finished"


class MediaType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    LIVE_VIDEO = "live-video"
    LIVE_AUDIO = "live-audio"


@dataclass
class MediaPlayerEvent:
    """Event emitted by the base media engine."""
    type: PlayerEventType
    state: Optional[PlayerState] = None
    current_time: Optional[float] = None
    seekable_range: Any = None
    duration: Optional[float] = None


EventCallback = Callable[[Any], None]


class MediaPlayer(Protocol):
    """Surface of the base media engine decorated by the live players."""

    def initialise_media(self, media_type, source_url, mime_type, source_container, opts=None) -> None: ...
    def begin_playback(self) -> None: ...
    def begin_playback_from(self, offset: float) -> None: ...
    def play_from(self, offset: float) -> None: ...
    def pause(self) -> None: ...
    def resume(self) -> None: ...
    def stop(self) -> None: ...
    def reset(self) -> None: ...
    def get_state(self) -> PlayerState: ...
    def get_current_time(self) -> float: ...
    def get_seekable_range(self) -> Any: ...
    def get_source(self) -> Optional[str]: ...
    def get_mime_type(self) -> Optional[str]: ...
    def get_player_element(self) -> Any: ...
    def add_event_callback(self, this_arg: Any, callback: EventCallback) -> None: ...
    def remove_event_callback(self, this_arg: Any, callback: EventCallback) -> None: ...
    def remove_all_event_callbacks(self) -> None: ...


def to_live_media_type(media_type: MediaType) -> MediaType:
    """Map VIDEO/AUDIO requests to their live equivalents."""
    if media_type in (MediaType.AUDIO, MediaType.LIVE_AUDIO):
        return MediaType.LIVE_AUDIO
    return MediaType.LIVE_VIDEO


def unpaused_event_check(event: Any) -> Optional[bool]:
    """
    Whether an engine event means the player left the paused state.

    Status events and events without a state say nothing about pausing
    and yield None.
    """
    if event is None:
        return None
    state = get_attr(event, 'state')
    # A status tick can still carry the state from before the pause
    if not state or get_attr(event, 'type') == PlayerEventType.STATUS:
        return None
    return state != PlayerState.PAUSED


class LivePlayerBase:
    """Delegation shared by the Playable, Restartable and Seekable players."""

    def __init__(self, media_player: MediaPlayer):
        self._media_player = media_player

    @property
    def media_player(self) -> MediaPlayer:
        return self._media_player

    def initialise_media(self, media_type, source_url, mime_type, source_container, opts=None) -> None:
        self._media_player.initialise_media(
            to_live_media_type(media_type), source_url, mime_type, source_container, opts
        )

    def begin_playback(self) -> None:
        self._media_player.begin_playback()

    def stop(self) -> None:
        self._media_player.stop()

    def reset(self) -> None:
        self._media_player.reset()

    def get_state(self) -> PlayerState:
        return self._media_player.get_state()

    def get_source(self) -> Optional[str]:
        return self._media_player.get_source()

    def get_mime_type(self) -> Optional[str]:
        return self._media_player.get_mime_type()

    def get_player_element(self) -> Any:
        return self._media_player.get_player_element()

    def add_event_callback(self, this_arg: Any, callback: EventCallback) -> None:
        self._media_player.add_event_callback(this_arg, callback)

    def remove_event_callback(self, this_arg: Any, callback: EventCallback) -> None:
        self._media_player.remove_event_callback(this_arg, callback)

    def remove_all_event_callbacks(self) -> None:
        self._media_player.remove_all_event_callbacks()


class AutoResumingLivePlayer(LivePlayerBase):
    """
    Base for live players that can pause and resume themselves.

    Owns one AutoResumeScheduler. Any outstanding auto-resume is cancelled
    on stop, reset and callback removal so nothing resumes after teardown.
    """

    def __init__(self, media_player: MediaPlayer, window_type, scheduler, config=None):
        super().__init__(media_player)
        self.window_type = window_type
        self.scheduler = scheduler
        self.config = config

    @property
    def _force_begin_playback_to_end_of_window(self) -> bool:
        return bool(get_attr(self.config, 'force_begin_playback_to_end_of_window', False))

    def _auto_resume_disabled(self, opts: Any) -> bool:
        disabled = get_attr(opts, 'disable_auto_resume')
        if disabled is None:
            disabled = get_attr(self.config, 'disable_auto_resume', False)
        return bool(disabled)

    def begin_playback(self) -> None:
        if self._force_begin_playback_to_end_of_window:
            self._media_player.begin_playback_from(float('inf'))
        else:
            self._media_player.begin_playback()

    def begin_playback_from(self, offset: float) -> None:
        self._media_player.begin_playback_from(offset)

    def resume(self) -> None:
        self._media_player.resume()

    def _auto_resume_at_start_of_range(self, current_time: float, seekable_range: Any) -> None:
        # only one auto-resume may be outstanding per pause
        self.scheduler.cancel()
        self.scheduler.schedule(
            current_time,
            seekable_range,
            lambda callback: self._media_player.add_event_callback(self, callback),
            lambda callback: self._media_player.remove_event_callback(self, callback),
            unpaused_event_check,
            self.resume,
        )

    def cancel_auto_resume(self) -> bool:
        return self.scheduler.cancel()

    def stop(self) -> None:
        self.cancel_auto_resume()
        super().stop()

    def reset(self) -> None:
        self.cancel_auto_resume()
        super().reset()

    def remove_event_callback(self, this_arg: Any, callback: EventCallback) -> None:
        self.cancel_auto_resume()
        super().remove_event_callback(this_arg, callback)

    def remove_all_event_callbacks(self) -> None:
        self.cancel_auto_resume()
        super().remove_all_event_callbacks()
