"""
Data models for LiveResilience.

Defines the core data structures used throughout the package.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class WindowType(str, Enum):
    """Shape of the media timeline. Fixed for a whole session."""
    STATIC = "staticWindow"    # on-demand media with a duration
    GROWING = "growingWindow"  # live, start fixed, end advancing
    SLIDING = "slidingWindow"  # live, rewind window moving along the timeline


class TransferFormat(str, Enum):
    """Adaptive streaming format of a source."""
    DASH = "dash"
    HLS = "hls"


class LiveSupport(str, Enum):
    """Capability of a device to report and control live position."""
    NONE = "none"
    PLAYABLE = "playable"
    RESTARTABLE = "restartable"
    SEEKABLE = "seekable"

    @property
    def rank(self) -> int:
        return _LIVE_SUPPORT_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, LiveSupport):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, LiveSupport):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, LiveSupport):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, LiveSupport):
            return NotImplemented
        return self.rank >= other.rank


_LIVE_SUPPORT_ORDER = (
    LiveSupport.NONE,
    LiveSupport.PLAYABLE,
    LiveSupport.RESTARTABLE,
    LiveSupport.SEEKABLE,
)


class MediaState(IntEnum):
    """Playback state as reported to the ReadyGate."""
    STOPPED = 0
    PAUSED = 1
    PLAYING = 2
    WAITING = 4
    ENDED = 5
    FATAL_ERROR = 6
    MANIFEST_ERROR = 7


@dataclass(frozen=True)
class TimeWindow:
    """Live time window derived from a manifest.

    A manifest refresh produces a new instance; windows are never mutated.
    """
    window_start_time: float  # epoch milliseconds
    window_end_time: float    # epoch milliseconds
    time_correction: float = 0.0  # seconds

    @property
    def window_length_seconds(self) -> float:
        return (self.window_end_time - self.window_start_time) / 1000


@dataclass(frozen=True)
class ParseError:
    """Tagged error value returned when a manifest cannot be parsed."""
    error: str
    code: str = "MANIFEST_PARSE"


@dataclass(frozen=True)
class SeekableRange:
    """Seekable range in seconds, relative to the playback position time base."""
    start: float
    end: float

    @property
    def is_known(self) -> bool:
        # {0, 0} is the "not yet known" sentinel
        return not (self.start == 0 and self.end == 0)

    def contains(self, time: float) -> bool:
        return self.start <= time <= self.end


@dataclass
class PlaybackData:
    """Telemetry carried by a playback event."""
    current_time: Optional[float] = None
    seekable_range: Optional[SeekableRange] = None
    state: Optional[MediaState] = None
    duration: Optional[float] = None


@dataclass
class PlaybackEvent:
    """Telemetry event consumed by the ReadyGate."""
    data: Optional[PlaybackData] = None
    time_update: bool = False


@dataclass
class SessionConfig:
    """Device and session configuration for a playback session."""
    window_type: WindowType = WindowType.STATIC
    live_support: LiveSupport = LiveSupport.SEEKABLE
    transfer_format: TransferFormat = TransferFormat.DASH
    force_begin_playback_to_end_of_window: bool = False
    disable_auto_resume: bool = False
    initial_playback_time: Optional[float] = None
