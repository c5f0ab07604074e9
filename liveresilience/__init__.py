"""
LiveResilience - Playback Resilience for Adaptive Streaming Clients

A library for keeping live and on-demand playback healthy on constrained
(TV-class) devices.

Features:
- Derive the live time window from DASH (MPD) and HLS (M3U8) manifests
- Decide when to fail over to an alternate source (CDN) and rotate through them
- Track playable position on devices that cannot report live position
- Auto-resume paused live streams before the sliding window overtakes them
- Gate the "playback started" signal until telemetry is self-consistent

Example usage:
    >>> from liveresilience import parse_manifest, should_failover
    >>> from liveresilience import LiveSupport, TransferFormat, WindowType
    >>>
    >>> # Derive the live window
    >>> window = parse_manifest(playlist_text, TransferFormat.HLS)
    >>>
    >>> # Decide whether to move to the next CDN after an error
    >>> should_failover(
    ...     remaining_source_count=2,
    ...     duration=None,
    ...     current_time=10,
    ...     live_support=LiveSupport.SEEKABLE,
    ...     window_type=WindowType.SLIDING,
    ...     transfer_format=TransferFormat.DASH,
    ... )
    True
"""

import logging

__version__ = "0.1.0"
__author__ = "LiveResilience Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Data models
from .models import (
    WindowType,
    TransferFormat,
    LiveSupport,
    MediaState,
    TimeWindow,
    ParseError,
    SeekableRange,
    PlaybackData,
    PlaybackEvent,
    SessionConfig,
)

# Time utilities
from .utils import (
    duration_to_seconds,
    parse_iso_datetime_ms,
    convert_to_video_time,
    convert_to_seekable_video_time,
    calculate_sliding_window_seek_offset,
    calculate_segment_number,
)

# Manifest parsing and loading
from .manifest import (
    ManifestLoader,
    ManifestLoadError,
    ManifestLoadResult,
    load_manifest,
    DASH_ATTRIBUTES_ERROR,
    DASH_MALFORMED_ERROR,
    HLS_ERROR,
)
from .manifest import parse as parse_manifest

# Policies and gates
from .failover import should_failover
from .ready import ReadyGate
from .window_utils import can_pause, can_seek
from .sources import MediaSource, MediaSources

# Scheduling and session
from .scheduler import (
    AutoResumeScheduler,
    AutoResumeError,
    EventLoopTimer,
    PendingResume,
    AUTO_RESUME_WINDOW_START_CUSHION_SECONDS,
)
from .context import SessionContext

# Live players
from .live import (
    PlayableLivePlayer,
    RestartableLivePlayer,
    SeekableLivePlayer,
    create_live_player,
    PlayerState,
    MediaType,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Models
    "WindowType",
    "TransferFormat",
    "LiveSupport",
    "MediaState",
    "TimeWindow",
    "ParseError",
    "SeekableRange",
    "PlaybackData",
    "PlaybackEvent",
    "SessionConfig",

    # Time utilities
    "duration_to_seconds",
    "parse_iso_datetime_ms",
    "convert_to_video_time",
    "convert_to_seekable_video_time",
    "calculate_sliding_window_seek_offset",
    "calculate_segment_number",

    # Manifests
    "parse_manifest",
    "ManifestLoader",
    "ManifestLoadError",
    "ManifestLoadResult",
    "load_manifest",
    "DASH_ATTRIBUTES_ERROR",
    "DASH_MALFORMED_ERROR",
    "HLS_ERROR",

    # Policies and gates
    "should_failover",
    "ReadyGate",
    "can_pause",
    "can_seek",
    "MediaSource",
    "MediaSources",

    # Scheduling and session
    "AutoResumeScheduler",
    "AutoResumeError",
    "EventLoopTimer",
    "PendingResume",
    "AUTO_RESUME_WINDOW_START_CUSHION_SECONDS",
    "SessionContext",

    # Live players
    "PlayableLivePlayer",
    "RestartableLivePlayer",
    "SeekableLivePlayer",
    "create_live_player",
    "PlayerState",
    "MediaType",
]
