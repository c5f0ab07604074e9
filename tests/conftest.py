import pytest

from liveresilience.context import SessionContext
from liveresilience.live.base import MediaPlayerEvent, PlayerEventType, PlayerState
from liveresilience.models import SeekableRange, SessionConfig

START_EPOCH_MS = 1_544_698_800_000  # 2018-12-13T11:00:00Z


class ManualTimer:
    """Deterministic timer and wall clock; time moves only on advance()."""

    def __init__(self, start_ms=START_EPOCH_MS):
        self.now = float(start_ms)
        self._handles = []

    def now_ms(self):
        return self.now

    def call_later(self, delay, callback):
        handle = _Handle(self.now + delay * 1000, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self._handles if not h.cancelled and not h.fired]

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = [h for h in self.pending if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.now = handle.when
            handle.fired = True
            handle.callback()
        self.now = target


class _Handle:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeMediaPlayer:
    """Records calls and emits events the way a base media engine would."""

    def __init__(self, current_time=0.0, seekable_range=None, state=PlayerState.STOPPED):
        self.current_time = current_time
        self.seekable_range = seekable_range or SeekableRange(0, 0)
        self.state = state
        self.calls = []
        self.callbacks = []
        self.removed = []

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def called(self, name):
        return [c for c in self.calls if c[0] == name]

    def _transition(self, state, event_type):
        self.state = state
        self.emit(MediaPlayerEvent(type=event_type, state=state, current_time=self.current_time))

    def emit(self, event):
        for _this_arg, callback in list(self.callbacks):
            callback(event)

    def emit_status(self):
        self.emit(MediaPlayerEvent(type=PlayerEventType.STATUS, state=self.state, current_time=self.current_time))

    def initialise_media(self, media_type, source_url, mime_type, source_container, opts=None):
        self._record('initialise_media', media_type, source_url, mime_type, source_container, opts)

    def begin_playback(self):
        self._record('begin_playback')
        self._transition(PlayerState.PLAYING, PlayerEventType.PLAYING)

    def begin_playback_from(self, offset):
        self._record('begin_playback_from', offset)
        self._transition(PlayerState.PLAYING, PlayerEventType.PLAYING)

    def play_from(self, offset):
        self._record('play_from', offset)
        self.current_time = offset

    def pause(self):
        self._record('pause')
        self._transition(PlayerState.PAUSED, PlayerEventType.PAUSED)

    def resume(self):
        self._record('resume')
        self._transition(PlayerState.PLAYING, PlayerEventType.PLAYING)

    def stop(self):
        self._record('stop')
        self._transition(PlayerState.STOPPED, PlayerEventType.STOPPED)

    def reset(self):
        self._record('reset')
        self.state = PlayerState.EMPTY

    def get_state(self):
        return self.state

    def get_current_time(self):
        return self.current_time

    def get_seekable_range(self):
        return self.seekable_range

    def get_source(self):
        return "http://example.com/live.mpd"

    def get_mime_type(self):
        return "application/dash+xml"

    def get_player_element(self):
        return "player-element"

    def add_event_callback(self, this_arg, callback):
        self.callbacks.append((this_arg, callback))

    def remove_event_callback(self, this_arg, callback):
        self.removed.append((this_arg, callback))
        self.callbacks = [
            (a, c) for a, c in self.callbacks if not (a is this_arg and c == callback)
        ]

    def remove_all_event_callbacks(self):
        self._record('remove_all_event_callbacks')
        self.callbacks = []


@pytest.fixture
def timer():
    return ManualTimer()


@pytest.fixture
def media_player():
    return FakeMediaPlayer()


@pytest.fixture
def make_context(timer):
    def _make(**config_kwargs):
        return SessionContext(
            config=SessionConfig(**config_kwargs),
            timer=timer,
            clock=timer.now_ms,
        )
    return _make
