"""
Live stream session example.

Demonstrates a complete live session against a simulated media engine:

Pipeline:
1. Load the manifest and derive the live window
2. Pick the live player for the device's live support
3. Gate the "playback started" signal on consistent telemetry
4. Pause on a sliding window and let auto-resume kick in
5. Decide on failover after a (simulated) error
"""

import asyncio
import logging
import sys

from liveresilience import (
    LiveSupport,
    ManifestLoader,
    ManifestLoadError,
    MediaState,
    PlaybackData,
    PlaybackEvent,
    PlayerState,
    ReadyGate,
    SessionConfig,
    SessionContext,
    WindowType,
    create_live_player,
    should_failover,
)

# Configure logging to see liveresilience internal logs
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class SimulatedEngine:
    """Minimal stand-in for a device media engine."""

    def __init__(self):
        self.state = PlayerState.STOPPED
        self.current_time = 0.0
        self.seekable_range = {"start": 0, "end": 7200}
        self.callbacks = []

    def _emit(self, state):
        self.state = state
        for _this_arg, callback in list(self.callbacks):
            callback({"type": state.value.lower(), "state": state, "current_time": self.current_time})

    def initialise_media(self, media_type, source_url, mime_type, source_container, opts=None):
        print(f"Engine initialised: {media_type.value} {source_url}")

    def begin_playback(self):
        self.current_time = 7190
        self._emit(PlayerState.PLAYING)

    def begin_playback_from(self, offset):
        self.current_time = min(offset, 7190)
        self._emit(PlayerState.PLAYING)

    def play_from(self, offset):
        self.current_time = offset

    def pause(self):
        self._emit(PlayerState.PAUSED)

    def resume(self):
        print("Engine resumed")
        self._emit(PlayerState.PLAYING)

    def stop(self):
        self._emit(PlayerState.STOPPED)

    def reset(self):
        self.state = PlayerState.EMPTY

    def get_state(self):
        return self.state

    def get_current_time(self):
        return self.current_time

    def get_seekable_range(self):
        return self.seekable_range

    def get_source(self):
        return None

    def get_mime_type(self):
        return None

    def get_player_element(self):
        return None

    def add_event_callback(self, this_arg, callback):
        self.callbacks.append((this_arg, callback))

    def remove_event_callback(self, this_arg, callback):
        self.callbacks = [(a, c) for a, c in self.callbacks if not (a is this_arg and c == callback)]

    def remove_all_event_callbacks(self):
        self.callbacks = []


async def main(media_url):
    config = SessionConfig(
        window_type=WindowType.SLIDING,
        live_support=LiveSupport.SEEKABLE,
    )
    context = SessionContext(config)

    # Step 1: Load the manifest
    loader = ManifestLoader.from_context(context)
    try:
        result = loader.load(media_url)
        print(f"Manifest window: {result.time_window}")
    except ManifestLoadError as e:
        print(f"Could not load manifest ({e}), continuing with the simulated engine")

    # Step 2: Live player for this device
    engine = SimulatedEngine()
    player = create_live_player(config.live_support, engine, context)
    context.on_close(player.stop)

    # Step 3: Ready gate
    gate = ReadyGate.from_config(config, lambda: print("Playback ready"))
    player.begin_playback()
    gate.evaluate(PlaybackEvent(data=PlaybackData(
        current_time=player.get_current_time(),
        seekable_range=player.get_seekable_range(),
        state=MediaState.PLAYING,
    )))

    # Step 4: Pause 10s after the window start, auto-resume fires 2s later
    engine.current_time = 10
    player.pause()
    await asyncio.sleep(3)

    # Step 5: Failover decision after an error
    decision = should_failover(
        remaining_source_count=2,
        duration=None,
        current_time=player.get_current_time(),
        live_support=config.live_support,
        window_type=config.window_type,
        transfer_format=config.transfer_format,
    )
    print(f"Fail over: {decision}")

    context.close()


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else "https://example.com/live/stream.mpd"
    asyncio.run(main(url))
