"""
Live player module for LiveResilience.

Provides the capability-tiered live players that decorate a base media
engine, and the factory selecting one from a device's live support.
"""

from typing import Optional, Union

from ..models import LiveSupport, TimeWindow
from .base import (
    PlayerState,
    PlayerEventType,
    MediaType,
    MediaPlayer,
    MediaPlayerEvent,
    LivePlayerBase,
    AutoResumingLivePlayer,
    to_live_media_type,
    unpaused_event_check,
)
from .playable import PlayableLivePlayer
from .restartable import ElapsedClock, RestartableLivePlayer
from .seekable import SeekableLivePlayer

LivePlayer = Union[PlayableLivePlayer, RestartableLivePlayer, SeekableLivePlayer]


def create_live_player(
    live_support: LiveSupport,
    media_player: MediaPlayer,
    context,
    time_window: Optional[TimeWindow] = None
) -> LivePlayer:
    """
    Select the live player for a device's live support tier.

    Args:
        live_support: Device capability tier
        media_player: Base media engine to decorate
        context: SessionContext supplying config, timer and clock
        time_window: Live window, required by the restartable tier

    Returns:
        PlayableLivePlayer, RestartableLivePlayer or SeekableLivePlayer

    Raises:
        ValueError: For LiveSupport.NONE, or a restartable player without a time window
    """
    live_support = LiveSupport(live_support)

    if live_support == LiveSupport.PLAYABLE:
        return PlayableLivePlayer(media_player)

    if live_support == LiveSupport.RESTARTABLE:
        if time_window is None:
            raise ValueError("A restartable live player needs the manifest time window")
        return RestartableLivePlayer.from_context(media_player, context, time_window)

    if live_support == LiveSupport.SEEKABLE:
        return SeekableLivePlayer.from_context(media_player, context)

    raise ValueError(f"No live player for live support: {live_support.value}")


__all__ = [
    'PlayerState',
    'PlayerEventType',
    'MediaType',
    'MediaPlayer',
    'MediaPlayerEvent',
    'LivePlayerBase',
    'AutoResumingLivePlayer',
    'to_live_media_type',
    'unpaused_event_check',
    'PlayableLivePlayer',
    'RestartableLivePlayer',
    'SeekableLivePlayer',
    'ElapsedClock',
    'LivePlayer',
    'create_live_player',
]
