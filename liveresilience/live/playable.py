"""Live player for devices that can only play a live stream."""

from .base import LivePlayerBase


class PlayableLivePlayer(LivePlayerBase):
    """
    Thinnest live wrapper.

    The engine cannot report or control its live position, so there is no
    seeking, no position or range query and no pause/resume on this tier.
    """
