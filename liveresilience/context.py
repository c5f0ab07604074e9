"""
Per-session context for LiveResilience.

Bundles everything a playback session shares: configuration, the wall
clock, the client/server clock offset and the timer used for
auto-resume. One context is created per session and closed at teardown;
nothing here is process-wide.
"""

import logging
from typing import Callable, Optional

from .models import SessionConfig
from .scheduler import EventLoopTimer, Timer
from .utils import now_ms

logger = logging.getLogger(__name__)


class SessionContext:
    """
    Explicit session context passed to trackers and loaders.

    Args:
        config: Session/device configuration (default: SessionConfig())
        timer: Timer for auto-resume (default: the running asyncio loop)
        clock: Returns the client wall-clock time in epoch ms
        server_offset_ms: Server time minus client time, in ms
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        timer: Optional[Timer] = None,
        clock: Optional[Callable[[], float]] = None,
        server_offset_ms: float = 0.0
    ):
        self.config = config or SessionConfig()
        self.timer = timer or EventLoopTimer()
        self.clock = clock or now_ms
        self.server_offset_ms = server_offset_ms
        self._closers = []
        self.closed = False

    def set_server_offset(self, server_epoch_ms: float) -> float:
        """
        Record the offset between client and server clocks.

        Args:
            server_epoch_ms: Server "now" in epoch ms, e.g. from a UTCTiming source

        Returns:
            The stored offset in milliseconds
        """
        self.server_offset_ms = server_epoch_ms - self.clock()
        logger.info(f"Client/server clock offset: {self.server_offset_ms:.0f}ms")
        return self.server_offset_ms

    def client_now_ms(self) -> float:
        return self.clock()

    def now_ms(self) -> float:
        """Server-corrected current time in epoch ms."""
        return self.clock() + self.server_offset_ms

    def on_close(self, callback: Callable[[], None]) -> None:
        """Register teardown work to run when the session closes."""
        self._closers.append(callback)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        closers, self._closers = self._closers, []
        for callback in reversed(closers):
            callback()
        logger.debug("Session context closed")
