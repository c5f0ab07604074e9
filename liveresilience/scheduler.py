"""
Auto-resume scheduling for LiveResilience.

When a live player pauses on a sliding window, the start of the window
keeps moving towards the paused position. The AutoResumeScheduler arms a
one-shot timer that resumes playback shortly before the window start
catches up, and a listener that cancels the timer when the player does
something other than stay paused.

Everything runs on a single event loop: the timer callback and the event
listener are never concurrent, and whichever happens first wins.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from .utils import get_attr

logger = logging.getLogger(__name__)

# Resume slightly before the computed catch-up time
AUTO_RESUME_WINDOW_START_CUSHION_SECONDS = 8

EventListener = Callable[[Any], None]


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Timer(Protocol):
    """Schedules one-shot callbacks. asyncio event loops satisfy this protocol."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class EventLoopTimer:
    """Timer backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


class AutoResumeError(RuntimeError):
    """Raised when an auto-resume is armed while another is still pending."""


@dataclass
class PendingResume:
    """One auto-resume arming: its timer handle and its event listener."""
    delay_seconds: float
    listener: EventListener
    remove_listener: Callable[[EventListener], None]
    timer_handle: Optional[TimerHandle] = None
    done: bool = field(default=False)

    def finish(self) -> bool:
        """Detach the listener and clear the timer. Returns False if already finished."""
        if self.done:
            return False
        self.done = True
        if self.timer_handle is not None:
            self.timer_handle.cancel()
        self.remove_listener(self.listener)
        return True


def calculate_resume_delay(current_time: float, seekable_range: Any) -> float:
    """
    Seconds to wait before resuming a paused live player.

    Args:
        current_time: Paused playback position in seconds
        seekable_range: Range (object or dict) whose ``start`` is the window start

    Returns:
        Delay in seconds, never negative

    Example:
        >>> calculate_resume_delay(20, {"start": 0, "end": 60})
        12
    """
    start = get_attr(seekable_range, 'start', 0) or 0
    return max(0, current_time - start - AUTO_RESUME_WINDOW_START_CUSHION_SECONDS)


class AutoResumeScheduler:
    """
    Arms at most one auto-resume at a time.

    ``on_resume`` fires at most once per ``schedule`` call, and the listener
    is detached exactly once whichever path (timer, cancelling event or
    explicit ``cancel``) ends the arming.
    """

    def __init__(self, timer: Timer):
        self.timer = timer
        self._pending: Optional[PendingResume] = None

    @property
    def pending(self) -> Optional[PendingResume]:
        return self._pending

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def schedule(
        self,
        current_time: float,
        seekable_range: Any,
        add_listener: Callable[[EventListener], None],
        remove_listener: Callable[[EventListener], None],
        is_cancelling_event: Optional[Callable[[Any], Any]],
        on_resume: Callable[[], None]
    ) -> PendingResume:
        """
        Arm an auto-resume.

        Args:
            current_time: Paused playback position in seconds
            seekable_range: Current seekable range (``start`` in seconds)
            add_listener: Registers an event listener with the event source
            remove_listener: Unregisters that listener
            is_cancelling_event: Predicate telling whether an event cancels the
                resume. When absent, or when it returns a falsy value, the event
                is ignored and the timer keeps running.
            on_resume: Called when the timer fires

        Returns:
            The PendingResume handle for this arming

        Raises:
            AutoResumeError: If a previous arming is still pending
        """
        if self._pending is not None:
            raise AutoResumeError("An auto-resume is already pending")

        delay_seconds = calculate_resume_delay(current_time, seekable_range)

        def fire() -> None:
            if pending.finish():
                self._release(pending)
                logger.debug(f"Auto-resume fired after {delay_seconds}s")
                on_resume()

        def detect_if_unpaused(event: Any) -> None:
            if pending.done or is_cancelling_event is None:
                return
            if is_cancelling_event(event):
                if pending.finish():
                    self._release(pending)
                    logger.debug("Auto-resume cancelled by player event")

        pending = PendingResume(
            delay_seconds=delay_seconds,
            listener=detect_if_unpaused,
            remove_listener=remove_listener,
        )
        self._pending = pending

        logger.debug(f"auto-resume armed: {delay_seconds}s")
        pending.timer_handle = self.timer.call_later(delay_seconds, fire)
        add_listener(detect_if_unpaused)

        return pending

    def cancel(self) -> bool:
        """
        Cancel the outstanding arming, if any.

        Returns:
            True if an arming was cancelled
        """
        pending = self._pending
        if pending is None:
            return False
        self._pending = None
        if pending.finish():
            logger.debug("Auto-resume cancelled")
            return True
        return False

    def _release(self, pending: PendingResume) -> None:
        if self._pending is pending:
            self._pending = None
