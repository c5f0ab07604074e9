"""
Media sources for LiveResilience.

Keeps the ordered list of sources (one URL per CDN) for a session,
loads the live window from the current source and rotates to the next
source when the failover policy allows it. A failed source is put back
at the end of the list once the failover reset time has passed.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from .failover import should_failover
from .manifest.loader import ManifestLoader, ManifestLoadError
from .models import LiveSupport, TimeWindow, TransferFormat, WindowType
from .utils import get_attr

logger = logging.getLogger(__name__)

DEFAULT_FAILOVER_RESET_TIME_MS = 120000

# Tiers whose position depends on an accurate window start
MANIFEST_LIVE_SUPPORT = (LiveSupport.RESTARTABLE, LiveSupport.SEEKABLE)

_HOST_PATTERN = re.compile(r'\w+?://(.*?)(?:/|$)')


@dataclass(frozen=True)
class MediaSource:
    """One playable URL and the CDN serving it."""
    url: str
    cdn: str


def strip_query_and_hash(url: str) -> str:
    return re.sub(r'[#?].*', '', url)


def hosts_match(first_url: str, second_url: str) -> bool:
    """True when both URLs point at the same host (whole URLs are compared if either has none)."""
    first = strip_query_and_hash(first_url)
    second = strip_query_and_hash(second_url)
    first_host = _HOST_PATTERN.match(first)
    second_host = _HOST_PATTERN.match(second)
    if first_host and second_host:
        return first_host.group(1) == second_host.group(1)
    return first == second


def _to_source(entry: Union[str, dict, MediaSource]) -> MediaSource:
    if isinstance(entry, MediaSource):
        return entry
    if isinstance(entry, str):
        return MediaSource(url=entry, cdn=entry)
    url = get_attr(entry, 'url')
    return MediaSource(url=url, cdn=get_attr(entry, 'cdn', url))


class MediaSources:
    """
    Ordered media sources for one playback session.

    The first source is the current one. Failing over moves it to the
    failed list, from which a timer on the session context returns it
    after ``failover_reset_time_ms``.

    Args:
        sources: URLs, {"url", "cdn"} dicts or MediaSource entries, in priority order
        context: SessionContext supplying config, timer and clock
        loader: ManifestLoader (default: one using the context's server time)
        failover_reset_time_ms: Time before a failed source is available again
        failover_sort: Optional reordering applied to the remaining sources on failover

    Raises:
        ValueError: If no sources are given
    """

    def __init__(
        self,
        sources: Sequence[Union[str, dict, MediaSource]],
        context,
        loader: Optional[ManifestLoader] = None,
        failover_reset_time_ms: float = DEFAULT_FAILOVER_RESET_TIME_MS,
        failover_sort: Optional[Callable[[List[MediaSource]], List[MediaSource]]] = None
    ):
        if not sources:
            raise ValueError("Media sources need at least one url")

        self.context = context
        self.loader = loader or ManifestLoader.from_context(context)
        self.failover_reset_time_ms = failover_reset_time_ms
        self.failover_sort = failover_sort

        self.sources: List[MediaSource] = [_to_source(entry) for entry in sources]
        self.failed_sources: List[MediaSource] = []
        self.time_window: Optional[TimeWindow] = None
        self.transfer_format: Optional[TransferFormat] = None
        self._reset_handles = []

        context.on_close(self.tear_down)

    @property
    def current_source(self) -> Optional[MediaSource]:
        return self.sources[0] if self.sources else None

    @property
    def current_url(self) -> str:
        source = self.current_source
        return source.url if source else ""

    @property
    def current_cdn(self) -> Optional[str]:
        source = self.current_source
        return source.cdn if source else None

    @property
    def available_urls(self) -> List[str]:
        return [source.url for source in self.sources]

    @property
    def available_cdns(self) -> List[str]:
        return [source.cdn for source in self.sources]

    def has_sources_to_failover_to(self) -> bool:
        return len(self.sources) > 1

    def needs_manifest(self) -> bool:
        """
        Whether the current source's manifest must be (re)loaded.

        Only dynamic windows on restartable or seekable devices need one.
        DASH is loaded once per session, HLS on every source change.
        """
        config = self.context.config
        if config.window_type == WindowType.STATIC:
            return False
        if config.live_support not in MANIFEST_LIVE_SUPPORT:
            return False
        return self.transfer_format is None or self.transfer_format == TransferFormat.HLS

    def load_manifest(self) -> TimeWindow:
        """
        Load the live window from the current source, failing over on error.

        Returns:
            The TimeWindow of the first source that loads

        Raises:
            ManifestLoadError: If no remaining source yields a window
        """
        while True:
            url = self.current_url
            try:
                result = self.loader.load(url)
            except ManifestLoadError as e:
                reason = str(e)
            else:
                if result.ok:
                    self.time_window = result.time_window
                    self.transfer_format = result.transfer_format
                    self._log_manifest_loaded()
                    return self.time_window
                reason = get_attr(result.time_window, 'error', 'manifest parse error')

            logger.error(f"Failed to load manifest: {reason}")
            if not self._can_failover():
                raise ManifestLoadError(f"No source could load a manifest (last: {url[:100]})")
            self._rotate()

    def refresh(self) -> TimeWindow:
        """Reload the manifest of the current source."""
        return self.load_manifest()

    def should_failover(
        self,
        current_time: Optional[float] = None,
        duration: Optional[float] = None,
        service_location: Optional[str] = None
    ) -> bool:
        """
        Decide whether the current source should be abandoned.

        A ``service_location`` on the current source's host is the first
        manifest being played, which never fails over.
        """
        if service_location is not None and hosts_match(service_location, self.current_url):
            return False

        return self._can_failover(current_time, duration)

    def failover(
        self,
        current_time: Optional[float] = None,
        duration: Optional[float] = None,
        service_location: Optional[str] = None
    ) -> bool:
        """
        Move to the next source if the failover policy allows it.

        Args:
            current_time: Playback position in seconds when the error occurred
            duration: Media duration in seconds, falsy if not yet known
            service_location: URL the engine was using, if it reported one

        Returns:
            True if playback moved to another source, False otherwise

        Raises:
            ManifestLoadError: If the new source needs a manifest and none loads
        """
        if not self.should_failover(current_time, duration, service_location):
            logger.info(f"Not failing over from {self.current_cdn}")
            return False

        previous_cdn = self.current_cdn
        self._rotate(service_location)
        logger.warning(f"Failing over from {previous_cdn} to {self.current_cdn}")

        if self.needs_manifest():
            self.load_manifest()
        return True

    def _can_failover(self, current_time: Optional[float] = None, duration: Optional[float] = None) -> bool:
        config = self.context.config
        return should_failover(
            remaining_source_count=len(self.sources),
            duration=duration,
            current_time=current_time,
            live_support=config.live_support,
            window_type=config.window_type,
            transfer_format=self.transfer_format or config.transfer_format,
        )

    def _rotate(self, service_location: Optional[str] = None) -> None:
        if not self.has_sources_to_failover_to():
            return

        failed = self.sources.pop(0)
        self.failed_sources.append(failed)
        if self.failover_sort:
            self.sources = list(self.failover_sort(self.sources))

        handle = self.context.timer.call_later(self.failover_reset_time_ms / 1000, self._restore_failed_source)
        self._reset_handles.append(handle)

        if service_location is not None:
            self._move_to_front(service_location)

    def _move_to_front(self, service_location: str) -> None:
        target = strip_query_and_hash(service_location)
        urls = [strip_query_and_hash(source.url) for source in self.sources]
        index = urls.index(target) if target in urls else 0
        self.sources.insert(0, self.sources.pop(index))

    def _restore_failed_source(self) -> None:
        if not self.failed_sources or not self.sources:
            return
        source = self.failed_sources.pop(0)
        self.sources.append(source)
        logger.info(f"{source.cdn} has been added back in to available CDNs")

    def _log_manifest_loaded(self) -> None:
        window = self.time_window
        logger.info(
            f"Loaded {self.transfer_format.value} manifest. "
            f"Window start time [ms]: {window.window_start_time}. "
            f"Window end time [ms]: {window.window_end_time}. "
            f"Offset [s]: {window.time_correction}."
        )

    def tear_down(self) -> None:
        """Cancel pending source resets and forget all state."""
        for handle in self._reset_handles:
            handle.cancel()
        self._reset_handles = []
        self.sources = []
        self.failed_sources = []
        self.time_window = None
        self.transfer_format = None
        logger.debug("Media sources torn down")
