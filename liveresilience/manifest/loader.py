"""
Manifest loading for LiveResilience.

Fetches DASH and HLS manifests over HTTP and hands them to the window
parser. For HLS the master playlist is resolved to its first variant
playlist before parsing.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

import requests

from ..models import ParseError, TimeWindow, TransferFormat
from ..utils import now_ms
from . import parser

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

_DASH_URL_PATTERN = re.compile(r'\.mpd(\?.*)?$')
_HLS_URL_PATTERN = re.compile(r'\.m3u8(\?.*)?$')
_STREAM_INF_PATTERN = re.compile(r'#EXT-X-STREAM-INF:.*[\n\r]+(.*)[\n\r]?')


class ManifestLoadError(Exception):
    """Raised when a manifest cannot be retrieved."""


@dataclass(frozen=True)
class ManifestLoadResult:
    """Outcome of loading one manifest."""
    time_window: Union[TimeWindow, ParseError]
    transfer_format: TransferFormat

    @property
    def ok(self) -> bool:
        return isinstance(self.time_window, TimeWindow)


def get_stream_url(data: str) -> Optional[str]:
    """
    URL of the first variant listed in an HLS master playlist.

    Args:
        data: Master playlist text

    Returns:
        The line following the first #EXT-X-STREAM-INF tag, or None
    """
    match = _STREAM_INF_PATTERN.search(data)
    if match:
        return match.group(1).strip() or None
    return None


def resolve_stream_url(master_url: str, stream_url: str) -> str:
    """Resolve a variant URL relative to the master playlist URL."""
    if stream_url.startswith('http'):
        return stream_url
    base_url = master_url.rsplit('/', 1)[0]
    return f"{base_url}/{stream_url}"


class ManifestLoader:
    """
    Loads manifests and derives their live time window.

    The reference "now" for DASH parsing comes from ``now_fn``, normally a
    SessionContext's server-corrected clock.
    """

    def __init__(
        self,
        now_fn: Optional[Callable[[], float]] = None,
        timeout: int = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the loader.

        Args:
            now_fn: Returns the reference epoch in ms (default: wall clock)
            timeout: Request timeout in seconds (default: 10)
            verify_ssl: Whether to verify SSL certificates
            session: Optional requests session to reuse connections
        """
        self.now_fn = now_fn or now_ms
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.http = session or requests

    @classmethod
    def from_context(cls, context, **kwargs) -> "ManifestLoader":
        """Create a loader whose reference time is the context's server time."""
        return cls(now_fn=context.now_ms, **kwargs)

    def _get(self, url: str, error_message: str) -> requests.Response:
        try:
            response = self.http.get(url, timeout=self.timeout, verify=self.verify_ssl)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"Failed to retrieve {url[:100]}: {str(e)}")
            raise ManifestLoadError(error_message) from e

    def load(self, media_url: str, reference_epoch_ms: Optional[float] = None) -> ManifestLoadResult:
        """
        Fetch a manifest and parse its time window.

        Args:
            media_url: URL of an .mpd or .m3u8 manifest
            reference_epoch_ms: Override for the reference "now" used by DASH

        Returns:
            ManifestLoadResult with a TimeWindow, or a ParseError when the
            manifest was retrieved but could not be parsed

        Raises:
            ManifestLoadError: If the URL is not a manifest or retrieval fails
        """
        if _DASH_URL_PATTERN.search(media_url):
            return self.load_dash(media_url, reference_epoch_ms)

        if _HLS_URL_PATTERN.search(media_url):
            return self.load_hls(media_url)

        raise ManifestLoadError("Invalid media url")

    def load_dash(self, url: str, reference_epoch_ms: Optional[float] = None) -> ManifestLoadResult:
        logger.info(f"Loading DASH manifest: {url[:100]}")
        response = self._get(url, "Network error: Unable to retrieve DASH manifest")

        if not response.content:
            raise ManifestLoadError("Unable to retrieve DASH XML response")

        if reference_epoch_ms is None:
            reference_epoch_ms = self.now_fn()

        time_window = parser.parse(response.content, TransferFormat.DASH, reference_epoch_ms)
        return ManifestLoadResult(time_window=time_window, transfer_format=TransferFormat.DASH)

    def load_hls(self, url: str) -> ManifestLoadResult:
        logger.info(f"Loading HLS master playlist: {url[:100]}")
        response = self._get(url, "Network error: Unable to retrieve HLS master playlist")

        if not response.text:
            raise ManifestLoadError("Unable to retrieve HLS master playlist")

        stream_url = get_stream_url(response.text)
        if not stream_url:
            raise ManifestLoadError("Unable to retrieve playlist url from HLS master playlist")

        return self.load_hls_live_playlist(resolve_stream_url(url, stream_url))

    def load_hls_live_playlist(self, url: str) -> ManifestLoadResult:
        logger.debug(f"Loading HLS live playlist: {url[:100]}")
        response = self._get(url, "Network error: Unable to retrieve HLS live playlist")

        if not response.text:
            raise ManifestLoadError("Unable to retrieve HLS live playlist")

        time_window = parser.parse(response.text, TransferFormat.HLS)
        return ManifestLoadResult(time_window=time_window, transfer_format=TransferFormat.HLS)


def load_manifest(
    media_url: str,
    reference_epoch_ms: Optional[float] = None,
    timeout: int = DEFAULT_TIMEOUT
) -> ManifestLoadResult:
    """
    Fetch and parse a manifest with a default loader.

    Example:
        >>> result = load_manifest("https://example.com/live/stream.mpd")
        >>> result.ok, result.transfer_format
        (True, <TransferFormat.DASH: 'dash'>)
    """
    return ManifestLoader(timeout=timeout).load(media_url, reference_epoch_ms)
