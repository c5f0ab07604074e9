"""
Manifest window parsing for LiveResilience.

Reduces a DASH MPD or an HLS media playlist to the same TimeWindow shape,
so failover and position tracking never need to know which format a
source uses.
"""

import logging
import math
import re
from typing import Any, Optional, Union

from lxml import etree

from ..models import ParseError, TimeWindow, TransferFormat
from ..utils import duration_to_seconds, now_ms, parse_iso_datetime_ms

logger = logging.getLogger(__name__)

DASH_ATTRIBUTES_ERROR = "Error parsing DASH manifest attributes"
DASH_MALFORMED_ERROR = "Error parsing DASH manifest"
HLS_ERROR = "Error parsing HLS manifest"

_PROGRAM_DATE_TIME_PATTERN = re.compile(r'^#EXT-X-PROGRAM-DATE-TIME:(.*)$', re.MULTILINE)
_EXTINF_PATTERN = re.compile(r'#EXTINF:(\d+(?:\.\d+)?)')


class _DashAttributesError(Exception):
    pass


def _to_float(value: Optional[str]) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _falsy(value: Optional[float]) -> bool:
    return not value or math.isnan(value)


def _load_mpd(manifest: Any) -> Any:
    if isinstance(manifest, str):
        manifest = manifest.encode('utf-8')
    if isinstance(manifest, bytes):
        root = etree.fromstring(manifest)
    elif hasattr(manifest, 'getroot'):
        root = manifest.getroot()
    else:
        root = manifest

    if etree.QName(root).localname == 'MPD':
        return root

    mpd = root.find('.//{*}MPD')
    if mpd is None:
        raise ValueError("No MPD element in manifest")
    return mpd


def get_segment_length_ms(mpd: Any) -> float:
    """
    Length of one media segment in milliseconds.

    Any SegmentTemplate will do (audio or video), only the
    duration/timescale ratio is used and it is the same for both.
    """
    segment_template = next(mpd.iter('{*}SegmentTemplate'))
    duration = _to_float(segment_template.get('duration'))
    timescale = _to_float(segment_template.get('timescale'))
    if not timescale:
        return math.nan
    return 1000 * duration / timescale


def parse_mpd(manifest: Any, reference_epoch_ms: float) -> TimeWindow:
    """
    Extract the live window from a DASH MPD.

    Args:
        manifest: MPD as XML text/bytes or an already parsed lxml element
        reference_epoch_ms: Corrected "now" in epoch milliseconds

    Returns:
        TimeWindow for the manifest

    Raises:
        _DashAttributesError: If availabilityStartTime or the segment length is unusable
        Exception: Any other failure while reading the document
    """
    mpd = _load_mpd(manifest)

    availability_start_time = parse_iso_datetime_ms(mpd.get('availabilityStartTime'))
    time_shift_buffer_depth = duration_to_seconds(mpd.get('timeShiftBufferDepth'))
    one_segment_ms = get_segment_length_ms(mpd)

    if _falsy(availability_start_time) or _falsy(one_segment_ms):
        raise _DashAttributesError()

    window_end_time = reference_epoch_ms - one_segment_ms

    if time_shift_buffer_depth:
        window_start_time = window_end_time - time_shift_buffer_depth * 1000
        return TimeWindow(
            window_start_time=window_start_time,
            window_end_time=window_end_time,
            time_correction=window_start_time / 1000,
        )

    return TimeWindow(
        window_start_time=availability_start_time,
        window_end_time=window_end_time,
        time_correction=0.0,
    )


def get_m3u8_program_date_time(data: str) -> Optional[int]:
    """First #EXT-X-PROGRAM-DATE-TIME in the playlist as epoch ms, or None."""
    match = _PROGRAM_DATE_TIME_PATTERN.search(data)
    if match:
        return parse_iso_datetime_ms(match.group(1))
    return None


def get_m3u8_window_size_in_seconds(data: str) -> int:
    """
    Total duration of the playlist's segments in whole seconds.

    The running total is floored once at the end, segment durations are
    not floored individually.
    """
    total = 0.0
    for match in _EXTINF_PATTERN.finditer(data):
        total += float(match.group(1))
    return math.floor(total)


def parse_m3u8(manifest: Union[str, bytes]) -> Optional[TimeWindow]:
    """
    Extract the live window from an HLS media playlist.

    Returns:
        TimeWindow, or None if the start date or the duration is missing
    """
    if isinstance(manifest, bytes):
        manifest = manifest.decode('utf-8')

    window_start_time = get_m3u8_program_date_time(manifest)
    duration = get_m3u8_window_size_in_seconds(manifest)

    if not window_start_time or not duration:
        return None

    return TimeWindow(
        window_start_time=window_start_time,
        window_end_time=window_start_time + duration * 1000,
    )


def parse(
    manifest: Any,
    transfer_format: TransferFormat,
    reference_epoch_ms: Optional[float] = None
) -> Union[TimeWindow, ParseError]:
    """
    Derive the time window of a stream from its manifest.

    Never raises: failures are returned as a ParseError value so the
    caller can fail over to another source or give up.

    Args:
        manifest: DASH MPD (XML text, bytes or lxml element) or HLS playlist text
        transfer_format: Format of the manifest
        reference_epoch_ms: Device/server corrected "now" in epoch ms
            (defaults to the wall clock; only used for DASH)

    Returns:
        TimeWindow on success, ParseError otherwise

    Example:
        >>> window = parse(playlist_text, TransferFormat.HLS)
        >>> window.window_end_time - window.window_start_time
        32000
    """
    transfer_format = TransferFormat(transfer_format)

    if transfer_format == TransferFormat.DASH:
        if reference_epoch_ms is None:
            reference_epoch_ms = now_ms()
        try:
            return parse_mpd(manifest, reference_epoch_ms)
        except _DashAttributesError:
            result = ParseError(DASH_ATTRIBUTES_ERROR)
        except Exception as e:
            logger.debug(f"DASH manifest extraction failed: {str(e)}")
            result = ParseError(DASH_MALFORMED_ERROR)
    else:
        try:
            window = parse_m3u8(manifest)
        except Exception as e:
            logger.debug(f"HLS manifest extraction failed: {str(e)}")
            window = None
        if window is not None:
            return window
        result = ParseError(HLS_ERROR)

    logger.info(f"Manifest Parse Error: {result.code} {result.error}")
    return result
