"""
Manifest module for LiveResilience.

Provides live window extraction from DASH and HLS manifests and
HTTP loading of those manifests.
"""

from .parser import (
    parse,
    parse_mpd,
    parse_m3u8,
    get_segment_length_ms,
    get_m3u8_program_date_time,
    get_m3u8_window_size_in_seconds,
    DASH_ATTRIBUTES_ERROR,
    DASH_MALFORMED_ERROR,
    HLS_ERROR,
)

from .loader import (
    ManifestLoader,
    ManifestLoadError,
    ManifestLoadResult,
    load_manifest,
    get_stream_url,
    resolve_stream_url,
)

__all__ = [
    'parse',
    'parse_mpd',
    'parse_m3u8',
    'get_segment_length_ms',
    'get_m3u8_program_date_time',
    'get_m3u8_window_size_in_seconds',
    'DASH_ATTRIBUTES_ERROR',
    'DASH_MALFORMED_ERROR',
    'HLS_ERROR',
    'ManifestLoader',
    'ManifestLoadError',
    'ManifestLoadResult',
    'load_manifest',
    'get_stream_url',
    'resolve_stream_url',
]
