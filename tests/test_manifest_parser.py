import math

from lxml import etree

from liveresilience.manifest.parser import (
    DASH_ATTRIBUTES_ERROR,
    DASH_MALFORMED_ERROR,
    HLS_ERROR,
    get_m3u8_program_date_time,
    get_m3u8_window_size_in_seconds,
    get_segment_length_ms,
    parse,
)
from liveresilience.models import ParseError, TimeWindow, TransferFormat

from manifest_fixtures import (
    DASH_BAD_ATTRIBUTES,
    DASH_GROWING_WINDOW,
    DASH_NO_SEGMENT_TEMPLATE,
    DASH_SLIDING_WINDOW,
    HLS_INVALID_DATE,
    HLS_SLIDING_WINDOW,
)

REFERENCE_EPOCH_MS = 1544698800000  # 2018-12-13T11:00:00Z


def test_hls_sliding_window():
    window = parse(HLS_SLIDING_WINDOW, TransferFormat.HLS)
    assert isinstance(window, TimeWindow)
    assert window.window_start_time == 1436259310000
    # 18.98 + 4 + 2.68 + 6.50 = 32.16, floored once
    assert window.window_end_time == 1436259342000
    assert window.time_correction == 0


def test_hls_accepts_bytes():
    window = parse(HLS_SLIDING_WINDOW.encode('utf-8'), TransferFormat.HLS)
    assert window.window_start_time == 1436259310000


def test_hls_invalid_program_date_time():
    result = parse(HLS_INVALID_DATE, TransferFormat.HLS)
    assert result == ParseError(HLS_ERROR)
    assert result.code == "MANIFEST_PARSE"


def test_hls_without_segments_is_an_error():
    playlist = "#EXTM3U\n#EXT-X-PROGRAM-DATE-TIME:2015-07-07T08:55:10Z\n"
    assert parse(playlist, TransferFormat.HLS) == ParseError(HLS_ERROR)


def test_hls_program_date_time_with_compact_offset():
    playlist = HLS_SLIDING_WINDOW.replace(
        "#EXT-X-PROGRAM-DATE-TIME:2015-07-07T08:55:10Z",
        "#EXT-X-PROGRAM-DATE-TIME:2015-07-07T08:55:10.0+0000",
    )
    window = parse(playlist, TransferFormat.HLS)
    assert window.window_start_time == 1436259310000


def test_hls_floors_total_not_each_segment():
    playlist = "#EXTINF:0.6,\na.ts\n#EXTINF:0.6,\nb.ts\n"
    assert get_m3u8_window_size_in_seconds(playlist) == 1


def test_hls_uses_first_program_date_time():
    playlist = (
        "#EXT-X-PROGRAM-DATE-TIME:2015-07-07T08:55:10Z\n"
        "#EXT-X-PROGRAM-DATE-TIME:2015-07-07T09:00:00Z\n"
    )
    assert get_m3u8_program_date_time(playlist) == 1436259310000


def test_dash_growing_window():
    window = parse(DASH_GROWING_WINDOW, TransferFormat.DASH, REFERENCE_EPOCH_MS)
    assert window.window_start_time == 1544695200000
    # one segment of 768 / 200 s behind the reference time
    assert window.window_end_time == 1544698796160
    assert window.time_correction == 0


def test_dash_sliding_window():
    window = parse(DASH_SLIDING_WINDOW, TransferFormat.DASH, REFERENCE_EPOCH_MS)
    assert window.window_end_time == REFERENCE_EPOCH_MS - 3840
    assert window.window_start_time == window.window_end_time - 2 * 60 * 60 * 1000
    assert window.time_correction == window.window_start_time / 1000
    assert window.window_length_seconds == 7200


def test_dash_segment_length_uses_first_template():
    mpd = etree.fromstring(DASH_SLIDING_WINDOW.encode('utf-8'))
    # audio template: 184320 / 48000 s
    assert get_segment_length_ms(mpd) == 3840


def test_dash_accepts_parsed_element():
    mpd = etree.fromstring(DASH_GROWING_WINDOW.encode('utf-8'))
    window = parse(mpd, TransferFormat.DASH, REFERENCE_EPOCH_MS)
    assert window.window_start_time == 1544695200000


def test_dash_accepts_parsed_tree():
    tree = etree.ElementTree(etree.fromstring(DASH_GROWING_WINDOW.encode('utf-8')))
    window = parse(tree, TransferFormat.DASH, REFERENCE_EPOCH_MS)
    assert window.window_start_time == 1544695200000


def test_dash_bad_attributes():
    result = parse(DASH_BAD_ATTRIBUTES, TransferFormat.DASH, REFERENCE_EPOCH_MS)
    assert result == ParseError(DASH_ATTRIBUTES_ERROR)


def test_dash_zero_timescale_is_an_attributes_error():
    manifest = DASH_GROWING_WINDOW.replace('timescale="200"', 'timescale="0"')
    assert parse(manifest, TransferFormat.DASH, REFERENCE_EPOCH_MS) == ParseError(DASH_ATTRIBUTES_ERROR)


def test_dash_malformed_document():
    assert parse("not an MPD", TransferFormat.DASH, REFERENCE_EPOCH_MS) == ParseError(DASH_MALFORMED_ERROR)


def test_dash_missing_segment_template_is_malformed():
    result = parse(DASH_NO_SEGMENT_TEMPLATE, TransferFormat.DASH, REFERENCE_EPOCH_MS)
    assert result == ParseError(DASH_MALFORMED_ERROR)


def test_dash_defaults_reference_to_wall_clock(monkeypatch):
    monkeypatch.setattr('liveresilience.manifest.parser.now_ms', lambda: REFERENCE_EPOCH_MS)
    window = parse(DASH_GROWING_WINDOW, TransferFormat.DASH)
    assert window.window_end_time == 1544698796160


def test_parse_accepts_format_values():
    window = parse(HLS_SLIDING_WINDOW, "hls")
    assert isinstance(window, TimeWindow)


def test_parse_error_is_logged(caplog):
    with caplog.at_level("INFO", logger="liveresilience.manifest.parser"):
        parse("not an MPD", TransferFormat.DASH, REFERENCE_EPOCH_MS)
    assert f"Manifest Parse Error: MANIFEST_PARSE {DASH_MALFORMED_ERROR}" in caplog.text


def test_segment_length_is_nan_for_non_numeric_values():
    mpd = etree.fromstring(DASH_BAD_ATTRIBUTES.encode('utf-8'))
    assert math.isnan(get_segment_length_ms(mpd))
