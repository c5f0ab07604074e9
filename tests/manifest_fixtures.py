"""Manifest fixtures shared by the parser and loader tests."""

DASH_SLIDING_WINDOW = """<?xml version="1.0" encoding="utf-8"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011"
  type="dynamic"
  availabilityStartTime="1970-01-01T00:01:00Z"
  publishTime="2018-12-13T09:00:41.017742Z"
  minimumUpdatePeriod="PT8H"
  timeShiftBufferDepth="PT2H"
  maxSegmentDuration="PT4S"
  minBufferTime="PT10S"
  profiles="urn:dvb:dash:profile:dvb-dash:2014">
  <Period id="1" start="PT0S">
    <AdaptationSet contentType="audio" mimeType="audio/mp4" codecs="mp4a.40.2">
      <SegmentTemplate timescale="48000" duration="184320"
        initialization="channel-$RepresentationID$.dash"
        media="channel-$RepresentationID$-$Number$.m4s"/>
      <Representation id="pa4=128000" bandwidth="128000"/>
    </AdaptationSet>
    <AdaptationSet contentType="video" mimeType="video/mp4" codecs="avc3.640028">
      <SegmentTemplate timescale="25" duration="96"
        media="channel-$RepresentationID$-$Number$.m4s"/>
      <Representation id="video=1570000" bandwidth="1570000" width="1024" height="576"/>
    </AdaptationSet>
  </Period>
</MPD>
"""

DASH_GROWING_WINDOW = """<?xml version="1.0" encoding="utf-8"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011"
  type="dynamic"
  availabilityStartTime="2018-12-13T10:00:00Z"
  minBufferTime="PT4S"
  suggestedPresentationDelay="PT20S"
  profiles="urn:mpeg:dash:profile:isoff-live:2011">
  <Period id="1" start="PT0S">
    <AdaptationSet mimeType="video/mp4">
      <SegmentTemplate timescale="200" duration="768" startNumber="1543623951"/>
      <Representation id="1" width="1280" height="720" bandwidth="2000000" codecs="avc1.4d401f"/>
    </AdaptationSet>
  </Period>
</MPD>
"""

DASH_BAD_ATTRIBUTES = """<?xml version="1.0" encoding="utf-8"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011"
  type="dynamic"
  availabilityStartTime="not-valid-iso-time">
  <Period start="PT0S">
    <AdaptationSet contentType="video" mimeType="video/mp4">
      <SegmentTemplate timescale="invalid" duration="invalid" media="$RepresentationID$/$Number%06d$.m4s"/>
      <Representation id="1920x1080i25" bandwidth="8606480"/>
    </AdaptationSet>
  </Period>
</MPD>
"""

DASH_NO_SEGMENT_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011"
  type="dynamic"
  availabilityStartTime="2018-12-13T10:00:00Z"
  timeShiftBufferDepth="PT2H">
  <Period start="PT0S">
    <AdaptationSet mimeType="video/mp4">
      <Representation id="1" bandwidth="2000000"/>
    </AdaptationSet>
  </Period>
</MPD>
"""

HLS_SLIDING_WINDOW = (
    '#EXTM3U\n'
    '#EXT-X-VERSION:2\n'
    '## Created with Unified Streaming Platform(version=1.7.9)\n'
    '#EXT-X-MEDIA-SEQUENCE:179532414\n'
    '#EXT-X-TARGETDURATION:8\n'
    '#USP-X-TIMESTAMP-MAP:MPEGTS=2003059584,LOCAL=2015-07-07T08:55:10Z\n'
    '#EXT-X-PROGRAM-DATE-TIME:2015-07-07T08:55:10Z\n'
    '#EXTINF:18.98, no desc\n'
    'content-audio_2=96000-video=1374000-179532414.ts\n'
    '#EXTINF:4, no desc\n'
    'content-audio_2=96000-video=1374000-179532415.ts\n'
    '#EXTINF:2.68, no desc\n'
    'content-audio_2=96000-video=1374000-179532416.ts\n'
    '#EXTINF:6.50, no desc\n'
    'content-audio_2=96000-video=1374000-179532417.ts\n'
)

HLS_INVALID_DATE = (
    '#EXTM3U\n'
    '#EXT-X-VERSION:2\n'
    '#EXT-X-MEDIA-SEQUENCE:179532414\n'
    '#EXT-X-TARGETDURATION:8\n'
    '#EXT-X-PROGRAM-DATE-TIME:invaliddatetime\n'
    '#EXTINF:8, no desc\n'
    'content-audio_2=96000-video=1374000-179532414.ts\n'
)

HLS_MASTER_PLAYLIST = (
    '#EXTM3U\n'
    '#EXT-X-VERSION:2\n'
    '#EXT-X-STREAM-INF:PROGRAM-ID=1,BANDWIDTH=1570000,CODECS="mp4a.40.2,avc1.64001f"\n'
    'live-video=1570000.m3u8\n'
    '#EXT-X-STREAM-INF:PROGRAM-ID=1,BANDWIDTH=2812032\n'
    'live-video=2812032.m3u8\n'
)
