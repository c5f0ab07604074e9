"""
Basic LiveResilience usage example.

Demonstrates deriving the live window from an HLS playlist and a DASH
manifest, and asking the failover policy what to do after an error.
"""

from liveresilience import (
    LiveSupport,
    ParseError,
    TransferFormat,
    WindowType,
    parse_manifest,
    should_failover,
)

HLS_PLAYLIST = """#EXTM3U
#EXT-X-VERSION:2
#EXT-X-MEDIA-SEQUENCE:179532414
#EXT-X-TARGETDURATION:8
#EXT-X-PROGRAM-DATE-TIME:2015-07-07T08:55:10Z
#EXTINF:8, no desc
segment-179532414.ts
#EXTINF:8, no desc
segment-179532415.ts
"""

DASH_MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011" type="dynamic"
  availabilityStartTime="1970-01-01T00:01:00Z" timeShiftBufferDepth="PT2H">
  <Period start="PT0S">
    <AdaptationSet mimeType="video/mp4">
      <SegmentTemplate timescale="25" duration="96"/>
      <Representation id="1" bandwidth="1570000"/>
    </AdaptationSet>
  </Period>
</MPD>
"""

def main():
    # HLS: window starts at the first program date time
    print("Parsing HLS playlist...")
    window = parse_manifest(HLS_PLAYLIST, TransferFormat.HLS)
    print(f"Window: {window.window_start_time} -> {window.window_end_time}")
    print(f"Length: {window.window_length_seconds}s")

    # DASH: window end trails "now" by one segment
    print("\nParsing DASH manifest...")
    window = parse_manifest(DASH_MANIFEST, TransferFormat.DASH)
    if isinstance(window, ParseError):
        print(f"Parse failed: {window.error}")
    else:
        print(f"Window length: {window.window_length_seconds}s")
        print(f"Time correction: {window.time_correction}s")

    # Failover after a stall on a sliding window
    decision = should_failover(
        remaining_source_count=2,
        duration=None,
        current_time=120,
        live_support=LiveSupport.RESTARTABLE,
        window_type=WindowType.SLIDING,
        transfer_format=TransferFormat.HLS,
    )
    print(f"\nFail over restartable HLS stream: {decision}")

if __name__ == "__main__":
    main()
