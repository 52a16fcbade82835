"""Shared test fixtures for llhls tests."""

import os

import pytest

# ---------------------------------------------------------------------------
# Keep the environment deterministic BEFORE importing llhls modules
# ---------------------------------------------------------------------------
os.environ.setdefault("ENV", "test")
os.environ.setdefault("LLHLS_LOG_LEVEL", "DEBUG")
os.environ.pop("LLHLS_METRICS_PORT", None)
os.environ.pop("LLHLS_ENABLE_TELEMETRY", None)

HEADER_LINES = [
    "#EXTM3U",
    "#EXT-X-TARGETDURATION:6",
    "#EXT-X-VERSION:9",
    "#EXT-X-PART-INF:PART-TARGET=0.5",
    "#EXT-X-MEDIA-SEQUENCE:0",
    "#EXT-X-SERVER-CONTROL:CAN-BLOCK-RELOAD=YES,PART-HOLD-BACK=1.5,CAN-SKIP-UNTIL=6.0",
]


def make_playlist(*body: str) -> str:
    """Join the standard header with the given body lines."""
    return "\n".join(HEADER_LINES + list(body)) + "\n"


# ---------------------------------------------------------------------------
# Playlist Document Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def minimal_playlist() -> str:
    """Header plus one complete segment."""
    return make_playlist("#EXTINF:6.0,", "file0.mp4")


@pytest.fixture
def ll_hls_playlist() -> str:
    """A live LL-HLS playlist with parts, skip, hint and reports."""
    return "\n".join(
        [
            "#EXTM3U",
            "# Live low-latency rendition",
            "#EXT-X-TARGETDURATION:4",
            "#EXT-X-VERSION:9",
            "#EXT-X-SERVER-CONTROL:CAN-BLOCK-RELOAD=YES,PART-HOLD-BACK=1.0,CAN-SKIP-UNTIL=24.0",
            "#EXT-X-PART-INF:PART-TARGET=0.33334",
            "#EXT-X-MEDIA-SEQUENCE:266",
            '#EXT-X-SKIP:SKIPPED-SEGMENTS=3,RECENTLY-REMOVED-DATERANGES="splice-1\tsplice-2"',
            "#EXT-X-INDEPENDENT-SEGMENTS",
            "",
            "#EXT-X-PROGRAM-DATE-TIME:2019-02-14T02:13:36.106Z",
            "#EXT-X-MAP:URI=\"init.mp4\"",
            "#EXTINF:4.00008,",
            "fileSequence269.mp4",
            '#EXT-X-PART:DURATION=0.33334,URI="filePart270.0.mp4",INDEPENDENT=YES',
            '#EXT-X-PART:DURATION=0.33334,URI="filePart270.1.mp4"',
            '#EXT-X-PART:DURATION=0.33334,URI="filePart270.2.mp4",INDEPENDENT=NO',
            "#EXTINF:4.00008,live",
            "fileSequence270.mp4",
            '#EXT-X-PART:DURATION=0.33334,URI="filePart271.0.mp4",INDEPENDENT=YES',
            '#EXT-X-PRELOAD-HINT:TYPE=PART,URI="filePart271.1.mp4"',
            "",
            '#EXT-X-RENDITION-REPORT:URI="../1M/waitForMSN.php",LAST-MSN=270,LAST-PART=1',
            '#EXT-X-RENDITION-REPORT:URI="../4M/waitForMSN.php",LAST-MSN=270,LAST-PART=0',
            "",
        ]
    )


@pytest.fixture
def write_playlist(tmp_path):
    """Write playlist text to a temporary .m3u8 file and return its path."""

    def _write(text: str, name: str = "playlist.m3u8") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def document():
    """Factory: standard header followed by the given body lines."""
    return make_playlist
