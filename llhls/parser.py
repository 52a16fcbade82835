"""Incremental media playlist scanner.

The scanner reads a playlist one line at a time and never looks ahead:

- The first line must be ``#EXTM3U``.
- ``#EXT`` lines are tags, dispatched to the playlist or the in-progress
  segment (see llhls.tags).
- Any other non-blank line not starting with ``#`` is the segment's URI. It
  seals the in-progress segment (with the parts gathered since the previous
  URI) and starts a new one.
- Blank lines and ``#`` comments are skipped.

Segment state still pending at ``#EXT-X-ENDLIST`` or at end of input is
handled by the configured trailing-segment policy: dropped with a warning
(``discard``) or rejected (``error``).
"""

import logging
import os
from enum import Enum
from typing import IO
from typing import Iterable
from typing import Optional
from typing import Union

from llhls.builders import MediaPlaylistBuilder
from llhls.builders import MediaSegmentBuilder
from llhls.config import ParserConfig
from llhls.errors import BuilderError
from llhls.errors import ParsePlaylistError
from llhls.errors import ParseTagError
from llhls.errors import PlaylistErrorKind
from llhls.metrics import ignored_lines
from llhls.metrics import parse_duration
from llhls.metrics import playlists_parsed
from llhls.metrics import segments_parsed
from llhls.models import MediaPlaylist
from llhls.tags import DispatchOutcome
from llhls.tags import MediaSegmentTag
from llhls.tags import apply_segment_tag
from llhls.tags import dispatch
from llhls.tags import split_tag_line
from llhls.telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

HEADER = "#EXTM3U"


class ScanState(Enum):
    HEADER_EXPECTED = "header_expected"
    SCANNING = "scanning"


class PlaylistScanner:
    """Consumes playlist lines in order and builds a MediaPlaylist."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.state = ScanState.HEADER_EXPECTED
        self.line_number = 0
        self.playlist = MediaPlaylistBuilder()
        self.segment = MediaSegmentBuilder()

    def fail(self, message: str, kind: PlaylistErrorKind = PlaylistErrorKind.BUILDER_ERROR) -> ParsePlaylistError:
        return ParsePlaylistError(kind, message, self.line_number)

    def feed(self, line: str) -> None:
        """Process one line (trailing newline optional)."""
        self.line_number += 1
        text = line.rstrip()

        if self.state is ScanState.HEADER_EXPECTED:
            if text != HEADER:
                raise self.fail(f"first line must be {HEADER}, got {text[:40]!r}", PlaylistErrorKind.EXTM3U_TAG_MISSING)
            self.state = ScanState.SCANNING
            return

        if not text.strip():
            ignored_lines.labels(reason="blank").inc()
        elif text.startswith("#EXT"):
            self._read_tag(text)
        elif text.startswith("#"):
            ignored_lines.labels(reason="comment").inc()
        else:
            self._read_uri(text.strip())

    def _read_tag(self, text: str) -> None:
        name, value = split_tag_line(text)
        try:
            outcome = dispatch(name, value, self.playlist, self.segment, self.config.quote_aware_attributes)
        except ParseTagError as exc:
            raise self.fail(f"malformed tag: {exc}") from exc

        if outcome is DispatchOutcome.IGNORED:
            ignored_lines.labels(reason="unknown_tag").inc()
        elif outcome is DispatchOutcome.END_OF_LIST:
            self._discard_pending("EXT-X-ENDLIST")

    def _read_uri(self, text: str) -> None:
        try:
            apply_segment_tag(MediaSegmentTag.URI, text, self.segment)
            segment = self.segment.build()
        except (ParseTagError, BuilderError) as exc:
            raise self.fail(f"cannot complete segment: {exc}") from exc
        self.playlist.media_segments.append(segment)
        segments_parsed.inc()
        self.segment = MediaSegmentBuilder()

    def _discard_pending(self, where: str) -> None:
        if self.segment.is_empty():
            return
        if self.config.trailing_segment_policy == "error":
            raise self.fail(f"segment state without a URI line at {where}")
        logger.warning(
            f"Discarding unsealed segment at {where} (line {self.line_number}): "
            f"{len(self.segment.partial_segments)} part(s), duration={self.segment.duration}"
        )
        self.segment = MediaSegmentBuilder()

    def finish(self) -> MediaPlaylist:
        """Apply the end-of-input rules and seal the playlist."""
        if self.state is ScanState.HEADER_EXPECTED:
            raise self.fail("empty document", PlaylistErrorKind.EXTM3U_TAG_MISSING)
        self._discard_pending("end of input")
        try:
            return self.playlist.build()
        except BuilderError as exc:
            raise self.fail(str(exc)) from exc


def parse_lines(lines: Iterable[str], config: Optional[ParserConfig] = None) -> MediaPlaylist:
    """Parse a playlist from any iterable of lines.

    Raises ParsePlaylistError; read or decode failures raised by the iterable
    are reported with kind IO_ERROR.
    """
    scanner = PlaylistScanner(config)
    with tracer.start_as_current_span("llhls.parse_playlist") as span, parse_duration.time():
        try:
            iterator = iter(lines)
            while True:
                try:
                    line = next(iterator)
                except StopIteration:
                    break
                except (OSError, UnicodeDecodeError) as exc:
                    raise scanner.fail(f"read failed: {exc}", PlaylistErrorKind.IO_ERROR) from exc
                scanner.feed(line)
            playlist = scanner.finish()
        except ParsePlaylistError as exc:
            playlists_parsed.labels(outcome=exc.kind.value).inc()
            span.set_attribute("playlist.error_kind", exc.kind.value)
            logger.debug(f"Playlist parse failed: {exc}")
            raise

        playlists_parsed.labels(outcome="success").inc()
        span.set_attribute("playlist.segments", len(playlist.media_segments))
        span.set_attribute("playlist.rendition_reports", len(playlist.rendition_reports))
        logger.debug(
            f"Parsed playlist: version={playlist.version} target_duration={playlist.target_duration} "
            f"segments={len(playlist.media_segments)}"
        )
        return playlist


def loads(text: str, config: Optional[ParserConfig] = None) -> MediaPlaylist:
    """Parse a playlist held in a string."""
    return parse_lines(text.splitlines(), config)


def read_playlist(
    source: Union[str, os.PathLike, IO[str]],
    config: Optional[ParserConfig] = None,
) -> MediaPlaylist:
    """Parse a playlist from a file path or an open text stream.

    A path is opened and closed here; a stream is read but left open.
    """
    config = config or ParserConfig()
    if hasattr(source, "readline"):
        return parse_lines(source, config)  # type: ignore[arg-type]

    try:
        handle = open(source, "r", encoding=config.encoding, newline="")  # type: ignore[arg-type]
    except OSError as exc:
        playlists_parsed.labels(outcome=PlaylistErrorKind.IO_ERROR.value).inc()
        raise ParsePlaylistError(PlaylistErrorKind.IO_ERROR, f"cannot open {source}: {exc}") from exc
    with handle:
        playlist = parse_lines(handle, config)
    logger.info(f"Read playlist {source}: {len(playlist.media_segments)} segment(s)")
    return playlist
