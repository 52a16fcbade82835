"""Tag registry and dispatch.

Tags fall into two closed sets: playlist-level tags write into the playlist
builder, segment-level tags write into the in-progress segment builder.
Anything else is reported as ignored rather than raised.
"""

import logging
from enum import Enum
from typing import Optional
from typing import Tuple

from llhls.attributes import read_inf
from llhls.attributes import read_part_inf
from llhls.attributes import read_partial_segment
from llhls.attributes import read_preload_hint
from llhls.attributes import read_rendition_report
from llhls.attributes import read_server_control
from llhls.attributes import read_skip
from llhls.builders import MediaPlaylistBuilder
from llhls.builders import MediaSegmentBuilder
from llhls.errors import ParseAttributeError
from llhls.errors import ParseTagError
from llhls.values import parse_date_time
from llhls.values import parse_uri
from llhls.values import read_u32

logger = logging.getLogger(__name__)


class MediaPlaylistTag(str, Enum):
    TARGET_DURATION = "EXT-X-TARGETDURATION"
    VERSION = "EXT-X-VERSION"
    PART_INF = "EXT-X-PART-INF"
    MEDIA_SEQUENCE = "EXT-X-MEDIA-SEQUENCE"
    SKIP = "EXT-X-SKIP"
    PRELOAD_HINT = "EXT-X-PRELOAD-HINT"
    RENDITION_REPORT = "EXT-X-RENDITION-REPORT"
    SERVER_CONTROL = "EXT-X-SERVER-CONTROL"
    END_LIST = "EXT-X-ENDLIST"

    @classmethod
    def lookup(cls, name: str) -> Optional["MediaPlaylistTag"]:
        try:
            return cls(name)
        except ValueError:
            return None


class MediaSegmentTag(str, Enum):
    INF = "EXTINF"
    PART = "EXT-X-PART"
    PROGRAM_DATE_TIME = "EXT-X-PROGRAM-DATE-TIME"
    # Not a real tag: a bare locator line is routed through here
    URI = "URI"

    @classmethod
    def lookup(cls, name: str) -> Optional["MediaSegmentTag"]:
        if name == cls.URI.value:
            return None
        try:
            return cls(name)
        except ValueError:
            return None


class DispatchOutcome(Enum):
    PLAYLIST_UPDATED = "playlist"
    SEGMENT_UPDATED = "segment"
    END_OF_LIST = "end_of_list"
    IGNORED = "ignored"


VALUELESS_TAGS = {MediaPlaylistTag.END_LIST}


def split_tag_line(line: str) -> Tuple[str, Optional[str]]:
    """Split ``#NAME:value`` into ``(NAME, value)``; value is None without a colon."""
    body = line.rstrip()[1:]
    if ":" not in body:
        return body, None
    name, value = body.split(":", 1)
    return name, value


def _read_u32(tag: str, value: str) -> int:
    try:
        return read_u32(tag, value.strip())
    except ParseAttributeError as exc:
        raise ParseTagError(tag, str(exc)) from exc


def apply_playlist_tag(
    tag: MediaPlaylistTag,
    value: Optional[str],
    builder: MediaPlaylistBuilder,
    quote_aware: bool = True,
) -> DispatchOutcome:
    if tag in VALUELESS_TAGS:
        builder.end_list = True
        return DispatchOutcome.END_OF_LIST
    if value is None:
        raise ParseTagError(tag.value, "missing ':' separator")

    if tag is MediaPlaylistTag.TARGET_DURATION:
        builder.target_duration = _read_u32(tag.value, value)
    elif tag is MediaPlaylistTag.VERSION:
        builder.version = _read_u32(tag.value, value)
    elif tag is MediaPlaylistTag.MEDIA_SEQUENCE:
        builder.media_sequence_number = _read_u32(tag.value, value)
    elif tag is MediaPlaylistTag.PART_INF:
        builder.part_inf = read_part_inf(value, quote_aware)
    elif tag is MediaPlaylistTag.SKIP:
        builder.skip = read_skip(value, quote_aware)
    elif tag is MediaPlaylistTag.PRELOAD_HINT:
        builder.preload_hint = read_preload_hint(value, quote_aware)
    elif tag is MediaPlaylistTag.RENDITION_REPORT:
        builder.rendition_reports.append(read_rendition_report(value, quote_aware))
    elif tag is MediaPlaylistTag.SERVER_CONTROL:
        builder.server_control = read_server_control(value, quote_aware)
    return DispatchOutcome.PLAYLIST_UPDATED


def apply_segment_tag(
    tag: MediaSegmentTag,
    value: Optional[str],
    builder: MediaSegmentBuilder,
    quote_aware: bool = True,
) -> DispatchOutcome:
    if value is None:
        raise ParseTagError(tag.value, "missing ':' separator")

    if tag is MediaSegmentTag.INF:
        inf = read_inf(value)
        builder.duration = inf.duration
        builder.title = inf.title
    elif tag is MediaSegmentTag.PART:
        builder.partial_segments.append(read_partial_segment(value, quote_aware))
    elif tag is MediaSegmentTag.PROGRAM_DATE_TIME:
        try:
            builder.program_date_time = parse_date_time(value)
        except ValueError as exc:
            raise ParseTagError(tag.value, str(exc)) from exc
    elif tag is MediaSegmentTag.URI:
        try:
            builder.uri = parse_uri(value.strip())
        except ValueError as exc:
            raise ParseTagError(tag.value, str(exc)) from exc
    return DispatchOutcome.SEGMENT_UPDATED


def dispatch(
    name: str,
    value: Optional[str],
    playlist: MediaPlaylistBuilder,
    segment: MediaSegmentBuilder,
    quote_aware: bool = True,
) -> DispatchOutcome:
    """Route one tag to the playlist or segment builder.

    Playlist-level tags are tried first, then segment-level ones; a name in
    neither set is ignored.
    """
    playlist_tag = MediaPlaylistTag.lookup(name)
    if playlist_tag is not None:
        return apply_playlist_tag(playlist_tag, value, playlist, quote_aware)
    segment_tag = MediaSegmentTag.lookup(name)
    if segment_tag is not None:
        return apply_segment_tag(segment_tag, value, segment, quote_aware)
    logger.debug(f"Ignoring unrecognized tag #{name}")
    return DispatchOutcome.IGNORED
