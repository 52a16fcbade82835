"""Sealed playlist entities.

Every entity is immutable once built; ordered collections are tuples. The
mutable counterparts live in llhls.builders.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from enum import Enum
from typing import List
from typing import Optional
from typing import Tuple

from llhls.values import format_date_time
from llhls.values import format_decimal


def _tag(name: str, attrs: List[Tuple[str, str]]) -> str:
    return f"#{name}:" + ",".join(f"{key}={value}" for key, value in attrs)


@dataclass(frozen=True)
class PartInf:
    part_target: float

    def to_tag(self) -> str:
        return _tag("EXT-X-PART-INF", [("PART-TARGET", format_decimal(self.part_target))])


@dataclass(frozen=True)
class ServerControl:
    can_block_reload: bool
    part_hold_back: float
    can_skip_until: float

    def to_tag(self) -> str:
        return _tag(
            "EXT-X-SERVER-CONTROL",
            [
                ("CAN-BLOCK-RELOAD", "YES" if self.can_block_reload else "NO"),
                ("PART-HOLD-BACK", format_decimal(self.part_hold_back)),
                ("CAN-SKIP-UNTIL", format_decimal(self.can_skip_until)),
            ],
        )


@dataclass(frozen=True)
class PartialSegment:
    """One EXT-X-PART entry.

    ``independent`` is tri-state: None means the attribute was absent, which is
    not the same as an explicit INDEPENDENT=NO.
    """

    part_duration: float
    uri: str
    independent: Optional[bool] = None

    def to_tag(self) -> str:
        attrs = [
            ("DURATION", format_decimal(self.part_duration)),
            ("URI", f'"{self.uri}"'),
        ]
        if self.independent is not None:
            # Explicit False serializes as FALSE, not NO.
            attrs.append(("INDEPENDENT", "YES" if self.independent else "FALSE"))
        return _tag("EXT-X-PART", attrs)

    def __str__(self) -> str:
        return self.to_tag()


@dataclass(frozen=True)
class Skip:
    skipped_segments: int
    recently_removed_dateranges: Tuple[str, ...] = ()

    def to_tag(self) -> str:
        attrs = [("SKIPPED-SEGMENTS", str(self.skipped_segments))]
        if self.recently_removed_dateranges:
            attrs.append(("RECENTLY-REMOVED-DATERANGES", '"' + "\t".join(self.recently_removed_dateranges) + '"'))
        return _tag("EXT-X-SKIP", attrs)


class PreloadHintType(str, Enum):
    PART = "PART"
    MAP = "MAP"


@dataclass(frozen=True)
class PreloadHint:
    type: PreloadHintType
    uri: str
    byterange_start: Optional[int] = None
    byterange_length: Optional[int] = None

    def to_tag(self) -> str:
        attrs = [("TYPE", self.type.value), ("URI", f'"{self.uri}"')]
        if self.byterange_start is not None:
            attrs.append(("BYTERANGE-START", str(self.byterange_start)))
        if self.byterange_length is not None:
            attrs.append(("BYTERANGE-LENGTH", str(self.byterange_length)))
        return _tag("EXT-X-PRELOAD-HINT", attrs)


@dataclass(frozen=True)
class RenditionReport:
    uri: str
    last_msn: int
    last_part: int

    def to_tag(self) -> str:
        return _tag(
            "EXT-X-RENDITION-REPORT",
            [("URI", f'"{self.uri}"'), ("LAST-MSN", str(self.last_msn)), ("LAST-PART", str(self.last_part))],
        )


@dataclass(frozen=True)
class Inf:
    """Parsed EXTINF value: ``<duration>,[<title>]``."""

    duration: float
    title: Optional[str] = None

    def to_tag(self) -> str:
        return f"#EXTINF:{format_decimal(self.duration)},{self.title or ''}"


@dataclass(frozen=True)
class MediaSegment:
    duration: float
    uri: str
    partial_segments: Tuple[PartialSegment, ...] = ()
    program_date_time: Optional[datetime] = None
    title: Optional[str] = None

    @property
    def independent_parts(self) -> int:
        return sum(1 for part in self.partial_segments if part.independent is True)

    def to_lines(self) -> List[str]:
        """Tag lines for this segment, ending with its URI line."""
        lines = []
        if self.program_date_time is not None:
            lines.append(f"#EXT-X-PROGRAM-DATE-TIME:{format_date_time(self.program_date_time)}")
        lines.extend(part.to_tag() for part in self.partial_segments)
        lines.append(Inf(self.duration, self.title).to_tag())
        lines.append(self.uri)
        return lines


@dataclass(frozen=True)
class MediaPlaylist:
    target_duration: int
    version: int
    part_inf: PartInf
    media_sequence_number: int
    server_control: ServerControl
    media_segments: Tuple[MediaSegment, ...] = ()
    rendition_reports: Tuple[RenditionReport, ...] = ()
    skip: Optional[Skip] = None
    preload_hint: Optional[PreloadHint] = None
    end_list: bool = field(default=False)

    @property
    def duration(self) -> float:
        return sum(segment.duration for segment in self.media_segments)

    @property
    def last_msn(self) -> Optional[int]:
        """Media sequence number of the last listed segment."""
        if not self.media_segments:
            return None
        skipped = self.skip.skipped_segments if self.skip else 0
        return self.media_sequence_number + skipped + len(self.media_segments) - 1
