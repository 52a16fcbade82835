"""Mutable accumulators for playlist entities.

A builder starts empty, is written field by field while a tag (or a run of
lines) is read, and is sealed exactly once with ``build()``. Sealing fails with
BuilderError when a required field was never set; optional fields get their
defaults there.
"""

from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from datetime import datetime
from typing import List
from typing import Optional

from llhls.errors import BuilderError
from llhls.models import Inf
from llhls.models import MediaPlaylist
from llhls.models import MediaSegment
from llhls.models import PartialSegment
from llhls.models import PartInf
from llhls.models import PreloadHint
from llhls.models import PreloadHintType
from llhls.models import RenditionReport
from llhls.models import ServerControl
from llhls.models import Skip


class _Builder:
    entity = ""
    required: tuple = ()

    def _check(self) -> None:
        missing = [name for name in self.required if getattr(self, name) is None]
        if missing:
            raise BuilderError(self.entity, missing)

    def is_empty(self) -> bool:
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is not None and value != []:
                return False
        return True


@dataclass
class PartInfBuilder(_Builder):
    entity = "PartInf"
    required = ("part_target",)

    part_target: Optional[float] = None

    def build(self) -> PartInf:
        self._check()
        return PartInf(part_target=self.part_target)  # type: ignore[arg-type]


@dataclass
class ServerControlBuilder(_Builder):
    entity = "ServerControl"
    required = ("can_block_reload", "part_hold_back", "can_skip_until")

    can_block_reload: Optional[bool] = None
    part_hold_back: Optional[float] = None
    can_skip_until: Optional[float] = None

    def build(self) -> ServerControl:
        self._check()
        return ServerControl(
            can_block_reload=self.can_block_reload,  # type: ignore[arg-type]
            part_hold_back=self.part_hold_back,  # type: ignore[arg-type]
            can_skip_until=self.can_skip_until,  # type: ignore[arg-type]
        )


@dataclass
class PartialSegmentBuilder(_Builder):
    entity = "PartialSegment"
    required = ("part_duration", "uri")

    part_duration: Optional[float] = None
    uri: Optional[str] = None
    independent: Optional[bool] = None

    def build(self) -> PartialSegment:
        self._check()
        return PartialSegment(
            part_duration=self.part_duration,  # type: ignore[arg-type]
            uri=self.uri,  # type: ignore[arg-type]
            independent=self.independent,
        )


@dataclass
class SkipBuilder(_Builder):
    entity = "Skip"
    required = ("skipped_segments",)

    skipped_segments: Optional[int] = None
    recently_removed_dateranges: Optional[List[str]] = None

    def build(self) -> Skip:
        self._check()
        return Skip(
            skipped_segments=self.skipped_segments,  # type: ignore[arg-type]
            recently_removed_dateranges=tuple(self.recently_removed_dateranges or ()),
        )


@dataclass
class PreloadHintBuilder(_Builder):
    entity = "PreloadHint"
    required = ("type", "uri")

    type: Optional[PreloadHintType] = None
    uri: Optional[str] = None
    byterange_start: Optional[int] = None
    byterange_length: Optional[int] = None

    def build(self) -> PreloadHint:
        self._check()
        return PreloadHint(
            type=self.type,  # type: ignore[arg-type]
            uri=self.uri,  # type: ignore[arg-type]
            byterange_start=self.byterange_start,
            byterange_length=self.byterange_length,
        )


@dataclass
class RenditionReportBuilder(_Builder):
    entity = "RenditionReport"
    required = ("uri", "last_msn", "last_part")

    uri: Optional[str] = None
    last_msn: Optional[int] = None
    last_part: Optional[int] = None

    def build(self) -> RenditionReport:
        self._check()
        return RenditionReport(
            uri=self.uri,  # type: ignore[arg-type]
            last_msn=self.last_msn,  # type: ignore[arg-type]
            last_part=self.last_part,  # type: ignore[arg-type]
        )


@dataclass
class InfBuilder(_Builder):
    entity = "Inf"
    required = ("duration",)

    duration: Optional[float] = None
    title: Optional[str] = None

    def build(self) -> Inf:
        self._check()
        return Inf(duration=self.duration, title=self.title)  # type: ignore[arg-type]


@dataclass
class MediaSegmentBuilder(_Builder):
    """In-progress segment; parts accumulate until the URI line seals it."""

    entity = "MediaSegment"
    required = ("duration", "uri")

    duration: Optional[float] = None
    uri: Optional[str] = None
    title: Optional[str] = None
    program_date_time: Optional[datetime] = None
    partial_segments: List[PartialSegment] = field(default_factory=list)

    def build(self) -> MediaSegment:
        self._check()
        return MediaSegment(
            duration=self.duration,  # type: ignore[arg-type]
            uri=self.uri,  # type: ignore[arg-type]
            partial_segments=tuple(self.partial_segments),
            program_date_time=self.program_date_time,
            title=self.title,
        )


@dataclass
class MediaPlaylistBuilder(_Builder):
    entity = "MediaPlaylist"
    required = ("target_duration", "version", "part_inf", "media_sequence_number", "server_control")

    target_duration: Optional[int] = None
    version: Optional[int] = None
    part_inf: Optional[PartInf] = None
    media_sequence_number: Optional[int] = None
    server_control: Optional[ServerControl] = None
    skip: Optional[Skip] = None
    preload_hint: Optional[PreloadHint] = None
    end_list: bool = False
    media_segments: List[MediaSegment] = field(default_factory=list)
    rendition_reports: List[RenditionReport] = field(default_factory=list)

    def build(self) -> MediaPlaylist:
        self._check()
        return MediaPlaylist(
            target_duration=self.target_duration,  # type: ignore[arg-type]
            version=self.version,  # type: ignore[arg-type]
            part_inf=self.part_inf,  # type: ignore[arg-type]
            media_sequence_number=self.media_sequence_number,  # type: ignore[arg-type]
            server_control=self.server_control,  # type: ignore[arg-type]
            media_segments=tuple(self.media_segments),
            rendition_reports=tuple(self.rendition_reports),
            skip=self.skip,
            preload_hint=self.preload_hint,
            end_list=self.end_list,
        )
