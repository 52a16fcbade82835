"""Attribute lists and the per-entity attribute mappers.

An attribute list is the ``NAME=VALUE,NAME=VALUE`` text after a tag's colon.
``parse_attribute_list`` turns it into a dict of raw values; an
``AttributeMapper`` then reads each value into a builder field.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import Callable
from typing import Dict
from typing import Generic
from typing import List
from typing import Type
from typing import TypeVar

from llhls.builders import InfBuilder
from llhls.builders import PartialSegmentBuilder
from llhls.builders import PartInfBuilder
from llhls.builders import PreloadHintBuilder
from llhls.builders import RenditionReportBuilder
from llhls.builders import ServerControlBuilder
from llhls.builders import SkipBuilder
from llhls.errors import BuilderError
from llhls.errors import ParseAttributeError
from llhls.errors import ParseTagError
from llhls.models import Inf
from llhls.models import PartialSegment
from llhls.models import PartInf
from llhls.models import PreloadHint
from llhls.models import PreloadHintType
from llhls.models import RenditionReport
from llhls.models import ServerControl
from llhls.models import Skip
from llhls.values import optional
from llhls.values import read_decimal
from llhls.values import read_enum
from llhls.values import read_quoted_string
from llhls.values import read_u32
from llhls.values import read_u64
from llhls.values import read_uri
from llhls.values import read_yes_no

logger = logging.getLogger(__name__)

B = TypeVar("B")


def _split_outside_quotes(text: str) -> List[str]:
    """Split on commas outside a quoted-string in one pass.

    An unterminated quote runs to the end of the text.
    """
    elements: List[str] = []
    start = 0
    in_quotes = False
    for index, ch in enumerate(text):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            elements.append(text[start:index])
            start = index + 1
    elements.append(text[start:])
    return elements


def parse_attribute_list(text: str, quote_aware: bool = True) -> Dict[str, str]:
    """Split an attribute list into ``{name: raw_value}``.

    Elements without ``=`` are dropped. Quotes stay part of the raw value. When
    a name repeats, the last value wins. With ``quote_aware=False`` every comma
    splits, including commas inside quoted values.
    """
    elements = _split_outside_quotes(text) if quote_aware else text.split(",")
    attributes: Dict[str, str] = {}
    for element in elements:
        if "=" not in element:
            if element.strip():
                logger.debug(f"Dropping attribute fragment without '=': {element!r}")
            continue
        name, value = element.split("=", 1)
        attributes[name.strip()] = value.strip()
    return attributes


class AttributeOutcome(Enum):
    APPLIED = "applied"
    IGNORED = "ignored"


@dataclass(frozen=True)
class AttributeField:
    """Binds an attribute name to a value reader and a builder field."""

    field_name: str
    reader: Callable[[str, str], Any]


def _tab_list(name: str, value: str):
    text = read_quoted_string(name, value)
    return [item for item in text.split("\t") if item] if text else []


def _independent(name: str, value: str) -> bool:
    # FALSE is the literal PartialSegment.to_tag() writes for an explicit False
    if value == "FALSE":
        return False
    return read_yes_no(name, value)


def _preload_type(name: str, value: str) -> PreloadHintType:
    return read_enum(name, value, PreloadHintType)


class AttributeMapper(Generic[B]):
    """Closed table of the attributes one entity understands."""

    def __init__(self, tag: str, builder_type: Type[B], table: Dict[str, AttributeField]):
        self.tag = tag
        self.builder_type = builder_type
        self.table = table

    def apply(self, builder: B, name: str, value: str) -> AttributeOutcome:
        """Read one attribute into the builder.

        Unknown names are ignored; a known name with a bad value raises
        ParseAttributeError.
        """
        attribute = self.table.get(name)
        if attribute is None:
            logger.debug(f"Ignoring unknown attribute {name} on {self.tag}")
            return AttributeOutcome.IGNORED
        setattr(builder, attribute.field_name, attribute.reader(name, value))
        return AttributeOutcome.APPLIED

    def read(self, text: str, quote_aware: bool = True):
        """Parse a full attribute list and seal the resulting entity."""
        builder = self.builder_type()
        try:
            for name, value in parse_attribute_list(text, quote_aware).items():
                self.apply(builder, name, value)
            return builder.build()  # type: ignore[attr-defined]
        except ParseAttributeError as exc:
            raise ParseTagError(self.tag, f"bad attribute {exc}") from exc
        except BuilderError as exc:
            raise ParseTagError(self.tag, str(exc)) from exc


SERVER_CONTROL = AttributeMapper(
    "EXT-X-SERVER-CONTROL",
    ServerControlBuilder,
    {
        "CAN-BLOCK-RELOAD": AttributeField("can_block_reload", read_yes_no),
        "PART-HOLD-BACK": AttributeField("part_hold_back", read_decimal),
        "CAN-SKIP-UNTIL": AttributeField("can_skip_until", read_decimal),
    },
)

PART_INF = AttributeMapper(
    "EXT-X-PART-INF",
    PartInfBuilder,
    {
        "PART-TARGET": AttributeField("part_target", read_decimal),
    },
)

PARTIAL_SEGMENT = AttributeMapper(
    "EXT-X-PART",
    PartialSegmentBuilder,
    {
        "DURATION": AttributeField("part_duration", read_decimal),
        "URI": AttributeField("uri", read_uri),
        "INDEPENDENT": AttributeField("independent", _independent),
    },
)

SKIP = AttributeMapper(
    "EXT-X-SKIP",
    SkipBuilder,
    {
        "SKIPPED-SEGMENTS": AttributeField("skipped_segments", read_u32),
        # Tab-delimited inside a single quoted value
        "RECENTLY-REMOVED-DATERANGES": AttributeField("recently_removed_dateranges", _tab_list),
    },
)

PRELOAD_HINT = AttributeMapper(
    "EXT-X-PRELOAD-HINT",
    PreloadHintBuilder,
    {
        "TYPE": AttributeField("type", _preload_type),
        "URI": AttributeField("uri", read_uri),
        "BYTERANGE-START": AttributeField("byterange_start", read_u64),
        "BYTERANGE-LENGTH": AttributeField("byterange_length", read_u64),
    },
)

RENDITION_REPORT = AttributeMapper(
    "EXT-X-RENDITION-REPORT",
    RenditionReportBuilder,
    {
        "URI": AttributeField("uri", read_uri),
        "LAST-MSN": AttributeField("last_msn", read_u32),
        "LAST-PART": AttributeField("last_part", read_u32),
    },
)


def read_server_control(text: str, quote_aware: bool = True) -> ServerControl:
    return SERVER_CONTROL.read(text, quote_aware)


def read_part_inf(text: str, quote_aware: bool = True) -> PartInf:
    return PART_INF.read(text, quote_aware)


def read_partial_segment(text: str, quote_aware: bool = True) -> PartialSegment:
    """Read an EXT-X-PART attribute list, with or without the ``#EXT-X-PART:`` prefix."""
    if text.startswith("#EXT-X-PART:"):
        text = text[len("#EXT-X-PART:") :]
    return PARTIAL_SEGMENT.read(text.strip(), quote_aware)


def read_skip(text: str, quote_aware: bool = True) -> Skip:
    return SKIP.read(text, quote_aware)


def read_preload_hint(text: str, quote_aware: bool = True) -> PreloadHint:
    return PRELOAD_HINT.read(text, quote_aware)


def read_rendition_report(text: str, quote_aware: bool = True) -> RenditionReport:
    return RENDITION_REPORT.read(text, quote_aware)


def read_inf(text: str) -> Inf:
    """Read an EXTINF value ``<duration>,[<title>]``.

    Only the text before the first comma is the duration; a value with no
    comma at all is rejected.
    """
    if "," not in text:
        raise ParseTagError("EXTINF", f"missing ',' after duration in {text!r}")
    duration, title = text.split(",", 1)
    builder = InfBuilder()
    try:
        builder.duration = read_decimal("DURATION", duration.strip())
        builder.title = optional(title.strip())
        return builder.build()
    except (ParseAttributeError, BuilderError) as exc:
        raise ParseTagError("EXTINF", str(exc)) from exc
