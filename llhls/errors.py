"""Exception hierarchy for playlist parsing.

Three layers, each wrapping the one below it:

- ParseAttributeError: one attribute value could not be read.
- ParseTagError: one tag line is malformed (bad structure, bad attribute, or
  a required attribute never set).
- ParsePlaylistError: the only error surfaced by the public entry points.
"""

from enum import Enum
from typing import Optional


class PlaylistErrorKind(str, Enum):
    """Classification of a document-level failure."""

    EXTM3U_TAG_MISSING = "EXTM3U_TAG_MISSING"
    BUILDER_ERROR = "BUILDER_ERROR"
    IO_ERROR = "IO_ERROR"


class ParseAttributeError(ValueError):
    """An attribute value does not match its expected type."""

    def __init__(self, name: str, value: str, reason: str = "invalid value"):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"{name}={value!r}: {reason}")


class BuilderError(ValueError):
    """A builder was sealed while required fields were still unset."""

    def __init__(self, entity: str, missing):
        self.entity = entity
        self.missing = tuple(missing)
        super().__init__(f"{entity} is missing required field(s): {', '.join(self.missing)}")


class ParseTagError(ValueError):
    """A tag line could not be parsed."""

    def __init__(self, tag: str, reason: str):
        self.tag = tag
        self.reason = reason
        super().__init__(f"{tag}: {reason}")


class ParsePlaylistError(Exception):
    """A playlist document could not be parsed."""

    def __init__(self, kind: PlaylistErrorKind, message: str, line_number: Optional[int] = None):
        self.kind = kind
        self.line_number = line_number
        self.message = message
        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"{kind.value}: {message}{location}")
