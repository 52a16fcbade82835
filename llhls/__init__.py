"""Low-Latency HLS media playlist parser."""

__version__ = "0.1.0"

from llhls.attributes import parse_attribute_list  # noqa: E402
from llhls.attributes import read_partial_segment  # noqa: E402
from llhls.config import ParserConfig  # noqa: E402
from llhls.errors import BuilderError  # noqa: E402
from llhls.errors import ParseAttributeError  # noqa: E402
from llhls.errors import ParsePlaylistError  # noqa: E402
from llhls.errors import ParseTagError  # noqa: E402
from llhls.errors import PlaylistErrorKind  # noqa: E402
from llhls.models import Inf  # noqa: E402
from llhls.models import MediaPlaylist  # noqa: E402
from llhls.models import MediaSegment  # noqa: E402
from llhls.models import PartialSegment  # noqa: E402
from llhls.models import PartInf  # noqa: E402
from llhls.models import PreloadHint  # noqa: E402
from llhls.models import PreloadHintType  # noqa: E402
from llhls.models import RenditionReport  # noqa: E402
from llhls.models import ServerControl  # noqa: E402
from llhls.models import Skip  # noqa: E402
from llhls.parser import PlaylistScanner  # noqa: E402
from llhls.parser import loads  # noqa: E402
from llhls.parser import parse_lines  # noqa: E402
from llhls.parser import read_playlist  # noqa: E402

__all__ = [
    "BuilderError",
    "Inf",
    "MediaPlaylist",
    "MediaSegment",
    "ParseAttributeError",
    "ParsePlaylistError",
    "ParseTagError",
    "ParserConfig",
    "PartInf",
    "PartialSegment",
    "PlaylistErrorKind",
    "PlaylistScanner",
    "PreloadHint",
    "PreloadHintType",
    "RenditionReport",
    "ServerControl",
    "Skip",
    "loads",
    "parse_attribute_list",
    "parse_lines",
    "read_partial_segment",
    "read_playlist",
]
