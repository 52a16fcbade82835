"""Readers for the primitive value types used in playlist tags.

Also hosts the two external collaborators the scanner relies on: URI
validation and EXT-X-PROGRAM-DATE-TIME parsing.
"""

import math
import re
import urllib.parse
from datetime import datetime
from datetime import timezone
from typing import Optional
from typing import Type
from typing import TypeVar

from llhls.errors import ParseAttributeError

E = TypeVar("E")

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_DECIMAL_INTEGER = re.compile(r"^[0-9]+$")
_DECIMAL_FLOAT = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_URI_FORBIDDEN = set(' <>"{}|\\^`')
_FRACTION = re.compile(r"\.(\d+)")


def _read_unsigned(name: str, value: str, upper: int) -> int:
    if not _DECIMAL_INTEGER.match(value):
        raise ParseAttributeError(name, value, "expected a decimal integer")
    number = int(value)
    if number > upper:
        raise ParseAttributeError(name, value, f"out of range (max {upper})")
    return number


def read_u32(name: str, value: str) -> int:
    return _read_unsigned(name, value, U32_MAX)


def read_u64(name: str, value: str) -> int:
    return _read_unsigned(name, value, U64_MAX)


def read_decimal(name: str, value: str) -> float:
    """Read a decimal floating-point value; inf and nan are rejected."""
    if not _DECIMAL_FLOAT.match(value):
        raise ParseAttributeError(name, value, "expected a decimal number")
    number = float(value)
    if math.isinf(number):
        raise ParseAttributeError(name, value, "out of range")
    return number


def read_yes_no(name: str, value: str) -> bool:
    if value == "YES":
        return True
    if value == "NO":
        return False
    raise ParseAttributeError(name, value, "expected YES or NO")


def read_quoted_string(name: str, value: str) -> str:
    """Strip the surrounding double quotes of a quoted-string value.

    Unquoted values are accepted as-is; a value with an unbalanced quote is not.
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        inner = value[1:-1]
    else:
        inner = value
    if '"' in inner:
        raise ParseAttributeError(name, value, "unbalanced or embedded double quote")
    return inner


def read_enum(name: str, value: str, enum_type: Type[E]) -> E:
    try:
        return enum_type(value)  # type: ignore[call-arg]
    except ValueError:
        raise ParseAttributeError(name, value, f"expected one of {[m.value for m in enum_type]}")  # type: ignore[attr-defined]


def parse_uri(value: str) -> str:
    """Validate a URI reference and return it unchanged.

    Raises ValueError when the string is empty, carries whitespace, control or
    otherwise forbidden characters, has a broken percent escape, or does not
    split into valid URI components.
    """
    if not value:
        raise ValueError("empty URI")
    for ch in value:
        if ch in _URI_FORBIDDEN or ord(ch) < 0x20 or ord(ch) == 0x7F:
            raise ValueError(f"invalid character {ch!r} in URI {value!r}")
    if _PERCENT_ESCAPE.search(value):
        raise ValueError(f"invalid percent escape in URI {value!r}")
    parts = urllib.parse.urlsplit(value)
    # urlsplit only validates the host part lazily
    _ = parts.port
    if ":" in value.split("/", 1)[0] and not parts.scheme and not value.startswith("/"):
        raise ValueError(f"invalid scheme in URI {value!r}")
    return value


def read_uri(name: str, value: str) -> str:
    try:
        return parse_uri(read_quoted_string(name, value))
    except ValueError as exc:
        if isinstance(exc, ParseAttributeError):
            raise
        raise ParseAttributeError(name, value, str(exc)) from exc


def parse_date_time(value: str) -> datetime:
    """Parse an ISO-8601 date-time with a UTC offset and return it in UTC.

    Naive date-times are rejected.
    """
    text = value.strip()
    # Normalize Z to +00:00 for fromisoformat
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    # fromisoformat only takes up to microsecond precision on older interpreters
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        raise ValueError(f"date-time {value!r} has no UTC offset")
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"date-time {value!r} is out of range in UTC") from exc


def format_decimal(value: float) -> str:
    """Shortest text form of a decimal, without a trailing '.0'."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_date_time(value: datetime) -> str:
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def optional(value: Optional[str]) -> Optional[str]:
    """Map an empty string to None."""
    return value if value else None
