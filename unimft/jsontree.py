"""Tree of values produced by the JSON reader, with deferred number parsing."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Optional

# Range of a signed 64-bit integer; integer texts outside it are clamped.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_REAL_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class JsonType(enum.Enum):
    """Kinds of value in a parsed document.

    Numbers start out as NUMBER, holding their text; ``JsonValue.update``
    turns them into INT or REAL.
    """

    NULL = "null"
    TRUE = "true"
    FALSE = "false"
    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    OBJECT = "object"
    INT = "int"
    REAL = "real"


@dataclass
class JsonValue:
    """One node of a parsed document.

    ``value`` holds the text of a STRING or NUMBER, the int of an INT, the
    float of a REAL and the list of child nodes of an ARRAY or OBJECT; it is
    None for NULL, TRUE and FALSE. Members of an OBJECT carry their key in
    ``name``.
    """

    kind: JsonType = JsonType.NULL
    value: Any = None
    name: Optional[str] = None

    def update(self) -> "JsonValue":
        """Convert NUMBER nodes in this tree to INT or REAL, in place."""
        if self.kind is JsonType.NUMBER:
            text = self.value
            if is_integer_text(text):
                self.value = _parse_int_prefix(text)
                self.kind = JsonType.INT
            else:
                self.value = _parse_real_prefix(text)
                self.kind = JsonType.REAL
        elif self.kind in (JsonType.ARRAY, JsonType.OBJECT):
            for child in self.value or ():
                child.update()
        return self


def is_integer_text(text: str) -> bool:
    """Return True if ``text`` has neither a decimal point nor an exponent.

    A leading sign is allowed. The digits themselves are not checked, since
    the text is expected to come from the reader.
    """
    if text[:1] in ("-", "+"):
        text = text[1:]
    return not any(ch in ".eE" for ch in text)


def _parse_int_prefix(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    number = int(match.group())
    return max(INT_MIN, min(INT_MAX, number))


def _parse_real_prefix(text: str) -> float:
    match = _REAL_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group())