"""Encoding of code points into the extended (up to six byte) UTF-8 form."""

from __future__ import annotations

MAX_CODEPOINT = 0x7FFFFFF

# (upper bound, lead byte marker, number of continuation bytes)
_LAYOUT = (
    (0x7F, 0x00, 0),
    (0x7FF, 0xC0, 1),
    (0xFFFF, 0xE0, 2),
    (0x1FFFFF, 0xF0, 3),
    (0x3FFFFFF, 0xF8, 4),
    (MAX_CODEPOINT, 0xFC, 5),
)


class CodepointRangeError(ValueError):
    """Raised when a code point cannot be encoded."""


def encode_codepoint(code: int) -> bytes:
    """Return the UTF-8 bytes for ``code``.

    Code points up to 0x7ffffff are accepted, using the historical five and
    six byte forms above 0x1fffff. Surrogates are encoded like any other
    value.
    """
    if code < 0:
        raise CodepointRangeError(f"unicode code point cannot be negative: {code}")
    for limit, marker, tail in _LAYOUT:
        if code <= limit:
            break
    else:
        raise CodepointRangeError("unicode code point cannot be >0x7ffffff")

    lead = (marker | (code >> (6 * tail))) & 0xFF
    continuation = (
        0x80 | ((code >> (6 * shift)) & 0x3F) for shift in reversed(range(tail))
    )
    return bytes((lead, *continuation))