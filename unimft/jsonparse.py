"""Reader that builds a JsonValue tree from a stream of JSON text.

The reader is slightly more liberal than the JSON standard. Any value may
stand at the top level, and anything after it is left unread. Inside arrays
and objects a missing or surplus comma is tolerated. A number keeps its text
until ``JsonValue.update`` converts it. ``\\u`` escapes are written out as
UTF-8 one by one, without surrogate pairing.
"""

from __future__ import annotations

import io
from collections import deque
from typing import BinaryIO, Callable, Deque, List, Optional, TextIO, Union

from unimft.jsontree import JsonType, JsonValue
from unimft.utf8 import encode_codepoint

_JSON_WS = frozenset(b" \t\n\r")
# Characters that C's isspace() accepts in the "C" locale.
_C_SPACE = frozenset(b" \t\n\v\f\r")
_DIGITS = frozenset(b"0123456789")
_HEXDIGITS = frozenset(b"0123456789abcdefABCDEF")

_SIMPLE_ESCAPES = {
    ord('"'): b'"',
    ord("/"): b"/",
    ord("\\"): b"\\",
    ord("b"): b"\b",
    ord("f"): b"\f",
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
}

_KEYWORDS = {
    ord("f"): ("false", JsonType.FALSE),
    ord("n"): ("null", JsonType.NULL),
    ord("t"): ("true", JsonType.TRUE),
}


class JsonParseError(ValueError):
    """Raised when the input is not acceptable JSON.

    ``line`` is the line on which the problem was found, or None when the
    input ended too early.
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        if line is None:
            text = message
        else:
            text = f"{message} on line {line} in JSON data"
        super().__init__(text)


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="surrogateescape")


def _show(byte: Optional[int]) -> str:
    return "EOF" if byte is None else chr(byte)


class _Reader:
    """Byte source with push-back and a line counter."""

    def __init__(self, stream: Union[BinaryIO, TextIO]) -> None:
        self._stream = stream
        self._queue: Deque[int] = deque()
        self.line = 1

    def _raw(self) -> Optional[int]:
        if self._queue:
            return self._queue.popleft()
        chunk = self._stream.read(1)
        if not chunk:
            return None
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8", errors="surrogateescape")
        self._queue.extend(chunk[1:])
        return chunk[0]

    def getch(self) -> Optional[int]:
        byte = self._raw()
        if byte == 0x0A:
            self.line += 1
        return byte

    def ungetch(self, byte: int) -> None:
        if byte == 0x0A:
            self.line -= 1
        self._queue.appendleft(byte)

    def getchskip(self) -> Optional[int]:
        byte = self.getch()
        while byte is not None and byte in _JSON_WS:
            byte = self.getch()
        return byte

    def peek(self) -> Optional[int]:
        byte = self.getchskip()
        if byte is not None:
            self.ungetch(byte)
        return byte

    def fail(self, message: str) -> JsonParseError:
        return JsonParseError(message, self.line)


def _early_eof() -> JsonParseError:
    return JsonParseError("premature EOF in JSON data")


def _read_string(reader: _Reader) -> str:
    byte = reader.getch()
    if byte is None:
        raise _early_eof()
    if byte != ord('"'):
        raise reader.fail("missing quote from string")

    out = bytearray()
    escaped = False
    hex_left = 0
    code = 0
    while True:
        byte = reader.getch()
        if byte is None:
            raise _early_eof()
        if hex_left:
            if byte not in _HEXDIGITS:
                raise reader.fail("expected hex digit")
            code = code * 16 + int(chr(byte), 16)
            hex_left -= 1
            if not hex_left:
                out += encode_codepoint(code)
        elif escaped:
            if byte == ord("u"):
                code = 0
                hex_left = 4
            elif byte in _SIMPLE_ESCAPES:
                out += _SIMPLE_ESCAPES[byte]
            else:
                raise reader.fail(f"unknown escape code '\\{chr(byte)}'")
            escaped = False
        elif byte == ord('"'):
            return _decode(bytes(out))
        elif byte == ord("\\"):
            escaped = True
        elif byte >= 0x20:
            out.append(byte)
        elif byte in _C_SPACE:
            raise reader.fail("unescaped whitespace")
        else:
            raise reader.fail(f"unknown byte (0x{byte:02x})")


def _read_number(reader: _Reader) -> str:
    out = bytearray()

    byte = reader.getch()
    if byte == ord("-"):
        out.append(byte)
    elif byte is not None:
        reader.ungetch(byte)

    byte = reader.getch()
    if byte == ord("0"):
        out.append(byte)
        byte = reader.getch()
    elif byte is not None and byte in _DIGITS:
        while byte is not None and byte in _DIGITS:
            out.append(byte)
            byte = reader.getch()
    else:
        raise reader.fail(f"unexpected '{_show(byte)}'")

    if byte == ord("."):
        out.append(byte)
        byte = reader.getch()
        while byte is not None and byte in _DIGITS:
            out.append(byte)
            byte = reader.getch()

    if byte in (ord("e"), ord("E")):
        out.append(byte)
        byte = reader.getch()
        if byte in (ord("+"), ord("-")):
            out.append(byte)
            byte = reader.getch()
        while byte is not None and byte in _DIGITS:
            out.append(byte)
            byte = reader.getch()

    if byte in (ord(","), ord("]"), ord("}")):
        reader.ungetch(byte)
    elif byte is not None and byte not in _C_SPACE:
        raise reader.fail(f"unexpected '{chr(byte)}'")

    return out.decode("ascii")


def _expect_word(reader: _Reader, word: str) -> None:
    # A mismatch on the final character still counts as a match, as in the
    # reference reader.
    expected = word.encode("ascii")
    pos = 0
    byte: Optional[int] = None
    while pos < len(expected):
        byte = reader.getch()
        if byte is None:
            break
        matched = expected[pos] == byte
        pos += 1
        if not matched:
            break
    if pos == len(expected):
        return
    if byte is None:
        raise _early_eof()
    raise reader.fail(f"expected {word}")


def _read_member(reader: _Reader) -> JsonValue:
    name = _read_string(reader)
    if reader.getchskip() != ord(":"):
        raise reader.fail("expected colon in object element")
    value = _read_value(reader)
    value.name = name
    return value


def _read_series(reader: _Reader, kind: JsonType) -> List[JsonValue]:
    if kind is JsonType.ARRAY:
        term = ord("]")
        read_item: Callable[[_Reader], JsonValue] = _read_value
    else:
        term = ord("}")
        read_item = _read_member

    reader.getch()  # the opening bracket, already peeked
    items: List[JsonValue] = []
    while True:
        byte = reader.peek()
        if byte is None:
            raise _early_eof()
        if byte == ord(","):
            if not items:
                raise reader.fail("missing value before comma")
            reader.getch()
        elif byte == term:
            reader.getch()
            return items
        else:
            items.append(read_item(reader))


def _read_value(reader: _Reader) -> JsonValue:
    byte = reader.peek()
    if byte is None:
        raise _early_eof()
    if byte in _KEYWORDS:
        word, kind = _KEYWORDS[byte]
        _expect_word(reader, word)
        return JsonValue(kind)
    if byte == ord("{"):
        return JsonValue(JsonType.OBJECT, _read_series(reader, JsonType.OBJECT))
    if byte == ord("["):
        return JsonValue(JsonType.ARRAY, _read_series(reader, JsonType.ARRAY))
    if byte == ord('"'):
        return JsonValue(JsonType.STRING, _read_string(reader))
    if byte == ord("-") or byte in _DIGITS:
        return JsonValue(JsonType.NUMBER, _read_number(reader))
    raise reader.fail(f"unexpected '{chr(byte)}'")


def parse(stream: Union[BinaryIO, TextIO]) -> JsonValue:
    """Read one JSON value from a text or binary stream.

    Reading stops at the end of the value; a character pushed back by the
    reader after the value is not returned to the stream.
    """
    return _read_value(_Reader(stream))


def parse_text(text: Union[str, bytes]) -> JsonValue:
    """Read one JSON value from a string or bytes."""
    if isinstance(text, (bytes, bytearray)):
        return parse(io.BytesIO(bytes(text)))
    return parse(io.StringIO(text))