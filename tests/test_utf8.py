import pytest

from unimft.utf8 import CodepointRangeError, encode_codepoint


@pytest.mark.parametrize(
    "code",
    [0x00, 0x20, 0x41, 0x7F, 0x80, 0xE9, 0x7FF, 0x800, 0x20AC, 0xFFFD, 0xFFFF,
     0x10000, 0x1F600, 0x10FFFF],
)
def test_matches_standard_utf8(code):
    assert encode_codepoint(code) == chr(code).encode("utf-8")


@pytest.mark.parametrize("code", [0xD800, 0xDBFF, 0xDC00, 0xDFFF])
def test_surrogates_are_encoded_plainly(code):
    assert encode_codepoint(code) == chr(code).encode("utf-8", "surrogatepass")


def test_ascii_is_single_byte():
    assert encode_codepoint(ord("A")) == b"A"


def test_two_byte_example():
    assert encode_codepoint(0xE9) == b"\xc3\xa9"


@pytest.mark.parametrize(
    "code, length",
    [(0x7F, 1), (0x80, 2), (0x7FF, 2), (0x800, 3), (0xFFFF, 3),
     (0x10000, 4), (0x1FFFFF, 4), (0x200000, 5), (0x3FFFFFF, 5),
     (0x4000000, 6), (0x7FFFFFF, 6)],
)
def test_lengths_by_range(code, length):
    assert len(encode_codepoint(code)) == length


@pytest.mark.parametrize("code", [0x200000, 0x3FFFFFF, 0x4000000, 0x7FFFFFF])
def test_long_forms_have_continuation_bytes(code):
    encoded = encode_codepoint(code)
    assert all(b & 0xC0 == 0x80 for b in encoded[1:])
    assert encoded[0] & 0xC0 == 0xC0


@pytest.mark.parametrize("code", [0x200000, 0x3FFFFFF, 0x4000000, 0x7FFFFFF])
def test_long_forms_decode_back(code):
    encoded = encode_codepoint(code)
    tail = len(encoded) - 1
    lead_bits = encoded[0] & (0x7F >> (tail + 1))
    value = lead_bits
    for b in encoded[1:]:
        value = (value << 6) | (b & 0x3F)
    assert value == code


def test_five_byte_lead_marker():
    assert encode_codepoint(0x200000)[0] & 0xF8 == 0xF8


def test_six_byte_lead_marker():
    assert encode_codepoint(0x4000000)[0] & 0xFC == 0xFC


@pytest.mark.parametrize("code", [0x8000000, 0xFFFFFFFF, -1])
def test_out_of_range_raises(code):
    with pytest.raises(CodepointRangeError):
        encode_codepoint(code)


def test_error_is_value_error():
    with pytest.raises(ValueError, match="0x7ffffff"):
        encode_codepoint(0x8000000)