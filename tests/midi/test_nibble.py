import pytest
from midi.nibble import decode_nibbles, encode_nibbles, decode_patch_name


def test_decode_empty():
    assert decode_nibbles([]) == []

def test_decode_pairs_high_then_low():
    assert decode_nibbles([0x0A, 0x05]) == [0xA5]
    assert decode_nibbles([0x0F, 0x0F]) == [0xFF]
    assert decode_nibbles([0x00, 0x00, 0x07, 0x0F]) == [0x00, 0x7F]

def test_decode_drops_trailing_odd_nibble():
    assert decode_nibbles([0x03, 0x07, 0x0F]) == [0x37]
    assert decode_nibbles([0x0C]) == []

def test_encode_splits_bytes():
    assert encode_nibbles([0xA5, 0x00, 0x7F]) == [0x0A, 0x05, 0x00, 0x00, 0x07, 0x0F]

def test_encoded_nibbles_stay_sysex_safe():
    assert all(n <= 0x0F for n in encode_nibbles(range(256)))


@pytest.mark.parametrize("nibbles", [
    [0x01, 0x02, 0x0E, 0x0F],
    [0x04, 0x08, 0x06, 0x09, 0x02, 0x00],
    [0x0F] * 142,
])
def test_decode_encode_decode_is_stable(nibbles):
    decoded = decode_nibbles(nibbles)
    assert decode_nibbles(encode_nibbles(decoded)) == decoded


def test_patch_name_trims_trailing_padding():
    nibbles = encode_nibbles(b"Hi" + b" " * 14)
    assert decode_patch_name(nibbles) == "Hi"

def test_patch_name_keeps_leading_and_internal_spaces():
    nibbles = encode_nibbles(b"  Big  Crunch   ")
    assert decode_patch_name(nibbles) == "  Big  Crunch"

def test_patch_name_all_spaces_is_empty():
    assert decode_patch_name(encode_nibbles(b" " * 16)) == ""
