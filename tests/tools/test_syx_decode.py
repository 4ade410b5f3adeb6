"""Tests for tools/syx_decode.py."""
from tools.syx_decode import read_frames, describe_frame, describe_patch, value_label
from midi.sysex import build_patch_dump, build_identity_request, parse_patch_dump


IDENTITY_REPLY = [0xF0, 0x7E, 0x00, 0x06, 0x02, 0x00, 0x01, 0x0C, 0x00, 0x00,
                  0x03, 0x00, 0x32, 0x2E, 0x30, 0x31, 0xF7]


def _dump(name="Brit Stack", preset_number=None, effect=11, speed=64):
    params = [0] * 55
    params[8] = 12      # amp_model
    params[46] = effect
    params[48] = speed  # effect_speed
    return build_patch_dump(name, params, preset_number=preset_number)


def test_read_frames(tmp_path):
    path = tmp_path / "capture.syx"
    frames = [_dump(), IDENTITY_REPLY]
    path.write_bytes(b"".join(bytes(f) for f in frames))
    assert read_frames(path) == frames

def test_describe_patch_lists_labels():
    lines = describe_patch(parse_patch_dump(_dump(preset_number=3)))
    assert lines[0] == "Patch 'Brit Stack' (program 4)"
    text = "\n".join(lines)
    assert "(Brit Hi Gain)" in text
    assert "(Compressor)" in text
    assert "(2:1)" in text

def test_value_label():
    assert value_label("reverb_type", 1) == "Spring"
    assert value_label("effect_speed", 64, effect_type=0) is None
    assert value_label("effect_speed", 127, effect_type=7) == "∞:1"
    assert value_label("drive", 10) is None

def test_describe_identity_reply():
    assert describe_frame(IDENTITY_REPLY) == [
        "Identity: manufacturer 00 01 0c, family 00 00, member 03 00, version 2.01"
    ]

def test_describe_malformed_and_other():
    assert describe_frame(_dump()[:30])[0].startswith("Malformed patch dump")
    assert describe_frame(build_identity_request())[0].startswith("Other SysEx: F0 7E 7F")
