"""Line 6 Pocket POD SysEx/channel message builders and parsers.

Pocket POD SysEx format::

    F0 00 01 0C 01 <opcode> <data...> F7
       |        |   |
       |        |   +- 00 = dump request, 01 = dump
       |        +----- device id
       +-------------- Line 6 manufacturer id

Patch dumps (opcode 01)::

    F0 00 01 0C 01 01 00 <program#> <version> <142 nibbles> F7   stored preset
    F0 00 01 0C 01 01 01 <version> <142 nibbles> F7              edit buffer

The 142 nibbles decode to 71 bytes: 55 parameter bytes then a 16 character
space-padded ASCII name.
"""
from __future__ import annotations
from collections.abc import Sequence
from dataclasses import dataclass

from midi.nibble import decode_nibbles, decode_patch_name, encode_nibbles
from midi.params import PATCH_PARAM_MAP
from model.patch import PatchRecord

LINE6_MANUFACTURER_ID = [0x00, 0x01, 0x0C]
POCKET_POD_DEVICE_ID = 0x01
MIDI_CHANNEL = 0  # channel 1, zero-based

SYSEX_START = 0xF0
SYSEX_END = 0xF7

OPCODE_PATCH_DUMP_REQUEST = 0x00
OPCODE_PATCH_DUMP = 0x01

DUMP_TYPE_PROGRAM = 0x00      # stored preset
DUMP_TYPE_EDIT_BUFFER = 0x01
DUMP_TYPE_ALL_PROGRAMS = 0x02

IDENTITY_REQUEST = [0xF0, 0x7E, 0x7F, 0x06, 0x01, 0xF7]

NUM_PRESETS = 124
PATCH_DATA_SIZE = 71          # decoded bytes per patch
PATCH_PARAM_SIZE = 55         # parameter bytes before the name
PATCH_NAME_LENGTH = 16
PATCH_NIBBLE_SIZE = PATCH_DATA_SIZE * 2

_HEADER = [SYSEX_START, *LINE6_MANUFACTURER_ID, POCKET_POD_DEVICE_ID]
_EDIT_BUFFER_PAYLOAD_START = 8
_PROGRAM_PAYLOAD_START = 9
_IDENTITY_REPLY_SIZE = 16     # through the last version byte


@dataclass(frozen=True)
class DeviceIdentity:
    """Parsed Universal Device Inquiry reply.  ids are hex pairs, e.g. "00 01 0c"."""

    channel: int
    manufacturer: str
    family: str
    member: str
    version: str


def format_midi_bytes(data: Sequence[int], *, max_len: int | None = None) -> str:
    """Format MIDI bytes as upper-case hex pairs, optionally truncated for logs."""
    raw = list(data)
    shown = raw if max_len is None else raw[:max_len]
    hex_part = " ".join(f"{b:02X}" for b in shown)
    if max_len is not None and len(raw) > max_len:
        return f"{hex_part} …(+{len(raw) - max_len} bytes)"
    return hex_part


def _hex_pairs(data: Sequence[int]) -> str:
    return " ".join(f"{b:02x}" for b in data)


def _check_7bit(label: str, value: int) -> None:
    if not (0 <= value <= 0x7F):
        raise ValueError(f"{label} must be 0-127, got {value}")


def _status(base: int, channel: int) -> int:
    if not (0 <= channel <= 15):
        raise ValueError(f"MIDI channel must be 0-15, got {channel}")
    return base | channel


# ---------------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------------

def build_identity_request() -> list[int]:
    return list(IDENTITY_REQUEST)


def build_edit_buffer_request() -> list[int]:
    return [*_HEADER, OPCODE_PATCH_DUMP_REQUEST, DUMP_TYPE_EDIT_BUFFER, SYSEX_END]


def build_all_presets_request() -> list[int]:
    """Ask the device to stream all 124 stored presets, one dump each."""
    return [*_HEADER, OPCODE_PATCH_DUMP_REQUEST, DUMP_TYPE_ALL_PROGRAMS, SYSEX_END]


def build_program_dump_request(program: int) -> list[int]:
    """Request a single stored preset (replies with a stored-preset dump)."""
    if not (0 <= program < NUM_PRESETS):
        raise ValueError(f"Program must be 0-{NUM_PRESETS - 1}, got {program}")
    return [*_HEADER, OPCODE_PATCH_DUMP_REQUEST, DUMP_TYPE_PROGRAM, program, SYSEX_END]


def build_cc_message(cc_number: int, value: int, channel: int = MIDI_CHANNEL) -> list[int]:
    """Control Change.  Toggles must already be converted to 0/127 by the caller."""
    _check_7bit("Controller number", cc_number)
    _check_7bit("CC value", value)
    return [_status(0xB0, channel), cc_number, value]


def build_program_change(program: int, channel: int = MIDI_CHANNEL) -> list[int]:
    _check_7bit("Program", program)
    return [_status(0xC0, channel), program]


def build_patch_dump(
    name: str,
    param_bytes: Sequence[int],
    preset_number: int | None = None,
    version: int = 0,
) -> list[int]:
    """Build a patch dump frame; the inverse of :func:`parse_patch_dump`.

    *param_bytes* is zero-padded to 55 bytes, *name* is space-padded (or
    truncated) to 16 ASCII characters.  No preset number -> edit buffer.
    """
    if len(param_bytes) > PATCH_PARAM_SIZE:
        raise ValueError(f"At most {PATCH_PARAM_SIZE} parameter bytes, got {len(param_bytes)}")
    if any(not (0 <= b <= 0xFF) for b in param_bytes):
        raise ValueError("Parameter bytes must be 0-255")
    _check_7bit("Version", version)
    try:
        name_bytes = name[:PATCH_NAME_LENGTH].ljust(PATCH_NAME_LENGTH).encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError(f"Patch name must be ASCII: {name!r}") from exc

    data = list(param_bytes) + [0] * (PATCH_PARAM_SIZE - len(param_bytes)) + list(name_bytes)
    if preset_number is None:
        meta = [DUMP_TYPE_EDIT_BUFFER, version]
    else:
        if not (0 <= preset_number < NUM_PRESETS):
            raise ValueError(f"Preset number must be 0-{NUM_PRESETS - 1}, got {preset_number}")
        meta = [DUMP_TYPE_PROGRAM, preset_number, version]
    return [*_HEADER, OPCODE_PATCH_DUMP, *meta, *encode_nibbles(data), SYSEX_END]


# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------

def is_identity_reply(data: Sequence[int]) -> bool:
    return (
        len(data) >= 5 and data[0] == SYSEX_START and data[1] == 0x7E
        and data[3] == 0x06 and data[4] == 0x02
    )


def is_patch_dump(data: Sequence[int]) -> bool:
    return len(data) >= 6 and list(data[:5]) == _HEADER and data[5] == OPCODE_PATCH_DUMP


def parse_identity_reply(data: Sequence[int]) -> DeviceIdentity | None:
    # F0 7E <ch> 06 02 <mfr:3> <family:2> <member:2> <version:4> F7
    if not is_identity_reply(data) or len(data) < _IDENTITY_REPLY_SIZE:
        return None
    return DeviceIdentity(
        channel=data[2],
        manufacturer=_hex_pairs(data[5:8]),
        family=_hex_pairs(data[8:10]),
        member=_hex_pairs(data[10:12]),
        version="".join(chr(b) for b in data[12:16]),
    )


def parse_patch_dump(data: Sequence[int]) -> PatchRecord | None:
    """Decode a single patch dump (edit buffer or stored preset).

    Returns None for anything that is not a complete Pocket POD patch dump;
    a trailing F7 is not required.
    """
    if not is_patch_dump(data) or len(data) < 7:
        return None

    dump_type = data[6]
    if dump_type == DUMP_TYPE_EDIT_BUFFER:
        start = _EDIT_BUFFER_PAYLOAD_START
    elif dump_type == DUMP_TYPE_PROGRAM:
        start = _PROGRAM_PAYLOAD_START
    else:
        return None

    payload = list(data[start:start + PATCH_NIBBLE_SIZE])
    if len(payload) < PATCH_NIBBLE_SIZE:
        return None
    preset_number = data[7] if dump_type == DUMP_TYPE_PROGRAM else None

    decoded = decode_nibbles(payload)
    name = decode_patch_name(payload[PATCH_PARAM_SIZE * 2:])
    parameters = {key: decoded[offset] for offset, key in PATCH_PARAM_MAP.items()}
    return PatchRecord(name=name, parameters=parameters, preset_number=preset_number)
