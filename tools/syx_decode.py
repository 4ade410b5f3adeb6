#!/usr/bin/env python3
"""Decode Pocket POD SysEx captures (.syx) into readable patch listings.

Each patch dump (edit buffer or stored preset) is printed with its name,
program number and every mapped parameter; enumerated values (amp, cab,
effect, reverb type, switches) are shown with their labels.  Identity
replies are printed as manufacturer / family / member / version.

Usage:
    python -m tools.syx_decode <capture.syx> [<capture.syx> ...]
"""

from __future__ import annotations
import sys
from pathlib import Path

import mido

from midi.effects import (
    EffectCategory, format_comp_ratio, get_effect_category, get_effect_name,
)
from midi.models import amp_model_name, cab_model_name
from midi.params import ParamMap
from midi.sysex import (
    SYSEX_END, SYSEX_START,
    format_midi_bytes, is_identity_reply, is_patch_dump,
    parse_identity_reply, parse_patch_dump,
)
from model.patch import PatchRecord

_PARAM_MAP = ParamMap()

_ENUM_LABELS = {
    "amp_model": amp_model_name,
    "cab_model": cab_model_name,
    "effect": get_effect_name,
}


def read_frames(path: Path) -> list[list[int]]:
    """Return every SysEx message in *path* as a full F0 ... F7 byte list."""
    return [
        [SYSEX_START, *msg.data, SYSEX_END]
        for msg in mido.read_syx_file(str(path))
        if msg.type == "sysex"
    ]


def value_label(name: str, value: int, effect_type: int = 0) -> str | None:
    if name in _ENUM_LABELS:
        return _ENUM_LABELS[name](value)
    if name == "effect_speed" and get_effect_category(effect_type) is EffectCategory.COMPRESSOR:
        return format_comp_ratio(value)
    param = _PARAM_MAP.get(name)
    return param.label_for(value) if param is not None else None


def describe_patch(record: PatchRecord) -> list[str]:
    where = "edit buffer" if record.is_edit_buffer else f"program {record.preset_number + 1}"
    lines = [f"Patch '{record.display_name}' ({where})", f"  {record.summary()}"]
    for name, value in record.parameters.items():
        label = value_label(name, value, record.parameters.get("effect", 0))
        suffix = f"  ({label})" if label else ""
        lines.append(f"  {name:<20s} {value:3d}{suffix}")
    return lines


def describe_frame(frame: list[int]) -> list[str]:
    if is_identity_reply(frame):
        info = parse_identity_reply(frame)
        if info is None:
            return [f"Short identity reply: {format_midi_bytes(frame)}"]
        return [
            f"Identity: manufacturer {info.manufacturer}, family {info.family}, "
            f"member {info.member}, version {info.version}"
        ]
    if is_patch_dump(frame):
        record = parse_patch_dump(frame)
        if record is None:
            return [f"Malformed patch dump ({len(frame)} bytes)"]
        return describe_patch(record)
    return [f"Other SysEx: {format_midi_bytes(frame, max_len=16)}"]


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    for arg in sys.argv[1:]:
        path = Path(arg)
        if not path.exists():
            print(f"File not found: {path}")
            sys.exit(1)
        frames = read_frames(path)
        print(f"{path.name}: {len(frames)} SysEx message(s)")
        for frame in frames:
            for line in describe_frame(frame):
                print(line)
        print()


if __name__ == "__main__":
    main()
