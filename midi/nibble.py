"""High/low nibble codec used by Pocket POD SysEx dumps.

Each data byte travels as two SysEx bytes: the high nibble, then the low
nibble (0xA5 -> 0x0A 0x05), so every transmitted byte stays below 0x80.
"""
from __future__ import annotations
from collections.abc import Sequence


def decode_nibbles(nibbles: Sequence[int]) -> list[int]:
    """Join consecutive (high, low) nibble pairs into bytes.

    A trailing unpaired nibble is dropped.  Nibble values are not range
    checked, matching what the device tolerates on input.
    """
    return [(nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles) - 1, 2)]


def encode_nibbles(data: Sequence[int]) -> list[int]:
    """Split each byte into (high, low) nibbles."""
    out: list[int] = []
    for byte in data:
        out.append((byte >> 4) & 0x0F)
        out.append(byte & 0x0F)
    return out


def decode_patch_name(nibbles: Sequence[int]) -> str:
    """Decode a nibblized ASCII name, dropping trailing padding."""
    return "".join(chr(b) for b in decode_nibbles(nibbles)).rstrip()
