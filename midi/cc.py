"""Control Change interpretation for incoming and outgoing parameter moves."""
from __future__ import annotations
from collections.abc import Sequence
from typing import NamedTuple

from midi.effects import EFFECT_SPECIFIC_PARAMS, effect_cc_reverse, get_effect_cc
from midi.params import ParamDef, ParamMap

_PARAM_MAP = ParamMap()


class CCUpdate(NamedTuple):
    name: str
    value: int


def interpret_cc(cc_number: int, value: int, effect_type: int) -> CCUpdate | None:
    """Resolve an incoming CC to a parameter update, or None if unmapped.

    Category-specific effect CCs (e.g. rotary speed on 55) are checked first
    against the current *effect_type*, then the static CC map.
    """
    key = effect_cc_reverse(effect_type).get(cc_number)
    param = _PARAM_MAP.get(key) if key is not None else _PARAM_MAP.by_cc(cc_number)
    if param is None:
        return None
    return CCUpdate(param.name, param.interpret(value))


def interpret_channel_message(data: Sequence[int], effect_type: int) -> CCUpdate | None:
    """Interpret a raw channel message; only Control Change yields an update."""
    if len(data) < 3 or (data[0] & 0xF0) != 0xB0:
        return None
    return interpret_cc(data[1], data[2], effect_type)


def outbound_cc(name: str, value: int, effect_type: int) -> tuple[int, int] | None:
    """Return (cc_number, cc_value) to send for a local edit of *name*.

    None when the parameter has no controller under the current effect type
    (e.g. depth while the compressor is selected).  Raises KeyError for an
    unknown parameter name and ValueError for a value outside its range.
    """
    param = _PARAM_MAP.get(name)
    if param is None:
        raise KeyError(name)
    if not (param.min_val <= value <= param.max_val):
        raise ValueError(
            f"{name} must be {param.min_val}-{param.max_val}, got {value}"
        )
    if name in EFFECT_SPECIFIC_PARAMS:
        cc_number = get_effect_cc(name, effect_type)
        if cc_number is None:
            return None
    else:
        cc_number = param.cc_number
    return cc_number, cc_value_for(param, value)


def cc_value_for(param: ParamDef, value: int) -> int:
    """Toggles send 127/0; everything else passes through."""
    return param.cc_value(value)
