"""Effect type registry for the Pocket POD modulation/delay block.

The 16 effect types (CC 19 / patch byte 46) fall into eight categories.  The
category decides which of the four generic effect knobs (speed, depth,
feedback, pre-delay) are live and which controller numbers they use: chorus
and flanger use CC 51-54, the other categories move the same logical knobs to
their own CCs (rotary 55/56, tremolo 58/59, compressor ratio 42, swell
attack 49).
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class EffectCategory(str, Enum):
    CHORUS = "chorus"
    FLANGER = "flanger"
    ROTARY = "rotary"
    TREMOLO = "tremolo"
    COMPRESSOR = "compressor"
    SWELL = "swell"
    BYPASS = "bypass"
    DELAY_ONLY = "delay_only"


@dataclass(frozen=True)
class EffectKnob:
    """One live effect knob for a category."""
    key: str     # generic parameter key, e.g. "effect_speed"
    label: str   # e.g. "Speed", "Doppler", "Ratio"
    cc: int      # controller number for this category


# Names indexed by wire value -- never reorder
EFFECT_TYPES: tuple[str, ...] = (
    "Chorus 2",         # 0
    "Flanger 1",        # 1
    "Rotary",           # 2
    "Flanger 2",        # 3
    "Delay/Chorus 1",   # 4
    "Delay/Tremolo",    # 5
    "Delay",            # 6
    "Delay/Comp",       # 7
    "Chorus 1",         # 8
    "Tremolo",          # 9
    "Bypass",           # 10
    "Compressor",       # 11
    "Delay/Chorus 2",   # 12
    "Delay/Flanger 1",  # 13
    "Delay/Swell",      # 14
    "Delay/Flanger 2",  # 15
)

_C = EffectCategory

EFFECT_CATEGORIES: dict[int, EffectCategory] = {
    0: _C.CHORUS, 1: _C.FLANGER, 2: _C.ROTARY, 3: _C.FLANGER,
    4: _C.CHORUS, 5: _C.TREMOLO, 6: _C.DELAY_ONLY, 7: _C.COMPRESSOR,
    8: _C.CHORUS, 9: _C.TREMOLO, 10: _C.BYPASS, 11: _C.COMPRESSOR,
    12: _C.CHORUS, 13: _C.FLANGER, 14: _C.SWELL, 15: _C.FLANGER,
}

# Effect types that also run the delay block
DELAY_EFFECTS: frozenset[int] = frozenset({4, 5, 6, 7, 12, 13, 14, 15})

EFFECT_SPECIFIC_PARAMS: frozenset[str] = frozenset({
    "effect_speed", "effect_depth", "effect_feedback", "effect_predelay",
})

_MOD_KNOBS = [
    EffectKnob("effect_speed", "Speed", 51),
    EffectKnob("effect_depth", "Depth", 52),
    EffectKnob("effect_feedback", "Feedback", 53),
    EffectKnob("effect_predelay", "Pre-Delay", 54),
]

EFFECT_KNOB_CONFIGS: dict[EffectCategory, list[EffectKnob]] = {
    _C.CHORUS: list(_MOD_KNOBS),
    _C.FLANGER: list(_MOD_KNOBS),
    _C.ROTARY: [
        EffectKnob("effect_speed", "Speed", 55),
        EffectKnob("effect_depth", "Doppler", 56),
    ],
    _C.TREMOLO: [
        EffectKnob("effect_speed", "Speed", 58),
        EffectKnob("effect_depth", "Depth", 59),
    ],
    _C.COMPRESSOR: [EffectKnob("effect_speed", "Ratio", 42)],
    _C.SWELL: [EffectKnob("effect_speed", "Attack", 49)],
    _C.BYPASS: [],
    _C.DELAY_ONLY: [],
}

# Per-category controller number -> generic key
_CATEGORY_CC_REVERSE: dict[EffectCategory, dict[int, str]] = {
    cat: {k.cc: k.key for k in knobs} for cat, knobs in EFFECT_KNOB_CONFIGS.items()
}

EFFECT_CC_REVERSE_MAP: dict[int, str] = {
    cc: key for reverse in _CATEGORY_CC_REVERSE.values() for cc, key in reverse.items()
}

COMP_RATIO_LABELS: list[tuple[int, str]] = [
    (0, "Off"),
    (22, "1.4:1"),
    (64, "2:1"),
    (85, "3:1"),
    (107, "6:1"),
    (127, "∞:1"),
]

assert len(EFFECT_TYPES) == 16
assert set(EFFECT_CATEGORIES) == set(range(16))
assert set(EFFECT_KNOB_CONFIGS) == set(EffectCategory)
for _knobs in EFFECT_KNOB_CONFIGS.values():
    assert {k.key for k in _knobs} <= EFFECT_SPECIFIC_PARAMS
# A controller number must mean the same key in every category that uses it
assert all(
    EFFECT_CC_REVERSE_MAP[cc] == key
    for reverse in _CATEGORY_CC_REVERSE.values() for cc, key in reverse.items()
)
del _knobs


def get_effect_category(effect_type: int) -> EffectCategory:
    """Return the category for *effect_type*; unknown indices act as bypass."""
    return EFFECT_CATEGORIES.get(effect_type, EffectCategory.BYPASS)


def get_effect_name(effect_type: int) -> str | None:
    if 0 <= effect_type < len(EFFECT_TYPES):
        return EFFECT_TYPES[effect_type]
    return None


def has_delay(effect_type: int) -> bool:
    return effect_type in DELAY_EFFECTS


def effect_knobs(effect_type: int) -> list[EffectKnob]:
    """Return the live knobs (in panel order) for *effect_type*."""
    return list(EFFECT_KNOB_CONFIGS[get_effect_category(effect_type)])


def get_effect_cc(key: str, effect_type: int) -> int | None:
    """Return the controller number *key* uses under *effect_type*.

    None when the category has no such knob (e.g. depth on the compressor)
    or has no knobs at all (bypass, delay only).
    """
    for knob in EFFECT_KNOB_CONFIGS[get_effect_category(effect_type)]:
        if knob.key == key:
            return knob.cc
    return None


def effect_cc_reverse(effect_type: int) -> dict[int, str]:
    """Controller number -> generic key map for the category of *effect_type*."""
    return _CATEGORY_CC_REVERSE[get_effect_category(effect_type)]


def format_comp_ratio(value: int) -> str:
    """Display label for the compressor ratio knob (0-127)."""
    label = COMP_RATIO_LABELS[0][1]
    for threshold, text in COMP_RATIO_LABELS:
        if value >= threshold:
            label = text
        else:
            break
    return label
