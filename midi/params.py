from __future__ import annotations
from dataclasses import dataclass

TOGGLE_THRESHOLD = 64  # CC values >= 64 read as "on"


@dataclass(frozen=True)
class ParamDef:
    name: str
    display_name: str
    cc_number: int
    min_val: int
    max_val: int
    group: str = ""
    value_labels: dict[int, str] | None = None

    @property
    def is_toggle(self) -> bool:
        return self.max_val == 1

    def interpret(self, value: int) -> int:
        """Convert an incoming 0-127 CC value to this parameter's value."""
        if self.is_toggle:
            return 1 if value >= TOGGLE_THRESHOLD else 0
        return value

    def cc_value(self, value: int) -> int:
        """Convert a parameter value to the CC value sent to the device."""
        if self.is_toggle:
            return 127 if value else 0
        return value

    def label_for(self, value: int) -> str | None:
        if self.value_labels is None:
            return None
        return self.value_labels.get(value)


_OFF_ON = {0: "Off", 1: "On"}

# ---------------------------------------------------------------------------
# Parameter definitions (Pocket POD CC map, channel 1)
# ---------------------------------------------------------------------------

_PARAMS: list[ParamDef] = [
    # -----------------------------------------------------------------------
    # Preamp
    # -----------------------------------------------------------------------
    ParamDef("amp_model", "Amp Model", 12, 0, 31, group="preamp"),
    ParamDef("drive", "Drive", 13, 0, 127, group="preamp"),
    ParamDef("bass", "Bass", 14, 0, 127, group="preamp"),
    ParamDef("mid", "Mid", 15, 0, 127, group="preamp"),
    ParamDef("treble", "Treble", 16, 0, 127, group="preamp"),
    ParamDef("chan_vol", "Chan Vol", 17, 0, 127, group="preamp"),
    ParamDef("drive2", "Drive 2", 20, 0, 127, group="preamp"),
    ParamDef("presence", "Presence", 21, 0, 127, group="preamp"),

    # -----------------------------------------------------------------------
    # Reverb
    # -----------------------------------------------------------------------
    ParamDef("reverb_level", "Reverb Level", 18, 0, 127, group="reverb"),
    ParamDef("reverb_type", "Reverb Type", 37, 0, 1, group="reverb",
             value_labels={0: "Room", 1: "Spring"}),
    ParamDef("reverb_decay", "Reverb Decay", 38, 0, 127, group="reverb"),
    ParamDef("reverb_tone", "Reverb Tone", 39, 0, 127, group="reverb"),
    ParamDef("reverb_diffusion", "Reverb Diffusion", 40, 0, 127, group="reverb"),
    ParamDef("reverb_density", "Reverb Density", 41, 0, 127, group="reverb"),

    # -----------------------------------------------------------------------
    # Modulation effect. speed/depth/feedback/predelay are the chorus/flanger
    # CCs; other categories remap them (see midi/effects.py).
    # -----------------------------------------------------------------------
    ParamDef("effect", "Effect Type", 19, 0, 15, group="effect"),
    ParamDef("effect_tweak", "Effect Tweak", 1, 0, 127, group="effect"),
    ParamDef("effect_speed", "Effect Speed", 51, 0, 127, group="effect"),
    ParamDef("effect_depth", "Effect Depth", 52, 0, 127, group="effect"),
    ParamDef("effect_feedback", "Effect Feedback", 53, 0, 127, group="effect"),
    ParamDef("effect_predelay", "Effect Pre-Delay", 54, 0, 127, group="effect"),

    # -----------------------------------------------------------------------
    # Noise gate
    # -----------------------------------------------------------------------
    ParamDef("noise_gate", "Noise Gate Thresh", 23, 0, 127, group="noise_gate"),
    ParamDef("noise_gate_decay", "Noise Gate Decay", 24, 0, 127, group="noise_gate"),

    # -----------------------------------------------------------------------
    # Delay
    # -----------------------------------------------------------------------
    ParamDef("delay_time", "Delay Time", 30, 0, 127, group="delay"),
    ParamDef("delay_time_fine", "Delay Fine", 62, 0, 127, group="delay"),
    ParamDef("delay_feedback", "Delay Feedback", 32, 0, 127, group="delay"),
    ParamDef("delay_level", "Delay Level", 34, 0, 127, group="delay"),

    # -----------------------------------------------------------------------
    # Cabinet
    # -----------------------------------------------------------------------
    ParamDef("cab_model", "Cab Model", 71, 0, 15, group="cabinet"),
    ParamDef("air", "Air", 72, 0, 127, group="cabinet"),

    # -----------------------------------------------------------------------
    # Wah
    # -----------------------------------------------------------------------
    ParamDef("wah_position", "Wah Position", 4, 0, 127, group="wah"),
    ParamDef("wah_bottom", "Wah Bot Freq", 44, 0, 127, group="wah"),
    ParamDef("wah_top", "Wah Top Freq", 45, 0, 127, group="wah"),

    # -----------------------------------------------------------------------
    # Volume pedal
    # -----------------------------------------------------------------------
    ParamDef("vol_level", "Volume Level", 7, 0, 127, group="volume"),
    ParamDef("vol_min", "Volume Min", 46, 0, 127, group="volume"),
    ParamDef("vol_position", "Volume Position", 47, 0, 127, group="volume"),

    # -----------------------------------------------------------------------
    # Switches (device sends 0 or 127)
    # -----------------------------------------------------------------------
    ParamDef("dist_enable", "Dist Enable", 25, 0, 1, group="switch", value_labels=_OFF_ON),
    ParamDef("drive_enable", "Drive Enable", 26, 0, 1, group="switch", value_labels=_OFF_ON),
    ParamDef("eq_enable", "EQ Enable", 27, 0, 1, group="switch", value_labels=_OFF_ON),
    ParamDef("delay_enable", "Delay Enable", 28, 0, 1, group="switch", value_labels=_OFF_ON),
    ParamDef("reverb_enable", "Reverb Enable", 36, 0, 1, group="switch", value_labels=_OFF_ON),
    ParamDef("noise_gate_enable", "Noise Gate Enable", 22, 0, 1, group="switch",
             value_labels=_OFF_ON),
    ParamDef("mod_fx_enable", "Mod FX Enable", 50, 0, 1, group="switch", value_labels=_OFF_ON),
    ParamDef("bright_switch", "Bright Switch", 73, 0, 1, group="switch", value_labels=_OFF_ON),
]


# Byte offset within the 71 decoded patch bytes -> parameter name.
# Offsets 21, 25, 28-33, 35, 37, 49, 51 and 54 are unused by the editor.
PATCH_PARAM_MAP: dict[int, str] = {
    # Switches
    0: "dist_enable",
    1: "drive_enable",
    2: "eq_enable",
    3: "delay_enable",
    4: "mod_fx_enable",
    5: "reverb_enable",
    6: "noise_gate_enable",
    7: "bright_switch",
    # Preamp
    8: "amp_model",
    9: "drive",
    10: "drive2",
    11: "bass",
    12: "mid",
    13: "treble",
    14: "presence",
    15: "chan_vol",
    # Noise gate
    16: "noise_gate",
    17: "noise_gate_decay",
    # Wah
    18: "wah_position",
    19: "wah_bottom",
    20: "wah_top",
    # Volume pedal
    22: "vol_level",
    23: "vol_min",
    24: "vol_position",
    # Delay
    26: "delay_time",
    27: "delay_time_fine",
    34: "delay_feedback",
    36: "delay_level",
    # Reverb
    38: "reverb_type",
    39: "reverb_decay",
    40: "reverb_tone",
    41: "reverb_diffusion",
    42: "reverb_density",
    43: "reverb_level",
    # Cabinet
    44: "cab_model",
    45: "air",
    # Effect
    46: "effect",
    47: "effect_tweak",
    48: "effect_speed",
    50: "effect_depth",
    52: "effect_feedback",
    53: "effect_predelay",
}

# Parameters whose patch value is an enum/select index used as-is
PATCH_SELECT_PARAMS: frozenset[str] = frozenset({
    "dist_enable", "drive_enable", "eq_enable", "delay_enable",
    "mod_fx_enable", "reverb_enable", "noise_gate_enable", "bright_switch",
    "amp_model", "cab_model", "effect", "reverb_type",
})

DEFAULT_PARAMS: dict[str, int] = {
    "amp_model": 0, "drive": 64, "drive2": 0, "bass": 64, "mid": 64, "treble": 64,
    "chan_vol": 100, "presence": 64, "reverb_level": 40, "reverb_type": 0,
    "reverb_decay": 64, "reverb_tone": 64, "reverb_diffusion": 64, "reverb_density": 64,
    "effect": 0, "effect_tweak": 64, "effect_speed": 64, "effect_depth": 64,
    "effect_feedback": 0, "effect_predelay": 0, "noise_gate": 0, "noise_gate_decay": 64,
    "delay_time": 40, "delay_time_fine": 0, "delay_feedback": 30, "delay_level": 50,
    "cab_model": 0, "air": 0, "wah_position": 0, "wah_bottom": 0, "wah_top": 127,
    "vol_level": 100, "vol_min": 0, "vol_position": 127,
    "dist_enable": 0, "drive_enable": 0, "eq_enable": 0, "delay_enable": 0,
    "reverb_enable": 0, "noise_gate_enable": 0, "mod_fx_enable": 0, "bright_switch": 0,
}

_ccs = [p.cc_number for p in _PARAMS]
assert len(set(_ccs)) == len(_ccs), "duplicate controller number in _PARAMS"
assert len({p.name for p in _PARAMS}) == len(_PARAMS), "duplicate parameter name"
assert set(PATCH_PARAM_MAP.values()) <= {p.name for p in _PARAMS}
assert set(DEFAULT_PARAMS) == {p.name for p in _PARAMS}
del _ccs


class ParamMap:
    def __init__(self) -> None:
        self._params = {p.name: p for p in _PARAMS}
        self._by_cc: dict[int, ParamDef] = {}
        for p in _PARAMS:
            self._by_cc.setdefault(p.cc_number, p)  # first in table order wins

    def get(self, name: str) -> ParamDef | None:
        return self._params.get(name)

    def by_cc(self, cc_number: int) -> ParamDef | None:
        return self._by_cc.get(cc_number)

    def list_all(self) -> list[ParamDef]:
        return list(self._params.values())

    def names(self) -> list[str]:
        return list(self._params.keys())

    def by_group(self, group: str) -> list[ParamDef]:
        return [p for p in self._params.values() if p.group == group]

    def toggles(self) -> list[ParamDef]:
        return [p for p in self._params.values() if p.is_toggle]
