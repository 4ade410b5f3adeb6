from __future__ import annotations
from dataclasses import dataclass, field
from midi.effects import get_effect_name
from midi.models import amp_model_name, cab_model_name


@dataclass
class PatchRecord:
    """One decoded Pocket POD patch dump.

    Edit-buffer snapshots carry no preset number; stored presets always do.
    """
    name: str
    parameters: dict[str, int] = field(default_factory=dict)
    preset_number: int | None = None

    @property
    def is_edit_buffer(self) -> bool:
        return self.preset_number is None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.preset_number is not None:
            return f"Preset {self.preset_number + 1}"
        return "Edit Buffer"

    def summary(self) -> str:
        """Short "amp / effect / cab" description, e.g. for preset lists."""
        amp = amp_model_name(self.parameters.get("amp_model", -1)) or "—"
        effect = get_effect_name(self.parameters.get("effect", -1)) or "—"
        cab = cab_model_name(self.parameters.get("cab_model", -1))
        cab_short = " ".join(cab.split(" ")[:2]) if cab else "—"
        return f"{amp} / {effect} / {cab_short}"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "parameters": dict(self.parameters),
            "preset_number": self.preset_number,
            "is_edit_buffer": self.is_edit_buffer,
        }
