from __future__ import annotations
from midi.sysex import NUM_PRESETS
from model.patch import PatchRecord


class PresetBank:
    """Stored presets received from the device, keyed by program number."""

    def __init__(self) -> None:
        self.slots: dict[int, PatchRecord] = {}

    def __len__(self) -> int:
        return len(self.slots)

    def __contains__(self, number: int) -> bool:
        return number in self.slots

    def assign(self, record: PatchRecord) -> None:
        if record.preset_number is None:
            raise ValueError("Edit-buffer snapshots cannot be stored in a bank")
        self.slots[record.preset_number] = record

    def get(self, number: int) -> PatchRecord | None:
        return self.slots.get(number)

    def remove(self, number: int) -> None:
        self.slots.pop(number, None)

    def clear(self) -> None:
        self.slots.clear()

    def ordered(self) -> list[PatchRecord]:
        return [record for _, record in sorted(self.slots.items())]

    @property
    def complete(self) -> bool:
        return len(self.slots) >= NUM_PRESETS
