from __future__ import annotations
import itertools
from PyQt6.QtCore import QObject, pyqtSignal
from midi.cc import CCUpdate
from midi.params import DEFAULT_PARAMS
from midi.sysex import NUM_PRESETS, DeviceIdentity
from model.bank import PresetBank
from model.patch import PatchRecord

NO_PRESET_NAME = "—"
MAX_ERRORS = 5


class EditorState(QObject):
    """Current editor state: parameter values, preset library and device status.

    Holds no I/O.  The session feeds it decoded messages and local edits;
    views subscribe to the signals.
    """

    params_changed = pyqtSignal(dict)          # changed subset {name: value}
    preset_name_changed = pyqtSignal(str)
    device_info_changed = pyqtSignal(object)   # DeviceIdentity | None
    fetch_progress = pyqtSignal(int, int)      # received, total
    fetch_finished = pyqtSignal(int)           # presets received
    error_added = pyqtSignal(int, str)         # error id, message
    dirty_changed = pyqtSignal(bool)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.params: dict[str, int] = dict(DEFAULT_PARAMS)
        self.preset_name = NO_PRESET_NAME
        self.current_preset = 0
        self.presets = PresetBank()
        self.device_info: DeviceIdentity | None = None
        self.fetching = False
        self.errors: list[tuple[int, str]] = []
        self._dirty = False
        self._error_ids = itertools.count(1)

    # -- simple properties --

    @property
    def dirty(self) -> bool:
        return self._dirty

    def _set_dirty(self, value: bool) -> None:
        if self._dirty != value:
            self._dirty = value
            self.dirty_changed.emit(value)

    def mark_clean(self) -> None:
        self._set_dirty(False)

    @property
    def effect_type(self) -> int:
        return self.params.get("effect", 0)

    @property
    def fetch_count(self) -> int:
        return min(len(self.presets), NUM_PRESETS)

    def _set_preset_name(self, name: str) -> None:
        if name != self.preset_name:
            self.preset_name = name
            self.preset_name_changed.emit(name)

    def _merge(self, values: dict[str, int]) -> None:
        changed = {k: v for k, v in values.items() if self.params.get(k) != v}
        self.params.update(values)
        if changed:
            self.params_changed.emit(changed)

    # -- updates from the device --

    def apply_patch(self, record: PatchRecord) -> None:
        if record.is_edit_buffer:
            self._merge(record.parameters)
            if record.name:
                self._set_preset_name(record.name)
            return
        self.presets.assign(record)
        if not self.fetching:
            return
        received = self.fetch_count
        self.fetch_progress.emit(received, NUM_PRESETS)
        if self.presets.complete:
            self.fetching = False
            self.fetch_finished.emit(received)

    def apply_cc(self, update: CCUpdate) -> None:
        self._merge({update.name: update.value})

    def apply_program_change(self, program: int) -> None:
        self.current_preset = program
        self._set_preset_name(f"Preset {program + 1}")

    def set_device_info(self, info: DeviceIdentity | None) -> None:
        self.device_info = info
        self.device_info_changed.emit(info)

    # -- local edits --

    def set_param(self, name: str, value: int) -> None:
        self._merge({name: value})
        self._set_dirty(True)

    def load_preset(self, number: int) -> PatchRecord:
        record = self.presets.get(number)
        if record is None:
            raise KeyError(number)
        self._merge(record.parameters)
        self._set_preset_name(record.display_name)
        self.current_preset = number
        self._set_dirty(False)
        return record

    # -- bulk fetch --

    def begin_fetch(self) -> bool:
        if self.fetching:
            return False
        self.fetching = True
        self.presets.clear()
        self.fetch_progress.emit(0, NUM_PRESETS)
        return True

    def cancel_fetch(self) -> None:
        if self.fetching:
            self.fetching = False
            self.fetch_finished.emit(self.fetch_count)

    # -- errors --

    def add_error(self, message: str) -> int:
        error_id = next(self._error_ids)
        self.errors = [*self.errors[-(MAX_ERRORS - 1):], (error_id, message)]
        self.error_added.emit(error_id, message)
        return error_id

    def dismiss_error(self, error_id: int) -> None:
        self.errors = [e for e in self.errors if e[0] != error_id]

    def reset(self) -> None:
        """Return to the disconnected state; parameter values are kept."""
        self.cancel_fetch()
        self.set_device_info(None)
        self._set_preset_name(NO_PRESET_NAME)
        self._set_dirty(False)
