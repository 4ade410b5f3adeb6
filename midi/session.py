from __future__ import annotations
import time
from collections import deque
from collections.abc import Sequence
from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from core.config import AppConfig
from core.logger import AppLogger
from midi.cc import interpret_channel_message, outbound_cc
from midi.device import MidiDevice
from midi.sysex import (
    NUM_PRESETS,
    build_all_presets_request, build_cc_message, build_edit_buffer_request,
    build_identity_request, build_program_change, build_program_dump_request,
    is_identity_reply, is_patch_dump, parse_identity_reply, parse_patch_dump,
)
from model.editor_state import EditorState


class _MessageBridge(QObject):
    """Thread-safe bridge from the MIDI input thread to the Qt main thread."""
    message_received = pyqtSignal(object)  # list[int]


class PodSession(QObject):
    """Routes MIDI traffic between a Pocket POD and an EditorState."""

    patch_received = pyqtSignal(object)      # PatchRecord
    connection_changed = pyqtSignal(bool)
    unresponsive_changed = pyqtSignal(bool)

    def __init__(
        self,
        device: MidiDevice,
        state: EditorState,
        logger: AppLogger,
        config: AppConfig,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._device = device
        self._state = state
        self._logger = logger
        self._config = config
        self._traffic: deque[tuple[str, tuple[int, ...]]] = deque(maxlen=config.log_limit)
        self._last_activity: float | None = None
        self._last_dump: float | None = None
        self.device_unresponsive = False

        self._bridge = _MessageBridge(self)
        self._bridge.message_received.connect(self.handle_message)
        self._device.set_message_callback(self._bridge.message_received.emit)

        self._watchdog = QTimer(self)
        self._watchdog.setInterval(config.watchdog_interval_ms)
        self._watchdog.timeout.connect(self.check_activity)

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._device.connected

    @property
    def traffic(self) -> list[tuple[str, tuple[int, ...]]]:
        return list(self._traffic)

    def _record(self, direction: str, data: Sequence[int]) -> None:
        self._traffic.append((direction, tuple(data)))
        self._logger.traffic(direction, data)

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def connect(self, out_index: int, out_name: str, in_index: int | None = None) -> None:
        self._device.connect(out_index, out_name, in_index)
        self._last_activity = time.monotonic()
        self._set_unresponsive(False)
        self._watchdog.start()
        self.connection_changed.emit(True)
        self._logger.general(f"Connected to {out_name}")
        QTimer.singleShot(self._config.identity_delay_ms, self._request_identity_if_connected)

    def disconnect(self) -> None:
        self._watchdog.stop()
        was_connected = self._device.connected
        self._device.disconnect()
        self._state.reset()
        self._last_activity = None
        self._last_dump = None
        self._set_unresponsive(False)
        if was_connected:
            self._logger.general("Disconnected")
            self.connection_changed.emit(False)

    def _request_identity_if_connected(self) -> None:
        if self._device.connected:
            self.request_identity()

    def _set_unresponsive(self, value: bool) -> None:
        if self.device_unresponsive != value:
            self.device_unresponsive = value
            self.unresponsive_changed.emit(value)

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def handle_message(self, data: list[int]) -> None:
        if not data:
            return
        self._record("IN", data)
        self._last_activity = time.monotonic()
        self._set_unresponsive(False)

        status = data[0]
        if status == 0xF0:
            self._handle_sysex(data)
        elif status & 0xF0 == 0xB0:
            update = interpret_channel_message(data, self._state.effect_type)
            if update is not None:
                self._state.apply_cc(update)
        elif status & 0xF0 == 0xC0 and len(data) >= 2:
            self._state.apply_program_change(data[1])

    def _handle_sysex(self, data: list[int]) -> None:
        if is_identity_reply(data):
            info = parse_identity_reply(data)
            if info is None:
                self._logger.warning(f"Short identity reply ({len(data)} bytes) ignored")
                return
            self._logger.general(
                f"Device: manufacturer {info.manufacturer}, family {info.family}, "
                f"member {info.member}, version {info.version}"
            )
            self._state.set_device_info(info)
            return
        if not is_patch_dump(data):
            return

        record = parse_patch_dump(data)
        if record is None:
            self._logger.warning(f"Malformed patch dump ({len(data)} bytes) discarded")
            return
        if not record.is_edit_buffer:
            if record.preset_number >= NUM_PRESETS:
                self._logger.warning(f"Preset number {record.preset_number} out of range")
                return
            self._last_dump = time.monotonic()
        self._logger.midi(f"Patch: {record.display_name}")
        self._state.apply_patch(record)
        self.patch_received.emit(record)

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    def _send(self, message: list[int]) -> None:
        self._device.send(message)
        self._record("OUT", message)

    def change_param(self, name: str, value: int) -> None:
        """Apply a local edit and send the matching CC when connected.

        Unknown names and out-of-range values raise ValueError and leave the
        state untouched.
        """
        try:
            target = outbound_cc(name, value, self._state.effect_type)
        except KeyError:
            raise ValueError(f"Unknown parameter: {name}") from None
        self._state.set_param(name, value)
        if target is None:
            self._logger.warning(
                f"{name} has no controller for the current effect; not sent"
            )
            return
        if self._device.connected:
            self._send(build_cc_message(*target))

    def request_identity(self) -> None:
        self._send(build_identity_request())

    def request_edit_buffer(self) -> None:
        self._send(build_edit_buffer_request())

    def request_program(self, program: int) -> None:
        self._send(build_program_dump_request(program))

    def fetch_all_presets(self) -> bool:
        if not self._device.connected or not self._state.begin_fetch():
            return False
        self._last_dump = time.monotonic()
        self._logger.general(f"Fetching {NUM_PRESETS} presets")
        self._send(build_all_presets_request())
        return True

    def select_program(self, program: int) -> None:
        self._send(build_program_change(program))

    def load_preset(self, program: int) -> None:
        """Recall a stored preset on the device and show it in the editor."""
        self._state.load_preset(program)
        if self._device.connected:
            self.select_program(program)

    # ------------------------------------------------------------------
    # Watchdog
    # ------------------------------------------------------------------

    def check_activity(self, now: float | None = None) -> None:
        if not self._device.connected:
            return
        now = time.monotonic() if now is None else now

        if self._state.fetching and self._last_dump is not None:
            if now - self._last_dump > self._config.fetch_timeout_s:
                received = self._state.fetch_count
                self._state.cancel_fetch()
                self._state.add_error(
                    f"Preset fetch stalled after {received} of {NUM_PRESETS} presets"
                )
                self._logger.warning("Preset fetch timed out")

        if self._last_activity is None:
            return
        idle = now - self._last_activity
        if idle > self._config.device_disconnect_timeout_s:
            self._state.add_error("Pocket POD stopped responding; disconnected")
            self._logger.warning(f"No MIDI input for {idle:.0f}s, disconnecting")
            self.disconnect()
        elif idle > self._config.device_warn_timeout_s:
            if not self.device_unresponsive:
                self._logger.warning(f"No MIDI input for {idle:.0f}s")
            self._set_unresponsive(True)
