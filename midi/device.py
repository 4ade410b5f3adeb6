from __future__ import annotations
from collections.abc import Callable
import rtmidi
from core.logger import AppLogger

DEVICE_NAME_FRAGMENT = "pocket pod"


def list_midi_ports() -> list[str]:
    midi_out = rtmidi.MidiOut()
    ports = midi_out.get_ports()
    midi_out.delete()
    return ports


def list_midi_input_ports() -> list[str]:
    midi_in = rtmidi.MidiIn()
    ports = midi_in.get_ports()
    midi_in.delete()
    return ports


def find_pocket_pod_port(ports: list[str]) -> int | None:
    for i, name in enumerate(ports):
        if DEVICE_NAME_FRAGMENT in name.lower():
            return i
    return None


class MidiDevice:
    def __init__(self, logger: AppLogger | None = None) -> None:
        self._midi_out = rtmidi.MidiOut()
        self._midi_in = rtmidi.MidiIn()
        self._connected = False
        self._port_name: str | None = None
        self._logger = logger or AppLogger()
        self._message_callback: Callable[[list[int]], None] | None = None

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def port_name(self) -> str | None:
        return self._port_name

    def connect(self, port_index: int, port_name: str, in_index: int | None = None) -> None:
        if self._connected:
            self.disconnect()
        try:
            self._midi_out.open_port(port_index)
        except rtmidi.SystemError as exc:
            raise RuntimeError(
                f"Could not open MIDI output port '{port_name}'. "
                "It may be in use by another application."
            ) from exc
        self._logger.midi(f"OUT: {port_name} (index {port_index})")
        try:
            # Input and output port indices are independent on some platforms;
            # match the input by name unless told otherwise.
            in_ports = self._midi_in.get_ports()
            if in_index is None:
                in_index = find_pocket_pod_port(in_ports)
            if in_index is None or not (0 <= in_index < len(in_ports)):
                raise RuntimeError("No MIDI input port found for the Pocket POD")
            try:
                self._midi_in.open_port(in_index)
            except rtmidi.SystemError as exc:
                raise RuntimeError(
                    f"Could not open MIDI input port '{in_ports[in_index]}'. "
                    "It may be in use by another application."
                ) from exc
            self._logger.midi(f"IN:  {in_ports[in_index]} (index {in_index})")
            self._midi_in.ignore_types(sysex=False)
            self._midi_in.set_callback(self._dispatch_midi_input)
        except Exception:
            self._midi_out.close_port()
            raise
        self._connected = True
        self._port_name = port_name

    def disconnect(self) -> None:
        if self._connected:
            self._midi_in.cancel_callback()
            self._midi_out.close_port()
            self._midi_in.close_port()
        self._connected = False
        self._port_name = None

    def send(self, message: list[int]) -> None:
        if not self._connected:
            raise RuntimeError("Not connected to a MIDI device")
        self._midi_out.send_message(message)

    def set_message_callback(self, callback: Callable[[list[int]], None] | None) -> None:
        """Register callback(message) for every incoming MIDI message."""
        self._message_callback = callback

    def _dispatch_midi_input(self, event, _data=None) -> None:
        msg = event[0]
        if not msg:
            return
        if self._message_callback is not None:
            self._message_callback(list(msg))
        else:
            self._logger.midi(f"RX unhandled: {len(msg)} bytes")
