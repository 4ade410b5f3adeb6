from __future__ import annotations
from collections.abc import Sequence
from PyQt6.QtCore import QObject, pyqtSignal
from midi.sysex import format_midi_bytes


class AppLogger(QObject):
    message_logged = pyqtSignal(str, str)  # category, message

    def log(self, category: str, message: str) -> None:
        print(f"[{category}] {message}", flush=True)
        self.message_logged.emit(category, message)

    def midi(self, message: str) -> None:
        self.log("MIDI", message)

    def general(self, message: str) -> None:
        self.log("GENERAL", message)

    def warning(self, message: str) -> None:
        self.log("WARNING", message)

    def traffic(self, direction: str, data: Sequence[int]) -> None:
        """Log one raw MIDI message; *direction* is "IN" or "OUT"."""
        self.midi(f"{direction}: {format_midi_bytes(data)}")
