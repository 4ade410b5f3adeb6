from __future__ import annotations
import json
from pathlib import Path

_DEFAULTS = {
    "midi_in_port": None,
    "midi_out_port": None,
    "identity_delay_ms": 200,
    "device_warn_timeout_s": 10,
    "device_disconnect_timeout_s": 30,
    "watchdog_interval_ms": 2000,
    "fetch_timeout_s": 10,
    "log_limit": 200,
}

class AppConfig:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path.home() / ".config" / "pocketpod-editor" / "config.json"
        self.midi_in_port: str | None = _DEFAULTS["midi_in_port"]
        self.midi_out_port: str | None = _DEFAULTS["midi_out_port"]
        self.identity_delay_ms: int = _DEFAULTS["identity_delay_ms"]
        self.device_warn_timeout_s: float = _DEFAULTS["device_warn_timeout_s"]
        self.device_disconnect_timeout_s: float = _DEFAULTS["device_disconnect_timeout_s"]
        self.watchdog_interval_ms: int = _DEFAULTS["watchdog_interval_ms"]
        self.fetch_timeout_s: float = _DEFAULTS["fetch_timeout_s"]
        self.log_limit: int = _DEFAULTS["log_limit"]
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text())
            for key in _DEFAULTS:
                if key in data:
                    setattr(self, key, data[key])
        except (json.JSONDecodeError, OSError):
            pass

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: getattr(self, key) for key in _DEFAULTS}
        self._path.write_text(json.dumps(data, indent=2))
