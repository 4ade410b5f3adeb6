import argparse
import signal
import sys
from PyQt6.QtCore import QCoreApplication, QTimer
from core.config import AppConfig
from core.logger import AppLogger
from midi.device import MidiDevice, find_pocket_pod_port, list_midi_input_ports, list_midi_ports
from midi.session import PodSession
from model.editor_state import EditorState
from tools.syx_decode import describe_patch


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pocket POD MIDI monitor")
    parser.add_argument("--list", action="store_true", help="list MIDI ports and exit")
    parser.add_argument("--port", help="output port name (default: auto-detect Pocket POD)")
    parser.add_argument("--in-port", help="input port name (default: match the Pocket POD by name)")
    parser.add_argument("--fetch", action="store_true", help="also fetch all stored presets")
    return parser.parse_args(argv)


def _pick_port(ports: list[str], wanted: str | None) -> int | None:
    if wanted is None:
        return find_pocket_pod_port(ports)
    for i, name in enumerate(ports):
        if name == wanted:
            return i
    return None


def _resolve_ports(args: argparse.Namespace, config: AppConfig) -> tuple[int, str, int | None]:
    """Return (out_index, out_name, in_index) from the command line, then the config."""
    ports = list_midi_ports()
    out_index = _pick_port(ports, args.port or config.midi_out_port)
    if out_index is None:
        raise RuntimeError("No Pocket POD output port found; use --list and --port")
    in_name = args.in_port or config.midi_in_port
    in_index = _pick_port(list_midi_input_ports(), in_name)
    if in_name is not None and in_index is None:
        raise RuntimeError(f"MIDI input port '{in_name}' not found; use --list")
    return out_index, ports[out_index], in_index


def main():
    args = _parse_args(sys.argv[1:])
    if args.list:
        print("Outputs:")
        for i, name in enumerate(list_midi_ports()):
            print(f"  [{i}] {name}")
        print("Inputs:")
        for i, name in enumerate(list_midi_input_ports()):
            print(f"  [{i}] {name}")
        return

    app = QCoreApplication(sys.argv)
    app.setApplicationName("Pocket POD Editor")

    # Let Ctrl+C shut down cleanly. Qt's event loop blocks Python's signal
    # handling, so a timer ticks periodically to give Python a chance to run.
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    timer = QTimer()
    timer.start(200)
    timer.timeout.connect(lambda: None)

    config = AppConfig()
    logger = AppLogger()
    device = MidiDevice(logger)
    state = EditorState()
    session = PodSession(device, state, logger, config)

    try:
        out_index, out_name, in_index = _resolve_ports(args, config)
        session.connect(out_index, out_name, in_index)
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)

    session.patch_received.connect(lambda record: print("\n".join(describe_patch(record))))
    state.error_added.connect(lambda _id, message: print(f"Error: {message}", file=sys.stderr))
    state.fetch_finished.connect(lambda count: print(f"Fetched {count} presets"))

    session.request_edit_buffer()
    if args.fetch:
        session.fetch_all_presets()

    code = app.exec()
    session.disconnect()
    sys.exit(code)


if __name__ == "__main__":
    main()
