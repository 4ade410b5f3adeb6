import pytest
from unittest.mock import patch
from PyQt6.QtCore import QCoreApplication


@pytest.fixture(scope="module")
def app():
    return QCoreApplication.instance() or QCoreApplication([])


from core.config import AppConfig
from core.logger import AppLogger
from midi.session import PodSession
from midi.sysex import build_patch_dump, NUM_PRESETS
from model.editor_state import EditorState


class FakeDevice:
    def __init__(self):
        self.connected = False
        self.sent = []
        self.callback = None

    def set_message_callback(self, callback):
        self.callback = callback

    def connect(self, out_index, out_name, in_index=None):
        self.connected = True

    def disconnect(self):
        self.connected = False

    def send(self, message):
        if not self.connected:
            raise RuntimeError("Not connected to a MIDI device")
        self.sent.append(message)


@pytest.fixture
def session(app, tmp_path):
    config = AppConfig(path=tmp_path / "config.json")
    config.log_limit = 5
    return PodSession(FakeDevice(), EditorState(), AppLogger(), config)


@pytest.fixture
def connected(session):
    with patch("midi.session.QTimer.singleShot"):
        session.connect(0, "Pocket POD")
    return session


def _params(effect=0):
    data = [0] * 55
    data[9] = 99       # drive
    data[46] = effect  # effect type
    return data


# -- inbound --

def test_edit_buffer_dump_updates_state(session):
    records = []
    session.patch_received.connect(records.append)
    session.handle_message(build_patch_dump("Twang", _params(effect=2)))
    assert session.state.params["drive"] == 99
    assert session.state.params["effect"] == 2
    assert session.state.preset_name == "Twang"
    assert len(records) == 1 and records[0].is_edit_buffer

def test_malformed_dump_is_discarded(session):
    logged = []
    session._logger.message_logged.connect(lambda cat, msg: logged.append(cat))
    frame = build_patch_dump("Cut", _params())[:40]
    session.handle_message(frame)
    assert session.state.params["drive"] == 64
    assert "WARNING" in logged

def test_cc_uses_current_effect_category(session):
    session.handle_message(build_patch_dump("Leslie", _params(effect=2)))
    session.handle_message([0xB0, 55, 12])
    assert session.state.params["effect_speed"] == 12

def test_toggle_cc(session):
    session.handle_message([0xB0, 28, 127])
    assert session.state.params["delay_enable"] == 1
    session.handle_message([0xB0, 28, 10])
    assert session.state.params["delay_enable"] == 0

def test_program_change(session):
    session.handle_message([0xC0, 9])
    assert session.state.current_preset == 9
    assert session.state.preset_name == "Preset 10"

def test_identity_reply(session):
    reply = [0xF0, 0x7E, 0x00, 0x06, 0x02, 0x00, 0x01, 0x0C, 0x00, 0x00,
             0x03, 0x00, 0x31, 0x2E, 0x30, 0x30, 0xF7]
    session.handle_message(reply)
    assert session.state.device_info.manufacturer == "00 01 0c"
    assert session.state.device_info.version == "1.00"

@pytest.mark.parametrize("junk", [
    [], [0xF0], [0xF0, 0x7E], [0xF0, 0x00, 0x01, 0x0C, 0x01, 0x01, 0x00],
    [0xB0], [0xC0], [0xF8], [0xF0, 0x7E, 0x00, 0x06, 0x02, 0xF7],
])
def test_malformed_wire_data_never_raises(session, junk):
    session.handle_message(junk)

def test_stored_preset_out_of_range_is_dropped(session):
    frame = build_patch_dump("Slot", _params(), preset_number=0)
    frame[7] = 126
    session.handle_message(frame)
    assert len(session.state.presets) == 0

def test_traffic_history_is_capped(session):
    for value in range(8):
        session.handle_message([0xB0, 13, value])
    traffic = session.traffic
    assert len(traffic) == 5
    assert traffic[-1] == ("IN", (0xB0, 13, 7))

def test_device_callback_routes_to_session(session):
    session._device.callback([0xC0, 4])
    assert session.state.current_preset == 4


# -- outbound --

def test_change_param_sends_cc(connected):
    connected.change_param("drive", 80)
    assert connected._device.sent[-1] == [0xB0, 13, 80]
    assert connected.state.params["drive"] == 80
    assert connected.state.dirty

def test_change_param_toggle_sends_127(connected):
    connected.change_param("reverb_enable", 1)
    assert connected._device.sent[-1] == [0xB0, 36, 127]

def test_change_param_effect_knob_follows_effect(connected):
    connected.handle_message([0xB0, 19, 9])   # tremolo
    connected.change_param("effect_depth", 20)
    assert connected._device.sent[-1] == [0xB0, 59, 20]

def test_change_param_without_controller_is_stored_only(connected):
    connected.handle_message([0xB0, 19, 11])  # compressor
    before = len(connected._device.sent)
    connected.change_param("effect_depth", 20)
    assert len(connected._device.sent) == before
    assert connected.state.params["effect_depth"] == 20

def test_change_param_unknown_name(connected):
    with pytest.raises(ValueError):
        connected.change_param("cutoff", 3)

def test_change_param_offline_stores_value(session):
    session.change_param("bass", 10)
    assert session.state.params["bass"] == 10
    assert session._device.sent == []

def test_change_param_out_of_range_leaves_state(connected):
    before = len(connected._device.sent)
    with pytest.raises(ValueError):
        connected.change_param("drive", 200)
    assert connected.state.params["drive"] == 64
    assert not connected.state.dirty
    assert len(connected._device.sent) == before

def test_change_param_out_of_range_offline(session):
    with pytest.raises(ValueError):
        session.change_param("amp_model", 99)
    assert session.state.params["amp_model"] == 0
    assert not session.state.dirty

def test_requests(connected):
    connected.request_identity()
    connected.request_edit_buffer()
    connected.request_program(3)
    assert connected._device.sent == [
        [0xF0, 0x7E, 0x7F, 0x06, 0x01, 0xF7],
        [0xF0, 0x00, 0x01, 0x0C, 0x01, 0x00, 0x01, 0xF7],
        [0xF0, 0x00, 0x01, 0x0C, 0x01, 0x00, 0x00, 3, 0xF7],
    ]
    assert connected.traffic[-1][0] == "OUT"

def test_request_when_disconnected_raises(session):
    with pytest.raises(RuntimeError):
        session.request_edit_buffer()

def test_fetch_all_presets(connected):
    finished = []
    connected.state.fetch_finished.connect(finished.append)
    assert connected.fetch_all_presets()
    assert connected._device.sent[-1] == [0xF0, 0x00, 0x01, 0x0C, 0x01, 0x00, 0x02, 0xF7]
    assert not connected.fetch_all_presets()
    for n in range(NUM_PRESETS):
        connected.handle_message(build_patch_dump(f"P{n}", _params(), preset_number=n))
    assert finished == [NUM_PRESETS]
    assert not connected.state.fetching
    assert connected.state.presets.get(42).name == "P42"

def test_fetch_requires_connection(session):
    assert not session.fetch_all_presets()

def test_load_preset_sends_program_change(connected):
    connected.handle_message(build_patch_dump("Stored", _params(), preset_number=7))
    connected.load_preset(7)
    assert connected._device.sent[-1] == [0xC0, 7]
    assert connected.state.preset_name == "Stored"
    assert connected.state.current_preset == 7

def test_load_unknown_preset(connected):
    with pytest.raises(KeyError):
        connected.load_preset(50)


# -- connection and watchdog --

def test_connect_schedules_identity_request(session):
    with patch("midi.session.QTimer.singleShot") as single_shot:
        session.connect(0, "Pocket POD")
    delay, callback = single_shot.call_args[0]
    assert delay == 200
    callback()
    assert session._device.sent == [[0xF0, 0x7E, 0x7F, 0x06, 0x01, 0xF7]]

def test_disconnect_resets_state(connected):
    connected.handle_message(build_patch_dump("Live", _params()))
    connected.disconnect()
    assert not connected.connected
    assert connected.state.preset_name == "—"
    assert connected.state.device_info is None

def test_watchdog_warns_then_disconnects(connected):
    start = connected._last_activity
    connected.check_activity(now=start + 5)
    assert not connected.device_unresponsive
    connected.check_activity(now=start + 11)
    assert connected.device_unresponsive
    assert connected.connected
    connected.check_activity(now=start + 31)
    assert not connected.connected
    assert connected.state.errors

def test_activity_clears_unresponsive(connected):
    connected.check_activity(now=connected._last_activity + 11)
    connected.handle_message([0xB0, 13, 1])
    assert not connected.device_unresponsive

def test_fetch_stall_cancels(connected):
    finished = []
    connected.state.fetch_finished.connect(finished.append)
    connected.fetch_all_presets()
    connected.handle_message(build_patch_dump("P0", _params(), preset_number=0))
    connected.check_activity(now=connected._last_dump + 11)
    assert not connected.state.fetching
    assert finished == [1]
    assert any("stalled" in message for _, message in connected.state.errors)
