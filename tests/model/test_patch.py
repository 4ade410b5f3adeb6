from model.patch import PatchRecord

def test_patch_creation():
    p = PatchRecord(name="Fat Crunch", parameters={"drive": 90}, preset_number=42)
    assert p.name == "Fat Crunch"
    assert p.preset_number == 42
    assert not p.is_edit_buffer

def test_edit_buffer_has_no_number():
    p = PatchRecord(name="Live")
    assert p.is_edit_buffer
    assert p.preset_number is None
    assert p.parameters == {}

def test_display_name_fallbacks():
    assert PatchRecord(name="Solo").display_name == "Solo"
    assert PatchRecord(name="", preset_number=0).display_name == "Preset 1"
    assert PatchRecord(name="").display_name == "Edit Buffer"

def test_summary():
    p = PatchRecord(name="X", parameters={"amp_model": 2, "effect": 2, "cab_model": 11})
    assert p.summary() == "Line 6 Crunch / Rotary / 4x12 '96"

def test_summary_with_missing_values():
    assert PatchRecord(name="X").summary() == "— / — / —"

def test_patch_to_dict():
    p = PatchRecord(name="Test", parameters={"bass": 5}, preset_number=5)
    d = p.to_dict()
    assert d["name"] == "Test"
    assert d["preset_number"] == 5
    assert d["parameters"] == {"bass": 5}
    assert d["is_edit_buffer"] is False
