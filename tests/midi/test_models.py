from midi.models import AMP_MODELS, CAB_MODELS, amp_model_name, cab_model_name


def test_table_lengths():
    assert len(AMP_MODELS) == 32
    assert len(CAB_MODELS) == 16

def test_entries_are_non_empty_and_unique():
    for table in (AMP_MODELS, CAB_MODELS):
        assert all(isinstance(n, str) and n for n in table)
        assert len(set(table)) == len(table)

def test_wire_order_anchors():
    assert amp_model_name(0) == "Tube Preamp"
    assert amp_model_name(31) == "Line 6 INSANE"
    assert cab_model_name(15) == "No Cabinet"

def test_out_of_range_is_none():
    assert amp_model_name(32) is None
    assert amp_model_name(-1) is None
    assert cab_model_name(16) is None
