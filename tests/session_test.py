from glassvis.session import InspectionSession


def test_new_session_is_not_ready():
    session = InspectionSession()
    assert not session.ready
    assert session.normalized_captured_path() is None


def test_loading_both_images_makes_session_ready():
    session = InspectionSession()
    session.set_reference("data/output/_board_ref.png")
    assert not session.ready
    session.set_captured("data/output/_board_capt.png")
    assert session.ready
    assert session.active_path == "data/output/_board_capt.png"


def test_record_diff_switches_active_view():
    session = InspectionSession()
    session.set_captured("data/output/_board_capt.png")
    session.record_diff("data/output/diff_board_capt.png", {'count': 3})
    assert session.active_path == "data/output/diff_board_capt.png"
    assert session.captured_path == "data/output/_board_capt.png"
    assert session.last_result == {'count': 3}


def test_captured_path_is_kept_when_not_a_diff():
    session = InspectionSession()
    session.set_reference("data/output/_board_ref.png")
    session.set_captured("data/output/_board_capt.png")
    assert session.normalized_captured_path() == "data/output/_board_capt.png"


def test_diff_output_in_captured_slot_is_normalized():
    session = InspectionSession()
    session.set_reference("data/output/_board_ref.png")
    session.set_captured("data/output/diff_board_capt.png")
    assert session.normalized_captured_path() == "data/output/_board_capt.png"


def test_toggle_fullscreen():
    session = InspectionSession()
    assert session.toggle_fullscreen() is True
    assert session.fullscreen
    assert session.toggle_fullscreen() is False


def test_sessions_do_not_share_state():
    a = InspectionSession()
    b = InspectionSession()
    a.set_reference("a.png")
    assert b.reference_path is None


def test_captured_name_containing_diff_is_not_a_diff_output():
    session = InspectionSession()
    session.set_reference("data/output/_board.png")
    session.set_captured("data/output/_diffuser_board.png")
    assert session.normalized_captured_path() == "data/output/_diffuser_board.png"


def test_diff_output_is_kept_when_reference_has_no_ref_suffix():
    session = InspectionSession()
    session.set_reference("data/output/_board.png")
    session.set_captured("data/output/diff_board.png")
    assert session.normalized_captured_path() == "data/output/diff_board.png"


def test_recorded_diff_path_counts_as_diff_output():
    session = InspectionSession()
    session.set_reference("shots/board_ref.png")
    session.record_diff("elsewhere/diffboard_capt.png")
    session.set_captured("elsewhere/diffboard_capt.png")
    assert session.is_diff_output("elsewhere/diffboard_capt.png")
    assert not session.is_diff_output("shots/diffboard_capt.png")
    assert session.normalized_captured_path() == "shots/board_capt.png"
