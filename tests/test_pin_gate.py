# tests/test_pin_gate.py

from core.pin_gate import DEFAULT_TEACHER_PIN, PinGate


def test_default_pin():
    gate = PinGate()

    assert DEFAULT_TEACHER_PIN == "1234"
    assert gate.authenticate("1234")


def test_authenticate_is_exact_match():
    gate = PinGate("2468")

    assert gate.authenticate("2468")
    assert not gate.authenticate("2468 ")
    assert not gate.authenticate("")
    assert not gate.authenticate("1234")


def test_numeric_pin_from_config_is_compared_as_text():
    assert PinGate(2468).authenticate("2468")


def test_repr_hides_pin():
    assert "2468" not in repr(PinGate("2468"))
