# core/pin_gate.py

"""
Shared-PIN gate in front of the teacher views.

This is a convenience gate, not authentication: one static PIN shared by
everyone who may open the dashboard, compared with plain string equality.
There is no lockout and no attempt counting.
"""

DEFAULT_TEACHER_PIN = "1234"


class PinGate:

    def __init__(self, pin: str = DEFAULT_TEACHER_PIN):
        self._pin = str(pin)

    def authenticate(self, pin_input: str) -> bool:
        return pin_input == self._pin

    def __repr__(self) -> str:
        return "PinGate(****)"
