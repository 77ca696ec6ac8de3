# tests/conftest.py

import datetime
import itertools

import pytest

from core.controller import Controller
from core.pin_gate import PinGate
from core.storage import MemoryStore
from models.homework_record import HomeworkRecord
from models.homework_status import HomeworkStatus
from models.student import Student
from models.tracker import HomeworkTracker

TODAY = datetime.date(2025, 3, 14)
TEST_PIN = "2468"


class FixedClock:
    """Returns strictly increasing epoch-millisecond timestamps."""

    def __init__(self, start: int = 1_741_910_400_000):
        self._counter = itertools.count(start)

    def __call__(self) -> int:
        return next(self._counter)


def build_record(
    student_id: int,
    status: HomeworkStatus,
    date: datetime.date = TODAY,
    homework_name: str = "Math Test",
    updated_at: int = 1,
) -> HomeworkRecord:
    return HomeworkRecord.create(
        date=date,
        homework_name=homework_name,
        student_id=student_id,
        status=status,
        updated_at=updated_at,
    )


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def fixed_clock():
    return FixedClock()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sample_tracker(memory_store):
    tracker_response = HomeworkTracker.load(memory_store)
    return tracker_response.data["tracker"]


@pytest.fixture
def sample_student():
    return Student(12, "杰薰", 1)


@pytest.fixture
def other_student():
    return Student(3, "李秉宸", 1)


@pytest.fixture
def small_roster(sample_student, other_student):
    return (sample_student, other_student, Student(9, "陳庭宇", 2))


@pytest.fixture
def clipboard_calls():
    return []


@pytest.fixture
def sample_controller(sample_tracker, fixed_clock, clipboard_calls, tmp_path):
    return Controller(
        sample_tracker,
        PinGate(TEST_PIN),
        clipboard=clipboard_calls.append,
        export_dir=str(tmp_path / "exports"),
        today_fn=lambda: TODAY,
        clock=fixed_clock,
    )


@pytest.fixture
def teacher_controller(sample_controller):
    sample_controller.open_teacher_login()
    sample_controller.login(TEST_PIN)
    return sample_controller


@pytest.fixture
def make_record():
    return build_record
