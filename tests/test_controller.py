# tests/test_controller.py

import csv
import datetime
import os

from core.app_state import ViewMode
from core.controller import Controller
from core.exceptions import StorageError
from core.pin_gate import PinGate
from core.response import ErrorCode
from core.storage import RECORDS_KEY, MemoryStore
from models.homework_status import HomeworkStatus
from models.roster import find_student
from models.tracker import HomeworkTracker

# === entry ===


def test_initial_homework_is_first_catalog_item(sample_controller):
    assert sample_controller.state.current_homework == "Chinese Workbook"


def test_select_unknown_group_fails(sample_controller):
    response = sample_controller.select_group(7)

    assert response.error is ErrorCode.INVALID_INPUT
    assert sample_controller.state.view is ViewMode.HOME


def test_submit_entry_appends_one_record_per_student(sample_controller, memory_store, today):
    sample_controller.select_group(1)
    sample_controller.set_status(8, HomeworkStatus.MISSING)
    sample_controller.set_current_homework("Math Test")

    response = sample_controller.submit_entry()

    assert response.success
    records = sample_controller.tracker.all_records()
    assert len(records) == 5
    assert {r.homework_name for r in records} == {"Math Test"}
    assert {r.date for r in records} == {today}
    assert [r.status for r in records if r.student_id == 8] == [HomeworkStatus.MISSING]
    assert len(memory_store.load(RECORDS_KEY)) == 5
    assert sample_controller.state.view is ViewMode.HOME


def test_submit_entry_uses_chosen_date(sample_controller):
    back_date = datetime.date(2025, 3, 3)
    sample_controller.select_group(2)
    sample_controller.set_current_date(back_date)

    sample_controller.submit_entry()

    assert {r.date for r in sample_controller.tracker.all_records()} == {back_date}


def test_submit_entry_blank_homework_keeps_drafts(sample_controller):
    sample_controller.select_group(1)
    sample_controller.set_status(3, HomeworkStatus.LATE)
    sample_controller.set_current_homework("   ")

    response = sample_controller.submit_entry()

    assert response.error is ErrorCode.VALIDATION_FAILED
    assert sample_controller.state.view is ViewMode.GROUP_ENTRY
    assert sample_controller.state.entry.status_for(3) is HomeworkStatus.LATE
    assert sample_controller.tracker.all_records() == []


def test_submit_empty_group_adds_nothing(sample_controller):
    sample_controller.select_group(6)

    response = sample_controller.submit_entry()

    assert response.success
    assert sample_controller.tracker.all_records() == []


def test_submit_without_entry_fails(sample_controller):
    response = sample_controller.submit_entry()

    assert response.error is ErrorCode.INVALID_STATE


def test_leave_entry_writes_nothing(sample_controller, memory_store):
    sample_controller.select_group(1)
    sample_controller.set_status(12, HomeworkStatus.MISSING)

    sample_controller.leave_entry()

    assert sample_controller.state.view is ViewMode.HOME
    assert RECORDS_KEY not in memory_store

    response = sample_controller.set_status(12, HomeworkStatus.MISSING)
    assert response.error is ErrorCode.INVALID_STATE


def test_reselecting_group_resets_drafts(sample_controller):
    sample_controller.select_group(1)
    sample_controller.set_status(12, HomeworkStatus.MISSING)
    sample_controller.leave_entry()

    sample_controller.select_group(1)

    assert sample_controller.state.entry.status_for(12) is HomeworkStatus.SUBMITTED


# === teacher access ===


def test_login_wrong_pin(sample_controller):
    sample_controller.open_teacher_login()

    response = sample_controller.login("0000")

    assert response.error is ErrorCode.AUTH_FAILED
    assert response.status_code == 401
    assert sample_controller.state.view is ViewMode.TEACHER_LOGIN
    assert sample_controller.state.login_error
    assert sample_controller.state.pin_input == ""


def test_login_correct_pin_after_failure(sample_controller):
    sample_controller.open_teacher_login()
    sample_controller.login("0000")

    response = sample_controller.login("2468")

    assert response.success
    assert sample_controller.state.view is ViewMode.TEACHER_DASHBOARD
    assert not sample_controller.state.login_error


def test_teacher_actions_require_login(sample_controller):
    for response in (
        sample_controller.history(),
        sample_controller.delete_record("x"),
        sample_controller.add_homework_item("Spelling Quiz"),
        sample_controller.remove_homework_item("1"),
        sample_controller.export_csv(),
        sample_controller.open_homework_mgmt(),
    ):
        assert response.error is ErrorCode.INVALID_STATE
        assert response.status_code == 403

    assert len(sample_controller.tracker.all_homework_items()) == 3


def test_dashboard_reads_require_login(sample_controller, clipboard_calls, make_record):
    sample_controller.tracker.append_records(
        [make_record(12, HomeworkStatus.MISSING, updated_at=n) for n in range(3)]
    )
    student = find_student(12)

    for response in (
        sample_controller.dashboard_stats(),
        sample_controller.warning_list(),
        sample_controller.notification_text(student),
        sample_controller.copy_notification(student),
    ):
        assert not response.success
        assert response.error is ErrorCode.INVALID_STATE
        assert response.status_code == 403
        assert response.data == {}

    assert clipboard_calls == []


def test_logout_locks_teacher_actions(teacher_controller):
    teacher_controller.logout()

    assert teacher_controller.state.view is ViewMode.HOME
    assert teacher_controller.history().error is ErrorCode.INVALID_STATE


def test_homework_mgmt_round_trip(teacher_controller):
    teacher_controller.open_homework_mgmt()
    add_response = teacher_controller.add_homework_item("Spelling Quiz")

    assert teacher_controller.state.view is ViewMode.TEACHER_HOMEWORK_MGMT
    assert add_response.success

    teacher_controller.remove_homework_item(add_response.data["record"].id)
    teacher_controller.back_to_dashboard()

    assert teacher_controller.state.view is ViewMode.TEACHER_DASHBOARD
    assert "Spelling Quiz" not in teacher_controller.tracker.homework_names()


# === dashboard ===


def submit_group(controller, group, statuses, homework="Math Test"):
    controller.select_group(group)
    controller.set_current_homework(homework)

    for student_id, status in statuses.items():
        controller.set_status(student_id, status)

    return controller.submit_entry()


def test_dashboard_stats(sample_controller):
    submit_group(
        sample_controller,
        1,
        {3: HomeworkStatus.MISSING, 8: HomeworkStatus.LATE, 17: HomeworkStatus.CORRECTED},
    )
    sample_controller.open_teacher_login()
    sample_controller.login("2468")

    progress = sample_controller.dashboard_stats().data["progress"]

    # 12, 17 (corrected), 26 satisfied out of 5
    assert progress.total_today == 5
    assert progress.missing_today == 1
    assert progress.progress_percent == 60


def test_warning_list_and_history_delete(sample_controller):
    for offset in range(3):
        sample_controller.set_current_date(
            datetime.date(2025, 3, 14) - datetime.timedelta(days=offset)
        )
        submit_group(sample_controller, 2, {24: HomeworkStatus.MISSING})

    sample_controller.open_teacher_login()
    sample_controller.login("2468")

    warnings = sample_controller.warning_list().data["warnings"]

    assert [(w.student.id, w.count) for w in warnings] == [(24, 3)]

    history = sample_controller.history(name_query="謝靚橙").data["records"]
    assert len(history) == 3

    sample_controller.delete_record(history[0].id)

    assert len(sample_controller.tracker.all_records()) == 14
    assert sample_controller.warning_list().data["warnings"] == []


def test_copy_notification(sample_controller, clipboard_calls):
    submit_group(sample_controller, 1, {12: HomeworkStatus.MISSING}, "Chinese Workbook")
    sample_controller.open_teacher_login()
    sample_controller.login("2468")

    response = sample_controller.copy_notification(find_student(12))

    assert response.success
    assert response.detail == "Notification text copied to clipboard."
    assert clipboard_calls == [response.data["text"]]
    assert "- 2025-03-14 Chinese Workbook" in response.data["text"]


def test_copy_notification_uses_hook_detail(sample_tracker, today):
    controller = Controller(
        sample_tracker,
        PinGate(),
        clipboard=lambda text: "Printed for copying.",
        today_fn=lambda: today,
    )
    controller.open_teacher_login()
    controller.login("1234")

    response = controller.copy_notification(find_student(12))

    assert response.success
    assert response.detail == "Printed for copying."


def test_copy_notification_clipboard_failure(sample_tracker, today):
    def broken_clipboard(text):
        raise OSError("no display")

    controller = Controller(
        sample_tracker, PinGate(), clipboard=broken_clipboard, today_fn=lambda: today
    )
    controller.open_teacher_login()
    controller.login("1234")

    response = controller.copy_notification(find_student(12))

    assert response.error is ErrorCode.CLIPBOARD_ERROR
    assert response.data["text"].startswith("[Homework Missing Notice]")


def test_copy_notification_without_clipboard(sample_tracker):
    controller = Controller(sample_tracker, PinGate())
    controller.open_teacher_login()
    controller.login("1234")

    response = controller.copy_notification(find_student(12))

    assert response.error is ErrorCode.CLIPBOARD_ERROR
    assert "text" in response.data


# === export ===


def test_export_csv_without_records(teacher_controller):
    response = teacher_controller.export_csv()

    assert response.error is ErrorCode.NOT_FOUND


def test_export_csv_default_path(teacher_controller, tmp_path):
    teacher_controller.logout()
    submit_group(teacher_controller, 3, {2: HomeworkStatus.MISSING})
    teacher_controller.open_teacher_login()
    teacher_controller.login("2468")

    response = teacher_controller.export_csv()

    assert response.success
    assert response.data["count"] == 6
    assert response.data["path"] == os.path.join(
        str(tmp_path / "exports"), "homework_records_2025-03-14.csv"
    )

    with open(response.data["path"], encoding="utf-8-sig", newline="") as f:
        rows = list(csv.reader(f))

    assert len(rows) == 7
    assert ["2025-03-14", "Math Test", "2", "程競弘", "Missing"] in rows


def test_export_csv_write_failure(teacher_controller, tmp_path, make_record):
    teacher_controller.tracker.append_records([make_record(12, HomeworkStatus.MISSING)])
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")

    response = teacher_controller.export_csv(str(blocker / "out.csv"))

    assert response.error is ErrorCode.STORAGE_ERROR


def test_storage_failure_on_submit_still_returns_home(today, fixed_clock):
    class FailingStore(MemoryStore):
        def save(self, key, value):
            raise StorageError("read-only filesystem")

    tracker = HomeworkTracker.load(FailingStore()).data["tracker"]
    controller = Controller(tracker, PinGate(), today_fn=lambda: today, clock=fixed_clock)
    controller.select_group(1)

    response = controller.submit_entry()

    assert response.error is ErrorCode.STORAGE_ERROR
    assert controller.state.view is ViewMode.HOME
    assert len(tracker.all_records()) == 5
