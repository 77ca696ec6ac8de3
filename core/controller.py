# core/controller.py

"""
Dispatcher between the user-facing surface and the HomeworkTracker.

The `Controller` owns the current `AppState`, applies the pure reducers from
`core.app_state` for each user intent, and performs the side effects those
intents imply: appending committed records, deleting records, editing the
catalog, writing CSV exports, and handing notification text to the clipboard.

Every public method returns a `Response`, so the CLI (or any other surface)
handles success and failure uniformly.

Notes:
    - Teacher-only actions fail with `ErrorCode.INVALID_STATE` unless the state is
      on a teacher view (i.e., the PIN gate has been passed). This covers the dashboard
      reads (progress, warning list, notices) as well as mutations and export.
    - The clipboard hook may return a short string describing where the text went;
      it becomes the success detail.
    - The clock and "today" are injected so behavior is reproducible in tests.
"""

from __future__ import annotations

import datetime
import logging
import os
from collections.abc import Callable

import core.app_state as reducers
from core.analytics import TodayProgress, WarningEntry, today_progress, weekly_warning_list
from core.app_state import AppState, ViewMode
from core.csv_export import export_filename, write_csv
from core.exceptions import ValidationError
from core.notifications import build_notification
from core.pin_gate import PinGate
from core.response import ErrorCode, Response
from core.utils import now_ms, today
from models.homework_status import HomeworkStatus
from models.roster import GROUPS
from models.student import Student
from models.tracker import HomeworkTracker

logger = logging.getLogger(__name__)


class Controller:

    def __init__(
        self,
        tracker: HomeworkTracker,
        pin_gate: PinGate,
        clipboard: Callable[[str], str | None] | None = None,
        export_dir: str | None = None,
        today_fn: Callable[[], datetime.date] = today,
        clock: Callable[[], int] = now_ms,
    ):
        self._tracker = tracker
        self._pin_gate = pin_gate
        self._clipboard = clipboard
        self._export_dir = export_dir
        self._today_fn = today_fn
        self._clock = clock

        names = tracker.homework_names()
        self._state = reducers.initial_state(today_fn(), names[0] if names else "")

    # === properties ===

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def tracker(self) -> HomeworkTracker:
        return self._tracker

    # === entry actions ===

    def select_group(self, group: int) -> Response:
        if group not in GROUPS:
            return Response.fail(
                detail=f"Unknown group: {group}. Choose one of {', '.join(map(str, GROUPS))}.",
                error=ErrorCode.INVALID_INPUT,
            )

        students = self._tracker.students_in_group(group)
        self._state = reducers.select_group(self._state, group, students)
        logger.debug(f"Started entry session for group {group} ({len(students)} students)")

        return Response.succeed(
            data={
                "students": students,
            },
        )

    def set_status(self, student_id: int, status: HomeworkStatus) -> Response:
        try:
            self._state = reducers.set_draft_status(self._state, student_id, status)

        except RuntimeError as e:
            return Response.fail(detail=f"{e}", error=ErrorCode.INVALID_STATE)

        return Response.succeed()

    def set_current_date(self, current_date: datetime.date) -> Response:
        self._state = reducers.set_current_date(self._state, current_date)
        return Response.succeed()

    def set_current_homework(self, homework_name: str) -> Response:
        self._state = reducers.set_current_homework(self._state, homework_name)
        return Response.succeed()

    def submit_entry(self) -> Response:
        """
        Commits the active entry session and appends its records to the tracker.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the records were committed, appended, and saved.
                    - False otherwise.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_STATE` if no entry session is active.
                    - `ErrorCode.VALIDATION_FAILED` if the current homework name is blank.
                    - `ErrorCode.DUPLICATE_ID` if a record id collides with a stored record.
                    - `ErrorCode.STORAGE_ERROR` if the records were appended but could not be saved.
                - data (dict | None): Payload with the following keys:
                    - "added" (list[HomeworkRecord]): The appended records (on success or storage failure).

        Notes:
            - On validation or id failures the state is unchanged: the session stays ACTIVE with its drafts.
            - On success, and on storage failure, the view returns HOME and the session is reset.
        """
        state = self._state

        if state.view is not ViewMode.GROUP_ENTRY:
            return Response.fail(
                detail="There is no group entry in progress.",
                error=ErrorCode.INVALID_STATE,
            )

        try:
            records = state.entry.commit(
                state.current_date, state.current_homework, self._clock
            )

        except ValidationError as e:
            return Response.fail(detail=f"{e}", error=ErrorCode.VALIDATION_FAILED)

        except RuntimeError as e:
            return Response.fail(detail=f"{e}", error=ErrorCode.INVALID_STATE)

        append_response = self._tracker.append_records(records)

        if append_response.success or append_response.error is ErrorCode.STORAGE_ERROR:
            self._state = reducers.entry_committed(state)

        if append_response.success:
            logger.info(
                f"Group {state.selected_group} submitted {len(records)} records for '{state.current_homework.strip()}' on {state.current_date}"
            )

        return append_response

    def leave_entry(self) -> Response:
        if self._state.view is ViewMode.GROUP_ENTRY:
            logger.debug(f"Abandoned entry session for group {self._state.selected_group}")

        self._state = reducers.leave_entry(self._state)
        return Response.succeed()

    # === teacher access ===

    def open_teacher_login(self) -> Response:
        self._state = reducers.open_teacher_login(self._state)
        return Response.succeed()

    def login(self, pin_input: str) -> Response:
        self._state = reducers.enter_pin(self._state, pin_input)

        if self._pin_gate.authenticate(pin_input):
            self._state = reducers.login_succeeded(self._state)
            logger.info("Teacher dashboard unlocked")
            return Response.succeed(detail="Welcome back.")

        self._state = reducers.login_failed(self._state)
        logger.info("Teacher PIN rejected")

        return Response.fail(
            detail="Incorrect PIN. Please try again.",
            error=ErrorCode.AUTH_FAILED,
            status_code=401,
        )

    def cancel_login(self) -> Response:
        self._state = reducers.go_home(self._state)
        return Response.succeed()

    def logout(self) -> Response:
        self._state = reducers.logout(self._state)
        logger.info("Teacher logged out")
        return Response.succeed()

    def open_homework_mgmt(self) -> Response:
        return self._teacher_transition(reducers.open_homework_mgmt)

    def back_to_dashboard(self) -> Response:
        return self._teacher_transition(reducers.back_to_dashboard)

    # === dashboard reads ===

    def dashboard_stats(self) -> Response:
        """
        Computes today's progress for the dashboard.

        Returns:
            Response: On success, data["progress"] holds the `TodayProgress`.
            `ErrorCode.INVALID_STATE` (403) unless a teacher view is open.
        """
        denied = self._require_teacher()
        if denied is not None:
            return denied

        progress = today_progress(self._tracker.all_records(), self._today_fn())

        return Response.succeed(
            data={
                "progress": progress,
            },
        )

    def warning_list(self) -> Response:
        """
        Lists students with three or more MISSING records in the last seven days.

        Returns:
            Response: On success, data["warnings"] holds a list of `WarningEntry`, in first-seen order.
            `ErrorCode.INVALID_STATE` (403) unless a teacher view is open.
        """
        denied = self._require_teacher()
        if denied is not None:
            return denied

        warnings = weekly_warning_list(
            self._tracker.all_records(), self._today_fn(), self._tracker.roster
        )

        return Response.succeed(
            data={
                "warnings": warnings,
            },
        )

    def history(
        self, date: datetime.date | None = None, name_query: str | None = None
    ) -> Response:
        denied = self._require_teacher()
        if denied is not None:
            return denied

        return self._tracker.find_records(date, name_query)

    def notification_text(self, student: Student) -> Response:
        denied = self._require_teacher()
        if denied is not None:
            return denied

        return Response.succeed(
            data={
                "text": build_notification(student, self._tracker.all_records()),
            },
        )

    # === teacher mutations ===

    def delete_record(self, record_id: str) -> Response:
        denied = self._require_teacher()
        if denied is not None:
            return denied

        return self._tracker.remove_record(record_id)

    def add_homework_item(self, name: str) -> Response:
        denied = self._require_teacher()
        if denied is not None:
            return denied

        return self._tracker.add_homework_item(name)

    def remove_homework_item(self, item_id: str) -> Response:
        denied = self._require_teacher()
        if denied is not None:
            return denied

        return self._tracker.remove_homework_item(item_id)

    # === external collaborators ===

    def export_csv(self, path: str | None = None) -> Response:
        """
        Writes every record to a CSV file.

        Args:
            path (str | None): Target file. Defaults to `homework_records_<today>.csv` in the export directory.

        Returns:
            Response: On success, data["path"] holds the absolute path written and data["count"] the row count.
            `ErrorCode.NOT_FOUND` if there are no records to export; `ErrorCode.STORAGE_ERROR` if the file
            cannot be written.
        """
        denied = self._require_teacher()
        if denied is not None:
            return denied

        records = self._tracker.all_records()

        if not records:
            return Response.fail(
                detail="There are no records to export.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        if path is None:
            path = os.path.join(
                self._export_dir or os.getcwd(), export_filename(self._today_fn())
            )

        try:
            written = write_csv(records, path, self._tracker.roster)

        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            return Response.fail(
                detail=f"Failed to write export file: {e}",
                error=ErrorCode.STORAGE_ERROR,
            )

        logger.info(f"Exported {len(records)} records to {written}")

        return Response.succeed(
            detail=f"Exported {len(records)} records to {written}.",
            data={
                "path": written,
                "count": len(records),
            },
        )

    def copy_notification(self, student: Student) -> Response:
        """
        Builds the parent notice for a student and hands it to the clipboard hook.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the clipboard hook accepted the text.
                    - False otherwise.
                - detail (str | None):
                    - The string returned by the hook when it returns one (e.g. where the text went),
                      otherwise a generic confirmation or a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_STATE` (403) unless a teacher view is open.
                    - `ErrorCode.CLIPBOARD_ERROR` if no hook is configured or the hook raised; non-fatal.
                - data (dict | None): Payload with the following keys:
                    - "text" (str): The notice (absent only when access is refused).
        """
        text_response = self.notification_text(student)

        if not text_response.success:
            return text_response

        text = text_response.data["text"]

        if self._clipboard is None:
            return Response.fail(
                detail="No clipboard is available; copy the notice manually.",
                error=ErrorCode.CLIPBOARD_ERROR,
                data={
                    "text": text,
                },
            )

        try:
            hook_detail = self._clipboard(text)

        except Exception as e:
            logger.warning(f"Could not copy notification to clipboard: {e}")
            return Response.fail(
                detail=f"Could not copy to clipboard: {e}",
                error=ErrorCode.CLIPBOARD_ERROR,
                data={
                    "text": text,
                },
            )

        return Response.succeed(
            detail=hook_detail or "Notification text copied to clipboard.",
            data={
                "text": text,
            },
        )

    # === helper methods ===

    def _require_teacher(self) -> Response | None:
        if self._state.is_teacher_view:
            return None

        return Response.fail(
            detail="Teacher access is required. Please enter the PIN first.",
            error=ErrorCode.INVALID_STATE,
            status_code=403,
        )

    def _teacher_transition(self, reducer: Callable[[AppState], AppState]) -> Response:
        denied = self._require_teacher()
        if denied is not None:
            return denied

        self._state = reducer(self._state)
        return Response.succeed()


