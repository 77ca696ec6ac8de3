# core/app_state.py

"""
View state for the Homework Tracker and the pure reducers that move it between screens.

`AppState` is an immutable snapshot: which view is showing, which group is being
entered (with its `EntrySession`), the date and assignment picked for entry, and the
PIN prompt's input and error flag. Every reducer below takes a state plus the action's
arguments and returns a new state; none of them mutates its input or touches storage.
Side effects (appending records, deleting, exporting) live in `core.controller`.

Views:
    HOME -> GROUP_ENTRY -> HOME                      (aide: select group, submit or leave)
    HOME -> TEACHER_LOGIN -> TEACHER_DASHBOARD       (teacher: PIN gate)
    TEACHER_DASHBOARD <-> TEACHER_HOMEWORK_MGMT      (catalog screen)
    TEACHER_DASHBOARD -> HOME                        (logout)
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from enum import Enum

from core.entry_session import EntrySession
from models.homework_status import HomeworkStatus
from models.student import Student

_UNSET = object()


class ViewMode(str, Enum):
    HOME = "HOME"
    GROUP_ENTRY = "GROUP_ENTRY"
    TEACHER_LOGIN = "TEACHER_LOGIN"
    TEACHER_DASHBOARD = "TEACHER_DASHBOARD"
    TEACHER_HOMEWORK_MGMT = "TEACHER_HOMEWORK_MGMT"


TEACHER_VIEWS = frozenset({ViewMode.TEACHER_DASHBOARD, ViewMode.TEACHER_HOMEWORK_MGMT})


class AppState:

    def __init__(
        self,
        view: ViewMode,
        current_date: datetime.date,
        current_homework: str,
        selected_group: int | None = None,
        entry: EntrySession | None = None,
        pin_input: str = "",
        login_error: bool = False,
    ):
        self._view = view
        self._current_date = current_date
        self._current_homework = current_homework
        self._selected_group = selected_group
        self._entry = entry if entry is not None else EntrySession()
        self._pin_input = pin_input
        self._login_error = login_error

    # === properties ===

    @property
    def view(self) -> ViewMode:
        return self._view

    @property
    def current_date(self) -> datetime.date:
        return self._current_date

    @property
    def current_homework(self) -> str:
        return self._current_homework

    @property
    def selected_group(self) -> int | None:
        return self._selected_group

    @property
    def entry(self) -> EntrySession:
        # callers get a copy so the snapshot cannot be changed from outside
        return self._entry.copy()

    @property
    def pin_input(self) -> str:
        return self._pin_input

    @property
    def login_error(self) -> bool:
        return self._login_error

    @property
    def is_teacher_view(self) -> bool:
        return self._view in TEACHER_VIEWS

    # === helper methods ===

    def replace(
        self,
        view: ViewMode | object = _UNSET,
        current_date: datetime.date | object = _UNSET,
        current_homework: str | object = _UNSET,
        selected_group: int | None | object = _UNSET,
        entry: EntrySession | object = _UNSET,
        pin_input: str | object = _UNSET,
        login_error: bool | object = _UNSET,
    ) -> AppState:
        def pick(value, current):
            return current if value is _UNSET else value

        return AppState(
            view=pick(view, self._view),
            current_date=pick(current_date, self._current_date),
            current_homework=pick(current_homework, self._current_homework),
            selected_group=pick(selected_group, self._selected_group),
            entry=pick(entry, self._entry.copy()),
            pin_input=pick(pin_input, self._pin_input),
            login_error=pick(login_error, self._login_error),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"AppState({self._view.value}, group={self._selected_group}, {self._current_date}, {self._current_homework!r}, {self._entry!r}, login_error={self._login_error})"


def initial_state(today: datetime.date, current_homework: str = "") -> AppState:
    return AppState(
        view=ViewMode.HOME,
        current_date=today,
        current_homework=current_homework,
    )


# === entry reducers ===


def select_group(state: AppState, group: int, students: Iterable[Student]) -> AppState:
    entry = EntrySession()
    entry.start(group, students)

    return state.replace(
        view=ViewMode.GROUP_ENTRY,
        selected_group=group,
        entry=entry,
    )


def set_draft_status(
    state: AppState, student_id: int, status: HomeworkStatus
) -> AppState:
    entry = state.entry
    entry.set_status(student_id, status)

    return state.replace(entry=entry)


def set_current_date(state: AppState, current_date: datetime.date) -> AppState:
    return state.replace(current_date=current_date)


def set_current_homework(state: AppState, homework_name: str) -> AppState:
    return state.replace(current_homework=homework_name)


def leave_entry(state: AppState) -> AppState:
    """Active -> Abandoned -> NotStarted: drop the drafts and return home."""
    entry = state.entry

    if entry.is_active:
        entry.abandon()

    entry.reset()

    return state.replace(
        view=ViewMode.HOME,
        selected_group=None,
        entry=entry,
    )


def entry_committed(state: AppState) -> AppState:
    """Committed -> NotStarted; the entry date and homework carry over to the next group."""
    entry = state.entry
    entry.reset()

    return state.replace(
        view=ViewMode.HOME,
        selected_group=None,
        entry=entry,
    )


# === teacher reducers ===


def open_teacher_login(state: AppState) -> AppState:
    return state.replace(view=ViewMode.TEACHER_LOGIN, pin_input="")


def enter_pin(state: AppState, pin_input: str) -> AppState:
    return state.replace(pin_input=pin_input)


def login_succeeded(state: AppState) -> AppState:
    return state.replace(
        view=ViewMode.TEACHER_DASHBOARD,
        pin_input="",
        login_error=False,
    )


def login_failed(state: AppState) -> AppState:
    return state.replace(pin_input="", login_error=True)


def open_homework_mgmt(state: AppState) -> AppState:
    return state.replace(view=ViewMode.TEACHER_HOMEWORK_MGMT)


def back_to_dashboard(state: AppState) -> AppState:
    return state.replace(view=ViewMode.TEACHER_DASHBOARD)


def go_home(state: AppState) -> AppState:
    return state.replace(view=ViewMode.HOME, pin_input="")


def logout(state: AppState) -> AppState:
    return state.replace(view=ViewMode.HOME, pin_input="", login_error=False)
