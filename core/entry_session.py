# core/entry_session.py

"""
Draft store for one group's homework statuses before they are committed as records.

`EntrySession` holds the aide's in-progress status selections for a single group visit.
Nothing here is persisted: the caller appends the records returned by `commit()` to the
HomeworkTracker, and a session abandoned by navigating away leaves no trace.

Lifecycle:
    NOT_STARTED -> ACTIVE(group, drafts) -> COMMITTED | ABANDONED -> (reset) NOT_STARTED

When a group is selected, every member is drafted as SUBMITTED; the aide then marks
only the exceptions.
"""

from __future__ import annotations

import datetime
from collections import Counter
from collections.abc import Callable, Iterable
from enum import Enum

from core.exceptions import ValidationError
from core.utils import now_ms
from models.homework_record import HomeworkRecord
from models.homework_status import HomeworkStatus
from models.student import Student


class SessionState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    ACTIVE = "ACTIVE"
    COMMITTED = "COMMITTED"
    ABANDONED = "ABANDONED"


class EntrySession:
    """
    A temporary store of draft statuses for one group, keyed by student id.

    Notes:
        - Draft order follows the order of the students passed to `start()`.
        - No validation is performed on student ids passed to `set_status()`; the caller
          is responsible for passing members of the selected group.
    """

    def __init__(self):
        self._state: SessionState = SessionState.NOT_STARTED
        self._group: int | None = None
        self._drafts: dict[int, HomeworkStatus] = {}

    # === properties ===

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def group(self) -> int | None:
        return self._group

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    # === transitions ===

    def start(self, group: int, students: Iterable[Student]) -> None:
        """
        Begin a session for a group, drafting every member as SUBMITTED.

        Args:
            group (int): The selected group number.
            students (Iterable[Student]): The members of that group.

        Notes:
            - Starting discards any drafts from a previous visit, whatever state it ended in.
        """
        self._group = group
        self._drafts = {student.id: HomeworkStatus.SUBMITTED for student in students}
        self._state = SessionState.ACTIVE

    def set_status(self, student_id: int, status: HomeworkStatus) -> None:
        """
        Overwrite the draft status for one student.

        Raises:
            RuntimeError: If the session is not active.
        """
        self._require_active("set a draft status")

        self._drafts[student_id] = status

    def commit(
        self,
        date: datetime.date,
        assignment_name: str,
        clock: Callable[[], int] = now_ms,
    ) -> list[HomeworkRecord]:
        """
        Materialize one `HomeworkRecord` per drafted student and close the session.

        Args:
            date (datetime.date): The entry date shared by every record.
            assignment_name (str): The assignment name shared by every record; stored trimmed.
            clock (Callable[[], int]): Source of epoch-millisecond timestamps, read once per record.

        Returns:
            list[HomeworkRecord]: The new records in draft order. Ids are unique within the batch
            because each embeds its student id.

        Raises:
            RuntimeError: If the session is not active.
            ValidationError: If the assignment name is empty or whitespace only. The session stays
                ACTIVE with its drafts unchanged.
        """
        self._require_active("commit")

        if assignment_name is None or not assignment_name.strip():
            raise ValidationError("Please enter a homework name before submitting.")

        homework_name = assignment_name.strip()

        records = [
            HomeworkRecord.create(
                date=date,
                homework_name=homework_name,
                student_id=student_id,
                status=status,
                updated_at=clock(),
            )
            for student_id, status in self._drafts.items()
        ]

        self._state = SessionState.COMMITTED

        return records

    def abandon(self) -> None:
        """Discard all drafts without producing records."""
        self._drafts.clear()
        self._state = SessionState.ABANDONED

    def reset(self) -> None:
        self._group = None
        self._drafts = {}
        self._state = SessionState.NOT_STARTED

    # === accessors ===

    def status_for(self, student_id: int) -> HomeworkStatus | None:
        return self._drafts.get(student_id)

    def status_map(self) -> dict[int, HomeworkStatus]:
        """
        Get a shallow copy of the draft statuses.

        Returns:
            dict[int, HomeworkStatus]: A copy of the draft dictionary.
        """
        return self._drafts.copy()

    def status_counts(self) -> Counter[HomeworkStatus]:
        return Counter(self._drafts.values())

    def copy(self) -> EntrySession:
        clone = EntrySession()
        clone._state = self._state
        clone._group = self._group
        clone._drafts = self._drafts.copy()

        return clone

    # === helper methods ===

    def _require_active(self, action: str) -> None:
        if self._state is not SessionState.ACTIVE:
            raise RuntimeError(
                f"Cannot {action}: entry session is {self._state.value}, not ACTIVE."
            )

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._drafts)

    def __repr__(self) -> str:
        return f"EntrySession({self._state.value}, group={self._group}, drafts={len(self._drafts)})"
