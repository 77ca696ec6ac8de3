# models/homework_status.py

"""
The closed vocabulary of homework submission states.

Declaration order is the display order of the status choices during entry.
SUBMITTED and CORRECTED both count as "satisfied" for progress; MISSING counts
against the student in the warning list and parent notifications.
"""

from enum import Enum


class HomeworkStatus(str, Enum):
    SUBMITTED = "submitted"
    MISSING = "missing"
    LATE = "late"
    NEEDS_CORRECTION = "needs_correction"
    CORRECTED = "corrected"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def is_satisfied(self) -> bool:
        return self in SATISFIED_STATUSES


STATUS_LABELS: dict[HomeworkStatus, str] = {
    HomeworkStatus.SUBMITTED: "Submitted",
    HomeworkStatus.MISSING: "Missing",
    HomeworkStatus.LATE: "Late",
    HomeworkStatus.NEEDS_CORRECTION: "Needs Correction",
    HomeworkStatus.CORRECTED: "Corrected",
}

SATISFIED_STATUSES = frozenset({HomeworkStatus.SUBMITTED, HomeworkStatus.CORRECTED})
