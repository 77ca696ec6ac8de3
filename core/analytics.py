# core/analytics.py

"""
Read-only statistics derived from the full record list and a reference date.

- `today_progress()`: how many of today's records are satisfied (SUBMITTED or
  CORRECTED) or MISSING, and the satisfied share as a whole-number percentage.
- `weekly_warning_list()`: students with at least three MISSING records in the
  trailing window `[today - 7 days, today]`.

Both functions are pure: they never mutate their inputs and depend on no clock.
"""

from __future__ import annotations

import datetime
import logging
import math
from collections.abc import Iterable

from models.homework_record import HomeworkRecord
from models.homework_status import HomeworkStatus
from models.roster import STUDENTS, find_student
from models.student import Student

logger = logging.getLogger(__name__)

WARNING_WINDOW_DAYS = 7
WARNING_THRESHOLD = 3


class TodayProgress:

    def __init__(
        self,
        total_today: int,
        satisfied_today: int,
        missing_today: int,
    ):
        self._total_today = total_today
        self._satisfied_today = satisfied_today
        self._missing_today = missing_today

    @property
    def total_today(self) -> int:
        return self._total_today

    @property
    def satisfied_today(self) -> int:
        return self._satisfied_today

    @property
    def missing_today(self) -> int:
        return self._missing_today

    @property
    def progress_percent(self) -> int:
        if self._total_today == 0:
            return 0

        # rounds half up, e.g. 1/8 -> 13
        return math.floor(self._satisfied_today / self._total_today * 100 + 0.5)

    def to_dict(self) -> dict:
        return {
            "total_today": self._total_today,
            "satisfied_today": self._satisfied_today,
            "missing_today": self._missing_today,
            "progress_percent": self.progress_percent,
        }

    def __repr__(self) -> str:
        return f"TodayProgress({self._total_today}, {self._satisfied_today}, {self._missing_today})"


class WarningEntry:

    def __init__(self, student: Student, count: int):
        self._student = student
        self._count = count

    @property
    def student(self) -> Student:
        return self._student

    @property
    def count(self) -> int:
        return self._count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WarningEntry):
            return NotImplemented

        return self._student == other._student and self._count == other._count

    def __repr__(self) -> str:
        return f"WarningEntry({self._student!r}, {self._count})"


def today_progress(
    records: Iterable[HomeworkRecord], today: datetime.date
) -> TodayProgress:
    todays = [r for r in records if r.date == today]

    return TodayProgress(
        total_today=len(todays),
        satisfied_today=sum(1 for r in todays if r.status.is_satisfied),
        missing_today=sum(1 for r in todays if r.status is HomeworkStatus.MISSING),
    )


def weekly_warning_list(
    records: Iterable[HomeworkRecord],
    today: datetime.date,
    roster: tuple[Student, ...] | list[Student] = STUDENTS,
    window_days: int = WARNING_WINDOW_DAYS,
    threshold: int = WARNING_THRESHOLD,
) -> list[WarningEntry]:
    """
    Lists students with `threshold` or more MISSING records on or after `today - window_days`.

    Args:
        records (Iterable[HomeworkRecord]): All records, in store order.
        today (datetime.date): The reference date.
        roster (tuple[Student, ...] | list[Student]): Used to resolve student ids.
        window_days (int): Size of the trailing window. Defaults to 7.
        threshold (int): Minimum in-window MISSING count. Defaults to 3.

    Returns:
        list[WarningEntry]: One entry per qualifying student, ordered by the position of
        that student's first in-window MISSING record in `records`.

    Notes:
        - Only a lower bound is applied; records dated after `today` would still count.
        - Two MISSING records for the same student on the same date count twice.
        - Student ids not on the roster are skipped.
    """
    window_start = today - datetime.timedelta(days=window_days)

    counts: dict[int, int] = {}

    for record in records:
        if record.status is not HomeworkStatus.MISSING or record.date < window_start:
            continue

        counts[record.student_id] = counts.get(record.student_id, 0) + 1

    warnings = []

    for student_id, count in counts.items():
        if count < threshold:
            continue

        student = find_student(student_id, roster)

        if student is None:
            logger.warning(
                f"Student id {student_id} has {count} missing records but is not on the roster"
            )
            continue

        warnings.append(WarningEntry(student, count))

    return warnings
