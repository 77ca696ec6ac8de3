# models/homework_record.py

"""
Represents one submission-status observation for a student, assignment, and date.

Records are immutable once created. A correction is entered as a brand-new
record with a later `updated_at`, so one student/date/assignment triple may
carry several records with different statuses; nothing is deduplicated.

Includes functionality for:
- Building the record id from its date, assignment name, student id, and timestamp
- Serializing to and from JSON-compatible dictionaries

Notes:
- The serialized keys (`homeworkName`, `studentId`, `updatedAt`) match the stored
  format of earlier releases so existing data loads unchanged.
- `student_id` is not checked against the roster.
"""

from __future__ import annotations

import datetime

from models.homework_status import HomeworkStatus


class HomeworkRecord:

    def __init__(
        self,
        id: str,
        date: datetime.date,
        homework_name: str,
        student_id: int,
        status: HomeworkStatus,
        updated_at: int,
    ):
        self._id = id
        self._date = date
        self._homework_name = homework_name
        self._student_id = student_id
        self._status = status
        self._updated_at = updated_at

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def date(self) -> datetime.date:
        return self._date

    @property
    def date_iso(self) -> str:
        return self._date.isoformat()

    @property
    def homework_name(self) -> str:
        return self._homework_name

    @property
    def student_id(self) -> int:
        return self._student_id

    @property
    def status(self) -> HomeworkStatus:
        return self._status

    @property
    def updated_at(self) -> int:
        return self._updated_at

    # === public classmethods ===

    @classmethod
    def create(
        cls,
        date: datetime.date,
        homework_name: str,
        student_id: int,
        status: HomeworkStatus,
        updated_at: int,
    ) -> HomeworkRecord:
        return cls(
            id=cls.build_id(date, homework_name, student_id, updated_at),
            date=date,
            homework_name=homework_name,
            student_id=student_id,
            status=status,
            updated_at=updated_at,
        )

    @staticmethod
    def build_id(
        date: datetime.date, homework_name: str, student_id: int, updated_at: int
    ) -> str:
        return f"{date.isoformat()}-{homework_name}-{student_id}-{updated_at}"

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "date": self._date.isoformat(),
            "homeworkName": self._homework_name,
            "studentId": self._student_id,
            "status": self._status.value,
            "updatedAt": self._updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HomeworkRecord:
        return cls(
            id=data["id"],
            date=datetime.date.fromisoformat(data["date"]),
            homework_name=data["homeworkName"],
            student_id=int(data["studentId"]),
            status=HomeworkStatus(data["status"]),
            updated_at=int(data["updatedAt"]),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"HomeworkRecord({self._id}, {self._date}, {self._homework_name}, {self._student_id}, {self._status.value}, {self._updated_at})"

    def __str__(self) -> str:
        return f"RECORD: {self.date_iso} {self._homework_name} - student {self._student_id}: {self._status.label}"
