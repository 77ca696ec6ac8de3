# core/notifications.py

"""
Builds the parent-facing notice listing a student's missing homework.

Unlike the warning list, the notice covers the student's entire history of
MISSING records, not just the trailing week.
"""

from collections.abc import Iterable

from models.homework_record import HomeworkRecord
from models.homework_status import HomeworkStatus
from models.student import Student

NOTIFICATION_HEADER = "[Homework Missing Notice]"
NOTIFICATION_GREETING = (
    "Dear parent, {name} has not yet handed in the following homework:"
)
NOTIFICATION_CLOSING = "Please help your child complete it. Thank you."


def missing_records_for(
    student: Student, records: Iterable[HomeworkRecord]
) -> list[HomeworkRecord]:
    return [
        r
        for r in records
        if r.student_id == student.id and r.status is HomeworkStatus.MISSING
    ]


def build_notification(student: Student, records: Iterable[HomeworkRecord]) -> str:
    lines = [
        NOTIFICATION_HEADER,
        NOTIFICATION_GREETING.format(name=student.name),
    ]
    lines.extend(
        f"- {r.date_iso} {r.homework_name}" for r in missing_records_for(student, records)
    )
    lines.append(NOTIFICATION_CLOSING)

    return "\n".join(lines)
