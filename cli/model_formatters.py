# cli/model_formatters.py

# anything that renders domain objects or performs HomeworkTracker read-only operations
from textwrap import dedent

import core.formatters as formatters
from core.analytics import TodayProgress, WarningEntry
from models.homework_item import HomeworkItem
from models.homework_record import HomeworkRecord
from models.homework_status import HomeworkStatus
from models.student import Student
from models.tracker import HomeworkTracker

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    return f"#{student.roll_number:>2} {student.name}"


def format_draft_line(student: Student, status: HomeworkStatus | None) -> str:
    label = status.label if status else "[NOT SET]"

    return f"{format_student_oneline(student):<16} | {label}"


# === homework item formatters ===


def format_homework_item_oneline(item: HomeworkItem) -> str:
    return item.name


# === record formatters ===


def format_record_oneline(record: HomeworkRecord, tracker: HomeworkTracker) -> str:
    student = tracker.find_student(record.student_id)
    student_label = (
        format_student_oneline(student) if student else f"#{record.student_id:>2} ?"
    )

    return f"{record.date_iso} | {record.homework_name:<20} | {student_label:<16} | {record.status.label}"


def format_record_multiline(record: HomeworkRecord, tracker: HomeworkTracker) -> str:
    student = tracker.find_student(record.student_id)

    return dedent(
        f"""\
        Record on {formatters.format_entry_date_long(record.date)}:
        ... Homework: {record.homework_name}
        ... Student: {format_student_oneline(student) if student else record.student_id}
        ... Status: {record.status.label}
        ... Recorded: {formatters.format_timestamp_ms(record.updated_at)}"""
    )


# === dashboard formatters ===


def format_today_progress(progress: TodayProgress) -> str:
    return dedent(
        f"""\
        Today's progress: {formatters.format_percent_bar(progress.progress_percent)}
        ... Records today: {progress.total_today}
        ... Missing today: {progress.missing_today}"""
    )


def format_warning_entry(entry: WarningEntry) -> str:
    return f"{format_student_oneline(entry.student):<16} | missing {entry.count} times in the last 7 days"
