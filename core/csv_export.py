# core/csv_export.py

"""
CSV export of the homework record list.

The file is written as UTF-8 with a byte-order mark so spreadsheet programs
detect the encoding of the students' names. Values use standard CSV quoting,
so names or assignments containing commas or quotes survive the round trip.
"""

import csv
import datetime
import io
import os
from collections.abc import Iterable

from models.homework_record import HomeworkRecord
from models.roster import STUDENTS, find_student
from models.student import Student

CSV_HEADERS = ["Date", "Assignment", "Roll No.", "Name", "Status"]
CSV_ENCODING = "utf-8-sig"


def export_filename(export_date: datetime.date) -> str:
    return f"homework_records_{export_date.isoformat()}.csv"


def build_rows(
    records: Iterable[HomeworkRecord],
    roster: tuple[Student, ...] | list[Student] = STUDENTS,
) -> list[list]:
    rows = []

    for record in records:
        student = find_student(record.student_id, roster)
        rows.append(
            [
                record.date_iso,
                record.homework_name,
                student.roll_number if student else "",
                student.name if student else "",
                record.status.label,
            ]
        )

    return rows


def render_csv(
    records: Iterable[HomeworkRecord],
    roster: tuple[Student, ...] | list[Student] = STUDENTS,
) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(build_rows(records, roster))

    return output.getvalue()


def write_csv(
    records: Iterable[HomeworkRecord],
    path: str,
    roster: tuple[Student, ...] | list[Student] = STUDENTS,
) -> str:
    """
    Writes the records to `path` and returns the absolute path written.

    Raises:
        OSError: If the directory cannot be created or the file cannot be written.
    """
    path = os.path.abspath(os.path.expanduser(path))
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding=CSV_ENCODING, newline="") as f:
        f.write(render_csv(records, roster))

    return path
