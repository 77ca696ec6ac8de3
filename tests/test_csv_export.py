# tests/test_csv_export.py

import csv
import datetime

from core.csv_export import (
    CSV_HEADERS,
    build_rows,
    export_filename,
    render_csv,
    write_csv,
)
from models.homework_status import HomeworkStatus


def test_export_filename():
    assert export_filename(datetime.date(2025, 3, 14)) == "homework_records_2025-03-14.csv"


def test_build_rows(make_record):
    rows = build_rows([make_record(12, HomeworkStatus.NEEDS_CORRECTION)])

    assert rows == [["2025-03-14", "Math Test", 12, "杰薰", "Needs Correction"]]


def test_build_rows_unknown_student_is_blank(make_record):
    rows = build_rows([make_record(99, HomeworkStatus.MISSING)])

    assert rows == [["2025-03-14", "Math Test", "", "", "Missing"]]


def test_render_csv_header_and_quoting(make_record):
    text = render_csv(
        [make_record(3, HomeworkStatus.SUBMITTED, homework_name='Read "Charlotte\'s Web", ch. 1')]
    )
    lines = text.splitlines()

    assert lines[0] == "Date,Assignment,Roll No.,Name,Status"
    assert lines[1] == '2025-03-14,"Read ""Charlotte\'s Web"", ch. 1",3,李秉宸,Submitted'


def test_write_csv_has_bom_and_parses_back(tmp_path, make_record):
    records = [
        make_record(12, HomeworkStatus.MISSING, homework_name="Math, Part 2", updated_at=1),
        make_record(3, HomeworkStatus.CORRECTED, updated_at=2),
    ]

    path = write_csv(records, str(tmp_path / "out" / "export.csv"))

    with open(path, "rb") as f:
        assert f.read(3) == b"\xef\xbb\xbf"

    with open(path, encoding="utf-8-sig", newline="") as f:
        rows = list(csv.reader(f))

    assert rows[0] == CSV_HEADERS
    assert rows[1] == ["2025-03-14", "Math, Part 2", "12", "杰薰", "Missing"]
    assert rows[2] == ["2025-03-14", "Math Test", "3", "李秉宸", "Corrected"]
