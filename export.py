"""Comma-separated export of a cohort for one semester."""

from __future__ import annotations

from typing import Iterable, List, Sequence

import pandas as pd

from config import SUBJECTS, SubjectDef
from records import StudentRecord


def format_number(value) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def export_columns(catalog: Sequence[SubjectDef] = SUBJECTS) -> List[str]:
    columns = ["Reg No", "Name", "CGPA"]
    for sub in catalog:
        columns.extend([f"{sub.code} Grade", f"{sub.code} Marks", f"{sub.code} Att%"])
    columns.extend(["SGPA", "Rank"])
    return columns


def build_export_frame(
    cohort: Iterable[StudentRecord],
    semester_number: int,
    catalog: Sequence[SubjectDef] = SUBJECTS,
) -> pd.DataFrame:
    """One text row per student in cohort order, columns in catalog order."""

    rows = []
    for student in cohort:
        semester = student.find_semester(semester_number)
        row = [student.reg_no, student.name, format_number(student.cgpa)]
        for sub in catalog:
            record = semester.find_subject(sub.code) if semester is not None else None
            if record is None:
                row.extend(["", "", ""])
            else:
                row.extend([record.grade, format_number(record.total_marks), format_number(record.attendance)])
        row.append(format_number(semester.sgpa) if semester is not None else "")
        row.append(format_number(student.rank_by_sem.get(semester_number, "")))
        rows.append(row)
    return pd.DataFrame(rows, columns=export_columns(catalog), dtype=str)


def export_csv(
    cohort: Iterable[StudentRecord],
    semester_number: int,
    catalog: Sequence[SubjectDef] = SUBJECTS,
) -> str:
    """Header plus one line per student, ``\\n`` separated, no trailing newline."""

    frame = build_export_frame(cohort, semester_number, catalog)
    return frame.to_csv(index=False, lineterminator="\n").rstrip("\n")
