"""Cohort ranking by semester SGPA."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, Sequence

import pandas as pd

from config import SEMESTER_NUMBERS
from records import Cohort, StudentRecord

logger = logging.getLogger(__name__)

RANK_COLUMNS = ["id", "name", "reg_no", "sgpa", "rank"]


def compute_ranks(cohort: Iterable[StudentRecord], semester_number: int) -> pd.DataFrame:
    """Return the cohort ordered by SGPA for *semester_number* with 1-based ranks.

    Higher SGPA ranks first; equal SGPAs are ordered by name so every student
    gets a distinct position. Students without that semester count as 0.
    """

    rows = [
        {
            "id": student.id,
            "name": student.name,
            "reg_no": student.reg_no,
            "sgpa": student.sgpa_for(semester_number),
        }
        for student in cohort
    ]
    if not rows:
        return pd.DataFrame(columns=RANK_COLUMNS)

    ranked = (
        pd.DataFrame(rows)
        .sort_values(["sgpa", "name"], ascending=[False, True], kind="mergesort")
        .reset_index(drop=True)
    )
    ranked["rank"] = range(1, len(ranked.index) + 1)
    return ranked[RANK_COLUMNS]


def attach_ranks(
    cohort: Iterable[StudentRecord],
    semester_numbers: Sequence[int] = SEMESTER_NUMBERS,
) -> Cohort:
    """Return *cohort* with ``rank_by_sem`` and the semester-1 ``rank`` re-derived."""

    students = tuple(cohort)
    by_student: Dict[str, Dict[int, int]] = {}
    for number in semester_numbers:
        ranked = compute_ranks(students, number)
        for student_id, rank in zip(ranked["id"], ranked["rank"]):
            by_student.setdefault(student_id, {})[number] = int(rank)

    logger.debug("Attached ranks for %d students over semesters %s", len(students), list(semester_numbers))
    return tuple(
        replace(
            student,
            rank_by_sem=dict(by_student.get(student.id, {})),
            rank=by_student.get(student.id, {}).get(1, 0),
        )
        for student in students
    )


def top_students(cohort: Iterable[StudentRecord], n: int = 3) -> Cohort:
    """The *n* students with the highest CGPA (cohort order breaks ties)."""

    return tuple(sorted(cohort, key=lambda s: s.cgpa, reverse=True)[:n])


def top_in_subject(
    cohort: Iterable[StudentRecord], code: str, semester_number: int, n: int = 3
) -> pd.DataFrame:
    """Top *n* total marks in one subject; a missing record scores 0 with grade F."""

    rows = []
    for student in cohort:
        semester = student.find_semester(semester_number)
        subject = semester.find_subject(code) if semester is not None else None
        rows.append(
            {
                "id": student.id,
                "name": student.name,
                "reg_no": student.reg_no,
                "marks": subject.total_marks if subject is not None else 0,
                "grade": subject.grade if subject is not None else "F",
            }
        )
    if not rows:
        return pd.DataFrame(columns=["id", "name", "reg_no", "marks", "grade"])

    frame = pd.DataFrame(rows).sort_values("marks", ascending=False, kind="mergesort")
    return frame.head(n).reset_index(drop=True)
