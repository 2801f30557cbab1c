"""Department-wide rollups over the subject catalog, plus risk alerts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np
import pandas as pd

from config import (
    AT_RISK_CGPA,
    FACULTY,
    SUBJECTS,
    WEAK_FAIL_PERCENT,
    WEAK_MARKS_THRESHOLD,
    FacultyRecord,
    SubjectDef,
    find_faculty_for_subject,
)
from grading import round_half_up
from records import StudentRecord, build_master_frame
from subject_analytics import SubjectSummary, subject_analytics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepartmentOverview:
    semester: int
    subject_data: Tuple[SubjectSummary, ...]
    dept_avg_sgpa: float
    total_students: int
    overall_pass_percent: float
    weak_subjects: Tuple[SubjectSummary, ...]

    def subject_frame(
        self,
        catalog: Sequence[SubjectDef] = SUBJECTS,
        faculty: Sequence[FacultyRecord] = FACULTY,
    ) -> pd.DataFrame:
        names = {sub.code: sub for sub in catalog}
        rows = []
        for summary in self.subject_data:
            row = summary.as_row()
            definition = names.get(summary.code)
            row["subject_name"] = definition.name if definition else ""
            row["short_name"] = definition.short_name if definition else ""
            owner = find_faculty_for_subject(summary.code, faculty)
            row["faculty"] = owner.name if owner else ""
            row["weak"] = summary in self.weak_subjects
            rows.append(row)
        return pd.DataFrame(rows)


def department_overview(
    cohort: Iterable[StudentRecord],
    semester_number: int,
    catalog: Sequence[SubjectDef] = SUBJECTS,
    weak_fail_percent: float = WEAK_FAIL_PERCENT,
) -> DepartmentOverview:
    """Run subject analytics for every catalog subject and derive department KPIs.

    A subject is weak when its fail percentage is strictly above
    *weak_fail_percent*.
    """

    students = tuple(cohort)
    subject_data = tuple(subject_analytics(students, sub.code, semester_number) for sub in catalog)

    sgpas = [student.sgpa_for(semester_number) for student in students]
    dept_avg = round_half_up(sum(sgpas) / (len(sgpas) or 1), 2)

    total_pass = sum(summary.passes for summary in subject_data)
    total_studies = sum(summary.total for summary in subject_data)
    overall_pass = round_half_up(total_pass / total_studies * 100, 1) if total_studies else 0.0

    weak = tuple(summary for summary in subject_data if summary.fail_percent > weak_fail_percent)
    if weak:
        logger.info(
            "Semester %d weak subjects: %s",
            semester_number,
            ", ".join(summary.code for summary in weak),
        )

    return DepartmentOverview(
        semester=semester_number,
        subject_data=subject_data,
        dept_avg_sgpa=dept_avg,
        total_students=len(students),
        overall_pass_percent=overall_pass,
        weak_subjects=weak,
    )


def student_semester_summary(cohort: Iterable[StudentRecord], semester_number: int) -> pd.DataFrame:
    """One row per student: SGPA, CGPA, rank, weak-subject count and mean attendance."""

    columns = ["id", "name", "reg_no", "sgpa", "cgpa", "rank", "weak_count", "attendance_avg"]
    students = tuple(cohort)
    if not students:
        return pd.DataFrame(columns=columns)

    base = pd.DataFrame(
        {
            "id": [s.id for s in students],
            "name": [s.name for s in students],
            "reg_no": [s.reg_no for s in students],
            "sgpa": [s.sgpa_for(semester_number) for s in students],
            "cgpa": [s.cgpa for s in students],
            "rank": [s.rank_by_sem.get(semester_number, 0) for s in students],
        }
    )

    master = build_master_frame(students)
    master = master[master["semester"] == semester_number].copy()
    if master.empty:
        base["weak_count"] = 0
        base["attendance_avg"] = 0.0
        return base[columns]

    master["weak_flag"] = (
        (master["total_marks"] < WEAK_MARKS_THRESHOLD) | (~master["eligible"].astype(bool))
    ).astype(int)

    per_student = (
        master.groupby("student_id")
        .agg(weak_count=("weak_flag", "sum"), attendance_avg=("attendance", "mean"))
        .reset_index()
        .rename(columns={"student_id": "id"})
    )

    summary = base.merge(per_student, on="id", how="left")
    summary["weak_count"] = summary["weak_count"].fillna(0).astype(int)
    summary["attendance_avg"] = [
        round_half_up(value, 1) if not pd.isna(value) else 0.0 for value in summary["attendance_avg"]
    ]
    return summary[columns]


def risk_alerts(
    cohort: Iterable[StudentRecord],
    semester_number: int,
    at_risk_cgpa: float = AT_RISK_CGPA,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Return (students with CGPA below *at_risk_cgpa*, attendance defaulters).

    Defaulters are students with at least one ineligible subject in
    *semester_number*; the frame lists the offending subject codes.
    """

    students = tuple(cohort)
    at_risk = pd.DataFrame(
        [
            {"id": s.id, "name": s.name, "reg_no": s.reg_no, "cgpa": s.cgpa}
            for s in students
            if s.cgpa < at_risk_cgpa
        ],
        columns=["id", "name", "reg_no", "cgpa"],
    )

    master = build_master_frame(students)
    ineligible = master[(master["semester"] == semester_number) & (~master["eligible"].astype(bool))]
    if ineligible.empty:
        return at_risk, pd.DataFrame(columns=["id", "name", "reg_no", "ineligible_subjects", "min_attendance"])

    defaulters = (
        ineligible.groupby(["student_id", "student_name", "reg_no"], sort=False)
        .agg(
            ineligible_subjects=("subject_code", lambda s: ", ".join(s)),
            min_attendance=("attendance", "min"),
        )
        .reset_index()
        .rename(columns={"student_id": "id", "student_name": "name"})
    )
    defaulters["min_attendance"] = np.asarray(defaulters["min_attendance"], dtype=int)
    return at_risk, defaulters
