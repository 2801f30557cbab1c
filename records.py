"""Cohort record types, JSON (de)serialisation and the long-format master frame."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from config import DEFAULT_CREDITS

MASTER_COLUMNS = [
    "student_id",
    "student_name",
    "reg_no",
    "semester",
    "subject_code",
    "subject_name",
    "faculty_id",
    "credits",
    "internal_marks",
    "external_marks",
    "total_marks",
    "attendance",
    "grade",
    "grade_point",
    "eligible",
    "sgpa",
    "cgpa",
]


@dataclass(frozen=True)
class SubjectRecord:
    code: str
    name: str
    faculty_id: str
    credits: int
    internal_marks: int
    external_marks: int
    total_marks: int
    attendance: int
    grade: str
    grade_point: int
    eligible: bool


@dataclass(frozen=True)
class SemesterRecord:
    semester_number: int
    subjects: Tuple[SubjectRecord, ...]
    sgpa: float

    def find_subject(self, code: str) -> Optional[SubjectRecord]:
        for subject in self.subjects:
            if subject.code == code:
                return subject
        return None


@dataclass(frozen=True)
class StudentRecord:
    id: str
    name: str
    reg_no: str
    email: str
    password: str
    semesters: Tuple[SemesterRecord, ...]
    cgpa: float
    rank: int = 0
    rank_by_sem: Dict[int, int] = field(default_factory=dict)
    weak_subjects: Tuple[str, ...] = ()

    def find_semester(self, number: int) -> Optional[SemesterRecord]:
        for semester in self.semesters:
            if semester.semester_number == number:
                return semester
        return None

    def sgpa_for(self, number: int) -> float:
        semester = self.find_semester(number)
        return semester.sgpa if semester is not None else 0.0


Cohort = Tuple[StudentRecord, ...]


def find_student(cohort: Iterable[StudentRecord], student_id: str) -> Optional[StudentRecord]:
    for student in cohort:
        if student.id == student_id:
            return student
    return None


def find_subject_record(
    cohort: Iterable[StudentRecord], student_id: str, semester_number: int, code: str
) -> Optional[SubjectRecord]:
    student = find_student(cohort, student_id)
    if student is None:
        return None
    semester = student.find_semester(semester_number)
    if semester is None:
        return None
    return semester.find_subject(code)


# ---------------------------------------------------------------------------
# JSON (de)serialisation
# ---------------------------------------------------------------------------


def subject_from_dict(row: Dict) -> SubjectRecord:
    return SubjectRecord(
        code=str(row["code"]).strip().upper(),
        name=str(row.get("name", "")),
        faculty_id=str(row.get("faculty_id", "")),
        credits=int(row.get("credits", DEFAULT_CREDITS)),
        internal_marks=int(row["internal_marks"]),
        external_marks=int(row["external_marks"]),
        total_marks=int(row.get("total_marks", int(row["internal_marks"]) + int(row["external_marks"]))),
        attendance=int(row["attendance"]),
        grade=str(row.get("grade", "")),
        grade_point=int(row.get("grade_point", 0)),
        eligible=bool(row.get("eligible", True)),
    )


def student_from_dict(row: Dict) -> StudentRecord:
    semesters = tuple(
        SemesterRecord(
            semester_number=int(sem["semester_number"]),
            subjects=tuple(subject_from_dict(sub) for sub in sem.get("subjects", [])),
            sgpa=float(sem.get("sgpa", 0.0)),
        )
        for sem in row.get("semesters", [])
    )
    rank_by_sem = {int(k): int(v) for k, v in (row.get("rank_by_sem") or {}).items()}
    return StudentRecord(
        id=str(row["id"]),
        name=str(row["name"]),
        reg_no=str(row["reg_no"]),
        email=str(row.get("email", "")),
        password=str(row.get("password", "")),
        semesters=tuple(sorted(semesters, key=lambda s: s.semester_number)),
        cgpa=float(row.get("cgpa", 0.0)),
        rank=int(row.get("rank", 0)),
        rank_by_sem=rank_by_sem,
        weak_subjects=tuple(row.get("weak_subjects", [])),
    )


def student_to_dict(student: StudentRecord) -> Dict:
    return {
        "id": student.id,
        "name": student.name,
        "reg_no": student.reg_no,
        "email": student.email,
        "password": student.password,
        "semesters": [
            {
                "semester_number": sem.semester_number,
                "sgpa": sem.sgpa,
                "subjects": [
                    {
                        "code": sub.code,
                        "name": sub.name,
                        "faculty_id": sub.faculty_id,
                        "credits": sub.credits,
                        "internal_marks": sub.internal_marks,
                        "external_marks": sub.external_marks,
                        "total_marks": sub.total_marks,
                        "attendance": sub.attendance,
                        "grade": sub.grade,
                        "grade_point": sub.grade_point,
                        "eligible": sub.eligible,
                    }
                    for sub in sem.subjects
                ],
            }
            for sem in student.semesters
        ],
        "cgpa": student.cgpa,
        "rank": student.rank,
        "rank_by_sem": {str(k): v for k, v in sorted(student.rank_by_sem.items())},
        "weak_subjects": list(student.weak_subjects),
    }


def cohort_from_dicts(rows: Iterable[Dict]) -> Cohort:
    return tuple(student_from_dict(row) for row in rows)


def cohort_to_dicts(cohort: Iterable[StudentRecord]) -> List[Dict]:
    return [student_to_dict(student) for student in cohort]


def load_cohort(path: str) -> Cohort:
    """Read a cohort from the JSON file at *path* (a list of student objects).

    Derived fields are taken as stored; pass the result through
    ``recompute.restrike_cohort`` before trusting grades, GPAs or ranks.
    """

    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("students", [])
    return cohort_from_dicts(payload)


def save_cohort(cohort: Sequence[StudentRecord], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"students": cohort_to_dicts(cohort)}, f, indent=2)


# ---------------------------------------------------------------------------
# Long-format frame
# ---------------------------------------------------------------------------


def build_master_frame(cohort: Iterable[StudentRecord]) -> pd.DataFrame:
    """Flatten *cohort* into one row per (student, semester, subject)."""

    rows: List[Dict[str, object]] = []
    for student in cohort:
        for sem in student.semesters:
            for sub in sem.subjects:
                rows.append(
                    {
                        "student_id": student.id,
                        "student_name": student.name,
                        "reg_no": student.reg_no,
                        "semester": sem.semester_number,
                        "subject_code": sub.code,
                        "subject_name": sub.name,
                        "faculty_id": sub.faculty_id,
                        "credits": sub.credits,
                        "internal_marks": sub.internal_marks,
                        "external_marks": sub.external_marks,
                        "total_marks": sub.total_marks,
                        "attendance": sub.attendance,
                        "grade": sub.grade,
                        "grade_point": sub.grade_point,
                        "eligible": sub.eligible,
                        "sgpa": sem.sgpa,
                        "cgpa": student.cgpa,
                    }
                )

    if not rows:
        return pd.DataFrame(columns=MASTER_COLUMNS)
    return pd.DataFrame(rows, columns=MASTER_COLUMNS)
