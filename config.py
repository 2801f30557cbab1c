"""Configuration and reference data for the cohort analytics engine."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

HERE = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CONFIG_PATH = os.path.join(HERE, "config.json")

SEMESTER_NUMBERS: Tuple[int, ...] = (1, 2)
DEFAULT_CREDITS = 4

ATTENDANCE_THRESHOLD = 75
WEAK_MARKS_THRESHOLD = 60
WEAK_FAIL_PERCENT = 20.0
AT_RISK_CGPA = 5.0
FIRST_CLASS_CGPA = 7.0


@dataclass(frozen=True)
class SubjectDef:
    code: str
    name: str
    faculty_id: str
    credits: int = DEFAULT_CREDITS

    @property
    def short_name(self) -> str:
        return " ".join(self.name.split(" ")[:2])


@dataclass(frozen=True)
class FacultyRecord:
    id: str
    name: str
    email: str
    subject_code: str
    subject_name: str
    password: str = ""


SUBJECTS: Tuple[SubjectDef, ...] = (
    SubjectDef("CS301", "Data Structures", "f1"),
    SubjectDef("CS302", "Computer Networks", "f2"),
    SubjectDef("CS303", "Database Systems", "f3"),
    SubjectDef("CS304", "Operating Systems", "f4"),
    SubjectDef("CS305", "Software Engineering", "f5"),
)

FACULTY: Tuple[FacultyRecord, ...] = (
    FacultyRecord("f1", "Rajesh Kumar", "rajesh@vitfaculty.ac.in", "CS301", "Data Structures", "faculty123"),
    FacultyRecord("f2", "Priya Sharma", "priya@vitfaculty.ac.in", "CS302", "Computer Networks", "faculty123"),
    FacultyRecord("f3", "Arun Menon", "arun@vitfaculty.ac.in", "CS303", "Database Systems", "faculty123"),
    FacultyRecord("f4", "Divya Nair", "divya@vitfaculty.ac.in", "CS304", "Operating Systems", "faculty123"),
    FacultyRecord("f5", "Suresh Pillai", "suresh@vitfaculty.ac.in", "CS305", "Software Engineering", "faculty123"),
)


def load_config(path: Optional[str]) -> Dict:
    """Return the JSON config at *path*, or an empty dict when it does not exist."""

    if not path or not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def subject_catalog(cfg: Dict) -> Tuple[SubjectDef, ...]:
    rows = cfg.get("subjects")
    if not rows:
        return SUBJECTS
    catalog: List[SubjectDef] = []
    for row in rows:
        code = str(row.get("code", "")).strip().upper()
        if not code:
            continue
        catalog.append(
            SubjectDef(
                code=code,
                name=str(row.get("name", "")).strip(),
                faculty_id=str(row.get("faculty_id", "")).strip(),
                credits=int(row.get("credits", DEFAULT_CREDITS)),
            )
        )
    return tuple(catalog)


def faculty_directory(cfg: Dict) -> Tuple[FacultyRecord, ...]:
    rows = cfg.get("faculty")
    if not rows:
        return FACULTY
    return tuple(
        FacultyRecord(
            id=str(row["id"]),
            name=str(row.get("name", "")),
            email=str(row.get("email", "")),
            subject_code=str(row.get("subject_code", "")).upper(),
            subject_name=str(row.get("subject_name", "")),
        )
        for row in rows
    )


def semester_numbers(cfg: Dict) -> Sequence[int]:
    values = cfg.get("semester_numbers")
    if values:
        return tuple(sorted({int(v) for v in values}))
    return SEMESTER_NUMBERS


def find_faculty_for_subject(code: str, faculty: Sequence[FacultyRecord] = FACULTY) -> Optional[FacultyRecord]:
    for member in faculty:
        if member.subject_code == code:
            return member
    return None
