from typing import Dict, List, Tuple

import pytest

from config import SUBJECTS
from gpa import rebuild_semester, rebuild_student, rebuild_subject
from ranking import attach_ranks
from records import SemesterRecord, StudentRecord, SubjectRecord

Marks = Tuple[int, int, int]  # internal, external, attendance

PASS_70 = (30, 40, 85)


def build_subject(definition, internal, external, attendance) -> SubjectRecord:
    raw = SubjectRecord(
        code=definition.code,
        name=definition.name,
        faculty_id=definition.faculty_id,
        credits=definition.credits,
        internal_marks=internal,
        external_marks=external,
        total_marks=0,
        attendance=attendance,
        grade="",
        grade_point=0,
        eligible=True,
    )
    return rebuild_subject(raw)


def build_student(student_id: str, name: str, reg_no: str, marks: Dict[int, List[Marks]]) -> StudentRecord:
    semesters = tuple(
        rebuild_semester(
            SemesterRecord(
                number,
                tuple(build_subject(d, *m) for d, m in zip(SUBJECTS, rows)),
                0.0,
            )
        )
        for number, rows in sorted(marks.items())
    )
    student = StudentRecord(
        id=student_id,
        name=name,
        reg_no=reg_no,
        email=f"{reg_no}@vitstudent.ac.in",
        password=reg_no[-4:],
        semesters=semesters,
        cgpa=0.0,
    )
    return rebuild_student(student)


@pytest.fixture
def make_student():
    return build_student


@pytest.fixture
def small_cohort():
    """Three ranked students.

    Alice: 90 everywhere in sem 1 (SGPA 9.0), 96 in sem 2 (SGPA 10.0).
    Bob: CS301 sem 1 is 20+25=45 (C), rest 70 (B+); sem 2 all 70.
    Carol: CS302 sem 1 is 45 (C); CS305 sem 2 is 85 at 70% attendance (F).
    """

    alice = build_student(
        "s1", "Alice", "21BCE0001", {1: [(35, 55, 90)] * 5, 2: [(38, 58, 95)] * 5}
    )
    bob = build_student(
        "s2", "Bob", "21BCE0002", {1: [(20, 25, 80)] + [PASS_70] * 4, 2: [PASS_70] * 5}
    )
    carol = build_student(
        "s3",
        "Carol",
        "21BCE0003",
        {1: [PASS_70, (20, 25, 80)] + [PASS_70] * 3, 2: [PASS_70] * 4 + [(30, 55, 70)]},
    )
    return attach_ranks([alice, bob, carol])


@pytest.fixture(scope="session")
def seed_cohort():
    from seed_data import build_seed_cohort

    return build_seed_cohort()
