"""Mark edits: apply one field change and re-derive every dependent value."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Dict, Iterable, Sequence, Tuple

from config import SEMESTER_NUMBERS
from gpa import rebuild_semester, rebuild_student, rebuild_subject
from records import Cohort, SemesterRecord, StudentRecord
from ranking import attach_ranks

logger = logging.getLogger(__name__)

FIELD_DOMAINS: Dict[str, Tuple[int, int]] = {
    "internal_marks": (0, 40),
    "external_marks": (0, 60),
    "attendance": (0, 100),
}
EDITABLE_FIELDS = tuple(FIELD_DOMAINS)

FIELD_ALIASES = {
    "internalMarks": "internal_marks",
    "externalMarks": "external_marks",
    "internal": "internal_marks",
    "external": "external_marks",
}

# leading integer of the raw input; "33.6" -> 33, "12abc" -> 12
LEADING_INT = re.compile(r"\s*[+-]?\d+")


def normalize_field(field: str) -> str:
    name = FIELD_ALIASES.get(field, field)
    if name not in FIELD_DOMAINS:
        raise ValueError(
            "Unsupported field {!r}; expected one of: {}".format(field, ", ".join(EDITABLE_FIELDS))
        )
    return name


def clamp_edit_value(field: str, value) -> int:
    """Clamp the leading integer of *value* into the valid range for *field*.

    Input with no leading digits counts as the lower bound.
    """

    low, high = FIELD_DOMAINS[normalize_field(field)]
    match = LEADING_INT.match(str(value))
    number = int(match.group(0)) if match else low
    return max(low, min(high, number))


def _edit_semester(
    semester: SemesterRecord, subject_code: str, field: str, new_value: int
) -> Tuple[SemesterRecord, bool]:
    matched = False
    subjects = []
    for subject in semester.subjects:
        if subject.code == subject_code:
            subject = rebuild_subject(replace(subject, **{field: new_value}))
            matched = True
        subjects.append(subject)
    return rebuild_semester(replace(semester, subjects=tuple(subjects))), matched


def _edit_student(
    student: StudentRecord, semester_number: int, subject_code: str, field: str, new_value: int
) -> Tuple[StudentRecord, bool]:
    matched = False
    semesters = []
    for semester in student.semesters:
        if semester.semester_number == semester_number:
            semester, matched = _edit_semester(semester, subject_code, field, new_value)
        semesters.append(semester)
    return rebuild_student(replace(student, semesters=tuple(semesters))), matched


def apply_edit(
    cohort: Iterable[StudentRecord],
    student_id: str,
    semester_number: int,
    subject_code: str,
    field: str,
    new_value: int,
    semester_numbers: Sequence[int] = SEMESTER_NUMBERS,
) -> Cohort:
    """Return a new cohort with one subject field changed and all derived data re-struck.

    The edited subject gets a fresh total and grade, its semester a fresh
    SGPA and the student a fresh CGPA and weak-subject list. Ranks are then
    recomputed over the whole cohort. Other students' subject data is carried
    over untouched.

    ``new_value`` is not range checked; callers clamp it with
    :func:`clamp_edit_value`. An unknown student, semester or subject leaves
    the data unchanged.
    """

    field = normalize_field(field)
    matched = False
    students = []
    for student in cohort:
        if student.id == student_id:
            student, matched = _edit_student(student, semester_number, subject_code, field, new_value)
        students.append(student)

    if matched:
        logger.info(
            "Applied %s=%s to %s sem %d %s", field, new_value, student_id, semester_number, subject_code
        )
    else:
        logger.warning(
            "No record for student %s sem %d subject %s; edit ignored",
            student_id,
            semester_number,
            subject_code,
        )

    return attach_ranks(students, semester_numbers)


def restrike_cohort(
    cohort: Iterable[StudentRecord],
    semester_numbers: Sequence[int] = SEMESTER_NUMBERS,
) -> Cohort:
    """Re-derive every total, grade, SGPA, CGPA, weak list and rank from raw marks.

    Used on cohorts read from outside, whose stored derived values may be
    stale or missing.
    """

    students = []
    for student in cohort:
        semesters = tuple(
            rebuild_semester(replace(sem, subjects=tuple(rebuild_subject(sub) for sub in sem.subjects)))
            for sem in student.semesters
        )
        students.append(rebuild_student(replace(student, semesters=semesters)))
    logger.debug("Re-derived %d students", len(students))
    return attach_ranks(students, semester_numbers)
