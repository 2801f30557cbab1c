"""SGPA / CGPA aggregation and per-student derived fields."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence, Tuple

from config import DEFAULT_CREDITS, WEAK_MARKS_THRESHOLD
from grading import compute_grade, round_half_up
from records import SemesterRecord, StudentRecord, SubjectRecord

logger = logging.getLogger(__name__)


def compute_sgpa(subjects: Sequence[SubjectRecord]) -> float:
    """Credit-weighted mean grade point of *subjects*, 2 decimals (0 when empty).

    Ineligible subjects keep their credits in the denominator.
    """

    credits = sum(sub.credits for sub in subjects)
    if credits <= 0:
        return 0.0
    weighted = sum(sub.grade_point * sub.credits for sub in subjects)
    return round_half_up(weighted / credits, 2)


def compute_cgpa(semesters: Sequence[SemesterRecord]) -> float:
    """Credit-weighted mean of semester SGPAs, 2 decimals (0 when empty).

    Semester weight is ``subject count * DEFAULT_CREDITS``; this assumes every
    subject carries the same credit.
    """

    credits = sum(len(sem.subjects) * DEFAULT_CREDITS for sem in semesters)
    if credits <= 0:
        return 0.0
    weighted = sum(sem.sgpa * len(sem.subjects) * DEFAULT_CREDITS for sem in semesters)
    return round_half_up(weighted / credits, 2)


def is_weak(subject: SubjectRecord) -> bool:
    return subject.total_marks < WEAK_MARKS_THRESHOLD or not subject.eligible


def weak_subjects(semesters: Iterable[SemesterRecord]) -> Tuple[str, ...]:
    """Deduplicated subject codes that are weak in any semester, first-seen order."""

    codes = [sub.code for sem in semesters for sub in sem.subjects if is_weak(sub)]
    return tuple(dict.fromkeys(codes))


def rebuild_subject(subject: SubjectRecord) -> SubjectRecord:
    total = subject.internal_marks + subject.external_marks
    outcome = compute_grade(total, subject.attendance)
    return replace(
        subject,
        total_marks=total,
        grade=outcome.grade,
        grade_point=outcome.grade_point,
        eligible=outcome.eligible,
    )


def rebuild_semester(semester: SemesterRecord) -> SemesterRecord:
    return replace(semester, sgpa=compute_sgpa(semester.subjects))


def rebuild_student(student: StudentRecord) -> StudentRecord:
    """Re-strike CGPA and the weak-subject list from the student's semesters."""

    cgpa = compute_cgpa(student.semesters)
    weak = weak_subjects(student.semesters)
    logger.debug("Student %s: cgpa=%.2f weak=%s", student.id, cgpa, ",".join(weak) or "-")
    return replace(student, cgpa=cgpa, weak_subjects=weak)
