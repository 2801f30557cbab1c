"""Deterministic seed cohort: 50 students, two semesters, five subjects.

Marks come from a linear congruential generator seeded per student, so the
same cohort is rebuilt on every run.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Sequence, Tuple

from config import SUBJECTS, SubjectDef
from gpa import compute_sgpa, rebuild_student
from grading import compute_grade
from ranking import attach_ranks
from records import Cohort, SemesterRecord, StudentRecord, SubjectRecord

NAMES: Tuple[str, ...] = (
    "Aarav Sharma", "Aditya Verma", "Akash Singh", "Amit Kumar", "Ananya Rao",
    "Arjun Nair", "Aryan Gupta", "Ashwin Pillai", "Bhavya Mehta", "Chetan Joshi",
    "Deepak Patel", "Dhruv Agarwal", "Divya Krishnan", "Esha Reddy", "Farhan Khan",
    "Gaurav Malhotra", "Harini Subramanian", "Harsh Pandey", "Ishaan Bose", "Jatin Tiwari",
    "Kavitha Venkatesh", "Keerthana Mohan", "Kiran Yadav", "Kritika Saxena", "Lakshmi Narayanan",
    "Manoj Srinivasan", "Meera Iyer", "Mihir Shah", "Nandita Rao", "Naveen Choudhary",
    "Neha Jain", "Nikita Banerjee", "Nikhil Deshpande", "Pallavi Mishra", "Pratheek Nair",
    "Priya Subramaniam", "Rajesh Babu", "Rakesh Chandra", "Ravi Shankar", "Rohit Menon",
    "Sahana Krishnamurthy", "Sandeep Patil", "Sanjana Hegde", "Siddharth Kulkarni", "Sneha Ramachandran",
    "Supriya Chatterjee", "Tanmay Goswami", "Uma Maheshwari", "Varun Nambiar", "Vishal Acharya",
)

# 10% high, 60% average, 20% at risk, 10% failing
TIERS: Tuple[str, ...] = ("high",) * 5 + ("avg",) * 30 + ("risk",) * 10 + ("fail",) * 5

TIER_RANGES: Dict[str, Dict[str, Tuple[int, int]]] = {
    "high": {"int": (30, 40), "ext": (50, 60), "att": (85, 98)},
    "avg": {"int": (19, 34), "ext": (32, 52), "att": (76, 93)},
    "risk": {"int": (12, 24), "ext": (20, 38), "att": (66, 84)},
    "fail": {"int": (5, 18), "ext": (10, 28), "att": (55, 78)},
}

DEFAULTER_PROBABILITY = 0.08
DEFAULTER_ATTENDANCE = (55, 74)

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32


def lcg(seed: int) -> Callable[[], float]:
    """Return a generator of floats in [0, 1] driven by ``s' = (a*s + c) mod 2**32``."""

    state = seed % LCG_MODULUS

    def draw() -> float:
        nonlocal state
        state = (LCG_MULTIPLIER * state + LCG_INCREMENT) % LCG_MODULUS
        return state / 0xFFFFFFFF

    return draw


def rand_int(rand: Callable[[], float], low: int, high: int) -> int:
    # half-up, matching the generator the fixture was first built with
    return int(math.floor(rand() * (high - low) + low + 0.5))


def make_semester(
    rand: Callable[[], float],
    tier: str,
    semester_number: int,
    catalog: Sequence[SubjectDef] = SUBJECTS,
) -> SemesterRecord:
    ranges = TIER_RANGES[tier]
    subjects: List[SubjectRecord] = []
    for definition in catalog:
        internal = rand_int(rand, *ranges["int"])
        external = rand_int(rand, *ranges["ext"])
        total = internal + external
        attendance = rand_int(rand, *ranges["att"])
        if rand() < DEFAULTER_PROBABILITY:
            attendance = rand_int(rand, *DEFAULTER_ATTENDANCE)
        outcome = compute_grade(total, attendance)
        subjects.append(
            SubjectRecord(
                code=definition.code,
                name=definition.name,
                faculty_id=definition.faculty_id,
                credits=definition.credits,
                internal_marks=internal,
                external_marks=external,
                total_marks=total,
                attendance=attendance,
                grade=outcome.grade,
                grade_point=outcome.grade_point,
                eligible=outcome.eligible,
            )
        )
    return SemesterRecord(semester_number, tuple(subjects), compute_sgpa(subjects))


def build_students(catalog: Sequence[SubjectDef] = SUBJECTS) -> List[StudentRecord]:
    students = []
    for i, name in enumerate(NAMES):
        tier = TIERS[i]
        reg_no = "21BCE{:04d}".format(1001 + i)
        sem1 = make_semester(lcg(i * 9973 + 1_234_567), tier, 1, catalog)
        sem2 = make_semester(lcg(i * 7919 + 7_654_321), tier, 2, catalog)
        student = StudentRecord(
            id=f"s{i + 1}",
            name=name,
            reg_no=reg_no,
            email=f"{reg_no}@vitstudent.ac.in",
            password=reg_no[-4:],
            semesters=(sem1, sem2),
            cgpa=0.0,
        )
        students.append(rebuild_student(student))
    return students


def build_seed_cohort(catalog: Sequence[SubjectDef] = SUBJECTS) -> Cohort:
    """The ranked seed cohort."""

    return attach_ranks(build_students(catalog))
