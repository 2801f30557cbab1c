"""Grade policy: (total marks, attendance) -> grade, grade point, eligibility."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Tuple

from config import ATTENDANCE_THRESHOLD

GRADE_ORDER: Tuple[str, ...] = ("S", "A+", "A", "B+", "B", "C", "F")

# (minimum total, grade, grade point), checked top-down
GRADE_BANDS: Tuple[Tuple[int, str, int], ...] = (
    (91, "S", 10),
    (81, "A+", 9),
    (71, "A", 8),
    (61, "B+", 7),
    (51, "B", 6),
    (45, "C", 5),
)

GRADE_POINT_MAP = {grade: point for _, grade, point in GRADE_BANDS}
GRADE_POINT_MAP["F"] = 0

FAIL_GRADE = "F"


class GradeOutcome(NamedTuple):
    grade: str
    grade_point: int
    eligible: bool


def compute_grade(total_marks: int, attendance: int) -> GradeOutcome:
    """Return the grade for *total_marks* (0-100) at *attendance* percent.

    Attendance below the threshold fails the subject regardless of marks and
    clears the eligibility flag. A marks-based F keeps ``eligible`` true.
    """

    if attendance < ATTENDANCE_THRESHOLD:
        return GradeOutcome(FAIL_GRADE, 0, False)
    for minimum, grade, point in GRADE_BANDS:
        if total_marks >= minimum:
            return GradeOutcome(grade, point, True)
    return GradeOutcome(FAIL_GRADE, 0, True)


def round_half_up(value: float, places: int) -> float:
    """Round *value* to *places* decimals, halves away from zero."""

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
