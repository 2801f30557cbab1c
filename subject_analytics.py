"""Per-subject, per-semester result summary for a cohort."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

import pandas as pd

from grading import FAIL_GRADE, GRADE_ORDER, round_half_up
from records import MASTER_COLUMNS, StudentRecord, build_master_frame


@dataclass(frozen=True)
class SubjectSummary:
    code: str
    semester: int
    total: int
    fails: int
    passes: int
    avg: float
    top_score: int
    pass_percent: float
    fail_percent: float
    grade_distribution: Dict[str, int]
    attendance_avg: float
    records: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=MASTER_COLUMNS), compare=False)

    def as_row(self) -> Dict[str, object]:
        row: Dict[str, object] = {
            "subject_code": self.code,
            "semester": self.semester,
            "total": self.total,
            "passed": self.passes,
            "failed": self.fails,
            "pass_pct": self.pass_percent,
            "fail_pct": self.fail_percent,
            "avg_marks": self.avg,
            "top_score": self.top_score,
            "attendance_avg": self.attendance_avg,
        }
        for grade in GRADE_ORDER:
            row[f"grade_{grade}"] = self.grade_distribution.get(grade, 0)
        return row


def _percent(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round_half_up(part / whole * 100, 1)


def _mean(series: pd.Series, places: int) -> float:
    if series.empty:
        return 0.0
    return round_half_up(float(series.sum()) / len(series.index), places)


def subject_analytics(
    cohort: Iterable[StudentRecord], code: str, semester_number: int
) -> SubjectSummary:
    """Summarise every student record for (*code*, *semester_number*).

    Students without such a record are left out of the counts, never scored
    as zero.
    """

    master = build_master_frame(cohort)
    records = master[
        (master["subject_code"] == code) & (master["semester"] == semester_number)
    ].reset_index(drop=True)

    total = int(len(records.index))
    fails = int((records["grade"] == FAIL_GRADE).sum())
    passes = total - fails

    counts = records["grade"].value_counts()
    distribution = {grade: int(counts.get(grade, 0)) for grade in GRADE_ORDER}

    return SubjectSummary(
        code=code,
        semester=semester_number,
        total=total,
        fails=fails,
        passes=passes,
        avg=_mean(records["total_marks"], 1),
        top_score=int(records["total_marks"].max()) if total else 0,
        pass_percent=_percent(passes, total),
        fail_percent=_percent(fails, total),
        grade_distribution=distribution,
        attendance_avg=_mean(records["attendance"], 1),
        records=records,
    )
