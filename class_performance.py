"""Derive the cohort standing summary (first / second class, yet to pass)."""

from __future__ import annotations

from typing import Dict, Iterable

import pandas as pd

from config import FIRST_CLASS_CGPA
from grading import FAIL_GRADE
from records import StudentRecord, build_master_frame

CATEGORY_ORDER: Iterable[str] = (
    "Appeared",
    "Passed with First Class",
    "Passed with Second Class",
    "Total Passed",
    "Yet to Pass",
)


def _aggregate_counts(df: pd.DataFrame, mask: pd.Series) -> Dict[str, int]:
    subset = df.loc[mask]
    return {"Students": int(subset["student_id"].nunique())}


def build_overall_frame(cohort: Iterable[StudentRecord]) -> pd.DataFrame:
    """One row per student with CGPA, subjects attempted/failed and an all-clear flag."""

    columns = ["student_id", "reg_no", "cgpa", "subjects_attempted", "subjects_failed", "all_clear"]
    master = build_master_frame(cohort)
    if master.empty:
        return pd.DataFrame(columns=columns)

    master["fail_flag"] = (master["grade"] == FAIL_GRADE).astype(int)
    overall = (
        master.groupby(["student_id", "reg_no"], sort=False)
        .agg(
            cgpa=("cgpa", "first"),
            subjects_attempted=("subject_code", "count"),
            subjects_failed=("fail_flag", "sum"),
        )
        .reset_index()
    )
    overall["all_clear"] = (
        (overall["subjects_attempted"] > 0) & (overall["subjects_failed"] == 0)
    ).astype(int)
    return overall[columns]


def build_class_performance_summary(
    cohort: Iterable[StudentRecord], first_class_cgpa: float = FIRST_CLASS_CGPA
) -> pd.DataFrame:
    """Return class performance counts for *cohort*."""

    columns = ["Category", "Students"]

    working = build_overall_frame(cohort)
    if working.empty:
        return pd.DataFrame(columns=columns)

    working["cgpa_numeric"] = pd.to_numeric(working["cgpa"], errors="coerce")

    masks = {
        "Appeared": working["student_id"].notna(),
        "Passed with First Class": (working["all_clear"] == 1) & (working["cgpa_numeric"] >= first_class_cgpa),
        "Passed with Second Class": (working["all_clear"] == 1) & (working["cgpa_numeric"] < first_class_cgpa),
        "Total Passed": working["all_clear"] == 1,
        "Yet to Pass": working["all_clear"] != 1,
    }

    rows = []
    for label in CATEGORY_ORDER:
        mask = masks.get(label)
        if mask is None:
            continue
        counts = _aggregate_counts(working, mask)
        counts["Category"] = label
        rows.append(counts)

    return pd.DataFrame(rows, columns=columns)
