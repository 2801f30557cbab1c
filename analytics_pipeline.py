#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Compute cohort analytics for one semester and write workbook + CSV outputs."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Dict, Sequence

import pandas as pd

from class_performance import build_class_performance_summary
from config import (
    AT_RISK_CGPA,
    DEFAULT_CONFIG_PATH,
    FIRST_CLASS_CGPA,
    WEAK_FAIL_PERCENT,
    SubjectDef,
    faculty_directory,
    load_config,
    semester_numbers,
    subject_catalog,
)
from department import department_overview, risk_alerts, student_semester_summary
from export import export_csv
from ranking import compute_ranks, top_students
from recompute import restrike_cohort
from records import Cohort, build_master_frame, load_cohort, save_cohort
from seed_data import build_seed_cohort

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--cohort", default=None, help="Cohort JSON file (default: built-in seed cohort)")
    ap.add_argument("--outdir", default="outputs")
    ap.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    ap.add_argument(
        "--semester",
        type=int,
        default=None,
        help="Semester to analyse (defaults to config default_semester or 1)",
    )
    ap.add_argument("--top", type=int, default=3, help="Number of top students to list")
    ap.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    return ap.parse_args(argv)


def load_input_cohort(path: str | None, semesters: Sequence[int], catalog: Sequence[SubjectDef]) -> Cohort:
    if not path:
        logger.info("No cohort file given; using the seed cohort")
        return build_seed_cohort(catalog)
    if not os.path.isfile(path):
        raise SystemExit(f"Cohort file not found: {path}")
    # stored grades, GPAs and ranks may be stale
    return restrike_cohort(load_cohort(path), semesters)


def build_outputs(cohort: Cohort, semester: int, cfg: Dict, top: int = 3) -> Dict[str, pd.DataFrame]:
    catalog = subject_catalog(cfg)
    overview = department_overview(
        cohort,
        semester,
        catalog=catalog,
        weak_fail_percent=float(cfg.get("weak_fail_percent", WEAK_FAIL_PERCENT)),
    )
    at_risk, defaulters = risk_alerts(cohort, semester, float(cfg.get("at_risk_cgpa", AT_RISK_CGPA)))

    kpis = pd.DataFrame(
        [
            {"metric": "semester", "value": semester},
            {"metric": "total_students", "value": overview.total_students},
            {"metric": "dept_avg_sgpa", "value": overview.dept_avg_sgpa},
            {"metric": "overall_pass_pct", "value": overview.overall_pass_percent},
            {"metric": "weak_subjects", "value": ", ".join(s.code for s in overview.weak_subjects)},
            {"metric": "at_risk_students", "value": len(at_risk.index)},
            {"metric": "attendance_defaulters", "value": len(defaulters.index)},
        ]
    )

    toppers = pd.DataFrame(
        [{"id": s.id, "name": s.name, "reg_no": s.reg_no, "cgpa": s.cgpa} for s in top_students(cohort, top)],
        columns=["id", "name", "reg_no", "cgpa"],
    )

    return {
        "master_long": build_master_frame(cohort),
        "department_overview": kpis,
        "subject_outcomes": overview.subject_frame(catalog, faculty_directory(cfg)),
        "student_summary": student_semester_summary(cohort, semester),
        "ranks": compute_ranks(cohort, semester),
        "top_students": toppers,
        "class_performance_summary": build_class_performance_summary(
            cohort, float(cfg.get("first_class_cgpa", FIRST_CLASS_CGPA))
        ),
        "at_risk": at_risk,
        "attendance_defaulters": defaulters,
    }


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    cfg = load_config(args.config)
    semesters = semester_numbers(cfg)
    semester = args.semester or int(cfg.get("default_semester", 1))
    if semester not in semesters:
        raise SystemExit(f"Semester {semester} is not one of {list(semesters)}")

    cohort = load_input_cohort(args.cohort, semesters, subject_catalog(cfg))
    outputs = build_outputs(cohort, semester, cfg, args.top)

    outdir = args.outdir
    os.makedirs(outdir, exist_ok=True)
    with pd.ExcelWriter(os.path.join(outdir, f"cohort_analytics_sem{semester}.xlsx"), engine="openpyxl") as w:
        for sheet_name, frame in outputs.items():
            frame.to_excel(w, index=False, sheet_name=sheet_name)

    for name, frame in outputs.items():
        frame.to_csv(os.path.join(outdir, f"{name}_sem{semester}.csv"), index=False)

    with open(os.path.join(outdir, f"export_sem{semester}.csv"), "w", encoding="utf-8") as f:
        f.write(export_csv(cohort, semester, subject_catalog(cfg)))

    save_cohort(cohort, os.path.join(outdir, "cohort.json"))

    print("Wrote outputs to:", outdir)


if __name__ == "__main__":
    main()
