#!/usr/bin/env python3
"""Generate the class performance summary from a cohort JSON file."""

from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd

from class_performance import build_class_performance_summary
from config import FIRST_CLASS_CGPA, load_config
from recompute import restrike_cohort
from records import load_cohort
from seed_data import build_seed_cohort

DEFAULT_OUTPUT_PATH = Path("outputs/class_performance_summary.csv")
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
SHEET_NAME = "class_performance"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--cohort",
        type=Path,
        default=None,
        help="Path to the cohort JSON file (default: the built-in seed cohort)",
    )
    parser.add_argument("--config", default=None, help="Optional config.json with first_class_cgpa")
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=(
            "Destination path for the summary table (default: "
            "outputs/class_performance_summary.csv). The format is inferred from the file extension."
        ),
    )
    return parser.parse_args(argv)


def build_summary(cohort_path: Path | None, first_class_cgpa: float) -> pd.DataFrame:
    if cohort_path is None:
        cohort = build_seed_cohort()
    elif not cohort_path.exists():
        raise FileNotFoundError(f"Cohort file not found: {cohort_path}")
    else:
        cohort = restrike_cohort(load_cohort(str(cohort_path)))
    return build_class_performance_summary(cohort, first_class_cgpa)


def write_output(summary: pd.DataFrame, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    if destination.suffix.lower() not in EXCEL_SUFFIXES:
        summary.to_csv(destination, index=False)
        return
    with pd.ExcelWriter(destination, engine="openpyxl") as w:
        summary.to_excel(w, index=False, sheet_name=SHEET_NAME)


def main(argv=None) -> None:
    args = parse_args(argv)
    cfg = load_config(args.config)
    summary = build_summary(args.cohort, float(cfg.get("first_class_cgpa", FIRST_CLASS_CGPA)))
    write_output(summary, args.output)
    print(f"Wrote class performance summary to: {args.output}")


if __name__ == "__main__":
    main()
