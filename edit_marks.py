#!/usr/bin/env python3
"""Edit one student's marks or attendance and write the recomputed cohort.

The value is clamped into the field's valid range before the edit is applied;
every grade, GPA, weak-subject list and rank that depends on it is re-derived.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import List

from config import DEFAULT_CONFIG_PATH, load_config, semester_numbers
from recompute import (
    EDITABLE_FIELDS,
    FIELD_ALIASES,
    apply_edit,
    clamp_edit_value,
    normalize_field,
    restrike_cohort,
)
from records import find_student, find_subject_record, load_cohort, save_cohort


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--cohort", required=True, help="Path to the cohort JSON file")
    parser.add_argument("--student", required=True, help="Student id (e.g. s12) or registration number")
    parser.add_argument("--semester", type=int, required=True)
    parser.add_argument("--subject", required=True, help="Subject code, e.g. CS301")
    parser.add_argument(
        "--field",
        required=True,
        choices=list(EDITABLE_FIELDS) + list(FIELD_ALIASES),
    )
    parser.add_argument("--value", required=True, help="New value (clamped to the field's range)")
    parser.add_argument(
        "--output",
        default=None,
        help="Where to write the updated cohort (default: overwrite --cohort)",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not os.path.exists(args.cohort):
        raise SystemExit(f"Cohort file not found: {args.cohort}")

    cfg = load_config(args.config)
    cohort = restrike_cohort(load_cohort(args.cohort), semester_numbers(cfg))

    student = find_student(cohort, args.student)
    if student is None:
        # registration numbers are an alternate key
        reg = args.student.strip().lower()
        student = next((s for s in cohort if s.reg_no.lower() == reg), None)
    if student is None:
        raise SystemExit(f"No student with id or registration number {args.student}")

    code = args.subject.strip().upper()
    if find_subject_record(cohort, student.id, args.semester, code) is None:
        raise SystemExit(f"{student.reg_no} has no semester {args.semester} record for {code}")

    field = normalize_field(args.field)
    value = clamp_edit_value(field, args.value)
    updated = apply_edit(cohort, student.id, args.semester, code, field, value, semester_numbers(cfg))

    record = find_subject_record(updated, student.id, args.semester, code)
    destination = args.output or args.cohort
    save_cohort(updated, destination)
    print(
        f"{student.reg_no} {code} sem {args.semester}: {field}={value} -> "
        f"total {record.total_marks}, grade {record.grade}"
    )
    print(f"Wrote updated cohort to: {destination}")


if __name__ == "__main__":
    main()
