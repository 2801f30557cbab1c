from dataclasses import replace

from export import build_export_frame, export_columns, export_csv, format_number


def test_header_follows_catalog_order(small_cohort):
    header = export_csv(small_cohort, 1).split("\n")[0]
    assert header == (
        "Reg No,Name,CGPA,"
        "CS301 Grade,CS301 Marks,CS301 Att%,"
        "CS302 Grade,CS302 Marks,CS302 Att%,"
        "CS303 Grade,CS303 Marks,CS303 Att%,"
        "CS304 Grade,CS304 Marks,CS304 Att%,"
        "CS305 Grade,CS305 Marks,CS305 Att%,"
        "SGPA,Rank"
    )


def test_rows(small_cohort):
    lines = export_csv(small_cohort, 1).split("\n")
    assert len(lines) == 4
    assert lines[1] == "21BCE0001,Alice,9.5," + "A+,90,90," * 5 + "9,1"
    assert lines[2].startswith("21BCE0002,Bob,6.8,C,45,80,B+,70,85,")
    assert lines[2].endswith(",6.6,2")


def test_no_trailing_newline(small_cohort):
    assert not export_csv(small_cohort, 2).endswith("\n")


def test_missing_semester_leaves_blanks(small_cohort):
    alice = small_cohort[0]
    cohort = (replace(alice, semesters=alice.semesters[:1], rank_by_sem={1: 1}),)
    row = build_export_frame(cohort, 2).iloc[0].tolist()
    assert row[:3] == ["21BCE0001", "Alice", "9.5"]
    assert row[3:] == [""] * 17


def test_empty_cohort_is_header_only():
    assert export_csv([], 1) == ",".join(export_columns())


def test_format_number():
    assert format_number(8.0) == "8"
    assert format_number(7.25) == "7.25"
    assert format_number(12) == "12"
    assert format_number("") == ""


def test_names_with_commas_are_quoted(small_cohort):
    cohort = (replace(small_cohort[0], name="Rao, Ananya"),)
    row = export_csv(cohort, 1).split("\n")[1]
    assert row.startswith('21BCE0001,"Rao, Ananya",9.5,')
