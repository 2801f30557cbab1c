from dataclasses import replace

from subject_analytics import subject_analytics


def test_summary_counts(small_cohort):
    summary = subject_analytics(small_cohort, "CS305", 2)
    assert summary.total == 3
    assert summary.fails == 1
    assert summary.passes == 2
    assert summary.avg == 83.7
    assert summary.top_score == 96
    assert summary.pass_percent == 66.7
    assert summary.fail_percent == 33.3
    assert summary.attendance_avg == 83.3


def test_grade_distribution_is_complete_and_ordered(small_cohort):
    summary = subject_analytics(small_cohort, "CS305", 2)
    assert list(summary.grade_distribution) == ["S", "A+", "A", "B+", "B", "C", "F"]
    assert summary.grade_distribution == {"S": 1, "A+": 0, "A": 0, "B+": 1, "B": 0, "C": 0, "F": 1}


def test_records_frame(small_cohort):
    summary = subject_analytics(small_cohort, "CS301", 1)
    assert summary.records["student_id"].tolist() == ["s1", "s2", "s3"]
    assert summary.records["total_marks"].tolist() == [90, 45, 70]


def test_students_without_record_are_excluded(small_cohort):
    alice = small_cohort[0]
    sem1 = alice.semesters[0]
    without_cs301 = replace(sem1, subjects=tuple(s for s in sem1.subjects if s.code != "CS301"))
    cohort = (replace(alice, semesters=(without_cs301, alice.semesters[1])),) + small_cohort[1:]

    summary = subject_analytics(cohort, "CS301", 1)
    assert summary.total == 2
    assert summary.fails == 0
    assert summary.avg == 57.5


def test_empty_selection_yields_zeros(small_cohort):
    summary = subject_analytics(small_cohort, "XX999", 1)
    assert summary.total == 0
    assert summary.avg == 0.0
    assert summary.top_score == 0
    assert summary.pass_percent == 0.0
    assert summary.fail_percent == 0.0
    assert summary.attendance_avg == 0.0
    assert set(summary.grade_distribution.values()) == {0}


def test_empty_cohort():
    summary = subject_analytics([], "CS301", 1)
    assert summary.total == 0
    assert summary.records.empty


def test_as_row(small_cohort):
    row = subject_analytics(small_cohort, "CS305", 2).as_row()
    assert row["subject_code"] == "CS305"
    assert row["grade_F"] == 1
    assert row["fail_pct"] == 33.3
