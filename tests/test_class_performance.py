from class_performance import CATEGORY_ORDER, build_class_performance_summary, build_overall_frame


def test_overall_frame(small_cohort):
    overall = build_overall_frame(small_cohort).set_index("student_id")
    assert overall.loc["s1", "subjects_attempted"] == 10
    assert overall.loc["s3", "subjects_failed"] == 1
    assert overall["all_clear"].to_dict() == {"s1": 1, "s2": 1, "s3": 0}


def test_summary_counts(small_cohort):
    summary = build_class_performance_summary(small_cohort).set_index("Category")["Students"]
    assert list(summary.index) == list(CATEGORY_ORDER)
    assert summary["Appeared"] == 3
    assert summary["Passed with First Class"] == 1
    assert summary["Passed with Second Class"] == 1
    assert summary["Total Passed"] == 2
    assert summary["Yet to Pass"] == 1


def test_first_class_threshold(small_cohort):
    summary = build_class_performance_summary(small_cohort, first_class_cgpa=6.8).set_index("Category")
    assert summary.loc["Passed with First Class", "Students"] == 2


def test_empty_cohort():
    summary = build_class_performance_summary([])
    assert summary.empty
    assert list(summary.columns) == ["Category", "Students"]
