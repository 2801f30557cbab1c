from gpa import compute_cgpa, compute_sgpa, weak_subjects
from grading import compute_grade
from seed_data import NAMES, TIERS, build_seed_cohort, lcg, rand_int


def test_lcg_recurrence():
    draw = lcg(0)
    first = draw()
    assert first == 1013904223 / 0xFFFFFFFF
    second = draw()
    assert second == ((1664525 * 1013904223 + 1013904223) % 2 ** 32) / 0xFFFFFFFF


def test_rand_int_rounds_half_up():
    assert rand_int(lambda: 0.5, 0, 1) == 1
    assert rand_int(lambda: 0.0, 30, 40) == 30
    assert rand_int(lambda: 1.0, 30, 40) == 40


def test_seed_shape(seed_cohort):
    assert len(seed_cohort) == len(NAMES) == len(TIERS) == 50
    assert seed_cohort[0].reg_no == "21BCE1001"
    assert seed_cohort[-1].reg_no == "21BCE1050"
    assert seed_cohort[0].email == "21BCE1001@vitstudent.ac.in"
    assert seed_cohort[0].password == "1001"
    assert len({s.reg_no for s in seed_cohort}) == 50
    for student in seed_cohort:
        assert [sem.semester_number for sem in student.semesters] == [1, 2]
        for sem in student.semesters:
            assert len(sem.subjects) == 5


def test_seed_is_deterministic(seed_cohort):
    assert build_seed_cohort() == seed_cohort


def test_seed_derived_fields_are_consistent(seed_cohort):
    for student in seed_cohort:
        for sem in student.semesters:
            for sub in sem.subjects:
                assert 0 <= sub.internal_marks <= 40
                assert 0 <= sub.external_marks <= 60
                assert sub.total_marks == sub.internal_marks + sub.external_marks
                assert tuple(compute_grade(sub.total_marks, sub.attendance)) == (
                    sub.grade,
                    sub.grade_point,
                    sub.eligible,
                )
            assert sem.sgpa == compute_sgpa(sem.subjects)
        assert student.cgpa == compute_cgpa(student.semesters)
        assert student.weak_subjects == weak_subjects(student.semesters)
        assert student.rank == student.rank_by_sem[1]


def test_high_tier_outscores_failing_tier(seed_cohort):
    high = [s.cgpa for s in seed_cohort[:5]]
    failing = [s.cgpa for s in seed_cohort[-5:]]
    assert min(high) > max(failing)
