import unittest
from datetime import date

from gradetrack.config.catalog import FINALS_PERIOD
from gradetrack.core.records import Adjustment, Grade
from gradetrack.core.regular import (
    final_subject_grade,
    finals_average,
    finals_exam_grade,
    overall_average,
    overview_status,
    semester_average,
    semester_status,
    terminal_grade,
)


def _grade(subject, value, period=1, weight=1.0, when=None):
    return Grade(value=value, weight=weight, period=period, subject=subject, date=when)


def _finals(entry, value, when=None, weight=1.0):
    return _grade(entry, value, period=FINALS_PERIOD, weight=weight, when=when)


class SemesterTests(unittest.TestCase):
    def setUp(self):
        self.grades = [
            _grade("Math", 5.0),
            _grade("Math", 6.0, weight=2),
            _grade("German", 4.0),
            # Science is not taught in semester 1
            _grade("Science", 1.0),
        ]

    def test_average_is_not_rounded(self):
        self.assertEqual(semester_average(self.grades, [], 1), 4.75)

    def test_empty_semester_is_absent(self):
        self.assertIsNone(semester_average(self.grades, [], 2))
        self.assertIsNone(semester_status(self.grades, [], 2))

    def test_adjustment_applies_to_its_bucket_only(self):
        adjustments = [Adjustment(value=-1.0, period=1, subject="German"), Adjustment(value=-1.0, period=2, subject="Math")]
        self.assertEqual(semester_average(self.grades, adjustments, 1), 4.25)

    def test_status(self):
        status = semester_status(self.grades, [], 1)
        self.assertTrue(status.passed)
        self.assertEqual(status.subject_results, {"German": 4.0, "Math": 5.5})
        self.assertEqual(status.average, 4.75)

    def test_failing_semester(self):
        grades = [
            _grade("German", 4.0),
            _grade("French", 3.0),
            _grade("English", 3.0),
            _grade("Math", 5.0),
            _grade("WR", 4.5),
        ]
        status = semester_status(grades, [], 1)
        self.assertAlmostEqual(status.average, 3.9)
        self.assertFalse(status.rule1_pass)
        self.assertTrue(status.rule2_pass)
        self.assertTrue(status.rule3_pass)
        self.assertFalse(status.passed)


class FinalsTests(unittest.TestCase):
    def test_oral_and_written_combined(self):
        grades = [_finals("German (Oral)", 5.0), _finals("German (Written)", 4.5)]
        self.assertEqual(finals_exam_grade(grades, "German"), 5.0)

    def test_single_component(self):
        grades = [_finals("German (Written)", 4.5)]
        self.assertEqual(finals_exam_grade(grades, "German"), 4.5)

    def test_unknown_subject(self):
        self.assertIsNone(finals_exam_grade([], "History"))
        self.assertIsNone(finals_exam_grade([], "Math"))

    def test_latest_entry_counts(self):
        grades = [
            _finals("Math (Written)", 3.0, when=date(2024, 1, 10)),
            _finals("Math (Written)", 5.0, when=date(2024, 6, 10)),
        ]
        self.assertEqual(finals_exam_grade(grades, "Math"), 5.0)

    def test_zero_weight_entry_ignored(self):
        grades = [
            _finals("Math (Written)", 5.0, when=date(2024, 1, 10)),
            _finals("Math (Written)", 1.0, when=date(2024, 6, 10), weight=0),
        ]
        self.assertEqual(finals_exam_grade(grades, "Math"), 5.0)

    def test_only_zero_weight_entries(self):
        grades = [_finals("Math (Written)", 1.0, weight=0)]
        self.assertIsNone(finals_exam_grade(grades, "Math"))
        self.assertIsNone(finals_average(grades))

    def test_average_rounded_twice(self):
        grades = [
            _finals("German (Oral)", 5.0),
            _finals("German (Written)", 4.5),
            _finals("Math (Written)", 4.0),
            _finals("French (Written)", 3.5),
        ]
        # subjects 5.0, 4.0, 3.5 -> 4.1667 -> 4.0
        self.assertEqual(finals_average(grades), 4.0)

    def test_no_finals(self):
        self.assertIsNone(finals_average([]))


class FinalSubjectGradeTests(unittest.TestCase):
    def test_period_and_finals_merged(self):
        grades = [_grade("Math", 5.0, period=1), _grade("Math", 4.0, period=2), _finals("Math (Written)", 6.0)]
        result = final_subject_grade(grades, [], "Math")
        self.assertEqual(result.period_average, 4.5)
        self.assertEqual(result.terminal_grade, 6.0)
        self.assertEqual(result.final_grade, 5.5)

    def test_period_average_alone(self):
        grades = [_grade("History", 5.0, period=1), _grade("History", 5.0, period=3)]
        result = final_subject_grade(grades, [], "History")
        self.assertEqual(result.period_average, 5.0)
        self.assertIsNone(result.terminal_grade)
        self.assertEqual(result.final_grade, 5.0)

    def test_finals_alone(self):
        result = final_subject_grade([_finals("WR (Written)", 3.5)], [], "WR")
        self.assertIsNone(result.period_average)
        self.assertEqual(result.final_grade, 3.5)

    def test_nothing(self):
        result = final_subject_grade([], [], "Math")
        self.assertIsNone(result.final_grade)

    def test_substitute_terminal_grade(self):
        grades = [_grade("IDAF", 4.0, period=3), _grade("IDAF", 5.0, period=4), _grade("IDPA", 5.5, period=6)]
        self.assertEqual(terminal_grade(grades, [], "IDAF"), 5.5)
        result = final_subject_grade(grades, [], "IDAF")
        self.assertEqual(result.period_average, 4.5)
        self.assertEqual(result.final_grade, 5.0)

    def test_substitute_alone(self):
        result = final_subject_grade([_grade("IDPA", 5.5, period=6)], [], "IDAF")
        self.assertIsNone(result.period_average)
        self.assertEqual(result.final_grade, 5.5)


class OverviewTests(unittest.TestCase):
    def test_overview_status(self):
        grades = [
            _grade("Math", 5.0, period=1),
            _grade("Math", 4.0, period=2),
            _finals("Math (Written)", 6.0),
            _grade("History", 5.0, period=1),
            _grade("IDPA", 3.0, period=6),
        ]
        status = overview_status(grades, [])
        self.assertEqual(status.subject_results, {"Math": 5.5, "History": 5.0, "IDAF": 3.0})
        # (5.5 + 5.0 + 3.0) / 3 = 4.5
        self.assertEqual(status.average, 4.5)
        self.assertEqual(status.subjects_below, ["IDAF"])
        self.assertTrue(status.passed)

    def test_overview_average_rounded_up_to_pass(self):
        grades = [_grade("History", 3.5), _grade("Math", 4.0)]
        status = overview_status(grades, [])
        # mean of final grades is 3.75
        self.assertEqual(status.average, 4.0)
        self.assertTrue(status.rule1_pass)
        self.assertTrue(status.passed)

    def test_overview_average_rounded_down(self):
        grades = [
            _grade("German", 4.0),
            _grade("French", 4.0),
            _grade("English", 4.0),
            _grade("Math", 4.5),
            _grade("History", 4.5),
        ]
        # mean of final grades is 4.2
        self.assertEqual(overview_status(grades, []).average, 4.0)

    def test_empty_overview(self):
        self.assertIsNone(overview_status([], []))

    def test_overall_average(self):
        grades = [
            _grade("Math", 5.0),
            _grade("Math", 6.0, weight=2),
            _grade("German", 4.0),
            _finals("Math (Written)", 4.5),
        ]
        self.assertEqual(overall_average(grades, []), 4.625)

    def test_overall_average_absent(self):
        self.assertIsNone(overall_average([], []))


if __name__ == "__main__":
    unittest.main()
