import unittest

from gradetrack.config.catalog import FINALS_PERIOD, VOCATIONAL_PERIOD
from gradetrack.core.records import Adjustment, Grade, Program
from gradetrack.services.validation import (
    ValidationError,
    is_valid_subject,
    validate_adjustment,
    validate_collections,
    validate_grade,
)


class GradeValidationTests(unittest.TestCase):
    def test_valid_grade(self):
        grade = Grade(value=4.5, weight=1, period=3, subject="IDAF")
        self.assertIs(validate_grade(grade), grade)

    def test_value_out_of_range(self):
        for value in (0.5, 6.5, float("nan")):
            with self.assertRaisesRegex(ValidationError, "between 1 and 6"):
                validate_grade(Grade(value=value, weight=1, period=1, subject="Math"))

    def test_negative_weight(self):
        with self.assertRaises(ValidationError):
            validate_grade(Grade(value=4.0, weight=-1, period=1, subject="Math"))

    def test_zero_weight_allowed(self):
        validate_grade(Grade(value=4.0, weight=0, period=1, subject="Math"))

    def test_period_out_of_range(self):
        for period in (0, 8):
            with self.assertRaisesRegex(ValidationError, "Invalid semester"):
                validate_grade(Grade(value=4.0, weight=1, period=period, subject="Math"))

    def test_subject_not_in_semester(self):
        with self.assertRaisesRegex(ValidationError, "not available"):
            validate_grade(Grade(value=4.0, weight=1, period=1, subject="Science"))

    def test_finals_entries(self):
        validate_grade(Grade(value=4.0, weight=1, period=FINALS_PERIOD, subject="German (Oral)"))
        with self.assertRaises(ValidationError):
            validate_grade(Grade(value=4.0, weight=1, period=FINALS_PERIOD, subject="Math (Oral)"))

    def test_vocational_module(self):
        validate_grade(Grade(value=4.0, weight=1, period=VOCATIONAL_PERIOD, subject="IPA", program=Program.VOCATIONAL))
        with self.assertRaises(ValidationError):
            validate_grade(Grade(value=4.0, weight=1, period=VOCATIONAL_PERIOD, subject="999", program=Program.VOCATIONAL))
        with self.assertRaisesRegex(ValidationError, "Invalid semester"):
            validate_grade(Grade(value=4.0, weight=1, period=2, subject="431", program=Program.VOCATIONAL))

    def test_is_valid_subject(self):
        self.assertTrue(is_valid_subject(Program.REGULAR, 6, "IDPA"))
        self.assertFalse(is_valid_subject(Program.REGULAR, 5, "IDPA"))
        self.assertFalse(is_valid_subject(Program.REGULAR, 1, "431"))
        self.assertTrue(is_valid_subject(Program.VOCATIONAL, VOCATIONAL_PERIOD, "431"))


class AdjustmentValidationTests(unittest.TestCase):
    def test_valid_adjustment(self):
        validate_adjustment(Adjustment(value=-0.5, period=2, subject="History"))

    def test_unknown_subject(self):
        with self.assertRaises(ValidationError):
            validate_adjustment(Adjustment(value=0.5, period=5, subject="History"))

    def test_duplicate_keys_rejected(self):
        adjustments = [
            Adjustment(value=0.5, period=1, subject="Math"),
            Adjustment(value=-0.5, period=1, subject="Math"),
        ]
        with self.assertRaisesRegex(ValidationError, "Duplicate"):
            validate_collections([], adjustments)

    def test_same_subject_different_semester(self):
        adjustments = [
            Adjustment(value=0.5, period=1, subject="Math"),
            Adjustment(value=0.5, period=2, subject="Math"),
        ]
        validate_collections([], adjustments)


if __name__ == "__main__":
    unittest.main()
