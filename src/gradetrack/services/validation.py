import logging
import math
from typing import Iterable, Set

from gradetrack.config.catalog import FINALS_PERIOD, MAX_GRADE, MIN_GRADE, VOCATIONAL_PERIOD, is_module, subjects_for_period
from gradetrack.core.records import Adjustment, BucketKey, Grade, Program

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    pass


def is_valid_subject(program: Program, period: int, subject: str) -> bool:
    if program == Program.VOCATIONAL:
        return period == VOCATIONAL_PERIOD and is_module(subject)
    return subject in subjects_for_period(period)


def _check_bucket(program: Program, period: int, subject: str) -> None:
    if not subject:
        raise ValidationError("Semester and subject are required")
    if program == Program.VOCATIONAL:
        if period != VOCATIONAL_PERIOD:
            raise ValidationError("Invalid semester")
        if not is_module(subject):
            raise ValidationError(f"Unknown module: {subject}")
        return
    if period < 1 or period > FINALS_PERIOD:
        raise ValidationError("Invalid semester")
    if not is_valid_subject(program, period, subject):
        raise ValidationError("This subject is not available in this semester")


def validate_grade(grade: Grade) -> Grade:
    if not math.isfinite(grade.value) or grade.value < MIN_GRADE or grade.value > MAX_GRADE:
        raise ValidationError("Grade must be between 1 and 6")
    if not math.isfinite(grade.weight) or grade.weight < 0:
        raise ValidationError("Weight must not be negative")
    _check_bucket(grade.program, grade.period, grade.subject)
    return grade


def validate_adjustment(adjustment: Adjustment) -> Adjustment:
    if not math.isfinite(adjustment.value):
        raise ValidationError("Adjustment value must be a number")
    _check_bucket(adjustment.program, adjustment.period, adjustment.subject)
    return adjustment


def validate_collections(grades: Iterable[Grade], adjustments: Iterable[Adjustment]) -> None:
    for grade in grades:
        validate_grade(grade)

    seen: Set[BucketKey] = set()
    for adjustment in adjustments:
        validate_adjustment(adjustment)
        if adjustment.key in seen:
            logger.warning("Rejected duplicate adjustment for %s", adjustment.key)
            raise ValidationError(
                f"Duplicate adjustment for semester {adjustment.period} and subject {adjustment.subject}"
            )
        seen.add(adjustment.key)
