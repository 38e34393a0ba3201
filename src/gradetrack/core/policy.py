from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from gradetrack.config.catalog import MAX_FAILING_SUBJECTS, MAX_NEGATIVE_POINTS, PASS_THRESHOLD


@dataclass(frozen=True)
class RuleStatus:
    passed: bool
    average: Optional[float]
    subjects_below: List[str]
    below_count: int
    negative_points: float
    rule1_pass: bool
    rule2_pass: bool
    rule3_pass: bool
    subject_results: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class VocationalStatus:
    passed: bool
    normal_average: Optional[float]
    uk_average: Optional[float]
    final_average: Optional[float]
    practical_grade: Optional[float]
    average_pass: Optional[bool]
    practical_pass: Optional[bool]


def negative_points(subject_grades: Mapping[str, float]) -> float:
    return sum(PASS_THRESHOLD - g for g in subject_grades.values() if g < PASS_THRESHOLD)


def evaluate_rules(subject_grades: Mapping[str, float], average: Optional[float]) -> Optional[RuleStatus]:
    """
    KSH promotion rules, used for a single semester and for the 3-year overview:

    1) average >= 4.0
    2) at most 2 subjects below 4.0
    3) at most 2 negative points (sum of each failing subject's distance to 4.0)
    """
    if not subject_grades:
        return None

    below = [subject for subject, grade in subject_grades.items() if grade < PASS_THRESHOLD]
    points = negative_points(subject_grades)

    rule1 = average is not None and average >= PASS_THRESHOLD
    rule2 = len(below) <= MAX_FAILING_SUBJECTS
    rule3 = points <= MAX_NEGATIVE_POINTS

    return RuleStatus(
        passed=rule1 and rule2 and rule3,
        average=average,
        subjects_below=below,
        below_count=len(below),
        negative_points=round(points, 1),
        rule1_pass=rule1,
        rule2_pass=rule2,
        rule3_pass=rule3,
        subject_results=dict(subject_grades),
    )


def evaluate_vocational(
    normal_average: Optional[float],
    uk_average: Optional[float],
    final_average: Optional[float],
    practical_grade: Optional[float],
) -> VocationalStatus:
    # An ungraded IPA is still pending and does not fail the status.
    practical_pass = None if practical_grade is None else practical_grade >= PASS_THRESHOLD
    average_pass = None if final_average is None else final_average >= PASS_THRESHOLD
    return VocationalStatus(
        passed=average_pass is True and practical_pass is not False,
        normal_average=normal_average,
        uk_average=uk_average,
        final_average=final_average,
        practical_grade=practical_grade,
        average_pass=average_pass,
        practical_pass=practical_pass,
    )
