"""
Dashboard statistics over the KSH semester grades.

Finals entries and BZZ grades are left out; every figure is derived from the
regular semesters 1-6 only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from gradetrack.config.catalog import FINALS_PERIOD, OVERVIEW_SUBJECTS, PERIOD_SUBJECTS, TOTAL_PERIODS
from gradetrack.core.averages import subject_average
from gradetrack.core.policy import RuleStatus
from gradetrack.core.records import Adjustment, Grade, Program
from gradetrack.core.regular import semester_average, semester_status

HALF_STEPS: Tuple[float, ...] = tuple(6.0 - 0.5 * i for i in range(11))


@dataclass(frozen=True)
class GradeSummary:
    total: int
    average: Optional[float]
    highest: Optional[float]
    lowest: Optional[float]


def semester_grades(grades: Sequence[Grade]) -> List[Grade]:
    return [g for g in grades if g.program == Program.REGULAR and g.period != FINALS_PERIOD]


def grade_summary(grades: Sequence[Grade]) -> GradeSummary:
    values = [g.value for g in semester_grades(grades)]
    if not values:
        return GradeSummary(total=0, average=None, highest=None, lowest=None)
    return GradeSummary(
        total=len(values),
        average=sum(values) / len(values),
        highest=max(values),
        lowest=min(values),
    )


def grade_distribution(grades: Sequence[Grade]) -> Dict[float, int]:
    """Count of grades per half-grade step, best first. Off-step values are not counted."""
    counts = {step: 0 for step in HALF_STEPS}
    for g in semester_grades(grades):
        if g.value in counts:
            counts[g.value] += 1
    return {step: n for step, n in counts.items() if n > 0}


def grades_per_subject(grades: Sequence[Grade]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for g in semester_grades(grades):
        counts[g.subject] = counts.get(g.subject, 0) + 1
    return counts


def semester_trend(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> List[Tuple[int, Optional[float]]]:
    return [(p, semester_average(grades, adjustments, p)) for p in range(1, TOTAL_PERIODS + 1)]


def subject_progress(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Dict[str, List[Optional[float]]]:
    progress: Dict[str, List[Optional[float]]] = {}
    for subject in OVERVIEW_SUBJECTS:
        row: List[Optional[float]] = []
        for period in range(1, TOTAL_PERIODS + 1):
            if subject in PERIOD_SUBJECTS[period]:
                row.append(subject_average(grades, adjustments, Program.REGULAR, period, subject))
            else:
                row.append(None)
        progress[subject] = row
    return progress


def semester_pass_fail(
    grades: Sequence[Grade], adjustments: Sequence[Adjustment]
) -> List[Tuple[int, Optional[RuleStatus]]]:
    return [(p, semester_status(grades, adjustments, p)) for p in range(1, TOTAL_PERIODS + 1)]


def grades_over_time(grades: Sequence[Grade]) -> List[Grade]:
    """Semester grades oldest first; undated grades lead."""
    return sorted(semester_grades(grades), key=lambda g: g.date or date.min)
