from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Sequence

from gradetrack.config.catalog import (
    FINALS_ENTRIES,
    FINALS_PERIOD,
    OVERVIEW_SUBJECTS,
    PERIOD_SUBJECTS,
    TERMINAL_SUBSTITUTES,
    TOTAL_PERIODS,
    periods_for_subject,
)
from gradetrack.core.averages import filter_grades, mean, round_half, subject_average
from gradetrack.core.policy import RuleStatus, evaluate_rules
from gradetrack.core.records import Adjustment, Grade, Program

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalSubjectGrade:
    period_average: Optional[float]
    terminal_grade: Optional[float]
    final_grade: Optional[float]


def _subject_averages(grades: Sequence[Grade], adjustments: Sequence[Adjustment], period: int) -> Dict[str, float]:
    result: Dict[str, float] = {}
    for subject in PERIOD_SUBJECTS.get(period, ()):
        avg = subject_average(grades, adjustments, Program.REGULAR, period, subject)
        if avg is not None:
            result[subject] = avg
    return result


def semester_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment], period: int) -> Optional[float]:
    """Mean of the rounded subject averages of one semester; deliberately not rounded again."""
    return mean(_subject_averages(grades, adjustments, period).values())


def semester_status(grades: Sequence[Grade], adjustments: Sequence[Adjustment], period: int) -> Optional[RuleStatus]:
    averages = _subject_averages(grades, adjustments, period)
    return evaluate_rules(averages, mean(averages.values()))


def _latest_entry_value(grades: Sequence[Grade], entry: str) -> Optional[float]:
    found = [g for g in filter_grades(grades, Program.REGULAR, FINALS_PERIOD, entry) if g.weight > 0]
    if not found:
        return None
    if len(found) > 1:
        logger.debug("Finals entry %s has %d grades, using the most recent", entry, len(found))
    return max(found, key=lambda g: g.date or date.min).value


def finals_exam_grade(grades: Sequence[Grade], subject: str) -> Optional[float]:
    """Average of a subject's oral/written finals entries, rounded to 0.5."""
    entries = FINALS_ENTRIES.get(subject)
    if not entries:
        return None
    avg = mean(_latest_entry_value(grades, entry) for entry in entries)
    if avg is None:
        return None
    return round_half(avg)


def finals_grades(grades: Sequence[Grade]) -> Dict[str, float]:
    result: Dict[str, float] = {}
    for subject in FINALS_ENTRIES:
        grade = finals_exam_grade(grades, subject)
        if grade is not None:
            result[subject] = grade
    return result


def finals_average(grades: Sequence[Grade]) -> Optional[float]:
    avg = mean(finals_grades(grades).values())
    if avg is None:
        return None
    return round_half(avg)


def overall_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Optional[float]:
    values = [semester_average(grades, adjustments, p) for p in range(1, TOTAL_PERIODS + 1)]
    values.append(finals_average(grades))
    return mean(values)


def terminal_grade(grades: Sequence[Grade], adjustments: Sequence[Adjustment], subject: str) -> Optional[float]:
    substitute = TERMINAL_SUBSTITUTES.get(subject)
    if substitute is not None:
        return subject_average(grades, adjustments, Program.REGULAR, substitute.period, substitute.subject)
    return finals_exam_grade(grades, subject)


def final_subject_grade(grades: Sequence[Grade], adjustments: Sequence[Adjustment], subject: str) -> FinalSubjectGrade:
    period_avg = mean(
        subject_average(grades, adjustments, Program.REGULAR, p, subject) for p in periods_for_subject(subject)
    )
    if period_avg is not None:
        period_avg = round_half(period_avg)
    exam = terminal_grade(grades, adjustments, subject)

    if period_avg is not None and exam is not None:
        final = round_half((period_avg + exam) / 2)
    elif period_avg is not None:
        final = period_avg
    else:
        final = exam

    return FinalSubjectGrade(period_average=period_avg, terminal_grade=exam, final_grade=final)


def final_subject_grades(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Dict[str, float]:
    result: Dict[str, float] = {}
    for subject in OVERVIEW_SUBJECTS:
        final = final_subject_grade(grades, adjustments, subject).final_grade
        if final is not None:
            result[subject] = final
    return result


def overview_status(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Optional[RuleStatus]:
    results = final_subject_grades(grades, adjustments)
    avg = mean(results.values())
    return evaluate_rules(results, None if avg is None else round_half(avg))
