from __future__ import annotations

import math
from typing import Iterable, List, Optional

from gradetrack.config.catalog import MAX_GRADE, MIN_GRADE
from gradetrack.core.records import Adjustment, BucketKey, Grade, Program


def clamp_grade(value: float) -> float:
    return max(MIN_GRADE, min(MAX_GRADE, value))


def filter_grades(grades: Iterable[Grade], program: Program, period: int, subject: str) -> List[Grade]:
    key = BucketKey(program, period, subject)
    return [g for g in grades if g.key == key]


def find_adjustment(adjustments: Iterable[Adjustment], program: Program, period: int, subject: str) -> float:
    key = BucketKey(program, period, subject)
    for adj in adjustments:
        if adj.key == key:
            return adj.value
    return 0.0


def raw_average(grades: Iterable[Grade], adjustment: float = 0.0) -> Optional[float]:
    """
    Weighted mean of the counting grades plus the bonus/malus, clamped to [1, 6].
    Grades with weight <= 0 do not count. Returns None when nothing counts.
    """
    weighted = 0.0
    total_weight = 0.0
    for g in grades:
        if g.weight <= 0:
            continue
        weighted += g.value * g.weight
        total_weight += g.weight
    if total_weight == 0:
        return None
    return clamp_grade(weighted / total_weight + adjustment)


def round_half(value: float) -> float:
    # Ties go up (4.25 -> 4.5); the builtin round() would round half to even.
    return clamp_grade(math.floor(value * 2 + 0.5) / 2)


def mean(values: Iterable[Optional[float]]) -> Optional[float]:
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def raw_subject_average(
    grades: Iterable[Grade],
    adjustments: Iterable[Adjustment],
    program: Program,
    period: int,
    subject: str,
) -> Optional[float]:
    subset = filter_grades(grades, program, period, subject)
    return raw_average(subset, find_adjustment(adjustments, program, period, subject))


def subject_average(
    grades: Iterable[Grade],
    adjustments: Iterable[Adjustment],
    program: Program,
    period: int,
    subject: str,
) -> Optional[float]:
    raw = raw_subject_average(grades, adjustments, program, period, subject)
    if raw is None:
        return None
    return round_half(raw)
