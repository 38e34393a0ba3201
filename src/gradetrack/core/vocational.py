from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from gradetrack.config.catalog import NORMAL_MODULES, PRACTICAL_MODULE, UK_MODULES, VOCATIONAL_PERIOD
from gradetrack.core.averages import mean, raw_subject_average, round_half, subject_average
from gradetrack.core.policy import VocationalStatus, evaluate_vocational
from gradetrack.core.records import Adjustment, Grade, Program


def module_raw_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment], module: str) -> Optional[float]:
    return raw_subject_average(grades, adjustments, Program.VOCATIONAL, VOCATIONAL_PERIOD, module)


def module_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment], module: str) -> Optional[float]:
    return subject_average(grades, adjustments, Program.VOCATIONAL, VOCATIONAL_PERIOD, module)


def module_averages(
    grades: Sequence[Grade], adjustments: Sequence[Adjustment], modules: Iterable[str]
) -> Dict[str, float]:
    result: Dict[str, float] = {}
    for module in modules:
        avg = module_average(grades, adjustments, module)
        if avg is not None:
            result[module] = avg
    return result


def tier_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment], modules: Iterable[str]) -> Optional[float]:
    avg = mean(module_averages(grades, adjustments, modules).values())
    if avg is None:
        return None
    return round_half(avg)


def normal_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Optional[float]:
    return tier_average(grades, adjustments, NORMAL_MODULES)


def uk_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Optional[float]:
    return tier_average(grades, adjustments, UK_MODULES)


def final_average(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Optional[float]:
    """Mean of the two rounded tier averages, kept unrounded for the 4.0 check."""
    return mean([normal_average(grades, adjustments), uk_average(grades, adjustments)])


def practical_grade(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> Optional[float]:
    # IPA is compared at full precision, no half-grade rounding.
    return module_raw_average(grades, adjustments, PRACTICAL_MODULE)


def pass_fail(grades: Sequence[Grade], adjustments: Sequence[Adjustment]) -> VocationalStatus:
    return evaluate_vocational(
        normal_average(grades, adjustments),
        uk_average(grades, adjustments),
        final_average(grades, adjustments),
        practical_grade(grades, adjustments),
    )
