from dataclasses import dataclass, field, replace
from typing import List, Optional

from gradetrack.core import regular, vocational
from gradetrack.core.averages import filter_grades, find_adjustment, raw_subject_average, subject_average
from gradetrack.core.policy import RuleStatus, VocationalStatus
from gradetrack.core.records import Adjustment, BucketKey, Grade, Program
from gradetrack.core.regular import FinalSubjectGrade


@dataclass
class GradebookState:
    """
    One user's grades and bonus/malus adjustments.

    Every read recomputes from the current lists; mutate through the helper
    methods and read again instead of patching earlier results.
    """

    grades: List[Grade] = field(default_factory=list)
    adjustments: List[Adjustment] = field(default_factory=list)

    @property
    def regular_grades(self) -> List[Grade]:
        return [g for g in self.grades if g.program == Program.REGULAR]

    @property
    def vocational_grades(self) -> List[Grade]:
        return [g for g in self.grades if g.program == Program.VOCATIONAL]

    def add_grade(self, grade: Grade) -> None:
        self.grades.append(grade)

    def remove_grade(self, grade_id: str) -> Grade:
        for idx, grade in enumerate(self.grades):
            if grade.id == grade_id:
                return self.grades.pop(idx)
        raise KeyError(f"Grade not found: {grade_id}")

    def set_adjustment(self, program: Program, period: int, subject: str, value: float) -> Optional[Adjustment]:
        """Create or replace the adjustment for a bucket. A value of 0 removes it."""
        key = BucketKey(program, period, subject)
        existing = next((a for a in self.adjustments if a.key == key), None)
        if value == 0:
            self.clear_adjustment(program, period, subject)
            return None
        if existing is None:
            created = Adjustment(value=value, period=period, subject=subject, program=program)
            self.adjustments.append(created)
            return created
        updated = replace(existing, value=value)
        self.adjustments[self.adjustments.index(existing)] = updated
        return updated

    def clear_adjustment(self, program: Program, period: int, subject: str) -> None:
        key = BucketKey(program, period, subject)
        self.adjustments = [a for a in self.adjustments if a.key != key]

    # ── KSH ──

    def grades_for(self, program: Program, period: int, subject: str) -> List[Grade]:
        return filter_grades(self.grades, program, period, subject)

    def adjustment_for(self, program: Program, period: int, subject: str) -> float:
        return find_adjustment(self.adjustments, program, period, subject)

    def raw_subject_average(self, period: int, subject: str, program: Program = Program.REGULAR) -> Optional[float]:
        return raw_subject_average(self.grades, self.adjustments, program, period, subject)

    def subject_average(self, period: int, subject: str, program: Program = Program.REGULAR) -> Optional[float]:
        return subject_average(self.grades, self.adjustments, program, period, subject)

    def semester_average(self, period: int) -> Optional[float]:
        return regular.semester_average(self.grades, self.adjustments, period)

    def semester_status(self, period: int) -> Optional[RuleStatus]:
        return regular.semester_status(self.grades, self.adjustments, period)

    def finals_average(self) -> Optional[float]:
        return regular.finals_average(self.grades)

    def overall_average(self) -> Optional[float]:
        return regular.overall_average(self.grades, self.adjustments)

    def final_subject_grade(self, subject: str) -> FinalSubjectGrade:
        return regular.final_subject_grade(self.grades, self.adjustments, subject)

    def overview_status(self) -> Optional[RuleStatus]:
        return regular.overview_status(self.grades, self.adjustments)

    # ── BZZ ──

    def vocational_status(self) -> VocationalStatus:
        return vocational.pass_fail(self.grades, self.adjustments)
