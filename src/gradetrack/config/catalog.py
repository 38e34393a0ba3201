from dataclasses import dataclass
from typing import Dict, List, Tuple

MIN_GRADE = 1.0
MAX_GRADE = 6.0
PASS_THRESHOLD = 4.0
MAX_FAILING_SUBJECTS = 2
MAX_NEGATIVE_POINTS = 2.0

# ─── KSH (regular curriculum) ───────────────────────────────────

TOTAL_PERIODS = 6
FINALS_PERIOD = 7

SUBJECTS: Tuple[str, ...] = (
    "German",
    "French",
    "English",
    "Math",
    "WR",
    "FrW",
    "History",
    "Science",
    "IDAF",
    "IDPA",
)

_CORE = ("German", "French", "English", "Math", "WR", "FrW")

PERIOD_SUBJECTS: Dict[int, Tuple[str, ...]] = {
    1: _CORE + ("History",),
    2: _CORE + ("History",),
    3: _CORE + ("History", "Science", "IDAF"),
    4: _CORE + ("History", "Science", "IDAF"),
    5: _CORE + ("Science",),
    6: _CORE + ("Science", "IDPA"),
}

FINALS_ENTRIES: Dict[str, Tuple[str, ...]] = {
    "German": ("German (Oral)", "German (Written)"),
    "French": ("French (Oral)", "French (Written)"),
    "English": ("English (Oral)", "English (Written)"),
    "Math": ("Math (Written)",),
    "WR": ("WR (Written)",),
    "FrW": ("FrW (Written)",),
}

FINALS_SUBJECT_KEYS: Tuple[str, ...] = tuple(
    entry for entries in FINALS_ENTRIES.values() for entry in entries
)


@dataclass(frozen=True)
class TerminalSubstitute:
    subject: str
    period: int


# The substitute's subject average in the given period stands in for the finals grade.
TERMINAL_SUBSTITUTES: Dict[str, TerminalSubstitute] = {
    "IDAF": TerminalSubstitute(subject="IDPA", period=6),
}

OVERVIEW_SUBJECTS: Tuple[str, ...] = tuple(
    s for s in SUBJECTS if s not in {sub.subject for sub in TERMINAL_SUBSTITUTES.values()}
)

# ─── BZZ (vocational modules) ───────────────────────────────────

VOCATIONAL_PERIOD = 1

NORMAL_MODULES: Tuple[str, ...] = (
    "431", "117", "319", "162", "114", "164", "293", "231",
    "320", "165", "322", "122", "254", "346", "426", "347",
    "323", "450", "306", "183", "324", "321", "241", "245",
)

UK_MODULES: Tuple[str, ...] = ("187", "106", "294", "295", "210", "335", "223")

PRACTICAL_MODULE = "IPA"

ALL_MODULES: Tuple[str, ...] = NORMAL_MODULES + UK_MODULES + (PRACTICAL_MODULE,)


def subjects_for_period(period: int) -> List[str]:
    if period == FINALS_PERIOD:
        return list(FINALS_SUBJECT_KEYS)
    return list(PERIOD_SUBJECTS.get(period, ()))


def periods_for_subject(subject: str) -> List[int]:
    """Regular periods (1-6) in which a subject is taught."""
    return [p for p in range(1, TOTAL_PERIODS + 1) if subject in PERIOD_SUBJECTS[p]]


def is_module(subject: str) -> bool:
    return subject in ALL_MODULES

