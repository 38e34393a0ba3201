from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from enum import Enum
from typing import NamedTuple


class Program(str, Enum):
    REGULAR = "KSH"
    VOCATIONAL = "BZZ"


class BucketKey(NamedTuple):
    program: Program
    period: int
    subject: str


@dataclass(frozen=True)
class Grade:
    value: float
    weight: float
    period: int
    subject: str
    program: Program = Program.REGULAR
    description: str = ""
    date: Date | None = None
    id: str | None = None

    @property
    def key(self) -> BucketKey:
        return BucketKey(self.program, self.period, self.subject)


@dataclass(frozen=True)
class Adjustment:
    value: float
    period: int
    subject: str
    program: Program = Program.REGULAR
    id: str | None = None

    @property
    def key(self) -> BucketKey:
        return BucketKey(self.program, self.period, self.subject)
