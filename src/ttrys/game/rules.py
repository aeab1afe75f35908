from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class RowsCleared(IntEnum):
    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


@dataclass(frozen=True)
class ScoringConfig:
    one: int
    two: int
    three: int
    four: int

    @classmethod
    def for_level(cls, number: int) -> "ScoringConfig":
        return cls(one=number * 40, two=number * 100, three=number * 300, four=number * 1200)

    def score(self, rows_cleared: RowsCleared) -> int:
        if rows_cleared == RowsCleared.ZERO:
            return 0
        return (self.one, self.two, self.three, self.four)[int(rows_cleared) - 1]
