from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Tuple

from .pieces import Shape
from .rules import ScoringConfig

NUM_LEVELS = 10
MAX_TICKS_PER_DROP = 61


@dataclass(frozen=True)
class Theme:
    """xterm-256 color index for each shape."""

    l: int
    j: int
    z: int
    s: int
    i: int
    o: int
    t: int

    def color_for(self, shape: Shape) -> int:
        return getattr(self, shape.name.lower())

    def colors(self) -> Tuple[int, ...]:
        return tuple(self.color_for(shape) for shape in Shape)


THEMES: Tuple[Theme, ...] = (
    Theme(l=214, j=12, z=9, s=2, i=14, o=11, t=56),
    Theme(l=166, j=61, z=88, s=64, i=39, o=227, t=57),
    Theme(l=172, j=69, z=160, s=76, i=45, o=229, t=53),
    Theme(l=178, j=27, z=161, s=78, i=41, o=227, t=55),
    Theme(l=167, j=20, z=124, s=71, i=51, o=220, t=52),
    Theme(l=215, j=153, z=163, s=34, i=44, o=184, t=99),
    Theme(l=130, j=62, z=196, s=10, i=50, o=190, t=92),
    Theme(l=58, j=61, z=52, s=65, i=75, o=101, t=96),
    Theme(l=136, j=67, z=125, s=119, i=123, o=185, t=183),
    Theme(l=179, j=147, z=162, s=144, i=195, o=230, t=225),
)


@dataclass
class Level:
    number: int
    ticks_per_drop: int
    rows_to_pass: int
    scoring: ScoringConfig
    theme: Theme
    counter: int = 0

    @classmethod
    def create(cls, number: int) -> "Level":
        return cls(
            number=number,
            ticks_per_drop=MAX_TICKS_PER_DROP - number * 4,
            rows_to_pass=number * 10,
            scoring=ScoringConfig.for_level(number),
            theme=THEMES[number - 1],
        )

    def tick(self) -> bool:
        """Advance the drop clock; True means the piece should fall one row now."""
        self.counter += 1
        if self.counter < self.ticks_per_drop:
            return False
        self.counter = 0
        return True


def all_levels() -> List[Level]:
    return [Level.create(n) for n in range(1, NUM_LEVELS + 1)]


def level_queue(initial_index: int = 0) -> Tuple[Level, Deque[Level]]:
    """Return the starting level and the queue of levels that follow it."""
    levels = all_levels()
    if not 0 <= initial_index < len(levels):
        raise ValueError(f"initial level index must be in 0..{len(levels) - 1}, got {initial_index}")
    return levels[initial_index], deque(levels[initial_index + 1 :])
