from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional, Tuple


class Shape(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class Orientation(Enum):
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4

    def next(self) -> "Orientation":
        return _NEXT[self]

    def prev(self) -> "Orientation":
        return _PREV[self]


_NEXT = {
    Orientation.ONE: Orientation.TWO,
    Orientation.TWO: Orientation.THREE,
    Orientation.THREE: Orientation.FOUR,
    Orientation.FOUR: Orientation.ONE,
}
_PREV = {after: before for before, after in _NEXT.items()}


@dataclass(frozen=True, order=True)
class Point:
    x: int
    y: int


Points = Tuple[Point, Point, Point, Point]


# Offsets from the spawn origin, y grows upward.
SPAWN_LAYOUTS: Dict[Shape, Tuple[Tuple[int, int], ...]] = {
    #   [][][]
    #   []
    Shape.L: ((0, 0), (0, 1), (1, 1), (2, 1)),
    #   [][][]
    #       []
    Shape.J: ((2, 0), (0, 1), (1, 1), (2, 1)),
    #   [][]
    #     [][]
    Shape.Z: ((1, 0), (2, 0), (0, 1), (1, 1)),
    #     [][]
    #   [][]
    Shape.S: ((0, 0), (1, 0), (1, 1), (2, 1)),
    #   [][][][]
    Shape.I: ((0, 0), (1, 0), (2, 0), (3, 0)),
    #   [][][]
    #     []
    Shape.T: ((1, 0), (0, 1), (1, 1), (2, 1)),
    #   [][]
    #   [][]
    Shape.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
}


@dataclass(frozen=True)
class Piece:
    shape: Shape
    points: Points
    orientation: Orientation = Orientation.ONE

    @classmethod
    def spawn(cls, shape: Shape, origin: Point) -> "Piece":
        points = tuple(Point(origin.x + dx, origin.y + dy) for dx, dy in SPAWN_LAYOUTS[shape])
        return cls(shape=shape, points=points)  # type: ignore[arg-type]

    @classmethod
    def random(cls, origin: Point, rng: Optional[random.Random] = None) -> "Piece":
        shape = (rng or random).choice(list(Shape))
        return cls.spawn(shape, origin)

    def _map_points(self, f: Callable[[Point], Optional[Point]]) -> Optional["Piece"]:
        moved = []
        for p in self.points:
            q = f(p)
            if q is None:
                return None
            moved.append(q)
        return replace(self, points=tuple(moved))

    def project_left(self) -> Optional["Piece"]:
        return self._map_points(lambda p: Point(p.x - 1, p.y) if p.x > 0 else None)

    def project_right(self, max_x: int = 9) -> Optional["Piece"]:
        return self._map_points(lambda p: Point(p.x + 1, p.y) if p.x < max_x else None)

    def project_down(self) -> Optional["Piece"]:
        return self._map_points(lambda p: Point(p.x, p.y - 1) if p.y > 0 else None)

    def bounds(self) -> Tuple[Point, Point]:
        """Return the (lower_left, upper_right) corners of the piece."""
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return Point(min(xs), min(ys)), Point(max(xs), max(ys))
