from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Sequence

import numpy as np

from .pieces import Piece, Point
from .rules import RowsCleared

logger = logging.getLogger(__name__)

WIDTH = 10
HEIGHT = 20
EMPTY_COLOR = 15
PREFILL_ROWS = HEIGHT - 15
PREFILL_DENSITY = 1.0 / 3.0


class CellState(IntEnum):
    EMPTY = 0
    ACTIVE = 1
    LOCKED = 2


@dataclass(frozen=True)
class Cell:
    state: CellState
    color: int = EMPTY_COLOR

    @classmethod
    def empty(cls) -> "Cell":
        return cls(CellState.EMPTY)

    @classmethod
    def active(cls, color: int) -> "Cell":
        return cls(CellState.ACTIVE, color)

    @classmethod
    def locked(cls, color: int) -> "Cell":
        return cls(CellState.LOCKED, color)


class GameGrid:
    """Fixed-size board of cells.

    Row 0 is the bottom of the board. ``states[y, x]`` holds a ``CellState``
    and ``colors[y, x]`` the display color index of the same cell. At most one
    piece is painted ACTIVE at a time.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.states = np.zeros((self.height, self.width), dtype=np.int8)
        self.colors = np.full((self.height, self.width), EMPTY_COLOR, dtype=np.uint8)

    @classmethod
    def random_partial_fill(
        cls,
        rng: random.Random,
        colors: Sequence[int],
        width: int = WIDTH,
        height: int = HEIGHT,
    ) -> "GameGrid":
        """Board for the B-type start: the lowest rows are scattered with locked cells."""
        grid = cls(width, height)
        for y in range(min(PREFILL_ROWS, grid.height)):
            for x in range(grid.width):
                if rng.random() < PREFILL_DENSITY:
                    grid.set(x, y, Cell.locked(rng.choice(colors)))
        logger.debug("pre-filled %d cells", int(np.sum(grid.states == CellState.LOCKED)))
        return grid

    def reset(self) -> None:
        self.states.fill(CellState.EMPTY)
        self.colors.fill(EMPTY_COLOR)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[Cell]:
        if not self.is_inside(x, y):
            return None
        return Cell(CellState(int(self.states[y, x])), int(self.colors[y, x]))

    def set(self, x: int, y: int, cell: Cell) -> Optional[Cell]:
        """Write ``cell`` and return the previous one, or None when out of range."""
        previous = self.get(x, y)
        if previous is None:
            return None
        self.states[y, x] = cell.state
        self.colors[y, x] = cell.color
        return previous

    def can_apply(self, points: Iterable[Point]) -> bool:
        for p in points:
            if not self.is_inside(p.x, p.y):
                return False
            if self.states[p.y, p.x] == CellState.LOCKED:
                return False
        return True

    def _clear_active(self) -> None:
        active = self.states == CellState.ACTIVE
        self.states[active] = CellState.EMPTY
        self.colors[active] = EMPTY_COLOR

    def apply(self, piece: Piece, color: int) -> bool:
        """Paint ``piece`` as the falling overlay, replacing the previous one."""
        if not self.can_apply(piece.points):
            return False
        self._clear_active()
        for p in piece.points:
            self.set(p.x, p.y, Cell.active(color))
        return True

    def settle(self, points: Iterable[Point], color: int) -> bool:
        points = list(points)
        if not self.can_apply(points):
            return False
        for p in points:
            self.set(p.x, p.y, Cell.locked(color))
        return True

    def clear_full_rows(self) -> RowsCleared:
        full = np.all(self.states == CellState.LOCKED, axis=1)
        count = int(full.sum())
        if count == 0:
            return RowsCleared.ZERO

        # Number of full rows strictly below each row.
        drop = np.cumsum(full) - full
        locked = (self.states == CellState.LOCKED) & ~full[:, None]
        ys, xs = np.nonzero(locked)
        moved_colors = self.colors[ys, xs].copy()

        self.states[full] = CellState.EMPTY
        self.colors[full] = EMPTY_COLOR
        self.states[ys, xs] = CellState.EMPTY
        self.colors[ys, xs] = EMPTY_COLOR

        targets = ys - drop[ys]
        self.states[targets, xs] = CellState.LOCKED
        self.colors[targets, xs] = moved_colors

        logger.debug("cleared rows %s", np.flatnonzero(full).tolist())
        return RowsCleared(min(count, int(RowsCleared.FOUR)))

    def state_array(self) -> np.ndarray:
        return self.states.copy()

    def color_array(self) -> np.ndarray:
        return self.colors.copy()

    def count(self, state: CellState) -> int:
        return int(np.sum(self.states == state))

    def render_text(self) -> str:
        glyphs = {CellState.EMPTY: " .", CellState.ACTIVE: "[]", CellState.LOCKED: "##"}
        lines = []
        for row in self.states[::-1]:
            lines.append("".join(glyphs[CellState(int(v))] for v in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"GameGrid({self.width}x{self.height}, locked={self.count(CellState.LOCKED)})"
