"""Bounding-box rotation for tetromino pieces.

A piece is rotated by writing its four points into the smallest matrix that
encloses them, turning that matrix a quarter, and reading the occupied cells
back out in row-major order. Turning the box re-anchors the piece to the box's
lower-left corner, which drifts differently for each shape and orientation, so
every rotation is shifted by a per-(shape, orientation) correction taken from
the tables below. The tables are keyed by the orientation *before* rotating.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Tuple

import numpy as np

from .pieces import Orientation, Piece, Point, Shape

Offset = Tuple[int, int]
OffsetTable = Dict[Tuple[Shape, Orientation], Offset]

ONE, TWO, THREE, FOUR = Orientation.ONE, Orientation.TWO, Orientation.THREE, Orientation.FOUR

_RICKY_CW = {TWO: (0, 1), THREE: (1, -1), FOUR: (-1, 0)}
_RICKY_CCW = {ONE: (1, 0), THREE: (0, -1), FOUR: (-1, 1)}
# S, Z and I only have two distinct looks, so 1/3 and 2/4 share entries.
_SKEW = {ONE: (1, 0), TWO: (-1, 0), THREE: (1, 0), FOUR: (-1, 0)}
_STRAIGHT = {ONE: (2, -1), TWO: (-2, 1), THREE: (2, -1), FOUR: (-2, 1)}


def _table(entries: Dict[Shape, Dict[Orientation, Offset]]) -> OffsetTable:
    return {(shape, o): d for shape, row in entries.items() for o, d in row.items()}


CW_OFFSETS: OffsetTable = _table({
    Shape.L: _RICKY_CW,
    Shape.J: _RICKY_CW,
    Shape.T: _RICKY_CW,
    Shape.Z: _SKEW,
    Shape.S: _SKEW,
    Shape.I: _STRAIGHT,
})

CCW_OFFSETS: OffsetTable = _table({
    Shape.L: _RICKY_CCW,
    Shape.J: _RICKY_CCW,
    Shape.T: _RICKY_CCW,
    Shape.Z: _SKEW,
    Shape.S: _SKEW,
    Shape.I: _STRAIGHT,
})


def bounding_matrix(piece: Piece) -> np.ndarray:
    """Matrix of shape (height, width) with 1..4 at the piece's points.

    Rows run bottom-up like the board: ``m[y, x]`` is relative to the piece's
    lower-left corner.
    """
    lower_left, upper_right = piece.bounds()
    width = upper_right.x - lower_left.x + 1
    height = upper_right.y - lower_left.y + 1
    m = np.zeros((height, width), dtype=np.int8)
    for i, p in enumerate(piece.points):
        m[p.y - lower_left.y, p.x - lower_left.x] = i + 1
    return m


def _turn(m: np.ndarray, clockwise: bool) -> np.ndarray:
    # rot90 turns counter-clockwise as printed top-down; our rows are
    # bottom-up, so k=1 is a clockwise turn on the board.
    return np.rot90(m, 1 if clockwise else -1)


def extract_points(m: np.ndarray, x_offset: int, y_offset: int) -> Tuple[Point, ...]:
    return tuple(Point(int(x) + x_offset, int(y) + y_offset) for y, x in np.argwhere(m > 0))


def _anchor(piece: Piece, table: OffsetTable) -> Optional[Offset]:
    lower_left, _ = piece.bounds()
    dx, dy = table.get((piece.shape, piece.orientation), (0, 0))
    x, y = lower_left.x + dx, lower_left.y + dy
    if x < 0 or y < 0:
        return None
    return x, y


def _rotate(piece: Piece, clockwise: bool) -> Optional[Piece]:
    anchor = _anchor(piece, CW_OFFSETS if clockwise else CCW_OFFSETS)
    if anchor is None:
        return None
    turned = _turn(bounding_matrix(piece), clockwise)
    orientation = piece.orientation.next() if clockwise else piece.orientation.prev()
    return replace(piece, points=extract_points(turned, *anchor), orientation=orientation)


def rotate_clockwise(piece: Piece) -> Optional[Piece]:
    return _rotate(piece, clockwise=True)


def rotate_counterclockwise(piece: Piece) -> Optional[Piece]:
    return _rotate(piece, clockwise=False)
