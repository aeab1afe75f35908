"""Game module for TTrYs.

Exports the rules engine and supporting classes:
- Piece, Point, Shape, Orientation: tetromino geometry and projections
- rotate_clockwise / rotate_counterclockwise: bounding-box rotation
- GameGrid, Cell, CellState: board storage, locking and row clearing
- Level, Theme, ScoringConfig, RowsCleared: difficulty and scoring tables
- Game: the orchestrator driving intents, ticks and placement
"""

from .pieces import Orientation, Piece, Point, Shape
from .rotation import rotate_clockwise, rotate_counterclockwise
from .rules import RowsCleared, ScoringConfig
from .grid import Cell, CellState, GameGrid
from .levels import Level, Theme, all_levels, level_queue
from .core import Action, Game, GameConfig, GameMode, GameStatus, Stats

__all__ = [
    "Orientation",
    "Piece",
    "Point",
    "Shape",
    "rotate_clockwise",
    "rotate_counterclockwise",
    "RowsCleared",
    "ScoringConfig",
    "Cell",
    "CellState",
    "GameGrid",
    "Level",
    "Theme",
    "all_levels",
    "level_queue",
    "Action",
    "Game",
    "GameConfig",
    "GameMode",
    "GameStatus",
    "Stats",
]
