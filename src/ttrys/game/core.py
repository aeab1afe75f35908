from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, Optional

import numpy as np

from .grid import HEIGHT, WIDTH, CellState, GameGrid
from .levels import NUM_LEVELS, Level, level_queue
from .pieces import Piece, Point
from .rotation import rotate_clockwise, rotate_counterclockwise
from .rules import RowsCleared

logger = logging.getLogger(__name__)


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    SOFT_DROP = 5
    TICK = 6
    PAUSE = 7
    QUIT = 8


class GameMode(Enum):
    A_TYPE = "a"
    B_TYPE = "b"


class GameStatus(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    QUIT = "quit"


@dataclass
class GameConfig:
    width: int = WIDTH
    height: int = HEIGHT
    spawn_x: int = 4
    spawn_y: int = 18
    mode: GameMode = GameMode.A_TYPE
    initial_level: int = 0
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board size must be positive, got {self.width}x{self.height}")
        # Widest spawn layout is 4 columns by 2 rows
        if not (0 <= self.spawn_x and self.spawn_x + 3 < self.width
                and 0 <= self.spawn_y and self.spawn_y + 1 < self.height):
            raise ValueError(
                f"spawn point ({self.spawn_x}, {self.spawn_y}) does not fit a {self.width}x{self.height} board"
            )
        if not 0 <= self.initial_level < NUM_LEVELS:
            raise ValueError(f"initial_level must be in 0..{NUM_LEVELS - 1}, got {self.initial_level}")

    @property
    def spawn_point(self) -> Point:
        return Point(self.spawn_x, self.spawn_y)


@dataclass
class Stats:
    score: int = 0
    rows_cleared: int = 0

    def record(self, rows: RowsCleared, points: int) -> None:
        self.rows_cleared += int(rows)
        self.score += points


class Game:
    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.random_seed)
        self.level, self.remaining_levels = level_queue(self.config.initial_level)
        self.stats = Stats()
        self.paused = False
        self.game_over = False
        self.wants_to_quit = False
        self.board = self._new_board()
        self.current_piece = self._random_piece()
        self.next_piece = self._random_piece()
        self._spawn(self.current_piece)

    def _new_board(self) -> GameGrid:
        if self.config.mode == GameMode.B_TYPE:
            return GameGrid.random_partial_fill(
                self.rng, self.level.theme.colors(), self.config.width, self.config.height
            )
        return GameGrid(self.config.width, self.config.height)

    def _random_piece(self) -> Piece:
        return Piece.random(self.config.spawn_point, self.rng)

    def _spawn(self, piece: Piece) -> None:
        # Immediate collision check: if the spawn point is blocked, the round is over
        if not self.board.apply(piece, self.piece_color(piece)):
            logger.info("spawn blocked for %s, game over (score=%d)", piece.shape.name, self.stats.score)
            self.game_over = True

    @property
    def status(self) -> GameStatus:
        if self.wants_to_quit:
            return GameStatus.QUIT
        if self.game_over:
            return GameStatus.GAME_OVER
        if self.paused:
            return GameStatus.PAUSED
        return GameStatus.PLAYING

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    def piece_color(self, piece: Piece) -> int:
        return self.level.theme.color_for(piece.shape)

    # Intents

    def on_left(self) -> None:
        self._attempt(Piece.project_left)

    def on_right(self) -> None:
        self._attempt(lambda p: p.project_right(self.board.width - 1))

    def on_rotate_clockwise(self) -> None:
        self._attempt(rotate_clockwise)

    def on_rotate_counterclockwise(self) -> None:
        self._attempt(rotate_counterclockwise)

    def on_down(self) -> None:
        if not self.is_playing:
            return
        if not self._attempt(Piece.project_down):
            self._piece_placed()

    def on_tick(self) -> None:
        if not self.is_playing:
            return
        if self.level.tick():
            self.on_down()

    def toggle_pause(self) -> None:
        if self.game_over:
            return
        self.paused = not self.paused
        logger.debug("paused=%s", self.paused)

    def quit(self) -> None:
        logger.info("quit requested")
        self.wants_to_quit = True

    def _attempt(self, project: Callable[[Piece], Optional[Piece]]) -> bool:
        if not self.is_playing:
            return False
        candidate = project(self.current_piece)
        if candidate is None:
            return False
        if not self.board.apply(candidate, self.piece_color(candidate)):
            return False
        self.current_piece = candidate
        return True

    def _piece_placed(self) -> None:
        piece = self.current_piece
        self.board.settle(piece.points, self.piece_color(piece))
        rows = self.board.clear_full_rows()
        points = self.level.scoring.score(rows)
        self.stats.record(rows, points)
        logger.debug("locked %s, cleared %d row(s) for %d", piece.shape.name, int(rows), points)
        self._update_level()

        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()
        self._spawn(self.current_piece)

    def _update_level(self) -> None:
        if self.stats.rows_cleared < self.level.rows_to_pass:
            return
        if not self.remaining_levels:
            logger.info("final level passed with %d rows, quitting", self.stats.rows_cleared)
            self.wants_to_quit = True
            return
        self.level = self.remaining_levels.popleft()
        logger.debug("advanced to level %d", self.level.number)

    def step(self, action: Action) -> None:
        handlers: Dict[Action, Callable[[], None]] = {
            Action.LEFT: self.on_left,
            Action.RIGHT: self.on_right,
            Action.ROTATE_CW: self.on_rotate_clockwise,
            Action.ROTATE_CCW: self.on_rotate_counterclockwise,
            Action.SOFT_DROP: self.on_down,
            Action.TICK: self.on_tick,
            Action.PAUSE: self.toggle_pause,
            Action.QUIT: self.quit,
        }
        handler = handlers.get(Action(action))
        if handler is not None:
            handler()

    # Queries

    def get_state(self) -> np.ndarray:
        # Locked cells as their color, the falling piece negated
        state = self.board.color_array().astype(np.int16)
        states = self.board.states
        state[states == CellState.EMPTY] = 0
        state[states == CellState.ACTIVE] *= -1
        return state

    def snapshot(self) -> Dict[str, Any]:
        return {
            "score": self.stats.score,
            "rows_cleared": self.stats.rows_cleared,
            "level": self.level.number,
            "next_shape": self.next_piece.shape,
            "next_points": self.next_piece.points,
            "paused": self.paused,
            "game_over": self.game_over,
            "wants_to_quit": self.wants_to_quit,
            "status": self.status,
        }
