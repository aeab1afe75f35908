"""Tests for the game orchestrator: intents, ticks, placement and level flow."""

import numpy as np
import pytest

from ttrys.game import (
    Action,
    Cell,
    CellState,
    Game,
    GameConfig,
    GameGrid,
    GameMode,
    GameStatus,
    Piece,
    Point,
    Shape,
)
from ttrys.game.grid import PREFILL_ROWS


def game_with(shape, origin, seed=1, **config):
    """Fresh game on an empty board with ``shape`` falling from ``origin``."""
    game = Game(GameConfig(random_seed=seed, **config))
    game.board = GameGrid()
    game.current_piece = Piece.spawn(shape, origin)
    assert game.board.apply(game.current_piece, game.piece_color(game.current_piece))
    return game


def fill_row(board, y, color=1, skip=()):
    for x in range(board.width):
        if x not in skip:
            board.set(x, y, Cell.locked(color))


def test_new_game_has_active_piece_and_preview():
    game = Game(GameConfig(random_seed=0))
    assert game.status == GameStatus.PLAYING
    assert game.board.count(CellState.ACTIVE) == 4
    assert game.board.count(CellState.LOCKED) == 0
    assert game.level.number == 1
    assert game.stats.score == 0
    for p in game.current_piece.points:
        assert game.board.get(p.x, p.y).state == CellState.ACTIVE


def test_same_seed_same_pieces():
    a = Game(GameConfig(random_seed=42))
    b = Game(GameConfig(random_seed=42))
    assert a.current_piece == b.current_piece
    assert a.next_piece == b.next_piece


def test_soft_drop_moves_piece_down():
    game = game_with(Shape.S, Point(4, 18))
    game.on_down()
    board = game.board
    for x, y in ((4, 17), (5, 17), (5, 18), (6, 18)):
        assert board.get(x, y).state == CellState.ACTIVE
    for x, y in ((4, 18), (5, 19), (6, 19)):
        assert board.get(x, y).state == CellState.EMPTY


def test_left_right_and_walls():
    game = game_with(Shape.O, Point(1, 10))
    game.on_left()
    assert game.current_piece.bounds()[0] == Point(0, 10)
    game.on_left()
    assert game.current_piece.bounds()[0] == Point(0, 10)

    game = game_with(Shape.O, Point(7, 10))
    game.on_right()
    assert game.current_piece.bounds()[1] == Point(9, 11)
    game.on_right()
    assert game.current_piece.bounds()[1] == Point(9, 11)


def test_move_blocked_by_locked_cell():
    game = game_with(Shape.O, Point(4, 10))
    game.board.set(3, 10, Cell.locked(1))
    game.on_left()
    assert game.current_piece.bounds()[0] == Point(4, 10)


def test_rotation_updates_board():
    game = game_with(Shape.T, Point(4, 10))
    game.on_rotate_clockwise()
    for p in game.current_piece.points:
        assert game.board.get(p.x, p.y).state == CellState.ACTIVE
    assert game.board.count(CellState.ACTIVE) == 4
    game.on_rotate_counterclockwise()
    assert set(game.current_piece.points) == set(Piece.spawn(Shape.T, Point(4, 10)).points)


def test_blocked_rotation_is_ignored():
    game = game_with(Shape.I, Point(0, 0))
    before = game.current_piece
    game.on_rotate_clockwise()
    assert game.current_piece == before


def test_piece_on_floor_locks_with_theme_color():
    game = game_with(Shape.I, Point(3, 0))
    next_piece = game.next_piece
    game.on_down()
    for x in range(3, 7):
        assert game.board.get(x, 0) == Cell.locked(game.level.theme.i)
    assert game.current_piece == next_piece
    assert game.board.count(CellState.ACTIVE) == 4


def test_clearing_a_row_scores_and_shifts():
    game = game_with(Shape.I, Point(3, 0))
    fill_row(game.board, 0, skip={3, 4, 5, 6})
    game.board.set(0, 1, Cell.locked(7))
    game.board.set(9, 2, Cell.locked(8))

    game.on_down()

    assert game.stats.rows_cleared == 1
    assert game.stats.score == 40
    assert game.board.get(0, 0) == Cell.locked(7)
    assert game.board.get(9, 1) == Cell.locked(8)
    assert game.board.count(CellState.LOCKED) == 2


def test_blocked_spawn_ends_game():
    game = game_with(Shape.I, Point(0, 0))
    for x in range(4, 8):
        for y in (18, 19):
            game.board.set(x, y, Cell.locked(1))

    game.on_down()

    assert game.game_over
    assert game.status == GameStatus.GAME_OVER
    before = game.board.state_array()
    piece = game.current_piece
    for action in (Action.LEFT, Action.RIGHT, Action.ROTATE_CW, Action.SOFT_DROP, Action.TICK):
        game.step(action)
    assert game.current_piece == piece
    assert np.array_equal(game.board.state_array(), before)


def test_tick_drops_after_ticks_per_drop():
    game = game_with(Shape.S, Point(4, 10))
    start = game.current_piece
    for _ in range(game.level.ticks_per_drop - 1):
        game.on_tick()
    assert game.current_piece == start
    game.on_tick()
    assert game.current_piece == start.project_down()


def test_level_advances_after_enough_rows():
    game = game_with(Shape.I, Point(3, 0))
    game.stats.rows_cleared = 9
    fill_row(game.board, 0, skip={3, 4, 5, 6})

    game.on_down()

    assert game.stats.rows_cleared == 10
    assert game.level.number == 2
    assert game.level.ticks_per_drop == 53
    assert len(game.remaining_levels) == 8
    assert not game.wants_to_quit


def test_tick_driven_placement_advances_level():
    game = game_with(Shape.I, Point(3, 0))
    game.stats.rows_cleared = 9
    fill_row(game.board, 0, skip={3, 4, 5, 6})

    for _ in range(game.level.ticks_per_drop):
        game.on_tick()

    assert game.stats.rows_cleared == 10
    assert game.stats.score == 40
    assert game.level.number == 2

    # The freshly spawned piece now falls at the level-2 cadence
    spawned = game.current_piece
    for _ in range(game.level.ticks_per_drop - 1):
        game.on_tick()
    assert game.current_piece == spawned
    game.on_tick()
    assert game.current_piece == spawned.project_down()


def test_passing_last_level_quits():
    game = game_with(Shape.I, Point(3, 0), initial_level=9)
    game.stats.rows_cleared = 99
    fill_row(game.board, 0, skip={3, 4, 5, 6})

    game.on_down()

    assert game.wants_to_quit
    assert game.status == GameStatus.QUIT
    assert game.level.number == 10


def test_pause_freezes_game():
    game = game_with(Shape.O, Point(4, 10))
    game.step(Action.PAUSE)
    assert game.status == GameStatus.PAUSED
    game.on_left()
    game.on_down()
    for _ in range(100):
        game.on_tick()
    assert game.current_piece == Piece.spawn(Shape.O, Point(4, 10))
    assert game.level.counter == 0

    game.step(Action.PAUSE)
    game.on_left()
    assert game.current_piece.bounds()[0] == Point(3, 10)


def test_pause_ignored_after_game_over():
    game = game_with(Shape.I, Point(0, 0))
    for x in range(4, 8):
        for y in (18, 19):
            game.board.set(x, y, Cell.locked(1))
    game.on_down()
    assert game.game_over

    game.toggle_pause()
    assert not game.paused
    assert game.status == GameStatus.GAME_OVER


def test_quit_action():
    game = Game(GameConfig(random_seed=3))
    game.step(Action.QUIT)
    assert game.wants_to_quit
    assert game.snapshot()["status"] == GameStatus.QUIT


def test_none_action_changes_nothing():
    game = game_with(Shape.T, Point(4, 10))
    game.step(Action.NONE)
    assert game.current_piece == Piece.spawn(Shape.T, Point(4, 10))


def test_b_type_prefills_bottom_rows():
    game = Game(GameConfig(mode=GameMode.B_TYPE, random_seed=5))
    locked = game.board.states == CellState.LOCKED
    assert locked[:PREFILL_ROWS].any()
    assert not locked[PREFILL_ROWS:].any()


def test_get_state_marks_active_negative():
    game = game_with(Shape.O, Point(0, 5))
    game.board.set(9, 0, Cell.locked(11))
    state = game.get_state()
    assert state[0, 9] == 11
    assert state[5, 0] == -game.level.theme.o
    assert state[19, 9] == 0


def test_snapshot_fields():
    game = Game(GameConfig(random_seed=2))
    snap = game.snapshot()
    assert snap["level"] == 1
    assert snap["next_shape"] == game.next_piece.shape
    assert snap["status"] == GameStatus.PLAYING
    assert not snap["paused"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"height": -1},
        {"initial_level": 10},
        {"initial_level": -1},
        {"width": 4},
        {"spawn_x": 7},
        {"spawn_x": -1},
        {"spawn_y": 19},
        {"height": 2, "spawn_y": 1},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_small_board_with_fitting_spawn():
    game = Game(GameConfig(width=4, height=4, spawn_x=0, spawn_y=2, random_seed=0))
    assert not game.game_over
    assert game.board.count(CellState.ACTIVE) == 4
