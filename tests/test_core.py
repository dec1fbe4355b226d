import random

import numpy as np
import pytest

from conftest import fill_row
from tetromino.game import Direction, GameState, Key, Piece, ShapeType, Tetris
from tetromino.game.config import BLANK


def place(game: Tetris, piece: Piece) -> Piece:
    game.falling_piece = piece
    return piece


def test_first_update_promotes_next_piece(game):
    queued = game.next_piece
    assert game.falling_piece is None
    assert game.update(0.0) == GameState.RUN
    assert game.falling_piece is queued
    assert game.next_piece is not queued


def test_spawn_sequence_is_reproducible():
    a = Tetris(rng=random.Random(5))
    b = Tetris(rng=random.Random(5))
    assert a.next_piece == b.next_piece
    a.update(0.0)
    b.update(0.0)
    assert a.falling_piece == b.falling_piece
    assert a.next_piece == b.next_piece


def test_move_left_and_right(game):
    piece = place(game, Piece(ShapeType.O, x=3, y=0))
    game.update(0.0, pressed=Key.LEFT)
    assert piece.x == 2
    assert game.moving == Direction.LEFT
    game.update(0.0, pressed=Key.D)
    assert piece.x == 3
    assert game.moving == Direction.RIGHT


def test_move_into_wall_is_ignored(game):
    piece = place(game, Piece(ShapeType.O, x=-1, y=0))
    game.update(0.0, pressed=Key.A)
    assert piece.x == -1
    assert game.moving == Direction.NONE


def test_rotation_into_wall_is_rolled_back(game):
    # Vertical I hugging the right wall cannot turn horizontal.
    place(game, Piece(ShapeType.I, rotation=0, x=7, y=0))
    game.update(0.0, pressed=Key.UP)
    piece = game.falling_piece
    assert piece.rotation == 0
    assert (piece.x, piece.y) == (7, 0)


def test_rotation_commits_when_valid(game):
    place(game, Piece(ShapeType.T, rotation=0, x=3, y=5))
    game.update(0.0, pressed=Key.W)
    assert game.falling_piece.rotation == 1
    game.update(0.0, pressed=Key.Q)
    game.update(0.0, pressed=Key.Q)
    assert game.falling_piece.rotation == 3
    assert (game.falling_piece.x, game.falling_piece.y) == (3, 5)


def test_rotate_backward_blocked_by_stack(game):
    place(game, Piece(ShapeType.I, rotation=1, x=3, y=10))
    # Vertical I at rotation 0 would cover column 5, rows 10-13.
    game.board.grid[13, 5] = 0
    game.update(0.0, pressed=Key.Q)
    assert game.falling_piece.rotation == 1


def test_hard_drop_on_empty_board(game):
    place(game, Piece(ShapeType.O, x=3, y=0))
    game.update(0.0, pressed=Key.SPACE)
    piece = game.falling_piece
    assert piece.y == 16
    assert game.board.is_valid_position(piece)
    assert not game.board.is_valid_position(piece, 0, 1)
    assert game.moving == Direction.NONE


def test_hard_drop_next_to_floor_does_not_move(game):
    place(game, Piece(ShapeType.O, x=3, y=16))
    game.update(0.0, pressed=Key.SPACE)
    assert game.falling_piece.y == 16


def test_hard_drop_lands_on_stack(game):
    fill_row(game.board, 19, skip=(0,))
    place(game, Piece(ShapeType.O, x=3, y=0))
    assert game.hard_drop() == 15
    assert game.falling_piece.y == 15


def test_soft_drop_and_auto_repeat(game):
    piece = place(game, Piece(ShapeType.O, x=3, y=0))
    game.update(0.0, pressed=Key.DOWN)
    assert piece.y == 1
    assert game.moving == Direction.DOWN
    game.update(0.05)
    assert piece.y == 1
    game.update(0.11)
    assert piece.y == 2
    assert game.last_move_down_time == 0.11
    game.update(0.15, released=Key.DOWN)
    assert game.moving == Direction.NONE
    game.update(0.24)
    assert piece.y == 2


def test_down_press_resets_timer_even_when_blocked(game):
    place(game, Piece(ShapeType.O, x=3, y=16))
    game.update(0.1, pressed=Key.DOWN)
    assert game.falling_piece.y == 16
    assert game.last_move_down_time == 0.1
    assert game.moving == Direction.DOWN


def test_sideways_auto_repeat(game):
    piece = place(game, Piece(ShapeType.O, x=3, y=0))
    game.update(0.0, pressed=Key.LEFT)
    assert piece.x == 2
    game.update(0.16)
    assert piece.x == 1
    game.update(0.2)
    assert piece.x == 1
    game.update(0.2, released=Key.LEFT)
    assert game.moving == Direction.NONE
    game.update(0.5)
    assert piece.x == 1


def test_auto_repeat_stops_at_wall(game):
    piece = place(game, Piece(ShapeType.O, x=6, y=0))
    game.update(0.0, pressed=Key.RIGHT)
    assert piece.x == 7
    game.update(0.16)
    game.update(0.32)
    assert piece.x == 7


def test_gravity_moves_piece_down(game):
    piece = place(game, Piece(ShapeType.O, x=3, y=0))
    game.update(0.2)
    assert piece.y == 0
    game.update(0.26)
    assert piece.y == 1
    assert game.last_fall_time == 0.26


def test_landing_merges_piece_and_respawns(game):
    place(game, Piece(ShapeType.O, x=3, y=16, color=2))
    game.moving = Direction.DOWN
    assert game.update(0.3) == GameState.RUN
    assert game.falling_piece is None
    assert game.moving == Direction.NONE
    assert game.board.cell(4, 18) == 2
    assert game.board.cell(5, 19) == 2
    assert game.score == 0

    game.update(0.31)
    assert game.falling_piece is not None
    assert game.last_fall_time == 0.31


def test_landing_clears_line_and_scores(game):
    fill_row(game.board, 19, color=1, skip=(4, 5))
    place(game, Piece(ShapeType.O, x=3, y=16, color=3))
    game.update(0.3)
    assert game.score == 1
    assert game.lines_cleared_total == 1
    assert game.level == 1
    # The O's top half slid down into the cleared row.
    assert game.board.cell(4, 19) == 3
    assert game.board.cell(5, 19) == 3
    assert int((game.board.grid != BLANK).sum()) == 2


def test_level_and_fall_interval_follow_score(game):
    game.score = 9
    fill_row(game.board, 19, skip=(4, 5))
    place(game, Piece(ShapeType.O, x=3, y=16))
    game.update(0.3)
    assert game.score == 10
    assert game.level == 2
    assert game.fall_interval == pytest.approx(0.23)


def test_spawn_into_filled_board_is_game_over(game):
    for y in range(4):
        fill_row(game.board, y, skip=(9,))
    before = game.board.clone_state()

    assert game.update(0.0) == GameState.GAME_OVER
    assert game.game_over
    np.testing.assert_array_equal(game.board.grid, before)
    assert game.update(1.0, pressed=Key.SPACE) == GameState.GAME_OVER
    np.testing.assert_array_equal(game.board.grid, before)


def test_pause_request_does_not_mutate(game):
    piece = place(game, Piece(ShapeType.O, x=3, y=0))
    assert game.update(5.0, pressed=Key.P) == GameState.PAUSED
    assert (piece.x, piece.y) == (3, 0)
    assert game.last_fall_time == 0.0


def test_resume_restarts_timers(game):
    piece = place(game, Piece(ShapeType.O, x=3, y=0))
    game.resume(10.0)
    game.update(10.1)
    assert piece.y == 0
    assert game.last_fall_time == 10.0


def test_unknown_key_is_ignored(game):
    piece = place(game, Piece(ShapeType.O, x=3, y=0))
    assert game.update(0.0, pressed=Key.OTHER, released=Key.OTHER) == GameState.RUN
    assert (piece.x, piece.y, piece.rotation) == (3, 0, 0)


def test_snapshot_is_detached(game):
    game.update(0.0)
    snap = game.snapshot()
    assert snap.state == GameState.RUN
    assert snap.score == 0 and snap.level == 1
    snap.falling_piece.x += 3
    assert game.falling_piece.x != snap.falling_piece.x
    with pytest.raises(ValueError):
        snap.board[0, 0] = 1
    assert snap.next_piece == game.next_piece


def test_get_state_overlays_falling_piece(game):
    place(game, Piece(ShapeType.O, x=3, y=-1, color=2))
    state = game.get_state()
    assert state[1, 4] == 2 and state[2, 5] == 2
    assert int((state != BLANK).sum()) == 4
    assert np.all(game.board.grid == BLANK)


def test_score_is_monotonic_over_random_play():
    game = Tetris(rng=random.Random(2024))
    keys = [None, Key.LEFT, Key.RIGHT, Key.UP, Key.Q, Key.DOWN, Key.SPACE]
    driver = random.Random(11)
    last_score = 0
    now = 0.0
    for _ in range(5000):
        now += 0.04
        pressed = driver.choice(keys)
        released = driver.choice(keys)
        state = game.update(now, pressed=pressed, released=released)
        assert game.score >= last_score
        assert game.level == game.score // 10 + 1
        last_score = game.score
        if state == GameState.GAME_OVER:
            break


def test_snapshot_after_game_over_has_no_falling_piece(game):
    for y in range(4):
        fill_row(game.board, y, skip=(9,))
    assert game.update(0.0) == GameState.GAME_OVER
    snap = game.snapshot(GameState.GAME_OVER)
    assert snap.falling_piece is None
    assert snap.state == GameState.GAME_OVER
    np.testing.assert_array_equal(snap.board, game.board.grid)
