from __future__ import annotations

import random

import pytest

from tetromino.game import GameBoard, Tetris


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def board() -> GameBoard:
    return GameBoard()


@pytest.fixture
def game(rng: random.Random) -> Tetris:
    return Tetris(rng=rng)


def fill_row(board: GameBoard, y: int, color: int = 0, skip: tuple = ()) -> None:
    for x in range(board.width):
        if x not in skip:
            board.grid[y, x] = color
