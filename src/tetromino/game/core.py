from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .config import GameConfig
from .grid import GameBoard
from .pieces import Piece
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Key(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    A = "a"
    D = "d"
    W = "w"
    Q = "q"
    SPACE = "space"
    P = "p"
    # Any other key; only meaningful to the title, pause and game over screens.
    OTHER = "other"


class GameState(Enum):
    TITLE_SCREEN = "title_screen"
    RUN = "run"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    QUIT = "quit"


class Direction(Enum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    DOWN = 3


LEFT_KEYS = (Key.LEFT, Key.A)
RIGHT_KEYS = (Key.RIGHT, Key.D)
RELEASE_KEYS = LEFT_KEYS + RIGHT_KEYS + (Key.DOWN,)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to renderers."""
    board: np.ndarray
    falling_piece: Optional[Piece]
    next_piece: Piece
    score: int
    level: int
    lines_cleared_total: int
    state: GameState


class Tetris:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        now: float = 0.0,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.board = GameBoard(self.config.board_width, self.config.board_height)
        # None until the first update, and again for one tick after each landing.
        self.falling_piece: Optional[Piece] = None
        self.next_piece = self._new_piece()
        self.score = 0
        self.lines_cleared_total = 0
        self.level = self.rules.level_for_score(self.score)
        self.fall_interval = self.rules.fall_interval(self.level)
        self.last_fall_time = now
        self.last_move_sideways_time = now
        self.last_move_down_time = now
        self.moving = Direction.NONE
        self.game_over = False

    def _new_piece(self) -> Piece:
        return Piece.spawn(self.rng, self.config.board_width, self.config.palette_size)

    def resume(self, now: float) -> None:
        """Restart the movement timers, e.g. after the game was paused.

        Key releases are not seen while the game is not running, so held movement is dropped too.
        """
        self.moving = Direction.NONE
        self.last_fall_time = now
        self.last_move_sideways_time = now
        self.last_move_down_time = now

    def _spawn(self, now: float) -> bool:
        self.falling_piece = self.next_piece
        self.next_piece = self._new_piece()
        self.last_fall_time = now
        if not self.board.is_valid_position(self.falling_piece):
            logger.info("No room to spawn %s, game over with score %d",
                        self.falling_piece.shape.name, self.score)
            self.game_over = True
            return False
        logger.debug("Spawned %s at rotation %d", self.falling_piece.shape.name,
                     self.falling_piece.rotation)
        return True

    def _move(self, dx: int, dy: int) -> bool:
        piece = self.falling_piece
        if piece is None or not self.board.is_valid_position(piece, dx, dy):
            return False
        piece.x += dx
        piece.y += dy
        return True

    def _rotate(self, delta: int) -> bool:
        if self.falling_piece is None:
            return False
        candidate = self.falling_piece.rotated(delta)
        if not self.board.is_valid_position(candidate):
            return False
        self.falling_piece = candidate
        return True

    def hard_drop(self) -> int:
        """Drop the falling piece as far as it goes; returns the rows travelled."""
        rows = 0
        while self._move(0, 1):
            rows += 1
        return rows

    def _land(self) -> int:
        assert self.falling_piece is not None
        self.board.add_piece(self.falling_piece)
        lines = self.board.remove_complete_lines()
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines)
        self.level = self.rules.level_for_score(self.score)
        self.fall_interval = self.rules.fall_interval(self.level)
        self.falling_piece = None
        self.moving = Direction.NONE
        return lines

    def _handle_press(self, key: Key, now: float) -> Optional[GameState]:
        if key in LEFT_KEYS:
            if self._move(-1, 0):
                self.moving = Direction.LEFT
                self.last_move_sideways_time = now
        elif key in RIGHT_KEYS:
            if self._move(1, 0):
                self.moving = Direction.RIGHT
                self.last_move_sideways_time = now
        elif key in (Key.UP, Key.W):
            self._rotate(1)
        elif key == Key.Q:
            self._rotate(-1)
        elif key == Key.DOWN:
            self.moving = Direction.DOWN
            self._move(0, 1)
            self.last_move_down_time = now
        elif key == Key.SPACE:
            self.moving = Direction.NONE
            self.hard_drop()
        elif key == Key.P:
            return GameState.PAUSED
        return None

    def _auto_repeat(self, now: float) -> None:
        if self.moving in (Direction.LEFT, Direction.RIGHT):
            if now - self.last_move_sideways_time > self.config.sideways_repeat_interval:
                self._move(-1 if self.moving == Direction.LEFT else 1, 0)
                self.last_move_sideways_time = now
        elif self.moving == Direction.DOWN:
            if now - self.last_move_down_time > self.config.down_repeat_interval and self._move(0, 1):
                self.last_move_down_time = now

    def _apply_gravity(self, now: float) -> None:
        if now - self.last_fall_time <= self.fall_interval:
            return
        if self._move(0, 1):
            self.last_fall_time = now
        else:
            self._land()

    def update(self, now: float, pressed: Optional[Key] = None, released: Optional[Key] = None) -> GameState:
        """Advance the simulation to time `now` (seconds) applying at most one press and one release.

        Returns the state the caller should move to: RUN, PAUSED or GAME_OVER.
        """
        if self.game_over:
            return GameState.GAME_OVER
        if self.falling_piece is None and not self._spawn(now):
            return GameState.GAME_OVER

        if released in RELEASE_KEYS:
            self.moving = Direction.NONE
        if pressed is not None:
            requested = self._handle_press(pressed, now)
            if requested is not None:
                return requested

        self._auto_repeat(now)
        self._apply_gravity(now)
        return GameState.RUN

    def get_state(self) -> np.ndarray:
        # Board copy with the falling piece drawn on top
        state = self.board.clone_state()
        if self.falling_piece is not None and not self.game_over:
            for x, y in self.falling_piece.cells_at():
                if self.board.is_inside(x, y):
                    state[y, x] = self.falling_piece.color
        return state

    def snapshot(self, state: GameState = GameState.RUN) -> Snapshot:
        board = self.board.clone_state()
        board.setflags(write=False)
        return Snapshot(
            board=board,
            falling_piece=self.falling_piece.copy() if self.falling_piece is not None and not self.game_over else None,
            next_piece=self.next_piece.copy(),
            score=self.score,
            level=self.level,
            lines_cleared_total=self.lines_cleared_total,
            state=state,
        )
