from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import BLANK, BOARD_HEIGHT, BOARD_WIDTH
from .pieces import Piece

logger = logging.getLogger(__name__)


class GameBoard:
    """Fixed-size grid of settled cells.

    Cells hold `BLANK` or the palette index of the piece that settled there.
    The grid is indexed `[y, x]` with y=0 at the top.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.full((self.height, self.width), BLANK, dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(BLANK)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Optional[int]:
        value = int(self.grid[y, x])
        return None if value == BLANK else value

    def is_valid_position(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        for x, y in piece.cells_at(dx, dy):
            # Pieces may hang above the top edge while spawning.
            if y < 0:
                continue
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != BLANK:
                return False
        return True

    def add_piece(self, piece: Piece) -> None:
        for x, y in piece.cells_at():
            if self.is_inside(x, y):
                self.grid[y, x] = piece.color

    def is_complete_line(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != BLANK))

    def remove_complete_lines(self) -> int:
        """Remove every complete row, shifting the rows above it down.

        Returns the number of rows removed.
        """
        lines = 0
        y = self.height - 1
        while y >= 0:
            if self.is_complete_line(y):
                # Re-check the same row: the one above has just slid into it.
                self.grid[1 : y + 1] = self.grid[:y].copy()
                self.grid[0].fill(BLANK)
                lines += 1
            else:
                y -= 1
        if lines:
            logger.debug("Removed %d complete line(s)", lines)
        return lines

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
