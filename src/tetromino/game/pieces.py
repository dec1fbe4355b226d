from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .config import BOARD_WIDTH, PALETTE_SIZE, SPAWN_Y, TEMPLATE_WIDTH
from .shapes import ShapeType, Template, occupied_cells, rotation_count, template


@dataclass
class Piece:
    shape: ShapeType
    rotation: int = 0
    x: int = 0
    y: int = 0
    color: int = 0

    @classmethod
    def spawn(
        cls,
        rng: random.Random,
        board_width: int = BOARD_WIDTH,
        palette_size: int = PALETTE_SIZE,
    ) -> "Piece":
        """Create a random piece centered horizontally just above the board."""
        shape = rng.choice(list(ShapeType))
        rotation = rng.randrange(rotation_count(shape))
        color = rng.randrange(palette_size)
        x = board_width // 2 - TEMPLATE_WIDTH // 2
        return cls(shape=shape, rotation=rotation, x=x, y=SPAWN_Y, color=color)

    @property
    def rotation_count(self) -> int:
        return rotation_count(self.shape)

    def template(self) -> Template:
        return template(self.shape, self.rotation)

    def rotate_forward(self) -> None:
        self.rotation = (self.rotation + 1) % self.rotation_count

    def rotate_backward(self) -> None:
        self.rotation = (self.rotation - 1) % self.rotation_count

    def rotated(self, delta: int) -> "Piece":
        return replace(self, rotation=(self.rotation + delta) % self.rotation_count)

    def occupied_cells(self, rotation: Optional[int] = None) -> List[Tuple[int, int]]:
        if rotation is None:
            rotation = self.rotation
        return list(occupied_cells(self.shape, rotation))

    def cells_at(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        return [(self.x + cx + dx, self.y + cy + dy) for cx, cy in self.occupied_cells()]

    def copy(self) -> "Piece":
        return replace(self)
