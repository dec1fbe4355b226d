from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

BOARD_WIDTH = 10
BOARD_HEIGHT = 20
BLANK = -1

TEMPLATE_WIDTH = 5
TEMPLATE_HEIGHT = 5
SPAWN_Y = -2

# Number of colors in the palette; each has a matching light shade in the renderer.
PALETTE_SIZE = 4

SIDEWAYS_REPEAT_INTERVAL = 0.15
DOWN_REPEAT_INTERVAL = 0.1

FPS = 25


@dataclass(frozen=True)
class GameConfig:
    """Configuration for the falling-block game"""
    board_width: int = BOARD_WIDTH
    board_height: int = BOARD_HEIGHT
    palette_size: int = PALETTE_SIZE
    sideways_repeat_interval: float = SIDEWAYS_REPEAT_INTERVAL
    down_repeat_interval: float = DOWN_REPEAT_INTERVAL
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.board_width < TEMPLATE_WIDTH or self.board_height <= 0:
            raise ValueError(
                f"Board must be at least {TEMPLATE_WIDTH} wide and non-empty, "
                f"got {self.board_width}x{self.board_height}"
            )
        if self.palette_size <= 0:
            raise ValueError(f"palette_size must be positive, got {self.palette_size}")
        if self.sideways_repeat_interval <= 0 or self.down_repeat_interval <= 0:
            raise ValueError("Repeat intervals must be positive")
