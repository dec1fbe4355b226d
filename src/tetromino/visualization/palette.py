from __future__ import annotations

from typing import Tuple

from tetromino.game.config import BLANK

Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
GRAY: Color = (185, 185, 185)
BLACK: Color = (0, 0, 0)
RED: Color = (155, 0, 0)
LIGHTRED: Color = (175, 20, 20)
GREEN: Color = (0, 155, 0)
LIGHTGREEN: Color = (20, 175, 20)
BLUE: Color = (0, 0, 155)
LIGHTBLUE: Color = (20, 20, 175)
YELLOW: Color = (155, 155, 0)
LIGHTYELLOW: Color = (175, 175, 20)

BORDER_COLOR = BLUE
BG_COLOR = BLACK
TEXT_COLOR = WHITE
TEXT_SHADOW_COLOR = GRAY

# Indexed by piece color; each entry pairs with the light shade at the same index.
COLORS = (BLUE, GREEN, RED, YELLOW)
LIGHT_COLORS = (LIGHTBLUE, LIGHTGREEN, LIGHTRED, LIGHTYELLOW)

assert len(COLORS) == len(LIGHT_COLORS), "Each color must have a light color!"


def color_for_value(v: int, light: bool = False) -> Color:
    if v == BLANK:
        return BG_COLOR
    palette = LIGHT_COLORS if light else COLORS
    return palette[v % len(palette)]
