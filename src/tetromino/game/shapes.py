from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterator, List, Tuple

import numpy as np

from .config import TEMPLATE_HEIGHT, TEMPLATE_WIDTH


class ShapeType(IntEnum):
    S = 0
    Z = 1
    J = 2
    L = 3
    I = 4
    O = 5
    T = 6


Template = np.ndarray


_ART: Dict[ShapeType, List[List[str]]] = {
    ShapeType.S: [
        [".....",
         ".....",
         "..OO.",
         ".OO..",
         "....."],
        [".....",
         "..O..",
         "..OO.",
         "...O.",
         "....."],
    ],
    ShapeType.Z: [
        [".....",
         ".....",
         ".OO..",
         "..OO.",
         "....."],
        [".....",
         "..O..",
         ".OO..",
         ".O...",
         "....."],
    ],
    ShapeType.I: [
        ["..O..",
         "..O..",
         "..O..",
         "..O..",
         "....."],
        [".....",
         ".....",
         "OOOO.",
         ".....",
         "....."],
    ],
    ShapeType.O: [
        [".....",
         ".....",
         ".OO..",
         ".OO..",
         "....."],
    ],
    ShapeType.J: [
        [".....",
         ".O...",
         ".OOO.",
         ".....",
         "....."],
        [".....",
         "..OO.",
         "..O..",
         "..O..",
         "....."],
        [".....",
         ".....",
         ".OOO.",
         "...O.",
         "....."],
        [".....",
         "..O..",
         "..O..",
         ".OO..",
         "....."],
    ],
    ShapeType.L: [
        [".....",
         "...O.",
         ".OOO.",
         ".....",
         "....."],
        [".....",
         "..O..",
         "..O..",
         "..OO.",
         "....."],
        [".....",
         ".....",
         ".OOO.",
         ".O...",
         "....."],
        [".....",
         ".OO..",
         "..O..",
         "..O..",
         "....."],
    ],
    ShapeType.T: [
        [".....",
         "..O..",
         ".OOO.",
         ".....",
         "....."],
        [".....",
         "..O..",
         "..OO.",
         "..O..",
         "....."],
        [".....",
         ".....",
         ".OOO.",
         "..O..",
         "....."],
        [".....",
         "..O..",
         ".OO..",
         "..O..",
         "....."],
    ],
}


def _parse(art: List[str]) -> Template:
    grid = np.array([[ch == "O" for ch in row] for row in art], dtype=np.bool_)
    assert grid.shape == (TEMPLATE_HEIGHT, TEMPLATE_WIDTH)
    grid.setflags(write=False)
    return grid


TEMPLATES: Dict[ShapeType, Tuple[Template, ...]] = {
    shape: tuple(_parse(art) for art in rotations) for shape, rotations in _ART.items()
}


def rotation_count(shape: ShapeType) -> int:
    return len(TEMPLATES[shape])


def template(shape: ShapeType, rotation: int) -> Template:
    """Return the 5x5 occupancy grid for `shape` at `rotation`.

    Rotation wraps around the shape's rotation count, so any integer is accepted.
    The returned array is read-only and shared.
    """
    rotations = TEMPLATES[shape]
    return rotations[rotation % len(rotations)]


def occupied_cells(shape: ShapeType, rotation: int) -> Iterator[Tuple[int, int]]:
    grid = template(shape, rotation)
    for dy, dx in zip(*np.nonzero(grid)):
        yield int(dx), int(dy)
