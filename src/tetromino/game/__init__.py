"""Game module for Tetromino.

Exports the core game engine and supporting classes:
- ShapeType: Enum of the seven tetromino shapes
- Piece: Falling piece with rotation mechanics
- GameBoard: Grid of settled cells, collision checks and line clearing
- ScoringRules: Score, level and fall speed derivation
- Tetris: Timing-gated game engine advanced once per tick
- StateMachine: Title, run, pause and game over sequencing
"""

from .config import GameConfig
from .shapes import ShapeType
from .pieces import Piece
from .grid import GameBoard
from .rules import ScoringRules
from .core import Tetris, Key, GameState, Direction, Snapshot
from .states import StateMachine, Event, EventKind

__all__ = [
    "GameConfig",
    "ShapeType",
    "Piece",
    "GameBoard",
    "ScoringRules",
    "Tetris",
    "Key",
    "GameState",
    "Direction",
    "Snapshot",
    "StateMachine",
    "Event",
    "EventKind",
]
