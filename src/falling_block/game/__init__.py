"""Game module for the falling-block engine.

Exports the core game engine and supporting classes:
- TetrominoType / Piece: piece catalog, rotation and placement values
- GameGrid: immutable grid with locking and line clearing
- can_place: the single placement-validity predicate
- ScoringRules: score, level and gravity-interval formulas
- FallingBlockGame: the state machine driven by timers and input
"""

from .pieces import Piece, TetrominoType, rotate_clockwise, shape_of
from .grid import ClearResult, GameGrid
from .validator import can_place
from .rules import ScoringRules
from .core import (
    Action,
    FallingBlockGame,
    GameConfig,
    GamePhase,
    GameSnapshot,
    GameState,
    LockResult,
)

__all__ = [
    "Piece",
    "TetrominoType",
    "rotate_clockwise",
    "shape_of",
    "ClearResult",
    "GameGrid",
    "can_place",
    "ScoringRules",
    "Action",
    "FallingBlockGame",
    "GameConfig",
    "GamePhase",
    "GameSnapshot",
    "GameState",
    "LockResult",
]
