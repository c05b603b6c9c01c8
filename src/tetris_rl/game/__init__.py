"""Game module for Tetris RL.

Exports the rules engine and supporting classes:
- TetrominoType / PieceSpec / CATALOG: static piece data
- ActivePiece: the falling piece and its matrix indices
- GameGrid: locked-cell occupancy and row clearing
- resolve_move / hard_drop / is_legal: collision and wall-kick rules
- TetrisGame: tick-driven state machine
"""

from .grid import GameGrid
from .pieces import CATALOG, ActivePiece, PieceSpec, TetrominoType, random_piece_type, validate_catalog
from .movement import rotate, rotate_index, translate
from .rules import WALL_KICKS, Outcome, Resolution, hard_drop, is_legal, resolve_move
from .core import Action, GameConfig, RenderCell, Snapshot, TetrisGame, TickResult, Timer

__all__ = [
    "GameGrid",
    "CATALOG",
    "ActivePiece",
    "PieceSpec",
    "TetrominoType",
    "random_piece_type",
    "validate_catalog",
    "rotate",
    "rotate_index",
    "translate",
    "WALL_KICKS",
    "Outcome",
    "Resolution",
    "hard_drop",
    "is_legal",
    "resolve_move",
    "Action",
    "GameConfig",
    "RenderCell",
    "Snapshot",
    "TetrisGame",
    "TickResult",
    "Timer",
]
