from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .grid import GameGrid
from .movement import rotate, translate
from .pieces import ActivePiece, Coordinate


logger = logging.getLogger(__name__)

# Tried in order after a blocked rotation; the last two allow T-spins.
WALL_KICKS: Tuple[Coordinate, ...] = (
    (1, 0),
    (2, 0),
    (-1, 0),
    (-2, 0),
    (-1, -2),
    (1, -2),
)


class Outcome(Enum):
    MOVED = "moved"
    KICKED = "kicked"
    ROTATION_REJECTED = "rotation_rejected"
    LOCK = "lock"


@dataclass(frozen=True)
class Resolution:
    piece: ActivePiece
    outcome: Outcome
    kick: Optional[Coordinate] = None


def is_legal(piece: ActivePiece, grid: GameGrid) -> bool:
    # Only the floor and locked cells block; columns are handled by the clamp.
    for x, y in piece.positions:
        if y < 0:
            return False
        if grid.is_occupied(x, y):
            return False
    return True


def within_columns(piece: ActivePiece, width: int) -> bool:
    return all(0 <= x < width for x, _ in piece.positions)


def horizontal_overshoot(piece: ActivePiece, width: int) -> int:
    """Signed distance the piece sticks out past the side walls (0 if none)."""
    over = 0
    for x, _ in piece.positions:
        if x < 0:
            over = min(over, x)
        elif x >= width:
            over = max(over, x - width + 1)
    return over


def clamp_horizontal(piece: ActivePiece, width: int) -> ActivePiece:
    return translate(piece, -horizontal_overshoot(piece, width), 0)


def hard_drop(piece: ActivePiece, grid: GameGrid) -> ActivePiece:
    while True:
        lower = translate(piece, 0, -1)
        if not is_legal(lower, grid):
            return piece
        piece = lower


def try_wall_kicks(candidate: ActivePiece, grid: GameGrid) -> Optional[Resolution]:
    for dx, dy in WALL_KICKS:
        kicked = translate(candidate, dx, dy)
        if is_legal(kicked, grid) and within_columns(kicked, grid.width):
            return Resolution(kicked, Outcome.KICKED, (dx, dy))
    return None


def resolve_move(
    piece: ActivePiece,
    grid: GameGrid,
    dx: int = 0,
    dy: int = 0,
    clockwise: Optional[bool] = None,
) -> Resolution:
    """Resolve one tick's translation and optional rotation.

    A blocked move without rotation asks for a lock at the pre-move
    position. A blocked rotation falls back to the wall kicks and, failing
    those, leaves the piece where it was.
    """
    candidate = piece
    if clockwise is not None:
        candidate = rotate(candidate, clockwise)
    candidate = translate(candidate, dx, dy)
    candidate = clamp_horizontal(candidate, grid.width)

    if is_legal(candidate, grid):
        return Resolution(candidate, Outcome.MOVED)

    if clockwise is None:
        return Resolution(piece, Outcome.LOCK)

    kicked = try_wall_kicks(candidate, grid)
    if kicked is not None:
        logger.debug("rotation of %s kicked by %s", piece.kind.name, kicked.kick)
        return kicked
    return Resolution(piece, Outcome.ROTATION_REJECTED)
