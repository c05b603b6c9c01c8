from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Mapping, Tuple


Coordinate = Tuple[int, int]
Color = Tuple[int, int, int]

CELLS_PER_PIECE = 4
SPAWN_X_OFFSET = 3


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    L = 5
    J = 6


@dataclass(frozen=True)
class PieceSpec:
    """Static description of a tetromino inside its rotation matrix.

    ``indices`` are the local ``(x, y)`` offsets of the four cells at spawn
    orientation, with ``y`` growing upward like the grid.
    """

    kind: TetrominoType
    matrix_size: int
    color: Color
    indices: Tuple[Coordinate, ...]


CATALOG: Dict[TetrominoType, PieceSpec] = {
    TetrominoType.I: PieceSpec(TetrominoType.I, 4, (0, 178, 178), ((1, 3), (1, 2), (1, 1), (1, 0))),
    TetrominoType.O: PieceSpec(TetrominoType.O, 4, (178, 178, 0), ((1, 1), (1, 2), (2, 1), (2, 2))),
    TetrominoType.T: PieceSpec(TetrominoType.T, 3, (178, 0, 178), ((0, 1), (1, 1), (2, 1), (1, 2))),
    TetrominoType.S: PieceSpec(TetrominoType.S, 3, (0, 178, 0), ((2, 2), (1, 2), (1, 1), (0, 1))),
    TetrominoType.Z: PieceSpec(TetrominoType.Z, 3, (178, 0, 0), ((0, 2), (1, 2), (1, 1), (2, 1))),
    TetrominoType.L: PieceSpec(TetrominoType.L, 3, (230, 64, 0), ((0, 1), (1, 1), (2, 1), (2, 2))),
    TetrominoType.J: PieceSpec(TetrominoType.J, 3, (0, 0, 178), ((0, 2), (0, 1), (1, 1), (2, 1))),
}


def validate_catalog(catalog: Mapping[TetrominoType, PieceSpec] = CATALOG) -> None:
    """Raise ``ValueError`` if any piece type lacks a usable spec."""
    for kind in TetrominoType:
        spec = catalog.get(kind)
        if spec is None:
            raise ValueError(f"missing catalog entry for {kind.name}")
        if spec.kind != kind:
            raise ValueError(f"catalog entry for {kind.name} describes {spec.kind.name}")
        if spec.matrix_size not in (3, 4):
            raise ValueError(f"{kind.name}: matrix size must be 3 or 4, got {spec.matrix_size}")
        if len(spec.indices) != CELLS_PER_PIECE or len(set(spec.indices)) != CELLS_PER_PIECE:
            raise ValueError(f"{kind.name}: expected {CELLS_PER_PIECE} distinct cells")
        for lx, ly in spec.indices:
            if not (0 <= lx < spec.matrix_size and 0 <= ly < spec.matrix_size):
                raise ValueError(f"{kind.name}: index {(lx, ly)} outside its rotation matrix")
        if len(spec.color) != 3 or any(not 0 <= c <= 255 for c in spec.color):
            raise ValueError(f"{kind.name}: color must be an RGB triple")


def random_piece_type(rng: random.Random) -> TetrominoType:
    return TetrominoType(rng.randrange(len(TetrominoType)))


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece: four grid positions paired with matrix indices.

    Instances are values; movement produces new candidates and the game
    commits one by replacing its current piece.
    """

    kind: TetrominoType
    positions: Tuple[Coordinate, ...]
    indices: Tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        assert len(self.positions) == CELLS_PER_PIECE, "active piece must have 4 cells"
        assert len(self.indices) == CELLS_PER_PIECE, "active piece must have 4 matrix indices"
        assert len(set(self.positions)) == CELLS_PER_PIECE, "active cells overlap"

    @property
    def spec(self) -> PieceSpec:
        return CATALOG[self.kind]

    @property
    def matrix_size(self) -> int:
        return CATALOG[self.kind].matrix_size

    @property
    def color(self) -> Color:
        return CATALOG[self.kind].color

    @classmethod
    def spawn(cls, kind: TetrominoType, grid_height: int) -> "ActivePiece":
        # Matrix sits flush with the top of the grid
        spec = CATALOG[kind]
        base_y = grid_height - spec.matrix_size
        positions = tuple((lx + SPAWN_X_OFFSET, base_y + ly) for lx, ly in spec.indices)
        return cls(kind, positions, spec.indices)
