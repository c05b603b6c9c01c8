"""Candidate generation for translation and rotation.

Nothing here looks at the grid; legality is decided in :mod:`.rules`.
"""

from __future__ import annotations

from .pieces import ActivePiece, Coordinate


def translate(piece: ActivePiece, dx: int, dy: int) -> ActivePiece:
    if dx == 0 and dy == 0:
        return piece
    positions = tuple((x + dx, y + dy) for x, y in piece.positions)
    return ActivePiece(piece.kind, positions, piece.indices)


def rotate_index(index: Coordinate, matrix_size: int, clockwise: bool) -> Coordinate:
    lx, ly = index
    last = matrix_size - 1
    if clockwise:
        return ly, last - lx
    return last - ly, lx


def rotate(piece: ActivePiece, clockwise: bool) -> ActivePiece:
    """Rotate every cell inside the piece's matrix.

    Each grid position moves by the same delta as its local index, so the
    pivot is implied by the matrix geometry.
    """
    n = piece.matrix_size
    positions = []
    indices = []
    for (x, y), index in zip(piece.positions, piece.indices):
        nx, ny = rotate_index(index, n, clockwise)
        positions.append((x + nx - index[0], y + ny - index[1]))
        indices.append((nx, ny))
    return ActivePiece(piece.kind, tuple(positions), tuple(indices))
