from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import numpy as np

from .pieces import Coordinate, TetrominoType


logger = logging.getLogger(__name__)

EMPTY = 0


class GameGrid:
    """Occupancy map of locked cells.

    Row 0 is the floor and ``y`` grows upward. Empty cells hold 0; a locked
    cell holds ``kind + 1`` so its color can be recovered from the catalog.
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if not self.is_inside(x, y):
            return False
        return bool(self.grid[y, x] != EMPTY)

    def place(self, cells: Iterable[Coordinate], kind: TetrominoType) -> None:
        cells = list(cells)
        for x, y in cells:
            assert self.is_inside(x, y), f"cell {(x, y)} locked outside the grid"
            assert self.grid[y, x] == EMPTY, f"cell {(x, y)} locked onto an occupied cell"
        for x, y in cells:
            self.grid[y, x] = int(kind) + 1

    def occupied(self) -> List[Tuple[int, int, TetrominoType]]:
        ys, xs = np.nonzero(self.grid)
        return [
            (int(x), int(y), TetrominoType(int(self.grid[y, x]) - 1))
            for y, x in zip(ys, xs)
        ]

    def row_is_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != EMPTY))

    def clear_full_rows(self) -> int:
        """Remove full rows from the floor upward and drop the rows above.

        The scan stops at the first row that is not full, so full rows
        resting on top of an incomplete one are left in place.
        """
        run = 0
        for y in range(self.height):
            if not self.row_is_full(y):
                break
            run += 1
        if run == 0:
            return 0
        new_rows = np.zeros((run, self.width), dtype=np.int8)
        self.grid = np.vstack((self.grid[run:], new_rows))
        logger.info("cleared %d row(s)", run)
        return run

    def get_max_height(self) -> int:
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return int(non_empty_rows[-1]) + 1

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
