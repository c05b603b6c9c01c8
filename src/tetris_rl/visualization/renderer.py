from __future__ import annotations

from typing import Optional, Tuple

import pygame

from tetris_rl.game import Snapshot


BLOCK_SIZE = 25
BACKGROUND = (10, 10, 14)
MATRIX_COLOR = (0, 0, 0)


def block_center(position: int, block_size: float, extent: float) -> float:
    """Center of a block along one axis, in coordinates centered on the matrix."""
    return position * block_size - extent * 0.5 + block_size * 0.5


class Renderer:
    def __init__(self, block_size: int = BLOCK_SIZE, margin: int = 20) -> None:
        self.block_size = block_size
        self.margin = margin
        self.screen: Optional[pygame.Surface] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (width * self.block_size + self.margin * 2, height * self.block_size + self.margin * 2)

    def open(self, width: int, height: int) -> pygame.Surface:
        pygame.init()
        self.screen = pygame.display.set_mode(self.window_size(width, height))
        pygame.display.set_caption("Tetris")
        return self.screen

    def close(self) -> None:
        pygame.quit()
        self.screen = None

    def _block_rect(self, origin: Tuple[float, float], snap: Snapshot, x: int, y: int) -> pygame.Rect:
        extent_x = snap.width * self.block_size
        extent_y = snap.height * self.block_size
        cx = origin[0] + block_center(x, self.block_size, extent_x)
        # Grid y grows upward, screen y grows downward
        cy = origin[1] - block_center(y, self.block_size, extent_y)
        half = self.block_size * 0.5
        return pygame.Rect(int(cx - half), int(cy - half), self.block_size - 1, self.block_size - 1)

    def draw(self, screen: pygame.Surface, snap: Snapshot) -> None:
        screen.fill(BACKGROUND)
        matrix = pygame.Rect(self.margin, self.margin, snap.width * self.block_size, snap.height * self.block_size)
        pygame.draw.rect(screen, MATRIX_COLOR, matrix)
        origin = matrix.center
        for cell in snap.locked + snap.active:
            pygame.draw.rect(screen, cell.color, self._block_rect(origin, snap, cell.x, cell.y))
        pygame.display.flip()
