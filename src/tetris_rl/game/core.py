from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import (
    CATALOG,
    SPAWN_X_OFFSET,
    ActivePiece,
    Color,
    TetrominoType,
    random_piece_type,
    validate_catalog,
)
from .rules import Outcome, Resolution, hard_drop, is_legal, resolve_move


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


@dataclass
class GameConfig:
    width: int = 10
    height: int = 22
    soft_drop_interval: float = 0.45
    line_clear_interval: float = 0.0
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        widest = max(spec.matrix_size for spec in CATALOG.values())
        if self.width < SPAWN_X_OFFSET + widest or self.height < widest:
            raise ValueError(f"a {self.width}x{self.height} grid cannot hold a spawned piece")
        if self.soft_drop_interval < 0 or self.line_clear_interval < 0:
            raise ValueError("timer intervals must not be negative")


@dataclass
class Timer:
    """Repeating timer advanced explicitly by the caller."""

    interval: float
    elapsed: float = 0.0

    def tick(self, dt: float) -> bool:
        if self.interval <= 0:
            return True
        self.elapsed += dt
        if self.elapsed >= self.interval:
            self.elapsed %= self.interval
            return True
        return False

    def reset(self) -> None:
        self.elapsed = 0.0


@dataclass
class TickResult:
    outcome: Optional[Outcome] = None
    kick: Optional[Tuple[int, int]] = None
    locked: bool = False
    rows_cleared: int = 0
    game_over: bool = False


@dataclass(frozen=True)
class RenderCell:
    x: int
    y: int
    kind: TetrominoType
    color: Color


@dataclass
class Snapshot:
    width: int
    height: int
    locked: List[RenderCell] = field(default_factory=list)
    active: List[RenderCell] = field(default_factory=list)


class TetrisGame:
    def __init__(self, config: Optional[GameConfig] = None) -> None:
        validate_catalog()
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.soft_drop_timer = Timer(self.config.soft_drop_interval)
        self.line_clear_timer = Timer(self.config.line_clear_interval)
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.piece: Optional[ActivePiece] = None
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.soft_drop_timer.reset()
        self.line_clear_timer.reset()
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.spawn_piece()

    def spawn_piece(self, kind: Optional[TetrominoType] = None) -> None:
        if kind is None:
            kind = random_piece_type(self.rng)
        piece = ActivePiece.spawn(kind, self.grid.height)
        if not is_legal(piece, self.grid):
            logger.info("spawn of %s blocked, game over", kind.name)
            self.piece = None
            self.game_over = True
            return
        logger.debug("spawned %s", kind.name)
        self.piece = piece

    def _lock_piece(self) -> None:
        assert self.piece is not None
        self.grid.place(self.piece.positions, self.piece.kind)
        self.pieces_locked += 1
        logger.debug("locked %s at %s", self.piece.kind.name, self.piece.positions)
        self.piece = None
        self.spawn_piece()

    def _move(self, events: frozenset, gravity: bool) -> Resolution:
        assert self.piece is not None
        dx = 0
        dy = 0
        if Action.LEFT in events:
            dx -= 1
        if Action.RIGHT in events:
            dx += 1
        if Action.SOFT_DROP in events or gravity:
            dy -= 1
        clockwise: Optional[bool] = None
        if Action.ROTATE_CW in events:
            clockwise = True
        if Action.ROTATE_CCW in events:
            clockwise = False
        return resolve_move(self.piece, self.grid, dx, dy, clockwise)

    def tick(self, dt: float, events: Iterable[Action] = ()) -> TickResult:
        """Advance the game by ``dt`` seconds with this tick's key presses.

        Movement is fully resolved (including any lock and respawn) before
        the line-clear pass looks at the grid.
        """
        if self.game_over:
            return TickResult(game_over=True)
        assert self.piece is not None, "tick without an active piece"

        events = frozenset(events)
        gravity = self.soft_drop_timer.tick(dt)
        result = TickResult()

        if Action.HARD_DROP in events:
            self.piece = hard_drop(self.piece, self.grid)
            result.outcome = Outcome.LOCK
            result.locked = True
            self._lock_piece()
        else:
            resolution = self._move(events, gravity)
            self.piece = resolution.piece
            result.outcome = resolution.outcome
            result.kick = resolution.kick
            if resolution.outcome is Outcome.LOCK:
                result.locked = True
                self._lock_piece()

        if self.line_clear_timer.tick(dt):
            result.rows_cleared = self.grid.clear_full_rows()
            self.lines_cleared_total += result.rows_cleared

        result.game_over = self.game_over
        return result

    def step(self, action: Action, dt: float = 0.0) -> TickResult:
        return self.tick(dt, () if action == Action.NONE else (action,))

    def snapshot(self) -> Snapshot:
        snap = Snapshot(self.grid.width, self.grid.height)
        for x, y, kind in self.grid.occupied():
            snap.locked.append(RenderCell(x, y, kind, CATALOG[kind].color))
        if self.piece is not None:
            for x, y in self.piece.positions:
                snap.active.append(RenderCell(x, y, self.piece.kind, self.piece.color))
        return snap

    def get_state(self) -> np.ndarray:
        # Falling piece is overlaid with negative values
        state = self.grid.clone_state()
        if self.piece is not None:
            for x, y in self.piece.positions:
                if self.grid.is_inside(x, y):
                    state[y, x] = -(int(self.piece.kind) + 1)
        return state
