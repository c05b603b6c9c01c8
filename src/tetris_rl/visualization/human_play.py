from __future__ import annotations

import argparse
import logging
from typing import Dict, Set

import pygame

from tetris_rl.game import Action, GameConfig, TetrisGame
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_j: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_l: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_k: Action.SOFT_DROP,
    pygame.K_UP: Action.HARD_DROP,
    pygame.K_i: Action.HARD_DROP,
    pygame.K_x: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--soft-drop", type=float, default=0.45, help="seconds between automatic drops")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def run() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    game = TetrisGame(GameConfig(random_seed=args.seed, soft_drop_interval=args.soft_drop))
    renderer = Renderer()
    screen = renderer.open(game.grid.width, game.grid.height)
    try:
        clock = pygame.time.Clock()
        font = pygame.font.SysFont(None, 28)

        running = True
        while running:
            dt = clock.tick(args.fps) / 1000.0

            # Key presses are edge-triggered: one event per physical press
            pressed: Set[Action] = set()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            pressed.add(action)

            game.tick(dt, pressed)
            renderer.draw(screen, game.snapshot())

            if game.game_over:
                text = font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
                screen.blit(text, text.get_rect(center=(screen.get_width() // 2, 12)))
                pygame.display.flip()
    finally:
        renderer.close()
    print(f"Rows cleared: {game.lines_cleared_total}, pieces locked: {game.pieces_locked}")


if __name__ == "__main__":  # pragma: no cover
    run()
