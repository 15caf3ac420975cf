from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from falling_blocks.game import Command, FallingBlocksGame, GameConfig
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_UP: Command.ROTATE,
    pygame.K_DOWN: Command.DOWN,
}

TITLE = "Falling Blocks"


def run(config: Optional[GameConfig] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlocksGame(config)
        renderer = Renderer(cell_size=28, spawn_buffer_rows=game.config.spawn_buffer_rows)

        screen = pygame.display.set_mode(renderer.surface_size(game.state.board))
        pygame.display.set_caption(TITLE)

        gravity_ms = game.config.fall_delay_ms
        last_fall = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.step(command)

            # Gravity
            now = pygame.time.get_ticks()
            if now - last_fall >= gravity_ms:
                game.tick()
                last_fall = now

            state = game.state
            renderer.draw(screen, state.board, state.piece)
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the arrow keys.")
    p.add_argument("--cols", type=int, default=9)
    p.add_argument("--rows", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(GameConfig(cols=args.cols, rows=args.rows, random_seed=args.seed))


if __name__ == "__main__":  # pragma: no cover
    main()
