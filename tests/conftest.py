from __future__ import annotations

import os

# pygame surfaces are created headless in the renderer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from falling_blocks.game import Board, Cell, GameConfig


@pytest.fixture
def small_config() -> GameConfig:
    return GameConfig(cols=4, rows=5, random_seed=0)


@pytest.fixture
def make_board():
    def _make(cols: int, rows: int, positions, color: int = 0) -> Board:
        return Board(cols=cols, rows=rows, cells=tuple(Cell(color, pos) for pos in positions))

    return _make
