from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .geometry import NUM_ROTATIONS, SPAWNABLE_KINDS, Point, add_points, shape_offsets


START_POS: Point = (3, 0)
START_ROTATION = 0


@dataclass(frozen=True)
class Cell:
    color: int
    pos: Point


@dataclass(frozen=True)
class Piece:
    kind: int
    color: int
    pos: Point = START_POS
    rotation: int = START_ROTATION  # 0..3

    def occupied_cells(self) -> Tuple[Cell, ...]:
        return tuple(
            Cell(self.color, add_points(self.pos, offset))
            for offset in shape_offsets(self.kind, self.rotation)
        )

    def moved(self, delta: Point) -> "Piece":
        return replace(self, pos=add_points(self.pos, delta))

    def rotated(self, modulus: int = NUM_ROTATIONS) -> "Piece":
        return replace(self, rotation=(self.rotation + 1) % modulus)


def create_piece(
    kind: Optional[int] = None,
    color: Optional[int] = None,
    *,
    rng: Optional[random.Random] = None,
    start_pos: Point = START_POS,
    palette_size: int = 10,
) -> Piece:
    """Spawn a piece at the start anchor with rotation 0.

    Missing ``kind`` is drawn from the first ``SPAWNABLE_KINDS`` kinds and a
    missing ``color`` from ``range(palette_size)``.
    """
    rng = rng or random
    if kind is None:
        kind = rng.randrange(SPAWNABLE_KINDS)
    if color is None:
        color = rng.randrange(palette_size)
    return Piece(kind=kind, color=color, pos=tuple(start_pos), rotation=START_ROTATION)
