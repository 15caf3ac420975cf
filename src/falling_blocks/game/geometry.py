from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple


Point = Tuple[int, int]
Shape = Tuple[Point, Point, Point, Point]


class InvalidArgument(ValueError):
    """Raised when a shape lookup or direction receives a malformed index."""


class PieceKind(IntEnum):
    O = 0
    I = 1
    L = 2
    J = 3
    S = 4
    Z = 5
    T = 6


NUM_KINDS = len(PieceKind)
NUM_ROTATIONS = 4
# Side of the square box every rotation state fits in.
SHAPE_BOX_SIZE = 4
# The spawner draws from the first six kinds only; T is reachable by explicit request.
SPAWNABLE_KINDS = 6

DIRECTIONS: Dict[str, Point] = {
    "left": (-1, 0),
    "right": (1, 0),
    "up": (0, -1),
    "down": (0, 1),
}


def add_points(*points: Point) -> Point:
    return (sum(p[0] for p in points), sum(p[1] for p in points))


# Offsets inside a 4x4 bounding box, one entry per rotation state.
SHAPE_TABLE: Tuple[Tuple[Shape, ...], ...] = (
    # O
    (
        ((1, 0), (2, 0), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (2, 1)),
    ),
    # I
    (
        ((1, 0), (1, 1), (1, 2), (1, 3)),
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
        ((0, 1), (1, 1), (2, 1), (3, 1)),
    ),
    # L
    (
        ((1, 0), (2, 0), (2, 1), (2, 2)),
        ((0, 0), (1, 0), (2, 0), (0, 1)),
        ((0, 0), (0, 1), (0, 2), (1, 2)),
        ((2, 1), (0, 2), (1, 2), (2, 2)),
    ),
    # J
    (
        ((0, 0), (1, 0), (0, 1), (0, 2)),
        ((0, 1), (0, 2), (1, 2), (2, 2)),
        ((2, 0), (2, 1), (1, 2), (2, 2)),
        ((0, 0), (1, 0), (2, 0), (2, 1)),
    ),
    # S
    (
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((2, 0), (3, 0), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((2, 0), (3, 0), (1, 1), (2, 1)),
    ),
    # Z
    (
        ((2, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 0), (1, 0), (1, 1), (2, 1)),
    ),
    # T
    (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
    ),
)


def shape_offsets(kind: int, rotation: int) -> Shape:
    """Return the four relative offsets of ``kind`` at ``rotation``.

    Raises InvalidArgument when either index falls outside the table.
    """
    if not 0 <= int(kind) < NUM_KINDS:
        raise InvalidArgument(f"piece kind must be in [0, {NUM_KINDS - 1}], got {kind}")
    if not 0 <= int(rotation) < NUM_ROTATIONS:
        raise InvalidArgument(f"rotation must be in [0, {NUM_ROTATIONS - 1}], got {rotation}")
    return SHAPE_TABLE[int(kind)][int(rotation)]
