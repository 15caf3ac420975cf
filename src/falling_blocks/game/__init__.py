"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- PieceKind / shape_offsets: the 7-kind, 4-rotation shape table
- Piece, Cell: the falling block and its derived cells
- Board: immutable grid of settled cells with row clearing
- FallingBlocksGame: serialised holder of the current engine state
- new_game / on_tick / on_command: the pure transition API
"""

from .geometry import InvalidArgument, PieceKind, Point, add_points, shape_offsets
from .pieces import Cell, Piece, create_piece
from .board import Board
from .core import (
    Command,
    EngineState,
    FallingBlocksGame,
    GameConfig,
    TickResult,
    board_cells,
    dimensions,
    is_valid_placement,
    move,
    new_game,
    on_command,
    on_tick,
    piece_cells,
    rotate,
    tick,
)

__all__ = [
    "InvalidArgument",
    "PieceKind",
    "Point",
    "add_points",
    "shape_offsets",
    "Cell",
    "Piece",
    "create_piece",
    "Board",
    "Command",
    "EngineState",
    "FallingBlocksGame",
    "GameConfig",
    "TickResult",
    "board_cells",
    "dimensions",
    "is_valid_placement",
    "move",
    "new_game",
    "on_command",
    "on_tick",
    "piece_cells",
    "rotate",
    "tick",
]
