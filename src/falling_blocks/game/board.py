from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, List, Tuple

import numpy as np

from .geometry import Point
from .pieces import Cell, Piece


SPAWN_BUFFER_ROWS = 4
# Settled cells are stored as color + 1 in an int8 grid.
MAX_PALETTE_SIZE = int(np.iinfo(np.int8).max)


@dataclass(frozen=True)
class Board:
    """Immutable grid of settled cells.

    Every operation returns a new Board; ``cells`` keeps landing order and no
    two cells share a position.
    """

    cols: int
    rows: int
    cells: Tuple[Cell, ...] = ()

    @classmethod
    def create(cls, cols: int, rows: int) -> "Board":
        return cls(cols=int(cols), rows=int(rows), cells=())

    def row_cell_count(self, y: int) -> int:
        return sum(1 for cell in self.cells if cell.pos[1] == y)

    def filled_rows(self) -> List[int]:
        return [y for y in range(self.rows) if self.row_cell_count(y) >= self.cols]

    def clear_filled_rows(self) -> "Board":
        filled = self.filled_rows()
        if not filled:
            return self
        remaining = [cell for cell in self.cells if cell.pos[1] not in filled]
        # Each cleared row drops everything above it by one, applied row by row.
        for line in filled:
            remaining = [
                Cell(cell.color, (cell.pos[0], cell.pos[1] + 1)) if cell.pos[1] < line else cell
                for cell in remaining
            ]
        return replace(self, cells=tuple(remaining))

    def is_overflowing(self, buffer_rows: int = SPAWN_BUFFER_ROWS) -> bool:
        return any(cell.pos[1] < buffer_rows for cell in self.cells)

    def land_piece(self, piece: Piece) -> "Board":
        """Merge the piece's cells; placement must already be validated."""
        return replace(self, cells=self.cells + piece.occupied_cells())

    def occupied_positions(self) -> FrozenSet[Point]:
        return frozenset(cell.pos for cell in self.cells)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def to_array(self) -> np.ndarray:
        """Grid view: 0 for empty, ``color + 1`` for settled cells."""
        grid = np.zeros((self.rows, self.cols), dtype=np.int8)
        for cell in self.cells:
            x, y = cell.pos
            if self.is_inside(x, y):
                grid[y, x] = cell.color + 1
        return grid

    def get_max_height(self) -> int:
        grid = self.to_array()
        non_empty_rows = np.where(np.any(grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.rows - int(non_empty_rows[0])

    def count_holes(self) -> int:
        grid = self.to_array()
        holes = 0
        for x in range(self.cols):
            column = grid[:, x]
            seen_block = False
            for value in column:
                if value != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes
