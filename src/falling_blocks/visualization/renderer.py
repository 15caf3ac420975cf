from __future__ import annotations

from typing import Union

import pygame

from falling_blocks.game import Board, Piece
from falling_blocks.game.geometry import Point
from .palette import BACKGROUND, SPAWN_BUFFER, RGB, color_for_index


class Renderer:
    """Paints the two drawable engine values onto a pygame surface."""

    def __init__(self, cell_size: int = 28, spawn_buffer_rows: int = 4) -> None:
        self.cell_size = cell_size
        self.spawn_buffer_rows = spawn_buffer_rows

    def surface_size(self, board: Board) -> tuple[int, int]:
        return board.cols * self.cell_size, board.rows * self.cell_size

    def _fill_point(self, surface: pygame.Surface, pos: Point, color: RGB) -> None:
        x, y = pos
        rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size, self.cell_size)
        pygame.draw.rect(surface, color, rect)

    def _paint_board(self, surface: pygame.Surface, board: Board) -> None:
        width, height = self.surface_size(board)
        surface.fill(BACKGROUND, pygame.Rect(0, 0, width, height))
        surface.fill(SPAWN_BUFFER, pygame.Rect(0, 0, width, self.spawn_buffer_rows * self.cell_size))
        for cell in board.cells:
            self._fill_point(surface, cell.pos, color_for_index(cell.color))

    def _paint_piece(self, surface: pygame.Surface, piece: Piece) -> None:
        for cell in piece.occupied_cells():
            self._fill_point(surface, cell.pos, color_for_index(cell.color))

    def paint(self, surface: pygame.Surface, obj: Union[Board, Piece]) -> None:
        if isinstance(obj, Board):
            self._paint_board(surface, obj)
        elif isinstance(obj, Piece):
            self._paint_piece(surface, obj)
        else:
            raise TypeError(f"cannot paint {type(obj).__name__}")

    def draw(self, screen: pygame.Surface, board: Board, piece: Piece) -> None:
        self.paint(screen, board)
        self.paint(screen, piece)
        pygame.display.flip()
