from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

import numpy as np

from .board import MAX_PALETTE_SIZE, SPAWN_BUFFER_ROWS, Board
from .geometry import DIRECTIONS, NUM_ROTATIONS, SHAPE_BOX_SIZE, InvalidArgument, Point
from .pieces import START_POS, Cell, Piece, create_piece


logger = logging.getLogger(__name__)


class Command(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    DOWN = 3
    NONE = 4


@dataclass(frozen=True)
class GameConfig:
    cols: int = 9
    rows: int = 20
    spawn_pos: Point = START_POS
    rotation_modulus: int = NUM_ROTATIONS
    palette_size: int = 10
    spawn_buffer_rows: int = SPAWN_BUFFER_ROWS
    # Read by the presentation loop only; the engine reacts to ticks, not time.
    fall_delay_ms: int = 370
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.cols}x{self.rows}")
        if not 1 <= self.palette_size <= MAX_PALETTE_SIZE:
            raise ValueError(f"palette_size must be in [1, {MAX_PALETTE_SIZE}], got {self.palette_size}")
        if not 1 <= self.rotation_modulus <= NUM_ROTATIONS:
            raise ValueError(f"rotation_modulus must be in [1, {NUM_ROTATIONS}], got {self.rotation_modulus}")
        # Settled cells in the rows a spawned piece covers must already have reset the board.
        min_buffer = self.spawn_pos[1] + SHAPE_BOX_SIZE
        if self.spawn_buffer_rows < min_buffer:
            raise ValueError(f"spawn_buffer_rows must be >= {min_buffer}, got {self.spawn_buffer_rows}")


@dataclass(frozen=True)
class EngineState:
    board: Board
    piece: Piece


@dataclass(frozen=True)
class TickResult:
    landed: bool = False
    lines_cleared: int = 0
    reset: bool = False


DEFAULT_CONFIG = GameConfig()
CommandLike = Union[Command, int, str]


def is_valid_placement(piece: Piece, board: Board) -> bool:
    occupied = board.occupied_positions()
    for cell in piece.occupied_cells():
        x, y = cell.pos
        if not board.is_inside(x, y):
            return False
        if cell.pos in occupied:
            return False
    return True


def move(piece: Piece, direction: str, board: Board) -> Piece:
    try:
        delta = DIRECTIONS[direction]
    except KeyError:
        raise InvalidArgument(f"unknown direction {direction!r}") from None
    candidate = piece.moved(delta)
    if is_valid_placement(candidate, board):
        return candidate
    return piece


def rotate(piece: Piece, board: Board, modulus: int = NUM_ROTATIONS) -> Piece:
    candidate = piece.rotated(modulus)
    if is_valid_placement(candidate, board):
        return candidate
    return piece


def spawn_piece(config: GameConfig, rng: Optional[random.Random] = None) -> Piece:
    return create_piece(rng=rng, start_pos=config.spawn_pos, palette_size=config.palette_size)


def fall(
    board: Board,
    piece: Piece,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Board, Piece, TickResult]:
    """One gravity step, reporting whether the piece landed and what it cleared."""
    config = config or DEFAULT_CONFIG
    candidate = piece.moved(DIRECTIONS["down"])
    if is_valid_placement(candidate, board):
        board_after, piece_after = board, candidate
        landed, lines = False, 0
    else:
        landed_board = board.land_piece(piece)
        lines = len(landed_board.filled_rows())
        board_after = landed_board.clear_filled_rows()
        piece_after = spawn_piece(config, rng)
        landed = True
        logger.debug("Piece %s landed at %s; cleared %d row(s)", piece.kind, piece.pos, lines)

    # Checked after every step, landing or not.
    if board_after.is_overflowing(config.spawn_buffer_rows):
        logger.info("Board overflowed into the spawn buffer; resetting")
        board_after = Board.create(board.cols, board.rows)
        piece_after = spawn_piece(config, rng)
        return board_after, piece_after, TickResult(landed=landed, lines_cleared=lines, reset=True)
    return board_after, piece_after, TickResult(landed=landed, lines_cleared=lines, reset=False)


def tick(
    board: Board,
    piece: Piece,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Board, Piece]:
    board_after, piece_after, _ = fall(board, piece, config, rng)
    return board_after, piece_after


def _as_command(cmd: CommandLike) -> Command:
    if isinstance(cmd, str):
        return Command.__members__.get(cmd.upper(), Command.NONE)
    try:
        return Command(cmd)
    except ValueError:
        return Command.NONE


def new_game(
    cols: Optional[int] = None,
    rows: Optional[int] = None,
    *,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> EngineState:
    """Start a round on an empty board; explicit dimensions override the config."""
    config = config or DEFAULT_CONFIG
    board = Board.create(config.cols if cols is None else cols, config.rows if rows is None else rows)
    return EngineState(board=board, piece=spawn_piece(config, rng))


def apply_command(
    state: EngineState,
    cmd: CommandLike,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[EngineState, TickResult]:
    config = config or DEFAULT_CONFIG
    command = _as_command(cmd)
    if command == Command.LEFT:
        return EngineState(state.board, move(state.piece, "left", state.board)), TickResult()
    if command == Command.RIGHT:
        return EngineState(state.board, move(state.piece, "right", state.board)), TickResult()
    if command == Command.ROTATE:
        piece = rotate(state.piece, state.board, config.rotation_modulus)
        return EngineState(state.board, piece), TickResult()
    if command == Command.DOWN:
        board, piece, result = fall(state.board, state.piece, config, rng)
        return EngineState(board, piece), result
    return state, TickResult()


def on_tick(
    state: EngineState,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> EngineState:
    board, piece = tick(state.board, state.piece, config, rng)
    return EngineState(board, piece)


def on_command(
    state: EngineState,
    cmd: CommandLike,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> EngineState:
    new_state, _ = apply_command(state, cmd, config, rng)
    return new_state


def board_cells(state: EngineState) -> Tuple[Cell, ...]:
    return state.board.cells


def piece_cells(state: EngineState) -> Tuple[Cell, ...]:
    return state.piece.occupied_cells()


def dimensions(state: EngineState) -> Tuple[int, int]:
    return state.board.cols, state.board.rows


class FallingBlocksGame:
    """Owns the current engine state and serialises every transition on it."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.random_seed)
        self._lock = threading.Lock()
        self._state = new_game(config=self.config, rng=self.rng)

    @property
    def state(self) -> EngineState:
        return self._state

    def reset(self, seed: Optional[int] = None) -> EngineState:
        with self._lock:
            if seed is not None:
                self.rng.seed(seed)
            self._state = new_game(config=self.config, rng=self.rng)
            return self._state

    def tick(self) -> TickResult:
        with self._lock:
            board, piece, result = fall(self._state.board, self._state.piece, self.config, self.rng)
            self._state = EngineState(board, piece)
            return result

    def step(self, command: CommandLike) -> TickResult:
        with self._lock:
            self._state, result = apply_command(self._state, command, self.config, self.rng)
            return result

    def get_state(self) -> np.ndarray:
        state = self._state
        grid = state.board.to_array()
        # Falling cells are marked -(kind + 1) so they never collide with colour values.

        for cell in state.piece.occupied_cells():
            x, y = cell.pos
            if state.board.is_inside(x, y):
                grid[y, x] = -(int(state.piece.kind) + 1)
        return grid
