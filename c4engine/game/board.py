"""
board.py - Board representation for Connect Four

This module implements the Board class: a dense rows x cols numpy grid
addressed (row, col) with row 0 at the bottom. It answers legality questions,
performs the raw gravity drop and scans for N-in-a-row.

The Board does not track whose turn it is or whether the game is over; that
belongs to the Engine, which is the only code that should call drop().
"""

import numpy as np
from typing import List, Optional, Tuple

from c4engine.debug import debug
from c4engine.errors import ColumnFullError, InvalidColumnError
from c4engine.utils import (ROWS, COLS, CONNECT_N, Cell, DIRECTION_VECTORS,
                            is_valid_column, render_board_ascii)


class Board:
    """
    A fixed-size Connect Four grid.

    Invariant: the occupied cells of every column form one contiguous run
    starting at row 0.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N):
        if rows < 1 or cols < 1:
            raise ValueError(f"Board needs at least one row and column, got {rows}x{cols}")
        if connect_n < 1:
            raise ValueError(f"connect_n must be positive, got {connect_n}")

        self.rows = rows
        self.cols = cols
        self.connect_n = connect_n
        self.grid = np.zeros((rows, cols), dtype=np.int8)

    @classmethod
    def from_grid(cls, grid: np.ndarray, connect_n: int = CONNECT_N) -> 'Board':
        """
        Build a board from an existing (row 0 = bottom) grid.

        Raises ValueError if the grid holds unknown values or floating pieces.
        """
        grid = np.asarray(grid)
        if grid.ndim != 2:
            raise ValueError("Grid must be two-dimensional")

        board = cls(grid.shape[0], grid.shape[1], connect_n)
        if not np.isin(grid, [cell.value for cell in Cell]).all():
            raise ValueError("Grid contains values that are not cells")

        board.grid[:, :] = grid
        if not board.is_settled():
            raise ValueError("Grid has a piece above an empty cell")
        return board

    def _check_column(self, column):
        if not is_valid_column(column, self.cols):
            raise InvalidColumnError(column, self.cols)

    def can_drop(self, column: int) -> bool:
        """True iff the top cell of the column is empty."""
        self._check_column(column)
        return bool(self.grid[self.rows - 1, column] == Cell.EMPTY.value)

    def next_open_row(self, column: int) -> Optional[int]:
        """
        Find the lowest empty row in a column.

        Returns:
            The row index, or None if the column is full
        """
        self._check_column(column)
        for row in range(self.rows):
            if self.grid[row, column] == Cell.EMPTY.value:
                return row
        return None

    def drop(self, column: int, piece: Cell) -> int:
        """
        Write a piece into the lowest empty row of a column.

        Returns:
            The row the piece landed in
        """
        row = self.next_open_row(column)
        if row is None:
            raise ColumnFullError(column)

        debug.trace(f"Placing {piece.name} at ({row}, {column})", "board")
        self.grid[row, column] = piece.value
        return row

    def lift(self, column: int) -> Cell:
        """Remove the top piece of a column. Used by search on scratch boards."""
        self._check_column(column)
        row = self.next_open_row(column)
        top = self.rows - 1 if row is None else row - 1
        if top < 0:
            raise ValueError(f"Column {column} is empty")

        piece = Cell(int(self.grid[top, column]))
        self.grid[top, column] = Cell.EMPTY.value
        return piece

    def valid_moves(self) -> List[int]:
        return [col for col in range(self.cols)
                if self.grid[self.rows - 1, col] == Cell.EMPTY.value]

    def is_full(self) -> bool:
        return not bool((self.grid == Cell.EMPTY.value).any())

    def is_settled(self) -> bool:
        """Check the gravity invariant for every column."""
        occupied = self.grid != Cell.EMPTY.value
        # Once a column has an empty cell, nothing above it may be occupied
        return not bool((occupied[1:] & ~occupied[:-1]).any())

    def _line_starts(self, mask: np.ndarray, dr: int, dc: int) -> Tuple[int, np.ndarray]:
        """
        Mark every starting cell whose connect_n run along (dr, dc) is all True.

        Only starts whose whole run stays inside the grid are enumerated.

        Returns:
            (row_offset, hits) where hits[i, j] refers to start (i + row_offset, j)
        """
        span = self.connect_n - 1
        row_lo = span if dr < 0 else 0
        height = self.rows - span * abs(dr)
        width = self.cols - span * abs(dc)
        if height <= 0 or width <= 0:
            return row_lo, np.zeros((0, 0), dtype=bool)

        hits = np.ones((height, width), dtype=bool)
        for k in range(self.connect_n):
            r0 = row_lo + k * dr
            c0 = k * dc
            hits &= mask[r0:r0 + height, c0:c0 + width]
        return row_lo, hits

    def did_win(self, piece: Cell) -> bool:
        """True iff connect_n cells of piece line up in any direction."""
        if not piece.is_player():
            return False

        mask = self.grid == piece.value
        for dr, dc in DIRECTION_VECTORS.values():
            _, hits = self._line_starts(mask, dr, dc)
            if hits.any():
                return True
        return False

    def winning_line(self, piece: Cell) -> List[Tuple[int, int]]:
        """
        Get the cells of one winning run for piece.

        Returns:
            List of (row, col) positions, or an empty list if piece has no run
        """
        if not piece.is_player():
            return []

        mask = self.grid == piece.value
        for dr, dc in DIRECTION_VECTORS.values():
            row_lo, hits = self._line_starts(mask, dr, dc)
            starts = np.argwhere(hits)
            if len(starts):
                row, col = int(starts[0][0]) + row_lo, int(starts[0][1])
                return [(row + k * dr, col + k * dc) for k in range(self.connect_n)]
        return []

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the grid."""
        view = self.grid.copy()
        view.setflags(write=False)
        return view

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()

