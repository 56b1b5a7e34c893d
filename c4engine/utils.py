"""
utils.py - Constants, enumerations and small helpers for the Connect Four engine

This module holds the board dimensions, the cell/player enumeration, the game
state value object, the placement result codes and the direction table used by
win detection.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple

import numpy as np

from c4engine.errors import ColumnFullError, GameOverError, InvalidColumnError

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Default look-ahead for the search opponent
SEARCH_DEPTH = 4


class Cell(Enum):
    """Occupant of a board position."""
    EMPTY = 0
    PLAYER_A = 1
    PLAYER_B = 2

    def other(self) -> 'Cell':
        """Get the opposing player."""
        if self == Cell.PLAYER_A:
            return Cell.PLAYER_B
        elif self == Cell.PLAYER_B:
            return Cell.PLAYER_A
        return Cell.EMPTY

    def is_player(self) -> bool:
        return self != Cell.EMPTY

    def __str__(self):
        return CELL_SYMBOLS[self]


CELL_SYMBOLS = {
    Cell.EMPTY: ".",
    Cell.PLAYER_A: "X",
    Cell.PLAYER_B: "O",
}


class GameStatus(Enum):
    IN_PROGRESS = auto()
    WON = auto()
    DRAW = auto()


@dataclass(frozen=True)
class GameState:
    """
    Outcome of the game so far.

    winner is only meaningful for WON; it is Cell.EMPTY otherwise.
    """
    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Cell = Cell.EMPTY

    @classmethod
    def in_progress(cls) -> 'GameState':
        return cls(GameStatus.IN_PROGRESS, Cell.EMPTY)

    @classmethod
    def won_by(cls, piece: Cell) -> 'GameState':
        if not piece.is_player():
            raise ValueError("Only a player can win")
        return cls(GameStatus.WON, piece)

    @classmethod
    def draw(cls) -> 'GameState':
        return cls(GameStatus.DRAW, Cell.EMPTY)

    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def __str__(self):
        if self.status == GameStatus.WON:
            return f"WonBy({self.winner.name})"
        if self.status == GameStatus.DRAW:
            return "Draw"
        return "InProgress"


class PlaceResult(Enum):
    """Outcome of a single Engine.place() call."""
    CONTINUE = auto()
    WIN = auto()
    DRAW = auto()
    COLUMN_FULL = auto()
    GAME_OVER = auto()
    INVALID_COLUMN = auto()

    def is_error(self) -> bool:
        """True when the move was rejected and nothing was mutated."""
        return self in (PlaceResult.COLUMN_FULL, PlaceResult.GAME_OVER,
                        PlaceResult.INVALID_COLUMN)

    def is_terminal(self) -> bool:
        return self in (PlaceResult.WIN, PlaceResult.DRAW)

    def raise_for_error(self, column: Optional[int] = None, cols: Optional[int] = None) -> 'PlaceResult':
        """
        Raise the matching exception for rejected moves, otherwise return self.

        cols is the width of the board the move was made on; when omitted the
        InvalidColumnError message carries no range.
        """
        if self == PlaceResult.INVALID_COLUMN:
            raise InvalidColumnError(column, cols)
        if self == PlaceResult.COLUMN_FULL:
            raise ColumnFullError(column)
        if self == PlaceResult.GAME_OVER:
            raise GameOverError()
        return self


class Direction(Enum):
    """Directions scanned by win detection."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # row and column both increasing
    DIAGONAL_DOWN = auto()  # row decreasing, column increasing


# (row, col) step for each direction; row 0 is the bottom of the board
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (-1, 1),
}


def is_valid_column(column, cols: int = COLS) -> bool:
    """True for an integer column index inside [0, cols)."""
    if isinstance(column, (bool, np.bool_)):
        return False
    if not isinstance(column, (int, np.integer)):
        return False
    return 0 <= column < cols


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid as text, top row first.

    Args:
        grid: Board grid indexed (row, col) with row 0 at the bottom

    Returns:
        Multi-line string with column numbers underneath
    """
    rows, cols = grid.shape
    border = "+" + "-" * (cols * 2 - 1) + "+"
    lines = [border]

    for row in range(rows - 1, -1, -1):
        cells = [str(Cell(int(value))) for value in grid[row]]
        lines.append("|" + " ".join(cells) + "|")

    lines.append(border)
    lines.append(" " + " ".join(str(col % 10) for col in range(cols)) + " ")
    return "\n".join(lines)
