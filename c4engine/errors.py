"""
errors.py - Exception types for the Connect Four engine

Placement never raises: Engine.place() reports every outcome as a PlaceResult.
These exceptions are for the lower-level Board API, whose callers are
expected to validate columns first, and for PlaceResult.raise_for_error().
"""

from typing import Optional


class Connect4Error(Exception):
    """Base class for all engine errors."""


class InvalidColumnError(Connect4Error, IndexError):
    """Column index outside [0, cols)."""

    def __init__(self, column, cols: Optional[int] = None):
        if cols is None:
            message = f"Column {column} is out of range"
        else:
            message = f"Column {column} is out of range (0-{cols - 1})"
        super().__init__(message)
        self.column = column
        self.cols = cols


class ColumnFullError(Connect4Error):
    """Column index is legal but has no open row."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class GameOverError(Connect4Error):
    """A move was attempted after the game reached a terminal state."""

    def __init__(self, message: str = "The game is over"):
        super().__init__(message)
