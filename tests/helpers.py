"""Shared fixtures for the test suite."""

import numpy as np

from c4engine.strategies.base import Strategy
from c4engine.utils import Cell

A = Cell.PLAYER_A
B = Cell.PLAYER_B

# Fills a 6x7 board, alternating A and B from A, without ever making four in a row.
DRAW_SEQUENCE = (
    [4] + [2] * 6 + [4] * 5
    + [5] + [3] * 6 + [5] * 5
    + [0] + [6] * 6 + [0] * 5
    + [1] * 6
)


def grid_with(cells, rows=6, cols=7):
    """Build a grid from {(row, col): Cell}."""
    grid = np.zeros((rows, cols), dtype=np.int8)
    for (row, col), piece in cells.items():
        grid[row, col] = piece.value
    return grid


def is_gravity_settled(grid) -> bool:
    for col in range(grid.shape[1]):
        seen_empty = False
        for row in range(grid.shape[0]):
            if grid[row, col] == Cell.EMPTY.value:
                seen_empty = True
            elif seen_empty:
                return False
    return True


class ScriptedStrategy(Strategy):
    """Plays a fixed list of columns, then raises."""

    name = "Scripted"

    def __init__(self, columns):
        self.columns = list(columns)
        self.calls = 0

    def choose_column(self, board, piece):
        self.calls += 1
        if not self.columns:
            raise ValueError("Script exhausted")
        return self.columns.pop(0)


class BrokenStrategy(Strategy):
    """Fails with an arbitrary exception on every call."""

    name = "Broken"

    def __init__(self, error=TypeError("strategy bug")):
        self.error = error
        self.calls = 0

    def choose_column(self, board, piece):
        self.calls += 1
        raise self.error
