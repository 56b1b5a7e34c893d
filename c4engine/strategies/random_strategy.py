"""Uniform random opponent."""

from typing import Optional

import numpy as np

from c4engine.debug import debug
from c4engine.strategies.base import Strategy
from c4engine.utils import Cell


class RandomStrategy(Strategy):
    """
    Picks a column uniformly at random.

    By default the pick ignores whether the column is full, and the engine
    reports COLUMN_FULL for a bad choice. With legal_only=True only open
    columns are considered.
    """

    name = "Random AI"

    def __init__(self, seed: Optional[int] = None, legal_only: bool = False):
        self.rng = np.random.default_rng(seed)
        self.legal_only = legal_only

    def choose_column(self, board: np.ndarray, piece: Cell) -> int:
        cols = board.shape[1]
        if not self.legal_only:
            column = int(self.rng.integers(0, cols))
        else:
            open_columns = np.flatnonzero(board[-1] == Cell.EMPTY.value)
            if len(open_columns) == 0:
                raise ValueError("No valid moves.")
            column = int(self.rng.choice(open_columns))

        debug.trace(f"{self.name} picked column {column} for {piece.name}", "strategy")
        return column
