"""Abstract base class for opponent strategies."""

import abc

import numpy as np

from c4engine.utils import Cell


class Strategy(abc.ABC):
    """
    Picks a column for a non-human player.

    Strategies only ever see a read-only snapshot of the grid (row 0 at the
    bottom). The column they return still goes through Engine.place(), so a
    bad pick is reported, never applied.
    """

    name: str = "Strategy"

    @abc.abstractmethod
    def choose_column(self, board: np.ndarray, piece: Cell) -> int:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
