"""
engine.py - Game state management for Connect Four

The Engine owns a Board and the GameState. place() is the only way to change
either of them, and it reports every outcome (including rejected moves) as a
PlaceResult instead of raising.
"""

from typing import List, Optional, Tuple

import numpy as np

from c4engine.debug import debug
from c4engine.game.board import Board
from c4engine.utils import (ROWS, COLS, CONNECT_N, Cell, GameState, PlaceResult,
                            is_valid_column)


class Engine:
    """
    Connect Four rules engine.

    The engine does not enforce turn order; the controller decides who moves.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N):
        debug.debug(f"Initializing Engine ({rows}x{cols}, connect {connect_n})", "engine")
        self._board = Board(rows, cols, connect_n)
        self._state = GameState.in_progress()
        self._moves_made = 0
        self._last_move: Optional[Tuple[int, int]] = None

    def reset(self) -> None:
        """Empty the board and return to InProgress."""
        debug.debug("Resetting engine", "engine")
        self._board = Board(self._board.rows, self._board.cols, self._board.connect_n)
        self._state = GameState.in_progress()
        self._moves_made = 0
        self._last_move = None

    @property
    def rows(self) -> int:
        return self._board.rows

    @property
    def cols(self) -> int:
        return self._board.cols

    @property
    def connect_n(self) -> int:
        return self._board.connect_n

    @property
    def moves_made(self) -> int:
        return self._moves_made

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        return self._last_move

    def can_drop(self, column: int) -> bool:
        return self._board.can_drop(column)

    def next_open_row(self, column: int) -> Optional[int]:
        return self._board.next_open_row(column)

    def did_win(self, piece: Cell) -> bool:
        return self._board.did_win(piece)

    def valid_moves(self) -> List[int]:
        if self._state.is_terminal():
            return []
        return self._board.valid_moves()

    def current_state(self) -> GameState:
        return self._state

    def is_game_over(self) -> bool:
        return self._state.is_terminal()

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the grid for rendering and strategies."""
        return self._board.snapshot()

    def winning_line(self) -> List[Tuple[int, int]]:
        return self._board.winning_line(self._state.winner)

    def render(self) -> str:
        return self._board.render()

    def place(self, column: int, piece: Cell) -> PlaceResult:
        """
        Drop a piece into a column and evaluate the result.

        Args:
            column: Column index (0-indexed)
            piece: Cell.PLAYER_A or Cell.PLAYER_B

        Returns:
            WIN, DRAW or CONTINUE after a successful drop; GAME_OVER,
            INVALID_COLUMN or COLUMN_FULL when nothing was changed
        """
        if not isinstance(piece, Cell) or not piece.is_player():
            raise ValueError(f"Cannot place {piece!r}; expected a player piece")

        if self._state.is_terminal():
            debug.debug(f"Rejected {piece.name} in column {column}: game is over ({self._state})", "engine")
            return PlaceResult.GAME_OVER

        if not is_valid_column(column, self.cols):
            debug.debug(f"Rejected {piece.name} in column {column}: out of range", "engine")
            return PlaceResult.INVALID_COLUMN

        if not self._board.can_drop(column):
            debug.debug(f"Rejected {piece.name} in column {column}: column is full", "engine")
            return PlaceResult.COLUMN_FULL

        row = self._board.drop(column, piece)
        self._moves_made += 1
        self._last_move = (row, int(column))
        debug.debug(f"{piece.name} dropped into column {column}, landed on row {row}", "engine")

        debug.start_timer("win_check")
        won = self._board.did_win(piece)
        debug.end_timer("win_check", "engine")

        if won:
            self._state = GameState.won_by(piece)
            debug.info(f"{piece.name} wins after move at {self._last_move}", "engine")
            return PlaceResult.WIN

        if self._board.is_full():
            self._state = GameState.draw()
            debug.info("Game ends in a draw", "engine")
            return PlaceResult.DRAW

        return PlaceResult.CONTINUE

    def concede(self, piece: Cell) -> PlaceResult:
        """
        Record that piece forfeits the game.

        Returns:
            WIN if the opponent is now the winner, GAME_OVER if already terminal
        """
        if not isinstance(piece, Cell) or not piece.is_player():
            raise ValueError(f"Cannot concede for {piece!r}; expected a player piece")

        if self._state.is_terminal():
            return PlaceResult.GAME_OVER

        self._state = GameState.won_by(piece.other())
        debug.info(f"{piece.name} forfeits; {piece.other().name} wins", "engine")
        return PlaceResult.WIN
