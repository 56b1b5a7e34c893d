"""
search.py - Minimax search with alpha-beta pruning

SearchStrategy looks a fixed number of plies ahead on a scratch copy of the
snapshot it is given, so the real board is never touched.

The heuristic evaluation:
1. Prefers pieces in and near the centre column
2. Rewards open windows that are close to completion
3. Penalises the opponent's near-complete windows a little more than it
   rewards our own
"""

import math
from typing import Iterator, List

import numpy as np

from c4engine.debug import debug
from c4engine.game.board import Board
from c4engine.strategies.base import Strategy
from c4engine.utils import CONNECT_N, SEARCH_DEPTH, Cell, DIRECTION_VECTORS

WIN_SCORE = 100000


class SearchStrategy(Strategy):
    """
    Depth-limited minimax player.

    Faster wins score higher than slower ones, and slower losses score higher
    than faster ones.
    """

    name = "Minimax AI"

    def __init__(self, depth: int = SEARCH_DEPTH, connect_n: int = CONNECT_N):
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.connect_n = connect_n
        self.nodes_evaluated = 0

    def choose_column(self, board: np.ndarray, piece: Cell) -> int:
        scratch = Board.from_grid(board, self.connect_n)
        moves = self._ordered_moves(scratch)
        if not moves:
            raise ValueError("No valid moves.")

        self.nodes_evaluated = 0
        debug.start_timer("search")

        best_score = -math.inf
        best_column = moves[0]
        alpha = -math.inf
        beta = math.inf

        for column in moves:
            scratch.drop(column, piece)
            score = self._minimax(scratch, self.depth - 1, alpha, beta, False, piece)
            scratch.lift(column)

            if score > best_score:
                best_score = score
                best_column = column
            alpha = max(alpha, score)

        elapsed = debug.end_timer("search", "strategy")
        debug.debug(f"{self.name} chose column {best_column} (score {best_score}, "
                    f"{self.nodes_evaluated} nodes, {elapsed or 0.0:.3f}s)", "strategy")
        return best_column

    def _ordered_moves(self, board: Board) -> List[int]:
        # Centre first for better pruning
        center = board.cols // 2
        return sorted(board.valid_moves(), key=lambda c: abs(c - center))

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 is_maximizing: bool, me: Cell) -> float:
        self.nodes_evaluated += 1

        just_moved = me.other() if is_maximizing else me
        if board.did_win(just_moved):
            if just_moved == me:
                return WIN_SCORE + depth
            return -WIN_SCORE - depth

        if board.is_full():
            return 0

        if depth == 0:
            return self._evaluate_position(board, me)

        mover = me if is_maximizing else me.other()

        if is_maximizing:
            value = -math.inf
            for column in self._ordered_moves(board):
                board.drop(column, mover)
                value = max(value, self._minimax(board, depth - 1, alpha, beta, False, me))
                board.lift(column)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = math.inf
        for column in self._ordered_moves(board):
            board.drop(column, mover)
            value = min(value, self._minimax(board, depth - 1, alpha, beta, True, me))
            board.lift(column)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value

    def _windows(self, board: Board) -> Iterator[List[int]]:
        """Yield every in-grid run of connect_n cells."""
        n = board.connect_n
        grid = board.grid.tolist()
        for dr, dc in DIRECTION_VECTORS.values():
            for row in range(board.rows):
                end_row = row + (n - 1) * dr
                if not 0 <= end_row < board.rows:
                    continue
                for col in range(board.cols - (n - 1) * dc):
                    yield [grid[row + k * dr][col + k * dc] for k in range(n)]

    def _evaluate_position(self, board: Board, me: Cell) -> float:
        score = 0.0
        n = board.connect_n
        my_value = me.value
        opp_value = me.other().value
        empty_value = Cell.EMPTY.value

        center = board.cols // 2
        score += 3 * int((board.grid[:, center] == my_value).sum())
        score -= 3 * int((board.grid[:, center] == opp_value).sum())

        for window in self._windows(board):
            mine = window.count(my_value)
            theirs = window.count(opp_value)
            empty = window.count(empty_value)

            if theirs == 0:
                if mine == n - 1 and empty == 1:
                    score += 5
                elif mine == n - 2 and empty == 2:
                    score += 2
            elif mine == 0:
                if theirs == n - 1 and empty == 1:
                    score -= 6
                elif theirs == n - 2 and empty == 2:
                    score -= 2

        return score
