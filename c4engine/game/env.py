"""
env.py - Gymnasium environment around the Connect Four engine

The agent always plays PLAYER_A. After each accepted agent move the opponent
strategy answers as PLAYER_B through the same Engine.place() path a human
controller uses.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from c4engine.debug import debug
from c4engine.game.engine import Engine
from c4engine.strategies.base import Strategy
from c4engine.strategies.random_strategy import RandomStrategy
from c4engine.utils import ROWS, COLS, CONNECT_N, Cell, GameStatus, PlaceResult


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Observations are (rows, cols) int8 grids with row 0 at the bottom.
    """

    metadata = {'render_modes': ['ansi', 'human'], 'render_fps': 4}

    def __init__(self, opponent: Optional[Strategy] = None, render_mode: Optional[str] = None,
                 rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N):
        debug.debug("Initializing ConnectFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.engine = Engine(rows, cols, connect_n)
        self.opponent = opponent if opponent is not None else RandomStrategy(legal_only=True)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")

        self.engine.reset()
        if seed is not None and isinstance(self.opponent, RandomStrategy):
            self.opponent.rng = np.random.default_rng(seed)

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Play the agent's move, then the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if isinstance(action, np.ndarray) and action.ndim == 0:
            action = action.item()
        # Non-integer actions fall through to place() and come back INVALID_COLUMN
        result = self.engine.place(action, Cell.PLAYER_A)

        if result.is_error():
            debug.warning(f"Invalid action {action}: {result.name}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if result == PlaceResult.CONTINUE:
            try:
                column = self.opponent.choose_column(self.engine.snapshot(), Cell.PLAYER_B)
            except Exception as e:
                debug.warning(f"Opponent failed to choose a column: {e}", "env")
                self.engine.concede(Cell.PLAYER_B)
            else:
                if self.engine.place(column, Cell.PLAYER_B).is_error():
                    debug.warning(f"Opponent picked unplayable column {column}", "env")
                    self.engine.concede(Cell.PLAYER_B)

        reward, terminated = self._score()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _score(self) -> Tuple[float, bool]:
        state = self.engine.current_state()
        if state.status == GameStatus.WON:
            reward = self.reward_win if state.winner == Cell.PLAYER_A else self.reward_lose
            debug.info(f"Game over: {state}", "env")
            return reward, True
        if state.status == GameStatus.DRAW:
            debug.info("Game over: Draw", "env")
            return self.reward_draw, True
        return self.reward_step, False

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.snapshot().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        state = self.engine.current_state()
        valid_moves = self.engine.valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'status': state.status.name,
            'winner': state.winner.name,
            'moves_made': self.engine.moves_made,
            'last_move': self.engine.last_move,
            'winning_line': self.engine.winning_line(),
        }
