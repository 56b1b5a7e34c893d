"""
c4engine.game - Core game mechanics for Connect Four

This package contains the board representation, the rules engine, the turn
controller and a Gymnasium environment wrapping the engine.
"""

from c4engine.game.board import Board
from c4engine.game.engine import Engine
from c4engine.game.controller import GameController, InvalidMovePolicy, TurnOutcome, play_match
from c4engine.game.env import ConnectFourEnv

__all__ = ['Board', 'Engine', 'GameController', 'InvalidMovePolicy', 'TurnOutcome',
           'play_match', 'ConnectFourEnv']
