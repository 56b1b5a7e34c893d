"""
controller.py - Turn orchestration between a human and an opponent strategy

The controller owns no game state of its own. Everything a presentation layer
needs to show comes from the Engine's GameState or from the TurnOutcome
returned by the call that just happened.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from c4engine.debug import debug
from c4engine.game.engine import Engine
from c4engine.strategies.base import Strategy
from c4engine.strategies.random_strategy import RandomStrategy
from c4engine.utils import Cell, GameState, GameStatus, PlaceResult

AI_MISPLACED_MESSAGE = "AI placed incorrectly"


class InvalidMovePolicy(Enum):
    """What to do when the opponent strategy picks an unplayable column."""
    REPORT = auto()   # tell the user and hand the turn back
    FORFEIT = auto()  # the strategy loses the game


@dataclass(frozen=True)
class TurnOutcome:
    human_result: PlaceResult
    opponent_result: Optional[PlaceResult] = None
    opponent_column: Optional[int] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class MatchResult:
    state: GameState
    moves: int
    invalid_moves: int


def describe_rejection(result: PlaceResult, column) -> Optional[str]:
    """User-facing text for a rejected placement, or None if it was accepted."""
    if result == PlaceResult.COLUMN_FULL:
        return "That column is full."
    if result == PlaceResult.INVALID_COLUMN:
        return f"Column {column} is out of range."
    if result == PlaceResult.GAME_OVER:
        return "The game is over."
    return None


class GameController:
    """
    Drives an Engine for one human player against one Strategy.

    The opponent only moves after the human's placement returned CONTINUE,
    and its column is validated by Engine.place() like any other move.
    """

    def __init__(self, engine: Optional[Engine] = None, opponent: Optional[Strategy] = None,
                 human: Cell = Cell.PLAYER_A,
                 invalid_move_policy: InvalidMovePolicy = InvalidMovePolicy.REPORT):
        if not human.is_player():
            raise ValueError("The human must play PLAYER_A or PLAYER_B")
        if opponent is None:
            opponent = RandomStrategy()

        self.engine = engine if engine is not None else Engine()
        self.opponent = opponent
        self.human = human
        self.invalid_move_policy = invalid_move_policy

    @property
    def opponent_piece(self) -> Cell:
        return self.human.other()

    def new_game(self) -> None:
        debug.info("Starting a new game", "controller")
        self.engine.reset()

    def play_turn(self, column) -> TurnOutcome:
        """
        Play the human's move and, if the game goes on, the opponent's reply.

        Args:
            column: Column chosen by the human

        Returns:
            TurnOutcome describing both placements
        """
        human_result = self.engine.place(column, self.human)
        rejection = describe_rejection(human_result, column)
        if rejection is not None:
            debug.debug(f"Human move {column} rejected: {human_result.name}", "controller")
            return TurnOutcome(human_result, message=rejection)

        if human_result != PlaceResult.CONTINUE:
            return TurnOutcome(human_result)

        opponent_result, opponent_column, message = self.opponent_turn()
        return TurnOutcome(human_result, opponent_result, opponent_column, message)

    def opponent_turn(self) -> Tuple[PlaceResult, Optional[int], Optional[str]]:
        """
        Ask the strategy for a column and apply it.

        Returns:
            (result, column, message); column is None if the strategy failed
        """
        column = None
        try:
            column = self.opponent.choose_column(self.engine.snapshot(), self.opponent_piece)
        except Exception as e:
            debug.warning(f"{self.opponent.name} failed to choose a column: {e}", "controller")
            result = PlaceResult.INVALID_COLUMN
        else:
            result = self.engine.place(column, self.opponent_piece)

        if not result.is_error():
            debug.debug(f"{self.opponent.name} played column {column}: {result.name}", "controller")
            return result, column, None

        debug.warning(f"{self.opponent.name} picked unplayable column {column}: {result.name}", "controller")
        if self.invalid_move_policy == InvalidMovePolicy.FORFEIT:
            self.engine.concede(self.opponent_piece)
            return result, column, f"{AI_MISPLACED_MESSAGE}; the AI forfeits."
        return result, column, AI_MISPLACED_MESSAGE

    def status_message(self) -> str:
        """Text for the current GameState; empty while the game is running."""
        state = self.engine.current_state()
        if state.status == GameStatus.WON:
            return "You won!" if state.winner == self.human else "AI won!"
        if state.status == GameStatus.DRAW:
            return "Draw."
        return ""


def play_match(strategy_a: Strategy, strategy_b: Strategy, engine: Optional[Engine] = None,
               max_invalid: int = 3) -> MatchResult:
    """
    Play two strategies against each other until the game ends.

    strategy_a plays PLAYER_A and moves first. A strategy that produces
    max_invalid unplayable picks in a row forfeits.
    """
    if max_invalid < 1:
        raise ValueError("max_invalid must be at least 1")

    engine = engine if engine is not None else Engine()
    strategies = {Cell.PLAYER_A: strategy_a, Cell.PLAYER_B: strategy_b}
    current = Cell.PLAYER_A
    misses = 0
    invalid_moves = 0

    while not engine.is_game_over():
        strategy = strategies[current]
        try:
            column = strategy.choose_column(engine.snapshot(), current)
        except Exception as e:
            debug.warning(f"{strategy.name} failed to choose a column: {e}", "controller")
            result = PlaceResult.INVALID_COLUMN
        else:
            result = engine.place(column, current)

        if result.is_error():
            misses += 1
            invalid_moves += 1
            if misses >= max_invalid:
                debug.info(f"{strategy.name} forfeits after {misses} unplayable picks", "controller")
                engine.concede(current)
            continue

        misses = 0
        current = current.other()

    return MatchResult(engine.current_state(), engine.moves_made, invalid_moves)
