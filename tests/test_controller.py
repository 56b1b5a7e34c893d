import unittest

from c4engine.game.controller import (AI_MISPLACED_MESSAGE, GameController, InvalidMovePolicy,
                                      play_match)
from c4engine.game.engine import Engine
from c4engine.strategies import RandomStrategy, SearchStrategy
from c4engine.utils import Cell, GameState, GameStatus, PlaceResult
from tests.helpers import A, B, DRAW_SEQUENCE, BrokenStrategy, ScriptedStrategy


class TestGameController(unittest.TestCase):
    def make(self, columns, policy=InvalidMovePolicy.REPORT):
        self.opponent = ScriptedStrategy(columns)
        return GameController(Engine(), self.opponent, invalid_move_policy=policy)

    def test_turn_plays_both_sides(self):
        controller = self.make([4])
        outcome = controller.play_turn(3)
        self.assertEqual(outcome.human_result, PlaceResult.CONTINUE)
        self.assertEqual(outcome.opponent_result, PlaceResult.CONTINUE)
        self.assertEqual(outcome.opponent_column, 4)
        self.assertIsNone(outcome.message)
        snapshot = controller.engine.snapshot()
        self.assertEqual(snapshot[0, 3], A.value)
        self.assertEqual(snapshot[0, 4], B.value)
        self.assertEqual(controller.status_message(), "")

    def test_full_column_reprompts_without_opponent_move(self):
        controller = self.make([0, 0, 0, 1])
        for _ in range(3):
            controller.play_turn(0)
        self.assertFalse(controller.engine.can_drop(0))

        outcome = controller.play_turn(0)
        self.assertEqual(outcome.human_result, PlaceResult.COLUMN_FULL)
        self.assertIsNone(outcome.opponent_result)
        self.assertEqual(outcome.message, "That column is full.")
        self.assertEqual(self.opponent.calls, 3)
        self.assertEqual(controller.engine.moves_made, 6)

    def test_out_of_range_human_move(self):
        controller = self.make([])
        outcome = controller.play_turn(9)
        self.assertEqual(outcome.human_result, PlaceResult.INVALID_COLUMN)
        self.assertEqual(outcome.message, "Column 9 is out of range.")
        self.assertEqual(self.opponent.calls, 0)

    def test_human_win_ends_turn(self):
        controller = self.make([1, 1, 1, 1])
        for _ in range(3):
            controller.play_turn(0)
        outcome = controller.play_turn(0)
        self.assertEqual(outcome.human_result, PlaceResult.WIN)
        self.assertIsNone(outcome.opponent_result)
        self.assertEqual(self.opponent.calls, 3)
        self.assertEqual(controller.status_message(), "You won!")

        outcome = controller.play_turn(2)
        self.assertEqual(outcome.human_result, PlaceResult.GAME_OVER)
        self.assertEqual(outcome.message, "The game is over.")

    def test_opponent_win(self):
        controller = self.make([1, 1, 1, 1])
        for column in (0, 2, 4):
            controller.play_turn(column)
        outcome = controller.play_turn(6)
        self.assertEqual(outcome.opponent_result, PlaceResult.WIN)
        self.assertEqual(controller.engine.current_state(), GameState.won_by(B))
        self.assertEqual(controller.status_message(), "AI won!")

    def test_opponent_bad_pick_is_reported(self):
        controller = self.make([0, 0, 0, 0])
        for _ in range(3):
            controller.play_turn(0)
        moves = controller.engine.moves_made
        outcome = controller.play_turn(1)
        self.assertEqual(outcome.opponent_result, PlaceResult.COLUMN_FULL)
        self.assertEqual(outcome.opponent_column, 0)
        self.assertEqual(outcome.message, AI_MISPLACED_MESSAGE)
        self.assertEqual(controller.engine.moves_made, moves + 1)
        self.assertEqual(controller.engine.current_state().status, GameStatus.IN_PROGRESS)

    def test_opponent_out_of_range_is_reported(self):
        controller = self.make([42])
        outcome = controller.play_turn(3)
        self.assertEqual(outcome.opponent_result, PlaceResult.INVALID_COLUMN)
        self.assertEqual(outcome.message, AI_MISPLACED_MESSAGE)

    def test_opponent_exception_is_reported(self):
        controller = self.make([])
        outcome = controller.play_turn(3)
        self.assertEqual(outcome.opponent_result, PlaceResult.INVALID_COLUMN)
        self.assertIsNone(outcome.opponent_column)
        self.assertEqual(outcome.message, AI_MISPLACED_MESSAGE)

    def test_opponent_crash_is_reported(self):
        controller = GameController(Engine(), BrokenStrategy())
        outcome = controller.play_turn(3)
        self.assertEqual(outcome.human_result, PlaceResult.CONTINUE)
        self.assertEqual(outcome.opponent_result, PlaceResult.INVALID_COLUMN)
        self.assertIsNone(outcome.opponent_column)
        self.assertEqual(outcome.message, AI_MISPLACED_MESSAGE)
        self.assertEqual(controller.engine.moves_made, 1)
        self.assertEqual(controller.engine.current_state(), GameState.in_progress())

    def test_opponent_crash_forfeits(self):
        controller = GameController(Engine(), BrokenStrategy(KeyError("missing")),
                                    invalid_move_policy=InvalidMovePolicy.FORFEIT)
        controller.play_turn(3)
        self.assertEqual(controller.engine.current_state(), GameState.won_by(A))

    def test_forfeit_policy(self):
        controller = self.make([7], policy=InvalidMovePolicy.FORFEIT)
        outcome = controller.play_turn(3)
        self.assertTrue(outcome.message.startswith(AI_MISPLACED_MESSAGE))
        self.assertEqual(controller.engine.current_state(), GameState.won_by(A))
        self.assertEqual(controller.status_message(), "You won!")

    def test_human_can_play_second_piece(self):
        controller = GameController(Engine(), ScriptedStrategy([2]), human=B)
        self.assertEqual(controller.opponent_piece, A)
        controller.play_turn(5)
        self.assertEqual(controller.engine.snapshot()[0, 5], B.value)
        self.assertEqual(controller.engine.snapshot()[0, 2], A.value)

    def test_human_must_be_a_player(self):
        with self.assertRaises(ValueError):
            GameController(Engine(), RandomStrategy(), human=Cell.EMPTY)

    def test_new_game(self):
        controller = self.make([1])
        controller.play_turn(0)
        controller.new_game()
        self.assertEqual(controller.engine.moves_made, 0)
        self.assertEqual(controller.engine.current_state(), GameState.in_progress())

    def test_draw_message(self):
        controller = self.make([])
        for i, column in enumerate(DRAW_SEQUENCE):
            controller.engine.place(column, A if i % 2 == 0 else B)
        self.assertEqual(controller.status_message(), "Draw.")


class TestPlayMatch(unittest.TestCase):
    def test_random_games_finish(self):
        for seed in range(5):
            result = play_match(RandomStrategy(seed=seed, legal_only=True),
                                RandomStrategy(seed=seed + 100, legal_only=True))
            self.assertTrue(result.state.is_terminal())
            self.assertGreaterEqual(result.moves, 7)

    def test_search_beats_scripted_opponent(self):
        result = play_match(SearchStrategy(depth=3), ScriptedStrategy([0, 0, 0, 6, 6, 6, 6]))
        self.assertEqual(result.state, GameState.won_by(A))

    def test_repeated_bad_picks_forfeit(self):
        result = play_match(ScriptedStrategy([3] * 10), ScriptedStrategy([9, 9, 9]), max_invalid=3)
        self.assertEqual(result.state, GameState.won_by(A))
        self.assertEqual(result.invalid_moves, 3)
        self.assertEqual(result.moves, 1)

    def test_crashing_strategy_forfeits(self):
        broken = BrokenStrategy()
        result = play_match(RandomStrategy(seed=1, legal_only=True), broken, max_invalid=2)
        self.assertEqual(result.state, GameState.won_by(A))
        self.assertEqual(result.invalid_moves, 2)
        self.assertEqual(result.moves, 1)
        self.assertEqual(broken.calls, 2)

    def test_max_invalid_must_be_positive(self):
        with self.assertRaises(ValueError):
            play_match(RandomStrategy(), RandomStrategy(), max_invalid=0)


if __name__ == '__main__':
    unittest.main()
