import unittest

import numpy as np

from c4engine.game.engine import Engine
from c4engine.strategies import RandomStrategy, SearchStrategy, Strategy, make_strategy
from c4engine.utils import PlaceResult
from tests.helpers import A, B, grid_with


def full_except(open_column):
    """A settled grid with every column full except one, with no four in a row."""
    grid = np.zeros((6, 7), dtype=np.int8)
    for col in range(7):
        if col == open_column:
            continue
        for row in range(6):
            grid[row, col] = A.value if ((col // 2) + row) % 2 == 0 else B.value
    grid.setflags(write=False)
    return grid


class TestRandomStrategy(unittest.TestCase):
    def test_picks_any_column_in_range(self):
        strategy = RandomStrategy(seed=3)
        board = Engine().snapshot()
        picks = {strategy.choose_column(board, B) for _ in range(200)}
        self.assertEqual(picks, set(range(7)))
        self.assertTrue(all(isinstance(pick, int) for pick in picks))

    def test_seed_is_reproducible(self):
        board = Engine().snapshot()
        first, again = RandomStrategy(seed=11), RandomStrategy(seed=11)
        self.assertEqual([first.choose_column(board, A) for _ in range(10)],
                         [again.choose_column(board, A) for _ in range(10)])

    def test_default_mode_may_pick_a_full_column(self):
        strategy = RandomStrategy(seed=0)
        board = full_except(4)
        picks = {strategy.choose_column(board, B) for _ in range(100)}
        self.assertTrue(picks - {4})

    def test_legal_only(self):
        strategy = RandomStrategy(seed=0, legal_only=True)
        board = full_except(4)
        for _ in range(20):
            self.assertEqual(strategy.choose_column(board, B), 4)

    def test_legal_only_on_full_board(self):
        board = full_except(-1)
        with self.assertRaises(ValueError):
            RandomStrategy(legal_only=True).choose_column(board, A)


class TestSearchStrategy(unittest.TestCase):
    def test_takes_immediate_win(self):
        grid = grid_with({(0, 0): A, (0, 1): A, (0, 2): A, (1, 0): B, (1, 1): B, (1, 2): B})
        self.assertEqual(SearchStrategy(depth=3).choose_column(grid, A), 3)

    def test_blocks_immediate_loss(self):
        grid = grid_with({(0, 0): B, (0, 1): B, (0, 2): B, (1, 0): A, (1, 1): A})
        self.assertEqual(SearchStrategy(depth=2).choose_column(grid, A), 3)

    def test_blocks_vertical_threat(self):
        grid = grid_with({(0, 5): B, (1, 5): B, (2, 5): B, (0, 2): A, (0, 3): A})
        strategy = SearchStrategy(depth=2)
        self.assertEqual(strategy.choose_column(grid, A), 5)
        self.assertGreater(strategy.nodes_evaluated, 0)

    def test_does_not_touch_the_snapshot(self):
        engine = Engine()
        engine.place(3, A)
        snapshot = engine.snapshot()
        before = snapshot.copy()
        column = SearchStrategy(depth=3).choose_column(snapshot, B)
        self.assertTrue(np.array_equal(before, snapshot))
        self.assertEqual(engine.place(column, B), PlaceResult.CONTINUE)

    def test_only_legal_columns(self):
        board = full_except(6)
        self.assertEqual(SearchStrategy(depth=3).choose_column(board, A), 6)

    def test_full_board(self):
        with self.assertRaises(ValueError):
            SearchStrategy(depth=2).choose_column(full_except(-1), A)

    def test_depth_must_be_positive(self):
        with self.assertRaises(ValueError):
            SearchStrategy(depth=0)


class TestFactory(unittest.TestCase):
    def test_make_strategy(self):
        self.assertIsInstance(make_strategy('random', seed=1), RandomStrategy)
        search = make_strategy('search', depth=2)
        self.assertIsInstance(search, SearchStrategy)
        self.assertIsInstance(search, Strategy)
        self.assertEqual(search.depth, 2)

    def test_unknown_strategy(self):
        with self.assertRaises(ValueError):
            make_strategy('oracle')


if __name__ == '__main__':
    unittest.main()
