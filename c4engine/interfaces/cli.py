"""
cli.py - Command-line interface for the Connect Four engine

Commands:
    play       play against a strategy in the terminal
    simulate   pit two strategies against each other and tally the results
    benchmark  time placements, win checks and full random games
"""

import argparse
import sys
from collections import Counter
from typing import List, Optional

import numpy as np

from c4engine.debug import debug, DebugLevel
from c4engine.game.controller import GameController, InvalidMovePolicy, play_match
from c4engine.game.engine import Engine
from c4engine.strategies import STRATEGY_TYPES, Strategy, make_strategy
from c4engine.utils import COLS, SEARCH_DEPTH, Cell, GameStatus

QUIT = 'q'
RESTART = 'r'


def build_strategy(kind: str, depth: int = SEARCH_DEPTH, seed: Optional[int] = None,
                   legal_only: bool = False) -> Strategy:
    if kind == 'search':
        return make_strategy('search', depth=depth)
    return make_strategy(kind, seed=seed, legal_only=legal_only)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four engine')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging (same as --debug_level debug)')
    parser.add_argument('--debug_level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging verbosity (default: warning)')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Also write log records to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--opponent', choices=sorted(STRATEGY_TYPES), default='random',
                             help='Opponent strategy')
    play_parser.add_argument('--depth', type=int, default=SEARCH_DEPTH,
                             help='Search depth for the search opponent')
    play_parser.add_argument('--seed', type=int, default=None, help='Seed for the random opponent')
    play_parser.add_argument('--forfeit', action='store_true',
                             help='Opponent forfeits when it picks an unplayable column')

    sim_parser = subparsers.add_parser('simulate', help='Play strategies against each other')
    sim_parser.add_argument('--first', choices=sorted(STRATEGY_TYPES), default='random')
    sim_parser.add_argument('--second', choices=sorted(STRATEGY_TYPES), default='random')
    sim_parser.add_argument('--games', type=int, default=100, help='Number of games to play')
    sim_parser.add_argument('--depth', type=int, default=SEARCH_DEPTH)
    sim_parser.add_argument('--seed', type=int, default=None)
    sim_parser.add_argument('--legal_only', action='store_true',
                            help='Random strategies only pick open columns')

    bench_parser = subparsers.add_parser('benchmark', help='Benchmark engine performance')
    bench_parser.add_argument('--iterations', type=int, default=1000,
                              help='Number of iterations for benchmarking')
    bench_parser.add_argument('--seed', type=int, default=None)

    return parser


class SimpleCLI:
    """Terminal front end for the engine."""

    def __init__(self, argv: Optional[List[str]] = None, input_func=input, output=None):
        self.argv = argv
        self.input = input_func
        self.output = output or sys.stdout
        self.args = None

    def say(self, text: str = "") -> None:
        print(text, file=self.output)

    def parse_args(self) -> None:
        self.args = build_parser().parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            return self.play_game()
        if self.args.command == 'simulate':
            return self.simulate()
        if self.args.command == 'benchmark':
            return self.benchmark()

        build_parser().print_help(self.output)
        return 1

    def play_game(self) -> int:
        """Play a game against the chosen opponent."""
        opponent = build_strategy(self.args.opponent, self.args.depth, self.args.seed)
        policy = InvalidMovePolicy.FORFEIT if self.args.forfeit else InvalidMovePolicy.REPORT
        controller = GameController(Engine(), opponent, invalid_move_policy=policy)
        cols = controller.engine.cols

        self.say(f"Starting a new game against {opponent.name}!")
        self.say(f"You are {Cell.PLAYER_A}. Enter a column (0-{cols - 1}), "
                 f"'{RESTART}' to restart or '{QUIT}' to quit.")
        self.say(controller.engine.render())

        while True:
            if controller.engine.is_game_over():
                self.say(controller.status_message())
                return 0

            try:
                raw = self.input("Your move: ").strip().lower()
            except EOFError:
                self.say("Quitting game.")
                return 0

            if raw == QUIT:
                self.say("Quitting game.")
                return 0
            if raw == RESTART:
                controller.new_game()
                self.say("Game restarted.")
                self.say(controller.engine.render())
                continue

            try:
                column = int(raw)
            except ValueError:
                self.say("Invalid input. Please enter a column number or a command.")
                continue

            outcome = controller.play_turn(column)
            if outcome.opponent_column is not None and not outcome.opponent_result.is_error():
                self.say(f"{opponent.name} plays column {outcome.opponent_column}")
            if outcome.message:
                self.say(outcome.message)
            self.say(controller.engine.render())

    def simulate(self) -> int:
        """Play several games between two strategies and print a summary."""
        if self.args.games < 1:
            self.say("--games must be at least 1")
            return 1

        first = build_strategy(self.args.first, self.args.depth, self.args.seed, self.args.legal_only)
        second_seed = None if self.args.seed is None else self.args.seed + 1
        second = build_strategy(self.args.second, self.args.depth, second_seed, self.args.legal_only)

        tally = Counter()
        total_moves = 0
        total_invalid = 0
        debug.start_timer("simulate")
        for _ in range(self.args.games):
            result = play_match(first, second)
            total_moves += result.moves
            total_invalid += result.invalid_moves
            if result.state.status == GameStatus.WON:
                tally[result.state.winner] += 1
            else:
                tally['draw'] += 1
        elapsed = debug.end_timer("simulate", "cli") or 0.0

        games = self.args.games
        self.say(f"{first.name} ({Cell.PLAYER_A}) vs {second.name} ({Cell.PLAYER_B}), {games} games")
        self.say(f"  {Cell.PLAYER_A} wins: {tally[Cell.PLAYER_A]}")
        self.say(f"  {Cell.PLAYER_B} wins: {tally[Cell.PLAYER_B]}")
        self.say(f"  draws:  {tally['draw']}")
        self.say(f"  average length: {total_moves / games:.1f} moves, "
                 f"{total_invalid} unplayable picks, {elapsed:.3f}s")
        return 0

    def benchmark(self) -> int:
        """Time the hot paths of the engine."""
        iterations = self.args.iterations
        if iterations < 1:
            self.say("--iterations must be at least 1")
            return 1

        rng = np.random.default_rng(self.args.seed)

        engine = Engine()
        debug.start_timer("placement")
        placements = 0
        for _ in range(iterations):
            if engine.is_game_over():
                engine.reset()
            engine.place(int(rng.integers(0, COLS)), Cell.PLAYER_A if placements % 2 == 0 else Cell.PLAYER_B)
            placements += 1
        placement_time = debug.end_timer("placement", "cli") or 0.0
        self.say(f"{iterations} placements: {placement_time:.6f} seconds total, "
                 f"{placement_time / iterations * 1000:.6f} ms per placement")

        debug.start_timer("win_scan")
        for _ in range(iterations):
            engine.did_win(Cell.PLAYER_A)
        scan_time = debug.end_timer("win_scan", "cli") or 0.0
        self.say(f"{iterations} win scans: {scan_time:.6f} seconds total, "
                 f"{scan_time / iterations * 1000:.6f} ms per scan")

        games = max(1, iterations // 10)
        seed = None if self.args.seed is None else self.args.seed + 1
        first = build_strategy('random', seed=seed, legal_only=True)
        second = build_strategy('random', seed=None if seed is None else seed + 1, legal_only=True)
        debug.start_timer("games")
        total_moves = sum(play_match(first, second).moves for _ in range(games))
        game_time = debug.end_timer("games", "cli") or 0.0
        self.say(f"Played {games} games with {total_moves} total moves: "
                 f"{game_time / games * 1000:.6f} ms per game")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
