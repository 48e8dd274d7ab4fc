"""
cli.py - Command-line interface for Connect Four

This module provides a CLI for playing Connect Four interactively,
analyzing board positions, and benchmarking the engine.
"""

import argparse
import random
import sys
from typing import List, Optional

import numpy as np

from connect_four.debug import debug, DebugLevel
from connect_four.errors import ColumnFullError, InvalidColumnError
from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame
from connect_four.utils import (ROWS, COLS, ASCII_GLYPHS, EMOJI_GLYPHS, Cell, MoveOutcome, Player,
                                parse_position)


def parse_column(text: str) -> int:
    """
    Parse a 1-indexed column number typed by a player.

    Args:
        text: The raw input line

    Returns:
        The 0-indexed column

    Raises:
        InvalidColumnError: If the input is not a number or is out of range
    """
    try:
        column = int(text.strip())
    except ValueError:
        raise InvalidColumnError("Please enter a valid column number") from None

    if not 1 <= column <= COLS:
        raise InvalidColumnError(f"Column {column} is invalid")
    return column - 1


def configure_debug(args: argparse.Namespace) -> None:
    """Configure the debug manager from parsed command-line arguments."""
    if args.debug:
        level = DebugLevel.DEBUG
    else:
        level = DebugLevel[args.debug_level.upper()]
    debug.configure(level=level, log_file=args.log_file)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser shared by run.py and this module."""
    parser = argparse.ArgumentParser(description='Connect Four')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level (default: warning)')
    parser.add_argument('--log-file', default=None, help='Also write log output to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a two-player game in the terminal')
    play_parser.add_argument('--starting-player', choices=['red', 'yellow'], default='red',
                             help='Player who moves first')
    play_parser.add_argument('--ascii', action='store_true',
                             help='Draw tokens as X and O instead of emoji')

    position_parser = subparsers.add_parser('position', help='Analyze a board position')
    position_parser.add_argument('--position', type=str, required=True,
                                 help=f'{ROWS * COLS} comma-separated cell values (0, 1, 2), '
                                      'bottom row first')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of iterations for benchmarking')

    return parser


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, starting_player: Player = Player.RED, ascii_glyphs: bool = False):
        self.game = ConnectFourGame(starting_player)
        self.glyphs = ASCII_GLYPHS if ascii_glyphs else EMOJI_GLYPHS
        self.args: Optional[argparse.Namespace] = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply them."""
        self.args = build_parser().parse_args(argv)
        configure_debug(self.args)

        if self.args.command == 'play':
            self.game = ConnectFourGame(Player[self.args.starting_player.upper()])
            self.glyphs = ASCII_GLYPHS if self.args.ascii else EMOJI_GLYPHS

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the CLI based on the parsed arguments.

        Returns:
            Process exit status
        """
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'position':
            self.test_position(self.args.position)
        elif self.args.command == 'benchmark':
            self.benchmark(self.args.iterations)
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """
        Play a game, reading one column per turn from standard input.

        Bad input and full columns are reported without using up a turn.
        Returns when the game is won, ends in a stalemate, or input ends.
        """
        debug.info(f"Starting game, {self.game.get_current_player()} moves first", "cli")

        while True:
            print(self.game.render(self.glyphs))

            try:
                column = self.get_human_move(self.game.get_current_player())
            except EOFError:
                print()
                debug.info("Input closed, leaving game", "cli")
                return

            if column is None:
                continue

            try:
                result = self.game.play(column)
            except ColumnFullError as e:
                # ColumnFullError.column is 0-indexed; players type 1-indexed columns
                print(f"Column {e.column + 1} is full.")
                continue

            if result.outcome == MoveOutcome.WON:
                print(f"{result.winner} has a connect 4!\n")
                print(self.game.render(self.glyphs))
                return
            if result.outcome == MoveOutcome.STALEMATE:
                print("Gameover, Stalemate")
                print(self.game.render(self.glyphs))
                return

    def get_human_move(self, player: Player) -> Optional[int]:
        """
        Prompt a player for a column.

        Returns:
            0-indexed column, or None if the input was invalid

        Raises:
            EOFError: If standard input is closed
        """
        user_input = input(f"Player {player}, enter a move: ")
        try:
            return parse_column(user_input)
        except InvalidColumnError as e:
            print(e)
            return None

    def test_position(self, position: str) -> None:
        """Load a position and report wins, free cells and valid moves."""
        try:
            grid = parse_position(position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return

        board = Board()
        board.grid = grid

        print("Loaded position:")
        print(board.render(self.glyphs))

        print("\nTesting win conditions:")
        has_win = False
        for player in Player:
            board.current_player = player
            owned = np.argwhere(board.grid == Cell.of(player).value)
            if any(board.has_won(int(row), int(col)) for row, col in owned):
                print(f"Win for {player} detected")
                has_win = True

        if not has_win:
            print("No win detected for any player")

        if board.is_full():
            print("Board is full")
        else:
            empty_count = int(np.sum(board.grid == Cell.EMPTY.value))
            print(f"Empty spaces: {empty_count}")

        print(f"Valid columns: {[col + 1 for col in board.get_valid_moves()]}")

    def benchmark(self, iterations: int) -> None:
        """Benchmark the performance of the Connect Four implementation."""
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board()
        board_init_time = debug.end_timer("board_init", "cli")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        games_played = 0
        total_moves = 0
        debug.start_timer("game_simulation")
        for _ in range(max(1, iterations // 10)):
            game = ConnectFourGame(random.choice(list(Player)))
            while not game.is_game_over():
                valid_moves = game.get_valid_moves()
                # A full board only reports its stalemate on the next attempt
                game.play(random.choice(valid_moves) if valid_moves else 0)
                total_moves += 1
            games_played += 1
        simulation_time = debug.end_timer("game_simulation", "cli")
        print(f"Played {games_played} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games_played * 1000:.6f} ms per game")

        board = ConnectFourGame.replay([3, 3, 2, 4, 4, 2, 1]).board
        debug.start_timer("rendering")
        for _ in range(iterations):
            board.render(self.glyphs)
        rendering_time = debug.end_timer("rendering", "cli")
        print(f"Rendering board {iterations} times: {rendering_time:.6f} seconds total, "
              f"{rendering_time / iterations * 1000:.6f} ms per render")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
