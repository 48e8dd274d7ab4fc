"""
rules.py - Game session management and Gymnasium environment for Connect Four

This module provides:
1. A headless game session that any driver can use to play a game
2. A gymnasium-compatible environment for automated drivers and agents
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Iterable, List, Optional, Tuple

from connect_four.debug import debug
from connect_four.errors import ColumnFullError, ConnectFourError, InvalidColumnError
from connect_four.game.board import Board
from connect_four.utils import (ROWS, COLS, ASCII_GLYPHS, EMOJI_GLYPHS, GameMoveResult,
                                MoveOutcome, Player)


class ConnectFourGame:
    """
    High-level Connect Four game session.

    Wraps a Board and remembers the last move result so that no move is
    accepted once the game has ended. It performs no I/O.
    """

    def __init__(self, starting_player: Player = Player.RED):
        """
        Initialize a new Connect Four game.

        Args:
            starting_player: The player who makes the first move
        """
        debug.debug("Initializing ConnectFourGame", "game")
        self.starting_player = starting_player
        self.board = Board(starting_player)
        self.last_result: Optional[GameMoveResult] = None

    @classmethod
    def replay(cls, moves: Iterable[int], starting_player: Player = Player.RED) -> 'ConnectFourGame':
        """
        Build a game by playing a sequence of columns.

        Replay stops at the first terminal result; any moves after it are
        ignored. Rejected moves propagate as errors.

        Args:
            moves: Columns to play, 0-indexed
            starting_player: The player who makes the first move

        Returns:
            The game after the moves have been played
        """
        game = cls(starting_player)
        for move in moves:
            if game.play(move).is_terminal():
                break
        return game

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board = Board(self.starting_player)
        self.last_result = None

    def play(self, column: int) -> GameMoveResult:
        """
        Make a move in the game.

        Args:
            column: Column to drop a token into (0-indexed)

        Returns:
            The result of the move

        Raises:
            ConnectFourError: If the game is already over, or the move is rejected
        """
        if self.is_game_over():
            raise ConnectFourError("Game is already over.")

        debug.debug(f"Game: Making move in column {column}", "game")
        self.last_result = self.board.game_move(column)
        return self.last_result

    def is_game_over(self) -> bool:
        """Check if a terminal result has been reached."""
        return self.last_result is not None and self.last_result.is_terminal()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or stalemate
        """
        if self.last_result is None:
            return None
        return self.last_result.winner

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.get_valid_moves()

    def render(self, glyphs: Dict[int, str] = EMOJI_GLYPHS) -> str:
        return self.board.render(glyphs)


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays both sides; rewards are given from the point of view
    of the player who just moved.
    """

    metadata = {'render_modes': ['ascii', 'emoji', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 starting_player: Player = Player.RED):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            starting_player: The player who moves first after every reset
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)
        # 6x7 board with 3 possible values (0 empty, 1 red, 2 yellow)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.render_mode = render_mode
        self.game = ConnectFourGame(starting_player)

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Args:
            seed: Random seed for reproducibility
            options: Additional options for reset

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by making a move.

        Args:
            action: Column to drop a token into (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
            Once the episode has terminated every further step returns the
            final observation with terminated set until reset() is called.
        """
        debug.debug(f"Environment step with action {action}", "env")

        if self.game.is_game_over():
            debug.warning(f"Step with action {action} after the game ended; call reset()", "env")
            return self._get_observation(), 0.0, True, False, self._get_info()

        try:
            result = self.game.play(action)
        except (ColumnFullError, InvalidColumnError) as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False

        if result.outcome == MoveOutcome.WON:
            debug.info(f"Game over: {result.winner} wins", "env")
            reward = self.reward_win
            terminated = True
        elif result.outcome == MoveOutcome.STALEMATE or self.game.board.is_full():
            # A stalemate is only reported on the attempt after the board
            # fills, so the env ends the episode as soon as it is full.
            debug.info("Game over: Stalemate", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        """
        Render the current state of the environment.

        Returns:
            The board as text for 'ascii' and 'emoji', None otherwise
        """
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.game.render(ASCII_GLYPHS)

        if self.render_mode == "emoji":
            return self.game.render(EMOJI_GLYPHS)

        print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict:
        board = self.game.board
        valid_moves = self.game.get_valid_moves()
        winner = self.game.get_winner()

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': board.current_player.value,
            'winner': winner.value if winner is not None else None,
            'moves_made': len(board.moves_made),
            'winning_line': board.get_winning_line(),
            'last_move': board.last_move
        }
