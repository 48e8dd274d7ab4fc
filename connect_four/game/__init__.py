"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board state machine, win detection,
and game session management for the Connect Four implementation.
"""

from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'ConnectFourGame', 'ConnectFourEnv']
