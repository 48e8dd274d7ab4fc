"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which owns the 6x7 grid and the
turn cursor, enforces gravity when tokens are dropped, and detects wins
and stalemates after every move.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple

from connect_four.debug import debug
from connect_four.errors import ColumnFullError, InvalidColumnError
from connect_four.utils import (ROWS, COLS, CONNECT_N, Player, Cell, GameMoveResult,
                                Direction, EMOJI_GLYPHS, is_valid_position,
                                line_cells, render_board)


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the bottom of the board. The grid stores Cell values and only
    ever changes through update_cell, so tests and replay tooling can build
    arbitrary positions directly while game_move applies the rules.
    """

    def __init__(self, starting_player: Player = Player.RED):
        """
        Initialize an empty Connect Four board.

        Args:
            starting_player: The player who makes the first move
        """
        debug.debug(f"Initializing new Board, {starting_player} to move", "board")
        self.grid = np.full((ROWS, COLS), Cell.EMPTY.value, dtype=np.int8)
        self.current_player = starting_player
        self.moves_made: List[int] = []
        self.last_move: Optional[Tuple[int, int]] = None

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board(self.current_player)
        new_board.grid = self.grid.copy()
        new_board.moves_made = self.moves_made.copy()
        new_board.last_move = self.last_move
        return new_board

    def cell(self, row: int, col: int) -> Cell:
        """Get the cell at a position."""
        self._check_position(row, col)
        return Cell(int(self.grid[row, col]))

    def update_cell(self, row: int, col: int, cell: Cell) -> None:
        """
        Overwrite a single cell.

        No gravity check is made; game_move is the only place where the
        rules are applied.

        Args:
            row: Row index (0 is the bottom row)
            col: Column index
            cell: The new cell value

        Raises:
            InvalidColumnError: If the position is off the board
        """
        self._check_position(row, col)
        debug.trace(f"Setting ({row}, {col}) to {cell.name}", "board")
        self.grid[row, col] = cell.value

    def row_available(self, col: int) -> Optional[int]:
        """
        Find the row a token dropped into a column would land on.

        Args:
            col: Column index (0-indexed)

        Returns:
            The lowest empty row of the column, or None if the column is full

        Raises:
            InvalidColumnError: If the column index is outside the board
        """
        if not 0 <= col < COLS:
            raise InvalidColumnError(f"Column {col} is invalid")

        for row in range(ROWS):
            if self.grid[row, col] == Cell.EMPTY.value:
                return row
        return None

    def get_valid_moves(self) -> List[int]:
        """
        Get a list of columns that still have room.

        Returns:
            List of valid column indices
        """
        return [col for col in range(COLS) if self.row_available(col) is not None]

    def is_full(self) -> bool:
        """Check if no column has room left."""
        return not self.get_valid_moves()

    def game_move(self, col: int) -> GameMoveResult:
        """
        Drop a token for the current player into a column.

        A full board is reported as a stalemate whatever column is named.
        After a win the current player is left unchanged; after any other
        accepted move the turn passes to the opponent.

        Args:
            col: The column to drop into (0-indexed)

        Returns:
            GameMoveResult describing the outcome

        Raises:
            InvalidColumnError: If the column index is outside the board
            ColumnFullError: If the column has no free row
        """
        if isinstance(col, bool) or not isinstance(col, (int, np.integer)) or not 0 <= col < COLS:
            raise InvalidColumnError(f"Column {col} is invalid")

        debug.debug(f"Attempting move in column {col} for player {self.current_player}", "board")

        if self.is_full():
            debug.info("Board is full, game ends in a stalemate", "board")
            return GameMoveResult.stalemate()

        row = self.row_available(col)
        if row is None:
            debug.debug(f"Rejected move: column {col} is full", "board")
            raise ColumnFullError(col)

        self.update_cell(row, col, Cell.of(self.current_player))
        self.last_move = (row, col)
        self.moves_made.append(int(col))

        with debug.timed("win_check", "board"):
            won = self.has_won(row, col)

        if won:
            debug.info(f"{self.current_player} wins after move at {self.last_move}", "board")
            return GameMoveResult.won(self.current_player)

        self.current_player = self.current_player.other()
        debug.debug(f"Switching to player {self.current_player}", "board")
        return GameMoveResult.valid()

    def has_won(self, row: int, col: int) -> bool:
        """
        Check if the current player has a run of four through a position.

        Each of the four lines through (row, col) is scanned from one edge
        of the board to the other, counting consecutive cells owned by the
        current player. Any empty or opposing cell resets the count.

        Args:
            row: Row of the most recently placed token
            col: Column of the most recently placed token

        Returns:
            True if the current player has connected four, False otherwise
        """
        self._check_position(row, col)
        player_value = Cell.of(self.current_player).value

        for direction in Direction:
            count = 0
            for r, c in line_cells(row, col, direction):
                if self.grid[r, c] == player_value:
                    count += 1
                    if count == CONNECT_N:
                        debug.trace(f"{direction.name} run found through ({row}, {col})", "board")
                        return True
                else:
                    count = 0

        return False

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning run through the last move.

        Returns:
            List of (row, col) positions forming the run, or empty list if no win
        """
        if self.last_move is None:
            return []

        row, col = self.last_move
        player_value = self.grid[row, col]
        if player_value == Cell.EMPTY.value:
            return []

        for direction in Direction:
            run: List[Tuple[int, int]] = []
            for r, c in line_cells(row, col, direction):
                if self.grid[r, c] == player_value:
                    run.append((r, c))
                    continue
                if len(run) >= CONNECT_N and (row, col) in run:
                    return run
                run = []
            if len(run) >= CONNECT_N and (row, col) in run:
                return run

        return []

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array of cell values, row 0 at the bottom
        """
        return self.grid.copy()

    def render(self, glyphs: Dict[int, str] = EMOJI_GLYPHS) -> str:
        """
        Render the board as a string.

        Returns:
            Text representation of the board, highest row first
        """
        return render_board(self.grid, glyphs)

    def __str__(self) -> str:
        return self.render()

    @staticmethod
    def _check_position(row: int, col: int) -> None:
        if not is_valid_position(row, col):
            raise InvalidColumnError(f"Position ({row}, {col}) is outside the board")
