"""
Test suite for the Connect Four Board.

Covers construction, gravity, turn alternation, rejected moves,
stalemate precedence and win detection along every axis.
"""

import numpy as np
import pytest

from connect_four.errors import ColumnFullError, InvalidColumnError
from connect_four.game.board import Board
from connect_four.utils import ROWS, COLS, Cell, GameMoveResult, MoveOutcome, Player


def fill(board, cells, cell):
    for row, col in cells:
        board.update_cell(row, col, cell)


def fill_drawn_board(board, skip=None):
    """Fill the board with a pattern that has no run longer than two."""
    for row in range(ROWS):
        for col in range(COLS):
            if (row, col) == skip:
                continue
            cell = Cell.RED if (row + col // 2) % 2 == 0 else Cell.YELLOW
            board.update_cell(row, col, cell)


class TestBoardInitialization:
    """Test Board construction."""

    def test_new_board_is_empty(self):
        """Every cell starts empty and the starting player is to move."""
        board = Board(Player.RED)
        assert board.current_player == Player.RED
        assert board.grid.shape == (ROWS, COLS)
        for row in range(ROWS):
            for col in range(COLS):
                assert board.cell(row, col) == Cell.EMPTY

    def test_yellow_can_start(self):
        board = Board(Player.YELLOW)
        assert board.current_player == Player.YELLOW
        assert board.moves_made == []
        assert board.last_move is None

    def test_copy_is_independent(self):
        board = Board()
        board.game_move(3)
        clone = board.copy()
        clone.game_move(3)

        assert board.cell(1, 3) == Cell.EMPTY
        assert clone.cell(1, 3) == Cell.YELLOW
        assert board.moves_made == [3]
        assert clone.moves_made == [3, 3]


class TestUpdateCell:
    """Test direct cell construction."""

    def test_update_cell_ignores_gravity(self):
        board = Board()
        board.update_cell(4, 2, Cell.YELLOW)
        assert board.cell(4, 2) == Cell.YELLOW
        assert board.row_available(2) == 0

    def test_update_cell_can_clear(self):
        board = Board()
        board.update_cell(0, 0, Cell.RED)
        board.update_cell(0, 0, Cell.EMPTY)
        assert board.cell(0, 0) == Cell.EMPTY

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (ROWS, 0), (0, COLS)])
    def test_update_cell_off_board(self, row, col):
        """Positions outside the grid are rejected rather than wrapped."""
        board = Board()
        with pytest.raises(InvalidColumnError):
            board.update_cell(row, col, Cell.RED)
        assert np.all(board.grid == Cell.EMPTY.value)


class TestGravity:
    """Test that tokens land on the lowest free row."""

    def test_row_available_empty_column(self):
        assert Board().row_available(4) == 0

    def test_row_available_partially_filled(self):
        board = Board()
        fill(board, [(0, 5), (1, 5), (2, 5)], Cell.RED)
        assert board.row_available(5) == 3

    @pytest.mark.parametrize("col", [-1, COLS])
    def test_row_available_off_board(self, col):
        """Columns outside the grid are rejected rather than wrapped."""
        board = Board()
        fill(board, [(row, COLS - 1) for row in range(ROWS)], Cell.RED)
        with pytest.raises(InvalidColumnError):
            board.row_available(col)

    def test_row_available_full_column(self):
        board = Board()
        fill(board, [(row, 1) for row in range(ROWS)], Cell.YELLOW)
        assert board.row_available(1) is None
        assert 1 not in board.get_valid_moves()

    def test_game_move_lands_on_lowest_row(self):
        board = Board(Player.RED)
        fill(board, [(0, 2), (1, 2)], Cell.YELLOW)

        board.game_move(2)

        assert board.cell(2, 2) == Cell.RED
        assert board.last_move == (2, 2)
        assert board.moves_made == [2]

    def test_stacking_tokens(self):
        board = Board(Player.RED)
        board.game_move(6)
        board.game_move(6)
        board.game_move(6)

        assert board.cell(0, 6) == Cell.RED
        assert board.cell(1, 6) == Cell.YELLOW
        assert board.cell(2, 6) == Cell.RED
        assert board.row_available(6) == 3


class TestTurnAlternation:
    """Test the turn cursor."""

    def test_valid_move_flips_player(self):
        board = Board(Player.YELLOW)
        result = board.game_move(0)
        assert result == GameMoveResult.valid()
        assert board.current_player == Player.RED

    def test_winning_move_keeps_player(self):
        board = Board(Player.RED)
        fill(board, [(0, 0), (0, 1), (0, 2)], Cell.RED)

        result = board.game_move(3)

        assert result.outcome == MoveOutcome.WON
        assert result.winner == Player.RED
        assert board.current_player == Player.RED


class TestRejectedMoves:
    """Test full columns and bad column indices."""

    def test_full_column_raises(self):
        board = Board(Player.RED)
        for row in range(ROWS):
            board.update_cell(row, 3, Cell.RED if row % 2 == 0 else Cell.YELLOW)
        before = board.get_state()

        with pytest.raises(ColumnFullError) as excinfo:
            board.game_move(3)

        assert str(excinfo.value) == "Column 3 is full."
        assert excinfo.value.column == 3
        assert np.array_equal(board.grid, before)
        assert board.current_player == Player.RED

    @pytest.mark.parametrize("col", [-1, COLS, 100, "3", 2.0, True, None])
    def test_invalid_column_raises(self, col):
        board = Board()
        with pytest.raises(InvalidColumnError):
            board.game_move(col)
        assert board.moves_made == []

    def test_invalid_column_is_value_error(self):
        with pytest.raises(ValueError):
            Board().game_move(-1)

    def test_numpy_integer_column(self):
        board = Board()
        assert board.game_move(np.int64(4)) == GameMoveResult.valid()
        assert board.cell(0, 4) == Cell.RED


class TestStalemate:
    """Test full-board handling."""

    def test_full_board_is_stalemate_for_every_column(self):
        board = Board(Player.YELLOW)
        fill_drawn_board(board)

        for col in range(COLS):
            assert board.game_move(col) == GameMoveResult.stalemate()
        assert board.current_player == Player.YELLOW

    def test_stalemate_takes_precedence_over_full_column(self):
        """A full board never reports a rejected move."""
        board = Board()
        fill_drawn_board(board)
        result = board.game_move(0)
        assert result.outcome == MoveOutcome.STALEMATE
        assert result.winner is None

    def test_last_move_fills_board_then_stalemate(self):
        board = Board(Player.RED)
        fill_drawn_board(board, skip=(5, 6))

        assert board.game_move(6) == GameMoveResult.valid()
        assert board.is_full()
        assert board.current_player == Player.YELLOW
        assert board.game_move(2) == GameMoveResult.stalemate()

    def test_full_column_with_room_elsewhere(self):
        board = Board()
        fill(board, [(row, 0) for row in range(ROWS)], Cell.YELLOW)
        assert not board.is_full()
        with pytest.raises(ColumnFullError):
            board.game_move(0)


class TestWinDetection:
    """Test has_won along each axis."""

    def test_horizontal_connect_four(self):
        board = Board(Player.RED)
        board.update_cell(0, 1, Cell.RED)
        board.update_cell(0, 2, Cell.YELLOW)
        fill(board, [(0, 3), (0, 4), (0, 5), (0, 6)], Cell.RED)
        fill(board, [(1, 1), (1, 2), (1, 3)], Cell.RED)

        assert board.has_won(0, 3)
        assert not board.has_won(1, 1)

    def test_run_of_four_detected_from_every_cell(self):
        board = Board(Player.RED)
        run = [(2, 2), (2, 3), (2, 4), (2, 5)]
        fill(board, run, Cell.RED)

        for row, col in run:
            assert board.has_won(row, col)

    def test_run_of_three_not_detected(self):
        board = Board(Player.RED)
        run = [(2, 2), (2, 3), (2, 4)]
        fill(board, run, Cell.RED)

        for row, col in run:
            assert not board.has_won(row, col)

    def test_broken_run_not_detected(self):
        board = Board(Player.YELLOW)
        fill(board, [(0, 0), (0, 1), (0, 3), (0, 4)], Cell.YELLOW)
        board.update_cell(0, 2, Cell.RED)
        assert not board.has_won(0, 1)
        assert not board.has_won(0, 3)

    def test_vertical_connect_four(self):
        board = Board(Player.YELLOW)
        board.update_cell(0, 3, Cell.YELLOW)
        board.update_cell(1, 3, Cell.RED)
        fill(board, [(2, 3), (3, 3), (4, 3), (5, 3)], Cell.YELLOW)

        assert board.has_won(2, 3)

    def test_only_current_player_runs_count(self):
        board = Board(Player.RED)
        fill(board, [(0, 3), (1, 3), (2, 3), (3, 3)], Cell.YELLOW)
        assert not board.has_won(3, 3)

    def test_diagonal_connect_four(self):
        board = Board(Player.RED)
        board.update_cell(0, 3, Cell.YELLOW)
        # Rising diagonal
        fill(board, [(1, 3), (2, 4), (3, 5), (4, 6)], Cell.RED)
        # Falling diagonal through (2, 4)
        fill(board, [(3, 3), (4, 2), (5, 1)], Cell.RED)
        # Lone token with a two-long diagonal
        board.update_cell(5, 5, Cell.RED)

        assert board.has_won(2, 4)
        assert board.has_won(3, 3)
        assert not board.has_won(5, 5)

    def test_rising_diagonal_from_left_edge(self):
        board = Board(Player.RED)
        fill(board, [(2, 0), (3, 1), (4, 2), (5, 3)], Cell.RED)
        assert board.has_won(5, 3)
        assert board.has_won(2, 0)

    def test_falling_diagonal_from_right_edge(self):
        board = Board(Player.YELLOW)
        fill(board, [(2, 6), (3, 5), (4, 4), (5, 3)], Cell.YELLOW)
        assert board.has_won(5, 3)
        assert board.has_won(2, 6)

    def test_falling_diagonal_from_bottom_corner(self):
        board = Board(Player.RED)
        fill(board, [(0, 6), (1, 5), (2, 4), (3, 3)], Cell.RED)
        assert board.has_won(0, 6)

    def test_diagonal_gap_not_detected(self):
        board = Board(Player.RED)
        fill(board, [(0, 0), (1, 1), (3, 3), (4, 4)], Cell.RED)
        board.update_cell(2, 2, Cell.YELLOW)
        assert not board.has_won(1, 1)
        assert not board.has_won(4, 4)

    def test_has_won_off_board(self):
        with pytest.raises(InvalidColumnError):
            Board().has_won(ROWS, 0)


class TestWinningLine:
    """Test winning line extraction."""

    def test_no_line_on_new_board(self):
        assert Board().get_winning_line() == []

    def test_horizontal_winning_line(self):
        board = Board(Player.RED)
        fill(board, [(0, 0), (0, 1), (0, 2)], Cell.RED)
        board.game_move(3)
        assert board.get_winning_line() == [(0, 0), (0, 1), (0, 2), (0, 3)]

    def test_longer_run_is_returned_whole(self):
        board = Board(Player.YELLOW)
        fill(board, [(0, 1), (0, 2), (0, 4), (0, 5)], Cell.YELLOW)
        board.game_move(3)
        assert board.get_winning_line() == [(0, 1), (0, 2), (0, 3), (0, 4), (0, 5)]

    def test_no_line_without_win(self):
        board = Board()
        board.game_move(0)
        assert board.get_winning_line() == []


class TestRendering:
    """Test the text representation of the board."""

    def test_empty_board_render(self):
        lines = Board().render().split("\n")
        assert len(lines) == ROWS + 2
        assert lines[0] == " ".join([" _ "] * COLS)
        assert lines[ROWS] == ""
        assert lines[-1] == " ".join(f" {col} " for col in range(1, COLS + 1))

    def test_top_row_printed_first(self):
        board = Board()
        board.update_cell(0, 0, Cell.RED)
        board.update_cell(5, 6, Cell.YELLOW)
        lines = str(board).split("\n")

        assert lines[ROWS - 1].startswith("😈 ")
        assert lines[0].endswith("😳 ")
