"""
utils.py - Constants, enumerations and rendering helpers for Connect Four

This module defines the fixed board dimensions, the Player and Cell
enumerations, the tagged result of a move attempt, and the text renderer
shared by the CLI and the Gymnasium environment.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple
import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win


class Player(Enum):
    """Enumeration of the two players. RED conventionally moves first."""
    RED = 1
    YELLOW = 2

    def other(self) -> 'Player':
        """Get the other player."""
        return Player.YELLOW if self == Player.RED else Player.RED

    def __str__(self):
        return self.name.capitalize()


class Cell(Enum):
    """A board cell: empty, or owned by one of the players."""
    EMPTY = 0
    RED = Player.RED.value
    YELLOW = Player.YELLOW.value

    @classmethod
    def of(cls, player: Player) -> 'Cell':
        """Get the cell owned by the given player."""
        return cls(player.value)

    @property
    def owner(self) -> Optional[Player]:
        if self == Cell.EMPTY:
            return None
        return Player(self.value)


class MoveOutcome(Enum):
    """Enumeration of the possible outcomes of an accepted move attempt."""
    VALID = auto()
    WON = auto()
    STALEMATE = auto()


class GameMoveResult:
    """
    Tagged outcome of a move attempt.

    Only WON carries a winner; VALID and STALEMATE leave it as None.
    """

    __slots__ = ('outcome', 'winner')

    def __init__(self, outcome: MoveOutcome, winner: Optional[Player] = None):
        if (outcome == MoveOutcome.WON) != (winner is not None):
            raise ValueError("A winner is required for WON and only for WON")
        self.outcome = outcome
        self.winner = winner

    @classmethod
    def valid(cls) -> 'GameMoveResult':
        return cls(MoveOutcome.VALID)

    @classmethod
    def won(cls, player: Player) -> 'GameMoveResult':
        return cls(MoveOutcome.WON, player)

    @classmethod
    def stalemate(cls) -> 'GameMoveResult':
        return cls(MoveOutcome.STALEMATE)

    def is_terminal(self) -> bool:
        """Check if this result ends the game."""
        return self.outcome != MoveOutcome.VALID

    def __eq__(self, other):
        if not isinstance(other, GameMoveResult):
            return NotImplemented
        return self.outcome == other.outcome and self.winner == other.winner

    def __hash__(self):
        return hash((self.outcome, self.winner))

    def __repr__(self):
        if self.winner is not None:
            return f"GameMoveResult({self.outcome.name}, {self.winner.name})"
        return f"GameMoveResult({self.outcome.name})"


class Direction(Enum):
    """Enumeration representing the axes checked for a run."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Bottom-left to top-right (/)
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right (\)


# Scan step (row, col) for each direction, row 0 being the bottom row
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1)
}


# Glyph sets for rendering, keyed by cell value
EMOJI_GLYPHS: Dict[int, str] = {
    Cell.EMPTY.value: " _ ",
    Cell.RED.value: "😈 ",
    Cell.YELLOW.value: "😳 ",
}

ASCII_GLYPHS: Dict[int, str] = {
    Cell.EMPTY.value: " _ ",
    Cell.RED.value: " X ",
    Cell.YELLOW.value: " O ",
}


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index (0 is the bottom row)
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def line_start(row: int, col: int, direction: Direction) -> Tuple[int, int]:
    """
    Walk from a position back to the low-side boundary of its line.

    Rows start at column 0 and columns at row 0. Rising diagonals step
    down-left and falling diagonals step down-right until either the
    bottom row or a side column is reached.

    Args:
        row: Row index of a cell on the line
        col: Column index of a cell on the line
        direction: Axis of the line

    Returns:
        (row, col) of the boundary cell a scan should start from
    """
    if direction == Direction.HORIZONTAL:
        return row, 0
    if direction == Direction.VERTICAL:
        return 0, col
    if direction == Direction.DIAGONAL_UP:
        steps = min(row, col)
        return row - steps, col - steps
    steps = min(row, COLS - 1 - col)
    return row - steps, col + steps


def line_cells(row: int, col: int, direction: Direction) -> List[Tuple[int, int]]:
    """
    Get every cell on the line through a position, from boundary to boundary.

    Args:
        row: Row index of a cell on the line
        col: Column index of a cell on the line
        direction: Axis of the line

    Returns:
        List of (row, col) positions in scan order
    """
    dr, dc = DIRECTION_VECTORS[direction]
    r, c = line_start(row, col, direction)
    cells = []
    while is_valid_position(r, c):
        cells.append((r, c))
        r += dr
        c += dc
    return cells


def render_board(grid: np.ndarray, glyphs: Dict[int, str] = EMOJI_GLYPHS) -> str:
    """
    Render the board as text.

    The highest row is printed first so tokens appear stacked from the
    bottom, followed by a blank line and a 1-indexed column legend.

    Args:
        grid: The game grid, row 0 at the bottom
        glyphs: Mapping of cell value to its 3-character glyph

    Returns:
        Text representation of the board
    """
    lines = []
    for row in range(ROWS - 1, -1, -1):
        lines.append(" ".join(glyphs[int(value)] for value in grid[row]))
    lines.append("")
    lines.append(" ".join(f" {col + 1} " for col in range(COLS)))
    return "\n".join(lines)


def parse_position(position: str) -> np.ndarray:
    """
    Parse a comma-separated list of ROWS * COLS cell values into a grid.

    Values are read row by row starting from the bottom row.

    Raises:
        ValueError: If the string has the wrong length or unknown values
    """
    values = [int(value) for value in position.split(',')]
    if len(values) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
    for value in values:
        Cell(value)
    return np.array(values, dtype=np.int8).reshape(ROWS, COLS)
