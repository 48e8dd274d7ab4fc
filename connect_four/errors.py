"""
errors.py - Exceptions raised by the Connect Four engine

A stalemate is a normal game result and is never raised.
"""


class ConnectFourError(Exception):
    """Base class for all Connect Four errors."""


class ColumnFullError(ConnectFourError):
    """A move was rejected because its column has no free row."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full.")
        self.column = column


class InvalidColumnError(ConnectFourError, ValueError):
    """A column or position is outside the board, or input could not be parsed."""
