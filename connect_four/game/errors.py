"""
errors.py - Exceptions raised by the Connect Four engine
"""

from typing import Optional

from connect_four.utils import COLS


class ConnectFourError(Exception):
    """Base exception for all Connect Four engine errors."""

    pass


class InvalidColumnError(ConnectFourError, ValueError):
    """
    Raised when a column index falls outside the board.

    Input collaborators catch this and ask the player again.
    """

    def __init__(self, column, message: Optional[str] = None):
        self.column = column

        if message is None:
            message = f"Column {column!r} is outside the board (expected 0-{COLS - 1})"

        super().__init__(message)


class ColumnFullError(ConnectFourError, RuntimeError):
    """
    Raised when a piece is dropped into a column with no empty cell.

    Callers must check Board.is_column_playable before dropping, so this
    signals a broken caller rather than a game event.
    """

    def __init__(self, column: int, message: Optional[str] = None):
        self.column = column

        if message is None:
            message = f"Column {column} is full"

        super().__init__(message)


class GameOverError(ConnectFourError, RuntimeError):
    """Raised when a move is attempted after the game has finished."""

    pass
