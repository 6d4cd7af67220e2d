"""
board.py - Board representation for Connect Four

This module implements the Board class, which owns the grid state, applies
drops under gravity and reports column legality and fullness. Win detection
lives in win_detector.py and works against the read-only accessors here.
"""

from typing import List, Sequence, Tuple, Union

import numpy as np

from connect_four.debug import debug
from connect_four.game.errors import ColumnFullError, InvalidColumnError
from connect_four.utils import ROWS, COLS, Cell, is_valid_column, render_board_ascii


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top of the board and row ROWS - 1 the bottom. Cells are
    stored as Cell values in a fixed-size numpy array.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        debug.trace("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.full((ROWS, COLS), Cell.EMPTY.value, dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Union[Cell, str]]]) -> 'Board':
        """
        Build a board from explicit rows, top row first.

        The rows are taken as given; gravity is not enforced, which lets
        callers analyse arbitrary positions.

        Args:
            rows: ROWS sequences of COLS cells, either Cell members or
                display symbols ('X', 'O', ' ' or '.')

        Returns:
            A new Board holding the position

        Raises:
            ValueError: If the shape is wrong or a symbol is unknown
        """
        if len(rows) != ROWS or any(len(row) != COLS for row in rows):
            raise ValueError(f"Board must have {ROWS} rows of {COLS} cells")

        board = cls()
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                cell = value if isinstance(value, Cell) else Cell.from_symbol(value)
                board.grid[r, c] = cell.value
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same grid
        """
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def _require_column(self, column: int):
        # bool is an int subclass but never a column
        is_index = isinstance(column, (int, np.integer)) and not isinstance(column, bool)
        if not is_index or not is_valid_column(int(column)):
            debug.warning(f"Rejected column {column!r}", "board")
            raise InvalidColumnError(column)

    def is_column_playable(self, column: int) -> bool:
        """
        Check whether a piece can be dropped into a column.

        Args:
            column: The column to check (0-indexed)

        Returns:
            True if the top cell of the column is empty

        Raises:
            InvalidColumnError: If the column is outside the board
        """
        self._require_column(column)
        return bool(self.grid[0, column] == Cell.EMPTY.value)

    def valid_columns(self) -> List[int]:
        """Get the columns that can still take a piece."""
        return [col for col in range(COLS) if self.grid[0, col] == Cell.EMPTY.value]

    def drop(self, column: int, mark: Cell) -> int:
        """
        Drop a mark into a column.

        The column is scanned from the bottom row upward and the mark is
        placed in the first empty cell found.

        Args:
            column: The column to drop into (0-indexed)
            mark: Cell.MARK_A or Cell.MARK_B

        Returns:
            The row index where the mark landed

        Raises:
            InvalidColumnError: If the column is outside the board
            ValueError: If mark is not a player mark
            ColumnFullError: If the column has no empty cell
        """
        self._require_column(column)
        if not isinstance(mark, Cell) or not mark.is_mark:
            raise ValueError(f"Cannot drop {mark!r}: expected a player mark")

        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, column] == Cell.EMPTY.value:
                self.grid[row, column] = mark.value
                debug.debug(f"Placed {mark.symbol} at ({row}, {column})", "board")
                return row

        debug.error(f"Drop into full column {column}", "board")
        raise ColumnFullError(column)

    def is_full(self) -> bool:
        """Check if every cell on the board holds a mark."""
        return bool(np.all(self.grid != Cell.EMPTY.value))

    def cell(self, row: int, col: int) -> Cell:
        """Get the content of a single cell."""
        return Cell(int(self.grid[row, col]))

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        """
        Get a read-only snapshot of the grid.

        Returns:
            Tuple of rows, top row first, each a tuple of Cell
        """
        return tuple(tuple(Cell(int(v)) for v in row) for row in self.grid)

    def column_height(self, column: int) -> int:
        """Get the number of pieces stacked in a column."""
        self._require_column(column)
        return int(np.count_nonzero(self.grid[:, column] != Cell.EMPTY.value))

    def count(self, cell: Cell) -> int:
        """Count the cells holding a given value."""
        return int(np.count_nonzero(self.grid == cell.value))

    def satisfies_gravity(self) -> bool:
        """
        Check that no piece floats above an empty cell.

        Returns:
            True if every non-empty cell sits on the bottom row or on another piece
        """
        occupied = self.grid != Cell.EMPTY.value
        return not np.any(occupied[:-1] & ~occupied[1:])

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the ROWS x COLS grid of Cell values
        """
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))


if __name__ == "__main__":
    from connect_four.debug import DebugLevel

    debug.configure(level=DebugLevel.DEBUG)

    board = Board()
    for col, mark in [(3, Cell.MARK_A), (3, Cell.MARK_B), (4, Cell.MARK_A)]:
        row = board.drop(col, mark)
        print(f"{mark.symbol} landed in row {row}")
    print(board)
    print(f"Playable columns: {board.valid_columns()}")
