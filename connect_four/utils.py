"""
utils.py - Constants, enumerations and helper functions for Connect Four

This module provides the board dimensions, the cell and axis enumerations,
and small position and rendering helpers shared by the board, the win
detector and the interfaces.
"""

from enum import Enum
from typing import Iterator, List, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win


class Cell(Enum):
    """Enumeration representing the content of a board cell."""
    EMPTY = 0
    MARK_A = 1    # Displayed as X
    MARK_B = 2    # Displayed as O

    def other(self) -> 'Cell':
        """Get the opposing mark."""
        if self == Cell.MARK_A:
            return Cell.MARK_B
        elif self == Cell.MARK_B:
            return Cell.MARK_A
        return Cell.EMPTY

    @property
    def is_mark(self) -> bool:
        return self != Cell.EMPTY

    @property
    def symbol(self) -> str:
        return SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Cell':
        """
        Parse a display symbol into a cell.

        Args:
            symbol: 'X', 'O' (case-insensitive), or ' '/'.'/'_' for empty

        Returns:
            The matching Cell

        Raises:
            ValueError: If the symbol is not recognised
        """
        key = symbol.upper() if symbol else symbol
        for cell, text in SYMBOLS.items():
            if key == text:
                return cell
        if key in ('.', '_', ''):
            return cls.EMPTY
        raise ValueError(f"Unknown cell symbol: {symbol!r}")

    def __str__(self):
        return self.symbol


SYMBOLS = {
    Cell.EMPTY: " ",
    Cell.MARK_A: "X",
    Cell.MARK_B: "O",
}


class Axis(Enum):
    """Enumeration representing the directions a winning line can run."""
    ROW = "row"
    COLUMN = "column"
    DIAG_UP = "up right diagonal"     # Bottom-left to top-right
    DIAG_DOWN = "up left diagonal"    # Top-left to bottom-right

    @property
    def label(self) -> str:
        return self.value


# Step vectors (row, col) used to walk each axis
AXIS_STEPS = {
    Axis.ROW: (0, 1),
    Axis.COLUMN: (1, 0),
    Axis.DIAG_UP: (-1, 1),
    Axis.DIAG_DOWN: (1, 1),
}


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(col: int) -> bool:
    """Check if a column index is within the board."""
    return 0 <= col < COLS


def walk(row: int, col: int, step: Tuple[int, int]) -> Iterator[Tuple[int, int]]:
    """
    Yield board positions from a start cell following a step vector.

    Args:
        row: Starting row
        col: Starting column
        step: (row, col) increment applied between positions

    Yields:
        (row, col) positions until the edge of the board is passed
    """
    dr, dc = step
    while is_valid_position(row, col):
        yield row, col
        row += dr
        col += dc


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid of cell values as ASCII art.

    Args:
        grid: ROWS x COLS array of Cell values

    Returns:
        ASCII representation of the board, top row first
    """
    result = []
    result.append("|" + "-" * (COLS * 2 - 1) + "|")

    for row in range(ROWS):
        symbols = [Cell(int(grid[row, col])).symbol for col in range(COLS)]
        result.append("|" + " ".join(symbols) + "|")

    result.append("|" + "-" * (COLS * 2 - 1) + "|")
    result.append("|" + " ".join(str(i) for i in range(COLS)) + "|")

    return "\n".join(result)


def parse_position(position: str) -> List[List[Cell]]:
    """
    Parse a comma-separated position string of cell codes.

    Args:
        position: ROWS * COLS comma-separated values (0 empty, 1 X, 2 O),
            top row first

    Returns:
        Rows of cells

    Raises:
        ValueError: If the string has the wrong length or unknown codes
    """
    values = [int(c) for c in position.split(',')]
    if len(values) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
    cells = [Cell(v) for v in values]
    return [cells[row * COLS:(row + 1) * COLS] for row in range(ROWS)]
