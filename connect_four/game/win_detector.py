"""
win_detector.py - Four-in-a-row detection for Connect Four

This module scans a whole board for a run of CONNECT_N identical marks along
rows, columns and both diagonal directions. Every axis is reduced to a fixed
list of lines (sequences of board positions) that are scanned by the same
run-tracking helper.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from connect_four.debug import debug
from connect_four.game.board import Board
from connect_four.utils import ROWS, COLS, CONNECT_N, AXIS_STEPS, Axis, Cell, walk

Position = Tuple[int, int]
Line = Tuple[Position, ...]


@dataclass(frozen=True)
class WinResult:
    """Outcome of a win check."""
    found: bool
    mark: Optional[Cell] = None
    axis: Optional[Axis] = None
    line: Line = ()

    def __bool__(self) -> bool:
        return self.found


NO_WIN = WinResult(found=False)


def _build_lines(axis: Axis, starts: Iterable[Position]) -> List[Line]:
    """
    Build the lines of an axis from their start cells.

    Start cells are visited by increasing column, then increasing row, and
    lines too short to ever hold CONNECT_N marks are dropped.
    """
    lines = []
    for row, col in sorted(set(starts), key=lambda p: (p[1], p[0])):
        line = tuple(walk(row, col, AXIS_STEPS[axis]))
        if len(line) >= CONNECT_N:
            lines.append(line)
    return lines


# Row lines top to bottom, column lines left to right
ROW_LINES = [tuple(walk(row, 0, AXIS_STEPS[Axis.ROW])) for row in range(ROWS)]
COLUMN_LINES = [tuple(walk(0, col, AXIS_STEPS[Axis.COLUMN])) for col in range(COLS)]

# Ascending diagonals start on the left column or the bottom row
ASCENDING_LINES = _build_lines(
    Axis.DIAG_UP,
    [(row, 0) for row in range(ROWS)] + [(ROWS - 1, col) for col in range(COLS)],
)

# Descending diagonals start on the left column or the top row
DESCENDING_LINES = _build_lines(
    Axis.DIAG_DOWN,
    [(row, 0) for row in range(ROWS)] + [(0, col) for col in range(COLS)],
)

AXIS_LINES: Dict[Axis, List[Line]] = {
    Axis.ROW: ROW_LINES,
    Axis.COLUMN: COLUMN_LINES,
    Axis.DIAG_UP: ASCENDING_LINES,
    Axis.DIAG_DOWN: DESCENDING_LINES,
}


def find_run(board: Board, line: Line) -> Optional[Tuple[Cell, Line]]:
    """
    Find the first run of at least CONNECT_N identical marks along a line.

    An empty cell or the other mark breaks the current run.

    Args:
        board: The board to read
        line: Positions to scan, in order

    Returns:
        (mark, positions of the whole run), or None if the line has no such run
    """
    grid = board.grid
    run: List[Position] = []
    run_value = Cell.EMPTY.value

    for row, col in line:
        value = grid[row, col]
        if value != Cell.EMPTY.value and value == run_value:
            run.append((row, col))
            continue

        if run_value != Cell.EMPTY.value and len(run) >= CONNECT_N:
            return Cell(int(run_value)), tuple(run)
        run = [(row, col)]
        run_value = value

    if run_value != Cell.EMPTY.value and len(run) >= CONNECT_N:
        return Cell(int(run_value)), tuple(run)
    return None


class WinDetector:
    """
    Determines whether a board holds a four-in-a-row.

    The whole board is rescanned on every call, so results never depend on
    which move was played last.
    """

    # Priority order used by check()
    AXIS_ORDER = (Axis.COLUMN, Axis.ROW, Axis.DIAG_DOWN, Axis.DIAG_UP)

    def _scan(self, board: Board, axis: Axis) -> WinResult:
        for line in AXIS_LINES[axis]:
            run = find_run(board, line)
            if run is not None:
                mark, positions = run
                debug.debug(f"{mark.symbol} has {len(positions)} in a {axis.label} at {positions[0]}", "win")
                return WinResult(found=True, mark=mark, axis=axis, line=positions)
        return NO_WIN

    def check_rows(self, board: Board) -> WinResult:
        """Scan rows top to bottom, each left to right."""
        return self._scan(board, Axis.ROW)

    def check_columns(self, board: Board) -> WinResult:
        """Scan columns left to right, each top to bottom."""
        return self._scan(board, Axis.COLUMN)

    def check_diagonals_ascending(self, board: Board) -> WinResult:
        """Scan bottom-left to top-right diagonals."""
        return self._scan(board, Axis.DIAG_UP)

    def check_diagonals_descending(self, board: Board) -> WinResult:
        """Scan top-left to bottom-right diagonals."""
        return self._scan(board, Axis.DIAG_DOWN)

    def check(self, board: Board) -> WinResult:
        """
        Check the whole board for a winning line.

        Axes are scanned in AXIS_ORDER and the first line found is reported,
        which makes the result deterministic for positions holding more than
        one completed line.

        Args:
            board: The board to check

        Returns:
            WinResult for the first winning line, or NO_WIN
        """
        debug.start_timer("win_check")
        result = NO_WIN
        for axis in self.AXIS_ORDER:
            result = self._scan(board, axis)
            if result.found:
                break
        debug.end_timer("win_check", "win")
        return result


if __name__ == "__main__":
    detector = WinDetector()
    board = Board.from_rows([
        "       ",
        "   OOOO",
        "       ",
        "       ",
        "       ",
        "       ",
    ])
    print(board)
    print(detector.check(board))
