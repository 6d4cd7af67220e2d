"""
Pytest configuration and shared fixtures for the Connect Four tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.rules import MoveSource, Player
from connect_four.game.win_detector import WinDetector
from connect_four.utils import Cell

# Full board without any four-in-a-row: columns alternate vertically and
# every row and diagonal holds runs of at most two.
ROW_EVEN = "XXOOXXO"
ROW_ODD = "OOXXOOX"
TIE_ROWS = [ROW_EVEN, ROW_ODD] * 3

EMPTY_ROWS = ["       "] * 6


def rows_with(overrides):
    """Build empty rows with {(row, col): symbol} filled in."""
    rows = [list(row) for row in EMPTY_ROWS]
    for (r, c), symbol in overrides.items():
        rows[r][c] = symbol
    return ["".join(row) for row in rows]


class ScriptedSource(MoveSource):
    """Plays a fixed list of columns."""

    def __init__(self, columns):
        self.columns = list(columns)
        self.asked = 0

    def select_column(self, board, player):
        self.asked += 1
        return self.columns.pop(0)


class ScriptedInput:
    """Stands in for input(): returns queued answers and records prompts."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError("no scripted input left")
        return self.answers.pop(0)


class CapturedOutput:
    """Stands in for print(): collects printed lines."""

    def __init__(self):
        self.lines = []

    def __call__(self, *args, **kwargs):
        self.lines.append(" ".join(str(a) for a in args))

    @property
    def text(self):
        return "\n".join(self.lines)


@pytest.fixture(autouse=True)
def reset_debug():
    """Restore the logging singleton after each test."""
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, log_file="", components=[])


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def detector():
    return WinDetector()


@pytest.fixture
def players():
    return Player("Ada", Cell.MARK_A), Player("Bob", Cell.MARK_B)


@pytest.fixture
def tie_board():
    return Board.from_rows(TIE_ROWS)
