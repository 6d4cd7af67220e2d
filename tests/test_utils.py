"""Tests for shared constants and helpers."""

import pytest

from connect_four.utils import ROWS, COLS, Axis, Cell, is_valid_position, parse_position, walk


class TestCell:

    def test_other(self):
        assert Cell.MARK_A.other() == Cell.MARK_B
        assert Cell.MARK_B.other() == Cell.MARK_A
        assert Cell.EMPTY.other() == Cell.EMPTY

    def test_symbols(self):
        assert [str(c) for c in Cell] == [" ", "X", "O"]
        assert Cell.from_symbol("x") == Cell.MARK_A
        assert Cell.from_symbol("O") == Cell.MARK_B
        assert Cell.from_symbol(".") == Cell.EMPTY

    def test_unknown_symbol(self):
        with pytest.raises(ValueError):
            Cell.from_symbol("#")


class TestHelpers:

    def test_axis_labels(self):
        assert Axis.ROW.label == "row"
        assert Axis.DIAG_UP.label == "up right diagonal"
        assert Axis.DIAG_DOWN.label == "up left diagonal"

    def test_positions(self):
        assert is_valid_position(0, 0)
        assert is_valid_position(ROWS - 1, COLS - 1)
        assert not is_valid_position(ROWS, 0)
        assert not is_valid_position(0, -1)

    def test_walk_stops_at_edge(self):
        assert list(walk(5, 0, (-1, 1))) == [(5, 0), (4, 1), (3, 2), (2, 3), (1, 4), (0, 5)]
        assert list(walk(0, 6, (1, 1))) == [(0, 6)]

    def test_parse_position(self):
        rows = parse_position(",".join(["0"] * 41 + ["2"]))
        assert len(rows) == ROWS
        assert rows[ROWS - 1][COLS - 1] == Cell.MARK_B
        assert rows[0][0] == Cell.EMPTY
