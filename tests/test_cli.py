"""Tests for the terminal interface."""

import pytest

from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.rules import GameLoop, GameStatus, Player
from connect_four.interfaces.cli import ConsoleMoveSource, ConsoleObserver, TextCLI
from connect_four.utils import ROWS, Cell
from tests.conftest import TIE_ROWS, CapturedOutput, ScriptedInput


def position_string(rows):
    codes = {" ": "0", "X": "1", "O": "2"}
    return ",".join(codes[ch] for row in rows for ch in row)


def make_cli(answers):
    output = CapturedOutput()
    return TextCLI(input_fn=ScriptedInput(answers), output_fn=output), output


class TestConsoleMoveSource:
    """Column prompting re-asks until a playable column is given."""

    def test_returns_first_valid_column(self, board):
        source = ConsoleMoveSource(ScriptedInput(["4"]), CapturedOutput())
        assert source.select_column(board, Player("Ada", Cell.MARK_A)) == 4

    def test_reprompts_on_bad_input(self, board):
        for _ in range(ROWS):
            board.drop(0, Cell.MARK_B)
        output = CapturedOutput()
        source = ConsoleMoveSource(ScriptedInput(["abc", "9", "0", "-1", " 2 "]), output)

        assert source.select_column(board, Player("Ada", Cell.MARK_A)) == 2
        assert output.lines.count("\nInvalid column. Try again.") == 3
        assert output.lines.count("\nThis column is full! Try again.") == 1


class TestConsoleObserver:
    """End-of-game messages."""

    def test_tie_message(self, players):
        output = CapturedOutput()
        loop = GameLoop(players, board=Board.from_rows(TIE_ROWS))
        ConsoleObserver(output).game_tied(loop)

        assert "It's a tie!" in output.text
        assert loop.board.render() in output.text


class TestSetup:
    """Tutorial and player setup prompts."""

    def test_introduction_with_tutorial(self):
        cli, output = make_cli(["maybe", "Y", ""])
        cli.introduction()

        assert "Sorry, 'maybe' is not a valid answer. Try again." in output.text
        assert "Object: Connect four" in output.text

    def test_introduction_without_tutorial(self):
        cli, output = make_cli(["no", ""])
        cli.introduction()
        assert "Object: Connect four" not in output.text

    def test_introduction_waits_for_enter(self):
        cli, output = make_cli(["n", ""])
        cli.introduction()

        assert cli.input_fn.prompts[-1] == "\n>Press ENTER to continue< "
        assert cli.input_fn.answers == []
        assert output.lines[-1] == "\nSo.. shall we begin?"

    def test_setup_players(self):
        cli, output = make_cli(["", "42", "Ada", "3", "1", "Bob", "carol", "bob"])
        (one, two), first = cli.setup_players()

        assert one == Player("Ada", Cell.MARK_A)
        assert two == Player("Bob", Cell.MARK_B)
        assert first == two
        assert "'' is an invalid name. Please, try again." in output.text
        assert "'42' is an invalid name. Please, try again." in output.text
        assert "'3' is an invalid symbol. Please, try again." in output.text
        assert "'carol' is an invalid name. Please, try again." in output.text

    def test_second_player_gets_other_symbol(self):
        cli, _ = make_cli(["Ada", "2", "Bob", "ADA"])
        (one, two), first = cli.setup_players()

        assert one.mark == Cell.MARK_B
        assert two.mark == Cell.MARK_A
        assert first == one


class TestPlayGame:
    """Full games through the text interface."""

    def test_game_to_a_win(self):
        moves = ["0", "1", "0", "1", "0", "1", "0"]
        cli, output = make_cli(["Ada", "1", "Bob", "ada"] + moves)
        loop = cli.play_game(show_intro=False)

        assert loop.status == GameStatus.WON
        assert loop.winner.name == "Ada"
        assert "Round 0. Fight!" in output.text
        assert "Round 6. Fight!" in output.text
        assert "CONGRATULATIONS!! Ada(X) won by scoring 4 symbols in a row in: column" in output.text

    def test_run_play_command(self):
        moves = ["6", "5", "6", "5", "6", "5", "6"]
        cli, output = make_cli(["Ada", "2", "Bob", "Bob"] + moves)

        assert cli.run(["play", "--no-tutorial"]) == 0
        assert "CONGRATULATIONS!! Bob(X) won" in output.text


class TestCheckPosition:
    """The position analysis command."""

    def test_full_board_without_win(self):
        cli, output = make_cli([])
        assert cli.check_position(position_string(TIE_ROWS)) == 0

        assert "No win detected for any player" in output.text
        assert "Board is full" in output.text
        assert "Valid moves: []" in output.text

    def test_row_win(self):
        rows = ["       "] * 5 + ["XXXX   "]
        cli, output = make_cli([])
        assert cli.check_position(position_string(rows)) == 0

        assert "Win for X in a row" in output.text
        assert "Empty spaces: 38" in output.text

    def test_floating_pieces_are_flagged(self):
        rows = ["   O   "] + ["       "] * 5
        cli, output = make_cli([])
        cli.check_position(position_string(rows))
        assert "Warning: position has floating pieces" in output.text

    @pytest.mark.parametrize("position", ["1,2,0", ",".join(["7"] * 42), "a,b"])
    def test_bad_position(self, position):
        cli, output = make_cli([])
        assert cli.check_position(position) == 1
        assert "Error parsing position" in output.text

    def test_run_check_command(self):
        cli, output = make_cli([])
        assert cli.run(["check", "--position", position_string(TIE_ROWS)]) == 0
        assert "Loaded position:" in output.text


class TestArguments:
    """Logging options on the command line."""

    def test_debug_flag(self):
        cli, _ = make_cli([])
        cli.parse_args(["--debug", "check", "--position", "0"])
        assert debug.level == DebugLevel.DEBUG

    def test_debug_level(self):
        cli, _ = make_cli([])
        args = cli.parse_args(["--debug_level", "error", "--components", "board, win", "play"])
        assert debug.level == DebugLevel.ERROR
        assert args.command == "play"
