"""
cli.py - Command-line interface for Connect Four

This module provides the terminal front end: the tutorial, player setup,
column prompting, board rendering and end-of-game messages for interactive
play, plus a position checker for analysing arbitrary boards.
"""

import argparse
import sys
from typing import Callable, List, Optional, Tuple

from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.errors import InvalidColumnError
from connect_four.game.rules import GameLoop, GameObserver, MoveSource, Player
from connect_four.game.win_detector import WinDetector, WinResult
from connect_four.utils import COLS, CONNECT_N, Cell, parse_position

InputFn = Callable[[str], str]
OutputFn = Callable[..., None]

TUTORIAL = (
    "\nObject: Connect four of your checkers in a row while preventing your opponent"
    "\nfrom doing the same. But, look out - your opponent can sneak up on you and win the game!"
    "\nThe directions you can connect your checkers are: row, column or diagonal."
    "\n\nGameplay: Each turn, a player selects the column their piece falls into."
    f"\nColumns are numbered 0 to {COLS - 1}. And, of course, players can tie."
    "\nThat's it! Pretty simple, right?"
)


def _is_number(text: str) -> bool:
    try:
        int(text)
    except ValueError:
        return False
    return True


class ConsoleMoveSource(MoveSource):
    """Asks a human for a column until a playable one is entered."""

    def __init__(self, input_fn: InputFn = input, output_fn: OutputFn = print):
        self.input_fn = input_fn
        self.output_fn = output_fn

    def select_column(self, board: Board, player: Player) -> int:
        while True:
            raw = self.input_fn(f"{player.name}, enter a column: ").strip()
            try:
                column = int(raw)
                playable = board.is_column_playable(column)
            except (ValueError, InvalidColumnError):
                debug.debug(f"Rejected input {raw!r} from {player.name}", "cli")
                self.output_fn("\nInvalid column. Try again.")
                continue

            if playable:
                return column
            self.output_fn("\nThis column is full! Try again.")


class ConsoleObserver(GameObserver):
    """Prints the board and the game's progress."""

    def __init__(self, output_fn: OutputFn = print):
        self.output_fn = output_fn

    def show_board(self, board: Board):
        self.output_fn("\nCurrent board:")
        self.output_fn(board.render())

    def turn_started(self, loop: GameLoop) -> None:
        self.output_fn(f"\nRound {loop.turn}. Fight!")
        self.show_board(loop.board)

    def game_won(self, loop: GameLoop, player: Player, result: WinResult) -> None:
        self.show_board(loop.board)
        self.output_fn(f"\nCONGRATULATIONS!! {player} won by scoring {CONNECT_N} symbols "
                       f"in a row in: {result.axis.label}")

    def game_tied(self, loop: GameLoop) -> None:
        self.show_board(loop.board)
        self.output_fn("\nIt's a tie!")


class TextCLI:
    """Terminal interface for two human players."""

    def __init__(self, input_fn: InputFn = input, output_fn: OutputFn = print):
        """
        Initialize the CLI.

        Args:
            input_fn: Function used to read a line of input
            output_fn: Function used to print a line of output
        """
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.args = None

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug_level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--log_file', type=str, default=None, help='Also write logs to this file')
        parser.add_argument('--components', type=str, default=None,
                            help='Comma-separated components to log (board,win,game,env,cli)')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game')
        play_parser.add_argument('--no-tutorial', action='store_true',
                                 help='Skip the introduction and tutorial prompt')

        check_parser = subparsers.add_parser('check', help='Analyse a board position')
        check_parser.add_argument('--position', type=str, required=True,
                                  help='42 comma-separated cell codes (0 empty, 1 X, 2 O), top row first')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)
        if self.args.components:
            debug.configure(components=[c.strip() for c in self.args.components.split(',') if c.strip()])

        return self.args

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the CLI.

        Returns:
            Process exit code
        """
        if self.args is None:
            self.parse_args(argv)

        command = self.args.command or 'play'
        if command == 'play':
            self.play_game(show_intro=not getattr(self.args, 'no_tutorial', False))
            return 0
        if command == 'check':
            return self.check_position(self.args.position)

        self.output_fn("Please specify a command. Use --help for options.")
        return 1

    def ask_yes_no(self) -> bool:
        while True:
            answer = self.input_fn("\n>Enter Y(yes)/N(no)< ").strip().lower()
            if answer in ('y', 'yes'):
                return True
            if answer in ('n', 'no'):
                return False
            self.output_fn(f"\nSorry, '{answer}' is not a valid answer. Try again.")

    def introduction(self):
        self.output_fn("Welcome to Connect Four!\nDo you want to see the tutorial?")
        if self.ask_yes_no():
            self.output_fn(TUTORIAL)
        self.output_fn("\nSo.. shall we begin?")
        self.input_fn("\n>Press ENTER to continue< ")

    def player_name(self, num: str) -> str:
        """Ask for a name until a non-blank, non-numeric one is given."""
        while True:
            name = self.input_fn(f"\nPlayer {num}, enter your name: ").strip()
            if name and not _is_number(name):
                return name
            self.output_fn(f"\n'{name}' is an invalid name. Please, try again.")

    def player_symbol(self, name: str) -> Cell:
        """Ask a player to choose X or O."""
        while True:
            symbol = self.input_fn(f"\n{name}, enter your symbol:\n>Enter 1 for 'X' or 2 for 'O' ").strip()
            if symbol == '1':
                return Cell.MARK_A
            if symbol == '2':
                return Cell.MARK_B
            self.output_fn(f"\n'{symbol}' is an invalid symbol. Please, try again.")

    def goes_first(self, players: Tuple[Player, Player]) -> Player:
        """Ask which player moves first, matching names case-insensitively."""
        one, two = players
        while True:
            name = self.input_fn(f"\nSo, who goes first?\n>Enter {one.name} or {two.name}< ").strip().lower()
            if name == one.name.lower():
                return one
            if name == two.name.lower():
                return two
            self.output_fn(f"\n'{name}' is an invalid name. Please, try again.")

    def setup_players(self) -> Tuple[Tuple[Player, Player], Player]:
        """
        Create both players and choose who starts.

        Returns:
            The two players and the first player
        """
        first_name = self.player_name('one')
        first_mark = self.player_symbol(first_name)
        second_name = self.player_name('two')

        players = (Player(first_name, first_mark), Player(second_name, first_mark.other()))
        self.output_fn(f"\n{players[1].name} plays {players[1].mark.symbol}.")
        first = self.goes_first(players)
        debug.info(f"Players: {players[0]} and {players[1]}, {first.name} starts", "cli")
        return players, first

    def play_game(self, show_intro: bool = True) -> GameLoop:
        """Set up and play a full game."""
        if show_intro:
            self.introduction()

        players, first = self.setup_players()
        source = ConsoleMoveSource(self.input_fn, self.output_fn)
        loop = GameLoop(players, first, observer=ConsoleObserver(self.output_fn))
        loop.run({player.mark: source for player in players})
        return loop

    def check_position(self, position: str) -> int:
        """
        Load a position string and report what the engine sees.

        Returns:
            0 on success, 1 if the position could not be parsed
        """
        try:
            board = Board.from_rows(parse_position(position))
        except ValueError as e:
            debug.warning(f"Bad position string: {e}", "cli")
            self.output_fn(f"Error parsing position: {e}")
            return 1

        self.output_fn("Loaded position:")
        self.output_fn(board.render())

        result = WinDetector().check(board)
        if result.found:
            self.output_fn(f"\nWin for {result.mark.symbol} in a {result.axis.label}: {list(result.line)}")
        else:
            self.output_fn("\nNo win detected for any player")

        if board.is_full():
            self.output_fn("Board is full")
        else:
            self.output_fn(f"Empty spaces: {board.count(Cell.EMPTY)}")
        if not board.satisfies_gravity():
            self.output_fn("Warning: position has floating pieces")
        self.output_fn(f"Valid moves: {board.valid_columns()}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = TextCLI()
    try:
        return cli.run(argv)
    except (KeyboardInterrupt, EOFError):
        print("\nQuitting game.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
