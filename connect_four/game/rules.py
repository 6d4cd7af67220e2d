"""
rules.py - Turn management and Gymnasium environment for Connect Four

This module provides:
1. The GameLoop state machine that alternates two players over a Board
2. The collaborator interfaces the loop talks to (move sources and observers)
3. A gymnasium-compatible environment driving a GameLoop
"""

import abc
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect_four.debug import debug
from connect_four.game.board import Board
from connect_four.game.errors import GameOverError
from connect_four.game.win_detector import NO_WIN, WinDetector, WinResult
from connect_four.utils import ROWS, COLS, Cell


@dataclass(frozen=True)
class Player:
    """A named participant holding one of the two marks."""
    name: str
    mark: Cell

    def __str__(self) -> str:
        return f"{self.name}({self.mark.symbol})"


class GameStatus(Enum):
    """States of the game loop."""
    AWAITING_MOVE = auto()
    WON = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.AWAITING_MOVE


class MoveSource(abc.ABC):
    """Supplies column choices for a player."""

    @abc.abstractmethod
    def select_column(self, board: Board, player: Player) -> int:
        """
        Choose a column for the player to drop into.

        Implementations keep asking until they have a playable column.
        """
        raise NotImplementedError


class GameObserver:
    """Receives game events. All hooks default to doing nothing."""

    def turn_started(self, loop: 'GameLoop') -> None:
        pass

    def move_made(self, loop: 'GameLoop', player: Player, column: int, row: int) -> None:
        pass

    def game_won(self, loop: 'GameLoop', player: Player, result: WinResult) -> None:
        pass

    def game_tied(self, loop: 'GameLoop') -> None:
        pass


class GameLoop:
    """
    Alternates two players over a board until one wins or the board fills.

    The loop owns its board for the lifetime of the game.
    """

    def __init__(self, players: Tuple[Player, Player], first: Optional[Player] = None,
                 board: Optional[Board] = None,
                 detector: Optional[WinDetector] = None,
                 observer: Optional[GameObserver] = None):
        """
        Initialize a game.

        Args:
            players: The two players, with distinct marks
            first: The player who moves first (defaults to players[0])
            board: Starting board (defaults to an empty board)
            detector: Win detector to use
            observer: Receiver for game events

        Raises:
            ValueError: If the players do not hold two distinct marks, or
                first is not one of them
        """
        if len(players) != 2:
            raise ValueError(f"Expected exactly two players, got {len(players)}")
        marks = {p.mark for p in players}
        if marks != {Cell.MARK_A, Cell.MARK_B}:
            raise ValueError("Players must hold the two distinct marks")
        if first is None:
            first = players[0]
        if first not in players:
            raise ValueError(f"First player {first} is not in this game")

        self.players = tuple(players)
        self.board = board if board is not None else Board()
        self.detector = detector if detector is not None else WinDetector()
        self.observer = observer if observer is not None else GameObserver()

        self.active_player = first
        self.status = GameStatus.AWAITING_MOVE
        self.turn = 0
        self.winner: Optional[Player] = None
        self.result: WinResult = NO_WIN
        self.moves: List[int] = []

        debug.debug(f"New game: {self.players[0]} vs {self.players[1]}, {first} first", "game")

    def other_player(self, player: Player) -> Player:
        return self.players[1] if player == self.players[0] else self.players[0]

    def play(self, column: int) -> GameStatus:
        """
        Apply the active player's move and advance the game.

        Args:
            column: The column to drop into

        Returns:
            The status after the move

        Raises:
            GameOverError: If the game has already finished
            InvalidColumnError: If the column is outside the board
            ColumnFullError: If the column is already full
        """
        if self.status.is_game_over():
            raise GameOverError(f"Game is over ({self.status.name})")

        player = self.active_player
        row = self.board.drop(column, player.mark)
        self.moves.append(column)
        self.observer.move_made(self, player, column, row)

        result = self.detector.check(self.board)
        if result.found:
            self.status = GameStatus.WON
            self.winner = player
            self.result = result
            debug.info(f"{player} wins by {result.axis.label} after {len(self.moves)} moves", "game")
            self.observer.game_won(self, player, result)
        elif self.board.is_full():
            self.status = GameStatus.TIED
            debug.info("Game ends in a tie", "game")
            self.observer.game_tied(self)
        else:
            self.turn += 1
            self.active_player = self.other_player(player)
            debug.trace(f"Turn {self.turn}: {self.active_player} to move", "game")

        return self.status

    def run(self, sources: Dict[Cell, MoveSource]) -> GameStatus:
        """
        Play until the game ends.

        Args:
            sources: Move source for each mark

        Returns:
            The terminal status
        """
        while not self.status.is_game_over():
            self.observer.turn_started(self)
            player = self.active_player
            column = sources[player.mark].select_column(self.board, player)
            self.play(column)
        return self.status


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Both sides are played through step(); the mark to move alternates after
    every legal action.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 reward_win: float = 1.0,
                 reward_draw: float = 0.1,
                 reward_invalid_move: float = -0.5,
                 reward_step: float = -0.01):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            reward_win: Reward for the move that wins the game
            reward_draw: Reward for the move that fills the board
            reward_invalid_move: Reward for an illegal column
            reward_step: Reward for any other legal move
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)

        # Observation space: 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.render_mode = render_mode
        self.reward_win = reward_win
        self.reward_draw = reward_draw
        self.reward_invalid_move = reward_invalid_move
        self.reward_step = reward_step

        self.game = self._new_game()

    @staticmethod
    def _new_game() -> GameLoop:
        return GameLoop((Player("X", Cell.MARK_A), Player("O", Cell.MARK_B)))

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment to an empty board.

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")
        self.game = self._new_game()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Drop a piece for the side to move.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.game.status.is_game_over():
            raise GameOverError("Call reset() before stepping a finished game")

        action = int(action)
        if action not in self.game.board.valid_columns():
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        status = self.game.play(action)
        reward = self.reward_step
        if status == GameStatus.WON:
            reward = self.reward_win
        elif status == GameStatus.TIED:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, status.is_game_over(), False, self._get_info()

    def render(self) -> Optional[str]:
        """Render the current board according to render_mode."""
        if self.render_mode == "ascii":
            return self.game.board.render()
        if self.render_mode == "human":
            print(self.game.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        result = self.game.result
        return {
            'valid_moves': self.game.board.valid_columns(),
            'current_player': self.game.active_player.mark.value,
            'status': self.game.status.name,
            'turn': self.game.turn,
            'moves_made': len(self.game.moves),
            'winning_axis': result.axis.name if result.found else None,
            'winning_line': list(result.line),
        }
