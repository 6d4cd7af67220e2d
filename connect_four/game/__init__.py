"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board representation, win detection and the
turn-alternation game loop.
"""

from connect_four.game.board import Board
from connect_four.game.errors import ColumnFullError, ConnectFourError, GameOverError, InvalidColumnError
from connect_four.game.win_detector import NO_WIN, WinDetector, WinResult
from connect_four.game.rules import (ConnectFourEnv, GameLoop, GameObserver, GameStatus,
                                     MoveSource, Player)

__all__ = [
    'Board', 'WinDetector', 'WinResult', 'NO_WIN',
    'GameLoop', 'GameStatus', 'GameObserver', 'MoveSource', 'Player', 'ConnectFourEnv',
    'ConnectFourError', 'InvalidColumnError', 'ColumnFullError', 'GameOverError',
]
