"""
connect_four - Two-player Connect Four engine

This package provides the board state machine, full-board win detection,
the turn-alternation game loop, a Gymnasium environment over the engine,
and a text interface for playing in a terminal.
"""

# Version number
__version__ = '0.1.0'
