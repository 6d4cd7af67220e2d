"""
connect_four.interfaces - User interfaces for Connect Four

This package contains the terminal interface for playing and analysing games.
"""

# Don't import anything here to avoid circular imports
__all__ = []
