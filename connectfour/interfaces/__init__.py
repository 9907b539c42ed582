"""
connectfour.interfaces - User interfaces for Connect Four

This package contains the console interface used to play the game.
"""

# Don't import anything here to avoid circular imports
__all__ = []
