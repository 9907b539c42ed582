"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation and the session controller
that sequences turns, games and scores.
"""

from connectfour.game.board import Board, BoardRendering
from connectfour.game.session import GameSession, Player

__all__ = ['Board', 'BoardRendering', 'GameSession', 'Player']
