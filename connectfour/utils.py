"""
utils.py - Constants, enumerations and shared types for Connect Four

This module provides the constants, marker and direction enumerations, the
error taxonomy, and the typed results returned by move requests. Everything
else in the package builds on these.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Tuple, Union

# Board constants
DEFAULT_ROWS = 6
DEFAULT_COLUMNS = 7
MIN_DIMENSION = 5
MAX_DIMENSION = 9
CONNECT_N = 4  # Number of pieces in a row to win

# Scoring
WIN_POINTS = 2
DRAW_POINTS = 1

# Console command that ends the whole session
END_COMMAND = "end"


class Marker(Enum):
    """Enumeration representing cell contents and player markers."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    @property
    def symbol(self) -> str:
        return MARKER_SYMBOLS[self]

    def __str__(self):
        return self.symbol


MARKER_SYMBOLS: Dict[Marker, str] = {
    Marker.EMPTY: " ",
    Marker.ONE: "o",
    Marker.TWO: "*",
}


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()  # Main diagonal
    DIAGONAL_DOWN_LEFT = auto()   # Anti-diagonal


# Direction vectors (row, column) for each direction; row 0 is the top row
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


# --- Errors ---

class ConnectFourError(Exception):
    """Base class for Connect Four errors."""


class InvalidInputFormat(ConnectFourError):
    """Input could not be parsed (dimension, game count or column)."""


class OutOfRange(ConnectFourError):
    """Input parsed but falls outside its allowed bounds."""


class ColumnFullError(ConnectFourError):
    """A drop was attempted into a column with no empty cell."""

    def __init__(self, column: int):
        # column is 0-based; the message uses the player's numbering
        self.column = column
        super().__init__(f"Column {column + 1} is full")


class SessionStateError(ConnectFourError):
    """A session operation was called in a state that does not allow it."""


# --- Move request results ---

@dataclass(frozen=True)
class ColumnChoice:
    """A validated column choice, 1-based as typed by the player."""
    column: int


@dataclass(frozen=True)
class EndSession:
    """Sentinel returned when the player asks to end the whole session."""


MoveRequest = Union[ColumnChoice, EndSession]
