"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class, which owns the grid of cells and
provides column drops, fullness queries and four-directional win detection.
Cells live in a flat numpy array indexed ``column * rows + row`` with row 0
at the top of the board.
"""

from typing import Iterator, List, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (CONNECT_N, DEFAULT_COLUMNS, DEFAULT_ROWS,
                               DIRECTION_VECTORS, ColumnFullError, Marker)


class Board:
    """
    Represents a Connect Four game board of any size.

    Columns are 0-indexed here; translating the player's 1-based numbering
    is left to the caller, as is range checking.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLUMNS):
        """
        Initialize an empty board.

        Args:
            rows: Number of rows
            columns: Number of columns

        Raises:
            ValueError: If either dimension cannot hold a winning line
        """
        if rows < CONNECT_N or columns < CONNECT_N:
            raise ValueError(f"Board must be at least {CONNECT_N} x {CONNECT_N}, "
                             f"got {rows} x {columns}")
        debug.debug(f"Initializing new {rows} x {columns} Board", "board")
        self.rows = rows
        self.columns = columns
        self.reset()

    def reset(self):
        """Reset every cell to empty. Dimensions are unchanged."""
        debug.debug("Resetting board", "board")
        self._cells = np.full(self.rows * self.columns, Marker.EMPTY.value, dtype=np.int8)
        self.move_count = 0

    def _index(self, row: int, column: int) -> int:
        return column * self.rows + row

    def _column_cells(self, column: int) -> np.ndarray:
        if not (0 <= column < self.columns):
            raise IndexError(f"column {column} out of range for {self.columns} columns")
        start = column * self.rows
        return self._cells[start:start + self.rows]

    def cell(self, row: int, column: int) -> Marker:
        """Get the marker at (row, column)."""
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise IndexError(f"cell ({row}, {column}) is off the board")
        return Marker(int(self._cells[self._index(row, column)]))

    @property
    def grid(self) -> np.ndarray:
        """A rows x columns copy of the cell values."""
        return self._cells.reshape(self.columns, self.rows).T.copy()

    def is_column_full(self, column: int) -> bool:
        """Check whether every cell in the column is occupied."""
        return bool(np.all(self._column_cells(column) != Marker.EMPTY.value))

    def is_full(self) -> bool:
        """Check whether every cell on the board is occupied."""
        return bool(np.all(self._cells != Marker.EMPTY.value))

    def valid_columns(self) -> List[int]:
        """
        Get the columns that can still take a piece.

        Returns:
            List of 0-indexed column numbers
        """
        return [col for col in range(self.columns) if not self.is_column_full(col)]

    def drop(self, marker: Marker, column: int) -> int:
        """
        Drop a marker into a column. It lands in the lowest empty cell.

        Args:
            marker: The marker to place
            column: The column to drop into (0-indexed)

        Returns:
            The row the marker landed in

        Raises:
            ColumnFullError: If the column's top cell is occupied
        """
        if marker == Marker.EMPTY:
            raise ValueError("Cannot drop an empty marker")

        cells = self._column_cells(column)
        # Gravity keeps occupied cells contiguous from the bottom, so a
        # non-empty top cell means the whole column is full.
        if cells[0] != Marker.EMPTY.value:
            debug.debug(f"Rejected drop: column {column} is full", "board")
            raise ColumnFullError(column)

        for row in range(self.rows - 1, -1, -1):
            if cells[row] == Marker.EMPTY.value:
                debug.trace(f"Placing {marker.name} at ({row}, {column})", "board")
                cells[row] = marker.value
                self.move_count += 1
                return row

        # Unreachable while the gravity invariant holds
        raise ColumnFullError(column)

    def _start_cells(self, dr: int, dc: int) -> Iterator[Tuple[int, int]]:
        """Yield every start cell whose run of CONNECT_N stays on the board."""
        span = CONNECT_N - 1
        rows = range(max(0, -dr * span), self.rows - max(0, dr * span))
        cols = range(max(0, -dc * span), self.columns - max(0, dc * span))
        for row in rows:
            for col in cols:
                yield row, col

    def winning_line(self, marker: Marker) -> List[Tuple[int, int]]:
        """
        Find a line of CONNECT_N markers in any of the four directions.

        Args:
            marker: The marker to look for

        Returns:
            List of (row, column) positions of the first line found, or an
            empty list if there is none
        """
        if marker == Marker.EMPTY:
            return []

        value = marker.value
        for direction, (dr, dc) in DIRECTION_VECTORS.items():
            for row, col in self._start_cells(dr, dc):
                line = [(row + i * dr, col + i * dc) for i in range(CONNECT_N)]
                if all(self._cells[self._index(r, c)] == value for r, c in line):
                    debug.trace(f"{direction.name} line for {marker.name} at {line}", "board")
                    return line
        return []

    def check_win(self, marker: Marker) -> bool:
        """
        Check if the marker has four or more in a row anywhere on the board.

        Args:
            marker: The marker to check for

        Returns:
            True if there is a winning line, False otherwise
        """
        return bool(self.winning_line(marker))

    def render(self) -> "BoardRendering":
        """
        Render the board.

        Returns:
            A lazy view yielding one text line at a time
        """
        return BoardRendering(self)

    def __str__(self) -> str:
        return str(self.render())


class BoardRendering:
    """
    Text view of a board.

    Iterating produces the header, one line per row and the bottom border.
    Each iteration reads the live board, so the same view can be reused
    after further moves.
    """

    def __init__(self, board: Board):
        self.board = board

    def __iter__(self) -> Iterator[str]:
        board = self.board
        yield "".join(f" {col}" for col in range(1, board.columns + 1))
        for row in range(board.rows):
            symbols = (board.cell(row, col).symbol for col in range(board.columns))
            yield "║" + "║".join(symbols) + "║"
        yield "╚═" + "╩═" * (board.columns - 1) + "╝"

    def __str__(self) -> str:
        return "\n".join(self)
