"""Shared fixtures for the Connect Four test suite."""

from typing import List

import pytest

from connectfour.game.board import Board
from connectfour.interfaces.cli import ConsoleIO
from connectfour.utils import Marker


class ScriptedConsole(ConsoleIO):
    """Console fed from a list of answers, recording everything shown."""

    def __init__(self, answers: List[str]):
        self.answers = list(answers)
        self.output: List[str] = []
        super().__init__(input_func=self._next_answer, output_func=self.output.append)

    def _next_answer(self) -> str:
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


def pattern_marker(row: int, column: int) -> Marker:
    """Marker for a fill pattern that never lines up four in a row."""
    return Marker.ONE if ((column // 2) + row) % 2 == 0 else Marker.TWO


def fill_without_win(board: Board, skip_top_of=None) -> None:
    """Fill the board bottom-up with the no-win pattern, optionally leaving one top cell."""
    for column in range(board.columns):
        for row in range(board.rows - 1, -1, -1):
            if row == 0 and column == skip_top_of:
                continue
            board.drop(pattern_marker(row, column), column)


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def scripted_console():
    return ScriptedConsole
