"""
cli.py - Command-line interface for the Connect Four console game

This module provides the console collaborator used by the game session
(prompts, input parsing and board display) and the command-line entry point
that configures and starts a session.
"""

import argparse
import re
from typing import Callable, List, Optional, Tuple

from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.game.session import GameSession, Player, SessionComplete
from connectfour.utils import (DEFAULT_COLUMNS, DEFAULT_ROWS, END_COMMAND,
                               MAX_DIMENSION, MIN_DIMENSION, ColumnChoice,
                               EndSession, InvalidInputFormat, Marker,
                               MoveRequest, OutOfRange)

DIMENSIONS_PATTERN = re.compile(r"^\s*([0-9]+)\s*x\s*([0-9]+)\s*$", re.IGNORECASE | re.ASCII)
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

PLAYER_ORDINALS = {1: "First", 2: "Second"}


# --- Input parsing ---

def parse_integer(text: str, message: str) -> int:
    """
    Parse a plain ASCII integer with an optional sign.

    Surrounding whitespace, digit separators and non-ASCII digits are
    rejected even though int() would accept them.

    Raises:
        InvalidInputFormat: With the given message, if the text is not an integer
    """
    if INTEGER_PATTERN.fullmatch(text) is None:
        raise InvalidInputFormat(message)
    return int(text)


def parse_dimensions(text: str) -> Tuple[int, int]:
    """
    Parse a "<rows> x <columns>" string. An empty string means the default.

    Raises:
        InvalidInputFormat: If the text does not match the pattern
        OutOfRange: If either dimension is outside MIN_DIMENSION..MAX_DIMENSION
    """
    if text == "":
        return DEFAULT_ROWS, DEFAULT_COLUMNS

    match = DIMENSIONS_PATTERN.match(text)
    if match is None:
        raise InvalidInputFormat("Invalid input")

    rows, columns = int(match.group(1)), int(match.group(2))
    if not (MIN_DIMENSION <= rows <= MAX_DIMENSION):
        raise OutOfRange(f"Board rows should be from {MIN_DIMENSION} to {MAX_DIMENSION}")
    if not (MIN_DIMENSION <= columns <= MAX_DIMENSION):
        raise OutOfRange(f"Board columns should be from {MIN_DIMENSION} to {MAX_DIMENSION}")
    return rows, columns


def parse_game_count(text: str) -> int:
    """Parse the number of games. An empty string means a single game."""
    if text == "":
        return 1
    count = parse_integer(text, "Invalid input")
    if count < 1:
        raise OutOfRange("Invalid input")
    return count


def parse_column(text: str, max_column: int) -> MoveRequest:
    """
    Parse a column choice in 1..max_column, or the end-session command.

    Raises:
        InvalidInputFormat: If the text is not a number
        OutOfRange: If the number is not a column on the board
    """
    if text == END_COMMAND:
        return EndSession()
    column = parse_integer(text, "Incorrect column number")
    if not (1 <= column <= max_column):
        raise OutOfRange(f"The column number is out of range (1 - {max_column})")
    return ColumnChoice(column)


# --- Console collaborator ---

class ConsoleIO:
    """Prompts players and displays the game on a text console."""

    def __init__(self, input_func: Callable[[], str] = input,
                 output_func: Callable[[str], None] = print):
        self._input = input_func
        self._output = output_func

    def show(self, message: str) -> None:
        self._output(message)

    def show_board(self, board: Board) -> None:
        for line in board.render():
            self._output(line)

    def request_player_name(self, ordinal: int) -> str:
        self.show(f"{PLAYER_ORDINALS.get(ordinal, f'Player {ordinal}')} player's name:")
        return self._input()

    def request_board_dimensions(self) -> Tuple[int, int]:
        """Ask for board dimensions until a valid answer is given."""
        while True:
            self.show("Set the board dimensions (Rows x Columns)")
            self.show(f"Press Enter for default ({DEFAULT_ROWS} x {DEFAULT_COLUMNS})")
            try:
                return parse_dimensions(self._input())
            except (InvalidInputFormat, OutOfRange) as e:
                debug.debug(f"Rejected dimensions: {e}", "cli")
                self.show(str(e))

    def request_game_count(self) -> int:
        """Ask for the number of games until a valid answer is given."""
        while True:
            self.show("Do you want to play single or multiple games?")
            self.show("For a single game, input 1 or press Enter")
            self.show("Input a number of games:")
            try:
                return parse_game_count(self._input())
            except (InvalidInputFormat, OutOfRange) as e:
                debug.debug(f"Rejected game count: {e}", "cli")
                self.show(str(e))

    def request_column(self, player_name: str, max_column: int) -> MoveRequest:
        """
        Ask a player for a column until a valid choice or the end command.

        Running out of input counts as ending the session.
        """
        while True:
            self.show(f"{player_name}'s turn")
            try:
                return parse_column(self._input(), max_column)
            except EOFError:
                debug.warning("Input closed, ending session", "cli")
                return EndSession()
            except (InvalidInputFormat, OutOfRange) as e:
                debug.debug(f"Rejected column from {player_name}: {e}", "cli")
                self.show(str(e))


# --- Command-line entry point ---

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description='Connect Four for two players')

    game_group = parser.add_argument_group('Game options')
    game_group.add_argument('--rows', type=int,
                            help=f'Board rows ({MIN_DIMENSION}-{MAX_DIMENSION}); default {DEFAULT_ROWS} '
                                 f'when only --columns is given, prompted if both are omitted')
    game_group.add_argument('--columns', type=int,
                            help=f'Board columns ({MIN_DIMENSION}-{MAX_DIMENSION}); default {DEFAULT_COLUMNS} '
                                 f'when only --rows is given, prompted if both are omitted')
    game_group.add_argument('--games', type=int,
                            help='Number of games in the session; prompted if omitted')

    debug_group = parser.add_argument_group('Debug options')
    debug_group.add_argument('--debug', action='store_true', help='Enable debug logging')
    debug_group.add_argument('--debug-level',
                             choices=[level.name.lower() for level in DebugLevel],
                             default='warning',
                             help='Logging level (default: warning)')
    debug_group.add_argument('--log-file', help='Also write log messages to this file')

    args = parser.parse_args(argv)

    for name in ('rows', 'columns'):
        value = getattr(args, name)
        if value is not None and not (MIN_DIMENSION <= value <= MAX_DIMENSION):
            parser.error(f"--{name} must be from {MIN_DIMENSION} to {MAX_DIMENSION}")
    if args.games is not None and args.games < 1:
        parser.error("--games must be at least 1")

    return args


def configure_debug(args: argparse.Namespace) -> None:
    """Configure logging from the parsed arguments."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)


class SimpleCLI:
    """Sets up a session from arguments and prompts, then plays it."""

    def __init__(self, args: argparse.Namespace, console: Optional[ConsoleIO] = None):
        self.args = args
        self.console = console or ConsoleIO()

    def setup_session(self) -> GameSession:
        """Collect names, board size and game count, then build the session."""
        console = self.console
        console.show("Connect Four")
        player1 = Player(console.request_player_name(1), Marker.ONE)
        player2 = Player(console.request_player_name(2), Marker.TWO)

        # Either option alone skips the prompt; the other dimension takes its default
        if self.args.rows is not None or self.args.columns is not None:
            rows = self.args.rows or DEFAULT_ROWS
            columns = self.args.columns or DEFAULT_COLUMNS
        else:
            rows, columns = console.request_board_dimensions()

        games = self.args.games if self.args.games is not None else console.request_game_count()

        debug.info(f"Session configured: {rows} x {columns}, {games} game(s)", "cli")
        return GameSession(player1, player2, Board(rows, columns), games)

    def show_game_info(self, session: GameSession) -> None:
        console = self.console
        console.show(f"{session.player1.name} VS {session.player2.name}")
        console.show(f"{session.board.rows} x {session.board.columns} board")
        if session.games > 1:
            console.show(f"Total {session.games} games")
            console.show("Game #1")
        else:
            console.show("Single game")
        console.show_board(session.board)

    def run(self) -> SessionComplete:
        """Play a full session and return its final state."""
        try:
            session = self.setup_session()
        except EOFError:
            debug.warning("Input closed during setup", "cli")
            self.console.show("Game over!")
            return SessionComplete(aborted=True)

        session.start()
        self.show_game_info(session)
        result = session.run(self.console)
        self.console.show("Game over!")
        return result


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    configure_debug(args)
    SimpleCLI(args).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
