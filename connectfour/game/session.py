"""
session.py - Game session management for Connect Four

This module provides the players and the session controller, which runs one
or more games on a shared board, alternates turns, swaps the starting player
each game and keeps score.
"""

from dataclasses import dataclass
from typing import Optional, Union

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import (DRAW_POINTS, WIN_POINTS, ColumnFullError,
                               EndSession, Marker, SessionStateError)


@dataclass
class Player:
    """A named player with a marker and a running score."""
    name: str
    marker: Marker
    score: int = 0

    def add_win_score(self) -> None:
        self.score += WIN_POINTS

    def add_draw_score(self) -> None:
        self.score += DRAW_POINTS

    def score_text(self) -> str:
        return f"{self.name}: {self.score}"


# --- Game results ---

@dataclass(frozen=True)
class Win:
    player: Player


@dataclass(frozen=True)
class Draw:
    pass


GameResult = Union[Win, Draw]


# --- Session states ---

@dataclass(frozen=True)
class AwaitingMove:
    player: Player
    game_number: int


@dataclass(frozen=True)
class GameOver:
    result: GameResult
    game_number: int


@dataclass(frozen=True)
class SessionComplete:
    aborted: bool = False


SessionState = Union[AwaitingMove, GameOver, SessionComplete]


class GameSession:
    """
    Session controller for a sequence of Connect Four games.

    The session owns the board and both players. Drive it step by step with
    ``start``, ``play_move``, ``next_game`` and ``end``, or hand it a console
    and call ``run`` to play the whole session.
    """

    def __init__(self, player1: Player, player2: Player,
                 board: Optional[Board] = None, games: int = 1):
        """
        Initialize a session.

        Args:
            player1: The player who starts odd-numbered games
            player2: The player who starts even-numbered games
            board: Board to play on (a default 6 x 7 board if omitted)
            games: Number of games in the session
        """
        if games < 1:
            raise ValueError(f"A session needs at least one game, got {games}")
        if player1.marker == player2.marker or Marker.EMPTY in (player1.marker, player2.marker):
            raise ValueError("Players need distinct, non-empty markers")

        debug.debug(f"Initializing GameSession: {player1.name} vs {player2.name}, "
                    f"{games} game(s)", "session")
        self.player1 = player1
        self.player2 = player2
        self.board = board if board is not None else Board()
        self.games = games
        self.game_number = 0
        self.state: Optional[SessionState] = None

    @property
    def is_complete(self) -> bool:
        return isinstance(self.state, SessionComplete)

    def starting_player(self, game_number: int) -> Player:
        """Player one starts odd-numbered games, player two even-numbered ones."""
        return self.player1 if game_number % 2 == 1 else self.player2

    def other(self, player: Player) -> Player:
        return self.player2 if player is self.player1 else self.player1

    def start(self) -> SessionState:
        """Begin game one on an empty board."""
        if self.state is not None:
            raise SessionStateError("Session has already started")
        self.board.reset()
        self.game_number = 1
        self.state = AwaitingMove(self.starting_player(1), 1)
        debug.debug(f"Game #1 started by {self.state.player.name}", "session")
        return self.state

    def play_move(self, column: int) -> SessionState:
        """
        Drop the active player's marker into a column.

        Args:
            column: Column number as chosen by the player (1-based)

        Returns:
            The new session state

        Raises:
            ColumnFullError: If the column is full; the state is unchanged
            SessionStateError: If no move is expected
        """
        if not isinstance(self.state, AwaitingMove):
            raise SessionStateError(f"Cannot play a move in state {self.state!r}")

        player = self.state.player
        self.board.drop(player.marker, column - 1)
        debug.debug(f"{player.name} dropped in column {column}", "session")

        if self.board.check_win(player.marker):
            player.add_win_score()
            self.state = GameOver(Win(player), self.game_number)
            debug.info(f"Game #{self.game_number} won by {player.name}", "session")
        elif self.board.is_full():
            self.player1.add_draw_score()
            self.player2.add_draw_score()
            self.state = GameOver(Draw(), self.game_number)
            debug.info(f"Game #{self.game_number} drawn", "session")
        else:
            self.state = AwaitingMove(self.other(player), self.game_number)

        return self.state

    def next_game(self) -> SessionState:
        """
        Leave a finished game: start the next one, or complete the session.

        Raises:
            SessionStateError: If the current game is not over
        """
        if not isinstance(self.state, GameOver):
            raise SessionStateError(f"Cannot advance from state {self.state!r}")

        if self.game_number >= self.games:
            self.state = SessionComplete()
            debug.info(f"Session complete: {self.score_line()}", "session")
            return self.state

        self.board.reset()
        self.game_number += 1
        self.state = AwaitingMove(self.starting_player(self.game_number), self.game_number)
        debug.debug(f"Game #{self.game_number} started by {self.state.player.name}", "session")
        return self.state

    def end(self) -> SessionState:
        """Abort the whole session at the player's request."""
        debug.info(f"Session ended during game #{self.game_number}", "session")
        self.state = SessionComplete(aborted=True)
        return self.state

    def score_line(self) -> str:
        return f"{self.player1.score_text()} {self.player2.score_text()}"

    def run(self, console) -> SessionComplete:
        """
        Play the whole session against a console.

        The console provides ``request_column(name, max_column)``, which
        returns a ColumnChoice or EndSession, plus ``show_board(board)`` and
        ``show(message)`` for output.

        Returns:
            The final SessionComplete state
        """
        if self.state is None:
            self.start()

        while not self.is_complete:
            state = self.state
            if isinstance(state, AwaitingMove):
                choice = console.request_column(state.player.name, self.board.columns)
                if isinstance(choice, EndSession):
                    self.end()
                    break
                try:
                    self.play_move(choice.column)
                except ColumnFullError as e:
                    console.show(str(e))
                    continue
                console.show_board(self.board)

            elif isinstance(state, GameOver):
                if isinstance(state.result, Win):
                    console.show(f"Player {state.result.player.name} won")
                else:
                    console.show("It is a draw")
                if self.games > 1:
                    console.show("Score")
                    console.show(self.score_line())

                if isinstance(self.next_game(), AwaitingMove):
                    console.show(f"Game #{self.game_number}")
                    console.show_board(self.board)

        return self.state
