"""
api.py - Status-coded facade over the engine

Wraps engine calls in ``Response`` objects carrying a numeric status code,
a message and an optional payload, for front ends that prefer checking codes
to handling engine types directly.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Generic, Optional, TypeVar

import numpy as np

from connectfour.debug import debug
from connectfour.errors import ErrorKind, GameError
from connectfour.game.contestant import Contestant
from connectfour.game.engine import Engine, Match
from connectfour.utils import GameResult

T = TypeVar("T")


class Code(IntEnum):
    # Success codes
    START_GAME = 200
    SET_NAME = 201
    DROP_PIECE = 202
    P1_WIN = 203
    P2_WIN = 204
    DRAW_GAME = 205
    CONT_GAME = 206
    GET_GAME_STATUS = 207

    # Error codes
    START_GAME_ERR = 300
    NULL_ARGUMENT_ERR = 301
    INVALID_MOVE_ERR = 302
    FULL_COL_ERR = 303
    GAME_FIN_ERR = 304

    @property
    def is_success(self) -> bool:
        return 200 <= self.value < 300


class Message:
    GAME_NOT_INIT = "Game not initialized"
    NULL_ARGUMENT = "Missing contestant or name"
    INVALID_MOVE = "Invalid move"
    COLUMN_FULL = "Column is full"
    GAME_OVER = "The game is over"
    P1_WIN_INFO = "Player 1 wins the game"
    P2_WIN_INFO = "Player 2 wins the game"
    DRAW_INFO = "Game draw"
    GAME_CONTINUE = "Game is continuing"


ERROR_RESPONSES = {
    ErrorKind.INVALID_CONFIGURATION: (Code.START_GAME_ERR, Message.GAME_NOT_INIT),
    ErrorKind.NULL_ARGUMENT: (Code.NULL_ARGUMENT_ERR, Message.NULL_ARGUMENT),
    ErrorKind.INVALID_COLUMN: (Code.INVALID_MOVE_ERR, Message.INVALID_MOVE),
    ErrorKind.COLUMN_FULL: (Code.FULL_COL_ERR, Message.COLUMN_FULL),
    ErrorKind.MATCH_FINISHED: (Code.GAME_FIN_ERR, Message.GAME_OVER),
}


@dataclass(frozen=True, eq=False)
class GameState:
    """Board and active contestant handed out with responses."""
    board: np.ndarray
    current_player: Contestant

    @classmethod
    def from_match(cls, match: Match) -> 'GameState':
        return cls(board=match.grid.copy(), current_player=match.active)


@dataclass(frozen=True)
class Response(Generic[T]):
    status_code: Code
    message: str = ""
    data: Optional[T] = None

    @property
    def ok(self) -> bool:
        return self.status_code.is_success

    @classmethod
    def success(cls, code: Code, data: Optional[T] = None, message: str = "") -> 'Response[T]':
        return cls(code, message, data)

    @classmethod
    def error(cls, kind: ErrorKind, data: Optional[T] = None) -> 'Response[T]':
        code, message = ERROR_RESPONSES[kind]
        return cls(code, message, data)


class GameAPI:
    """Runs one match and reports every call as a Response."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)
        self.engine: Optional[Engine] = None

    def start_game(self, mode: int, player1: Optional[Contestant] = None,
                   player2: Optional[Contestant] = None) -> Response[GameState]:
        # Each game gets its own engine so that reset returns to this mode
        try:
            engine = Engine(mode, player1, player2, rng=self._rng)
        except GameError as e:
            debug.debug(f"start_game failed: {e}", "api")
            return Response.error(e.kind)
        self.engine = engine
        return Response.success(Code.START_GAME, GameState.from_match(engine.get_state()))

    def set_name(self, player: Optional[Contestant], name: Optional[str]) -> Response[str]:
        if self.engine is None:
            return Response.error(ErrorKind.INVALID_CONFIGURATION)
        try:
            confirmation = self.engine.rename_contestant(player, name)
        except GameError as e:
            return Response.error(e.kind)
        return Response.success(Code.SET_NAME, confirmation, confirmation)

    def drop_piece(self, column: int) -> Response[GameState]:
        if self.engine is None:
            return Response.error(ErrorKind.INVALID_CONFIGURATION)

        result = self.engine.drop_piece(column)
        state = GameState.from_match(result.match)
        if not result.ok:
            return Response.error(result.error, state)
        return Response.success(Code.DROP_PIECE, state, f"Dropped in column {result.column}")

    def get_game_state(self) -> Response[GameState]:
        if self.engine is None:
            return Response.error(ErrorKind.INVALID_CONFIGURATION)
        return Response.success(Code.GET_GAME_STATUS, GameState.from_match(self.engine.get_state()))

    def get_winning_info(self) -> Response[Contestant]:
        """Report the outcome: which player won, a draw, or still playing."""
        if self.engine is None:
            return Response.error(ErrorKind.INVALID_CONFIGURATION)

        outcome = self.engine.get_outcome()
        if outcome == GameResult.CONTINUING:
            return Response.success(Code.CONT_GAME, message=Message.GAME_CONTINUE)
        if outcome == GameResult.DRAWN:
            return Response.success(Code.DRAW_GAME, message=Message.DRAW_INFO)

        winner = self.engine.get_winner()
        if winner is self.engine.contestants[0]:
            return Response.success(Code.P1_WIN, winner, Message.P1_WIN_INFO)
        return Response.success(Code.P2_WIN, winner, Message.P2_WIN_INFO)

    def reset(self) -> Response[GameState]:
        if self.engine is None:
            return Response.error(ErrorKind.INVALID_CONFIGURATION)
        match = self.engine.reset()
        return Response.success(Code.START_GAME, GameState.from_match(match))
