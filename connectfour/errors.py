"""
errors.py - Error kinds and move results

Setup problems (a bad mode, a missing name) raise a ``GameError``. Rejected
moves are not raised: ``Engine.drop_piece`` returns a ``MoveResult`` whose
``error`` field names what went wrong, and the caller branches on it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from connectfour.game.engine import Match


class ErrorKind(Enum):
    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_COLUMN = "invalid_column"
    COLUMN_FULL = "column_full"
    MATCH_FINISHED = "match_finished"
    NULL_ARGUMENT = "null_argument"


class GameError(Exception):
    """Base class for engine errors. ``kind`` classifies the failure."""

    kind: ErrorKind

    def __init__(self, message: str = ""):
        kind = getattr(self, "kind", None)
        super().__init__(message or (kind.value.replace("_", " ") if kind else ""))


class InvalidConfigurationError(GameError):
    kind = ErrorKind.INVALID_CONFIGURATION


class NullArgumentError(GameError):
    kind = ErrorKind.NULL_ARGUMENT


class InvalidColumnError(GameError):
    kind = ErrorKind.INVALID_COLUMN


class ColumnFullError(GameError):
    kind = ErrorKind.COLUMN_FULL


class MatchFinishedError(GameError):
    kind = ErrorKind.MATCH_FINISHED


ERROR_TYPES = {
    cls.kind: cls
    for cls in (InvalidConfigurationError, NullArgumentError, InvalidColumnError,
                ColumnFullError, MatchFinishedError)
}


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a drop attempt.

    Attributes:
        match: Snapshot of the match after the attempt (unchanged on rejection)
        error: Why the move was rejected, or None if it was accepted
        column: Column the piece actually went into (None on rejection)
        message: Human-readable description of a rejection
    """
    match: 'Match'
    error: Optional[ErrorKind] = None
    column: Optional[int] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> 'MoveResult':
        """Raise the matching ``GameError`` if the move was rejected."""
        if self.error is not None:
            raise ERROR_TYPES[self.error](self.message)
        return self
