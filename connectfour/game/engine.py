"""
engine.py - Match state and turn sequencing for Connect Four

The Engine owns one match: the board, both contestants, whose turn it is and
how the match ended. All mutation goes through its operations. Callers get
``Match`` snapshots whose grid is a private copy.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from connectfour.debug import debug
from connectfour.errors import (ErrorKind, InvalidConfigurationError, MoveResult,
                                NullArgumentError)
from connectfour.game.board import Board
from connectfour.game.contestant import Contestant
from connectfour.utils import (COLS, Cell, GameMode, GameResult, get_column_height,
                               is_valid_column, render_board_ascii)


@dataclass(frozen=True, eq=False)
class Match:
    """Read-only view of a match at one point in time."""
    grid: np.ndarray
    mode: GameMode
    contestant1: Contestant
    contestant2: Contestant
    active: Contestant
    last_drop: Optional[Tuple[int, int]] = None
    terminal: bool = False
    result: GameResult = GameResult.CONTINUING
    winner: Optional[Contestant] = None
    winning_line: List[Tuple[int, int]] = field(default_factory=list)
    moves_made: int = 0

    def cell(self, row: int, col: int) -> Cell:
        return Cell(int(self.grid[row, col]))

    def column_height(self, col: int) -> int:
        return get_column_height(self.grid, col)

    def render(self) -> str:
        return render_board_ascii(self.grid)


ModeLike = Union[GameMode, int]


class Engine:
    """
    Connect Four rules engine.

    Moves for automated contestants come from ``rng``, a numpy Generator.
    Pass ``seed`` (or a ready-made generator) to make matches reproducible.
    """

    def __init__(self, mode: ModeLike = GameMode.HUMAN_VS_HUMAN,
                 contestant1: Optional[Contestant] = None,
                 contestant2: Optional[Contestant] = None,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._board = Board()
        self.initialize(mode, contestant1, contestant2)
        self._initial_mode = self._mode

    # Setup

    def initialize(self, mode: ModeLike,
                   contestant1: Optional[Contestant] = None,
                   contestant2: Optional[Contestant] = None) -> Match:
        """
        Start a new match.

        Args:
            mode: 1 (both human), 2 (contestant1 human, contestant2 automated)
                or 3 (both automated)
            contestant1: First contestant, plays Red and moves first
            contestant2: Second contestant, plays Blue

        Returns:
            Snapshot of the new, empty match

        Raises:
            InvalidConfigurationError: if the mode is not 1, 2 or 3, or both
                contestants are the same object
        """
        try:
            if isinstance(mode, bool) or not isinstance(mode, (int, np.integer)):
                raise ValueError(mode)
            game_mode = GameMode(int(mode))
        except ValueError:
            debug.warning(f"Rejected unknown game mode {mode!r}", "engine")
            raise InvalidConfigurationError(f"Unknown game mode: {mode!r}") from None

        contestant1 = contestant1 if contestant1 is not None else Contestant()
        contestant2 = contestant2 if contestant2 is not None else Contestant()
        if contestant1 is contestant2:
            raise InvalidConfigurationError("A match needs two distinct contestants")

        automated1, automated2 = game_mode.automated
        contestant1._seat(Cell.RED, automated1)
        contestant2._seat(Cell.BLUE, automated2)

        self._mode = game_mode
        self._contestant1 = contestant1
        self._contestant2 = contestant2
        self._active = contestant1
        self._result = GameResult.CONTINUING
        self._winner: Optional[Contestant] = None
        self._winning_line: List[Tuple[int, int]] = []
        self._board.reset()

        debug.info(f"Initialized {game_mode.name} match", "engine")
        return self.get_state()

    def rename_contestant(self, contestant: Optional[Contestant], new_name: Optional[str]) -> str:
        """
        Change a contestant's display name.

        Returns:
            Confirmation message containing the new name

        Raises:
            NullArgumentError: if the contestant or the name is missing
        """
        if contestant is None:
            raise NullArgumentError("Contestant is missing")
        if new_name is None:
            raise NullArgumentError("Name is missing")

        contestant._rename(new_name)
        debug.debug(f"Renamed {contestant.color.name if contestant.color else 'contestant'} "
                    f"to {new_name!r}", "engine")
        return f"new name: {new_name}"

    def reset(self) -> Match:
        """
        Start over with an empty grid and two fresh anonymous contestants.

        The match goes back to the mode the engine was created with, even if
        a later ``initialize`` picked another one.
        """
        try:
            return self.initialize(self._initial_mode, Contestant(), Contestant())
        except Exception as e:
            debug.error(f"Failed to reset match: {e}", "engine")
            raise

    # Moves

    def _check_move(self, column) -> Tuple[Optional[ErrorKind], str]:
        """Validate a move. Checks run in order and stop at the first failure."""
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)) \
                or not is_valid_column(column):
            return ErrorKind.INVALID_COLUMN, f"Column {column!r} is invalid"
        if self._board.is_column_full(int(column)):
            return ErrorKind.COLUMN_FULL, f"Column {column} is full"
        if self._result.is_game_over():
            return ErrorKind.MATCH_FINISHED, "The match has finished"
        return None, ""

    def _choose_automated_column(self) -> int:
        """Draw uniformly from all columns until one with room comes up."""
        while True:
            column = int(self.rng.integers(0, COLS))
            if not self._board.is_column_full(column):
                return column

    def drop_piece(self, column: int) -> MoveResult:
        """
        Drop the active contestant's piece.

        For an automated contestant the column argument only has to pass
        validation; the piece goes into a randomly chosen column.

        Args:
            column: Column to drop into (0-6)

        Returns:
            MoveResult holding the updated match, or the rejection reason with
            the match left untouched
        """
        error, message = self._check_move(column)
        if error is not None:
            debug.debug(f"Rejected move in column {column!r}: {error.value}", "engine")
            return MoveResult(match=self.get_state(), error=error, message=message)

        mover = self._active
        if mover.is_automated:
            column = self._choose_automated_column()
            debug.debug(f"{mover.color.name} (automated) picked column {column}", "engine")

        row, column = self._board.drop(int(column), mover.color)

        with debug.timed("win_check", "engine"):
            winning_line = self._board.get_winning_line(mover.color)

        if winning_line:
            self._result = GameResult.WON
            self._winner = mover
            self._winning_line = winning_line
            debug.info(f"{mover.color.name} wins after move at ({row}, {column})", "engine")
        elif self._board.is_full():
            self._result = GameResult.DRAWN
            debug.info("Match ends in a draw", "engine")
        else:
            self._active = self._contestant2 if mover is self._contestant1 else self._contestant1
            debug.trace(f"Switching to {self._active.color.name}", "engine")

        return MoveResult(match=self.get_state(), column=column)

    # Queries

    def get_winner(self) -> Optional[Contestant]:
        """The contestant who completed four in a row, or None."""
        return self._winner if self._result == GameResult.WON else None

    def get_outcome(self) -> GameResult:
        return self._result

    def is_game_over(self) -> bool:
        return self._result.is_game_over()

    @property
    def active(self) -> Contestant:
        return self._active

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def contestants(self) -> Tuple[Contestant, Contestant]:
        return self._contestant1, self._contestant2

    def is_column_full(self, column: int) -> bool:
        return self._board.is_column_full(column)

    def valid_columns(self) -> List[int]:
        """Columns a drop would currently be accepted in."""
        if self.is_game_over():
            return []
        return self._board.valid_columns()

    def get_state(self) -> Match:
        """Snapshot of the match. The grid is a copy."""
        return Match(
            grid=self._board.get_state(),
            mode=self._mode,
            contestant1=self._contestant1,
            contestant2=self._contestant2,
            active=self._active,
            last_drop=self._board.last_move,
            terminal=self._result.is_game_over(),
            result=self._result,
            winner=self.get_winner(),
            winning_line=list(self._winning_line),
            moves_made=len(self._board),
        )

    def render(self) -> str:
        return self._board.render()
