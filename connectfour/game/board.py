"""
board.py - Grid representation and the drop algorithm for Connect Four

This module implements the Board class, which owns the 6x7 grid, places
pieces under gravity and answers questions about the grid. It knows nothing
about contestants or turns; the engine layers those on top.
"""

from typing import List, Optional, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (COLS, Cell, find_drop_row, find_winning_line, empty_grid,
                               is_grid_full, is_valid_column, render_board_ascii)


class Board:
    """
    A Connect Four grid.

    Row 0 is the top and row 5 the bottom. Pieces only enter the grid through
    ``drop``, so every column is filled contiguously from the bottom.
    """

    def __init__(self):
        debug.trace("Initializing new Board", "board")
        self.reset()

    def reset(self) -> None:
        """Reset the board to an empty state."""
        self.grid = empty_grid()
        self.moves_made: List[int] = []
        self.last_move: Optional[Tuple[int, int]] = None

    def is_column_full(self, column: int) -> bool:
        return self.grid[0, column] != Cell.EMPTY.value

    def valid_columns(self) -> List[int]:
        return [col for col in range(COLS) if not self.is_column_full(col)]

    def drop(self, column: int, color: Cell) -> Tuple[int, int]:
        """
        Place a piece of ``color`` in ``column``.

        The piece settles in the lowest empty row. The engine validates the
        column beforehand; dropping into a full or missing column is a
        programming error.

        Args:
            column: The column to place a piece in (0-indexed)
            color: Color of the piece

        Returns:
            The (row, column) the piece landed on
        """
        if not is_valid_column(column):
            raise IndexError(f"column {column} is outside the board")
        if color == Cell.EMPTY:
            raise ValueError("cannot drop an empty piece")

        row = find_drop_row(self.grid, column)
        if row is None:
            raise ValueError(f"column {column} is full")

        debug.trace(f"Placing {color.name} piece at position ({row}, {column})", "board")
        self.grid[row, column] = color.value
        self.last_move = (row, column)
        self.moves_made.append(column)
        return row, column

    def get_winning_line(self, color: Optional[Cell] = None) -> List[Tuple[int, int]]:
        """
        Cells of a four-in-a-row through the last move, if there is one.

        Args:
            color: Color to test (defaults to the color of the last piece)
        """
        if self.last_move is None:
            return []

        row, col = self.last_move
        return find_winning_line(self.grid, row, col, color)

    def is_full(self) -> bool:
        return is_grid_full(self.grid)

    def get_state(self) -> np.ndarray:
        """Return a copy of the grid as a numpy array."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __len__(self) -> int:
        return len(self.moves_made)

