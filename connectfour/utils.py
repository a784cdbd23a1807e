"""
utils.py - Constants, enumerations and grid helpers for Connect Four

The grid is a numpy array of ``Cell`` values. Helpers in this module operate
on such arrays directly so the board, the engine and the interfaces all agree
on one representation.
"""

from enum import Enum, IntEnum, auto
from typing import List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
SPAN = CONNECT_N - 1  # Reach of the local win check on each side of a drop


class Cell(Enum):
    """Contents of a grid cell. Contestant colors double as cell values."""
    EMPTY = 0
    RED = 1
    BLUE = 2

    @property
    def glyph(self) -> str:
        return GLYPHS[self]

    def __str__(self):
        return self.glyph


GLYPHS = {
    Cell.EMPTY: ".",
    Cell.RED: "@",
    Cell.BLUE: "#",
}


class GameMode(IntEnum):
    """Which contestants are automated."""
    HUMAN_VS_HUMAN = 1
    HUMAN_VS_AUTOMATED = 2
    AUTOMATED_VS_AUTOMATED = 3

    @property
    def automated(self) -> Tuple[bool, bool]:
        """Control-mode flags for (contestant1, contestant2)."""
        return {
            GameMode.HUMAN_VS_HUMAN: (False, False),
            GameMode.HUMAN_VS_AUTOMATED: (False, True),
            GameMode.AUTOMATED_VS_AUTOMATED: (True, True),
        }[self]


class GameResult(Enum):
    """Enumeration representing the match outcome."""
    CONTINUING = auto()
    WON = auto()
    DRAWN = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.CONTINUING


class Direction(Enum):
    """Lines a win can run along."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()  # top-left to bottom-right
    DIAGONAL_DOWN_LEFT = auto()  # top-right to bottom-left


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def empty_grid() -> np.ndarray:
    return np.full((ROWS, COLS), Cell.EMPTY.value, dtype=np.int8)


def is_valid_position(row: int, col: int) -> bool:
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(col: int) -> bool:
    return 0 <= col < COLS


def get_column_height(grid: np.ndarray, column: int) -> int:
    """
    Get the number of pieces in a column.

    Args:
        grid: The game grid
        column: The column to check

    Returns:
        Count of occupied cells in the column
    """
    return int(np.count_nonzero(grid[:, column] != Cell.EMPTY.value))


def find_drop_row(grid: np.ndarray, column: int) -> Optional[int]:
    """
    Find the row a piece dropped into ``column`` settles in.

    Returns:
        The highest-index empty row, or None if the column is full
    """
    for row in range(ROWS - 1, -1, -1):
        if grid[row, column] == Cell.EMPTY.value:
            return row
    return None


def line_through(row: int, col: int, direction: Direction) -> List[Tuple[int, int]]:
    """
    Cells on the line through (row, col) that lie within SPAN steps of it.

    The cells are ordered along the direction vector and clipped to the grid,
    so horizontal lines cover ``[max(col-3, 0) .. min(col+3, 6)]`` and so on.
    """
    dr, dc = DIRECTION_VECTORS[direction]
    return [(row + k * dr, col + k * dc)
            for k in range(-SPAN, SPAN + 1)
            if is_valid_position(row + k * dr, col + k * dc)]


def find_winning_line(grid: np.ndarray, row: int, col: int,
                      color: Optional[Cell] = None) -> List[Tuple[int, int]]:
    """
    Look for four in a row of ``color`` passing through (row, col).

    Only the cells within SPAN of the given position are examined, which is
    enough because any new win must include the most recent drop.

    Args:
        grid: The game grid
        row: Row of the last drop
        col: Column of the last drop
        color: Color to look for (defaults to the color at the position)

    Returns:
        The cells of the first run of CONNECT_N found, or an empty list
    """
    if color is None:
        color = Cell(int(grid[row, col]))
    if color == Cell.EMPTY:
        return []

    for direction in Direction:
        run: List[Tuple[int, int]] = []
        for r, c in line_through(row, col, direction):
            if grid[r, c] == color.value:
                run.append((r, c))
                if len(run) == CONNECT_N:
                    return run
            else:
                run = []

    return []


def check_win_at_position(grid: np.ndarray, row: int, col: int,
                          color: Optional[Cell] = None) -> bool:
    return bool(find_winning_line(grid, row, col, color))


def is_grid_full(grid: np.ndarray) -> bool:
    return not np.any(grid == Cell.EMPTY.value)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the grid as text.

    Empty cells are shown as ".", Red as "@" and Blue as "#". The column
    indices are printed as a footer.
    """
    lines = [" ".join(Cell(int(value)).glyph for value in row) for row in grid]
    lines.append(" ".join(str(col) for col in range(COLS)))
    return "\n".join(lines)
