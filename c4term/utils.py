"""
utils.py - Constants and grid helpers for the Connect Four board

Grids are numpy arrays of shape (COLS, ROWS) addressed ``grid[column, row]``
with row 0 at the bottom. Cells hold ``Player`` values.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
MAX_MOVES = ROWS * COLS

# Delay between animation frames of a falling piece
FRAME_DELAY_MS = 15

Cell = Tuple[int, int]  # (column, row)


class Player(Enum):
    """Players, with EMPTY standing in for an unoccupied cell."""
    EMPTY = 0
    RED = 1
    BLUE = 2

    def other(self) -> 'Player':
        """Get the opposing player."""
        if self == Player.RED:
            return Player.BLUE
        elif self == Player.BLUE:
            return Player.RED
        return Player.EMPTY

    @property
    def glyph(self) -> str:
        return GLYPHS[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def __str__(self):
        return self.glyph


GLYPHS = {
    Player.EMPTY: ".",
    Player.RED: "R",
    Player.BLUE: "B",
}


class GameResult(Enum):
    """The outcome of a game."""
    IN_PROGRESS = auto()
    RED_WIN = auto()
    BLUE_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        if player == Player.RED:
            return cls.RED_WIN
        if player == Player.BLUE:
            return cls.BLUE_WIN
        raise ValueError(f"{player!r} cannot win a game")


class Direction(Enum):
    """Lines scanned for a win."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# Direction vectors (column, row) for each direction, row growing upward
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (1, 0),
    Direction.VERTICAL: (0, 1),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1),
}


def empty_grid() -> np.ndarray:
    return np.full((COLS, ROWS), Player.EMPTY.value, dtype=np.int8)


def is_valid_position(column: int, row: int) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= column < COLS and 0 <= row < ROWS


def is_valid_column(column) -> bool:
    return isinstance(column, (int, np.integer)) and not isinstance(column, bool) \
        and 0 <= column < COLS


def get_column_height(grid: np.ndarray, column: int) -> int:
    """
    Number of pieces in a column.

    Columns fill bottom-up, so this is also the row the next piece lands on.
    """
    empty = np.flatnonzero(grid[column] == Player.EMPTY.value)
    return int(empty[0]) if empty.size else ROWS


def top_piece_row(grid: np.ndarray, column: int) -> Optional[int]:
    """Row of the topmost occupied cell in a column, or None when it is empty."""
    height = get_column_height(grid, column)
    return height - 1 if height else None


def run_through(grid: np.ndarray, column: int, row: int,
                direction: Direction) -> List[Cell]:
    """
    Cells of the maximal same-player run through (column, row) along a direction.

    The run extends outward both ways until a non-matching or off-board cell.
    Cells are returned in board order along the direction vector.
    """
    player_value = grid[column, row]
    if player_value == Player.EMPTY.value:
        return []

    dc, dr = DIRECTION_VECTORS[direction]

    backward = []
    c, r = column - dc, row - dr
    while is_valid_position(c, r) and grid[c, r] == player_value:
        backward.append((c, r))
        c -= dc
        r -= dr

    forward = []
    c, r = column + dc, row + dr
    while is_valid_position(c, r) and grid[c, r] == player_value:
        forward.append((c, r))
        c += dc
        r += dr

    return backward[::-1] + [(column, row)] + forward


def winning_run_at(grid: np.ndarray, column: int, row: int) -> List[Cell]:
    """The first run of CONNECT_N or more through (column, row), or []."""
    for direction in Direction:
        run = run_through(grid, column, row, direction)
        if len(run) >= CONNECT_N:
            return run
    return []


def check_win_at_position(grid: np.ndarray, column: int, row: int) -> bool:
    """Check whether the piece at (column, row) is part of a line of four."""
    return bool(winning_run_at(grid, column, row))


def project_fall(grid: np.ndarray, column: int, landing_row: int,
                 shown_row: int) -> np.ndarray:
    """
    Copy of ``grid`` with the piece resting at (column, landing_row) drawn at
    ``shown_row`` instead.

    The source grid is never modified. ``shown_row`` must be at or above the
    landing row, where only empty cells can be.
    """
    if shown_row < landing_row:
        raise ValueError(f"Row {shown_row} is below the landing row {landing_row}")

    projected = grid.copy()
    if shown_row != landing_row:
        projected[column, shown_row] = grid[column, landing_row]
        projected[column, landing_row] = Player.EMPTY.value
    return projected


def render_board_ascii(grid: np.ndarray, highlighted_column: Optional[int] = None) -> str:
    """
    Render the grid as text, top row first.

    Returns:
        Lines of the form ``|. . R B . . .|`` with a frame, a marker row that
        points at the highlighted column and a 1-based column number footer.
    """
    width = COLS * 2 - 1
    result = []

    marker = [" "] * COLS
    if highlighted_column is not None:
        marker[highlighted_column] = "v"
    result.append(" " + " ".join(marker) + " ")

    result.append("+" + "-" * width + "+")
    for row in range(ROWS - 1, -1, -1):
        cells = (Player(int(grid[column, row])).glyph for column in range(COLS))
        result.append("|" + " ".join(cells) + "|")
    result.append("+" + "-" * width + "+")

    result.append(" " + " ".join(str(i + 1) for i in range(COLS)) + " ")

    return "\n".join(result)
