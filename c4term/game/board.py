"""
board.py - Board state and placement rules for Connect Four

This module implements the Board class, which owns the 7x6 grid, drops pieces
under gravity, answers win queries anchored on the last placed piece and
projects the frames of a falling piece for the display.
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np

from c4term.debug import debug
from c4term.errors import ColumnFullError, InvalidColumnError, InvalidFrameError
from c4term.utils import (ROWS, COLS, Cell, Player, empty_grid, get_column_height,
                          is_valid_column, project_fall, render_board_ascii,
                          top_piece_row, winning_run_at)


class Board:
    """
    A Connect Four board.

    The grid is addressed ``grid[column, row]`` with row 0 at the bottom.
    ``highlighted_column`` is display state only and never affects the rules.
    """

    def __init__(self):
        """Create an empty board."""
        self.grid = empty_grid()
        self._highlighted_column: Optional[int] = None
        self.last_drop: Optional[Tuple[int, int]] = None
        self.moves_made: List[int] = []
        debug.trace("Created empty board", "board")

    @classmethod
    def from_grid(cls, grid: np.ndarray, highlighted_column: Optional[int] = None) -> 'Board':
        """
        Build a board around a copy of an existing grid.

        Args:
            grid: Array of shape (COLS, ROWS) holding Player values
            highlighted_column: Column to highlight, if any
        """
        grid = np.asarray(grid)
        if grid.shape != (COLS, ROWS):
            raise ValueError(f"Grid must have shape {(COLS, ROWS)}, got {grid.shape}")

        board = cls()
        board.grid = grid.astype(np.int8, copy=True)
        board.highlighted_column = highlighted_column
        return board

    def copy(self) -> 'Board':
        """Deep copy of the board, including move history."""
        new_board = Board.from_grid(self.grid, self._highlighted_column)
        new_board.last_drop = self.last_drop
        new_board.moves_made = self.moves_made.copy()
        return new_board

    @property
    def highlighted_column(self) -> Optional[int]:
        return self._highlighted_column

    @highlighted_column.setter
    def highlighted_column(self, column: Optional[int]) -> None:
        if column is not None:
            self._check_column(column)
        self._highlighted_column = column

    def _check_column(self, column: int) -> None:
        if not is_valid_column(column):
            raise InvalidColumnError(column)

    def cell(self, column: int, row: int) -> Player:
        """The occupant of a cell. Off-board positions raise instead of wrapping."""
        self._check_column(column)
        if not (isinstance(row, (int, np.integer)) and 0 <= row < ROWS):
            raise IndexError(f"Row {row} is not on the board.")
        return Player(int(self.grid[column, row]))

    def column_height(self, column: int) -> int:
        """Number of pieces currently in a column."""
        self._check_column(column)
        return get_column_height(self.grid, column)

    def is_valid_move(self, column: int) -> bool:
        """True if a piece can be dropped into the column."""
        return is_valid_column(column) and get_column_height(self.grid, column) < ROWS

    def get_valid_moves(self) -> List[int]:
        return [column for column in range(COLS) if self.is_valid_move(column)]

    def is_full(self) -> bool:
        return not np.any(self.grid == Player.EMPTY.value)

    def drop_piece(self, column: int, player: Player) -> int:
        """
        Drop a piece into a column.

        Args:
            column: The column to drop into (0-indexed)
            player: The player the piece belongs to

        Returns:
            The landing row of the piece

        Raises:
            InvalidColumnError: The column is not on the board
            ColumnFullError: The column has no empty cell; the grid is unchanged
        """
        self._check_column(column)
        if player == Player.EMPTY:
            raise ValueError("Cannot drop an EMPTY piece")

        row = get_column_height(self.grid, column)
        if row >= ROWS:
            debug.debug(f"Rejected drop by {player.label}: column {column} is full", "board")
            raise ColumnFullError(column)

        self.grid[column, row] = player.value
        self.last_drop = (column, row)
        self.moves_made.append(column)
        debug.debug(f"{player.label} landed at column {column}, row {row}", "board")
        return row

    def check_win_at(self, column: int) -> Optional[Player]:
        """
        Check for a win through the topmost piece of a column.

        Only the most recently placed piece can complete a line, so callers pass
        the column they just dropped into instead of rescanning the board.

        Returns:
            The winning player, or None if there is no winner
        """
        self._check_column(column)
        debug.start_timer("win_check")
        run = self.winning_line(column)
        debug.end_timer("win_check", "board")

        if not run:
            return None

        winner = self.cell(*run[0])
        debug.info(f"{winner.label} wins with {run}", "board")
        return winner

    def winning_line(self, column: int) -> List[Cell]:
        """
        Cells of a line of four or more through the topmost piece of a column.

        Returns:
            List of (column, row) positions, or an empty list if there is no win
        """
        self._check_column(column)
        row = top_piece_row(self.grid, column)
        if row is None:
            return []
        return winning_run_at(self.grid, column, row)

    def fall_distance(self) -> int:
        """How many rows the last dropped piece fell below the top row."""
        if self.last_drop is None:
            return 0
        return ROWS - 1 - self.last_drop[1]

    def animation_frame(self, frame: int) -> 'Board':
        """
        Project the board part way through the fall of the last dropped piece.

        Frame 0 draws the piece in the top row. Each following frame lowers it
        by one row until it reaches its landing row, from where every frame is
        identical to the real board. The real board is never modified.

        Args:
            frame: Frame number, counting up from 0

        Returns:
            A new Board holding the projected grid
        """
        if frame < 0:
            raise InvalidFrameError(f"Animation frame {frame} is before the fall starts.")

        if self.last_drop is None:
            return self.copy()

        column, landing_row = self.last_drop
        height = max(self.fall_distance() - frame, 0)
        projected = project_fall(self.grid, column, landing_row, landing_row + height)
        debug.trace(f"Frame {frame}: piece {height} rows above row {landing_row}", "board")
        return Board.from_grid(projected, self._highlighted_column)

    def animation_frames(self) -> Iterator['Board']:
        """Every frame of the last fall, ending with the settled board."""
        for frame in range(self.fall_distance() + 1):
            yield self.animation_frame(frame)

    def get_state(self) -> np.ndarray:
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as text, top row first."""
        return render_board_ascii(self.grid, self._highlighted_column)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    __hash__ = None
