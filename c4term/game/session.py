"""
session.py - Turn management for a game of Connect Four

GameSession owns the board together with the turn and move counters, so a
whole game can be driven (and tested) without a terminal.
"""

from typing import Optional

from c4term.debug import debug
from c4term.errors import GameOverError, InvalidColumnError
from c4term.game.board import Board
from c4term.utils import COLS, MAX_MOVES, GameResult, Player


class GameSession:
    """
    A single game between Red and Blue.

    Red moves first. A turn only advances after a successful drop, so a
    ColumnFullError leaves the same player to move again.
    """

    def __init__(self, board: Board = None, first_player: Player = Player.RED):
        self.board = board if board is not None else Board()
        self.current_player = first_player
        self.turns = len(self.board.moves_made)
        self.result = GameResult.IN_PROGRESS
        self.winner: Optional[Player] = None
        debug.debug(f"New session, {first_player.label} to move", "session")

    def is_over(self) -> bool:
        return self.result.is_game_over()

    def play(self, column: int) -> int:
        """
        Drop the current player's piece and settle the turn.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            The landing row of the piece

        Raises:
            GameOverError: The game has already finished
            ColumnFullError: The column is full; the turn does not advance
            InvalidColumnError: The column is not on the board
        """
        if self.is_over():
            raise GameOverError(f"The game is over ({self.result.name}).")

        player = self.current_player
        row = self.board.drop_piece(column, player)

        winner = self.board.check_win_at(column)
        if winner is not None:
            self.winner = winner
            self.result = GameResult.win_for(winner)
            debug.info(f"{winner.label} wins after {self.turns + 1} moves", "session")
            return row

        self.turns += 1
        if self.turns >= MAX_MOVES or self.board.is_full():
            self.result = GameResult.DRAW
            debug.info("Board full, game drawn", "session")
            return row

        self.current_player = player.other()
        return row

    def select_column(self, column: int) -> None:
        """Highlight a column ready to be confirmed."""
        self.board.highlighted_column = column

    def move_highlight(self, delta: int) -> Optional[int]:
        """
        Shift the highlight left (negative) or right (positive).

        Nothing happens when no column is highlighted, and the highlight stops
        at the board edges.
        """
        current = self.board.highlighted_column
        if current is None:
            return None

        self.board.highlighted_column = min(max(current + delta, 0), COLS - 1)
        return self.board.highlighted_column

    def clear_highlight(self) -> None:
        self.board.highlighted_column = None

    def confirm(self) -> int:
        """Play the highlighted column."""
        column = self.board.highlighted_column
        if column is None:
            raise InvalidColumnError(None, "Select a column before confirming.")
        return self.play(column)

    def status_line(self) -> str:
        if self.result == GameResult.DRAW:
            return "It's a draw!"
        if self.winner is not None:
            return f"{self.winner.label} wins!"
        return f"It's {self.current_player.label}'s turn!"
