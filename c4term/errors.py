"""
errors.py - Exceptions raised by the board and game session
"""


class Error(Exception):
    """Base class for every c4term error."""

    def __init__(self, message: str = "c4term: unknown error occurred.") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ColumnFullError(Error):
    """A piece was dropped into a column with no empty cell."""

    def __init__(self, column: int) -> None:
        super().__init__(f"Column {column + 1} is full.")
        self.column = column


class InvalidColumnError(Error):
    """A column index outside the board was used."""

    def __init__(self, column, message: str = None) -> None:
        # 1-based like ColumnFullError, for integer indexes
        shown = column + 1 if isinstance(column, int) and not isinstance(column, bool) else column
        super().__init__(message or f"Column {shown} is not on the board.")
        self.column = column


class InvalidFrameError(Error):
    """An animation frame before the start of the fall was requested."""
    pass


class GameOverError(Error):
    """A move was attempted after the game had already ended."""
    pass
