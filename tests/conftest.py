import pytest

from c4term.game.board import Board
from c4term.utils import Player

R, B = Player.RED, Player.BLUE

# Alternating Red/Blue columns that fill the board with no line of four:
#   row 5  B R B R B R B
#   row 4  R B R B R B R
#   row 3  R B R B R B R
#   row 2  B R B R B R B
#   row 1  B R B R B R B
#   row 0  R B R B R B R
DRAW_MOVES = (
    [0, 1, 1, 0, 1, 0, 0, 1, 0, 1, 1, 0]
    + [2, 3, 3, 2, 3, 2, 2, 3, 2, 3, 3, 2]
    + [6, 6, 4, 6, 6, 5, 6, 6, 5, 4, 5, 4, 4, 5, 4, 5, 5, 4]
)


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def drop_sequence():
    """Drop (column, player) pairs in order and return the last landing row."""
    def _drop(board, moves):
        row = None
        for column, player in moves:
            row = board.drop_piece(column, player)
        return row
    return _drop


@pytest.fixture
def draw_moves():
    return list(DRAW_MOVES)
