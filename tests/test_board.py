import numpy as np
import pytest

from c4term.errors import ColumnFullError, InvalidColumnError, InvalidFrameError
from c4term.game.board import Board
from c4term.utils import COLS, ROWS, Player

R, B = Player.RED, Player.BLUE


def test_new_board_is_empty():
    board = Board()
    assert board.grid.shape == (COLS, ROWS)
    assert np.all(board.grid == Player.EMPTY.value)
    assert board.highlighted_column is None
    assert board.last_drop is None
    assert board.get_valid_moves() == list(range(COLS))


@pytest.mark.parametrize("column", range(COLS))
def test_drop_into_empty_column_lands_on_bottom_row(board, column):
    assert board.drop_piece(column, R) == 0
    assert board.cell(column, 0) == R


def test_drops_stack_until_column_is_full(board):
    landed = [board.drop_piece(2, R if i % 2 == 0 else B) for i in range(ROWS)]
    assert landed == list(range(ROWS))
    assert board.column_height(2) == ROWS
    assert not board.is_valid_move(2)

    before = board.get_state()
    with pytest.raises(ColumnFullError) as excinfo:
        board.drop_piece(2, B)
    assert excinfo.value.column == 2
    assert str(excinfo.value) == "Column 3 is full."
    assert np.array_equal(board.grid, before)
    assert board.moves_made == [2] * ROWS


@pytest.mark.parametrize("column", [-1, COLS, 100])
def test_out_of_range_column_is_rejected(board, column):
    with pytest.raises(InvalidColumnError):
        board.drop_piece(column, R)
    with pytest.raises(InvalidColumnError):
        board.check_win_at(column)
    with pytest.raises(InvalidColumnError):
        board.highlighted_column = column
    assert np.all(board.grid == Player.EMPTY.value)


def test_empty_piece_cannot_be_dropped(board):
    with pytest.raises(ValueError):
        board.drop_piece(0, Player.EMPTY)


def test_columns_fill_bottom_up(board, draw_moves):
    player = R
    for column in draw_moves[:20]:
        board.drop_piece(column, player)
        player = player.other()

    for column in range(COLS):
        occupied = board.grid[column] != Player.EMPTY.value
        height = board.column_height(column)
        assert occupied[:height].all()
        assert not occupied[height:].any()


def test_no_winner_on_empty_board(board):
    for column in range(COLS):
        assert board.check_win_at(column) is None


def test_three_in_a_row_is_not_a_win(board, drop_sequence):
    drop_sequence(board, [(0, R), (0, B), (1, R), (1, B), (2, R)])
    assert board.check_win_at(2) is None


def test_horizontal_win(board, drop_sequence):
    drop_sequence(board, [(0, R), (0, B), (1, R), (1, B), (2, R), (2, B)])
    assert board.check_win_at(2) is None

    board.drop_piece(3, R)
    assert board.check_win_at(3) == R
    assert board.winning_line(3) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_vertical_win(board, drop_sequence):
    drop_sequence(board, [(4, B), (5, R), (4, B), (5, R), (4, B)])
    assert board.check_win_at(4) is None

    board.drop_piece(4, B)
    assert board.check_win_at(4) == B


def test_vertical_win_above_other_pieces(board, drop_sequence):
    drop_sequence(board, [(6, R), (6, R), (6, B), (6, B), (6, B), (6, B)])
    assert board.check_win_at(6) == B
    assert board.winning_line(6) == [(6, 2), (6, 3), (6, 4), (6, 5)]


def test_rising_diagonal_win(board, drop_sequence):
    drop_sequence(board, [
        (0, R),
        (1, B), (1, R),
        (2, B), (2, B), (2, R),
        (3, B), (3, R), (3, B),
    ])
    assert board.check_win_at(3) is None

    board.drop_piece(3, R)
    assert board.check_win_at(3) == R
    assert board.winning_line(3) == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_falling_diagonal_win(board, drop_sequence):
    drop_sequence(board, [
        (6, R),
        (5, B), (5, R),
        (4, B), (4, B), (4, R),
        (3, B), (3, R), (3, B),
    ])
    assert board.check_win_at(3) is None

    board.drop_piece(3, R)
    assert board.check_win_at(3) == R
    assert board.winning_line(3) == [(3, 3), (4, 2), (5, 1), (6, 0)]


def test_win_completed_in_the_middle_of_a_line(board, drop_sequence):
    drop_sequence(board, [(0, B), (6, R), (1, B), (6, R), (3, B), (5, R)])
    assert board.check_win_at(3) is None

    board.drop_piece(2, B)
    assert board.check_win_at(2) == B


def test_line_longer_than_four_wins(board, drop_sequence):
    drop_sequence(board, [(0, R), (1, R), (3, R), (4, R)])
    board.drop_piece(2, R)
    assert board.check_win_at(2) == R
    assert len(board.winning_line(2)) == 5


def test_win_is_anchored_on_the_top_piece(board, drop_sequence):
    drop_sequence(board, [(0, R), (1, R), (2, R), (3, R)])
    assert board.check_win_at(3) == R

    board.drop_piece(3, B)
    assert board.check_win_at(3) is None


def test_full_board_without_a_line_has_no_winner(board, draw_moves):
    player = R
    for column in draw_moves:
        board.drop_piece(column, player)
        assert board.check_win_at(column) is None
        player = player.other()

    assert board.is_full()
    assert board.get_valid_moves() == []
    assert len(board.moves_made) == COLS * ROWS


def test_highlight_does_not_change_the_grid(board):
    board.highlighted_column = 4
    assert board.highlighted_column == 4
    assert np.all(board.grid == Player.EMPTY.value)
    board.highlighted_column = None
    assert board.highlighted_column is None


class TestAnimationFrame:

    def setup_method(self):
        self.board = Board()
        for column, player in [(3, R), (0, B), (6, R)]:
            self.board.drop_piece(column, player)
        self.landing_row = self.board.drop_piece(3, B)
        self.real = self.board.get_state()

    def test_landing_row(self):
        assert self.landing_row == 1
        assert self.board.fall_distance() == ROWS - 1 - self.landing_row

    def test_piece_descends_one_row_per_frame(self):
        for frame in range(self.board.fall_distance() + 1):
            projected = self.board.animation_frame(frame)
            shown_row = ROWS - 1 - frame
            assert projected.cell(3, shown_row) == B
            column = projected.grid[3]
            assert np.count_nonzero(column == B.value) == 1

    def test_other_cells_match_the_real_grid(self):
        for frame in range(self.board.fall_distance() + 1):
            projected = self.board.animation_frame(frame)
            shown_row = ROWS - 1 - frame

            for column in range(COLS):
                for row in range(ROWS):
                    if column == 3 and row in (shown_row, self.landing_row):
                        continue
                    assert projected.grid[column, row] == self.real[column, row]

    def test_landing_cell_is_empty_until_the_piece_arrives(self):
        assert self.board.animation_frame(0).cell(3, self.landing_row) == Player.EMPTY
        last = self.board.animation_frame(self.board.fall_distance())
        assert last.cell(3, self.landing_row) == B

    def test_final_frame_matches_the_real_board(self):
        assert self.board.animation_frame(self.board.fall_distance()) == self.board
        assert self.board.animation_frame(50) == self.board

    def test_real_board_is_never_modified(self):
        frames = list(self.board.animation_frames())
        assert len(frames) == self.board.fall_distance() + 1
        assert frames[-1] == self.board
        assert np.array_equal(self.board.grid, self.real)
        assert self.board.last_drop == (3, self.landing_row)

    def test_projection_keeps_the_highlight(self):
        self.board.highlighted_column = 5
        assert self.board.animation_frame(0).highlighted_column == 5

    def test_negative_frame_is_rejected(self):
        with pytest.raises(InvalidFrameError):
            self.board.animation_frame(-1)


def test_animation_frame_for_top_row_drop_is_the_board(board):
    for _ in range(ROWS):
        board.drop_piece(1, R)
    assert board.fall_distance() == 0
    assert list(board.animation_frames()) == [board]


def test_animation_frame_without_a_drop_copies_the_board(board):
    frame = board.animation_frame(0)
    assert frame == board
    assert frame is not board


def test_render_layout(board):
    board.drop_piece(0, R)
    board.drop_piece(0, B)
    board.drop_piece(6, R)
    board.highlighted_column = 2

    lines = str(board).split("\n")
    assert len(lines) == ROWS + 4
    assert lines[0].index("v") == 1 + 2 * 2
    assert lines[1] == "+-------------+"
    assert lines[2] == "|. . . . . . .|"
    assert lines[ROWS] == "|B . . . . . .|"
    assert lines[ROWS + 1] == "|R . . . . . R|"
    assert lines[ROWS + 2] == "+-------------+"
    assert lines[ROWS + 3] == " 1 2 3 4 5 6 7 "


def test_render_is_deterministic(board):
    board.drop_piece(3, R)
    assert board.render() == board.copy().render()
    assert "v" not in board.render()


def test_from_grid_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Board.from_grid(np.zeros((ROWS, COLS)))


@pytest.mark.parametrize("column, row", [(-1, 0), (COLS, 0)])
def test_cell_rejects_off_board_columns(board, column, row):
    with pytest.raises(InvalidColumnError):
        board.cell(column, row)


@pytest.mark.parametrize("row", [-1, ROWS])
def test_cell_rejects_off_board_rows(board, row):
    with pytest.raises(IndexError):
        board.cell(0, row)


def test_column_errors_use_one_based_columns(board):
    with pytest.raises(InvalidColumnError, match="Column 8 is not on the board."):
        board.drop_piece(COLS, R)
    for _ in range(ROWS):
        board.drop_piece(6, R)
    with pytest.raises(ColumnFullError, match="Column 7 is full."):
        board.drop_piece(6, B)
