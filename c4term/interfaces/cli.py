"""
cli.py - Command-line interface for playing Connect Four

Two players share one terminal. A column is highlighted with its number or
shifted left and right, then confirmed to drop the piece, which falls one row
per frame before the turn passes on.
"""

import argparse
import sys
import time
from enum import Enum, auto
from typing import Callable, List, Optional, TextIO, Tuple

from c4term.debug import debug, DebugLevel
from c4term.errors import Error
from c4term.game.board import Board
from c4term.game.session import GameSession
from c4term.utils import COLS, FRAME_DELAY_MS, Player

CLEAR_SCREEN = "\033[2J\033[H"


class Action(Enum):
    SELECT = auto()
    SHIFT = auto()
    CONFIRM = auto()
    DROP = auto()
    QUIT = auto()
    CLEAR = auto()


def parse_command(raw: str) -> Tuple[Action, Optional[int]]:
    """
    Turn one line of player input into an action.

    Column numbers are 1-based on the way in and 0-based on the way out.
    Anything unrecognised clears the highlight.
    """
    text = raw.strip().lower()

    if text in ('', 'enter', 'space'):
        return Action.CONFIRM, None
    if text in ('q', 'quit', 'exit'):
        return Action.QUIT, None
    if text in ('<', 'a', 'left'):
        return Action.SHIFT, -1
    if text in ('>', 'd', 'right'):
        return Action.SHIFT, 1

    drop = text.endswith('!')
    digits = text[:-1] if drop else text
    if digits.isascii() and digits.isdigit() and 1 <= int(digits) <= COLS:
        return (Action.DROP if drop else Action.SELECT), int(digits) - 1

    return Action.CLEAR, None


def parse_moves(moves: str) -> List[int]:
    """Parse a comma-separated list of 1-based columns into 0-based columns."""
    columns = []
    for token in moves.split(','):
        token = token.strip()
        if not token:
            continue
        if not (token.isascii() and token.isdigit()) or not 1 <= int(token) <= COLS:
            raise ValueError(f"Invalid column '{token}': expected 1-{COLS}")
        columns.append(int(token) - 1)
    return columns


class GameCLI:
    """Command-line interface for a two-player game."""

    def __init__(self,
                 input_func: Callable[[str], str] = input,
                 output: TextIO = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.input_func = input_func
        self.output = output if output is not None else sys.stdout
        self.sleep = sleep
        self.args = None
        self.animate = True
        self.frame_delay = FRAME_DELAY_MS / 1000
        self.clear_screen = False
        self.message = ""

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Two-player Connect Four in the terminal')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (default: warning)')
        parser.add_argument('--log-file', help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--no-animation', action='store_true',
                                 help='Show pieces landing without the falling frames')
        play_parser.add_argument('--frame-delay', type=int, default=FRAME_DELAY_MS,
                                 help=f'Milliseconds between animation frames (default: {FRAME_DELAY_MS})')

        replay_parser = subparsers.add_parser('replay', help='Play a list of moves and show the result')
        replay_parser.add_argument('--moves', required=True,
                                   help='Comma-separated columns, 1-7, starting with Red')

        return parser

    def parse_args(self, argv: List[str] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        if self.args.command == 'play':
            self.animate = not self.args.no_animation
            self.frame_delay = max(self.args.frame_delay, 0) / 1000
            self.clear_screen = self.output.isatty()

    def run(self, argv: List[str] = None) -> int:
        """Run the command named on the command line. Returns the exit status."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'replay':
            return self.replay(self.args.moves)
        else:
            self.build_parser().print_help(self.output)
            return 1
        return 0

    def write(self, text: str = "") -> None:
        print(text, file=self.output)

    def redraw(self, session: GameSession, board: Board = None, mover: Player = None) -> None:
        """
        Draw the turn line, a board (the live one by default) and the prompt help.

        While a piece is falling the turn line still names ``mover``, the player
        who dropped it.
        """
        if self.clear_screen:
            self.output.write(CLEAR_SCREEN)

        board = board if board is not None else session.board
        self.write(f"It's {mover.label}'s turn!" if mover is not None else session.status_line())
        self.write(board.render())

        column = session.board.highlighted_column
        self.write(f"Select column: {column + 1 if column is not None else ''}")
        if column is not None:
            self.write("Press enter to confirm.")
        if self.message:
            self.write(self.message)
        self.write("Enter 1-7 to select, < > to move, 4! to drop at once, q to quit.")

    def animate_drop(self, session: GameSession, mover: Player) -> None:
        """Redraw each frame of the piece ``mover`` just dropped."""
        frames = session.board.animation_frames() if self.animate else ()
        for frame in frames:
            self.redraw(session, frame, mover)
            self.sleep(self.frame_delay)

    def play_game(self) -> Optional[GameSession]:
        """
        Play a game interactively.

        Returns:
            The finished session, or None if the players quit
        """
        session = GameSession()
        debug.info("Starting interactive game", "cli")

        while not session.is_over():
            self.redraw(session)
            self.message = ""

            try:
                raw = self.input_func("> ")
            except EOFError:
                raw = 'q'

            action, column = parse_command(raw)
            debug.trace(f"Input {raw!r} -> {action.name} {column}", "cli")

            if action == Action.QUIT:
                self.write("Game abandoned.")
                return None
            if action == Action.SELECT:
                session.select_column(column)
                continue
            if action == Action.SHIFT:
                session.move_highlight(column)
                continue
            if action == Action.CLEAR:
                session.clear_highlight()
                continue

            if action == Action.DROP:
                session.select_column(column)

            mover = session.current_player
            try:
                session.confirm()
            except Error as e:
                debug.debug(f"Move by {mover.label} rejected: {e}", "cli")
                self.message = str(e)
                continue

            self.animate_drop(session, mover)

        self.show_summary(session)
        return session

    def show_summary(self, session: GameSession) -> None:
        if self.clear_screen:
            self.output.write(CLEAR_SCREEN)
        self.write(session.status_line())
        session.clear_highlight()
        self.write(session.board.render())

    def replay(self, moves: str) -> int:
        """Play a fixed move list, printing the board after every move."""
        try:
            columns = parse_moves(moves)
        except ValueError as e:
            self.write(str(e))
            return 2

        session = GameSession()
        for number, column in enumerate(columns, start=1):
            if session.is_over():
                self.write(f"Ignoring {len(columns) - number + 1} moves after the end of the game.")
                break

            mover = session.current_player
            try:
                row = session.play(column)
            except Error as e:
                self.write(f"Move {number}: {e} Skipped.")
                continue

            self.write(f"Move {number}: {mover.label} plays column {column + 1}, lands on row {row + 1}")
            self.write(session.board.render())

        self.write(session.status_line())
        return 0


def main(argv: List[str] = None) -> int:
    """Main entry point for the CLI."""
    return GameCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
