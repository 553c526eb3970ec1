"""
c4term.game - Core game mechanics for Connect Four

This package contains the board engine and the session that drives turns.
"""

from c4term.game.board import Board
from c4term.game.session import GameSession

__all__ = ['Board', 'GameSession']
