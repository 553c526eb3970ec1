"""
c4term - Two-player Connect Four in the terminal

This package provides the board engine (gravity drops, win detection and
falling-piece animation frames), a game session that runs the turn loop and
a command line interface to play on.
"""

# Version number
__version__ = '0.1.0'
