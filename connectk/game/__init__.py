"""
connectk.game - Board primitives, game-state oracle and game driver

This package contains the board representation, the move primitives the
engines search with, and the game flow used to play engines against each
other or against a human.
"""

from connectk.game.board import Board, SearchBoard
from connectk.game.oracle import get_game_state
from connectk.game.rules import ConnectFourGame

__all__ = ['Board', 'SearchBoard', 'get_game_state', 'ConnectFourGame']
