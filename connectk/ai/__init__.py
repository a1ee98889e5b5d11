"""
connectk/ai/__init__.py - Move-selecting engines

Every engine implements MoveSelector.choose_move(board) -> column, so they
can be swapped for one another as opponents.
"""

from connectk.ai.base import EngineConfig, MoveSelector
from connectk.ai.minimax import MinimaxPlayer
from connectk.ai.monte_carlo import MonteCarloPlayer
from connectk.ai.random_player import RandomPlayer

__all__ = ['EngineConfig', 'MoveSelector', 'MinimaxPlayer', 'MonteCarloPlayer', 'RandomPlayer']
