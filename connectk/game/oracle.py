"""
oracle.py - Game-state classification after a single move

The engines call get_game_state after every simulated move, so it only
inspects the lines running through the last move instead of rescanning
the whole board.
"""

import numpy as np

from connectk.utils import GameState, check_win_at_position, is_full, to_player


def get_game_state(grid: np.ndarray, row: int, col: int, connect_n: int, player) -> GameState:
    """
    Classify the board after `player` dropped a piece at (row, col).

    Args:
        grid: The game board
        row: Row of the last move
        col: Column of the last move
        connect_n: Number of pieces in a row needed to win
        player: The player who made the last move

    Returns:
        GameState.WIN if the move completed a line of connect_n or more,
        GameState.DRAW if the board is now full, GameState.ONGOING otherwise
    """
    if grid[row, col] == to_player(player).value and check_win_at_position(grid, row, col, connect_n):
        return GameState.WIN

    if is_full(grid):
        return GameState.DRAW

    return GameState.ONGOING
