"""
utils.py - Utility functions and constants for connectk

This module provides the default board dimensions, the Player and GameState
enumerations, and helper functions shared by the game driver and the engines.
All helpers take the board size from the grid itself, so any rows x cols
board with any win length is supported.
"""

from enum import Enum, auto
from typing import List, Tuple

import numpy as np

# Default game configuration
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameState(Enum):
    """Classification of a position after a move."""
    ONGOING = auto()
    WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameState.ONGOING


# Half of the line directions (row, col); the other half is the negation
DIRECTION_VECTORS = (
    (0, 1),   # horizontal
    (1, 0),   # vertical
    (-1, 1),  # diagonal, bottom-left to top-right
    (1, 1),   # diagonal, top-left to bottom-right
)


def to_player(value) -> Player:
    """Coerce an int (1 or 2) or a Player into a Player."""
    if isinstance(value, Player):
        return value
    return Player(int(value))


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """Check if a position is within the board boundaries."""
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def count_line(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> int:
    """
    Count the run of pieces through (row, col) along one direction.

    Both the positive and the negative direction are walked, so the
    result includes the piece at (row, col) itself.
    """
    rows, cols = grid.shape
    player_value = grid[row, col]
    count = 1

    r, c = row + dr, col + dc
    while 0 <= r < rows and 0 <= c < cols and grid[r, c] == player_value:
        count += 1
        r += dr
        c += dc

    r, c = row - dr, col - dc
    while 0 <= r < rows and 0 <= c < cols and grid[r, c] == player_value:
        count += 1
        r -= dr
        c -= dc

    return count


def check_win_at_position(grid: np.ndarray, row: int, col: int, connect_n: int = CONNECT_N) -> bool:
    """
    Check if the piece at the given position completes a line.

    Args:
        grid: The game board
        row: Row index of the piece
        col: Column index of the piece
        connect_n: Number of pieces in a row needed to win

    Returns:
        True if a line of at least connect_n pieces runs through the position
    """
    if grid[row, col] == Player.EMPTY.value:
        return False

    for dr, dc in DIRECTION_VECTORS:
        if count_line(grid, row, col, dr, dc) >= connect_n:
            return True

    return False


def is_full(grid: np.ndarray) -> bool:
    """A board is full once every column has its top cell occupied."""
    return not np.any(grid[0] == Player.EMPTY.value)


def column_weights(cols: int) -> List[int]:
    """
    Positional weight of each column, peaking at the centre.

    For the standard 7 wide board this is [1, 2, 3, 4, 3, 2, 1]; other
    widths get the same symmetric ramp.
    """
    return [min(col, cols - 1 - col) + 1 for col in range(cols)]


def parse_position(position: str, rows: int = ROWS, cols: int = COLS) -> np.ndarray:
    """
    Parse a comma separated list of cell values (row-major, top row first).

    Raises:
        ValueError: if the string does not hold rows * cols values in {0, 1, 2}
    """
    values = [int(v) for v in position.split(',') if v.strip()]
    if len(values) != rows * cols:
        raise ValueError(f"Position string must have {rows * cols} values, got {len(values)}")
    if any(v not in (0, 1, 2) for v in values):
        raise ValueError("Position values must be 0, 1 or 2")
    return np.array(values, dtype=int).reshape(rows, cols)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The game board

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"
    result = [border]

    for row in range(rows):
        cells = [str(Player(int(grid[row, col]))) for col in range(cols)]
        result.append("|" + " ".join(cells) + "|")

    result.append(border)
    result.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")

    return "\n".join(result)


def winning_line(grid: np.ndarray, row: int, col: int, connect_n: int = CONNECT_N) -> List[Tuple[int, int]]:
    """
    Positions of the first line of at least connect_n pieces through (row, col).

    Returns an empty list if no such line exists.
    """
    player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return []

    for dr, dc in DIRECTION_VECTORS:
        positions = [(row, col)]

        r, c = row + dr, col + dc
        while is_valid_position(grid, r, c) and grid[r, c] == player_value:
            positions.append((r, c))
            r += dr
            c += dc

        r, c = row - dr, col - dc
        while is_valid_position(grid, r, c) and grid[r, c] == player_value:
            positions.append((r, c))
            r -= dr
            c -= dc

        if len(positions) >= connect_n:
            return sorted(positions)

    return []
