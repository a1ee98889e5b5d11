"""
board.py - Board representation and move primitives for connectk

The board is a plain 2-D numpy array of Player values with row 0 at the top.
Pieces fall to the lowest empty row of a column, so within a column all
empty cells sit above all occupied ones.

This module provides:
1. Free move primitives shared by the engines and the game driver
2. SearchBoard, the handle an engine wraps around a borrowed board
3. Board, the authoritative board owned by the game driver
"""

from typing import Callable, List, Optional, Tuple

import numpy as np

from connectk.debug import debug
from connectk.game.oracle import get_game_state
from connectk.utils import (ROWS, COLS, CONNECT_N, Player, GameState,
                            render_board_ascii, to_player, winning_line)

EMPTY = Player.EMPTY.value

Oracle = Callable[[np.ndarray, int, int, int, Player], GameState]


def create_grid(rows: int = ROWS, cols: int = COLS) -> np.ndarray:
    """Create an empty rows x cols grid."""
    if rows < 1 or cols < 1:
        raise ValueError(f"Board must be at least 1x1, got {rows}x{cols}")
    return np.zeros((rows, cols), dtype=int)


def can_make_move(grid: np.ndarray, col: int) -> bool:
    """A column is playable while its top cell is empty."""
    return 0 <= col < grid.shape[1] and grid[0, col] == EMPTY


def column_height(grid: np.ndarray, col: int) -> int:
    """Number of pieces in a column, counted from the bottom."""
    rows = grid.shape[0]
    height = 0
    for row in range(rows - 1, -1, -1):
        if grid[row, col] == EMPTY:
            break
        height += 1
    return height


def make_move(grid: np.ndarray, col: int, player) -> Tuple[int, int]:
    """
    Drop a piece for `player` into `col`.

    Returns:
        The (row, col) where the piece landed

    Raises:
        ValueError: if the column is already full
    """
    rows = grid.shape[0]
    row = 0
    while row < rows and grid[row, col] == EMPTY:
        row += 1
    if row == 0:
        raise ValueError(f"Cannot make a move in full column {col}")
    grid[row - 1, col] = to_player(player).value
    return row - 1, col


def unmake_move(grid: np.ndarray, col: int) -> None:
    """Remove the topmost piece of a column."""
    rows = grid.shape[0]
    row = 0
    while row < rows and grid[row, col] == EMPTY:
        row += 1
    if row == rows:
        raise ValueError(f"Cannot unmake a move in empty column {col}")
    grid[row, col] = EMPTY


def legal_moves(grid: np.ndarray) -> List[int]:
    """Playable columns in ascending order."""
    return [col for col in range(grid.shape[1]) if grid[0, col] == EMPTY]


class SearchBoard:
    """
    A borrowed view of the caller's board used for the length of one search.

    Every make_move must be undone by unmake_move on the same column in
    reverse order. The applied columns are kept on a stack and the order is
    checked with assertions, so a search that leaks a move fails loudly
    instead of corrupting the caller's board.
    """

    def __init__(self, grid: np.ndarray, connect_n: int, oracle: Oracle = get_game_state):
        self.grid = grid
        self.rows, self.cols = grid.shape
        self.connect_n = connect_n
        self.oracle = oracle
        self._stack: List[int] = []

    @property
    def depth(self) -> int:
        """Number of moves currently applied on top of the borrowed position."""
        return len(self._stack)

    def can_make_move(self, col: int) -> bool:
        return 0 <= col < self.cols and self.grid[0, col] == EMPTY

    def column_height(self, col: int) -> int:
        return column_height(self.grid, col)

    def legal_moves(self) -> List[int]:
        return legal_moves(self.grid)

    def make_move(self, col: int, player) -> Tuple[int, int]:
        assert self.can_make_move(col), f"column {col} is not playable"
        self._stack.append(col)
        return make_move(self.grid, col, player)

    def unmake_move(self, col: int) -> None:
        assert self._stack and self._stack[-1] == col, \
            f"unmake_move({col}) out of order, applied moves: {self._stack}"
        self._stack.pop()
        unmake_move(self.grid, col)

    def game_state(self, row: int, col: int, player) -> GameState:
        return self.oracle(self.grid, row, col, self.connect_n, player)

    def is_winning_move(self, col: int, player) -> bool:
        """
        Check whether dropping a piece in `col` wins the game for `player`.

        The trial move is always undone; an unplayable column is simply
        not a winning move.
        """
        if not self.can_make_move(col):
            return False
        row, col = self.make_move(col, player)
        game_state = self.game_state(row, col, player)
        self.unmake_move(col)
        return game_state == GameState.WIN

    def release(self) -> np.ndarray:
        """End the borrow; every applied move must have been undone."""
        assert not self._stack, f"search left moves on the board: {self._stack}"
        return self.grid


class Board:
    """
    The authoritative board of a game in progress.

    This class manages the grid, validates and executes moves,
    and tracks whose turn it is and how the game ended.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N,
                 oracle: Oracle = get_game_state):
        """Initialize an empty board."""
        debug.debug(f"Initializing new {rows}x{cols} Board (connect {connect_n})", "board")
        self.rows = rows
        self.cols = cols
        self.connect_n = connect_n
        self.oracle = oracle
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self.grid = create_grid(self.rows, self.cols)
        self.moves_made: List[int] = []
        self.current_player = Player.ONE
        self.state = GameState.ONGOING
        self.winner: Optional[Player] = None
        self.last_move: Optional[Tuple[int, int]] = None

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board(self.rows, self.cols, self.connect_n, self.oracle)
        new_board.grid = self.grid.copy()
        new_board.moves_made = self.moves_made.copy()
        new_board.current_player = self.current_player
        new_board.state = self.state
        new_board.winner = self.winner
        new_board.last_move = self.last_move
        return new_board

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move is valid, False otherwise
        """
        if self.state.is_game_over():
            debug.debug(f"Invalid move: game is over ({self.state.name})", "board")
            return False

        if not (0 <= column < self.cols):
            debug.debug(f"Invalid move: column {column} out of bounds", "board")
            return False

        if self.grid[0, column] != EMPTY:
            debug.debug(f"Invalid move: column {column} is full", "board")
            return False

        return True

    def get_valid_moves(self) -> List[int]:
        """Get the columns where a piece can be placed."""
        if self.state.is_game_over():
            return []
        return legal_moves(self.grid)

    def make_move(self, column: int) -> bool:
        """
        Place a piece for the current player in the specified column.

        Returns:
            True if the move was made, False if it was invalid
        """
        debug.debug(f"Attempting move in column {column} for player {self.current_player.name}", "board")

        if not self.is_valid_move(column):
            return False

        mover = self.current_player
        row, column = make_move(self.grid, column, mover)
        self.last_move = (row, column)
        self.moves_made.append(column)
        debug.trace(f"Placed piece at position ({row}, {column})", "board")

        self.state = self.oracle(self.grid, row, column, self.connect_n, mover)
        if self.state == GameState.WIN:
            self.winner = mover
            debug.info(f"Player {mover.name} wins after move at {self.last_move}", "board")
        elif self.state == GameState.DRAW:
            debug.info("Game ends in a draw", "board")
        else:
            self.current_player = mover.other()

        return True

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if there are no moves to undo
        """
        if not self.moves_made:
            debug.debug("No moves to undo", "board")
            return False

        last_column = self.moves_made.pop()
        row = self.rows - column_height(self.grid, last_column)
        mover = Player(int(self.grid[row, last_column]))
        debug.debug(f"Undoing move at ({row}, {last_column})", "board")
        unmake_move(self.grid, last_column)

        self.state = GameState.ONGOING
        self.winner = None
        self.current_player = mover

        if self.moves_made:
            col = self.moves_made[-1]
            self.last_move = (self.rows - column_height(self.grid, col), col)
        else:
            self.last_move = None

        return True

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions, or an empty list if there is no winner
        """
        if self.state != GameState.WIN or self.last_move is None:
            return []
        row, col = self.last_move
        return winning_line(self.grid, row, col, self.connect_n)

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
