"""
minimax.py - Depth-limited minimax player for connectk

This module provides a MinimaxPlayer that searches every line of play a fixed
number of plies ahead and scores the positions it reaches with a positional
heuristic.

Before searching, the player takes an immediate win if one exists and
otherwise blocks the opponent's immediate win. This keeps shallow searches
tactically sound.

The heuristic rewards pieces that are clustered symmetrically around each
other and close to the centre columns.
"""

import math
import time
from typing import Optional

import numpy as np

from connectk.ai.base import EngineConfig, MoveSelector
from connectk.debug import debug
from connectk.game.board import Oracle, SearchBoard
from connectk.game.oracle import get_game_state
from connectk.utils import CONNECT_N, GameState, Player, column_weights

WIN_SCORE = math.inf
LOSS_SCORE = -math.inf


class MinimaxPlayer(MoveSelector):
    """
    A player that uses plain minimax (no pruning) to a fixed depth.

    The clock is only checked between top-level columns, never inside the
    recursion, so a single call can overrun its budget by one full root
    branch searched to the configured depth.

    Answers are padded to the configured time budget unless
    pad_to_budget is turned off, so every difficulty level takes the same
    wall-clock time per move.
    """

    name = "minimax"

    def __init__(self, player=Player.ONE, connect_n: int = CONNECT_N, timeout_ms: float = 1000,
                 depth: int = 4, pad_to_budget: bool = True, oracle: Oracle = get_game_state,
                 config: Optional[EngineConfig] = None):
        """
        Initialize the minimax player.

        Args:
            player: The side to play (1 or 2)
            connect_n: Number of pieces in a row needed to win
            timeout_ms: Time budget per move in milliseconds
            depth: Search depth in plies (higher = stronger but slower)
            pad_to_budget: Hold the answer until the budget has elapsed
            oracle: Game-state function consulted after every move
            config: A ready-made EngineConfig, overriding the other settings
        """
        if config is None:
            config = EngineConfig(player=player, connect_n=connect_n, timeout_ms=timeout_ms,
                                  depth=depth, pad_to_budget=pad_to_budget)
        elif config.depth is None:
            raise ValueError("MinimaxPlayer requires a config with a search depth")
        super().__init__(config, oracle)
        self.board: Optional[SearchBoard] = None
        self.nodes_evaluated = 0  # For performance tracking

    @property
    def depth(self) -> int:
        return self.config.depth

    def choose_move(self, board: np.ndarray) -> int:
        """
        Get the best move for this player.

        Args:
            board: The current grid; restored before returning

        Returns:
            The column index of the chosen move
        """
        self.board = self.borrow(board)
        try:
            return self._choose_move()
        finally:
            self.board.release()
            self.board = None

    def _choose_move(self) -> int:
        board = self.board
        start_time = time.perf_counter()
        self.nodes_evaluated = 0

        for col in range(board.cols):
            if board.is_winning_move(col, self.player):
                debug.debug(f"Taking immediate win in column {col}", "minimax")
                return col

        for col in range(board.cols):
            if board.is_winning_move(col, self.opponent):
                debug.debug(f"Blocking opponent win in column {col}", "minimax")
                return col

        best_move = 0
        best_score = LOSS_SCORE
        for col in range(board.cols):
            if self.is_timeout(start_time):
                debug.debug(f"Time budget exhausted before column {col}", "minimax")
                break
            if not board.can_make_move(col):
                continue

            row, col = board.make_move(col, self.player)
            score = self._min_value(self.depth - 1, self.player, row, col)
            # >= so a column scoring LOSS_SCORE can still replace the default
            if score >= best_score:
                best_score = score
                best_move = col
            board.unmake_move(col)

        if not board.can_make_move(best_move):
            best_move = board.legal_moves()[0]

        debug.debug(f"Chose column {best_move} (score {best_score}, "
                    f"{self.nodes_evaluated} nodes, depth {self.depth})", "minimax")

        if self.config.pad_to_budget:
            self.wait_for_deadline(start_time)
        return best_move

    def _max_value(self, depth: int, player: Player, row: int, col: int) -> float:
        """
        Best score this player can force after `player` moved at (row, col).

        Args:
            depth: Remaining plies to search
            player: The player who made the last move
            row: Row of the last move
            col: Column of the last move
        """
        self.nodes_evaluated += 1
        board = self.board
        game_state = board.game_state(row, col, player)
        if depth <= 0 or game_state != GameState.ONGOING:
            return self._evaluate(game_state, player)

        player = player.other()
        best_score = LOSS_SCORE
        for i in range(board.cols):
            if board.can_make_move(i):
                r, c = board.make_move(i, player)
                score = self._min_value(depth - 1, player, r, c)
                if score > best_score:
                    best_score = score
                board.unmake_move(i)
        return best_score

    def _min_value(self, depth: int, player: Player, row: int, col: int) -> float:
        """Worst score the opponent can force after `player` moved at (row, col)."""
        self.nodes_evaluated += 1
        board = self.board
        game_state = board.game_state(row, col, player)
        if depth <= 0 or game_state != GameState.ONGOING:
            return self._evaluate(game_state, player)

        player = player.other()
        best_score = WIN_SCORE
        for i in range(board.cols):
            if board.can_make_move(i):
                r, c = board.make_move(i, player)
                score = self._max_value(depth - 1, player, r, c)
                if score < best_score:
                    best_score = score
                board.unmake_move(i)
        return best_score

    def _evaluate(self, game_state: GameState, last_player: Player) -> float:
        # A finished game belongs to whoever moved last, draws included
        if game_state != GameState.ONGOING:
            return WIN_SCORE if last_player == self.player else LOSS_SCORE
        return self.heuristic(self.board.grid)

    def heuristic(self, grid: np.ndarray) -> float:
        """
        Score a position from this player's point of view (larger is better).

        Every piece looks at a window one column and two rows to each side of
        it. Each occupied cell in the window is compared with the cell
        mirrored through the piece. A same-coloured pair earns 2 x the column
        weight of the piece; anything else earns 1. Window pairs with either
        cell off the board are skipped.
        """
        rows, cols = grid.shape
        weights = column_weights(cols)
        empty = Player.EMPTY.value
        one = Player.ONE.value
        two = Player.TWO.value
        scores = {one: 0, two: 0}

        for i in range(cols):
            if grid[rows - 1, i] == empty:
                continue
            top = rows
            while top > 0 and grid[top - 1, i] != empty:
                top -= 1
            for j in range(rows - 1, top - 1, -1):
                for x in (-1, 0, 1):
                    if not (0 <= i + x < cols and 0 <= i - x < cols):
                        continue
                    for y in (-2, -1, 0, 1, 2):
                        if not (0 <= j + y < rows and 0 <= j - y < rows):
                            continue
                        cell = grid[j + y, i + x]
                        if cell == empty:
                            continue
                        if grid[j - y, i - x] == cell:
                            scores[int(cell)] += 2 * weights[i]
                        else:
                            scores[int(cell)] += 1

        if self.player == Player.ONE:
            return scores[one] - scores[two]
        return scores[two] - scores[one]
