"""
monte_carlo.py - Random playout player for connectk

MonteCarloPlayer keeps playing random games to the end until its time
budget runs out. Each game starts from a random legal move. The move whose
games ended in the most wins and fewest losses is chosen.
"""

import math
import random
import time
from typing import List, Optional, Tuple

import numpy as np

from connectk.ai.base import EngineConfig, MoveSelector
from connectk.debug import DebugLevel, debug
from connectk.game.board import Oracle, SearchBoard, legal_moves, make_move
from connectk.game.oracle import get_game_state
from connectk.utils import CONNECT_N, GameState, Player


class MonteCarloPlayer(MoveSelector):
    """
    A player that scores moves by the outcome of random playouts.

    The board is checked for a timeout once per playout, so a single call
    can overrun its budget by at most one playout.
    """

    name = "montecarlo"

    def __init__(self, player=Player.ONE, connect_n: int = CONNECT_N, timeout_ms: float = 1000,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None,
                 oracle: Oracle = get_game_state, config: Optional[EngineConfig] = None):
        """
        Initialize the Monte Carlo player.

        Args:
            player: The side to play (1 or 2)
            connect_n: Number of pieces in a row needed to win
            timeout_ms: Time budget per move in milliseconds
            rng: Random source for move and playout selection
            seed: Seed for a private random source when rng is not given
            oracle: Game-state function consulted after every move
            config: A ready-made EngineConfig, overriding the other settings
        """
        if config is None:
            config = EngineConfig(player=player, connect_n=connect_n, timeout_ms=timeout_ms)
        super().__init__(config, oracle)
        self.rng = rng if rng is not None else random.Random(seed)

        self._best_move: Optional[int] = None
        self.values: List[float] = []
        self.simulations_run = 0

    def choose_move(self, board: np.ndarray) -> int:
        """
        Get the next move using random playouts.

        Args:
            board: The current grid; restored before returning

        Returns:
            The column with the best playout score
        """
        search_board = self.borrow(board)
        try:
            return self._choose_move(search_board)
        finally:
            search_board.release()
            self._best_move = None

    def _choose_move(self, board: SearchBoard) -> int:
        rows, cols = board.grid.shape

        # Opening book: the centre column of an odd-width board
        if cols % 2 == 1:
            middle = (cols - 1) // 2
            if board.grid[rows - 1, middle] == Player.EMPTY.value:
                debug.debug(f"Opening in centre column {middle}", "montecarlo")
                return middle

        # Unplayable columns can never be chosen
        self.values = [0 if board.can_make_move(col) else -math.inf for col in range(cols)]
        self._best_move = board.legal_moves()[0]
        self.simulations_run = 0

        start_time = time.perf_counter()
        while not self.is_timeout(start_time):
            move = self.rng.choice(board.legal_moves())
            row, col = board.make_move(move, self.player)
            outcome, last_player = self.play_random_game(board.grid, self.player, row, col)
            self.update_chosen_move(outcome, last_player, move)
            board.unmake_move(move)
            self.simulations_run += 1

        if debug.is_enabled(DebugLevel.DEBUG, "montecarlo"):
            debug.debug(f"Chose column {self._best_move} after {self.simulations_run} playouts "
                        f"(values {self.values})", "montecarlo")
        return self._best_move

    def play_random_game(self, grid: np.ndarray, player: Player, row: int, col: int) -> Tuple[GameState, Player]:
        """
        Finish a game with random moves on a copy of the grid.

        Args:
            grid: The position after `player` moved at (row, col)
            player: The player who made the last move
            row: Row of the last move
            col: Column of the last move

        Returns:
            (final game state, player who made the final move)
        """
        game = grid.copy()
        game_state = self.oracle(game, row, col, self.connect_n, player)
        while game_state == GameState.ONGOING:
            player = player.other()
            move = self.rng.choice(legal_moves(game))
            row, col = make_move(game, move, player)
            game_state = self.oracle(game, row, col, self.connect_n, player)
        return game_state, player

    def update_chosen_move(self, outcome: GameState, last_player: Player, move: int) -> None:
        """
        Credit a playout result to the move it started with.

        A win for this player adds a point, a loss removes one and a draw
        changes nothing.
        """
        if outcome == GameState.DRAW:
            return

        self.values[move] += 1 if last_player == self.player else -1

        values = self.values
        for i in range(len(values)):
            if values[i] > values[self._best_move]:
                self._best_move = i
