"""Random baseline player."""

import random
from typing import Optional

import numpy as np

from connectk.ai.base import EngineConfig, MoveSelector
from connectk.debug import debug
from connectk.game.board import legal_moves
from connectk.utils import CONNECT_N, Player


class RandomPlayer(MoveSelector):
    name = "random"

    def __init__(self, player=Player.ONE, connect_n: int = CONNECT_N, timeout_ms: float = 1,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None,
                 config: Optional[EngineConfig] = None):
        if config is None:
            config = EngineConfig(player=player, connect_n=connect_n, timeout_ms=timeout_ms)
        super().__init__(config)
        self.rng = rng if rng is not None else random.Random(seed)

    def choose_move(self, board: np.ndarray) -> int:
        self.borrow(board).release()
        move = self.rng.choice(legal_moves(board))
        debug.trace(f"Random move {move}", "random")
        return move
