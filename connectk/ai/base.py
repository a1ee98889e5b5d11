"""
base.py - The contract shared by every move-selecting engine

A MoveSelector is handed the caller's board, may mutate it while it
searches, and must hand it back unchanged together with a legal column.
"""

import abc
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from connectk.game.board import Oracle, SearchBoard, legal_moves
from connectk.game.oracle import get_game_state
from connectk.utils import CONNECT_N, Player, to_player


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable engine settings.

    Attributes:
        player: The side the engine plays
        connect_n: Number of pieces in a row needed to win
        timeout_ms: Time budget per move in milliseconds
        depth: Search depth (minimax only)
        pad_to_budget: Hold every minimax answer until the budget has elapsed
    """
    player: Player = Player.ONE
    connect_n: int = CONNECT_N
    timeout_ms: float = 1000
    depth: Optional[int] = None
    pad_to_budget: bool = True

    def __post_init__(self):
        try:
            player = to_player(self.player)
        except ValueError:
            raise ValueError(f"player must be 1 or 2, got {self.player!r}") from None
        if player == Player.EMPTY:
            raise ValueError("player must be 1 or 2, got 0")
        object.__setattr__(self, "player", player)

        if self.connect_n < 1:
            raise ValueError(f"connect_n must be positive, got {self.connect_n}")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.depth is not None and self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")


class MoveSelector(abc.ABC):
    """Anything that can pick a column for a side given a board."""

    name: str = "engine"

    def __init__(self, config: EngineConfig, oracle: Oracle = get_game_state):
        self.config = config
        self.oracle = oracle

    @property
    def player(self) -> Player:
        return self.config.player

    @property
    def opponent(self) -> Player:
        return self.config.player.other()

    @property
    def connect_n(self) -> int:
        return self.config.connect_n

    @property
    def timeout_ms(self) -> float:
        return self.config.timeout_ms

    @abc.abstractmethod
    def choose_move(self, board: np.ndarray) -> int:
        """
        Pick a column for this engine's side.

        Args:
            board: The caller's grid; it is restored before returning

        Returns:
            A column index that is legal on `board`
        """
        raise NotImplementedError

    def borrow(self, board: np.ndarray) -> SearchBoard:
        """
        Wrap the caller's board for one search after checking preconditions.

        Raises:
            ValueError: if the board is not 2-D or has no playable column
        """
        if board.ndim != 2:
            raise ValueError(f"board must be a 2-D grid, got shape {board.shape}")
        if not legal_moves(board):
            raise ValueError("no legal moves available")
        return SearchBoard(board, self.connect_n, self.oracle)

    def is_timeout(self, start_time: float) -> bool:
        """True once the time budget has elapsed since start_time (a perf_counter sample)."""
        return (time.perf_counter() - start_time) * 1000.0 >= self.timeout_ms

    def wait_for_deadline(self, start_time: float) -> None:
        """Sleep until the time budget measured from start_time has elapsed."""
        remaining = self.timeout_ms / 1000.0 - (time.perf_counter() - start_time)
        if remaining > 0:
            time.sleep(remaining)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(player={self.player.name}, connect_n={self.connect_n}, timeout_ms={self.timeout_ms})"
