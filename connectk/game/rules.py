"""
rules.py - Game flow for connectk

ConnectFourGame is the turn loop that lets MoveSelectors play each other
and humans. get_game_state is re-exported from connectk.game.oracle for
callers that only import the rules.
"""

from typing import List, Optional

from connectk.debug import debug
from connectk.game.board import Board
from connectk.game.oracle import get_game_state
from connectk.utils import ROWS, COLS, CONNECT_N, Player

__all__ = ['get_game_state', 'ConnectFourGame']


class ConnectFourGame:
    """
    High-level game manager.

    The game owns the authoritative board. Selectors only ever see it
    through choose_move, and the game applies the column they return.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N):
        """Initialize a new game."""
        debug.debug(f"Initializing {rows}x{cols} ConnectFourGame (connect {connect_n})", "game")
        self.board = Board(rows, cols, connect_n)

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()

    def make_move(self, column: int) -> bool:
        """Make a move for the current player; False if it is not valid."""
        debug.debug(f"Game: Making move in column {column}", "game")
        return self.board.make_move(column)

    def undo_move(self) -> bool:
        """Undo the last move; False if there is nothing to undo."""
        return self.board.undo_move()

    def play_turn(self, selector) -> int:
        """
        Ask a selector for the current player's move and play it.

        Args:
            selector: A MoveSelector playing the side whose turn it is

        Returns:
            The column that was played

        Raises:
            ValueError: if the game is over, the selector plays the other
                side, or the selector answers with an unplayable column
        """
        if self.is_game_over():
            raise ValueError("the game is already over")
        if selector.player != self.board.current_player:
            raise ValueError(f"{selector!r} cannot move for player {self.board.current_player.name}")

        column = selector.choose_move(self.board.grid)
        if not self.board.make_move(column):
            raise ValueError(f"{selector!r} chose unplayable column {column}")
        return column

    def play_match(self, selector_one, selector_two) -> Optional[Player]:
        """
        Play a full game between two selectors from the current position.

        Returns:
            The winning player, or None for a draw
        """
        selectors = {Player.ONE: selector_one, Player.TWO: selector_two}
        while not self.is_game_over():
            self.play_turn(selectors[self.board.current_player])

        winner = self.get_winner()
        debug.info(f"Match over after {len(self.board.moves_made)} moves: "
                   f"{winner.name if winner else 'draw'}", "game")
        return winner

    def get_state(self) -> Board:
        return self.board

    def is_game_over(self) -> bool:
        return self.board.state.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """The winning player, or None if there is no winner (yet)."""
        return self.board.winner

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.get_valid_moves()

    def render(self) -> str:
        return self.board.render()
