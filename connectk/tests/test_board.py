"""
Tests for the board primitives, SearchBoard and the driver Board.

Tests:
- make/unmake pairs restore the grid exactly
- SearchBoard enforces last-in first-out undo
- Board tracks turns, results and undo
"""

import random

import numpy as np
import pytest

from connectk.game.board import (Board, SearchBoard, can_make_move, column_height, create_grid,
                                 legal_moves, make_move, unmake_move)
from connectk.utils import GameState, Player


class TestMovePrimitives:
    """Tests for the free move functions."""

    def test_piece_lands_on_bottom(self, empty_grid):
        """A piece in an empty column lands in the bottom row."""
        assert make_move(empty_grid, 3, Player.ONE) == (5, 3)
        assert empty_grid[5, 3] == Player.ONE.value

    def test_pieces_stack(self, empty_grid):
        """Later pieces land on top of earlier ones."""
        make_move(empty_grid, 2, Player.ONE)
        assert make_move(empty_grid, 2, 2) == (4, 2)
        assert column_height(empty_grid, 2) == 2

    def test_unmake_removes_top_piece(self, empty_grid):
        """unmake_move clears the most recent piece of the column."""
        make_move(empty_grid, 4, Player.ONE)
        make_move(empty_grid, 4, Player.TWO)
        unmake_move(empty_grid, 4)
        assert empty_grid[4, 4] == 0
        assert empty_grid[5, 4] == Player.ONE.value

    def test_unmake_empty_column_raises(self, empty_grid):
        """There is nothing to unmake in an empty column."""
        with pytest.raises(ValueError):
            unmake_move(empty_grid, 0)

    def test_full_column_is_not_playable(self, empty_grid):
        """A column stops being playable once its top cell is occupied."""
        for i in range(6):
            assert can_make_move(empty_grid, 1)
            make_move(empty_grid, 1, Player.ONE if i % 2 else Player.TWO)
        assert not can_make_move(empty_grid, 1)
        assert column_height(empty_grid, 1) == 6
        assert legal_moves(empty_grid) == [0, 2, 3, 4, 5, 6]

    def test_out_of_range_column_is_not_playable(self, empty_grid):
        assert not can_make_move(empty_grid, -1)
        assert not can_make_move(empty_grid, 7)

    def test_make_move_into_full_column_raises(self, build_grid):
        """A full column is refused instead of overwriting its bottom cell."""
        grid = build_grid([
            "X.",
            "O.",
        ])
        with pytest.raises(ValueError):
            make_move(grid, 0, Player.ONE)
        assert grid.tolist() == [[1, 0], [2, 0]]

    def test_create_grid_rejects_empty_board(self):
        with pytest.raises(ValueError):
            create_grid(0, 7)

    def test_random_make_unmake_sequences_restore_grid(self, midgame_grid):
        """Any sequence of makes undone in reverse order restores every cell."""
        rng = random.Random(7)
        original = midgame_grid.copy()

        for _ in range(50):
            played = []
            player = Player.ONE
            for _ in range(rng.randint(1, 12)):
                moves = legal_moves(midgame_grid)
                if not moves:
                    break
                col = rng.choice(moves)
                make_move(midgame_grid, col, player)
                played.append(col)
                player = player.other()
            for col in reversed(played):
                unmake_move(midgame_grid, col)
            np.testing.assert_array_equal(midgame_grid, original)


class TestSearchBoard:
    """Tests for the borrowed search handle."""

    def test_borrow_does_not_copy(self, empty_grid):
        """Moves on the handle are visible on the caller's grid."""
        board = SearchBoard(empty_grid, 4)
        board.make_move(0, Player.ONE)
        assert empty_grid[5, 0] == Player.ONE.value
        assert board.depth == 1

    def test_out_of_order_unmake_fails(self, empty_grid):
        """Undoing anything but the last move trips the stack check."""
        board = SearchBoard(empty_grid, 4)
        board.make_move(0, Player.ONE)
        board.make_move(1, Player.TWO)
        with pytest.raises(AssertionError):
            board.unmake_move(0)

    def test_release_with_pending_moves_fails(self, empty_grid):
        board = SearchBoard(empty_grid, 4)
        board.make_move(0, Player.ONE)
        with pytest.raises(AssertionError):
            board.release()

    def test_release_returns_grid(self, empty_grid):
        board = SearchBoard(empty_grid, 4)
        board.make_move(3, Player.ONE)
        board.unmake_move(3)
        assert board.release() is empty_grid

    def test_is_winning_move(self, win_for_x_grid):
        """Winning columns are detected for the right player only."""
        original = win_for_x_grid.copy()
        board = SearchBoard(win_for_x_grid, 4)

        assert board.is_winning_move(3, Player.ONE)
        assert not board.is_winning_move(3, Player.TWO)
        assert board.is_winning_move(5, Player.TWO)
        assert not board.is_winning_move(4, Player.ONE)
        np.testing.assert_array_equal(win_for_x_grid, original)
        assert board.depth == 0

    def test_is_winning_move_on_full_column(self, build_grid):
        """A full column is never a winning move and is left untouched."""
        grid = build_grid([
            "X..",
            "O..",
            "X..",
        ])
        original = grid.copy()
        board = SearchBoard(grid, 3)
        assert not board.is_winning_move(0, Player.ONE)
        np.testing.assert_array_equal(grid, original)

    def test_game_state_uses_injected_oracle(self, empty_grid):
        calls = []

        def oracle(grid, row, col, connect_n, player):
            calls.append((row, col, connect_n, player))
            return GameState.DRAW

        board = SearchBoard(empty_grid, 5, oracle)
        row, col = board.make_move(2, Player.TWO)
        assert board.game_state(row, col, Player.TWO) == GameState.DRAW
        assert calls == [(5, 2, 5, Player.TWO)]


class TestDriverBoard:
    """Tests for the authoritative game board."""

    def test_players_alternate(self):
        board = Board()
        assert board.current_player == Player.ONE
        assert board.make_move(3)
        assert board.current_player == Player.TWO
        assert board.last_move == (5, 3)

    def test_invalid_moves_return_false(self):
        board = Board(rows=2, cols=2, connect_n=3)
        assert not board.make_move(5)
        board.make_move(0)
        board.make_move(0)
        assert not board.make_move(0)
        assert board.moves_made == [0, 0]

    def test_vertical_win(self):
        board = Board()
        for col in [0, 1, 0, 1, 0, 1, 0]:
            board.make_move(col)
        assert board.state == GameState.WIN
        assert board.winner == Player.ONE
        assert board.get_winning_line() == [(2, 0), (3, 0), (4, 0), (5, 0)]
        assert board.get_valid_moves() == []
        assert not board.make_move(2)

    def test_draw_on_full_board(self):
        """Filling a board where no line is possible ends in a draw."""
        board = Board(rows=2, cols=2, connect_n=3)
        for col in [0, 1, 0, 1]:
            assert board.make_move(col)
        assert board.state == GameState.DRAW
        assert board.winner is None

    def test_undo_restores_turn_and_result(self):
        board = Board()
        for col in [0, 1, 0, 1, 0, 1, 0]:
            board.make_move(col)
        assert board.undo_move()
        assert board.state == GameState.ONGOING
        assert board.winner is None
        assert board.current_player == Player.ONE
        assert board.last_move == (3, 1)
        assert board.grid[2, 0] == 0

    def test_undo_everything(self):
        board = Board()
        board.make_move(4)
        assert board.undo_move()
        assert board.last_move is None
        assert not board.undo_move()
        assert not board.grid.any()

    def test_copy_is_independent(self):
        board = Board()
        board.make_move(2)
        clone = board.copy()
        clone.make_move(2)
        assert board.moves_made == [2]
        assert clone.moves_made == [2, 2]
        assert board.grid[4, 2] == 0

    def test_render_shows_pieces(self):
        board = Board(rows=2, cols=3)
        board.make_move(1)
        assert str(board).splitlines() == [
            "|-----|",
            "|     |",
            "|  X  |",
            "|-----|",
            "|0 1 2|",
        ]
