"""
Pytest fixtures for connectk tests.

Boards are written as lists of strings, top row first, using
'.' for empty, 'X' for player one and 'O' for player two.
"""

import random

import numpy as np
import pytest

from connectk.debug import debug, DebugLevel

CELLS = {'.': 0, 'X': 1, 'O': 2}


def grid_from_rows(rows):
    """Build a grid from a list of row strings (top row first)."""
    return np.array([[CELLS[c] for c in row] for row in rows], dtype=int)


@pytest.fixture
def build_grid():
    return grid_from_rows


@pytest.fixture
def empty_grid() -> np.ndarray:
    """A standard empty 6x7 grid."""
    return np.zeros((6, 7), dtype=int)


@pytest.fixture
def midgame_grid() -> np.ndarray:
    """A 6x7 position with no immediate win for either side."""
    return grid_from_rows([
        ".......",
        ".......",
        ".......",
        "...O...",
        "..XX...",
        ".OXOX..",
    ])


@pytest.fixture
def win_for_x_grid() -> np.ndarray:
    """X wins in column 3, O wins in column 5."""
    return grid_from_rows([
        ".......",
        ".......",
        ".......",
        ".....O.",
        ".....O.",
        "XXX..O.",
    ])


@pytest.fixture
def block_grid() -> np.ndarray:
    """X has no winning move; O wins in column 5."""
    return grid_from_rows([
        ".......",
        ".......",
        ".......",
        ".....O.",
        ".....O.",
        "X.X..OX",
    ])


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep log output quiet and restore the shared debug settings afterwards."""
    level = debug.level
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=level, enabled=True, components=[])
