"""
connectk - Move-selection engines for Connect Four and its Connect-K variants

This package provides two interchangeable opponents, a depth-limited minimax
search and a time-bounded Monte Carlo playout search. It also includes the
board primitives they share, a small game driver and a CLI for playing
against them.
"""

__version__ = '0.1.0'
