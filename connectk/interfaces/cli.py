"""
cli.py - Command-line interface for connectk

This module provides a CLI to play against the engines, run engine-vs-engine
matches and inspect what each engine makes of a given position.
"""

import argparse
import sys
from collections import Counter
from typing import List, Optional

from connectk.ai import MinimaxPlayer, MonteCarloPlayer, MoveSelector, RandomPlayer
from connectk.debug import debug
from connectk.game.rules import ConnectFourGame
from connectk.utils import ROWS, COLS, CONNECT_N, Player, parse_position, render_board_ascii

ENGINES = ('minimax', 'montecarlo', 'random')


def build_player(kind: str, player: Player, connect_n: int = CONNECT_N, timeout_ms: float = 1000,
                 depth: int = 4, seed: Optional[int] = None, pad: bool = True) -> MoveSelector:
    """Create an engine by name."""
    if kind == 'minimax':
        return MinimaxPlayer(player, connect_n, timeout_ms, depth=depth, pad_to_budget=pad)
    if kind == 'montecarlo':
        return MonteCarloPlayer(player, connect_n, timeout_ms, seed=seed)
    if kind == 'random':
        return RandomPlayer(player, connect_n, seed=seed)
    raise ValueError(f"unsupported engine: {kind}")


def _add_board_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--rows', type=int, default=ROWS, help='board height')
    parser.add_argument('--cols', type=int, default=COLS, help='board width')
    parser.add_argument('--connect', type=int, default=CONNECT_N, help='pieces in a row needed to win')
    parser.add_argument('--timeout', type=float, default=1000, help='engine time budget per move (ms)')
    parser.add_argument('--depth', type=int, default=4, help='minimax search depth (plies)')
    parser.add_argument('--seed', type=int, default=None, help='random seed for randomized engines')
    parser.add_argument('--no-pad', action='store_true',
                        help='let minimax answer as soon as its search finishes')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect-K engines CLI')
    parser.add_argument('--debug-level', default='warning',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        help='logging verbosity')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game against an engine')
    play_parser.add_argument('--ai', choices=ENGINES, default='minimax', help='engine opponent')
    play_parser.add_argument('--ai-first', action='store_true', help='let the engine open the game')
    _add_board_args(play_parser)

    match_parser = subparsers.add_parser('match', help='Play engines against each other')
    match_parser.add_argument('--one', choices=ENGINES, default='minimax', help='engine for player one')
    match_parser.add_argument('--two', choices=ENGINES, default='montecarlo', help='engine for player two')
    match_parser.add_argument('--games', type=int, default=10, help='number of games')
    match_parser.add_argument('--quiet', action='store_true', help='only print the final tally')
    _add_board_args(match_parser)

    analyze_parser = subparsers.add_parser('analyze', help='Show what each engine plays in a position')
    analyze_parser.add_argument('--position', type=str, required=True,
                                help='comma separated cell values, top row first')
    analyze_parser.add_argument('--player', type=int, choices=[1, 2], default=1, help='side to move')
    _add_board_args(analyze_parser)

    return parser


def get_human_move(game: ConnectFourGame) -> Optional[int]:
    """
    Read a move from the terminal.

    Returns:
        A column index, -1 to quit, -2 to undo, or None for invalid input
    """
    cols = game.board.cols
    user_input = input(f"Your move (columns 0-{cols - 1}, q/u): ").strip().lower()
    if user_input == 'q':
        return -1
    if user_input == 'u':
        return -2
    try:
        move = int(user_input)
    except ValueError:
        print("Invalid input. Please enter a column number or q/u.")
        return None
    if not 0 <= move < cols:
        print(f"Column must be between 0 and {cols - 1}.")
        return None
    return move


def play_game(args) -> None:
    """Play an interactive game against an engine."""
    game = ConnectFourGame(args.rows, args.cols, args.connect)
    ai_side = Player.ONE if args.ai_first else Player.TWO
    ai = build_player(args.ai, ai_side, args.connect, args.timeout, args.depth, args.seed, not args.no_pad)

    print(f"Starting a new game against {args.ai} (connect {args.connect}).")
    print(game.render())

    while not game.is_game_over():
        if game.get_current_player() == ai_side:
            print("AI is thinking...")
            move = game.play_turn(ai)
            print(f"AI plays column {move}")
            print(game.render())
            continue

        move = get_human_move(game)
        if move is None:
            continue
        if move == -1:
            print("Quitting game.")
            return
        if move == -2:
            # Undo the engine's reply as well so it is the human's turn again
            game.undo_move()
            game.undo_move()
            print(game.render())
            continue

        if game.make_move(move):
            print(game.render())
        else:
            print(f"Invalid move: {move}")

    winner = game.get_winner()
    if winner is None:
        print("It's a draw!")
    elif winner == ai_side:
        print("AI wins! Better luck next time.")
    else:
        print("You win! Congratulations!")


def run_match(args) -> Counter:
    """Play a series of engine-vs-engine games and print the tally."""
    one = build_player(args.one, Player.ONE, args.connect, args.timeout, args.depth, args.seed, not args.no_pad)
    seed_two = None if args.seed is None else args.seed + 1
    two = build_player(args.two, Player.TWO, args.connect, args.timeout, args.depth, seed_two, not args.no_pad)

    tally: Counter = Counter()
    game = ConnectFourGame(args.rows, args.cols, args.connect)
    for i in range(args.games):
        game.reset()
        winner = game.play_match(one, two)
        result = winner.name if winner else 'DRAW'
        tally[result] += 1
        if not args.quiet:
            print(f"Game {i + 1}: {result} in {len(game.board.moves_made)} moves")

    print(f"{args.one} (ONE): {tally['ONE']}  {args.two} (TWO): {tally['TWO']}  draws: {tally['DRAW']}")
    return tally


def analyze_position(args) -> None:
    """Print the move every engine picks for a position."""
    grid = parse_position(args.position, args.rows, args.cols)
    player = Player(args.player)
    print(render_board_ascii(grid))

    for kind in ENGINES:
        engine = build_player(kind, player, args.connect, args.timeout, args.depth, args.seed, pad=False)
        move = engine.choose_move(grid)
        print(f"{kind:>10}: column {move}")

    minimax = MinimaxPlayer(player, args.connect, args.timeout, depth=args.depth)
    print(f"Heuristic for {player.name}: {minimax.heuristic(grid)}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    debug.set_from_string(args.debug_level)

    if args.command == 'play':
        play_game(args)
    elif args.command == 'match':
        run_match(args)
    elif args.command == 'analyze':
        try:
            analyze_position(args)
        except ValueError as e:
            print(f"Error analyzing position: {e}")
            return 1
    else:
        parser.print_help()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
