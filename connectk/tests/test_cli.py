"""
Tests for the command-line interface.
"""

import pytest

from connectk.ai import MinimaxPlayer, MonteCarloPlayer, RandomPlayer
from connectk.interfaces.cli import build_parser, build_player, main
from connectk.utils import Player


class TestBuildPlayer:

    @pytest.mark.parametrize("kind, cls", [
        ("minimax", MinimaxPlayer),
        ("montecarlo", MonteCarloPlayer),
        ("random", RandomPlayer),
    ])
    def test_engine_by_name(self, kind, cls):
        player = build_player(kind, Player.TWO, timeout_ms=10)
        assert isinstance(player, cls)
        assert player.player == Player.TWO

    def test_unknown_engine(self):
        with pytest.raises(ValueError):
            build_player("oracle", Player.ONE)


class TestCommands:

    def test_parser_defaults(self):
        args = build_parser().parse_args(["match"])
        assert args.one == "minimax"
        assert args.two == "montecarlo"
        assert (args.rows, args.cols, args.connect) == (6, 7, 4)

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_random_match(self, capsys):
        code = main(["--debug-level", "none", "match", "--one", "random", "--two", "random",
                     "--games", "3", "--seed", "1", "--quiet"])
        assert code == 0
        out = capsys.readouterr().out.strip().splitlines()[-1]
        assert out.startswith("random (ONE):")

    def test_analyze_position(self, capsys):
        position = ",".join(["0"] * 12 + ["1", "1", "0", "2"])
        code = main(["analyze", "--position", position, "--rows", "4", "--cols", "4",
                     "--connect", "3", "--timeout", "20", "--depth", "2"])
        assert code == 0
        out = capsys.readouterr().out
        # X completes three in a row in column 2
        assert "minimax: column 2" in out
        assert "Heuristic for ONE" in out

    def test_analyze_bad_position(self, capsys):
        assert main(["analyze", "--position", "1,2,3"]) == 1
        assert "Error analyzing position" in capsys.readouterr().out
