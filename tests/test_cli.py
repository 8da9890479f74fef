"""Tests for the command line interface and terminal display."""

import argparse
import io

import pytest
from rich.console import Console
from runes.ai import Level
from runes.cli.main import (
    build_parser,
    build_player,
    default_board_size,
    main,
    parse_player_spec,
)
from runes.core import PLAYER_SYMBOLS, Field, Move, Position, create_starting_game
from runes.players import AiPlayer
from runes.utils import MatchDisplay


def test_parse_player_spec():
    """Test player descriptions."""
    assert parse_player_spec("human") == ("human", None)
    assert parse_player_spec("random") == ("random", Level.MEDIUM)
    assert parse_player_spec("negamax:hard") == ("negamax", Level.HARD)
    assert parse_player_spec("MCTS:very-hard") == ("mcts", Level.VERY_HARD)


@pytest.mark.parametrize("text", ["robot", "negamax:godlike", "human:easy"])
def test_parse_player_spec_rejects(text):
    """Test bad player descriptions are argument errors."""
    with pytest.raises(argparse.ArgumentTypeError):
        parse_player_spec(text)


def test_parser_defaults():
    """Test subcommand defaults."""
    parser = build_parser()

    args = parser.parse_args(["play"])
    assert args.size is None
    assert args.player1 == ("human", None)
    assert args.player2 == ("negamax", Level.MEDIUM)

    args = parser.parse_args(["bench", "--games", "3"])
    assert args.games == 3
    assert args.player1 == ("negamax", Level.EASY)
    assert args.player2 == ("mcts", Level.EASY)


def test_build_player():
    """Test AI players are labelled by kind and level."""
    player = build_player(("negamax", Level.HARD), 0)
    assert isinstance(player, AiPlayer)
    assert player.name == "negamax:hard"
    assert player.strategy.depth == 3

    player = build_player(("mcts", Level.EASY), 1, workers=2, seed=5)
    assert player.strategy.num_workers == 2

    assert build_player(("random", Level.MEDIUM), 0).name == "random"

    with pytest.raises(ValueError):
        build_player(("human", None), 0)


def test_seeded_players_for_every_kind():
    """Test a seed is accepted whatever the strategy kind."""
    for kind in ("random", "negamax", "mcts"):
        player = build_player((kind, Level.EASY), 0, seed=7)
        assert isinstance(player, AiPlayer)


def test_default_board_size():
    """Test very hard negamax players get a smaller default board."""
    assert default_board_size([("human", None), ("negamax", Level.MEDIUM)]) == 9
    assert default_board_size([("mcts", Level.VERY_HARD), ("random", Level.MEDIUM)]) == 9
    assert default_board_size([("human", None), ("negamax", Level.VERY_HARD)]) == 7


def test_main_without_command():
    """Test running with no command prints help and exits."""
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1


def test_main_rejects_tiny_board():
    """Test board size validation."""
    with pytest.raises(SystemExit) as excinfo:
        main(["bench", "--size", "1"])
    assert excinfo.value.code == 2


def test_bench_rejects_humans():
    """Test bench refuses human players."""
    with pytest.raises(SystemExit) as excinfo:
        main(["bench", "--player1", "human", "--games", "1"])
    assert excinfo.value.code == 2


def test_bench_runs(capsys):
    """Test a short benchmark prints a summary."""
    main(
        [
            "--log-level",
            "WARNING",
            "bench",
            "--size",
            "4",
            "--games",
            "2",
            "--player1",
            "random",
            "--player2",
            "negamax:easy",
            "--seed",
            "1",
        ]
    )

    out = capsys.readouterr().out
    assert "Results over 2 games" in out
    assert "negamax:easy" in out
    assert "Average game length" in out


def test_board_table_rendering():
    """Test the board is drawn with 1-based labels and glyphs."""
    output = Console(file=io.StringIO(), width=80, color_system=None)
    display = MatchDisplay(output)
    game = create_starting_game(5)
    move = Move(Position(0, 0), Field.BIRTH)
    game.apply_move(move)

    display.show_board(game, move, player_name="Alice")

    text = output.file.getvalue()
    assert "Alice played BIRTH at (1, 1)" in text
    assert Field.BIRTH.glyph in text
    assert "·" in text
    assert "5" in text


def test_header_shows_claim_symbols():
    """Test the header pairs each player with their claim symbol."""
    output = Console(file=io.StringIO(), width=80, color_system=None)

    MatchDisplay(output).show_header("Runes", 5, ["Alice", "Bob"])

    text = output.file.getvalue()
    assert f"Player 1: Alice {PLAYER_SYMBOLS[0].glyph}" in text
    assert f"Player 2: Bob {PLAYER_SYMBOLS[1].glyph}" in text
