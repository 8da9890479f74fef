"""Tests for static evaluation."""

import pytest
from runes.ai import RandomStrategy
from runes.core import (
    WIN_SCORE,
    Board,
    Field,
    Game,
    Move,
    Position,
    count_formations,
    create_starting_game,
    evaluate,
    terminal_score,
)

B, G, W, K, J = Field.BIRTH, Field.GIFT, Field.WEALTH, Field.KNOWLEDGE, Field.JOY


def make_game(placements: dict, next_player: int = 0, size: int = 5) -> Game:
    board = Board(size)
    for (row, col), field in placements.items():
        board.change(Position(row, col), field)
    return Game(board=board, next_player=next_player)


ONE_THREAT = {(2, 2): B, (3, 1): G, (3, 2): K}


def test_starting_position_is_even():
    """Test nothing is threatened at the start."""
    game = create_starting_game(7)

    assert count_formations(game) == (0, 0)
    assert evaluate(game) == 0


def test_count_formations():
    """Test formations are credited to the completing claim symbol."""
    game = make_game(ONE_THREAT)

    assert count_formations(game) == (0, 1)


def test_mover_formations_weigh_more():
    """Test the mover's formations outweigh the opponent's."""
    # Player 2 owns the only formation
    assert evaluate(make_game(ONE_THREAT, next_player=1)) == 3
    assert evaluate(make_game(ONE_THREAT, next_player=0)) == -1


def test_evaluate_perspective():
    """Test evaluating for the other player negates the score."""
    game = make_game(ONE_THREAT, next_player=0)

    assert evaluate(game, player=0) == -1
    assert evaluate(game, player=1) == 1


def test_evaluate_zero_sum():
    """Test zero-sum consistency across a random game."""
    game = create_starting_game(5)
    strategy = RandomStrategy(seed=21)

    while not game.game_over:
        assert evaluate(game, 0) == -evaluate(game, 1)
        assert evaluate(game) == evaluate(game, game.next_player)
        game.apply_move(strategy.select_move(game.clone()))


def test_opponent_formations_lower_score():
    """Test opponent formations lower the mover's score."""
    game = make_game(ONE_THREAT, next_player=1, size=7)
    assert evaluate(game) == 3

    # Wealth next to a fresh Birth/Gift pair: formations at (4, 4) and (4, 5)
    game.board.change(Position(3, 5), B)
    game.board.change(Position(5, 5), G)
    game.board.change(Position(5, 4), W)

    assert count_formations(game) == (2, 1)
    assert evaluate(game) == 1
    assert evaluate(game, player=0) == -1


def test_terminal_score_win_and_loss():
    """Test exact scores of a finished game."""
    game = make_game({(2, 2): B, (1, 3): G, (2, 3): W}, next_player=0)
    game.apply_move(Move(Position(1, 2), J))

    assert terminal_score(game, 0) == WIN_SCORE
    assert terminal_score(game, 1) == -WIN_SCORE
    assert terminal_score(game, 0, depth=2) == WIN_SCORE + 2
    assert terminal_score(game, 1, depth=2) == -(WIN_SCORE + 2)


def test_terminal_score_draw():
    """Test a full board scores zero."""
    game = create_starting_game(2)
    game.apply_move(Move(Position(0, 0), G))
    game.apply_move(Move(Position(0, 1), K))
    game.apply_move(Move(Position(1, 0), G))

    assert terminal_score(game, 0) == 0
    assert terminal_score(game, 1) == 0


def test_terminal_score_requires_finished_game():
    """Test scoring a running game is an error."""
    with pytest.raises(ValueError):
        terminal_score(create_starting_game(5), 0)
