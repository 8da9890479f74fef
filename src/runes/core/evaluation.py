"""
Static position evaluation.

Positions are scored by counting formations: neighbourhoods that are one
Joy away from winning for the player whose claim symbol completes them.
Scores are always from a given player's perspective and zero-sum.
"""

from typing import Optional, Tuple

from .game import Game, formation_owner

# Formations of the player to move count this many times more than the
# opponent's, since the mover gets to use one first.
MOVER_WEIGHT = 3

# Larger than any heuristic score on a playable board
WIN_SCORE = 1_000_000


def count_formations(game: Game) -> Tuple[int, int]:
    """
    Count winning formations on the board.

    Args:
        game: Game to inspect

    Returns:
        (player 1 formations, player 2 formations)
    """
    counts = [0, 0]
    board = game.board
    for pos in board.positions():
        owner = formation_owner(board.count_around(pos))
        if owner is not None:
            counts[owner] += 1
    return counts[0], counts[1]


def evaluate(game: Game, player: Optional[int] = None) -> int:
    """
    Heuristic value of a non-terminal position.

    Args:
        game: Position to evaluate
        player: Perspective (default: the player to move)

    Returns:
        Score, positive when the position favours player
    """
    if player is None:
        player = game.next_player

    formations = count_formations(game)
    mover = game.next_player
    score = formations[mover] * MOVER_WEIGHT - formations[1 - mover]

    return score if player == mover else -score


def terminal_score(game: Game, player: int, depth: int = 0) -> int:
    """
    Exact value of a finished game.

    Args:
        game: Finished game
        player: Perspective
        depth: Remaining search depth, so that earlier wins score higher

    Returns:
        WIN_SCORE + depth for a win, the negation for a loss, 0 for a draw
    """
    if not game.game_over:
        raise ValueError("Cannot score a game that is not over")

    winner = game.winner()
    if winner is None:
        return 0
    value = WIN_SCORE + depth
    return value if winner == player else -value
