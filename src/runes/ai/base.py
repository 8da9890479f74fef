"""
Strategy interface and difficulty levels shared by all AI players.
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import List

from ..core import Game, Move, SearchExhaustedError


class Level(IntEnum):
    """AI difficulty."""

    EASY = 1
    MEDIUM = 2
    HARD = 3
    VERY_HARD = 4

    @classmethod
    def parse(cls, text: str) -> "Level":
        """Parse 'easy', 'Medium', 'very_hard', 'very-hard' or 'veryhard'."""
        key = text.strip().upper().replace("-", "_")
        if key == "VERYHARD":
            key = "VERY_HARD"
        try:
            return cls[key]
        except KeyError:
            choices = ", ".join(level.name.lower() for level in cls)
            raise ValueError(f"Unknown level {text!r} (choose from {choices})") from None


# Search plies per level
NEGAMAX_DEPTHS = {
    Level.EASY: 1,
    Level.MEDIUM: 2,
    Level.HARD: 3,
    Level.VERY_HARD: 4,
}

# Seconds of tree search per move
MCTS_TIMEOUTS = {
    Level.EASY: 0.25,
    Level.MEDIUM: 0.5,
    Level.HARD: 1.0,
    Level.VERY_HARD: 2.0,
}

# Maximum plies per rollout
MCTS_ROLLOUT_DEPTHS = {
    Level.EASY: 8,
    Level.MEDIUM: 16,
    Level.HARD: 32,
    Level.VERY_HARD: 64,
}


class Strategy(ABC):
    """
    A way of choosing moves.

    Strategies are handed a private snapshot of the game and may mutate it.
    Apart from their configuration and random generator they keep no state
    between calls.
    """

    name = "strategy"

    @abstractmethod
    def select_move(self, game: Game) -> Move:
        """
        Choose a move for the player to move.

        Args:
            game: Snapshot of the current game (not over)

        Returns:
            A currently legal move

        Raises:
            SearchExhaustedError: If no candidate moves exist
        """

    def candidate_moves(self, game: Game) -> List[Move]:
        """Generated moves, failing loudly when there are none."""
        if game.game_over:
            raise SearchExhaustedError(f"No moves to search: {game.result()}")
        moves = game.generate_moves()
        if not moves:
            raise SearchExhaustedError(
                f"No candidate moves for player {game.next_player + 1} "
                f"(game over: {game.game_over})"
            )
        return moves

    def __str__(self) -> str:
        return self.name
