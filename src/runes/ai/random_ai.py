"""Uniform random baseline strategy."""

import logging
import random
from typing import Optional

from ..core import Game, Move
from .base import Strategy

logger = logging.getLogger(__name__)


class RandomStrategy(Strategy):
    """Pick uniformly among the generated moves."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random strategy.

        Args:
            seed: Seed for the per-instance random generator
        """
        self.rng = random.Random(seed)

    def select_move(self, game: Game) -> Move:
        moves = self.candidate_moves(game)
        move = self.rng.choice(moves)
        logger.debug(f"Random: picked {move} from {len(moves)} candidates")
        return move
