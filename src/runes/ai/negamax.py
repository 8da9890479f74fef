"""
Depth-limited negamax search with alpha-beta pruning.

Every position is scored from the point of view of the player to move: a
position's value is the negation of its best child's value. Finished games
are scored exactly, positions at the depth limit with the static evaluator.
"""

import logging
import time
from typing import Dict, List, Optional, Tuple

from ..core import (
    WIN_SCORE,
    Game,
    Move,
    SearchExhaustedError,
    evaluate,
    terminal_score,
    zobrist_hash,
)
from .base import NEGAMAX_DEPTHS, Level, Strategy

logger = logging.getLogger(__name__)

INFINITY = 2 * WIN_SCORE

# Transposition table entry flags
EXACT = 0
LOWER_BOUND = 1
UPPER_BOUND = 2


class NegamaxStrategy(Strategy):
    """
    Exhaustive adversarial search to a fixed depth.

    Ties at the root go to the first maximal move in generation order, so
    the same position always yields the same move.
    """

    name = "negamax"

    def __init__(
        self,
        level: Level = Level.MEDIUM,
        depth: Optional[int] = None,
        use_transposition: bool = True,
    ):
        """
        Initialize negamax strategy.

        Args:
            level: Difficulty, selects the default depth
            depth: Search plies (overrides level)
            use_transposition: Cache position values within one search
        """
        self.level = level
        self.depth = depth if depth is not None else NEGAMAX_DEPTHS[level]
        if self.depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {self.depth}")
        self.use_transposition = use_transposition
        self.nodes = 0
        self._table: Dict[Tuple[int, int], Tuple[int, int]] = {}

    def select_move(self, game: Game) -> Move:
        moves = self.candidate_moves(game)
        start = time.time()

        best_move, best_value = self.search(game, moves)

        elapsed = time.time() - start
        logger.debug(
            f"Negamax depth={self.depth}: {best_move} scored {best_value} "
            f"({self.nodes:,} nodes, {len(self._table):,} cached, {elapsed:.2f}s)"
        )
        return best_move

    def search(self, game: Game, moves: Optional[List[Move]] = None) -> Tuple[Move, int]:
        """
        Search all root moves.

        Args:
            game: Position to search (not modified)
            moves: Root moves (default: generated from game)

        Returns:
            (best_move, value) from the perspective of the player to move
        """
        if moves is None:
            moves = self.candidate_moves(game)

        self._table = {}
        self.nodes = 0

        alpha = -INFINITY
        best_value = -INFINITY
        best_move = None

        for move in moves:
            child = game.clone()
            child.apply_move(move)
            value = -self._negamax(child, self.depth - 1, -INFINITY, -alpha)

            # Strict comparison keeps the first maximal move
            if value > best_value:
                best_value = value
                best_move = move
            alpha = max(alpha, value)

        return best_move, best_value

    def _negamax(self, game: Game, depth: int, alpha: int, beta: int) -> int:
        self.nodes += 1

        if game.game_over:
            return terminal_score(game, game.next_player, depth)
        if depth == 0:
            return evaluate(game)

        original_alpha = alpha
        key = None
        if self.use_transposition:
            key = (zobrist_hash(game), depth)
            entry = self._table.get(key)
            if entry is not None:
                value, flag = entry
                if flag == EXACT:
                    return value
                if flag == LOWER_BOUND:
                    alpha = max(alpha, value)
                else:
                    beta = min(beta, value)
                if alpha >= beta:
                    return value

        moves = game.generate_moves()
        if not moves:
            raise SearchExhaustedError(f"No moves in unfinished position:\n{game}")

        best_value = -INFINITY
        for move in moves:
            child = game.clone()
            child.apply_move(move)
            value = -self._negamax(child, depth - 1, -beta, -alpha)

            if value > best_value:
                best_value = value
            alpha = max(alpha, value)
            if alpha >= beta:
                break  # Opponent will avoid this line

        if key is not None:
            if best_value <= original_alpha:
                flag = UPPER_BOUND
            elif best_value >= beta:
                flag = LOWER_BOUND
            else:
                flag = EXACT
            self._table[key] = (best_value, flag)

        return best_value
