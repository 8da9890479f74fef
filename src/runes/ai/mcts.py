"""
Monte Carlo tree search with random rollouts.

Each search grows a UCT tree from the current position until its time
budget runs out. Rollouts play random generated moves up to a depth cap;
capped rollouts are judged by the static evaluator.

With several workers the search is root-parallel: every worker process
searches its own clone of the game with its own seed, and the per-move
statistics are summed afterwards.
"""

import logging
import math
import random
import time
from multiprocessing import Pool
from typing import Dict, Iterable, List, Optional, Tuple

from ..core import Game, Move, SearchExhaustedError, evaluate
from .base import MCTS_ROLLOUT_DEPTHS, MCTS_TIMEOUTS, Level, Strategy

logger = logging.getLogger(__name__)

# move -> (visits, wins) at the root
Statistics = Dict[Move, Tuple[int, float]]

DRAW_REWARD = (0.5, 0.5)


class _Node:
    """Search tree node. Wins are counted for the player who moved into it."""

    __slots__ = ("game", "parent", "move", "mover", "children", "untried", "visits", "wins")

    def __init__(self, game: Game, parent: Optional["_Node"] = None, move: Optional[Move] = None):
        self.game = game
        self.parent = parent
        self.move = move
        self.mover = 1 - game.next_player
        self.children: List["_Node"] = []
        self.untried = [] if game.game_over else game.generate_moves()
        self.visits = 0
        self.wins = 0.0

    def uct_child(self, exploration: float) -> "_Node":
        log_visits = math.log(self.visits)
        return max(
            self.children,
            key=lambda c: c.wins / c.visits + exploration * math.sqrt(log_visits / c.visits),
        )


def rollout(game: Game, max_depth: int, rng: random.Random) -> Tuple[float, float]:
    """
    Play random moves from a position.

    Args:
        game: Start position (not modified)
        max_depth: Maximum plies to play
        rng: Random generator

    Returns:
        (player 1 reward, player 2 reward), each 1, 0.5 or 0
    """
    sim = game.clone()
    steps = 0
    while not sim.game_over and steps < max_depth:
        sim.apply_move(rng.choice(sim.generate_moves()))
        steps += 1

    if sim.game_over:
        winner = sim.winner()
    else:
        score = evaluate(sim, player=0)
        winner = None if score == 0 else (0 if score > 0 else 1)

    if winner is None:
        return DRAW_REWARD
    return (1.0, 0.0) if winner == 0 else (0.0, 1.0)


def run_tree_search(
    game: Game,
    timeout: float,
    rollout_depth: int,
    exploration: float = 1.4,
    seed: Optional[int] = None,
) -> Statistics:
    """
    Grow one UCT tree from game.

    Every root move gets at least one visit, even past the deadline.

    Args:
        game: Root position (not modified)
        timeout: Seconds to search
        rollout_depth: Maximum plies per rollout
        exploration: UCT exploration constant
        seed: Random seed

    Returns:
        Visit and win statistics for each root move
    """
    rng = random.Random(seed)
    root = _Node(game.clone())
    deadline = time.monotonic() + timeout
    iterations = 0

    while root.untried or time.monotonic() < deadline:
        node = root

        # Selection
        while not node.untried and node.children:
            node = node.uct_child(exploration)

        # Expansion
        if node.untried:
            move = node.untried.pop(rng.randrange(len(node.untried)))
            child_game = node.game.clone()
            child_game.apply_move(move)
            child = _Node(child_game, parent=node, move=move)
            node.children.append(child)
            node = child

        rewards = rollout(node.game, rollout_depth, rng)

        # Backpropagation
        while node is not None:
            node.visits += 1
            node.wins += rewards[node.mover]
            node = node.parent

        iterations += 1
        if not root.children:
            break  # Nothing to search from a finished position

    logger.debug(f"Tree search: {iterations:,} iterations, {len(root.children)} root moves")
    return {child.move: (child.visits, child.wins) for child in root.children}


def _search_worker(task: Tuple[Game, float, int, float, int]) -> Statistics:
    """Worker process entry point (top-level for pickling)."""
    game, timeout, rollout_depth, exploration, seed = task
    return run_tree_search(game, timeout, rollout_depth, exploration, seed)


def merge_statistics(results: Iterable[Statistics]) -> Statistics:
    """Sum per-move visits and wins across independent searches."""
    merged: Statistics = {}
    for stats in results:
        for move, (visits, wins) in stats.items():
            total_visits, total_wins = merged.get(move, (0, 0.0))
            merged[move] = (total_visits + visits, total_wins + wins)
    return merged


def choose_move(stats: Statistics, moves: List[Move]) -> Optional[Move]:
    """
    Pick the move with the best win rate.

    Moves with fewer than a tenth of the top visit count are ignored, since
    their win rates are mostly noise. Ties go to more visits, then to the
    earlier move.

    Args:
        stats: Root statistics
        moves: Candidate moves in generation order

    Returns:
        Chosen move, or None if no move was visited
    """
    visited = [stats[m][0] for m in moves if m in stats and stats[m][0] > 0]
    if not visited:
        return None
    threshold = max(1, max(visited) // 10)

    best_move = None
    best_key = None
    for move in moves:
        visits, wins = stats.get(move, (0, 0.0))
        if visits < threshold:
            continue
        key = (wins / visits, visits)
        if best_key is None or key > best_key:
            best_move = move
            best_key = key
    return best_move


class MonteCarloStrategy(Strategy):
    """Rollout-based tree search bounded by time and rollout depth."""

    name = "mcts"

    def __init__(
        self,
        level: Level = Level.MEDIUM,
        num_workers: int = 1,
        timeout: Optional[float] = None,
        rollout_depth: Optional[int] = None,
        exploration: float = 1.4,
        seed: Optional[int] = None,
    ):
        """
        Initialize Monte Carlo strategy.

        Args:
            level: Difficulty, selects the default budgets
            num_workers: Worker processes (1 searches in-process)
            timeout: Seconds per move (overrides level)
            rollout_depth: Plies per rollout (overrides level)
            exploration: UCT exploration constant
            seed: Seed for the per-instance random generator
        """
        if num_workers < 1:
            raise ValueError(f"Need at least one worker, got {num_workers}")
        self.level = level
        self.num_workers = num_workers
        self.timeout = timeout if timeout is not None else MCTS_TIMEOUTS[level]
        self.rollout_depth = (
            rollout_depth if rollout_depth is not None else MCTS_ROLLOUT_DEPTHS[level]
        )
        self.exploration = exploration
        self.rng = random.Random(seed)

    def select_move(self, game: Game) -> Move:
        moves = self.candidate_moves(game)
        if len(moves) == 1:
            return moves[0]

        start = time.time()
        stats = self.search(game)
        move = choose_move(stats, moves)
        if move is None:
            raise SearchExhaustedError(f"Tree search visited none of {len(moves)} moves")

        visits, wins = stats[move]
        total = sum(v for v, _ in stats.values())
        logger.debug(
            f"MCTS ({self.num_workers} workers): {move} won {wins / visits:.1%} of "
            f"{visits:,} visits ({total:,} total, {time.time() - start:.2f}s)"
        )
        return move

    def search(self, game: Game) -> Statistics:
        """Run the configured searches and merge their statistics."""
        seeds = [self.rng.getrandbits(32) for _ in range(self.num_workers)]

        if self.num_workers == 1:
            return run_tree_search(
                game, self.timeout, self.rollout_depth, self.exploration, seeds[0]
            )

        tasks = [
            (game.clone(), self.timeout, self.rollout_depth, self.exploration, seed)
            for seed in seeds
        ]
        with Pool(processes=self.num_workers) as pool:
            results = pool.map(_search_worker, tasks)

        return merge_statistics(results)
