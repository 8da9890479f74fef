"""Move-choosing strategies for AI players."""

from .base import Level, Strategy
from .factory import STRATEGY_KINDS, create_strategy
from .mcts import MonteCarloStrategy, merge_statistics
from .negamax import NegamaxStrategy
from .random_ai import RandomStrategy

__all__ = [
    "Level",
    "Strategy",
    "STRATEGY_KINDS",
    "create_strategy",
    "MonteCarloStrategy",
    "merge_statistics",
    "NegamaxStrategy",
    "RandomStrategy",
]
