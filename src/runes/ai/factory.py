"""Build strategies by name."""

from typing import Union

from .base import Level, Strategy
from .mcts import MonteCarloStrategy
from .negamax import NegamaxStrategy
from .random_ai import RandomStrategy

STRATEGY_KINDS = ("random", "negamax", "mcts")


def create_strategy(kind: str, level: Union[Level, str] = Level.MEDIUM, **kwargs) -> Strategy:
    """
    Create a strategy.

    Args:
        kind: One of STRATEGY_KINDS
        level: Difficulty (ignored by the random strategy)
        **kwargs: Passed to the strategy constructor (e.g. seed, num_workers).
            Negamax is deterministic and ignores seed.

    Returns:
        Configured strategy
    """
    if isinstance(level, str):
        level = Level.parse(level)

    kind = kind.lower()
    if kind == "random":
        return RandomStrategy(seed=kwargs.get("seed"))
    if kind == "negamax":
        kwargs.pop("seed", None)
        return NegamaxStrategy(level=level, **kwargs)
    if kind == "mcts":
        return MonteCarloStrategy(level=level, **kwargs)

    raise ValueError(f"Unknown strategy {kind!r} (choose from {', '.join(STRATEGY_KINDS)})")
