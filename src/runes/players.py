"""
Players: the seat-side interface used by the match loop.

A player is told its claim symbol once at the start of a match and is then
asked for a move on a private snapshot of the game whenever it is its turn.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

from .ai import Strategy
from .core import Field, Game, Move, Position

logger = logging.getLogger(__name__)

# (player, game snapshot) -> 1-based (row, col)
CoordinateReader = Callable[["HumanPlayer", Game], Tuple[int, int]]


class Player(ABC):
    """Abstract player."""

    def __init__(self):
        self.symbol = Field.EMPTY

    def set_symbol(self, symbol: Field) -> None:
        """Assign this player's claim symbol."""
        self.symbol = symbol

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name."""

    @abstractmethod
    def make_move(self, game: Game) -> Move:
        """
        Choose a move.

        Args:
            game: Private snapshot of the game, free to mutate

        Returns:
            A currently legal move
        """

    def __str__(self) -> str:
        return self.name


class AiPlayer(Player):
    """Player backed by a search strategy."""

    def __init__(self, strategy: Strategy, name: Optional[str] = None):
        super().__init__()
        self.strategy = strategy
        self._name = name or f"AI ({strategy.name})"

    @property
    def name(self) -> str:
        return self._name

    def make_move(self, game: Game) -> Move:
        start = time.time()
        move = self.strategy.select_move(game)
        logger.debug(f"{self.name} chose {move} in {time.time() - start:.2f}s")
        return move


class HumanPlayer(Player):
    """
    Player backed by externally supplied coordinates.

    The reader blocks until the user enters a cell and returns it 1-based.
    The symbol is resolved automatically to the best legal one; invalid
    cells are rejected and the reader is asked again. A reader may raise
    ValueError for unparseable input to get the same treatment.
    """

    def __init__(self, name: str, read_coordinates: CoordinateReader):
        super().__init__()
        self._name = name
        self.read_coordinates = read_coordinates

    @property
    def name(self) -> str:
        return self._name

    def make_move(self, game: Game) -> Move:
        while True:
            try:
                row, col = self.read_coordinates(self, game)
            except ValueError as e:
                logger.warning(f"{self.name}: {e}")
                continue

            pos = Position(row - 1, col - 1)
            if not game.board.in_bounds(pos):
                logger.warning(
                    f"{self.name}: ({row}, {col}) is off the board "
                    f"(rows and columns run 1-{game.size})"
                )
                continue

            move = Move(pos, game.best_symbol_at(pos))
            if game.is_valid_move(move):
                return move
            logger.warning(f"{self.name}: cannot play at ({row}, {col})")
