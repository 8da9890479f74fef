"""
Match driving loop.

The match owns the authoritative game. Each turn the player to move gets a
clone, returns a move, and the move is validated and applied to the real
game. Nothing a player does to its snapshot reaches the match.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .core import (
    DEFAULT_BOARD_SIZE,
    PLAYER_SYMBOLS,
    Game,
    InvalidMoveError,
    Move,
    create_starting_game,
)
from .players import Player

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Outcome of a finished match."""

    winner: Optional[int]  # Player number, None for a draw
    turns: int
    moves: List[Move] = field(default_factory=list)

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class Match:
    """Two players and the game they play."""

    def __init__(
        self,
        players: Sequence[Player],
        size: int = DEFAULT_BOARD_SIZE,
        max_invalid_moves: int = 3,
    ):
        """
        Initialize match.

        Args:
            players: Exactly two players; the first moves first
            size: Board width and height
            max_invalid_moves: Consecutive rejected moves before giving up
        """
        if len(players) != 2:
            raise ValueError(f"A match needs 2 players, got {len(players)}")

        self.players = list(players)
        for player, symbol in zip(self.players, PLAYER_SYMBOLS):
            player.set_symbol(symbol)

        self.game = create_starting_game(size)
        self.max_invalid_moves = max_invalid_moves
        self.moves: List[Move] = []
        self._invalid_streak = 0

    @property
    def current_player(self) -> Player:
        return self.players[self.game.next_player]

    def reset(self) -> None:
        """Start over on the same board size."""
        self.game.reset()
        self.moves = []
        self._invalid_streak = 0

    def play_turn(self) -> Optional[Move]:
        """
        Ask the player to move for one move and apply it.

        Returns:
            The applied move, or None if it was rejected

        Raises:
            InvalidMoveError: After max_invalid_moves rejections in a row
        """
        player = self.current_player
        move = player.make_move(self.game.clone())

        try:
            self.game.apply_move(move)
        except InvalidMoveError as e:
            self._invalid_streak += 1
            logger.warning(f"{player.name}: {e} (attempt {self._invalid_streak})")
            if self._invalid_streak >= self.max_invalid_moves:
                raise
            return None

        self._invalid_streak = 0
        self.moves.append(move)
        logger.debug(f"Turn {len(self.moves)}: {player.name} played {move}")
        return move

    def play(self, on_move: Optional[Callable[[Game, Move], None]] = None) -> MatchResult:
        """
        Play until the game is over.

        Args:
            on_move: Called with the game and move after every applied move

        Returns:
            Match result
        """
        while not self.game.game_over:
            move = self.play_turn()
            if move is not None and on_move is not None:
                on_move(self.game, move)

        result = MatchResult(winner=self.game.winner(), turns=len(self.moves), moves=list(self.moves))
        logger.info(f"{self.game.result()} after {result.turns} moves")
        return result


class PendingMove:
    """
    Single-slot background move computation.

    Interactive front-ends start the computation and poll once per frame;
    the finished move is handed out exactly once. At most one computation
    may be pending at a time.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._move: Optional[Move] = None
        self._error: Optional[BaseException] = None

    @property
    def busy(self) -> bool:
        """True from start() until the result has been collected."""
        with self._lock:
            return self._thread is not None

    def start(self, player: Player, game: Game) -> None:
        """
        Compute player's move on a clone of game in a background thread.

        Raises:
            RuntimeError: If a computation is already pending
        """
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("A move computation is already pending")
            snapshot = game.clone()
            self._thread = threading.Thread(
                target=self._compute, args=(player, snapshot), daemon=True
            )
            self._thread.start()

    def _compute(self, player: Player, snapshot: Game) -> None:
        try:
            move = player.make_move(snapshot)
        except Exception as e:
            logger.error(f"Move computation for {player.name} failed: {e}")
            with self._lock:
                self._error = e
            return
        with self._lock:
            self._move = move

    def poll(self) -> Optional[Move]:
        """
        Collect the finished move.

        Returns:
            The move the first time it is available, otherwise None

        Raises:
            Exception: Whatever the player raised while computing
        """
        with self._lock:
            if self._error is not None:
                error = self._error
                self._error = None
                self._thread = None
                raise error
            move = self._move
            if move is not None:
                self._move = None
                self._thread = None
            return move

    def wait(self, timeout: Optional[float] = None) -> Optional[Move]:
        """Block until the computation finishes, then poll()."""
        with self._lock:
            thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return self.poll()
