"""
Runes game rules implementation.

Rules for an empty cell, judged on its eight neighbours:
- Birth may be placed where no symbol is around, Gift anywhere else
- A player's claim symbol may be placed next to both a Birth and a Gift
- Joy may be placed on a formation (exactly one Birth, one Gift and five
  empty cells) whose remaining neighbour is the mover's own claim symbol
- Placing Joy ends the game; so does filling the board (a draw)
"""

from dataclasses import dataclass
from typing import List, Optional, Set

from .board import Board, Field, FieldCounts, Position
from .errors import InvalidMoveError

# Claim symbol per player number
PLAYER_SYMBOLS = (Field.WEALTH, Field.KNOWLEDGE)

DEFAULT_BOARD_SIZE = 9


@dataclass(frozen=True)
class Move:
    """Place symbol at position."""

    position: Position
    symbol: Field

    def __str__(self) -> str:
        return f"{self.symbol.name} at {self.position}"


def formation_owner(counts: FieldCounts) -> Optional[int]:
    """
    Get the player a neighbourhood is a winning formation for.

    A formation is exactly one Birth, one Gift and five empty cells. Its
    owner is the player whose claim symbol fills the remaining slot.

    Args:
        counts: Neighbourhood tally of an empty cell

    Returns:
        Player number, or None if the neighbourhood is not a formation
    """
    if counts.birth != 1 or counts.gift != 1 or counts.empty != 5:
        return None
    if counts.wealth == 1:
        return 0
    if counts.knowledge == 1:
        return 1
    return None


def symbols_for(counts: FieldCounts, player: int) -> Set[Field]:
    """Legal symbols for an empty cell with the given neighbourhood."""
    valid = set()
    if counts.birth + counts.gift + counts.wealth + counts.knowledge == 0:
        valid.add(Field.BIRTH)
    else:
        valid.add(Field.GIFT)
    if counts.birth > 0 and counts.gift > 0:
        valid.add(PLAYER_SYMBOLS[player])
    if formation_owner(counts) == player:
        valid.add(Field.JOY)
    return valid


class Game:
    """
    Complete searchable game state.

    Holds the board, the player to move (0 or 1), whether the game is over
    and the last applied move (the winner depends on what surrounds the last
    placed symbol). Strategies receive clones and may mutate them freely.
    """

    def __init__(
        self,
        board: Board,
        next_player: int = 0,
        game_over: bool = False,
        last_move: Optional[Move] = None,
    ):
        if next_player not in (0, 1):
            raise ValueError(f"Invalid player {next_player}, must be 0 or 1")
        self.board = board
        self.next_player = next_player
        self.game_over = game_over
        self.last_move = last_move

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def player_symbol(self) -> Field:
        """Claim symbol of the player to move."""
        return PLAYER_SYMBOLS[self.next_player]

    def clone(self) -> "Game":
        """Independent copy sharing no mutable state with this game."""
        return Game(
            board=self.board.copy(),
            next_player=self.next_player,
            game_over=self.game_over,
            last_move=self.last_move,
        )

    def reset(self) -> None:
        """Restore the starting position in place."""
        self.board.reset()
        _seed_centre(self.board)
        self.next_player = 0
        self.game_over = self.board.is_full()
        self.last_move = None

    def valid_symbols_at(self, pos: Position) -> Set[Field]:
        """
        Get the symbols the player to move may place at a position.

        Args:
            pos: Target position

        Returns:
            Set of legal fields (empty if the cell is occupied)
        """
        if not self.board.is_empty(pos):
            return set()
        return symbols_for(self.board.count_around(pos), self.next_player)

    def best_symbol_at(self, pos: Position) -> Field:
        """Highest ranked legal symbol at pos, EMPTY if there is none."""
        return max(self.valid_symbols_at(pos), default=Field.EMPTY)

    def formation_owner(self, pos: Position) -> Optional[int]:
        """Player who could win by placing Joy at pos, if any."""
        if not self.board.is_empty(pos):
            return None
        return formation_owner(self.board.count_around(pos))

    def is_valid_move(self, move: Move) -> bool:
        pos = move.position
        return (
            self.board.in_bounds(pos)
            and self.board.is_empty(pos)
            and move.symbol in self.valid_symbols_at(pos)
        )

    def apply_move(self, move: Move) -> Field:
        """
        Apply a move to this game.

        Args:
            move: Move to apply

        Returns:
            The placed symbol

        Raises:
            InvalidMoveError: If the game is over or the move is not legal.
                The game is not modified.
        """
        if self.game_over:
            raise InvalidMoveError(f"Invalid move {move}: game is over", move)
        if not self.is_valid_move(move):
            raise InvalidMoveError(f"Invalid move {move}", move)

        self.board.change(move.position, move.symbol)
        self.last_move = move
        if move.symbol == Field.JOY or self.board.is_full():
            self.game_over = True
        self.next_player = 1 - self.next_player
        return move.symbol

    def winner(self) -> Optional[int]:
        """
        Get the winning player.

        Returns:
            Player number, or None while the game is running or after a draw
        """
        if not self.game_over or self.last_move is None:
            return None
        if self.last_move.symbol != Field.JOY:
            # Board filled up without Joy
            return None
        around = self.board.fields_around(self.last_move.position)
        return 0 if Field.WEALTH in around else 1

    def result(self) -> Optional[str]:
        """Human-readable result, or None while the game is running."""
        if not self.game_over:
            return None
        winner = self.winner()
        if winner is None:
            return "Draw"
        return f"Player {winner + 1} wins"

    def generate_moves(self) -> List[Move]:
        """
        Generate candidate moves for the player to move.

        One move per empty cell using the best legal symbol, then pruned:
        1. If the mover can place Joy anywhere, only those moves
        2. Else if the opponent threatens Joy, only moves near a threat
        3. Else every move

        Returns:
            Moves in row-major order
        """
        me = self.next_player
        moves = []
        winning = []
        threats = []

        for pos in self.board.empty_positions():
            counts = self.board.count_around(pos)
            move = Move(pos, max(symbols_for(counts, me)))
            moves.append(move)

            owner = formation_owner(counts)
            if owner == me:
                winning.append(move)
            elif owner is not None:
                threats.append(pos)

        if winning:
            return winning
        if threats:
            return [m for m in moves if any(m.position.near(t) for t in threats)]
        return moves

    def __str__(self) -> str:
        if self.game_over:
            footer = self.result()
        else:
            footer = f"Player {self.next_player + 1}'s turn"
        return f"{self.board}\n\n{footer}\n"


def _seed_centre(board: Board) -> None:
    centre = board.size // 2
    board.change(Position(centre, centre), Field.BIRTH)


def create_starting_game(size: int = DEFAULT_BOARD_SIZE) -> Game:
    """
    Create the initial game.

    Args:
        size: Board width and height

    Returns:
        Game with a single Birth in the centre and player 1 to move
    """
    board = Board(size)
    _seed_centre(board)
    # A 1x1 board is full from the start
    return Game(board=board, game_over=board.is_full())
