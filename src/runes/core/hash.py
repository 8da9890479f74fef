"""
Zobrist hashing for transposition table lookups during search.

Zobrist hashing uses pre-generated random numbers to create unique hashes
for game positions: one number per (cell, field) pair, XORed together,
plus one per player to move.
"""

import random
from typing import Dict, Tuple

from .board import Field
from .game import Game


# Global Zobrist table, keyed by (board_size, cell_index, field)
_zobrist_table: Dict[Tuple[int, int, int], int] = {}
_zobrist_player: Tuple[int, int] = (0, 0)
_initialized_sizes = set()


def init_zobrist_table(size: int, seed: int = 42) -> None:
    """
    Initialize Zobrist hash numbers for one board size.

    Tables for several sizes can coexist. Re-initializing a size with the
    same seed reproduces the same numbers.

    Args:
        size: Board width and height
        seed: Random seed for reproducibility
    """
    global _zobrist_player

    rng = random.Random(seed * 1_000_003 + size)

    for index in range(size * size):
        for field in Field:
            if field == Field.EMPTY:
                continue  # Empty cells contribute nothing
            _zobrist_table[(size, index, field)] = rng.getrandbits(64)

    if _zobrist_player == (0, 0):
        player_rng = random.Random(seed)
        _zobrist_player = (player_rng.getrandbits(64), player_rng.getrandbits(64))

    _initialized_sizes.add(size)


def zobrist_hash(game: Game) -> int:
    """
    Compute Zobrist hash for a game.

    Covers the board contents and the player to move. The last move and
    game-over flag are not hashed, so only non-terminal positions should be
    cached under this key.

    Args:
        game: Game to hash

    Returns:
        64-bit hash value
    """
    size = game.size
    if size not in _initialized_sizes:
        # Auto-initialize if not done already
        init_zobrist_table(size)

    h = 0

    for index, field in enumerate(game.board.fields):
        if field != Field.EMPTY:
            h ^= _zobrist_table[(size, index, field)]

    h ^= _zobrist_player[game.next_player]

    return h
