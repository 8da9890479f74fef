"""Core board representation, rules and evaluation."""

from .board import Board, Field, FieldCounts, Position
from .errors import InvalidMoveError, SearchExhaustedError
from .game import (
    DEFAULT_BOARD_SIZE,
    PLAYER_SYMBOLS,
    Game,
    Move,
    create_starting_game,
    formation_owner,
    symbols_for,
)
from .evaluation import WIN_SCORE, count_formations, evaluate, terminal_score
from .hash import zobrist_hash, init_zobrist_table

__all__ = [
    "Board",
    "Field",
    "FieldCounts",
    "Position",
    "InvalidMoveError",
    "SearchExhaustedError",
    "DEFAULT_BOARD_SIZE",
    "PLAYER_SYMBOLS",
    "Game",
    "Move",
    "create_starting_game",
    "formation_owner",
    "symbols_for",
    "WIN_SCORE",
    "count_formations",
    "evaluate",
    "terminal_score",
    "zobrist_hash",
    "init_zobrist_table",
]
