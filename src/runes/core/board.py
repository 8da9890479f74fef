"""
Board representation for the runes game.

A board is a square grid of fields stored row-major in a flat list:

    (0,0) (0,1) ... (0,size-1)
    (1,0) (1,1) ... (1,size-1)
    ...

Neighbourhood queries look at the (up to) eight cells surrounding a
position, clipped at the grid edges.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, NamedTuple


class Field(IntEnum):
    """
    Cell value.

    The ordering is significant: the "best" legal symbol at a cell is the
    highest ranked one.
    """

    EMPTY = 0
    BIRTH = 1
    GIFT = 2
    WEALTH = 3  # Player 1's claim symbol
    KNOWLEDGE = 4  # Player 2's claim symbol
    JOY = 5

    @property
    def glyph(self) -> str:
        """Single character used when rendering the board."""
        return _GLYPHS[self]


_GLYPHS = {
    Field.EMPTY: " ",
    Field.BIRTH: "ᛒ",
    Field.GIFT: "X",
    Field.WEALTH: "ᚠ",
    Field.KNOWLEDGE: "<",
    Field.JOY: "ᚹ",
}


@dataclass(frozen=True)
class Position:
    """Zero-based (row, col) coordinates on the board."""

    row: int
    col: int

    def near(self, other: "Position") -> bool:
        """True if other is this position or one of its eight neighbours."""
        return abs(self.row - other.row) <= 1 and abs(self.col - other.col) <= 1

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


class FieldCounts(NamedTuple):
    """Neighbourhood tally. Joy is never counted."""

    empty: int
    birth: int
    gift: int
    wealth: int
    knowledge: int


class Board:
    """
    Mutable size x size grid of fields.

    All cells start EMPTY. Out-of-bounds access raises IndexError: callers
    are expected to check in_bounds() first where positions come from
    outside the engine.
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Invalid board size {size}, must be at least 1")
        self._size = size
        self.fields: List[Field] = [Field.EMPTY] * (size * size)

    @property
    def size(self) -> int:
        return self._size

    def _index(self, pos: Position) -> int:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} outside {self._size}x{self._size} board")
        return pos.row * self._size + pos.col

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self._size and 0 <= pos.col < self._size

    def field_at(self, pos: Position) -> Field:
        return self.fields[self._index(pos)]

    def change(self, pos: Position, field: Field) -> None:
        """Set a cell in place."""
        self.fields[self._index(pos)] = field

    def with_change(self, pos: Position, field: Field) -> "Board":
        """Return a copy of the board with one cell changed."""
        new = self.copy()
        new.change(pos, field)
        return new

    def copy(self) -> "Board":
        new = Board.__new__(Board)
        new._size = self._size
        new.fields = list(self.fields)
        return new

    def reset(self) -> None:
        self.fields = [Field.EMPTY] * (self._size * self._size)

    def is_empty(self, pos: Position) -> bool:
        return self.field_at(pos) == Field.EMPTY

    def is_full(self) -> bool:
        return Field.EMPTY not in self.fields

    def positions(self) -> Iterator[Position]:
        """Iterate all positions in row-major order."""
        for row in range(self._size):
            for col in range(self._size):
                yield Position(row, col)

    def empty_positions(self) -> List[Position]:
        size = self._size
        return [
            Position(i // size, i % size)
            for i, field in enumerate(self.fields)
            if field == Field.EMPTY
        ]

    def fields_around(self, pos: Position) -> List[Field]:
        """
        Get the fields surrounding a position.

        The position itself is excluded. Neighbours outside the grid are
        skipped, so edge cells have 5 neighbours and corners 3.

        Args:
            pos: Centre position (must be on the board)

        Returns:
            Neighbouring fields in row-major order
        """
        self._index(pos)  # bounds check
        size = self._size
        around = []
        for row in range(max(pos.row - 1, 0), min(pos.row + 2, size)):
            for col in range(max(pos.col - 1, 0), min(pos.col + 2, size)):
                if row == pos.row and col == pos.col:
                    continue
                around.append(self.fields[row * size + col])
        return around

    def count_around(self, pos: Position) -> FieldCounts:
        """Tally the neighbourhood of pos by field kind."""
        counts = [0, 0, 0, 0, 0, 0]
        for field in self.fields_around(pos):
            counts[field] += 1
        # Drop the Joy slot
        return FieldCounts(*counts[:5])

    def __str__(self) -> str:
        """Human-readable grid, one bracketed row per line."""
        size = self._size
        rows = []
        for row in range(size):
            cells = self.fields[row * size : (row + 1) * size]
            rows.append("[" + ", ".join(f.glyph for f in cells) + "]")
        return "\n".join(rows)
