"""Board coordinates and the geometry between them.

A :class:`Position` is a ``(row, col)`` pair where row 0 is rank 1 and
col 0 is the a-file::

    A1 = Position(0, 0)    H1 = Position(0, 7)
    A8 = Position(7, 0)    H8 = Position(7, 7)

Positions may lie off the board (e.g. ``Position(-1, 4)``); neighbour
helpers never clamp, so callers check :meth:`Position.is_on_board` before
looking anything up.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessmate.core.enums import Color
from chessmate.core.errors import InvalidPositionError

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate."""

    row: int
    col: int

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_str(cls, text: str) -> Position:
        """Parse a square name, e.g. ``"e4"`` or ``"E4"``."""
        if len(text) != 2:
            raise InvalidPositionError(f"Invalid position: {text!r}")
        file_char, rank_char = text[0].lower(), text[1]
        if file_char not in _FILES:
            raise InvalidPositionError(f"Invalid column: {text!r}")
        if rank_char not in _RANKS:
            raise InvalidPositionError(f"Invalid row: {text!r}")
        return cls(_RANKS.index(rank_char), _FILES.index(file_char))

    @classmethod
    def from_index(cls, index: int) -> Position:
        """Inverse of :attr:`index` (rank-8-first grid layout)."""
        return cls(7 - index // 8, index % 8)

    @classmethod
    def king_pos(cls, color: Color) -> Position:
        """Starting square of *color*'s king."""
        return cls(0, 4) if color == Color.WHITE else cls(7, 4)

    @classmethod
    def queen_pos(cls, color: Color) -> Position:
        """Starting square of *color*'s queen."""
        return cls(0, 3) if color == Color.WHITE else cls(7, 3)

    def __str__(self) -> str:
        file_char = _FILES[self.col] if 0 <= self.col < 8 else "?"
        return f"{file_char}{self.row + 1}"

    # ── Board membership ─────────────────────────────────────────────────

    @property
    def index(self) -> int:
        """Index into a 64-square grid stored rank 8 first."""
        return (7 - self.row) * 8 + self.col

    def is_on_board(self) -> bool:
        return not self.is_off_board()

    def is_off_board(self) -> bool:
        return self.row < 0 or self.row > 7 or self.col < 0 or self.col > 7

    # ── Relations ────────────────────────────────────────────────────────

    def is_diagonal_to(self, other: Position) -> bool:
        return abs(self.col - other.col) == abs(self.row - other.row)

    def is_orthogonal_to(self, other: Position) -> bool:
        return self.col == other.col or self.row == other.row

    def is_adjacent_to(self, other: Position) -> bool:
        """Distance one, orthogonally or diagonally."""
        if self.is_orthogonal_to(other):
            return self._orthogonal_distance(other) == 1
        if self.is_diagonal_to(other):
            return self._diagonal_distance(other) == 1
        return False

    def is_knight_move(self, other: Position) -> bool:
        drow = abs(self.row - other.row)
        dcol = abs(self.col - other.col)
        return (drow, dcol) in ((1, 2), (2, 1))

    def is_below(self, other: Position) -> bool:
        return self.row < other.row

    def is_above(self, other: Position) -> bool:
        return self.row > other.row

    def is_left_of(self, other: Position) -> bool:
        return self.col < other.col

    def is_right_of(self, other: Position) -> bool:
        return self.col > other.col

    def _diagonal_distance(self, other: Position) -> int:
        return abs(self.col - other.col)

    def _orthogonal_distance(self, other: Position) -> int:
        return abs(self.col - other.col) + abs(self.row - other.row)

    # ── Neighbours (unchecked) ───────────────────────────────────────────

    def next_left(self) -> Position:
        return Position(self.row, self.col - 1)

    def next_right(self) -> Position:
        return Position(self.row, self.col + 1)

    def next_above(self) -> Position:
        return Position(self.row + 1, self.col)

    def next_below(self) -> Position:
        return Position(self.row - 1, self.col)

    def pawn_up(self, color: Color) -> Position:
        """One step forward for a pawn of *color* (white moves up)."""
        return self.next_above() if color == Color.WHITE else self.next_below()

    def pawn_back(self, color: Color) -> Position:
        return self.pawn_up(color.opposite)

    # ── Special squares ──────────────────────────────────────────────────

    def is_starting_pawn(self, color: Color) -> bool:
        return self.row == (1 if color == Color.WHITE else 6)

    def is_promotion_rank(self, color: Color) -> bool:
        return self.row == (7 if color == Color.WHITE else 0)

    def is_kingside_rook(self, color: Color) -> bool:
        return self == (H1 if color == Color.WHITE else H8)

    def is_queenside_rook(self, color: Color) -> bool:
        return self == (A1 if color == Color.WHITE else A8)

    # ── Paths ────────────────────────────────────────────────────────────

    def diagonals_to(self, to: Position) -> list[Position]:
        """Squares from here (exclusive) to *to* (inclusive) along a diagonal.

        Empty when the two positions are not diagonal to each other.
        """
        if not self.is_diagonal_to(to):
            return []
        col_step = 1 if self.is_left_of(to) else -1
        row_step = 1 if self.is_below(to) else -1
        return [
            Position(self.row + row_step * i, self.col + col_step * i)
            for i in range(1, self._diagonal_distance(to) + 1)
        ]

    def orthogonals_to(self, to: Position) -> list[Position]:
        """Squares from here (exclusive) to *to* (inclusive) along a rank or file.

        Empty when the two positions share neither row nor column.
        """
        if not self.is_orthogonal_to(to):
            return []
        row_step = col_step = 0
        if self.is_left_of(to):
            col_step = 1
        elif self.is_right_of(to):
            col_step = -1
        elif self.is_above(to):
            row_step = -1
        elif self.is_below(to):
            row_step = 1
        return [
            Position(self.row + row_step * i, self.col + col_step * i)
            for i in range(1, self._orthogonal_distance(to) + 1)
        ]


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Position(0, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Position(1, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Position(2, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Position(3, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Position(4, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Position(5, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Position(6, c) for c in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Position(7, c) for c in range(8))
