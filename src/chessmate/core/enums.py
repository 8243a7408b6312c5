"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Promotion(IntEnum):
    """Piece a pawn may turn into on the last rank."""

    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4

    @property
    def piece_type(self) -> PieceType:
        return _PROMOTION_TYPES[self]


_PROMOTION_TYPES: dict[Promotion, PieceType] = {
    Promotion.QUEEN: PieceType.QUEEN,
    Promotion.ROOK: PieceType.ROOK,
    Promotion.BISHOP: PieceType.BISHOP,
    Promotion.KNIGHT: PieceType.KNIGHT,
}


class MoveKind(IntEnum):
    """Move classification."""

    PIECE = 0
    KINGSIDE_CASTLE = 1
    QUEENSIDE_CASTLE = 2
    RESIGN = 3
