"""Move value object and its text form."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from chessmate.core.enums import MoveKind
from chessmate.core.errors import InvalidMoveError, InvalidPositionError
from chessmate.core.position import Position

_KINGSIDE_TOKENS = frozenset({"o-o", "0-0"})
_QUEENSIDE_TOKENS = frozenset({"o-o-o", "0-0-0"})
# "e2e4", "e2 e4" and "e2 to e4"
_COORDINATE_RE = re.compile(r"^([a-z][0-9])\s*(?:to\s+)?([a-z][0-9])$")


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    Castling and resignation carry no squares; the board applies them for
    the side to move.
    """

    kind: MoveKind
    from_pos: Position | None = None
    to_pos: Position | None = None

    KINGSIDE_CASTLE: ClassVar[Move]
    QUEENSIDE_CASTLE: ClassVar[Move]
    RESIGN: ClassVar[Move]

    @classmethod
    def piece(cls, from_pos: Position, to_pos: Position) -> Move:
        """Move whatever stands on *from_pos* to *to_pos*."""
        return cls(MoveKind.PIECE, from_pos, to_pos)

    @property
    def is_piece_move(self) -> bool:
        return self.kind == MoveKind.PIECE

    # ── Text ─────────────────────────────────────────────────────────────

    @classmethod
    def from_str(cls, text: str) -> Move:
        """Parse ``resign``, ``O-O``, ``O-O-O`` or a coordinate pair.

        Coordinate pairs may be written ``e2e4``, ``e2 e4`` or ``e2 to e4``.
        Matching is case-insensitive.
        """
        token = " ".join(text.split()).lower()
        if not token:
            raise InvalidMoveError("Empty move")
        if token == "resign":
            return cls.RESIGN
        if token in _KINGSIDE_TOKENS:
            return cls.KINGSIDE_CASTLE
        if token in _QUEENSIDE_TOKENS:
            return cls.QUEENSIDE_CASTLE

        match = _COORDINATE_RE.match(token)
        if match is None:
            raise InvalidMoveError(f"Unrecognised move: {text!r}")
        try:
            from_pos = Position.from_str(match.group(1))
            to_pos = Position.from_str(match.group(2))
        except InvalidPositionError as exc:
            raise InvalidMoveError(f"Invalid move {text!r}: {exc}") from exc
        return cls.piece(from_pos, to_pos)

    def __str__(self) -> str:
        if self.kind == MoveKind.KINGSIDE_CASTLE:
            return "O-O"
        if self.kind == MoveKind.QUEENSIDE_CASTLE:
            return "O-O-O"
        if self.kind == MoveKind.RESIGN:
            return "Resign"
        return f"{self.from_pos} to {self.to_pos}"


Move.KINGSIDE_CASTLE = Move(MoveKind.KINGSIDE_CASTLE)
Move.QUEENSIDE_CASTLE = Move(MoveKind.QUEENSIDE_CASTLE)
Move.RESIGN = Move(MoveKind.RESIGN)
