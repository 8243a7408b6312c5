"""Fluent construction of custom boards."""

from __future__ import annotations

from chessmate.core.board import Board
from chessmate.core.castling import CastlingRights
from chessmate.core.enums import Color
from chessmate.core.piece import Piece
from chessmate.core.position import Position

_NO_CASTLING = CastlingRights(kingside=False, queenside=False)


class BoardBuilder:
    """Mutable scratch pad that produces an immutable :class:`Board`.

    A fresh builder is empty, has White to move and grants no castling
    rights.  Every setter returns the builder so calls can be chained::

        board = (
            BoardBuilder()
            .piece(Piece.king(Color.WHITE, E1))
            .piece(Piece.king(Color.BLACK, E8))
            .row(Piece.pawn(Color.WHITE, A2))
            .build()
        )
    """

    __slots__ = ("_squares", "_turn", "_en_passant", "_white_rights", "_black_rights")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self._turn = Color.WHITE
        self._en_passant: Position | None = None
        self._white_rights = _NO_CASTLING
        self._black_rights = _NO_CASTLING

    @classmethod
    def from_board(cls, board: Board) -> BoardBuilder:
        """Start from *board*'s pieces, turn, en passant square and rights."""
        builder = cls()
        for piece in board:
            builder.piece(piece)
        builder._turn = board.get_turn()
        builder._en_passant = board.get_en_passant()
        builder._white_rights = board.get_castling_rights(Color.WHITE)
        builder._black_rights = board.get_castling_rights(Color.BLACK)
        return builder

    # -- Pieces -------------------------------------------------------------

    def piece(self, piece: Piece) -> BoardBuilder:
        """Place *piece* on its own square, replacing whatever was there."""
        if piece.position.is_off_board():
            raise ValueError(f"Cannot place a piece off the board: {piece.position!r}")
        self._squares[piece.position.index] = piece
        return self

    def row(self, piece: Piece) -> BoardBuilder:
        """Fill *piece*'s whole rank with copies of it."""
        for col in range(8):
            self.piece(piece.move_to(Position(piece.position.row, col)))
        return self

    def column(self, piece: Piece) -> BoardBuilder:
        """Fill *piece*'s whole file with copies of it."""
        for row in range(8):
            self.piece(piece.move_to(Position(row, piece.position.col)))
        return self

    # -- Castling -----------------------------------------------------------

    def enable_castling(self) -> BoardBuilder:
        self._white_rights = self._white_rights.enable_all()
        self._black_rights = self._black_rights.enable_all()
        return self

    def disable_castling(self) -> BoardBuilder:
        self._white_rights = self._white_rights.disable_all()
        self._black_rights = self._black_rights.disable_all()
        return self

    def enable_kingside_castle(self, color: Color) -> BoardBuilder:
        return self._set_rights(color, self._rights(color).enable_kingside())

    def disable_kingside_castle(self, color: Color) -> BoardBuilder:
        return self._set_rights(color, self._rights(color).disable_kingside())

    def enable_queenside_castle(self, color: Color) -> BoardBuilder:
        return self._set_rights(color, self._rights(color).enable_queenside())

    def disable_queenside_castle(self, color: Color) -> BoardBuilder:
        return self._set_rights(color, self._rights(color).disable_queenside())

    def _rights(self, color: Color) -> CastlingRights:
        return self._white_rights if color == Color.WHITE else self._black_rights

    def _set_rights(self, color: Color, rights: CastlingRights) -> BoardBuilder:
        if color == Color.WHITE:
            self._white_rights = rights
        else:
            self._black_rights = rights
        return self

    # -- Result -------------------------------------------------------------

    def player_moving(self, color: Color) -> BoardBuilder:
        self._turn = color
        return self

    def build(self) -> Board:
        return Board(
            squares=self._squares,
            turn=self._turn,
            en_passant=self._en_passant,
            white_castling_rights=self._white_rights,
            black_castling_rights=self._black_rights,
        )
