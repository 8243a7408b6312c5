"""High-level chess rules: check, checkmate, stalemate, material draws."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.enums import Color, PieceType

if TYPE_CHECKING:
    from chessmate.core.board import Board

_K = PieceType.KING
_N = PieceType.KNIGHT
_B = PieceType.BISHOP

# Sorted piece sets that can never force mate on their own.
_INSUFFICIENT_SETS: frozenset[tuple[PieceType, ...]] = frozenset(
    tuple(sorted(pieces))
    for pieces in (
        (),
        (_K,),
        (_K, _N),
        (_K, _B),
        (_K, _N, _N),
        (_K, _B, _B),
    )
)


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        """Whether *color*'s king is attacked; ``False`` without a king."""
        king_pos = board.get_king_pos(color)
        if king_pos is None:
            return False
        return board.is_threatened(king_pos, color)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        turn = board.get_turn()
        if not Rules.is_in_check(board, turn):
            return False
        return len(board.get_legal_moves(turn)) == 0

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        """No legal move without check, or neither side can ever mate."""
        if not Rules.has_sufficient_material(
            board, Color.WHITE
        ) and not Rules.has_sufficient_material(board, Color.BLACK):
            return True
        turn = board.get_turn()
        if Rules.is_in_check(board, turn):
            return False
        return len(board.get_legal_moves(turn)) == 0

    @staticmethod
    def has_sufficient_material(board: Board, color: Color) -> bool:
        """K, K+N, K+B, K+N+N and K+B+B (or nothing) are insufficient."""
        pieces = tuple(sorted(p.piece_type for p in board.get_player_pieces(color)))
        return pieces not in _INSUFFICIENT_SETS
