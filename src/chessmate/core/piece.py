"""Piece value object and per-piece movement rules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessmate.core.enums import Color, PieceType
from chessmate.core.move import Move
from chessmate.core.position import Position
from chessmate.core.weights import position_weight

if TYPE_CHECKING:
    from chessmate.core.board import Board

# FEN character for (Color, PieceType)
_FEN_CHARS: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "P",
    (Color.WHITE, PieceType.KNIGHT): "N",
    (Color.WHITE, PieceType.BISHOP): "B",
    (Color.WHITE, PieceType.ROOK): "R",
    (Color.WHITE, PieceType.QUEEN): "Q",
    (Color.WHITE, PieceType.KING): "K",
    (Color.BLACK, PieceType.PAWN): "p",
    (Color.BLACK, PieceType.KNIGHT): "n",
    (Color.BLACK, PieceType.BISHOP): "b",
    (Color.BLACK, PieceType.ROOK): "r",
    (Color.BLACK, PieceType.QUEEN): "q",
    (Color.BLACK, PieceType.KING): "k",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

MATERIAL_VALUES: dict[PieceType, int] = {
    PieceType.KING: 99999,
    PieceType.QUEEN: 9,
    PieceType.ROOK: 5,
    PieceType.BISHOP: 3,
    PieceType.KNIGHT: 3,
    PieceType.PAWN: 1,
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece: what it is, whose it is and where it stands.

    Moving a piece means building a new one with :meth:`move_to`; the board
    keeps ``piece.position`` equal to the square that holds it.
    """

    piece_type: PieceType
    color: Color
    position: Position

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def king(cls, color: Color, position: Position) -> Piece:
        return cls(PieceType.KING, color, position)

    @classmethod
    def queen(cls, color: Color, position: Position) -> Piece:
        return cls(PieceType.QUEEN, color, position)

    @classmethod
    def rook(cls, color: Color, position: Position) -> Piece:
        return cls(PieceType.ROOK, color, position)

    @classmethod
    def bishop(cls, color: Color, position: Position) -> Piece:
        return cls(PieceType.BISHOP, color, position)

    @classmethod
    def knight(cls, color: Color, position: Position) -> Piece:
        return cls(PieceType.KNIGHT, color, position)

    @classmethod
    def pawn(cls, color: Color, position: Position) -> Piece:
        return cls(PieceType.PAWN, color, position)

    def move_to(self, position: Position) -> Piece:
        """Same piece on another square (no legality check)."""
        return Piece(self.piece_type, self.color, position)

    def with_color(self, color: Color) -> Piece:
        return Piece(self.piece_type, color, self.position)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @property
    def name(self) -> str:
        """Lowercase piece name, e.g. ``"knight"``."""
        return self.piece_type.name.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    # ── Type checks ──────────────────────────────────────────────────────

    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    def is_queen(self) -> bool:
        return self.piece_type == PieceType.QUEEN

    def is_rook(self) -> bool:
        return self.piece_type == PieceType.ROOK

    def is_bishop(self) -> bool:
        return self.piece_type == PieceType.BISHOP

    def is_knight(self) -> bool:
        return self.piece_type == PieceType.KNIGHT

    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    def is_starting_pawn(self) -> bool:
        """Pawn that has not left its starting rank."""
        return self.is_pawn() and self.position.is_starting_pawn(self.color)

    def is_promoting_pawn(self) -> bool:
        """Pawn standing on the far rank for its color."""
        return self.is_pawn() and self.position.is_promotion_rank(self.color)

    def is_kingside_rook(self) -> bool:
        """Rook on its kingside starting corner (not any rook)."""
        return self.is_rook() and self.position.is_kingside_rook(self.color)

    def is_queenside_rook(self) -> bool:
        """Rook on its queenside starting corner (not any rook)."""
        return self.is_rook() and self.position.is_queenside_rook(self.color)

    # ── Evaluation ───────────────────────────────────────────────────────

    def get_material_value(self) -> int:
        return MATERIAL_VALUES[self.piece_type]

    def get_weighted_value(self) -> float:
        """Ten times the material value plus the positional bonus."""
        return (
            position_weight(
                self.piece_type, self.color, self.position.row, self.position.col
            )
            + self.get_material_value() * 10
        )

    # ── Movement ─────────────────────────────────────────────────────────

    def get_legal_moves(self, board: Board) -> list[Move]:
        """Candidate moves for this piece that *board* accepts as legal."""
        color = self.color
        legal: list[Move] = []
        for move in self._candidate_moves(board):
            if move.is_piece_move:
                assert move.from_pos is not None and move.to_pos is not None
                if move.from_pos.is_off_board() or move.to_pos.is_off_board():
                    continue
            if board.is_legal_move(move, color):
                legal.append(move)
        return legal

    def is_legal_move(self, to: Position, board: Board) -> bool:
        """Whether this piece may move to *to*, ignoring checks on its king."""
        if to.is_off_board() or board.has_ally_piece(to, self.color):
            return False

        pos = self.position
        pt = self.piece_type
        if pt == PieceType.PAWN:
            return self._is_legal_pawn_move(to, board)
        if pt == PieceType.KING:
            return pos.is_adjacent_to(to)
        if pt == PieceType.QUEEN:
            return _is_clear_orthogonal(pos, to, board) or _is_clear_diagonal(
                pos, to, board
            )
        if pt == PieceType.ROOK:
            return _is_clear_orthogonal(pos, to, board)
        if pt == PieceType.BISHOP:
            return _is_clear_diagonal(pos, to, board)
        return pos.is_knight_move(to)

    def is_legal_attack(self, to: Position, board: Board) -> bool:
        """Whether this piece threatens *to*.

        Same as :meth:`is_legal_move` except that pawns threaten both
        forward diagonals whether or not anything stands there, and never
        threaten the squares they push to.
        """
        if to.is_off_board() or board.has_ally_piece(to, self.color):
            return False
        if self.piece_type == PieceType.PAWN:
            up = self.position.pawn_up(self.color)
            return to in (up.next_left(), up.next_right())
        return self.is_legal_move(to, board)

    # -- Candidate generators (private) -------------------------------------

    def _candidate_moves(self, board: Board) -> list[Move]:
        pt = self.piece_type
        if pt == PieceType.PAWN:
            return self._pawn_candidates(board)
        if pt == PieceType.KING:
            return self._king_candidates(board)
        if pt == PieceType.QUEEN:
            return self._bishop_candidates(board) + self._rook_candidates(board)
        if pt == PieceType.ROOK:
            return self._rook_candidates(board)
        if pt == PieceType.BISHOP:
            return self._bishop_candidates(board)
        return self._knight_candidates(board)

    def _pawn_candidates(self, board: Board) -> list[Move]:
        color = self.color
        pos = self.position
        up = pos.pawn_up(color)
        next_up = up.pawn_up(color)
        up_left = up.next_left()
        up_right = up.next_right()
        moves: list[Move] = []

        en_passant = board.get_en_passant()
        if en_passant is not None and en_passant in (up_left, up_right):
            moves.append(Move.piece(pos, en_passant))

        if (
            next_up.is_on_board()
            and pos.is_starting_pawn(color)
            and board.has_no_piece(up)
            and board.has_no_piece(next_up)
        ):
            moves.append(Move.piece(pos, next_up))

        if up.is_on_board() and board.has_no_piece(up):
            moves.append(Move.piece(pos, up))

        # Both captures are checked: a pawn can have two targets at once.
        if up_left.is_on_board() and board.has_enemy_piece(up_left, color):
            moves.append(Move.piece(pos, up_left))
        if up_right.is_on_board() and board.has_enemy_piece(up_right, color):
            moves.append(Move.piece(pos, up_right))
        return moves

    def _king_candidates(self, board: Board) -> list[Move]:
        pos = self.position
        moves = self._step_candidates(
            board,
            (
                pos.next_left(),
                pos.next_right(),
                pos.next_above(),
                pos.next_below(),
                pos.next_left().next_above(),
                pos.next_left().next_below(),
                pos.next_right().next_above(),
                pos.next_right().next_below(),
            ),
        )
        if board.can_kingside_castle(self.color):
            moves.append(Move.KINGSIDE_CASTLE)
        if board.can_queenside_castle(self.color):
            moves.append(Move.QUEENSIDE_CASTLE)
        return moves

    def _knight_candidates(self, board: Board) -> list[Move]:
        pos = self.position
        return self._step_candidates(
            board,
            (
                pos.next_left().next_left().next_above(),
                pos.next_left().next_above().next_above(),
                pos.next_left().next_left().next_below(),
                pos.next_left().next_below().next_below(),
                pos.next_right().next_right().next_above(),
                pos.next_right().next_above().next_above(),
                pos.next_right().next_right().next_below(),
                pos.next_right().next_below().next_below(),
            ),
        )

    def _rook_candidates(self, board: Board) -> list[Move]:
        pos = self.position
        targets = [Position(row, pos.col) for row in range(8)]
        targets += [Position(pos.row, col) for col in range(8)]
        return [
            Move.piece(pos, to)
            for to in targets
            if to != pos
            and not board.has_ally_piece(to, self.color)
            and to.is_orthogonal_to(pos)
        ]

    def _bishop_candidates(self, board: Board) -> list[Move]:
        pos = self.position
        return [
            Move.piece(pos, to)
            for to in (Position(row, col) for row in range(8) for col in range(8))
            if to != pos
            and not board.has_ally_piece(to, self.color)
            and to.is_diagonal_to(pos)
        ]

    def _step_candidates(
        self, board: Board, targets: Iterable[Position]
    ) -> list[Move]:
        pos = self.position
        return [
            Move.piece(pos, to)
            for to in targets
            if to.is_on_board() and not board.has_ally_piece(to, self.color)
        ]

    def _is_legal_pawn_move(self, to: Position, board: Board) -> bool:
        color = self.color
        pos = self.position
        up = pos.pawn_up(color)
        return (
            board.is_en_passant_capture(pos, to, color)
            or (
                pos.is_starting_pawn(color)
                and board.has_no_piece(to)
                and board.has_no_piece(up)
                and to == up.pawn_up(color)
            )
            or (
                board.has_enemy_piece(to, color)
                and to in (up.next_left(), up.next_right())
            )
            or (board.has_no_piece(to) and to == up)
        )


def _is_clear_orthogonal(pos: Position, to: Position, board: Board) -> bool:
    if not pos.is_orthogonal_to(to):
        return False
    return _is_clear_path(pos.orthogonals_to(to), board)


def _is_clear_diagonal(pos: Position, to: Position, board: Board) -> bool:
    if not pos.is_diagonal_to(to):
        return False
    return _is_clear_path(pos.diagonals_to(to), board)


def _is_clear_path(path: list[Position], board: Board) -> bool:
    """Every square before the destination (the last entry) is empty."""
    return all(board.has_no_piece(sq) for sq in path[:-1])
