"""Board - immutable game state and the move-playing state machine."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from chessmate.core.castling import CastlingRights
from chessmate.core.enums import Color, MoveKind, Promotion
from chessmate.core.errors import NoPromotionPendingError, PromotionPendingError
from chessmate.core.move import Move
from chessmate.core.piece import Piece
from chessmate.core.position import Position
from chessmate.core.results import (
    Continuing,
    IllegalMove,
    MoveResult,
    Promote,
    Stalemate,
    Victory,
)
from chessmate.core.rules import Rules

_LOGGER = logging.getLogger(__name__)


class Board:
    """Persistent 64-square board plus the state that goes with it.

    Every state-changing method returns a new :class:`Board`; an instance
    is never modified after construction, so boards can be shared, hashed
    and used as dictionary keys.
    """

    __slots__ = (
        "_squares",
        "_turn",
        "_en_passant",
        "_promotion",
        "_taken_piece",
        "_white_castling_rights",
        "_black_castling_rights",
    )

    def __init__(
        self,
        squares: Sequence[Piece | None] | None = None,
        turn: Color = Color.WHITE,
        en_passant: Position | None = None,
        promotion: Position | None = None,
        taken_piece: Piece | None = None,
        white_castling_rights: CastlingRights = CastlingRights(),
        black_castling_rights: CastlingRights = CastlingRights(),
    ) -> None:
        if squares is None:
            squares = (None,) * 64
        if len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = tuple(squares)
        self._turn = turn
        self._en_passant = en_passant
        self._promotion = promotion
        self._taken_piece = taken_piece
        self._white_castling_rights = white_castling_rights
        self._black_castling_rights = black_castling_rights

    def _replace(self, **changes: object) -> Board:
        fields = {
            "squares": self._squares,
            "turn": self._turn,
            "en_passant": self._en_passant,
            "promotion": self._promotion,
            "taken_piece": self._taken_piece,
            "white_castling_rights": self._white_castling_rights,
            "black_castling_rights": self._black_castling_rights,
        }
        fields.update(changes)
        return Board(**fields)  # type: ignore[arg-type]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        """No pieces, full castling rights, White to move."""
        return cls()

    @classmethod
    def default(cls) -> Board:
        """Standard starting position."""
        from chessmate.core.builder import BoardBuilder
        from chessmate.core.position import A2, A7

        builder = BoardBuilder()
        back_rank = (
            Piece.rook,
            Piece.knight,
            Piece.bishop,
            Piece.queen,
            Piece.king,
            Piece.bishop,
            Piece.knight,
            Piece.rook,
        )
        for col, make in enumerate(back_rank):
            builder.piece(make(Color.WHITE, Position(0, col)))
            builder.piece(make(Color.BLACK, Position(7, col)))
        return (
            builder.row(Piece.pawn(Color.BLACK, A7))
            .row(Piece.pawn(Color.WHITE, A2))
            .enable_castling()
            .player_moving(Color.WHITE)
            .build()
        )

    @classmethod
    def horde(cls) -> Board:
        """Horde variant: White's army replaced by 36 pawns."""
        from chessmate.core.builder import BoardBuilder
        from chessmate.core.position import A1, A2, A3, A4, B5, C5, F5, G5

        builder = BoardBuilder.from_board(cls.default())
        for start in (A1, A2, A3, A4):
            builder.row(Piece.pawn(Color.WHITE, start))
        for pos in (F5, G5, B5, C5):
            builder.piece(Piece.pawn(Color.WHITE, pos))
        return builder.player_moving(Color.WHITE).build()

    @classmethod
    def dunsany(cls) -> Board:
        """Dunsany's chess: 32 white pawns against a full army; Black starts."""
        from chessmate.core.builder import BoardBuilder
        from chessmate.core.position import A1, A2, A3, A4

        builder = BoardBuilder.from_board(cls.default())
        for start in (A1, A2, A3, A4):
            builder.row(Piece.pawn(Color.WHITE, start))
        return builder.build().change_turn()

    # -- Element access -----------------------------------------------------

    def get_piece(self, pos: Position) -> Piece | None:
        """Piece on *pos*, or ``None`` for an empty or off-board square."""
        if pos.is_off_board():
            return None
        return self._squares[pos.index]

    def has_piece(self, pos: Position) -> bool:
        return self.get_piece(pos) is not None

    def has_no_piece(self, pos: Position) -> bool:
        return pos.is_on_board() and self._squares[pos.index] is None

    def has_ally_piece(self, pos: Position, ally_color: Color) -> bool:
        piece = self.get_piece(pos)
        return piece is not None and piece.color == ally_color

    def has_enemy_piece(self, pos: Position, ally_color: Color) -> bool:
        piece = self.get_piece(pos)
        return piece is not None and piece.color != ally_color

    def get_player_pieces(self, color: Color) -> list[Piece]:
        """*color*'s pieces in grid order (rank 8 first)."""
        return [p for p in self._squares if p is not None and p.color == color]

    def get_king_pos(self, color: Color) -> Position | None:
        for piece in self._squares:
            if piece is not None and piece.is_king() and piece.color == color:
                return piece.position
        return None

    def get_turn(self) -> Color:
        return self._turn

    def get_en_passant(self) -> Position | None:
        return self._en_passant

    def get_promotion(self) -> Position | None:
        """Square of the pawn waiting to be promoted, if any."""
        return self._promotion

    def get_taken_piece(self) -> Piece | None:
        """Piece captured by the move that produced this board."""
        return self._taken_piece

    def get_castling_rights(self, color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return self._white_castling_rights
        return self._black_castling_rights

    # -- Persistent modifiers -----------------------------------------------

    def set_turn(self, color: Color) -> Board:
        return self._replace(turn=color)

    def change_turn(self) -> Board:
        return self._replace(turn=self._turn.opposite)

    def remove_piece(self, pos: Position) -> Board:
        if pos.is_off_board():
            return self
        squares = list(self._squares)
        squares[pos.index] = None
        return self._replace(squares=squares)

    def remove_all(self, color: Color) -> Board:
        """Copy of the board without any of *color*'s pieces."""
        return self._replace(
            squares=[
                None if p is not None and p.color == color else p
                for p in self._squares
            ]
        )

    def _with_castling_rights(self, color: Color, rights: CastlingRights) -> Board:
        if color == Color.WHITE:
            return self._replace(white_castling_rights=rights)
        return self._replace(black_castling_rights=rights)

    # -- Evaluation ---------------------------------------------------------

    def get_material_advantage(self, color: Color) -> int:
        """Material of *color* minus material of the opponent."""
        total = 0
        for piece in self._squares:
            if piece is None:
                continue
            value = piece.get_material_value()
            total += value if piece.color == color else -value
        return total

    def get_player_value(self, color: Color) -> float:
        """Static evaluation from *color*'s point of view."""
        total = 0.0
        for piece in self._squares:
            if piece is None:
                continue
            value = piece.get_weighted_value()
            total += value if piece.color == color else -value
        return total

    # -- Threats and castling -----------------------------------------------

    def is_threatened(self, pos: Position, ally_color: Color) -> bool:
        """Whether any enemy of *ally_color* attacks *pos*."""
        for piece in self._squares:
            if piece is None or piece.color == ally_color:
                continue
            origin = piece.position
            if not (
                origin.is_orthogonal_to(pos)
                or origin.is_diagonal_to(pos)
                or origin.is_knight_move(pos)
            ):
                continue
            if piece.is_legal_attack(pos, self):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        return Rules.is_in_check(self, color)

    def can_kingside_castle(self, color: Color) -> bool:
        king_pos = Position.king_pos(color)
        rook_pos = Position(king_pos.row, 7)
        f_square = king_pos.next_right()
        g_square = f_square.next_right()
        return (
            self.has_no_piece(f_square)
            and self.has_no_piece(g_square)
            and self.get_piece(king_pos) == Piece.king(color, king_pos)
            and self.get_piece(rook_pos) == Piece.rook(color, rook_pos)
            and self.get_castling_rights(color).can_kingside_castle()
            and not self.is_in_check(color)
            and not self.is_threatened(f_square, color)
            and not self.is_threatened(g_square, color)
        )

    def can_queenside_castle(self, color: Color) -> bool:
        king_pos = Position.king_pos(color)
        rook_pos = Position(king_pos.row, 0)
        d_square = king_pos.next_left()
        c_square = d_square.next_left()
        b_square = c_square.next_left()
        return (
            self.has_no_piece(b_square)
            and self.has_no_piece(c_square)
            and self.has_no_piece(d_square)
            and self.get_piece(king_pos) == Piece.king(color, king_pos)
            and self.get_piece(rook_pos) == Piece.rook(color, rook_pos)
            and self.get_castling_rights(color).can_queenside_castle()
            and not self.is_in_check(color)
            and not self.is_threatened(d_square, color)
            and not self.is_threatened(c_square, color)
        )

    # -- Move legality ------------------------------------------------------

    def get_legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, square by square from a8 to h1."""
        moves: list[Move] = []
        for piece in self._squares:
            if piece is not None and piece.color == color:
                moves.extend(piece.get_legal_moves(self))
        return moves

    def get_piece_legal_moves(self, pos: Position) -> list[Move]:
        piece = self.get_piece(pos)
        if piece is None:
            return []
        return piece.get_legal_moves(self)

    def is_legal_move(self, move: Move, player_color: Color) -> bool:
        """Whether *player_color* may play *move* on this board.

        Piece moves are tried on a scratch board and rejected if they leave
        the mover's king in check.
        """
        if move.kind == MoveKind.RESIGN:
            return True
        if move.kind == MoveKind.KINGSIDE_CASTLE:
            return self.can_kingside_castle(player_color)
        if move.kind == MoveKind.QUEENSIDE_CASTLE:
            return self.can_queenside_castle(player_color)

        assert move.from_pos is not None and move.to_pos is not None
        piece = self.get_piece(move.from_pos)
        if piece is None or piece.color != player_color:
            return False
        if not piece.is_legal_move(move.to_pos, self):
            return False
        return not self._apply_move(move).is_in_check(player_color)

    def is_en_passant_capture(
        self, from_pos: Position, to_pos: Position, color: Color
    ) -> bool:
        """Whether a *color* pawn on *from_pos* captures en passant on *to_pos*."""
        en_passant = self._en_passant
        if en_passant is None or to_pos != en_passant:
            return False
        up = from_pos.pawn_up(color)
        if to_pos not in (up.next_left(), up.next_right()):
            return False
        victim = self.get_piece(Position(from_pos.row, en_passant.col))
        return victim is not None and victim.is_pawn() and victim.color != color

    # -- Move application (unchecked) ---------------------------------------

    def _apply_move(self, move: Move) -> Board:
        """Play *move* without any legality check; the turn is not changed."""
        if move.kind == MoveKind.RESIGN:
            return self

        if move.kind == MoveKind.PIECE:
            assert move.from_pos is not None and move.to_pos is not None
            from_pos, to_pos = move.from_pos, move.to_pos
            piece = self.get_piece(from_pos)
            if (
                piece is not None
                and piece.is_pawn()
                and self.is_en_passant_capture(from_pos, to_pos, piece.color)
            ):
                victim_pos = Position(from_pos.row, to_pos.col)
                victim = self.get_piece(victim_pos)
                moved = self._move_piece(from_pos, to_pos)
                return moved.remove_piece(victim_pos)._replace(taken_piece=victim)
            return self._move_piece(from_pos, to_pos)

        king_pos = Position.king_pos(self._turn)
        if move.kind == MoveKind.KINGSIDE_CASTLE:
            rook_pos = Position(king_pos.row, 7)
            return self._move_piece(king_pos, rook_pos.next_left())._move_piece(
                rook_pos, king_pos.next_right()
            )
        rook_pos = Position(king_pos.row, 0)
        return self._move_piece(
            king_pos, king_pos.next_left().next_left()
        )._move_piece(rook_pos, king_pos.next_left())

    def _move_piece(self, from_pos: Position, to_pos: Position) -> Board:
        piece = self.get_piece(from_pos)
        if piece is None:
            return self

        taken = self.get_piece(to_pos)
        if taken is not None and taken.color == piece.color:
            taken = None

        en_passant = None
        if piece.is_starting_pawn() and abs(from_pos.row - to_pos.row) == 2:
            en_passant = to_pos.pawn_back(piece.color)

        board = self
        rights = self.get_castling_rights(piece.color)
        if piece.is_king():
            board = board._with_castling_rights(piece.color, rights.disable_all())
        elif piece.is_queenside_rook():
            board = board._with_castling_rights(
                piece.color, rights.disable_queenside()
            )
        elif piece.is_kingside_rook():
            board = board._with_castling_rights(
                piece.color, rights.disable_kingside()
            )

        squares = list(self._squares)
        squares[from_pos.index] = None
        squares[to_pos.index] = piece.move_to(to_pos)
        return board._replace(
            squares=squares, en_passant=en_passant, taken_piece=taken
        )

    # -- State machine ------------------------------------------------------

    def play_move(self, move: Move) -> MoveResult:
        """Play *move* for the side to move and report what happened.

        Raises :class:`PromotionPendingError` while a pawn is waiting for
        :meth:`promote`; illegal moves come back as :class:`IllegalMove`.
        """
        if self._promotion is not None:
            raise PromotionPendingError(
                f"Promotion pending on {self._promotion}; call promote() first"
            )

        mover = self._turn
        if move.kind == MoveKind.RESIGN:
            _LOGGER.debug("%s resigns", mover)
            return Victory(mover.opposite)

        if not self.is_legal_move(move, mover):
            _LOGGER.debug("Rejected illegal move %s for %s", move, mover)
            return IllegalMove(move)

        next_board = self._apply_move(move)
        handed_over = next_board.change_turn()
        if handed_over.is_checkmate():
            _LOGGER.debug("%s checkmates with %s", mover, move)
            return Victory(mover)
        if handed_over.is_stalemate():
            _LOGGER.debug("Stalemate after %s", move)
            return Stalemate()

        promotion_pos = next_board._find_promoting_pawn(mover)
        if promotion_pos is not None:
            return Promote(next_board._replace(promotion=promotion_pos), promotion_pos)
        return Continuing(handed_over)

    def promote(self, promotion: Promotion) -> Board:
        """Replace the waiting pawn with *promotion* and hand over the turn."""
        pos = self._promotion
        if pos is None:
            raise NoPromotionPendingError("No promotion pending")
        squares = list(self._squares)
        squares[pos.index] = Piece(promotion.piece_type, self._turn, pos)
        return self._replace(squares=squares, promotion=None).change_turn()

    def _find_promoting_pawn(self, color: Color) -> Position | None:
        for piece in self._squares:
            if piece is not None and piece.color == color and piece.is_promoting_pawn():
                return piece.position
        return None

    # -- Terminal conditions ------------------------------------------------

    def is_checkmate(self) -> bool:
        """Side to move is in check and has no legal move."""
        return Rules.is_checkmate(self)

    def is_stalemate(self) -> bool:
        return Rules.is_stalemate(self)

    def has_sufficient_material(self, color: Color) -> bool:
        return Rules.has_sufficient_material(self, color)

    def has_insufficient_material(self, color: Color) -> bool:
        return not Rules.has_sufficient_material(self, color)

    # -- Search -------------------------------------------------------------

    def rate_legal_moves(self, depth: int) -> list[tuple[Move, float]]:
        from chessmate.engine.minimax import MinimaxEngine

        return MinimaxEngine().rate_legal_moves(self, depth)

    def get_best_next_move(self, depth: int) -> tuple[Move, float]:
        from chessmate.engine.minimax import MinimaxEngine

        return MinimaxEngine().best_next_move(self, depth)

    def get_worst_next_move(self, depth: int) -> tuple[Move, float]:
        from chessmate.engine.minimax import MinimaxEngine

        return MinimaxEngine().worst_next_move(self, depth)

    def get_rating(self, depth: int) -> tuple[float, float]:
        """``(white_pct, black_pct)`` summing to 100."""
        from chessmate.engine.minimax import MinimaxEngine

        return MinimaxEngine().rating(self, depth)

    # -- Dunder helpers -----------------------------------------------------

    def _key(self) -> tuple[object, ...]:
        return (
            self._squares,
            self._turn,
            self._en_passant,
            self._promotion,
            self._taken_piece,
            self._white_castling_rights,
            self._black_castling_rights,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __iter__(self) -> Iterator[Piece]:
        return (p for p in self._squares if p is not None)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self.get_piece(Position(rank, file))
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
