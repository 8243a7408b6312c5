"""Tests for Board: move application, special moves and the result state machine."""

import pytest

from chessmate.core.board import Board
from chessmate.core.builder import BoardBuilder
from chessmate.core.castling import CastlingRights
from chessmate.core.enums import Color, PieceType, Promotion
from chessmate.core.errors import NoPromotionPendingError, PromotionPendingError
from chessmate.core.move import Move
from chessmate.core.piece import Piece
from chessmate.core.position import (
    A1, A8, B7, B8, C1, C8, D1, D2, D8, E1, E2, E3, E4, E5, E8, F1, F5, F6, F8,
    G1, G8, H1, H7, H8, Position,
)
from chessmate.core.results import (
    Continuing,
    IllegalMove,
    Promote,
    Stalemate,
    Victory,
)


def _play(board: Board, *moves: str) -> Board:
    for text in moves:
        result = board.play_move(Move.from_str(text))
        assert isinstance(result, Continuing), f"{text}: {result}"
        board = result.board
    return board


def perft(board: Board, depth: int) -> int:
    moves = board.get_legal_moves(board.get_turn())
    if depth == 1:
        return len(moves)
    total = 0
    for move in moves:
        result = board.play_move(move)
        assert isinstance(result, Continuing)
        total += perft(result.board, depth - 1)
    return total


class TestBoardInitial:
    def test_kings(self, start_board: Board) -> None:
        assert start_board.get_piece(E1) == Piece.king(Color.WHITE, E1)
        assert start_board.get_piece(E8) == Piece.king(Color.BLACK, E8)

    def test_piece_positions_match_squares(self, start_board: Board) -> None:
        for piece in start_board:
            assert start_board.get_piece(piece.position) is piece

    def test_state(self, start_board: Board) -> None:
        assert start_board.get_turn() == Color.WHITE
        assert start_board.get_en_passant() is None
        assert start_board.get_promotion() is None
        assert start_board.get_taken_piece() is None
        assert start_board.get_castling_rights(Color.WHITE) == CastlingRights()
        assert start_board.get_castling_rights(Color.BLACK) == CastlingRights()

    def test_twenty_moves_each(self, start_board: Board) -> None:
        assert len(start_board.get_legal_moves(Color.WHITE)) == 20
        assert len(start_board.get_legal_moves(Color.BLACK)) == 20

    def test_balanced(self, start_board: Board) -> None:
        assert start_board.get_material_advantage(Color.WHITE) == 0
        assert start_board.get_player_value(Color.WHITE) == 0.0

    def test_repr(self, start_board: Board) -> None:
        lines = repr(start_board).splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[4] == "4 . . . . . . . ."
        assert lines[7] == "1 R N B Q K B N R"
        assert lines[8] == "  a b c d e f g h"

    def test_structural_equality(self, start_board: Board) -> None:
        assert start_board == Board.default()
        assert hash(start_board) == hash(Board.default())
        assert start_board != start_board.change_turn()

    def test_empty(self) -> None:
        board = Board.empty()
        assert list(board) == []
        assert board.get_turn() == Color.WHITE
        assert board.get_castling_rights(Color.WHITE).can_kingside_castle()


class TestPersistentModifiers:
    def test_change_turn_does_not_touch_original(self, start_board: Board) -> None:
        flipped = start_board.change_turn()
        assert flipped.get_turn() == Color.BLACK
        assert start_board.get_turn() == Color.WHITE

    def test_set_turn(self, start_board: Board) -> None:
        assert start_board.set_turn(Color.BLACK).get_turn() == Color.BLACK

    def test_remove_piece(self, start_board: Board) -> None:
        board = start_board.remove_piece(D8)
        assert board.get_piece(D8) is None
        assert board.get_material_advantage(Color.WHITE) == 9
        assert start_board.get_piece(D8) is not None

    def test_remove_piece_off_board_is_noop(self, start_board: Board) -> None:
        assert start_board.remove_piece(Position(-1, 0)) == start_board
        assert start_board.remove_piece(Position(8, 4)) == start_board

    def test_remove_all(self, start_board: Board) -> None:
        board = start_board.remove_all(Color.BLACK)
        assert board.get_player_pieces(Color.BLACK) == []
        assert len(board.get_player_pieces(Color.WHITE)) == 16

    def test_occupancy_queries(self, start_board: Board) -> None:
        assert start_board.has_piece(E2)
        assert start_board.has_no_piece(E4)
        assert start_board.has_ally_piece(E2, Color.WHITE)
        assert start_board.has_enemy_piece(E2, Color.BLACK)
        assert not start_board.has_no_piece(Position(8, 0))

    def test_king_pos(self, start_board: Board) -> None:
        assert start_board.get_king_pos(Color.BLACK) == E8
        assert Board.empty().get_king_pos(Color.WHITE) is None


class TestPlayMove:
    def test_pawn_push(self, start_board: Board) -> None:
        result = start_board.play_move(Move.piece(E2, E4))
        assert isinstance(result, Continuing)
        board = result.board
        assert board.get_piece(E4) == Piece.pawn(Color.WHITE, E4)
        assert board.get_piece(E2) is None
        assert board.get_turn() == Color.BLACK
        assert board.get_en_passant() == E3

    def test_illegal_move_leaves_board_unchanged(self, start_board: Board) -> None:
        move = Move.piece(E2, E5)
        assert start_board.play_move(move) == IllegalMove(move)
        assert start_board == Board.default()

    def test_cannot_move_opponent_piece(self, start_board: Board) -> None:
        move = Move.from_str("e7e5")
        assert start_board.play_move(move) == IllegalMove(move)

    def test_cannot_move_from_empty_square(self, start_board: Board) -> None:
        move = Move.from_str("e4e5")
        assert start_board.play_move(move) == IllegalMove(move)

    def test_resign(self, start_board: Board) -> None:
        assert start_board.play_move(Move.RESIGN) == Victory(Color.BLACK)
        black_to_move = start_board.change_turn()
        assert black_to_move.play_move(Move.RESIGN) == Victory(Color.WHITE)

    def test_resign_is_identity_on_board(self, start_board: Board) -> None:
        assert start_board._apply_move(Move.RESIGN) == start_board

    def test_fools_mate(self, start_board: Board) -> None:
        board = _play(start_board, "f2f3", "e7e5", "g2g4")
        assert board.play_move(Move.from_str("d8h4")) == Victory(Color.BLACK)

    def test_stalemating_move(self) -> None:
        board = (
            BoardBuilder()
            .piece(Piece.king(Color.BLACK, H8))
            .piece(Piece.king(Color.WHITE, Position(5, 5)))
            .piece(Piece.queen(Color.WHITE, Position(5, 7)))
            .build()
        )
        # Qh6-g6 leaves the black king on h8 without a move.
        assert board.play_move(Move.from_str("h6g6")) == Stalemate()


class TestCapture:
    def test_taken_piece_recorded_then_cleared(self, start_board: Board) -> None:
        board = _play(start_board, "e2e4", "d7d5", "e4d5")
        assert board.get_taken_piece() == Piece.pawn(Color.BLACK, Position(4, 3))
        board = _play(board, "g8f6")
        assert board.get_taken_piece() is None


class TestEnPassant:
    def _before_capture(self, start_board: Board) -> Board:
        return _play(start_board, "e2e4", "a7a6", "e4e5", "f7f5")

    def test_square_recorded(self, start_board: Board) -> None:
        board = self._before_capture(start_board)
        assert board.get_en_passant() == F6

    def test_capture_is_offered(self, start_board: Board) -> None:
        board = self._before_capture(start_board)
        assert Move.piece(E5, F6) in board.get_piece_legal_moves(E5)

    def test_capture_removes_passed_pawn(self, start_board: Board) -> None:
        board = _play(self._before_capture(start_board), "e5f6")
        assert board.get_piece(F6) == Piece.pawn(Color.WHITE, F6)
        assert board.get_piece(F5) is None
        assert board.get_piece(E5) is None
        assert board.get_taken_piece() == Piece.pawn(Color.BLACK, F5)

    def test_window_closes_after_one_ply(self, start_board: Board) -> None:
        board = _play(self._before_capture(start_board), "a2a3", "a6a5")
        assert board.get_en_passant() is None
        assert Move.piece(E5, F6) not in board.get_piece_legal_moves(E5)

    def test_requires_a_pawn_to_capture(self) -> None:
        squares: list[Piece | None] = [None] * 64
        squares[E5.index] = Piece.pawn(Color.WHITE, E5)
        board = Board(squares, en_passant=F6)
        assert not board.is_legal_move(Move.piece(E5, F6), Color.WHITE)


class TestCastling:
    def test_blocked_at_start(self, start_board: Board) -> None:
        assert not start_board.is_legal_move(Move.KINGSIDE_CASTLE, Color.WHITE)
        assert not start_board.is_legal_move(Move.QUEENSIDE_CASTLE, Color.WHITE)

    def test_legal_once_path_is_clear(self, start_board: Board) -> None:
        board = _play(start_board, "e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6")
        assert board.is_legal_move(Move.KINGSIDE_CASTLE, Color.WHITE)

    def test_both_sides_offered(self, castling_board: Board) -> None:
        moves = castling_board.get_piece_legal_moves(E1)
        assert moves[-2:] == [Move.KINGSIDE_CASTLE, Move.QUEENSIDE_CASTLE]

    def test_kingside(self, castling_board: Board) -> None:
        result = castling_board.play_move(Move.KINGSIDE_CASTLE)
        assert isinstance(result, Continuing)
        board = result.board
        assert board.get_piece(G1) == Piece.king(Color.WHITE, G1)
        assert board.get_piece(F1) == Piece.rook(Color.WHITE, F1)
        assert board.get_piece(E1) is None
        assert board.get_piece(H1) is None
        assert board.get_castling_rights(Color.WHITE) == CastlingRights(False, False)

    def test_queenside(self, castling_board: Board) -> None:
        result = castling_board.play_move(Move.QUEENSIDE_CASTLE)
        assert isinstance(result, Continuing)
        board = result.board
        assert board.get_piece(C1) == Piece.king(Color.WHITE, C1)
        assert board.get_piece(D1) == Piece.rook(Color.WHITE, D1)
        assert board.get_piece(A1) is None

    def test_not_through_attacked_square(self, castling_board: Board) -> None:
        board = BoardBuilder.from_board(castling_board).piece(
            Piece.rook(Color.BLACK, F8)
        ).build()
        assert not board.can_kingside_castle(Color.WHITE)
        assert board.can_queenside_castle(Color.WHITE)

    @pytest.mark.parametrize("attacked", [D8, C8])
    def test_queenside_not_through_attacked_square(
        self, castling_board: Board, attacked: Position
    ) -> None:
        board = BoardBuilder.from_board(castling_board).piece(
            Piece.rook(Color.BLACK, attacked)
        ).build()
        assert not board.can_queenside_castle(Color.WHITE)
        assert board.can_kingside_castle(Color.WHITE)

    def test_queenside_ignores_attacked_b_file(self, castling_board: Board) -> None:
        board = BoardBuilder.from_board(castling_board).piece(
            Piece.rook(Color.BLACK, B8)
        ).build()
        assert board.can_queenside_castle(Color.WHITE)

    def _black_to_castle(self) -> Board:
        return (
            BoardBuilder()
            .piece(Piece.king(Color.WHITE, E1))
            .piece(Piece.king(Color.BLACK, E8))
            .piece(Piece.rook(Color.BLACK, A8))
            .piece(Piece.rook(Color.BLACK, H8))
            .enable_kingside_castle(Color.BLACK)
            .enable_queenside_castle(Color.BLACK)
            .player_moving(Color.BLACK)
            .build()
        )

    def test_black_kingside(self) -> None:
        result = self._black_to_castle().play_move(Move.from_str("O-O"))
        assert isinstance(result, Continuing)
        board = result.board
        assert board.get_piece(G8) == Piece.king(Color.BLACK, G8)
        assert board.get_piece(F8) == Piece.rook(Color.BLACK, F8)
        assert board.get_piece(E8) is None
        assert board.get_piece(H8) is None
        assert board.get_castling_rights(Color.BLACK) == CastlingRights(False, False)
        assert board.get_turn() == Color.WHITE

    def test_black_queenside(self) -> None:
        result = self._black_to_castle().play_move(Move.from_str("O-O-O"))
        assert isinstance(result, Continuing)
        board = result.board
        assert board.get_piece(C8) == Piece.king(Color.BLACK, C8)
        assert board.get_piece(D8) == Piece.rook(Color.BLACK, D8)
        assert board.get_piece(E8) is None
        assert board.get_piece(A8) is None
        assert board.get_piece(E1) == Piece.king(Color.WHITE, E1)

    def test_not_out_of_check(self, castling_board: Board) -> None:
        board = BoardBuilder.from_board(castling_board).piece(
            Piece.rook(Color.BLACK, E5)
        ).build()
        assert not board.can_kingside_castle(Color.WHITE)
        assert not board.can_queenside_castle(Color.WHITE)

    def test_requires_rights(self, castling_board: Board) -> None:
        board = (
            BoardBuilder.from_board(castling_board)
            .disable_kingside_castle(Color.WHITE)
            .build()
        )
        assert not board.can_kingside_castle(Color.WHITE)
        assert board.can_queenside_castle(Color.WHITE)

    def test_requires_the_rook(self, castling_board: Board) -> None:
        board = BoardBuilder.from_board(castling_board).piece(
            Piece.knight(Color.WHITE, H1)
        ).build()
        assert not board.can_kingside_castle(Color.WHITE)

    def test_rook_move_drops_one_side(self, castling_board: Board) -> None:
        board = _play(castling_board, "h1h2")
        rights = board.get_castling_rights(Color.WHITE)
        assert not rights.can_kingside_castle()
        assert rights.can_queenside_castle()

    def test_king_move_drops_both_sides(self, castling_board: Board) -> None:
        board = _play(castling_board, "e1e2")
        assert board.get_castling_rights(Color.WHITE) == CastlingRights(False, False)


class TestCheckAndPins:
    def test_pinned_piece_cannot_move(self) -> None:
        board = (
            BoardBuilder()
            .piece(Piece.king(Color.WHITE, E1))
            .piece(Piece.bishop(Color.WHITE, E2))
            .piece(Piece.rook(Color.BLACK, E8))
            .piece(Piece.king(Color.BLACK, A8))
            .build()
        )
        assert board.get_piece_legal_moves(E2) == []

    def test_king_cannot_step_into_check(self) -> None:
        board = (
            BoardBuilder()
            .piece(Piece.king(Color.WHITE, E1))
            .piece(Piece.rook(Color.BLACK, D8))
            .piece(Piece.king(Color.BLACK, H8))
            .build()
        )
        assert not board.is_legal_move(Move.piece(E1, D1), Color.WHITE)
        assert not board.is_legal_move(Move.piece(E1, D2), Color.WHITE)
        assert board.is_legal_move(Move.piece(E1, E2), Color.WHITE)

    def test_threatened_squares(self, start_board: Board) -> None:
        assert start_board.is_threatened(E3, Color.BLACK)
        assert not start_board.is_threatened(E4, Color.BLACK)
        assert not start_board.is_in_check(Color.WHITE)

    def test_no_legal_move_leaves_own_king_in_check(self, start_board: Board) -> None:
        board = _play(start_board, "e2e4", "e7e5", "d1h5", "b8c6", "f1c4", "g8f6")
        for move in board.get_legal_moves(board.get_turn()):
            after = board._apply_move(move)
            assert not after.is_in_check(Color.WHITE)


class TestPromotion:
    def _ready(self) -> Board:
        return (
            BoardBuilder()
            .piece(Piece.king(Color.WHITE, A1))
            .piece(Piece.pawn(Color.WHITE, B7))
            .piece(Piece.king(Color.BLACK, H7))
            .build()
        )

    def test_promotion_is_deferred(self) -> None:
        result = self._ready().play_move(Move.piece(B7, B8))
        assert isinstance(result, Promote)
        assert result.position == B8
        assert result.board.get_promotion() == B8
        assert result.board.get_turn() == Color.WHITE
        assert result.board.get_piece(B8) == Piece.pawn(Color.WHITE, B8)

    def test_promote_places_piece_and_hands_over(self) -> None:
        result = self._ready().play_move(Move.piece(B7, B8))
        assert isinstance(result, Promote)
        board = result.board.promote(Promotion.KNIGHT)
        assert board.get_piece(B8) == Piece.knight(Color.WHITE, B8)
        assert board.get_promotion() is None
        assert board.get_turn() == Color.BLACK

    @pytest.mark.parametrize("promotion", list(Promotion))
    def test_every_promotion_kind(self, promotion: Promotion) -> None:
        result = self._ready().play_move(Move.piece(B7, B8))
        assert isinstance(result, Promote)
        piece = result.board.promote(promotion).get_piece(B8)
        assert piece is not None
        assert piece.piece_type == promotion.piece_type

    def test_play_while_pending_raises(self) -> None:
        result = self._ready().play_move(Move.piece(B7, B8))
        assert isinstance(result, Promote)
        with pytest.raises(PromotionPendingError):
            result.board.play_move(Move.piece(A1, Position(1, 0)))
        with pytest.raises(PromotionPendingError):
            result.board.play_move(Move.RESIGN)

    def test_promote_without_pending_raises(self, start_board: Board) -> None:
        with pytest.raises(NoPromotionPendingError):
            start_board.promote(Promotion.QUEEN)

    def test_black_promotes_on_first_rank(self) -> None:
        board = (
            BoardBuilder()
            .piece(Piece.king(Color.WHITE, H1))
            .piece(Piece.pawn(Color.BLACK, Position(1, 3)))
            .piece(Piece.king(Color.BLACK, A8))
            .player_moving(Color.BLACK)
            .build()
        )
        result = board.play_move(Move.from_str("d2d1"))
        assert isinstance(result, Promote)
        promoted = result.board.promote(Promotion.ROOK)
        assert promoted.get_piece(D1) == Piece.rook(Color.BLACK, D1)
        assert promoted.get_turn() == Color.WHITE


class TestVariants:
    def test_horde(self) -> None:
        board = Board.horde()
        white = board.get_player_pieces(Color.WHITE)
        assert len(white) == 36
        assert all(p.piece_type == PieceType.PAWN for p in white)
        assert len(board.get_player_pieces(Color.BLACK)) == 16
        assert board.get_turn() == Color.WHITE
        assert len(board.get_legal_moves(Color.WHITE)) == 8

    def test_dunsany(self) -> None:
        board = Board.dunsany()
        white = board.get_player_pieces(Color.WHITE)
        assert len(white) == 32
        assert all(p.piece_type == PieceType.PAWN for p in white)
        assert board.get_turn() == Color.BLACK
        assert len(board.get_legal_moves(Color.BLACK)) == 20


class TestPerftStarting:
    def test_depth_1(self, start_board: Board) -> None:
        assert perft(start_board, 1) == 20

    def test_depth_2(self, start_board: Board) -> None:
        assert perft(start_board, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self, start_board: Board) -> None:
        assert perft(start_board, 3) == 8_902
