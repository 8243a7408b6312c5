"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessmate.core import Board, Continuing, Move

    board = Board.default()
    result = board.play_move(Move.from_str("e2e4"))
    if isinstance(result, Continuing):
        board = result.board
        print(board.get_legal_moves(board.get_turn()))
"""

from chessmate.core.board import Board
from chessmate.core.builder import BoardBuilder
from chessmate.core.castling import CastlingRights
from chessmate.core.enums import Color, MoveKind, PieceType, Promotion
from chessmate.core.errors import (
    ChessError,
    InvalidMoveError,
    InvalidPositionError,
    NoPromotionPendingError,
    PromotionPendingError,
)
from chessmate.core.move import Move
from chessmate.core.piece import MATERIAL_VALUES, Piece
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
from chessmate.core.weights import position_weight

__all__ = [
    # Enums
    "Color",
    "MoveKind",
    "PieceType",
    "Promotion",
    # Domain objects
    "Board",
    "BoardBuilder",
    "CastlingRights",
    "Move",
    "Piece",
    "Position",
    "Rules",
    # Evaluation
    "MATERIAL_VALUES",
    "position_weight",
    # Move results
    "Continuing",
    "IllegalMove",
    "MoveResult",
    "Promote",
    "Stalemate",
    "Victory",
    # Errors
    "ChessError",
    "InvalidMoveError",
    "InvalidPositionError",
    "NoPromotionPendingError",
    "PromotionPendingError",
]
