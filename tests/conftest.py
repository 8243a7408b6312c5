"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessmate.core.board import Board
from chessmate.core.builder import BoardBuilder
from chessmate.core.enums import Color
from chessmate.core.piece import Piece
from chessmate.core.position import A1, E1, E8, H1


@pytest.fixture()
def start_board() -> Board:
    """Standard initial position, White to move."""
    return Board.default()


@pytest.fixture()
def castling_board() -> Board:
    """White king and both rooks on their home squares, free to castle."""
    return (
        BoardBuilder()
        .piece(Piece.king(Color.WHITE, E1))
        .piece(Piece.rook(Color.WHITE, A1))
        .piece(Piece.rook(Color.WHITE, H1))
        .piece(Piece.king(Color.BLACK, E8))
        .enable_kingside_castle(Color.WHITE)
        .enable_queenside_castle(Color.WHITE)
        .build()
    )
