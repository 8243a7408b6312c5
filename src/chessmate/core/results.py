"""Outcomes of :meth:`Board.play_move` and :meth:`Board.promote`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from chessmate.core.enums import Color
from chessmate.core.move import Move
from chessmate.core.position import Position

if TYPE_CHECKING:
    from chessmate.core.board import Board


@dataclass(frozen=True, slots=True)
class Continuing:
    """Game goes on; *board* has the opponent to move."""

    board: Board


@dataclass(frozen=True, slots=True)
class Promote:
    """A pawn reached *position*; call ``board.promote(...)`` next.

    The turn has not been handed over yet.
    """

    board: Board
    position: Position


@dataclass(frozen=True, slots=True)
class Victory:
    winner: Color


@dataclass(frozen=True, slots=True)
class Stalemate:
    pass


@dataclass(frozen=True, slots=True)
class IllegalMove:
    """Rejected move; the board it was played on is unchanged."""

    move: Move


MoveResult = Union[Continuing, Promote, Victory, Stalemate, IllegalMove]
