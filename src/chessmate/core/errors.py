"""Exceptions raised by the rules engine.

Illegal moves are not errors: :meth:`Board.play_move` reports them as an
:class:`~chessmate.core.results.IllegalMove` result.  The exceptions here
cover malformed text input and callers that break the promotion protocol.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all chessmate errors."""


class InvalidPositionError(ChessError, ValueError):
    """Square text such as ``"e4"`` could not be parsed."""


class InvalidMoveError(ChessError, ValueError):
    """Move text such as ``"e2 to e4"`` could not be parsed."""


class PromotionPendingError(ChessError, RuntimeError):
    """A move was played while a pawn promotion was still unresolved."""


class NoPromotionPendingError(ChessError, RuntimeError):
    """``promote`` was called although no pawn is waiting to promote."""
