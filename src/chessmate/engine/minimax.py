"""Pure-Python minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging

from chessmate.core.board import Board
from chessmate.core.enums import Color
from chessmate.core.move import Move
from chessmate.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_ALPHA = -1_000_000.0
_BETA = 1_000_000.0
_NO_MOVE_SCORE = 999_999.0


class MinimaxEngine(IEngine):
    """Fixed-depth minimax over :class:`Board` values.

    Scores come from :meth:`Board.get_player_value`; children are searched
    in legal-move order and, among equal scores, the last move wins.
    """

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes = 0

    @property
    def nodes(self) -> int:
        """Boards visited by :meth:`minimax` since this engine was created."""
        return self._nodes

    def search(self, board: Board, limits: SearchLimits) -> SearchResult:
        self._nodes = 0
        has_moves = bool(board.get_legal_moves(board.get_turn()))
        move, score = self.best_next_move(board, limits.max_depth)
        best_move = move if has_moves else None
        _LOGGER.debug(
            "Searched depth %d for %s: best=%s score=%.1f nodes=%d",
            limits.max_depth,
            board.get_turn(),
            best_move,
            score,
            self._nodes,
        )
        return SearchResult(best_move, score, limits.max_depth, self._nodes)

    # -- Move pickers -------------------------------------------------------

    def rate_legal_moves(self, board: Board, depth: int) -> list[tuple[Move, float]]:
        """Every legal move for the side to move with its minimax score."""
        color = board.get_turn()
        return [
            (
                move,
                self.minimax(_child(board, move), depth, _ALPHA, _BETA, False, color),
            )
            for move in board.get_legal_moves(color)
        ]

    def best_next_move(self, board: Board, depth: int) -> tuple[Move, float]:
        best_move, best_value = Move.RESIGN, -_NO_MOVE_SCORE
        for move, value in self.rate_legal_moves(board, depth):
            if value >= best_value:
                best_move, best_value = move, value
        return best_move, best_value

    def worst_next_move(self, board: Board, depth: int) -> tuple[Move, float]:
        """Move that does the opponent the most good, scored for the opponent."""
        color = board.get_turn()
        best_move, best_value = Move.RESIGN, -_NO_MOVE_SCORE
        for move in board.get_legal_moves(color):
            value = self.minimax(
                _child(board, move), depth, _ALPHA, _BETA, True, color.opposite
            )
            if value >= best_value:
                best_move, best_value = move, value
        return best_move, best_value

    def rating(self, board: Board, depth: int) -> tuple[float, float]:
        """Chances as ``(white_pct, black_pct)`` summing to 100."""
        best_move, best_value = self.best_next_move(board, depth)
        _, worst_value = self.worst_next_move(board, depth)
        your_value = best_value + worst_value

        reply = _child(board, best_move)
        _, their_best = self.best_next_move(reply, depth)
        _, their_worst = self.worst_next_move(reply, depth)
        their_value = their_best + their_worst

        if your_value < 0:
            your_value = -your_value
            their_value += your_value * 2
        if their_value < 0:
            their_value = -their_value
            your_value += their_value * 2

        total = your_value + their_value
        if total == 0:
            return 50.0, 50.0
        your_pct = your_value / total * 100.0
        their_pct = their_value / total * 100.0
        if board.get_turn() == Color.WHITE:
            return your_pct, their_pct
        return their_pct, your_pct

    # -- Recursive search ---------------------------------------------------

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        is_maximizing: bool,
        perspective: Color,
    ) -> float:
        """Alpha-beta minimax value of *board* for *perspective*."""
        self._nodes += 1
        if depth == 0:
            return board.get_player_value(perspective)

        moves = board.get_legal_moves(board.get_turn())
        if is_maximizing:
            best = -_NO_MOVE_SCORE
            for move in moves:
                score = self.minimax(
                    _child(board, move), depth - 1, alpha, beta, False, perspective
                )
                best = max(best, score)
                alpha = max(alpha, best)
                if beta <= alpha:
                    break
            return best

        best = _NO_MOVE_SCORE
        for move in moves:
            score = self.minimax(
                _child(board, move), depth - 1, alpha, beta, True, perspective
            )
            best = min(best, score)
            beta = min(beta, best)
            if beta <= alpha:
                break
        return best


def _child(board: Board, move: Move) -> Board:
    """Board after *move* with the opponent to move (no legality check).

    Uses the board's private unchecked apply; search is its only caller
    outside :class:`Board`.
    """
    return board._apply_move(move).change_turn()
