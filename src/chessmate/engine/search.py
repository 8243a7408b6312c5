"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.move import Move


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 2

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``best_move`` is ``None`` when the side to move has no legal move.
    """

    best_move: Move | None
    score: float
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for chess engines driven by a game-session layer."""

    def search(self, board: Board, limits: SearchLimits) -> SearchResult: ...
