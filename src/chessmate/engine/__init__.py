"""Chess engine package: search models and the minimax searcher."""

from chessmate.engine.minimax import MinimaxEngine
from chessmate.engine.search import IEngine, SearchLimits, SearchResult

DefaultEngine: type[IEngine] = MinimaxEngine

__all__ = [
    "DefaultEngine",
    "IEngine",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
]
