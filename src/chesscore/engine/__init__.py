"""Chess engine package: evaluation, search implementation and Qt worker bridge."""

from chesscore.engine.evaluate import MATE_SCORE, PIECE_VALUES, evaluate, terminal_score
from chesscore.engine.minimax import MinimaxEngine, minimax
from chesscore.engine.search import (
    IEngine,
    SearchCancelled,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "IEngine",
    "MATE_SCORE",
    "MinimaxEngine",
    "PIECE_VALUES",
    "SearchCancelled",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "minimax",
    "terminal_score",
]
