"""chesscore — chess rules engine and minimax search."""

from chesscore.api import (
    apply,
    in_check,
    in_checkmate,
    legal_destinations,
    new_game,
    search,
)

__all__ = [
    "apply",
    "in_check",
    "in_checkmate",
    "legal_destinations",
    "new_game",
    "search",
]

__version__ = "0.1.0"
