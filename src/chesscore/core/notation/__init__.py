"""Notation package: FEN parsing and serialization."""

from chesscore.core.notation.fen import (
    STARTING_FEN,
    fen_counters,
    position_from_fen,
    position_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "fen_counters",
    "position_from_fen",
    "position_to_fen",
]
