"""In-process entry points for a presentation layer.

These six calls are the whole surface a board UI needs: build the starting
position, highlight legal destinations, apply confirmed moves, query check and
mate, and ask the engine for a move. All of them are pure functions over
immutable :class:`~chesscore.core.position.Position` values.
"""

from __future__ import annotations

from chesscore.core.enums import Color
from chesscore.core.move import Move
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import Square
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.search import CancelCheck, SearchLimits


def new_game() -> Position:
    """Standard starting position."""
    return Position.initial()


def legal_destinations(position: Position, square: Square) -> list[Move]:
    """Legal moves starting on *square*, promotion variants included."""
    return Rules.legal_destinations(position, square)


def apply(position: Position, move: Move) -> Position:
    """Position after *move*; the receiver is left unchanged."""
    return position.apply(move)


def in_check(position: Position, color: Color) -> bool:
    return Rules.is_in_check(position, color)


def in_checkmate(position: Position, color: Color) -> bool:
    return Rules.is_in_checkmate(position, color)


def search(
    position: Position,
    depth: int,
    color: Color,
    is_cancelled: CancelCheck | None = None,
) -> tuple[Move | None, int]:
    """Recommended move for *color* and its White-relative score."""
    result = MinimaxEngine().search(
        position, color, SearchLimits(max_depth=depth), is_cancelled=is_cancelled
    )
    return result.best_move, result.score
