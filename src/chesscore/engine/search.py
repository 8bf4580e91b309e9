"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesscore.core.enums import Color
    from chesscore.core.move import Move
    from chesscore.core.position import Position

CancelCheck = Callable[[], bool]


class SearchCancelled(Exception):
    """Raised inside a search once its cancel callback reports true."""


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``stalemate_is_draw`` scores a side with no legal moves and no check as 0
    instead of as mated.
    """

    max_depth: int = 3
    stalemate_is_draw: bool = False


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search (score positive favors White)."""

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        position: Position,
        color: Color,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
