"""Pure-Python chess search (minimax + alpha-beta)."""

from __future__ import annotations

import logging
from time import perf_counter

from chesscore.core.enums import Color
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.position import Position
from chesscore.engine.evaluate import evaluate, terminal_score
from chesscore.engine.search import (
    CancelCheck,
    IEngine,
    SearchCancelled,
    SearchLimits,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)

INF_SCORE = 10_000_000


def _never_cancelled() -> bool:
    return False


class MinimaxEngine(IEngine):
    """Depth-limited minimax with alpha-beta pruning.

    White maximizes and Black minimizes a White-relative score. Moves are
    searched in generation order; there is no move ordering, transposition
    table, iterative deepening or quiescence extension.
    """

    __slots__ = ("_cancel_check", "_nodes", "_stalemate_is_draw")

    def __init__(self) -> None:
        self._nodes = 0
        self._cancel_check: CancelCheck = _never_cancelled
        self._stalemate_is_draw = False

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent search."""
        return self._nodes

    def search(
        self,
        position: Position,
        color: Color,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._stalemate_is_draw = limits.stalemate_is_draw

        started = perf_counter()
        best_move, score = self.minimax(
            position, limits.max_depth, color, -INF_SCORE, INF_SCORE
        )
        _LOGGER.debug(
            "search %s depth=%d best=%s score=%d nodes=%d in %.3fs",
            color,
            limits.max_depth,
            best_move,
            score,
            self._nodes,
            perf_counter() - started,
        )
        return SearchResult(best_move, score, limits.max_depth, self._nodes)

    def minimax(
        self,
        position: Position,
        depth: int,
        color_to_move: Color,
        alpha: int,
        beta: int,
    ) -> tuple[Move | None, int]:
        """Best move and score for *color_to_move* searching *depth* plies."""
        if self._cancel_check():
            raise SearchCancelled

        self._nodes += 1
        if depth == 0:
            return None, evaluate(position, color_to_move)

        gen = MoveGenerator(position)
        moves = gen.moves_for_player(color_to_move)
        if not moves:
            return None, self._no_moves_score(gen, color_to_move)

        maximizing = color_to_move == Color.WHITE
        best_move: Move | None = None
        best_score = -INF_SCORE if maximizing else INF_SCORE
        opponent = color_to_move.opposite

        for move in moves:
            _, score = self.minimax(
                position.apply(move), depth - 1, opponent, alpha, beta
            )
            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)
            if beta <= alpha:
                break

        return best_move, best_score

    def _no_moves_score(self, gen: MoveGenerator, color: Color) -> int:
        if self._stalemate_is_draw and not gen.is_in_check(color):
            return 0
        return terminal_score(color)


def minimax(
    position: Position,
    depth: int,
    color_to_move: Color,
    alpha: int = -INF_SCORE,
    beta: int = INF_SCORE,
) -> tuple[Move | None, int]:
    """Run a single uncancellable alpha-beta search with default limits."""
    return MinimaxEngine().minimax(position, depth, color_to_move, alpha, beta)
