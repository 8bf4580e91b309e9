"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesscore.core.enums import Color
from chesscore.core.position import Position
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.search import SearchCancelled, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and drive it through queued signals; the search
    then runs off the caller's event loop. :meth:`cancel` may be called from
    any thread and takes effect at the next node.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits")

    def __init__(
        self,
        *,
        max_depth: int = 3,
        stalemate_is_draw: bool = False,
    ) -> None:
        super().__init__()
        self._engine = MinimaxEngine()
        self._limits = SearchLimits(
            max_depth=max_depth, stalemate_is_draw=stalemate_is_draw
        )
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, object, int)
    def request_move(self, position_obj: object, color_obj: object, request_id: int) -> None:
        """Search for the best move of *color_obj* in *position_obj* and emit result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return
        if not isinstance(color_obj, Color):
            self.search_error.emit(request_id, "Engine received invalid color")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                position_obj,
                color_obj,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except SearchCancelled:
            self.search_cancelled.emit(request_id)
            return
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(
                request_id,
                result.score,
                result.depth,
                result.nodes,
            )
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Update search depth (takes effect on the next search)."""
        if max_depth <= 0:
            raise ValueError("Search depth must be >= 1")
        self._limits = SearchLimits(
            max_depth=max_depth, stalemate_is_draw=self._limits.stalemate_is_draw
        )
