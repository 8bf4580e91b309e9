"""GameSession — turn tracking on top of the stateless rules core.

A presentation layer drives a game through this class: it asks for the legal
destinations of a clicked square, submits confirmed moves, and hands the turn
to the engine for computer-controlled sides.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from chesscore.core.enums import Color, GameResult, PieceType
from chesscore.core.move import Move
from chesscore.core.notation import fen_counters, position_from_fen, position_to_fen
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import Square, rank_of
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

MoveCallback = Callable[["MoveRecord"], None]


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    color: Color
    position_before: Position
    position_after: Position
    was_capture: bool
    gives_check: bool


def _is_capture(position: Position, move: Move) -> bool:
    if position.board[move.to_sq] is not None:
        return True
    piece = position.board[move.from_sq]
    return (
        piece is not None
        and piece.piece_type == PieceType.PAWN
        and move.to_sq == position.en_passant
    )


class GameSession:
    """Orchestrates a game: validates moves, alternates turns, notifies listeners.

    Illegal moves are a normal outcome: :meth:`submit_move` returns ``False``
    and the session is left untouched.
    """

    __slots__ = (
        "_position",
        "_side_to_move",
        "_history",
        "_result",
        "_engine",
        "_start_side",
        "_start_halfmove",
        "_start_fullmove",
        "on_move",
    )

    def __init__(
        self,
        position: Position | None = None,
        side_to_move: Color = Color.WHITE,
        engine: IEngine | None = None,
        *,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        if halfmove_clock < 0:
            raise ValueError("Halfmove clock must be >= 0")
        if fullmove_number < 1:
            raise ValueError("Fullmove number must be >= 1")
        self._position = position if position is not None else Position.initial()
        self._position.validate()
        self._side_to_move = side_to_move
        self._history: list[MoveRecord] = []
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._start_side = side_to_move
        self._start_halfmove = halfmove_clock
        self._start_fullmove = fullmove_number
        self._result = Rules.game_result(self._position, side_to_move)
        self.on_move: list[MoveCallback] = []

    @classmethod
    def from_fen(cls, fen: str, engine: IEngine | None = None) -> GameSession:
        position, side = position_from_fen(fen)
        halfmove, fullmove = fen_counters(fen)
        return cls(
            position,
            side,
            engine,
            halfmove_clock=halfmove,
            fullmove_number=fullmove,
        )

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def is_over(self) -> bool:
        return self._result != GameResult.IN_PROGRESS

    @property
    def fullmove_number(self) -> int:
        """Starts at the session's initial number and grows after each Black move."""
        plies = len(self._history) + (1 if self._start_side == Color.BLACK else 0)
        return self._start_fullmove + plies // 2

    @property
    def halfmove_clock(self) -> int:
        """Plies since the last capture or pawn move."""
        clock = self._start_halfmove
        for record in self._history:
            mover = record.position_before.board[record.move.from_sq]
            if record.was_capture or (
                mover is not None and mover.piece_type == PieceType.PAWN
            ):
                clock = 0
            else:
                clock += 1
        return clock

    @property
    def fen(self) -> str:
        return position_to_fen(
            self._position,
            self._side_to_move,
            self.halfmove_clock,
            self.fullmove_number,
        )

    # ── Queries for the presentation layer ───────────────────────────────

    def legal_destinations(self, sq: Square) -> list[Move]:
        """Legal moves from *sq*; empty unless it holds a piece of the side to move."""
        piece = self._position.board[sq]
        if piece is None or piece.color != self._side_to_move:
            return []
        return Rules.legal_destinations(self._position, sq)

    def needs_promotion(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether moving *from_sq* → *to_sq* requires choosing a promotion piece."""
        piece = self._position.board[from_sq]
        if piece is None or piece.piece_type != PieceType.PAWN:
            return False
        return rank_of(to_sq) == piece.color.promotion_rank

    def in_check(self) -> bool:
        return Rules.is_in_check(self._position, self._side_to_move)

    # ── Mutation ─────────────────────────────────────────────────────────

    def submit_move(self, move: Move) -> bool:
        """Play *move* for the side to move if it is legal."""
        if self.is_over:
            return False
        if not Rules.is_legal(self._position, move, self._side_to_move):
            _LOGGER.info("Rejected illegal move %s for %s", move, self._side_to_move)
            return False

        before = self._position
        after = before.apply(move)
        mover = self._side_to_move
        record = MoveRecord(
            move=move,
            color=mover,
            position_before=before,
            position_after=after,
            was_capture=_is_capture(before, move),
            gives_check=Rules.is_in_check(after, mover.opposite),
        )
        self._history.append(record)
        self._position = after
        self._side_to_move = mover.opposite
        self._result = Rules.game_result(after, self._side_to_move)

        for cb in self.on_move:
            cb(record)
        return True

    def undo(self) -> bool:
        """Take back the last move. Returns ``False`` when there is none."""
        if not self._history:
            return False
        record = self._history.pop()
        self._position = record.position_before
        self._side_to_move = record.color
        self._result = Rules.game_result(self._position, self._side_to_move)
        return True

    def reset(self) -> None:
        """Return to the starting position of this session."""
        while self.undo():
            pass

    # ── Engine ───────────────────────────────────────────────────────────

    def engine_move(
        self,
        depth: int = 3,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Search the current position for the side to move."""
        return self._engine.search(
            self._position,
            self._side_to_move,
            SearchLimits(max_depth=depth),
            is_cancelled=is_cancelled,
        )

    def play_engine_move(self, depth: int = 3) -> Move | None:
        """Search and play the engine's choice.

        Returns ``None`` when the game is already over or the engine finds no
        move; an engine answer the rules reject raises ``RuntimeError``.
        """
        if self.is_over:
            return None
        result = self.engine_move(depth)
        if result.best_move is None:
            return None
        if not self.submit_move(result.best_move):
            raise RuntimeError(f"Engine produced illegal move {result.best_move}")
        return result.best_move
