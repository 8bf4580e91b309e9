"""Position — board placement plus castling rights and en-passant state.

Positions are values: :meth:`Position.apply` never touches the receiver and
always returns a fresh position, so sibling search branches cannot observe
each other's moves and no undo logic is needed.
"""

from __future__ import annotations

from chesscore.core.board import Board
from chesscore.core.enums import CastleSide, CastlingRights, Color, PieceType
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.types import Square, file_of, make_square, rank_of, square_name

_KING_HOME_FILE = 4


class Position:
    """Full chess position: board + castling rights + en-passant square.

    The side to move is deliberately not part of the value; every query takes
    the color it is asked about. The board is copied on construction and then
    frozen, so writes through :attr:`board` raise ``TypeError``.
    """

    __slots__ = ("_board", "_castling", "_en_passant")

    def __init__(
        self,
        board: Board | None = None,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
    ) -> None:
        self._board = (board.copy() if board is not None else Board.initial()).freeze()
        self._castling = castling
        self._en_passant = en_passant

    @classmethod
    def _from_owned(
        cls,
        board: Board,
        castling: CastlingRights,
        en_passant: Square | None,
    ) -> Position:
        # *board* is a private copy nobody else holds; freeze it in place.
        pos = cls.__new__(cls)
        pos._board = board.freeze()
        pos._castling = castling
        pos._en_passant = en_passant
        return pos

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, full castling rights, no en passant."""
        return cls._from_owned(Board.initial(), CastlingRights.ALL, None)

    # ── Read-only state ──────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def castling(self) -> CastlingRights:
        return self._castling

    @property
    def en_passant(self) -> Square | None:
        return self._en_passant

    def has_castling_right(self, color: Color, side: CastleSide) -> bool:
        return bool(self._castling & CastlingRights.for_side(color, side))

    def validate(self) -> None:
        """Raise ``ValueError`` unless exactly one king of each color exists."""
        for color in Color:
            kings = self._board.count(Piece(color, PieceType.KING))
            if kings != 1:
                raise ValueError(f"Expected one {color.name} king, found {kings}")

    # ── Move application ─────────────────────────────────────────────────

    def apply(self, move: Move) -> Position:
        """Return the position reached by playing *move*.

        The move must be geometrically well formed (a piece on the origin,
        distinct origin and destination); full legality is the caller's job.
        """
        piece = self._board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.from_sq)}")
        if move.from_sq == move.to_sq:
            raise ValueError(f"Null move on {square_name(move.from_sq)}")

        board = self._board.copy()
        castling = self._castling
        from_file, from_rank = file_of(move.from_sq), rank_of(move.from_sq)
        to_file, to_rank = file_of(move.to_sq), rank_of(move.to_sq)
        captured = board[move.to_sq]

        if self._is_castling(piece, move):
            side = CastleSide.KINGSIDE if to_file > from_file else CastleSide.QUEENSIDE
            rook_from = make_square(side.rook_file, from_rank)
            rook_to = make_square(side.rook_target_file, from_rank)
            rook = board[rook_from]
            assert rook == Piece(piece.color, PieceType.ROOK), "castling without rook"
            assert self.has_castling_right(piece.color, side), "castling right lost"
            lo, hi = sorted((from_file, side.rook_file))
            assert all(
                board.is_empty((f, from_rank)) for f in range(lo + 1, hi)
            ), "castling path blocked"
            board[move.from_sq] = None
            board[rook_from] = None
            board[move.to_sq] = piece
            board[rook_to] = rook
        elif move.promotion is not None:
            assert piece.piece_type == PieceType.PAWN, "only pawns promote"
            board[move.from_sq] = None
            board[move.to_sq] = move.promotion
        elif (
            piece.piece_type == PieceType.PAWN
            and captured is None
            and move.to_sq == self._en_passant
        ):
            board[make_square(to_file, from_rank)] = None
            board[move.from_sq] = None
            board[move.to_sq] = piece
        else:
            board[move.from_sq] = None
            board[move.to_sq] = piece

        # En passant target for the opponent
        next_en_passant: Square | None = None
        if piece.piece_type == PieceType.PAWN and abs(to_rank - from_rank) == 2:
            next_en_passant = make_square(from_file, (from_rank + to_rank) // 2)

        castling = self._updated_castling(castling, piece, move)
        return Position._from_owned(board, castling, next_en_passant)

    @staticmethod
    def _is_castling(piece: Piece, move: Move) -> bool:
        if piece.piece_type != PieceType.KING:
            return False
        back_rank = piece.color.back_rank
        return (
            rank_of(move.from_sq) == back_rank
            and rank_of(move.to_sq) == back_rank
            and file_of(move.from_sq) == _KING_HOME_FILE
            and abs(file_of(move.to_sq) - _KING_HOME_FILE) == 2
        )

    # ── Castling bookkeeping ─────────────────────────────────────────────

    _ROOK_CORNERS: dict[Square, CastlingRights] = {
        make_square(0, 7): CastlingRights.WHITE_QUEENSIDE,
        make_square(7, 7): CastlingRights.WHITE_KINGSIDE,
        make_square(0, 0): CastlingRights.BLACK_QUEENSIDE,
        make_square(7, 0): CastlingRights.BLACK_KINGSIDE,
    }

    @classmethod
    def _updated_castling(
        cls, castling: CastlingRights, piece: Piece, move: Move
    ) -> CastlingRights:
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.for_color(piece.color)

        # A rook leaving its corner, or anything landing on one, ends that right.
        for sq in (move.from_sq, move.to_sq):
            if sq in cls._ROOK_CORNERS:
                castling &= ~cls._ROOK_CORNERS[sq]
        return castling

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self._board == other._board
            and self._castling == other._castling
            and self._en_passant == other._en_passant
        )

    def __hash__(self) -> int:
        return hash(
            (tuple(self._board[sq] for sq in range(64)), self._castling, self._en_passant)
        )

    def __repr__(self) -> str:
        ep = square_name(self._en_passant) if self._en_passant is not None else "-"
        return f"{self._board!r}\ncastling={self._castling!r} en_passant={ep}"
