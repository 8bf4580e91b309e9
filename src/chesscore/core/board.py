"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from chesscore.core.enums import Color, PieceType
from chesscore.core.piece import Piece
from chesscore.core.types import (
    Coords,
    Square,
    is_on_board,
    is_valid_square,
    make_square,
)

_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _to_index(key: Square | Coords) -> Square:
    if isinstance(key, tuple):
        file, rank = key
        if not is_on_board(file, rank):
            raise IndexError(f"Square coordinates off the board: {key!r}")
        return make_square(file, rank)
    if not is_valid_square(key):
        raise IndexError(f"Square index off the board: {key!r}")
    return key


class Board:
    """Mutable 64-square board with per-color occupancy indexes.

    Squares are addressed either by raw index or by a ``(file, rank)`` pair;
    both resolve through ``8 * rank + file``. A frozen board rejects writes;
    :meth:`copy` always returns an editable board.
    """

    __slots__ = ("_squares", "_color_bitboards", "_king_squares", "_frozen")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> bitboard of all occupied squares for that color.
        self._color_bitboards: list[int] = [0] * _COLOR_COUNT
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None] * _COLOR_COUNT
        self._frozen = False

    @staticmethod
    def _squares_from_bitboard(bitboard: int) -> list[Square]:
        squares: list[Square] = []
        while bitboard:
            lsb = bitboard & -bitboard
            squares.append(lsb.bit_length() - 1)
            bitboard ^= lsb
        return squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, key: Square | Coords) -> Piece | None:
        return self._squares[_to_index(key)]

    def __setitem__(self, key: Square | Coords, piece: Piece | None) -> None:
        self._check_writable()
        sq = _to_index(key)
        old_piece = self._squares[sq]
        if old_piece == piece:
            return

        mask = 1 << sq

        if old_piece is not None:
            old_color_idx = int(old_piece.color)
            self._color_bitboards[old_color_idx] &= ~mask
            if (
                old_piece.piece_type == PieceType.KING
                and self._king_squares[old_color_idx] == sq
            ):
                self._king_squares[old_color_idx] = None

        self._squares[sq] = piece

        if piece is None:
            return

        color_idx = int(piece.color)
        self._color_bitboards[color_idx] |= mask
        if piece.piece_type == PieceType.KING:
            self._king_squares[color_idx] = sq

    def is_empty(self, key: Square | Coords) -> bool:
        return self._squares[_to_index(key)] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in ascending index order."""
        return self._squares_from_bitboard(self._color_bitboards[int(color)])

    def pieces_of(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        squares = self._squares
        return [
            sq
            for sq in self.pieces(color)
            if squares[sq].piece_type == piece_type  # type: ignore[union-attr]
        ]

    def count(self, piece: Piece) -> int:
        """Number of squares holding *piece*."""
        return sum(1 for p in self._squares if p == piece)

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._color_bitboards = self._color_bitboards.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._check_writable()
        self._squares = [None] * 64
        self._color_bitboards = [0] * _COLOR_COUNT
        self._king_squares = [None] * _COLOR_COUNT

    def freeze(self) -> Board:
        """Make this board read-only and return it."""
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise TypeError("Board is frozen; copy() it to get an editable board")

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (Black on ranks 0-1, White on 6-7)."""
        b = cls()
        for color in Color:
            for f, pt in enumerate(_BACK_RANK):
                b[f, color.back_rank] = Piece(color, pt)
                b[f, color.pawn_rank] = Piece(color, PieceType.PAWN)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            row = []
            for file in range(8):
                p = self._squares[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
