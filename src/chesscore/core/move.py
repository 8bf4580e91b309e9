"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import Color, PieceType
from chesscore.core.piece import Piece
from chesscore.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``promotion`` carries the full piece (kind and color) a pawn turns into;
    it is ``None`` for every move that does not reach the promotion rank.
    """

    from_sq: Square
    to_sq: Square
    promotion: Piece | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion.piece_type, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str, color: Color) -> Move:
        """Parse long algebraic notation; *color* owns the promoted piece."""
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        from_sq = parse_square(text[:2])
        to_sq = parse_square(text[2:4])
        promotion: Piece | None = None
        if len(text) == 5:
            ptype = _PROMO_TYPES.get(text[4])
            if ptype is None:
                raise ValueError(f"Invalid promotion piece in UCI move: {text!r}")
            promotion = Piece(color, ptype)
        return cls(from_sq, to_sq, promotion)
