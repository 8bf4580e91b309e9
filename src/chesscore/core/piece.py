"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import Color, PieceType

# Indexed by PieceType: pawn, knight, bishop, rook, queen, king.
_LETTERS = "pnbrqk"
_GLYPHS: dict[Color, str] = {
    Color.WHITE: "♙♘♗♖♕♔",
    Color.BLACK: "♟♞♝♜♛♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored chess piece. Equal pieces are interchangeable."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN letter: uppercase for White, lowercase for Black."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Inverse of ``str(piece)``; ``'n'`` is a black knight."""
        index = _LETTERS.find(char.lower()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, PieceType(index))

    @property
    def symbol(self) -> str:
        return _GLYPHS[self.color][self.piece_type]

