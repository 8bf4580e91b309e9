"""Static evaluation: material plus piece-square tables.

Scores are always from White's point of view: positive favors White.
"""

from __future__ import annotations

from chesscore.core.enums import Color, PieceType
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import Square, file_of, make_square, rank_of

MATE_SCORE = 1_000_000

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}

# Tables are laid out like the board from White's side: the first row is rank
# index 0 (the eighth rank), the last row is White's back rank.

# fmt: off
PAWN_TABLE: tuple[int, ...] = (
     0,  0,  0,  0,  0,  0,  0,  0,
    50, 50, 50, 50, 50, 50, 50, 50,
    10, 10, 20, 30, 30, 20, 10, 10,
     5,  5, 10, 25, 25, 10,  5,  5,
     0,  0,  0, 20, 20,  0,  0,  0,
     5, -5,-10,  0,  0,-10, -5,  5,
     5, 10, 10,-20,-20, 10, 10,  5,
     0,  0,  0,  0,  0,  0,  0,  0,
)

KNIGHT_TABLE: tuple[int, ...] = (
    -50,-40,-30,-30,-30,-30,-40,-50,
    -40,-20,  0,  0,  0,  0,-20,-40,
    -30,  0, 10, 15, 15, 10,  0,-30,
    -30,  5, 15, 20, 20, 15,  5,-30,
    -30,  0, 15, 20, 20, 15,  0,-30,
    -30,  5, 10, 15, 15, 10,  5,-30,
    -40,-20,  0,  5,  5,  0,-20,-40,
    -50,-40,-30,-30,-30,-30,-40,-50,
)

BISHOP_TABLE: tuple[int, ...] = (
    -20,-10,-10,-10,-10,-10,-10,-20,
    -10,  0,  0,  0,  0,  0,  0,-10,
    -10,  0,  5, 10, 10,  5,  0,-10,
    -10,  5,  5, 10, 10,  5,  5,-10,
    -10,  0, 10, 10, 10, 10,  0,-10,
    -10, 10, 10, 10, 10, 10, 10,-10,
    -10,  5,  0,  0,  0,  0,  5,-10,
    -20,-10,-10,-10,-10,-10,-10,-20,
)

ROOK_TABLE: tuple[int, ...] = (
     0,  0,  0,  0,  0,  0,  0,  0,
     5, 10, 10, 10, 10, 10, 10,  5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
     0,  0,  0,  5,  5,  0,  0,  0,
)

QUEEN_TABLE: tuple[int, ...] = (
    -20,-10,-10, -5, -5,-10,-10,-20,
    -10,  0,  0,  0,  0,  0,  0,-10,
    -10,  0,  5,  5,  5,  5,  0,-10,
     -5,  0,  5,  5,  5,  5,  0, -5,
      0,  0,  5,  5,  5,  5,  0, -5,
    -10,  5,  5,  5,  5,  5,  0,-10,
    -10,  0,  5,  0,  0,  0,  0,-10,
    -20,-10,-10, -5, -5,-10,-10,-20,
)

KING_TABLE: tuple[int, ...] = (
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -20,-30,-30,-40,-40,-30,-30,-20,
    -10,-20,-20,-20,-20,-20,-20,-10,
     20, 20,  0,  0,  0,  0, 20, 20,
     20, 30, 10,  0,  0, 10, 30, 20,
)
# fmt: on

PIECE_SQUARE_TABLES: dict[PieceType, tuple[int, ...]] = {
    PieceType.PAWN: PAWN_TABLE,
    PieceType.KNIGHT: KNIGHT_TABLE,
    PieceType.BISHOP: BISHOP_TABLE,
    PieceType.ROOK: ROOK_TABLE,
    PieceType.QUEEN: QUEEN_TABLE,
    PieceType.KING: KING_TABLE,
}


def terminal_score(color: Color) -> int:
    """Score of a position in which *color* has been mated."""
    return -MATE_SCORE if color == Color.WHITE else MATE_SCORE


def piece_square_bonus(piece_type: PieceType, color: Color, sq: Square) -> int:
    """Positional bonus of *piece_type* on *sq*, seen from *color*'s side."""
    rank_idx = rank_of(sq)
    if color == Color.BLACK:
        rank_idx = 7 - rank_idx
    return PIECE_SQUARE_TABLES[piece_type][make_square(file_of(sq), rank_idx)]


def material_score(position: Position) -> int:
    """Material plus positional terms, ignoring mate."""
    board = position.board
    score = 0
    for color in Color:
        sign = 1 if color == Color.WHITE else -1
        for sq in board.pieces(color):
            piece = board[sq]
            assert piece is not None
            ptype = piece.piece_type
            score += sign * (PIECE_VALUES[ptype] + piece_square_bonus(ptype, color, sq))
    return score


def evaluate(position: Position, color_to_move: Color) -> int:
    """Static score of *position* with *color_to_move* on turn."""
    if Rules.is_in_checkmate(position, color_to_move):
        return terminal_score(color_to_move)
    return material_score(position)
