"""FEN parsing and serialization."""

from __future__ import annotations

from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

_SIDES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}

# Rank index of a legal en-passant target, keyed by the side to move.
_EP_RANKS: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 5}


def _parse_placement(placement: str, fen: str) -> Board:
    # FEN lists the eighth rank first, which is also rank index 0.
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for rank, row in enumerate(rows):
        cells: list[Piece | None] = []
        for ch in row:
            if ch in "12345678":
                cells.extend([None] * int(ch))
            elif ch.isdigit():
                raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
            else:
                cells.append(Piece.from_char(ch))
        if len(cells) != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
        for file, piece in enumerate(cells):
            if piece is not None:
                board[file, rank] = piece
    return board


def _parse_castling(field: str) -> CastlingRights:
    if field == "-":
        return CastlingRights.NONE
    if len(set(field)) != len(field) or not set(field) <= set(_CASTLING_CHARS):
        raise ValueError(f"Invalid FEN castling field: {field!r}")
    rights = CastlingRights.NONE
    for ch in field:
        rights |= _CASTLING_CHARS[ch]
    return rights


def _parse_counter(text: str, minimum: int, name: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ValueError(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise ValueError(f"Invalid FEN {name}: {text!r}")
    return value


def position_from_fen(fen: str) -> tuple[Position, Color]:
    """Parse a FEN string into a :class:`Position` and the side to move.

    The halfmove clock and fullmove number are validated when present but are
    not part of the position.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    board = _parse_placement(parts[0], fen)

    side = _SIDES.get(parts[1])
    if side is None:
        raise ValueError(f"Invalid FEN side-to-move field: {parts[1]!r}")

    castling = _parse_castling(parts[2])

    ep: Square | None = None
    if parts[3] != "-":
        ep = parse_square(parts[3])
        if rank_of(ep) != _EP_RANKS[side]:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {parts[3]!r}"
            )

    if len(parts) > 4:
        _parse_counter(parts[4], 0, "halfmove clock")
    if len(parts) > 5:
        _parse_counter(parts[5], 1, "fullmove number")

    position = Position(board, castling, ep)
    position.validate()
    return position, side


def fen_counters(fen: str) -> tuple[int, int]:
    """Halfmove clock and fullmove number of *fen*, defaulting to ``(0, 1)``."""
    parts = fen.split()
    halfmove = _parse_counter(parts[4], 0, "halfmove clock") if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], 1, "fullmove number") if len(parts) > 5 else 1
    return halfmove, fullmove


def _placement_text(board: Board) -> str:
    rows: list[str] = []
    for rank in range(8):
        text = ""
        gap = 0
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                gap += 1
                continue
            text += (str(gap) if gap else "") + str(piece)
            gap = 0
        rows.append(text + (str(gap) if gap else ""))
    return "/".join(rows)


def position_to_fen(
    pos: Position,
    side_to_move: Color = Color.WHITE,
    halfmove_clock: int = 0,
    fullmove_number: int = 1,
) -> str:
    """Serialise *pos* to FEN; the clocks are supplied by the caller."""
    side = "w" if side_to_move == Color.WHITE else "b"
    castling = (
        "".join(ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right)
        or "-"
    )
    ep = square_name(pos.en_passant) if pos.en_passant is not None else "-"
    return " ".join(
        (
            _placement_text(pos.board),
            side,
            castling,
            ep,
            str(halfmove_clock),
            str(fullmove_number),
        )
    )
