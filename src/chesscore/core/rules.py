"""High-level chess rules: move legality, check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import PROMOTION_TYPES, CastleSide, Color, GameResult, PieceType
from chesscore.core.move_generator import KING_HOME_FILE, MoveGenerator, en_passant_victim
from chesscore.core.types import Square, file_of, is_valid_square, make_square, rank_of

if TYPE_CHECKING:
    from chesscore.core.move import Move
    from chesscore.core.piece import Piece
    from chesscore.core.position import Position


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Known gaps: castling out of or through check is accepted, and neither
    threefold repetition nor the fifty-move rule is tracked.
    """

    # ── Move validation ──────────────────────────────────────────────────

    @staticmethod
    def is_move_legal(position: Position, move: Move) -> bool:
        """Geometric validity of *move*, independent of check.

        Re-derives every shape the generator produces, so a move coming from
        an untrusted source (a click, a UCI string) can be vetted without
        enumerating the full move list.
        """
        if not (is_valid_square(move.from_sq) and is_valid_square(move.to_sq)):
            return False
        if move.from_sq == move.to_sq:
            return False

        board = position.board
        piece = board[move.from_sq]
        if piece is None:
            return False
        target = board[move.to_sq]
        if target is not None and target.color == piece.color:
            return False

        df = file_of(move.to_sq) - file_of(move.from_sq)
        dr = rank_of(move.to_sq) - rank_of(move.from_sq)
        ptype = piece.piece_type

        if ptype == PieceType.PAWN:
            return Rules._is_pawn_move_legal(position, piece, move, df, dr, target)
        if move.promotion is not None:
            return False

        if ptype == PieceType.KNIGHT:
            return (abs(df), abs(dr)) in ((1, 2), (2, 1))
        if ptype == PieceType.BISHOP:
            return abs(df) == abs(dr) and Rules._path_clear(position, move, df, dr)
        if ptype == PieceType.ROOK:
            return (df == 0 or dr == 0) and Rules._path_clear(position, move, df, dr)
        if ptype == PieceType.QUEEN:
            return (df == 0 or dr == 0 or abs(df) == abs(dr)) and Rules._path_clear(
                position, move, df, dr
            )
        if ptype == PieceType.KING:
            if max(abs(df), abs(dr)) == 1:
                return True
            return Rules._is_castling_legal(position, piece.color, move, df, dr)
        raise AssertionError(f"Unhandled piece type: {ptype!r}")

    @staticmethod
    def is_legal(position: Position, move: Move, color: Color | None = None) -> bool:
        """Full legality: geometry, mover's color, and own-king safety."""
        if not Rules.is_move_legal(position, move):
            return False
        piece = position.board[move.from_sq]
        assert piece is not None
        if color is not None and piece.color != color:
            return False
        return MoveGenerator(position).leaves_king_safe(move, piece.color)

    @staticmethod
    def _is_pawn_move_legal(
        position: Position,
        piece: Piece,
        move: Move,
        df: int,
        dr: int,
        target: Piece | None,
    ) -> bool:
        color = piece.color
        step = color.direction

        if rank_of(move.to_sq) == color.promotion_rank:
            promo = move.promotion
            if promo is None or promo.color != color:
                return False
            if promo.piece_type not in PROMOTION_TYPES:
                return False
        elif move.promotion is not None:
            return False

        board = position.board
        if df == 0:
            if target is not None:
                return False
            if dr == step:
                return True
            from_rank = rank_of(move.from_sq)
            return (
                dr == 2 * step
                and from_rank == color.pawn_rank
                and board.is_empty(make_square(file_of(move.from_sq), from_rank + step))
            )

        if abs(df) != 1 or dr != step:
            return False
        if target is not None:
            return True
        return (
            move.to_sq == position.en_passant
            and en_passant_victim(board, move.from_sq, move.to_sq, color) is not None
        )

    @staticmethod
    def _is_castling_legal(
        position: Position, color: Color, move: Move, df: int, dr: int
    ) -> bool:
        if dr != 0 or abs(df) != 2:
            return False
        if move.from_sq != make_square(KING_HOME_FILE, color.back_rank):
            return False
        side = CastleSide.KINGSIDE if df > 0 else CastleSide.QUEENSIDE
        return MoveGenerator(position).castling_path_ready(color, side)

    @staticmethod
    def _path_clear(position: Position, move: Move, df: int, dr: int) -> bool:
        board = position.board
        step_f, step_r = _sign(df), _sign(dr)
        f = file_of(move.from_sq) + step_f
        r = rank_of(move.from_sq) + step_r
        while make_square(f, r) != move.to_sq:
            if not board.is_empty((f, r)):
                return False
            f += step_f
            r += step_r
        return True

    # ── Move lists ───────────────────────────────────────────────────────

    @staticmethod
    def legal_moves(position: Position, color: Color) -> list[Move]:
        return MoveGenerator(position).moves_for_player(color)

    @staticmethod
    def legal_destinations(position: Position, sq: Square) -> list[Move]:
        return MoveGenerator(position).legal_moves_from(sq)

    # ── Check / mate ─────────────────────────────────────────────────────

    @staticmethod
    def is_in_check(position: Position, color: Color) -> bool:
        return MoveGenerator(position).is_in_check(color)

    @staticmethod
    def is_in_checkmate(position: Position, color: Color) -> bool:
        """No move of *color* gets its king out of check.

        Stalemate is not told apart here; see :meth:`is_stalemate`.
        """
        gen = MoveGenerator(position)
        for move in gen.pseudo_legal_moves(color):
            if gen.leaves_king_safe(move, color):
                return False
        return True

    @staticmethod
    def is_stalemate(position: Position, color: Color) -> bool:
        if Rules.is_in_check(position, color):
            return False
        return Rules.is_in_checkmate(position, color)

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        board = position.board
        white = board.pieces(Color.WHITE)
        black = board.pieces(Color.BLACK)
        total = len(white) + len(black)

        # K vs K
        if total == 2:
            return True

        minors = (PieceType.KNIGHT, PieceType.BISHOP)
        # K+minor vs K
        if total == 3:
            return any(
                board[sq].piece_type in minors  # type: ignore[union-attr]
                for sq in white + black
            )

        # K+B vs K+B with same-colour bishops
        if total == 4:
            wb = board.pieces_of(Color.WHITE, PieceType.BISHOP)
            bb = board.pieces_of(Color.BLACK, PieceType.BISHOP)
            if len(wb) == 1 and len(bb) == 1:
                w_color = (file_of(wb[0]) + rank_of(wb[0])) % 2
                b_color = (file_of(bb[0]) + rank_of(bb[0])) % 2
                return w_color == b_color

        return False

    @staticmethod
    def game_result(position: Position, side_to_move: Color) -> GameResult:
        """Determine the current game result with *side_to_move* on turn."""
        if Rules.is_in_checkmate(position, side_to_move):
            if Rules.is_in_check(position, side_to_move):
                return (
                    GameResult.BLACK_WINS
                    if side_to_move == Color.WHITE
                    else GameResult.WHITE_WINS
                )
            return GameResult.DRAW  # stalemate

        if Rules.is_insufficient_material(position):
            return GameResult.DRAW

        return GameResult.IN_PROGRESS
