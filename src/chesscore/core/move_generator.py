"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import PROMOTION_TYPES, CastleSide, Color, PieceType
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.types import Square, file_of, is_on_board, make_square, rank_of

if TYPE_CHECKING:
    from chesscore.core.board import Board
    from chesscore.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

KING_HOME_FILE = 4


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if is_on_board(af, ar):
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_pawn_attackers() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[color][sq] -> squares from which a pawn of *color* attacks *sq*."""
    per_color: list[tuple[tuple[Square, ...], ...]] = []
    for color in Color:
        # The attacker stands one step behind the target, against its push.
        behind = -color.direction
        table: list[tuple[Square, ...]] = []
        for sq in range(64):
            file_idx = sq & 7
            rank_idx = sq >> 3
            ar = rank_idx + behind
            attackers: list[Square] = []
            for af in (file_idx - 1, file_idx + 1):
                if is_on_board(af, ar):
                    attackers.append(make_square(af, ar))
            table.append(tuple(attackers))
        per_color.append(tuple(table))
    return tuple(per_color)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while is_on_board(af, ar):
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_ATTACKERS = _build_pawn_attackers()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


def en_passant_victim(
    board: Board, from_sq: Square, to_sq: Square, color: Color
) -> Square | None:
    """Square of the enemy pawn an en-passant capture removes, if one is there."""
    victim_sq = make_square(file_of(to_sq), rank_of(from_sq))
    victim = board[victim_sq]
    if victim is None or victim != Piece(color.opposite, PieceType.PAWN):
        return None
    return victim_sq


class MoveGenerator:
    """Generates pseudo-legal and legal moves for a given :class:`Position`.

    Positions are immutable, so legality is tested by applying each candidate
    to a fresh copy rather than by make/unmake.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def moves_for_player(self, color: Color) -> list[Move]:
        """All strictly legal moves for *color*."""
        return [
            move
            for move in self.pseudo_legal_moves(color)
            if self.leaves_king_safe(move, color)
        ]

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece standing on *sq* (empty list if none)."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            move
            for move in self.moves_for_piece(sq)
            if self.leaves_king_safe(move, piece.color)
        ]

    def pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves of *color* (may leave own king in check)."""
        moves: list[Move] = []
        for sq in self._board.pieces(color):
            moves.extend(self.moves_for_piece(sq))
        return moves

    def moves_for_piece(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq*, self-captures excluded."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        color = piece.color
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(sq, color, _BISHOP_RAYS[sq], moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(sq, color, _ROOK_RAYS[sq], moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(sq, color, _QUEEN_RAYS[sq], moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
            self._gen_castling(sq, color, moves)
        else:
            raise AssertionError(f"Unhandled piece type: {ptype!r}")
        return moves

    def leaves_king_safe(self, move: Move, color: Color) -> bool:
        """Whether playing *move* leaves *color*'s king out of check."""
        after = self._pos.apply(move)
        return not MoveGenerator(after).is_in_check(color)

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* among the pseudo-legal capture targets of *by_color*?"""
        board = self._board

        for from_sq in _PAWN_ATTACKERS[int(by_color)][sq]:
            if board[from_sq] == Piece(by_color, PieceType.PAWN):
                return True

        for from_sq in _KNIGHT_TARGETS[sq]:
            if board[from_sq] == Piece(by_color, PieceType.KNIGHT):
                return True

        for from_sq in _KING_TARGETS[sq]:
            if board[from_sq] == Piece(by_color, PieceType.KING):
                return True

        if self._ray_hits(sq, by_color, _BISHOP_RAYS[sq], PieceType.BISHOP):
            return True
        return self._ray_hits(sq, by_color, _ROOK_RAYS[sq], PieceType.ROOK)

    def _ray_hits(
        self,
        sq: Square,
        by_color: Color,
        rays: tuple[tuple[Square, ...], ...],
        slider: PieceType,
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in (
                    slider,
                    PieceType.QUEEN,
                ):
                    return True
                break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        step = color.direction
        fwd_rank = rank_idx + step
        if not 0 <= fwd_rank < 8:
            return

        one_step = make_square(file_idx, fwd_rank)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, color, moves)
            if rank_idx == color.pawn_rank:
                two_step = make_square(file_idx, rank_idx + 2 * step)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        for cap_file in (file_idx - 1, file_idx + 1):
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, fwd_rank)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, color, moves)
            elif cap_sq == self._pos.en_passant and en_passant_victim(
                board, sq, cap_sq, color
            ) is not None:
                moves.append(Move(sq, cap_sq))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, color: Color, moves: list[Move]
    ) -> None:
        if rank_of(to_sq) == color.promotion_rank:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, Piece(color, pt)))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        # Castling out of or through check is not detected.
        rank = color.back_rank
        if king_sq != make_square(KING_HOME_FILE, rank):
            return

        for side in (CastleSide.KINGSIDE, CastleSide.QUEENSIDE):
            if self.castling_path_ready(color, side):
                moves.append(Move(king_sq, make_square(side.king_target_file, rank)))

    def castling_path_ready(self, color: Color, side: CastleSide) -> bool:
        """Right set, partner rook in its corner, nothing in between."""
        if not self._pos.has_castling_right(color, side):
            return False
        board = self._board
        rank = color.back_rank
        if board[side.rook_file, rank] != Piece(color, PieceType.ROOK):
            return False
        lo, hi = sorted((KING_HOME_FILE, side.rook_file))
        return all(board.is_empty((f, rank)) for f in range(lo + 1, hi))
