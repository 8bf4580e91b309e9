"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def direction(self) -> int:
        """Rank-index step of a pawn push (White advances toward rank 0)."""
        return -1 if self == Color.WHITE else 1

    @property
    def back_rank(self) -> int:
        """Rank index of this side's home rank."""
        return 7 if self == Color.WHITE else 0

    @property
    def pawn_rank(self) -> int:
        """Rank index pawns start on (and may double-push from)."""
        return 6 if self == Color.WHITE else 1

    @property
    def promotion_rank(self) -> int:
        """Farthest rank index, where pawns promote."""
        return 0 if self == Color.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class CastleSide(IntEnum):
    """Which rook takes part in castling."""

    QUEENSIDE = 0
    KINGSIDE = 1

    @property
    def rook_file(self) -> int:
        return 0 if self == CastleSide.QUEENSIDE else 7

    @property
    def king_target_file(self) -> int:
        return 2 if self == CastleSide.QUEENSIDE else 6

    @property
    def rook_target_file(self) -> int:
        return 3 if self == CastleSide.QUEENSIDE else 5


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, side: CastleSide) -> CastlingRights:
        """The single right of *color* on *side*."""
        if color == Color.WHITE:
            if side == CastleSide.KINGSIDE:
                return cls.WHITE_KINGSIDE
            return cls.WHITE_QUEENSIDE
        if side == CastleSide.KINGSIDE:
            return cls.BLACK_KINGSIDE
        return cls.BLACK_QUEENSIDE

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        """Both rights of *color*."""
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
