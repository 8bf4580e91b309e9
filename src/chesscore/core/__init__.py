"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chesscore.core import Color, MoveGenerator, Position, parse_square

    pos = Position.initial()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves_from(parse_square("e2")):
        pos = pos.apply(move)
"""

from chesscore.core.board import Board
from chesscore.core.enums import (
    PROMOTION_TYPES,
    CastleSide,
    CastlingRights,
    Color,
    GameResult,
    PieceType,
)
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import (
    Coords,
    Square,
    coords_of,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Coords",
    "Square",
    "coords_of",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
