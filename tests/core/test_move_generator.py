"""Perft tests and generator invariants.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import random

import pytest

from chesscore.core.enums import PROMOTION_TYPES, Color, PieceType
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import parse_square as sq


def perft(position: Position, color: Color, depth: int) -> int:
    """Count leaf nodes at *depth*."""
    if depth == 0:
        return 1
    moves = MoveGenerator(position).moves_for_player(color)
    if depth == 1:
        return len(moves)
    return sum(perft(position.apply(m), color.opposite, depth - 1) for m in moves)


def _destinations(position: Position, square: str) -> set[str]:
    return {str(m) for m in MoveGenerator(position).legal_moves_from(sq(square))}


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        pos, side = position_from_fen(STARTING_FEN)
        assert perft(pos, side, 1) == 20

    def test_depth_2(self) -> None:
        pos, side = position_from_fen(STARTING_FEN)
        assert perft(pos, side, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        pos, side = position_from_fen(STARTING_FEN)
        assert perft(pos, side, 3) == 8_902


# ── Position 3 (en passant, pins, rook endgame) ──────────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPosition3:
    def test_depth_1(self) -> None:
        pos, side = position_from_fen(POS3)
        assert perft(pos, side, 1) == 14

    def test_depth_2(self) -> None:
        pos, side = position_from_fen(POS3)
        assert perft(pos, side, 2) == 191

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        pos, side = position_from_fen(POS3)
        assert perft(pos, side, 3) == 2_812


# ── Kiwipete (castling, ep, promotions) ──────────────────────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        pos, side = position_from_fen(KIWIPETE)
        assert perft(pos, side, 1) == 48


# ── Piece movement ───────────────────────────────────────────────────────────


class TestPieceMoves:
    def test_e2_pawn_in_initial_position(self) -> None:
        assert _destinations(Position.initial(), "e2") == {"e2e3", "e2e4"}

    def test_knight_in_initial_position(self) -> None:
        assert _destinations(Position.initial(), "g1") == {"g1f3", "g1h3"}

    def test_blocked_pieces_have_no_moves(self) -> None:
        pos = Position.initial()
        for square in ("a1", "c1", "d1", "e1"):
            assert _destinations(pos, square) == set()

    def test_empty_square_has_no_moves(self) -> None:
        assert MoveGenerator(Position.initial()).legal_moves_from(sq("e4")) == []

    def test_blocked_double_push(self) -> None:
        pos, _ = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert _destinations(pos, "e2") == set()

    def test_kings_keep_their_distance(self) -> None:
        pos, _ = position_from_fen("8/8/8/3k4/8/3K4/8/8 w - - 0 1")
        dests = _destinations(pos, "d3")
        assert not dests & {"d3c4", "d3d4", "d3e4"}
        assert dests == {"d3c3", "d3e3", "d3c2", "d3d2", "d3e2"}

    def test_pinned_piece_cannot_leave_line(self) -> None:
        pos, _ = position_from_fen("4r1k1/8/8/8/8/8/4N3/4K3 w - - 0 1")
        assert _destinations(pos, "e2") == set()


class TestPromotionExpansion:
    def test_push_gives_four_choices(self) -> None:
        pos, _ = position_from_fen("8/P6k/8/8/8/8/8/K7 w - - 0 1")
        moves = MoveGenerator(pos).legal_moves_from(sq("a7"))
        assert len(moves) == 4
        assert [m.promotion.piece_type for m in moves] == list(PROMOTION_TYPES)

    def test_push_and_capture_give_eight(self) -> None:
        pos, _ = position_from_fen("1r5k/P7/8/8/8/8/8/K7 w - - 0 1")
        moves = MoveGenerator(pos).legal_moves_from(sq("a7"))
        assert len(moves) == 8
        assert {m.to_sq for m in moves} == {sq("a8"), sq("b8")}

    def test_black_promotes_on_first_rank(self) -> None:
        pos, _ = position_from_fen("k7/8/8/8/8/8/p7/7K b - - 0 1")
        moves = MoveGenerator(pos).legal_moves_from(sq("a2"))
        assert len(moves) == 4
        assert all(m.promotion.color == Color.BLACK for m in moves)
        assert all(m.to_sq == sq("a1") for m in moves)


class TestCastlingGeneration:
    def test_castling_available(self) -> None:
        pos, _ = position_from_fen("4k2r/8/8/8/8/8/8/R3K2R b KQk - 0 1")
        dests = _destinations(pos, "e1")
        assert "e1g1" in dests
        assert "e1c1" in dests

    def test_castling_gone_after_rook_captured(self) -> None:
        pos, _ = position_from_fen("4k2r/8/8/8/8/8/8/R3K2R b KQk - 0 1")
        pos = pos.apply(Move.from_uci("h8h1", Color.BLACK))
        assert "e1g1" not in _destinations(pos, "e1")

    def test_blocked_path(self) -> None:
        pos, _ = position_from_fen("4k3/8/8/8/8/8/8/RN2K1NR w KQ - 0 1")
        dests = _destinations(pos, "e1")
        assert "e1g1" not in dests
        assert "e1c1" not in dests

    def test_no_rights_no_castling(self) -> None:
        pos, _ = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w - - 0 1")
        dests = _destinations(pos, "e1")
        assert "e1g1" not in dests
        assert "e1c1" not in dests


class TestEnPassantGeneration:
    @staticmethod
    def _after(*moves: str) -> Position:
        pos = Position.initial()
        color = Color.WHITE
        for text in moves:
            pos = pos.apply(Move.from_uci(text, color))
            color = color.opposite
        return pos

    def test_capture_available_right_after_double_push(self) -> None:
        pos = self._after("e2e4", "a7a6", "e4e5", "d7d5")
        assert "e5d6" in _destinations(pos, "e5")

    def test_window_closes_after_one_ply_pair(self) -> None:
        pos = self._after("e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6")
        assert "e5d6" not in _destinations(pos, "e5")

    def test_from_fen(self) -> None:
        pos, _ = position_from_fen(
            "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3"
        )
        dests = _destinations(pos, "e5")
        assert "e5f6" in dests
        assert "e5d6" not in dests

    def test_requires_victim_pawn(self) -> None:
        # The en-passant square is set but nothing stands beside the pawn.
        board = position_from_fen("4k3/8/8/4P3/8/8/8/4K3 w - - 0 1")[0].board
        pos = Position(board, en_passant=sq("d6"))
        assert "e5d6" not in _destinations(pos, "e5")


# ── Invariants over random playouts ──────────────────────────────────────────


def _random_positions(seed: int, plies: int = 60) -> list[tuple[Position, Color]]:
    rng = random.Random(seed)
    pos = Position.initial()
    color = Color.WHITE
    seen = [(pos, color)]
    for _ in range(plies):
        moves = MoveGenerator(pos).moves_for_player(color)
        if not moves:
            break
        pos = pos.apply(rng.choice(moves))
        color = color.opposite
        seen.append((pos, color))
    return seen


class TestGeneratorInvariants:
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_legal_moves_never_leave_king_in_check(self, seed: int) -> None:
        for pos, color in _random_positions(seed):
            for move in MoveGenerator(pos).moves_for_player(color):
                assert not MoveGenerator(pos.apply(move)).is_in_check(color)

    @pytest.mark.parametrize("seed", [4, 5])
    def test_attacks_match_pseudo_legal_targets(self, seed: int) -> None:
        for pos, color in _random_positions(seed, plies=30):
            gen = MoveGenerator(pos)
            enemy = color.opposite
            own_squares = set(pos.board.pieces(color))
            for target in own_squares:
                attacked = gen.is_square_attacked(target, enemy)
                reached = any(
                    m.to_sq == target for m in gen.pseudo_legal_moves(enemy)
                )
                assert attacked == reached, f"square {target}"

    def test_pseudo_legal_order_follows_squares(self) -> None:
        moves = MoveGenerator(Position.initial()).pseudo_legal_moves(Color.WHITE)
        origins = [m.from_sq for m in moves]
        assert origins == sorted(origins)

    def test_moves_never_capture_own_pieces(self) -> None:
        for pos, color in _random_positions(9, plies=40):
            for move in MoveGenerator(pos).pseudo_legal_moves(color):
                target = pos.board[move.to_sq]
                assert target is None or target.color != color

    def test_promotion_piece_belongs_to_mover(self) -> None:
        pos, _ = position_from_fen("1r5k/P7/8/8/8/8/8/K7 w - - 0 1")
        for move in MoveGenerator(pos).moves_for_player(Color.WHITE):
            if move.promotion is not None:
                assert move.promotion == Piece(Color.WHITE, move.promotion.piece_type)
                assert move.promotion.piece_type != PieceType.KING
