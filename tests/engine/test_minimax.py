"""Tests for the alpha-beta minimax engine."""

import pytest

from chesscore.core.enums import Color
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import position_from_fen
from chesscore.core.position import Position
from chesscore.engine.evaluate import MATE_SCORE, evaluate
from chesscore.engine.minimax import INF_SCORE, MinimaxEngine, minimax
from chesscore.engine.search import SearchCancelled, SearchLimits


def _full_minimax(position: Position, depth: int, color: Color) -> tuple[int, int]:
    """Unpruned reference search; returns (score, nodes)."""
    if depth == 0:
        return evaluate(position, color), 1
    moves = MoveGenerator(position).moves_for_player(color)
    if not moves:
        return evaluate(position, color), 1
    nodes = 1
    scores = []
    for move in moves:
        score, sub = _full_minimax(position.apply(move), depth - 1, color.opposite)
        scores.append(score)
        nodes += sub
    best = max(scores) if color == Color.WHITE else min(scores)
    return best, nodes


class TestMateInOne:
    def test_white_finds_back_rank_mate(self) -> None:
        pos, side = position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        move, score = minimax(pos, 1, side)
        assert move == Move.from_uci("a1a8", Color.WHITE)
        assert score == MATE_SCORE

    def test_black_finds_back_rank_mate(self) -> None:
        pos, side = position_from_fen("r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1")
        move, score = minimax(pos, 1, side)
        assert move == Move.from_uci("a8a1", Color.BLACK)
        assert score == -MATE_SCORE

    def test_mate_found_at_greater_depth(self) -> None:
        pos, side = position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        result = MinimaxEngine().search(pos, side, SearchLimits(max_depth=2))
        assert result.best_move == Move.from_uci("a1a8", Color.WHITE)
        assert result.score == MATE_SCORE


class TestNoMoves:
    def test_mated_side_gets_no_move(self) -> None:
        pos = Position.initial()
        for text, color in (
            ("f2f3", Color.WHITE),
            ("e7e5", Color.BLACK),
            ("g2g4", Color.WHITE),
            ("d8h4", Color.BLACK),
        ):
            pos = pos.apply(Move.from_uci(text, color))
        assert minimax(pos, 3, Color.WHITE) == (None, -MATE_SCORE)

    def test_stalemate_scored_like_mate_by_default(self) -> None:
        pos, side = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        result = MinimaxEngine().search(pos, side, SearchLimits(max_depth=2))
        assert result.best_move is None
        assert result.score == MATE_SCORE

    def test_stalemate_as_draw_when_requested(self) -> None:
        pos, side = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        limits = SearchLimits(max_depth=2, stalemate_is_draw=True)
        result = MinimaxEngine().search(pos, side, limits)
        assert result.best_move is None
        assert result.score == 0


class TestPruning:
    @pytest.mark.parametrize(
        "fen",
        [
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        ],
    )
    def test_same_score_as_full_minimax(self, fen: str) -> None:
        pos, side = position_from_fen(fen)
        engine = MinimaxEngine()
        result = engine.search(pos, side, SearchLimits(max_depth=2))
        expected, full_nodes = _full_minimax(pos, 2, side)
        assert result.score == expected
        assert result.nodes == engine.nodes
        assert engine.nodes < full_nodes

    @pytest.mark.slow
    @pytest.mark.parametrize(
        "fen",
        [
            "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1",
        ],
    )
    def test_same_score_as_full_minimax_depth_3(self, fen: str) -> None:
        pos, side = position_from_fen(fen)
        engine = MinimaxEngine()
        result = engine.search(pos, side, SearchLimits(max_depth=3))
        expected, full_nodes = _full_minimax(pos, 3, side)
        assert result.score == expected
        assert engine.nodes < full_nodes

    def test_best_move_is_legal(self) -> None:
        pos = Position.initial()
        move, _ = minimax(pos, 2, Color.WHITE)
        assert move in MoveGenerator(pos).moves_for_player(Color.WHITE)

    def test_result_reports_depth(self) -> None:
        result = MinimaxEngine().search(
            Position.initial(), Color.WHITE, SearchLimits(max_depth=1)
        )
        assert result.depth == 1
        assert result.nodes == 21

    def test_search_is_repeatable(self) -> None:
        pos = Position.initial()
        assert minimax(pos, 2, Color.BLACK) == minimax(pos, 2, Color.BLACK)

    def test_wide_window_is_default(self) -> None:
        pos = Position.initial()
        assert minimax(pos, 1, Color.WHITE) == minimax(
            pos, 1, Color.WHITE, -INF_SCORE, INF_SCORE
        )


class TestSearchControl:
    def test_invalid_depth(self) -> None:
        with pytest.raises(ValueError, match="depth"):
            MinimaxEngine().search(
                Position.initial(), Color.WHITE, SearchLimits(max_depth=0)
            )

    def test_cancel_before_start(self) -> None:
        with pytest.raises(SearchCancelled):
            MinimaxEngine().search(
                Position.initial(),
                Color.WHITE,
                SearchLimits(max_depth=3),
                is_cancelled=lambda: True,
            )

    def test_cancel_mid_search(self) -> None:
        calls = 0

        def cancel_after_50() -> bool:
            nonlocal calls
            calls += 1
            return calls > 50

        engine = MinimaxEngine()
        with pytest.raises(SearchCancelled):
            engine.search(
                Position.initial(),
                Color.WHITE,
                SearchLimits(max_depth=3),
                is_cancelled=cancel_after_50,
            )
        assert engine.nodes == 50

    def test_input_position_untouched(self) -> None:
        pos = Position.initial()
        minimax(pos, 2, Color.WHITE)
        assert pos == Position.initial()
