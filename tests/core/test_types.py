"""Tests for square coordinate helpers."""

import pytest

from chesscore.core.types import (
    A1,
    A8,
    E2,
    H1,
    H8,
    coords_of,
    file_of,
    is_on_board,
    make_square,
    parse_square,
    rank_of,
    square_name,
)


class TestSquareBijection:
    def test_index_formula_is_rank_major(self) -> None:
        for rank in range(8):
            for file in range(8):
                sq = make_square(file, rank)
                assert sq == 8 * rank + file
                assert coords_of(sq) == (file, rank)

    def test_every_index_round_trips(self) -> None:
        for sq in range(64):
            assert make_square(file_of(sq), rank_of(sq)) == sq

    def test_corners(self) -> None:
        assert A8 == 0
        assert H8 == 7
        assert A1 == 56
        assert H1 == 63

    def test_e2_is_on_white_pawn_rank(self) -> None:
        assert coords_of(E2) == (4, 6)


class TestSquareNames:
    @pytest.mark.parametrize(
        ("name", "index"),
        [("a8", 0), ("h8", 7), ("e2", 52), ("a1", 56), ("h1", 63)],
    )
    def test_parse(self, name: str, index: int) -> None:
        assert parse_square(name) == index
        assert square_name(index) == name

    @pytest.mark.parametrize("bad", ["", "e", "i1", "a9", "a0", "e22"])
    def test_parse_rejects_garbage(self, bad: str) -> None:
        with pytest.raises(ValueError):
            parse_square(bad)

    def test_is_on_board(self) -> None:
        assert is_on_board(0, 0)
        assert is_on_board(7, 7)
        assert not is_on_board(-1, 3)
        assert not is_on_board(3, 8)
