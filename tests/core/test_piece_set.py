"""Tests for Piece and PieceSet storage."""

import pytest

from chessrules.core.direction import Direction
from chessrules.core.enums import Color, PieceType
from chessrules.core.errors import InvariantViolation
from chessrules.core.piece import ALL_PIECES, Piece, pieces_of
from chessrules.core.piece_set import PieceSet
from chessrules.core.snapshot import PositionSnapshot
from chessrules.core.types import A1, C1, D1, E1, E4, E5, E8, H1

WHITE_KING = Piece(Color.WHITE, PieceType.KING)
WHITE_ROOK = Piece(Color.WHITE, PieceType.ROOK)
BLACK_KING = Piece(Color.BLACK, PieceType.KING)


class TestPiece:
    def test_twelve_pieces(self) -> None:
        assert len(ALL_PIECES) == 12
        assert len(set(ALL_PIECES)) == 12

    def test_fen_chars(self) -> None:
        assert str(WHITE_ROOK) == "R"
        assert str(Piece(Color.BLACK, PieceType.KNIGHT)) == "n"
        assert Piece.from_char("q") == Piece(Color.BLACK, PieceType.QUEEN)

    def test_from_char_invalid(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_sliders(self) -> None:
        assert WHITE_ROOK.is_slider
        assert WHITE_ROOK.can_move_along(Direction.UP)
        assert not WHITE_ROOK.can_move_along(Direction.UP_LEFT)
        assert Piece(Color.WHITE, PieceType.QUEEN).can_move_along(Direction.UP_LEFT)
        assert not WHITE_KING.is_slider
        assert WHITE_KING.directions == ()

    def test_with_type(self) -> None:
        pawn = Piece(Color.BLACK, PieceType.PAWN)
        assert pawn.with_type(PieceType.QUEEN) == Piece(Color.BLACK, PieceType.QUEEN)

    def test_pieces_of(self) -> None:
        assert all(p.color == Color.BLACK for p in pieces_of(Color.BLACK))
        assert len(pieces_of(Color.WHITE)) == 6


class TestPieceSet:
    def test_set_and_get(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_ROOK, A1)
        assert pieces[A1] == WHITE_ROOK
        assert pieces.get(A1) == WHITE_ROOK
        assert pieces.is_empty(H1)

    def test_set_occupied_raises(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_ROOK, A1)
        with pytest.raises(InvariantViolation):
            pieces.set(WHITE_KING, A1)
        assert pieces[A1] == WHITE_ROOK

    def test_remove(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_ROOK, A1)
        assert pieces.remove(A1) == WHITE_ROOK
        assert pieces[A1] is None
        assert pieces.pieces_bitboard(Color.WHITE, PieceType.ROOK) == 0

    def test_remove_empty_raises(self) -> None:
        with pytest.raises(InvariantViolation):
            PieceSet().remove(E4)

    def test_king_square(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_KING, E1)
        assert pieces.king_square(Color.WHITE) == E1
        assert pieces.find_king(Color.BLACK) is None
        with pytest.raises(InvariantViolation):
            pieces.king_square(Color.BLACK)

    def test_king_cache_follows_removal(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_KING, E1)
        pieces.remove(E1)
        assert pieces.find_king(Color.WHITE) is None

    def test_groups(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_ROOK, H1)
        pieces.set(WHITE_ROOK, A1)
        assert pieces.group_of(WHITE_ROOK) == [A1, H1]
        assert pieces.group_size(WHITE_ROOK) == 2
        assert pieces.group_size(BLACK_KING) == 0

    def test_occupied(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_ROOK, A1)
        pieces.set(BLACK_KING, E8)
        assert pieces.occupied() == (1 << A1) | (1 << E8)

    def test_ray_empty(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_ROOK, A1)
        pieces.set(WHITE_KING, E1)
        assert pieces.is_ray_empty(Direction.RIGHT, A1, D1)
        assert pieces.is_ray_empty(Direction.RIGHT, A1, E1)
        assert not pieces.is_ray_empty(Direction.RIGHT, A1, H1)

    def test_ray_empty_ignoring_king(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_KING, E1)
        pieces.set(WHITE_ROOK, C1)
        assert pieces.is_ray_empty_ignoring_king(Direction.RIGHT, D1, H1, Color.WHITE)
        assert not pieces.is_ray_empty_ignoring_king(Direction.RIGHT, D1, H1, Color.BLACK)
        assert not pieces.is_ray_empty_ignoring_king(Direction.RIGHT, A1, D1, Color.WHITE)

    def test_placement_round_trip(self) -> None:
        snapshot = PositionSnapshot.initial()
        pieces = PieceSet.from_placement(snapshot.placement)
        assert pieces.placement() == snapshot.placement
        assert pieces.king_square(Color.BLACK) == E8

    def test_copy_is_independent(self) -> None:
        pieces = PieceSet.from_placement(PositionSnapshot.initial().placement)
        clone = pieces.copy()
        clone.remove(E1)
        assert pieces[E1] == WHITE_KING
        assert clone != pieces

    def test_clear(self) -> None:
        pieces = PieceSet.from_placement(PositionSnapshot.initial().placement)
        pieces.clear()
        assert pieces.occupied() == 0
        assert pieces == PieceSet()

    def test_iteration(self) -> None:
        pieces = PieceSet()
        pieces.set(BLACK_KING, E5)
        pieces.set(WHITE_KING, E1)
        assert list(pieces) == [(E1, WHITE_KING), (E5, BLACK_KING)]

    def test_repr(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_KING, E1)
        assert repr(pieces).splitlines()[7] == "1 . . . . K . . ."
