"""Tests for the castling rights tracker."""

from chessrules.core.castling import (
    CASTLING_GEOMETRY,
    Castling,
    castling_right,
    geometry_for_king_move,
)
from chessrules.core.enums import CastlingRight, Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.piece_set import PieceSet
from chessrules.core.snapshot import PositionSnapshot
from chessrules.core.types import A1, A8, C1, D1, E1, E2, F1, G1, G8, H1, H8

WHITE_KING = Piece(Color.WHITE, PieceType.KING)
WHITE_ROOK = Piece(Color.WHITE, PieceType.ROOK)
BLACK_ROOK = Piece(Color.BLACK, PieceType.ROOK)


class TestRightsUpdates:
    def test_king_moved_drops_both(self) -> None:
        castling = Castling(CastlingRight.ALL)
        castling.king_moved(Color.WHITE)
        assert castling.rights == CastlingRight.BLACK_BOTH
        assert not castling.has_any(Color.WHITE)
        assert castling.has_any(Color.BLACK)

    def test_rook_moved_drops_one(self) -> None:
        castling = Castling(CastlingRight.ALL)
        castling.rook_moved(Color.BLACK, kingside=False)
        assert not castling.has_right(CastlingRight.BLACK_QUEENSIDE)
        assert castling.has_right(CastlingRight.BLACK_KINGSIDE)

    def test_piece_left_king_home(self) -> None:
        castling = Castling(CastlingRight.ALL)
        castling.piece_left(WHITE_KING, E1)
        assert castling.rights_of(Color.WHITE) == CastlingRight.NONE

    def test_piece_left_king_elsewhere(self) -> None:
        castling = Castling(CastlingRight.ALL)
        castling.piece_left(WHITE_KING, E2)
        assert castling.rights == CastlingRight.ALL

    def test_rook_leaving_corner(self) -> None:
        castling = Castling(CastlingRight.ALL)
        castling.piece_left(WHITE_ROOK, H1)
        assert castling.rights == CastlingRight.ALL & ~CastlingRight.WHITE_KINGSIDE

    def test_rook_captured_on_corner(self) -> None:
        castling = Castling(CastlingRight.ALL)
        castling.piece_left(BLACK_ROOK, A8)
        assert not castling.has_right(CastlingRight.BLACK_QUEENSIDE)

    def test_foreign_rook_on_corner_keeps_rights(self) -> None:
        castling = Castling(CastlingRight.ALL)
        castling.piece_left(WHITE_ROOK, H8)
        assert castling.rights == CastlingRight.ALL

    def test_reset_and_remove(self) -> None:
        castling = Castling()
        assert not castling.has_any()
        castling.reset(CastlingRight.WHITE_BOTH)
        castling.remove(CastlingRight.WHITE_QUEENSIDE)
        assert castling.rights == CastlingRight.WHITE_KINGSIDE

    def test_has_right_none(self) -> None:
        assert not Castling(CastlingRight.ALL).has_right(CastlingRight.NONE)

    def test_copy_is_independent(self) -> None:
        castling = Castling(CastlingRight.ALL)
        clone = castling.copy()
        clone.king_moved(Color.BLACK)
        assert castling.rights == CastlingRight.ALL
        assert clone != castling


class TestFormatting:
    def test_all(self) -> None:
        assert str(Castling(CastlingRight.ALL)) == "KQkq"

    def test_partial(self) -> None:
        rights = CastlingRight.WHITE_KINGSIDE | CastlingRight.BLACK_QUEENSIDE
        assert str(Castling(rights)) == "Kq"

    def test_none(self) -> None:
        assert str(Castling()) == "-"


class TestPrune:
    def test_initial_position_keeps_all(self) -> None:
        pieces = PieceSet.from_placement(PositionSnapshot.initial().placement)
        castling = Castling(CastlingRight.ALL)
        assert castling.prune(pieces) == CastlingRight.NONE
        assert castling.rights == CastlingRight.ALL

    def test_missing_rook_and_moved_king(self) -> None:
        pieces = PieceSet()
        pieces.set(WHITE_KING, E1)
        pieces.set(WHITE_ROOK, A1)
        pieces.set(Piece(Color.BLACK, PieceType.KING), G8)
        pieces.set(BLACK_ROOK, H8)
        castling = Castling(CastlingRight.ALL)
        dropped = castling.prune(pieces)
        assert castling.rights == CastlingRight.WHITE_QUEENSIDE
        assert dropped == (
            CastlingRight.WHITE_KINGSIDE | CastlingRight.BLACK_BOTH
        )


class TestGeometry:
    def test_white_kingside(self) -> None:
        geometry = CASTLING_GEOMETRY[CastlingRight.WHITE_KINGSIDE]
        assert (geometry.king_from, geometry.king_to) == (E1, G1)
        assert (geometry.rook_from, geometry.rook_to) == (H1, F1)
        assert geometry.crossed_square == F1

    def test_white_queenside_needs_b1_empty(self) -> None:
        geometry = CASTLING_GEOMETRY[CastlingRight.WHITE_QUEENSIDE]
        assert len(geometry.empty_squares) == 3
        assert geometry.crossed_square == D1
        assert geometry.king_to == C1

    def test_lookup_by_king_move(self) -> None:
        geometry = geometry_for_king_move(Color.WHITE, E1, G1)
        assert geometry is not None
        assert geometry.right == CastlingRight.WHITE_KINGSIDE
        assert geometry_for_king_move(Color.WHITE, E1, F1) is None
        assert geometry_for_king_move(Color.BLACK, E1, G1) is None

    def test_castling_right(self) -> None:
        assert castling_right(Color.BLACK, kingside=True) == CastlingRight.BLACK_KINGSIDE
        assert castling_right(Color.WHITE, kingside=False) == CastlingRight.WHITE_QUEENSIDE
