"""Tests for the Move value object."""

import pytest

from chessrules.core.enums import Color, Disambiguation, MoveType, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import A1, D1, D5, E1, E2, E4, E7, E8, F3, G1, H4, parse_square

WHITE_PAWN = Piece(Color.WHITE, PieceType.PAWN)
BLACK_PAWN = Piece(Color.BLACK, PieceType.PAWN)
WHITE_KNIGHT = Piece(Color.WHITE, PieceType.KNIGHT)


class TestValidation:
    def test_same_square_rejected(self) -> None:
        with pytest.raises(ValueError):
            Move(WHITE_PAWN, E2, E2)

    def test_promotion_required_on_last_rank(self) -> None:
        with pytest.raises(ValueError):
            Move(WHITE_PAWN, E7, E8)

    def test_promotion_only_for_last_rank_pawn(self) -> None:
        with pytest.raises(ValueError):
            Move(WHITE_KNIGHT, G1, F3, PieceType.QUEEN)
        with pytest.raises(ValueError):
            Move(WHITE_PAWN, E2, E4, PieceType.QUEEN)

    def test_promotion_piece_must_be_promotable(self) -> None:
        with pytest.raises(ValueError):
            Move(WHITE_PAWN, E7, E8, PieceType.KING)

    def test_black_pawn_promotes_on_first_rank(self) -> None:
        move = Move(BLACK_PAWN, parse_square("e2"), E1, PieceType.KNIGHT)
        assert move.is_promotion


class TestEquality:
    def test_flags_do_not_matter(self) -> None:
        plain = Move(WHITE_PAWN, E2, E4)
        flagged = Move(WHITE_PAWN, E2, E4, flags=MoveType.CHECK)
        assert plain == flagged
        assert hash(plain) == hash(flagged)

    def test_promotion_matters(self) -> None:
        queen = Move(WHITE_PAWN, E7, E8, PieceType.QUEEN)
        rook = Move(WHITE_PAWN, E7, E8, PieceType.ROOK)
        assert queen != rook


class TestNotation:
    def test_uci(self) -> None:
        assert Move(WHITE_KNIGHT, G1, F3).uci == "g1f3"
        assert Move(WHITE_PAWN, E7, E8, PieceType.QUEEN).uci == "e7e8q"

    def test_san_piece_move(self) -> None:
        assert Move(WHITE_KNIGHT, G1, F3).san == "Nf3"

    def test_san_pawn_capture(self) -> None:
        move = Move(WHITE_PAWN, E4, D5, captured=BLACK_PAWN, flags=MoveType.CAPTURE)
        assert move.is_capture
        assert str(move) == "exd5"

    def test_san_en_passant(self) -> None:
        move = Move(
            WHITE_PAWN,
            parse_square("e5"),
            parse_square("d6"),
            captured=BLACK_PAWN,
            flags=MoveType.EN_PASSANT_CAPTURE,
        )
        assert move.is_capture
        assert move.is_en_passant
        assert move.san == "exd6"

    def test_san_promotion_with_check(self) -> None:
        move = Move(WHITE_PAWN, E7, E8, PieceType.QUEEN, flags=MoveType.CHECK)
        assert move.san == "e8=Q+"

    def test_san_checkmate(self) -> None:
        queen = Piece(Color.BLACK, PieceType.QUEEN)
        move = Move(queen, parse_square("d8"), H4, flags=MoveType.CHECKMATE)
        assert move.is_checkmate
        assert move.san == "Qh4#"

    def test_san_castling(self) -> None:
        king = Piece(Color.WHITE, PieceType.KING)
        kingside = Move(king, E1, G1, flags=MoveType.CASTLE_KINGSIDE)
        queenside = Move(king, E1, parse_square("c1"), flags=MoveType.CASTLE_QUEENSIDE)
        assert kingside.is_castling and kingside.is_kingside_castling
        assert queenside.is_queenside_castling
        assert kingside.san == "O-O"
        assert queenside.san == "O-O-O"

    @pytest.mark.parametrize(
        ("disambiguation", "expected"),
        [
            (Disambiguation.NONE, "Rd1"),
            (Disambiguation.FILE, "Rad1"),
            (Disambiguation.RANK, "R1d1"),
            (Disambiguation.BOTH, "Ra1d1"),
        ],
    )
    def test_san_disambiguation(self, disambiguation: Disambiguation, expected: str) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK)
        assert Move(rook, A1, D1, disambiguation=disambiguation).san == expected
