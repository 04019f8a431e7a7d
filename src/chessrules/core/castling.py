"""Castling rights tracker and castling geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import CastlingRight, Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1,
    A8,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
)

if TYPE_CHECKING:
    from chessrules.core.piece_set import PieceSet


@dataclass(frozen=True, slots=True)
class CastlingGeometry:
    """Squares involved in one castling move."""

    right: CastlingRight
    color: Color
    kingside: bool
    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    # Squares between king and rook, all of which must be empty.
    empty_squares: tuple[Square, ...]
    # Square the king passes over; it must not be attacked.
    crossed_square: Square


CASTLING_GEOMETRY: dict[CastlingRight, CastlingGeometry] = {
    CastlingRight.WHITE_KINGSIDE: CastlingGeometry(
        CastlingRight.WHITE_KINGSIDE, Color.WHITE, True, E1, G1, H1, F1, (F1, G1), F1
    ),
    CastlingRight.WHITE_QUEENSIDE: CastlingGeometry(
        CastlingRight.WHITE_QUEENSIDE, Color.WHITE, False, E1, C1, A1, D1, (B1, C1, D1), D1
    ),
    CastlingRight.BLACK_KINGSIDE: CastlingGeometry(
        CastlingRight.BLACK_KINGSIDE, Color.BLACK, True, E8, G8, H8, F8, (F8, G8), F8
    ),
    CastlingRight.BLACK_QUEENSIDE: CastlingGeometry(
        CastlingRight.BLACK_QUEENSIDE, Color.BLACK, False, E8, C8, A8, D8, (B8, C8, D8), D8
    ),
}

_RIGHTS_BY_COLOR: dict[Color, CastlingRight] = {
    Color.WHITE: CastlingRight.WHITE_BOTH,
    Color.BLACK: CastlingRight.BLACK_BOTH,
}

_KING_HOMES: dict[Color, Square] = {Color.WHITE: E1, Color.BLACK: E8}

# Rook corner -> right lost when that corner's rook moves or is captured.
_ROOK_CORNERS: dict[Square, CastlingRight] = {
    geometry.rook_from: right for right, geometry in CASTLING_GEOMETRY.items()
}

_FEN_LETTERS: tuple[tuple[CastlingRight, str], ...] = (
    (CastlingRight.WHITE_KINGSIDE, "K"),
    (CastlingRight.WHITE_QUEENSIDE, "Q"),
    (CastlingRight.BLACK_KINGSIDE, "k"),
    (CastlingRight.BLACK_QUEENSIDE, "q"),
)


def castling_right(color: Color, kingside: bool) -> CastlingRight:
    """The single right for *color* on the given wing."""
    if color == Color.WHITE:
        return CastlingRight.WHITE_KINGSIDE if kingside else CastlingRight.WHITE_QUEENSIDE
    return CastlingRight.BLACK_KINGSIDE if kingside else CastlingRight.BLACK_QUEENSIDE


def geometry_for_king_move(
    color: Color, from_sq: Square, to_sq: Square
) -> CastlingGeometry | None:
    """Castling geometry matching a king move, or ``None`` for a normal move."""
    for geometry in CASTLING_GEOMETRY.values():
        if geometry.color == color and geometry.king_from == from_sq and geometry.king_to == to_sq:
            return geometry
    return None


class Castling:
    """Mutable set of castling rights held by both sides.

    Rights are only ever removed during play; they come back through
    :meth:`reset` when a position is loaded or restored.
    """

    __slots__ = ("_rights",)

    def __init__(self, rights: CastlingRight = CastlingRight.NONE) -> None:
        self._rights = CastlingRight(rights)

    @property
    def rights(self) -> CastlingRight:
        return self._rights

    # ── Updates ──────────────────────────────────────────────────────────

    def king_moved(self, color: Color) -> None:
        self._rights &= ~_RIGHTS_BY_COLOR[color]

    def rook_moved(self, color: Color, kingside: bool) -> None:
        self._rights &= ~castling_right(color, kingside)

    def piece_left(self, piece: Piece, sq: Square) -> None:
        """Drop the rights lost because *piece* left (or was taken on) *sq*."""
        if piece.piece_type == PieceType.KING:
            if sq == _KING_HOMES[piece.color]:
                self.king_moved(piece.color)
        elif piece.piece_type == PieceType.ROOK:
            right = _ROOK_CORNERS.get(sq)
            if right is not None and CASTLING_GEOMETRY[right].color == piece.color:
                self._rights &= ~right

    def remove(self, right: CastlingRight) -> None:
        self._rights &= ~right

    def reset(self, rights: CastlingRight = CastlingRight.NONE) -> None:
        self._rights = CastlingRight(rights)

    def prune(self, pieces: PieceSet) -> CastlingRight:
        """Drop rights whose king or rook is off its original square.

        Returns the rights that were removed.
        """
        dropped = CastlingRight.NONE
        for right, geometry in CASTLING_GEOMETRY.items():
            if not self._rights & right:
                continue
            king = Piece(geometry.color, PieceType.KING)
            rook = Piece(geometry.color, PieceType.ROOK)
            if pieces[geometry.king_from] != king or pieces[geometry.rook_from] != rook:
                dropped |= right
        self._rights &= ~dropped
        return dropped

    # ── Queries ──────────────────────────────────────────────────────────

    def has_right(self, right: CastlingRight) -> bool:
        return (self._rights & right) == right and right != CastlingRight.NONE

    def has_any(self, color: Color | None = None) -> bool:
        if color is None:
            return self._rights != CastlingRight.NONE
        return bool(self._rights & _RIGHTS_BY_COLOR[color])

    def rights_of(self, color: Color) -> CastlingRight:
        return self._rights & _RIGHTS_BY_COLOR[color]

    def copy(self) -> Castling:
        return Castling(self._rights)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Castling):
            return NotImplemented
        return self._rights == other._rights

    def __str__(self) -> str:
        """FEN castling field, e.g. ``KQkq`` or ``-``."""
        text = "".join(letter for right, letter in _FEN_LETTERS if self._rights & right)
        return text or "-"

    def __repr__(self) -> str:
        return f"Castling({self})"
