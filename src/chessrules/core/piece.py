"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.direction import (
    ALL_RAY_DIRECTIONS,
    DIAGONAL_DIRECTIONS,
    STRAIGHT_DIRECTIONS,
    Direction,
)
from chessrules.core.enums import Color, PieceType

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

_SLIDER_DIRECTIONS: dict[PieceType, tuple[Direction, ...]] = {
    PieceType.BISHOP: DIAGONAL_DIRECTIONS,
    PieceType.ROOK: STRAIGHT_DIRECTIONS,
    PieceType.QUEEN: ALL_RAY_DIRECTIONS,
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    @property
    def is_rook(self) -> bool:
        return self.piece_type == PieceType.ROOK

    @property
    def is_slider(self) -> bool:
        return self.piece_type in _SLIDER_DIRECTIONS

    @property
    def directions(self) -> tuple[Direction, ...]:
        """Rays a slider travels along; empty for other pieces."""
        return _SLIDER_DIRECTIONS.get(self.piece_type, ())

    def can_move_along(self, direction: Direction) -> bool:
        """Whether this slider travels along *direction*."""
        return direction in self.directions

    def with_type(self, piece_type: PieceType) -> Piece:
        """Same color, different type (used for promotion)."""
        return Piece(self.color, piece_type)


ALL_PIECES: tuple[Piece, ...] = tuple(
    Piece(color, ptype) for color in Color for ptype in PieceType
)


def pieces_of(color: Color) -> tuple[Piece, ...]:
    """The six pieces of *color*, pawn first."""
    return ALL_PIECES[:6] if color == Color.WHITE else ALL_PIECES[6:]
