"""Core enumerations and flags for the rules engine."""

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
    def is_white(self) -> bool:
        return self is Color.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def is_promotable(self) -> bool:
        """Whether a pawn may promote to this type."""
        return self in (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)


class MoveType(IntFlag):
    """Facts recorded on a played move."""

    NONE = 0
    CAPTURE = 1
    EN_PASSANT_CAPTURE = 2
    CHECK = 4
    CHECKMATE = 8
    CASTLE_KINGSIDE = 16
    CASTLE_QUEENSIDE = 32

    ANY_CAPTURE = CAPTURE | EN_PASSANT_CAPTURE
    ANY_CASTLE = CASTLE_KINGSIDE | CASTLE_QUEENSIDE


class Disambiguation(IntEnum):
    """Extra origin information needed to name a move unambiguously."""

    NONE = 0
    FILE = 1
    RANK = 2
    BOTH = 3


class CastlingRight(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameState(IntEnum):
    """Result of the position reached after a move."""

    # terminal
    CHECKMATE = auto()
    STALEMATE = auto()
    DRAW_THREEFOLD_REPETITION = auto()
    DRAW_INSUFFICIENT_MATERIAL = auto()
    DRAW_FIFTY_MOVES = auto()

    # still playing
    CHECK = auto()
    PLAYING = auto()

    @property
    def is_finished(self) -> bool:
        return self not in (GameState.CHECK, GameState.PLAYING)

    @property
    def is_draw(self) -> bool:
        return self in (
            GameState.STALEMATE,
            GameState.DRAW_THREEFOLD_REPETITION,
            GameState.DRAW_INSUFFICIENT_MATERIAL,
            GameState.DRAW_FIFTY_MOVES,
        )


class BrowseType(IntEnum):
    """How the move list cursor is moved."""

    PREVIOUS = auto()
    NEXT = auto()
    FIRST = auto()
    LAST = auto()
