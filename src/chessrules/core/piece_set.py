"""PieceSet - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from chessrules.core.direction import Direction
from chessrules.core.enums import Color, PieceType
from chessrules.core.errors import InvariantViolation
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square, square_name

_PIECE_TYPE_COUNT = 6
_COLOR_COUNT = 2


class PieceSet:
    """Mutable 64-square placement with incremental piece indexes.

    Storage only: it knows nothing about whose turn it is or which moves are
    legal. Placing onto an occupied square or removing from an empty one is a
    programming error and raises :class:`InvariantViolation`.
    """

    __slots__ = ("_squares", "_piece_bitboards", "_color_bitboards", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color][piece_type-1] -> bitboard of occupied squares.
        self._piece_bitboards: list[list[int]] = [
            [0] * _PIECE_TYPE_COUNT for _ in range(_COLOR_COUNT)
        ]
        # [color] -> bitboard of all occupied squares for that color.
        self._color_bitboards: list[int] = [0] * _COLOR_COUNT
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None] * _COLOR_COUNT

    @staticmethod
    def _squares_from_bitboard(bitboard: int) -> list[Square]:
        squares: list[Square] = []
        while bitboard:
            lsb = bitboard & -bitboard
            squares.append(lsb.bit_length() - 1)
            bitboard ^= lsb
        return squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def get(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def set(self, piece: Piece, sq: Square) -> None:
        """Place *piece* on the empty square *sq*."""
        occupant = self._squares[sq]
        if occupant is not None:
            raise InvariantViolation(
                f"Cannot place {piece} on {square_name(sq)}: occupied by {occupant}"
            )
        self._squares[sq] = piece
        mask = 1 << sq
        color_idx = int(piece.color)
        self._piece_bitboards[color_idx][int(piece.piece_type) - 1] |= mask
        self._color_bitboards[color_idx] |= mask
        if piece.is_king:
            self._king_squares[color_idx] = sq

    def remove(self, sq: Square) -> Piece:
        """Take the piece off *sq* and return it."""
        piece = self._squares[sq]
        if piece is None:
            raise InvariantViolation(f"Cannot remove from empty square {square_name(sq)}")
        self._squares[sq] = None
        mask = ~(1 << sq)
        color_idx = int(piece.color)
        self._piece_bitboards[color_idx][int(piece.piece_type) - 1] &= mask
        self._color_bitboards[color_idx] &= mask
        if piece.is_king and self._king_squares[color_idx] == sq:
            self._king_squares[color_idx] = None
        return piece

    # -- Query helpers ------------------------------------------------------

    def group_of(self, piece: Piece) -> list[Square]:
        """Squares occupied by *piece*, in ascending order."""
        return self._squares_from_bitboard(
            self.pieces_bitboard(piece.color, piece.piece_type)
        )

    def group_size(self, piece: Piece) -> int:
        return self.pieces_bitboard(piece.color, piece.piece_type).bit_count()

    def pieces_bitboard(self, color: Color, piece_type: PieceType) -> int:
        """Bitboard of squares occupied by *color*'s *piece_type*."""
        return self._piece_bitboards[int(color)][int(piece_type) - 1]

    def occupied(self) -> int:
        """Bitboard of every occupied square."""
        return self._color_bitboards[0] | self._color_bitboards[1]

    def find_king(self, color: Color) -> Square | None:
        return self._king_squares[int(color)]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise InvariantViolation(f"No {color.name} king on board")
        return sq

    def is_ray_empty(self, direction: Direction, from_sq: Square, to_sq: Square) -> bool:
        """Whether every square strictly between the two squares is empty."""
        return all(self._squares[sq] is None for sq in direction.open_path(from_sq, to_sq))

    def is_ray_empty_ignoring_king(
        self, direction: Direction, from_sq: Square, to_sq: Square, color: Color
    ) -> bool:
        """Like :meth:`is_ray_empty` but *color*'s king does not block."""
        king = self._king_squares[int(color)]
        return all(
            self._squares[sq] is None or sq == king
            for sq in direction.open_path(from_sq, to_sq)
        )

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, a1 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    # -- Mutation / copying -------------------------------------------------

    def placement(self) -> tuple[Piece | None, ...]:
        """Immutable 64-entry copy of the placement, indexed by square."""
        return tuple(self._squares)

    @classmethod
    def from_placement(cls, placement: Iterable[Piece | None]) -> PieceSet:
        pieces = cls()
        for sq, piece in enumerate(placement):
            if piece is not None:
                pieces.set(piece, sq)
        return pieces

    def copy(self) -> PieceSet:
        b = PieceSet()
        b._squares = self._squares.copy()
        b._piece_bitboards = [row.copy() for row in self._piece_bitboards]
        b._color_bitboards = self._color_bitboards.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._piece_bitboards = [[0] * _PIECE_TYPE_COUNT for _ in range(_COLOR_COUNT)]
        self._color_bitboards = [0] * _COLOR_COUNT
        self._king_squares = [None] * _COLOR_COUNT

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PieceSet):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._squares[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
