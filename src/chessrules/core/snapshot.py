"""PositionSnapshot - immutable record of a full position."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from chessrules.core.enums import CastlingRight, Color, PieceType
from chessrules.core.errors import InvalidPositionError
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True)
class PositionSnapshot:
    """Placement, side to move, castling rights, en passant and clocks.

    This is the only shape in which positions enter and leave a
    :class:`~chessrules.core.board.Board`. ``placement`` always holds 64
    entries indexed by square; ``captured`` lists the pieces taken so far in
    capture order.
    """

    placement: tuple[Piece | None, ...]
    side_to_move: Color = Color.WHITE
    castling: CastlingRight = CastlingRight.NONE
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    captured: tuple[Piece, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "placement", tuple(self.placement))
        object.__setattr__(self, "captured", tuple(self.captured))
        if len(self.placement) != 64:
            raise InvalidPositionError(
                f"Placement must have 64 squares, got {len(self.placement)}"
            )
        if self.en_passant is not None and not 0 <= self.en_passant < 64:
            raise InvalidPositionError(f"Invalid en passant square: {self.en_passant}")
        if self.halfmove_clock < 0:
            raise InvalidPositionError(f"Negative half-move clock: {self.halfmove_clock}")
        if self.fullmove_number < 1:
            raise InvalidPositionError(f"Full-move number must be >= 1: {self.fullmove_number}")

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def initial(cls) -> PositionSnapshot:
        """Standard starting position."""
        placement: list[Piece | None] = [None] * 64
        for f, pt in enumerate(_BACK_RANK):
            placement[make_square(f, 0)] = Piece(Color.WHITE, pt)
            placement[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            placement[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            placement[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return cls(tuple(placement), castling=CastlingRight.ALL)

    @classmethod
    def from_pieces(
        cls,
        pieces: Mapping[Square, Piece],
        side_to_move: Color = Color.WHITE,
        castling: CastlingRight = CastlingRight.NONE,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        captured: Iterable[Piece] = (),
    ) -> PositionSnapshot:
        """Build a snapshot from an occupied-squares-only mapping."""
        placement: list[Piece | None] = [None] * 64
        for sq, piece in pieces.items():
            if not 0 <= sq < 64:
                raise InvalidPositionError(f"Invalid square index: {sq}")
            placement[sq] = piece
        return cls(
            tuple(placement),
            side_to_move,
            castling,
            en_passant,
            halfmove_clock,
            fullmove_number,
            tuple(captured),
        )

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.placement[sq]

    def pieces(self) -> dict[Square, Piece]:
        """Occupied squares only."""
        return {sq: p for sq, p in enumerate(self.placement) if p is not None}

    def __str__(self) -> str:
        ep = square_name(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"{len(self.pieces())} pieces, {self.side_to_move} to move, "
            f"castling {int(self.castling):04b}, ep {ep}, "
            f"clocks {self.halfmove_clock}/{self.fullmove_number}"
        )
