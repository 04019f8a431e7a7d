"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.enums import Disambiguation, MoveType, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, file_of, rank_of, relative_rank, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

_SAN_LETTERS: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Two moves are equal when they share origin, destination and promotion;
    the moving piece and the recorded flags do not take part in comparison.
    """

    piece: Piece = field(compare=False)
    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None
    captured: Piece | None = field(default=None, compare=False)
    flags: MoveType = field(default=MoveType.NONE, compare=False)
    disambiguation: Disambiguation = field(default=Disambiguation.NONE, compare=False)

    def __post_init__(self) -> None:
        if self.from_sq == self.to_sq:
            raise ValueError(f"Move must change square: {square_name(self.from_sq)}")
        promoting = self.piece.is_pawn and relative_rank(self.piece.color, self.to_sq) == 7
        if self.promotion is not None:
            if not self.promotion.is_promotable:
                raise ValueError(f"Invalid promotion piece: {self.promotion.name}")
            if not promoting:
                raise ValueError(
                    f"Only a pawn reaching the last rank can promote: {self.uci}"
                )
        elif promoting:
            raise ValueError(f"Pawn move to the last rank needs a promotion: {self.uci}")

    # ── Flags ────────────────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return bool(self.flags & MoveType.ANY_CAPTURE)

    @property
    def is_en_passant(self) -> bool:
        return bool(self.flags & MoveType.EN_PASSANT_CAPTURE)

    @property
    def is_check(self) -> bool:
        return bool(self.flags & MoveType.CHECK)

    @property
    def is_checkmate(self) -> bool:
        return bool(self.flags & MoveType.CHECKMATE)

    @property
    def is_castling(self) -> bool:
        return bool(self.flags & MoveType.ANY_CASTLE)

    @property
    def is_kingside_castling(self) -> bool:
        return bool(self.flags & MoveType.CASTLE_KINGSIDE)

    @property
    def is_queenside_castling(self) -> bool:
        return bool(self.flags & MoveType.CASTLE_QUEENSIDE)

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, e.g. ``e7e8q``."""
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def san(self) -> str:
        """Standard algebraic notation built from the recorded flags."""
        if self.is_kingside_castling:
            text = "O-O"
        elif self.is_queenside_castling:
            text = "O-O-O"
        else:
            text = self._piece_prefix()
            if self.is_capture:
                text += "x"
            text += square_name(self.to_sq)
            if self.promotion is not None:
                text += "=" + _SAN_LETTERS[self.promotion]
        if self.is_checkmate:
            text += "#"
        elif self.is_check:
            text += "+"
        return text

    def _piece_prefix(self) -> str:
        origin = square_name(self.from_sq)
        if self.piece.is_pawn:
            return origin[0] if self.is_capture else ""
        prefix = _SAN_LETTERS[self.piece.piece_type]
        if self.disambiguation == Disambiguation.FILE:
            prefix += "abcdefgh"[file_of(self.from_sq)]
        elif self.disambiguation == Disambiguation.RANK:
            prefix += str(rank_of(self.from_sq) + 1)
        elif self.disambiguation == Disambiguation.BOTH:
            prefix += origin
        return prefix

    def __str__(self) -> str:
        return self.san
