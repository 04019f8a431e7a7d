"""Zobrist hashing keys and position repetition tracking."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from chessrules.core.enums import CastlingRight, Color
from chessrules.core.piece import Piece
from chessrules.core.types import Square, file_of

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece_set import PieceSet

_SEED: Final = 0xA5B3C7D9E1F23412
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF


def _splitmix64(state: int) -> int:
    """Deterministic 64-bit bit-mixer suitable for static key generation."""
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _nth_key(index: int) -> int:
    return _splitmix64(_SEED + index)


_PIECE_KEYS: Final = tuple(
    tuple(
        tuple(_nth_key((color * 384) + (ptype * 64) + sq) for sq in range(64))
        for ptype in range(6)
    )
    for color in range(2)
)
_SIDE_TO_MOVE_KEY: Final = _nth_key(2 * 6 * 64)
_CASTLING_KEYS: Final = tuple(_nth_key((2 * 6 * 64) + 1 + idx) for idx in range(16))
_EN_PASSANT_FILE_KEYS: Final = tuple(
    _nth_key((2 * 6 * 64) + 1 + 16 + idx) for idx in range(8)
)


def piece_key(piece: Piece, sq: Square) -> int:
    """Hash key for a specific piece on a square."""
    return _PIECE_KEYS[int(piece.color)][int(piece.piece_type) - 1][sq]


def castling_key(castling: CastlingRight) -> int:
    """Hash key for castling rights state."""
    return _CASTLING_KEYS[int(castling) & 0xF]


def en_passant_key(ep_square: Square) -> int:
    """Hash key for the file of an en passant target square."""
    return _EN_PASSANT_FILE_KEYS[file_of(ep_square)]


def position_key(
    pieces: PieceSet,
    side_to_move: Color,
    castling: CastlingRight,
    en_passant: Square | None,
) -> int:
    """Zobrist key of a position; move clocks do not take part."""
    key = 0
    for sq, piece in pieces:
        key ^= piece_key(piece, sq)
    if side_to_move == Color.BLACK:
        key ^= _SIDE_TO_MOVE_KEY
    key ^= castling_key(castling)
    if en_passant is not None:
        key ^= en_passant_key(en_passant)
    return key


class PositionHasher:
    """Counts how often each position has occurred in the current game."""

    __slots__ = ("_counts",)

    def __init__(self) -> None:
        self._counts: dict[int, int] = {}

    def hash(self, board: Board) -> int:
        return position_key(
            board.pieces, board.playing_color, board.castling_rights, board.en_passant
        )

    def record_occurrence(self, key: int) -> int:
        """Count one more occurrence of *key* and return the new total."""
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return count

    def forget(self, key: int) -> None:
        """Undo one occurrence of *key*; counts never drop below zero."""
        count = self._counts.get(key, 0) - 1
        if count > 0:
            self._counts[key] = count
        else:
            self._counts.pop(key, None)

    def count(self, key: int) -> int:
        return self._counts.get(key, 0)

    def clear(self) -> None:
        self._counts.clear()

    def __len__(self) -> int:
        return len(self._counts)
