"""Ray directions between squares.

A direction is a fixed (rank, file) step. The eight straight and diagonal
directions are the rays sliders travel along; the eight knight jumps exist so
that every pair of squares a piece can move between has a direction.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from chessrules.core.types import Square, file_of, rank_of, square_at


class Direction(Enum):
    """Step between two squares, as (rank increase, file increase)."""

    UP = (1, 0)
    KNIGHT_UP_RIGHT = (2, 1)
    UP_RIGHT = (1, 1)
    KNIGHT_RIGHT_UP = (1, 2)
    RIGHT = (0, 1)
    KNIGHT_RIGHT_DOWN = (-1, 2)
    DOWN_RIGHT = (-1, 1)
    KNIGHT_DOWN_RIGHT = (-2, 1)
    DOWN = (-1, 0)
    KNIGHT_DOWN_LEFT = (-2, -1)
    DOWN_LEFT = (-1, -1)
    KNIGHT_LEFT_DOWN = (-1, -2)
    LEFT = (0, -1)
    KNIGHT_LEFT_UP = (1, -2)
    UP_LEFT = (1, -1)
    KNIGHT_UP_LEFT = (2, -1)
    NONE = (0, 0)

    def __init__(self, rank_step: int, file_step: int) -> None:
        self.rank_step = rank_step
        self.file_step = file_step

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_knight(self) -> bool:
        return abs(self.rank_step) + abs(self.file_step) > 2

    @property
    def is_vertical(self) -> bool:
        return self.file_step == 0 and self.rank_step != 0

    @property
    def is_horizontal(self) -> bool:
        return self.rank_step == 0 and self.file_step != 0

    @property
    def is_diagonal(self) -> bool:
        return abs(self.rank_step) == 1 and abs(self.file_step) == 1

    @property
    def is_straight(self) -> bool:
        """Vertical, horizontal or diagonal: a ray a slider can travel."""
        return self.is_vertical or self.is_horizontal or self.is_diagonal

    def is_reverse(self, other: Direction) -> bool:
        return (
            self is not Direction.NONE
            and self.rank_step == -other.rank_step
            and self.file_step == -other.file_step
        )

    # ── Walking ──────────────────────────────────────────────────────────

    def next(self, sq: Square) -> Square | None:
        """The square one step away, or ``None`` past the edge."""
        return square_at(rank_of(sq) + self.rank_step, file_of(sq) + self.file_step)

    def open_path(self, from_sq: Square, to_sq: Square | None = None) -> Iterator[Square]:
        """Squares strictly between *from_sq* and *to_sq* (or the board edge)."""
        if self is Direction.NONE:
            return
        sq = self.next(from_sq)
        while sq is not None and sq != to_sq:
            yield sq
            sq = self.next(sq)

    def closed_path(self, from_sq: Square, to_sq: Square) -> Iterator[Square]:
        """Squares after *from_sq* up to and including *to_sq*."""
        if self is Direction.NONE or from_sq == to_sq:
            return
        sq = self.next(from_sq)
        while sq is not None:
            yield sq
            if sq == to_sq:
                return
            sq = self.next(sq)

    @staticmethod
    def between(from_sq: Square, to_sq: Square) -> Direction:
        """Direction leading from *from_sq* to *to_sq* (``NONE`` if unrelated)."""
        return _BETWEEN[from_sq][to_sq]


STRAIGHT_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)
DIAGONAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP_LEFT,
    Direction.UP_RIGHT,
    Direction.DOWN_LEFT,
    Direction.DOWN_RIGHT,
)
ALL_RAY_DIRECTIONS: tuple[Direction, ...] = STRAIGHT_DIRECTIONS + DIAGONAL_DIRECTIONS

_BY_STEP: dict[tuple[int, int], Direction] = {d.value: d for d in Direction}


def _direction_for(from_sq: Square, to_sq: Square) -> Direction:
    ranks = rank_of(to_sq) - rank_of(from_sq)
    files = file_of(to_sq) - file_of(from_sq)
    if ranks == 0 and files == 0:
        return Direction.NONE
    if ranks == 0 or files == 0 or abs(ranks) == abs(files):
        step = ((ranks > 0) - (ranks < 0), (files > 0) - (files < 0))
        return _BY_STEP[step]
    return _BY_STEP.get((ranks, files), Direction.NONE)


_BETWEEN: tuple[tuple[Direction, ...], ...] = tuple(
    tuple(_direction_for(a, b) for b in range(64)) for a in range(64)
)
