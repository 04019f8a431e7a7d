"""MoveList - played moves addressable by index or by (row, column)."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import BrowseType, Color
from chessrules.core.move import Move


class MoveList:
    """Linear record of the moves played, with a browse cursor.

    Tabular addressing lays the moves out two per row, White in column 0 and
    Black in column 1. When the game starts with a Black move, cell (0, 0)
    stays empty.
    """

    __slots__ = ("_moves", "_current", "_first_move_black")

    def __init__(self) -> None:
        self._moves: list[Move] = []
        self._current = -1
        self._first_move_black = False

    # ── Mutation ─────────────────────────────────────────────────────────

    def add_move(self, move: Move) -> None:
        """Append *move* and put the cursor on it."""
        if not self._moves and move.piece.color == Color.BLACK:
            self._first_move_black = True
        self._moves.append(move)
        self._current = len(self._moves) - 1

    def remove_last(self) -> Move:
        if not self._moves:
            raise IndexError("Move list is empty")
        move = self._moves.pop()
        self._current = min(self._current, len(self._moves) - 1)
        if not self._moves:
            self._first_move_black = False
        return move

    def clear(self) -> None:
        self._moves.clear()
        self._current = -1
        self._first_move_black = False

    def browse(self, browse_type: BrowseType) -> int:
        """Move the cursor and return the new current index."""
        size = len(self._moves)
        if browse_type == BrowseType.PREVIOUS:
            if self._current > -1:
                self._current -= 1
        elif browse_type == BrowseType.NEXT:
            if self._current < size - 1:
                self._current += 1
        elif browse_type == BrowseType.FIRST:
            self._current = -1
        elif browse_type == BrowseType.LAST:
            self._current = size - 1
        else:
            raise ValueError(f"Unknown browse type: {browse_type!r}")
        return self._current

    # ── Linear access ────────────────────────────────────────────────────

    @property
    def current_index(self) -> int:
        """Index of the current move; -1 means before the first move."""
        return self._current

    @property
    def current_move(self) -> Move | None:
        return self.get(self._current)

    @property
    def first_move_black(self) -> bool:
        return self._first_move_black

    def get(self, index: int) -> Move | None:
        return self._moves[index] if 0 <= index < len(self._moves) else None

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    def __getitem__(self, index: int) -> Move:
        return self._moves[index]

    # ── Tabular access ───────────────────────────────────────────────────

    def _index_of(self, row: int, column: int) -> int:
        return row * 2 + column - (1 if self._first_move_black else 0)

    @staticmethod
    def _check_column(column: int) -> None:
        if column not in (0, 1):
            raise ValueError(f"Invalid column: {column}, must be either 0 or 1")

    def move_at(self, row: int, column: int) -> Move | None:
        return self.get(self._index_of(row, column))

    @property
    def total_moves(self) -> int:
        """Number of rows needed to show every move."""
        cells = len(self._moves) + (1 if self._first_move_black else 0)
        return (cells + 1) // 2

    @property
    def row_for_current_move(self) -> int:
        if not 0 <= self._current < len(self._moves):
            return 0
        return (self._current + (1 if self._first_move_black else 0)) // 2

    def is_cell_after_current_move(self, row: int, column: int) -> bool:
        self._check_column(column)
        return self._current == -1 or self._index_of(row, column) > self._current

    def is_cell_at_current_move(self, row: int, column: int) -> bool:
        self._check_column(column)
        return self._current != -1 and self._index_of(row, column) == self._current

    def __repr__(self) -> str:
        return f"MoveList([{' '.join(m.san for m in self._moves)}])"
