"""HistoryStack - snapshots of every position reached in a game."""

from __future__ import annotations

from chessrules.core.snapshot import PositionSnapshot


class HistoryStack:
    """Snapshots indexed in lockstep with the move list.

    Entry ``i`` is the position before move ``i`` was played; index
    ``len(stack)`` is the live position. Browsing only moves the active
    index; entries are removed by :meth:`pop_last` alone.
    """

    __slots__ = ("_entries", "_live", "_active")

    def __init__(self, live: PositionSnapshot | None = None) -> None:
        self._entries: list[PositionSnapshot] = []
        self._live = live
        self._active = 0

    def reset(self, live: PositionSnapshot) -> None:
        """Drop all entries and start over from *live*."""
        self._entries.clear()
        self._live = live
        self._active = 0

    def push(self, live: PositionSnapshot) -> None:
        """Make *live* the new live position; the previous one becomes history."""
        if self._live is None:
            raise IndexError("Cannot push onto an uninitialised history")
        self._entries.append(self._live)
        self._live = live
        self._active = len(self._entries)

    def pop_last(self) -> PositionSnapshot:
        """Discard the live position; the last history entry becomes live."""
        if not self._entries:
            raise IndexError("History is empty")
        self._live = self._entries.pop()
        self._active = len(self._entries)
        return self._live

    def restore_to(self, index: int) -> PositionSnapshot:
        """Activate entry *index* (``len(self)`` is the live position)."""
        if not 0 <= index <= len(self._entries):
            raise IndexError(
                f"Invalid history index: {index}, history size: {len(self._entries)}"
            )
        self._active = index
        return self[index]

    @property
    def live(self) -> PositionSnapshot:
        if self._live is None:
            raise IndexError("History has no live position")
        return self._live

    @property
    def active_index(self) -> int:
        return self._active

    @property
    def active(self) -> PositionSnapshot:
        return self[self._active]

    @property
    def is_browsing(self) -> bool:
        return self._active != len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> PositionSnapshot:
        if index == len(self._entries):
            return self.live
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"Invalid history index: {index}, history size: {len(self._entries)}"
            )
        return self._entries[index]
