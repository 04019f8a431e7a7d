"""Perft - leaf-node counting for move-generator verification."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.board import Board


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth* using make/undo.

    The last ply is bulk-counted from the legal move list.
    """
    if depth < 0:
        raise ValueError(f"Depth must be >= 0: {depth}")
    if depth == 0:
        return 1
    moves = board.legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        board.make_move(move)
        nodes += perft(board, depth - 1)
        board.undo_move(move)
    return nodes


def divide(board: Board, depth: int) -> dict[str, int]:
    """Perft split by root move, keyed by UCI string."""
    if depth < 1:
        raise ValueError(f"Depth must be >= 1: {depth}")
    counts: dict[str, int] = {}
    for move in board.legal_moves():
        board.make_move(move)
        counts[move.uci] = perft(board, depth - 1)
        board.undo_move(move)
    return counts
