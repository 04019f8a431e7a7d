"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from fen_support import STARTING_FEN, snapshot_from_fen

from chessrules.core.board import Board
from chessrules.core.enums import PieceType
from chessrules.core.types import parse_square


@pytest.fixture
def board() -> Board:
    """A board set up at the standard starting position."""
    b = Board()
    b.load_position(snapshot_from_fen(STARTING_FEN))
    return b


@pytest.fixture
def board_from_fen() -> Callable[[str], Board]:
    """Factory building a loaded board from a FEN string."""

    def _make(fen: str) -> Board:
        b = Board()
        b.load_position(snapshot_from_fen(fen))
        return b

    return _make


@pytest.fixture
def play() -> Callable[..., None]:
    """Play a sequence of UCI moves (``e2e4``, ``e7e8q``) on a board."""
    promotions = {
        "q": PieceType.QUEEN,
        "r": PieceType.ROOK,
        "b": PieceType.BISHOP,
        "n": PieceType.KNIGHT,
    }

    def _play(b: Board, *moves: str) -> None:
        for uci in moves:
            promotion = promotions[uci[4]] if len(uci) == 5 else None
            b.make_player_move(parse_square(uci[:2]), parse_square(uci[2:4]), promotion)

    return _play
