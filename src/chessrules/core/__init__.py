"""Core rules layer: board state, move generation and game-state detection.

Quick start::

    from chessrules.core import Board, PositionSnapshot, parse_square

    board = Board()
    board.load_position(PositionSnapshot.initial())
    state = board.make_player_move(parse_square("e2"), parse_square("e4"))
    for move in board.legal_moves():
        print(move.uci)
"""

from chessrules.core.board import Board
from chessrules.core.castling import CASTLING_GEOMETRY, Castling, CastlingGeometry
from chessrules.core.config import RulesConfig
from chessrules.core.direction import Direction
from chessrules.core.enums import (
    BrowseType,
    CastlingRight,
    Color,
    Disambiguation,
    GameState,
    MoveType,
    PieceType,
)
from chessrules.core.errors import (
    ChessRulesError,
    IllegalMoveError,
    InvalidPositionError,
    InvariantViolation,
    SetupModeError,
)
from chessrules.core.history import HistoryStack
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.move_list import MoveList
from chessrules.core.perft import divide, perft
from chessrules.core.piece import ALL_PIECES, Piece
from chessrules.core.piece_set import PieceSet
from chessrules.core.rules import Rules
from chessrules.core.snapshot import PositionSnapshot
from chessrules.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)
from chessrules.core.zobrist import PositionHasher

__all__ = [
    # Enums / flags
    "BrowseType",
    "CastlingRight",
    "Color",
    "Disambiguation",
    "GameState",
    "MoveType",
    "PieceType",
    # Types / helpers
    "Direction",
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Errors / config
    "ChessRulesError",
    "IllegalMoveError",
    "InvalidPositionError",
    "InvariantViolation",
    "RulesConfig",
    "SetupModeError",
    # Domain objects
    "ALL_PIECES",
    "Board",
    "CASTLING_GEOMETRY",
    "Castling",
    "CastlingGeometry",
    "HistoryStack",
    "Move",
    "MoveGenerator",
    "MoveList",
    "Piece",
    "PieceSet",
    "PositionHasher",
    "PositionSnapshot",
    "Rules",
    # Verification
    "divide",
    "perft",
]
