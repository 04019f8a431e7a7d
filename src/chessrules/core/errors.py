"""Exceptions raised by the rules engine."""

from __future__ import annotations


class ChessRulesError(Exception):
    """Base class for every error raised by :mod:`chessrules`."""


class IllegalMoveError(ChessRulesError, ValueError):
    """A requested move cannot be played. The board is left unchanged."""


class SetupModeError(ChessRulesError, ValueError):
    """A setup-mode edit was refused. The board is left unchanged."""


class InvalidPositionError(ChessRulesError, ValueError):
    """A position snapshot cannot be loaded."""


class InvariantViolation(ChessRulesError, RuntimeError):
    """The internal board model is inconsistent.

    Raised for programming errors only (overwriting an occupied square,
    removing from an empty one, a missing castling rook). Callers should not
    try to recover from it.
    """
