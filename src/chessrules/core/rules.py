"""Draw rules: repetition, fifty-move rule, insufficient material."""

from __future__ import annotations

from chessrules.core.config import RulesConfig
from chessrules.core.enums import Color, GameState, PieceType
from chessrules.core.piece_set import PieceSet

_HEAVY_TYPES: tuple[PieceType, ...] = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)
_MINOR_TYPES: tuple[PieceType, ...] = (PieceType.KNIGHT, PieceType.BISHOP)


class Rules:
    """Static rule-checker for draw conditions.

    All three draws are declared automatically, and they take precedence over
    the check/checkmate/stalemate result of the move that produced them:
    repetition first, then the fifty-move rule, then insufficient material.
    """

    @staticmethod
    def is_insufficient_material(pieces: PieceSet) -> bool:
        """K vs K, K+B vs K, K+N vs K.

        Any other combination of minor pieces counts as sufficient, including
        two bishops on squares of the same color.
        """
        for color in Color:
            for ptype in _HEAVY_TYPES:
                if pieces.pieces_bitboard(color, ptype):
                    return False
        minors = sum(
            pieces.pieces_bitboard(color, ptype).bit_count()
            for color in Color
            for ptype in _MINOR_TYPES
        )
        return minors <= 1

    @staticmethod
    def is_fifty_move_rule(halfmove_clock: int, config: RulesConfig | None = None) -> bool:
        config = config or RulesConfig.standard()
        return halfmove_clock >= config.fifty_move_halfmoves

    @staticmethod
    def is_repetition(occurrences: int, config: RulesConfig | None = None) -> bool:
        config = config or RulesConfig.standard()
        return occurrences >= config.repetition_limit

    @staticmethod
    def classify(
        state: GameState,
        occurrences: int,
        halfmove_clock: int,
        pieces: PieceSet,
        config: RulesConfig | None = None,
    ) -> GameState:
        """Apply the draw rules on top of the move generator's *state*."""
        config = config or RulesConfig.standard()
        if Rules.is_repetition(occurrences, config):
            return GameState.DRAW_THREEFOLD_REPETITION
        if Rules.is_fifty_move_rule(halfmove_clock, config):
            return GameState.DRAW_FIFTY_MOVES
        if config.detect_insufficient_material and Rules.is_insufficient_material(pieces):
            return GameState.DRAW_INSUFFICIENT_MATERIAL
        return state
