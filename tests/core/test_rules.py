"""Tests for draw detection and state classification."""

import pytest
from fen_support import snapshot_from_fen

from chessrules.core.config import RulesConfig
from chessrules.core.enums import GameState
from chessrules.core.piece_set import PieceSet
from chessrules.core.rules import Rules


def _pieces(fen: str) -> PieceSet:
    return PieceSet.from_placement(snapshot_from_fen(fen).placement)


class TestInsufficientMaterial:
    @pytest.mark.parametrize(
        "fen",
        [
            "4k3/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/2B1K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K1n1 w - - 0 1",
        ],
    )
    def test_bare_material(self, fen: str) -> None:
        assert Rules.is_insufficient_material(_pieces(fen))

    @pytest.mark.parametrize(
        "fen",
        [
            "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/R3K3 w - - 0 1",
            "3qk3/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/2B1KB2 w - - 0 1",
            "2b1k3/8/8/8/8/8/8/4K1N1 w - - 0 1",
        ],
    )
    def test_sufficient_material(self, fen: str) -> None:
        assert not Rules.is_insufficient_material(_pieces(fen))


class TestThresholds:
    def test_fifty_move_rule(self) -> None:
        assert not Rules.is_fifty_move_rule(99)
        assert Rules.is_fifty_move_rule(100)
        assert Rules.is_fifty_move_rule(20, RulesConfig(fifty_move_halfmoves=20))

    def test_repetition(self) -> None:
        assert not Rules.is_repetition(2)
        assert Rules.is_repetition(3)
        assert Rules.is_repetition(2, RulesConfig(repetition_limit=2))


class TestClassify:
    FULL_BOARD = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
    BARE_KINGS = "4k3/8/8/8/8/8/8/4K3 w - - 0 1"

    def test_passes_state_through(self) -> None:
        pieces = _pieces(self.FULL_BOARD)
        for state in (GameState.PLAYING, GameState.CHECK, GameState.CHECKMATE):
            assert Rules.classify(state, 1, 0, pieces) == state

    def test_repetition_beats_fifty_moves(self) -> None:
        result = Rules.classify(GameState.CHECK, 3, 100, _pieces(self.FULL_BOARD))
        assert result == GameState.DRAW_THREEFOLD_REPETITION

    def test_fifty_moves_beats_checkmate(self) -> None:
        result = Rules.classify(GameState.CHECKMATE, 1, 100, _pieces(self.FULL_BOARD))
        assert result == GameState.DRAW_FIFTY_MOVES

    def test_fifty_moves_beats_insufficient_material(self) -> None:
        result = Rules.classify(GameState.PLAYING, 1, 100, _pieces(self.BARE_KINGS))
        assert result == GameState.DRAW_FIFTY_MOVES

    def test_insufficient_material(self) -> None:
        result = Rules.classify(GameState.PLAYING, 1, 0, _pieces(self.BARE_KINGS))
        assert result == GameState.DRAW_INSUFFICIENT_MATERIAL

    def test_insufficient_material_can_be_disabled(self) -> None:
        config = RulesConfig(detect_insufficient_material=False)
        result = Rules.classify(GameState.PLAYING, 1, 0, _pieces(self.BARE_KINGS), config)
        assert result == GameState.PLAYING


class TestConfig:
    def test_defaults(self) -> None:
        config = RulesConfig.standard()
        assert config.repetition_limit == 3
        assert config.fifty_move_halfmoves == 100
        assert config.detect_insufficient_material

    @pytest.mark.parametrize(
        "kwargs",
        [{"repetition_limit": 1}, {"fifty_move_halfmoves": 0}],
    )
    def test_invalid_values(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            RulesConfig(**kwargs)
