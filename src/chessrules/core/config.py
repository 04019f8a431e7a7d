"""Rule-policy configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RulesConfig:
    """Thresholds used when classifying a position as drawn.

    Args:
        repetition_limit: Occurrences of one position that end the game.
        fifty_move_halfmoves: Half-move clock value that ends the game.
        detect_insufficient_material: Whether bare-material draws are declared.
    """

    repetition_limit: int = 3
    fifty_move_halfmoves: int = 100
    detect_insufficient_material: bool = True

    def __post_init__(self) -> None:
        if self.repetition_limit < 2:
            raise ValueError(f"repetition_limit must be >= 2: {self.repetition_limit}")
        if self.fifty_move_halfmoves < 1:
            raise ValueError(
                f"fifty_move_halfmoves must be >= 1: {self.fifty_move_halfmoves}"
            )

    @classmethod
    def standard(cls) -> RulesConfig:
        """Threefold repetition, fifty-move rule, insufficient material."""
        return cls()
