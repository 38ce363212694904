"""Draw-rule configuration for a game."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.rules import FIFTY_MOVE_PLIES, REPETITION_THRESHOLD


@dataclass(frozen=True, slots=True)
class DrawRules:
    """Thresholds at which a game is declared drawn.

    Args:
        fifty_move_plies: Half-moves without capture or pawn move.
        repetition_threshold: Occurrences of the same position.
        insufficient_material: Whether dead material ends the game.
    """

    fifty_move_plies: int = FIFTY_MOVE_PLIES
    repetition_threshold: int = REPETITION_THRESHOLD
    insufficient_material: bool = True

    def __post_init__(self) -> None:
        if self.fifty_move_plies < 1:
            raise ValueError(f"fifty_move_plies must be positive: {self.fifty_move_plies}")
        if self.repetition_threshold < 2:
            raise ValueError(
                f"repetition_threshold must be at least 2: {self.repetition_threshold}"
            )

    @classmethod
    def standard(cls) -> DrawRules:
        """Fifty-move rule and threefold repetition end the game."""
        return cls()

    @classmethod
    def fide_automatic(cls) -> DrawRules:
        """Only the unclaimed FIDE limits: 75 moves, fivefold repetition."""
        return cls(fifty_move_plies=150, repetition_threshold=5)
