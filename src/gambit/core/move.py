"""Move value object.

A move produced by the generator is fully self-describing: it carries the
moving piece and the captured piece so it can be displayed, applied or
reversed without consulting the board again. Equality only looks at the
origin, destination, flag and promotion kind, so a move typed in by a user
compares equal to the generator's copy of the same move.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.enums import CastleSide, MoveFlag, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    piece: Piece | None = field(default=None, compare=False)
    captured: Piece | None = field(default=None, compare=False)

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def castle_side(self) -> CastleSide | None:
        if self.flag == MoveFlag.CASTLE_KINGSIDE:
            return CastleSide.KINGSIDE
        if self.flag == MoveFlag.CASTLE_QUEENSIDE:
            return CastleSide.QUEENSIDE
        return None

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def matches(self, other: Move) -> bool:
        """Whether *other* names this move.

        A NORMAL flag on *other* means "unspecified", so ``Move(E2, E4)``
        matches the generator's double-pawn push.
        """
        if self.from_sq != other.from_sq or self.to_sq != other.to_sq:
            return False
        if self.promotion != other.promotion:
            return False
        return other.flag == MoveFlag.NORMAL or other.flag == self.flag

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """Long-algebraic (UCI) notation, e.g. ``e7e8q``."""
        return str(self)
