"""Exception hierarchy for the rules engine.

None of these are fatal: an illegal move or an empty undo stack is an
ordinary outcome for an interactive caller. Defects in the engine itself are
guarded with assertions instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.move import Move


class ChessError(Exception):
    """Base class for all engine errors."""


class IllegalMoveError(ChessError, ValueError):
    """A move is not a member of the current legal-move set."""

    def __init__(self, message: str, move: Move | str | None = None) -> None:
        super().__init__(message)
        self.move = move


class NoHistoryError(ChessError, IndexError):
    """Undo was requested with an empty move history."""


class MalformedPositionError(ChessError, ValueError):
    """A position loaded from outside the engine violates the rules of chess."""
