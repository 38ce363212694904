"""gambit: a chess rules engine.

Tracks a position, generates and validates legal moves, detects check,
checkmate, stalemate and the automatic draws, and keeps a replayable move
history. Presentation, search and transport belong to the caller.
"""

from gambit.core import (
    STARTING_FEN,
    Color,
    GamePhase,
    GameResult,
    IllegalMoveError,
    MalformedPositionError,
    Move,
    NoHistoryError,
    Piece,
    PieceType,
    Position,
    position_from_fen,
    position_to_fen,
)
from gambit.game import DrawRules, GameState, MoveRecord

__version__ = "0.1.0"

__all__ = [
    "STARTING_FEN",
    "Color",
    "DrawRules",
    "GamePhase",
    "GameResult",
    "GameState",
    "IllegalMoveError",
    "MalformedPositionError",
    "Move",
    "MoveRecord",
    "NoHistoryError",
    "Piece",
    "PieceType",
    "Position",
    "position_from_fen",
    "position_to_fen",
]
