"""Core domain layer: pure chess rules with no dependencies.

Quick start::

    from gambit.core import legal_moves, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in legal_moves(pos):
        print(move)
"""

from gambit.core.board import Board
from gambit.core.enums import (
    CastleSide,
    CastlingRights,
    Color,
    GamePhase,
    GameResult,
    MoveFlag,
    PieceType,
)
from gambit.core.errors import (
    ChessError,
    IllegalMoveError,
    MalformedPositionError,
    NoHistoryError,
)
from gambit.core.move import Move
from gambit.core.move_generator import (
    MoveGenerator,
    is_in_check,
    is_square_attacked,
    pseudo_legal_moves,
)
from gambit.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_san,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import Rules, legal_moves, legal_moves_from, validate_position
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "GamePhase",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "MalformedPositionError",
    "NoHistoryError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Generation / legality
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    "legal_moves_from",
    "pseudo_legal_moves",
    "validate_position",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_san",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
