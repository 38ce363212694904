"""Coordinate move notation: ``e2e4``, ``e2 e4``, ``e7e8q``."""

from __future__ import annotations

import re

from gambit.core.enums import PieceType
from gambit.core.errors import IllegalMoveError
from gambit.core.move import Move
from gambit.core.position import Position
from gambit.core.rules import legal_moves
from gambit.core.types import parse_square

_PROMO_LETTERS: dict[str, PieceType] = {
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
}
_COORD_RE = re.compile(r"^([a-h][1-8])[\s-]*([a-h][1-8])\s*=?([nbrqNBRQ])?$")


def move_to_uci(move: Move) -> str:
    return move.uci


def parse_coordinates(text: str) -> Move:
    """Parse coordinate text into a bare :class:`Move` (no legality check)."""
    match = _COORD_RE.match(text.strip())
    if match is None:
        raise IllegalMoveError(f"Unreadable move: {text!r}", text)
    from_name, to_name, promo = match.groups()
    promotion = _PROMO_LETTERS[promo.lower()] if promo else None
    return Move(parse_square(from_name), parse_square(to_name), promotion=promotion)


def parse_uci(position: Position, text: str) -> Move:
    """Resolve coordinate *text* to the matching legal move in *position*."""
    wanted = parse_coordinates(text)
    for move in legal_moves(position):
        if move.matches(wanted):
            return move
    raise IllegalMoveError(f"Illegal move: {text}", text)
