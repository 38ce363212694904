"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.errors import IllegalMoveError
from gambit.core.move import Move
from gambit.core.move_generator import is_in_check
from gambit.core.position import Position
from gambit.core.rules import legal_moves
from gambit.core.types import FILE_NAMES, file_of, parse_square, rank_of, square_name

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?(?P<file>[a-h])?(?P<rank>[1-8])?x?"
    r"(?P<to>[a-h][1-8])(?:=?(?P<promo>[NBRQ]))?$"
)


def _disambiguation(legal: list[Move], move: Move) -> str:
    rivals = [
        m
        for m in legal
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and m.piece == move.piece
    ]
    if not rivals:
        return ""
    if not any(file_of(m.from_sq) == file_of(move.from_sq) for m in rivals):
        return FILE_NAMES[file_of(move.from_sq)]
    if not any(rank_of(m.from_sq) == rank_of(move.from_sq) for m in rivals):
        return str(rank_of(move.from_sq) + 1)
    return square_name(move.from_sq)


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    legal = legal_moves(position)
    full = next((m for m in legal if m.matches(move)), None)
    if full is None:
        raise IllegalMoveError(f"Illegal move: {move}", move)
    piece = full.piece
    assert piece is not None

    if full.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif full.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        san = ""
        if piece.piece_type == PieceType.PAWN:
            if full.is_capture:
                san += FILE_NAMES[file_of(full.from_sq)]
        else:
            san += _SAN_PIECE[piece.piece_type] + _disambiguation(legal, full)
        if full.is_capture:
            san += "x"
        san += square_name(full.to_sq)
        if full.promotion is not None:
            san += "=" + _SAN_PIECE[full.promotion]

    after = position.copy()
    after.make_move(full)
    if is_in_check(after):
        san += "+" if legal_moves(after) else "#"
    return san


def parse_san(position: Position, san: str) -> Move:
    """Resolve *san* to the matching legal move in *position*."""
    legal = legal_moves(position)
    clean = san.strip().rstrip("+#!?")

    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        flag = MoveFlag.CASTLE_KINGSIDE if len(clean) == 3 else MoveFlag.CASTLE_QUEENSIDE
        for m in legal:
            if m.flag == flag:
                return m
        raise IllegalMoveError(f"Illegal move: {san}", san)

    match = _SAN_RE.match(clean)
    if match is None:
        raise IllegalMoveError(f"Unreadable SAN: {san!r}", san)

    piece_type = _SAN_PIECE_REV.get(match["piece"] or "", PieceType.PAWN)
    to_sq = parse_square(match["to"])
    promotion = _SAN_PIECE_REV.get(match["promo"]) if match["promo"] else None
    from_file = FILE_NAMES.index(match["file"]) if match["file"] else None
    from_rank = int(match["rank"]) - 1 if match["rank"] else None

    candidates = [
        m
        for m in legal
        if m.to_sq == to_sq
        and m.piece is not None
        and m.piece.piece_type == piece_type
        and m.promotion == promotion
        and (from_file is None or file_of(m.from_sq) == from_file)
        and (from_rank is None or rank_of(m.from_sq) == from_rank)
    ]

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalMoveError(f"Illegal move: {san}", san)
    raise IllegalMoveError(f"Ambiguous move: {san} -> {candidates}", san)
