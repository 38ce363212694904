"""Zobrist keys identifying a position for repetition counting.

A key covers piece placement, side to move, castling rights and the
en-passant target. Clocks are deliberately not part of it: two positions
that differ only in their move counters are the same position for the
repetition rule.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gambit.core.enums import CastlingRights, Color

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.piece import Piece
    from gambit.core.types import Square

_SEED: Final = 0xA5B3C7D9E1F23412
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF


def _splitmix64(state: int) -> int:
    """Deterministic 64-bit bit-mixer suitable for static key generation."""
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _nth_key(index: int) -> int:
    return _splitmix64(_SEED + index)


# [color][piece_type-1][square]
_PIECE_KEYS: Final = tuple(
    tuple(
        tuple(_nth_key(color * 384 + ptype * 64 + sq) for sq in range(64))
        for ptype in range(6)
    )
    for color in range(2)
)
_BLACK_TO_MOVE_KEY: Final = _nth_key(768)
_CASTLING_KEYS: Final = tuple(_nth_key(769 + idx) for idx in range(16))
_EN_PASSANT_KEYS: Final = tuple(_nth_key(785 + sq) for sq in range(64))


def piece_key(piece: Piece, sq: Square) -> int:
    """Hash key for a specific piece on a square."""
    return _PIECE_KEYS[int(piece.color)][piece.piece_type - 1][sq]


def side_key(side: Color) -> int:
    """Hash toggle key for side to move (zero for white)."""
    return _BLACK_TO_MOVE_KEY if side == Color.BLACK else 0


def castling_key(castling: CastlingRights) -> int:
    """Hash key for castling rights state."""
    return _CASTLING_KEYS[int(castling) & 0xF]


def en_passant_key(ep_square: Square | None) -> int:
    """Hash key for an en passant target square (zero when there is none)."""
    return 0 if ep_square is None else _EN_PASSANT_KEYS[ep_square]


def position_key(
    board: Board,
    side: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> int:
    """Full key computed from scratch."""
    key = side_key(side) ^ castling_key(castling) ^ en_passant_key(en_passant)
    for sq, piece in board.items():
        key ^= piece_key(piece, sq)
    return key
