"""Pseudo-legal move generation and attack detection.

Nothing here checks whether a move leaves the mover's king in check, and
castling is offered without looking at attacked squares; both are the job of
:mod:`gambit.core.rules`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.enums import (
    PROMOTION_TYPES,
    CastleSide,
    CastlingRights,
    Color,
    MoveFlag,
    PieceType,
)
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, make_square

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Per color: (push direction, start rank, last rank before promotion)
_PAWN_GEOMETRY: dict[Color, tuple[int, int, int]] = {
    Color.WHITE: (8, 1, 6),
    Color.BLACK: (-8, 6, 1),
}


@dataclass(frozen=True, slots=True)
class CastlingPath:
    """Squares involved in one castling move."""

    side: CastleSide
    king_from: Square
    king_to: Square
    rook_from: Square
    # Square the king crosses between origin and destination.
    transit: Square
    # Squares that must be vacant between king and rook.
    empty: tuple[Square, ...]


def _castling_path(color: Color, side: CastleSide) -> CastlingPath:
    rank = 0 if color == Color.WHITE else 7
    if side == CastleSide.KINGSIDE:
        return CastlingPath(
            side=side,
            king_from=make_square(4, rank),
            king_to=make_square(6, rank),
            rook_from=make_square(7, rank),
            transit=make_square(5, rank),
            empty=(make_square(5, rank), make_square(6, rank)),
        )
    return CastlingPath(
        side=side,
        king_from=make_square(4, rank),
        king_to=make_square(2, rank),
        rook_from=make_square(0, rank),
        transit=make_square(3, rank),
        empty=(make_square(1, rank), make_square(2, rank), make_square(3, rank)),
    )


CASTLING_PATHS: dict[MoveFlag, dict[Color, CastlingPath]] = {
    MoveFlag.CASTLE_KINGSIDE: {
        c: _castling_path(c, CastleSide.KINGSIDE) for c in Color
    },
    MoveFlag.CASTLE_QUEENSIDE: {
        c: _castling_path(c, CastleSide.QUEENSIDE) for c in Color
    },
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_attack_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = []
    for sq in range(64):
        mask = 0
        for to_sq in targets[sq]:
            mask |= 1 << to_sq
        masks.append(mask)
    return tuple(masks)


def _build_pawn_attacker_masks(color: Color) -> tuple[int, ...]:
    """[sq] -> squares from which a *color* pawn attacks sq."""
    behind = -1 if color == Color.WHITE else 1
    masks: list[int] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = (sq >> 3) + behind
        mask = 0
        if 0 <= rank_idx < 8:
            for af in (file_idx - 1, file_idx + 1):
                if 0 <= af < 8:
                    mask |= 1 << make_square(af, rank_idx)
        masks.append(mask)
    return tuple(masks)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_ATTACK_MASKS = _build_attack_masks(_KNIGHT_TARGETS)
_KING_ATTACK_MASKS = _build_attack_masks(_KING_TARGETS)
_PAWN_ATTACKER_MASKS: dict[Color, tuple[int, ...]] = {
    c: _build_pawn_attacker_masks(c) for c in Color
}

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    kinds: tuple[PieceType, ...],
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                return True
            break
    return False


def is_square_attacked(position: Position, sq: Square, by_color: Color) -> bool:
    """Could any piece of *by_color* capture on *sq*, whoever is to move?"""
    board = position.board

    if board.pieces_bitboard(by_color, PieceType.PAWN) & _PAWN_ATTACKER_MASKS[by_color][sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_ATTACK_MASKS[sq]:
        return True

    queens = board.pieces_bitboard(by_color, PieceType.QUEEN)
    if (queens or board.pieces_bitboard(by_color, PieceType.BISHOP)) and _ray_hits(
        board, _BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS
    ):
        return True
    if (queens or board.pieces_bitboard(by_color, PieceType.ROOK)) and _ray_hits(
        board, _ROOK_RAYS[sq], by_color, _ORTHOGONAL_SLIDERS
    ):
        return True
    return False


def is_in_check(position: Position, color: Color | None = None) -> bool:
    """Is *color*'s king (default: side to move) attacked by the opponent?"""
    if color is None:
        color = position.side_to_move
    king_sq = position.board.king_square(color)
    return is_square_attacked(position, king_sq, color.opposite)


class MoveGenerator:
    """Pseudo-legal move generator bound to one :class:`Position`.

    Moves are produced per piece kind through :data:`_GENERATORS`, a fixed
    table from :class:`PieceType` to generator method.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves for the side to move."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        for sq, piece in self._board.items():
            if piece.color == color:
                _GENERATORS[piece.piece_type](self, sq, piece, moves)
        return moves

    def generate_legal_moves(self) -> list[Move]:
        """Pseudo-legal moves minus those that leave the king in check."""
        from gambit.core.rules import legal_moves

        return legal_moves(self._pos)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return is_square_attacked(self._pos, sq, by_color)

    def is_in_check(self, color: Color) -> bool:
        return is_in_check(self._pos, color)

    # -- Piece-specific generators -----------------------------------------

    def _push_pawn_move(
        self,
        moves: list[Move],
        from_sq: Square,
        to_sq: Square,
        piece: Piece,
        captured: Piece | None,
        promotes: bool,
    ) -> None:
        if promotes:
            for pt in PROMOTION_TYPES:
                moves.append(
                    Move(from_sq, to_sq, MoveFlag.PROMOTION, pt, piece, captured)
                )
        else:
            moves.append(Move(from_sq, to_sq, piece=piece, captured=captured))

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        step, start_rank, pre_promo_rank = _PAWN_GEOMETRY[piece.color]
        file_idx = sq & 7
        rank_idx = sq >> 3
        promotes = rank_idx == pre_promo_rank

        one_step = sq + step
        if board.is_empty(one_step):
            self._push_pawn_move(moves, sq, one_step, piece, None, promotes)
            two_step = one_step + step
            if rank_idx == start_rank and board.is_empty(two_step):
                moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN, piece=piece))

        ep = self._pos.en_passant
        for df in (-1, 1):
            if not 0 <= file_idx + df < 8:
                continue
            cap_sq = one_step + df
            target = board[cap_sq]
            if target is not None:
                if target.color != piece.color:
                    self._push_pawn_move(moves, sq, cap_sq, piece, target, promotes)
            elif cap_sq == ep:
                # The victim stands beside us, on the square it advanced to.
                victim = board[sq + df]
                if (
                    victim is not None
                    and victim.color != piece.color
                    and victim.piece_type == PieceType.PAWN
                ):
                    moves.append(
                        Move(sq, cap_sq, MoveFlag.EN_PASSANT, None, piece, victim)
                    )

    def _gen_knight(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        self._gen_steps(sq, piece, _KNIGHT_TARGETS[sq], moves)

    def _gen_bishop(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        self._gen_sliding(sq, piece, _BISHOP_RAYS[sq], moves)

    def _gen_rook(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        self._gen_sliding(sq, piece, _ROOK_RAYS[sq], moves)

    def _gen_queen(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        self._gen_sliding(sq, piece, _QUEEN_RAYS[sq], moves)

    def _gen_king(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        self._gen_steps(sq, piece, _KING_TARGETS[sq], moves)
        self._gen_castling(sq, piece, moves)

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(Move(sq, to_sq, piece=piece, captured=target))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, piece=piece))
                    continue
                if target.color != piece.color:
                    moves.append(Move(sq, to_sq, piece=piece, captured=target))
                break

    def _gen_castling(self, king_sq: Square, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        rights = self._pos.castling
        rook = Piece(piece.color, PieceType.ROOK)
        for flag, paths in CASTLING_PATHS.items():
            path = paths[piece.color]
            if not rights & CastlingRights.for_side(piece.color, path.side):
                continue
            if king_sq != path.king_from or board[path.rook_from] != rook:
                continue
            if all(board.is_empty(s) for s in path.empty):
                moves.append(Move(king_sq, path.king_to, flag, piece=piece))


_GENERATORS: dict[PieceType, Callable[[MoveGenerator, Square, Piece, list[Move]], None]] = {
    PieceType.PAWN: MoveGenerator._gen_pawn,
    PieceType.KNIGHT: MoveGenerator._gen_knight,
    PieceType.BISHOP: MoveGenerator._gen_bishop,
    PieceType.ROOK: MoveGenerator._gen_rook,
    PieceType.QUEEN: MoveGenerator._gen_queen,
    PieceType.KING: MoveGenerator._gen_king,
}


def pseudo_legal_moves(position: Position) -> list[Move]:
    """Moves obeying piece movement rules; may leave the mover in check."""
    return MoveGenerator(position).generate_pseudo_legal_moves()
