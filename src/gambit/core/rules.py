"""Legality filter and high-level rules: check, mate, stalemate, draws."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import (
    CastlingRights,
    Color,
    GamePhase,
    GameResult,
    PieceType,
)
from gambit.core.errors import MalformedPositionError
from gambit.core.move_generator import (
    CASTLING_PATHS,
    is_in_check,
    is_square_attacked,
    pseudo_legal_moves,
)
from gambit.core.types import Square, is_light_square, rank_of, square_name

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position

FIFTY_MOVE_PLIES = 100
REPETITION_THRESHOLD = 3

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)


def _castling_is_safe(position: Position, move: Move) -> bool:
    """King not in check, not crossing or landing on an attacked square."""
    color = position.side_to_move
    path = CASTLING_PATHS[move.flag][color]
    opponent = color.opposite
    return not (
        is_square_attacked(position, path.king_from, opponent)
        or is_square_attacked(position, path.transit, opponent)
        or is_square_attacked(position, path.king_to, opponent)
    )


def legal_moves(position: Position) -> list[Move]:
    """Pseudo-legal moves that do not leave the mover's own king attacked.

    Each candidate is tried on a scratch copy; *position* is not touched.
    """
    scratch = position.copy()
    mover = position.side_to_move
    opponent = mover.opposite
    legal: list[Move] = []

    for move in pseudo_legal_moves(scratch):
        if move.is_castle and not _castling_is_safe(scratch, move):
            continue
        scratch.make_move(move)
        king_sq = scratch.board.king_square(mover)
        if not is_square_attacked(scratch, king_sq, opponent):
            legal.append(move)
        scratch.unmake_move(move)
    return legal


def legal_moves_from(position: Position, sq: Square) -> list[Move]:
    """Legal moves of the piece standing on *sq* (empty if none)."""
    return [m for m in legal_moves(position) if m.from_sq == sq]


def validate_position(position: Position) -> None:
    """Raise :class:`MalformedPositionError` unless *position* is playable.

    Used at deserialization boundaries; positions reached by legal play from
    a valid start never fail these checks.
    """
    board = position.board
    for color in Color:
        kings = board.pieces(color, PieceType.KING)
        if len(kings) != 1:
            raise MalformedPositionError(
                f"{color.name} must have exactly one king, found {len(kings)}"
            )
        if len(board.all_pieces(color)) > 16:
            raise MalformedPositionError(f"{color.name} has more than 16 pieces")
        pawns = board.pieces(color, PieceType.PAWN)
        if len(pawns) > 8:
            raise MalformedPositionError(f"{color.name} has more than 8 pawns")
        for sq in pawns:
            if rank_of(sq) in (0, 7):
                raise MalformedPositionError(
                    f"{color.name} pawn on back rank: {square_name(sq)}"
                )

    if is_in_check(position, position.side_to_move.opposite):
        raise MalformedPositionError("Side not to move is in check")

    for paths in CASTLING_PATHS.values():
        for color, path in paths.items():
            right = CastlingRights.for_side(color, path.side)
            if not position.castling & right:
                continue
            king = board[path.king_from]
            rook = board[path.rook_from]
            if (
                king is None
                or king.color != color
                or king.piece_type != PieceType.KING
                or rook is None
                or rook.color != color
                or rook.piece_type != PieceType.ROOK
            ):
                raise MalformedPositionError(
                    f"Castling right {right.name} without king and rook at home"
                )

    ep = position.en_passant
    if ep is not None:
        # White to move: Black just pushed, target on rank 6, pawn on rank 5.
        mover = position.side_to_move
        expected_rank = 5 if mover == Color.WHITE else 2
        pawn_sq = ep - 8 if mover == Color.WHITE else ep + 8
        origin_sq = ep + 8 if mover == Color.WHITE else ep - 8
        pawn = board[pawn_sq] if rank_of(ep) == expected_rank else None
        if (
            pawn is None
            or pawn.color == mover
            or pawn.piece_type != PieceType.PAWN
            or not board.is_empty(ep)
            or not board.is_empty(origin_sq)
        ):
            raise MalformedPositionError(
                f"Impossible en-passant target: {square_name(ep)}"
            )


class Rules:
    """Static rule checks that operate on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return is_in_check(position)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return is_in_check(position) and not legal_moves(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not is_in_check(position) and not legal_moves(position)

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, K+B vs K+B with same-colored bishops."""
        board = position.board
        total = board.occupied_count()

        if total == 2:
            return True

        if total == 3:
            return any(
                board.has_piece(color, kind)
                for color in Color
                for kind in _MINOR_PIECES
            )

        if total == 4:
            wb = board.pieces(Color.WHITE, PieceType.BISHOP)
            bb = board.pieces(Color.BLACK, PieceType.BISHOP)
            if len(wb) == 1 and len(bb) == 1:
                return is_light_square(wb[0]) == is_light_square(bb[0])

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position, plies: int = FIFTY_MOVE_PLIES) -> bool:
        return position.halfmove_clock >= plies

    @staticmethod
    def phase(
        position: Position,
        repetitions: int = 1,
        *,
        fifty_move_plies: int = FIFTY_MOVE_PLIES,
        repetition_threshold: int = REPETITION_THRESHOLD,
        insufficient_material: bool = True,
        legal: list[Move] | None = None,
    ) -> GamePhase:
        """Classify *position*.

        *repetitions* is how many times the position has occurred in the
        game so far, including now; only the move history knows that. Pass
        *legal* when the legal moves are already at hand.
        """
        in_check = is_in_check(position)
        if legal is None:
            legal = legal_moves(position)
        if not legal:
            return GamePhase.CHECKMATE if in_check else GamePhase.STALEMATE
        if insufficient_material and Rules.is_insufficient_material(position):
            return GamePhase.DRAW_BY_INSUFFICIENT_MATERIAL
        if repetitions >= repetition_threshold:
            return GamePhase.DRAW_BY_REPETITION
        if Rules.is_fifty_move_rule(position, fifty_move_plies):
            return GamePhase.DRAW_BY_FIFTY_MOVE
        return GamePhase.CHECK if in_check else GamePhase.ONGOING

    @staticmethod
    def game_result(position: Position, phase: GamePhase | None = None) -> GameResult:
        """Outcome implied by *phase* (computed when not given)."""
        if phase is None:
            phase = Rules.phase(position)
        if phase == GamePhase.CHECKMATE:
            if position.side_to_move == Color.WHITE:
                return GameResult.BLACK_WINS
            return GameResult.WHITE_WINS
        if phase.is_draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
