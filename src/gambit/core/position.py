"""Position: complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, file_of, make_square, rank_of
from gambit.core.zobrist import (
    castling_key,
    en_passant_key,
    piece_key,
    position_key,
    side_key,
)

# Castle flag -> (rook origin file, rook destination file)
_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_BOTH,
    Color.BLACK: CastlingRights.BLACK_BOTH,
}


def en_passant_capture_square(move: Move) -> Square:
    """Square of the pawn removed by an en-passant *move*."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


@dataclass(slots=True)
class _UndoState:
    """Snapshot saved before each move so it can be taken back."""

    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    captured_piece: Piece | None
    key: int


class Position:
    """Board, side to move, castling rights, en-passant target and clocks.

    Two positions compare equal when all six fields match. The repetition
    rule uses :attr:`repetition_key` instead, which ignores the clocks.

    :meth:`make_move` / :meth:`unmake_move` mutate in place and are meant for
    scratch copies (legality checks, notation). Live game state is owned by
    :class:`~gambit.game.state.GameState`, which only hands out copies.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_key",
        "_undo_stack",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._key = position_key(self.board, side_to_move, castling, en_passant)
        self._undo_stack: list[_UndoState] = []

    @classmethod
    def initial(cls) -> Position:
        return cls()

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move* (assumed pseudo-legal), remembering how to undo it."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = en_passant_capture_square(move)
        captured = board[capture_sq]

        self._undo_stack.append(
            _UndoState(
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                captured_piece=captured,
                key=self._key,
            )
        )

        key = self._key
        if captured is not None:
            key ^= piece_key(captured, capture_sq)
            board.remove(capture_sq)

        key ^= piece_key(piece, move.from_sq)
        board.move(move.from_sq, move.to_sq)

        placed = piece
        if move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
            board.place(move.to_sq, placed)
        key ^= piece_key(placed, move.to_sq)

        rook_files = _ROOK_FILES.get(move.flag)
        if rook_files is not None:
            rank = rank_of(move.from_sq)
            rook_from = make_square(rook_files[0], rank)
            rook_to = make_square(rook_files[1], rank)
            rook = board[rook_from]
            assert rook is not None, "castling without a rook"
            board.move(rook_from, rook_to)
            key ^= piece_key(rook, rook_from) ^ piece_key(rook, rook_to)

        next_ep: Square | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            next_ep = (move.from_sq + move.to_sq) // 2
        key ^= en_passant_key(self.en_passant) ^ en_passant_key(next_ep)
        self.en_passant = next_ep

        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~_KING_RIGHTS[piece.color]
        for sq in (move.from_sq, capture_sq):
            if sq in _ROOK_CORNERS:
                next_castling &= ~_ROOK_CORNERS[sq]
        key ^= castling_key(self.castling) ^ castling_key(next_castling)
        self.castling = next_castling

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        key ^= side_key(self.side_to_move)
        self.side_to_move = self.side_to_move.opposite
        key ^= side_key(self.side_to_move)
        self._key = key

    def unmake_move(self, move: Move) -> None:
        """Undo the most recent :meth:`make_move` of *move*."""
        state = self._undo_stack.pop()
        board = self.board

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        rook_files = _ROOK_FILES.get(move.flag)
        if rook_files is not None:
            rank = rank_of(move.from_sq)
            board.move(make_square(rook_files[1], rank), make_square(rook_files[0], rank))

        board.move(move.to_sq, move.from_sq)
        if move.promotion is not None:
            board.place(move.from_sq, Piece(self.side_to_move, PieceType.PAWN))

        if state.captured_piece is not None:
            capture_sq = move.to_sq
            if move.flag == MoveFlag.EN_PASSANT:
                capture_sq = en_passant_capture_square(move)
            board.place(capture_sq, state.captured_piece)

        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock
        self._key = state.key

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy without the undo stack."""
        pos = Position.__new__(Position)
        pos.board = self.board.copy()
        pos.side_to_move = self.side_to_move
        pos.castling = self.castling
        pos.en_passant = self.en_passant
        pos.halfmove_clock = self.halfmove_clock
        pos.fullmove_number = self.fullmove_number
        pos._key = self._key
        pos._undo_stack = []
        return pos

    @property
    def repetition_key(self) -> int:
        """Zobrist key of placement, side to move, rights and en passant."""
        return self._key

    def is_repetition_of(self, other: Position) -> bool:
        """Same position for the repetition rule: everything but the clocks."""
        return (
            self._key == other._key
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.board == other.board
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
            and self.board == other.board
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        from gambit.core.notation.fen import position_to_fen

        return f"Position({position_to_fen(self)!r})"
