"""FEN parsing and serialization."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color
from gambit.core.errors import MalformedPositionError
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import validate_position
from gambit.core.types import Square, make_square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedPositionError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise MalformedPositionError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise MalformedPositionError(f"Invalid FEN rank width: {fen!r}")
                try:
                    board[make_square(file, rank)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise MalformedPositionError(str(exc)) from None
                file += 1
            if file > 8:
                raise MalformedPositionError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise MalformedPositionError(f"Invalid FEN rank width: {fen!r}")
    return board


def _parse_counter(text: str, name: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise MalformedPositionError(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise MalformedPositionError(f"Invalid FEN {name}: {text!r}")
    return value


def position_from_fen(fen: str, *, validate: bool = True) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The clock fields are optional and default to ``0 1``. With *validate*
    the result is also checked for legality (kings, pawns, rights, en
    passant); pass ``False`` to load composed study positions as-is.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise MalformedPositionError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedPositionError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        for ch in castling_part:
            right = rights.pop(ch, None)
            if right is None:
                raise MalformedPositionError(
                    f"Invalid FEN castling field: {castling_part!r}"
                )
            castling |= right

    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise MalformedPositionError(
                f"Invalid FEN en-passant square: {ep_part!r}"
            ) from None

    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    position = Position(board, side, castling, ep, halfmove, fullmove)
    if validate:
        validate_position(position)
    return position


def position_to_fen(pos: Position) -> str:
    """Serialize a :class:`Position` to FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return " ".join(
        (
            "/".join(rows),
            side_str,
            castling_str or "-",
            ep_str,
            str(pos.halfmove_clock),
            str(pos.fullmove_number),
        )
    )
