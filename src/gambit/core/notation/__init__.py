"""Notation package: FEN / SAN / coordinate / PGN parsing and serialization."""

from gambit.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.notation.models import ParsedPgn
from gambit.core.notation.pgn import (
    build_pgn,
    game_result_from_pgn,
    parse_pgn_game,
    pgn_movetext,
    pgn_result_token,
)
from gambit.core.notation.san import move_to_san, parse_san
from gambit.core.notation.uci import move_to_uci, parse_coordinates, parse_uci

__all__ = [
    "STARTING_FEN",
    "ParsedPgn",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "parse_san",
    "move_to_uci",
    "parse_coordinates",
    "parse_uci",
    "pgn_result_token",
    "game_result_from_pgn",
    "pgn_movetext",
    "build_pgn",
    "parse_pgn_game",
]
