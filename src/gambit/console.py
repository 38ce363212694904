"""Terminal front-end: two players take turns typing moves.

This is a thin adapter over :class:`~gambit.game.state.GameState`. Moves are
accepted in coordinate form (``e2e4``, ``e2 e4``, ``e7e8q``) or SAN
(``Nf3``, ``O-O``).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from gambit.core.enums import Color, GamePhase, GameResult, PieceType
from gambit.core.errors import ChessError, IllegalMoveError
from gambit.core.move import Move
from gambit.core.notation.pgn import pgn_result_token
from gambit.core.notation.uci import parse_coordinates
from gambit.game.state import GameState

_LOGGER = logging.getLogger(__name__)

HELP_TEXT = """\
Enter a move as coordinates (e2e4, e2 e4, e7e8q) or SAN (Nf3, O-O).
A promotion typed without a piece letter asks for one (queen by default).
Commands:
  moves    list legal moves
  history  show the moves played so far
  undo     take back the last move
  fen      print the position as FEN
  pgn      print the game as PGN
  help     show this text
  quit     leave the game"""

_PROMOTION_CHOICES: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

_PHASE_MESSAGES: dict[GamePhase, str] = {
    GamePhase.CHECKMATE: "Checkmate!",
    GamePhase.STALEMATE: "Stalemate. The game is drawn.",
    GamePhase.DRAW_BY_FIFTY_MOVE: "Draw by the fifty-move rule.",
    GamePhase.DRAW_BY_REPETITION: "Draw by repetition.",
    GamePhase.DRAW_BY_INSUFFICIENT_MATERIAL: "Draw: insufficient material.",
}


class ConsoleSession:
    """Read-eval-print loop over one game."""

    def __init__(
        self,
        game: GameState,
        stdin: TextIO,
        stdout: TextIO,
        *,
        unicode: bool = False,
    ) -> None:
        self.game = game
        self._in = stdin
        self._out = stdout
        self._unicode = unicode

    def run(self) -> GameResult:
        """Play until the game ends, the input runs dry, or ``quit``."""
        self._print("Type 'help' for instructions.")
        while True:
            self._show_board()
            if self.game.is_game_over:
                self._print(_PHASE_MESSAGES[self.game.phase])
                break
            self._print(f"{self.game.side_to_move.name.capitalize()} to move:")
            line = self._in.readline()
            if not line:
                break
            if not self.handle(line.strip()):
                break
        self._print_history()
        return self.game.result

    def handle(self, command: str) -> bool:
        """Process one input line; ``False`` means stop."""
        if not command:
            return True
        lowered = command.lower()
        if lowered in ("quit", "exit"):
            return False
        if lowered == "help":
            self._print(HELP_TEXT)
        elif lowered == "moves":
            self._print(" ".join(m.uci for m in self.game.legal_moves()) or "(none)")
        elif lowered == "history":
            self._print_history()
        elif lowered == "undo":
            try:
                move = self.game.undo()
            except ChessError as exc:
                self._print(str(exc))
            else:
                self._print(f"Took back {move.uci}")
        elif lowered == "fen":
            self._print(self.game.to_fen())
        elif lowered == "pgn":
            self._print(self.game.to_pgn())
        else:
            self._play(command)
        return True

    def _play(self, text: str) -> None:
        try:
            try:
                wanted = parse_coordinates(text)
            except IllegalMoveError:
                self.game.apply_san(text)
            else:
                if self._needs_promotion_piece(wanted):
                    promotion = self._ask_promotion()
                    self.game.apply_move(
                        Move(wanted.from_sq, wanted.to_sq, promotion=promotion)
                    )
                else:
                    self.game.apply_uci(text)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected input %r: %s", text, exc)
            self._print(f"{exc}. Type 'moves' to list legal moves.")
            return
        record = self.game.move_history()[-1]
        self._print(f"Played {record.san}")

    def _needs_promotion_piece(self, wanted: Move) -> bool:
        if wanted.promotion is not None:
            return False
        if self.game.find_move(wanted.from_sq, wanted.to_sq) is not None:
            return False
        return (
            self.game.find_move(wanted.from_sq, wanted.to_sq, PieceType.QUEEN)
            is not None
        )

    def _ask_promotion(self) -> PieceType:
        """Read the promotion piece; anything unrecognised means a queen."""
        self._print("Promote to (Q/R/B/N):")
        answer = self._in.readline().strip().lower()
        piece_type = _PROMOTION_CHOICES.get(answer)
        if piece_type is None:
            _LOGGER.debug("Promotion answer %r not understood, using queen", answer)
            return PieceType.QUEEN
        return piece_type

    def _show_board(self) -> None:
        board = self.game.current_position().board
        self._print(board.render(unicode=self._unicode))
        if self.game.phase == GamePhase.CHECK:
            self._print("Check!")

    def _print_history(self) -> None:
        sans = self.game.san_moves()
        if not sans:
            self._print("No moves played.")
            return
        start = self.game.position_at(0)
        number = start.fullmove_number
        side = start.side_to_move
        lines: list[str] = []
        for san in sans:
            prefix = f"{number}." if side == Color.WHITE else f"{number}..."
            lines.append(f"{prefix} {san}")
            if side == Color.BLACK:
                number += 1
            side = side.opposite
        lines.append(pgn_result_token(self.game.result))
        self._print("\n".join(lines))

    def _print(self, text: str) -> None:
        print(text, file=self._out)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Play chess in the terminal against another human.",
    )
    parser.add_argument("--fen", default=None, help="Start from this FEN position")
    parser.add_argument(
        "--unicode", action="store_true", help="Draw pieces with Unicode glyphs"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        game = GameState(args.fen)
    except ChessError as exc:
        parser.error(str(exc))

    session = ConsoleSession(game, sys.stdin, sys.stdout, unicode=args.unicode)
    session.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
