"""Game state machine: turn ownership, phase transitions and move history."""

from __future__ import annotations

import logging

from gambit.core.enums import Color, GamePhase, GameResult, PieceType
from gambit.core.errors import IllegalMoveError, NoHistoryError
from gambit.core.move import Move
from gambit.core.move_generator import is_in_check
from gambit.core.notation.fen import position_from_fen, position_to_fen
from gambit.core.notation.pgn import (
    build_pgn,
    game_result_from_pgn,
    parse_pgn_game,
    pgn_movetext,
    pgn_result_token,
)
from gambit.core.notation.san import move_to_san, parse_san
from gambit.core.notation.uci import parse_uci
from gambit.core.position import Position
from gambit.core.rules import Rules, legal_moves, validate_position
from gambit.core.types import Square
from gambit.game.config import DrawRules
from gambit.game.history import MoveHistory, MoveRecord

_LOGGER = logging.getLogger(__name__)


class GameState:
    """The single authority over one game.

    Holds the live position and the move history, answers legality queries
    and is the only path by which a position changes. Every position handed
    out is a copy.

    Not thread-safe: calls to :meth:`apply_move`, :meth:`undo` and
    :meth:`reset` must be serialized by the caller.
    """

    __slots__ = ("_position", "_history", "_phase", "_legal", "_config")

    def __init__(
        self,
        start: Position | str | None = None,
        *,
        config: DrawRules | None = None,
    ) -> None:
        self._config = config or DrawRules.standard()
        self._position = Position.initial()
        self._history = MoveHistory(self._position)
        self._phase = GamePhase.ONGOING
        self._legal: list[Move] = []
        self.reset(start)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset(self, start: Position | str | None = None) -> None:
        """Start over from *start* (a position, a FEN string, or the
        standard opening array).

        Raises :class:`~gambit.core.errors.MalformedPositionError` for an
        unplayable start and leaves the current game untouched.
        """
        if start is None:
            position = Position.initial()
        elif isinstance(start, str):
            position = position_from_fen(start)
        else:
            position = start.copy()
            validate_position(position)

        self._position = position
        self._history.restart(position)
        self._refresh()
        _LOGGER.debug("Game reset to %s (%s)", position_to_fen(position), self._phase.value)

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> GamePhase:
        """Play *move* and return the new phase.

        *move* is matched against the legal set by origin, destination and
        promotion (plus its flag, when it has one). Raises
        :class:`IllegalMoveError`, changing nothing, if there is no match.
        """
        played = self._resolve(move)
        if played is None:
            _LOGGER.debug("Rejected illegal move %s in %s", move, self.to_fen())
            raise IllegalMoveError(f"Illegal move: {move}", move)

        san = move_to_san(self._position, played)
        self._position.make_move(played)
        # The live position never accumulates undo state; history snapshots
        # are what undo restores.
        self._position = self._position.copy()

        record = self._history.push(
            played, san, self._position, was_check=is_in_check(self._position)
        )
        self._refresh()
        _LOGGER.debug("Applied %s (%s) -> %s", record.san, played.uci, self._phase.value)
        if self._phase.is_terminal:
            _LOGGER.info(
                "Game over after %d plies: %s", len(self._history), self._phase.value
            )
        return self._phase

    def undo(self) -> Move:
        """Take back the last move and return it.

        Raises :class:`NoHistoryError` when no move has been played.
        """
        if not self._history:
            raise NoHistoryError("No move to undo")
        record = self._history.pop()
        self._position = self._history.latest_position()
        self._refresh()
        _LOGGER.debug("Undid %s", record.san)
        return record.move

    def apply_san(self, san: str) -> GamePhase:
        if self._phase.is_terminal:
            raise IllegalMoveError(f"Game is over: {san}", san)
        return self.apply_move(parse_san(self._position, san))

    def apply_uci(self, text: str) -> GamePhase:
        if self._phase.is_terminal:
            raise IllegalMoveError(f"Game is over: {text}", text)
        return self.apply_move(parse_uci(self._position, text))

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self._position, self._phase)

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self._phase.is_terminal

    @property
    def config(self) -> DrawRules:
        return self._config

    def current_position(self) -> Position:
        """Copy of the live position."""
        return self._position.copy()

    def legal_moves(self) -> list[Move]:
        """Legal moves now; empty once the game is over."""
        return list(self._legal)

    def legal_moves_from(self, sq: Square) -> list[Move]:
        return [m for m in self._legal if m.from_sq == sq]

    def find_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move | None:
        """The legal move going from *from_sq* to *to_sq*, if any."""
        return self._resolve(Move(from_sq, to_sq, promotion=promotion))

    def history_length(self) -> int:
        return len(self._history)

    def position_at(self, index: int) -> Position:
        """Copy of the position after *index* plies (0 = start)."""
        return self._history.position_at(index)

    def move_history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    def repetition_count(self) -> int:
        return self._history.repetition_count(self._position)

    def san_moves(self) -> list[str]:
        return self._history.sans()

    # ── Interchange ──────────────────────────────────────────────────────

    def to_fen(self) -> str:
        return position_to_fen(self._position)

    def to_pgn(self, headers: dict[str, str] | None = None) -> str:
        """PGN of the game so far, with a ``FEN`` tag for custom starts."""
        start = self._history.start_position
        result_token = pgn_result_token(self.result)
        tags = {
            "Event": "?",
            "Site": "?",
            "Date": "????.??.??",
            "Round": "?",
            "White": "?",
            "Black": "?",
        }
        tags.update(headers or {})
        tags["Result"] = result_token
        start_fen = position_to_fen(start)
        if start_fen != position_to_fen(Position.initial()):
            tags["SetUp"] = "1"
            tags["FEN"] = start_fen
        movetext = pgn_movetext(
            self._history.sans(),
            result_token,
            first_move_number=start.fullmove_number,
            first_side=start.side_to_move,
        )
        return build_pgn(tags, movetext)

    @classmethod
    def from_pgn(cls, pgn_text: str, *, config: DrawRules | None = None) -> GameState:
        """Replay the mainline of a PGN game.

        Raises :class:`IllegalMoveError` at the first move that does not
        fit the position.
        """
        parsed = parse_pgn_game(pgn_text)
        state = cls(parsed.start_fen, config=config)
        for san in parsed.sans:
            state.apply_san(san)
        declared = game_result_from_pgn(parsed.result_token)
        if declared != GameResult.IN_PROGRESS and declared != state.result:
            _LOGGER.info(
                "PGN result %s is not implied by the final position",
                parsed.result_token,
            )
        return state

    # ── Internal ─────────────────────────────────────────────────────────

    def _resolve(self, move: Move) -> Move | None:
        for candidate in self._legal:
            if candidate.matches(move):
                return candidate
        return None

    def _refresh(self) -> None:
        """Recompute the phase and cached legal set for the live position."""
        cfg = self._config
        legal = legal_moves(self._position)
        self._phase = Rules.phase(
            self._position,
            self._history.repetition_count(self._position),
            fifty_move_plies=cfg.fifty_move_plies,
            repetition_threshold=cfg.repetition_threshold,
            insufficient_material=cfg.insufficient_material,
            legal=legal,
        )
        self._legal = [] if self._phase.is_terminal else legal

    def __repr__(self) -> str:
        return f"GameState({self.to_fen()!r}, phase={self._phase.value})"
