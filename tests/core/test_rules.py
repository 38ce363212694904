"""Tests for Rules: check, checkmate, stalemate, draw detection, validation."""

import pytest

from gambit.core.enums import GamePhase, GameResult
from gambit.core.errors import MalformedPositionError
from gambit.core.notation import STARTING_FEN, position_from_fen
from gambit.core.rules import Rules, validate_position

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
BACK_RANK_MATE = "R2k4/8/3K4/8/8/8/8/8 b - - 0 1"
STALEMATE = "7k/5K2/6Q1/8/8/8/8/8 b - - 0 1"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_fools_mate_in_check(self) -> None:
        assert Rules.is_in_check(position_from_fen(FOOLS_MATE))

    def test_check_phase(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.phase(pos) == GamePhase.CHECK


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.phase(pos) == GamePhase.CHECKMATE
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen(BACK_RANK_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_trapped(self) -> None:
        pos = position_from_fen(STALEMATE)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.phase(pos) == GamePhase.STALEMATE
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)


class TestInsufficientMaterial:
    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3B4/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3N4/8 w - - 0 1",
            "8/8/4k3/3n4/8/4K3/8/8 w - - 0 1",
            # Both bishops on dark squares
            "5b2/8/4k3/8/8/4K3/8/2B5 w - - 0 1",
        ],
    )
    def test_dead_positions(self, fen: str) -> None:
        pos = position_from_fen(fen)
        assert Rules.is_insufficient_material(pos)
        assert Rules.phase(pos) == GamePhase.DRAW_BY_INSUFFICIENT_MATERIAL

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/3R4/8 w - - 0 1",
            "8/8/4k3/8/4P3/4K3/8/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3Q4/8 w - - 0 1",
            # Bishops on opposite colors
            "2b5/8/4k3/8/8/4K3/8/2B5 w - - 0 1",
            STARTING_FEN,
        ],
    )
    def test_sufficient(self, fen: str) -> None:
        assert not Rules.is_insufficient_material(position_from_fen(fen))

    def test_can_be_disabled(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        assert Rules.phase(pos, insufficient_material=False) == GamePhase.ONGOING


class TestFiftyMoveRule:
    def test_not_triggered_at_start(self) -> None:
        assert not Rules.is_fifty_move_rule(position_from_fen(STARTING_FEN))

    def test_triggered_at_100_plies(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")
        assert Rules.is_fifty_move_rule(pos)
        assert Rules.phase(pos) == GamePhase.DRAW_BY_FIFTY_MOVE
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_not_at_99(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 99 80")
        assert Rules.phase(pos) == GamePhase.ONGOING

    def test_custom_limit(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")
        assert Rules.phase(pos, fifty_move_plies=150) == GamePhase.ONGOING


class TestPhasePrecedence:
    def test_checkmate_beats_fifty_move(self) -> None:
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 100 80")
        assert Rules.phase(pos, repetitions=3) == GamePhase.CHECKMATE

    def test_stalemate_beats_repetition(self) -> None:
        pos = position_from_fen(STALEMATE)
        assert Rules.phase(pos, repetitions=3) == GamePhase.STALEMATE

    def test_material_beats_repetition(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 100 80")
        assert Rules.phase(pos, repetitions=3) == GamePhase.DRAW_BY_INSUFFICIENT_MATERIAL

    def test_repetition_beats_fifty_move(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")
        assert Rules.phase(pos, repetitions=3) == GamePhase.DRAW_BY_REPETITION

    def test_repetition_below_threshold(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert Rules.phase(pos, repetitions=2) == GamePhase.ONGOING
        assert Rules.phase(pos, repetitions=2, repetition_threshold=2) == (
            GamePhase.DRAW_BY_REPETITION
        )


class TestValidation:
    @pytest.mark.parametrize(
        "fen",
        [
            # No black king
            "8/8/8/8/8/8/8/4K3 w - - 0 1",
            # Two white kings
            "4k3/8/8/8/8/8/8/3KK3 w - - 0 1",
            # Pawn on the first rank
            "4k3/8/8/8/8/8/8/P3K3 w - - 0 1",
            # Nine pawns
            "4k3/8/8/8/8/P7/PPPPPPPP/4K3 w - - 0 1",
            # Side not to move is in check
            "4k3/8/8/8/8/8/8/4RK2 w - - 0 1",
            # Castling right without the rook
            "4k3/8/8/8/8/8/8/4K3 w K - 0 1",
            # En-passant target with no pawn behind it
            "4k3/8/8/8/8/8/8/4K3 w - e6 0 1",
        ],
    )
    def test_rejected(self, fen: str) -> None:
        with pytest.raises(MalformedPositionError):
            position_from_fen(fen)

    def test_unvalidated_load(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w K - 0 1", validate=False)
        with pytest.raises(MalformedPositionError):
            validate_position(pos)

    def test_malformed_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            position_from_fen("8/8/8/8/8/8/8/8 w - - 0 1")
