"""Perft and special-move tests for move generation.

Perft is the gold standard for move-generator correctness.
Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator, is_in_check, pseudo_legal_moves
from gambit.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.position import Position
from gambit.core.rules import legal_moves, legal_moves_from
from gambit.core.types import A7, A8, C1, D5, D6, E1, E2, E5, G1

KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth* using make/unmake."""
    if depth == 0:
        return 1
    nodes = 0
    for move in legal_moves(position):
        position.make_move(move)
        nodes += perft(position, depth - 1)
        position.unmake_move(move)
    return nodes


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 1) == 20

    def test_depth_2(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 2) == 400

    def test_depth_3(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        pos = position_from_fen(KIWIPETE_FEN)
        assert perft(pos, 1) == 48

    def test_depth_2(self) -> None:
        pos = position_from_fen(KIWIPETE_FEN)
        assert perft(pos, 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        pos = position_from_fen(KIWIPETE_FEN)
        assert perft(pos, 3) == 97_862


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        pos = position_from_fen(POS3)
        assert perft(pos, 1) == 14

    def test_depth_2(self) -> None:
        pos = position_from_fen(POS3)
        assert perft(pos, 2) == 191

    def test_depth_3(self) -> None:
        pos = position_from_fen(POS3)
        assert perft(pos, 3) == 2_812


# ── Position 4: many promotions ──────────────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        pos = position_from_fen(POS4)
        assert perft(pos, 1) == 6

    def test_depth_2(self) -> None:
        pos = position_from_fen(POS4)
        assert perft(pos, 2) == 264

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        pos = position_from_fen(POS4)
        assert perft(pos, 3) == 9_467


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        pos = position_from_fen(POS5)
        assert perft(pos, 1) == 44

    def test_depth_2(self) -> None:
        pos = position_from_fen(POS5)
        assert perft(pos, 2) == 1_486


# ── Legality ─────────────────────────────────────────────────────────────────


class TestLegality:
    @pytest.mark.parametrize(
        "fen",
        [STARTING_FEN, KIWIPETE_FEN, POS3, POS4, POS5],
    )
    def test_no_move_leaves_own_king_attacked(self, fen: str) -> None:
        pos = position_from_fen(fen)
        mover = pos.side_to_move
        for move in legal_moves(pos):
            after = pos.copy()
            after.make_move(move)
            assert not is_in_check(after, mover), f"{move} leaves king in check"

    def test_legal_moves_do_not_touch_position(self) -> None:
        pos = position_from_fen(KIWIPETE_FEN)
        before = pos.copy()
        legal_moves(pos)
        assert pos == before
        assert pos.repetition_key == before.repetition_key

    def test_pinned_piece_cannot_move(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert legal_moves_from(pos, E2) == []

    def test_must_answer_check(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/8/R3K3 w Q - 0 1")
        for move in legal_moves(pos):
            assert not move.is_castle

    def test_generator_class_matches_function(self) -> None:
        pos = position_from_fen(KIWIPETE_FEN)
        assert MoveGenerator(pos).generate_pseudo_legal_moves() == pseudo_legal_moves(pos)

    def test_generator_legal_moves(self) -> None:
        pos = position_from_fen(KIWIPETE_FEN)
        assert MoveGenerator(pos).generate_legal_moves() == legal_moves(pos)

    def test_moves_carry_piece(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        for move in legal_moves(pos):
            assert move.piece is not None
            assert move.piece.color == Color.WHITE


# ── Castling ─────────────────────────────────────────────────────────────────


def _castles(fen: str) -> set[MoveFlag]:
    return {m.flag for m in legal_moves(position_from_fen(fen)) if m.is_castle}


class TestCastling:
    def test_both_sides_available(self) -> None:
        flags = _castles("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert flags == {MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE}

    def test_not_through_attacked_square(self) -> None:
        # Rook on f8 covers f1
        flags = _castles("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert flags == {MoveFlag.CASTLE_QUEENSIDE}

    def test_not_into_check(self) -> None:
        flags = _castles("4k1r1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert flags == {MoveFlag.CASTLE_QUEENSIDE}

    def test_not_out_of_check(self) -> None:
        assert _castles("4k3/4r3/8/8/8/8/8/R3K2R w KQ - 0 1") == set()

    def test_b_file_attack_does_not_stop_queenside(self) -> None:
        flags = _castles("1r2k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert MoveFlag.CASTLE_QUEENSIDE in flags

    def test_blocked_path(self) -> None:
        flags = _castles("4k3/8/8/8/8/8/8/RN2K1NR w KQ - 0 1")
        assert flags == set()

    def test_without_rights(self) -> None:
        assert _castles("4k3/8/8/8/8/8/8/R3K2R w - - 0 1") == set()

    def test_pseudo_legal_offers_castling_under_attack(self) -> None:
        pos = position_from_fen("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert Move(E1, G1, MoveFlag.CASTLE_KINGSIDE) in pseudo_legal_moves(pos)
        assert Move(E1, G1, MoveFlag.CASTLE_KINGSIDE) not in legal_moves(pos)

    def test_black_queenside(self) -> None:
        flags = _castles("r3k3/8/8/8/8/8/8/4K3 b q - 0 1")
        assert flags == {MoveFlag.CASTLE_QUEENSIDE}


# ── En passant ───────────────────────────────────────────────────────────────


class TestEnPassant:
    def test_capture_available(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        ep = [m for m in legal_moves(pos) if m.is_en_passant]
        assert ep == [Move(E5, D6, MoveFlag.EN_PASSANT)]
        assert ep[0].captured is not None
        assert ep[0].captured.piece_type == PieceType.PAWN

    def test_capture_removes_pawn(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        pos.make_move(Move(E5, D6, MoveFlag.EN_PASSANT))
        assert pos.board[D5] is None
        assert pos.board[D6] is not None

    def test_not_without_target(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
        assert not any(m.is_en_passant for m in legal_moves(pos))

    def test_horizontal_pin(self) -> None:
        # Removing both pawns would open the fifth rank onto the king
        pos = position_from_fen("8/8/8/K2pP2r/8/8/8/4k3 w - d6 0 1")
        assert not any(m.is_en_passant for m in legal_moves(pos))


# ── Promotion ────────────────────────────────────────────────────────────────


class TestPromotion:
    def test_four_choices(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k1K5 w - - 0 1")
        promos = {m.promotion for m in legal_moves_from(pos, A7)}
        assert promos == {
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        }

    def test_no_bare_push_to_last_rank(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k1K5 w - - 0 1")
        assert Move(A7, A8) not in legal_moves(pos)

    def test_promote_and_unmake(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k1K5 w - - 0 1")
        fen = position_to_fen(pos)
        move = Move(A7, A8, MoveFlag.PROMOTION, PieceType.KNIGHT)
        pos.make_move(move)
        assert pos.board[A8] is not None
        assert pos.board[A8].piece_type == PieceType.KNIGHT
        pos.unmake_move(move)
        assert position_to_fen(pos) == fen
        assert pos.board.king_square(Color.WHITE) == C1
