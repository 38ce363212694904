"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from gambit.core.notation import position_from_fen
from gambit.core.position import Position
from gambit.game.state import GameState

KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def kiwipete() -> Position:
    return position_from_fen(KIWIPETE_FEN)


@pytest.fixture
def game() -> GameState:
    return GameState()


@pytest.fixture
def fools_mate_game() -> GameState:
    gs = GameState()
    for san in ("f3", "e5", "g4", "Qh4"):
        gs.apply_san(san)
    return gs
