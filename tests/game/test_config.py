"""Tests for DrawRules."""

import dataclasses

import pytest

from gambit.game.config import DrawRules


class TestDrawRules:
    def test_standard(self) -> None:
        rules = DrawRules.standard()
        assert rules == DrawRules()
        assert rules.fifty_move_plies == 100
        assert rules.repetition_threshold == 3
        assert rules.insufficient_material

    def test_fide_automatic(self) -> None:
        rules = DrawRules.fide_automatic()
        assert rules.fifty_move_plies == 150
        assert rules.repetition_threshold == 5

    @pytest.mark.parametrize(
        "kwargs",
        [{"fifty_move_plies": 0}, {"repetition_threshold": 1}],
    )
    def test_rejects_nonsense(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            DrawRules(**kwargs)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DrawRules().repetition_threshold = 2  # type: ignore[misc]
