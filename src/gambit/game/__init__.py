"""Game layer: the state machine that owns a game and its history.

Quick start::

    from gambit.game import GameState

    game = GameState()
    game.apply_san("e4")
    game.apply_uci("e7e5")
    print(game.phase, game.to_fen())
"""

from gambit.game.config import DrawRules
from gambit.game.history import MoveHistory, MoveRecord
from gambit.game.state import GameState

__all__ = [
    "DrawRules",
    "GameState",
    "MoveHistory",
    "MoveRecord",
]
