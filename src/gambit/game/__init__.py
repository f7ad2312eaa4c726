"""Game management layer: the move-execution state machine and its snapshots.

Quick start::

    from gambit.core.types import E2, E4
    from gambit.game import GameController

    ctrl = GameController()
    ctrl.select_square(E2)
    ctrl.select_square(E4)
    print(ctrl.state.last_move)
"""

from gambit.game.controller import GameController, GameEvents
from gambit.game.interfaces import GamePhase, IGameController
from gambit.game.settings import GameSettings
from gambit.game.state import CapturedPieces, GameState, PendingPromotion

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    # Concrete
    "CapturedPieces",
    "GameController",
    "GameEvents",
    "GameSettings",
    "GameState",
    "PendingPromotion",
]
