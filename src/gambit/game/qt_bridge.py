"""Qt bridge exposing a GameController to a Qt presentation layer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.enums import GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.types import Square, in_bounds
from gambit.game.controller import GameController
from gambit.game.state import GameState, PendingPromotion

_LOGGER = logging.getLogger(__name__)


class GameBridge(QObject):
    """Re-emits controller events as Qt signals and accepts input as slots.

    Slots take plain integers so they can be wired to view signals
    directly; out-of-range values are logged and dropped.
    """

    state_changed = pyqtSignal(object)
    move_made = pyqtSignal(object, str)
    promotion_requested = pyqtSignal(object)
    game_over = pyqtSignal(str)

    def __init__(
        self,
        controller: GameController | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller if controller is not None else GameController()
        events = self._controller.events
        events.on_state_changed.append(self._on_state_changed)
        events.on_move.append(self._on_move)
        events.on_promotion_pending.append(self._on_promotion_pending)
        events.on_game_over.append(self._on_game_over)

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def state(self) -> GameState:
        return self._controller.state

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(int, int)
    def select_square(self, row: int, col: int) -> None:
        if not in_bounds(row, col):
            _LOGGER.warning("Square (%d, %d) is off the board", row, col)
            return
        self._controller.select_square(Square(row, col))

    @pyqtSlot(int)
    def promote_pawn(self, piece_type: int) -> None:
        try:
            ptype = PieceType(piece_type)
        except ValueError:
            _LOGGER.warning("Unknown piece type %d", piece_type)
            return
        self._controller.promote_pawn(ptype)

    @pyqtSlot()
    def reset_game(self) -> None:
        self._controller.reset_game()

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_state_changed(self, state: GameState) -> None:
        self.state_changed.emit(state)

    def _on_move(self, move: Move, notation: str, _state: GameState) -> None:
        self.move_made.emit(move, notation)

    def _on_promotion_pending(self, pending: PendingPromotion) -> None:
        self.promotion_requested.emit(pending)

    def _on_game_over(self, status: GameStatus) -> None:
        self.game_over.emit(str(status))
