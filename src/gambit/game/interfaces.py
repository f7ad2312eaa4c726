"""Abstract interfaces for the game layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.enums import PieceType
    from gambit.core.types import Square
    from gambit.game.state import GameState


# ── Input FSM states ────────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of the move-input flow."""

    IDLE = auto()
    SELECTED = auto()
    AWAITING_PROMOTION = auto()
    TERMINAL = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the move-execution state machine."""

    @property
    @abstractmethod
    def state(self) -> GameState:
        """Current published snapshot."""

    @abstractmethod
    def select_square(self, sq: Square) -> None:
        """Feed a square click: select, re-select, deselect or move."""

    @abstractmethod
    def promote_pawn(self, piece_type: PieceType) -> None:
        """Resolve a pending promotion. No-op when none is pending."""

    @abstractmethod
    def reset_game(self) -> None:
        """Discard the game and return to the starting position."""
