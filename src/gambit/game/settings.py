"""Controller configuration."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PROMOTION_TYPES, PieceType


@dataclass(frozen=True)
class GameSettings:
    """User-configurable game behaviour."""

    # Promotion: choose this piece automatically instead of waiting
    auto_promote_to: PieceType | None = None

    # Keep every committed position in GameController.history (else only the latest)
    keep_history: bool = True

    def __post_init__(self) -> None:
        if (
            self.auto_promote_to is not None
            and self.auto_promote_to not in PROMOTION_TYPES
        ):
            raise ValueError(f"Cannot promote to {self.auto_promote_to}")
