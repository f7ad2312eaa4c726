"""Move record appended to the game history."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object describing a committed move.

    ``piece`` is the mover as it stood *before* the move, so a pawn that
    promoted is still recorded as a pawn with ``promoted_to`` set.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    is_en_passant: bool = False
    is_castling: bool = False
    is_promotion: bool = False
    promoted_to: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
