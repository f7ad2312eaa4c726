"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def home_row(self) -> int:
        """Board row of this side's back rank (white plays up from row 7)."""
        return 7 if self == Color.WHITE else 0

    @property
    def forward(self) -> int:
        """Row delta of a pawn step for this side."""
        return -1 if self == Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class GameStatus(IntEnum):
    """Status of the game from the point of view of the side to move."""

    PLAYING = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    DRAW = auto()

    @property
    def is_terminal(self) -> bool:
        """Whether no further moves are accepted."""
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE, GameStatus.DRAW)

    def __str__(self) -> str:
        return self.name.lower()
