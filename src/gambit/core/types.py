"""Square value type and coordinate helpers.

Board layout (row-major, black at the top):
    row 0 = rank 8 (black back rank), row 7 = rank 1 (white back rank)
    col 0 = file a, col 7 = file h

So ``Square(7, 4)`` is e1 and ``Square(0, 4)`` is e8.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

BOARD_SIZE = 8

FILE_LABELS = "abcdefgh"
RANK_LABELS = "87654321"


def in_bounds(row: int, col: int) -> bool:
    """Whether (*row*, *col*) lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable ``(row, col)`` coordinate on the board."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not in_bounds(self.row, self.col):
            raise ValueError(f"Square out of bounds: ({self.row}, {self.col})")

    def offset(self, d_row: int, d_col: int) -> Square | None:
        """Square shifted by (*d_row*, *d_col*), or ``None`` if off-board."""
        row = self.row + d_row
        col = self.col + d_col
        if not in_bounds(row, col):
            return None
        return Square(row, col)

    @property
    def is_light(self) -> bool:
        """Whether this is a light square (a8 and h1 are light)."""
        return (self.row + self.col) % 2 == 0

    def __iter__(self) -> Iterator[int]:
        yield self.row
        yield self.col

    def __str__(self) -> str:
        return square_name(self)


def square_name(sq: Square) -> str:
    """Algebraic name, e.g. ``Square(6, 4)`` → 'e2'."""
    return FILE_LABELS[sq.col] + RANK_LABELS[sq.row]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in FILE_LABELS or name[1] not in RANK_LABELS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(RANK_LABELS.index(name[1]), FILE_LABELS.index(name[0]))


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(7, c) for c in range(8))
