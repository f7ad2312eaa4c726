"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Sequence

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import BOARD_SIZE, RANK_LABELS, Square, in_bounds

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """8x8 grid of optional pieces, indexed ``board[Square(row, col)]``.

    Pieces are immutable, so :meth:`copy` only needs to duplicate the grid
    rows: a copy never shares mutable state with its source.

    A board becomes read-only after :meth:`freeze`; only frozen boards are
    hashable.  :meth:`copy` always returns a writable board.
    """

    __slots__ = ("_grid", "_frozen")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self._frozen = False

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.row][sq.col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if self._frozen:
            raise TypeError("Board is read-only; copy() it first")
        self._grid[sq.row][sq.col] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.row][sq.col] is None

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return in_bounds(row, col)

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally for one *color*."""
        found: list[tuple[Square, Piece]] = []
        for row, rank in enumerate(self._grid):
            for col, piece in enumerate(rank):
                if piece is None:
                    continue
                if color is not None and piece.color != color:
                    continue
                found.append((Square(row, col), piece))
        return found

    def piece_count(self) -> int:
        return sum(1 for rank in self._grid for piece in rank if piece is not None)

    # -- Copying and freezing -----------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [rank.copy() for rank in self._grid]
        return b

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Board:
        """Make this board read-only and return it."""
        self._frozen = True
        return self

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, black on rows 0-1, white on rows 6-7."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(pt, Color.BLACK)
            b[Square(1, col)] = Piece(PieceType.PAWN, Color.BLACK)
            b[Square(6, col)] = Piece(PieceType.PAWN, Color.WHITE)
            b[Square(7, col)] = Piece(pt, Color.WHITE)
        return b

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        *,
        moved: Sequence[Square] = (),
    ) -> Board:
        """Build a board from eight text rows, row 0 (rank 8) first.

        Each row holds eight FEN piece characters or ``.`` for an empty
        square; spaces are ignored.  Pieces on *moved* squares are flagged
        as having moved.
        """
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")
        b = cls()
        moved_set = set(moved)
        for row, text in enumerate(rows):
            cells = text.replace(" ", "")
            if len(cells) != BOARD_SIZE:
                raise ValueError(f"Row {row} must have {BOARD_SIZE} cells: {text!r}")
            for col, ch in enumerate(cells):
                if ch == ".":
                    continue
                sq = Square(row, col)
                b[sq] = Piece.from_char(ch, has_moved=sq in moved_set)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __hash__(self) -> int:
        if not self._frozen:
            raise TypeError("unhashable type: mutable Board")
        return hash(tuple(tuple(rank) for rank in self._grid))

    def __repr__(self) -> str:
        rows: list[str] = []
        for row, rank in enumerate(self._grid):
            cells = [str(p) if p else "." for p in rank]
            rows.append(f"{RANK_LABELS[row]} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
