"""Game state snapshots published by the controller."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square


@dataclass(frozen=True, slots=True)
class CapturedPieces:
    """Captured pieces, each filed under its own colour."""

    white: tuple[Piece, ...] = ()
    black: tuple[Piece, ...] = ()

    def of(self, color: Color) -> tuple[Piece, ...]:
        return self.white if color == Color.WHITE else self.black

    def add(self, piece: Piece) -> CapturedPieces:
        if piece.color == Color.WHITE:
            return replace(self, white=self.white + (piece,))
        return replace(self, black=self.black + (piece,))


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn move parked until the promotion piece is chosen."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of a game.

    Every transition produces a new instance.  The board is frozen on
    construction (a writable board is copied first), so a published
    snapshot cannot be modified afterwards.
    """

    board: Board = field(default_factory=Board.initial)
    current_turn: Color = Color.WHITE
    selected: Square | None = None
    valid_moves: tuple[Square, ...] = ()
    move_history: tuple[Move, ...] = ()
    captured_pieces: CapturedPieces = field(default_factory=CapturedPieces)
    status: GameStatus = GameStatus.PLAYING
    last_move: Move | None = None
    en_passant_target: Square | None = None
    pending_promotion: PendingPromotion | None = None

    def __post_init__(self) -> None:
        if not self.board.is_frozen:
            object.__setattr__(self, "board", self.board.copy().freeze())

    @classmethod
    def initial(cls) -> GameState:
        """Canonical starting state: white to move, nothing selected."""
        return cls()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def evolve(self, **changes: object) -> GameState:
        """New snapshot with *changes* applied."""
        return replace(self, **changes)
