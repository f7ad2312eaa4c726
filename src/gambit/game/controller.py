"""GameController — the move-execution state machine.

Owns the current :class:`GameState`, turns square clicks into selections
and committed moves, runs the promotion sub-flow and recomputes the game
status after every commit.  Emits events via simple callbacks so the UI /
tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import PROMOTION_TYPES, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import (
    MoveGenerator,
    is_castling_move,
    is_en_passant_move,
    relocate_castling_rook,
)
from gambit.core.notation import move_to_notation
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.types import Square
from gambit.game.interfaces import GamePhase, IGameController
from gambit.game.settings import GameSettings
from gambit.game.state import GameState, PendingPromotion

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

StateCallback = Callable[[GameState], None]
MoveCallback = Callable[[Move, str, GameState], None]  # move, notation, state
PromotionCallback = Callable[[PendingPromotion], None]
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_state_changed: list[StateCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Single source of truth for a game in progress.

    Every transition replaces the published snapshot wholesale; previously
    published snapshots stay valid.  Illegal or out-of-turn input is
    ignored rather than reported.

    *start* seeds a custom snapshot (e.g. a composed endgame); its status
    is taken as given.  :meth:`reset_game` always returns to the standard
    starting position.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).
    """

    __slots__ = ("_state", "_settings", "_history", "events")

    def __init__(
        self,
        settings: GameSettings | None = None,
        *,
        start: GameState | None = None,
    ) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._state = start if start is not None else GameState.initial()
        self._history: list[GameState] = [self._state]
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def history(self) -> tuple[GameState, ...]:
        """Positions since the last reset, oldest first.

        Holds the starting snapshot and the snapshot after each committed
        move; selection and pending-promotion snapshots are not recorded.
        """
        return tuple(self._history)

    @property
    def phase(self) -> GamePhase:
        state = self._state
        if state.status.is_terminal:
            return GamePhase.TERMINAL
        if state.pending_promotion is not None:
            return GamePhase.AWAITING_PROMOTION
        if state.selected is not None:
            return GamePhase.SELECTED
        return GamePhase.IDLE

    # ── IGameController impl ─────────────────────────────────────────────

    def select_square(self, sq: Square) -> None:
        phase = self.phase
        if phase in (GamePhase.TERMINAL, GamePhase.AWAITING_PROMOTION):
            _LOGGER.debug("Ignoring %s while %s", sq, phase.name)
            return

        state = self._state
        clicked = state.board[sq]

        if phase == GamePhase.SELECTED:
            if sq in state.valid_moves:
                assert state.selected is not None
                self._execute_move(state.selected, sq)
                return

            if clicked is None or clicked.color != state.current_turn:
                _LOGGER.debug("Deselecting %s", state.selected)
                self._publish(state.evolve(selected=None, valid_moves=()))
                return

        elif clicked is None or clicked.color != state.current_turn:
            return

        gen = MoveGenerator(state.board, state.en_passant_target)
        valid = tuple(gen.valid_moves(sq))
        _LOGGER.debug("Selected %s with %d legal destinations", sq, len(valid))
        self._publish(state.evolve(selected=sq, valid_moves=valid))

    def promote_pawn(self, piece_type: PieceType) -> None:
        pending = self._state.pending_promotion
        if pending is None:
            _LOGGER.debug("No promotion pending; ignoring %s", piece_type)
            return
        if piece_type not in PROMOTION_TYPES:
            _LOGGER.warning("Cannot promote to %s; ignoring", piece_type)
            return
        self._complete_promotion(pending, piece_type)

    def reset_game(self) -> None:
        _LOGGER.info("Game reset")
        self._history = []
        self._publish(GameState.initial(), record=True)

    # ── Move execution ───────────────────────────────────────────────────

    def _execute_move(self, from_sq: Square, to_sq: Square) -> None:
        state = self._state
        piece = state.board[from_sq]
        assert piece is not None
        captured = state.board[to_sq]

        if piece.piece_type == PieceType.PAWN and to_sq.row in (0, 7):
            pending = PendingPromotion(from_sq, to_sq, piece, captured)
            auto = self._settings.auto_promote_to
            if auto is not None:
                self._complete_promotion(pending, auto)
                return
            _LOGGER.debug("Promotion pending on %s", to_sq)
            self._publish(state.evolve(pending_promotion=pending))
            for cb in self.events.on_promotion_pending:
                cb(pending)
            return

        board = state.board.copy()
        castling = is_castling_move(piece, from_sq, to_sq)
        en_passant = state.en_passant_target is not None and is_en_passant_move(
            board, piece, from_sq, to_sq
        )

        board[to_sq] = piece.moved()
        board[from_sq] = None

        if en_passant:
            # The bypassed pawn sits beside the origin, not on to_sq.
            bypassed_sq = Square(from_sq.row, to_sq.col)
            captured = board[bypassed_sq]
            board[bypassed_sq] = None

        if castling:
            relocate_castling_rook(board, from_sq, to_sq)

        next_en_passant: Square | None = None
        if piece.piece_type == PieceType.PAWN and abs(from_sq.row - to_sq.row) == 2:
            next_en_passant = Square((from_sq.row + to_sq.row) // 2, to_sq.col)

        move = Move(
            from_sq,
            to_sq,
            piece,
            captured,
            is_en_passant=en_passant,
            is_castling=castling,
        )
        self._advance(board, move, next_en_passant)

    def _complete_promotion(
        self, pending: PendingPromotion, piece_type: PieceType
    ) -> None:
        board = self._state.board.copy()
        board[pending.to_sq] = Piece(piece_type, pending.piece.color, has_moved=True)
        board[pending.from_sq] = None

        move = Move(
            pending.from_sq,
            pending.to_sq,
            pending.piece,
            pending.captured,
            is_promotion=True,
            promoted_to=piece_type,
        )
        self._advance(board, move, None)

    def _advance(
        self, board: Board, move: Move, en_passant_target: Square | None
    ) -> None:
        """Publish the position after *move* and recompute the status."""
        state = self._state
        next_turn = move.piece.color.opposite

        captured_pieces = state.captured_pieces
        if move.captured is not None:
            captured_pieces = captured_pieces.add(move.captured)

        status = Rules.determine_game_status(board, next_turn, en_passant_target)
        self._publish(
            GameState(
                board=board.freeze(),
                current_turn=next_turn,
                move_history=state.move_history + (move,),
                captured_pieces=captured_pieces,
                status=status,
                last_move=move,
                en_passant_target=en_passant_target,
            ),
            record=True,
        )

        notation = move_to_notation(move)
        _LOGGER.debug("%s played %s (%s)", move.piece.color, notation, status)
        for cb in self.events.on_move:
            cb(move, notation, self._state)

        if status.is_terminal:
            _LOGGER.info("Game over: %s", status)
            for cb in self.events.on_game_over:
                cb(status)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _publish(self, state: GameState, *, record: bool = False) -> None:
        self._state = state
        if record:
            if self._settings.keep_history:
                self._history.append(state)
            else:
                self._history = [state]
        for cb in self.events.on_state_changed:
            cb(state)
