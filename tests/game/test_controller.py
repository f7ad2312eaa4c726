"""Tests for GameController."""

from __future__ import annotations

import pytest

from gambit.core.attacks import is_in_check
from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import has_legal_moves
from gambit.core.piece import Piece
from gambit.core.types import (
    A7,
    A8,
    B8,
    D4,
    E1,
    E2,
    E3,
    E4,
    F1,
    G1,
    H1,
    Square,
    parse_square,
)
from gambit.game.controller import GameController
from gambit.game.interfaces import GamePhase
from gambit.game.settings import GameSettings
from gambit.game.state import GameState, PendingPromotion

EMPTY_ROW = "........"


def _play(ctrl: GameController, *moves: str) -> None:
    """Play moves given as 'e2e4' strings through square clicks."""
    for text in moves:
        ctrl.select_square(parse_square(text[:2]))
        ctrl.select_square(parse_square(text[2:]))


def _start(*rows: str, turn: Color = Color.WHITE) -> GameState:
    return GameState(board=Board.from_rows(list(rows)), current_turn=turn)


PROMOTION_ROWS = (
    ".r......",
    "P.......",
    ".......k",
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    "....K...",
)


class TestSelection:
    def test_starts_idle(self, controller: GameController) -> None:
        assert controller.phase == GamePhase.IDLE
        assert controller.state == GameState.initial()

    def test_select_own_piece(self, controller: GameController) -> None:
        controller.select_square(E2)
        assert controller.phase == GamePhase.SELECTED
        assert controller.state.selected == E2
        assert set(controller.state.valid_moves) == {E3, E4}

    def test_select_empty_square_is_noop(self, controller: GameController) -> None:
        before = controller.state
        controller.select_square(E4)
        assert controller.state is before

    def test_select_enemy_piece_is_noop(self, controller: GameController) -> None:
        before = controller.state
        controller.select_square(parse_square("e7"))
        assert controller.state is before
        assert controller.phase == GamePhase.IDLE

    def test_reselect_other_own_piece(self, controller: GameController) -> None:
        controller.select_square(E2)
        controller.select_square(G1)
        assert controller.state.selected == G1
        assert set(controller.state.valid_moves) == {
            parse_square("f3"),
            parse_square("h3"),
        }

    def test_click_elsewhere_deselects(self, controller: GameController) -> None:
        controller.select_square(E2)
        controller.select_square(D4)
        assert controller.phase == GamePhase.IDLE
        assert controller.state.selected is None
        assert controller.state.valid_moves == ()
        assert controller.state.move_history == ()

    def test_click_enemy_piece_deselects(self, controller: GameController) -> None:
        controller.select_square(E2)
        controller.select_square(parse_square("e7"))
        assert controller.phase == GamePhase.IDLE
        assert controller.state.board == Board.initial()

    def test_immobile_piece_can_be_selected(self, controller: GameController) -> None:
        controller.select_square(H1)
        assert controller.phase == GamePhase.SELECTED
        assert controller.state.valid_moves == ()


class TestCommit:
    def test_opening_push(self, controller: GameController) -> None:
        before = controller.state
        _play(controller, "e2e4")
        state = controller.state

        assert state.board[E2] is None
        moved = state.board[E4]
        assert moved == Piece(PieceType.PAWN, Color.WHITE, has_moved=True)
        assert state.current_turn == Color.BLACK
        assert state.en_passant_target == E3
        assert state.selected is None
        assert state.valid_moves == ()
        assert state.status == GameStatus.PLAYING
        assert state.move_history == (state.last_move,)

        last = state.last_move
        assert last is not None
        assert last.piece == Piece(PieceType.PAWN, Color.WHITE)  # pre-move snapshot
        assert (last.from_sq, last.to_sq) == (E2, E4)

        # The earlier snapshot is untouched.
        assert before.board[E2] is not None
        assert before.board[E4] is None
        assert before.move_history == ()

    def test_out_of_turn_piece_ignored(self, controller: GameController) -> None:
        _play(controller, "e2e4")
        before = controller.state
        controller.select_square(parse_square("d2"))
        assert controller.state is before

    def test_en_passant_target_replaced_every_commit(
        self, controller: GameController
    ) -> None:
        _play(controller, "e2e4")
        assert controller.state.en_passant_target == E3
        _play(controller, "g8f6")
        assert controller.state.en_passant_target is None
        _play(controller, "d2d4", "c7c5")
        assert controller.state.en_passant_target == parse_square("c6")

    def test_capture_filed_under_captured_colour(
        self, controller: GameController
    ) -> None:
        _play(controller, "e2e4", "d7d5", "e4d5")
        state = controller.state
        assert state.captured_pieces.black == (Piece(PieceType.PAWN, Color.BLACK, True),)
        assert state.captured_pieces.white == ()
        assert state.last_move is not None
        assert state.last_move.captured is not None

    def test_check_status(self, controller: GameController) -> None:
        _play(controller, "e2e4", "f7f5", "d1h5")
        assert controller.state.status == GameStatus.CHECK
        assert controller.phase == GamePhase.IDLE
        controller.select_square(parse_square("a8"))
        assert controller.state.valid_moves == ()
        controller.select_square(parse_square("g7"))
        assert controller.state.valid_moves == (parse_square("g6"),)


class TestEnPassant:
    def test_capture_removes_bypassed_pawn(self, controller: GameController) -> None:
        _play(controller, "a2a3", "d7d5", "a3a4", "d5d4", "e2e4")
        assert controller.state.en_passant_target == Square(5, 4)

        controller.select_square(D4)
        assert E3 in controller.state.valid_moves
        controller.select_square(E3)

        state = controller.state
        assert state.board[E4] is None
        black_pawn = state.board[E3]
        assert black_pawn is not None and black_pawn.color == Color.BLACK
        move = state.last_move
        assert move is not None and move.is_en_passant
        assert move.captured == Piece(PieceType.PAWN, Color.WHITE, has_moved=True)
        assert state.captured_pieces.white == (move.captured,)
        assert state.en_passant_target is None

    def test_right_expires_after_one_move(self, controller: GameController) -> None:
        _play(controller, "a2a3", "d7d5", "a3a4", "d5d4", "e2e4", "h7h6", "h2h3")
        controller.select_square(D4)
        assert E3 not in controller.state.valid_moves


class TestCastling:
    def test_kingside_castle_moves_rook(self, controller: GameController) -> None:
        _play(controller, "e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "f8c5")
        controller.select_square(E1)
        assert G1 in controller.state.valid_moves
        controller.select_square(G1)

        board = controller.state.board
        king = board[G1]
        rook = board[F1]
        assert king == Piece(PieceType.KING, Color.WHITE, has_moved=True)
        assert rook == Piece(PieceType.ROOK, Color.WHITE, has_moved=True)
        assert board[E1] is None
        assert board[H1] is None
        move = controller.state.last_move
        assert move is not None and move.is_castling

    def test_king_move_forfeits_castling(self, controller: GameController) -> None:
        _play(
            controller,
            "e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "f8c5",
            "e1e2", "g8f6", "e2e1", "f6g8",
        )
        controller.select_square(E1)
        assert G1 not in controller.state.valid_moves


class TestPromotion:
    def _controller(self, settings: GameSettings | None = None) -> GameController:
        return GameController(settings, start=_start(*PROMOTION_ROWS))

    def test_move_parks_until_choice(self) -> None:
        ctrl = self._controller()
        pending: list[PendingPromotion] = []
        ctrl.events.on_promotion_pending.append(pending.append)

        ctrl.select_square(A7)
        assert set(ctrl.state.valid_moves) == {A8, B8}
        ctrl.select_square(A8)

        assert ctrl.phase == GamePhase.AWAITING_PROMOTION
        assert ctrl.state.pending_promotion == PendingPromotion(
            A7, A8, Piece(PieceType.PAWN, Color.WHITE)
        )
        assert pending == [ctrl.state.pending_promotion]
        assert ctrl.state.board[A7] is not None  # nothing committed yet
        assert ctrl.state.move_history == ()
        assert ctrl.state.current_turn == Color.WHITE

    def test_clicks_ignored_while_pending(self) -> None:
        ctrl = self._controller()
        _play(ctrl, "a7a8")
        before = ctrl.state
        ctrl.select_square(E1)
        assert ctrl.state is before

    def test_choice_commits_move(self) -> None:
        ctrl = self._controller()
        notations: list[str] = []
        ctrl.events.on_move.append(lambda move, san, state: notations.append(san))
        _play(ctrl, "a7a8")
        ctrl.promote_pawn(PieceType.QUEEN)

        state = ctrl.state
        assert state.board[A8] == Piece(PieceType.QUEEN, Color.WHITE, has_moved=True)
        assert state.board[A7] is None
        assert state.pending_promotion is None
        assert state.current_turn == Color.BLACK
        assert state.en_passant_target is None
        move = state.last_move
        assert move is not None
        assert move.is_promotion and move.promoted_to == PieceType.QUEEN
        assert move.piece.piece_type == PieceType.PAWN
        assert notations == ["a8=Q"]
        assert ctrl.phase == GamePhase.IDLE

    def test_capture_promotion_updates_ledger(self) -> None:
        ctrl = self._controller()
        _play(ctrl, "a7b8")
        ctrl.promote_pawn(PieceType.KNIGHT)
        state = ctrl.state
        assert state.board[B8] == Piece(PieceType.KNIGHT, Color.WHITE, has_moved=True)
        assert state.captured_pieces.black == (Piece(PieceType.ROOK, Color.BLACK),)
        assert state.last_move is not None
        assert state.last_move.captured == Piece(PieceType.ROOK, Color.BLACK)

    def test_invalid_choice_ignored(self) -> None:
        ctrl = self._controller()
        _play(ctrl, "a7a8")
        before = ctrl.state
        ctrl.promote_pawn(PieceType.KING)
        ctrl.promote_pawn(PieceType.PAWN)
        assert ctrl.state is before
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION

    def test_promote_without_pending_is_noop(self, controller: GameController) -> None:
        before = controller.state
        controller.promote_pawn(PieceType.QUEEN)
        assert controller.state is before

    def test_auto_promotion_setting(self) -> None:
        ctrl = self._controller(GameSettings(auto_promote_to=PieceType.ROOK))
        _play(ctrl, "a7a8")
        assert ctrl.state.pending_promotion is None
        assert ctrl.state.board[A8] == Piece(PieceType.ROOK, Color.WHITE, True)
        assert ctrl.state.current_turn == Color.BLACK
        assert ctrl.state.last_move is not None
        assert ctrl.state.last_move.is_promotion


class TestGameOver:
    def test_fools_mate(self, controller: GameController) -> None:
        results: list[GameStatus] = []
        controller.events.on_game_over.append(results.append)
        _play(controller, "f2f3", "e7e5", "g2g4", "d8h4")

        state = controller.state
        assert state.status == GameStatus.CHECKMATE
        assert str(state.status) == "checkmate"
        assert controller.phase == GamePhase.TERMINAL
        assert state.is_game_over
        assert results == [GameStatus.CHECKMATE]
        assert not has_legal_moves(state.board, Color.WHITE, None)
        assert is_in_check(state.board, Color.WHITE)

    def test_terminal_ignores_input(self, controller: GameController) -> None:
        _play(controller, "f2f3", "e7e5", "g2g4", "d8h4")
        before = controller.state
        controller.select_square(E1)
        controller.select_square(parse_square("a2"))
        assert controller.state is before

    def test_bare_kings_is_draw(self) -> None:
        start = _start(
            "....k...",
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            "...r....",
            "....K...",
        )
        ctrl = GameController(start=start)
        _play(ctrl, "e1d2")
        assert ctrl.state.board.piece_count() == 2
        assert ctrl.state.status == GameStatus.DRAW
        assert ctrl.phase == GamePhase.TERMINAL
        assert ctrl.state.captured_pieces.black == (Piece(PieceType.ROOK, Color.BLACK),)


class TestReset:
    def test_reset_restores_canonical_state(self, controller: GameController) -> None:
        _play(controller, "e2e4", "e7e5", "g1f3")
        controller.select_square(parse_square("b8"))
        controller.reset_game()
        assert controller.state == GameState.initial()
        assert controller.phase == GamePhase.IDLE
        assert controller.history == (controller.state,)

    def test_reset_from_terminal_and_pending(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        ctrl.reset_game()
        first = ctrl.state

        promo = GameController(start=_start(*PROMOTION_ROWS))
        _play(promo, "a7a8")
        promo.reset_game()

        assert first == promo.state == GameState.initial()

    def test_reset_twice_is_idempotent(self, controller: GameController) -> None:
        controller.reset_game()
        once = controller.state
        controller.reset_game()
        assert controller.state == once


class TestEventsAndHistory:
    def test_state_changed_fires_per_transition(
        self, controller: GameController
    ) -> None:
        seen: list[GameState] = []
        controller.events.on_state_changed.append(seen.append)
        controller.select_square(E4)  # ignored
        controller.select_square(E2)
        controller.select_square(E4)
        assert len(seen) == 2
        assert seen[-1] is controller.state

    def test_move_event(self, controller: GameController) -> None:
        moves: list[tuple[Move, str]] = []
        controller.events.on_move.append(lambda m, san, st: moves.append((m, san)))
        _play(controller, "e2e4", "e7e5", "g1f3")
        assert [san for _, san in moves] == ["e4", "e5", "Nf3"]

    def test_history_records_committed_positions(
        self, controller: GameController
    ) -> None:
        _play(controller, "e2e4")
        history = controller.history
        assert len(history) == 2  # initial, after e4
        assert history[0] == GameState.initial()
        assert history[-1] is controller.state

    def test_selection_clicks_not_recorded(self, controller: GameController) -> None:
        for _ in range(5):
            controller.select_square(E2)
            controller.select_square(D4)
        assert controller.history == (GameState.initial(),)

    def test_pending_promotion_not_recorded(self) -> None:
        ctrl = GameController(start=_start(*PROMOTION_ROWS))
        _play(ctrl, "a7a8")
        assert len(ctrl.history) == 1
        ctrl.promote_pawn(PieceType.QUEEN)
        assert len(ctrl.history) == 2
        assert ctrl.history[-1].last_move is not None

    def test_history_can_be_disabled(self) -> None:
        ctrl = GameController(GameSettings(keep_history=False))
        _play(ctrl, "e2e4", "e7e5")
        assert ctrl.history == (ctrl.state,)


class TestPublishedSnapshots:
    def test_board_cannot_be_written(self, controller: GameController) -> None:
        controller.select_square(E2)
        with pytest.raises(TypeError):
            controller.state.board[E4] = controller.state.board[parse_square("e7")]
        assert controller.history[0].board[E4] is None
        assert controller.state.board == Board.initial()

    def test_earlier_snapshots_survive_later_moves(
        self, controller: GameController
    ) -> None:
        _play(controller, "e2e4", "e7e5")
        after_e4 = controller.history[1]
        assert after_e4.board[E4] is not None
        assert after_e4.board[parse_square("e5")] is None
        assert after_e4.current_turn == Color.BLACK

    def test_copy_of_snapshot_board_is_writable(
        self, controller: GameController
    ) -> None:
        board = controller.state.board.copy()
        board[E4] = board[E2]
        assert controller.state.board[E4] is None

    def test_snapshots_are_hashable(self, controller: GameController) -> None:
        _play(controller, "e2e4")
        seen = {controller.state, GameState.initial()}
        assert controller.history[0] in seen
        assert hash(controller.history[0]) == hash(GameState.initial())
